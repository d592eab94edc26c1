# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
fundflow Core Primitives

Essential building blocks shared by the waterfall engine and reporting:
the immutable base model, constrained numeric types, enums, settings and
date helpers.
"""

from .dates import DAYS_PER_YEAR, to_date, years_elapsed
from .enums import WaterfallTierTypeEnum
from .model import Model
from .settings import GlobalSettings, ReportingSettings, WaterfallSettings
from .types import (
    NonEmptyStr,
    Percentage,
    PositiveFloat,
    PositiveInt,
)

__all__ = [
    # Core models
    "Model",
    # Settings
    "GlobalSettings",
    "ReportingSettings",
    "WaterfallSettings",
    # Enums
    "WaterfallTierTypeEnum",
    # Types
    "NonEmptyStr",
    "Percentage",
    "PositiveFloat",
    "PositiveInt",
    # Dates
    "DAYS_PER_YEAR",
    "to_date",
    "years_elapsed",
]
