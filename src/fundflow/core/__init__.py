# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
fundflow Core Framework

Foundational building blocks for waterfall modeling in fundflow.
"""

from . import primitives
from .primitives import (
    GlobalSettings,
    Model,
    ReportingSettings,
    WaterfallSettings,
    WaterfallTierTypeEnum,
)

__all__ = [
    "primitives",
    "GlobalSettings",
    "Model",
    "ReportingSettings",
    "WaterfallSettings",
    "WaterfallTierTypeEnum",
]
