# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
fundflow Waterfall Models
Public API for the fundflow.waterfall subpackage.

This module contains the distribution waterfall: tier and structure
configuration, investor capital accounts, the calculation engine, its
results, validation errors and the built-in structure templates.
"""

from .accounts import InvestorCapitalAccount
from .calculator import WaterfallCalculator, calculate_waterfall, ownership_percentages
from .constructs import (
    AMERICAN_WATERFALL,
    STANDARD_WATERFALL,
    WATERFALL_TEMPLATES,
    create_american_waterfall,
    create_standard_waterfall,
    get_waterfall_template,
    list_waterfall_templates,
)
from .errors import (
    InvalidAccountError,
    InvalidAmountError,
    InvalidStructureError,
    UnknownTierTypeError,
    WaterfallError,
)
from .results import (
    GPAllocation,
    InvestorAllocation,
    TierAllocation,
    TierDistribution,
    WaterfallDistribution,
)
from .tiers import WaterfallStructure, WaterfallTier
from .validation import validate_inputs

__all__ = [
    # Configuration
    "WaterfallTier",
    "WaterfallStructure",
    "InvestorCapitalAccount",
    # Calculation
    "WaterfallCalculator",
    "calculate_waterfall",
    "ownership_percentages",
    "validate_inputs",
    # Results
    "TierAllocation",
    "TierDistribution",
    "InvestorAllocation",
    "GPAllocation",
    "WaterfallDistribution",
    # Errors
    "WaterfallError",
    "InvalidStructureError",
    "UnknownTierTypeError",
    "InvalidAmountError",
    "InvalidAccountError",
    # Templates
    "STANDARD_WATERFALL",
    "AMERICAN_WATERFALL",
    "WATERFALL_TEMPLATES",
    "create_standard_waterfall",
    "create_american_waterfall",
    "get_waterfall_template",
    "list_waterfall_templates",
]
