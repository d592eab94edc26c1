# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
fundflow Reporting

Presentation helpers for waterfall distributions: display formatting,
pandas summary tables and reconciliation checks.
"""

from .formatting import format_waterfall_currency, format_waterfall_percent
from .reconciliation import reconcile_distribution
from .tables import investor_summary_table, investor_tier_matrix, tier_summary_table

__all__ = [
    "format_waterfall_currency",
    "format_waterfall_percent",
    "reconcile_distribution",
    "tier_summary_table",
    "investor_summary_table",
    "investor_tier_matrix",
]
