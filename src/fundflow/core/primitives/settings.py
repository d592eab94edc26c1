# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

from __future__ import annotations

from pydantic import Field, model_validator

from .model import Model
from .types import Percentage, PositiveFloat, PositiveInt


class WaterfallSettings(Model):
    """
    Configuration settings for the waterfall calculation engine.

    These settings control input validation, the defaults applied to tiers
    that omit their terms, and the post-calculation conservation check. They
    never change how a fully specified tier is computed.

    Usage Examples:
        # Standard behaviour: validate eagerly and fail fast
        settings = WaterfallSettings()

        # Lenient mode: log validation issues and keep calculating
        settings = WaterfallSettings(strict_validation=False)

        # House defaults for tiers that leave terms blank
        settings = WaterfallSettings(default_hurdle_rate=6.0)
    """

    strict_validation: bool = Field(
        default=True,
        description=(
            "If True, raise on invalid structures, amounts or accounts before any "
            "tier is processed; otherwise, log the issues and attempt to continue."
        ),
    )
    default_hurdle_rate: Percentage = Field(
        default=8.0,
        description="Preferred return rate (percent) for PREFERRED_RETURN tiers without a hurdle.",
    )
    default_catch_up_to: Percentage = Field(
        default=20.0,
        lt=100,
        description="Target GP profit share (percent) for CATCH_UP tiers without a target.",
    )
    default_lp_split: Percentage = Field(
        default=80.0, description="LP share (percent) when a tier omits both splits."
    )
    default_gp_split: Percentage = Field(
        default=20.0, description="GP share (percent) when a tier omits both splits."
    )
    reconciliation_tolerance: PositiveFloat = Field(
        default=1e-6,
        description="Absolute tolerance used when reconciling allocated cash.",
    )
    check_conservation: bool = Field(
        default=True,
        description="Log a warning when allocations do not reconcile to tier totals.",
    )

    @model_validator(mode="after")
    def check_default_splits(self) -> "WaterfallSettings":
        """Default LP and GP splits must cover the whole tier."""
        total = self.default_lp_split + self.default_gp_split
        if abs(total - 100.0) > 1e-9:
            raise ValueError(
                f"default_lp_split and default_gp_split must sum to 100, got {total}"
            )
        return self


class ReportingSettings(Model):
    """Settings related to report formatting and display."""

    currency_symbol: str = Field(default="$", description="Currency symbol prefix.")
    currency_decimals: PositiveInt = Field(
        default=0, description="Number of decimal places for currency values."
    )
    percent_decimals: PositiveInt = Field(
        default=2, description="Number of decimal places for percentages."
    )


class GlobalSettings(Model):
    """Global settings

    Groups the calculation and reporting settings so callers can pass a
    single object around.
    """

    calculation: WaterfallSettings = Field(default_factory=WaterfallSettings)
    reporting: ReportingSettings = Field(default_factory=ReportingSettings)
