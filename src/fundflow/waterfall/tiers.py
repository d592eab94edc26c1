# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Waterfall Tier and Structure Models

This module defines the configuration side of a distribution waterfall: the
individual tiers and the named, ordered structure that groups them.

Percentages are expressed in whole units throughout (``8`` means 8%), matching
how limited partnership agreements and fund administration systems quote
hurdle rates and splits.

Key Features:
- Closed set of tier types dispatched by the calculation engine
- Optional per-tier terms with house defaults supplied by ``WaterfallSettings``
- Stable ordering of tiers by their ``order`` field

Example:
    ```python
    structure = WaterfallStructure(
        id="fund-ii",
        name="Fund II Waterfall",
        tiers=[
            WaterfallTier(id="roc", name="Return of Capital",
                          type="RETURN_OF_CAPITAL", order=1),
            WaterfallTier(id="pref", name="Preferred Return",
                          type="PREFERRED_RETURN", order=2, hurdle_rate=8),
            WaterfallTier(id="carry", name="Carried Interest",
                          type="CARRIED_INTEREST", order=3,
                          lp_split=80, gp_split=20),
        ],
    )
    ```

Structural checks that span several fields or tiers (duplicate orders,
splits that do not add up) live in ``fundflow.waterfall.validation`` so the
engine can report them with typed errors.
"""

from __future__ import annotations

from typing import List, Optional, Tuple

from pydantic import Field

from ..core.primitives import (
    Model,
    NonEmptyStr,
    Percentage,
    WaterfallSettings,
    WaterfallTierTypeEnum,
)


class WaterfallTier(Model):
    """
    One ordered step of a distribution waterfall.

    Only the terms relevant to the tier type are read: ``hurdle_rate`` by
    PREFERRED_RETURN, ``catch_up_to`` by CATCH_UP and the splits by
    CARRIED_INTEREST. CATCH_UP tiers may carry splits for documentation, but
    catch-up cash always goes to the GP.
    """

    id: NonEmptyStr = Field(..., description="Tier identifier, unique within a structure")
    name: NonEmptyStr = Field(..., description="Display name")
    type: WaterfallTierTypeEnum = Field(..., description="Tier behaviour")
    order: int = Field(..., description="Processing position; lower runs first")

    hurdle_rate: Optional[Percentage] = Field(
        default=None, description="Preferred return rate in percent (e.g., 8 for 8%)"
    )
    lp_split: Optional[Percentage] = Field(
        default=None, description="LP share of the tier in percent"
    )
    gp_split: Optional[Percentage] = Field(
        default=None, description="GP share of the tier in percent"
    )
    catch_up_to: Optional[Percentage] = Field(
        default=None,
        lt=100,
        description="Target cumulative GP share of profits in percent",
    )

    def resolved_hurdle_rate(self, settings: Optional[WaterfallSettings] = None) -> float:
        """Hurdle rate with the settings default applied."""
        if self.hurdle_rate is not None:
            return self.hurdle_rate
        return (settings or WaterfallSettings()).default_hurdle_rate

    def resolved_catch_up_to(self, settings: Optional[WaterfallSettings] = None) -> float:
        """Catch-up target with the settings default applied."""
        if self.catch_up_to is not None:
            return self.catch_up_to
        return (settings or WaterfallSettings()).default_catch_up_to

    def resolved_splits(
        self, settings: Optional[WaterfallSettings] = None
    ) -> Tuple[float, float]:
        """
        LP and GP splits with defaults applied.

        A single explicit split implies its complement; two missing splits
        fall back to the settings defaults.

        Returns:
            Tuple of (lp_split, gp_split) in percent
        """
        if self.lp_split is not None and self.gp_split is not None:
            return self.lp_split, self.gp_split
        if self.lp_split is not None:
            return self.lp_split, 100.0 - self.lp_split
        if self.gp_split is not None:
            return 100.0 - self.gp_split, self.gp_split
        settings = settings or WaterfallSettings()
        return settings.default_lp_split, settings.default_gp_split

    def __str__(self) -> str:
        return f"{self.order}. {self.name} ({self.type.value})"


class WaterfallStructure(Model):
    """
    Named, ordered collection of waterfall tiers.

    Structures are immutable templates: built once as configuration and only
    read during a calculation.
    """

    id: NonEmptyStr = Field(..., description="Structure identifier")
    name: NonEmptyStr = Field(..., description="Display name")
    description: str = Field(default="", description="Plain-language summary of the terms")
    tiers: List[WaterfallTier] = Field(..., description="Tiers in any order")

    @property
    def sorted_tiers(self) -> List[WaterfallTier]:
        """Tiers in ascending ``order``; ties keep their declared order."""
        return sorted(self.tiers, key=lambda tier: tier.order)

    @property
    def tier_types(self) -> List[WaterfallTierTypeEnum]:
        """Tier types in processing order."""
        return [tier.type for tier in self.sorted_tiers]

    @property
    def has_catch_up(self) -> bool:
        """Whether any tier lets the GP catch up."""
        return WaterfallTierTypeEnum.CATCH_UP in self.tier_types

    def get_tier(self, tier_id: str) -> Optional[WaterfallTier]:
        """Get tier by id."""
        for tier in self.tiers:
            if tier.id == tier_id:
                return tier
        return None

    def __str__(self) -> str:
        return f"{self.name}: " + " -> ".join(t.name for t in self.sorted_tiers)


__all__ = [
    "WaterfallTier",
    "WaterfallStructure",
]
