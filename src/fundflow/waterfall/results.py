# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Waterfall distribution results.

Immutable records describing how one distribution event was routed through a
waterfall: tier by tier, per investor and to the GP. Results serialize to the
camelCase JSON shape expected by a "preview distribution" endpoint:

    ```python
    payload = result.model_dump(by_alias=True, mode="json")
    payload["tierDistributions"][0]["amountDistributed"]
    ```

For tabular views see ``fundflow.reporting``.
"""

from __future__ import annotations

from typing import List, Optional, Union

from pydantic import Field

from ..core.primitives import Model, PositiveFloat, WaterfallTierTypeEnum


class TierAllocation(Model):
    """Amount one party received from one tier."""

    tier_id: str
    tier_name: str
    amount: float


class TierDistribution(Model):
    """Cash absorbed by one tier and its LP/GP split."""

    tier_id: str
    tier_name: str
    # Plain strings only appear for unknown tier types calculated in lenient mode
    tier_type: Union[WaterfallTierTypeEnum, str]
    amount_distributed: float = 0.0
    remaining_after_tier: float = 0.0
    lp_amount: float = 0.0
    gp_amount: float = 0.0


class InvestorAllocation(Model):
    """One investor's share of the distribution."""

    investor_id: str
    investor_name: str
    ownership_percent: float = Field(
        default=0.0, description="Share of total contributed capital in percent"
    )
    tier_allocations: List[TierAllocation] = Field(default_factory=list)
    total_allocation: float = 0.0

    def amount_for_tier(self, tier_id: str) -> float:
        """Amount received from a tier (0 when the investor did not participate)."""
        return sum(a.amount for a in self.tier_allocations if a.tier_id == tier_id)


class GPAllocation(Model):
    """The fund manager's share of the distribution."""

    tier_allocations: List[TierAllocation] = Field(default_factory=list)
    total_amount: float = 0.0

    def amount_for_tier(self, tier_id: str) -> float:
        """Amount received from a tier (0 when the GP did not participate)."""
        return sum(a.amount for a in self.tier_allocations if a.tier_id == tier_id)


class WaterfallDistribution(Model):
    """Complete allocation of one distribution event."""

    structure_id: Optional[str] = Field(
        default=None, description="Id of the structure the distribution ran through"
    )
    total_distributable: float = Field(..., description="Input amount, echoed back")
    tier_distributions: List[TierDistribution] = Field(default_factory=list)
    investor_allocations: List[InvestorAllocation] = Field(default_factory=list)
    gp_allocation: GPAllocation = Field(default_factory=GPAllocation)
    holding_period_years: Optional[PositiveFloat] = Field(
        default=None,
        description="Years between fund start and distribution date (informational)",
    )

    @property
    def total_distributed(self) -> float:
        """Cash absorbed by all tiers."""
        return sum(t.amount_distributed for t in self.tier_distributions)

    @property
    def total_lp_amount(self) -> float:
        """Cash allocated to investors."""
        return sum(a.total_allocation for a in self.investor_allocations)

    @property
    def total_gp_amount(self) -> float:
        """Cash allocated to the GP."""
        return self.gp_allocation.total_amount

    @property
    def undistributed_amount(self) -> float:
        """Cash no tier absorbed."""
        return max(0.0, self.total_distributable - self.total_distributed)

    def get_investor_allocation(self, investor_id: str) -> Optional[InvestorAllocation]:
        """Get investor allocation by investor id."""
        for allocation in self.investor_allocations:
            if allocation.investor_id == investor_id:
                return allocation
        return None

    def get_tier_distribution(self, tier_id: str) -> Optional[TierDistribution]:
        """Get tier distribution by tier id."""
        for tier in self.tier_distributions:
            if tier.tier_id == tier_id:
                return tier
        return None

    def __str__(self) -> str:
        return (
            f"Distribution of ${self.total_distributable:,.0f}: "
            f"LP ${self.total_lp_amount:,.0f}, GP ${self.total_gp_amount:,.0f}"
        )


__all__ = [
    "TierAllocation",
    "TierDistribution",
    "InvestorAllocation",
    "GPAllocation",
    "WaterfallDistribution",
]
