# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Investor capital account records consumed by the waterfall engine.

Accounts are supplied by the fund's capital ledger and are read-only here:
the engine never marks capital as returned or preferred return as paid.
"""

from typing import List

from pydantic import Field

from ..core.primitives import Model, NonEmptyStr, PositiveFloat


class InvestorCapitalAccount(Model):
    """Running capital state of one limited partner."""

    # Core Identity
    investor_id: NonEmptyStr = Field(..., description="Investor identifier")
    investor_name: str = Field(..., description="Investor display name")

    # Capital
    capital_contributed: PositiveFloat = Field(
        default=0.0, description="Cumulative capital paid in"
    )
    capital_returned: PositiveFloat = Field(
        default=0.0, description="Cumulative capital already returned"
    )

    # Preferred return bucket
    preferred_return_accrued: PositiveFloat = Field(
        default=0.0, description="Preferred return accrued (informational)"
    )
    preferred_return_paid: PositiveFloat = Field(
        default=0.0, description="Preferred return already paid"
    )

    distributions_received: PositiveFloat = Field(
        default=0.0, description="Cumulative distributions received (informational)"
    )

    @property
    def unreturned_capital(self) -> float:
        """Contributed capital not yet returned, floored at zero."""
        return max(0.0, self.capital_contributed - self.capital_returned)

    def unpaid_preferred_return(self, hurdle_rate: float) -> float:
        """
        Preferred return still owed at a flat hurdle on contributed capital.

        Args:
            hurdle_rate: Hurdle in percent (e.g., 8 for 8%)

        Returns:
            Amount owed, floored at zero
        """
        due = self.capital_contributed * (hurdle_rate / 100.0)
        return max(0.0, due - self.preferred_return_paid)

    def __str__(self) -> str:
        return (
            f"{self.investor_name} ({self.investor_id}): "
            f"${self.capital_contributed:,.0f} contributed, "
            f"${self.capital_returned:,.0f} returned"
        )


def total_capital_contributed(accounts: List[InvestorCapitalAccount]) -> float:
    """Sum of contributed capital across accounts."""
    return sum(account.capital_contributed for account in accounts)


__all__ = [
    "InvestorCapitalAccount",
    "total_capital_contributed",
]
