# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Test utilities and fixtures for fundflow testing.

This module provides convenient utilities for creating capital accounts and
waterfall structures without spelling out every field.
"""

from __future__ import annotations

from typing import List

import pytest

from fundflow.core.primitives import WaterfallTierTypeEnum
from fundflow.waterfall import (
    InvestorCapitalAccount,
    WaterfallStructure,
    WaterfallTier,
)


# Account Utilities
def create_account(
    investor_id: str,
    capital_contributed: float,
    capital_returned: float = 0.0,
    preferred_return_paid: float = 0.0,
    investor_name: str = None,
) -> InvestorCapitalAccount:
    """
    Create an investor capital account for testing.

    Example:
        >>> account = create_account("lp-1", 1_000_000)
        >>> account.unreturned_capital
        1000000.0
    """
    return InvestorCapitalAccount(
        investor_id=investor_id,
        investor_name=investor_name or f"Investor {investor_id}",
        capital_contributed=capital_contributed,
        capital_returned=capital_returned,
        preferred_return_paid=preferred_return_paid,
    )


# Structure Utilities
def create_tier(
    tier_id: str, tier_type: WaterfallTierTypeEnum, order: int, **terms
) -> WaterfallTier:
    """Create a tier whose name defaults to its id."""
    return WaterfallTier(id=tier_id, name=tier_id, type=tier_type, order=order, **terms)


def create_structure(*tiers: WaterfallTier, structure_id: str = "test") -> WaterfallStructure:
    """Wrap tiers in a structure."""
    return WaterfallStructure(id=structure_id, name="Test Waterfall", tiers=list(tiers))


@pytest.fixture
def roc_only_structure() -> WaterfallStructure:
    return create_structure(
        create_tier("roc", WaterfallTierTypeEnum.RETURN_OF_CAPITAL, 1)
    )


@pytest.fixture
def two_investor_accounts() -> List[InvestorCapitalAccount]:
    """$100k and $200k contributed, nothing returned."""
    return [
        create_account("lp-1", 100_000),
        create_account("lp-2", 200_000),
    ]


@pytest.fixture
def fully_returned_account() -> List[InvestorCapitalAccount]:
    """One investor with $1M contributed and fully returned."""
    return [create_account("lp-1", 1_000_000, capital_returned=1_000_000)]


@pytest.fixture
def three_investor_accounts() -> List[InvestorCapitalAccount]:
    """Uneven contributions with partial returns and partial pref paid."""
    return [
        create_account("lp-a", 500_000, capital_returned=100_000),
        create_account("lp-b", 300_000, preferred_return_paid=10_000),
        create_account("lp-c", 200_000, capital_returned=50_000, preferred_return_paid=4_000),
    ]
