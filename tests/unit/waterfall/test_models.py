# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Tests for Waterfall Models

This module tests tier, structure, capital account and result models:
field validation, resolved defaults and JSON round trips.
"""

import pytest
from pydantic import ValidationError

from fundflow.core.primitives import WaterfallSettings, WaterfallTierTypeEnum
from fundflow.waterfall import (
    STANDARD_WATERFALL,
    InvestorCapitalAccount,
    WaterfallDistribution,
    WaterfallStructure,
    WaterfallTier,
    calculate_waterfall,
)
from tests.conftest import create_account


class TestWaterfallTier:
    """Tests for the WaterfallTier model."""

    def test_tier_creation(self):
        tier = WaterfallTier(
            id="pref", name="Preferred Return", type="PREFERRED_RETURN", order=2, hurdle_rate=8
        )

        assert tier.type is WaterfallTierTypeEnum.PREFERRED_RETURN
        assert tier.hurdle_rate == 8
        assert tier.lp_split is None
        assert str(tier) == "2. Preferred Return (PREFERRED_RETURN)"

    def test_tier_validation(self):
        # Percent out of range
        with pytest.raises(ValidationError):
            WaterfallTier(id="p", name="P", type="PREFERRED_RETURN", order=1, hurdle_rate=-1)
        with pytest.raises(ValidationError):
            WaterfallTier(id="c", name="C", type="CARRIED_INTEREST", order=1, gp_split=120)

        # Catch-up target of 100% would never be reached
        with pytest.raises(ValidationError):
            WaterfallTier(id="c", name="C", type="CATCH_UP", order=1, catch_up_to=100)

        # Unknown type
        with pytest.raises(ValidationError):
            WaterfallTier(id="x", name="X", type="MANAGEMENT_FEE", order=1)  # type: ignore

        # Empty id
        with pytest.raises(ValidationError):
            WaterfallTier(id="", name="X", type="CATCH_UP", order=1)

        # Unexpected field
        with pytest.raises(ValidationError):
            WaterfallTier(id="x", name="X", type="CATCH_UP", order=1, promote=20)

    def test_tier_is_immutable(self):
        tier = WaterfallTier(id="roc", name="ROC", type="RETURN_OF_CAPITAL", order=1)

        with pytest.raises(ValidationError):
            tier.order = 5

    def test_camel_case_input(self):
        tier = WaterfallTier.model_validate(
            {
                "id": "tier-3",
                "name": "GP Catch-Up",
                "type": "CATCH_UP",
                "order": 3,
                "catchUpTo": 20,
                "lpSplit": 0,
                "gpSplit": 100,
            }
        )

        assert tier.catch_up_to == 20
        assert tier.gp_split == 100

    def test_resolved_terms_explicit(self):
        tier = WaterfallTier(
            id="t", name="T", type="CARRIED_INTEREST", order=1, lp_split=70, gp_split=30
        )
        assert tier.resolved_splits() == (70, 30)

    def test_resolved_terms_defaults(self):
        tier = WaterfallTier(id="t", name="T", type="CATCH_UP", order=1)
        settings = WaterfallSettings(
            default_hurdle_rate=7, default_catch_up_to=25, default_lp_split=75, default_gp_split=25
        )

        assert tier.resolved_hurdle_rate() == 8
        assert tier.resolved_catch_up_to() == 20
        assert tier.resolved_splits() == (80, 20)
        assert tier.resolved_hurdle_rate(settings) == 7
        assert tier.resolved_catch_up_to(settings) == 25
        assert tier.resolved_splits(settings) == (75, 25)

    def test_resolved_split_complement(self):
        lp_only = WaterfallTier(id="t", name="T", type="CARRIED_INTEREST", order=1, lp_split=65)
        gp_only = WaterfallTier(id="t", name="T", type="CARRIED_INTEREST", order=1, gp_split=15)

        assert lp_only.resolved_splits() == (65, 35)
        assert gp_only.resolved_splits() == (85, 15)

    def test_zero_hurdle_is_not_replaced_by_default(self):
        tier = WaterfallTier(id="p", name="P", type="PREFERRED_RETURN", order=1, hurdle_rate=0)
        assert tier.resolved_hurdle_rate() == 0


class TestWaterfallStructure:
    """Tests for the WaterfallStructure model."""

    def test_sorted_tiers(self):
        structure = WaterfallStructure(
            id="s",
            name="S",
            tiers=[
                WaterfallTier(id="b", name="B", type="CARRIED_INTEREST", order=20),
                WaterfallTier(id="a", name="A", type="RETURN_OF_CAPITAL", order=10),
            ],
        )

        assert [t.id for t in structure.sorted_tiers] == ["a", "b"]
        assert [t.id for t in structure.tiers] == ["b", "a"]
        assert structure.tier_types == [
            WaterfallTierTypeEnum.RETURN_OF_CAPITAL,
            WaterfallTierTypeEnum.CARRIED_INTEREST,
        ]
        assert not structure.has_catch_up

    def test_get_tier(self):
        assert STANDARD_WATERFALL.get_tier("tier-3").name == "GP Catch-Up"
        assert STANDARD_WATERFALL.get_tier("missing") is None

    def test_string_representation(self):
        assert str(STANDARD_WATERFALL) == (
            "Standard 4-Tier Waterfall: Return of Capital -> Preferred Return (8%) "
            "-> GP Catch-Up -> Carried Interest Split"
        )


class TestInvestorCapitalAccount:
    """Tests for the InvestorCapitalAccount model."""

    def test_account_defaults(self):
        account = InvestorCapitalAccount(investor_id="lp-1", investor_name="Endowment")

        assert account.capital_contributed == 0
        assert account.preferred_return_accrued == 0
        assert account.distributions_received == 0

    def test_negative_amounts_rejected(self):
        with pytest.raises(ValidationError):
            InvestorCapitalAccount(
                investor_id="lp-1", investor_name="X", capital_contributed=-1
            )
        with pytest.raises(ValidationError):
            InvestorCapitalAccount(
                investor_id="lp-1", investor_name="X", preferred_return_paid=-0.01
            )

    def test_unreturned_capital(self):
        assert create_account("lp-1", 1_000, capital_returned=400).unreturned_capital == 600
        # Inconsistent ledger data floors at zero
        assert create_account("lp-1", 1_000, capital_returned=1_400).unreturned_capital == 0

    def test_unpaid_preferred_return(self):
        account = create_account("lp-1", 1_000_000, preferred_return_paid=30_000)

        assert account.unpaid_preferred_return(8) == pytest.approx(50_000)
        assert account.unpaid_preferred_return(2) == 0

    def test_from_ledger_json(self):
        account = InvestorCapitalAccount.model_validate(
            {
                "investorId": "inv-001",
                "investorName": "Tony Bravo",
                "capitalContributed": 250000,
                "capitalReturned": 0,
                "preferredReturnAccrued": 12000,
                "preferredReturnPaid": 0,
                "distributionsReceived": 0,
            }
        )

        assert account.investor_id == "inv-001"
        assert account.capital_contributed == 250_000
        assert str(account) == "Tony Bravo (inv-001): $250,000 contributed, $0 returned"


class TestWaterfallDistribution:
    """Tests for result models."""

    def test_json_round_trip(self, three_investor_accounts):
        result = calculate_waterfall(STANDARD_WATERFALL, 1_250_000, three_investor_accounts)

        payload = result.model_dump(by_alias=True, mode="json")
        restored = WaterfallDistribution.model_validate(payload)

        assert restored == result
        assert set(payload) >= {
            "totalDistributable",
            "tierDistributions",
            "investorAllocations",
            "gpAllocation",
        }
        assert payload["tierDistributions"][0]["tierType"] == "RETURN_OF_CAPITAL"
        assert "amountDistributed" in payload["tierDistributions"][0]
        assert "ownershipPercent" in payload["investorAllocations"][0]

    def test_derived_totals(self, two_investor_accounts):
        result = calculate_waterfall(STANDARD_WATERFALL, 400_000, two_investor_accounts)

        assert result.total_distributed == pytest.approx(400_000)
        assert result.total_lp_amount + result.total_gp_amount == pytest.approx(400_000)
        assert result.undistributed_amount == pytest.approx(0)
        assert str(result).startswith("Distribution of $400,000: LP $")

    def test_lookups(self, two_investor_accounts):
        result = calculate_waterfall(STANDARD_WATERFALL, 400_000, two_investor_accounts)

        assert result.get_investor_allocation("nobody") is None
        assert result.get_tier_distribution("nope") is None
        assert result.get_tier_distribution("tier-2").tier_name == "Preferred Return (8%)"
