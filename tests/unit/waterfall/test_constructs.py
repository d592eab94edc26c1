# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Tests for waterfall templates and builders.
"""

import pytest

from fundflow.core.primitives import WaterfallTierTypeEnum
from fundflow.waterfall import (
    AMERICAN_WATERFALL,
    STANDARD_WATERFALL,
    WATERFALL_TEMPLATES,
    create_american_waterfall,
    create_standard_waterfall,
    get_waterfall_template,
    list_waterfall_templates,
)
from fundflow.waterfall.validation import find_structure_issues


class TestStandardWaterfall:
    """Tests for the built-in 4-tier structure."""

    def test_tiers(self):
        assert STANDARD_WATERFALL.id == "standard-4-tier"
        assert STANDARD_WATERFALL.tier_types == [
            WaterfallTierTypeEnum.RETURN_OF_CAPITAL,
            WaterfallTierTypeEnum.PREFERRED_RETURN,
            WaterfallTierTypeEnum.CATCH_UP,
            WaterfallTierTypeEnum.CARRIED_INTEREST,
        ]
        assert [t.id for t in STANDARD_WATERFALL.sorted_tiers] == [
            "tier-1",
            "tier-2",
            "tier-3",
            "tier-4",
        ]

    def test_terms(self):
        _, pref, catch_up, carry = STANDARD_WATERFALL.sorted_tiers

        assert pref.hurdle_rate == 8
        assert catch_up.catch_up_to == 20
        assert (catch_up.lp_split, catch_up.gp_split) == (0, 100)
        assert (carry.lp_split, carry.gp_split) == (80, 20)
        assert STANDARD_WATERFALL.has_catch_up

    def test_template_is_valid(self):
        assert find_structure_issues(STANDARD_WATERFALL) == []


class TestAmericanWaterfall:
    """Tests for the built-in 3-tier structure."""

    def test_tiers(self):
        assert AMERICAN_WATERFALL.id == "american-3-tier"
        assert AMERICAN_WATERFALL.tier_types == [
            WaterfallTierTypeEnum.RETURN_OF_CAPITAL,
            WaterfallTierTypeEnum.PREFERRED_RETURN,
            WaterfallTierTypeEnum.CARRIED_INTEREST,
        ]
        assert not AMERICAN_WATERFALL.has_catch_up

    def test_terms(self):
        carry = AMERICAN_WATERFALL.get_tier("tier-3")
        assert carry.name == "Profit Split"
        assert (carry.lp_split, carry.gp_split) == (80, 20)
        assert find_structure_issues(AMERICAN_WATERFALL) == []


class TestBuilders:
    """Tests for structure builders."""

    def test_standard_builder_custom_terms(self):
        structure = create_standard_waterfall(hurdle_rate=10, catch_up_to=25, gp_split=25)
        _, pref, catch_up, carry = structure.sorted_tiers

        assert pref.hurdle_rate == 10
        assert pref.name == "Preferred Return (10%)"
        assert catch_up.catch_up_to == 25
        assert (carry.lp_split, carry.gp_split) == (75, 25)
        assert structure.description == (
            "Return of capital, 10% preferred return, GP catch-up to 25%, then 75/25 split"
        )

    def test_builder_defaults_match_template(self):
        assert create_standard_waterfall() == STANDARD_WATERFALL
        assert create_american_waterfall() == AMERICAN_WATERFALL

    def test_american_builder_lp_split(self):
        structure = create_american_waterfall(hurdle_rate=7.5, lp_split=70, structure_id="fund-iii")
        carry = structure.get_tier("tier-3")

        assert structure.id == "fund-iii"
        assert (carry.lp_split, carry.gp_split) == (70, 30)
        assert structure.get_tier("tier-2").name == "Preferred Return (7.5%)"

    def test_builder_rejects_out_of_range_terms(self):
        with pytest.raises(ValueError):
            create_standard_waterfall(catch_up_to=100)


class TestTemplateRegistry:
    """Tests for the template registry."""

    def test_registry_contents(self):
        assert set(WATERFALL_TEMPLATES) == {"standard-4-tier", "american-3-tier"}
        assert list_waterfall_templates() == [STANDARD_WATERFALL, AMERICAN_WATERFALL]

    def test_lookup(self):
        assert get_waterfall_template("american-3-tier") is AMERICAN_WATERFALL

    def test_unknown_template(self):
        with pytest.raises(KeyError, match="Available: american-3-tier, standard-4-tier"):
            get_waterfall_template("european-5-tier")
