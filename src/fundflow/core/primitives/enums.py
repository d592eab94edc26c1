# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

from __future__ import annotations

from enum import Enum


class WaterfallTierTypeEnum(str, Enum):
    """
    Kinds of waterfall tiers.

    The set is closed: the calculation engine dispatches on this tag and
    refuses tiers whose type it does not handle.

    Attributes:
        RETURN_OF_CAPITAL: Investor capital is returned first, pro rata to unreturned capital
        PREFERRED_RETURN: Hurdle return on contributed capital, paid to LPs only
        CATCH_UP: GP receives distributions until it reaches its target profit share
        CARRIED_INTEREST: Remaining cash split between LPs and GP
    """

    RETURN_OF_CAPITAL = "RETURN_OF_CAPITAL"
    PREFERRED_RETURN = "PREFERRED_RETURN"
    CATCH_UP = "CATCH_UP"
    CARRIED_INTEREST = "CARRIED_INTEREST"

    @property
    def is_profit_tier(self) -> bool:
        """Whether LP amounts from this tier count as profit (anything but capital return)."""
        return self is not WaterfallTierTypeEnum.RETURN_OF_CAPITAL


