# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Waterfall Distribution Calculator

This module allocates one cash distribution across the tiers of a waterfall
structure and, within each tier, between the limited partners (pro rata to
the tier's basis) and the general partner.

Tiers are consumed left to right in ascending ``order``. Each tier absorbs
at most the cash still remaining, so later tiers only see what earlier
tiers left behind. Once cash runs out every remaining tier is still
reported, with zero amounts.

Tier rules:
1. RETURN_OF_CAPITAL: unreturned capital, pro rata to each investor's unreturned capital
2. PREFERRED_RETURN: flat hurdle on contributed capital less preferred return already paid
3. CATCH_UP: GP only, until it holds ``catch_up_to`` percent of profits distributed so far
4. CARRIED_INTEREST: everything left, split LP/GP; LP share pro rata to contributed capital

The calculation is a fold over an immutable ``_WaterfallState``: each tier
maps the previous snapshot to a new one, and the final snapshot is assembled
into a ``WaterfallDistribution``. Inputs are never mutated.

Example:
    ```python
    result = calculate_waterfall(
        STANDARD_WATERFALL,
        1_000_000,
        capital_accounts,
        fund_start_date=date(2022, 1, 1),
        distribution_date=date(2025, 6, 30),
    )
    result.gp_allocation.total_amount
    ```
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field, replace
from functools import reduce
from typing import Callable, Dict, List, Optional, Sequence, Tuple

import numpy as np

from ..core.primitives import WaterfallSettings, WaterfallTierTypeEnum, years_elapsed
from ..core.primitives.dates import DateLike
from ..reporting.reconciliation import reconcile_distribution
from .accounts import InvestorCapitalAccount, total_capital_contributed
from .errors import UnknownTierTypeError
from .results import (
    GPAllocation,
    InvestorAllocation,
    TierAllocation,
    TierDistribution,
    WaterfallDistribution,
)
from .tiers import WaterfallStructure, WaterfallTier
from .validation import log_input_issues, validate_inputs

logger = logging.getLogger(__name__)

# Per-investor share of a tier; None marks an investor with no stake in it
InvestorShares = Tuple[Optional[float], ...]


@dataclass(frozen=True)
class _WaterfallState:
    """Snapshot of the waterfall after some number of tiers."""

    remaining: float
    tier_distributions: Tuple[TierDistribution, ...] = ()
    investor_tier_allocations: Tuple[Tuple[TierAllocation, ...], ...] = ()
    gp_tier_allocations: Tuple[TierAllocation, ...] = ()
    # LP cash from every tier except return of capital
    lp_profit_distributed: float = 0.0

    @property
    def gp_received(self) -> float:
        return sum(allocation.amount for allocation in self.gp_tier_allocations)


@dataclass(frozen=True)
class _TierOutcome:
    """What a single tier absorbs and who receives it."""

    amount: float
    lp_amount: float
    gp_amount: float
    investor_shares: InvestorShares
    pays_gp: bool = False

    @classmethod
    def nothing(cls, investor_count: int, pays_gp: bool = False) -> "_TierOutcome":
        return cls(0.0, 0.0, 0.0, (None,) * investor_count, pays_gp)


def _pro_rata(weights: np.ndarray, amount: float) -> InvestorShares:
    """
    Split ``amount`` in proportion to ``weights``.

    Investors with a zero weight do not participate (``None``). When the
    weights sum to zero nobody participates.
    """
    total = float(weights.sum())
    if total <= 0:
        return (None,) * len(weights)
    shares = (weights / total) * amount
    return tuple(
        float(share) if weight > 0 else None for share, weight in zip(shares, weights)
    )


def _split_exactly(amount: float, lp_split: float, gp_split: float) -> Tuple[float, float]:
    """
    Split ``amount`` into LP and GP parts that add back to it exactly.

    The larger share is computed by multiplication and the smaller one as
    the remainder. A remainder taken from at least half of ``amount`` is
    exact in floating point, so ``lp + gp == amount`` holds bit for bit.
    """
    if lp_split >= gp_split:
        lp_amount = amount * (lp_split / 100.0)
        return lp_amount, amount - lp_amount
    gp_amount = amount * (gp_split / 100.0)
    return amount - gp_amount, gp_amount


def _as_amount(distribution_amount) -> float:
    """Distribution amount as a float; NaN when it is not a number at all."""
    if isinstance(distribution_amount, bool):
        return math.nan
    try:
        return float(distribution_amount)
    except (TypeError, ValueError):
        return math.nan


def ownership_percentages(accounts: Sequence[InvestorCapitalAccount]) -> List[float]:
    """
    Each investor's share of total contributed capital, in percent.

    Returns zeros when no capital has been contributed.
    """
    total = total_capital_contributed(list(accounts))
    if total <= 0:
        return [0.0] * len(accounts)
    return [account.capital_contributed / total * 100.0 for account in accounts]


TierRule = Callable[
    [WaterfallTier, _WaterfallState, Sequence[InvestorCapitalAccount]], _TierOutcome
]


@dataclass
class WaterfallCalculator:
    """
    Calculates distributions through a multi-tier waterfall.

    Attributes:
        structure: The waterfall structure defining tiers and terms
        settings: Validation behaviour and defaults for omitted tier terms
    """

    structure: WaterfallStructure
    settings: WaterfallSettings = field(default_factory=WaterfallSettings)

    def __post_init__(self) -> None:
        self._rules: Dict[WaterfallTierTypeEnum, TierRule] = {
            WaterfallTierTypeEnum.RETURN_OF_CAPITAL: self._return_of_capital,
            WaterfallTierTypeEnum.PREFERRED_RETURN: self._preferred_return,
            WaterfallTierTypeEnum.CATCH_UP: self._catch_up,
            WaterfallTierTypeEnum.CARRIED_INTEREST: self._carried_interest,
        }

    # ==========================================================================
    # TIER RULES
    # ==========================================================================

    def _return_of_capital(
        self,
        tier: WaterfallTier,
        state: _WaterfallState,
        accounts: Sequence[InvestorCapitalAccount],
    ) -> _TierOutcome:
        weights = np.array([a.unreturned_capital for a in accounts], dtype=float)
        amount = min(state.remaining, float(weights.sum()))
        return _TierOutcome(
            amount=amount,
            lp_amount=amount,
            gp_amount=0.0,
            investor_shares=_pro_rata(weights, amount),
        )

    def _preferred_return(
        self,
        tier: WaterfallTier,
        state: _WaterfallState,
        accounts: Sequence[InvestorCapitalAccount],
    ) -> _TierOutcome:
        # Flat hurdle on contributed capital; not prorated by holding period
        hurdle_rate = tier.resolved_hurdle_rate(self.settings)
        weights = np.array(
            [a.unpaid_preferred_return(hurdle_rate) for a in accounts], dtype=float
        )
        amount = min(state.remaining, float(weights.sum()))
        return _TierOutcome(
            amount=amount,
            lp_amount=amount,
            gp_amount=0.0,
            investor_shares=_pro_rata(weights, amount),
        )

    def _catch_up(
        self,
        tier: WaterfallTier,
        state: _WaterfallState,
        accounts: Sequence[InvestorCapitalAccount],
    ) -> _TierOutcome:
        target_percent = tier.resolved_catch_up_to(self.settings)
        gp_so_far = state.gp_received

        if target_percent >= 100:
            # Only reachable in lenient mode: the GP takes everything left
            needed = state.remaining
        else:
            profits_so_far = state.lp_profit_distributed + gp_so_far
            target_gp_amount = profits_so_far * (target_percent / (100.0 - target_percent))
            needed = max(0.0, target_gp_amount - gp_so_far)

        amount = min(state.remaining, needed)
        return _TierOutcome(
            amount=amount,
            lp_amount=0.0,
            gp_amount=amount,
            investor_shares=(None,) * len(accounts),
            pays_gp=True,
        )

    def _carried_interest(
        self,
        tier: WaterfallTier,
        state: _WaterfallState,
        accounts: Sequence[InvestorCapitalAccount],
    ) -> _TierOutcome:
        weights = np.array([a.capital_contributed for a in accounts], dtype=float)
        if float(weights.sum()) <= 0:
            # No LP ownership base to receive the LP share
            return _TierOutcome.nothing(len(accounts), pays_gp=True)

        lp_split, gp_split = tier.resolved_splits(self.settings)
        amount = state.remaining
        lp_amount, gp_amount = _split_exactly(amount, lp_split, gp_split)
        return _TierOutcome(
            amount=amount,
            lp_amount=lp_amount,
            gp_amount=gp_amount,
            investor_shares=_pro_rata(weights, lp_amount),
            pays_gp=True,
        )

    # ==========================================================================
    # FOLD
    # ==========================================================================

    def _apply_tier(
        self,
        state: _WaterfallState,
        tier: WaterfallTier,
        accounts: Sequence[InvestorCapitalAccount],
    ) -> _WaterfallState:
        """Advance the waterfall by one tier."""
        if state.remaining <= 0:
            exhausted = TierDistribution(
                tier_id=tier.id, tier_name=tier.name, tier_type=tier.type
            )
            return replace(state, tier_distributions=state.tier_distributions + (exhausted,))

        rule = self._rules.get(tier.type)
        if rule is None:
            message = f"Tier '{tier.id}' has unknown type {tier.type!r}"
            if self.settings.strict_validation:
                raise UnknownTierTypeError([message])
            logger.warning("%s; tier distributes nothing", message)
            outcome = _TierOutcome.nothing(len(accounts))
        else:
            outcome = rule(tier, state, accounts)

        remaining_after = state.remaining - outcome.amount
        logger.debug(
            "Tier %s (%s): distributed %.2f (LP %.2f, GP %.2f), remaining %.2f",
            tier.id,
            tier.type,
            outcome.amount,
            outcome.lp_amount,
            outcome.gp_amount,
            remaining_after,
        )

        tier_distribution = TierDistribution(
            tier_id=tier.id,
            tier_name=tier.name,
            tier_type=tier.type,
            amount_distributed=outcome.amount,
            remaining_after_tier=remaining_after,
            lp_amount=outcome.lp_amount,
            gp_amount=outcome.gp_amount,
        )

        investor_tier_allocations = tuple(
            existing
            if share is None
            else existing + (TierAllocation(tier_id=tier.id, tier_name=tier.name, amount=share),)
            for existing, share in zip(state.investor_tier_allocations, outcome.investor_shares)
        )

        gp_tier_allocations = state.gp_tier_allocations
        if outcome.pays_gp:
            gp_tier_allocations = gp_tier_allocations + (
                TierAllocation(tier_id=tier.id, tier_name=tier.name, amount=outcome.gp_amount),
            )

        lp_profit = state.lp_profit_distributed
        if isinstance(tier.type, WaterfallTierTypeEnum) and tier.type.is_profit_tier:
            lp_profit += outcome.lp_amount

        return _WaterfallState(
            remaining=remaining_after,
            tier_distributions=state.tier_distributions + (tier_distribution,),
            investor_tier_allocations=investor_tier_allocations,
            gp_tier_allocations=gp_tier_allocations,
            lp_profit_distributed=lp_profit,
        )

    def _assemble(
        self,
        state: _WaterfallState,
        distribution_amount: float,
        accounts: Sequence[InvestorCapitalAccount],
        holding_period_years: Optional[float],
    ) -> WaterfallDistribution:
        investor_allocations = [
            InvestorAllocation(
                investor_id=account.investor_id,
                investor_name=account.investor_name,
                ownership_percent=ownership,
                tier_allocations=list(tier_allocations),
                total_allocation=sum(a.amount for a in tier_allocations),
            )
            for account, ownership, tier_allocations in zip(
                accounts, ownership_percentages(accounts), state.investor_tier_allocations
            )
        ]
        return WaterfallDistribution(
            structure_id=self.structure.id,
            total_distributable=distribution_amount,
            tier_distributions=list(state.tier_distributions),
            investor_allocations=investor_allocations,
            gp_allocation=GPAllocation(
                tier_allocations=list(state.gp_tier_allocations),
                total_amount=state.gp_received,
            ),
            holding_period_years=holding_period_years,
        )

    # ==========================================================================
    # PUBLIC API
    # ==========================================================================

    def calculate(
        self,
        distribution_amount: float,
        capital_accounts: Sequence[InvestorCapitalAccount],
        fund_start_date: Optional[DateLike] = None,
        distribution_date: Optional[DateLike] = None,
    ) -> WaterfallDistribution:
        """
        Allocate a distribution through the waterfall.

        Args:
            distribution_amount: Cash available for distribution (non-negative)
            capital_accounts: Investor capital accounts; output keeps this order
            fund_start_date: Fund inception date (informational)
            distribution_date: Date of the distribution (informational)

        Returns:
            WaterfallDistribution with one tier distribution per tier, in
            ascending tier order

        Raises:
            InvalidStructureError: Malformed structure (strict mode)
            InvalidAmountError: Negative or non-finite amount (strict mode)
            InvalidAccountError: Inconsistent capital account (strict mode)
        """
        accounts = list(capital_accounts)

        if self.settings.strict_validation:
            validate_inputs(self.structure, distribution_amount, accounts)
        else:
            log_input_issues(self.structure, distribution_amount, accounts)

        amount = _as_amount(distribution_amount)
        # Lenient mode: unusable amounts (non-numeric, NaN, infinite) distribute nothing
        starting_cash = amount if math.isfinite(amount) else 0.0

        holding_period_years = None
        if fund_start_date is not None and distribution_date is not None:
            holding_period_years = years_elapsed(fund_start_date, distribution_date)

        initial = _WaterfallState(
            remaining=starting_cash,
            investor_tier_allocations=tuple(() for _ in accounts),
        )
        final = reduce(
            lambda state, tier: self._apply_tier(state, tier, accounts),
            self.structure.sorted_tiers,
            initial,
        )
        result = self._assemble(final, amount, accounts, holding_period_years)

        if self.settings.check_conservation:
            reconciliation = reconcile_distribution(
                result, tolerance=self.settings.reconciliation_tolerance
            )
            if not reconciliation["is_balanced"]:
                logger.warning(
                    "Waterfall '%s' does not reconcile: %s",
                    self.structure.id,
                    "; ".join(reconciliation["issues"]),
                )

        logger.info(
            "Waterfall '%s' distributed %.2f of %.2f to %d investors (GP %.2f)",
            self.structure.id,
            result.total_distributed,
            starting_cash,
            len(accounts),
            result.gp_allocation.total_amount,
        )
        return result


def calculate_waterfall(
    structure: WaterfallStructure,
    distribution_amount: float,
    capital_accounts: Sequence[InvestorCapitalAccount],
    fund_start_date: Optional[DateLike] = None,
    distribution_date: Optional[DateLike] = None,
    settings: Optional[WaterfallSettings] = None,
) -> WaterfallDistribution:
    """
    Calculate a waterfall distribution for a distributable amount.

    Convenience wrapper around ``WaterfallCalculator``.

    Args:
        structure: Waterfall structure to run
        distribution_amount: Cash available for distribution
        capital_accounts: Investor capital accounts
        fund_start_date: Fund inception date (informational)
        distribution_date: Date of the distribution (informational)
        settings: Optional calculation settings

    Returns:
        WaterfallDistribution for the event
    """
    calculator = WaterfallCalculator(structure, settings or WaterfallSettings())
    return calculator.calculate(
        distribution_amount, capital_accounts, fund_start_date, distribution_date
    )


__all__ = [
    "WaterfallCalculator",
    "calculate_waterfall",
    "ownership_percentages",
]
