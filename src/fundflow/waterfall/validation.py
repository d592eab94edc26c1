# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Eager input validation for waterfall calculations.

Each ``find_*_issues`` function returns a list of human-readable problems
without raising, so lenient callers can log them. The ``validate_*``
functions raise the matching typed error when any issue is found.

Per-field ranges (non-negative capital, percentages within [0, 100]) are
enforced by the pydantic models themselves; the checks here cover what a
single field cannot express.
"""

from __future__ import annotations

import logging
import math
import numbers
from collections import Counter
from decimal import Decimal
from typing import List, Sequence

from ..core.primitives import WaterfallTierTypeEnum
from .accounts import InvestorCapitalAccount
from .errors import (
    InvalidAccountError,
    InvalidAmountError,
    InvalidStructureError,
    UnknownTierTypeError,
)
from .tiers import WaterfallStructure

logger = logging.getLogger(__name__)

# Absolute slack for comparisons between dollar amounts and percentage sums
_EPSILON = 1e-9

_SPLIT_TIER_TYPES = (
    WaterfallTierTypeEnum.CATCH_UP,
    WaterfallTierTypeEnum.CARRIED_INTEREST,
)


def find_unknown_tier_types(structure: WaterfallStructure) -> List[str]:
    """Tiers whose type is not a ``WaterfallTierTypeEnum`` member."""
    return [
        f"Tier '{tier.id}' has unknown type {tier.type!r}"
        for tier in structure.tiers
        if not isinstance(tier.type, WaterfallTierTypeEnum)
    ]


def find_structure_issues(structure: WaterfallStructure) -> List[str]:
    """
    Collect structural problems in a waterfall.

    Checks:
    - At least one tier
    - Unique tier ids and unique ``order`` values
    - Percent terms within [0, 100] (models built with ``model_construct``
      skip pydantic validation)
    - Explicit LP/GP splits on CATCH_UP and CARRIED_INTEREST tiers sum to 100
    - Catch-up target below 100

    Args:
        structure: Waterfall structure to inspect

    Returns:
        List of issue descriptions (empty when the structure is valid)
    """
    issues: List[str] = []

    if not structure.tiers:
        issues.append(f"Waterfall '{structure.id}' must have at least one tier")
        return issues

    id_counts = Counter(tier.id for tier in structure.tiers)
    for tier_id, count in id_counts.items():
        if count > 1:
            issues.append(f"Tier id '{tier_id}' is used by {count} tiers")

    order_counts = Counter(tier.order for tier in structure.tiers)
    for order, count in sorted(order_counts.items()):
        if count > 1:
            issues.append(f"Tier order {order} is used by {count} tiers")

    for tier in structure.tiers:
        for field_name in ("hurdle_rate", "lp_split", "gp_split", "catch_up_to"):
            value = getattr(tier, field_name)
            if value is not None and not 0 <= value <= 100:
                issues.append(
                    f"Tier '{tier.id}' {field_name} must be between 0 and 100, got {value}"
                )

        if tier.type in _SPLIT_TIER_TYPES:
            if tier.lp_split is not None and tier.gp_split is not None:
                split_total = tier.lp_split + tier.gp_split
                if abs(split_total - 100.0) > _EPSILON:
                    issues.append(
                        f"Tier '{tier.id}' LP/GP splits must sum to 100, got {split_total:g}"
                    )

        if (
            tier.type == WaterfallTierTypeEnum.CATCH_UP
            and tier.catch_up_to is not None
            and tier.catch_up_to >= 100
        ):
            issues.append(
                f"Tier '{tier.id}' catch_up_to must be below 100, got {tier.catch_up_to}"
            )

    return issues


def find_amount_issues(distribution_amount: float) -> List[str]:
    """
    Collect problems with a distribution amount.

    Any real number is accepted, including numpy scalars and ``Decimal``.
    """
    if not isinstance(distribution_amount, (numbers.Real, Decimal)) or isinstance(
        distribution_amount, bool
    ):
        return [f"Distribution amount must be a number, got {distribution_amount!r}"]
    if isinstance(distribution_amount, Decimal):
        finite = distribution_amount.is_finite()
    else:
        finite = math.isfinite(distribution_amount)
    if not finite:
        return [f"Distribution amount must be finite, got {distribution_amount}"]
    if distribution_amount < 0:
        return [f"Distribution amount cannot be negative, got {distribution_amount:,.2f}"]
    return []


def find_account_issues(accounts: Sequence[InvestorCapitalAccount]) -> List[str]:
    """
    Collect problems with investor capital accounts.

    Checks:
    - Investor ids are unique
    - Capital returned does not exceed capital contributed

    Args:
        accounts: Investor capital accounts

    Returns:
        List of issue descriptions (empty when the accounts are valid)
    """
    issues: List[str] = []

    id_counts = Counter(account.investor_id for account in accounts)
    for investor_id, count in id_counts.items():
        if count > 1:
            issues.append(f"Investor id '{investor_id}' appears in {count} accounts")

    for account in accounts:
        if account.capital_returned > account.capital_contributed + _EPSILON:
            issues.append(
                f"Investor '{account.investor_id}' has capital returned "
                f"(${account.capital_returned:,.2f}) above capital contributed "
                f"(${account.capital_contributed:,.2f})"
            )

    return issues


def validate_structure(structure: WaterfallStructure) -> None:
    """Raise if the structure cannot be calculated."""
    unknown = find_unknown_tier_types(structure)
    if unknown:
        raise UnknownTierTypeError(unknown)
    issues = find_structure_issues(structure)
    if issues:
        raise InvalidStructureError(issues)


def validate_amount(distribution_amount: float) -> None:
    """Raise if the distribution amount is not a non-negative finite number."""
    issues = find_amount_issues(distribution_amount)
    if issues:
        raise InvalidAmountError(issues)


def validate_accounts(accounts: Sequence[InvestorCapitalAccount]) -> None:
    """Raise if any capital account is inconsistent."""
    issues = find_account_issues(accounts)
    if issues:
        raise InvalidAccountError(issues)


def validate_inputs(
    structure: WaterfallStructure,
    distribution_amount: float,
    accounts: Sequence[InvestorCapitalAccount],
) -> None:
    """
    Validate everything a calculation needs, structure first.

    Raises:
        UnknownTierTypeError: A tier type has no calculation rule
        InvalidStructureError: The tiers are malformed
        InvalidAmountError: The amount is negative or not finite
        InvalidAccountError: An account is inconsistent
    """
    validate_structure(structure)
    validate_amount(distribution_amount)
    validate_accounts(accounts)


def log_input_issues(
    structure: WaterfallStructure,
    distribution_amount: float,
    accounts: Sequence[InvestorCapitalAccount],
) -> List[str]:
    """Log every input issue as a warning and return them (lenient mode)."""
    issues = (
        find_unknown_tier_types(structure)
        + find_structure_issues(structure)
        + find_amount_issues(distribution_amount)
        + find_account_issues(accounts)
    )
    for issue in issues:
        logger.warning("Waterfall input issue ignored: %s", issue)
    return issues


__all__ = [
    "find_structure_issues",
    "find_unknown_tier_types",
    "find_amount_issues",
    "find_account_issues",
    "validate_structure",
    "validate_amount",
    "validate_accounts",
    "validate_inputs",
    "log_input_issues",
]
