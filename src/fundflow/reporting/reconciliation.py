# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Distribution Reconciliation Utilities

Sanity checks that a computed distribution routes cash without creating or
losing any of it. These checks back the engine's post-calculation
conservation warning and can be run on any stored distribution.
"""

from __future__ import annotations

import logging
import math
from typing import TYPE_CHECKING, Any, Dict, List

if TYPE_CHECKING:
    from fundflow.waterfall.results import WaterfallDistribution

logger = logging.getLogger(__name__)


def _close(a: float, b: float, tolerance: float) -> bool:
    return math.isclose(a, b, rel_tol=1e-9, abs_tol=tolerance)


def reconcile_distribution(
    distribution: "WaterfallDistribution", tolerance: float = 1e-6
) -> Dict[str, Any]:
    """
    Reconcile a distribution's tier totals against party allocations.

    Checks:
    - Tier totals do not exceed the distributable amount
    - LP + GP allocations equal the tier totals (conservation of cash)
    - Each tier's LP and GP amounts add up to what it absorbed
    - Investor allocations add up to the LP amounts of the tiers
    - GP tier allocations add up to the GP amounts of the tiers

    Args:
        distribution: WaterfallDistribution to reconcile
        tolerance: Absolute tolerance in currency units

    Returns:
        Dict containing totals, per-check booleans, an ``issues`` list and
        an overall ``is_balanced`` flag

    Example:
        ```python
        report = reconcile_distribution(result)
        if not report["is_balanced"]:
            for issue in report["issues"]:
                print(issue)
        ```
    """
    total_distributable = distribution.total_distributable
    tiers = distribution.tier_distributions
    tier_total = sum(t.amount_distributed for t in tiers)
    tier_lp_total = sum(t.lp_amount for t in tiers)
    tier_gp_total = sum(t.gp_amount for t in tiers)
    investor_total = sum(a.total_allocation for a in distribution.investor_allocations)
    gp_total = distribution.gp_allocation.total_amount

    issues: List[str] = []

    # Negative or non-finite amounts leave no cash to distribute
    available = total_distributable if math.isfinite(total_distributable) else 0.0
    available = max(available, 0.0)
    within_distributable = tier_total <= available + tolerance
    if not within_distributable:
        issues.append(
            f"Tiers distributed {tier_total:,.2f}, more than the "
            f"{available:,.2f} available"
        )

    cash_conserved = _close(investor_total + gp_total, tier_total, tolerance)
    if not cash_conserved:
        issues.append(
            f"Allocations ({investor_total + gp_total:,.2f}) do not match "
            f"tier totals ({tier_total:,.2f})"
        )

    split_issues = [
        f"Tier '{tier.tier_id}' split LP {tier.lp_amount:,.2f} + "
        f"GP {tier.gp_amount:,.2f} != {tier.amount_distributed:,.2f}"
        for tier in tiers
        if not _close(tier.lp_amount + tier.gp_amount, tier.amount_distributed, tolerance)
    ]
    issues.extend(split_issues)
    tiers_split_cleanly = not split_issues

    lp_matches = _close(investor_total, tier_lp_total, tolerance)
    if not lp_matches:
        issues.append(
            f"Investor allocations ({investor_total:,.2f}) do not match "
            f"tier LP amounts ({tier_lp_total:,.2f})"
        )

    gp_matches = _close(gp_total, tier_gp_total, tolerance)
    if not gp_matches:
        issues.append(
            f"GP allocation ({gp_total:,.2f}) does not match "
            f"tier GP amounts ({tier_gp_total:,.2f})"
        )

    report = {
        "total_distributable": total_distributable,
        "total_distributed": tier_total,
        "total_lp": investor_total,
        "total_gp": gp_total,
        "undistributed": total_distributable - tier_total,
        "within_distributable": within_distributable,
        "cash_conserved": cash_conserved,
        "tiers_split_cleanly": tiers_split_cleanly,
        "lp_matches_tiers": lp_matches,
        "gp_matches_tiers": gp_matches,
        "issues": issues,
        "is_balanced": not issues,
    }

    if issues:
        logger.debug("Reconciliation found %d issue(s)", len(issues))
    return report


__all__ = ["reconcile_distribution"]
