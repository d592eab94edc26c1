# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Tabular views of waterfall distributions.

Builds pandas DataFrames from a ``WaterfallDistribution`` for reports,
notebooks and exports. These functions contain no calculation logic: every
figure comes straight from the distribution.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import pandas as pd

if TYPE_CHECKING:
    from fundflow.waterfall.results import WaterfallDistribution

TIER_COLUMNS = [
    "tier_id",
    "tier_name",
    "tier_type",
    "amount_distributed",
    "lp_amount",
    "gp_amount",
    "remaining_after_tier",
]

INVESTOR_COLUMNS = [
    "investor_id",
    "investor_name",
    "ownership_percent",
    "total_allocation",
    "share_of_distribution",
]

GP_ROW_LABEL = "GP"


def tier_summary_table(distribution: "WaterfallDistribution") -> pd.DataFrame:
    """
    One row per tier, in processing order.

    Returns:
        DataFrame indexed by position with columns ``TIER_COLUMNS``
    """
    rows = [
        {
            "tier_id": tier.tier_id,
            "tier_name": tier.tier_name,
            "tier_type": getattr(tier.tier_type, "value", tier.tier_type),
            "amount_distributed": tier.amount_distributed,
            "lp_amount": tier.lp_amount,
            "gp_amount": tier.gp_amount,
            "remaining_after_tier": tier.remaining_after_tier,
        }
        for tier in distribution.tier_distributions
    ]
    return pd.DataFrame(rows, columns=TIER_COLUMNS)


def investor_summary_table(distribution: "WaterfallDistribution") -> pd.DataFrame:
    """
    One row per investor plus a GP row.

    ``share_of_distribution`` is each party's fraction of the cash actually
    distributed (0 when nothing was distributed).
    """
    total = distribution.total_distributed
    rows = [
        {
            "investor_id": allocation.investor_id,
            "investor_name": allocation.investor_name,
            "ownership_percent": allocation.ownership_percent,
            "total_allocation": allocation.total_allocation,
        }
        for allocation in distribution.investor_allocations
    ]
    rows.append(
        {
            "investor_id": GP_ROW_LABEL,
            "investor_name": "General Partner",
            "ownership_percent": 0.0,
            "total_allocation": distribution.gp_allocation.total_amount,
        }
    )
    df = pd.DataFrame(rows, columns=INVESTOR_COLUMNS[:-1])
    df["share_of_distribution"] = df["total_allocation"] / total if total > 0 else 0.0
    return df


def investor_tier_matrix(distribution: "WaterfallDistribution") -> pd.DataFrame:
    """
    Amount per party (rows) and tier (columns).

    Rows are investor ids followed by ``GP``, one row per allocation in
    result order; columns are tier ids in processing order. Parties that did
    not take part in a tier show 0.
    """
    tier_ids = [tier.tier_id for tier in distribution.tier_distributions]
    parties = list(distribution.investor_allocations) + [distribution.gp_allocation]
    party_ids = [a.investor_id for a in distribution.investor_allocations] + [GP_ROW_LABEL]

    # Built row by row so repeated investor ids keep their own amounts
    rows = [[party.amount_for_tier(tier_id) for tier_id in tier_ids] for party in parties]
    matrix = pd.DataFrame(rows, index=party_ids, columns=tier_ids, dtype=float)

    matrix["total"] = matrix.sum(axis=1)
    return matrix


__all__ = [
    "tier_summary_table",
    "investor_summary_table",
    "investor_tier_matrix",
]
