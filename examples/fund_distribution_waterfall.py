#!/usr/bin/env python3
# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Fund Distribution Waterfall Example

This script runs a single distribution event for a small closed-end fund
through both built-in waterfall structures and prints the tier, investor and
GP results side by side.

## Fund Overview

Three limited partners committed $1M in total. Part of the capital has
already come back and some preferred return has been paid from an earlier
distribution:

- **Endowment**: $500K contributed, $100K returned
- **Pension Plan**: $300K contributed, $10K preferred return paid
- **Family Office**: $200K contributed, $50K returned, $4K preferred return paid

The fund now distributes $1.25M.

### Structures Compared

1. **Standard (European) 4-tier**: return of capital, 8% preferred return,
   100% GP catch-up to 20% of profits, then 80/20
2. **American 3-tier**: return of capital, 8% preferred return, then 80/20
   with no catch-up

**Expected Results**:
- Return of capital absorbs the $850K of unreturned capital
- Preferred return absorbs $66K (flat 8% on contributed capital less amounts paid)
- Standard structure: GP catch-up of $16.5K, then $317.5K split 80/20
- American structure: $334K split 80/20

The ledger update that follows a distribution (marking capital returned and
preferred return paid) is the caller's responsibility; this script only
previews the allocation.
"""

import sys
from datetime import date
from pathlib import Path

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from fundflow.reporting import (
    format_waterfall_currency,
    format_waterfall_percent,
    investor_tier_matrix,
    reconcile_distribution,
    tier_summary_table,
)
from fundflow.waterfall import (
    InvestorCapitalAccount,
    WaterfallDistribution,
    calculate_waterfall,
    list_waterfall_templates,
)

DISTRIBUTION_AMOUNT = 1_250_000
FUND_START = date(2021, 7, 1)
DISTRIBUTION_DATE = date(2025, 6, 30)


def create_capital_accounts() -> list:
    """Capital accounts as they stand before this distribution."""
    return [
        InvestorCapitalAccount(
            investor_id="lp-endowment",
            investor_name="Endowment",
            capital_contributed=500_000,
            capital_returned=100_000,
        ),
        InvestorCapitalAccount(
            investor_id="lp-pension",
            investor_name="Pension Plan",
            capital_contributed=300_000,
            preferred_return_paid=10_000,
        ),
        InvestorCapitalAccount(
            investor_id="lp-family",
            investor_name="Family Office",
            capital_contributed=200_000,
            capital_returned=50_000,
            preferred_return_paid=4_000,
        ),
    ]


def print_distribution(result: WaterfallDistribution) -> None:
    """Print a readable summary of one distribution."""
    print("TIERS:")
    print("-" * 60)
    for tier in result.tier_distributions:
        print(
            f"  {tier.tier_name:<28} {format_waterfall_currency(tier.amount_distributed):>12}"
            f"  (LP {format_waterfall_currency(tier.lp_amount)}, "
            f"GP {format_waterfall_currency(tier.gp_amount)})"
        )
    print()

    print("INVESTORS:")
    print("-" * 60)
    for allocation in result.investor_allocations:
        print(
            f"  {allocation.investor_name:<28} "
            f"{format_waterfall_currency(allocation.total_allocation):>12}"
            f"  ownership {format_waterfall_percent(allocation.ownership_percent)}"
        )
    print(
        f"  {'General Partner':<28} "
        f"{format_waterfall_currency(result.gp_allocation.total_amount):>12}"
    )
    print()

    report = reconcile_distribution(result)
    status = "balanced" if report["is_balanced"] else "; ".join(report["issues"])
    print(f"Reconciliation: {status}")
    print()


def main():
    """
    Run the distribution through every built-in structure.
    """
    accounts = create_capital_accounts()
    results = {}

    print("=" * 60)
    print("FUND DISTRIBUTION WATERFALL")
    print("=" * 60)
    print(f"Distribution: {format_waterfall_currency(DISTRIBUTION_AMOUNT)}")
    print()

    for structure in list_waterfall_templates():
        result = calculate_waterfall(
            structure,
            DISTRIBUTION_AMOUNT,
            accounts,
            fund_start_date=FUND_START,
            distribution_date=DISTRIBUTION_DATE,
        )
        results[structure.id] = result

        print(structure.name.upper())
        print(structure.description)
        print(f"Holding period: {result.holding_period_years:.2f} years")
        print()
        print_distribution(result)

    # Tabular view for notebooks and exports
    standard = results["standard-4-tier"]
    print("TIER SUMMARY (standard structure):")
    print(tier_summary_table(standard).to_string(index=False))
    print()
    print("PARTY x TIER MATRIX (standard structure):")
    print(investor_tier_matrix(standard).round(2).to_string())
    print()

    gp_difference = (
        results["standard-4-tier"].gp_allocation.total_amount
        - results["american-3-tier"].gp_allocation.total_amount
    )
    print(f"Catch-up adds {format_waterfall_currency(gp_difference)} to the GP")

    return results


if __name__ == "__main__":
    # Execute the example
    results = main()
