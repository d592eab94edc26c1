# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
fundflow - Investment Fund Distribution Waterfalls

Allocates fund distributions across ordered waterfall tiers (return of
capital, preferred return, GP catch-up, carried interest) and between
limited partners and the general partner.

Key Entry Points:
- fundflow.waterfall.calculate_waterfall() - Run one distribution through a structure
- fundflow.waterfall.STANDARD_WATERFALL / AMERICAN_WATERFALL - Built-in structures
- fundflow.reporting.* - Formatting, summary tables and reconciliation

Example Usage:
    ```python
    from fundflow.waterfall import (
        STANDARD_WATERFALL,
        InvestorCapitalAccount,
        calculate_waterfall,
    )

    accounts = [
        InvestorCapitalAccount(
            investor_id="lp-1", investor_name="Pension Fund", capital_contributed=1_000_000
        ),
    ]
    result = calculate_waterfall(STANDARD_WATERFALL, 1_500_000, accounts)
    print(f"GP carry: ${result.gp_allocation.total_amount:,.0f}")
    ```
"""

import importlib
import logging

# Libraries leave handler configuration to the application
logging.getLogger(__name__).addHandler(logging.NullHandler())


# Public API surface (lazy-loaded on first attribute access)
__all__ = [  # noqa: F822 - lazy loading
    "core",
    "reporting",
    "waterfall",
]


_LAZY_MODULES = {
    "core": "fundflow.core",
    "reporting": "fundflow.reporting",
    "waterfall": "fundflow.waterfall",
}


def __getattr__(name: str):
    module_path = _LAZY_MODULES.get(name)
    if module_path is None:
        raise AttributeError(f"module 'fundflow' has no attribute '{name}'")
    module = importlib.import_module(module_path)
    globals()[name] = module
    return module
