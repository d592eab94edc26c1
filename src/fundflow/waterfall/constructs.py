# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Waterfall Constructs - Structure Templates and Builders

Ready-made waterfall structures for the two arrangements most limited
partnership agreements use, and builders for variants with different terms.

## Templates

### `STANDARD_WATERFALL` (European style, 4 tiers)
1. Return of capital
2. 8% preferred return
3. GP catch-up to 20% of profits
4. 80/20 LP/GP split of everything left

### `AMERICAN_WATERFALL` (3 tiers, no catch-up)
1. Return of capital
2. 8% preferred return
3. 80/20 LP/GP split of everything left

Templates are registered in `WATERFALL_TEMPLATES` by id.

## Builders

```python
from fundflow.waterfall.constructs import create_standard_waterfall

# 10% pref, full catch-up to 25%, then 75/25
structure = create_standard_waterfall(hurdle_rate=10, catch_up_to=25, gp_split=25)
```

Builder outputs are ordinary `WaterfallStructure` instances and can be
copied with modified tiers like any other model.
"""

from __future__ import annotations

from typing import Dict, List, Optional

from ..core.primitives import WaterfallTierTypeEnum
from .tiers import WaterfallStructure, WaterfallTier


def _format_rate(value: float) -> str:
    return f"{value:g}%"


def _split_terms(lp_split: Optional[float], gp_split: Optional[float]) -> tuple:
    """Fill in a missing split from its complement; default 80/20."""
    if lp_split is None and gp_split is None:
        return 80.0, 20.0
    if lp_split is None:
        return 100.0 - gp_split, gp_split
    if gp_split is None:
        return lp_split, 100.0 - lp_split
    return lp_split, gp_split


def _return_of_capital_tier(order: int) -> WaterfallTier:
    return WaterfallTier(
        id=f"tier-{order}",
        name="Return of Capital",
        type=WaterfallTierTypeEnum.RETURN_OF_CAPITAL,
        order=order,
    )


def _preferred_return_tier(order: int, hurdle_rate: float) -> WaterfallTier:
    return WaterfallTier(
        id=f"tier-{order}",
        name=f"Preferred Return ({_format_rate(hurdle_rate)})",
        type=WaterfallTierTypeEnum.PREFERRED_RETURN,
        order=order,
        hurdle_rate=hurdle_rate,
    )


def create_standard_waterfall(
    hurdle_rate: float = 8.0,
    catch_up_to: float = 20.0,
    lp_split: Optional[float] = None,
    gp_split: Optional[float] = None,
    structure_id: str = "standard-4-tier",
    name: str = "Standard 4-Tier Waterfall",
) -> WaterfallStructure:
    """
    Create a European-style 4-tier waterfall.

    Args:
        hurdle_rate: Preferred return in percent
        catch_up_to: GP target share of profits in percent
        lp_split: LP share of the final split in percent
        gp_split: GP share of the final split in percent
        structure_id: Structure identifier
        name: Display name

    Returns:
        WaterfallStructure with ROC, preferred return, catch-up and carried interest tiers
    """
    lp, gp = _split_terms(lp_split, gp_split)
    return WaterfallStructure(
        id=structure_id,
        name=name,
        description=(
            f"Return of capital, {_format_rate(hurdle_rate)} preferred return, "
            f"GP catch-up to {_format_rate(catch_up_to)}, then {lp:g}/{gp:g} split"
        ),
        tiers=[
            _return_of_capital_tier(1),
            _preferred_return_tier(2, hurdle_rate),
            WaterfallTier(
                id="tier-3",
                name="GP Catch-Up",
                type=WaterfallTierTypeEnum.CATCH_UP,
                order=3,
                catch_up_to=catch_up_to,
                lp_split=0,
                gp_split=100,
            ),
            WaterfallTier(
                id="tier-4",
                name="Carried Interest Split",
                type=WaterfallTierTypeEnum.CARRIED_INTEREST,
                order=4,
                lp_split=lp,
                gp_split=gp,
            ),
        ],
    )


def create_american_waterfall(
    hurdle_rate: float = 8.0,
    lp_split: Optional[float] = None,
    gp_split: Optional[float] = None,
    structure_id: str = "american-3-tier",
    name: str = "American-Style 3-Tier Waterfall",
) -> WaterfallStructure:
    """
    Create an American-style 3-tier waterfall (no catch-up).

    Args:
        hurdle_rate: Preferred return in percent
        lp_split: LP share of the profit split in percent
        gp_split: GP share of the profit split in percent
        structure_id: Structure identifier
        name: Display name

    Returns:
        WaterfallStructure with ROC, preferred return and profit split tiers
    """
    lp, gp = _split_terms(lp_split, gp_split)
    return WaterfallStructure(
        id=structure_id,
        name=name,
        description=(
            f"Return of capital, {_format_rate(hurdle_rate)} preferred return, "
            f"then {lp:g}/{gp:g} split (no catch-up)"
        ),
        tiers=[
            _return_of_capital_tier(1),
            _preferred_return_tier(2, hurdle_rate),
            WaterfallTier(
                id="tier-3",
                name="Profit Split",
                type=WaterfallTierTypeEnum.CARRIED_INTEREST,
                order=3,
                lp_split=lp,
                gp_split=gp,
            ),
        ],
    )


STANDARD_WATERFALL = create_standard_waterfall()
AMERICAN_WATERFALL = create_american_waterfall()

WATERFALL_TEMPLATES: Dict[str, WaterfallStructure] = {
    STANDARD_WATERFALL.id: STANDARD_WATERFALL,
    AMERICAN_WATERFALL.id: AMERICAN_WATERFALL,
}


def get_waterfall_template(structure_id: str) -> WaterfallStructure:
    """
    Look up a built-in structure by id.

    Raises:
        KeyError: If no template has the id
    """
    try:
        return WATERFALL_TEMPLATES[structure_id]
    except KeyError:
        known = ", ".join(sorted(WATERFALL_TEMPLATES))
        raise KeyError(
            f"Unknown waterfall template '{structure_id}'. Available: {known}"
        ) from None


def list_waterfall_templates() -> List[WaterfallStructure]:
    """Built-in structures in registration order."""
    return list(WATERFALL_TEMPLATES.values())


__all__ = [
    "STANDARD_WATERFALL",
    "AMERICAN_WATERFALL",
    "WATERFALL_TEMPLATES",
    "create_standard_waterfall",
    "create_american_waterfall",
    "get_waterfall_template",
    "list_waterfall_templates",
]
