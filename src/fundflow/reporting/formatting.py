# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""Display formatting for waterfall figures."""

from __future__ import annotations

from typing import Optional

from ..core.primitives import ReportingSettings


def format_waterfall_currency(
    value: float, settings: Optional[ReportingSettings] = None
) -> str:
    """
    Format a currency amount for display.

    Defaults to whole US dollars with thousands separators; negatives carry
    a leading minus (``-$1,235``).
    """
    settings = settings or ReportingSettings()
    decimals = settings.currency_decimals
    sign = "-" if round(value, decimals) < 0 else ""
    return f"{sign}{settings.currency_symbol}{abs(value):,.{decimals}f}"


def format_waterfall_percent(
    value: float, settings: Optional[ReportingSettings] = None
) -> str:
    """Format a value already in percent units (``12.345`` -> ``12.35%``)."""
    settings = settings or ReportingSettings()
    return f"{value:.{settings.percent_decimals}f}%"


__all__ = [
    "format_waterfall_currency",
    "format_waterfall_percent",
]
