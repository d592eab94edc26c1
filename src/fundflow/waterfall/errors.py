# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Waterfall validation errors.

Every error is a ``ValueError`` so callers that already guard pydantic
validation with ``except ValueError`` keep working. Each error carries the
full list of issues found, not just the first one.
"""

from __future__ import annotations

from typing import Iterable, List


class WaterfallError(ValueError):
    """Base class for waterfall input errors."""

    def __init__(self, issues: Iterable[str]):
        self.issues: List[str] = list(issues)
        super().__init__("; ".join(self.issues))


class InvalidStructureError(WaterfallError):
    """The waterfall structure cannot be calculated as configured."""


class UnknownTierTypeError(InvalidStructureError):
    """A tier declares a type the engine has no rule for."""


class InvalidAmountError(WaterfallError):
    """The distribution amount is negative or not a finite number."""


class InvalidAccountError(WaterfallError):
    """An investor capital account is internally inconsistent."""


__all__ = [
    "WaterfallError",
    "InvalidStructureError",
    "UnknownTierTypeError",
    "InvalidAmountError",
    "InvalidAccountError",
]
