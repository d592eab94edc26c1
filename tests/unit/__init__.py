# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Unit tests for fundflow components.

Isolated tests for primitives, waterfall models and engine, and reporting
helpers.
"""
