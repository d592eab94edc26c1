# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Integration tests for fundflow.

Full distributions run through the engine and checked against
hand-calculated results and properties that hold for any valid input.
"""
