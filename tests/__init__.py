# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
fundflow test suite.

Unit tests live under ``unit/`` mirroring the package layout; tests that run
complete distributions through the engine live under ``integration/``.
"""
