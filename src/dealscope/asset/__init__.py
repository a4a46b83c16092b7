# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Asset-specific scoring engines, one subpackage per property type.

Each engine consumes canonical records and returns immutable result models.
"""
