# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Unit tests for dealscope components.

Each module exercises one engine or helper in isolation against the fixed
clock in ``tests/conftest.py``.
"""
