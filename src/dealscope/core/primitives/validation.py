# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Reusable numeric validation utilities.

This module provides:
- Presence checks that treat ``None``, NaN, zero and empty collections as missing
- Tolerant number coercion for loosely typed caller input
"""

from __future__ import annotations

import math
from typing import Any, Optional

import numpy as np


def to_number(value: Any) -> Optional[float]:
    """
    Coerce ``value`` to a float, returning ``None`` when it cannot be read.

    Numeric strings such as ``"42"`` or ``"1,250,000"`` are accepted.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float, np.integer, np.floating)):
        number = float(value)
        return number if math.isfinite(number) else None
    if isinstance(value, str):
        text = value.strip().replace(",", "").replace("$", "").rstrip("%")
        if not text:
            return None
        try:
            number = float(text)
        except ValueError:
            return None
        return number if math.isfinite(number) else None
    return None


def is_present(value: Any) -> bool:
    """
    Decide whether a fact is present for gating purposes.

    ``None``, NaN, zero, empty strings and empty collections count as missing.
    """
    if value is None:
        return False
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float, np.integer, np.floating)):
        number = float(value)
        return math.isfinite(number) and number != 0
    if isinstance(value, str):
        return bool(value.strip())
    if isinstance(value, (list, tuple, dict, set)):
        return len(value) > 0
    return True


def first_present(*values: Any) -> Any:
    """Return the first value that ``is_present``, else ``None``."""
    for value in values:
        if is_present(value):
            return value
    return None
