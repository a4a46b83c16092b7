# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Shared scoring helpers for the asset engines.

Scores start from a base, take fixed deltas, are clamped to a range and then
mapped to a label by descending cut points.
"""

from __future__ import annotations

from typing import Iterable, Sequence, Tuple

import numpy as np


def clamp(value: float, lower: float = 0.0, upper: float = 100.0) -> float:
    """Clip ``value`` into ``[lower, upper]``."""
    return float(np.clip(value, lower, upper))


def grade(score: float, cuts: Sequence[Tuple[float, str]], fallback: str) -> str:
    """
    Map a score to the label of the first cut it meets.

    Example:
        >>> grade(72, [(80, "Low"), (60, "Medium"), (40, "High")], "Critical")
        'Medium'
    """
    for threshold, label in cuts:
        if score >= threshold:
            return label
    return fallback


def safe_ratio(numerator: float, denominator: float, default: float = 0.0) -> float:
    """``numerator / denominator``, or ``default`` when the denominator is not positive."""
    if not denominator or denominator <= 0:
        return default
    return numerator / denominator


def mean_or(values: Iterable[float], default: float = 0.0) -> float:
    items = list(values)
    if not items:
        return default
    return float(np.mean(items))


def simple_irr(investment: float, annual_cash_flow: float, years: float) -> float:
    """Multiple-based IRR approximation, in percent, rounded to 2 places."""
    multiple = safe_ratio(annual_cash_flow * years, investment)
    if multiple <= 0 or years <= 0:
        return 0.0
    return round((multiple ** (1 / years) - 1) * 100, 2)
