# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""Display formatting for metric values."""

from __future__ import annotations

import math
from typing import Any, Literal

from ..core.primitives import MetricEnum

ValueKind = Literal["percentage", "currency", "ratio", "number"]

METRIC_KINDS = {
    MetricEnum.CAP_RATE: "percentage",
    MetricEnum.CASH_ON_CASH: "percentage",
    MetricEnum.DSCR: "ratio",
    MetricEnum.LTV: "percentage",
    MetricEnum.GRM: "ratio",
    MetricEnum.PRICE_PER_SF: "currency",
    MetricEnum.PRICE_PER_UNIT: "currency",
    MetricEnum.EGI: "currency",
    MetricEnum.BREAKEVEN: "percentage",
    MetricEnum.IRR: "percentage",
    MetricEnum.ROI: "percentage",
    MetricEnum.EFFECTIVE_RENT_PSF: "currency",
    MetricEnum.OCCUPANCY_COST_RATIO: "percentage",
}


def format_metric_value(value: Any, kind: ValueKind = "number") -> str:
    """
    Format a metric value for display.

    Example:
        >>> format_metric_value(8.5, "percentage")
        '8.50%'
        >>> format_metric_value(1_000_000, "currency")
        '$1,000,000'
        >>> format_metric_value(None, "ratio")
        'N/A'
    """
    if value is None or (isinstance(value, float) and math.isnan(value)):
        return "N/A"
    if kind == "percentage":
        return f"{value:.2f}%"
    if kind == "currency":
        sign = "-" if value < 0 else ""
        return f"{sign}${abs(value):,.0f}"
    if kind == "ratio":
        return f"{value:.2f}"
    return str(value)


def format_metric(metric: MetricEnum, value: Any) -> str:
    """Format ``value`` using the display kind registered for ``metric``."""
    return format_metric_value(value, METRIC_KINDS.get(metric, "number"))


__all__ = ["METRIC_KINDS", "format_metric", "format_metric_value"]
