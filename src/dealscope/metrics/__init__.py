# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Metric selection, requirements gating, calculators and the batch engine.
"""

from .types import ComputedMetrics, MetricSelection
from .requirements import can_compute, explain_missing, missing_fields, validate_asset_data_requirements
from .calculators import MetricCalculators
from .checks import (
    ValidationReport,
    batch_validate_metrics,
    safe_calculate,
    validate_calculation_results,
    validate_property_data,
)
from .formatting import format_metric, format_metric_value
from .engine import compute_metrics

__all__ = [
    "ComputedMetrics",
    "MetricCalculators",
    "MetricSelection",
    "ValidationReport",
    "batch_validate_metrics",
    "can_compute",
    "compute_metrics",
    "explain_missing",
    "format_metric",
    "format_metric_value",
    "missing_fields",
    "safe_calculate",
    "validate_asset_data_requirements",
    "validate_calculation_results",
    "validate_property_data",
]
