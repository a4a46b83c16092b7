# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Engine configuration.

Defaults reproduce the fixed policy constants of the metric engine. They are
exposed as settings so callers can inspect them and tests can reason about
them; changing them produces non-standard results.
"""

from __future__ import annotations

from typing import Dict, Tuple

from pydantic import Field, model_validator

from .clock import AVERAGE_MONTH_DAYS, AVERAGE_YEAR_DAYS, SIMPLE_MONTH_DAYS
from .enums import MetricEnum
from .model import Model
from .types import PositiveFloat, PositiveInt


class ReturnSettings(Model):
    """Assumptions behind the IRR and ROI approximations."""

    exit_cap_rate: PositiveFloat = Field(
        default=8.0,
        description="Exit cap rate (percent) used when the facts carry no cap rate.",
    )
    holding_period_years: PositiveInt = Field(
        default=5, description="Holding period used when none is supplied."
    )
    irr_floor: float = Field(default=0.0, description="Lower clamp for IRR (percent).")
    irr_cap: float = Field(default=50.0, description="Upper clamp for IRR (percent).")
    fallback_appreciation_multiple: PositiveFloat = Field(
        default=10.0,
        description="Value multiple applied to NOI growth when the exit cap is not positive.",
    )

    @model_validator(mode="after")
    def _check_clamp(self) -> "ReturnSettings":
        if self.irr_floor > self.irr_cap:
            raise ValueError("irr_floor must not exceed irr_cap")
        return self


class AssessmentThresholds(Model):
    """
    Two-threshold table used by the deal assessment aggregator.

    Each entry is ``(excellent, good)``. For ordinary metrics a value at or
    above the first threshold is Excellent, at or above the second is Good and
    anything else is Fair. Metrics listed in ``inverted`` compare with ``<=``.
    """

    thresholds: Dict[MetricEnum, Tuple[float, float]] = Field(
        default_factory=lambda: {
            MetricEnum.CAP_RATE: (8.0, 6.0),
            MetricEnum.CASH_ON_CASH: (8.0, 6.0),
            MetricEnum.DSCR: (1.25, 1.1),
            MetricEnum.IRR: (12.0, 8.0),
            MetricEnum.ROI: (12.0, 8.0),
            MetricEnum.BREAKEVEN: (85.0, 90.0),
        }
    )
    inverted: Tuple[MetricEnum, ...] = (MetricEnum.BREAKEVEN,)


class TimeSettings(Model):
    """Day-count constants used by time-relative calculations."""

    month_days: PositiveFloat = Field(
        default=AVERAGE_MONTH_DAYS, description="Average days per month for lease-term math."
    )
    simple_month_days: PositiveFloat = Field(
        default=SIMPLE_MONTH_DAYS, description="Days per month used by the simple rent-weighted WALT."
    )
    year_days: PositiveFloat = Field(
        default=AVERAGE_YEAR_DAYS, description="Average days per year for remaining lease value."
    )


class EngineSettings(Model):
    """Top-level settings consumed by the batch engine and calculators."""

    returns: ReturnSettings = Field(default_factory=ReturnSettings)
    assessment: AssessmentThresholds = Field(default_factory=AssessmentThresholds)
    time: TimeSettings = Field(default_factory=TimeSettings)


DEFAULT_SETTINGS = EngineSettings()
