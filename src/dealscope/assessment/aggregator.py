# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Deal Assessment Aggregator

Rolls the six threshold metrics (cap rate, cash-on-cash, DSCR, IRR, ROI and
breakeven occupancy) into a single qualitative rating.
"""

from __future__ import annotations

import logging
import math
from collections import Counter
from typing import Any, Dict, Iterable, Mapping, Optional, Union

from pydantic import Field

from ..core.primitives import (
    DEFAULT_SETTINGS,
    AssessmentLevelEnum,
    AssessmentThresholds,
    CamelModel,
    MetricEnum,
)
from ..metrics.types import ComputedMetrics, MetricSelection

logger = logging.getLogger(__name__)

RECOMMENDATIONS = {
    AssessmentLevelEnum.EXCELLENT: "This deal shows excellent potential with multiple positive metrics.",
    AssessmentLevelEnum.GOOD: "This deal shows good potential. Consider negotiating better terms.",
    AssessmentLevelEnum.FAIR: "This deal shows moderate potential with some areas of concern.",
    AssessmentLevelEnum.POOR: "This deal shows several areas of concern. Consider passing or renegotiating.",
    AssessmentLevelEnum.INSUFFICIENT: "Please enable metrics to get an assessment.",
}


class DealAssessment(CamelModel):
    """Overall rating with the per-metric levels it was derived from."""

    overall: AssessmentLevelEnum
    recommendation: str
    metric_scores: Dict[str, AssessmentLevelEnum] = Field(default_factory=dict)
    active_metrics: int = 0
    excellent_count: int = 0
    good_count: int = 0
    fair_count: int = 0


def score_metric(
    metric: MetricEnum, value: float, thresholds: AssessmentThresholds = DEFAULT_SETTINGS.assessment
) -> AssessmentLevelEnum:
    """
    Grade one metric value against its two thresholds.

    Ordinary metrics are Excellent at or above the first threshold and Good at
    or above the second. Inverted metrics compare with ``<=``.
    """
    excellent, good = thresholds.thresholds[metric]
    if metric in thresholds.inverted:
        if value <= excellent:
            return AssessmentLevelEnum.EXCELLENT
        if value <= good:
            return AssessmentLevelEnum.GOOD
        return AssessmentLevelEnum.FAIR
    if value >= excellent:
        return AssessmentLevelEnum.EXCELLENT
    if value >= good:
        return AssessmentLevelEnum.GOOD
    return AssessmentLevelEnum.FAIR


def overall_level(excellent: int, good: int, fair: int) -> AssessmentLevelEnum:
    """
    Majority rule over the level counts.

    Excellent needs a strict majority, Good wins ties, Fair needs a strict
    majority, and anything else is Poor.
    """
    if excellent + good + fair == 0:
        return AssessmentLevelEnum.INSUFFICIENT
    if excellent > good and excellent > fair:
        return AssessmentLevelEnum.EXCELLENT
    if good >= excellent and good >= fair:
        return AssessmentLevelEnum.GOOD
    if fair > excellent and fair > good:
        return AssessmentLevelEnum.FAIR
    return AssessmentLevelEnum.POOR


def _value(metrics: Union[ComputedMetrics, Mapping[str, Any]], metric: MetricEnum) -> Optional[float]:
    if isinstance(metrics, ComputedMetrics):
        value = metrics.value_of(metric)
    else:
        value = metrics.get(metric.value)
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    return float(value)


def assess_deal(
    metrics: Union[ComputedMetrics, Mapping[str, Any]],
    selection: Union[MetricSelection, Mapping[str, Any], Iterable[str], None] = None,
    thresholds: AssessmentThresholds = DEFAULT_SETTINGS.assessment,
) -> DealAssessment:
    """
    Rate a deal from its computed metrics.

    Only threshold metrics that are selected (all of them when ``selection`` is
    ``None``) and carry a non-zero value are scored. Negative values are
    graded like any other. When none qualify the
    rating is Insufficient.

    Args:
        metrics: Batch result or a camelCase mapping of metric values
        selection: Metrics the caller enabled
        thresholds: Two-threshold table per metric

    Returns:
        DealAssessment with the overall level and per-metric levels
    """
    chosen = None if selection is None else MetricSelection.from_any(selection)
    scores: Dict[str, AssessmentLevelEnum] = {}
    for metric in thresholds.thresholds:
        if chosen is not None and not chosen.is_selected(metric):
            continue
        value = _value(metrics, metric)
        if value is None or value == 0 or math.isnan(value):
            continue
        scores[metric.value] = score_metric(metric, value, thresholds)

    counts = Counter(scores.values())
    excellent = counts[AssessmentLevelEnum.EXCELLENT]
    good = counts[AssessmentLevelEnum.GOOD]
    fair = counts[AssessmentLevelEnum.FAIR]
    overall = overall_level(excellent, good, fair)
    logger.debug(f"Deal assessment {overall.value} from {len(scores)} scored metrics")

    return DealAssessment(
        overall=overall,
        recommendation=RECOMMENDATIONS[overall],
        metric_scores=scores,
        active_metrics=len(scores),
        excellent_count=excellent,
        good_count=good,
        fair_count=fair,
    )


__all__ = ["RECOMMENDATIONS", "DealAssessment", "assess_deal", "overall_level", "score_metric"]
