# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Unit tests for the deal assessment aggregator.
"""

import pytest

from dealscope.assessment import RECOMMENDATIONS, assess_deal, overall_level, score_metric
from dealscope.core.primitives import AssessmentLevelEnum, AssessmentThresholds, MetricEnum
from dealscope.metrics import compute_metrics

Level = AssessmentLevelEnum


class TestScoreMetric:
    """Two-threshold grading per metric."""

    @pytest.mark.parametrize(
        "metric, value, expected",
        [
            (MetricEnum.CAP_RATE, 8.0, Level.EXCELLENT),
            (MetricEnum.CAP_RATE, 6.0, Level.GOOD),
            (MetricEnum.CAP_RATE, 5.99, Level.FAIR),
            (MetricEnum.DSCR, 1.25, Level.EXCELLENT),
            (MetricEnum.DSCR, 1.1, Level.GOOD),
            (MetricEnum.IRR, 7.9, Level.FAIR),
        ],
    )
    def test_ordinary_metrics(self, metric, value, expected):
        assert score_metric(metric, value) == expected

    @pytest.mark.parametrize(
        "value, expected", [(85.0, Level.EXCELLENT), (90.0, Level.GOOD), (90.1, Level.FAIR)]
    )
    def test_breakeven_is_inverted(self, value, expected):
        assert score_metric(MetricEnum.BREAKEVEN, value) == expected

    def test_custom_thresholds(self):
        thresholds = AssessmentThresholds(thresholds={MetricEnum.CAP_RATE: (10.0, 9.0)})
        assert score_metric(MetricEnum.CAP_RATE, 9.5, thresholds) == Level.GOOD


class TestOverallLevel:
    """Majority rule with Good winning ties."""

    def test_two_good_two_fair_is_good(self):
        assert overall_level(excellent=0, good=2, fair=2) == Level.GOOD

    def test_excellent_needs_strict_majority(self):
        assert overall_level(excellent=2, good=1, fair=1) == Level.EXCELLENT
        assert overall_level(excellent=2, good=2, fair=0) == Level.GOOD

    def test_fair_majority(self):
        assert overall_level(excellent=1, good=0, fair=2) == Level.FAIR

    def test_poor_when_no_level_wins(self):
        assert overall_level(excellent=2, good=0, fair=2) == Level.POOR

    def test_insufficient_without_metrics(self):
        assert overall_level(0, 0, 0) == Level.INSUFFICIENT


class TestAssessDeal:
    """End-to-end rating from metric values."""

    def test_two_good_two_fair(self):
        metrics = {"capRate": 6.5, "cashOnCash": 7.0, "dscr": 1.0, "irr": 5.0}
        assessment = assess_deal(metrics)

        assert assessment.overall == Level.GOOD
        assert assessment.recommendation == RECOMMENDATIONS[Level.GOOD]
        assert assessment.good_count == 2
        assert assessment.fair_count == 2

    def test_from_computed_metrics(self, sample_facts, now):
        metrics = compute_metrics(sample_facts, ["capRate", "cashOnCash", "dscr", "breakeven"], now=now)
        assessment = assess_deal(metrics, ["capRate", "cashOnCash", "dscr", "breakeven"])

        assert assessment.overall == Level.EXCELLENT
        assert assessment.active_metrics == 4
        for metric in ("cashOnCash", "dscr", "breakeven"):
            assert assessment.metric_scores[metric] == Level.EXCELLENT

    def test_selection_limits_scored_metrics(self):
        assessment = assess_deal({"capRate": 9.0, "dscr": 0.8}, ["capRate"])
        assert assessment.active_metrics == 1
        assert assessment.overall == Level.EXCELLENT

    def test_zero_values_are_not_scored(self):
        assessment = assess_deal({"irr": 0.0, "roi": 0})
        assert assessment.overall == Level.INSUFFICIENT
        assert assessment.recommendation == "Please enable metrics to get an assessment."

    def test_negative_values_are_scored_fair(self):
        assessment = assess_deal({"capRate": 7.0, "cashOnCash": -5.0, "dscr": 0.9})

        assert assessment.metric_scores == {"capRate": Level.GOOD, "cashOnCash": Level.FAIR, "dscr": Level.FAIR}
        assert assessment.active_metrics == 3
        assert assessment.overall == Level.FAIR

    def test_negative_cash_flow_counts_end_to_end(self, sample_facts, now):
        facts = dict(sample_facts, annualCashFlow=-20_000)
        metrics = compute_metrics(facts, ["capRate", "cashOnCash"], now=now)
        assessment = assess_deal(metrics, ["capRate", "cashOnCash"])

        assert assessment.active_metrics == 2
        assert assessment.metric_scores["cashOnCash"] == Level.FAIR

    def test_camel_case_output(self):
        data = assess_deal({"capRate": 6.5}).to_dict()
        assert data["overall"] == "Good"
        assert data["metricScores"] == {"capRate": "Good"}
