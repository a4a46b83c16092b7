# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Unit tests for input validation, result sanity checks and safe calculation.
"""

import pytest

from dealscope.metrics import MetricCalculators, compute_metrics
from dealscope.metrics.checks import (
    batch_validate_metrics,
    property_data_warnings,
    safe_calculate,
    validate_calculation_results,
    validate_metric_calculation,
    validate_property_data,
)


class TestValidatePropertyData:
    """Range checks on supplied inputs only."""

    def test_clean_sample(self, sample_facts):
        assert validate_property_data(sample_facts) == []

    def test_empty_facts(self):
        assert validate_property_data({}) == []
        assert validate_property_data({}, require_property_type=True) == ["Property type is required"]

    def test_collects_every_problem(self):
        errors = validate_property_data(
            {
                "purchasePrice": 1_000_000,
                "currentNOI": -1,
                "interestRate": 120,
                "occupancyRate": -5,
                "loanAmount": 2_000_000,
                "totalInvestment": 50_000,
            }
        )
        assert errors == [
            "Current NOI cannot be negative",
            "Interest rate must be between 0 and 100",
            "Occupancy rate must be between 0 and 100",
            "Loan amount cannot exceed purchase price",
            "Total investment seems too low (less than 10% of purchase price)",
        ]

    def test_warnings(self):
        warnings = property_data_warnings(
            {"currentNOI": 10_000, "purchasePrice": 1_000_000, "loanAmount": 950_000}
        )
        assert warnings == ["Cap rate is unusually low (below 2%)", "LTV is very high (above 90%)"]


class TestValidateCalculationResults:
    """Sanity checks on computed values."""

    def test_sample_results_are_valid(self, sample_facts, now):
        metrics = compute_metrics(sample_facts, ["capRate", "dscr", "ltv", "grm", "pricePerSF"], now=now)
        report = validate_calculation_results(metrics)
        assert report.is_valid
        assert report.warnings == []

    def test_mapping_input(self):
        report = validate_calculation_results({"capRate": 60, "dscr": 0.9, "ltv": 95, "grm": 3})
        assert not report.is_valid
        assert report.errors == ["Cap Rate is unrealistically high (>50%)"]
        assert report.warnings == [
            "DSCR is below 1.0, indicating potential cash flow issues",
            "LTV is very high (>90%)",
            "GRM is unusually low (<5)",
        ]


class TestSafeCalculate:
    """Strict calculators wrapped to return a default."""

    def test_returns_value(self):
        assert safe_calculate(MetricCalculators.cap_rate, 100_000, 1_000_000) == pytest.approx(10.0)

    def test_returns_default_on_error(self):
        assert safe_calculate(MetricCalculators.cap_rate, 100_000, 0, default=0.0) == 0.0

    def test_non_finite_result(self):
        assert safe_calculate(lambda: float("inf"), default=-1) == -1


class TestBatchValidateMetrics:
    def test_reports_keyed_by_metric(self):
        reports = batch_validate_metrics(["capRate", "ltv"], {"currentNOI": 10_000, "purchasePrice": 1_000_000})

        assert reports["capRate"].is_valid
        assert reports["capRate"].warnings == ["Cap rate is unusually low (below 2%)"]
        assert reports["ltv"].errors == ["Loan Amount is required for LTV calculation"]

    def test_unknown_metric_is_reported(self):
        reports = batch_validate_metrics(["capRate", "grossYield"], {"currentNOI": 80_000, "purchasePrice": 1_000_000})

        assert reports["capRate"].is_valid
        assert not reports["grossYield"].is_valid
        assert reports["grossYield"].errors == ["Unknown metric: grossYield"]

    def test_single_unknown_metric(self):
        report = validate_metric_calculation("grossYield", {})
        assert report.errors == ["Unknown metric: grossYield"]
        assert report.warnings == []
