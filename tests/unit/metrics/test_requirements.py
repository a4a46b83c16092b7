# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Unit tests for metric data requirements and explanations.
"""

import pytest

from dealscope.core.primitives import MetricEnum
from dealscope.metrics.requirements import (
    can_compute,
    explain_missing,
    missing_fields,
    validate_asset_data_requirements,
    validate_metric_requirements,
)


class TestCanCompute:
    """Gate decisions per metric."""

    def test_all_core_metrics_computable_from_sample(self, sample_facts):
        for metric in MetricEnum.core():
            assert can_compute(metric, sample_facts), metric

    def test_zero_counts_as_missing(self):
        assert not can_compute("capRate", {"currentNOI": 0, "purchasePrice": 1_000_000})

    def test_string_numbers_are_accepted(self):
        assert can_compute("capRate", {"currentNOI": "100,000", "purchasePrice": "$1,000,000"})

    def test_area_alternatives(self):
        assert can_compute("pricePerSF", {"purchasePrice": 1, "grossLeasableArea": 10_000})
        assert can_compute("pricePerSF", {"purchasePrice": 1, "totalSF": 10_000})

    def test_roi_alternative_sets(self):
        assert can_compute("roi", {"totalInvestment": 1, "annualCashFlow": 1})
        assert can_compute("roi", {"totalInvestment": 1, "currentNOI": 1, "projectedNOI": 2})
        assert not can_compute("roi", {"totalInvestment": 1, "currentNOI": 1})

    def test_unknown_metric(self):
        assert not can_compute("sharpeRatio", {})

    def test_walt_needs_office_tenants(self, office_tenant_dicts):
        assert can_compute("walt", {"officeTenants": office_tenant_dicts})
        assert can_compute("walt", {"officeTenants": {"tenants": office_tenant_dicts}})
        assert not can_compute("walt", {"officeTenants": []})


class TestExplainMissing:
    """Human-readable explanations of gated metrics."""

    def test_dscr_on_empty_facts(self):
        message = explain_missing("dscr", {})
        assert message == "DSCR calculation requires: Current NOI, Loan Amount, Interest Rate, Loan Term"

    def test_names_only_missing_fields(self):
        message = explain_missing(MetricEnum.CAP_RATE, {"currentNOI": 100_000})
        assert message == "Cap Rate calculation requires: Purchase Price"

    def test_empty_when_computable(self, sample_facts):
        assert explain_missing("capRate", sample_facts) == ""
        assert missing_fields("capRate", sample_facts) == []

    def test_none_facts(self):
        assert "Purchase Price" in explain_missing("ltv", None)


class TestValidateMetricRequirements:
    """Range checks on the inputs of a single metric."""

    def test_negative_noi(self):
        errors = validate_metric_requirements("capRate", {"currentNOI": -5, "purchasePrice": 100})
        assert "Current NOI must be positive" in errors

    def test_interest_rate_range(self):
        facts = {"currentNOI": 1, "loanAmount": 1, "interestRate": 150, "loanTerm": 30}
        assert "Interest Rate must be between 0 and 100" in validate_metric_requirements("dscr", facts)

    def test_loan_above_price(self):
        errors = validate_metric_requirements("ltv", {"loanAmount": 2_000_000, "purchasePrice": 1_000_000})
        assert errors == ["Loan Amount cannot exceed Purchase Price"]


class TestAssetDataRequirements:
    """Minimum data for asset-level analysis per property type."""

    def test_office_missing_fields(self):
        check = validate_asset_data_requirements({"rentableSquareFeet": 50_000}, "office")
        assert not check.is_valid
        assert check.missing_fields == ["numberOfTenants", "averageRentPSF"]
        assert "Add weightedAverageLeaseTerm for lease analysis" in check.recommendations

    def test_industrial_valid(self):
        facts = {"clearHeight": 32, "numberOfDockDoors": 20, "powerCapacity": 2_000, "distanceToHighway": 1}
        check = validate_asset_data_requirements(facts, "industrial")
        assert check.is_valid
        assert check.recommendations == []

    def test_mixed_use_always_recommends_component_data(self):
        check = validate_asset_data_requirements(
            {"totalSquareFootage": 200_000, "propertyType": "mixed-use"}, "mixed-use"
        )
        assert check.is_valid
        assert check.recommendations == ["Consider adding component-specific data for detailed analysis"]

    @pytest.mark.parametrize("property_type", [None, "castle"])
    def test_unknown_property_type(self, property_type):
        check = validate_asset_data_requirements({}, property_type)
        assert not check.is_valid
        assert check.missing_fields == ["propertyType"]
