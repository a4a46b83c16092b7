# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Unit tests for the gated batch engine.
"""

import copy
import logging

import pytest

from dealscope.core.primitives import EngineSettings, MetricEnum, ReturnSettings
from dealscope.metrics import MetricSelection, compute_metrics
from dealscope.metrics.engine import PACKAGE_ERROR
from dealscope.packages import PACKAGE_REGISTRY, PackageId, run_package


class TestCoreMetrics:
    """Selected core metrics are computed or explained."""

    def test_full_sample(self, sample_facts, now):
        metrics = compute_metrics(sample_facts, MetricSelection.all_core(), now=now)

        assert metrics.cap_rate == pytest.approx(8.0)
        assert metrics.cash_on_cash == pytest.approx(10.6667, abs=1e-4)
        assert metrics.dscr == pytest.approx(1.6774, abs=1e-4)
        assert metrics.ltv == pytest.approx(70.0)
        assert metrics.grm == pytest.approx(10.0)
        assert metrics.price_per_sf == pytest.approx(100.0)
        assert metrics.price_per_unit == pytest.approx(50_000)
        assert metrics.egi == pytest.approx(475_000)
        assert metrics.breakeven == pytest.approx(77.69, abs=0.01)
        assert metrics.irr == 0.0
        assert metrics.roi == pytest.approx(19.0)
        assert metrics.effective_rent_psf == pytest.approx(29.0)
        assert metrics.occupancy_cost_ratio == pytest.approx(30.0)
        assert metrics.validation_errors == {}

    def test_unselected_metrics_stay_unset(self, sample_facts, now):
        metrics = compute_metrics(sample_facts, ["capRate"], now=now)
        assert metrics.cap_rate == pytest.approx(8.0)
        assert metrics.dscr is None
        assert metrics.to_dict() == {"capRate": pytest.approx(8.0)}

    def test_gated_metric_gets_explanation(self, now):
        metrics = compute_metrics({"currentNOI": 100_000}, {"capRate": True, "dscr": True}, now=now)

        assert metrics.cap_rate is None
        assert metrics.validation_errors == {
            "capRate": "Cap Rate calculation requires: Purchase Price",
            "dscr": "DSCR calculation requires: Loan Amount, Interest Rate, Loan Term",
        }

    def test_calculator_error_is_recorded(self, now):
        metrics = compute_metrics({"grossIncome": 500_000, "occupancyRate": 140}, ["egi"], now=now)
        assert metrics.egi is None
        assert metrics.validation_errors["egi"] == "Occupancy rate must be between 0 and 100"

    def test_one_failure_does_not_affect_others(self, sample_facts, now):
        facts = dict(sample_facts, occupancyRate=140)
        metrics = compute_metrics(facts, MetricSelection.all_core(), now=now)
        assert list(metrics.validation_errors) == ["egi"]
        assert metrics.cap_rate == pytest.approx(8.0)

    def test_none_facts_are_empty(self, now):
        metrics = compute_metrics(None, ["capRate"], now=now)
        assert "capRate" in metrics.validation_errors

    def test_false_flags_are_ignored(self, sample_facts, now):
        metrics = compute_metrics(sample_facts, {"capRate": False, "ltv": True}, now=now)
        assert metrics.cap_rate is None
        assert metrics.ltv == pytest.approx(70.0)

    def test_settings_flow_to_return_metrics(self, now):
        facts = {
            "annualCashFlow": 900_000,
            "totalInvestment": 1_000_000,
            "currentNOI": 100_000,
            "projectedNOI": 200_000,
            "holdingPeriod": 1,
        }
        settings = EngineSettings(returns=ReturnSettings(irr_cap=25.0))
        metrics = compute_metrics(facts, ["irr"], now=now, settings=settings)
        assert metrics.irr == 25.0


class TestTypedMetrics:
    """Property-specific metrics computed when their inputs are present."""

    def test_walt(self, office_tenant_dicts, now):
        metrics = compute_metrics({"officeTenants": office_tenant_dicts}, ["walt", "simpleWalt"], now=now)
        assert metrics.walt == pytest.approx(2.8)
        assert metrics.simple_walt == pytest.approx(2.8)

    def test_sales_per_sf(self, retail_tenant_dicts, now):
        metrics = compute_metrics({"retailTenants": retail_tenant_dicts}, [MetricEnum.SALES_PER_SF], now=now)
        assert metrics.sales_per_sf.average == pytest.approx(350.0)

    def test_industrial_metrics(self, now):
        facts = {"squareFootage": 200_000, "clearHeight": 36, "purchasePrice": 24_000_000}
        metrics = compute_metrics(facts, ["industrialMetrics"], now=now)
        assert metrics.industrial_metrics.price_per_sf == 120.0
        assert metrics.industrial_metrics.clear_height_category == "Modern Spec (36ft+)"

    def test_revenue_per_unit_prefers_total_units(self, now):
        facts = {"totalUnits": 100, "numberOfUnits": 50, "monthlyRentalIncome": 150_000}
        metrics = compute_metrics(facts, ["revenuePerUnit"], now=now)
        assert metrics.revenue_per_unit.revenue_per_unit == 1_500.0

    def test_missing_inputs_are_skipped_silently(self, now):
        metrics = compute_metrics({}, ["walt", "salesPerSF"], now=now)
        assert metrics.walt is None
        assert metrics.validation_errors == {}


class TestAssetAnalysis:
    """Analysis flags run the matching asset engines."""

    def test_office_flags(self, office_tenant_dicts, now):
        facts = {
            "propertyType": "office",
            "rentableSquareFeet": 32_000,
            "numberOfTenants": 2,
            "averageRentPSF": 31.25,
            "officeTenants": office_tenant_dicts,
        }
        metrics = compute_metrics(facts, ["tenantFinancialHealth", "leaseValuation"], now=now)

        analysis = metrics.asset_analysis
        assert analysis.data_validation.is_valid
        assert "analyzeTenantFinancialHealth" in analysis.available_functions
        assert set(analysis.results) == {"tenantFinancialHealth", "leaseEconomics"}

    def test_invalid_data_skips_engines(self, now):
        metrics = compute_metrics({"propertyType": "industrial"}, ["functionalScore"], now=now)
        analysis = metrics.asset_analysis
        assert not analysis.data_validation.is_valid
        assert analysis.results == {}

    def test_flags_for_other_types_are_ignored(self, now):
        metrics = compute_metrics({"propertyType": "retail"}, ["functionalScore"], now=now)
        assert metrics.asset_analysis is None


class TestPackages:
    """Package runs and failure isolation."""

    def test_package_from_argument(self, sample_facts, now):
        metrics = compute_metrics(sample_facts, [], package_id="office-quick-valuation", now=now)
        assert metrics.package.package_id == "office-quick-valuation"
        assert metrics.package.results["capRate"] == pytest.approx(8.0)

    def test_package_from_facts(self, sample_facts, now):
        facts = dict(sample_facts, selectedPackageId="office-quick-returns")
        metrics = compute_metrics(facts, [], now=now)
        assert metrics.package.package_id == "office-quick-returns"

    def test_unknown_package_is_none(self, sample_facts, now, caplog):
        with caplog.at_level(logging.WARNING):
            metrics = compute_metrics(sample_facts, [], package_id="office-moonshot", now=now)
        assert metrics.package is None
        assert metrics.package_error is None
        assert "office-moonshot" in caplog.text

    def test_handler_exception_becomes_package_error(self, sample_facts, now, monkeypatch):
        def explode(facts, now):
            raise ZeroDivisionError("boom")

        monkeypatch.setitem(PACKAGE_REGISTRY, PackageId.OFFICE_QUICK_VALUATION, explode)
        metrics = compute_metrics(sample_facts, ["capRate"], package_id="office-quick-valuation", now=now)

        assert metrics.package is None
        assert metrics.package_error == PACKAGE_ERROR
        assert metrics.cap_rate == pytest.approx(8.0)


class TestDeterminism:
    """Fixed facts and a fixed clock give identical output."""

    def test_idempotent_json(self, sample_facts, office_tenant_dicts, now):
        facts = dict(sample_facts, officeTenants=office_tenant_dicts, selectedPackageId="office-walt-enhanced")
        selection = dict.fromkeys([metric.value for metric in MetricEnum], True)

        first = compute_metrics(facts, selection, now=now).model_dump_json()
        second = compute_metrics(facts, selection, now=now).model_dump_json()
        assert first == second


class TestInputsUnchanged:
    """Calls read their arguments and never write to them."""

    def test_compute_metrics(self, sample_facts, office_tenant_dicts, now):
        facts = dict(sample_facts, officeTenants=office_tenant_dicts, selectedPackageId="office-walt-enhanced")
        selection = dict.fromkeys([metric.value for metric in MetricEnum], True)
        facts_before = copy.deepcopy(facts)
        selection_before = dict(selection)

        compute_metrics(facts, selection, now=now)

        assert facts == facts_before
        assert selection == selection_before

    @pytest.mark.parametrize(
        "package_id",
        ["office-lease-expiration", "retail-co-tenancy", "multifamily-value-add", "mixeduse-performance"],
    )
    def test_run_package(self, sample_facts, office_tenant_dicts, retail_tenant_dicts, package_id, now):
        facts = dict(
            sample_facts,
            officeTenants=office_tenant_dicts,
            retailTenants=retail_tenant_dicts,
            averageRent=1_500,
            renovationBudget=300_000,
            totalSquareFootage=100_000,
        )
        before = copy.deepcopy(facts)
        run_package(package_id, facts, now)
        assert facts == before
