# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Unit tests for the core metric calculators.

Covers the Result-returning formulas used by the batch engine, the strict
``MetricCalculators`` facade, and the typed property metrics.
"""

from datetime import timedelta

import pytest

from dealscope.adapters import adapt_office_tenants, adapt_retail_tenants
from dealscope.core.exceptions import InvalidArgumentError
from dealscope.core.primitives import ReturnSettings
from dealscope.metrics.calculators import (
    MetricCalculators,
    calculate_breakeven_occupancy,
    calculate_cap_rate,
    calculate_cash_on_cash,
    calculate_dscr,
    calculate_effective_rent_psf,
    calculate_egi,
    calculate_grm,
    calculate_irr,
    calculate_ltv,
    calculate_occupancy_cost_ratio,
    calculate_price_per_sf,
    calculate_roi,
    clear_height_analysis,
    revenue_per_unit,
    sales_per_sf,
    simple_walt,
)


class TestCapRate:
    """Cap rate = NOI / price x 100."""

    def test_formula(self):
        assert calculate_cap_rate(400_000, 5_000_000).value == pytest.approx(8.0)

    def test_monotone_in_noi_and_price(self):
        low = calculate_cap_rate(300_000, 5_000_000).value
        high = calculate_cap_rate(400_000, 5_000_000).value
        cheaper = calculate_cap_rate(400_000, 4_000_000).value
        assert high > low
        assert cheaper > high

    @pytest.mark.parametrize("price", [0, -1, None])
    def test_non_positive_price_fails(self, price):
        result = calculate_cap_rate(400_000, price)
        assert not result.is_ok
        assert result.error == "Purchase price must be greater than 0"


class TestSimpleRatios:
    """Ratios with a single positive denominator."""

    def test_cash_on_cash(self):
        assert calculate_cash_on_cash(160_000, 1_600_000).value == pytest.approx(10.0)

    def test_ltv(self):
        assert calculate_ltv(3_500_000, 5_000_000).value == pytest.approx(70.0)

    def test_grm(self):
        assert calculate_grm(5_000_000, 500_000).value == pytest.approx(10.0)

    def test_price_per_sf(self):
        assert calculate_price_per_sf(5_000_000, 50_000).value == pytest.approx(100.0)

    def test_egi(self):
        assert calculate_egi(500_000, 95).value == pytest.approx(475_000)

    def test_egi_rejects_occupancy_above_100(self):
        assert calculate_egi(500_000, 120).error == "Occupancy rate must be between 0 and 100"

    def test_effective_rent_psf(self):
        assert calculate_effective_rent_psf(32, 150_000, 50_000).value == pytest.approx(29.0)

    def test_occupancy_cost_ratio(self):
        assert calculate_occupancy_cost_ratio(150_000, 500_000).value == pytest.approx(30.0)

    def test_zero_investment_fails(self):
        assert calculate_cash_on_cash(160_000, 0).error == "Total investment must be greater than 0"


class TestDebtMetrics:
    """DSCR and breakeven occupancy use the amortized annual debt service."""

    def test_dscr(self):
        result = calculate_dscr(400_000, 3_500_000, 5.5, 30)
        assert result.value == pytest.approx(400_000 / 238_471.38, rel=1e-5)

    def test_breakeven_with_debt_service(self):
        result = calculate_breakeven_occupancy(150_000, 500_000, 3_500_000, 5.5, 30)
        assert result.value == pytest.approx(77.69, abs=0.01)

    def test_breakeven_without_loan_is_expense_ratio(self):
        assert calculate_breakeven_occupancy(150_000, 500_000).value == pytest.approx(30.0)

    def test_dscr_reports_first_bad_loan_input(self):
        assert calculate_dscr(400_000, 3_500_000, 0, 30).error == "Interest rate must be between 0 and 100"
        assert calculate_dscr(400_000, 3_500_000, 5.5, 0).error == "Loan term must be greater than 0"


class TestReturns:
    """IRR and ROI approximations."""

    def test_irr_with_appreciation(self):
        result = calculate_irr(200_000, 1_000_000, 100_000, 150_000, holding_period=5, exit_cap_rate=8)
        # (200k x 5 + 50k / 0.08) / 1M = 1.625 over 5 years
        assert result.value == pytest.approx(10.197, abs=0.01)

    def test_irr_is_clamped_at_floor(self):
        result = calculate_irr(160_000, 1_500_000, 400_000, 450_000)
        assert result.value == 0.0

    def test_irr_cap_from_settings(self):
        settings = ReturnSettings(irr_cap=20.0)
        result = calculate_irr(900_000, 1_000_000, 100_000, 200_000, holding_period=1, settings=settings)
        assert result.value == 20.0

    def test_roi_without_growth_is_cash_yield(self):
        assert calculate_roi(1_000_000, annual_cash_flow=80_000).value == pytest.approx(8.0)

    def test_roi_with_growth_and_holding_period(self):
        result = calculate_roi(
            1_000_000,
            current_noi=100_000,
            projected_noi=150_000,
            annual_cash_flow=50_000,
            holding_period=5,
            exit_cap_rate=8,
        )
        # (50k x 5 + 625k) / 1M
        assert result.value == pytest.approx(87.5)

    def test_roi_without_holding_period_is_annualized(self):
        result = calculate_roi(
            1_500_000, current_noi=400_000, projected_noi=450_000, annual_cash_flow=160_000
        )
        # (160k x 5 + 625k) / 1.5M x 100 / 5
        assert result.value == pytest.approx(19.0)

    def test_roi_is_floored_at_zero(self):
        result = calculate_roi(
            1_000_000, current_noi=200_000, projected_noi=100_000, annual_cash_flow=0, holding_period=5
        )
        assert result.value == 0.0

    def test_roi_needs_cash_flow_or_growth(self):
        assert not calculate_roi(1_000_000).is_ok


class TestMetricCalculators:
    """Strict mode raises InvalidArgumentError instead of returning errors."""

    def test_returns_plain_values(self):
        assert MetricCalculators.cap_rate(400_000, 5_000_000) == pytest.approx(8.0)
        assert MetricCalculators.dscr(400_000, 3_500_000, 5.5, 30) == pytest.approx(1.6774, abs=1e-4)

    def test_raises_on_bad_input(self):
        with pytest.raises(InvalidArgumentError, match="Purchase price must be greater than 0"):
            MetricCalculators.cap_rate(400_000, 0)

    def test_error_is_a_value_error(self):
        with pytest.raises(ValueError):
            MetricCalculators.price_per_unit(1_000_000, 0)

    def test_breakeven_requires_loan_terms(self):
        with pytest.raises(InvalidArgumentError, match="Loan amount"):
            MetricCalculators.breakeven_occupancy(150_000, 500_000, 0, 5.5, 30)


class TestTypedMetrics:
    """WALT, sales per SF, clear height and revenue per unit."""

    def test_simple_walt(self, now, office_tenant_dicts):
        tenants = adapt_office_tenants(office_tenant_dicts, now)
        assert simple_walt(tenants, now) == pytest.approx(2.8)

    def test_simple_walt_empty(self, now):
        assert simple_walt([], now) is None

    def test_expired_leases_count_as_zero_months(self, now, office_tenant_dicts):
        expired = dict(office_tenant_dicts[0], expirationDate=(now - timedelta(days=90)).isoformat())
        tenants = adapt_office_tenants([expired], now)
        assert simple_walt(tenants, now) == 0.0

    def test_sales_per_sf(self, now, retail_tenant_dicts):
        result = sales_per_sf(adapt_retail_tenants(retail_tenant_dicts, now))
        assert [entry.sales_per_sf for entry in result.by_tenant] == [300.0, 400.0]
        assert result.average == pytest.approx(350.0)

    @pytest.mark.parametrize(
        "height, category",
        [
            (40, "Modern Spec (36ft+)"),
            (30, "Standard Modern (28-35ft)"),
            (25, "Older Generation (24-27ft)"),
            (20, "Functionally Obsolete (<24ft)"),
        ],
    )
    def test_clear_height_category(self, height, category):
        result = clear_height_analysis(100_000, height, 10_000_000)
        assert result.clear_height_category == category
        assert result.price_per_sf == 100.0

    def test_revenue_per_unit_market_comparison(self):
        result = revenue_per_unit(100, 180_000, market_average_rent=1_500)
        assert result.revenue_per_unit == 1_800.0
        assert result.annualized_revenue == 2_160_000
        assert result.market_comparison == "20.0% above market"

    def test_revenue_per_unit_at_market(self):
        assert revenue_per_unit(100, 150_000, 1_480).market_comparison == "At market rate"
