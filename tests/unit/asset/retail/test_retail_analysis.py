# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Unit tests for the retail scoring engine.
"""

from datetime import timedelta

import pytest

from dealscope.adapters import adapt_retail_tenants
from dealscope.asset.retail import (
    SalesRecord,
    analyze_co_tenancy,
    analyze_expense_recovery,
    analyze_percentage_rent,
    analyze_redevelopment_potential,
    analyze_sales_performance,
    analyze_trade_area,
)
from dealscope.asset.retail.records import (
    CenterState,
    RedevelopmentMarket,
    RetailExpense,
    TradeAreaRing,
    Zoning,
)
from dealscope.core.primitives import TimeSettings


def sales(tenant, year, amount, month=6):
    return SalesRecord(
        tenant=tenant,
        month=month,
        year=year,
        gross_sales=amount,
        returns=0,
        net_sales=amount,
        transactions=1000,
        average_ticket=amount / 1000,
    )


@pytest.fixture
def tenants(now, retail_tenant_dicts):
    return adapt_retail_tenants(retail_tenant_dicts, now)


class TestCoTenancy:
    def test_missing_co_tenant_exposes_eighty_percent(self, tenants, now):
        result = analyze_co_tenancy(tenants, current_occupancy=92, total_gla=100_000, now=now)
        risk = result.co_tenancy_risk
        assert risk.exposed_gla == pytest.approx(8_000)
        assert risk.exposed_rent == pytest.approx(400_000)
        assert risk.exposure_percentage == pytest.approx(8.0)
        assert risk.level == "Medium"
        (trigger,) = risk.triggers
        assert trigger.trigger_tenant == "Fresh Grocer"
        assert trigger.probability == 0.8

    def test_expiring_co_tenant(self, now, retail_tenant_dicts):
        grocer = {
            "name": "Fresh Grocer",
            "category": "Anchor",
            "squareFootage": 30_000,
            "leaseEndDate": (now + timedelta(days=200)).isoformat(),
        }
        tenants = adapt_retail_tenants(retail_tenant_dicts + [grocer], now)
        result = analyze_co_tenancy(tenants, current_occupancy=92, total_gla=200_000, now=now)
        assert result.co_tenancy_risk.triggers[0].probability == 0.5
        assert result.co_tenancy_risk.exposed_gla == pytest.approx(5_000)
        assert result.co_tenancy_risk.level == "Low"
        (anchor,) = result.anchor_dependency
        assert anchor.dependent_tenants == 1
        assert anchor.replacement_difficulty == "Medium"
        assert anchor.gla_percentage == 15.0

    def test_month_days_setting_moves_expiry_band(self, now, retail_tenant_dicts):
        grocer = {
            "name": "Fresh Grocer",
            "category": "Anchor",
            "squareFootage": 30_000,
            "leaseEndDate": (now + timedelta(days=200)).isoformat(),
        }
        tenants = adapt_retail_tenants(retail_tenant_dicts + [grocer], now)
        result = analyze_co_tenancy(
            tenants,
            current_occupancy=92,
            total_gla=200_000,
            now=now,
            time=TimeSettings(simple_month_days=10.0),
        )
        assert result.co_tenancy_risk.triggers[0].probability == 0.3
        assert result.co_tenancy_risk.exposed_gla == pytest.approx(3_000)

    def test_critical_mass(self, tenants, now):
        result = analyze_co_tenancy(tenants, current_occupancy=92, total_gla=100_000, now=now)
        assert result.critical_mass.minimum_occupancy == 75.0
        assert result.critical_mass.current_status == "Healthy"
        assert result.critical_mass.vulnerable_tenants == ["Fashion Outlet"]

    def test_no_clauses_is_low(self, now):
        tenants = adapt_retail_tenants([{"name": "Solo"}], now)
        result = analyze_co_tenancy(tenants, current_occupancy=60, total_gla=50_000, now=now)
        assert result.co_tenancy_risk.level == "Low"
        assert result.critical_mass.current_status == "Below Critical"


class TestSalesPerformance:
    @pytest.fixture
    def sales_data(self):
        return [
            sales("Fashion Outlet", 2025, 3_000_000),
            sales("Fashion Outlet", 2024, 2_500_000),
            sales("Corner Cafe", 2025, 800_000),
            sales("Corner Cafe", 2024, 800_000),
        ]

    def test_center_metrics(self, tenants, sales_data, now):
        result = analyze_sales_performance(sales_data, tenants, "Strip", now)
        metrics = result.center_metrics
        assert metrics.total_sales_psf == pytest.approx(3_800_000 / 12_000)
        assert metrics.sales_growth_yoy == pytest.approx(500_000 / 3_300_000 * 100)
        assert [item.tenant for item in metrics.top_performers] == ["Corner Cafe", "Fashion Outlet"]

    def test_tenant_health(self, tenants, sales_data, now):
        outlet, cafe = analyze_sales_performance(sales_data, tenants, "Strip", now).tenant_health
        assert outlet.health_score == 35.0
        assert outlet.risk_level == "Critical"
        assert "High occupancy cost" in outlet.indicators
        assert cafe.health_score == 65.0
        assert cafe.risk_level == "Medium"

    def test_seasonality_defaults_to_100(self, tenants, sales_data, now):
        result = analyze_sales_performance(sales_data, tenants, "Strip", now)
        assert len(result.seasonal_pattern) == 12
        assert result.seasonal_pattern[0].index == 100.0

    def test_no_sales_data(self, tenants, now):
        result = analyze_sales_performance([], tenants, "Unknown", now)
        assert result.center_metrics.total_sales_psf == 0.0
        assert all(item.health_score <= 50 for item in result.tenant_health)


class TestTradeArea:
    def test_primary_ring(self, tenants):
        ring = TradeAreaRing(
            radius=3, population=100_000, households=40_000, median_income=65_000, average_income=80_000
        )
        result = analyze_trade_area([ring], tenants, [], [])
        assert result.primary_trade_area.definition == "3-mile radius"
        assert result.primary_trade_area.spending_power == 1_400_000_000
        assert result.primary_trade_area.market_share == 100.0
        assert result.customer_profile.dominant_segment == "Middle Income"
        assert "Low traffic visibility" in result.competitive_position.vulnerabilities


class TestPercentageRent:
    def test_overage_rent(self, now):
        tenants = adapt_retail_tenants(
            [
                {
                    "name": "Shoe Hub",
                    "squareFootage": 5_000,
                    "baseRentPSF": 20,
                    "naturalBreakpoint": 1_000_000,
                    "percentageRentRate": 6,
                }
            ],
            now,
        )
        result = analyze_percentage_rent(tenants, [sales("Shoe Hub", 2025, 2_000_000)], now)
        (row,) = result.tenant_analysis
        assert row.percentage_rent == pytest.approx(60_000)
        assert row.overage_percentage == 50.0
        assert row.optimization == "Lower Breakpoint"
        assert result.current_performance.performing_tenants == 1
        assert result.current_performance.percentage_of_total == pytest.approx(37.5)


class TestExpenseRecovery:
    def test_caps_and_collections(self, now):
        tenants = adapt_retail_tenants(
            [
                {"name": "Full Share", "squareFootage": 10_000},
                {"name": "Capped", "squareFootage": 10_000, "camStructure": "Capped", "camCap": 3},
            ],
            now,
        )
        expenses = [
            RetailExpense(category="Cleaning", amount=50_000),
            RetailExpense(category="Taxes", amount=100_000),
            RetailExpense(category="Management", amount=20_000, recoverable=False),
        ]
        result = analyze_expense_recovery(expenses, tenants, total_gla=40_000)
        assert result.recoverable_expenses == 150_000
        assert result.actual_recovery == pytest.approx(64_125)
        assert result.recovery_rate == pytest.approx(42.75)
        reasons = {cause.reason: cause.amount for cause in result.leakage_causes}
        assert reasons["CAM caps below market"] == pytest.approx(7_500)
        assert reasons["Collection shortfalls"] == pytest.approx(3_375)
        assert [item.strategy for item in result.optimization_strategies] == [
            "Implement administrative fee",
            "Competitive bid controllable services",
            "Renegotiate CAM caps at renewal",
        ]


class TestRedevelopment:
    def test_mixed_use_is_highest_and_best(self):
        state = CenterState(
            gla=100_000, occupancy=90, avg_rent=20, sales_psf=250, parking_spaces=500, land_area_acres=10
        )
        zoning = Zoning(max_far=0.5, allowed_uses=["Retail", "Residential"])
        result = analyze_redevelopment_potential(state, RedevelopmentMarket(), zoning)
        assert result.highest_best_use.use == "Mixed-Use Development"
        assert len(result.redevelopment_options) == 3
        assert result.densification_potential.pad_sites == 4
        assert result.densification_potential.mixed_use_option is True
        (conversion,) = result.conversion_analysis
        assert conversion.feasibility == "High"

    def test_no_allowed_retail_use(self):
        state = CenterState(
            gla=100_000, occupancy=90, avg_rent=20, sales_psf=350, parking_spaces=500, land_area_acres=10
        )
        result = analyze_redevelopment_potential(state, RedevelopmentMarket(), Zoning(max_far=0.2, allowed_uses=[]))
        assert result.highest_best_use is None
