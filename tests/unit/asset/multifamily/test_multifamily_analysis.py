# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Unit tests for the multifamily engines.

The rent roll below has four units, one vacant, over 4,000 SF with
$5,200/month of scheduled rent on occupied units.
"""

from datetime import datetime

import pytest

from dealscope.asset.multifamily import (
    ApartmentProperty,
    ApartmentUnit,
    analyze_market_position,
    analyze_operating_performance,
    analyze_revenue_performance,
    analyze_value_add_potential,
    calculate_amenity_score,
)
from dealscope.asset.multifamily.records import (
    Concession,
    MaintenanceEntry,
    MarketComp,
    OperatingExpenses,
    OtherIncome,
    PropertyAmenities,
    RenovationCosts,
    StaffRole,
    Submarket,
)
from dealscope.core.primitives import UnitTypeEnum


@pytest.fixture
def units():
    return [
        ApartmentUnit(
            unit_number="101",
            unit_type=UnitTypeEnum.ONE_BR,
            square_footage=800,
            current_rent=1_400,
            market_rent=1_500,
            concession=Concession(amount=600, months=12),
            other_income=OtherIncome(parking=50, pet=25),
        ),
        ApartmentUnit(
            unit_number="102",
            unit_type=UnitTypeEnum.TWO_BR,
            square_footage=1_000,
            current_rent=1_800,
            market_rent=1_800,
            renovated=True,
        ),
        ApartmentUnit(
            unit_number="103",
            unit_type=UnitTypeEnum.TWO_BR,
            square_footage=1_000,
            current_rent=1_700,
            market_rent=1_900,
            occupied=False,
        ),
        ApartmentUnit(
            unit_number="104",
            unit_type=UnitTypeEnum.FOUR_BR,
            square_footage=1_200,
            current_rent=2_000,
            market_rent=2_100,
        ),
    ]


@pytest.fixture
def comps():
    return [
        MarketComp(
            property_name="Maple Court",
            occupancy=94,
            avg_rent_psf=1.2,
            amenity_score=80,
            concession_offered=True,
        ),
        MarketComp(
            property_name="Riverside Lofts",
            occupancy=96,
            avg_rent_psf=1.6,
            amenity_score=60,
            renovated=True,
        ),
    ]


class TestAmenityScore:
    def test_default_amenities_earn_only_parking_points(self):
        assert calculate_amenity_score(PropertyAmenities()) == pytest.approx(3 / 92 * 100)

    def test_everything_scores_100(self):
        flags = {name: True for name in PropertyAmenities.model_fields if name != "parking_ratio"}
        amenities = PropertyAmenities(**flags, parking_ratio=1.5)
        assert calculate_amenity_score(amenities) == pytest.approx(100.0)

    def test_low_parking_earns_nothing(self):
        amenities = PropertyAmenities(pool=True, fitness=True, parking_ratio=0.5)
        assert calculate_amenity_score(amenities) == pytest.approx(16 / 92 * 100)


class TestRevenuePerformance:
    def test_revenue_build_up(self, units, comps):
        metrics = analyze_revenue_performance(units, comps).revenue_metrics
        assert metrics.gross_potential_rent == 87_600
        assert metrics.actual_rent == 62_400
        assert metrics.loss_to_lease == 2_400
        assert metrics.vacancy == 22_800
        assert metrics.concessions == pytest.approx(600)
        assert metrics.effective_rent == pytest.approx(61_800)
        assert metrics.other_income == 900
        assert metrics.total_revenue == pytest.approx(62_700)

    def test_unit_performance(self, units, comps):
        performance = analyze_revenue_performance(units, comps).unit_performance
        assert performance.rev_pau == pytest.approx(1_306.25)
        assert performance.rev_p_occ_u == pytest.approx(1_741.67)
        assert performance.avg_rent_psf == pytest.approx(1.3)
        assert performance.occupancy == 75.0
        assert performance.economic_occupancy == pytest.approx(70.5)

    def test_rev_pau_serializes_with_legacy_alias(self, units, comps):
        payload = analyze_revenue_performance(units, comps).to_dict()
        assert "revPAU" in payload["unitPerformance"]

    def test_unit_mix_folds_four_bedrooms_into_three(self, units, comps):
        mix = analyze_revenue_performance(units, comps).unit_mix_analysis
        assert [row.unit_type for row in mix] == ["1BR", "2BR", "3BR"]
        two_bedroom = mix[1]
        assert two_bedroom.count == 2
        assert two_bedroom.occupancy == 50.0
        assert two_bedroom.avg_market_rent == 1_850
        assert two_bedroom.revenue_psf == pytest.approx(10.8)
        assert [row.percent_of_revenue for row in mix] == pytest.approx([26.9, 34.6, 38.5])

    def test_rent_growth_and_concessions(self, units, comps):
        result = analyze_revenue_performance(units, comps)
        growth = result.rent_growth_analysis
        assert growth.blended_growth == pytest.approx(3.95, abs=0.06)
        assert growth.market_rent_growth == pytest.approx(-7.1)
        concessions = result.concession_analysis
        assert concessions.units_with_concessions == 1
        assert concessions.avg_concession_value == 600
        # One in three occupied units against half of the comps
        assert concessions.concession_trend == "Decreasing"

    def test_other_income_rows(self, units, comps):
        rows = {row.category: row for row in analyze_revenue_performance(units, comps).other_income_analysis}
        assert list(rows) == ["Parking", "Storage", "Pet", "Utilities"]
        assert rows["Parking"].monthly_amount == 50
        assert rows["Parking"].per_unit_amount == pytest.approx(16.67)
        assert rows["Parking"].growth_potential == pytest.approx(33.3)
        assert rows["Storage"].growth_potential == 50.0

    def test_empty_rent_roll(self):
        result = analyze_revenue_performance([], [])
        assert result.revenue_metrics.total_revenue == 0
        assert result.unit_performance.occupancy == 0
        assert result.unit_mix_analysis == []


class TestOperatingPerformance:
    @pytest.fixture
    def expenses(self):
        return OperatingExpenses(taxes=8_000, insurance=2_000, payroll=6_000, maintenance=4_000)

    @pytest.fixture
    def maintenance_log(self):
        return [
            MaintenanceEntry(date=datetime(2025, 2, 1), type="Routine", cost=600),
            MaintenanceEntry(date=datetime(2025, 3, 1), type="Emergency", cost=200),
            MaintenanceEntry(date=datetime(2025, 4, 1), type="Turnover", cost=1_200),
            MaintenanceEntry(date=datetime(2025, 5, 1), type="Turnover", cost=800),
            MaintenanceEntry(date=datetime(2024, 12, 1), type="Routine", cost=5_000),
        ]

    @pytest.fixture
    def staffing(self):
        return [
            StaffRole(role="Manager", avg_salary=60_000, turnover_rate=0.1),
            StaffRole(role="Technician", avg_salary=40_000, turnover_rate=0.3),
        ]

    def test_expense_metrics(self, units, expenses, now):
        metrics = analyze_operating_performance(units, expenses, [], [], now).expense_metrics
        assert metrics.total_expenses == 20_000
        assert metrics.expense_ratio == pytest.approx(32.1)
        assert metrics.per_unit_expenses == 5_000
        assert metrics.expense_psf == pytest.approx(5.0)
        assert metrics.controllable_ratio == pytest.approx(50.0)

    def test_breakdown_sorted_by_amount(self, units, expenses, now):
        breakdown = analyze_operating_performance(units, expenses, [], [], now).expense_breakdown
        assert [line.category for line in breakdown[:4]] == ["Taxes", "Payroll", "Maintenance", "Insurance"]
        taxes = breakdown[0]
        assert taxes.percent_of_total == 40.0
        assert taxes.benchmark == 15.0
        assert taxes.variance == pytest.approx(166.7)

    def test_maintenance_counts_current_year_only(self, units, expenses, maintenance_log, now):
        maintenance = analyze_operating_performance(units, expenses, maintenance_log, [], now).maintenance_analysis
        assert maintenance.total_maintenance_cost == 2_800
        assert maintenance.routine_percentage == pytest.approx(21.4)
        assert maintenance.emergency_percentage == pytest.approx(7.1)
        assert maintenance.turnover_cost == 2_000
        assert maintenance.avg_turnover_cost == 1_000
        assert maintenance.maintenance_per_unit == 700

    def test_staffing(self, units, expenses, staffing, now):
        staffing_result = analyze_operating_performance(units, expenses, [], staffing, now).staffing_efficiency
        assert staffing_result.units_per_employee == 2.0
        assert staffing_result.payroll_per_unit == 25_000
        assert staffing_result.staff_turnover == pytest.approx(0.2)

    def test_kpis(self, units, expenses, now):
        kpis = {kpi.metric: kpi.status for kpi in analyze_operating_performance(units, expenses, [], [], now).operational_kpis}
        assert kpis == {"Occupancy Rate": "Critical", "Rent Growth": "On Track", "Expense Ratio": "On Track"}

    def test_high_expense_ratio_needs_attention(self, units, now):
        expenses = OperatingExpenses(taxes=24_000)
        kpis = analyze_operating_performance(units, expenses, [], [], now).operational_kpis
        assert kpis[-1].value == pytest.approx(38.5)
        assert kpis[-1].status == "Needs Attention"


class TestMarketPosition:
    @pytest.fixture
    def subject(self, units):
        return ApartmentProperty(units=units, year_built=2000)

    def test_competitive_position(self, subject, comps, now):
        position = analyze_market_position(subject, comps, Submarket(), now).competitive_position
        assert position.market_rank == 3
        assert position.rent_premium_discount == pytest.approx(23.81)
        assert position.occupancy_outperformance == pytest.approx(-20.0)
        assert position.amenity_score == pytest.approx(3.3)
        assert position.overall_rating == "Laggard"

    def test_swot(self, subject, comps, now):
        swot = analyze_market_position(subject, comps, Submarket(), now).strengths_weaknesses
        assert swot.strengths == ["Premium rent achievement"]
        assert swot.weaknesses == ["Below-market occupancy", "Dated property", "Inferior amenity package"]
        assert swot.opportunities == [
            "Unit renovation program",
            "Smart home technology adoption",
            "Package management solution",
        ]
        assert swot.threats == []

    def test_supply_and_affordability_threats(self, subject, comps, now):
        submarket = Submarket(new_supply_units=5_000, rent_to_income_ratio=0.4)
        threats = analyze_market_position(subject, comps, submarket, now).strengths_weaknesses.threats
        assert threats == ["Significant new supply", "Affordability pressure"]

    def test_pricing_power(self, subject, comps, now):
        pricing = analyze_market_position(subject, comps, Submarket(), now).pricing_power
        assert pricing.score == 60
        assert pricing.indicators == ["Strong market rent growth"]
        assert pricing.recommended_strategy.startswith("Moderate growth")
        assert pricing.max_rent_increase == 5

    def test_amenity_gaps(self, subject, comps, now):
        gaps = analyze_market_position(subject, comps, Submarket(), now).amenity_gap_analysis
        assert len(gaps) == 8
        assert all(gap.market_adoption == 50.0 for gap in gaps)
        assert {gap.priority for gap in gaps} == {"Medium"}
        valet = next(gap for gap in gaps if gap.amenity == "Valet Trash")
        assert valet.addition_cost == 0
        assert valet.rent_premium == 20

    def test_owned_amenity_has_no_cost(self, units, comps, now):
        subject = ApartmentProperty(units=units, amenities=PropertyAmenities(pool=True))
        gaps = analyze_market_position(subject, comps, Submarket(), now).amenity_gap_analysis
        pool = next(gap for gap in gaps if gap.amenity == "Swimming Pool")
        assert pool.has_amenity
        assert pool.addition_cost is None
        assert pool.priority == "Low"
        assert gaps[-1] is pool

    def test_demographic_alignment(self, subject, comps, now):
        alignment = analyze_market_position(subject, comps, Submarket(), now).demographic_alignment
        assert alignment.target_resident == "Middle Income Families"
        assert alignment.alignment_score == 60
        assert alignment.recommendations == ["Add playground"]


class TestValueAdd:
    def test_scenarios_ranked_by_roi(self, units, comps):
        result = analyze_value_add_potential(units, 40_000, comps, RenovationCosts(), 0.05)
        assert [s.scenario for s in result.renovation_roi] == ["Classic", "Premium", "Luxury"]
        classic, premium, luxury = result.renovation_roi
        assert classic.units_to_renovate == 3
        assert classic.total_cost == 24_000
        assert classic.avg_rent_increase == 340
        assert classic.incremental_noi == pytest.approx(11_628, abs=1)
        assert classic.value_created == pytest.approx(232_560, abs=1)
        assert classic.roi == pytest.approx(869.0)
        assert classic.payback_years == pytest.approx(2.1)
        assert premium.avg_rent_increase == 453
        assert luxury.total_cost == 75_000

    def test_phased_approach(self, units, comps):
        phases = analyze_value_add_potential(units, 40_000, comps, RenovationCosts(), 0.05).phased_approach
        assert [phase.units for phase in phases] == [1, 1, 1]
        assert [phase.investment for phase in phases] == [15_000] * 3
        assert [phase.timeline for phase in phases] == ["Months 1-6", "Months 7-12", "Months 13-18"]
        assert phases[0].expected_noi == pytest.approx(45_164, abs=1)
        assert phases[2].expected_noi == pytest.approx(55_493, abs=1)

    def test_market_support(self, units, comps):
        support = analyze_value_add_potential(units, 40_000, comps, RenovationCosts(), 0.05).market_support
        assert support.renovated_comps == 1
        assert support.avg_premium == pytest.approx(33.3)
        assert support.demand_indicators == ["Strong 33% renovation premium"]
        assert support.risk_factors == ["Market concessions may limit rent growth"]

    def test_default_premium_without_unrenovated_comps(self, units):
        comps = [MarketComp(property_name="New Build", renovated=True)]
        support = analyze_value_add_potential(units, 40_000, comps, RenovationCosts(), 0.05).market_support
        assert support.avg_premium == 20.0

    def test_static_plans(self, units, comps):
        result = analyze_value_add_potential(units, 40_000, comps, RenovationCosts(), 0.05)
        assert len(result.financing_considerations) == 4
        assert [step.step for step in result.execution_plan] == [
            "Pre-Development",
            "Pilot Program",
            "Full Rollout",
            "Stabilization",
        ]
