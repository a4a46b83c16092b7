# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""Unit tests for the mixed-use engines."""

import pytest

from dealscope.adapters import adapt_retail_tenants
from dealscope.asset.mixed_use import (
    MixedUseComponent,
    analyze_cross_use_interactions,
    analyze_mixed_use_development,
    analyze_mixed_use_performance,
    analyze_operational_integration,
)
from dealscope.asset.mixed_use.analysis import (
    calculate_cost_synergies,
    calculate_operational_synergies,
    calculate_revenue_synergies,
    get_conversion_cost,
)
from dealscope.asset.mixed_use.records import (
    AllocatedExpense,
    DevelopmentState,
    ManagementProfile,
    ParkingPlan,
    SecurityPlan,
    SharedAmenity,
    SharedSystems,
    UseDemand,
    ZoningEnvelope,
)
from dealscope.core.primitives import ComponentTypeEnum


@pytest.fixture
def components():
    return [
        MixedUseComponent(
            type=ComponentTypeEnum.OFFICE,
            square_footage=50_000,
            noi=1_000_000,
            cap_rate=6.5,
            rent_psf=3.0,
            occupancy=92,
            direct_expenses=100_000,
            pro_rata_expenses=200_000,
        ),
        MixedUseComponent(
            type=ComponentTypeEnum.RETAIL,
            square_footage=20_000,
            noi=400_000,
            cap_rate=8.0,
            rent_psf=2.5,
            occupancy=80,
            direct_expenses=50_000,
            pro_rata_expenses=50_000,
        ),
        MixedUseComponent(
            type=ComponentTypeEnum.RESIDENTIAL,
            square_footage=30_000,
            noi=600_000,
            cap_rate=5.0,
            rent_psf=None,
            occupancy=95,
            direct_expenses=60_000,
            pro_rata_expenses=40_000,
        ),
    ]


class TestComponentRevenue:
    def test_monthly_rent_psf(self):
        component = MixedUseComponent(square_footage=10_000, rent_psf=2.0, occupancy=90)
        assert component.estimated_revenue == pytest.approx(216_000)
        assert component.potential_revenue == pytest.approx(240_000)

    def test_noi_fallback_at_sixty_percent_margin(self):
        component = MixedUseComponent(noi=120_000, rent_psf=None)
        assert component.estimated_revenue == pytest.approx(200_000)


class TestPerformance:
    def test_financial_summary(self, components):
        summary = analyze_mixed_use_performance(components, SharedSystems(), 30_000_000, 1_200_000).financial_summary
        assert summary.total_noi == 2_000_000
        assert summary.total_revenue == pytest.approx(3_136_000)
        assert summary.total_expenses == 500_000
        assert summary.blended_cap_rate == pytest.approx(6.67)
        assert summary.expense_ratio == pytest.approx(15.94)
        assert summary.cash_flow == 800_000
        assert summary.dscr == pytest.approx(1.67)
        assert summary.cash_on_cash == pytest.approx(8.89)

    def test_component_ratings_against_market_caps(self, components):
        performance = analyze_mixed_use_performance(components, SharedSystems(), 30_000_000, 1_200_000)
        rows = {row.component: row for row in performance.component_performance}
        assert rows["Office"].noi_contribution == 50.0
        assert rows["Office"].revenue_per_sf == 36.0
        assert rows["Office"].margin_percentage == pytest.approx(55.56)
        assert rows["Office"].performance_rating == "Meeting"
        assert rows["Retail"].cap_rate_vs_market == 1.0
        assert rows["Retail"].performance_rating == "Underperforming"
        assert rows["Residential"].revenue_per_sf == pytest.approx(33.33)
        assert rows["Residential"].margin_percentage == pytest.approx(60.0)
        assert rows["Residential"].performance_rating == "Meeting"

    def test_synergies(self, components):
        shared = SharedSystems()
        assert calculate_operational_synergies(components, shared) == 150_000
        assert calculate_revenue_synergies(components) == pytest.approx(77_500)
        assert calculate_cost_synergies(components, shared) == pytest.approx(100_000)
        synergy = analyze_mixed_use_performance(components, shared, 30_000_000, 1_200_000).synergy_value
        assert synergy.total_synergy_value == pytest.approx(327_500)
        assert synergy.synergy_multiple == pytest.approx(1.01)

    def test_integrated_security_and_validated_parking_add_synergies(self, components):
        shared = SharedSystems(
            security=SecurityPlan(integrated=True),
            parking=ParkingPlan(total_spaces=100, validation_system=True),
        )
        assert calculate_operational_synergies(components, shared) == pytest.approx(150_000 + 100_000 + 600_000)

    def test_risk_analysis(self, components):
        risk = analyze_mixed_use_performance(components, SharedSystems(), 30_000_000, 1_200_000).risk_analysis
        assert risk.concentration_risk.largest_component == "Office"
        assert risk.concentration_risk.risk_level == "Medium"
        assert risk.operational_complexity == 65
        assert risk.cross_default_risk == ["Retail vacancy may impact residential desirability"]
        assert risk.market_cycle_exposure == {"Office": "Stable", "Retail": "Declining", "Residential": "Growing"}

    def test_optimization_opportunities(self, components):
        opportunities = analyze_mixed_use_performance(
            components, SharedSystems(), 30_000_000, 1_200_000
        ).optimization_opportunities
        assert [o.opportunity for o in opportunities] == [
            "Reposition Retail component",
            "Implement dynamic parking allocation",
        ]
        assert opportunities[0].potential_value == pytest.approx(6_000_000)

    def test_no_components(self):
        performance = analyze_mixed_use_performance([], SharedSystems(), 0, 0)
        assert performance.financial_summary.total_noi == 0
        assert performance.synergy_value.synergy_multiple == 0
        assert performance.risk_analysis.concentration_risk.risk_level == "Low"


class TestCrossUse:
    @pytest.fixture
    def tenants(self, now, retail_tenant_dicts):
        return adapt_retail_tenants(retail_tenant_dicts, now)

    def test_all_three_uses(self, components, tenants):
        result = analyze_cross_use_interactions(components, tenants, [])
        assert [s.description for s in result.synergies] == [
            "Lunchtime retail traffic from office workers",
            "Catering opportunities for office tenants",
            "Captive customer base for retail",
            "Convenience factor increases residential rents",
            "24/7 activity creates vibrant live-work-play environment",
            "Shared amenities reduce per-component costs",
        ]
        assert [c.issue for c in result.conflicts] == [
            "Peak parking demand overlap",
            "Delivery truck routing and timing",
            "Access control for residential security",
            "Different HVAC scheduling needs",
        ]
        assert result.conflicts[1].affected == ["Retail", "Office"]

    def test_entertainment_tenant_creates_noise_conflict(self, components, now):
        tenants = adapt_retail_tenants([{"name": "Arcade", "merchandiseType": "Entertainment"}], now)
        result = analyze_cross_use_interactions(components, tenants, [])
        assert result.conflicts[0].issue == "Late-night retail noise affecting residents"
        assert result.conflicts[0].severity == "High"

    def test_office_only_has_no_interactions(self):
        result = analyze_cross_use_interactions([MixedUseComponent()], [], [])
        assert result.synergies == []
        assert result.conflicts == []

    def test_shared_amenity_cost_sharing(self, components):
        amenities = [
            SharedAmenity(name="Fitness Center", accessible_to=["Residential", "Office"], cost=60_000),
            SharedAmenity(name="Conference Room", accessible_to=["Office", "Retail"], cost=10_000),
            SharedAmenity(name="Parking Garage", accessible_to=["Office", "Retail", "Residential", "Hotel"]),
            SharedAmenity(name="Roof Deck"),
        ]
        uses = analyze_cross_use_interactions(components, [], amenities).shared_amenities
        assert [use.amenity for use in uses] == ["Fitness Center", "Conference Room", "Parking Garage"]
        fitness, conference, parking = uses
        assert fitness.utilization == 70
        assert fitness.cost_per_user == 30_000
        assert fitness.cost_sharing == pytest.approx({"Residential": 0.5, "Office": 0.5})
        assert conference.utilization == 75
        assert conference.cost_sharing["Office"] == pytest.approx(0.6 / 1.1)
        assert parking.utilization == 95
        assert sum(parking.cost_sharing.values()) == pytest.approx(1.0)


class TestOperationalIntegration:
    @pytest.fixture
    def expenses(self):
        return [
            AllocatedExpense(category="Taxes", amount=100_000),
            AllocatedExpense(
                category="Cleaning",
                amount=30_000,
                allocation="Direct",
                direct_assignment={"Office": 20_000, "Retail": 10_000},
            ),
            AllocatedExpense(category="Energy", amount=50_000, allocation="Usage"),
        ]

    def test_integration_efficiency(self, components, expenses):
        result = analyze_operational_integration(components, SharedSystems(), ManagementProfile(), expenses)
        efficiency = result.integration_efficiency
        assert efficiency.score == 75
        assert efficiency.strengths == ["Unified management structure", "Efficient staff sharing"]
        assert efficiency.inefficiencies == ["Complex utility submetering", "Fragmented security approach"]
        assert efficiency.savings_realized == pytest.approx(27_000)
        assert efficiency.additional_potential == pytest.approx(9_000)

    def test_expense_allocation(self, components, expenses):
        result = analyze_operational_integration(components, SharedSystems(), ManagementProfile(), expenses)
        rows = {row.component: row for row in result.expense_allocation}
        assert rows["Office"].direct_expenses == 20_000
        assert rows["Office"].allocated_expenses == pytest.approx(70_000)
        assert rows["Office"].expense_ratio == pytest.approx(5.0)
        assert rows["Retail"].total_expenses == pytest.approx(45_000)
        assert rows["Retail"].expense_ratio == pytest.approx(7.5)
        assert rows["Residential"].direct_expenses == 0
        assert rows["Residential"].allocation_method == "Primarily Allocated"

    def test_integrated_staffing(self, components, expenses):
        staffing = analyze_operational_integration(
            components, SharedSystems(), ManagementProfile(), expenses
        ).staffing_analysis
        assert staffing.fte_by_component == pytest.approx({"Office": 5.0, "Retail": 2.0, "Residential": 3.0})
        assert staffing.optimal_staffing == 3
        assert staffing.savings_opportunity == 350_000
        assert staffing.redundancies == []

    def test_separate_management(self, components, expenses):
        management = ManagementProfile(structure="Separate", shared_staff=False, component_managers={"Office": "A"})
        result = analyze_operational_integration(components, SharedSystems(), management, expenses)
        assert result.integration_efficiency.score == 45
        assert result.staffing_analysis.fte_by_component["Office"] == pytest.approx(1.0)
        assert result.staffing_analysis.shared_functions == []
        assert len(result.staffing_analysis.redundancies) == 3

    def test_systems_integration(self, components, expenses):
        systems = analyze_operational_integration(
            components, SharedSystems(), ManagementProfile(), expenses
        ).systems_integration
        assert [(s.system, s.integration_level) for s in systems] == [
            ("HVAC", "Full"),
            ("Security", "Partial"),
            ("Parking", "None"),
            ("Utilities", "Partial"),
        ]
        assert systems[0].upgrade_roi is None
        security = systems[1].upgrade_roi
        assert security.cost == 500_000
        assert security.annual_savings == pytest.approx(1_440)

    def test_best_practices_ordered_by_impact_then_difficulty(self, components, expenses):
        practices = analyze_operational_integration(
            components, SharedSystems(), ManagementProfile(), expenses
        ).best_practices
        assert [p.practice for p in practices] == [
            "Shared parking optimization",
            "Unified property management system",
            "Energy management system",
            "Integrated maintenance team",
            "Centralized vendor management",
            "Integrated marketing strategy",
        ]


class TestDevelopment:
    @pytest.fixture
    def state(self):
        weak_office = MixedUseComponent(square_footage=20_000, noi=100_000, cap_rate=9.0, occupancy=60)
        return DevelopmentState(components=[weak_office], total_sf=100_000, land_area=5)

    @pytest.fixture
    def zoning(self):
        return ZoningEnvelope(max_far=2.0, allowed_uses=["Residential", "Retail", "Office"])

    @pytest.fixture
    def demand(self):
        return [
            UseDemand(component_type="Residential", demand_level="High", achievable_rent=30),
            UseDemand(component_type="Retail", demand_level="Medium", achievable_rent=25),
            UseDemand(component_type="Office", demand_level="High", achievable_rent=35),
            UseDemand(component_type="Hotel", demand_level="Low", achievable_rent=40),
        ]

    def test_development_potential(self, state, zoning, demand):
        result = analyze_mixed_use_development(state, zoning, demand, {"Office": 300, "Residential": 250})
        potential = result.development_potential
        assert potential.additional_far == pytest.approx(1.54)
        assert potential.additional_sf == 335_600
        assert [(a.use, a.square_footage, a.floors) for a in potential.optimal_mix] == [
            ("Office", pytest.approx(134_240), 6),
            ("Residential", pytest.approx(134_240), 6),
            ("Retail", pytest.approx(67_120), 3),
        ]
        assert potential.optimal_mix[0].estimated_noi == pytest.approx(2_388_196.72, rel=1e-6)
        assert potential.total_development_cost == pytest.approx(87_256_000)

    def test_conversions_of_weak_components(self, state, zoning, demand):
        result = analyze_mixed_use_development(state, zoning, demand, {})
        [conversion] = result.conversion_opportunities
        assert (conversion.from_use, conversion.to_use) == ("Office", "Residential")
        assert conversion.conversion_cost == 3_000_000
        assert conversion.noi_improvement == pytest.approx(198_350)
        assert conversion.payback_period == pytest.approx(15.1)
        assert conversion.feasibility == "Low"

    def test_phasing_without_quick_wins(self, state, zoning, demand):
        result = analyze_mixed_use_development(state, zoning, demand, {"Office": 300, "Residential": 250})
        phases = result.phasing_strategy
        assert [p.components for p in phases] == [["Office", "Residential"], ["Retail"]]
        assert phases[0].cap_ex == pytest.approx(73_832_000)
        assert phases[1].pre_leasing_required == 50

    def test_value_creation(self, state, zoning, demand):
        value = analyze_mixed_use_development(
            state, zoning, demand, {"Office": 300, "Residential": 250}
        ).value_creation
        assert value.current_value == 1_538_462
        assert value.total_investment == 90_256_000
        assert value.irr > 0

    def test_no_demand_means_no_new_space(self, state, zoning):
        result = analyze_mixed_use_development(state, zoning, [], {})
        assert result.development_potential.optimal_mix == []
        assert result.development_potential.development_yield == 0
        assert result.phasing_strategy == []
        assert len(result.risk_mitigation) == 5

    @pytest.mark.parametrize(
        "from_use, to_use, cost",
        [("Office", "Residential", 150), ("Retail", "Office", 125), ("Hotel", "Office", 150)],
    )
    def test_conversion_cost(self, from_use, to_use, cost):
        assert get_conversion_cost(from_use, to_use) == cost
