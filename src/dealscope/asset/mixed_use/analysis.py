# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Mixed-Use Analysis

Integrated financial performance and synergy valuation, cross-use synergies
and conflicts, operational integration and development/conversion potential
for properties that combine office, retail, residential and other uses.
"""

from __future__ import annotations

import logging
import math
from typing import Dict, List, Mapping, Optional, Sequence

from ...core.primitives import CamelModel, ComponentTypeEnum, RiskLevelEnum
from .._scoring import clamp, safe_ratio
from ..retail.records import RetailTenant
from .records import (
    AllocatedExpense,
    DevelopmentState,
    ManagementProfile,
    MixedUseComponent,
    SharedAmenity,
    SharedSystems,
    UseDemand,
    ZoningEnvelope,
)

logger = logging.getLogger(__name__)

OFFICE = ComponentTypeEnum.OFFICE.value
RETAIL = ComponentTypeEnum.RETAIL.value
RESIDENTIAL = ComponentTypeEnum.RESIDENTIAL.value

MARKET_CAP_RATES: Dict[str, float] = {
    "Office": 6.5,
    "Retail": 7.0,
    "Residential": 5.5,
    "Hotel": 8.5,
    "Other": 7.5,
}
DEFAULT_MARKET_CAP = 7.0
RATING_BAND = 0.5
EQUITY_SHARE = 0.3
STANDALONE_CAP = 0.065
STABILIZED_CAP = 0.055
NOI_MARGIN_ESTIMATE = 0.6

ACRE_SF = 43_560
FLOOR_PLATE_SF = 20_000
MAX_USE_SHARE = 0.4
DEFAULT_CONSTRUCTION_COST_PSF = 200
DEFAULT_CONVERSION_COST_PSF = 150
CONVERSION_COSTS: Dict[str, Dict[str, float]] = {
    "Office": {"Residential": 150, "Retail": 100, "Hotel": 200},
    "Retail": {"Office": 125, "Residential": 175, "Entertainment": 100},
    "Residential": {"Office": 150, "Hotel": 125, "Senior Living": 100},
}
DEMAND_RANK = {"High": 3, "Medium": 2, "Low": 1}
HOLD_YEARS = 5

STAFF_SALARY = 50_000
SF_PER_FTE = 40_000
SHARED_FUNCTIONS = ["Accounting", "Marketing", "Maintenance", "Security"]
SEPARATE_REDUNDANCIES = ["Multiple accounting systems", "Separate maintenance teams", "Duplicated admin"]
IMPACT_ORDER = {"High": 0, "Medium": 1, "Low": 2}
DIFFICULTY_ORDER = {"Easy": 0, "Medium": 1, "Hard": 2}


def get_conversion_cost(from_use: str, to_use: str) -> float:
    """Conversion hard cost per SF; $150 for pairs without a benchmark."""
    return CONVERSION_COSTS.get(from_use, {}).get(to_use, DEFAULT_CONVERSION_COST_PSF)


def _types(components: Sequence[MixedUseComponent]) -> List[str]:
    return [component.label for component in components]


def _first_sf(components: Sequence[MixedUseComponent], use: str) -> float:
    return next((c.square_footage for c in components if c.label == use), 0.0)


# ---------------------------------------------------------------------------
# Integrated performance
# ---------------------------------------------------------------------------


class MixedUseFinancialSummary(CamelModel):
    total_noi: float
    blended_cap_rate: float
    total_revenue: float
    total_expenses: float
    expense_ratio: float
    cash_flow: float
    dscr: float
    cash_on_cash: float


class ComponentPerformance(CamelModel):
    component: str
    noi_contribution: float
    revenue_per_sf: float
    expense_per_sf: float
    margin_percentage: float
    cap_rate_vs_market: float
    performance_rating: str


class SynergyValue(CamelModel):
    operational_synergies: float
    revenue_synergies: float
    cost_synergies: float
    total_synergy_value: float
    synergy_multiple: float


class ConcentrationRisk(CamelModel):
    largest_component: str
    percent_of_noi: float
    risk_level: str


class MixedUseRiskAnalysis(CamelModel):
    concentration_risk: ConcentrationRisk
    operational_complexity: float
    cross_default_risk: List[str]
    market_cycle_exposure: Dict[str, str]


class OptimizationOpportunity(CamelModel):
    opportunity: str
    components: List[str]
    potential_value: float
    implementation: str
    timeline: str


class MixedUsePerformance(CamelModel):
    financial_summary: MixedUseFinancialSummary
    component_performance: List[ComponentPerformance]
    synergy_value: SynergyValue
    risk_analysis: MixedUseRiskAnalysis
    optimization_opportunities: List[OptimizationOpportunity]


def calculate_operational_synergies(
    components: Sequence[MixedUseComponent], shared: SharedSystems
) -> float:
    """Annual savings from shared HVAC, security and validated parking."""
    synergies = 0.0
    if shared.hvac.type == "Central":
        synergies += len(components) * 50_000
    if shared.security.integrated:
        synergies += 100_000
    if shared.parking.validation_system:
        # Separately parked uses would need 30% more spaces at $20k each
        synergies += shared.parking.total_spaces * 0.3 * 20_000
    return synergies


def calculate_revenue_synergies(components: Sequence[MixedUseComponent]) -> float:
    types = set(_types(components))
    has_office, has_retail, has_residential = OFFICE in types, RETAIL in types, RESIDENTIAL in types
    synergies = 0.0
    if has_retail and has_office:
        synergies += _first_sf(components, OFFICE) * 0.5
    if has_retail and has_residential:
        synergies += _first_sf(components, RESIDENTIAL) * 0.75
    if has_residential and (has_retail or has_office):
        synergies += _first_sf(components, RESIDENTIAL) * 1.0
    return synergies


def calculate_cost_synergies(components: Sequence[MixedUseComponent], shared: SharedSystems) -> float:
    total_sf = sum(c.square_footage for c in components)
    synergies = total_sf * 0.25
    if shared.utilities.master_metered:
        synergies += 75_000
    synergies += len(components) * 25_000
    return synergies


def identify_optimization_opportunities(
    components: Sequence[MixedUseComponent],
    shared: SharedSystems,
    performance: Sequence[ComponentPerformance],
) -> List[OptimizationOpportunity]:
    opportunities = []
    everyone = _types(components)
    if not shared.parking.validation_system:
        opportunities.append(
            OptimizationOpportunity(
                opportunity="Implement dynamic parking allocation",
                components=everyone,
                potential_value=150_000,
                implementation="Install validation system, time-based pricing",
                timeline="3-6 months",
            )
        )
    if shared.hvac.type != "Central":
        opportunities.append(
            OptimizationOpportunity(
                opportunity="Centralize HVAC systems",
                components=everyone,
                potential_value=200_000,
                implementation="Phased conversion to central plant",
                timeline="12-24 months",
            )
        )
    if performance:
        weakest = min(performance, key=lambda p: p.noi_contribution)
        if weakest.performance_rating == "Underperforming":
            opportunities.append(
                OptimizationOpportunity(
                    opportunity=f"Reposition {weakest.component} component",
                    components=[weakest.component],
                    potential_value=weakest.noi_contribution * 0.3 * 1_000_000,
                    implementation="Renovation, re-tenanting, or conversion",
                    timeline="6-18 months",
                )
            )
    opportunities.sort(key=lambda o: o.potential_value, reverse=True)
    return opportunities


def _performance_rating(cap_rate: float, market_cap: float) -> str:
    if cap_rate > market_cap + RATING_BAND:
        return "Underperforming"
    if cap_rate < market_cap - RATING_BAND:
        return "Outperforming"
    return "Meeting"


def _concentration_level(percent_of_noi: float) -> str:
    if percent_of_noi > 60:
        return RiskLevelEnum.HIGH.value
    if percent_of_noi > 40:
        return RiskLevelEnum.MEDIUM.value
    return RiskLevelEnum.LOW.value


def _cycle_exposure(components: Sequence[MixedUseComponent]) -> Dict[str, str]:
    exposure: Dict[str, str] = {}
    for component in components:
        if component.label == OFFICE:
            exposure[OFFICE] = "Stable" if component.occupancy > 90 else "Declining"
        elif component.label == RETAIL:
            exposure[RETAIL] = "Growing" if component.occupancy > 92 else "Declining"
        elif component.label == RESIDENTIAL:
            exposure[RESIDENTIAL] = "Growing"
    return exposure


def analyze_mixed_use_performance(
    components: Sequence[MixedUseComponent],
    shared: SharedSystems,
    total_investment: float,
    debt_service: float,
) -> MixedUsePerformance:
    """
    Roll components up into one financial summary and value the synergies of
    operating them together.

    Equity is assumed at 30% of the investment. The synergy multiple compares
    standalone value (NOI at a 6.5% cap) with and without the synergy total.
    Component cap rates more than half a point above the market rate for the
    use rate as Underperforming; more than half a point below, Outperforming.
    """
    total_noi = sum(c.noi for c in components)
    total_revenue = sum(c.estimated_revenue for c in components)
    total_expenses = sum(c.direct_expenses + c.pro_rata_expenses for c in components)
    cash_flow = total_noi - debt_service

    performance = []
    for component in components:
        revenue_psf = (
            component.rent_psf * 12
            if component.rent_psf
            else safe_ratio(component.noi / NOI_MARGIN_ESTIMATE, component.square_footage)
        )
        market_cap = MARKET_CAP_RATES.get(component.label, DEFAULT_MARKET_CAP)
        performance.append(
            ComponentPerformance(
                component=component.label,
                noi_contribution=round(safe_ratio(component.noi, total_noi) * 100, 2),
                revenue_per_sf=round(revenue_psf, 2),
                expense_per_sf=round(
                    safe_ratio(component.direct_expenses + component.pro_rata_expenses, component.square_footage),
                    2,
                ),
                margin_percentage=round(
                    safe_ratio(component.noi, revenue_psf * component.square_footage) * 100, 2
                ),
                cap_rate_vs_market=round(component.cap_rate - market_cap, 2),
                performance_rating=_performance_rating(component.cap_rate, market_cap),
            )
        )

    operational = calculate_operational_synergies(components, shared)
    revenue = calculate_revenue_synergies(components)
    cost = calculate_cost_synergies(components, shared)
    total_synergy = operational + revenue + cost
    standalone_value = total_noi / STANDALONE_CAP
    synergy_multiple = safe_ratio(standalone_value + total_synergy, standalone_value)

    if performance:
        largest = max(performance, key=lambda p: p.noi_contribution)
        concentration = ConcentrationRisk(
            largest_component=largest.component,
            percent_of_noi=largest.noi_contribution,
            risk_level=_concentration_level(largest.noi_contribution),
        )
    else:
        concentration = ConcentrationRisk(largest_component="", percent_of_noi=0.0, risk_level=RiskLevelEnum.LOW.value)

    complexity = 30 + len(components) * 10
    if not shared.utilities.master_metered:
        complexity += 10
    if not shared.security.integrated:
        complexity += 10
    if any(not c.separate_management for c in components):
        complexity -= 15

    cross_default = []
    if any(c.label == RETAIL and c.occupancy < 85 for c in components):
        cross_default.append("Retail vacancy may impact residential desirability")
    if any(c.label == OFFICE and c.occupancy < 80 for c in components):
        cross_default.append("Office vacancy reduces daytime retail traffic")

    return MixedUsePerformance(
        financial_summary=MixedUseFinancialSummary(
            total_noi=total_noi,
            blended_cap_rate=round(safe_ratio(total_noi, total_investment) * 100, 2),
            total_revenue=total_revenue,
            total_expenses=total_expenses,
            expense_ratio=round(safe_ratio(total_expenses, total_revenue) * 100, 2),
            cash_flow=cash_flow,
            dscr=round(safe_ratio(total_noi, debt_service), 2),
            cash_on_cash=round(safe_ratio(cash_flow, total_investment * EQUITY_SHARE) * 100, 2),
        ),
        component_performance=performance,
        synergy_value=SynergyValue(
            operational_synergies=operational,
            revenue_synergies=revenue,
            cost_synergies=cost,
            total_synergy_value=total_synergy,
            synergy_multiple=round(synergy_multiple, 2),
        ),
        risk_analysis=MixedUseRiskAnalysis(
            concentration_risk=concentration,
            operational_complexity=clamp(complexity),
            cross_default_risk=cross_default,
            market_cycle_exposure=_cycle_exposure(components),
        ),
        optimization_opportunities=identify_optimization_opportunities(components, shared, performance),
    )


# ---------------------------------------------------------------------------
# Cross-use interactions
# ---------------------------------------------------------------------------


class Synergy(CamelModel):
    description: str
    beneficiary: List[str]
    value_add: float
    implementation: str


class Conflict(CamelModel):
    issue: str
    affected: List[str]
    severity: str
    mitigation: str


class SharedAmenityUse(CamelModel):
    amenity: str
    users: List[str]
    utilization: float
    cost_per_user: float
    cost_sharing: Dict[str, float]


class CrossUseAnalysis(CamelModel):
    synergies: List[Synergy]
    conflicts: List[Conflict]
    shared_amenities: List[SharedAmenityUse]


def _amenity_use(amenity: SharedAmenity) -> SharedAmenityUse:
    users = amenity.accessible_to
    user_count = len(users)
    is_fitness = "Fitness" in amenity.name
    is_conference = "Conference" in amenity.name

    utilization = 50
    if is_fitness and RESIDENTIAL in users:
        utilization += 20
    if is_conference and OFFICE in users:
        utilization += 25
    if "Parking" in amenity.name:
        utilization = 85
    if user_count > 3:
        utilization += 10
    if user_count > 5:
        utilization += 5

    shares: Dict[str, float] = {}
    for user in users:
        if user == OFFICE and is_conference:
            shares[user] = 0.6
        elif user == RESIDENTIAL and is_fitness:
            shares[user] = 0.5
        else:
            shares[user] = 1 / user_count
    total_share = sum(shares.values())
    return SharedAmenityUse(
        amenity=amenity.name,
        users=list(users),
        utilization=min(100, utilization),
        cost_per_user=safe_ratio(amenity.cost, user_count),
        cost_sharing={user: share / total_share for user, share in shares.items()},
    )


def analyze_cross_use_interactions(
    components: Sequence[MixedUseComponent],
    retail_tenants: Sequence[RetailTenant],
    shared_amenities: Sequence[SharedAmenity],
) -> CrossUseAnalysis:
    """
    Synergies and conflicts between the uses present, and how shared
    amenities are used and paid for.

    Retail tenants refine two rules: a Food merchant adds a catering synergy
    with office tenants, and an essential-service tenant adds a convenience
    premium for residents; an Entertainment merchant creates a noise conflict.
    """
    types = set(_types(components))
    has_office, has_retail, has_residential = OFFICE in types, RETAIL in types, RESIDENTIAL in types
    everyone = [OFFICE, RETAIL, RESIDENTIAL]

    synergies = []
    if has_office and has_retail:
        synergies.append(
            Synergy(
                description="Lunchtime retail traffic from office workers",
                beneficiary=[RETAIL],
                value_add=50_000,
                implementation="Existing",
            )
        )
        if any(t.merchandise_type == "Food" for t in retail_tenants):
            synergies.append(
                Synergy(
                    description="Catering opportunities for office tenants",
                    beneficiary=[RETAIL, OFFICE],
                    value_add=30_000,
                    implementation="Potential",
                )
            )
    if has_residential and has_retail:
        synergies.append(
            Synergy(
                description="Captive customer base for retail",
                beneficiary=[RETAIL],
                value_add=100_000,
                implementation="Existing",
            )
        )
        if any(t.essential_service for t in retail_tenants):
            synergies.append(
                Synergy(
                    description="Convenience factor increases residential rents",
                    beneficiary=[RESIDENTIAL],
                    value_add=75_000,
                    implementation="Existing",
                )
            )
    if has_office and has_retail and has_residential:
        synergies.append(
            Synergy(
                description="24/7 activity creates vibrant live-work-play environment",
                beneficiary=everyone,
                value_add=200_000,
                implementation="Existing",
            )
        )
        synergies.append(
            Synergy(
                description="Shared amenities reduce per-component costs",
                beneficiary=everyone,
                value_add=150_000,
                implementation="Existing",
            )
        )

    conflicts = []
    if has_residential and has_retail and any(t.merchandise_type == "Entertainment" for t in retail_tenants):
        conflicts.append(
            Conflict(
                issue="Late-night retail noise affecting residents",
                affected=[RESIDENTIAL],
                severity="High",
                mitigation="Sound insulation, restricted hours, tenant selection",
            )
        )
    if len(components) > 2:
        conflicts.append(
            Conflict(
                issue="Peak parking demand overlap",
                affected=_types(components),
                severity="Medium",
                mitigation="Time-based allocation, validation systems, shared parking agreements",
            )
        )
    if has_retail and (has_office or has_residential):
        conflicts.append(
            Conflict(
                issue="Delivery truck routing and timing",
                affected=[RETAIL, OFFICE if has_office else RESIDENTIAL],
                severity="Medium",
                mitigation="Designated delivery hours, separate service entrances",
            )
        )
    if has_residential and (has_office or has_retail):
        conflicts.append(
            Conflict(
                issue="Access control for residential security",
                affected=[RESIDENTIAL],
                severity="Medium",
                mitigation="Separate entrances, controlled access points, security protocols",
            )
        )
    if has_office and has_residential:
        conflicts.append(
            Conflict(
                issue="Different HVAC scheduling needs",
                affected=[OFFICE, RESIDENTIAL],
                severity="Low",
                mitigation="Zone controls, separate systems for major components",
            )
        )

    return CrossUseAnalysis(
        synergies=synergies,
        conflicts=conflicts,
        shared_amenities=[_amenity_use(amenity) for amenity in shared_amenities if amenity.accessible_to],
    )


# ---------------------------------------------------------------------------
# Operational integration
# ---------------------------------------------------------------------------


class IntegrationEfficiency(CamelModel):
    score: float
    strengths: List[str]
    inefficiencies: List[str]
    savings_realized: float
    additional_potential: float


class ComponentExpenseAllocation(CamelModel):
    component: str
    direct_expenses: float
    allocated_expenses: float
    total_expenses: float
    expense_ratio: float
    allocation_method: str


class StaffingAnalysis(CamelModel):
    current_model: str
    fte_by_component: Dict[str, float]
    shared_functions: List[str]
    redundancies: List[str]
    optimal_staffing: int
    savings_opportunity: float


class UpgradeRoi(CamelModel):
    cost: float
    annual_savings: float
    payback: float


class SystemIntegration(CamelModel):
    system: str
    integration_level: str
    efficiency: float
    issues: List[str]
    upgrade_roi: Optional[UpgradeRoi] = None


class BestPractice(CamelModel):
    practice: str
    currently_implemented: bool
    difficulty: str
    impact: str
    recommendation: str


class OperationalIntegration(CamelModel):
    integration_efficiency: IntegrationEfficiency
    expense_allocation: List[ComponentExpenseAllocation]
    staffing_analysis: StaffingAnalysis
    systems_integration: List[SystemIntegration]
    best_practices: List[BestPractice]


def _system_levels(shared: SharedSystems) -> List[tuple]:
    """``(system, level, efficiency, issues)`` for each shared system."""
    if shared.hvac.type == "Central":
        hvac = ("HVAC", "Full", 85, [])
    elif shared.hvac.type == "Hybrid":
        hvac = ("HVAC", "Partial", 70, ["Some separate systems increase complexity"])
    else:
        hvac = ("HVAC", "None", 50, ["Separate systems miss efficiency opportunities"])

    if shared.security.integrated:
        security = ("Security", "Full", 90, [])
    else:
        security = ("Security", "Partial", 60, ["Multiple access systems", "Coordination challenges"])

    if shared.parking.validation_system:
        parking = ("Parking", "Full", 80, [])
    elif shared.parking.separate_levels:
        parking = ("Parking", "Partial", 65, ["Underutilized during off-peak"])
    else:
        parking = ("Parking", "None", 50, ["No sharing between uses"])

    if shared.utilities.master_metered:
        utilities = ("Utilities", "Full", 75, [])
    else:
        utilities = ("Utilities", "Partial", 60, ["Complex billing reconciliation"])
    return [hvac, security, parking, utilities]


def analyze_operational_integration(
    components: Sequence[MixedUseComponent],
    shared: SharedSystems,
    management: ManagementProfile,
    expenses: Sequence[AllocatedExpense],
) -> OperationalIntegration:
    """
    Score how well the components are run as one property and where
    integration would save money.

    Integrated operation is assumed to save 15% against standalone operation,
    with a further 5% available. Optimal staffing is one FTE per 40,000 SF at
    an average cost of $50,000.
    """
    score = 50
    strengths: List[str] = []
    inefficiencies: List[str] = []
    if management.structure == "Integrated":
        score += 20
        strengths.append("Unified management structure")
    elif management.structure == "Hybrid":
        score += 10
        strengths.append("Balanced management approach")
    else:
        inefficiencies.append("Separate management creates silos")
    if shared.utilities.master_metered:
        score += 5
        strengths.append("Master metered utilities")
    else:
        inefficiencies.append("Complex utility submetering")
    if shared.security.integrated:
        score += 10
        strengths.append("Integrated security systems")
    else:
        score -= 5
        inefficiencies.append("Fragmented security approach")
    if management.shared_staff:
        score += 10
        strengths.append("Efficient staff sharing")
    else:
        inefficiencies.append("Duplicated staff functions")

    total_expenses = sum(expense.amount for expense in expenses)
    total_sf = sum(c.square_footage for c in components)

    allocation = []
    for component in components:
        direct = 0.0
        allocated = 0.0
        for expense in expenses:
            if expense.allocation == "Direct":
                direct += expense.direct_assignment.get(component.label, 0.0)
            elif expense.allocation == "ProRata":
                allocated += expense.amount * safe_ratio(component.square_footage, total_sf)
            else:
                allocated += expense.amount * (0.4 if component.label == OFFICE else 0.3)
        total = direct + allocated
        allocation.append(
            ComponentExpenseAllocation(
                component=component.label,
                direct_expenses=direct,
                allocated_expenses=allocated,
                total_expenses=total,
                expense_ratio=round(safe_ratio(total, component.potential_revenue) * 100, 2),
                allocation_method="Primarily Allocated" if allocated > direct else "Primarily Direct",
            )
        )

    fte: Dict[str, float] = {}
    if management.structure == "Integrated":
        for component in components:
            fte[component.label] = management.staff_count * safe_ratio(component.square_footage, total_sf)
    elif management.component_managers:
        for component in components:
            fte[component.label] = component.square_footage / 50_000
    optimal = math.ceil(total_sf / SF_PER_FTE)

    systems = []
    for name, level, efficiency, issues in _system_levels(shared):
        upgrade = None
        if level != "Full":
            cost = total_sf * (15 if name == "HVAC" else 5)
            savings = total_expenses * 0.02 * (100 - efficiency) / 100
            upgrade = UpgradeRoi(cost=cost, annual_savings=savings, payback=round(safe_ratio(cost, savings), 1))
        systems.append(
            SystemIntegration(system=name, integration_level=level, efficiency=efficiency, issues=issues, upgrade_roi=upgrade)
        )

    practices = [
        BestPractice(
            practice="Unified property management system",
            currently_implemented=management.structure == "Integrated",
            difficulty="Medium",
            impact="High",
            recommendation="Implement integrated software platform for all components",
        ),
        BestPractice(
            practice="Shared parking optimization",
            currently_implemented=shared.parking.validation_system,
            difficulty="Easy",
            impact="High",
            recommendation="Use dynamic pricing and time-based allocation",
        ),
        BestPractice(
            practice="Integrated maintenance team",
            currently_implemented=management.shared_staff,
            difficulty="Easy",
            impact="Medium",
            recommendation="Cross-train maintenance staff for all components",
        ),
        BestPractice(
            practice="Centralized vendor management",
            currently_implemented=management.structure != "Separate",
            difficulty="Easy",
            impact="Medium",
            recommendation="Consolidate vendors for volume discounts",
        ),
        BestPractice(
            practice="Energy management system",
            currently_implemented=shared.hvac.type == "Central",
            difficulty="Hard",
            impact="High",
            recommendation="Install building-wide BMS with component submetering",
        ),
        BestPractice(
            practice="Integrated marketing strategy",
            currently_implemented=management.structure == "Integrated",
            difficulty="Medium",
            impact="Medium",
            recommendation="Market property as lifestyle destination",
        ),
    ]
    practices.sort(key=lambda p: (IMPACT_ORDER[p.impact], DIFFICULTY_ORDER[p.difficulty]))

    return OperationalIntegration(
        integration_efficiency=IntegrationEfficiency(
            score=clamp(score),
            strengths=strengths,
            inefficiencies=inefficiencies,
            savings_realized=total_expenses * 0.15,
            additional_potential=total_expenses * 0.05,
        ),
        expense_allocation=allocation,
        staffing_analysis=StaffingAnalysis(
            current_model=management.structure,
            fte_by_component=fte,
            shared_functions=list(SHARED_FUNCTIONS) if management.shared_staff else [],
            redundancies=list(SEPARATE_REDUNDANCIES) if management.structure == "Separate" else [],
            optimal_staffing=optimal,
            savings_opportunity=(management.staff_count - optimal) * STAFF_SALARY,
        ),
        systems_integration=systems,
        best_practices=practices,
    )


# ---------------------------------------------------------------------------
# Development and repositioning
# ---------------------------------------------------------------------------


class MixAllocation(CamelModel):
    use: str
    square_footage: float
    floors: int
    estimated_noi: float


class DevelopmentPotential(CamelModel):
    additional_far: float
    additional_sf: float
    optimal_mix: List[MixAllocation]
    total_development_cost: float
    stabilized_noi: float
    development_yield: float


class ConversionOpportunity(CamelModel):
    from_use: str
    to_use: str
    square_footage: float
    conversion_cost: float
    noi_improvement: float
    payback_period: float
    feasibility: str


class DevelopmentPhase(CamelModel):
    phase: int
    description: str
    components: List[str]
    cap_ex: float
    timeline: str
    pre_leasing_required: float


class ValueCreation(CamelModel):
    current_value: float
    projected_value: float
    total_investment: float
    value_add: float
    irr: float
    equity_multiple: float


class DevelopmentRisk(CamelModel):
    risk: str
    impact: str
    probability: str
    mitigation: str


class MixedUseDevelopment(CamelModel):
    development_potential: DevelopmentPotential
    conversion_opportunities: List[ConversionOpportunity]
    phasing_strategy: List[DevelopmentPhase]
    value_creation: ValueCreation
    risk_mitigation: List[DevelopmentRisk]


DEVELOPMENT_RISKS = (
    DevelopmentRisk(
        risk="Construction cost overruns",
        impact="High",
        probability="Medium",
        mitigation="Fixed-price contracts, 10% contingency, value engineering",
    ),
    DevelopmentRisk(
        risk="Leasing delays",
        impact="Medium",
        probability="Medium",
        mitigation="Pre-leasing requirements, anchor tenant LOIs, marketing budget",
    ),
    DevelopmentRisk(
        risk="Market downturn",
        impact="High",
        probability="Low",
        mitigation="Phased development, diverse component mix, flexible spaces",
    ),
    DevelopmentRisk(
        risk="Zoning/permitting delays",
        impact="Medium",
        probability="Medium",
        mitigation="Early engagement, experienced team, contingency timeline",
    ),
    DevelopmentRisk(
        risk="Integration complexity",
        impact="Medium",
        probability="High",
        mitigation="Experienced mixed-use operator, detailed planning, technology systems",
    ),
)


def _feasibility(payback: float) -> str:
    if payback < 5:
        return "High"
    return "Medium" if payback < 8 else "Low"


def analyze_mixed_use_development(
    state: DevelopmentState,
    zoning: ZoningEnvelope,
    demand: Sequence[UseDemand],
    construction_costs: Mapping[str, float],
) -> MixedUseDevelopment:
    """
    Unused zoning capacity, the best mix of new uses, conversions of weak
    components and the value created by executing both.

    New space is allocated to allowed uses in order of demand then rent, at
    most 40% of the added area per use. Stabilized NOI assumes 85% efficiency,
    92% occupancy and a 65% margin (90% occupancy for conversions). Current
    value is NOI at a 6.5% cap; projected value is NOI at 5.5%.
    """
    lot_sf = state.land_area * ACRE_SF
    max_buildable = lot_sf * zoning.max_far
    additional_far = zoning.max_far - safe_ratio(state.total_sf, lot_sf)
    additional_sf = max(0.0, max_buildable - state.total_sf)

    ranked = sorted(demand, key=lambda d: (-DEMAND_RANK.get(d.demand_level, 0), -d.achievable_rent))

    mix: List[MixAllocation] = []
    remaining = additional_sf
    for entry in ranked:
        if remaining <= 0 or entry.component_type not in zoning.allowed_uses:
            continue
        allocated = min(remaining, additional_sf * MAX_USE_SHARE)
        mix.append(
            MixAllocation(
                use=entry.component_type,
                square_footage=allocated,
                floors=int(allocated // FLOOR_PLATE_SF),
                estimated_noi=allocated * 0.85 * entry.achievable_rent * 0.92 * 0.65,
            )
        )
        remaining -= allocated

    def build_cost(allocations: Sequence[MixAllocation]) -> float:
        return sum(
            a.square_footage * (construction_costs.get(a.use) or DEFAULT_CONSTRUCTION_COST_PSF) for a in allocations
        )

    development_cost = build_cost(mix)
    stabilized_noi = sum(a.estimated_noi for a in mix)

    conversions: List[ConversionOpportunity] = []
    for component in state.components:
        if component.occupancy >= 75 and component.cap_rate <= 8:
            continue
        for entry in ranked:
            if (
                entry.component_type == component.label
                or entry.demand_level != "High"
                or entry.component_type not in zoning.allowed_uses
            ):
                continue
            cost = component.square_footage * get_conversion_cost(component.label, entry.component_type)
            new_noi = component.square_footage * 0.85 * entry.achievable_rent * 0.9 * 0.65
            improvement = new_noi - component.noi
            payback = cost / improvement if improvement > 0 else math.inf
            conversions.append(
                ConversionOpportunity(
                    from_use=component.label,
                    to_use=entry.component_type,
                    square_footage=component.square_footage,
                    conversion_cost=cost,
                    noi_improvement=improvement,
                    payback_period=round(payback, 1) if math.isfinite(payback) else 999.0,
                    feasibility=_feasibility(payback),
                )
            )

    phases: List[DevelopmentPhase] = []
    quick_wins = [c for c in conversions if c.feasibility == "High"][:2]
    if quick_wins:
        phases.append(
            DevelopmentPhase(
                phase=1,
                description="High-return conversions",
                components=[f"{c.from_use} to {c.to_use}" for c in quick_wins],
                cap_ex=sum(c.conversion_cost for c in quick_wins),
                timeline="0-12 months",
                pre_leasing_required=0,
            )
        )
    if mix:
        phases.append(
            DevelopmentPhase(
                phase=len(phases) + 1,
                description="New development - Phase 1",
                components=[a.use for a in mix[:2]],
                cap_ex=build_cost(mix[:2]),
                timeline="12-30 months",
                pre_leasing_required=40,
            )
        )
    if len(mix) > 2:
        phases.append(
            DevelopmentPhase(
                phase=len(phases) + 1,
                description="New development - Phase 2",
                components=[a.use for a in mix[2:]],
                cap_ex=build_cost(mix[2:]),
                timeline="30-48 months",
                pre_leasing_required=50,
            )
        )

    current_noi = sum(c.noi for c in state.components)
    current_value = current_noi / STANDALONE_CAP
    projected_noi = current_noi + stabilized_noi + sum(c.noi_improvement for c in conversions)
    projected_value = projected_noi / STABILIZED_CAP
    investment = development_cost + sum(c.conversion_cost for c in conversions)
    average_noi = (current_noi + projected_noi) / 2
    total_return = projected_value - current_value + average_noi * HOLD_YEARS
    growth = safe_ratio(total_return, current_value)
    irr = (growth ** (1 / HOLD_YEARS) - 1) * 100 if growth > 0 else 0.0

    conversions.sort(key=lambda c: c.payback_period)
    logger.debug(
        f"Development: {additional_sf:,.0f} SF available, {len(mix)} new uses, {len(conversions)} conversions"
    )
    return MixedUseDevelopment(
        development_potential=DevelopmentPotential(
            additional_far=round(additional_far, 2),
            additional_sf=round(additional_sf),
            optimal_mix=mix,
            total_development_cost=development_cost,
            stabilized_noi=round(stabilized_noi),
            development_yield=round(safe_ratio(stabilized_noi, development_cost) * 100, 2),
        ),
        conversion_opportunities=conversions[:5],
        phasing_strategy=phases,
        value_creation=ValueCreation(
            current_value=round(current_value),
            projected_value=round(projected_value),
            total_investment=round(investment),
            value_add=round(projected_value - current_value - investment),
            irr=round(irr, 2),
            equity_multiple=round(safe_ratio(total_return, current_value * EQUITY_SHARE), 2),
        ),
        risk_mitigation=list(DEVELOPMENT_RISKS),
    )


__all__ = [
    "CrossUseAnalysis",
    "MixedUseDevelopment",
    "MixedUsePerformance",
    "OperationalIntegration",
    "analyze_cross_use_interactions",
    "analyze_mixed_use_development",
    "analyze_mixed_use_performance",
    "analyze_operational_integration",
    "get_conversion_cost",
]
