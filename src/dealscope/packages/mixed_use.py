# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Mixed-use package handlers.

Components are read from ``mixedUseComponents`` when supplied. Otherwise they
are built from the per-use square footage facts, or from a default
40/30/30 office, retail and residential split of the total area.

Component rents are monthly per SF. Office and retail placeholders are
quoted annually and divided by twelve.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Dict, List, NamedTuple, Optional

from ..adapters.mixed_use import adapt_mixed_use_components
from ..adapters.retail import adapt_retail_tenants
from ..asset.mixed_use.analysis import (
    ACRE_SF,
    analyze_cross_use_interactions,
    analyze_mixed_use_development,
    analyze_mixed_use_performance,
    analyze_operational_integration,
)
from ..asset.mixed_use.records import (
    AllocatedExpense,
    DevelopmentState,
    ElevatorPlan,
    HvacPlant,
    ManagementProfile,
    MixedUseComponent,
    ParkingPlan,
    SecurityPlan,
    SharedAmenity,
    SharedSystems,
    UseDemand,
    UtilityPlan,
    ZoningEnvelope,
)
from ..core.bundle import PackageBundleResult
from ..core.facts import PropertyFacts
from ..core.primitives import ComponentTypeEnum
from ..debt.amortization import annual_debt_service
from .assumptions import AssumptionLog
from .registry import PackageId, register_package

logger = logging.getLogger(__name__)

SF_PER_RESIDENTIAL_UNIT = 800
SF_PER_PARKING_SPACE = 300
DEVELOPMENT_MARGIN = 0.7
DEVELOPMENT_CAP_RATE = 0.065
DEFAULT_CONSTRUCTION_MONTHS = 24
DEFAULT_LEASE_UP_MONTHS = 18
FAR_HEADROOM = 1.5


class ComponentProfile(NamedTuple):
    """Placeholder operating profile for one use in the default split."""

    type: ComponentTypeEnum
    share: float
    cap_rate: float
    annual_rent_psf: float
    occupancy: float
    floors: List[int]


DEFAULT_PROFILES = (
    ComponentProfile(ComponentTypeEnum.OFFICE, 0.4, 6.5, 35.0, 90.0, [2, 3, 4]),
    ComponentProfile(ComponentTypeEnum.RETAIL, 0.3, 7.0, 25.0, 85.0, [1]),
    ComponentProfile(ComponentTypeEnum.RESIDENTIAL, 0.3, 5.5, 30.0, 95.0, [5, 6, 7, 8]),
)

PLACEHOLDER_AMENITIES = (
    SharedAmenity(name="Fitness Center", location="Podium", accessible_to=["Office", "Residential"], cost=120_000),
    SharedAmenity(name="Rooftop Terrace", location="Roof", accessible_to=["Office", "Residential"], operating_hours="6am-11pm", cost=60_000),
    SharedAmenity(name="Parking Garage", location="Below Grade", accessible_to=["Office", "Retail", "Residential"], cost=250_000),
)

PLACEHOLDER_DEMAND = (
    UseDemand(component_type="Residential", demand_level="High", achievable_rent=36.0, absorption_months=18),
    UseDemand(component_type="Office", demand_level="Medium", achievable_rent=38.0, absorption_months=24),
    UseDemand(component_type="Retail", demand_level="Low", achievable_rent=30.0, absorption_months=12),
)

PLACEHOLDER_CONSTRUCTION_COSTS = {"Office": 250.0, "Retail": 200.0, "Residential": 225.0}


def placeholder_shared_systems(total_sf: float) -> SharedSystems:
    """Central plant, partially dedicated elevators and a shared garage."""
    return SharedSystems(
        hvac=HvacPlant(type="Central", allocation={"Office": 40, "Retail": 30, "Residential": 30}, redundancy=True),
        elevators=ElevatorPlan(total=4, dedicated={"Office": 2, "Residential": 1}, shared=1),
        parking=ParkingPlan(
            total_spaces=int(total_sf // SF_PER_PARKING_SPACE),
            allocation={"Office": 4.0, "Retail": 3.0, "Residential": 1.5},
            validation_system=True,
            separate_levels=True,
        ),
        utilities=UtilityPlan(
            master_metered=True,
            sub_metering={"Office": True, "Retail": True, "Residential": False},
            allocation="ProRata",
        ),
        security=SecurityPlan(
            integrated=True,
            separate_access={"Office": True, "Retail": False, "Residential": True},
            shared_lobby=False,
            after_hours_protocol="Card access with security monitoring",
        ),
    )


def default_components(facts: PropertyFacts, total_sf: float) -> List[MixedUseComponent]:
    """The 40/30/30 split with NOI allocated from gross income less expenses."""
    gross = facts.gross_income or 0.0
    expenses = facts.operating_expenses or 0.0
    return [
        MixedUseComponent(
            type=profile.type,
            square_footage=total_sf * profile.share,
            floors=profile.floors,
            percent_of_total=profile.share * 100,
            noi=gross * profile.share - expenses * profile.share,
            cap_rate=profile.cap_rate,
            rent_psf=profile.annual_rent_psf / 12,
            occupancy=profile.occupancy,
        )
        for profile in DEFAULT_PROFILES
    ]


def sized_components(facts: PropertyFacts, total_sf: float, log: AssumptionLog) -> List[MixedUseComponent]:
    """Components sized from the per-use SF facts, with placeholder economics."""
    residential_sf = facts.residential_sf
    if not residential_sf:
        residential_sf = log.assume(
            "residentialSF",
            (facts.residential_units or 0) * SF_PER_RESIDENTIAL_UNIT,
            f"Estimated at {SF_PER_RESIDENTIAL_UNIT} SF per residential unit",
        )
    sizes = {
        ComponentTypeEnum.OFFICE: (facts.office_sf or 0.0, facts.office_noi),
        ComponentTypeEnum.RETAIL: (facts.retail_sf or 0.0, facts.retail_noi),
        ComponentTypeEnum.RESIDENTIAL: (residential_sf, facts.residential_noi),
    }
    components = []
    for profile in DEFAULT_PROFILES:
        sf, noi = sizes[profile.type]
        if not sf:
            continue
        components.append(
            MixedUseComponent(
                type=profile.type,
                square_footage=sf,
                floors=profile.floors,
                percent_of_total=sf / total_sf * 100,
                noi=noi or MixedUseComponent.model_fields["noi"].default,
                cap_rate=profile.cap_rate,
                rent_psf=profile.annual_rent_psf / 12,
                occupancy=profile.occupancy,
            )
        )
    log.assume("componentEconomics", "Placeholder cap rate, rent and occupancy per use")
    return components


def resolve_components(
    facts: PropertyFacts, now: datetime, total_sf: float, log: AssumptionLog
) -> List[MixedUseComponent]:
    components = adapt_mixed_use_components(facts.mixed_use_components, now)
    if components:
        return components
    if facts.office_sf or facts.retail_sf or facts.residential_sf or facts.residential_units:
        return sized_components(facts, total_sf, log)
    log.assume("componentSplit", {profile.type.value: profile.share for profile in DEFAULT_PROFILES})
    return default_components(facts, total_sf)


def diversification_index(shares: List[float]) -> float:
    """One minus the largest squared share, 0 for a single use."""
    if not shares:
        return 0.0
    return round(1 - max(share ** 2 for share in shares), 4)


@register_package(PackageId.MIXEDUSE_CROSS_INTERACTIONS)
def cross_interactions(facts: PropertyFacts, now: datetime) -> Optional[PackageBundleResult]:
    total_sf = facts.total_square_footage
    if not (total_sf and facts.retail_sf and facts.office_sf and facts.residential_units):
        return None
    log = AssumptionLog()
    components = resolve_components(facts, now, total_sf, log)
    residential_sf = facts.residential_sf or facts.residential_units * SF_PER_RESIDENTIAL_UNIT
    component_mix = {
        "totalSF": total_sf,
        "retailSF": facts.retail_sf,
        "officeSF": facts.office_sf,
        "residentialUnits": facts.residential_units,
        "residentialSF": residential_sf,
        "diversificationIndex": diversification_index(
            [facts.retail_sf / total_sf, facts.office_sf / total_sf, residential_sf / total_sf]
        ),
    }
    amenities = log.assume("sharedAmenities", list(PLACEHOLDER_AMENITIES))
    tenants = adapt_retail_tenants(facts.retail_tenants, now)
    analysis = analyze_cross_use_interactions(components, tenants, amenities)
    return log.bundle(
        PackageId.MIXEDUSE_CROSS_INTERACTIONS,
        {"componentMix": component_mix, "crossInteractionAnalysis": analysis},
    )


@register_package(PackageId.MIXEDUSE_OPERATIONAL_INTEGRATION)
def operational_integration(facts: PropertyFacts, now: datetime) -> Optional[PackageBundleResult]:
    total_sf = facts.total_square_footage
    if not (total_sf and facts.operating_expenses):
        return None
    log = AssumptionLog()
    components = resolve_components(facts, now, total_sf, log)
    shared = log.assume("sharedSystems", placeholder_shared_systems(total_sf))
    management = log.assume("management", ManagementProfile())
    log.assume("expenses.allocation", "ProRata", "Expense detail not supplied")
    expenses = [AllocatedExpense(category="Operating Expenses", amount=facts.operating_expenses)]
    analysis = analyze_operational_integration(components, shared, management, expenses)
    return log.bundle(PackageId.MIXEDUSE_OPERATIONAL_INTEGRATION, {"operationalIntegration": analysis})


def development_projections(
    total_sf: float, cost: float, target_rent: float, construction: float, lease_up: float
) -> Dict[str, Dict[str, float]]:
    """Project timing and stabilized returns for a ground-up development."""
    stabilized_noi = target_rent * total_sf * DEVELOPMENT_MARGIN
    stabilized_value = stabilized_noi / DEVELOPMENT_CAP_RATE
    total_return = stabilized_value - cost
    return {
        "projectMetrics": {
            "totalSF": total_sf,
            "totalDevelopmentCost": cost,
            "costPerSF": round(cost / total_sf, 2),
            "constructionPeriod": construction,
            "leaseUpPeriod": lease_up,
            "totalProjectPeriod": construction + lease_up,
        },
        "financialProjections": {
            "stabilizedNOI": round(stabilized_noi, 2),
            "stabilizedValue": round(stabilized_value, 2),
            "totalReturn": round(total_return, 2),
            "yieldOnCost": round(stabilized_noi / cost * 100, 2),
            "developmentMargin": round(total_return / cost * 100, 2),
        },
    }


@register_package(PackageId.MIXEDUSE_DEVELOPMENT)
def development(facts: PropertyFacts, now: datetime) -> Optional[PackageBundleResult]:
    total_sf = facts.total_sf or facts.total_square_footage
    if not (total_sf and facts.total_development_cost and facts.target_rents):
        return None
    log = AssumptionLog()
    construction = log.supplied_or("constructionPeriod", facts.construction_period, DEFAULT_CONSTRUCTION_MONTHS)
    lease_up = log.supplied_or("leaseUpPeriod", facts.lease_up_period, DEFAULT_LEASE_UP_MONTHS)
    log.assume("developmentMargin", DEVELOPMENT_MARGIN)
    log.assume("exitCapRate", DEVELOPMENT_CAP_RATE * 100)
    results = development_projections(
        total_sf, facts.total_development_cost, facts.target_rents, construction, lease_up
    )
    if facts.land_area:
        components = resolve_components(facts, now, total_sf, log)
        current_far = total_sf / facts.land_area
        state = DevelopmentState(
            components=components,
            total_sf=total_sf,
            land_area=facts.land_area / ACRE_SF,
            far=current_far,
            parking_spaces=int(facts.parking_spaces or 0),
        )
        zoning = ZoningEnvelope(
            max_far=log.supplied_or("zoning.maxFAR", facts.allowable_far, current_far * FAR_HEADROOM),
            allowed_uses=log.assume("zoning.allowedUses", ["Office", "Retail", "Residential"]),
        )
        demand = log.assume("market.demand", list(PLACEHOLDER_DEMAND))
        costs = log.assume("constructionCostsPSF", dict(PLACEHOLDER_CONSTRUCTION_COSTS))
        results["developmentPotential"] = analyze_mixed_use_development(state, zoning, demand, costs)
    return log.bundle(PackageId.MIXEDUSE_DEVELOPMENT, results)


@register_package(PackageId.MIXEDUSE_PERFORMANCE)
def performance_summary(facts: PropertyFacts, now: datetime) -> Optional[PackageBundleResult]:
    total_sf = facts.total_square_footage
    if not (total_sf and facts.gross_income and facts.operating_expenses):
        return None
    log = AssumptionLog()
    supplied = {
        ComponentTypeEnum.OFFICE: (facts.office_sf, facts.office_noi),
        ComponentTypeEnum.RETAIL: (facts.retail_sf, facts.retail_noi),
        ComponentTypeEnum.RESIDENTIAL: (facts.residential_sf, facts.residential_noi),
    }
    breakdown = {}
    for profile in DEFAULT_PROFILES:
        key = profile.type.value.lower()
        sf, noi = supplied[profile.type]
        breakdown[key] = {
            "sf": log.supplied_or(f"{key}SF", sf, total_sf * profile.share),
            "noi": log.supplied_or(
                f"{key}NOI",
                noi,
                facts.gross_income * profile.share - facts.operating_expenses * profile.share,
            ),
            "occupancy": log.assume(f"{key}.occupancy", profile.occupancy),
            "annualRentPSF": log.assume(f"{key}.annualRentPSF", profile.annual_rent_psf),
        }
    area = sum(part["sf"] for part in breakdown.values())
    total_noi = facts.gross_income - facts.operating_expenses
    blended = {
        "blendedCapRate": round(total_noi / facts.purchase_price * 100, 2) if facts.purchase_price else None,
        "blendedOccupancy": round(
            sum(part["occupancy"] * part["sf"] for part in breakdown.values()) / area, 2
        ) if area else None,
        "totalNOI": total_noi,
        "diversificationIndex": diversification_index(
            [part["sf"] / area for part in breakdown.values()] if area else []
        ),
    }
    return log.bundle(
        PackageId.MIXEDUSE_PERFORMANCE,
        {"performanceAnalysis": {"componentBreakdown": breakdown, "blendedMetrics": blended}},
    )


@register_package(PackageId.MIXED_USE_PERFORMANCE)
def mixed_use_performance(facts: PropertyFacts, now: datetime) -> Optional[PackageBundleResult]:
    total_sf = facts.total_square_footage
    if not (total_sf and facts.gross_income and facts.operating_expenses):
        return None
    log = AssumptionLog()
    log.assume("componentSplit", {profile.type.value: profile.share for profile in DEFAULT_PROFILES})
    components = default_components(facts, total_sf)
    shared = log.assume("sharedSystems", placeholder_shared_systems(total_sf))
    investment = facts.total_investment or facts.purchase_price or 0.0
    debt_service = annual_debt_service(facts.loan_amount, facts.interest_rate, facts.loan_term)
    analysis = analyze_mixed_use_performance(components, shared, investment, debt_service)
    return log.bundle(PackageId.MIXED_USE_PERFORMANCE, {"mixedUsePerformance": analysis})
