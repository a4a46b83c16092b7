# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Office package handlers.

Tenants come from ``office_tenants`` or ``tenants`` and are adapted to
canonical records. Building and market detail the facts do not carry is
filled with placeholders that are reported as assumptions.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import List, Optional

from ..adapters.office import adapt_office_tenants
from ..asset.office.analysis import (
    OfficeMarketBenchmarks,
    analyze_building_operations,
    analyze_lease_economics,
    analyze_lease_expirations,
    analyze_lease_npv,
    analyze_market_positioning,
    analyze_office_market_position,
    analyze_space_efficiency,
    analyze_tenant_credit_risk,
    analyze_tenant_financial_health,
    calculate_enhanced_walt,
)
from ..asset.office.records import (
    BuildingOperations,
    ExpenseItem,
    HvacSystem,
    MarketIntelligence,
    OfficePropertyProfile,
    OfficeTenant,
    Sustainability,
)
from ..core.bundle import PackageBundleResult
from ..core.facts import PropertyFacts
from .assumptions import AssumptionLog
from .registry import PackageId, register_package

logger = logging.getLogger(__name__)

DEFAULT_PROPERTY_AGE = 20
DEFAULT_PARKING_RATIO = 3.0
MARKET_RENT_PREMIUM = 1.1
SUBMARKET_INVENTORY_SF = 10_000_000

# Share of operating expenses, per-SF trend and recoverability by category.
EXPENSE_PROFILE = (
    ("Utilities", 0.35, 3.5, True, False),
    ("Maintenance", 0.25, 2.8, True, False),
    ("Management", 0.15, 2.0, False, True),
)


def _tenants(facts: PropertyFacts, now: datetime) -> List[OfficeTenant]:
    return adapt_office_tenants(facts.office_tenant_list, now)


def placeholder_market(log: AssumptionLog) -> MarketIntelligence:
    """Submarket defaults used when no market survey is supplied."""
    market = MarketIntelligence()
    log.assume("market.submarket", market.submarket_name)
    log.assume("market.vacancy.current", market.vacancy.current)
    log.assume("market.absorption.trailing12Months", market.absorption.trailing_12_months)
    log.assume("market.construction.underConstruction", market.construction.under_construction)
    log.assume("market.employmentGrowth.metro", market.employment_growth.metro)
    log.assume("market.marketRentPSF", market.market_rent_psf)
    log.assume("market.rentGrowth", market.rent_growth)
    return market


def placeholder_building(facts: PropertyFacts, log: AssumptionLog) -> BuildingOperations:
    """Building systems placeholder with operating expenses split by category."""
    rentable_sf = facts.rentable_square_feet
    expenses = []
    for category, share, trend, recoverable, contractual in EXPENSE_PROFILE:
        annual = facts.operating_expenses * share
        expenses.append(
            ExpenseItem(
                category=category,
                annual=annual,
                per_sf=annual / rentable_sf,
                recoverable=recoverable,
                trend_3_year=trend,
                contractual=contractual,
            )
        )
    log.assume("building.expenseShares", {category: share for category, share, *_ in EXPENSE_PROFILE})
    log.assume("building.hvacSystems", "One VAV system, 10 years old, Good condition")
    log.assume("building.sustainability", {"energyStarScore": 75, "leedCertification": "Gold"})
    log.assume("building.staffing", {"engineering": 3, "security": 2, "janitorial": 5})
    return BuildingOperations(
        hvac_systems=[HvacSystem()],
        sustainability=Sustainability(
            energy_star_score=75, energy_star_certified=True, leed_certification="Gold"
        ),
        expenses=expenses,
    )


@register_package(PackageId.OFFICE_TENANT_FINANCIAL_HEALTH)
def tenant_financial_health(facts: PropertyFacts, now: datetime) -> Optional[PackageBundleResult]:
    tenants = _tenants(facts, now)
    if not tenants:
        return None
    log = AssumptionLog()
    market = placeholder_market(log)
    return log.bundle(
        PackageId.OFFICE_TENANT_FINANCIAL_HEALTH,
        {"tenantFinancialHealth": analyze_tenant_financial_health(tenants, market, now)},
    )


@register_package(PackageId.OFFICE_LEASE_ECONOMICS)
def lease_economics(facts: PropertyFacts, now: datetime) -> Optional[PackageBundleResult]:
    tenants = _tenants(facts, now)
    if not tenants:
        return None
    log = AssumptionLog()
    market = placeholder_market(log)
    return log.bundle(
        PackageId.OFFICE_LEASE_ECONOMICS,
        {"leaseEconomics": analyze_lease_economics(tenants, market, now)},
    )


@register_package(PackageId.OFFICE_BUILDING_OPERATIONS)
def building_operations(facts: PropertyFacts, now: datetime) -> Optional[PackageBundleResult]:
    if not (facts.rentable_square_feet and facts.operating_expenses and facts.gross_income):
        return None
    log = AssumptionLog()
    building = placeholder_building(facts, log)
    if facts.year_built:
        age = max(0, now.year - int(facts.year_built))
    else:
        age = log.assume("propertyAge", DEFAULT_PROPERTY_AGE)
    analysis = analyze_building_operations(building, _tenants(facts, now), age, facts.rentable_square_feet)
    return log.bundle(PackageId.OFFICE_BUILDING_OPERATIONS, {"buildingOperations": analysis})


@register_package(PackageId.OFFICE_MARKET_POSITIONING)
def market_positioning(facts: PropertyFacts, now: datetime) -> Optional[PackageBundleResult]:
    if not (facts.rentable_square_feet and facts.occupancy_rate and facts.average_rent_psf):
        return None
    log = AssumptionLog()
    if facts.parking_spaces:
        parking_ratio = facts.parking_spaces / facts.rentable_square_feet * 1000
    else:
        parking_ratio = log.assume("parkingRatio", DEFAULT_PARKING_RATIO)
    profile = OfficePropertyProfile(
        tenants=_tenants(facts, now),
        building=BuildingOperations(),
        total_sf=facts.rentable_square_feet,
        occupancy=facts.occupancy_rate,
        avg_rent=facts.average_rent_psf,
        parking_ratio=parking_ratio,
    )
    log.assume("building", "Default building operations profile")
    market = placeholder_market(log)
    return log.bundle(
        PackageId.OFFICE_MARKET_POSITIONING,
        {"marketPositioning": analyze_market_positioning(profile, market)},
    )


@register_package(PackageId.OFFICE_WALT_ENHANCED)
def walt_enhanced(facts: PropertyFacts, now: datetime) -> Optional[PackageBundleResult]:
    tenants = _tenants(facts, now)
    if not tenants:
        return None
    log = AssumptionLog()
    renewal = log.supplied_or("renewalProbability", facts.option_probability, 75.0)
    return log.bundle(
        PackageId.OFFICE_WALT_ENHANCED,
        {"enhancedWalt": calculate_enhanced_walt(tenants, now, renewal)},
    )


@register_package(PackageId.OFFICE_TENANT_CREDIT_RISK)
def tenant_credit_risk(facts: PropertyFacts, now: datetime) -> Optional[PackageBundleResult]:
    tenants = _tenants(facts, now)
    if not tenants:
        return None
    return AssumptionLog().bundle(
        PackageId.OFFICE_TENANT_CREDIT_RISK,
        {"creditRiskAnalysis": analyze_tenant_credit_risk(tenants)},
    )


@register_package(PackageId.OFFICE_LEASE_EXPIRATION)
def lease_expiration(facts: PropertyFacts, now: datetime) -> Optional[PackageBundleResult]:
    tenants = _tenants(facts, now)
    if not tenants:
        return None
    return AssumptionLog().bundle(
        PackageId.OFFICE_LEASE_EXPIRATION,
        {"leaseExpirationAnalysis": analyze_lease_expirations(tenants, now)},
    )


@register_package(PackageId.OFFICE_SPACE_EFFICIENCY)
def space_efficiency(facts: PropertyFacts, now: datetime) -> Optional[PackageBundleResult]:
    tenants = _tenants(facts, now)
    if not (facts.rentable_square_feet and tenants):
        return None
    return AssumptionLog().bundle(
        PackageId.OFFICE_SPACE_EFFICIENCY,
        {"spaceEfficiencyAnalysis": analyze_space_efficiency(tenants)},
    )


@register_package(PackageId.OFFICE_LEASE_NPV)
def lease_npv(facts: PropertyFacts, now: datetime) -> Optional[PackageBundleResult]:
    tenants = _tenants(facts, now)
    if not (tenants and facts.discount_rate):
        return None
    return AssumptionLog().bundle(
        PackageId.OFFICE_LEASE_NPV,
        {"leaseNPVAnalysis": analyze_lease_npv(tenants, facts.discount_rate, now)},
    )


@register_package(PackageId.OFFICE_MARKET_POSITION)
def market_position(facts: PropertyFacts, now: datetime) -> Optional[PackageBundleResult]:
    if not (facts.rentable_square_feet and facts.average_rent_psf and facts.occupancy_rate):
        return None
    log = AssumptionLog()
    benchmarks = OfficeMarketBenchmarks(
        average_market_rent=log.assume(
            "market.averageMarketRent",
            facts.average_rent_psf * MARKET_RENT_PREMIUM,
            "Not supplied; assumed 10% above the subject's average rent",
        )
    )
    log.assume("market.marketOccupancy", benchmarks.market_occupancy)
    log.assume("market.marketCapRate", benchmarks.market_cap_rate)
    log.assume("market.submarketVacancy", benchmarks.submarket_vacancy)
    log.assume("market.newSupply", benchmarks.new_supply)
    inventory = log.assume("market.submarketInventory", SUBMARKET_INVENTORY_SF)
    analysis = analyze_office_market_position(
        facts.rentable_square_feet,
        facts.average_rent_psf,
        facts.occupancy_rate,
        benchmarks,
        inventory,
    )
    return log.bundle(PackageId.OFFICE_MARKET_POSITION, {"marketPositionAnalysis": analysis})
