# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Multifamily package handlers.

The rent roll is read from ``unitMix`` when it is a list of unit rows;
otherwise a representative roll is synthesized from the summary facts.
Comparable properties, the submarket and the maintenance history are
placeholders.
"""

from __future__ import annotations

import logging
import math
from datetime import datetime, timedelta
from typing import List, Optional

from ..adapters.multifamily import adapt_units, synthesize_units
from ..asset.multifamily.analysis import (
    analyze_market_position,
    analyze_operating_performance,
    analyze_revenue_performance,
    analyze_value_add_potential,
)
from ..asset.multifamily.records import (
    ApartmentProperty,
    ApartmentUnit,
    LocationQuality,
    MaintenanceEntry,
    MarketComp,
    MixEntry,
    OperatingExpenses,
    PropertyAmenities,
    RenovationCosts,
    StaffRole,
    Submarket,
)
from ..core.bundle import PackageBundleResult
from ..core.facts import PropertyFacts
from .assumptions import AssumptionLog
from .registry import PackageId, register_package

logger = logging.getLogger(__name__)

DEFAULT_RENT = 1500.0
DEFAULT_OCCUPANCY = 85.0
DEFAULT_CAP_RATE = 5.5
ASSUMED_EXPENSE_RATIO = 0.40
UNITS_PER_MONTH = 20
PHASING_THRESHOLD = 100

EXPENSE_SHARES = {
    "taxes": 0.12,
    "insurance": 0.07,
    "utilities": 0.15,
    "payroll": 0.20,
    "maintenance": 0.20,
    "management": 0.10,
    "marketing": 0.04,
    "administrative": 0.07,
    "other": 0.05,
}

MAINTENANCE_TYPES = ("Routine", "Emergency", "Turnover", "Capital")
MAINTENANCE_CATEGORIES = ("HVAC", "Plumbing", "Electrical", "Appliance")
MAINTENANCE_VENDORS = ("ABC Plumbing", "XYZ Electric", "HVAC Pro")
MAINTENANCE_WEEKS = 20

PLACEHOLDER_STAFF = (
    StaffRole(role="manager", count=1, avg_salary=65_000, turnover_rate=0.15),
    StaffRole(role="maintenance", count=2, avg_salary=45_000, turnover_rate=0.25),
    StaffRole(role="leasing", count=1, avg_salary=40_000, turnover_rate=0.30),
)

PLACEHOLDER_MIX = {
    "Studio": MixEntry(count=0, avg_rent=0, avg_sf=0),
    "1BR": MixEntry(count=25, avg_rent=1400, avg_sf=700),
    "2BR": MixEntry(count=50, avg_rent=1800, avg_sf=1000),
    "3BR": MixEntry(count=25, avg_rent=2200, avg_sf=1200),
}

PLACEHOLDER_COMPS = (
    MarketComp(
        property_name="Comparable Property 1",
        distance=0.5,
        year_built=2010,
        total_units=200,
        occupancy=94,
        avg_rent_psf=1.8,
        amenity_score=75,
        renovated=True,
        unit_mix=PLACEHOLDER_MIX,
    ),
    MarketComp(
        property_name="Comparable Property 2",
        distance=1.2,
        year_built=1998,
        total_units=240,
        occupancy=91,
        avg_rent_psf=1.55,
        amenity_score=60,
        renovated=False,
        unit_mix=PLACEHOLDER_MIX,
        concession_offered=True,
        concession_type="Free Rent",
        concession_value=500,
    ),
)

RENOVATION_SCOPES = (
    (15_000, "Full Renovation", 200.0),
    (8_000, "Moderate Upgrade", 125.0),
)
LIGHT_SCOPE = ("Light Refresh", 75.0)


def rent_roll(facts: PropertyFacts, now: datetime, average_rent: float, occupancy: float) -> List[ApartmentUnit]:
    """Units from ``unitMix`` rows when supplied, else a synthesized roll."""
    units = adapt_units(facts.unit_mix, now)
    if units:
        return units
    return synthesize_units(facts.number_of_units or facts.total_units, average_rent, occupancy, now=now)


def _comps(log: AssumptionLog) -> List[MarketComp]:
    return log.assume("market.comparables", list(PLACEHOLDER_COMPS))


def maintenance_history(units: List[ApartmentUnit], now: datetime) -> List[MaintenanceEntry]:
    """Twenty weekly work orders cycling through types, categories and vendors."""
    entries = []
    for i in range(MAINTENANCE_WEEKS):
        entries.append(
            MaintenanceEntry(
                date=now - timedelta(weeks=i),
                unit=units[i % len(units)].unit_number if units else None,
                type=MAINTENANCE_TYPES[i % len(MAINTENANCE_TYPES)],
                category=MAINTENANCE_CATEGORIES[i % len(MAINTENANCE_CATEGORIES)],
                cost=50.0 + (i * 97) % 450,
                vendor=MAINTENANCE_VENDORS[i % len(MAINTENANCE_VENDORS)],
            )
        )
    return entries


def renovation_program(budget: float, units: float) -> dict:
    per_unit = budget / units
    scope, rent_increase = LIGHT_SCOPE
    for floor, name, increase in RENOVATION_SCOPES:
        if per_unit > floor:
            scope, rent_increase = name, increase
            break
    return {
        "totalBudget": budget,
        "budgetPerUnit": round(per_unit, 2),
        "scope": scope,
        "targetRentIncrease": rent_increase,
        "timelineMonths": math.ceil(units / UNITS_PER_MONTH),
        "phasedApproach": units > PHASING_THRESHOLD,
    }


@register_package(PackageId.MULTIFAMILY_REVENUE_PERFORMANCE)
def revenue_performance(facts: PropertyFacts, now: datetime) -> Optional[PackageBundleResult]:
    if not (
        facts.number_of_units
        and facts.monthly_rental_income
        and facts.occupancy_rate
        and facts.average_rent_per_unit
    ):
        return None
    log = AssumptionLog()
    units = rent_roll(facts, now, facts.average_rent_per_unit, facts.occupancy_rate)
    return log.bundle(
        PackageId.MULTIFAMILY_REVENUE_PERFORMANCE,
        {"revenuePerformance": analyze_revenue_performance(units, _comps(log))},
    )


@register_package(PackageId.MULTIFAMILY_OPERATING_PERFORMANCE)
def operating_performance(facts: PropertyFacts, now: datetime) -> Optional[PackageBundleResult]:
    if not (facts.operating_expenses and facts.gross_income and facts.number_of_units and facts.current_occupancy):
        return None
    log = AssumptionLog()
    rent = facts.gross_income / 12 / facts.number_of_units
    units = rent_roll(facts, now, rent, facts.current_occupancy)
    log.assume("expenses.categoryShares", EXPENSE_SHARES, "Expense detail not supplied")
    expenses = OperatingExpenses(
        **{name: facts.operating_expenses * share for name, share in EXPENSE_SHARES.items()}
    )
    log.assume("maintenanceLog", f"{MAINTENANCE_WEEKS} weekly work orders", "Maintenance history not supplied")
    staffing = log.assume("staffing", list(PLACEHOLDER_STAFF))
    analysis = analyze_operating_performance(units, expenses, maintenance_history(units, now), staffing, now)
    return log.bundle(PackageId.MULTIFAMILY_OPERATING_PERFORMANCE, {"operatingPerformance": analysis})


@register_package(PackageId.MULTIFAMILY_MARKET_POSITION)
def market_position(facts: PropertyFacts, now: datetime) -> Optional[PackageBundleResult]:
    if not (facts.number_of_units and facts.average_rent and facts.occupancy_rate):
        return None
    log = AssumptionLog()
    units = rent_roll(facts, now, facts.average_rent, facts.occupancy_rate)
    defaults = LocationQuality()
    location = LocationQuality(
        walk_score=log.supplied_or("walkScore", facts.walk_score, defaults.walk_score),
        transit_score=log.supplied_or("transitScore", facts.transit_score, defaults.transit_score),
        school_rating=log.supplied_or("schoolRating", facts.school_rating, defaults.school_rating),
        crime_index=log.supplied_or("crimeIndex", facts.crime_index, defaults.crime_index),
    )
    subject = ApartmentProperty(
        units=units,
        amenities=log.assume("amenities", PropertyAmenities(pool=True, fitness=True, clubhouse=True)),
        year_built=int(log.supplied_or("yearBuilt", facts.year_built, 2005)),
        location=location,
    )
    submarket = log.assume("submarket", Submarket())
    analysis = analyze_market_position(subject, _comps(log), submarket, now)
    return log.bundle(PackageId.MULTIFAMILY_MARKET_POSITION, {"marketPositionAnalysis": analysis})


@register_package(PackageId.MULTIFAMILY_VALUE_ADD)
def value_add(facts: PropertyFacts, now: datetime) -> Optional[PackageBundleResult]:
    if not (facts.number_of_units and facts.average_rent and facts.renovation_budget):
        return None
    log = AssumptionLog()
    occupancy = log.supplied_or("occupancyRate", facts.occupancy_rate, DEFAULT_OCCUPANCY)
    units = rent_roll(facts, now, facts.average_rent, occupancy)
    if facts.current_noi:
        noi = facts.current_noi
    else:
        gross = facts.average_rent * 12 * facts.number_of_units * occupancy / 100
        noi = log.assume(
            "currentNOI",
            gross * (1 - ASSUMED_EXPENSE_RATIO),
            "Estimated from rent and occupancy at a 40% expense ratio",
        )
    cap_rate = log.supplied_or("capRate", facts.cap_rate, DEFAULT_CAP_RATE)
    costs = log.assume("renovationCosts", RenovationCosts())
    analysis = analyze_value_add_potential(units, noi, _comps(log), costs, cap_rate / 100)
    return log.bundle(
        PackageId.MULTIFAMILY_VALUE_ADD,
        {
            "valueAddAnalysis": analysis,
            "renovationProgram": renovation_program(facts.renovation_budget, facts.number_of_units),
        },
    )
