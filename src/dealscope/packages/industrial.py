# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Industrial package handlers.

Building specs are assembled from the facts. Location market data and
delivery volumes fall back to placeholders recorded as assumptions.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Any, Optional, Tuple

from ..adapters.industrial import adapt_industrial_tenants
from ..asset.industrial.analysis import (
    analyze_building_functionality,
    analyze_cold_storage,
    analyze_last_mile_facility,
    analyze_location_logistics,
)
from ..asset.industrial.records import (
    ColdStorageSpecs,
    DeliveryProfile,
    IndustrialBuildingSpecs,
    LocationMetrics,
)
from ..core.bundle import PackageBundleResult
from ..core.facts import PropertyFacts
from ..core.primitives import to_legacy_camel
from ..core.primitives.validation import to_number
from .assumptions import AssumptionLog
from .registry import PackageId, register_package

logger = logging.getLogger(__name__)

DEFAULT_PROPERTY_TYPE = "Warehouse"
DEFAULT_TRUCK_COURT = 130.0
DEFAULT_ENERGY_COST = 0.12
COLD_ZONE_SHARES = {"cooler": 0.4, "freezer": 0.4}
VANS_PER_DOCK = 8
PEAK_HOUR_SHARE = 0.15

PLACEHOLDER_DISTANCES = {
    "distance_to_port": 50.0,
    "distance_to_airport": 25.0,
    "distance_to_rail": 10.0,
    "distance_to_intermodal": 20.0,
}

LAST_MILE_DEFAULTS = {
    "clear_height": 24.0,
    "number_of_dock_doors": 4,
    "number_of_drive_in_doors": 2,
    "power_capacity": 400.0,
}


def _building_specs(facts: PropertyFacts, log: AssumptionLog, defaults=None) -> IndustrialBuildingSpecs:
    defaults = defaults or {}

    def pick(name: str, fallback: Any = None) -> Any:
        value = getattr(facts, name)
        if value:
            return value
        if name in defaults:
            return log.assume(to_legacy_camel(name), defaults[name])
        return fallback

    return IndustrialBuildingSpecs(
        total_sf=facts.square_footage,
        clear_height=pick("clear_height"),
        dock_doors=int(pick("number_of_dock_doors", 0)),
        drive_in_doors=int(pick("number_of_drive_in_doors", 0)),
        power_capacity_kw=pick("power_capacity", 0.0),
        truck_court_depth=log.supplied_or("truckCourtDepth", facts.truck_court_depth, DEFAULT_TRUCK_COURT),
    )


def _location(facts: PropertyFacts, log: AssumptionLog, airport: Optional[float] = None) -> LocationMetrics:
    distances = {}
    for name, fallback in PLACEHOLDER_DISTANCES.items():
        if name == "distance_to_airport" and airport is not None:
            fallback = airport
        distances[name] = log.supplied_or(to_legacy_camel(name), getattr(facts, name), fallback)
    market = LocationMetrics(distance_to_highway=facts.distance_to_highway)
    population = log.supplied_or("populationOneHour", facts.population_one_hour, market.population_one_hour)
    log.assume("market.submarket", market.submarket)
    log.assume("market.vacancyRate", market.vacancy_rate)
    log.assume("market.averageHourlyWage", market.average_hourly_wage)
    log.assume("market.averageAskingRent", market.average_asking_rent)
    return LocationMetrics(
        distance_to_highway=facts.distance_to_highway,
        population_one_hour=population,
        **distances,
    )


def cold_zone_split(facts: PropertyFacts, log: AssumptionLog) -> Tuple[float, float, float]:
    """
    Cooler, freezer and blast freezer SF.

    Read from ``temperatureRanges`` entries shaped ``{"zone": ..., "sf": ...}``
    when supplied, else a 40% cooler and 40% freezer split of the building.
    """
    cooler = freezer = blast = 0.0
    ranges = facts.temperature_ranges
    if isinstance(ranges, (list, tuple)):
        for entry in ranges:
            if not isinstance(entry, dict):
                continue
            zone = str(entry.get("zone", "")).lower()
            sf = to_number(entry.get("sf")) or 0.0
            if "blast" in zone:
                blast += sf
            elif "frozen" in zone or "freezer" in zone:
                freezer += sf
            elif "cool" in zone:
                cooler += sf
    if cooler + freezer + blast > 0:
        return cooler, freezer, blast
    log.assume("coldStorage.zoneShares", COLD_ZONE_SHARES, "Temperature zone layout not supplied")
    total = facts.square_footage
    return total * COLD_ZONE_SHARES["cooler"], total * COLD_ZONE_SHARES["freezer"], 0.0


@register_package(PackageId.INDUSTRIAL_BUILDING_FUNCTIONALITY)
def building_functionality(facts: PropertyFacts, now: datetime) -> Optional[PackageBundleResult]:
    if not (facts.square_footage and facts.clear_height and facts.number_of_dock_doors and facts.power_capacity):
        return None
    log = AssumptionLog()
    specs = _building_specs(facts, log)
    property_type = log.assume("industrialPropertyType", DEFAULT_PROPERTY_TYPE)
    tenants = adapt_industrial_tenants(facts.industrial_tenants, now)
    return log.bundle(
        PackageId.INDUSTRIAL_BUILDING_FUNCTIONALITY,
        {"buildingFunctionality": analyze_building_functionality(specs, tenants, property_type)},
    )


@register_package(PackageId.INDUSTRIAL_LOCATION_LOGISTICS)
def location_logistics(facts: PropertyFacts, now: datetime) -> Optional[PackageBundleResult]:
    if not (facts.square_footage and facts.distance_to_highway):
        return None
    log = AssumptionLog()
    location = _location(facts, log)
    property_type = log.assume("industrialPropertyType", DEFAULT_PROPERTY_TYPE)
    tenants = adapt_industrial_tenants(facts.industrial_tenants, now)
    return log.bundle(
        PackageId.INDUSTRIAL_LOCATION_LOGISTICS,
        {"locationLogistics": analyze_location_logistics(location, property_type, tenants)},
    )


@register_package(PackageId.INDUSTRIAL_COLD_STORAGE)
def cold_storage(facts: PropertyFacts, now: datetime) -> Optional[PackageBundleResult]:
    if not (facts.square_footage and facts.clear_height and facts.temperature_control):
        return None
    log = AssumptionLog()
    cooler, freezer, blast = cold_zone_split(facts, log)
    redundancy = "N+1" if (facts.refrigeration_systems or 0) > 1 else "None"
    cold = ColdStorageSpecs(
        cooler_sf=cooler,
        freezer_sf=freezer,
        blast_freezer_sf=blast,
        redundancy=redundancy,
    )
    log.assume("coldStorage.refrigerationSystem", cold.refrigeration_system)
    energy_cost = log.supplied_or("powerCostPerKwh", facts.power_cost_per_kwh, DEFAULT_ENERGY_COST)
    tenants = adapt_industrial_tenants(facts.industrial_tenants, now)
    analysis = analyze_cold_storage(cold, facts.square_footage, tenants, energy_cost)
    return log.bundle(PackageId.INDUSTRIAL_COLD_STORAGE, {"coldStorageAnalysis": analysis})


@register_package(PackageId.INDUSTRIAL_LAST_MILE)
def last_mile(facts: PropertyFacts, now: datetime) -> Optional[PackageBundleResult]:
    if not (facts.square_footage and facts.distance_to_highway and facts.population_one_hour):
        return None
    log = AssumptionLog()
    specs = _building_specs(facts, log, LAST_MILE_DEFAULTS)
    location = _location(facts, log, airport=15.0)
    daily = log.supplied_or("ecommerceDeliveryVolume", facts.ecommerce_delivery_volume, 5000.0)
    log.assume("delivery.peakHourShare", PEAK_HOUR_SHARE)
    delivery = DeliveryProfile(
        daily_deliveries=daily,
        peak_hour_deliveries=daily * PEAK_HOUR_SHARE,
        vans=specs.dock_doors * VANS_PER_DOCK,
    )
    log.assume("delivery.fleet", {"vans": delivery.vans, "boxTrucks": 0, "semis": 0})
    return log.bundle(
        PackageId.INDUSTRIAL_LAST_MILE,
        {"lastMileAnalysis": analyze_last_mile_facility(specs, location, delivery)},
    )
