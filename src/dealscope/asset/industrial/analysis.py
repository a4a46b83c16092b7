# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Industrial Property Analysis

Building functionality scoring against per-type requirements, location and
logistics scoring, cold storage operations and last-mile facility fitness.
"""

from __future__ import annotations

import logging
import math
from typing import Dict, List, Optional, Sequence

from ...core.primitives import CamelModel, IndustrialPropertyTypeEnum, Model
from .._scoring import clamp, safe_ratio
from .records import (
    ColdStorageSpecs,
    DeliveryProfile,
    IndustrialBuildingSpecs,
    IndustrialTenant,
    LocationMetrics,
)

logger = logging.getLogger(__name__)

NATIONAL_AVERAGE_HOURLY_WAGE = 18.50


class TypeRequirements(Model):
    """Minimum and ideal physical thresholds for an industrial property type."""

    min_clear_height: float
    ideal_clear_height: float
    min_dock_ratio: float
    ideal_dock_ratio: float
    min_power_per_sf: float
    ideal_power_per_sf: float


TYPE_REQUIREMENTS: Dict[str, TypeRequirements] = {
    IndustrialPropertyTypeEnum.WAREHOUSE.value: TypeRequirements(
        min_clear_height=24, ideal_clear_height=32, min_dock_ratio=0.8,
        ideal_dock_ratio=1.2, min_power_per_sf=2, ideal_power_per_sf=3,
    ),
    IndustrialPropertyTypeEnum.MANUFACTURING.value: TypeRequirements(
        min_clear_height=20, ideal_clear_height=28, min_dock_ratio=0.5,
        ideal_dock_ratio=0.8, min_power_per_sf=5, ideal_power_per_sf=10,
    ),
    IndustrialPropertyTypeEnum.FLEX.value: TypeRequirements(
        min_clear_height=16, ideal_clear_height=20, min_dock_ratio=0.3,
        ideal_dock_ratio=0.5, min_power_per_sf=3, ideal_power_per_sf=5,
    ),
    IndustrialPropertyTypeEnum.COLD_STORAGE.value: TypeRequirements(
        min_clear_height=28, ideal_clear_height=35, min_dock_ratio=1.0,
        ideal_dock_ratio=1.5, min_power_per_sf=10, ideal_power_per_sf=15,
    ),
    IndustrialPropertyTypeEnum.LAST_MILE.value: TypeRequirements(
        min_clear_height=18, ideal_clear_height=24, min_dock_ratio=1.5,
        ideal_dock_ratio=2.5, min_power_per_sf=2, ideal_power_per_sf=3,
    ),
}

IMPACT_ORDER = {"Critical": 0, "High": 1, "Medium": 2, "Low": 3}


def get_type_requirements(property_type: str) -> TypeRequirements:
    """Requirements for ``property_type``; unknown types use the Warehouse profile."""
    return TYPE_REQUIREMENTS.get(property_type, TYPE_REQUIREMENTS[IndustrialPropertyTypeEnum.WAREHOUSE.value])


def _threshold_score(value: float, minimum: float, ideal: float) -> float:
    """100 at or above ideal, 50-100 between minimum and ideal, proportional below."""
    if value >= ideal:
        return 100.0
    if value >= minimum:
        return 50 + safe_ratio(value - minimum, ideal - minimum) * 50
    return safe_ratio(value, minimum) * 50


# ---------------------------------------------------------------------------
# Building functionality
# ---------------------------------------------------------------------------


class FunctionalScore(CamelModel):
    overall: float
    clear_height: float
    loading: float
    power: float
    layout: float
    special_features: float


class TenantSuitability(CamelModel):
    tenant: str
    requirements_met: float
    gaps: List[str]
    critical_gaps: bool


class ModernizationNeed(CamelModel):
    item: str
    cost: float
    impact: str


class IndustrialPositioning(CamelModel):
    classification: str
    competitive_advantages: List[str]
    functional_obsolescence: List[str]
    modernization_needs: List[ModernizationNeed]


class BuildingEfficiency(CamelModel):
    cubic_footage: float
    cubic_foot_per_dock: float
    dock_door_ratio: float
    employee_parking_ratio: float
    trailer_parking_ratio: float
    column_efficiency: float


class BuildingFunctionality(CamelModel):
    functional_score: FunctionalScore
    tenant_suitability: List[TenantSuitability]
    market_positioning: IndustrialPositioning
    efficiency: BuildingEfficiency


def truck_court_multiplier(depth: float) -> float:
    if depth >= 130:
        return 1.0
    if depth >= 120:
        return 0.9
    if depth >= 110:
        return 0.7
    return 0.5


def classify_building(overall: float, clear_height: float) -> str:
    if overall >= 85 and clear_height >= 32:
        return "Class A"
    if overall >= 70 and clear_height >= 24:
        return "Class B"
    return "Class C"


def calculate_column_efficiency(width: float, depth: float, total_sf: float) -> float:
    """Share of floor area outside 2x2 ft column footprints, in percent."""
    bay = width * depth
    if bay <= 0 or total_sf <= 0:
        return 0.0
    footprint = total_sf / bay * 4
    return (total_sf - footprint) / total_sf * 100


def _suitability(tenant: IndustrialTenant, specs: IndustrialBuildingSpecs) -> TenantSuitability:
    gaps: List[str] = []
    met = 100.0
    if specs.clear_height < tenant.clear_height_required:
        gaps.append(f"Clear height {specs.clear_height:g}' < required {tenant.clear_height_required:g}'")
        met -= 25
    if specs.dock_doors < tenant.dock_doors_required:
        gaps.append(f"{specs.dock_doors} dock doors < required {tenant.dock_doors_required}")
        met -= 20
    needed_kw = tenant.power_requirement * tenant.square_footage / 1000
    available_kw = specs.power_capacity_kw * safe_ratio(tenant.square_footage, specs.total_sf)
    if available_kw < needed_kw:
        gaps.append("Insufficient power capacity")
        met -= 15
    if tenant.rail_access and specs.rail_siding is None:
        gaps.append("No rail access available")
        met -= 20
    if tenant.temperature_control != "Ambient" and specs.cold_storage is None:
        gaps.append("No temperature-controlled space")
        met -= 30
    met = max(0.0, met)
    return TenantSuitability(tenant=tenant.tenant_name, requirements_met=met, gaps=gaps, critical_gaps=met < 70)


def analyze_building_functionality(
    specs: IndustrialBuildingSpecs,
    tenants: Sequence[IndustrialTenant],
    property_type: str = IndustrialPropertyTypeEnum.WAREHOUSE.value,
) -> BuildingFunctionality:
    """
    Score a building's physical functionality for its property type.

    Component scores are weighted 0.25 clear height, 0.25 loading, 0.20 power,
    0.20 layout and 0.10 special features. Loading is scaled by truck court
    depth. Power is measured in watts per SF.
    """
    requirements = get_type_requirements(property_type)
    cubic_footage = specs.total_sf * specs.clear_height
    dock_ratio = safe_ratio(specs.dock_doors, specs.total_sf) * 10_000
    power_per_sf = safe_ratio(specs.power_capacity_kw * 1000, specs.total_sf)

    clear_score = _threshold_score(
        specs.clear_height, requirements.min_clear_height, requirements.ideal_clear_height
    )
    loading_score = min(100.0, safe_ratio(dock_ratio, requirements.ideal_dock_ratio) * 100)
    loading_score *= truck_court_multiplier(specs.truck_court_depth)
    power_score = _threshold_score(power_per_sf, requirements.min_power_per_sf, requirements.ideal_power_per_sf)

    width, depth = specs.column_dimensions
    column_area = width * depth
    layout_score = 70.0
    if column_area >= 3000:
        layout_score += 20
    elif column_area >= 2000:
        layout_score += 10
    if specs.bay_depth >= 48:
        layout_score += 10
    elif specs.bay_depth >= 40:
        layout_score += 5
    layout_score = min(100.0, layout_score)

    special_score = 50.0
    if specs.fire_suppression_type == "ESFR":
        special_score += 20
    if specs.lighting_type == "LED":
        special_score += 10
    if specs.rail_siding is not None:
        special_score += 10
    if specs.crane_system is not None:
        special_score += 10

    overall = (
        clear_score * 0.25 + loading_score * 0.25 + power_score * 0.20 + layout_score * 0.20 + special_score * 0.10
    )

    advantages: List[str] = []
    if specs.clear_height >= 36:
        advantages.append("36'+ clear height")
    if dock_ratio >= 1.5:
        advantages.append("Abundant loading")
    if specs.truck_court_depth >= 130:
        advantages.append("Deep truck courts")
    if specs.rail_siding is not None:
        advantages.append("Rail-served")
    if specs.fire_suppression_type == "ESFR":
        advantages.append("ESFR sprinklers")
    if specs.lighting_type == "LED":
        advantages.append("LED lighting")
    if power_per_sf >= 5:
        advantages.append("High power capacity")

    obsolescence: List[str] = []
    if specs.clear_height < 24:
        obsolescence.append("Low clear height")
    if dock_ratio < 1.0:
        obsolescence.append("Insufficient dock doors")
    if specs.truck_court_depth < 120:
        obsolescence.append("Shallow truck courts")
    if column_area < 2000:
        obsolescence.append("Tight column spacing")
    if specs.lighting_type != "LED":
        obsolescence.append("Outdated lighting")

    needs: List[ModernizationNeed] = []
    if specs.clear_height < requirements.min_clear_height:
        needs.append(ModernizationNeed(item="Raise roof/clear height", cost=specs.total_sf * 25, impact="Critical"))
    if dock_ratio < 1.0:
        doors = math.ceil(specs.total_sf / 10_000 - specs.dock_doors)
        needs.append(ModernizationNeed(item=f"Add {doors} dock doors", cost=doors * 25_000, impact="High"))
    if specs.lighting_type != "LED":
        needs.append(ModernizationNeed(item="LED lighting retrofit", cost=specs.total_sf * 2.5, impact="Medium"))
    if power_per_sf < requirements.min_power_per_sf:
        needs.append(ModernizationNeed(item="Electrical service upgrade", cost=specs.total_sf * 5, impact="High"))
    needs.sort(key=lambda need: IMPACT_ORDER[need.impact])

    employees = sum(tenant.employee_count for tenant in tenants)
    parking = sum(tenant.parking_required for tenant in tenants)
    trailer_spaces = math.ceil(specs.dock_doors * 1.5)

    return BuildingFunctionality(
        functional_score=FunctionalScore(
            overall=round(overall, 1),
            clear_height=round(clear_score, 1),
            loading=round(loading_score, 1),
            power=round(power_score, 1),
            layout=round(layout_score, 1),
            special_features=round(special_score, 1),
        ),
        tenant_suitability=[_suitability(tenant, specs) for tenant in tenants],
        market_positioning=IndustrialPositioning(
            classification=classify_building(overall, specs.clear_height),
            competitive_advantages=advantages,
            functional_obsolescence=obsolescence,
            modernization_needs=needs,
        ),
        efficiency=BuildingEfficiency(
            cubic_footage=cubic_footage,
            cubic_foot_per_dock=round(safe_ratio(cubic_footage, specs.dock_doors)),
            dock_door_ratio=round(dock_ratio, 2),
            employee_parking_ratio=round(safe_ratio(parking, employees), 1),
            trailer_parking_ratio=round(safe_ratio(trailer_spaces, specs.dock_doors), 1),
            column_efficiency=round(calculate_column_efficiency(width, depth, specs.total_sf), 1),
        ),
    )


# ---------------------------------------------------------------------------
# Location and logistics
# ---------------------------------------------------------------------------


class LocationScore(CamelModel):
    overall: float
    transportation: float
    labor: float
    market: float


class LogisticsProfile(CamelModel):
    last_mile_suitability: float
    regional_distribution: float
    national_distribution: float
    manufacturing_suitability: float


class LaborAnalysis(CamelModel):
    availability: str
    cost_competitiveness: int
    skill_match: List[str]
    risks: List[str]


class MarketDynamics(CamelModel):
    supply_demand_balance: str
    rent_growth_potential: float
    occupancy_outlook: str
    competitive_threats: List[str]


class DistributionReach(CamelModel):
    one_day: float
    two_day: float


class StrategicValue(CamelModel):
    ecommerce_fulfillment: float
    port_proximity: float
    intermodal_access: float
    distribution_reach: DistributionReach


class LocationLogistics(CamelModel):
    location_score: LocationScore
    logistics_profile: LogisticsProfile
    labor_analysis: LaborAnalysis
    market_dynamics: MarketDynamics
    strategic_value: StrategicValue


def _within(distance: Optional[float], limit: float) -> bool:
    return distance is not None and distance <= limit


def calculate_last_mile_suitability(location: LocationMetrics, transportation: float) -> float:
    score = transportation * 0.3
    if location.population_one_hour >= 1_000_000:
        score += 40
    elif location.population_one_hour >= 500_000:
        score += 25
    elif location.population_one_hour >= 250_000:
        score += 15
    if location.distance_to_highway <= 3:
        score += 20
    elif location.distance_to_highway <= 5:
        score += 10
    return min(100.0, score)


def calculate_regional_suitability(location: LocationMetrics, transportation: float) -> float:
    score = transportation * 0.4
    if location.distance_to_highway <= 1:
        score += 30
    elif location.distance_to_highway <= 3:
        score += 20
    if location.population_one_hour >= 500_000:
        score += 20
    if _within(location.distance_to_rail, 5):
        score += 10
    return min(100.0, score)


def calculate_national_suitability(location: LocationMetrics, transportation: float) -> float:
    score = transportation * 0.3
    if _within(location.distance_to_intermodal, 10):
        score += 30
    elif _within(location.distance_to_rail, 2):
        score += 20
    if location.distance_to_highway <= 1:
        score += 20
    if _within(location.distance_to_airport, 10):
        score += 20
    return min(100.0, score)


def calculate_manufacturing_suitability(location: LocationMetrics, labor: float) -> float:
    score = labor * 0.5
    if location.average_hourly_wage < 20:
        score += 20
    if location.population_one_hour >= 250_000:
        score += 15
    if not location.union_presence:
        score += 15
    return min(100.0, score)


def analyze_location_logistics(
    location: LocationMetrics,
    property_type: str,
    tenants: Sequence[IndustrialTenant],
) -> LocationLogistics:
    """
    Transportation, labor and market scores for an industrial location.

    The overall score weights transportation 0.4, labor 0.3 and market 0.3.
    Wages are hourly and compared with a national average of $18.50.
    """
    kind = property_type.lower()
    is_last_mile = "last mile" in kind
    is_distribution = "warehouse" in kind or "distribution" in kind
    is_manufacturing = "manufacturing" in kind

    transportation = 50.0
    if location.distance_to_highway <= 1:
        transportation += 30
    elif location.distance_to_highway <= 3:
        transportation += 20
    elif location.distance_to_highway <= 5:
        transportation += 10
    else:
        transportation -= 10
    if is_last_mile and location.distance_to_highway <= 0.5:
        transportation += 10
    if is_distribution and _within(location.distance_to_port, 50):
        transportation += 15
    if is_manufacturing and _within(location.distance_to_rail, 2):
        transportation += 20
    if _within(location.distance_to_port, 25):
        transportation += 10
    if _within(location.distance_to_rail, 1):
        transportation += 10
    transportation = clamp(transportation)

    labor = 50.0
    if location.population_one_hour >= 1_000_000:
        labor += 20
    elif location.population_one_hour >= 500_000:
        labor += 10
    elif location.population_one_hour < 250_000:
        labor -= 10
    wage_ratio = location.average_hourly_wage / NATIONAL_AVERAGE_HOURLY_WAGE
    if wage_ratio < 0.9:
        labor += 15
    elif wage_ratio < 1.0:
        labor += 10
    elif wage_ratio > 1.2:
        labor -= 10
    if location.unemployment_rate > 5:
        labor += 10
    elif location.unemployment_rate < 3:
        labor -= 5
    labor = clamp(labor)

    market = 50.0
    if location.vacancy_rate < 3:
        market += 20
    elif location.vacancy_rate < 5:
        market += 10
    elif location.vacancy_rate > 10:
        market -= 20
    elif location.vacancy_rate > 7:
        market -= 10
    absorption_ratio = safe_ratio(location.net_absorption_12_months, location.total_inventory_sf)
    if absorption_ratio > 0.03:
        market += 15
    elif absorption_ratio > 0.01:
        market += 10
    elif absorption_ratio < -0.01:
        market -= 10
    pipeline_ratio = safe_ratio(location.under_construction, location.total_inventory_sf)
    if pipeline_ratio < 0.02:
        market += 10
    elif pipeline_ratio > 0.08:
        market -= 20
    elif pipeline_ratio > 0.05:
        market -= 10
    market = clamp(market)

    overall = transportation * 0.4 + labor * 0.3 + market * 0.3
    last_mile = calculate_last_mile_suitability(location, transportation)

    population = location.population_one_hour
    if population > 1_000_000 and location.unemployment_rate > 4:
        availability = "Abundant"
    elif population > 500_000 and location.unemployment_rate > 3:
        availability = "Adequate"
    elif population > 250_000:
        availability = "Tight"
    else:
        availability = "Critical"
    if wage_ratio < 0.9:
        cost_competitiveness = 90
    elif wage_ratio < 1.0:
        cost_competitiveness = 75
    elif wage_ratio < 1.1:
        cost_competitiveness = 50
    else:
        cost_competitiveness = 25

    skills: List[str] = []
    if any(tenant.industry in ("Logistics", "Distribution") for tenant in tenants):
        skills.extend(["Warehouse workers", "Forklift operators", "Logistics coordinators"])
    if any(tenant.industry == "Manufacturing" for tenant in tenants):
        skills.extend(["Machine operators", "Quality control", "Maintenance technicians"])
    risks: List[str] = []
    if location.unemployment_rate < 3:
        risks.append("Tight labor market")
    if location.union_presence:
        risks.append("Union presence")
    if wage_ratio > 1.2:
        risks.append("Above-average wage pressure")

    if location.vacancy_rate > 8 or pipeline_ratio > 0.08:
        balance = "Oversupplied"
    elif location.vacancy_rate < 4 and pipeline_ratio < 0.03:
        balance = "Undersupplied"
    else:
        balance = "Balanced"
    if location.vacancy_rate < 5 and absorption_ratio > 0.02:
        rent_growth = 5.0
    elif location.vacancy_rate < 7 and absorption_ratio > 0:
        rent_growth = 3.0
    elif location.vacancy_rate > 10 or absorption_ratio < 0:
        rent_growth = 0.0
    else:
        rent_growth = 2.0
    if absorption_ratio > 0.02 and pipeline_ratio < 0.05:
        outlook = "Strengthening"
    elif absorption_ratio < -0.01 or pipeline_ratio > 0.08:
        outlook = "Weakening"
    else:
        outlook = "Stable"
    threats: List[str] = []
    if pipeline_ratio > 0.05:
        threats.append(f"{pipeline_ratio * 100:.1f}% new supply coming")
    if location.vacancy_rate > 10:
        threats.append("High existing vacancy")
    if absorption_ratio < 0:
        threats.append("Negative net absorption")

    port = max(0.0, 100 - location.distance_to_port * 2) if location.distance_to_port else 0.0
    intermodal = max(0.0, 100 - location.distance_to_intermodal * 10) if location.distance_to_intermodal else 0.0

    return LocationLogistics(
        location_score=LocationScore(
            overall=round(overall, 1),
            transportation=round(transportation, 1),
            labor=round(labor, 1),
            market=round(market, 1),
        ),
        logistics_profile=LogisticsProfile(
            last_mile_suitability=round(last_mile, 1),
            regional_distribution=round(calculate_regional_suitability(location, transportation), 1),
            national_distribution=round(calculate_national_suitability(location, transportation), 1),
            manufacturing_suitability=round(calculate_manufacturing_suitability(location, labor), 1),
        ),
        labor_analysis=LaborAnalysis(
            availability=availability,
            cost_competitiveness=cost_competitiveness,
            skill_match=skills,
            risks=risks,
        ),
        market_dynamics=MarketDynamics(
            supply_demand_balance=balance,
            rent_growth_potential=rent_growth,
            occupancy_outlook=outlook,
            competitive_threats=threats,
        ),
        strategic_value=StrategicValue(
            ecommerce_fulfillment=round(last_mile * 0.7 + (30 if population > 1_000_000 else 15), 1),
            port_proximity=round(port, 1),
            intermodal_access=round(intermodal, 1),
            distribution_reach=DistributionReach(one_day=round(population * 20), two_day=round(population * 50)),
        ),
    )


# ---------------------------------------------------------------------------
# Cold storage
# ---------------------------------------------------------------------------

ENERGY_INTENSITY = {"ambient": 15, "cooler": 35, "freezer": 55, "blast_freezer": 85}
ASSUMED_EQUIPMENT_AGE = 10


class TemperatureZoneMix(CamelModel):
    ambient: float
    cooler: float
    freezer: float
    blast_freezer: float


class ColdOperationalMetrics(CamelModel):
    temperature_zone_mix: TemperatureZoneMix
    energy_intensity: float
    estimated_energy_cost: float
    pue: float


class RefrigerationAnalysis(CamelModel):
    system_redundancy: str
    backup_power_coverage: float
    ammonia_safety: bool
    temperature_monitoring: str
    alarm_systems: List[str]


class ColdTenantRequirement(CamelModel):
    tenant: str
    temp_required: str
    temp_provided: bool
    capacity_available: float
    special_requirements: List[str]


class ColdMarketPosition(CamelModel):
    cold_storage_percentage: float
    market_demand_level: str
    premium_over_dry_warehouse: float
    competitive_advantages: List[str]


class ReplacementItem(CamelModel):
    component: str
    years_remaining: float
    estimated_cost: float


class EfficiencyUpgrade(CamelModel):
    upgrade: str
    cost: float
    payback_period: float


class ColdStorageAnalysis(CamelModel):
    operational_metrics: ColdOperationalMetrics
    refrigeration_analysis: RefrigerationAnalysis
    tenant_requirements: List[ColdTenantRequirement]
    market_position: ColdMarketPosition
    equipment_age: float
    replacement_schedule: List[ReplacementItem]
    energy_efficiency_upgrades: List[EfficiencyUpgrade]


def _zone_capacity(
    tenant: IndustrialTenant, tenants: Sequence[IndustrialTenant], zone: str, zone_sf: float
) -> float:
    others = sum(
        other.square_footage for other in tenants
        if other is not tenant and other.temperature_control == zone
    )
    return zone_sf - others


def analyze_cold_storage(
    cold: Optional[ColdStorageSpecs],
    total_sf: float,
    tenants: Sequence[IndustrialTenant],
    energy_cost_per_kwh: float,
) -> Optional[ColdStorageAnalysis]:
    """
    Temperature zone mix, energy use, refrigeration resilience and tenant fit.

    Returns ``None`` when the building has no cold storage.
    """
    if cold is None:
        return None

    cold_sf = cold.total_cold_sf
    ambient_sf = total_sf - cold_sf
    mix = TemperatureZoneMix(
        ambient=round(safe_ratio(ambient_sf, total_sf) * 100, 1),
        cooler=round(safe_ratio(cold.cooler_sf, total_sf) * 100, 1),
        freezer=round(safe_ratio(cold.freezer_sf, total_sf) * 100, 1),
        blast_freezer=round(safe_ratio(cold.blast_freezer_sf, total_sf) * 100, 1),
    )
    usage = (
        ambient_sf * ENERGY_INTENSITY["ambient"]
        + cold.cooler_sf * ENERGY_INTENSITY["cooler"]
        + cold.freezer_sf * ENERGY_INTENSITY["freezer"]
        + cold.blast_freezer_sf * ENERGY_INTENSITY["blast_freezer"]
    )

    redundancy = "None"
    for level in ("2N", "N+2", "N+1"):
        if level in cold.redundancy:
            redundancy = level
            break
    backup = safe_ratio(cold_sf, total_sf) * 100 if redundancy != "None" else 0.0
    ammonia = "Ammonia" in cold.refrigeration_system
    if "IoT" in cold.refrigeration_system:
        monitoring = "IoT-Enabled"
    elif "Automated" in cold.refrigeration_system:
        monitoring = "Automated"
    else:
        monitoring = "Manual"
    alarms = ["Temperature deviation", "Power failure", "Refrigerant leak"]
    if ammonia:
        alarms.append("Ammonia detection")

    zone_sf = {"Ambient": ambient_sf, "Cooler": cold.cooler_sf, "Freezer": cold.freezer_sf}
    requirements = []
    for tenant in tenants:
        zone = tenant.temperature_control
        provided = zone == "Ambient" or zone_sf.get(zone, 0.0) > 0
        capacity = _zone_capacity(tenant, tenants, zone, zone_sf[zone]) if zone in zone_sf else 0.0
        special: List[str] = []
        if tenant.hazmat_permits:
            special.append("Hazmat storage")
        if tenant.operating_hours == "24/7":
            special.append("24/7 access")
        if tenant.rail_access:
            special.append("Rail access")
        requirements.append(
            ColdTenantRequirement(
                tenant=tenant.tenant_name,
                temp_required=zone,
                temp_provided=provided,
                capacity_available=max(0.0, capacity),
                special_requirements=special,
            )
        )

    cold_pct = safe_ratio(cold_sf, total_sf) * 100
    demand = "High" if cold_pct > 50 else "Medium" if cold_pct > 20 else "Low"
    if cold_pct > 80:
        premium = 100.0
    elif cold_pct > 50:
        premium = 75.0
    elif cold_pct > 20:
        premium = 50.0
    else:
        premium = 30.0
    advantages: List[str] = []
    if redundancy != "None":
        advantages.append(f"{redundancy} redundancy")
    if cold.blast_freezer_sf:
        advantages.append("Blast freezing capability")
    if monitoring == "IoT-Enabled":
        advantages.append("IoT monitoring")
    if backup > 90:
        advantages.append("Full backup power")

    schedule = [
        ReplacementItem(component=component, years_remaining=max(0, life - ASSUMED_EQUIPMENT_AGE), estimated_cost=cold_sf * cost)
        for component, life, cost in (
            ("Compressors", 20, 15),
            ("Condensers", 15, 10),
            ("Evaporators", 15, 8),
            ("Controls", 10, 5),
        )
    ]
    upgrades = [
        EfficiencyUpgrade(upgrade="Variable frequency drives", cost=cold_sf * 3, payback_period=3.5),
        EfficiencyUpgrade(upgrade="LED lighting conversion", cost=cold_sf * 2, payback_period=2.5),
        EfficiencyUpgrade(upgrade="Automated door systems", cost=50_000, payback_period=4.0),
        EfficiencyUpgrade(upgrade="Advanced controls/IoT", cost=cold_sf * 4, payback_period=3.0),
    ]

    return ColdStorageAnalysis(
        operational_metrics=ColdOperationalMetrics(
            temperature_zone_mix=mix,
            energy_intensity=round(safe_ratio(usage, total_sf), 1),
            estimated_energy_cost=round(usage * energy_cost_per_kwh),
            pue=1.3,
        ),
        refrigeration_analysis=RefrigerationAnalysis(
            system_redundancy=redundancy,
            backup_power_coverage=round(backup, 1),
            ammonia_safety=ammonia,
            temperature_monitoring=monitoring,
            alarm_systems=alarms,
        ),
        tenant_requirements=requirements,
        market_position=ColdMarketPosition(
            cold_storage_percentage=round(cold_pct, 1),
            market_demand_level=demand,
            premium_over_dry_warehouse=premium,
            competitive_advantages=advantages,
        ),
        equipment_age=ASSUMED_EQUIPMENT_AGE,
        replacement_schedule=[item for item in schedule if item.years_remaining < 10],
        energy_efficiency_upgrades=upgrades,
    )


# ---------------------------------------------------------------------------
# Last mile
# ---------------------------------------------------------------------------

VEHICLE_CAPACITY = {"vans": 150, "box_trucks": 300, "semis": 2000}
DELIVERY_LABOR_RATE = 25.0
VEHICLE_DAILY_COST = 50.0


class LastMileOperations(CamelModel):
    throughput_capacity: float
    dock_utilization: float
    parking_adequacy: str
    sortation_capability: float


class LastMileDelivery(CamelModel):
    delivery_density: float
    route_efficiency: float
    avg_delivery_time: float
    cost_per_delivery: float


class FacilityOptimization(CamelModel):
    layout_efficiency: float
    cross_dock_potential: bool
    automation_readiness: float
    expansion_potential: bool


class LastMilePosition(CamelModel):
    market_coverage: float
    same_next_day_capability: bool
    major_carrier_competitive: bool
    unique_advantages: List[str]


class LastMileAnalysis(CamelModel):
    last_mile_score: float
    operational_efficiency: LastMileOperations
    delivery_metrics: LastMileDelivery
    facility_optimization: FacilityOptimization
    competitive_position: LastMilePosition


def analyze_last_mile_facility(
    specs: IndustrialBuildingSpecs, location: LocationMetrics, delivery: DeliveryProfile
) -> LastMileAnalysis:
    """
    Score a facility for last-mile delivery: 40 points location, 40 facility,
    20 market, plus throughput, routing and delivery cost estimates.
    """
    score = 0.0
    if location.distance_to_highway <= 2:
        score += 20
    elif location.distance_to_highway <= 5:
        score += 10
    population = location.population_one_hour
    if population >= 2_000_000:
        score += 20
    elif population >= 1_000_000:
        score += 15
    elif population >= 500_000:
        score += 10

    if specs.clear_height >= 24:
        score += 10
    elif specs.clear_height >= 18:
        score += 5
    dock_ratio = safe_ratio(specs.dock_doors, specs.total_sf) * 10_000
    if dock_ratio >= 2.0:
        score += 15
    elif dock_ratio >= 1.5:
        score += 10
    elif dock_ratio >= 1.0:
        score += 5
    if specs.truck_court_depth >= 120:
        score += 10
    elif specs.truck_court_depth >= 100:
        score += 5
    if specs.drive_in_doors >= 2:
        score += 5

    if location.vacancy_rate < 3:
        score += 10
    elif location.vacancy_rate < 5:
        score += 5
    if delivery.average_delivery_radius <= 25:
        score += 10
    elif delivery.average_delivery_radius <= 50:
        score += 5

    vehicles = delivery.total_vehicles
    throughput = (
        delivery.vans * VEHICLE_CAPACITY["vans"]
        + delivery.box_trucks * VEHICLE_CAPACITY["box_trucks"]
        + delivery.semis * VEHICLE_CAPACITY["semis"]
    )
    docks_needed = math.ceil(delivery.peak_hour_deliveries / 4)
    parking_needed = vehicles * 1.2
    if specs.total_sf / 1000 >= parking_needed:
        parking = "Sufficient"
    elif specs.total_sf / 1500 >= parking_needed:
        parking = "Adequate"
    else:
        parking = "Insufficient"

    service_area = math.pi * delivery.average_delivery_radius ** 2
    ideal_routes = math.ceil(delivery.daily_deliveries / 150)
    route_efficiency = min(100.0, safe_ratio(ideal_routes, vehicles) * 100)
    delivery_time = 20 + delivery.average_delivery_radius * 1.5
    facility_share = safe_ratio(specs.total_sf * 8 / 365, delivery.daily_deliveries)
    cost_per_delivery = DELIVERY_LABOR_RATE * delivery_time / 60 + VEHICLE_DAILY_COST / 150 + facility_share

    if specs.clear_height >= 24 and dock_ratio >= 1.5:
        layout = 85.0
    elif specs.clear_height >= 18 and dock_ratio >= 1.0:
        layout = 70.0
    else:
        layout = 50.0
    cross_dock = specs.dock_doors >= 20 and specs.truck_court_depth >= 130
    automation = (
        (25 if specs.clear_height >= 24 else 10)
        + (25 if specs.floor_load_capacity >= 250 else 10)
        + (25 if specs.power_capacity_kw >= 2000 else 10)
        + (25 if layout >= 70 else 10)
    )

    advantages: List[str] = []
    if location.distance_to_highway <= 1:
        advantages.append("Highway adjacent")
    if specs.drive_in_doors > 0:
        advantages.append("Drive-in capability")
    if cross_dock:
        advantages.append("Cross-dock potential")
    if population >= 2_000_000:
        advantages.append("Major metro location")

    logger.debug(f"Last-mile score {score:.1f} for {specs.total_sf:,.0f} SF")

    return LastMileAnalysis(
        last_mile_score=round(score, 1),
        operational_efficiency=LastMileOperations(
            throughput_capacity=throughput,
            dock_utilization=round(safe_ratio(docks_needed, specs.dock_doors) * 100, 1),
            parking_adequacy=parking,
            sortation_capability=round(specs.total_sf * 0.05),
        ),
        delivery_metrics=LastMileDelivery(
            delivery_density=round(safe_ratio(delivery.daily_deliveries, service_area), 2),
            route_efficiency=round(route_efficiency, 1),
            avg_delivery_time=round(delivery_time, 1),
            cost_per_delivery=round(cost_per_delivery, 2),
        ),
        facility_optimization=FacilityOptimization(
            layout_efficiency=layout,
            cross_dock_potential=cross_dock,
            automation_readiness=float(automation),
            expansion_potential=specs.total_sf < 100_000 and dock_ratio < 3.0,
        ),
        competitive_position=LastMilePosition(
            market_coverage=round(population * delivery.average_delivery_radius / 50),
            same_next_day_capability=delivery.average_delivery_radius <= 50 and specs.total_sf >= 50_000,
            major_carrier_competitive=score >= 75 and population >= 1_000_000 and delivery.average_delivery_radius <= 25,
            unique_advantages=advantages,
        ),
    )
