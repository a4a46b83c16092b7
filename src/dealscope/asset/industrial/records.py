# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Canonical industrial records: tenants, building specs, location and delivery profile.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional, Tuple

from ...core.primitives import Model


class IndustrialTenant(Model):
    """A fully-defaulted industrial tenant and its operating requirements."""

    tenant_name: str
    industry: str = "Logistics"
    naics_code: str = "000000"
    credit_rating: str = "NR"
    public_company: bool = False

    suite_number: str = "Suite 1"
    square_footage: float = 10_000.0
    lease_start_date: datetime
    lease_expiration_date: datetime
    base_rent_psf: float = 8.0
    rent_type: str = "NNN"
    escalation_type: str = "Fixed"
    escalation_rate: float = 3.0

    office_percentage: float = 10.0
    warehouse_percentage: float = 90.0
    manufacturing_percentage: float = 0.0
    yard_space: float = 0.0

    clear_height_required: float = 24.0
    dock_doors_required: int = 2
    drive_in_doors_required: int = 0
    power_requirement: float = 400.0
    temperature_control: str = "Ambient"

    rail_access: bool = False
    crane_coverage: float = 0.0
    specialized_racking: str = "Standard Selective"
    hazmat_permits: bool = False

    operating_hours: str = "8-5"
    employee_count: int = 25
    truck_traffic: int = 10
    parking_required: int = 30

    @property
    def annual_rent(self) -> float:
        return self.base_rent_psf * self.square_footage


class RailSiding(Model):
    length: float
    car_capacity: int
    switching_service: str = "Class I"


class CraneSystem(Model):
    type: str = "Bridge"
    capacity_tons: float
    coverage_sf: float


class ColdStorageSpecs(Model):
    cooler_sf: float = 0.0
    freezer_sf: float = 0.0
    blast_freezer_sf: float = 0.0
    refrigeration_system: str = "Ammonia Automated"
    redundancy: str = "None"

    @property
    def total_cold_sf(self) -> float:
        return self.cooler_sf + self.freezer_sf + self.blast_freezer_sf


class IndustrialBuildingSpecs(Model):
    """Physical, loading and systems characteristics of an industrial building."""

    total_sf: float
    clear_height: float
    column_spacing: str = "50x60"
    bay_depth: float = 200.0
    floor_thickness: float = 6.0
    floor_load_capacity: float = 125.0

    dock_doors: int
    dock_door_size: str = "9x10"
    drive_in_doors: int = 0
    dock_levelers: bool = True
    dock_seals: bool = True
    truck_court_depth: float = 130.0

    power_capacity_kw: float
    power_type: str = "3-Phase"
    lighting_type: str = "LED"
    foot_candles: float = 30.0
    hvac_type: str = "Rooftop"
    fire_suppression_type: str = "ESFR"
    sprinkler_density: Optional[str] = "K-25.2"

    rail_siding: Optional[RailSiding] = None
    crane_system: Optional[CraneSystem] = None
    cold_storage: Optional[ColdStorageSpecs] = None

    @property
    def column_dimensions(self) -> Tuple[float, float]:
        """Column spacing ``"WxD"`` as a (width, depth) pair; unreadable parts are 0."""
        parts = self.column_spacing.lower().split("x")
        values = []
        for part in parts[:2]:
            try:
                values.append(float(part))
            except ValueError:
                values.append(0.0)
        while len(values) < 2:
            values.append(0.0)
        return values[0], values[1]


class LocationMetrics(Model):
    """Access, labor and market context for an industrial location."""

    distance_to_highway: float
    distance_to_port: Optional[float] = None
    distance_to_airport: Optional[float] = None
    distance_to_rail: Optional[float] = None
    distance_to_intermodal: Optional[float] = None

    population_one_hour: float = 1_000_000
    labor_force_participation: float = 65.0
    average_hourly_wage: float = 22.50
    unemployment_rate: float = 4.5
    union_presence: bool = False

    submarket: str = "Industrial Park"
    total_inventory_sf: float = 50_000_000
    vacancy_rate: float = 8.5
    net_absorption_12_months: float = 2_000_000
    under_construction: float = 5_000_000
    average_asking_rent: float = 8.50


class DeliveryProfile(Model):
    """Daily delivery volume and fleet mix for a last-mile facility."""

    daily_deliveries: float
    peak_hour_deliveries: float
    average_delivery_radius: float = 5.0
    vans: int = 0
    box_trucks: int = 0
    semis: int = 0

    @property
    def total_vehicles(self) -> int:
        return self.vans + self.box_trucks + self.semis
