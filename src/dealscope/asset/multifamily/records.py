# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Canonical multifamily records: units, community amenities, market comps,
maintenance history and staffing.
"""

from __future__ import annotations

from datetime import datetime
from typing import Dict, List, Optional

from pydantic import Field

from ...core.primitives import Model, UnitTypeEnum

VACANT = "Vacant"


class UnitAmenities(Model):
    washer_dryer: bool = False
    balcony: bool = False
    fireplace: bool = False
    walk_in_closet: bool = False
    upgraded_kitchen: bool = False
    upgraded_bath: bool = False


class Concession(Model):
    type: str = "Free Rent"
    amount: float = 0.0
    months: float = 1.0

    @property
    def annualized(self) -> float:
        return self.amount / (self.months or 1) * 12


class OtherIncome(Model):
    """Monthly ancillary income collected from one unit."""

    parking: float = 0.0
    storage: float = 0.0
    pet: float = 0.0
    utilities: float = 0.0

    @property
    def monthly_total(self) -> float:
        return self.parking + self.storage + self.pet + self.utilities


class ApartmentUnit(Model):
    """A fully-defaulted apartment unit and its current lease."""

    unit_number: str
    unit_type: UnitTypeEnum = UnitTypeEnum.ONE_BR
    square_footage: float = 850.0
    floor: int = 1

    current_rent: float
    market_rent: float
    lease_start_date: Optional[datetime] = None
    lease_end_date: Optional[datetime] = None
    month_to_month: bool = False

    occupied: bool = True
    tenant_name: str = VACANT

    renovated: bool = False
    amenities: UnitAmenities = Field(default_factory=UnitAmenities)

    concession: Optional[Concession] = None
    other_income: Optional[OtherIncome] = None

    @property
    def mix_bucket(self) -> str:
        """Unit-mix bucket; four-bedroom units report with three-bedroom units."""
        if self.unit_type == UnitTypeEnum.FOUR_BR:
            return UnitTypeEnum.THREE_BR.value
        return self.unit_type.value


class PropertyAmenities(Model):
    """Community amenities. ``parking_ratio`` is spaces per unit."""

    pool: bool = False
    fitness: bool = False
    clubhouse: bool = False
    business_center: bool = False
    playground: bool = False
    dog_park: bool = False
    bbq_area: bool = False

    concierge: bool = False
    valet: bool = False
    package_receiving: bool = False
    maintenance_on_site: bool = True

    covered_parking: bool = False
    gated_parking: bool = False
    ev_charging: bool = False
    parking_ratio: float = 1.0

    high_speed_internet: bool = False
    smart_home: bool = False
    keyless_entry: bool = False
    package_lockers: bool = False

    central_hvac: bool = False
    trash_valet: bool = False


class MixEntry(Model):
    count: int = 0
    avg_rent: float = 0.0
    avg_sf: float = 0.0


class MarketComp(Model):
    """A competing apartment property. ``amenity_score`` is on a 0-100 scale."""

    property_name: str
    distance: float = 1.0
    year_built: int = 2005
    total_units: int = 200
    occupancy: float = 94.0
    avg_rent_psf: float = 1.8
    amenity_score: float = 75.0
    renovated: bool = False
    unit_mix: Dict[str, MixEntry] = Field(default_factory=dict)
    concession_offered: bool = False
    concession_type: Optional[str] = None
    concession_value: Optional[float] = None


class Submarket(Model):
    avg_occupancy: float = 92.0
    avg_rent_growth: float = 3.5
    new_supply_units: float = 500
    population: float = 100_000
    median_income: float = 65_000
    rent_to_income_ratio: float = 0.3


class LocationQuality(Model):
    """Walk and transit scores are 0-100; a lower crime index is better."""

    walk_score: float = 65
    transit_score: float = 55
    school_rating: float = 7
    crime_index: float = 35


class ApartmentProperty(Model):
    units: List[ApartmentUnit]
    amenities: PropertyAmenities = Field(default_factory=PropertyAmenities)
    year_built: int = 2005
    last_renovation: Optional[int] = None
    location: LocationQuality = Field(default_factory=LocationQuality)


class OperatingExpenses(Model):
    """Annual operating expenses by category."""

    taxes: float = 0.0
    insurance: float = 0.0
    utilities: float = 0.0
    payroll: float = 0.0
    maintenance: float = 0.0
    management: float = 0.0
    marketing: float = 0.0
    administrative: float = 0.0
    other: float = 0.0

    @property
    def total(self) -> float:
        return sum(self.model_dump().values())


class MaintenanceEntry(Model):
    date: datetime
    unit: Optional[str] = None
    type: str = "Routine"
    category: str = "General"
    cost: float = 0.0
    vendor: str = "In-house"


class StaffRole(Model):
    role: str
    count: int = 1
    avg_salary: float = 45_000
    turnover_rate: float = 0.2


class RenovationTier(Model):
    per_unit: float
    scope: str


class RenovationCosts(Model):
    classic: RenovationTier = Field(
        default_factory=lambda: RenovationTier(per_unit=8_000, scope="Paint, fixtures, flooring")
    )
    premium: RenovationTier = Field(
        default_factory=lambda: RenovationTier(
            per_unit=15_000, scope="Classic plus appliances, countertops, cabinet fronts"
        )
    )
    luxury: RenovationTier = Field(
        default_factory=lambda: RenovationTier(
            per_unit=25_000, scope="Premium plus full kitchen, bath and smart home package"
        )
    )


__all__ = [
    "ApartmentProperty",
    "ApartmentUnit",
    "Concession",
    "LocationQuality",
    "MaintenanceEntry",
    "MarketComp",
    "MixEntry",
    "OperatingExpenses",
    "OtherIncome",
    "PropertyAmenities",
    "RenovationCosts",
    "RenovationTier",
    "StaffRole",
    "Submarket",
    "UnitAmenities",
]
