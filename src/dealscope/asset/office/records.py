# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Canonical office records: tenants, building operations and market data.

Every field is populated. Adapters in ``dealscope.adapters.office`` build
tenants from raw caller input; building and market records are built by the
package handlers, with placeholders reported as assumptions.
"""

from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from pydantic import Field

from ...core.primitives import Model

INVESTMENT_GRADE = ("AAA", "AA", "A", "BBB")


class OfficeSuite(Model):
    suite_number: str = "100"
    floor: int = 1
    rentable_sf: float = 1000.0
    usable_sf: float = 1000.0
    load_factor: float = 1.15
    configuration: str = "Open"
    private_offices: int = 0
    workstations: int = 10
    conference_rooms: int = 1


class RentStep(Model):
    start_date: datetime
    end_date: datetime
    annual_rent: float
    monthly_rent: float
    rent_psf: float


class Escalation(Model):
    type: str = "Fixed"
    amount: float = 3.0
    frequency: str = "Annual"
    compounded: bool = False
    next_escalation_date: datetime


class FreeRent(Model):
    months: float = 0.0
    type: str = "Net"
    period: str = "Upfront"


class TenantImprovement(Model):
    total_allowance: float = 0.0
    psf_allowance: float = 0.0


class PaymentHistory(Model):
    on_time: int = 12
    late: int = 0
    defaulted: int = 0
    average_days_late: float = 0.0


class OfficeTenant(Model):
    """A fully-defaulted office tenant and its lease."""

    tenant_name: str
    legal_entity_name: str
    industry: str = "Unknown"
    naics_code: str = "000000"
    credit_rating: str = "NR"
    public_company: bool = False

    suites: List[OfficeSuite]
    total_rentable_sf: float
    total_usable_sf: float

    lease_id: str
    lease_type: str = "Direct"
    commencement_date: datetime
    expiration_date: datetime
    base_rent_schedule: List[RentStep]
    escalations: Escalation
    free_rent: FreeRent = Field(default_factory=FreeRent)
    tenant_improvement: TenantImprovement = Field(default_factory=TenantImprovement)
    expense_structure: str = "Full Service"
    base_year: int

    included_parking: int = 0
    operating_hours: str = "Standard"
    after_hours_hvac: float = 35.0
    employees: int = 10
    visitors: int = 5
    payment_history: PaymentHistory = Field(default_factory=PaymentHistory)
    maintenance_tickets: float = 1.0
    sublease_rights: str = "Consent Required"

    @property
    def annual_rent(self) -> float:
        return self.base_rent_schedule[0].annual_rent if self.base_rent_schedule else 0.0

    @property
    def monthly_rent(self) -> float:
        return self.base_rent_schedule[0].monthly_rent if self.base_rent_schedule else 0.0

    @property
    def rent_psf(self) -> float:
        return self.base_rent_schedule[0].rent_psf if self.base_rent_schedule else 0.0

    @property
    def workstations(self) -> int:
        return sum(suite.workstations for suite in self.suites)

    @property
    def is_investment_grade(self) -> bool:
        return self.credit_rating in INVESTMENT_GRADE


class HvacSystem(Model):
    type: str = "VAV"
    age: float = 10
    condition: str = "Good"
    maintenance_contract: bool = True
    energy_efficiency: float = 12.5
    controls: str = "DDC"


class Sustainability(Model):
    energy_star_score: Optional[float] = None
    energy_star_certified: bool = False
    leed_certification: Optional[str] = None


class ExpenseItem(Model):
    category: str
    annual: float
    per_sf: float
    recoverable: bool
    trend_3_year: float
    contractual: bool = False


class BuildingOperations(Model):
    """Building systems, staffing and operating expense detail."""

    engineering_staff: int = 3
    security_staff: int = 2
    janitorial_staff: int = 5
    hvac_systems: List[HvacSystem] = Field(default_factory=list)
    electrical_capacity_watts_psf: float = 6.0
    backup_power: str = "Generator"
    passenger_elevators: int = 4
    elevator_age: float = 8
    elevators_modernized: bool = True
    fiber_optic: bool = True
    sustainability: Sustainability = Field(default_factory=Sustainability)
    expenses: List[ExpenseItem] = Field(default_factory=list)


class SubmarketVacancy(Model):
    current: float = 15.0
    class_a: float = 12.0
    class_b: float = 18.0
    class_c: float = 25.0
    trend: str = "Stable"


class Absorption(Model):
    trailing_12_months: float = 500_000
    quarterly: List[float] = Field(default_factory=lambda: [100_000, 150_000, 125_000, 125_000])
    trend: str = "Positive"


class Construction(Model):
    under_construction: float = 1_000_000
    planned: float = 500_000


class IndustryGrowth(Model):
    industry: str
    growth: float
    share: float


class EmploymentGrowth(Model):
    metro: float = 2.5
    submarket: float = 3.2
    key_industries: List[IndustryGrowth] = Field(
        default_factory=lambda: [
            IndustryGrowth(industry="Technology", growth=5.5, share=25),
            IndustryGrowth(industry="Financial Services", growth=2.1, share=20),
        ]
    )


class CompetitiveProperty(Model):
    name: str
    distance: float
    building_class: str = "A"
    year_built: int = 2000
    total_sf: float
    occupancy: float
    asking_rent: float
    effective_rent: float
    amenities: List[str] = Field(default_factory=list)


class MarketIntelligence(Model):
    """Submarket conditions, competitive set and demand drivers."""

    submarket_name: str = "CBD"
    submarket_class: str = "CBD"
    total_inventory: float = 10_000_000
    vacancy: SubmarketVacancy = Field(default_factory=SubmarketVacancy)
    absorption: Absorption = Field(default_factory=Absorption)
    construction: Construction = Field(default_factory=Construction)
    employment_growth: EmploymentGrowth = Field(default_factory=EmploymentGrowth)
    competitive_properties: List[CompetitiveProperty] = Field(default_factory=list)
    market_rent_psf: float = 35.0
    rent_growth: float = 2.5


class OfficePropertyProfile(Model):
    """Subject property summary used for market positioning."""

    tenants: List[OfficeTenant] = Field(default_factory=list)
    building: BuildingOperations = Field(default_factory=BuildingOperations)
    total_sf: float
    occupancy: float
    avg_rent: float
    parking_ratio: float = 3.0
