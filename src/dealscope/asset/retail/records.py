# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Canonical retail records: tenants, monthly sales, trade areas and competitors.
"""

from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from pydantic import Field

from ...core.primitives import Model

NO_EXCLUSIVE = "None Granted"


class PercentageRent(Model):
    rate: float = 6.0
    natural_breakpoint: float
    artificial_breakpoint: Optional[float] = None


class CoTenancyClause(Model):
    required: List[str] = Field(default_factory=list)
    remedy: str = "Rent Reduction"
    rent_reduction: float = 0.0


class KickoutClause(Model):
    sales_threshold: float = 0.0
    measurement_period_months: int = 12
    notice_required_days: int = 180


class RetailTenant(Model):
    """A fully-defaulted retail tenant, its lease and its reported sales."""

    tenant_name: str
    franchisee: bool = False
    national_tenant: bool = False

    category: str = "Inline"
    merchandise_type: str = "Other"
    naics_code: str = "000000"
    essential_service: bool = False

    unit: str = "Unit 1"
    square_footage: float = 1000.0
    frontage: float = 25.0
    location: str = "Strip"
    floor: int = 1

    lease_start_date: datetime
    lease_end_date: datetime
    base_rent_psf: float = 25.0
    percentage_rent: PercentageRent

    reported_sales: float = 0.0
    sales_psf: float = 0.0
    comp_sales: float = 0.0
    sales_reporting: str = "Annual"

    cam_structure: str = "Pro-rata"
    cam_cap: float = 0.0
    tax_structure: str = "Pro-rata"
    insurance_structure: str = "Pro-rata"
    utilities: str = "Separately Metered"

    exclusive_use: str = NO_EXCLUSIVE
    radius: float = 0.0
    kickout: Optional[KickoutClause] = None
    co_tenancy: Optional[CoTenancyClause] = None
    going_dark: str = "Prohibited"

    credit_rating: str = "NR"
    bankruptcy_history: bool = False
    store_performance_rating: str = "B"

    @property
    def annual_base_rent(self) -> float:
        return self.base_rent_psf * self.square_footage

    @property
    def annual_sales(self) -> float:
        """Reported sales, else sales PSF times area."""
        if self.reported_sales:
            return self.reported_sales
        return self.sales_psf * self.square_footage


class SalesRecord(Model):
    """One month of net sales for a tenant."""

    tenant: str
    month: int
    year: int
    gross_sales: float
    returns: float
    net_sales: float
    transactions: int
    average_ticket: float


class TradeAreaRing(Model):
    """Demographics for one radius ring around the center."""

    radius: float
    population: float
    households: float
    median_income: float
    average_income: float
    growth_5_year: float = 0.0


class Competitor(Model):
    name: str
    type: str = "Community"
    distance: float
    gla: float
    anchors: List[str] = Field(default_factory=list)
    planned: bool = False


class TrafficCount(Model):
    location: str
    daily_count: float
    growth_rate: float = 0.0


class RetailExpense(Model):
    category: str
    amount: float
    recoverable: bool = True
    allocation: str = "Pro-Rata"


class CenterState(Model):
    """Current physical and financial state of a center, for redevelopment."""

    gla: float
    occupancy: float
    avg_rent: float
    sales_psf: float
    parking_spaces: float
    land_area_acres: float


class RedevelopmentMarket(Model):
    new_construction_rent: float = 35.0
    land_value_per_acre: float = 1_000_000
    construction_cost_psf: float = 200.0
    parking_cost_per_space: float = 25_000


class Zoning(Model):
    max_far: float
    max_height: float = 45.0
    allowed_uses: List[str] = Field(default_factory=lambda: ["Retail"])
    parking_required_per_1000: float = 4.0
