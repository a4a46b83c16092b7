# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Retail tenant adapter.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Iterable, List, Optional

from ..asset.retail.records import NO_EXCLUSIVE, CoTenancyClause, KickoutClause, PercentageRent, RetailTenant
from ..core.primitives import resolve_now
from .aliases import AliasTable, alias, resolve_table

DEFAULT_PERCENTAGE_RATE = 6.0

RETAIL_TENANT_ALIASES: AliasTable = {
    "tenant_name": alias("name", "tenantName", "tenant_name", default="Unknown Tenant", kind="text"),
    "franchisee": alias("franchisee", default=False, kind="bool"),
    "national_tenant": alias("nationalTenant", default=False, kind="bool"),
    "category": alias("category", default="Inline", kind="text"),
    "merchandise_type": alias("merchandiseType", default="Other", kind="text"),
    "naics_code": alias("naicsCode", default="000000", kind="text"),
    "essential_service": alias("essentialService", default=False, kind="bool"),
    "unit": alias("unit", default="Unit 1", kind="text"),
    "square_footage": alias(
        "squareFootage", "sf", "square_footage", default=1000.0, kind="number", positive=True
    ),
    "frontage": alias("frontage", default=25.0, kind="number", positive=True),
    "location": alias("location", default="Strip", kind="text"),
    "floor": alias("floor", default=1, kind="int", positive=True),
    "lease_start_date": alias("leaseStartDate", "commencementDate", kind="date", default_offset_days=0),
    "lease_end_date": alias(
        "leaseEndDate", "leaseExpiration", "expirationDate", kind="date", default_offset_days=365
    ),
    "base_rent_psf": alias("baseRentPSF", "rentPSF", default=25.0, kind="number", positive=True),
    "percentage_rate": alias(
        "percentageRentRate", default=DEFAULT_PERCENTAGE_RATE, kind="number", positive=True
    ),
    "natural_breakpoint": alias("naturalBreakpoint", kind="number", positive=True),
    "artificial_breakpoint": alias("artificialBreakpoint", kind="number", positive=True),
    "reported_sales": alias("reportedSales", "annualSales", default=0.0, kind="number", positive=True),
    "sales_psf": alias("salesPSF", kind="number", positive=True),
    "comp_sales": alias("compSales", default=0.0, kind="number"),
    "sales_reporting": alias("salesReporting", default="Annual", kind="text"),
    "cam_structure": alias("camStructure", default="Pro-rata", kind="text"),
    "cam_cap": alias("camCap", default=0.0, kind="number"),
    "tax_structure": alias("taxStructure", default="Pro-rata", kind="text"),
    "insurance_structure": alias("insuranceStructure", default="Pro-rata", kind="text"),
    "utilities": alias("utilities", default="Separately Metered", kind="text"),
    "exclusive_use": alias("exclusiveUse", default=NO_EXCLUSIVE, kind="text"),
    "radius": alias("radius", default=0.0, kind="number"),
    "kickout": alias("kickout", kind="dict"),
    "co_tenancy": alias("coTenancy", kind="dict"),
    "going_dark": alias("goingDark", default="Prohibited", kind="text"),
    "credit_rating": alias("creditRating", default="NR", kind="text"),
    "bankruptcy_history": alias("bankruptcyHistory", default=False, kind="bool"),
    "store_performance_rating": alias("storePerformanceRating", default="B", kind="text"),
}

KICKOUT_ALIASES: AliasTable = {
    "sales_threshold": alias("salesThreshold", default=0.0, kind="number"),
    "measurement_period_months": alias("measurementPeriod", default=12, kind="int", positive=True),
    "notice_required_days": alias("noticeRequired", default=180, kind="int", positive=True),
}

CO_TENANCY_ALIASES: AliasTable = {
    "required": alias("required", default=[], kind="list"),
    "remedy": alias("remedy", default="Rent Reduction", kind="text"),
    "rent_reduction": alias("rentReduction", default=0.0, kind="number"),
}


def adapt_retail_tenant(raw: Any, now: datetime) -> RetailTenant:
    """Build one canonical retail tenant from an arbitrary raw entry."""
    values = resolve_table(raw, RETAIL_TENANT_ALIASES, now)
    area = values["square_footage"]
    rent_psf = values["base_rent_psf"]

    breakpoint = values["natural_breakpoint"] or rent_psf * area / (DEFAULT_PERCENTAGE_RATE / 100)
    sales_psf = values["sales_psf"] or values["reported_sales"] / area

    kickout = None
    if values["kickout"] is not None:
        kickout = KickoutClause(**resolve_table(values["kickout"], KICKOUT_ALIASES, now))
    co_tenancy = None
    if values["co_tenancy"] is not None:
        terms = resolve_table(values["co_tenancy"], CO_TENANCY_ALIASES, now)
        terms["required"] = [str(name) for name in terms["required"]]
        co_tenancy = CoTenancyClause(**terms)

    return RetailTenant(
        tenant_name=values["tenant_name"],
        franchisee=values["franchisee"],
        national_tenant=values["national_tenant"],
        category=values["category"],
        merchandise_type=values["merchandise_type"],
        naics_code=values["naics_code"],
        essential_service=values["essential_service"],
        unit=values["unit"],
        square_footage=area,
        frontage=values["frontage"],
        location=values["location"],
        floor=values["floor"],
        lease_start_date=values["lease_start_date"],
        lease_end_date=values["lease_end_date"],
        base_rent_psf=rent_psf,
        percentage_rent=PercentageRent(
            rate=values["percentage_rate"],
            natural_breakpoint=breakpoint,
            artificial_breakpoint=values["artificial_breakpoint"] or breakpoint,
        ),
        reported_sales=values["reported_sales"],
        sales_psf=sales_psf,
        comp_sales=values["comp_sales"],
        sales_reporting=values["sales_reporting"],
        cam_structure=values["cam_structure"],
        cam_cap=values["cam_cap"],
        tax_structure=values["tax_structure"],
        insurance_structure=values["insurance_structure"],
        utilities=values["utilities"],
        exclusive_use=values["exclusive_use"],
        radius=values["radius"],
        kickout=kickout,
        co_tenancy=co_tenancy,
        going_dark=values["going_dark"],
        credit_rating=values["credit_rating"].upper(),
        bankruptcy_history=values["bankruptcy_history"],
        store_performance_rating=values["store_performance_rating"],
    )


def adapt_retail_tenants(
    entries: Optional[Iterable[Any]], now: Optional[datetime] = None
) -> List[RetailTenant]:
    """Convert raw retail tenant entries to canonical records. Never raises."""
    if not isinstance(entries, (list, tuple)):
        return []
    moment = resolve_now(now)
    return [adapt_retail_tenant(raw, moment) for raw in entries]
