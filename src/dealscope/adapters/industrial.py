# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Industrial tenant adapter.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Iterable, List, Optional

from ..asset.industrial.records import IndustrialTenant
from ..core.primitives import resolve_now
from .aliases import AliasTable, alias, resolve_table

INDUSTRIAL_TENANT_ALIASES: AliasTable = {
    "tenant_name": alias("name", "tenantName", "tenant_name", default="Unknown Tenant", kind="text"),
    "industry": alias("industry", default="Logistics", kind="text"),
    "naics_code": alias("naicsCode", default="000000", kind="text"),
    "credit_rating": alias("creditRating", default="NR", kind="text"),
    "public_company": alias("publicCompany", default=False, kind="bool"),
    "suite_number": alias("suiteNumber", kind="text"),
    "square_footage": alias("squareFootage", "sf", default=10_000.0, kind="number", positive=True),
    "lease_start_date": alias("leaseStartDate", "commencementDate", kind="date", default_offset_days=0),
    "lease_expiration_date": alias(
        "leaseExpirationDate", "leaseExpiration", "expirationDate", kind="date", default_offset_days=365
    ),
    "base_rent_psf": alias("baseRentPSF", "rentPSF", default=8.0, kind="number", positive=True),
    "rent_type": alias("rentType", default="NNN", kind="text"),
    "escalation_type": alias("escalationType", default="Fixed", kind="text"),
    "escalation_rate": alias("escalationRate", default=3.0, kind="number"),
    "office_percentage": alias("officePercentage", default=10.0, kind="number"),
    "warehouse_percentage": alias("warehousePercentage", default=90.0, kind="number"),
    "manufacturing_percentage": alias("manufacturingPercentage", default=0.0, kind="number"),
    "yard_space": alias("yardSpace", default=0.0, kind="number"),
    "clear_height_required": alias("clearHeightRequired", default=24.0, kind="number", positive=True),
    "dock_doors_required": alias("dockDoorsRequired", default=2, kind="int"),
    "drive_in_doors_required": alias("driveInDoorsRequired", default=0, kind="int"),
    "power_requirement": alias("powerRequirement", default=400.0, kind="number", positive=True),
    "temperature_control": alias("temperatureControl", default="Ambient", kind="text"),
    "rail_access": alias("railAccess", default=False, kind="bool"),
    "crane_coverage": alias("craneCoverage", default=0.0, kind="number"),
    "specialized_racking": alias("specializedRacking", default="Standard Selective", kind="text"),
    "hazmat_permits": alias("hazmatPermits", default=False, kind="bool"),
    "operating_hours": alias("operatingHours", default="8-5", kind="text"),
    "employee_count": alias("employeeCount", "employees", default=25, kind="int", positive=True),
    "truck_traffic": alias("truckTraffic", default=10, kind="int"),
    "parking_required": alias("parkingRequired", default=30, kind="int"),
}


def adapt_industrial_tenant(raw: Any, now: datetime, index: int = 0) -> IndustrialTenant:
    """Build one canonical industrial tenant from an arbitrary raw entry."""
    values = resolve_table(raw, INDUSTRIAL_TENANT_ALIASES, now)
    values["credit_rating"] = values["credit_rating"].upper()
    values["suite_number"] = values["suite_number"] or f"Suite {index + 1}"
    return IndustrialTenant(**values)


def adapt_industrial_tenants(
    entries: Optional[Iterable[Any]], now: Optional[datetime] = None
) -> List[IndustrialTenant]:
    """Convert raw industrial tenant entries to canonical records. Never raises."""
    if not isinstance(entries, (list, tuple)):
        return []
    moment = resolve_now(now)
    return [adapt_industrial_tenant(raw, moment, index) for index, raw in enumerate(entries)]
