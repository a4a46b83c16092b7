# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Office tenant adapter.

Maps raw tenant entries (``{"name": ..., "annualRent": ..., "leaseExpiration": ...}``
and richer shapes) to canonical ``OfficeTenant`` records.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Iterable, List, Optional

from ..asset.office.records import (
    Escalation,
    FreeRent,
    OfficeSuite,
    OfficeTenant,
    PaymentHistory,
    RentStep,
    TenantImprovement,
)
from ..core.primitives import add_days, resolve_now
from .aliases import AliasTable, alias, resolve_table

ONE_YEAR_DAYS = 365

OFFICE_TENANT_ALIASES: AliasTable = {
    "tenant_name": alias("name", "tenantName", "tenant_name", default="Unknown Tenant", kind="text"),
    "legal_name": alias("legalName", "tenantName", "name", default="Unknown", kind="text"),
    "industry": alias("industry", default="Unknown", kind="text"),
    "naics_code": alias("naicsCode", default="000000", kind="text"),
    "credit_rating": alias("creditRating", "credit_rating", default="NR", kind="text"),
    "public_company": alias("publicCompany", default=False, kind="bool"),
    # Space
    "suite_number": alias("suiteNumber", default="100", kind="text"),
    "floor": alias("floor", default=1, kind="int", positive=True),
    "rentable_sf": alias(
        "rentableSF", "rentableSquareFeet", "squareFootage", "rentable_sf",
        default=1000.0, kind="number", positive=True,
    ),
    "usable_sf": alias(
        "usableSF", "rentableSquareFeet", "squareFootage", "usable_sf",
        default=1000.0, kind="number", positive=True,
    ),
    "load_factor": alias("loadFactor", default=1.15, kind="number", positive=True),
    "configuration": alias("configuration", default="Open", kind="text"),
    "private_offices": alias("privateOffices", default=0, kind="int"),
    "workstations": alias("workstations", default=10, kind="int", positive=True),
    "conference_rooms": alias("conferenceRooms", default=1, kind="int", positive=True),
    # Lease
    "lease_id": alias("leaseID", "leaseId", kind="text"),
    "lease_type": alias("leaseType", default="Direct", kind="text"),
    "commencement_date": alias(
        "commencementDate", "leaseStartDate", "commencement_date", kind="date", default_offset_days=0
    ),
    "expiration_date": alias(
        "expirationDate", "leaseExpirationDate", "leaseExpiration", "expiration_date",
        kind="date", default_offset_days=ONE_YEAR_DAYS,
    ),
    "annual_rent": alias("annualRent", "annual_rent", kind="number", positive=True),
    "rent_psf": alias("baseRentPSF", "rentPSF", default=30.0, kind="number", positive=True),
    "rent_area": alias("rentableSquareFeet", "rentableSF", default=1000.0, kind="number", positive=True),
    "escalation_type": alias("escalationType", default="Fixed", kind="text"),
    "escalation_amount": alias("escalationAmount", default=3.0, kind="number"),
    "escalation_frequency": alias("escalationFrequency", default="Annual", kind="text"),
    "escalation_compounded": alias("escalationCompounded", default=False, kind="bool"),
    # Concessions
    "free_rent_months": alias("freeRentMonths", default=0.0, kind="number"),
    "free_rent_type": alias("freeRentType", default="Net", kind="text"),
    "free_rent_period": alias("freeRentPeriod", default="Upfront", kind="text"),
    "ti_allowance": alias("tiAllowance", default=0.0, kind="number"),
    "ti_psf": alias("tiPSF", default=0.0, kind="number"),
    "expense_structure": alias("expenseStructure", default="Full Service", kind="text"),
    "base_year": alias("baseYear", kind="int", positive=True),
    # Operations
    "included_parking": alias("includedParking", default=0, kind="int"),
    "operating_hours": alias("operatingHours", default="Standard", kind="text"),
    "after_hours_hvac": alias("afterHoursHVAC", default=35.0, kind="number"),
    "employees": alias("employees", default=10, kind="int", positive=True),
    "visitors": alias("visitors", default=5, kind="int"),
    "on_time_payments": alias("onTimePayments", default=12, kind="int"),
    "late_payments": alias("latePayments", default=0, kind="int"),
    "defaulted_payments": alias("defaultedPayments", default=0, kind="int"),
    "average_days_late": alias("averageDaysLate", default=0.0, kind="number"),
    "maintenance_tickets": alias("maintenanceTickets", default=1.0, kind="number", positive=True),
    "sublease_rights": alias("subleaseRights", default="Consent Required", kind="text"),
}


def adapt_office_tenant(raw: Any, now: datetime, index: int = 0) -> OfficeTenant:
    """Build one canonical office tenant from an arbitrary raw entry."""
    values = resolve_table(raw, OFFICE_TENANT_ALIASES, now)

    rent_psf = values["rent_psf"]
    annual_rent = values["annual_rent"] or rent_psf * values["rent_area"]
    suite = OfficeSuite(
        suite_number=values["suite_number"],
        floor=values["floor"],
        rentable_sf=values["rentable_sf"],
        usable_sf=values["usable_sf"],
        load_factor=values["load_factor"],
        configuration=values["configuration"],
        private_offices=values["private_offices"],
        workstations=values["workstations"],
        conference_rooms=values["conference_rooms"],
    )
    return OfficeTenant(
        tenant_name=values["tenant_name"],
        legal_entity_name=values["legal_name"],
        industry=values["industry"],
        naics_code=values["naics_code"],
        credit_rating=values["credit_rating"].upper(),
        public_company=values["public_company"],
        suites=[suite],
        total_rentable_sf=values["rentable_sf"],
        total_usable_sf=values["usable_sf"],
        lease_id=values["lease_id"] or f"lease-{index + 1}",
        lease_type=values["lease_type"],
        commencement_date=values["commencement_date"],
        expiration_date=values["expiration_date"],
        base_rent_schedule=[
            RentStep(
                start_date=values["commencement_date"],
                end_date=values["expiration_date"],
                annual_rent=annual_rent,
                monthly_rent=annual_rent / 12,
                rent_psf=rent_psf,
            )
        ],
        escalations=Escalation(
            type=values["escalation_type"],
            amount=values["escalation_amount"],
            frequency=values["escalation_frequency"],
            compounded=values["escalation_compounded"],
            next_escalation_date=add_days(now, ONE_YEAR_DAYS),
        ),
        free_rent=FreeRent(
            months=values["free_rent_months"],
            type=values["free_rent_type"],
            period=values["free_rent_period"],
        ),
        tenant_improvement=TenantImprovement(
            total_allowance=values["ti_allowance"], psf_allowance=values["ti_psf"]
        ),
        expense_structure=values["expense_structure"],
        base_year=values["base_year"] or now.year,
        included_parking=values["included_parking"],
        operating_hours=values["operating_hours"],
        after_hours_hvac=values["after_hours_hvac"],
        employees=values["employees"],
        visitors=values["visitors"],
        payment_history=PaymentHistory(
            on_time=values["on_time_payments"],
            late=values["late_payments"],
            defaulted=values["defaulted_payments"],
            average_days_late=values["average_days_late"],
        ),
        maintenance_tickets=values["maintenance_tickets"],
        sublease_rights=values["sublease_rights"],
    )


def adapt_office_tenants(
    entries: Optional[Iterable[Any]], now: Optional[datetime] = None
) -> List[OfficeTenant]:
    """
    Convert raw office tenant entries to canonical records.

    Total: returns one record per entry and never raises. ``None`` or a
    non-list input yields an empty list.
    """
    if not isinstance(entries, (list, tuple)):
        return []
    moment = resolve_now(now)
    return [adapt_office_tenant(raw, moment, index) for index, raw in enumerate(entries)]
