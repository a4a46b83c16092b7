# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Apartment unit adapter.

Raw rent-roll rows are mapped through ``UNIT_ALIASES``. When the caller only
supplies summary facts (unit count, average rent, occupancy), a small
representative rent roll is synthesized. Synthesis is deterministic: the same
summary always yields the same units.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Any, Iterable, List, Optional, Sequence

from ..asset.multifamily.records import VACANT, ApartmentUnit, Concession, OtherIncome, UnitAmenities
from ..core.primitives import UnitTypeEnum, add_days, resolve_now
from .aliases import AliasTable, alias, as_mapping, resolve_table

logger = logging.getLogger(__name__)

MAX_SYNTHESIZED_UNITS = 10
UNIT_TYPE_PATTERN = (UnitTypeEnum.ONE_BR, UnitTypeEnum.TWO_BR, UnitTypeEnum.TWO_BR, UnitTypeEnum.THREE_BR)
UNIT_SF_PATTERN = (750.0, 1000.0, 1000.0, 1200.0)
RENT_SPREAD = (-100.0, -50.0, 0.0, 50.0, 100.0)
MARKET_RENT_PREMIUM = 100.0
LEASE_TERM_DAYS = 365
OCCUPIED_TENANT = "Current Resident"

# Share of units carrying each in-unit amenity
UNIT_AMENITY_SHARES = {
    "washer_dryer": 0.5,
    "balcony": 0.4,
    "fireplace": 0.2,
    "walk_in_closet": 0.6,
    "upgraded_kitchen": 0.3,
    "upgraded_bath": 0.4,
}
RENOVATED_FROM_SLOT = 7

UNIT_ALIASES: AliasTable = {
    "unit_number": alias("unitNumber", "unit", "unit_number", kind="text"),
    "unit_type": alias("unitType", "type", "unit_type", default="1BR", kind="text"),
    "square_footage": alias("squareFootage", "sf", "square_footage", default=850.0, kind="number", positive=True),
    "floor": alias("floor", default=1, kind="int", positive=True),
    "current_rent": alias("currentRent", "rent", "current_rent", kind="number", positive=True),
    "market_rent": alias("marketRent", "market_rent", kind="number", positive=True),
    "lease_start_date": alias("leaseStartDate", "lease_start_date", kind="date", default_offset_days=0),
    "lease_end_date": alias("leaseEndDate", "lease_end_date", kind="date", default_offset_days=LEASE_TERM_DAYS),
    "month_to_month": alias("mtmStatus", "monthToMonth", default=False, kind="bool"),
    "occupied": alias("occupied", default=True, kind="bool"),
    "tenant_name": alias("tenantName", "tenant", kind="text"),
    "renovated": alias("renovated", default=False, kind="bool"),
    "amenities": alias("amenities", default={}, kind="dict"),
    "concessions": alias("concessions", "concession", kind="dict"),
    "other_income": alias("otherIncome", "other_income", kind="dict"),
}

DEFAULT_UNIT_RENT = 1500.0

_UNIT_AMENITY_KEYS = {
    "washer_dryer": ("washerDryer", "washer_dryer"),
    "balcony": ("balcony",),
    "fireplace": ("fireplace",),
    "walk_in_closet": ("walkInCloset", "walk_in_closet"),
    "upgraded_kitchen": ("upgradedKitchen", "upgraded_kitchen"),
    "upgraded_bath": ("upgradedBath", "upgraded_bath"),
}


def _unit_type(text: str) -> UnitTypeEnum:
    normalized = text.strip().upper().replace(" ", "")
    for member in UnitTypeEnum:
        if member.value.upper() == normalized:
            return member
    if normalized in ("STUDIO", "0BR", "EFFICIENCY"):
        return UnitTypeEnum.STUDIO
    if normalized.startswith("PENTHOUSE") or normalized[:1] in ("4", "5"):
        return UnitTypeEnum.FOUR_BR
    return UnitTypeEnum.ONE_BR


def _flags(raw: Any) -> UnitAmenities:
    data = as_mapping(raw)
    return UnitAmenities(
        **{
            name: any(bool(data.get(key)) for key in keys)
            for name, keys in _UNIT_AMENITY_KEYS.items()
        }
    )


def _number(data, *keys: str, default: float = 0.0) -> float:
    for key in keys:
        value = data.get(key)
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return float(value)
    return default


def adapt_unit(raw: Any, now: datetime, index: int = 0) -> ApartmentUnit:
    """Build one canonical unit from an arbitrary rent-roll row."""
    values = resolve_table(raw, UNIT_ALIASES, now)

    current_rent = values["current_rent"] or values["market_rent"] or DEFAULT_UNIT_RENT
    market_rent = values["market_rent"] or current_rent

    concession = None
    if values["concessions"]:
        data = values["concessions"]
        concession = Concession(
            type=str(data.get("type") or "Free Rent"),
            amount=_number(data, "amount"),
            months=_number(data, "months", default=1.0) or 1.0,
        )
    other_income = None
    if values["other_income"]:
        data = values["other_income"]
        other_income = OtherIncome(
            parking=_number(data, "parking"),
            storage=_number(data, "storage"),
            pet=_number(data, "pet"),
            utilities=_number(data, "utilities"),
        )

    return ApartmentUnit(
        unit_number=values["unit_number"] or f"Unit {index + 1}",
        unit_type=_unit_type(values["unit_type"]),
        square_footage=values["square_footage"],
        floor=values["floor"],
        current_rent=current_rent,
        market_rent=market_rent,
        lease_start_date=values["lease_start_date"],
        lease_end_date=values["lease_end_date"],
        month_to_month=values["month_to_month"],
        occupied=values["occupied"],
        tenant_name=values["tenant_name"] or (OCCUPIED_TENANT if values["occupied"] else VACANT),
        renovated=values["renovated"],
        amenities=_flags(values["amenities"]),
        concession=concession,
        other_income=other_income,
    )


def synthesize_units(
    count: float,
    average_rent: float,
    occupancy_pct: float,
    rent_spread: Sequence[float] = RENT_SPREAD,
    market_premium: float = MARKET_RENT_PREMIUM,
    now: Optional[datetime] = None,
) -> List[ApartmentUnit]:
    """
    Build a representative rent roll of at most ten units from summary facts.

    Unit types and sizes cycle 1BR/2BR/2BR/3BR, four units to a floor. Rents
    cycle through ``rent_spread`` around ``average_rent``; market rent is the
    average plus ``market_premium``. The first ``round(n * occupancy)`` units
    are occupied. Renovation and in-unit amenity flags follow fixed shares of
    each block of ten units. Every lease runs one year from ``now``.

    Example:
        >>> units = synthesize_units(200, 1500, 90)
        >>> len(units), sum(u.occupied for u in units)
        (10, 9)
    """
    moment = resolve_now(now)
    n = max(0, min(int(count or 0), MAX_SYNTHESIZED_UNITS))
    occupied_count = int(round(n * max(0.0, min(occupancy_pct or 0.0, 100.0)) / 100))
    spread = tuple(rent_spread) or (0.0,)
    units = []
    for i in range(n):
        slot = i % 10
        units.append(
            ApartmentUnit(
                unit_number=f"Unit {i + 1}",
                unit_type=UNIT_TYPE_PATTERN[i % 4],
                square_footage=UNIT_SF_PATTERN[i % 4],
                floor=i // 4 + 1,
                current_rent=average_rent + spread[i % len(spread)],
                market_rent=average_rent + market_premium,
                lease_start_date=moment,
                lease_end_date=add_days(moment, LEASE_TERM_DAYS),
                occupied=i < occupied_count,
                tenant_name=f"Resident {i + 1}" if i < occupied_count else VACANT,
                renovated=slot >= RENOVATED_FROM_SLOT,
                amenities=UnitAmenities(
                    **{name: slot < round(share * 10) for name, share in UNIT_AMENITY_SHARES.items()}
                ),
            )
        )
    logger.debug(f"Synthesized {n} units ({occupied_count} occupied) at average rent {average_rent}")
    return units


def adapt_units(entries: Optional[Iterable[Any]], now: Optional[datetime] = None) -> List[ApartmentUnit]:
    """Convert raw rent-roll rows to canonical units. Never raises."""
    if not isinstance(entries, (list, tuple)):
        return []
    moment = resolve_now(now)
    return [adapt_unit(raw, moment, index) for index, raw in enumerate(entries)]


__all__ = ["UNIT_ALIASES", "adapt_unit", "adapt_units", "synthesize_units"]
