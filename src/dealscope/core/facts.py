# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Property Facts

The input record for every calculation. ``PropertyFacts`` is the flat,
loosely populated shape callers supply (every field optional, camelCase
aliases accepted, unknown keys retained). ``PropertyFacts.to_variant()``
narrows it to a typed per-property-type record carrying only the fields
that property type uses.

Numeric fields tolerate strings (``"1,250,000"``) and silently become ``None``
when unreadable; range problems are reported by
``dealscope.metrics.checks.validate_property_data`` rather than raised here.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, field_validator

from .primitives.enums import PropertyTypeEnum
from .primitives.model import to_legacy_camel
from .primitives.validation import first_present, to_number

logger = logging.getLogger(__name__)


class FactsModel(BaseModel):
    """Base for facts records: immutable, alias-aware, tolerant of extra keys."""

    model_config = ConfigDict(
        alias_generator=to_legacy_camel,
        populate_by_name=True,
        frozen=True,
        extra="allow",
        arbitrary_types_allowed=True,
    )


_FINANCIAL_FIELDS = (
    "purchase_price",
    "current_noi",
    "projected_noi",
    "gross_income",
    "operating_expenses",
    "annual_cash_flow",
    "total_investment",
    "occupancy_rate",
    "loan_amount",
    "interest_rate",
    "loan_term",
    "discount_rate",
    "holding_period",
    "cap_rate",
    "square_footage",
    "total_sf",
    "number_of_units",
    "parking_spaces",
    "year_built",
    "land_area",
)

_OFFICE_FIELDS = (
    "rentable_square_feet",
    "number_of_tenants",
    "average_rent_psf",
    "weighted_average_lease_term",
    "option_probability",
    "energy_usage_psf",
)

_RETAIL_FIELDS = (
    "gross_leasable_area",
    "total_gla",
    "anchor_gla",
    "sales_per_sf",
    "occupancy_cost_ratio",
    "traffic_count",
)

_INDUSTRIAL_FIELDS = (
    "clear_height",
    "number_of_dock_doors",
    "number_of_drive_in_doors",
    "power_capacity",
    "truck_court_depth",
    "distance_to_highway",
    "distance_to_port",
    "distance_to_rail",
    "distance_to_airport",
    "distance_to_intermodal",
    "population_one_hour",
    "number_of_zones",
    "refrigeration_systems",
    "insulation_r",
    "power_cost_per_kwh",
    "households",
    "ecommerce_delivery_volume",
    "battery_charging_stations",
)

_MULTIFAMILY_FIELDS = (
    "total_units",
    "average_rent",
    "average_rent_per_unit",
    "monthly_rental_income",
    "market_average_rent",
    "current_occupancy",
    "renovation_budget",
    "walk_score",
    "transit_score",
    "school_rating",
    "crime_index",
)

_MIXED_USE_FIELDS = (
    "total_square_footage",
    "retail_sf",
    "office_sf",
    "residential_sf",
    "residential_units",
    "retail_noi",
    "office_noi",
    "residential_noi",
    "total_development_cost",
    "target_rents",
    "construction_period",
    "lease_up_period",
    "allowable_far",
)

NUMERIC_FIELDS = (
    _FINANCIAL_FIELDS
    + _OFFICE_FIELDS
    + _RETAIL_FIELDS
    + _INDUSTRIAL_FIELDS
    + _MULTIFAMILY_FIELDS
    + _MIXED_USE_FIELDS
)


def _coerce_number(value: Any, field_name: str) -> Optional[float]:
    if value is None:
        return None
    number = to_number(value)
    if number is None:
        logger.warning(f"Ignoring unreadable value {value!r} for {field_name}")
    return number


def _coerce_property_type(value: Any) -> Optional[PropertyTypeEnum]:
    if value is None or value == "":
        return None
    if isinstance(value, PropertyTypeEnum):
        return value
    text = str(value).strip().lower().replace("_", "-").replace(" ", "-")
    if text == "mixeduse":
        text = "mixed-use"
    try:
        return PropertyTypeEnum(text)
    except ValueError:
        logger.warning(f"Unknown property type {value!r}")
        return None


class PropertyFacts(FactsModel):
    """
    Flat record of optional facts about a property and its financing.

    No field is required at the type level. Each metric and package declares
    the subset it needs.
    """

    property_type: Optional[PropertyTypeEnum] = None
    selected_package_id: Optional[str] = None

    # Pricing, income and financing
    purchase_price: Optional[float] = None
    current_noi: Optional[float] = None
    projected_noi: Optional[float] = None
    gross_income: Optional[float] = None
    operating_expenses: Optional[float] = None
    annual_cash_flow: Optional[float] = None
    total_investment: Optional[float] = None
    occupancy_rate: Optional[float] = None
    loan_amount: Optional[float] = None
    interest_rate: Optional[float] = None
    loan_term: Optional[float] = None
    discount_rate: Optional[float] = None
    holding_period: Optional[float] = None
    cap_rate: Optional[float] = None

    # Physical
    square_footage: Optional[float] = None
    total_sf: Optional[float] = None
    number_of_units: Optional[float] = None
    parking_spaces: Optional[float] = None
    year_built: Optional[float] = None
    land_area: Optional[float] = None

    # Office
    rentable_square_feet: Optional[float] = None
    number_of_tenants: Optional[float] = None
    average_rent_psf: Optional[float] = None
    weighted_average_lease_term: Optional[float] = None
    option_probability: Optional[float] = None
    energy_usage_psf: Optional[float] = None
    building_class: Optional[str] = None
    office_tenants: Optional[Any] = None
    tenants: Optional[List[Any]] = None

    # Retail
    gross_leasable_area: Optional[float] = None
    total_gla: Optional[float] = None
    anchor_gla: Optional[float] = None
    sales_per_sf: Optional[float] = None
    occupancy_cost_ratio: Optional[float] = None
    traffic_count: Optional[float] = None
    retail_tenants: Optional[List[Any]] = None

    # Industrial
    clear_height: Optional[float] = None
    number_of_dock_doors: Optional[float] = None
    number_of_drive_in_doors: Optional[float] = None
    power_capacity: Optional[float] = None
    truck_court_depth: Optional[float] = None
    distance_to_highway: Optional[float] = None
    distance_to_port: Optional[float] = None
    distance_to_rail: Optional[float] = None
    distance_to_airport: Optional[float] = None
    distance_to_intermodal: Optional[float] = None
    population_one_hour: Optional[float] = None
    number_of_zones: Optional[float] = None
    refrigeration_systems: Optional[float] = None
    insulation_r: Optional[float] = None
    power_cost_per_kwh: Optional[float] = None
    households: Optional[float] = None
    ecommerce_delivery_volume: Optional[float] = None
    battery_charging_stations: Optional[float] = None
    temperature_control: Optional[Any] = None
    temperature_ranges: Optional[Any] = None
    autonomous: Optional[bool] = None
    industrial_tenants: Optional[List[Any]] = None

    # Multifamily
    total_units: Optional[float] = None
    average_rent: Optional[float] = None
    average_rent_per_unit: Optional[float] = None
    monthly_rental_income: Optional[float] = None
    market_average_rent: Optional[float] = None
    current_occupancy: Optional[float] = None
    renovation_budget: Optional[float] = None
    walk_score: Optional[float] = None
    transit_score: Optional[float] = None
    school_rating: Optional[float] = None
    crime_index: Optional[float] = None
    unit_mix: Optional[Any] = None

    # Mixed-use
    total_square_footage: Optional[float] = None
    retail_sf: Optional[float] = None
    office_sf: Optional[float] = None
    residential_sf: Optional[float] = None
    residential_units: Optional[float] = None
    retail_noi: Optional[float] = None
    office_noi: Optional[float] = None
    residential_noi: Optional[float] = None
    total_development_cost: Optional[float] = None
    target_rents: Optional[float] = None
    construction_period: Optional[float] = None
    lease_up_period: Optional[float] = None
    allowable_far: Optional[float] = None
    mixed_use_components: Optional[List[Any]] = None

    @field_validator(*NUMERIC_FIELDS, mode="before")
    @classmethod
    def _numbers(cls, value: Any, info) -> Optional[float]:
        return _coerce_number(value, info.field_name)

    @field_validator("property_type", mode="before")
    @classmethod
    def _property_type(cls, value: Any) -> Optional[PropertyTypeEnum]:
        return _coerce_property_type(value)

    @field_validator("building_class", "selected_package_id", mode="before")
    @classmethod
    def _text(cls, value: Any) -> Optional[str]:
        if value is None:
            return None
        text = str(value).strip()
        return text or None

    @field_validator("autonomous", mode="before")
    @classmethod
    def _flag(cls, value: Any) -> Optional[bool]:
        if value is None or isinstance(value, bool):
            return value
        if isinstance(value, str):
            return value.strip().lower() in ("true", "yes", "1", "y")
        if isinstance(value, (int, float)):
            return value != 0
        return None

    @field_validator(
        "tenants", "retail_tenants", "industrial_tenants", "mixed_use_components", mode="before"
    )
    @classmethod
    def _lists(cls, value: Any) -> Optional[List[Any]]:
        if value is None:
            return None
        if isinstance(value, (list, tuple)):
            return list(value)
        logger.warning(f"Expected a list, got {type(value).__name__}; ignoring")
        return None

    # ------------------------------------------------------------------
    # Construction helpers
    # ------------------------------------------------------------------

    @classmethod
    def from_any(cls, facts: Union["PropertyFacts", Dict[str, Any], None]) -> "PropertyFacts":
        """Accept an existing record, a raw dict, or ``None`` (empty facts)."""
        if facts is None:
            return cls()
        if isinstance(facts, PropertyFacts):
            return facts
        if isinstance(facts, BaseModel):
            return cls.model_validate(facts.model_dump(by_alias=True))
        return cls.model_validate(dict(facts))

    def get(self, name: str, default: Any = None) -> Any:
        """Read a declared field or a retained extra by snake_case or camelCase name."""
        if name in type(self).model_fields:
            value = getattr(self, name)
            return default if value is None else value
        extras = self.model_extra or {}
        for key in (name, to_legacy_camel(name)):
            if key in extras and extras[key] is not None:
                return extras[key]
        return default

    # ------------------------------------------------------------------
    # Derived facts
    # ------------------------------------------------------------------

    @property
    def area(self) -> Optional[float]:
        """Square footage: explicit SF, else total SF, else gross leasable area."""
        return first_present(self.square_footage, self.total_sf, self.gross_leasable_area)

    @property
    def office_tenant_list(self) -> List[Any]:
        """
        Office tenants whether supplied as a list, as ``{"tenants": [...]}``,
        or through the plain ``tenants`` field.
        """
        tenants = self.office_tenants if self.office_tenants is not None else self.tenants
        if isinstance(tenants, dict):
            tenants = tenants.get("tenants")
        if isinstance(tenants, (list, tuple)):
            return list(tenants)
        return []

    def to_variant(self) -> "AnyPropertyVariant":
        """Narrow to the typed record for ``property_type`` (generic record when unset)."""
        variant_cls = _VARIANTS.get(self.property_type, GenericFacts)
        data = {name: getattr(self, name) for name in variant_cls.model_fields if name in type(self).model_fields}
        data = {key: value for key, value in data.items() if value is not None}
        if self.property_type is not None:
            data["property_type"] = self.property_type.value
        return variant_cls.model_validate(data)


class _VariantBase(BaseModel):
    """Common financial fields shared by every typed variant."""

    model_config = ConfigDict(frozen=True, extra="ignore", populate_by_name=True)

    purchase_price: Optional[float] = None
    current_noi: Optional[float] = None
    projected_noi: Optional[float] = None
    gross_income: Optional[float] = None
    operating_expenses: Optional[float] = None
    annual_cash_flow: Optional[float] = None
    total_investment: Optional[float] = None
    occupancy_rate: Optional[float] = None
    loan_amount: Optional[float] = None
    interest_rate: Optional[float] = None
    loan_term: Optional[float] = None
    holding_period: Optional[float] = None
    square_footage: Optional[float] = None
    total_sf: Optional[float] = None
    year_built: Optional[float] = None


class GenericFacts(_VariantBase):
    property_type: Literal[None] = None


class OfficeFacts(_VariantBase):
    property_type: Literal["office"] = "office"
    rentable_square_feet: Optional[float] = None
    number_of_tenants: Optional[float] = None
    average_rent_psf: Optional[float] = None
    weighted_average_lease_term: Optional[float] = None
    building_class: Optional[str] = None
    office_tenants: Optional[Any] = None


class RetailFacts(_VariantBase):
    property_type: Literal["retail"] = "retail"
    gross_leasable_area: Optional[float] = None
    sales_per_sf: Optional[float] = None
    occupancy_cost_ratio: Optional[float] = None
    traffic_count: Optional[float] = None
    land_area: Optional[float] = None
    retail_tenants: Optional[List[Any]] = None


class IndustrialFacts(_VariantBase):
    property_type: Literal["industrial"] = "industrial"
    clear_height: Optional[float] = None
    number_of_dock_doors: Optional[float] = None
    number_of_drive_in_doors: Optional[float] = None
    power_capacity: Optional[float] = None
    truck_court_depth: Optional[float] = None
    distance_to_highway: Optional[float] = None
    distance_to_port: Optional[float] = None
    distance_to_rail: Optional[float] = None
    distance_to_airport: Optional[float] = None
    industrial_tenants: Optional[List[Any]] = None


class MultifamilyFacts(_VariantBase):
    property_type: Literal["multifamily"] = "multifamily"
    number_of_units: Optional[float] = None
    total_units: Optional[float] = None
    average_rent: Optional[float] = None
    average_rent_per_unit: Optional[float] = None
    monthly_rental_income: Optional[float] = None
    market_average_rent: Optional[float] = None
    current_occupancy: Optional[float] = None
    renovation_budget: Optional[float] = None
    unit_mix: Optional[Any] = None


class MixedUseFacts(_VariantBase):
    property_type: Literal["mixed-use"] = "mixed-use"
    total_square_footage: Optional[float] = None
    retail_sf: Optional[float] = None
    office_sf: Optional[float] = None
    residential_sf: Optional[float] = None
    residential_units: Optional[float] = None
    total_development_cost: Optional[float] = None
    target_rents: Optional[float] = None
    mixed_use_components: Optional[List[Any]] = None


AnyPropertyVariant = Union[
    OfficeFacts, RetailFacts, IndustrialFacts, MultifamilyFacts, MixedUseFacts, GenericFacts
]

TypedPropertyFacts = Union[OfficeFacts, RetailFacts, IndustrialFacts, MultifamilyFacts, MixedUseFacts]

_VARIANTS = {
    PropertyTypeEnum.OFFICE: OfficeFacts,
    PropertyTypeEnum.RETAIL: RetailFacts,
    PropertyTypeEnum.INDUSTRIAL: IndustrialFacts,
    PropertyTypeEnum.MULTIFAMILY: MultifamilyFacts,
    PropertyTypeEnum.MIXED_USE: MixedUseFacts,
}


__all__ = [
    "AnyPropertyVariant",
    "GenericFacts",
    "IndustrialFacts",
    "MixedUseFacts",
    "MultifamilyFacts",
    "NUMERIC_FIELDS",
    "OfficeFacts",
    "PropertyFacts",
    "RetailFacts",
    "TypedPropertyFacts",
    "to_legacy_camel",
]
