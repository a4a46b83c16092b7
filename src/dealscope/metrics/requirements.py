# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Metric Requirements

Hard-coded required-field table for every selectable metric. A metric is only
handed to its calculator when ``can_compute`` is true; otherwise the batch
engine records ``explain_missing`` under the metric's validation error.

A field counts as present when it is not ``None``, not NaN and not zero.
List-valued fields must be non-empty.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Tuple, Union

from ..core.facts import PropertyFacts
from ..core.primitives import MetricEnum, PropertyTypeEnum, to_legacy_camel
from ..core.primitives.validation import is_present, to_number
from .types import AssetDataRequirements

logger = logging.getLogger(__name__)

FactsLike = Union[PropertyFacts, Dict[str, Any], None]


class Requirement:
    """
    One required input: a display label and the facts attribute(s) that satisfy it.

    When several attributes are listed, any one of them being present is enough.
    """

    __slots__ = ("label", "attributes")

    def __init__(self, label: str, *attributes: str):
        self.label = label
        self.attributes = attributes

    def value(self, facts: PropertyFacts) -> Any:
        for name in self.attributes:
            value = getattr(facts, name, None)
            if is_present(value):
                return value
        return None

    def is_met(self, facts: PropertyFacts) -> bool:
        return self.value(facts) is not None

    def __repr__(self) -> str:
        return f"Requirement({self.label!r})"


CURRENT_NOI = Requirement("Current NOI", "current_noi")
PROJECTED_NOI = Requirement("Projected NOI", "projected_noi")
PURCHASE_PRICE = Requirement("Purchase Price", "purchase_price")
ANNUAL_CASH_FLOW = Requirement("Annual Cash Flow", "annual_cash_flow")
TOTAL_INVESTMENT = Requirement("Total Investment", "total_investment")
LOAN_AMOUNT = Requirement("Loan Amount", "loan_amount")
INTEREST_RATE = Requirement("Interest Rate", "interest_rate")
LOAN_TERM = Requirement("Loan Term", "loan_term")
GROSS_INCOME = Requirement("Gross Income", "gross_income")
OCCUPANCY_RATE = Requirement("Occupancy Rate", "occupancy_rate")
OPERATING_EXPENSES = Requirement("Operating Expenses", "operating_expenses")
NUMBER_OF_UNITS = Requirement("Number of Units", "number_of_units")
TOTAL_UNITS = Requirement("Total Units", "total_units")
MONTHLY_RENTAL_INCOME = Requirement("Monthly Rental Income", "monthly_rental_income")
AVERAGE_RENT_PSF = Requirement("Average Rent per SF", "average_rent_psf")
CLEAR_HEIGHT = Requirement("Clear Height", "clear_height")
SQUARE_FOOTAGE = Requirement("Square Footage", "square_footage")
ANY_AREA = Requirement(
    "Square Footage (any of: squareFootage, totalSF, or grossLeasableArea)",
    "square_footage",
    "total_sf",
    "gross_leasable_area",
)
OFFICE_TENANTS = Requirement(
    "Office Tenants (at least one tenant with lease expiration date)", "office_tenant_list"
)
RETAIL_TENANTS = Requirement("Retail Tenants (at least one tenant with sales data)", "retail_tenants")

RequirementSet = Tuple[Requirement, ...]

# Each metric lists one or more alternative requirement sets. The first set is
# the primary one used when explaining what is missing.
METRIC_REQUIREMENTS: Dict[MetricEnum, Tuple[RequirementSet, ...]] = {
    MetricEnum.CAP_RATE: ((CURRENT_NOI, PURCHASE_PRICE),),
    MetricEnum.CASH_ON_CASH: ((ANNUAL_CASH_FLOW, TOTAL_INVESTMENT),),
    MetricEnum.DSCR: ((CURRENT_NOI, LOAN_AMOUNT, INTEREST_RATE, LOAN_TERM),),
    MetricEnum.LTV: ((LOAN_AMOUNT, PURCHASE_PRICE),),
    MetricEnum.GRM: ((PURCHASE_PRICE, GROSS_INCOME),),
    MetricEnum.PRICE_PER_SF: ((PURCHASE_PRICE, ANY_AREA),),
    MetricEnum.PRICE_PER_UNIT: ((PURCHASE_PRICE, NUMBER_OF_UNITS),),
    MetricEnum.EGI: ((GROSS_INCOME, OCCUPANCY_RATE),),
    MetricEnum.BREAKEVEN: ((OPERATING_EXPENSES, GROSS_INCOME, LOAN_AMOUNT, INTEREST_RATE, LOAN_TERM),),
    MetricEnum.IRR: ((ANNUAL_CASH_FLOW, TOTAL_INVESTMENT, CURRENT_NOI, PROJECTED_NOI),),
    MetricEnum.ROI: (
        (TOTAL_INVESTMENT, CURRENT_NOI, PROJECTED_NOI),
        (TOTAL_INVESTMENT, ANNUAL_CASH_FLOW),
    ),
    MetricEnum.EFFECTIVE_RENT_PSF: ((AVERAGE_RENT_PSF, OPERATING_EXPENSES, ANY_AREA),),
    MetricEnum.OCCUPANCY_COST_RATIO: ((OPERATING_EXPENSES, GROSS_INCOME),),
    MetricEnum.WALT: ((OFFICE_TENANTS,),),
    MetricEnum.SIMPLE_WALT: ((OFFICE_TENANTS,),),
    MetricEnum.SALES_PER_SF: ((RETAIL_TENANTS,),),
    MetricEnum.CLEAR_HEIGHT_ANALYSIS: ((SQUARE_FOOTAGE, PURCHASE_PRICE, CLEAR_HEIGHT),),
    MetricEnum.INDUSTRIAL_METRICS: ((SQUARE_FOOTAGE, PURCHASE_PRICE, CLEAR_HEIGHT),),
    MetricEnum.REVENUE_PER_UNIT: ((TOTAL_UNITS, MONTHLY_RENTAL_INCOME),),
    MetricEnum.MULTIFAMILY_METRICS: ((NUMBER_OF_UNITS, MONTHLY_RENTAL_INCOME),),
}


def _metric(metric: Union[str, MetricEnum]) -> Optional[MetricEnum]:
    if isinstance(metric, MetricEnum):
        return metric
    try:
        return MetricEnum(metric)
    except ValueError:
        return None


def _facts(facts: FactsLike) -> PropertyFacts:
    return PropertyFacts.from_any(facts)


def can_compute(metric: Union[str, MetricEnum], facts: FactsLike) -> bool:
    """True when every field of at least one requirement set for ``metric`` is present."""
    key = _metric(metric)
    if key is None:
        return False
    record = _facts(facts)
    return any(all(req.is_met(record) for req in group) for group in METRIC_REQUIREMENTS[key])


def missing_fields(metric: Union[str, MetricEnum], facts: FactsLike) -> List[str]:
    """Labels of every missing field in the primary requirement set; empty when computable."""
    key = _metric(metric)
    if key is None or can_compute(key, facts):
        return []
    record = _facts(facts)
    primary = METRIC_REQUIREMENTS[key][0]
    return [req.label for req in primary if not req.is_met(record)]


def explain_missing(metric: Union[str, MetricEnum], facts: FactsLike) -> str:
    """
    One sentence naming every missing field, or ``""`` when nothing is missing.

    Example:
        >>> explain_missing("dscr", {})
        'DSCR calculation requires: Current NOI, Loan Amount, Interest Rate, Loan Term'
    """
    key = _metric(metric)
    if key is None:
        return f"{metric} calculation requires additional data fields that are not available"
    missing = missing_fields(key, facts)
    if not missing:
        return ""
    return f"{key.label} calculation requires: {', '.join(missing)}"


def validate_metric_requirements(metric: Union[str, MetricEnum], facts: FactsLike) -> List[str]:
    """
    One message per missing or non-positive input of ``metric``.

    Unlike ``explain_missing`` this also flags inputs that are present but
    out of range, such as a negative NOI or a loan larger than the price.
    """
    key = _metric(metric)
    if key is None:
        return []
    record = _facts(facts)
    errors = []
    primary = METRIC_REQUIREMENTS[key][0]
    for req in primary:
        if not req.is_met(record):
            errors.append(f"{req.label} is required for {key.label} calculation")
    for req in primary:
        number = to_number(req.value(record))
        if number is None:
            continue
        if req is INTEREST_RATE and not 0 < number <= 100:
            errors.append("Interest Rate must be between 0 and 100")
        elif number <= 0:
            errors.append(f"{req.label} must be positive")
    if key == MetricEnum.LTV and record.loan_amount and record.purchase_price:
        if record.loan_amount > record.purchase_price:
            errors.append("Loan Amount cannot exceed Purchase Price")
    return errors


ASSET_REQUIRED_FIELDS: Dict[PropertyTypeEnum, Tuple[Tuple[str, ...], Dict[str, str]]] = {
    PropertyTypeEnum.OFFICE: (
        ("rentable_square_feet", "number_of_tenants", "average_rent_psf"),
        {"weighted_average_lease_term": "Add weightedAverageLeaseTerm for lease analysis"},
    ),
    PropertyTypeEnum.RETAIL: (
        ("gross_leasable_area", "sales_per_sf", "occupancy_cost_ratio"),
        {"traffic_count": "Add trafficCount for trade area analysis"},
    ),
    PropertyTypeEnum.INDUSTRIAL: (
        ("clear_height", "number_of_dock_doors", "power_capacity"),
        {"distance_to_highway": "Add distanceToHighway for location analysis"},
    ),
    PropertyTypeEnum.MULTIFAMILY: (
        ("number_of_units", "current_occupancy", "average_rent_per_unit"),
        {"unit_mix": "Add unitMix for detailed unit analysis"},
    ),
    PropertyTypeEnum.MIXED_USE: (
        ("total_square_footage", "property_type"),
        {},
    ),
}

_MIXED_USE_RECOMMENDATION = "Consider adding component-specific data for detailed analysis"


def validate_asset_data_requirements(
    facts: FactsLike, property_type: Union[str, PropertyTypeEnum, None]
) -> AssetDataRequirements:
    """
    Whether the facts carry the minimum data for asset-level analysis.

    Missing fields are reported by their camelCase names.
    """
    record = _facts(facts)
    try:
        kind = PropertyTypeEnum(property_type) if property_type is not None else None
    except ValueError:
        kind = None
    if kind is None:
        return AssetDataRequirements(is_valid=False, missing_fields=["propertyType"])

    required, optional = ASSET_REQUIRED_FIELDS[kind]
    missing = [to_legacy_camel(name) for name in required if not is_present(record.get(name))]
    recommendations = [text for name, text in optional.items() if not is_present(record.get(name))]
    if kind == PropertyTypeEnum.MIXED_USE:
        recommendations.append(_MIXED_USE_RECOMMENDATION)
    logger.debug(f"Asset data check for {kind.value}: missing {missing}")
    return AssetDataRequirements(
        is_valid=not missing, missing_fields=missing, recommendations=recommendations
    )


__all__ = [
    "METRIC_REQUIREMENTS",
    "Requirement",
    "can_compute",
    "explain_missing",
    "missing_fields",
    "validate_asset_data_requirements",
    "validate_metric_requirements",
]
