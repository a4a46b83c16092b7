# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Package Catalog

Predefined metric bundles per property type (basic, complete and
institutional tiers), the metric catalog used for custom selections, and
helpers that match a set of facts to the bundles it can support.

Required fields are stored as snake_case attribute names and reported in
camelCase.
"""

from __future__ import annotations

import logging
from typing import Dict, Iterable, List, Tuple, Union

from pydantic import Field

from ..core.facts import PropertyFacts
from ..core.primitives import CamelModel, MetricEnum, Model, PropertyTypeEnum, to_legacy_camel
from ..metrics.requirements import FactsLike, validate_asset_data_requirements

logger = logging.getLogger(__name__)


class CalculationPackage(Model):
    """A named bundle of metrics and the facts it needs."""

    id: str
    name: str
    description: str
    included_metrics: Tuple[MetricEnum, ...]
    required_fields: Tuple[str, ...]

    @property
    def required_field_names(self) -> List[str]:
        return [to_legacy_camel(name) for name in self.required_fields]


class MetricInfo(Model):
    name: str
    category: str
    description: str
    required_fields: Tuple[str, ...]


class PackageRecommendation(CamelModel):
    package_id: str
    name: str
    description: str
    match_score: int


class PackageDataCheck(CamelModel):
    """Whether the facts carry every field a package requires."""

    package_id: str
    is_valid: bool
    missing_fields: List[str] = Field(default_factory=list)


BASIC_FIELDS = ("purchase_price", "current_noi", "total_investment", "annual_cash_flow")
FINANCING_FIELDS = (
    "purchase_price",
    "current_noi",
    "projected_noi",
    "total_investment",
    "annual_cash_flow",
    "loan_amount",
    "interest_rate",
    "loan_term",
)
COMPLETE_FIELDS = FINANCING_FIELDS + ("operating_expenses", "gross_income")

BASIC_METRICS = (MetricEnum.CAP_RATE, MetricEnum.CASH_ON_CASH)
COMPLETE_METRICS = BASIC_METRICS + (MetricEnum.DSCR, MetricEnum.IRR, MetricEnum.BREAKEVEN)
INSTITUTIONAL_METRICS = BASIC_METRICS + (
    MetricEnum.DSCR,
    MetricEnum.IRR,
    MetricEnum.ROI,
    MetricEnum.BREAKEVEN,
    MetricEnum.PRICE_PER_SF,
)


def _basic(prefix: str, label: str) -> CalculationPackage:
    return CalculationPackage(
        id=f"{prefix}-basic",
        name=f"{label} Quick Analysis",
        description=f"Basic metrics for {label.lower()} properties",
        included_metrics=BASIC_METRICS,
        required_fields=BASIC_FIELDS,
    )


def _complete(prefix: str, label: str) -> CalculationPackage:
    return CalculationPackage(
        id=f"{prefix}-complete",
        name=f"Complete {label} Analysis",
        description=f"Full analysis for {label.lower()} properties",
        included_metrics=COMPLETE_METRICS,
        required_fields=COMPLETE_FIELDS,
    )


PROPERTY_PACKAGES: Dict[PropertyTypeEnum, List[CalculationPackage]] = {
    PropertyTypeEnum.OFFICE: [
        _basic("office", "Office"),
        _complete("office", "Office"),
        CalculationPackage(
            id="office-institutional",
            name="Institutional Office Analysis",
            description="Comprehensive institutional-grade office analysis with tenant and lease analytics",
            included_metrics=INSTITUTIONAL_METRICS,
            required_fields=COMPLETE_FIELDS
            + ("rentable_square_feet", "number_of_tenants", "average_rent_psf", "weighted_average_lease_term"),
        ),
    ],
    PropertyTypeEnum.RETAIL: [
        _basic("retail", "Retail"),
        _complete("retail", "Retail"),
        CalculationPackage(
            id="retail-institutional",
            name="Institutional Retail Analysis",
            description="Comprehensive retail analysis with sales performance and trade area analytics",
            included_metrics=INSTITUTIONAL_METRICS,
            required_fields=COMPLETE_FIELDS
            + ("gross_leasable_area", "sales_per_sf", "occupancy_cost_ratio", "traffic_count"),
        ),
    ],
    PropertyTypeEnum.INDUSTRIAL: [
        _basic("industrial", "Industrial"),
        CalculationPackage(
            id="industrial-investment",
            name="Investment Analysis",
            description="Returns and financing metrics",
            included_metrics=BASIC_METRICS + (MetricEnum.DSCR, MetricEnum.ROI),
            required_fields=FINANCING_FIELDS,
        ),
        CalculationPackage(
            id="industrial-institutional",
            name="Institutional Industrial Analysis",
            description="Comprehensive industrial analysis with building functionality and logistics analytics",
            included_metrics=INSTITUTIONAL_METRICS,
            required_fields=COMPLETE_FIELDS
            + ("clear_height", "number_of_dock_doors", "power_capacity", "distance_to_highway"),
        ),
    ],
    PropertyTypeEnum.MULTIFAMILY: [
        _basic("multifamily", "Multifamily"),
        _complete("multifamily", "Multifamily"),
        CalculationPackage(
            id="multifamily-institutional",
            name="Institutional Multifamily Analysis",
            description="Comprehensive multifamily analysis with revenue performance and market analytics",
            included_metrics=BASIC_METRICS
            + (
                MetricEnum.DSCR,
                MetricEnum.IRR,
                MetricEnum.ROI,
                MetricEnum.BREAKEVEN,
                MetricEnum.PRICE_PER_UNIT,
                MetricEnum.GRM,
                MetricEnum.EGI,
            ),
            required_fields=COMPLETE_FIELDS
            + ("number_of_units", "current_occupancy", "average_rent_per_unit", "unit_mix"),
        ),
    ],
    PropertyTypeEnum.MIXED_USE: [
        CalculationPackage(
            id="mixed-basic",
            name="Mixed-Use Quick Analysis",
            description="Basic metrics for mixed-use properties",
            included_metrics=BASIC_METRICS,
            required_fields=BASIC_FIELDS,
        ),
        CalculationPackage(
            id="mixed-complete",
            name="Complete Mixed-Use Analysis",
            description="Full analysis for mixed residential/commercial",
            included_metrics=COMPLETE_METRICS,
            required_fields=COMPLETE_FIELDS,
        ),
        CalculationPackage(
            id="mixed-institutional",
            name="Institutional Mixed-Use Analysis",
            description="Comprehensive mixed-use analysis with component performance and synergy analytics",
            included_metrics=INSTITUTIONAL_METRICS,
            required_fields=COMPLETE_FIELDS + ("total_square_footage", "property_type"),
        ),
    ],
}

METRIC_CATALOG: Dict[MetricEnum, MetricInfo] = {
    MetricEnum.CAP_RATE: MetricInfo(
        name="Cap Rate",
        category="Basic",
        description="Annual return on investment based on property's net operating income",
        required_fields=("purchase_price", "current_noi"),
    ),
    MetricEnum.CASH_ON_CASH: MetricInfo(
        name="Cash-on-Cash Return",
        category="Basic",
        description="Annual return on actual cash invested in the property",
        required_fields=("total_investment", "annual_cash_flow"),
    ),
    MetricEnum.DSCR: MetricInfo(
        name="Debt Service Coverage Ratio",
        category="Debt",
        description="Ability to cover debt payments with property income",
        required_fields=("current_noi", "loan_amount", "interest_rate", "loan_term"),
    ),
    MetricEnum.LTV: MetricInfo(
        name="Loan-to-Value Ratio",
        category="Debt",
        description="Ratio of loan amount to property value",
        required_fields=("loan_amount", "purchase_price"),
    ),
    MetricEnum.IRR: MetricInfo(
        name="Internal Rate of Return",
        category="Advanced",
        description="Expected annual return over the investment period",
        required_fields=("total_investment", "annual_cash_flow", "current_noi", "projected_noi"),
    ),
    MetricEnum.ROI: MetricInfo(
        name="Return on Investment",
        category="Advanced",
        description="Total return on investment relative to initial cost",
        required_fields=("total_investment", "current_noi", "projected_noi"),
    ),
    MetricEnum.BREAKEVEN: MetricInfo(
        name="Breakeven Analysis",
        category="Advanced",
        description="Point where income equals expenses",
        required_fields=("operating_expenses", "gross_income", "loan_amount", "interest_rate", "loan_term"),
    ),
    MetricEnum.PRICE_PER_SF: MetricInfo(
        name="Price per Square Foot",
        category="Property",
        description="Property value per square foot of space",
        required_fields=("purchase_price", "square_footage"),
    ),
    MetricEnum.PRICE_PER_UNIT: MetricInfo(
        name="Price per Unit",
        category="Multifamily",
        description="Property value per residential unit",
        required_fields=("purchase_price", "number_of_units"),
    ),
    MetricEnum.GRM: MetricInfo(
        name="Gross Rent Multiplier",
        category="Multifamily",
        description="Ratio of property price to gross rental income",
        required_fields=("purchase_price", "gross_income"),
    ),
    MetricEnum.EGI: MetricInfo(
        name="Effective Gross Income",
        category="Multifamily",
        description="Gross income adjusted for vacancy and collection losses",
        required_fields=("gross_income", "occupancy_rate"),
    ),
}

ASSET_FUNCTION_DESCRIPTIONS = {
    "analyzeTenantFinancialHealth": "Comprehensive tenant credit and financial health analysis",
    "analyzeLeaseEconomics": "Detailed lease economics and valuation analysis",
    "analyzeBuildingOperations": "Building systems and operational efficiency analysis",
    "analyzeMarketPositioning": "Market positioning and competitive analysis",
    "analyzeSalesPerformance": "Sales performance and tenant productivity analysis",
    "analyzeCoTenancy": "Co-tenancy risk and anchor dependency analysis",
    "analyzeTradeArea": "Trade area demographics and market analysis",
    "analyzePercentageRent": "Percentage rent optimization analysis",
    "analyzeExpenseRecovery": "Expense recovery and CAM analysis",
    "analyzeRedevelopmentPotential": "Redevelopment and highest-best-use analysis",
    "analyzeBuildingFunctionality": "Building functionality and efficiency analysis",
    "analyzeLocationLogistics": "Location logistics and accessibility analysis",
    "analyzeColdStorage": "Cold storage facility analysis",
    "analyzeLastMileFacility": "Last-mile delivery facility analysis",
    "analyzeRevenuePerformance": "Revenue performance and rent roll analysis",
    "analyzeOperatingPerformance": "Operating performance and expense analysis",
    "analyzeMarketPosition": "Market position and competitive analysis",
    "analyzeValueAddPotential": "Value-add renovation and improvement analysis",
    "analyzeMixedUsePerformance": "Mixed-use component performance analysis",
    "analyzeCrossUseInteractions": "Cross-use synergies and conflicts analysis",
    "analyzeOperationalIntegration": "Operational integration and efficiency analysis",
    "analyzeMixedUseDevelopment": "Mixed-use development potential analysis",
}

ASSET_FUNCTIONS: Dict[PropertyTypeEnum, Tuple[str, ...]] = {
    PropertyTypeEnum.OFFICE: (
        "analyzeTenantFinancialHealth",
        "analyzeLeaseEconomics",
        "analyzeBuildingOperations",
        "analyzeMarketPositioning",
    ),
    PropertyTypeEnum.RETAIL: (
        "analyzeSalesPerformance",
        "analyzeCoTenancy",
        "analyzeTradeArea",
        "analyzePercentageRent",
        "analyzeExpenseRecovery",
        "analyzeRedevelopmentPotential",
    ),
    PropertyTypeEnum.INDUSTRIAL: (
        "analyzeBuildingFunctionality",
        "analyzeLocationLogistics",
        "analyzeColdStorage",
        "analyzeLastMileFacility",
    ),
    PropertyTypeEnum.MULTIFAMILY: (
        "analyzeRevenuePerformance",
        "analyzeOperatingPerformance",
        "analyzeMarketPosition",
        "analyzeValueAddPotential",
    ),
    PropertyTypeEnum.MIXED_USE: (
        "analyzeMixedUsePerformance",
        "analyzeCrossUseInteractions",
        "analyzeOperationalIntegration",
        "analyzeMixedUseDevelopment",
    ),
}


def _supplied(record: PropertyFacts, name: str) -> bool:
    return record.get(name) is not None


def get_property_packages(property_type: Union[str, PropertyTypeEnum, None]) -> List[CalculationPackage]:
    """Packages offered for a property type; empty for an unknown type."""
    try:
        kind = PropertyTypeEnum(property_type)
    except ValueError:
        return []
    return list(PROPERTY_PACKAGES[kind])


def find_package(package_id: str) -> CalculationPackage:
    """
    Look up a catalog package by id.

    Raises:
        KeyError: If no package has this id
    """
    for packages in PROPERTY_PACKAGES.values():
        for package in packages:
            if package.id == package_id:
                return package
    raise KeyError(f"No calculation package with id '{package_id}'")


def required_fields_for_metrics(
    metrics: Iterable[Union[str, MetricEnum]], facts: FactsLike = None
) -> List[str]:
    """
    camelCase names of every field the selected metrics need.

    When the facts name a property type, the asset-level fields it is
    missing are appended.
    """
    names: List[str] = []
    for metric in metrics:
        try:
            key = MetricEnum(metric)
        except ValueError:
            continue
        info = METRIC_CATALOG.get(key)
        if info is None:
            continue
        for field in info.required_fields:
            camel = to_legacy_camel(field)
            if camel not in names:
                names.append(camel)
    record = PropertyFacts.from_any(facts)
    if record.property_type is not None:
        check = validate_asset_data_requirements(record, record.property_type)
        for camel in check.missing_fields:
            if camel not in names:
                names.append(camel)
    return names


def recommend_packages(facts: FactsLike) -> List[PackageRecommendation]:
    """
    Rank the packages for the facts' property type by how many of their
    required fields are supplied.

    A field counts as supplied when it is not ``None``, so a zero counts.
    Scores are rounded percentages, highest first.
    """
    record = PropertyFacts.from_any(facts)
    if record.property_type is None:
        return []
    recommendations = []
    for package in PROPERTY_PACKAGES[record.property_type]:
        available = sum(1 for name in package.required_fields if _supplied(record, name))
        score = round(available / len(package.required_fields) * 100)
        recommendations.append(
            PackageRecommendation(
                package_id=package.id,
                name=package.name,
                description=package.description,
                match_score=score,
            )
        )
    return sorted(recommendations, key=lambda item: item.match_score, reverse=True)


def validate_data_for_package(package_id: str, facts: FactsLike) -> PackageDataCheck:
    """Report which required fields of a catalog package the facts lack."""
    try:
        package = find_package(package_id)
    except KeyError:
        logger.warning(f"Unknown calculation package: {package_id}")
        return PackageDataCheck(package_id=package_id, is_valid=False, missing_fields=[])
    record = PropertyFacts.from_any(facts)
    missing = [to_legacy_camel(name) for name in package.required_fields if not _supplied(record, name)]
    return PackageDataCheck(package_id=package_id, is_valid=not missing, missing_fields=missing)


def available_asset_functions(property_type: Union[str, PropertyTypeEnum, None]) -> List[str]:
    """Names of the asset analysis functions offered for a property type."""
    try:
        kind = PropertyTypeEnum(property_type)
    except ValueError:
        return []
    return list(ASSET_FUNCTIONS[kind])


__all__ = [
    "ASSET_FUNCTIONS",
    "ASSET_FUNCTION_DESCRIPTIONS",
    "CalculationPackage",
    "METRIC_CATALOG",
    "MetricInfo",
    "PROPERTY_PACKAGES",
    "PackageDataCheck",
    "PackageRecommendation",
    "available_asset_functions",
    "find_package",
    "get_property_packages",
    "recommend_packages",
    "required_fields_for_metrics",
    "validate_data_for_package",
]
