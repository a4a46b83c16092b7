# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Batch Metrics Engine

``compute_metrics`` is the gated entry point: it takes whatever facts a caller
has, computes every selected metric it can, and explains the ones it cannot.
Nothing here raises for missing or malformed input.

Workflow:
  1) Core metrics, each gated by its data requirements
  2) Typed, property-specific metrics (WALT, sales per SF, industrial,
     multifamily)
  3) Asset analyses switched on by analysis flags
  4) The selected calculation package
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Any, Callable, Dict, Iterable, Mapping, Optional, Union

from ..adapters.office import adapt_office_tenants
from ..adapters.retail import adapt_retail_tenants
from ..core.bundle import PackageBundleResult
from ..core.facts import PropertyFacts
from ..core.primitives import (
    DEFAULT_SETTINGS,
    AnalysisFlagEnum,
    EngineSettings,
    MetricEnum,
    PropertyTypeEnum,
    Result,
    first_present,
    resolve_now,
)
from ..packages import catalog
from ..packages.registry import PACKAGE_REGISTRY, PackageId, run_package
from . import calculators as calc
from .requirements import can_compute, explain_missing, validate_asset_data_requirements
from .types import AssetAnalysis, ComputedMetrics, MetricSelection

logger = logging.getLogger(__name__)

PACKAGE_ERROR = "Unable to calculate package metrics. Please check input data."

SelectionLike = Union[MetricSelection, Mapping[str, Any], Iterable[str], None]

# Analysis flag -> (property type, package run, key in the asset results)
ASSET_ANALYSES: Dict[AnalysisFlagEnum, tuple] = {
    AnalysisFlagEnum.TENANT_FINANCIAL_HEALTH: (
        PropertyTypeEnum.OFFICE, PackageId.OFFICE_TENANT_FINANCIAL_HEALTH, "tenantFinancialHealth"
    ),
    AnalysisFlagEnum.LEASE_VALUATION: (
        PropertyTypeEnum.OFFICE, PackageId.OFFICE_LEASE_ECONOMICS, "leaseEconomics"
    ),
    AnalysisFlagEnum.OPERATIONAL_EFFICIENCY: (
        PropertyTypeEnum.OFFICE, PackageId.OFFICE_BUILDING_OPERATIONS, "buildingOperations"
    ),
    AnalysisFlagEnum.MARKET_POSITIONING: (
        PropertyTypeEnum.OFFICE, PackageId.OFFICE_MARKET_POSITIONING, "marketPositioning"
    ),
    AnalysisFlagEnum.TENANT_HEALTH: (
        PropertyTypeEnum.RETAIL, PackageId.RETAIL_SALES_PERFORMANCE, "salesPerformance"
    ),
    AnalysisFlagEnum.CO_TENANCY_RISK: (
        PropertyTypeEnum.RETAIL, PackageId.RETAIL_CO_TENANCY, "coTenancy"
    ),
    AnalysisFlagEnum.TRADE_AREA_ANALYSIS: (
        PropertyTypeEnum.RETAIL, PackageId.RETAIL_TRADE_AREA, "tradeArea"
    ),
    AnalysisFlagEnum.FUNCTIONAL_SCORE: (
        PropertyTypeEnum.INDUSTRIAL, PackageId.INDUSTRIAL_BUILDING_FUNCTIONALITY, "buildingFunctionality"
    ),
    AnalysisFlagEnum.LOCATION_SCORE: (
        PropertyTypeEnum.INDUSTRIAL, PackageId.INDUSTRIAL_LOCATION_LOGISTICS, "locationLogistics"
    ),
    AnalysisFlagEnum.REVENUE_METRICS: (
        PropertyTypeEnum.MULTIFAMILY, PackageId.MULTIFAMILY_REVENUE_PERFORMANCE, "revenuePerformance"
    ),
    AnalysisFlagEnum.MARKET_POSITION: (
        PropertyTypeEnum.MULTIFAMILY, PackageId.MULTIFAMILY_MARKET_POSITION, "marketPosition"
    ),
}


def _field_names() -> Dict[str, str]:
    return {info.alias or name: name for name, info in ComputedMetrics.model_fields.items()}


_FIELD_FOR = _field_names()


def _core_calculation(
    metric: MetricEnum, facts: PropertyFacts, settings: EngineSettings
) -> Result[float]:
    """Dispatch one core metric to its ``Result`` calculator."""
    returns = settings.returns
    formulas: Dict[MetricEnum, Callable[[], Result[float]]] = {
        MetricEnum.CAP_RATE: lambda: calc.calculate_cap_rate(facts.current_noi, facts.purchase_price),
        MetricEnum.CASH_ON_CASH: lambda: calc.calculate_cash_on_cash(
            facts.annual_cash_flow, facts.total_investment
        ),
        MetricEnum.DSCR: lambda: calc.calculate_dscr(
            facts.current_noi, facts.loan_amount, facts.interest_rate, facts.loan_term
        ),
        MetricEnum.LTV: lambda: calc.calculate_ltv(facts.loan_amount, facts.purchase_price),
        MetricEnum.GRM: lambda: calc.calculate_grm(facts.purchase_price, facts.gross_income),
        MetricEnum.PRICE_PER_SF: lambda: calc.calculate_price_per_sf(facts.purchase_price, facts.area),
        MetricEnum.PRICE_PER_UNIT: lambda: calc.calculate_price_per_unit(
            facts.purchase_price, facts.number_of_units
        ),
        MetricEnum.EGI: lambda: calc.calculate_egi(facts.gross_income, facts.occupancy_rate),
        MetricEnum.BREAKEVEN: lambda: calc.calculate_breakeven_occupancy(
            facts.operating_expenses,
            facts.gross_income,
            facts.loan_amount,
            facts.interest_rate,
            facts.loan_term,
        ),
        MetricEnum.IRR: lambda: calc.calculate_irr(
            facts.annual_cash_flow,
            facts.total_investment,
            facts.current_noi,
            facts.projected_noi,
            holding_period=facts.holding_period,
            exit_cap_rate=facts.cap_rate,
            settings=returns,
        ),
        MetricEnum.ROI: lambda: calc.calculate_roi(
            facts.total_investment,
            current_noi=facts.current_noi,
            projected_noi=facts.projected_noi,
            annual_cash_flow=facts.annual_cash_flow,
            holding_period=facts.holding_period,
            exit_cap_rate=facts.cap_rate,
            settings=returns,
        ),
        MetricEnum.EFFECTIVE_RENT_PSF: lambda: calc.calculate_effective_rent_psf(
            facts.average_rent_psf, facts.operating_expenses, facts.area
        ),
        MetricEnum.OCCUPANCY_COST_RATIO: lambda: calc.calculate_occupancy_cost_ratio(
            facts.operating_expenses, facts.gross_income
        ),
    }
    return formulas[metric]()


def _typed_metric(
    metric: MetricEnum, facts: PropertyFacts, now: datetime, settings: EngineSettings
) -> Any:
    if metric in (MetricEnum.WALT, MetricEnum.SIMPLE_WALT):
        tenants = adapt_office_tenants(facts.office_tenant_list, now)
        return calc.simple_walt(tenants, now, settings.time.simple_month_days)
    if metric == MetricEnum.SALES_PER_SF:
        return calc.sales_per_sf(adapt_retail_tenants(facts.retail_tenants, now))
    if metric in (MetricEnum.CLEAR_HEIGHT_ANALYSIS, MetricEnum.INDUSTRIAL_METRICS):
        return calc.clear_height_analysis(facts.square_footage, facts.clear_height, facts.purchase_price)
    if metric in (MetricEnum.REVENUE_PER_UNIT, MetricEnum.MULTIFAMILY_METRICS):
        units = first_present(facts.total_units, facts.number_of_units)
        return calc.revenue_per_unit(units, facts.monthly_rental_income, facts.market_average_rent)
    return None


def _asset_analysis(
    facts: PropertyFacts, selection: MetricSelection, now: datetime, errors: Dict[str, str]
) -> Optional[AssetAnalysis]:
    kind = facts.property_type
    flags = [
        flag
        for flag, (property_type, _, _) in ASSET_ANALYSES.items()
        if property_type == kind and selection.is_selected(flag.value)
    ]
    if kind is None or not flags:
        return None

    check = validate_asset_data_requirements(facts, kind)
    results: Dict[str, Any] = {}
    if check.is_valid:
        for flag in flags:
            _, package_id, key = ASSET_ANALYSES[flag]
            try:
                bundle = PACKAGE_REGISTRY[package_id](facts, now)
            except Exception as e:
                logger.warning(f"Asset analysis {flag.value} failed: {e}")
                errors[flag.value] = f"Unable to run {flag.value} analysis. Please check input data."
                continue
            if bundle is not None and bundle.results:
                results[key] = next(iter(bundle.results.values()))
    else:
        logger.debug(f"Asset analysis skipped for {kind.value}: missing {check.missing_fields}")

    return AssetAnalysis(
        property_type=kind,
        available_functions=catalog.available_asset_functions(kind),
        data_validation=check,
        results=results,
    )


def _package(
    package_id: Optional[str], facts: PropertyFacts, now: datetime
) -> tuple:
    """Run the selected package, turning any handler failure into a message."""
    try:
        return run_package(package_id, facts, now), None
    except Exception as e:
        logger.warning(f"Package {package_id} failed: {e}")
        return None, PACKAGE_ERROR


def compute_metrics(
    facts: Union[PropertyFacts, Dict[str, Any], None],
    selection: SelectionLike,
    package_id: Optional[Union[str, PackageId]] = None,
    now: Optional[datetime] = None,
    settings: Optional[EngineSettings] = None,
) -> ComputedMetrics:
    """
    Compute every selected metric the facts allow.

    Args:
        facts: Property facts as a record, a camelCase dict, or ``None``
        selection: A ``MetricSelection``, a name-to-bool mapping, or an
            iterable of metric and analysis-flag names
        package_id: Package to run; defaults to ``facts.selectedPackageId``
        now: Reference time for lease-relative metrics; defaults to the
            current time
        settings: Return assumptions, assessment thresholds and day counts

    Returns:
        ComputedMetrics with one field per computed metric. A requested
        metric that could not be computed has a ``validation_errors`` entry
        instead.

    Example:
        ```python
        metrics = compute_metrics(
            {"currentNOI": 150_000, "purchasePrice": 2_000_000},
            ["capRate", "dscr"],
        )
        metrics.cap_rate  # 7.5
        metrics.validation_errors["dscr"]
        ```
    """
    record = PropertyFacts.from_any(facts)
    chosen = MetricSelection.from_any(selection)
    settings = settings or DEFAULT_SETTINGS
    moment = resolve_now(now)

    values: Dict[str, Any] = {}
    errors: Dict[str, str] = {}

    # Step 1: Core metrics
    for metric in MetricEnum.core():
        if not chosen.is_selected(metric):
            continue
        if not can_compute(metric, record):
            errors[metric.value] = explain_missing(metric, record)
            logger.debug(f"{metric.value} gated: {errors[metric.value]}")
            continue
        outcome = _core_calculation(metric, record, settings)
        if outcome.is_ok:
            values[_FIELD_FOR[metric.value]] = outcome.value
        else:
            errors[metric.value] = outcome.error

    # Step 2: Typed metrics, computed only when their inputs are present
    for metric in MetricEnum:
        if metric in MetricEnum.core() or not chosen.is_selected(metric):
            continue
        if not can_compute(metric, record):
            logger.debug(f"{metric.value} skipped: inputs not supplied")
            continue
        value = _typed_metric(metric, record, moment, settings)
        if value is not None:
            values[_FIELD_FOR[metric.value]] = value

    # Step 3: Asset analyses
    analysis = _asset_analysis(record, chosen, moment, errors)

    # Step 4: Package
    package: Optional[PackageBundleResult] = None
    package_error: Optional[str] = None
    selected_package = package_id or record.selected_package_id
    if selected_package:
        package, package_error = _package(selected_package, record, moment)

    return ComputedMetrics(
        **values,
        validation_errors=errors,
        asset_analysis=analysis,
        package=package,
        package_error=package_error,
    )


__all__ = ["ASSET_ANALYSES", "PACKAGE_ERROR", "compute_metrics"]
