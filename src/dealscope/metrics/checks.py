# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Validation of property inputs and computed metric values.

These checks never raise. They return lists of human-readable messages, or a
``ValidationReport`` separating hard errors from warnings.
"""

from __future__ import annotations

import logging
import math
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional, Union

from pydantic import Field

from ..core.exceptions import InvalidArgumentError
from ..core.facts import PropertyFacts
from ..core.primitives import MetricEnum, Model
from .requirements import FactsLike, _metric, validate_metric_requirements
from .types import ComputedMetrics

logger = logging.getLogger(__name__)


class ValidationReport(Model):
    """Errors make a result unusable; warnings flag unusual but possible values."""

    is_valid: bool = True
    errors: List[str] = Field(default_factory=list)
    warnings: List[str] = Field(default_factory=list)

    @classmethod
    def from_messages(cls, errors: List[str], warnings: List[str]) -> "ValidationReport":
        return cls(is_valid=not errors, errors=errors, warnings=warnings)


def validate_property_data(facts: FactsLike, require_property_type: bool = False) -> List[str]:
    """
    Range checks on raw property inputs.

    Only fields that are supplied are checked. Returns one message per problem.
    """
    record = PropertyFacts.from_any(facts)
    errors = []

    if record.purchase_price is not None and record.purchase_price <= 0:
        errors.append("Purchase price must be greater than 0")
    if record.current_noi is not None and record.current_noi < 0:
        errors.append("Current NOI cannot be negative")
    if record.total_investment is not None and record.total_investment <= 0:
        errors.append("Total investment must be greater than 0")
    if record.loan_amount is not None and record.loan_amount < 0:
        errors.append("Loan amount cannot be negative")
    if record.interest_rate is not None and not 0 <= record.interest_rate <= 100:
        errors.append("Interest rate must be between 0 and 100")
    if record.loan_term is not None and record.loan_term <= 0:
        errors.append("Loan term must be greater than 0")
    if record.square_footage is not None and record.square_footage <= 0:
        errors.append("Square footage must be greater than 0")
    if record.number_of_units is not None and record.number_of_units <= 0:
        errors.append("Number of units must be greater than 0")
    if record.occupancy_rate is not None and not 0 <= record.occupancy_rate <= 100:
        errors.append("Occupancy rate must be between 0 and 100")

    if record.loan_amount and record.purchase_price and record.loan_amount > record.purchase_price:
        errors.append("Loan amount cannot exceed purchase price")
    if (
        record.total_investment
        and record.purchase_price
        and record.total_investment < record.purchase_price * 0.1
    ):
        errors.append("Total investment seems too low (less than 10% of purchase price)")

    if require_property_type and record.property_type is None:
        errors.append("Property type is required")
    return errors


def property_data_warnings(facts: FactsLike) -> List[str]:
    """Inputs that are valid but unusual for a stabilized acquisition."""
    record = PropertyFacts.from_any(facts)
    warnings = []
    if record.current_noi and record.purchase_price and record.purchase_price > 0:
        cap_rate = record.current_noi / record.purchase_price * 100
        if cap_rate < 2:
            warnings.append("Cap rate is unusually low (below 2%)")
        elif cap_rate > 15:
            warnings.append("Cap rate is unusually high (above 15%)")
    if record.loan_amount and record.purchase_price and record.purchase_price > 0:
        if record.loan_amount / record.purchase_price * 100 > 90:
            warnings.append("LTV is very high (above 90%)")
    return warnings


MetricsLike = Union[ComputedMetrics, Mapping[str, Any]]


def _metric_value(metrics: MetricsLike, metric: MetricEnum) -> Optional[float]:
    if isinstance(metrics, ComputedMetrics):
        value = metrics.value_of(metric)
    else:
        value = metrics.get(metric.value)
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    return float(value)


def validate_calculation_results(metrics: MetricsLike) -> ValidationReport:
    """
    Sanity-check computed metric values.

    Accepts a ``ComputedMetrics`` or a camelCase mapping of metric values.
    """
    errors: List[str] = []
    warnings: List[str] = []

    cap_rate = _metric_value(metrics, MetricEnum.CAP_RATE)
    if cap_rate is not None:
        if cap_rate < 0:
            errors.append("Cap Rate cannot be negative")
        elif cap_rate > 50:
            errors.append("Cap Rate is unrealistically high (>50%)")
        elif cap_rate < 1:
            warnings.append("Cap Rate is unusually low (<1%)")
        elif cap_rate > 20:
            warnings.append("Cap Rate is unusually high (>20%)")

    cash_on_cash = _metric_value(metrics, MetricEnum.CASH_ON_CASH)
    if cash_on_cash is not None:
        if cash_on_cash < -50:
            errors.append("Cash-on-Cash Return is unrealistically negative")
        elif cash_on_cash > 100:
            warnings.append("Cash-on-Cash Return is unusually high (>100%)")
        elif cash_on_cash < 0:
            warnings.append("Cash-on-Cash Return is negative")

    dscr = _metric_value(metrics, MetricEnum.DSCR)
    if dscr is not None:
        if dscr < 0:
            errors.append("DSCR cannot be negative")
        elif dscr < 1:
            warnings.append("DSCR is below 1.0, indicating potential cash flow issues")
        elif dscr > 10:
            warnings.append("DSCR is unusually high (>10)")

    ltv = _metric_value(metrics, MetricEnum.LTV)
    if ltv is not None:
        if ltv < 0:
            errors.append("LTV cannot be negative")
        elif ltv > 100:
            errors.append("LTV cannot exceed 100%")
        elif ltv > 90:
            warnings.append("LTV is very high (>90%)")

    price_per_sf = _metric_value(metrics, MetricEnum.PRICE_PER_SF)
    if price_per_sf is not None:
        if price_per_sf <= 0:
            errors.append("Price per SF must be positive")
        elif price_per_sf > 1000:
            warnings.append("Price per SF is unusually high (>$1,000/SF)")

    grm = _metric_value(metrics, MetricEnum.GRM)
    if grm is not None:
        if grm <= 0:
            errors.append("GRM must be positive")
        elif grm > 30:
            warnings.append("GRM is unusually high (>30)")
        elif grm < 5:
            warnings.append("GRM is unusually low (<5)")

    return ValidationReport.from_messages(errors, warnings)


def safe_calculate(fn: Callable[..., Any], *args: Any, default: Any = None, **kwargs: Any) -> Any:
    """
    Call a strict calculator and return ``default`` instead of raising.

    Non-finite numeric results are also replaced by ``default``.

    Example:
        >>> safe_calculate(MetricCalculators.cap_rate, 100_000, 0, default=0.0)
        0.0
    """
    try:
        result = fn(*args, **kwargs)
    except (InvalidArgumentError, ValueError, ZeroDivisionError) as exc:
        logger.warning(f"Calculation {getattr(fn, '__name__', fn)!s} failed: {exc}")
        return default
    if isinstance(result, float) and not math.isfinite(result):
        logger.warning(f"Calculation {getattr(fn, '__name__', fn)!s} returned {result}")
        return default
    return result


def validate_metric_calculation(metric: Union[str, MetricEnum], facts: FactsLike) -> ValidationReport:
    """
    Requirement errors for one metric plus the input warnings that bear on it.

    An unrecognized metric name is reported as an error rather than raised.
    """
    key = _metric(metric)
    if key is None:
        return ValidationReport.from_messages([f"Unknown metric: {metric}"], [])
    errors = validate_metric_requirements(key, facts)
    warnings = []
    if not errors:
        related = {
            MetricEnum.CAP_RATE: "Cap rate",
            MetricEnum.LTV: "LTV",
        }.get(key)
        if related:
            warnings = [text for text in property_data_warnings(facts) if text.startswith(related)]
    return ValidationReport.from_messages(errors, warnings)


def batch_validate_metrics(
    metrics: Iterable[Union[str, MetricEnum]], facts: FactsLike
) -> Dict[str, ValidationReport]:
    """``validate_metric_calculation`` for each metric, keyed by metric name."""
    reports = {}
    for metric in metrics:
        key = _metric(metric)
        name = key.value if key is not None else str(metric)
        reports[name] = validate_metric_calculation(metric, facts)
    return reports


__all__ = [
    "ValidationReport",
    "batch_validate_metrics",
    "property_data_warnings",
    "safe_calculate",
    "validate_calculation_results",
    "validate_metric_calculation",
    "validate_property_data",
]
