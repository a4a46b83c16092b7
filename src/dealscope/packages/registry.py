# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Package Router

Maps each package identifier to the handler that runs its scoring engines.
Handlers register themselves with ``@register_package`` when their module is
imported; ``dealscope.packages`` imports every handler module.
"""

from __future__ import annotations

import logging
from datetime import datetime
from enum import Enum
from typing import Callable, Dict, Optional, Union

from ..core.bundle import PackageBundleResult
from ..core.exceptions import PackageNotFoundError
from ..core.facts import PropertyFacts
from ..core.primitives import resolve_now

logger = logging.getLogger(__name__)


class PackageId(str, Enum):
    """Every package identifier the router knows."""

    OFFICE_TENANT_FINANCIAL_HEALTH = "office-tenant-financial-health"
    OFFICE_LEASE_ECONOMICS = "office-lease-economics"
    OFFICE_BUILDING_OPERATIONS = "office-building-operations"
    OFFICE_MARKET_POSITIONING = "office-market-positioning"
    OFFICE_WALT_ENHANCED = "office-walt-enhanced"
    OFFICE_TENANT_CREDIT_RISK = "office-tenant-credit-risk"
    OFFICE_LEASE_EXPIRATION = "office-lease-expiration"
    OFFICE_SPACE_EFFICIENCY = "office-space-efficiency"
    OFFICE_LEASE_NPV = "office-lease-npv"
    OFFICE_MARKET_POSITION = "office-market-position"

    RETAIL_SALES_PERFORMANCE = "retail-sales-performance"
    RETAIL_CO_TENANCY = "retail-co-tenancy"
    RETAIL_TRADE_AREA = "retail-trade-area"
    RETAIL_PERCENTAGE_RENT = "retail-percentage-rent"
    RETAIL_EXPENSE_RECOVERY = "retail-expense-recovery"
    RETAIL_REDEVELOPMENT_POTENTIAL = "retail-redevelopment-potential"

    INDUSTRIAL_BUILDING_FUNCTIONALITY = "industrial-building-functionality"
    INDUSTRIAL_LOCATION_LOGISTICS = "industrial-location-logistics"
    INDUSTRIAL_COLD_STORAGE = "industrial-cold-storage"
    INDUSTRIAL_LAST_MILE = "industrial-last-mile"

    MULTIFAMILY_REVENUE_PERFORMANCE = "multifamily-revenue-performance"
    MULTIFAMILY_OPERATING_PERFORMANCE = "multifamily-operating-performance"
    MULTIFAMILY_MARKET_POSITION = "multifamily-market-position"
    MULTIFAMILY_VALUE_ADD = "multifamily-value-add"

    MIXEDUSE_CROSS_INTERACTIONS = "mixeduse-cross-interactions"
    MIXEDUSE_OPERATIONAL_INTEGRATION = "mixeduse-operational-integration"
    MIXEDUSE_DEVELOPMENT = "mixeduse-development"
    MIXEDUSE_PERFORMANCE = "mixeduse-performance"
    MIXED_USE_PERFORMANCE = "mixed-use-performance"

    OFFICE_QUICK_VALUATION = "office-quick-valuation"
    OFFICE_QUICK_RETURNS = "office-quick-returns"
    RETAIL_QUICK_VALUATION = "retail-quick-valuation"
    INDUSTRIAL_QUICK_VALUATION = "industrial-quick-valuation"
    OFFICE_QUICK_LEASE = "office-quick-lease"
    MULTIFAMILY_QUICK_VALUATION = "multifamily-quick-valuation"
    MIXEDUSE_QUICK_VALUATION = "mixeduse-quick-valuation"


PackageHandler = Callable[[PropertyFacts, datetime], Optional[PackageBundleResult]]

PACKAGE_REGISTRY: Dict[PackageId, PackageHandler] = {}


def register_package(package_id: PackageId) -> Callable[[PackageHandler], PackageHandler]:
    """
    A decorator to register the handler for a package identifier.
    """

    def decorator(handler: PackageHandler) -> PackageHandler:
        if package_id in PACKAGE_REGISTRY:
            raise ValueError(f"Handler for package {package_id.value} is already registered.")
        PACKAGE_REGISTRY[package_id] = handler
        return handler

    return decorator


def get_package_handler(package_id: Union[str, PackageId]) -> PackageHandler:
    """
    Finds and returns the handler registered for a package identifier.

    Args:
        package_id: A ``PackageId`` or its string value

    Returns:
        The handler callable taking ``(facts, now)``

    Raises:
        PackageNotFoundError: If the identifier is unknown or has no handler

    Example:
        ```python
        handler = get_package_handler("office-lease-npv")
        bundle = handler(PropertyFacts.from_any(facts), now)
        ```
    """
    try:
        key = PackageId(package_id)
    except ValueError:
        raise PackageNotFoundError(str(package_id)) from None
    handler = PACKAGE_REGISTRY.get(key)
    if handler is None:
        raise PackageNotFoundError(key.value)
    return handler


def run_package(
    package_id: Union[str, PackageId],
    facts: Union[PropertyFacts, Dict, None],
    now: Optional[datetime] = None,
) -> Optional[PackageBundleResult]:
    """
    Run one package against the facts.

    Returns ``None`` when the identifier is unknown (a warning is logged) or
    when the facts lack the minimum inputs the package needs. Missing,
    zero, negative or unparsable facts never raise. A defect inside a
    handler does propagate, so ``compute_metrics`` can report it as its
    ``package_error``.
    """
    try:
        handler = get_package_handler(package_id)
    except PackageNotFoundError as exc:
        logger.warning(str(exc))
        return None
    record = PropertyFacts.from_any(facts)
    result = handler(record, resolve_now(now))
    if result is None:
        logger.debug(f"Package {package_id} skipped: required facts not supplied")
    return result


__all__ = [
    "PACKAGE_REGISTRY",
    "PackageHandler",
    "PackageId",
    "get_package_handler",
    "register_package",
    "run_package",
]
