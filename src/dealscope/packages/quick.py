# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Quick valuation packages.

Each computes a handful of headline ratios directly from the facts. Ratios
whose inputs are absent are left out, and a package with nothing to report
returns ``None``.
"""

from __future__ import annotations

from datetime import datetime
from typing import Dict, Optional

from ..core.bundle import PackageBundleResult
from ..core.facts import PropertyFacts
from .assumptions import AssumptionLog
from .registry import PackageId, register_package

NOI_TO_GROSS_RATIO = 0.75
ASSUMED_BUILDING_SF = 50_000


def _cap_rate(facts: PropertyFacts, results: Dict[str, float]) -> None:
    if facts.current_noi and facts.purchase_price and facts.purchase_price > 0:
        results["capRate"] = facts.current_noi / facts.purchase_price * 100


def _price_per_sf(purchase_price: Optional[float], area: Optional[float], results: Dict[str, float]) -> None:
    if purchase_price and area and area > 0:
        results["pricePerSF"] = purchase_price / area


def _cash_yield(facts: PropertyFacts, key: str, results: Dict[str, float]) -> None:
    if facts.annual_cash_flow and facts.total_investment and facts.total_investment > 0:
        results[key] = facts.annual_cash_flow / facts.total_investment * 100


def _bundle(package_id: PackageId, log: AssumptionLog, results: Dict[str, float]) -> Optional[PackageBundleResult]:
    if not results:
        return None
    return log.bundle(package_id, results)


@register_package(PackageId.OFFICE_QUICK_VALUATION)
def office_quick_valuation(facts: PropertyFacts, now: datetime) -> Optional[PackageBundleResult]:
    log = AssumptionLog()
    results: Dict[str, float] = {}
    _cap_rate(facts, results)
    _price_per_sf(facts.purchase_price, facts.total_sf, results)
    if facts.purchase_price and facts.current_noi and facts.current_noi > 0:
        ratio = log.assume(
            "noiToGrossRatio", NOI_TO_GROSS_RATIO, "Gross income estimated from NOI"
        )
        results["grm"] = facts.purchase_price / (facts.current_noi / ratio)
    return _bundle(PackageId.OFFICE_QUICK_VALUATION, log, results)


@register_package(PackageId.OFFICE_QUICK_RETURNS)
def office_quick_returns(facts: PropertyFacts, now: datetime) -> Optional[PackageBundleResult]:
    results: Dict[str, float] = {}
    _cap_rate(facts, results)
    _cash_yield(facts, "cashOnCash", results)
    _cash_yield(facts, "roi", results)
    return _bundle(PackageId.OFFICE_QUICK_RETURNS, AssumptionLog(), results)


@register_package(PackageId.RETAIL_QUICK_VALUATION)
def retail_quick_valuation(facts: PropertyFacts, now: datetime) -> Optional[PackageBundleResult]:
    results: Dict[str, float] = {}
    _cap_rate(facts, results)
    _price_per_sf(facts.purchase_price, facts.gross_leasable_area, results)
    return _bundle(PackageId.RETAIL_QUICK_VALUATION, AssumptionLog(), results)


@register_package(PackageId.INDUSTRIAL_QUICK_VALUATION)
def industrial_quick_valuation(facts: PropertyFacts, now: datetime) -> Optional[PackageBundleResult]:
    results: Dict[str, float] = {}
    _cap_rate(facts, results)
    _price_per_sf(facts.purchase_price, facts.total_sf, results)
    return _bundle(PackageId.INDUSTRIAL_QUICK_VALUATION, AssumptionLog(), results)


@register_package(PackageId.OFFICE_QUICK_LEASE)
def office_quick_lease(facts: PropertyFacts, now: datetime) -> Optional[PackageBundleResult]:
    log = AssumptionLog()
    results: Dict[str, float] = {}
    if facts.average_rent_psf and facts.operating_expenses:
        area = facts.rentable_square_feet or facts.square_footage or facts.total_sf
        if not area:
            area = log.assume("buildingSF", ASSUMED_BUILDING_SF, "Building area not supplied")
        results["effectiveRentPSF"] = facts.average_rent_psf - facts.operating_expenses / area
    return _bundle(PackageId.OFFICE_QUICK_LEASE, log, results)


@register_package(PackageId.MULTIFAMILY_QUICK_VALUATION)
def multifamily_quick_valuation(facts: PropertyFacts, now: datetime) -> Optional[PackageBundleResult]:
    results: Dict[str, float] = {}
    _cap_rate(facts, results)
    if facts.purchase_price and facts.number_of_units and facts.number_of_units > 0:
        results["pricePerUnit"] = facts.purchase_price / facts.number_of_units
    if facts.purchase_price and facts.average_rent and facts.number_of_units and facts.occupancy_rate:
        gross_annual_rent = facts.average_rent * 12 * facts.number_of_units * facts.occupancy_rate / 100
        if gross_annual_rent > 0:
            results["grm"] = facts.purchase_price / gross_annual_rent
    return _bundle(PackageId.MULTIFAMILY_QUICK_VALUATION, AssumptionLog(), results)


@register_package(PackageId.MIXEDUSE_QUICK_VALUATION)
def mixeduse_quick_valuation(facts: PropertyFacts, now: datetime) -> Optional[PackageBundleResult]:
    results: Dict[str, float] = {}
    _cap_rate(facts, results)
    _price_per_sf(facts.purchase_price, facts.total_sf, results)
    return _bundle(PackageId.MIXEDUSE_QUICK_VALUATION, AssumptionLog(), results)
