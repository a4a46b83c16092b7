# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Retail package handlers.

Sales history is rarely supplied as monthly records, so one annual record
per tenant is derived from its reported sales. Trade area demographics and
the competitive set are placeholders.
"""

from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from ..adapters.retail import adapt_retail_tenants
from ..asset.retail.analysis import (
    ACRE_SF,
    analyze_co_tenancy,
    analyze_expense_recovery,
    analyze_percentage_rent,
    analyze_redevelopment_potential,
    analyze_sales_performance,
    analyze_trade_area,
)
from ..asset.retail.records import (
    CenterState,
    Competitor,
    RedevelopmentMarket,
    RetailExpense,
    RetailTenant,
    SalesRecord,
    TradeAreaRing,
    TrafficCount,
    Zoning,
)
from ..core.bundle import PackageBundleResult
from ..core.facts import PropertyFacts
from .assumptions import AssumptionLog
from .registry import PackageId, register_package

RETURNS_SHARE = 0.05
AVERAGE_TICKET = 50.0
DEFAULT_CENTER_TYPE = "Strip"
FAR_HEADROOM = 1.5
PARKING_PER_1000 = 4.0

PLACEHOLDER_RINGS = (
    TradeAreaRing(radius=1, population=25_000, households=9_500, median_income=75_000, average_income=85_000, growth_5_year=5.0),
    TradeAreaRing(radius=3, population=125_000, households=47_000, median_income=68_000, average_income=78_000, growth_5_year=4.0),
    TradeAreaRing(radius=5, population=280_000, households=105_000, median_income=62_000, average_income=72_000, growth_5_year=3.5),
)

PLACEHOLDER_COMPETITORS = (
    Competitor(name="Regional Mall", type="Regional", distance=3.5, gla=850_000, anchors=["Macy's", "JCPenney"]),
    Competitor(name="Power Center", type="Power", distance=2.0, gla=450_000, anchors=["Target", "Best Buy"]),
)

PLACEHOLDER_TRAFFIC = (
    TrafficCount(location="Main Street", daily_count=45_000, growth_rate=2.0),
    TrafficCount(location="Highway 101", daily_count=78_000, growth_rate=1.5),
)


def _gla(facts: PropertyFacts) -> Optional[float]:
    return facts.gross_leasable_area or facts.total_gla


def annual_sales_records(tenants: List[RetailTenant], now: datetime, log: AssumptionLog) -> List[SalesRecord]:
    """One year-to-date record per tenant built from its annual sales."""
    log.assume("sales.returnsShare", RETURNS_SHARE, "Monthly sales history not supplied")
    log.assume("sales.averageTicket", AVERAGE_TICKET, "Monthly sales history not supplied")
    records = []
    for tenant in tenants:
        gross = tenant.annual_sales
        records.append(
            SalesRecord(
                tenant=tenant.tenant_name,
                month=12,
                year=now.year,
                gross_sales=gross,
                returns=gross * RETURNS_SHARE,
                net_sales=gross * (1 - RETURNS_SHARE),
                transactions=int(gross // AVERAGE_TICKET),
                average_ticket=AVERAGE_TICKET,
            )
        )
    return records


@register_package(PackageId.RETAIL_SALES_PERFORMANCE)
def sales_performance(facts: PropertyFacts, now: datetime) -> Optional[PackageBundleResult]:
    tenants = adapt_retail_tenants(facts.retail_tenants, now)
    if not (tenants and _gla(facts) and facts.traffic_count):
        return None
    log = AssumptionLog()
    records = annual_sales_records(tenants, now, log)
    center_type = log.assume("centerType", DEFAULT_CENTER_TYPE)
    return log.bundle(
        PackageId.RETAIL_SALES_PERFORMANCE,
        {"salesPerformance": analyze_sales_performance(records, tenants, center_type, now)},
    )


@register_package(PackageId.RETAIL_CO_TENANCY)
def co_tenancy(facts: PropertyFacts, now: datetime) -> Optional[PackageBundleResult]:
    tenants = adapt_retail_tenants(facts.retail_tenants, now)
    gla = _gla(facts)
    if not (tenants and gla and facts.occupancy_rate):
        return None
    return AssumptionLog().bundle(
        PackageId.RETAIL_CO_TENANCY,
        {"coTenancy": analyze_co_tenancy(tenants, facts.occupancy_rate, gla, now)},
    )


@register_package(PackageId.RETAIL_TRADE_AREA)
def trade_area(facts: PropertyFacts, now: datetime) -> Optional[PackageBundleResult]:
    tenants = adapt_retail_tenants(facts.retail_tenants, now)
    if not tenants:
        return None
    log = AssumptionLog()
    rings = log.assume("tradeArea.rings", list(PLACEHOLDER_RINGS))
    competitors = log.assume("tradeArea.competitors", list(PLACEHOLDER_COMPETITORS))
    if facts.traffic_count:
        traffic = [TrafficCount(location="Subject Frontage", daily_count=facts.traffic_count)]
    else:
        traffic = log.assume("tradeArea.trafficCounts", list(PLACEHOLDER_TRAFFIC))
    return log.bundle(
        PackageId.RETAIL_TRADE_AREA,
        {"tradeArea": analyze_trade_area(rings, tenants, competitors, traffic)},
    )


@register_package(PackageId.RETAIL_PERCENTAGE_RENT)
def percentage_rent(facts: PropertyFacts, now: datetime) -> Optional[PackageBundleResult]:
    tenants = adapt_retail_tenants(facts.retail_tenants, now)
    if not tenants:
        return None
    log = AssumptionLog()
    records = annual_sales_records(tenants, now, log)
    return log.bundle(
        PackageId.RETAIL_PERCENTAGE_RENT,
        {"percentageRent": analyze_percentage_rent(tenants, records, now)},
    )


@register_package(PackageId.RETAIL_EXPENSE_RECOVERY)
def expense_recovery(facts: PropertyFacts, now: datetime) -> Optional[PackageBundleResult]:
    tenants = adapt_retail_tenants(facts.retail_tenants, now)
    gla = _gla(facts)
    if not (tenants and gla and facts.operating_expenses):
        return None
    log = AssumptionLog()
    log.assume(
        "expenses.breakdown",
        "All operating expenses treated as recoverable common area maintenance",
        "Expense detail not supplied",
    )
    expenses = [RetailExpense(category="Common Area Maintenance", amount=facts.operating_expenses)]
    return log.bundle(
        PackageId.RETAIL_EXPENSE_RECOVERY,
        {"expenseRecovery": analyze_expense_recovery(expenses, tenants, gla)},
    )


@register_package(PackageId.RETAIL_REDEVELOPMENT_POTENTIAL)
def redevelopment(facts: PropertyFacts, now: datetime) -> Optional[PackageBundleResult]:
    gla = _gla(facts)
    if not (gla and facts.purchase_price and facts.land_area):
        return None
    log = AssumptionLog()
    acres = facts.land_area / ACRE_SF
    state = CenterState(
        gla=gla,
        occupancy=log.supplied_or("occupancy", facts.occupancy_rate, 90.0),
        avg_rent=log.supplied_or("averageRentPSF", facts.average_rent_psf, 25.0),
        sales_psf=log.supplied_or("salesPerSF", facts.sales_per_sf, 300.0),
        parking_spaces=log.supplied_or("parkingSpaces", facts.parking_spaces, gla / 1000 * PARKING_PER_1000),
        land_area_acres=acres,
    )
    current_far = gla / facts.land_area
    max_far = log.supplied_or("zoning.maxFAR", facts.allowable_far, current_far * FAR_HEADROOM)
    market = RedevelopmentMarket()
    log.assume("market.newConstructionRent", market.new_construction_rent)
    log.assume("market.landValuePerAcre", market.land_value_per_acre)
    log.assume("market.constructionCostPSF", market.construction_cost_psf)
    zoning = Zoning(max_far=max_far, allowed_uses=["Retail", "Office", "Residential"])
    log.assume("zoning.allowedUses", zoning.allowed_uses)
    return log.bundle(
        PackageId.RETAIL_REDEVELOPMENT_POTENTIAL,
        {"redevelopment": analyze_redevelopment_potential(state, market, zoning)},
    )
