# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Retail Center Analysis

Sales productivity and tenant health, co-tenancy exposure, trade area and
void analysis, percentage rent, CAM recovery and redevelopment scenarios.
"""

from __future__ import annotations

import calendar
import logging
from datetime import datetime
from typing import Dict, List, Optional, Sequence

import pandas as pd

from ...core.primitives import (
    DEFAULT_SETTINGS,
    CamelModel,
    RiskLevelEnum,
    TimeSettings,
    months_remaining,
)
from .._scoring import clamp, grade, mean_or, safe_ratio, simple_irr
from .records import (
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

logger = logging.getLogger(__name__)

HEALTH_CUTS = ((80, RiskLevelEnum.LOW.value), (60, RiskLevelEnum.MEDIUM.value), (40, RiskLevelEnum.HIGH.value))
EXPOSURE_CUTS = ((25, "Critical"), (15, "High"), (5, "Medium"))

CENTER_BENCHMARKS: Dict[str, Dict[str, float]] = {
    "Regional Mall": {"sales_psf": 550, "growth": 2.5, "ocr": 12},
    "Lifestyle": {"sales_psf": 450, "growth": 3.5, "ocr": 10},
    "Strip": {"sales_psf": 350, "growth": 2.0, "ocr": 8},
    "Power": {"sales_psf": 300, "growth": 1.5, "ocr": 7},
    "Outlet": {"sales_psf": 400, "growth": 3.0, "ocr": 9},
}

MARKET_BASE_RENT: Dict[str, float] = {
    "Apparel": 35,
    "Food": 45,
    "Entertainment": 25,
    "Service": 30,
    "Fitness": 20,
    "Electronics": 40,
    "Home": 25,
    "Other": 28,
}

MARKET_PERCENTAGE_RATES: Dict[str, Dict[str, float]] = {
    "Apparel": {"rate": 6, "breakpoint": 400_000},
    "Food": {"rate": 6, "breakpoint": 1_000_000},
    "Entertainment": {"rate": 8, "breakpoint": 500_000},
    "Service": {"rate": 5, "breakpoint": 300_000},
    "Fitness": {"rate": 4, "breakpoint": 600_000},
    "Electronics": {"rate": 4, "breakpoint": 800_000},
    "Home": {"rate": 5, "breakpoint": 400_000},
    "Other": {"rate": 5, "breakpoint": 400_000},
}

CROSS_SHOPPING_INDEX = {"Apparel": 0.8, "Food": 0.6, "Service": 0.4}

NATIONAL_MEDIAN_INCOME = 65_000
HOUSEHOLD_RETAIL_SPENDING = 35_000
ASSUMED_CENTER_SALES_PSF = 400
ASSUMED_COMPETITOR_SALES_PSF = 300
ACRE_SF = 43_560

MISSING_CO_TENANT_PROBABILITY = 0.8
CONTROLLABLE_EXPENSES = ("Cleaning", "Landscaping", "Security")
COLLECTION_RATE = 0.95


# ---------------------------------------------------------------------------
# Sales performance
# ---------------------------------------------------------------------------


class TenantPerformance(CamelModel):
    tenant: str
    sales_psf: float
    growth: float


class CategoryPerformance(CamelModel):
    category: str
    sales_psf: float
    growth: float


class CenterMetrics(CamelModel):
    total_sales_psf: float
    sales_growth_yoy: float
    top_performers: List[TenantPerformance]
    bottom_performers: List[TenantPerformance]
    category_performance: List[CategoryPerformance]


class TenantHealth(CamelModel):
    tenant: str
    sales_psf: float
    occupancy_cost: Optional[float]
    health_score: float
    risk_level: str
    indicators: List[str]


class SeasonalIndex(CamelModel):
    month: str
    index: float


class BenchmarkComparison(CamelModel):
    metric: str
    center_value: float
    benchmark: float
    percentile: int


class SalesPerformance(CamelModel):
    center_metrics: CenterMetrics
    tenant_health: List[TenantHealth]
    seasonal_pattern: List[SeasonalIndex]
    benchmark_comparison: List[BenchmarkComparison]


def _sales_frame(sales_data: Sequence[SalesRecord]) -> pd.DataFrame:
    columns = ["tenant", "month", "year", "net_sales"]
    if not sales_data:
        return pd.DataFrame(columns=columns)
    return pd.DataFrame([record.model_dump(include=set(columns)) for record in sales_data])


def _tenant_sales(frame: pd.DataFrame, year: int) -> Dict[str, float]:
    if frame.empty:
        return {}
    return frame[frame["year"] == year].groupby("tenant")["net_sales"].sum().to_dict()


def score_tenant_health(tenant: RetailTenant, sales_psf: float) -> TenantHealth:
    """
    Health score for one tenant: base 50, adjusted for productivity,
    occupancy cost, credit and essential-service status.

    Occupancy cost is annual base rent over annual sales (rent PSF / sales PSF).
    A tenant with no reported sales is treated as carrying a high occupancy cost.
    """
    occupancy_cost = tenant.base_rent_psf / sales_psf if sales_psf > 0 else None

    score = 50.0
    if sales_psf > 400:
        score += 20
    elif sales_psf > 300:
        score += 10
    elif sales_psf < 200:
        score -= 20

    if occupancy_cost is None or occupancy_cost > 0.12:
        score -= 15
    elif occupancy_cost < 0.08:
        score += 15

    if tenant.credit_rating in ("A", "AA", "AAA"):
        score += 10
    if tenant.essential_service:
        score += 5
    score = clamp(score)

    indicators: List[str] = []
    if sales_psf < 250:
        indicators.append("Low sales productivity")
    if occupancy_cost is None or occupancy_cost > 0.12:
        indicators.append("High occupancy cost")
    if tenant.credit_rating in (None, "NR"):
        indicators.append("No credit rating")
    if not tenant.essential_service and sales_psf < 300:
        indicators.append("Non-essential low performer")

    return TenantHealth(
        tenant=tenant.tenant_name,
        sales_psf=sales_psf,
        occupancy_cost=occupancy_cost,
        health_score=score,
        risk_level=grade(score, HEALTH_CUTS, RiskLevelEnum.CRITICAL.value),
        indicators=indicators,
    )


def analyze_sales_performance(
    sales_data: Sequence[SalesRecord],
    tenants: Sequence[RetailTenant],
    center_type: str,
    now: datetime,
) -> SalesPerformance:
    """
    Center-wide sales productivity, tenant health and seasonality.

    Current-year and prior-year sales are taken from ``sales_data`` using
    ``now.year``. Benchmarks fall back to the Strip center profile.
    """
    frame = _sales_frame(sales_data)
    current = _tenant_sales(frame, now.year)
    prior = _tenant_sales(frame, now.year - 1)

    rows = []
    for tenant in tenants:
        sales = current.get(tenant.tenant_name, 0.0)
        last = prior.get(tenant.tenant_name, 0.0)
        rows.append(
            {
                "tenant": tenant.tenant_name,
                "category": tenant.merchandise_type,
                "sales": sales,
                "last_year": last,
                "sf": tenant.square_footage,
            }
        )
    table = pd.DataFrame(rows, columns=["tenant", "category", "sales", "last_year", "sf"])

    total_sales = float(table["sales"].sum())
    total_last = float(table["last_year"].sum())
    total_sf = float(table["sf"].sum())
    total_sales_psf = safe_ratio(total_sales, total_sf)
    growth_yoy = safe_ratio(total_sales - total_last, total_last) * 100

    performers = [
        TenantPerformance(
            tenant=row.tenant,
            sales_psf=safe_ratio(row.sales, row.sf),
            growth=safe_ratio(row.sales - row.last_year, row.last_year) * 100,
        )
        for row in table.itertuples(index=False)
    ]
    performers.sort(key=lambda item: item.sales_psf, reverse=True)
    bottom = [
        item.model_copy(update={"growth": abs(item.growth)}) for item in performers[-5:]
    ]

    categories = table.groupby("category", sort=False)[["sales", "last_year", "sf"]].sum()
    category_performance = [
        CategoryPerformance(
            category=str(name),
            sales_psf=safe_ratio(row["sales"], row["sf"]),
            growth=safe_ratio(row["sales"] - row["last_year"], row["last_year"]) * 100,
        )
        for name, row in categories.iterrows()
    ]

    tenant_health = [
        score_tenant_health(tenant, safe_ratio(current.get(tenant.tenant_name, 0.0), tenant.square_footage))
        for tenant in tenants
    ]

    monthly = frame.groupby("month")["net_sales"].sum().to_dict() if not frame.empty else {}
    average_month = total_sales / 12
    seasonal = [
        SeasonalIndex(
            month=calendar.month_abbr[month],
            index=(monthly[month] / average_month * 100) if monthly.get(month) and average_month > 0 else 100.0,
        )
        for month in range(1, 13)
    ]

    benchmark = CENTER_BENCHMARKS.get(center_type, CENTER_BENCHMARKS["Strip"])
    comparison = [
        BenchmarkComparison(
            metric="Sales PSF",
            center_value=total_sales_psf,
            benchmark=benchmark["sales_psf"],
            percentile=75 if total_sales_psf > benchmark["sales_psf"] else 25,
        ),
        BenchmarkComparison(
            metric="Sales Growth",
            center_value=growth_yoy,
            benchmark=benchmark["growth"],
            percentile=75 if growth_yoy > benchmark["growth"] else 25,
        ),
    ]

    return SalesPerformance(
        center_metrics=CenterMetrics(
            total_sales_psf=total_sales_psf,
            sales_growth_yoy=growth_yoy,
            top_performers=performers[:5],
            bottom_performers=bottom,
            category_performance=category_performance,
        ),
        tenant_health=tenant_health,
        seasonal_pattern=seasonal,
        benchmark_comparison=comparison,
    )


# ---------------------------------------------------------------------------
# Co-tenancy
# ---------------------------------------------------------------------------


class CoTenancyTrigger(CamelModel):
    tenant: str
    trigger_tenant: str
    remedy: str
    probability: float


class CoTenancyRisk(CamelModel):
    level: str
    exposed_gla: float
    exposed_rent: float
    exposure_percentage: float
    triggers: List[CoTenancyTrigger]


class AnchorDependency(CamelModel):
    anchor_name: str
    gla_percentage: float
    dependent_tenants: int
    dependent_gla: float
    replacement_difficulty: str


class CriticalMass(CamelModel):
    current_status: str
    minimum_occupancy: float
    cushion: float
    essential_occupancy: float
    vulnerable_tenants: List[str]


class TenantSynergy(CamelModel):
    cluster: str
    tenants: List[str]
    synergy_score: float
    cross_shopping_index: float


class CoTenancyAnalysis(CamelModel):
    co_tenancy_risk: CoTenancyRisk
    anchor_dependency: List[AnchorDependency]
    critical_mass: CriticalMass
    tenant_synergies: List[TenantSynergy]


def _quick_risk_level(tenant: RetailTenant) -> str:
    if tenant.sales_psf > 500:
        return RiskLevelEnum.LOW.value
    if tenant.sales_psf > 300:
        return RiskLevelEnum.MEDIUM.value
    if tenant.sales_psf > 150:
        return RiskLevelEnum.HIGH.value
    return RiskLevelEnum.CRITICAL.value


def analyze_co_tenancy(
    tenants: Sequence[RetailTenant],
    current_occupancy: float,
    total_gla: float,
    now: datetime,
    time: TimeSettings = DEFAULT_SETTINGS.time,
) -> CoTenancyAnalysis:
    """
    Co-tenancy clause exposure, anchor dependency and critical mass.

    A tenant whose required co-tenant is absent has 80% of its area and base
    rent counted as exposed. When every required co-tenant is present but one
    expires within 24 months, the exposure probability is 0.5 inside 12 months
    and 0.3 otherwise.
    """
    names = {tenant.tenant_name for tenant in tenants}
    by_name = {tenant.tenant_name: tenant for tenant in tenants}
    triggers: List[CoTenancyTrigger] = []
    exposed_gla = 0.0
    exposed_rent = 0.0

    for tenant in tenants:
        clause = tenant.co_tenancy
        if clause is None:
            continue
        missing = [name for name in clause.required if name not in names]
        if missing:
            exposed_gla += tenant.square_footage * MISSING_CO_TENANT_PROBABILITY
            exposed_rent += tenant.annual_base_rent * MISSING_CO_TENANT_PROBABILITY
            triggers.extend(
                CoTenancyTrigger(
                    tenant=tenant.tenant_name,
                    trigger_tenant=name,
                    remedy=clause.remedy,
                    probability=MISSING_CO_TENANT_PROBABILITY,
                )
                for name in missing
            )
            continue
        for name in clause.required:
            required = by_name[name]
            months = months_remaining(required.lease_end_date, now, time.simple_month_days)
            if months >= 24:
                continue
            probability = 0.5 if months < 12 else 0.3
            triggers.append(
                CoTenancyTrigger(
                    tenant=tenant.tenant_name,
                    trigger_tenant=name,
                    remedy=clause.remedy,
                    probability=probability,
                )
            )
            exposed_gla += tenant.square_footage * probability
            exposed_rent += tenant.annual_base_rent * probability

    exposure = safe_ratio(exposed_gla, total_gla) * 100
    level = grade(exposure, EXPOSURE_CUTS, "Low")
    logger.debug(f"Co-tenancy exposure {exposure:.2f}% of GLA across {len(triggers)} triggers")

    anchors = [tenant for tenant in tenants if tenant.category in ("Anchor", "Junior Anchor")]
    dependency = []
    for anchor in anchors:
        dependents = [
            tenant for tenant in tenants
            if tenant.co_tenancy and anchor.tenant_name in tenant.co_tenancy.required
        ]
        if anchor.square_footage < 20_000:
            difficulty = "Low"
        elif anchor.square_footage < 50_000 and not anchor.essential_service:
            difficulty = "Medium"
        else:
            difficulty = "High"
        dependency.append(
            AnchorDependency(
                anchor_name=anchor.tenant_name,
                gla_percentage=round(safe_ratio(anchor.square_footage, total_gla) * 100, 2),
                dependent_tenants=len(dependents),
                dependent_gla=sum(tenant.square_footage for tenant in dependents),
                replacement_difficulty=difficulty,
            )
        )

    essential_sf = sum(
        tenant.square_footage for tenant in tenants
        if tenant.essential_service or tenant.category == "Anchor" or tenant.sales_psf > 500
    )
    minimum = 85.0 if total_gla > 500_000 else 80.0 if total_gla > 200_000 else 75.0
    if current_occupancy >= minimum + 10:
        status = "Healthy"
    elif current_occupancy >= minimum:
        status = "At Risk"
    else:
        status = "Below Critical"
    vulnerable = [
        tenant.tenant_name for tenant in tenants
        if _quick_risk_level(tenant) in (RiskLevelEnum.HIGH.value, RiskLevelEnum.CRITICAL.value)
    ]

    groups: Dict[str, List[RetailTenant]] = {}
    for tenant in tenants:
        groups.setdefault(tenant.merchandise_type, []).append(tenant)
    synergies = [
        TenantSynergy(
            cluster=category,
            tenants=[tenant.tenant_name for tenant in group],
            synergy_score=round(
                min(100.0, len(group) * 10 + mean_or(tenant.sales_psf for tenant in group) / 5)
            ),
            cross_shopping_index=CROSS_SHOPPING_INDEX.get(category, 0.5),
        )
        for category, group in groups.items()
        if len(group) >= 3
    ]
    synergies.sort(key=lambda item: item.synergy_score, reverse=True)

    return CoTenancyAnalysis(
        co_tenancy_risk=CoTenancyRisk(
            level=level,
            exposed_gla=exposed_gla,
            exposed_rent=exposed_rent,
            exposure_percentage=round(exposure, 2),
            triggers=triggers,
        ),
        anchor_dependency=dependency,
        critical_mass=CriticalMass(
            current_status=status,
            minimum_occupancy=minimum,
            cushion=round(current_occupancy - minimum, 2),
            essential_occupancy=round(safe_ratio(essential_sf, total_gla) * 100, 2),
            vulnerable_tenants=vulnerable,
        ),
        tenant_synergies=synergies,
    )


# ---------------------------------------------------------------------------
# Trade area
# ---------------------------------------------------------------------------


class PrimaryTradeArea(CamelModel):
    definition: str
    population: float
    spending_power: float
    penetration_rate: float
    market_share: float


class CustomerProfile(CamelModel):
    dominant_segment: str
    income_index: float
    lifestyle_traits: List[str]
    spending_patterns: Dict[str, float]


class CompetitivePosition(CamelModel):
    direct_competitors: int
    competitive_density: float
    differentiators: List[str]
    vulnerabilities: List[str]
    market_gaps: List[str]


class GrowthPotential(CamelModel):
    population_growth: float
    income_growth: float
    development_pipeline: float
    capture_rate: float
    five_year_projection: float


class CategoryVoid(CamelModel):
    category: str
    demand: float
    supply: float
    gap: float
    opportunity: str


class TradeAreaAnalysis(CamelModel):
    primary_trade_area: PrimaryTradeArea
    customer_profile: CustomerProfile
    competitive_position: CompetitivePosition
    growth_potential: GrowthPotential
    void_analysis: List[CategoryVoid]


def _customer_segment(income_index: float):
    if income_index > 150:
        return "Affluent Professionals", ["Quality focused", "Brand conscious", "Experience driven"]
    if income_index > 120:
        return "Upper Middle Class", ["Value conscious", "Family oriented", "Convenience seeking"]
    if income_index > 80:
        return "Middle Income", ["Price sensitive", "Deal seeking", "Practical"]
    return "Value Oriented", ["Budget conscious", "Necessity focused", "Discount driven"]


def analyze_trade_area(
    rings: Sequence[TradeAreaRing],
    tenants: Sequence[RetailTenant],
    competitors: Sequence[Competitor],
    traffic_counts: Sequence[TrafficCount],
) -> TradeAreaAnalysis:
    """
    Spending power, customer profile, competition and category voids.

    The first ring is the primary trade area. Competitors flagged as planned
    count toward the development pipeline, not current supply.
    """
    primary = rings[0]
    income_ratio = primary.median_income / NATIONAL_MEDIAN_INCOME
    spending_power = primary.households * HOUSEHOLD_RETAIL_SPENDING * income_ratio

    center_gla = sum(tenant.square_footage for tenant in tenants)
    built = [competitor for competitor in competitors if not competitor.planned]
    competitor_gla = sum(competitor.gla for competitor in built)
    market_gla = center_gla + competitor_gla
    market_share = safe_ratio(center_gla, market_gla) * 100
    penetration = safe_ratio(center_gla * ASSUMED_CENTER_SALES_PSF, spending_power) * 100

    income_index = income_ratio * 100
    segment, traits = _customer_segment(income_index)
    spending_patterns = {
        "Apparel": 15.0 if income_index > 120 else 10.0,
        "Food": 25.0,
        "Entertainment": 10.0 if income_index > 100 else 5.0,
        "Home": 15.0,
        "Electronics": 10.0,
        "Service": 15.0,
        "Other": 10.0 if income_index > 120 else 20.0,
    }

    direct = sum(1 for competitor in built if competitor.distance <= 3 and competitor.type != "Convenience")
    density = safe_ratio(market_gla, primary.population)

    differentiators: List[str] = []
    vulnerabilities: List[str] = []
    competitor_anchors = {anchor for competitor in built for anchor in competitor.anchors}
    unique = [
        tenant.tenant_name for tenant in tenants
        if tenant.category == "Anchor" and tenant.tenant_name not in competitor_anchors
    ]
    if unique:
        differentiators.append(f"Unique anchors: {', '.join(unique)}")
    average_traffic = mean_or(count.daily_count for count in traffic_counts)
    if average_traffic > 30_000:
        differentiators.append("High traffic location")
    elif average_traffic < 15_000:
        vulnerabilities.append("Low traffic visibility")
    if any(competitor.distance < 2 for competitor in built):
        vulnerabilities.append("Direct competition within 2 miles")

    total_spending = primary.households * primary.average_income * 0.35
    supply: Dict[str, float] = {}
    for tenant in tenants:
        sales_psf = tenant.sales_psf or 350
        supply[tenant.merchandise_type] = supply.get(tenant.merchandise_type, 0.0) + sales_psf * tenant.square_footage
    for competitor in built:
        share = competitor.gla * ASSUMED_COMPETITOR_SALES_PSF * 0.8 * 0.15
        supply = {category: value + share for category, value in supply.items()}

    voids = []
    for category, percentage in spending_patterns.items():
        demand = total_spending * percentage / 100
        available = supply.get(category, 0.0)
        gap = demand - available
        gap_pct = safe_ratio(gap, demand) * 100
        if gap_pct > 30 and gap > 1_000_000:
            opportunity = "High"
        elif gap_pct > 15 and gap > 500_000:
            opportunity = "Medium"
        else:
            opportunity = "Low"
        voids.append(
            CategoryVoid(
                category=category,
                demand=round(demand),
                supply=round(available),
                gap=round(gap),
                opportunity=opportunity,
            )
        )
    voids.sort(key=lambda item: item.gap, reverse=True)

    growth = primary.growth_5_year
    capture = penetration * (1 + growth / 100)
    projection = spending_power * (1 + growth / 100) * (capture / 100)

    return TradeAreaAnalysis(
        primary_trade_area=PrimaryTradeArea(
            definition=f"{primary.radius:g}-mile radius",
            population=primary.population,
            spending_power=round(spending_power),
            penetration_rate=round(penetration, 2),
            market_share=round(market_share, 2),
        ),
        customer_profile=CustomerProfile(
            dominant_segment=segment,
            income_index=round(income_index),
            lifestyle_traits=traits,
            spending_patterns=spending_patterns,
        ),
        competitive_position=CompetitivePosition(
            direct_competitors=direct,
            competitive_density=round(density, 2),
            differentiators=differentiators,
            vulnerabilities=vulnerabilities,
            market_gaps=[item.category for item in voids if item.opportunity == "High"],
        ),
        growth_potential=GrowthPotential(
            population_growth=round(growth, 2),
            income_growth=round(growth * 0.6, 2),
            development_pipeline=sum(competitor.gla for competitor in competitors if competitor.planned),
            capture_rate=round(capture, 2),
            five_year_projection=round(projection),
        ),
        void_analysis=voids,
    )


# ---------------------------------------------------------------------------
# Percentage rent
# ---------------------------------------------------------------------------


class PercentageRentPerformance(CamelModel):
    total_percentage_rent: float
    percentage_of_total: float
    performing_tenants: int
    underperforming_tenants: int


class TenantPercentageRent(CamelModel):
    tenant: str
    natural_breakpoint: float
    actual_sales: float
    percentage_rent: float
    overage_percentage: float
    optimization: str


class RentOptimization(CamelModel):
    tenant: str
    current_structure: str
    recommended_structure: str
    estimated_increase: float


class PercentageRentMarket(CamelModel):
    category: str
    market_rate: float
    average_breakpoint: float
    our_average: float


class PercentageRentAnalysis(CamelModel):
    current_performance: PercentageRentPerformance
    tenant_analysis: List[TenantPercentageRent]
    optimization_opportunities: List[RentOptimization]
    market_comparison: List[PercentageRentMarket]


def analyze_percentage_rent(
    tenants: Sequence[RetailTenant], sales_data: Sequence[SalesRecord], now: datetime
) -> PercentageRentAnalysis:
    """Overage rent earned against natural breakpoints, with restructuring ideas."""
    current = _tenant_sales(_sales_frame(sales_data), now.year)
    total_percentage = 0.0
    total_base = 0.0
    performing = 0
    underperforming = 0
    analyses: List[TenantPercentageRent] = []

    for tenant in tenants:
        sales = current.get(tenant.tenant_name, 0.0)
        breakpoint = tenant.percentage_rent.natural_breakpoint
        percentage_rent = 0.0
        overage_pct = 0.0
        if sales > 0:
            overage = max(0.0, sales - breakpoint)
            percentage_rent = overage * tenant.percentage_rent.rate / 100
            overage_pct = overage / sales * 100
            if percentage_rent > 0:
                performing += 1
            else:
                underperforming += 1
        total_percentage += percentage_rent
        total_base += tenant.annual_base_rent

        sales_psf = safe_ratio(sales, tenant.square_footage)
        breakpoint_psf = safe_ratio(breakpoint, tenant.square_footage)
        if sales_psf > breakpoint_psf * 1.5:
            optimization = "Lower Breakpoint"
        elif sales_psf > breakpoint_psf * 1.2:
            optimization = "Optimal"
        elif sales_psf < breakpoint_psf * 0.8:
            optimization = "Increase Base"
        else:
            optimization = "Restructure"

        analyses.append(
            TenantPercentageRent(
                tenant=tenant.tenant_name,
                natural_breakpoint=breakpoint,
                actual_sales=sales,
                percentage_rent=percentage_rent,
                overage_percentage=round(overage_pct, 2),
                optimization=optimization,
            )
        )

    opportunities: List[RentOptimization] = []
    for tenant, analysis in zip(tenants, analyses):
        if analysis.optimization == "Optimal":
            continue
        if analysis.optimization == "Lower Breakpoint":
            new_breakpoint = analysis.actual_sales * 0.7
            additional = (analysis.actual_sales - new_breakpoint) * tenant.percentage_rent.rate / 100
            increase = additional - analysis.percentage_rent
            recommended = f"Lower breakpoint to ${new_breakpoint / 1000:.0f}k"
        elif analysis.optimization == "Increase Base":
            market_base = MARKET_BASE_RENT.get(tenant.merchandise_type, 30)
            increase = max(0.0, (market_base - tenant.base_rent_psf) * tenant.square_footage)
            recommended = f"Increase base to ${market_base}/SF"
        else:
            increase = tenant.annual_base_rent * 0.03
            recommended = "Convert to graduated or CPI-based rent"
        if increase <= 0:
            continue
        opportunities.append(
            RentOptimization(
                tenant=tenant.tenant_name,
                current_structure=(
                    f"Base: ${tenant.base_rent_psf:g}/SF, {tenant.percentage_rent.rate:g}% over "
                    f"{tenant.percentage_rent.natural_breakpoint / 1000:.0f}k"
                ),
                recommended_structure=recommended,
                estimated_increase=increase,
            )
        )
    opportunities.sort(key=lambda item: item.estimated_increase, reverse=True)

    groups: Dict[str, List[RetailTenant]] = {}
    for tenant in tenants:
        groups.setdefault(tenant.merchandise_type, []).append(tenant)
    market = []
    for category, group in groups.items():
        rates = MARKET_PERCENTAGE_RATES.get(category, {"rate": 5, "breakpoint": 400_000})
        market.append(
            PercentageRentMarket(
                category=category,
                market_rate=rates["rate"],
                average_breakpoint=rates["breakpoint"],
                our_average=round(mean_or(tenant.percentage_rent.rate for tenant in group), 2),
            )
        )

    return PercentageRentAnalysis(
        current_performance=PercentageRentPerformance(
            total_percentage_rent=total_percentage,
            percentage_of_total=round(safe_ratio(total_percentage, total_base + total_percentage) * 100, 2),
            performing_tenants=performing,
            underperforming_tenants=underperforming,
        ),
        tenant_analysis=analyses,
        optimization_opportunities=opportunities,
        market_comparison=market,
    )


# ---------------------------------------------------------------------------
# Expense recovery
# ---------------------------------------------------------------------------


class LeakageCause(CamelModel):
    reason: str
    amount: float
    affected_tenants: int


class TenantRecovery(CamelModel):
    tenant: str
    pro_rata_share: float
    actual_billed: float
    collected: float
    variance: float
    structure: str


class RecoveryStrategy(CamelModel):
    strategy: str
    impact: float
    implementation: str
    timeline: str


class ExpenseRecoveryAnalysis(CamelModel):
    total_expenses: float
    recoverable_expenses: float
    actual_recovery: float
    recovery_rate: float
    leakage_amount: float
    leakage_causes: List[LeakageCause]
    tenant_recovery: List[TenantRecovery]
    optimization_strategies: List[RecoveryStrategy]
    admin_fee_opportunity: float


def _billing(tenant: RetailTenant, full_share: float):
    structure = tenant.cam_structure.lower()
    cap = (tenant.cam_cap or 0.0) * tenant.square_footage
    if structure == "fixed":
        return cap, f"Fixed at ${tenant.cam_cap or 0:g}/SF"
    if structure == "capped":
        return min(full_share, cap), f"Capped at ${tenant.cam_cap or 0:g}/SF"
    if structure == "excluded":
        return 0.0, "Excluded from CAM"
    return full_share, "Full pro-rata"


def analyze_expense_recovery(
    expenses: Sequence[RetailExpense], tenants: Sequence[RetailTenant], total_gla: float
) -> ExpenseRecoveryAnalysis:
    """
    CAM billing by lease structure, leakage and recovery strategies.

    Collections assume a 95% collection rate on billed amounts.
    """
    total = sum(expense.amount for expense in expenses)
    recoverable = sum(expense.amount for expense in expenses if expense.recoverable)

    recoveries = []
    for tenant in tenants:
        share = recoverable * safe_ratio(tenant.square_footage, total_gla)
        billed, structure = _billing(tenant, share)
        collected = billed * COLLECTION_RATE
        recoveries.append(
            TenantRecovery(
                tenant=tenant.tenant_name,
                pro_rata_share=share,
                actual_billed=billed,
                collected=collected,
                variance=collected - share,
                structure=structure,
            )
        )

    actual = sum(item.collected for item in recoveries)
    capped = [item for item in recoveries if item.structure.startswith("Capped")]
    excluded = [item for item in recoveries if item.structure == "Excluded from CAM"]

    causes: List[LeakageCause] = []
    cap_leakage = sum(max(0.0, item.pro_rata_share - item.actual_billed) for item in capped)
    if cap_leakage > 0:
        causes.append(LeakageCause(reason="CAM caps below market", amount=cap_leakage, affected_tenants=len(capped)))
    exclusion_leakage = sum(item.pro_rata_share for item in excluded)
    if exclusion_leakage > 0:
        causes.append(
            LeakageCause(reason="Tenant exclusions", amount=exclusion_leakage, affected_tenants=len(excluded))
        )
    collection_leakage = sum(item.actual_billed - item.collected for item in recoveries)
    if collection_leakage > 0:
        causes.append(
            LeakageCause(
                reason="Collection shortfalls",
                amount=collection_leakage,
                affected_tenants=sum(1 for item in recoveries if item.collected < item.actual_billed),
            )
        )

    strategies: List[RecoveryStrategy] = []
    low_caps = [item for item in capped if item.variance < -1000]
    if low_caps:
        strategies.append(
            RecoveryStrategy(
                strategy="Renegotiate CAM caps at renewal",
                impact=sum(abs(item.variance) for item in low_caps) * 0.5,
                implementation="Target tenants with caps >20% below actual",
                timeline="12-24 months",
            )
        )
    controllable = sum(expense.amount for expense in expenses if expense.category in CONTROLLABLE_EXPENSES)
    if controllable > 0:
        strategies.append(
            RecoveryStrategy(
                strategy="Competitive bid controllable services",
                impact=controllable * 0.15,
                implementation="RFP process for major contracts",
                timeline="3-6 months",
            )
        )
    if excluded:
        strategies.append(
            RecoveryStrategy(
                strategy="Direct bill certain expenses",
                impact=exclusion_leakage * 0.3,
                implementation="Separate meter utilities, direct bill specific services",
                timeline="6-12 months",
            )
        )
    admin_fee = recoverable * 0.10
    strategies.append(
        RecoveryStrategy(
            strategy="Implement administrative fee",
            impact=admin_fee,
            implementation="10% admin fee on CAM charges",
            timeline="Next lease cycle",
        )
    )
    strategies.sort(key=lambda item: item.impact, reverse=True)

    return ExpenseRecoveryAnalysis(
        total_expenses=total,
        recoverable_expenses=recoverable,
        actual_recovery=actual,
        recovery_rate=round(safe_ratio(actual, recoverable) * 100, 2),
        leakage_amount=recoverable - actual,
        leakage_causes=causes,
        tenant_recovery=recoveries,
        optimization_strategies=strategies,
        admin_fee_opportunity=admin_fee,
    )


# ---------------------------------------------------------------------------
# Redevelopment
# ---------------------------------------------------------------------------


class DevelopmentUse(CamelModel):
    use: str
    total_sf: float
    estimated_value: float
    estimated_noi: float
    development_cost: float
    profit: float


class RedevelopmentScenario(CamelModel):
    scenario: str
    description: str
    cap_ex: float
    new_gla: float
    proforma_noi: float
    stabilized_yield: float
    irr: float


class DensificationPotential(CamelModel):
    current_far: float
    max_buildable_sf: float
    additional_gla: float
    pad_sites: int
    outparcel_value: float
    mixed_use_option: bool


class ConversionOption(CamelModel):
    from_use: str
    to_use: str
    feasibility: str
    conversion_cost: float
    market_support: str


class RedevelopmentAnalysis(CamelModel):
    highest_best_use: Optional[DevelopmentUse]
    redevelopment_options: List[RedevelopmentScenario]
    densification_potential: DensificationPotential
    conversion_analysis: List[ConversionOption]


def _scenario(name: str, description: str, cap_ex: float, new_gla: float, noi: float) -> RedevelopmentScenario:
    return RedevelopmentScenario(
        scenario=name,
        description=description,
        cap_ex=cap_ex,
        new_gla=new_gla,
        proforma_noi=noi,
        stabilized_yield=safe_ratio(noi, cap_ex),
        irr=simple_irr(cap_ex, noi, 5),
    )


def analyze_redevelopment_potential(
    state: CenterState, market: RedevelopmentMarket, zoning: Zoning
) -> RedevelopmentAnalysis:
    """
    Highest and best use, renovation scenarios, densification and conversion.

    Land area is in acres. Value uses a 6.5% cap for retail and 5.5% for
    mixed-use; each scenario's IRR is the five-year multiple approximation.
    """
    land_sf = state.land_area_acres * ACRE_SF
    current_far = safe_ratio(state.gla, land_sf)
    max_buildable = land_sf * zoning.max_far
    land_cost = state.land_area_acres * market.land_value_per_acre

    uses: List[DevelopmentUse] = []
    if "Retail" in zoning.allowed_uses:
        retail_sf = max_buildable * 0.8
        noi = retail_sf * market.new_construction_rent * 0.9
        cost = retail_sf * market.construction_cost_psf + land_cost
        uses.append(
            DevelopmentUse(
                use="Modern Retail Center",
                total_sf=retail_sf,
                estimated_value=noi / 0.065,
                estimated_noi=noi,
                development_cost=cost,
                profit=noi / 0.065 - cost,
            )
        )
        if "Residential" in zoning.allowed_uses:
            noi = max_buildable * 0.25 * market.new_construction_rent * 0.95 + max_buildable * 0.65 * 24
            build_cost = max_buildable * market.construction_cost_psf * 1.2
            uses.append(
                DevelopmentUse(
                    use="Mixed-Use Development",
                    total_sf=max_buildable * 0.9,
                    estimated_value=noi / 0.055,
                    estimated_noi=noi,
                    development_cost=build_cost + land_cost,
                    profit=noi / 0.055 - build_cost,
                )
            )
    best = max(uses, key=lambda use: use.profit) if uses else None

    options = [
        _scenario(
            "Modernization",
            "Facade upgrade, new signage, landscaping, and common areas",
            state.gla * 25,
            state.gla,
            state.avg_rent * 1.15 * state.gla * 0.92,
        )
    ]
    partial_gla = state.gla * 0.85 + 25_000
    options.append(
        _scenario(
            "Partial Redevelopment",
            "Demo underperforming wing, add lifestyle component",
            state.gla * 0.3 * market.construction_cost_psf + state.gla * 0.7 * 35,
            partial_gla,
            partial_gla * market.new_construction_rent * 0.85 * 0.92,
        )
    )
    if current_far < zoning.max_far * 0.8:
        dense_gla = state.gla + 50_000
        options.append(
            _scenario(
                "Densification",
                "Add second level retail, parking deck, pad sites",
                50_000 * market.construction_cost_psf + 500 * market.parking_cost_per_space,
                dense_gla,
                dense_gla * market.new_construction_rent * 0.88 * 0.92,
            )
        )
    options.sort(key=lambda option: option.irr, reverse=True)

    excess_land = max(0.0, state.land_area_acres - state.gla / 15_000)
    pad_sites = int(excess_land // 0.75)

    conversions: List[ConversionOption] = []
    if state.gla > 50_000 and "Industrial" in zoning.allowed_uses:
        conversions.append(
            ConversionOption(
                from_use="Retail",
                to_use="Last-Mile Logistics",
                feasibility="High" if market.construction_cost_psf < 100 else "Medium",
                conversion_cost=state.gla * 35,
                market_support="E-commerce growth driving demand for urban logistics",
            )
        )
    conversions.append(
        ConversionOption(
            from_use="Traditional Retail",
            to_use="Entertainment/Experiential",
            feasibility="High" if state.sales_psf < 300 else "Low",
            conversion_cost=state.gla * 50,
            market_support="Consumer shift to experience-based retail",
        )
    )
    if "Office" in zoning.allowed_uses:
        conversions.append(
            ConversionOption(
                from_use="Retail",
                to_use="Medical Office",
                feasibility="Medium",
                conversion_cost=state.gla * 75,
                market_support="Aging demographics increase healthcare demand",
            )
        )

    return RedevelopmentAnalysis(
        highest_best_use=best,
        redevelopment_options=options,
        densification_potential=DensificationPotential(
            current_far=round(current_far, 4),
            max_buildable_sf=max_buildable,
            additional_gla=max(0.0, max_buildable - state.gla),
            pad_sites=pad_sites,
            outparcel_value=pad_sites * 0.75 * market.land_value_per_acre * 1.5,
            mixed_use_option="Residential" in zoning.allowed_uses,
        ),
        conversion_analysis=conversions,
    )
