# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Office Property Analysis

Tenant credit and concentration, lease economics, building operations and
market positioning, plus the lease-level calculations behind the enhanced
WALT, credit risk, expiration, space efficiency and lease NPV packages.

Every function that measures time remaining takes an explicit ``now``.
"""

from __future__ import annotations

import logging
import math
from datetime import datetime
from typing import Dict, List, Optional, Sequence

import numpy as np
import pandas as pd

from ...core.primitives import (
    DEFAULT_SETTINGS,
    CamelModel,
    RiskLevelEnum,
    TimeSettings,
    months_remaining,
    years_between,
)
from .._scoring import clamp, safe_ratio
from .records import (
    BuildingOperations,
    MarketIntelligence,
    OfficePropertyProfile,
    OfficeTenant,
)

logger = logging.getLogger(__name__)

CREDIT_SCORES: Dict[str, float] = {"AAA": 95, "AA": 90, "A": 85, "BBB": 75}
DEFAULT_CREDIT_SCORE = 60.0

CREDIT_WALT_WEIGHTS: Dict[str, float] = {"AAA": 1.2, "AA": 1.1, "A": 1.0}
DEFAULT_CREDIT_WALT_WEIGHT = 0.9

LEASE_VALUE_SCORES: Dict[str, float] = {"AAA": 100, "AA": 90, "A": 80}
CREDIT_RANKS: Dict[str, float] = {"AAA": 7, "AA": 6, "A": 5}

INDUSTRY_OUTLOOKS: Dict[str, str] = {
    "Technology": "Growing",
    "Healthcare": "Growing",
    "Financial Services": "Stable",
    "Legal": "Stable",
    "Government": "Stable",
    "Media": "Declining",
    "Insurance": "Declining",
}

WFH_IMPACTS: Dict[str, str] = {
    "Technology": "High",
    "Financial Services": "Medium",
    "Legal": "Low",
    "Healthcare": "Low",
    "Government": "Low",
}

LEED_BONUS: Dict[str, float] = {"Platinum": 20, "Gold": 15, "Silver": 10, "Certified": 5}
NON_CONTROLLABLE_EXPENSES = ("Taxes", "Insurance", "Utilities")


def credit_score(rating: str) -> float:
    return CREDIT_SCORES.get(rating, DEFAULT_CREDIT_SCORE)


def get_industry_outlook(industry: str) -> str:
    return INDUSTRY_OUTLOOKS.get(industry, "Stable")


def get_wfh_impact(industry: str) -> str:
    """Exposure of an industry's space demand to remote work."""
    return WFH_IMPACTS.get(industry, "Medium")


def calculate_real_estate_option_value(
    current_value: float,
    strike_price: float,
    time_to_expiry: float,
    volatility: float = 0.15,
    risk_free_rate: float = 0.03,
) -> float:
    """
    Approximate value of a lease option (renewal, expansion, purchase).

    Intrinsic value plus 40% of a square-root-of-time volatility premium,
    discounted continuously at the risk-free rate.
    """
    time_value = math.sqrt(max(0.0, time_to_expiry)) * volatility * current_value
    intrinsic = max(0.0, current_value - strike_price)
    return (intrinsic + time_value * 0.4) * math.exp(-risk_free_rate * time_to_expiry)


def calculate_space_efficiency_score(
    usable_sf: float,
    rentable_sf: float,
    occupancy: float,
    tenant_count: int = 0,
    avg_floor_plate: float = 0.0,
) -> float:
    score = 50.0
    core_efficiency = safe_ratio(usable_sf, rentable_sf) * 100
    if core_efficiency >= 85:
        score += 30
    elif core_efficiency >= 82:
        score += 20
    elif core_efficiency >= 78:
        score += 10
    else:
        score -= 10

    if occupancy >= 95:
        score += 25
    elif occupancy >= 90:
        score += 15
    elif occupancy >= 85:
        score += 5
    else:
        score -= 10
    return clamp(score)


def determine_market_cycle(vacancy: float, rent_growth: float, new_supply: float, absorption: float) -> str:
    if vacancy > 15 and rent_growth < 0:
        return "Recession"
    if vacancy > 10 and new_supply > absorption * 2:
        return "Hypersupply"
    if vacancy < 10 and rent_growth > 3:
        return "Expansion"
    return "Recovery"


def calculate_retention_probability(tenant: OfficeTenant, avg_rent: float) -> float:
    """Renewal likelihood in [0.1, 0.95] from rent position and credit."""
    probability = 0.7
    rent_vs_market = safe_ratio(tenant.rent_psf, avg_rent, default=1.0)
    if rent_vs_market < 0.9:
        probability += 0.15
    elif rent_vs_market > 1.1:
        probability -= 0.15
    if tenant.credit_rating in ("AAA", "AA", "A"):
        probability += 0.1
    return float(np.clip(probability, 0.1, 0.95))


def _total_rsf(tenants: Sequence[OfficeTenant]) -> float:
    return sum(tenant.total_rentable_sf for tenant in tenants)


# ---------------------------------------------------------------------------
# Tenant financial health
# ---------------------------------------------------------------------------


class WatchListEntry(CamelModel):
    tenant: str
    reason: List[str]
    risk_level: RiskLevelEnum
    recommended_action: str


class PortfolioCredit(CamelModel):
    weighted_credit_score: float
    investment_grade_percentage: float
    public_company_percentage: float
    watch_list: List[WatchListEntry]


class IndustryConcentration(CamelModel):
    industry: str
    percentage: float
    tenant_count: int
    market_outlook: str


class TenantConcentration(CamelModel):
    herfindahl_index: float
    top_tenant_exposure: float
    industry_concentration: List[IndustryConcentration]


class TenantIndicators(CamelModel):
    positive: List[str]
    negative: List[str]


class TenantFinancialMetrics(CamelModel):
    tenant: str
    employee_density: float
    expansion_probability: float
    downsizing_risk: float
    indicators: TenantIndicators


class TenantFinancialHealth(CamelModel):
    portfolio_credit: PortfolioCredit
    tenant_concentration: TenantConcentration
    financial_metrics: List[TenantFinancialMetrics]


def _watch_list_entry(tenant: OfficeTenant, now: datetime) -> Optional[WatchListEntry]:
    reasons: List[str] = []
    if not tenant.is_investment_grade:
        reasons.append("Sub-investment-grade credit")
    if tenant.payment_history.late > 2:
        reasons.append(f"{tenant.payment_history.late} late payments")
    if tenant.payment_history.defaulted > 0:
        reasons.append("Payment default on record")
    if months_remaining(tenant.expiration_date, now) <= 12:
        reasons.append("Lease expires within 12 months")
    if get_wfh_impact(tenant.industry) == "High":
        reasons.append("High remote-work exposure")
    if not reasons:
        return None

    if len(reasons) >= 3 or tenant.payment_history.defaulted > 0:
        level = RiskLevelEnum.HIGH
        action = "Engage tenant on credit enhancement (guarantee or letter of credit)"
    elif len(reasons) == 2:
        level = RiskLevelEnum.MEDIUM
        action = "Monitor financial statements quarterly"
    else:
        level = RiskLevelEnum.LOW
        action = "Review at next lease event"
    return WatchListEntry(tenant=tenant.tenant_name, reason=reasons, risk_level=level, recommended_action=action)


def _tenant_metrics(tenant: OfficeTenant, market: MarketIntelligence) -> TenantFinancialMetrics:
    outlook = get_industry_outlook(tenant.industry)
    wfh = get_wfh_impact(tenant.industry)
    density = safe_ratio(tenant.employees, tenant.total_rentable_sf) * 1000
    industry_growth = next(
        (item.growth for item in market.employment_growth.key_industries if item.industry == tenant.industry),
        None,
    )

    expansion = 30.0
    if outlook == "Growing":
        expansion += 20
    elif outlook == "Declining":
        expansion -= 15
    if density > 5:
        expansion += 10
    if industry_growth is not None and industry_growth > 3:
        expansion += 10

    downsizing = 20.0
    if wfh == "High":
        downsizing += 25
    elif wfh == "Medium":
        downsizing += 10
    if outlook == "Declining":
        downsizing += 15
    if density < 2:
        downsizing += 15

    positive: List[str] = []
    negative: List[str] = []
    if tenant.is_investment_grade:
        positive.append("Investment-grade credit")
    if tenant.public_company:
        positive.append("Public company disclosure")
    if tenant.payment_history.late == 0 and tenant.payment_history.defaulted == 0:
        positive.append("Clean payment history")
    if outlook == "Growing":
        positive.append(f"{tenant.industry} sector growing")
    if outlook == "Declining":
        negative.append(f"{tenant.industry} sector declining")
    if wfh == "High":
        negative.append("High remote-work exposure")
    if tenant.payment_history.late > 2:
        negative.append("Repeated late payments")

    return TenantFinancialMetrics(
        tenant=tenant.tenant_name,
        employee_density=round(density, 2),
        expansion_probability=clamp(expansion),
        downsizing_risk=clamp(downsizing),
        indicators=TenantIndicators(positive=positive, negative=negative),
    )


def analyze_tenant_financial_health(
    tenants: Sequence[OfficeTenant], market: MarketIntelligence, now: datetime
) -> TenantFinancialHealth:
    """
    Portfolio credit quality, concentration and per-tenant demand signals.

    Credit scores are weighted by rentable SF. Concentration is the
    Herfindahl index of SF shares.
    """
    total_sf = _total_rsf(tenants)
    shares = np.array([safe_ratio(tenant.total_rentable_sf, total_sf) for tenant in tenants], dtype=float)
    scores = np.array([credit_score(tenant.credit_rating) for tenant in tenants], dtype=float)
    weighted_score = float(np.dot(scores, shares)) if len(tenants) else 0.0

    investment_grade = sum(t.total_rentable_sf for t in tenants if t.is_investment_grade)
    public = sum(t.total_rentable_sf for t in tenants if t.public_company)

    watch_list = [entry for entry in (_watch_list_entry(t, now) for t in tenants) if entry is not None]

    industries: List[IndustryConcentration] = []
    if tenants:
        frame = pd.DataFrame(
            {"industry": [t.industry for t in tenants], "sf": [t.total_rentable_sf for t in tenants]}
        )
        grouped = frame.groupby("industry")["sf"].agg(["sum", "count"]).sort_values("sum", ascending=False)
        for industry, row in grouped.iterrows():
            industries.append(
                IndustryConcentration(
                    industry=str(industry),
                    percentage=round(safe_ratio(row["sum"], total_sf) * 100, 1),
                    tenant_count=int(row["count"]),
                    market_outlook=get_industry_outlook(str(industry)),
                )
            )

    return TenantFinancialHealth(
        portfolio_credit=PortfolioCredit(
            weighted_credit_score=round(weighted_score, 1),
            investment_grade_percentage=round(safe_ratio(investment_grade, total_sf) * 100, 1),
            public_company_percentage=round(safe_ratio(public, total_sf) * 100, 1),
            watch_list=watch_list,
        ),
        tenant_concentration=TenantConcentration(
            herfindahl_index=round(float(np.sum(shares ** 2)), 4),
            top_tenant_exposure=round(float(shares.max()) * 100, 1) if len(tenants) else 0.0,
            industry_concentration=industries,
        ),
        financial_metrics=[_tenant_metrics(tenant, market) for tenant in tenants],
    )


# ---------------------------------------------------------------------------
# Lease economics
# ---------------------------------------------------------------------------


class LeaseValuation(CamelModel):
    tenant: str
    contractual_rent: float
    market_rent: float
    lease_value: float
    effective_rent: float
    face_rent: float


class EscalationType(CamelModel):
    type: str
    count: int
    avg_rate: float


class EscalationAnalysis(CamelModel):
    avg_escalation: float
    escalation_types: List[EscalationType]
    cpi_exposure: float
    fixed_increases: float


class ConcessionAnalysis(CamelModel):
    total_concessions: float
    free_rent_value: float
    ti_allowances: float
    concession_rate: float
    payback_period: float


class LeaseEconomics(CamelModel):
    lease_valuation: List[LeaseValuation]
    escalation_analysis: EscalationAnalysis
    concession_analysis: ConcessionAnalysis


def _ti_total(tenant: OfficeTenant) -> float:
    ti = tenant.tenant_improvement
    return ti.total_allowance or ti.psf_allowance * tenant.total_rentable_sf


def analyze_lease_economics(
    tenants: Sequence[OfficeTenant],
    market: MarketIntelligence,
    now: datetime,
    time: TimeSettings = DEFAULT_SETTINGS.time,
) -> LeaseEconomics:
    """
    Contract versus market rent, escalation mix and concession burden.

    Effective rent spreads free rent and TI over the full lease term. Lease
    value is the rent spread over the remaining term.
    """
    valuations: List[LeaseValuation] = []
    free_rent_total = 0.0
    ti_total = 0.0
    contract_rent_total = 0.0
    for tenant in tenants:
        sf = tenant.total_rentable_sf
        term_months = max(1.0, (tenant.expiration_date - tenant.commencement_date).days / time.month_days)
        remaining_years = max(0.0, years_between(now, tenant.expiration_date, time.year_days))
        free_rent = tenant.monthly_rent * tenant.free_rent.months
        ti = _ti_total(tenant)
        total_rent = tenant.monthly_rent * term_months
        effective_psf = safe_ratio((total_rent - free_rent - ti) / (term_months / 12), sf)

        free_rent_total += free_rent
        ti_total += ti
        contract_rent_total += tenant.annual_rent
        valuations.append(
            LeaseValuation(
                tenant=tenant.tenant_name,
                contractual_rent=round(tenant.rent_psf, 2),
                market_rent=market.market_rent_psf,
                lease_value=round((tenant.rent_psf - market.market_rent_psf) * sf * remaining_years),
                effective_rent=round(effective_psf, 2),
                face_rent=round(tenant.rent_psf, 2),
            )
        )

    types: List[EscalationType] = []
    cpi_share = fixed_share = avg_escalation = 0.0
    if tenants:
        frame = pd.DataFrame(
            {
                "type": [t.escalations.type for t in tenants],
                "amount": [t.escalations.amount for t in tenants],
            }
        )
        grouped = frame.groupby("type")["amount"].agg(["count", "mean"])
        types = [
            EscalationType(type=str(kind), count=int(row["count"]), avg_rate=round(float(row["mean"]), 2))
            for kind, row in grouped.iterrows()
        ]
        avg_escalation = float(frame["amount"].mean())
        cpi_share = float((frame["type"] == "CPI").mean() * 100)
        fixed_share = float((frame["type"] == "Fixed").mean() * 100)

    total_concessions = free_rent_total + ti_total
    monthly_rent = contract_rent_total / 12
    return LeaseEconomics(
        lease_valuation=valuations,
        escalation_analysis=EscalationAnalysis(
            avg_escalation=round(avg_escalation, 2),
            escalation_types=types,
            cpi_exposure=round(cpi_share, 1),
            fixed_increases=round(fixed_share, 1),
        ),
        concession_analysis=ConcessionAnalysis(
            total_concessions=round(total_concessions),
            free_rent_value=round(free_rent_total),
            ti_allowances=round(ti_total),
            concession_rate=round(safe_ratio(total_concessions, contract_rent_total) * 100, 1),
            payback_period=round(safe_ratio(total_concessions, monthly_rent), 1),
        ),
    )


# ---------------------------------------------------------------------------
# Building operations
# ---------------------------------------------------------------------------


class OperationalEfficiency(CamelModel):
    overall_score: float
    energy_efficiency: float
    water_efficiency: float
    waste_efficiency: float
    indoor_environment: float


class SystemCondition(CamelModel):
    system: str
    age: float
    remaining_life: float
    condition: str
    replacement_cost: float
    annual_maintenance: float


class ExpenseSummary(CamelModel):
    total_expenses: float
    expense_psf: float
    controllable: float
    non_controllable: float
    recoverable_percentage: float


class BuildingOperationsAnalysis(CamelModel):
    operational_efficiency: OperationalEfficiency
    systems_condition: List[SystemCondition]
    expense_analysis: ExpenseSummary


def _condition_from_life(age: float, useful_life: float) -> str:
    used = safe_ratio(age, useful_life)
    if used < 0.4:
        return "Excellent"
    if used < 0.7:
        return "Good"
    if used < 0.9:
        return "Fair"
    return "Poor"


def analyze_building_operations(
    building: BuildingOperations,
    tenants: Sequence[OfficeTenant],
    property_age: float,
    total_sf: float,
) -> BuildingOperationsAnalysis:
    """Efficiency scores, major system condition and operating expense mix."""
    sustainability = building.sustainability
    energy = sustainability.energy_star_score if sustainability.energy_star_score is not None else 50.0
    leed = LEED_BONUS.get(sustainability.leed_certification or "", 0.0)
    energy_efficiency = clamp(energy + leed / 2)
    water = clamp(60 + leed - max(0.0, property_age - 20) * 0.5)
    waste = clamp(55 + leed + (10 if sustainability.energy_star_certified else 0))

    hvac_scores = []
    for system in building.hvac_systems:
        score = {"Excellent": 95, "Good": 80, "Fair": 60, "Poor": 40}.get(system.condition, 60)
        if system.controls == "DDC":
            score += 5
        hvac_scores.append(score)
    indoor = clamp(float(np.mean(hvac_scores)) if hvac_scores else 60.0)
    overall = energy_efficiency * 0.35 + water * 0.2 + waste * 0.15 + indoor * 0.3

    systems: List[SystemCondition] = []
    for hvac in building.hvac_systems:
        maintenance = total_sf * 0.35 * (0.8 if hvac.maintenance_contract else 1.0)
        systems.append(
            SystemCondition(
                system=f"HVAC ({hvac.type})",
                age=hvac.age,
                remaining_life=max(0.0, 25 - hvac.age),
                condition=hvac.condition,
                replacement_cost=round(total_sf * 25),
                annual_maintenance=round(maintenance),
            )
        )
    elevator_life = 25.0
    systems.append(
        SystemCondition(
            system="Elevators",
            age=building.elevator_age,
            remaining_life=max(0.0, elevator_life - building.elevator_age),
            condition=_condition_from_life(building.elevator_age, elevator_life),
            replacement_cost=round(building.passenger_elevators * 250_000 * (0.6 if building.elevators_modernized else 1.0)),
            annual_maintenance=round(building.passenger_elevators * 12_000),
        )
    )
    systems.append(
        SystemCondition(
            system="Electrical",
            age=property_age,
            remaining_life=max(0.0, 40 - property_age),
            condition=_condition_from_life(property_age, 40),
            replacement_cost=round(total_sf * 8),
            annual_maintenance=round(total_sf * 0.1),
        )
    )

    total_expenses = sum(item.annual for item in building.expenses)
    non_controllable = sum(
        item.annual for item in building.expenses if item.category in NON_CONTROLLABLE_EXPENSES
    )
    recoverable = sum(item.annual for item in building.expenses if item.recoverable)

    return BuildingOperationsAnalysis(
        operational_efficiency=OperationalEfficiency(
            overall_score=round(overall, 1),
            energy_efficiency=round(energy_efficiency, 1),
            water_efficiency=round(water, 1),
            waste_efficiency=round(waste, 1),
            indoor_environment=round(indoor, 1),
        ),
        systems_condition=systems,
        expense_analysis=ExpenseSummary(
            total_expenses=round(total_expenses),
            expense_psf=round(safe_ratio(total_expenses, total_sf), 2),
            controllable=round(total_expenses - non_controllable),
            non_controllable=round(non_controllable),
            recoverable_percentage=round(safe_ratio(recoverable, total_expenses) * 100, 1),
        ),
    )


# ---------------------------------------------------------------------------
# Market positioning
# ---------------------------------------------------------------------------


class OfficeMarketPosition(CamelModel):
    overall_rank: int
    total_properties: int
    percentile: float
    classification: str
    key_differentiators: List[str]
    competitive_weaknesses: List[str]


class PricingAnalysis(CamelModel):
    asking_vs_market: float
    effective_vs_market: float
    pricing_power: str
    recommended_strategy: str
    target_rent: float
    market_cycle: str


class OfficeMarketPositioning(CamelModel):
    market_position: OfficeMarketPosition
    pricing_analysis: PricingAnalysis


def _position_score(occupancy: float, rent: float, market_rent: float) -> float:
    return occupancy * 0.6 + min(safe_ratio(rent, market_rent), 1.5) / 1.5 * 40


def analyze_market_positioning(
    profile: OfficePropertyProfile, market: MarketIntelligence
) -> OfficeMarketPositioning:
    """
    Rank the subject against its competitive set and recommend a rent strategy.

    With no competitive set the subject is the only property, ranked first.
    """
    subject = _position_score(profile.occupancy, profile.avg_rent, market.market_rent_psf)
    comp_scores = [
        _position_score(comp.occupancy, comp.asking_rent, market.market_rent_psf)
        for comp in market.competitive_properties
    ]
    rank = 1 + sum(1 for score in comp_scores if score > subject)
    total = len(comp_scores) + 1
    percentile = (total - rank) / (total - 1) * 100 if total > 1 else 100.0
    if percentile >= 75:
        classification = "Market Leader"
    elif percentile >= 50:
        classification = "Above Average"
    elif percentile >= 25:
        classification = "Average"
    else:
        classification = "Below Average"

    building = profile.building
    differentiators: List[str] = []
    weaknesses: List[str] = []
    if building.sustainability.leed_certification:
        differentiators.append(f"LEED {building.sustainability.leed_certification} Certification")
    if building.sustainability.energy_star_certified:
        differentiators.append("ENERGY STAR certified")
    if building.fiber_optic:
        differentiators.append("Fiber connectivity")
    if profile.parking_ratio >= 4:
        differentiators.append("Abundant parking")
    elif profile.parking_ratio < 2.5:
        weaknesses.append("Limited parking")
    if profile.occupancy < 100 - market.vacancy.current:
        weaknesses.append("Occupancy below submarket")
    if not building.elevators_modernized:
        weaknesses.append("Elevators not modernized")

    effective_rents = [comp.effective_rent for comp in market.competitive_properties if comp.effective_rent > 0]
    effective_benchmark = float(np.mean(effective_rents)) if effective_rents else market.market_rent_psf

    if profile.occupancy >= 92 and market.vacancy.current < 12:
        power, strategy, target = "Strong", "Push rents on renewals and new leases", 1.05
    elif profile.occupancy >= 85:
        power, strategy, target = "Moderate", "Selective rent increases", 1.0
    else:
        power, strategy, target = "Weak", "Prioritize occupancy with concessions", 0.95

    cycle = determine_market_cycle(
        market.vacancy.current,
        market.rent_growth,
        market.construction.under_construction,
        market.absorption.trailing_12_months,
    )

    return OfficeMarketPositioning(
        market_position=OfficeMarketPosition(
            overall_rank=rank,
            total_properties=total,
            percentile=round(percentile, 1),
            classification=classification,
            key_differentiators=differentiators,
            competitive_weaknesses=weaknesses,
        ),
        pricing_analysis=PricingAnalysis(
            asking_vs_market=round((safe_ratio(profile.avg_rent, market.market_rent_psf, 1.0) - 1) * 100, 1),
            effective_vs_market=round((safe_ratio(profile.avg_rent, effective_benchmark, 1.0) - 1) * 100, 1),
            pricing_power=power,
            recommended_strategy=strategy,
            target_rent=round(market.market_rent_psf * target, 2),
            market_cycle=cycle,
        ),
    )


# ---------------------------------------------------------------------------
# Lease-level package calculations
# ---------------------------------------------------------------------------


class WaltTenantBreakdown(CamelModel):
    tenant: str
    lease_term_months: float
    rentable_sf: float
    credit_weight: float
    weighted_term: float
    lease_term_years: float
    weighted_term_years: float


class EnhancedWalt(CamelModel):
    walt: float
    credit_weighted_walt: float
    enhanced_walt: float
    tenant_concentration: float
    renewal_probability: float
    lease_value_score: float
    tenant_breakdown: List[WaltTenantBreakdown]
    total_rentable_sf: float
    average_credit_rating: float


def calculate_enhanced_walt(
    tenants: Sequence[OfficeTenant],
    now: datetime,
    renewal_probability: Optional[float] = None,
    time: TimeSettings = DEFAULT_SETTINGS.time,
) -> Optional[EnhancedWalt]:
    """
    SF-weighted WALT in years with each tenant's term scaled by credit.

    Credit weights are AAA 1.2, AA 1.1, A 1.0 and 0.9 otherwise. Returns
    ``None`` without tenants. Months are counted in ``time.month_days``.
    """
    if not tenants:
        return None
    total_sf = _total_rsf(tenants)
    breakdown: List[WaltTenantBreakdown] = []
    for tenant in tenants:
        months = months_remaining(tenant.expiration_date, now, time.month_days)
        weight = CREDIT_WALT_WEIGHTS.get(tenant.credit_rating, DEFAULT_CREDIT_WALT_WEIGHT)
        breakdown.append(
            WaltTenantBreakdown(
                tenant=tenant.tenant_name,
                lease_term_months=months,
                rentable_sf=tenant.total_rentable_sf,
                credit_weight=weight,
                weighted_term=months * weight,
                lease_term_years=months / 12,
                weighted_term_years=months * weight / 12,
            )
        )
    walt_months = safe_ratio(sum(row.weighted_term * row.rentable_sf for row in breakdown), total_sf)
    walt_years = walt_months / 12
    return EnhancedWalt(
        walt=walt_years,
        credit_weighted_walt=walt_years,
        enhanced_walt=walt_years,
        tenant_concentration=safe_ratio(max(t.total_rentable_sf for t in tenants), total_sf) * 100,
        renewal_probability=renewal_probability if renewal_probability is not None else 75.0,
        lease_value_score=float(np.mean([LEASE_VALUE_SCORES.get(t.credit_rating, 70) for t in tenants])),
        tenant_breakdown=breakdown,
        total_rentable_sf=total_sf,
        average_credit_rating=float(np.mean([CREDIT_RANKS.get(t.credit_rating, 4) for t in tenants])),
    )


class TenantCreditRow(CamelModel):
    tenant: str
    credit_rating: str
    credit_score: float
    risk_score: float
    sf_weight: float
    weighted_risk: float


class CreditRiskAnalysis(CamelModel):
    portfolio_risk_score: float
    tenant_analysis: List[TenantCreditRow]
    risk_level: RiskLevelEnum
    concentration: float


def analyze_tenant_credit_risk(tenants: Sequence[OfficeTenant]) -> Optional[CreditRiskAnalysis]:
    """SF-weighted credit risk; below 15 is Low, below 30 Medium, else High."""
    if not tenants:
        return None
    total_sf = _total_rsf(tenants)
    rows = []
    for tenant in tenants:
        score = credit_score(tenant.credit_rating)
        weight = safe_ratio(tenant.total_rentable_sf, total_sf)
        rows.append(
            TenantCreditRow(
                tenant=tenant.tenant_name,
                credit_rating=tenant.credit_rating,
                credit_score=score,
                risk_score=100 - score,
                sf_weight=weight,
                weighted_risk=(100 - score) * weight,
            )
        )
    portfolio_risk = sum(row.weighted_risk for row in rows)
    if portfolio_risk < 15:
        level = RiskLevelEnum.LOW
    elif portfolio_risk < 30:
        level = RiskLevelEnum.MEDIUM
    else:
        level = RiskLevelEnum.HIGH
    return CreditRiskAnalysis(
        portfolio_risk_score=portfolio_risk,
        tenant_analysis=rows,
        risk_level=level,
        concentration=max(row.sf_weight for row in rows) * 100,
    )


class TenantExpiration(CamelModel):
    tenant: str
    expiration_date: datetime
    months_to_expiration: float
    year_bucket: int
    rentable_sf: float
    percent_of_total: float
    annual_rent: float


class ExpirationBucket(CamelModel):
    year: int
    tenant_count: int
    total_sf: float
    percent_of_total: float
    annual_rent: float


class LeaseExpirationAnalysis(CamelModel):
    tenant_expirations: List[TenantExpiration]
    year_buckets: List[ExpirationBucket]
    rollover_risk: float
    average_lease_length: float


def analyze_lease_expirations(
    tenants: Sequence[OfficeTenant], now: datetime
) -> Optional[LeaseExpirationAnalysis]:
    """
    Expiration schedule in whole-year buckets 0 through 5.

    Rollover risk is the share of SF expiring in the first two buckets.
    """
    if not tenants:
        return None
    total_sf = _total_rsf(tenants)
    rows = []
    for tenant in tenants:
        months = months_remaining(tenant.expiration_date, now)
        rows.append(
            TenantExpiration(
                tenant=tenant.tenant_name,
                expiration_date=tenant.expiration_date,
                months_to_expiration=months,
                year_bucket=int(months // 12),
                rentable_sf=tenant.total_rentable_sf,
                percent_of_total=safe_ratio(tenant.total_rentable_sf, total_sf) * 100,
                annual_rent=tenant.annual_rent,
            )
        )
    frame = pd.DataFrame(
        {
            "bucket": [row.year_bucket for row in rows],
            "sf": [row.rentable_sf for row in rows],
            "rent": [row.annual_rent for row in rows],
        }
    )
    grouped = frame.groupby("bucket").agg(count=("sf", "size"), sf=("sf", "sum"), rent=("rent", "sum"))
    grouped = grouped.reindex(range(6), fill_value=0)
    buckets = [
        ExpirationBucket(
            year=int(year),
            tenant_count=int(row["count"]),
            total_sf=float(row["sf"]),
            percent_of_total=safe_ratio(float(row["sf"]), total_sf) * 100,
            annual_rent=float(row["rent"]),
        )
        for year, row in grouped.iterrows()
    ]
    return LeaseExpirationAnalysis(
        tenant_expirations=rows,
        year_buckets=buckets,
        rollover_risk=sum(bucket.percent_of_total for bucket in buckets[:2]),
        average_lease_length=float(np.mean([row.months_to_expiration for row in rows])) / 12,
    )


class TenantSpaceRow(CamelModel):
    tenant: str
    rentable_sf: float
    usable_sf: float
    efficiency: float
    load_factor: float
    workstation_density: float
    configuration: str


class SpaceEfficiencyAnalysis(CamelModel):
    building_efficiency: float
    average_load_factor: float
    tenant_analysis: List[TenantSpaceRow]
    utilization_score: float
    density_score: float


def analyze_space_efficiency(tenants: Sequence[OfficeTenant]) -> Optional[SpaceEfficiencyAnalysis]:
    """Usable-to-rentable efficiency, load factors and workstations per 1,000 USF."""
    if not tenants:
        return None
    rows = [
        TenantSpaceRow(
            tenant=tenant.tenant_name,
            rentable_sf=tenant.total_rentable_sf,
            usable_sf=tenant.total_usable_sf,
            efficiency=safe_ratio(tenant.total_usable_sf, tenant.total_rentable_sf),
            load_factor=safe_ratio(tenant.total_rentable_sf, tenant.total_usable_sf),
            workstation_density=safe_ratio(tenant.workstations, tenant.total_usable_sf) * 1000,
            configuration=tenant.suites[0].configuration if tenant.suites else "Unknown",
        )
        for tenant in tenants
    ]
    total_rsf = _total_rsf(tenants)
    total_usf = sum(tenant.total_usable_sf for tenant in tenants)
    return SpaceEfficiencyAnalysis(
        building_efficiency=safe_ratio(total_usf, total_rsf),
        average_load_factor=safe_ratio(total_rsf, total_usf),
        tenant_analysis=rows,
        utilization_score=float(np.mean([row.efficiency for row in rows])),
        density_score=float(np.mean([row.workstation_density for row in rows])),
    )


class TenantLeaseNPV(CamelModel):
    tenant: str
    months_remaining: float
    current_monthly_rent: float
    npv: float
    annualized_value: float
    npv_per_sf: float


class LeaseNPVAnalysis(CamelModel):
    tenant_npvs: List[TenantLeaseNPV]
    portfolio_npv: float
    weighted_npv_per_sf: float
    discount_rate: float


def calculate_lease_npv(
    tenant: OfficeTenant, discount_rate_pct: float, now: datetime
) -> TenantLeaseNPV:
    """
    Present value of the remaining monthly rent stream.

    Rent escalates monthly at the annual escalation rate divided by 12 and is
    discounted monthly at the annual discount rate divided by 12. Only whole
    remaining months are counted.
    """
    months = months_remaining(tenant.expiration_date, now)
    periods = np.arange(1, int(math.floor(months)) + 1, dtype=float)
    growth = (1 + tenant.escalations.amount / 100 / 12) ** periods
    discount = (1 + discount_rate_pct / 100 / 12) ** periods
    npv = float(np.sum(tenant.monthly_rent * growth / discount))
    return TenantLeaseNPV(
        tenant=tenant.tenant_name,
        months_remaining=months,
        current_monthly_rent=tenant.monthly_rent,
        npv=npv,
        annualized_value=safe_ratio(npv * 12, months),
        npv_per_sf=safe_ratio(npv, tenant.total_rentable_sf),
    )


def analyze_lease_npv(
    tenants: Sequence[OfficeTenant], discount_rate_pct: float, now: datetime
) -> Optional[LeaseNPVAnalysis]:
    if not tenants:
        return None
    rows = [calculate_lease_npv(tenant, discount_rate_pct, now) for tenant in tenants]
    return LeaseNPVAnalysis(
        tenant_npvs=rows,
        portfolio_npv=sum(row.npv for row in rows),
        weighted_npv_per_sf=float(np.mean([row.npv_per_sf for row in rows])),
        discount_rate=discount_rate_pct,
    )


class CurrentOfficeMetrics(CamelModel):
    rent_psf: float
    occupancy: float
    total_sf: float


class OfficeMarketBenchmarks(CamelModel):
    average_market_rent: float
    market_occupancy: float = 88.0
    market_cap_rate: float = 6.5
    submarket_vacancy: float = 12.0
    new_supply: float = 500_000


class OfficePositioning(CamelModel):
    rent_premium: float
    occupancy_premium: float
    market_share: float
    competitive_advantage: str
    stability_score: str


class OfficeMarketPositionAnalysis(CamelModel):
    current_metrics: CurrentOfficeMetrics
    market_metrics: OfficeMarketBenchmarks
    positioning: OfficePositioning
    recommendations: List[str]


def analyze_office_market_position(
    rentable_sf: float,
    average_rent_psf: float,
    occupancy: float,
    benchmarks: OfficeMarketBenchmarks,
    submarket_inventory: float = 10_000_000,
) -> OfficeMarketPositionAnalysis:
    """Rent and occupancy premiums against submarket benchmarks."""
    market_rent = benchmarks.average_market_rent
    rent_premium = safe_ratio(average_rent_psf - market_rent, market_rent) * 100
    if occupancy > 90:
        stability = "High"
    elif occupancy > 80:
        stability = "Medium"
    else:
        stability = "Low"
    if rent_premium > 10:
        recommendations = ["Maintain premium positioning", "Focus on retention"]
    else:
        recommendations = ["Opportunity for rent growth", "Improve tenant amenities"]
    return OfficeMarketPositionAnalysis(
        current_metrics=CurrentOfficeMetrics(rent_psf=average_rent_psf, occupancy=occupancy, total_sf=rentable_sf),
        market_metrics=benchmarks,
        positioning=OfficePositioning(
            rent_premium=rent_premium,
            occupancy_premium=occupancy - benchmarks.market_occupancy,
            market_share=safe_ratio(rentable_sf, submarket_inventory) * 100,
            competitive_advantage="Premium" if average_rent_psf > market_rent else "Discount",
            stability_score=stability,
        ),
        recommendations=recommendations,
    )


__all__ = [
    "analyze_building_operations",
    "analyze_lease_economics",
    "analyze_lease_expirations",
    "analyze_lease_npv",
    "analyze_market_positioning",
    "analyze_office_market_position",
    "analyze_space_efficiency",
    "analyze_tenant_credit_risk",
    "analyze_tenant_financial_health",
    "calculate_enhanced_walt",
    "calculate_lease_npv",
    "calculate_real_estate_option_value",
    "calculate_retention_probability",
    "calculate_space_efficiency_score",
    "determine_market_cycle",
    "get_industry_outlook",
    "get_wfh_impact",
]
