# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Multifamily Analysis

Rent-roll revenue performance, operating expense and staffing review,
competitive market position and renovation (value-add) economics.

All functions tolerate empty rent rolls and comp sets: ratios whose
denominator is zero report zero instead of raising.
"""

from __future__ import annotations

import logging
import math
from datetime import datetime
from typing import Dict, List, Optional, Sequence

import numpy as np
import pandas as pd
from pydantic import Field

from ...core.primitives import CamelModel, PriorityEnum
from .._scoring import clamp, mean_or, safe_ratio
from .records import (
    ApartmentProperty,
    ApartmentUnit,
    MaintenanceEntry,
    MarketComp,
    OperatingExpenses,
    PropertyAmenities,
    RenovationCosts,
    StaffRole,
    Submarket,
)

logger = logging.getLogger(__name__)

MIX_BUCKETS = ("Studio", "1BR", "2BR", "3BR")
OTHER_INCOME_CATEGORIES = ("parking", "storage", "pet", "utilities")

RENEWAL_INCREASE = 3.5
NEW_LEASE_GROWTH = 5.0
TRAILING_GROWTH = 4.0
RENEWAL_WEIGHT = 0.7

EXPENSE_BENCHMARKS: Dict[str, float] = {
    "taxes": 0.15,
    "insurance": 0.08,
    "utilities": 0.12,
    "payroll": 0.20,
    "maintenance": 0.15,
    "management": 0.10,
    "marketing": 0.05,
    "administrative": 0.10,
    "other": 0.05,
}
NON_CONTROLLABLE = ("taxes", "insurance")
ASSUMED_RESPONSE_HOURS = 4
ASSUMED_OVERTIME_PCT = 5
ASSUMED_RENT_GROWTH = 3.0

AMENITY_WEIGHTS: Dict[str, int] = {
    "pool": 8,
    "fitness": 8,
    "smart_home": 10,
    "package_lockers": 7,
    "ev_charging": 6,
    "clubhouse": 5,
    "business_center": 4,
    "dog_park": 5,
    "concierge": 5,
    "valet": 4,
    "gated_parking": 3,
    "covered_parking": 3,
    "bbq_area": 2,
    "playground": 3,
    "central_hvac": 4,
    "high_speed_internet": 4,
    "keyless_entry": 3,
    "trash_valet": 3,
}
PARKING_BONUS_MAX = 5

# (field, display name, addition cost, rent premium per month)
AMENITY_CHECKLIST = (
    ("pool", "Swimming Pool", 250_000, 15),
    ("fitness", "Fitness Center", 100_000, 20),
    ("clubhouse", "Clubhouse", 150_000, 10),
    ("dog_park", "Dog Park", 50_000, 15),
    ("package_lockers", "Package Lockers", 30_000, 10),
    ("smart_home", "Smart Home Features", 1_000, 25),
    ("ev_charging", "EV Charging", 10_000, 5),
    ("valet", "Valet Trash", 0, 20),
)
HIGH_AMENITY_SCORE = 70
PRIORITY_ORDER = {PriorityEnum.HIGH.value: 0, PriorityEnum.MEDIUM.value: 1, PriorityEnum.LOW.value: 2}

PRICING_STRATEGIES = (
    (80, "Aggressive rent growth - push 5-7% on renewals", 7),
    (60, "Moderate growth - target 3-5% increases", 5),
    (40, "Conservative approach - 2-3% increases", 3),
)
FALLBACK_STRATEGY = ("Focus on occupancy - minimal increases", 2)

DEFAULT_RENOVATION_PREMIUM = 20.0
COLLECTION_RATE = 0.95


def calculate_amenity_score(amenities: PropertyAmenities) -> float:
    """
    Weighted share of the amenity checklist present, on a 0-100 scale.

    Parking adds up to five points: 1.5 spaces per unit or more earns the full
    bonus, 1.0 or more earns three.
    """
    flags = amenities.model_dump()
    score = sum(weight for name, weight in AMENITY_WEIGHTS.items() if flags.get(name))
    if amenities.parking_ratio >= 1.5:
        score += 5
    elif amenities.parking_ratio >= 1.0:
        score += 3
    max_score = sum(AMENITY_WEIGHTS.values()) + PARKING_BONUS_MAX
    return score / max_score * 100


def _units_frame(units: Sequence[ApartmentUnit]) -> pd.DataFrame:
    columns = ["bucket", "sf", "current_rent", "market_rent", "occupied"]
    if not units:
        return pd.DataFrame(columns=columns)
    return pd.DataFrame(
        {
            "bucket": [unit.mix_bucket for unit in units],
            "sf": [unit.square_footage for unit in units],
            "current_rent": [unit.current_rent for unit in units],
            "market_rent": [unit.market_rent for unit in units],
            "occupied": [unit.occupied for unit in units],
        }
    )


# ---------------------------------------------------------------------------
# Revenue performance
# ---------------------------------------------------------------------------


class RevenueMetrics(CamelModel):
    gross_potential_rent: float
    actual_rent: float
    loss_to_lease: float
    vacancy: float
    concessions: float
    effective_rent: float
    other_income: float
    total_revenue: float


class UnitPerformance(CamelModel):
    rev_pau: float = Field(alias="revPAU")
    rev_p_occ_u: float
    avg_rent_psf: float
    occupancy: float
    economic_occupancy: float


class UnitMixRow(CamelModel):
    unit_type: str
    count: int
    occupancy: float
    avg_rent: float
    avg_market_rent: float
    loss_to_lease: float
    revenue_psf: float
    percent_of_revenue: float


class RentGrowthAnalysis(CamelModel):
    renewal_increases: float
    new_lease_growth: float
    blended_growth: float
    trailing_growth: float
    market_rent_growth: float


class ConcessionAnalysis(CamelModel):
    units_with_concessions: int
    avg_concession_value: float
    concession_rate: float
    net_effective_rent: float
    concession_trend: str


class OtherIncomeRow(CamelModel):
    category: str
    monthly_amount: float
    per_unit_amount: float
    percent_of_revenue: float
    growth_potential: float


class RevenuePerformance(CamelModel):
    revenue_metrics: RevenueMetrics
    unit_performance: UnitPerformance
    unit_mix_analysis: List[UnitMixRow]
    rent_growth_analysis: RentGrowthAnalysis
    concession_analysis: ConcessionAnalysis
    other_income_analysis: List[OtherIncomeRow]


def _unit_mix(frame: pd.DataFrame, actual_rent: float) -> List[UnitMixRow]:
    rows = []
    for bucket in MIX_BUCKETS:
        group = frame[frame["bucket"] == bucket]
        if group.empty:
            continue
        occupied = group[group["occupied"]]
        type_revenue = float((occupied["current_rent"] * 12).sum())
        rows.append(
            UnitMixRow(
                unit_type=bucket,
                count=len(group),
                occupancy=round(len(occupied) / len(group) * 100, 1),
                avg_rent=round(safe_ratio(float(occupied["current_rent"].sum()), len(occupied))),
                avg_market_rent=round(float(group["market_rent"].mean())),
                loss_to_lease=round(
                    float((occupied["market_rent"] - occupied["current_rent"]).clip(lower=0).sum())
                ),
                revenue_psf=round(safe_ratio(type_revenue, float(group["sf"].sum())), 2),
                percent_of_revenue=round(safe_ratio(type_revenue, actual_rent) * 100, 1),
            )
        )
    return rows


def analyze_revenue_performance(
    units: Sequence[ApartmentUnit], comps: Sequence[MarketComp]
) -> RevenuePerformance:
    """
    Rent-roll revenue build-up from gross potential rent to total revenue.

    Rent growth figures other than the comp-relative market growth are fixed
    assumptions; the rent roll carries no lease history.
    """
    frame = _units_frame(units)
    occupied_units = [unit for unit in units if unit.occupied]
    total_units = len(units)
    occupied_count = len(occupied_units)

    gross_potential_rent = sum(unit.market_rent * 12 for unit in units)
    actual_rent = sum(unit.current_rent * 12 for unit in occupied_units)
    loss_to_lease = sum(max(0.0, unit.market_rent - unit.current_rent) * 12 for unit in occupied_units)
    vacancy = sum(unit.market_rent * 12 for unit in units if not unit.occupied)

    with_concessions = [unit for unit in occupied_units if unit.concession is not None]
    concession_total = sum(unit.concession.annualized for unit in with_concessions)
    effective_rent = actual_rent - concession_total
    other_income_total = sum(
        unit.other_income.monthly_total * 12 for unit in occupied_units if unit.other_income
    )
    total_revenue = effective_rent + other_income_total

    total_sf = sum(unit.square_footage for unit in units)
    avg_rent_psf = safe_ratio(actual_rent / 12, total_sf)

    avg_comp_psf = mean_or(comp.avg_rent_psf for comp in comps)
    market_rent_growth = safe_ratio(avg_rent_psf - avg_comp_psf, avg_comp_psf) * 100

    concession_rate = safe_ratio(len(with_concessions), occupied_count) * 100
    market_concession_rate = safe_ratio(sum(1 for comp in comps if comp.concession_offered), len(comps)) * 100
    if concession_rate > market_concession_rate * 1.2:
        trend = "Increasing"
    elif concession_rate < market_concession_rate * 0.8:
        trend = "Decreasing"
    else:
        trend = "Stable"

    other_rows = []
    for category in OTHER_INCOME_CATEGORIES:
        amounts = [getattr(unit.other_income, category) if unit.other_income else 0.0 for unit in occupied_units]
        monthly = float(sum(amounts))
        penetration = safe_ratio(sum(1 for amount in amounts if amount > 0), occupied_count)
        other_rows.append(
            OtherIncomeRow(
                category=category.capitalize(),
                monthly_amount=monthly,
                per_unit_amount=round(safe_ratio(monthly, occupied_count), 2),
                percent_of_revenue=round(safe_ratio(monthly * 12, total_revenue) * 100, 2),
                growth_potential=round((1 - penetration) * 50, 1),
            )
        )

    return RevenuePerformance(
        revenue_metrics=RevenueMetrics(
            gross_potential_rent=gross_potential_rent,
            actual_rent=actual_rent,
            loss_to_lease=loss_to_lease,
            vacancy=vacancy,
            concessions=concession_total,
            effective_rent=effective_rent,
            other_income=other_income_total,
            total_revenue=total_revenue,
        ),
        unit_performance=UnitPerformance(
            rev_pau=round(safe_ratio(total_revenue, total_units) / 12, 2),
            rev_p_occ_u=round(safe_ratio(total_revenue, occupied_count) / 12, 2),
            avg_rent_psf=round(avg_rent_psf, 2),
            occupancy=round(safe_ratio(occupied_count, total_units) * 100, 1),
            economic_occupancy=round(safe_ratio(effective_rent, gross_potential_rent) * 100, 1),
        ),
        unit_mix_analysis=_unit_mix(frame, actual_rent),
        rent_growth_analysis=RentGrowthAnalysis(
            renewal_increases=RENEWAL_INCREASE,
            new_lease_growth=NEW_LEASE_GROWTH,
            blended_growth=round(
                RENEWAL_INCREASE * RENEWAL_WEIGHT + NEW_LEASE_GROWTH * (1 - RENEWAL_WEIGHT), 1
            ),
            trailing_growth=TRAILING_GROWTH,
            market_rent_growth=round(market_rent_growth, 1),
        ),
        concession_analysis=ConcessionAnalysis(
            units_with_concessions=len(with_concessions),
            avg_concession_value=round(
                safe_ratio(sum(unit.concession.amount for unit in with_concessions), len(with_concessions))
            ),
            concession_rate=round(concession_rate, 1),
            net_effective_rent=effective_rent,
            concession_trend=trend,
        ),
        other_income_analysis=other_rows,
    )


# ---------------------------------------------------------------------------
# Operating performance
# ---------------------------------------------------------------------------


class ExpenseMetrics(CamelModel):
    total_expenses: float
    expense_ratio: float
    per_unit_expenses: float
    expense_psf: float
    controllable_ratio: float


class ExpenseLine(CamelModel):
    category: str
    amount: float
    per_unit: float
    percent_of_total: float
    benchmark: float
    variance: float


class MaintenanceAnalysis(CamelModel):
    total_maintenance_cost: float
    routine_percentage: float
    emergency_percentage: float
    turnover_cost: float
    avg_turnover_cost: float
    maintenance_per_unit: float
    response_time: float
    preventive_ratio: float


class Productivity(CamelModel):
    role: str
    metric: str
    value: float
    benchmark: float


class StaffingEfficiency(CamelModel):
    units_per_employee: float
    payroll_per_unit: float
    staff_turnover: float
    overtime_percentage: float
    productivity: List[Productivity]


class OperationalKpi(CamelModel):
    metric: str
    value: float
    target: float
    status: str


class OperatingPerformance(CamelModel):
    expense_metrics: ExpenseMetrics
    expense_breakdown: List[ExpenseLine]
    maintenance_analysis: MaintenanceAnalysis
    staffing_efficiency: StaffingEfficiency
    operational_kpis: List[OperationalKpi]


def _kpi_status(value: float, on_track: float, attention: float, lower_is_better: bool = False) -> str:
    if lower_is_better:
        if value <= on_track:
            return "On Track"
        return "Needs Attention" if value <= attention else "Critical"
    if value >= on_track:
        return "On Track"
    return "Needs Attention" if value >= attention else "Critical"


def analyze_operating_performance(
    units: Sequence[ApartmentUnit],
    expenses: OperatingExpenses,
    maintenance_log: Sequence[MaintenanceEntry],
    staffing: Sequence[StaffRole],
    now: datetime,
) -> OperatingPerformance:
    """
    Expense ratios against category benchmarks, maintenance mix for the
    current calendar year, staffing ratios and headline KPIs.

    Revenue here is scheduled rent from occupied units.
    """
    total_units = len(units)
    total_sf = sum(unit.square_footage for unit in units)
    occupied_count = sum(1 for unit in units if unit.occupied)
    revenue = sum(unit.current_rent * 12 for unit in units if unit.occupied)

    by_category = expenses.model_dump()
    total_expenses = expenses.total
    expense_ratio = safe_ratio(total_expenses, revenue) * 100
    non_controllable = sum(by_category[name] for name in NON_CONTROLLABLE)
    controllable_ratio = safe_ratio(total_expenses - non_controllable, total_expenses) * 100

    breakdown = []
    for category, amount in by_category.items():
        percent = safe_ratio(amount, total_expenses) * 100
        benchmark = EXPENSE_BENCHMARKS.get(category, 0.0) * 100
        breakdown.append(
            ExpenseLine(
                category=category.capitalize(),
                amount=amount,
                per_unit=safe_ratio(amount, total_units),
                percent_of_total=round(percent, 1),
                benchmark=round(benchmark, 1),
                variance=round(safe_ratio(percent - benchmark, benchmark) * 100, 1),
            )
        )
    breakdown.sort(key=lambda line: line.amount, reverse=True)

    this_year = [entry for entry in maintenance_log if entry.date.year == now.year]
    cost_by_type: Dict[str, float] = {}
    for entry in this_year:
        cost_by_type[entry.type] = cost_by_type.get(entry.type, 0.0) + entry.cost
    total_maintenance = sum(cost_by_type.values())
    routine_pct = safe_ratio(cost_by_type.get("Routine", 0.0), total_maintenance) * 100
    emergency_pct = safe_ratio(cost_by_type.get("Emergency", 0.0), total_maintenance) * 100
    turnover_cost = cost_by_type.get("Turnover", 0.0)
    turnovers = sum(1 for entry in this_year if entry.type == "Turnover")

    total_staff = sum(role.count for role in staffing)
    total_payroll = sum(role.count * role.avg_salary for role in staffing)
    units_per_employee = safe_ratio(total_units, total_staff)
    weighted_turnover = safe_ratio(sum(role.turnover_rate * role.count for role in staffing), total_staff)

    occupancy = round(safe_ratio(occupied_count, total_units) * 100, 1)
    ratio_kpi = round(expense_ratio, 1)

    return OperatingPerformance(
        expense_metrics=ExpenseMetrics(
            total_expenses=total_expenses,
            expense_ratio=round(expense_ratio, 1),
            per_unit_expenses=round(safe_ratio(total_expenses, total_units)),
            expense_psf=round(safe_ratio(total_expenses, total_sf), 2),
            controllable_ratio=round(controllable_ratio, 1),
        ),
        expense_breakdown=breakdown,
        maintenance_analysis=MaintenanceAnalysis(
            total_maintenance_cost=total_maintenance,
            routine_percentage=round(routine_pct, 1),
            emergency_percentage=round(emergency_pct, 1),
            turnover_cost=turnover_cost,
            avg_turnover_cost=round(safe_ratio(turnover_cost, turnovers)),
            maintenance_per_unit=round(safe_ratio(total_maintenance, total_units)),
            response_time=ASSUMED_RESPONSE_HOURS,
            preventive_ratio=round(routine_pct, 1),
        ),
        staffing_efficiency=StaffingEfficiency(
            units_per_employee=round(units_per_employee, 1),
            payroll_per_unit=round(safe_ratio(total_payroll, total_units)),
            staff_turnover=round(weighted_turnover, 1),
            overtime_percentage=ASSUMED_OVERTIME_PCT,
            productivity=[
                Productivity(role="Maintenance", metric="Work orders per tech per month", value=45, benchmark=50),
                Productivity(role="Leasing", metric="Leases per agent per month", value=8, benchmark=10),
                # Roughly a third of staff is management
                Productivity(role="Management", metric="Units per manager", value=units_per_employee * 3, benchmark=150),
            ],
        ),
        operational_kpis=[
            OperationalKpi(metric="Occupancy Rate", value=occupancy, target=95, status=_kpi_status(occupancy, 95, 90)),
            OperationalKpi(
                metric="Rent Growth",
                value=ASSUMED_RENT_GROWTH,
                target=3,
                status=_kpi_status(ASSUMED_RENT_GROWTH, 3, 1),
            ),
            OperationalKpi(
                metric="Expense Ratio",
                value=ratio_kpi,
                target=35,
                status=_kpi_status(ratio_kpi, 35, 40, lower_is_better=True),
            ),
        ],
    )


# ---------------------------------------------------------------------------
# Market position
# ---------------------------------------------------------------------------


class MultifamilyCompetitivePosition(CamelModel):
    market_rank: int
    rent_premium_discount: float
    occupancy_outperformance: float
    amenity_score: float
    overall_rating: str


class Swot(CamelModel):
    strengths: List[str]
    weaknesses: List[str]
    opportunities: List[str]
    threats: List[str]


class PricingPower(CamelModel):
    score: float
    indicators: List[str]
    recommended_strategy: str
    max_rent_increase: float


class AmenityGap(CamelModel):
    amenity: str
    market_adoption: float
    has_amenity: bool
    addition_cost: Optional[float] = None
    rent_premium: Optional[float] = None
    priority: str


class DemographicAlignment(CamelModel):
    target_resident: str
    alignment_score: float
    mismatches: List[str]
    recommendations: List[str]


class MultifamilyMarketPosition(CamelModel):
    competitive_position: MultifamilyCompetitivePosition
    strengths_weaknesses: Swot
    pricing_power: PricingPower
    amenity_gap_analysis: List[AmenityGap]
    demographic_alignment: DemographicAlignment


def _overall_rating(rank: int, comp_count: int) -> str:
    if rank <= comp_count * 0.25:
        return "Leader"
    if rank <= comp_count * 0.5:
        return "Competitive"
    if rank <= comp_count * 0.75:
        return "Follower"
    return "Laggard"


def _demographics(
    subject: ApartmentProperty, average_rent: float, median_income: float
) -> DemographicAlignment:
    # Qualifying income at three times rent
    income = average_rent * 12 * 3
    amenities = subject.amenities
    score = 70
    mismatches: List[str] = []
    recommendations: List[str] = []
    if income > median_income * 1.5:
        target = "Young Professionals"
        if not amenities.fitness:
            mismatches.append("No fitness center for active demographic")
            recommendations.append("Add fitness center")
            score -= 10
        if not amenities.smart_home:
            mismatches.append("No smart home features")
            recommendations.append("Implement smart home technology")
            score -= 10
    elif income > median_income * 0.8:
        target = "Middle Income Families"
        if not amenities.playground:
            mismatches.append("No playground for families")
            recommendations.append("Add playground")
            score -= 10
        if subject.location.school_rating < 7:
            mismatches.append("Below-average schools")
            score -= 15
    else:
        target = "Value-Conscious Renters"
        if amenities.valet or amenities.concierge:
            mismatches.append("Luxury amenities increase costs")
            recommendations.append("Focus on essential amenities only")
            score -= 5
    return DemographicAlignment(
        target_resident=target, alignment_score=score, mismatches=mismatches, recommendations=recommendations
    )


def analyze_market_position(
    subject: ApartmentProperty,
    comps: Sequence[MarketComp],
    submarket: Submarket,
    now: datetime,
) -> MultifamilyMarketPosition:
    """
    Rank the property against its comp set and derive SWOT lists, pricing
    power, amenity gaps and resident-profile fit.

    The composite ranking score is ``0.4 * rent PSF + 0.3 * occupancy +
    0.3 * amenity score``; rank 1 is the best property in the set.
    """
    units = subject.units
    total_units = len(units)
    occupied = [unit for unit in units if unit.occupied]
    occupancy = safe_ratio(len(occupied), total_units) * 100
    average_rent = mean_or(unit.current_rent for unit in occupied)
    total_sf = sum(unit.square_footage for unit in units)
    avg_rent_psf = safe_ratio(average_rent, safe_ratio(total_sf, total_units))

    comp_count = len(comps)
    market_psf = mean_or(comp.avg_rent_psf for comp in comps)
    market_occupancy = mean_or(comp.occupancy for comp in comps)
    market_amenity = mean_or(comp.amenity_score for comp in comps)
    rent_premium = safe_ratio(avg_rent_psf - market_psf, market_psf) * 100

    amenity_score = calculate_amenity_score(subject.amenities)
    subject_score = avg_rent_psf * 0.4 + occupancy * 0.3 + amenity_score * 0.3
    comp_scores = np.array(
        [comp.avg_rent_psf * 0.4 + comp.occupancy * 0.3 + comp.amenity_score * 0.3 for comp in comps]
    )
    rank = int((comp_scores > subject_score).sum()) + 1

    location = subject.location
    amenities = subject.amenities
    renovated_comp_share = safe_ratio(sum(1 for comp in comps if comp.renovated), comp_count)
    comp_concession_rate = safe_ratio(sum(1 for comp in comps if comp.concession_offered), comp_count)
    supply_pressure = submarket.new_supply_units > submarket.population * 0.02

    strengths = []
    if occupancy > 95:
        strengths.append("High occupancy")
    if rent_premium > 5:
        strengths.append("Premium rent achievement")
    if location.walk_score > 80:
        strengths.append("Excellent walkability")
    if location.transit_score > 70:
        strengths.append("Strong transit access")
    if amenity_score > market_amenity:
        strengths.append("Superior amenity package")
    if subject.last_renovation and now.year - subject.last_renovation < 5:
        strengths.append("Recently renovated")

    weaknesses = []
    if occupancy < 90:
        weaknesses.append("Below-market occupancy")
    if rent_premium < -5:
        weaknesses.append("Below-market rents")
    if now.year - subject.year_built > 20 and not subject.last_renovation:
        weaknesses.append("Dated property")
    if location.crime_index > 50:
        weaknesses.append("Safety concerns")
    if amenity_score < market_amenity * 0.8:
        weaknesses.append("Inferior amenity package")

    opportunities = []
    if sum(1 for unit in units if not unit.renovated) > total_units * 0.3:
        opportunities.append("Unit renovation program")
    if rent_premium < 0:
        opportunities.append("Rent growth potential")
    if not amenities.smart_home:
        opportunities.append("Smart home technology adoption")
    if not amenities.package_lockers:
        opportunities.append("Package management solution")

    threats = []
    if supply_pressure:
        threats.append("Significant new supply")
    if submarket.rent_to_income_ratio > 0.35:
        threats.append("Affordability pressure")
    if renovated_comp_share > 0.5:
        threats.append("Competitor renovations")
    if comp_concession_rate > 0.5:
        threats.append("Market-wide concessions")

    pricing_score = 50
    indicators = []
    for applies, delta, text in (
        (occupancy > 95, 20, "High occupancy supports increases"),
        (rent_premium < -5, 15, "Below-market rents"),
        (location.walk_score > 80, 10, "Premium location"),
        (submarket.avg_rent_growth > 3, 10, "Strong market rent growth"),
        (comp_concession_rate > 0.5, -15, "High market concessions"),
        (supply_pressure, -10, "New supply pressure"),
    ):
        if applies:
            pricing_score += delta
            indicators.append(text)
    pricing_score = clamp(pricing_score)
    strategy, max_increase = FALLBACK_STRATEGY
    for threshold, text, increase in PRICING_STRATEGIES:
        if pricing_score >= threshold:
            strategy, max_increase = text, increase
            break

    # Comps carry no amenity detail; high-scoring comps stand in for adopters
    adoption = safe_ratio(sum(1 for comp in comps if comp.amenity_score > HIGH_AMENITY_SCORE), comp_count) * 100
    flags = amenities.model_dump()
    gaps = []
    for field, name, cost, premium in AMENITY_CHECKLIST:
        has_it = bool(flags.get(field))
        if not has_it and adoption > 70:
            priority = PriorityEnum.HIGH.value
        elif not has_it and adoption > 40:
            priority = PriorityEnum.MEDIUM.value
        else:
            priority = PriorityEnum.LOW.value
        gaps.append(
            AmenityGap(
                amenity=name,
                market_adoption=adoption,
                has_amenity=has_it,
                addition_cost=None if has_it else cost,
                rent_premium=None if has_it else premium,
                priority=priority,
            )
        )
    gaps.sort(key=lambda gap: PRIORITY_ORDER[gap.priority])

    return MultifamilyMarketPosition(
        competitive_position=MultifamilyCompetitivePosition(
            market_rank=rank,
            rent_premium_discount=round(rent_premium, 2),
            occupancy_outperformance=round(occupancy - market_occupancy, 2),
            amenity_score=round(amenity_score, 1),
            overall_rating=_overall_rating(rank, comp_count),
        ),
        strengths_weaknesses=Swot(
            strengths=strengths, weaknesses=weaknesses, opportunities=opportunities, threats=threats
        ),
        pricing_power=PricingPower(
            score=pricing_score,
            indicators=indicators,
            recommended_strategy=strategy,
            max_rent_increase=max_increase,
        ),
        amenity_gap_analysis=gaps,
        demographic_alignment=_demographics(subject, average_rent, submarket.median_income),
    )


# ---------------------------------------------------------------------------
# Value-add potential
# ---------------------------------------------------------------------------


class RenovationScenario(CamelModel):
    scenario: str
    total_cost: float
    units_to_renovate: int
    avg_rent_increase: float
    incremental_noi: float
    value_created: float
    roi: float
    payback_years: float


class RenovationPhase(CamelModel):
    phase: int
    units: int
    investment: float
    timeline: str
    expected_noi: float


class MarketSupport(CamelModel):
    renovated_comps: int
    avg_premium: float
    demand_indicators: List[str]
    risk_factors: List[str]


class FinancingOption(CamelModel):
    option: str
    structure: str
    pros: List[str]
    cons: List[str]


class ExecutionStep(CamelModel):
    step: str
    timeline: str
    critical_factors: List[str]
    mitigation: List[str]


class ValueAddAnalysis(CamelModel):
    renovation_roi: List[RenovationScenario]
    phased_approach: List[RenovationPhase]
    market_support: MarketSupport
    financing_considerations: List[FinancingOption]
    execution_plan: List[ExecutionStep]


FINANCING_OPTIONS = (
    FinancingOption(
        option="Cash/Existing Reserves",
        structure="Self-fund from operations",
        pros=["No financing costs", "Quick execution", "Full control"],
        cons=["Depletes reserves", "Opportunity cost", "Limited scale"],
    ),
    FinancingOption(
        option="Supplemental Loan",
        structure="Add to existing mortgage",
        pros=["Preserve cash", "Tax deductible interest", "Single payment"],
        cons=["Increases leverage", "May require lender approval", "Higher LTV"],
    ),
    FinancingOption(
        option="Construction Line",
        structure="Draw as needed for renovations",
        pros=["Pay only for what you use", "Flexible timing", "Interest-only period"],
        cons=["Variable rate risk", "Requires conversion", "Fees"],
    ),
    FinancingOption(
        option="Preferred Equity",
        structure="JV partner funds renovation",
        pros=["No additional debt", "Partner expertise", "Larger scale possible"],
        cons=["Dilutes ownership", "Higher cost of capital", "Less control"],
    ),
)

EXECUTION_PLAN = (
    ExecutionStep(
        step="Pre-Development",
        timeline="Months 1-2",
        critical_factors=["Finalize scope and budget", "Secure financing", "Contractor selection"],
        mitigation=["Get multiple bids", "Include contingency", "Check references"],
    ),
    ExecutionStep(
        step="Pilot Program",
        timeline="Months 3-4",
        critical_factors=["Test 2-3 units", "Refine scope", "Gauge market response"],
        mitigation=["A/B test finishes", "Survey residents", "Monitor leasing"],
    ),
    ExecutionStep(
        step="Full Rollout",
        timeline="Months 5-18",
        critical_factors=["Minimize disruption", "Maintain occupancy", "Quality control"],
        mitigation=["Phase by building", "Temporary relocations", "Daily inspections"],
    ),
    ExecutionStep(
        step="Stabilization",
        timeline="Months 19-24",
        critical_factors=["Achieve target rents", "Maintain occupancy", "Control expenses"],
        mitigation=["Gradual increases", "Marketing push", "Retention incentives"],
    ),
)


def analyze_value_add_potential(
    units: Sequence[ApartmentUnit],
    current_noi: float,
    comps: Sequence[MarketComp],
    renovation_costs: RenovationCosts,
    cap_rate: float,
) -> ValueAddAnalysis:
    """
    Renovation scenarios for every unrenovated unit, a three-phase rollout
    and the market evidence for a renovation premium.

    ``cap_rate`` is a decimal (0.055). The renovation premium is the rent PSF
    gap between renovated and unrenovated comps, or 20% when the comp set has
    no unrenovated properties. Classic, Premium and Luxury capture 60%, 80%
    and 100% of it.
    """
    unrenovated = [unit for unit in units if not unit.renovated]
    avg_unrenovated_rent = mean_or(unit.current_rent for unit in unrenovated if unit.occupied)

    renovated_psf = [comp.avg_rent_psf for comp in comps if comp.renovated]
    unrenovated_psf = [comp.avg_rent_psf for comp in comps if not comp.renovated]
    unrenovated_avg = mean_or(unrenovated_psf)
    if unrenovated_avg > 0:
        market_premium = (mean_or(renovated_psf) - unrenovated_avg) / unrenovated_avg * 100
    else:
        market_premium = DEFAULT_RENOVATION_PREMIUM

    count = len(unrenovated)
    scenarios = []
    for name, tier, capture in (
        ("Classic", renovation_costs.classic, 0.6),
        ("Premium", renovation_costs.premium, 0.8),
        ("Luxury", renovation_costs.luxury, 1.0),
    ):
        total_cost = count * tier.per_unit
        rent_increase = avg_unrenovated_rent * market_premium * capture / 100
        incremental_noi = rent_increase * count * 12 * COLLECTION_RATE
        value_created = safe_ratio(incremental_noi, cap_rate)
        scenarios.append(
            RenovationScenario(
                scenario=name,
                total_cost=total_cost,
                units_to_renovate=count,
                avg_rent_increase=round(rent_increase),
                incremental_noi=round(incremental_noi),
                value_created=round(value_created),
                roi=round(safe_ratio(value_created - total_cost, total_cost) * 100, 1),
                payback_years=round(safe_ratio(total_cost, incremental_noi), 1),
            )
        )

    premium_increase = next(s.avg_rent_increase for s in scenarios if s.scenario == "Premium")
    per_phase = math.ceil(count / 3)
    phases = []
    for phase in (1, 2, 3):
        phase_units = per_phase if phase < 3 else max(0, count - per_phase * 2)
        completed = per_phase * phase
        phases.append(
            RenovationPhase(
                phase=phase,
                units=phase_units,
                investment=phase_units * renovation_costs.premium.per_unit,
                timeline=f"Months {(phase - 1) * 6 + 1}-{phase * 6}",
                expected_noi=round(current_noi + premium_increase * completed * 12 * COLLECTION_RATE),
            )
        )

    demand: List[str] = []
    risks: List[str] = []
    if safe_ratio(len(renovated_psf), len(comps)) > 0.5:
        demand.append("Majority of comps are renovated")
    if market_premium > 15:
        demand.append(f"Strong {market_premium:.0f}% renovation premium")
    if safe_ratio(sum(1 for unit in units if unit.occupied), len(units)) > 0.95:
        demand.append("High occupancy supports renovation")
    if any(comp.concession_offered for comp in comps):
        risks.append("Market concessions may limit rent growth")
    if count < len(units) * 0.3:
        risks.append("Limited units remaining to renovate")

    scenarios.sort(key=lambda s: s.roi, reverse=True)
    return ValueAddAnalysis(
        renovation_roi=scenarios,
        phased_approach=phases,
        market_support=MarketSupport(
            renovated_comps=len(renovated_psf),
            avg_premium=round(market_premium, 1),
            demand_indicators=demand,
            risk_factors=risks,
        ),
        financing_considerations=list(FINANCING_OPTIONS),
        execution_plan=list(EXECUTION_PLAN),
    )


__all__ = [
    "AMENITY_WEIGHTS",
    "MultifamilyMarketPosition",
    "OperatingPerformance",
    "RevenuePerformance",
    "ValueAddAnalysis",
    "analyze_market_position",
    "analyze_operating_performance",
    "analyze_revenue_performance",
    "analyze_value_add_potential",
    "calculate_amenity_score",
]
