# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Core Metric Calculators

Each formula is implemented once as a function returning a ``Result``. The
batch engine reads the error message from the ``Result``; ``MetricCalculators``
exposes the same formulas in strict mode, raising ``InvalidArgumentError``.

Percent outputs are scaled by 100 (a 7.5% cap rate is ``7.5``).
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Optional, Sequence

import numpy as np

from ..asset.office.records import OfficeTenant
from ..asset.retail.records import RetailTenant
from ..core.exceptions import InvalidArgumentError
from ..core.primitives import (
    DEFAULT_SETTINGS,
    SIMPLE_MONTH_DAYS,
    Result,
    ReturnSettings,
    is_present,
    months_remaining,
)
from ..debt import annual_debt_service
from .types import (
    ClearHeightAnalysis,
    RevenuePerUnitResult,
    SalesPerSFResult,
    TenantSales,
)

logger = logging.getLogger(__name__)

PURCHASE_PRICE_ERROR = "Purchase price must be greater than 0"
TOTAL_INVESTMENT_ERROR = "Total investment must be greater than 0"
SQUARE_FOOTAGE_ERROR = "Square footage must be greater than 0"
GROSS_INCOME_ERROR = "Gross income must be greater than 0"
UNITS_ERROR = "Number of units must be greater than 0"
OCCUPANCY_ERROR = "Occupancy rate must be between 0 and 100"
LOAN_AMOUNT_ERROR = "Loan amount must be greater than 0"
INTEREST_RATE_ERROR = "Interest rate must be between 0 and 100"
LOAN_TERM_ERROR = "Loan term must be greater than 0"


def _loan_error(loan_amount: float, interest_rate: float, loan_term: float) -> Optional[str]:
    if loan_amount is None or loan_amount <= 0:
        return LOAN_AMOUNT_ERROR
    if interest_rate is None or interest_rate <= 0 or interest_rate > 100:
        return INTEREST_RATE_ERROR
    if loan_term is None or loan_term <= 0:
        return LOAN_TERM_ERROR
    return None


# ----------------------------------------------------------------------
# Result-returning formulas
# ----------------------------------------------------------------------


def calculate_cap_rate(noi: float, purchase_price: float) -> Result[float]:
    """Cap rate = NOI / purchase price x 100."""
    if purchase_price is None or purchase_price <= 0:
        return Result.fail(PURCHASE_PRICE_ERROR)
    return Result.ok(noi / purchase_price * 100)


def calculate_cash_on_cash(annual_cash_flow: float, total_investment: float) -> Result[float]:
    """Cash-on-cash return = annual cash flow / total investment x 100."""
    if total_investment is None or total_investment <= 0:
        return Result.fail(TOTAL_INVESTMENT_ERROR)
    return Result.ok(annual_cash_flow / total_investment * 100)


def calculate_dscr(
    noi: float, loan_amount: float, interest_rate: float, loan_term: float
) -> Result[float]:
    """Debt service coverage ratio = NOI / annual debt service."""
    error = _loan_error(loan_amount, interest_rate, loan_term)
    if error:
        return Result.fail(error)
    debt_service = annual_debt_service(loan_amount, interest_rate, loan_term)
    if debt_service <= 0:
        return Result.fail(LOAN_AMOUNT_ERROR)
    return Result.ok(noi / debt_service)


def calculate_ltv(loan_amount: float, purchase_price: float) -> Result[float]:
    """Loan-to-value = loan / purchase price x 100."""
    if purchase_price is None or purchase_price <= 0:
        return Result.fail(PURCHASE_PRICE_ERROR)
    return Result.ok(loan_amount / purchase_price * 100)


def calculate_grm(purchase_price: float, gross_income: float) -> Result[float]:
    """Gross rent multiplier = purchase price / gross annual income."""
    if gross_income is None or gross_income <= 0:
        return Result.fail(GROSS_INCOME_ERROR)
    return Result.ok(purchase_price / gross_income)


def calculate_price_per_sf(purchase_price: float, square_footage: float) -> Result[float]:
    if square_footage is None or square_footage <= 0:
        return Result.fail(SQUARE_FOOTAGE_ERROR)
    return Result.ok(purchase_price / square_footage)


def calculate_price_per_unit(purchase_price: float, units: float) -> Result[float]:
    if units is None or units <= 0:
        return Result.fail(UNITS_ERROR)
    return Result.ok(purchase_price / units)


def calculate_egi(gross_income: float, occupancy_rate: float) -> Result[float]:
    """Effective gross income = gross income x occupancy / 100."""
    if occupancy_rate is None or not 0 <= occupancy_rate <= 100:
        return Result.fail(OCCUPANCY_ERROR)
    return Result.ok(gross_income * occupancy_rate / 100)


def calculate_breakeven_occupancy(
    operating_expenses: float,
    gross_income: float,
    loan_amount: float = 0.0,
    interest_rate: float = 0.0,
    loan_term: float = 0.0,
) -> Result[float]:
    """
    Breakeven occupancy = (operating expenses + annual debt service) / gross income x 100.

    Debt service is zero when any loan input is missing.
    """
    if gross_income is None or gross_income <= 0:
        return Result.fail(GROSS_INCOME_ERROR)
    debt_service = annual_debt_service(loan_amount, interest_rate, loan_term)
    return Result.ok((operating_expenses + debt_service) / gross_income * 100)


def calculate_effective_rent_psf(
    average_rent_psf: float, operating_expenses: float, square_footage: float
) -> Result[float]:
    """Average rent per SF less operating expenses per SF."""
    if square_footage is None or square_footage <= 0:
        return Result.fail(SQUARE_FOOTAGE_ERROR)
    return Result.ok(average_rent_psf - operating_expenses / square_footage)


def calculate_occupancy_cost_ratio(operating_expenses: float, gross_income: float) -> Result[float]:
    """Operating expenses as a percentage of gross income."""
    if gross_income is None or gross_income <= 0:
        return Result.fail(GROSS_INCOME_ERROR)
    return Result.ok(operating_expenses / gross_income * 100)


def _appreciation(
    current_noi: float,
    projected_noi: float,
    exit_cap_rate: Optional[float],
    settings: ReturnSettings,
) -> float:
    noi_growth = projected_noi - current_noi
    exit_cap = settings.exit_cap_rate if exit_cap_rate is None else exit_cap_rate
    if exit_cap <= 0:
        return noi_growth * settings.fallback_appreciation_multiple
    return noi_growth / (exit_cap / 100)


def calculate_irr(
    annual_cash_flow: float,
    total_investment: float,
    current_noi: float,
    projected_noi: float,
    holding_period: Optional[float] = None,
    exit_cap_rate: Optional[float] = None,
    settings: ReturnSettings = DEFAULT_SETTINGS.returns,
) -> Result[float]:
    """
    Approximate IRR from level cash flow plus value appreciation at exit.

    Appreciation is NOI growth capitalized at the exit cap rate. The result is
    ``((total / investment) ** (1 / years) - 1) * 100`` clamped to the settings
    range, and 0 when the total return is not positive.
    """
    if total_investment is None or total_investment <= 0:
        return Result.fail(TOTAL_INVESTMENT_ERROR)
    years = holding_period if is_present(holding_period) and holding_period > 0 else settings.holding_period_years
    total_return = annual_cash_flow * years + _appreciation(current_noi, projected_noi, exit_cap_rate, settings)
    if total_return <= 0:
        return Result.ok(0.0)
    irr = ((total_return / total_investment) ** (1 / years) - 1) * 100
    return Result.ok(float(np.clip(irr, settings.irr_floor, settings.irr_cap)))


def calculate_roi(
    total_investment: float,
    current_noi: Optional[float] = None,
    projected_noi: Optional[float] = None,
    annual_cash_flow: Optional[float] = None,
    holding_period: Optional[float] = None,
    exit_cap_rate: Optional[float] = None,
    settings: ReturnSettings = DEFAULT_SETTINGS.returns,
) -> Result[float]:
    """
    Return on investment as a percentage, floored at zero.

    With NOI growth the total return (cash flow over the hold plus appreciation)
    is divided by the investment. When no holding period is supplied the default
    hold is used and the result is annualized over it. Without NOI growth the
    ROI is cash flow / investment x 100.
    """
    if total_investment is None or total_investment <= 0:
        return Result.fail(TOTAL_INVESTMENT_ERROR)
    if not (is_present(current_noi) and is_present(projected_noi)):
        if annual_cash_flow is None:
            return Result.fail("Annual cash flow or NOI growth is required for ROI")
        return Result.ok(annual_cash_flow / total_investment * 100)

    annualize = not (is_present(holding_period) and holding_period > 0)
    years = settings.holding_period_years if annualize else holding_period
    total_return = (annual_cash_flow or 0.0) * years + _appreciation(
        current_noi, projected_noi, exit_cap_rate, settings
    )
    roi = max(total_return / total_investment * 100, 0.0)
    return Result.ok(roi / years if annualize else roi)


# ----------------------------------------------------------------------
# Typed metrics
# ----------------------------------------------------------------------


def simple_walt(
    tenants: Sequence[OfficeTenant],
    now: datetime,
    month_days: float = SIMPLE_MONTH_DAYS,
) -> Optional[float]:
    """
    Rent-weighted average lease term in years, rounded to 2 decimals.

    Returns ``None`` when there are no tenants or total rent is zero.
    """
    if not tenants:
        return None
    rents = np.array([tenant.annual_rent for tenant in tenants], dtype=float)
    if rents.sum() <= 0:
        return None
    months = np.array(
        [months_remaining(tenant.expiration_date, now, month_days) for tenant in tenants],
        dtype=float,
    )
    return round(float(np.dot(rents, months) / rents.sum()) / 12, 2)


def sales_per_sf(tenants: Sequence[RetailTenant]) -> Optional[SalesPerSFResult]:
    """Average tenant sales per square foot with the per-tenant figures."""
    if not tenants:
        return None
    by_tenant = [
        TenantSales(
            name=tenant.tenant_name,
            sales_per_sf=round(tenant.annual_sales / tenant.square_footage, 2)
            if tenant.square_footage > 0
            else 0.0,
        )
        for tenant in tenants
    ]
    average = float(np.mean([entry.sales_per_sf for entry in by_tenant]))
    return SalesPerSFResult(average=round(average, 2), by_tenant=by_tenant)


CLEAR_HEIGHT_CATEGORIES = (
    (36, "Modern Spec (36ft+)", "15-25% premium"),
    (28, "Standard Modern (28-35ft)", "Market rate"),
    (24, "Older Generation (24-27ft)", "10-20% discount"),
)
OBSOLETE_CLEAR_HEIGHT = ("Functionally Obsolete (<24ft)", "25-40% discount")


def clear_height_analysis(
    square_footage: float, clear_height: float, purchase_price: float
) -> Optional[ClearHeightAnalysis]:
    """Price per SF and the clear-height class of an industrial building."""
    if not (is_present(square_footage) and is_present(clear_height) and is_present(purchase_price)):
        return None
    if square_footage <= 0:
        return None
    category, premium = OBSOLETE_CLEAR_HEIGHT
    for minimum, label, adjustment in CLEAR_HEIGHT_CATEGORIES:
        if clear_height >= minimum:
            category, premium = label, adjustment
            break
    return ClearHeightAnalysis(
        price_per_sf=round(purchase_price / square_footage, 2),
        clear_height_category=category,
        estimated_premium=premium,
    )


def revenue_per_unit(
    total_units: float,
    monthly_rental_income: float,
    market_average_rent: Optional[float] = None,
) -> Optional[RevenuePerUnitResult]:
    """Monthly revenue per unit, annualized income and a market comparison."""
    if not (is_present(total_units) and is_present(monthly_rental_income)) or total_units <= 0:
        return None
    per_unit = monthly_rental_income / total_units
    comparison = None
    if is_present(market_average_rent) and market_average_rent > 0:
        difference = (per_unit - market_average_rent) / market_average_rent * 100
        if difference > 5:
            comparison = f"{difference:.1f}% above market"
        elif difference < -5:
            comparison = f"{abs(difference):.1f}% below market"
        else:
            comparison = "At market rate"
    return RevenuePerUnitResult(
        revenue_per_unit=round(per_unit, 2),
        annualized_revenue=monthly_rental_income * 12,
        market_comparison=comparison,
    )


class MetricCalculators:
    """
    Strict-mode calculators.

    Every method validates its arguments and raises ``InvalidArgumentError``
    (a ``ValueError``) with a descriptive message instead of returning a
    sentinel value.
    """

    @staticmethod
    def cap_rate(noi: float, purchase_price: float) -> float:
        """
        Calculate capitalization rate.

        Args:
            noi: Annual net operating income
            purchase_price: Acquisition price

        Returns:
            Cap rate as a percentage
        """
        return calculate_cap_rate(noi, purchase_price).unwrap()

    @staticmethod
    def cash_on_cash(annual_cash_flow: float, total_investment: float) -> float:
        return calculate_cash_on_cash(annual_cash_flow, total_investment).unwrap()

    @staticmethod
    def dscr(noi: float, loan_amount: float, interest_rate: float, loan_term: float) -> float:
        """
        Calculate debt service coverage ratio.

        Args:
            noi: Annual net operating income
            loan_amount: Loan principal
            interest_rate: Annual rate as a percentage
            loan_term: Amortization term in years

        Returns:
            NOI divided by annual debt service
        """
        return calculate_dscr(noi, loan_amount, interest_rate, loan_term).unwrap()

    @staticmethod
    def ltv(loan_amount: float, purchase_price: float) -> float:
        return calculate_ltv(loan_amount, purchase_price).unwrap()

    @staticmethod
    def grm(purchase_price: float, gross_income: float) -> float:
        return calculate_grm(purchase_price, gross_income).unwrap()

    @staticmethod
    def price_per_sf(purchase_price: float, square_footage: float) -> float:
        return calculate_price_per_sf(purchase_price, square_footage).unwrap()

    @staticmethod
    def price_per_unit(purchase_price: float, units: float) -> float:
        return calculate_price_per_unit(purchase_price, units).unwrap()

    @staticmethod
    def egi(gross_income: float, occupancy_rate: float) -> float:
        return calculate_egi(gross_income, occupancy_rate).unwrap()

    @staticmethod
    def breakeven_occupancy(
        operating_expenses: float,
        gross_income: float,
        loan_amount: float,
        interest_rate: float,
        loan_term: float,
    ) -> float:
        """
        Calculate breakeven occupancy.

        Args:
            operating_expenses: Annual operating expenses
            gross_income: Gross annual income
            loan_amount: Loan principal
            interest_rate: Annual rate as a percentage
            loan_term: Amortization term in years

        Returns:
            Occupancy percentage at which income covers expenses and debt service
        """
        error = _loan_error(loan_amount, interest_rate, loan_term)
        if error:
            raise InvalidArgumentError(error)
        return calculate_breakeven_occupancy(
            operating_expenses, gross_income, loan_amount, interest_rate, loan_term
        ).unwrap()

    @staticmethod
    def effective_rent_psf(average_rent_psf: float, operating_expenses: float, square_footage: float) -> float:
        return calculate_effective_rent_psf(average_rent_psf, operating_expenses, square_footage).unwrap()

    @staticmethod
    def occupancy_cost_ratio(operating_expenses: float, gross_income: float) -> float:
        return calculate_occupancy_cost_ratio(operating_expenses, gross_income).unwrap()

    @staticmethod
    def irr(
        annual_cash_flow: float,
        total_investment: float,
        current_noi: float,
        projected_noi: float,
        holding_period: Optional[float] = None,
        exit_cap_rate: Optional[float] = None,
    ) -> float:
        """
        Approximate IRR over the holding period.

        Args:
            annual_cash_flow: Level annual cash flow
            total_investment: Equity invested
            current_noi: NOI at acquisition
            projected_noi: NOI at exit
            holding_period: Years held (defaults to 5)
            exit_cap_rate: Exit cap rate as a percentage (defaults to 8)

        Returns:
            IRR as a percentage clamped to [0, 50]
        """
        return calculate_irr(
            annual_cash_flow, total_investment, current_noi, projected_noi, holding_period, exit_cap_rate
        ).unwrap()

    @staticmethod
    def roi(
        total_investment: float,
        current_noi: Optional[float] = None,
        projected_noi: Optional[float] = None,
        annual_cash_flow: Optional[float] = None,
        holding_period: Optional[float] = None,
        exit_cap_rate: Optional[float] = None,
    ) -> float:
        return calculate_roi(
            total_investment, current_noi, projected_noi, annual_cash_flow, holding_period, exit_cap_rate
        ).unwrap()


__all__ = [
    "MetricCalculators",
    "calculate_breakeven_occupancy",
    "calculate_cap_rate",
    "calculate_cash_on_cash",
    "calculate_dscr",
    "calculate_effective_rent_psf",
    "calculate_egi",
    "calculate_grm",
    "calculate_irr",
    "calculate_ltv",
    "calculate_occupancy_cost_ratio",
    "calculate_price_per_sf",
    "calculate_price_per_unit",
    "calculate_roi",
    "clear_height_analysis",
    "revenue_per_unit",
    "sales_per_sf",
    "simple_walt",
]
