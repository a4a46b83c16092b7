# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""Loan amortization calculations"""

from __future__ import annotations

import math
from typing import Optional, Tuple

import numpy as np
import pandas as pd
from pydantic import Field
from pyxirr import pmt

from ..core.primitives import Model, PositiveFloat, PositiveInt
from ..core.primitives.validation import is_present


def monthly_payment(principal: float, annual_rate_pct: float, term_years: float) -> float:
    """
    Level monthly payment for a fully amortizing fixed-rate loan.

    Args:
        principal: Loan amount
        annual_rate_pct: Nominal annual rate as a percentage (5.5 for 5.5%)
        term_years: Amortization term in years

    Returns:
        Monthly payment, or 0.0 when any input is missing or zero
    """
    if not (is_present(principal) and is_present(annual_rate_pct) and is_present(term_years)):
        return 0.0
    monthly_rate = annual_rate_pct / 100 / 12
    number_of_payments = term_years * 12
    payment = pmt(monthly_rate, number_of_payments, principal) * -1
    if payment is None or not math.isfinite(payment):
        return 0.0
    return float(payment)


def annual_debt_service(principal: float, annual_rate_pct: float, term_years: float) -> float:
    """
    Annual debt service (12 monthly payments) for a fully amortizing loan.

    Returns 0.0 instead of raising when any input is zero or missing. The strict
    DSCR calculator validates its arguments separately.

    Example:
        >>> round(annual_debt_service(3_500_000, 5.5, 30), 2)
        238471.38
    """
    return monthly_payment(principal, annual_rate_pct, term_years) * 12


class LoanAmortization(Model):
    """
    Fixed-rate loan amortization schedule.

    Attributes:
        loan_amount (PositiveFloat): Initial loan amount
        term (PositiveInt): Loan term in years
        annual_rate_pct (PositiveFloat): Nominal annual rate as a percentage
        start_date (Optional[pd.Period]): First payment month; periods are numbered when omitted
        interest_only_periods (int): Number of initial months with interest-only payments
    """

    loan_amount: PositiveFloat
    term: PositiveInt
    annual_rate_pct: PositiveFloat
    start_date: Optional[pd.Period] = None
    interest_only_periods: int = Field(
        default=0, ge=0, description="Number of initial periods with interest-only payments (in months)"
    )

    @property
    def monthly_payment(self) -> float:
        return monthly_payment(self.loan_amount, self.annual_rate_pct, self.term)

    @property
    def annual_debt_service(self) -> float:
        return self.monthly_payment * 12

    @property
    def amortization_schedule(self) -> Tuple[pd.DataFrame, pd.Series]:
        """
        Monthly schedule of payment, interest, principal and balances.

        Returns:
            Tuple of the schedule DataFrame (Begin Balance, Payment, Interest,
            Principal, End Balance) and a summary Series.
        """
        total_payments = self.term * 12
        monthly_rate = self.annual_rate_pct / 100 / 12

        payments = np.zeros(total_payments)
        interest_paid = np.zeros(total_payments)
        principal_paid = np.zeros(total_payments)
        balances = np.zeros(total_payments + 1)
        balances[0] = self.loan_amount

        for i in range(total_payments):
            current_balance = balances[i]
            interest_payment = current_balance * monthly_rate
            interest_paid[i] = interest_payment

            if i < self.interest_only_periods:
                payment = interest_payment
                principal_payment = 0.0
            else:
                remaining_periods = total_payments - i
                if remaining_periods > 1:
                    payment = pmt(monthly_rate, remaining_periods, current_balance) * -1
                    principal_payment = payment - interest_payment
                else:
                    payment = current_balance + interest_payment
                    principal_payment = current_balance

            payments[i] = payment
            principal_paid[i] = principal_payment
            balances[i + 1] = current_balance - principal_payment

        balances[-1] = 0.0

        if self.start_date is not None:
            index = pd.period_range(self.start_date, periods=total_payments, freq="M")
        else:
            index = pd.RangeIndex(1, total_payments + 1, name="Period")

        df = pd.DataFrame(
            {
                "Begin Balance": balances[:-1],
                "Payment": payments,
                "Interest": interest_paid,
                "Principal": principal_paid,
                "End Balance": balances[1:],
            },
            index=index,
        )

        summary = pd.Series(
            {
                "Total Payments": df["Payment"].sum(),
                "Total Principal Paid": df["Principal"].sum(),
                "Total Interest Paid": df["Interest"].sum(),
                "Last Payment Amount": df["Payment"].iloc[-1],
                "Interest Only Periods": self.interest_only_periods,
                "Amortizing Periods": total_payments - self.interest_only_periods,
            }
        )
        return df, summary
