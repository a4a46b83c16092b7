# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Unit tests for loan payment helpers and the amortization schedule.
"""

import pandas as pd
import pytest

from dealscope.debt import LoanAmortization, annual_debt_service, monthly_payment


class TestPaymentHelpers:
    """Level payments for fully amortizing fixed-rate loans."""

    def test_reference_annual_debt_service(self):
        assert annual_debt_service(3_500_000, 5.5, 30) == pytest.approx(238_471.38, abs=1.0)

    def test_monthly_payment_is_one_twelfth(self):
        assert monthly_payment(3_500_000, 5.5, 30) * 12 == pytest.approx(
            annual_debt_service(3_500_000, 5.5, 30)
        )

    @pytest.mark.parametrize(
        "principal, rate, term",
        [(0, 5.5, 30), (3_500_000, 0, 30), (3_500_000, 5.5, 0), (None, 5.5, 30)],
    )
    def test_missing_inputs_give_zero(self, principal, rate, term):
        assert annual_debt_service(principal, rate, term) == 0.0


class TestLoanAmortization:
    """Monthly schedule built with pandas."""

    def test_schedule_pays_off_principal(self):
        loan = LoanAmortization(loan_amount=1_000_000, term=10, annual_rate_pct=6.0)
        schedule, summary = loan.amortization_schedule

        assert len(schedule) == 120
        assert schedule["Principal"].sum() == pytest.approx(1_000_000, rel=1e-9)
        assert schedule["End Balance"].iloc[-1] == 0.0
        assert summary["Amortizing Periods"] == 120

    def test_interest_only_periods(self):
        loan = LoanAmortization(
            loan_amount=1_000_000, term=10, annual_rate_pct=6.0, interest_only_periods=12
        )
        schedule, _ = loan.amortization_schedule

        assert schedule["Principal"].iloc[:12].sum() == 0.0
        assert schedule["Payment"].iloc[0] == pytest.approx(5_000.0)
        assert schedule["Begin Balance"].iloc[12] == pytest.approx(1_000_000)

    def test_period_index_from_start_date(self):
        loan = LoanAmortization(
            loan_amount=500_000, term=5, annual_rate_pct=5.0, start_date=pd.Period("2025-01", freq="M")
        )
        schedule, _ = loan.amortization_schedule
        assert schedule.index[0] == pd.Period("2025-01", freq="M")
        assert schedule.index[-1] == pd.Period("2029-12", freq="M")

    def test_annual_debt_service_property(self):
        loan = LoanAmortization(loan_amount=3_500_000, term=30, annual_rate_pct=5.5)
        assert loan.annual_debt_service == pytest.approx(238_471.38, abs=1.0)
