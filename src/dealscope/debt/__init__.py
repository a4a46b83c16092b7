# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Debt service helpers used by DSCR and breakeven occupancy.
"""

from .amortization import LoanAmortization, annual_debt_service, monthly_payment

__all__ = ["LoanAmortization", "annual_debt_service", "monthly_payment"]
