# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

from .analysis import (
    analyze_co_tenancy,
    analyze_expense_recovery,
    analyze_percentage_rent,
    analyze_redevelopment_potential,
    analyze_sales_performance,
    analyze_trade_area,
)
from .records import RetailTenant, SalesRecord

__all__ = [
    "RetailTenant",
    "SalesRecord",
    "analyze_co_tenancy",
    "analyze_expense_recovery",
    "analyze_percentage_rent",
    "analyze_redevelopment_potential",
    "analyze_sales_performance",
    "analyze_trade_area",
]
