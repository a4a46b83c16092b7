# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Shared fixtures for dealscope tests.

Every time-relative test uses the fixed ``now`` below so results are
reproducible.
"""

from __future__ import annotations

from datetime import datetime, timedelta
from typing import Any, Dict, List

import pytest

FIXED_NOW = datetime(2025, 1, 1)


def days_from_now(days: float) -> str:
    """ISO date string ``days`` after the fixed test clock."""
    return (FIXED_NOW + timedelta(days=days)).isoformat()


@pytest.fixture
def now() -> datetime:
    return FIXED_NOW


@pytest.fixture
def sample_facts() -> Dict[str, Any]:
    """A fully financed office acquisition with every core metric input."""
    return {
        "propertyType": "office",
        "purchasePrice": 5_000_000,
        "currentNOI": 400_000,
        "projectedNOI": 450_000,
        "grossIncome": 500_000,
        "operatingExpenses": 150_000,
        "annualCashFlow": 160_000,
        "totalInvestment": 1_500_000,
        "occupancyRate": 95,
        "loanAmount": 3_500_000,
        "interestRate": 5.5,
        "loanTerm": 30,
        "squareFootage": 50_000,
        "numberOfUnits": 100,
        "averageRentPSF": 32,
    }


@pytest.fixture
def office_tenant_dicts() -> List[Dict[str, Any]]:
    """Two tenants: $600k expiring in 24 months and $400k in 48 months (30-day months)."""
    return [
        {
            "name": "Acme Legal",
            "industry": "Legal",
            "creditRating": "A",
            "rentableSquareFeet": 20_000,
            "annualRent": 600_000,
            "expirationDate": days_from_now(720),
        },
        {
            "name": "Beacon Tech",
            "industry": "Technology",
            "creditRating": "BBB",
            "rentableSquareFeet": 12_000,
            "annualRent": 400_000,
            "expirationDate": days_from_now(1440),
        },
    ]


@pytest.fixture
def retail_tenant_dicts() -> List[Dict[str, Any]]:
    """An inline tenant whose required grocery anchor is not in the center."""
    return [
        {
            "name": "Fashion Outlet",
            "category": "Inline",
            "merchandiseType": "Apparel",
            "squareFootage": 10_000,
            "baseRentPSF": 50,
            "annualSales": 3_000_000,
            "leaseEndDate": days_from_now(1800),
            "coTenancy": {"required": ["Fresh Grocer"], "remedy": "Rent Reduction"},
        },
        {
            "name": "Corner Cafe",
            "category": "Restaurant",
            "merchandiseType": "Food",
            "squareFootage": 2_000,
            "baseRentPSF": 40,
            "annualSales": 800_000,
            "leaseEndDate": days_from_now(900),
            "essentialService": True,
        },
    ]
