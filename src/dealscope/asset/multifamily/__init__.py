# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

from .analysis import (
    analyze_market_position,
    analyze_operating_performance,
    analyze_revenue_performance,
    analyze_value_add_potential,
    calculate_amenity_score,
)
from .records import ApartmentProperty, ApartmentUnit

__all__ = [
    "ApartmentProperty",
    "ApartmentUnit",
    "analyze_market_position",
    "analyze_operating_performance",
    "analyze_revenue_performance",
    "analyze_value_add_potential",
    "calculate_amenity_score",
]
