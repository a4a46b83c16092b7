# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

from .analysis import (
    analyze_building_functionality,
    analyze_cold_storage,
    analyze_last_mile_facility,
    analyze_location_logistics,
)
from .records import IndustrialBuildingSpecs, IndustrialTenant, LocationMetrics

__all__ = [
    "IndustrialBuildingSpecs",
    "IndustrialTenant",
    "LocationMetrics",
    "analyze_building_functionality",
    "analyze_cold_storage",
    "analyze_last_mile_facility",
    "analyze_location_logistics",
]
