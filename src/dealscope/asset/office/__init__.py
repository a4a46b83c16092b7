# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

from .analysis import (
    analyze_building_operations,
    analyze_lease_economics,
    analyze_lease_expirations,
    analyze_lease_npv,
    analyze_market_positioning,
    analyze_office_market_position,
    analyze_space_efficiency,
    analyze_tenant_credit_risk,
    analyze_tenant_financial_health,
    calculate_enhanced_walt,
    calculate_lease_npv,
    calculate_real_estate_option_value,
    calculate_retention_probability,
    calculate_space_efficiency_score,
    determine_market_cycle,
    get_industry_outlook,
    get_wfh_impact,
)
from .records import MarketIntelligence, OfficePropertyProfile, OfficeSuite, OfficeTenant

__all__ = [
    "MarketIntelligence",
    "OfficePropertyProfile",
    "OfficeSuite",
    "OfficeTenant",
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
