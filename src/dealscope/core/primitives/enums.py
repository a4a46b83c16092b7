# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

from __future__ import annotations

from enum import Enum
from typing import List


class PropertyTypeEnum(str, Enum):
    """Commercial property types supported by the scoring engines."""

    OFFICE = "office"
    RETAIL = "retail"
    INDUSTRIAL = "industrial"
    MULTIFAMILY = "multifamily"
    MIXED_USE = "mixed-use"


class MetricEnum(str, Enum):
    """
    Metric identifiers accepted in a metric selection.

    Values keep the camelCase names used by callers when selecting metrics,
    so ``MetricEnum("capRate")`` and ``MetricEnum.CAP_RATE`` are equivalent.
    """

    # Core financial metrics
    CAP_RATE = "capRate"
    CASH_ON_CASH = "cashOnCash"
    DSCR = "dscr"
    LTV = "ltv"
    GRM = "grm"
    PRICE_PER_SF = "pricePerSF"
    PRICE_PER_UNIT = "pricePerUnit"
    EGI = "egi"
    BREAKEVEN = "breakeven"
    IRR = "irr"
    ROI = "roi"
    EFFECTIVE_RENT_PSF = "effectiveRentPSF"
    OCCUPANCY_COST_RATIO = "occupancyCostRatio"

    # Typed, property-specific metrics
    WALT = "walt"
    SIMPLE_WALT = "simpleWalt"
    SALES_PER_SF = "salesPerSF"
    CLEAR_HEIGHT_ANALYSIS = "clearHeightAnalysis"
    INDUSTRIAL_METRICS = "industrialMetrics"
    REVENUE_PER_UNIT = "revenuePerUnit"
    MULTIFAMILY_METRICS = "multifamilyMetrics"

    @classmethod
    def core(cls) -> List["MetricEnum"]:
        """Metrics produced by the fixed formula set."""
        return [
            cls.CAP_RATE,
            cls.CASH_ON_CASH,
            cls.DSCR,
            cls.LTV,
            cls.GRM,
            cls.PRICE_PER_SF,
            cls.PRICE_PER_UNIT,
            cls.EGI,
            cls.BREAKEVEN,
            cls.IRR,
            cls.ROI,
            cls.EFFECTIVE_RENT_PSF,
            cls.OCCUPANCY_COST_RATIO,
        ]

    @property
    def label(self) -> str:
        return _METRIC_LABELS[self]


_METRIC_LABELS = {
    MetricEnum.CAP_RATE: "Cap Rate",
    MetricEnum.CASH_ON_CASH: "Cash-on-Cash Return",
    MetricEnum.DSCR: "DSCR",
    MetricEnum.LTV: "LTV",
    MetricEnum.GRM: "GRM",
    MetricEnum.PRICE_PER_SF: "Price per SF",
    MetricEnum.PRICE_PER_UNIT: "Price per Unit",
    MetricEnum.EGI: "Effective Gross Income",
    MetricEnum.BREAKEVEN: "Breakeven Occupancy",
    MetricEnum.IRR: "IRR",
    MetricEnum.ROI: "ROI",
    MetricEnum.EFFECTIVE_RENT_PSF: "Effective Rent per SF",
    MetricEnum.OCCUPANCY_COST_RATIO: "Occupancy Cost Ratio",
    MetricEnum.WALT: "WALT",
    MetricEnum.SIMPLE_WALT: "Simple WALT",
    MetricEnum.SALES_PER_SF: "Sales per SF",
    MetricEnum.CLEAR_HEIGHT_ANALYSIS: "Clear Height Analysis",
    MetricEnum.INDUSTRIAL_METRICS: "Industrial Metrics",
    MetricEnum.REVENUE_PER_UNIT: "Revenue per Unit",
    MetricEnum.MULTIFAMILY_METRICS: "Multifamily Metrics",
}


class AnalysisFlagEnum(str, Enum):
    """
    Selection flags that switch on asset-level analyses in the batch engine.

    Each flag is only honoured for the property type it belongs to.
    """

    # Office
    TENANT_FINANCIAL_HEALTH = "tenantFinancialHealth"
    LEASE_VALUATION = "leaseValuation"
    OPERATIONAL_EFFICIENCY = "operationalEfficiency"
    MARKET_POSITIONING = "marketPositioning"
    # Retail
    TENANT_HEALTH = "tenantHealth"
    CO_TENANCY_RISK = "coTenancyRisk"
    TRADE_AREA_ANALYSIS = "tradeAreaAnalysis"
    # Industrial
    FUNCTIONAL_SCORE = "functionalScore"
    LOCATION_SCORE = "locationScore"
    # Multifamily
    REVENUE_METRICS = "revenueMetrics"
    MARKET_POSITION = "marketPosition"


class AssessmentLevelEnum(str, Enum):
    """Qualitative rating assigned to a metric or to a whole deal."""

    EXCELLENT = "Excellent"
    GOOD = "Good"
    FAIR = "Fair"
    POOR = "Poor"
    INSUFFICIENT = "Insufficient"


class RiskLevelEnum(str, Enum):
    """Four-level risk label used by the scoring engines."""

    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"
    CRITICAL = "Critical"


class PriorityEnum(str, Enum):
    """Priority attached to recommendations and remediation items."""

    HIGH = "High"
    MEDIUM = "Medium"
    LOW = "Low"


class RetailCategoryEnum(str, Enum):
    ANCHOR = "Anchor"
    JUNIOR_ANCHOR = "Junior Anchor"
    INLINE = "Inline"
    PAD = "Pad"
    KIOSK = "Kiosk"


class CenterTypeEnum(str, Enum):
    """Retail center formats with distinct sales benchmarks."""

    REGIONAL_MALL = "Regional Mall"
    COMMUNITY = "Community"
    NEIGHBORHOOD = "Neighborhood"
    POWER = "Power"
    STRIP = "Strip"
    LIFESTYLE = "Lifestyle"
    OUTLET = "Outlet"


class IndustrialPropertyTypeEnum(str, Enum):
    """Industrial building formats with distinct functional thresholds."""

    WAREHOUSE = "Warehouse"
    DISTRIBUTION = "Distribution"
    MANUFACTURING = "Manufacturing"
    FLEX = "Flex"
    COLD_STORAGE = "Cold Storage"
    LAST_MILE = "Last Mile"


class BuildingClassEnum(str, Enum):
    CLASS_A = "A"
    CLASS_B = "B"
    CLASS_C = "C"


class ComponentTypeEnum(str, Enum):
    """Uses that can make up a mixed-use property."""

    OFFICE = "Office"
    RETAIL = "Retail"
    RESIDENTIAL = "Residential"
    HOTEL = "Hotel"
    PARKING = "Parking"
    OTHER = "Other"


class UnitTypeEnum(str, Enum):
    STUDIO = "Studio"
    ONE_BR = "1BR"
    TWO_BR = "2BR"
    THREE_BR = "3BR"
    FOUR_BR = "4BR"


class UnitStatusEnum(str, Enum):
    OCCUPIED = "Occupied"
    VACANT = "Vacant"
    NOTICE = "Notice"
    MODEL = "Model"
    DOWN = "Down"
