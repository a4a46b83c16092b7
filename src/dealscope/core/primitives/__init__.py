# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
dealscope Core Primitives

Building blocks shared by every layer: the immutable base model, enums,
settings, the Result container, date helpers and numeric validation.
"""

from .clock import (
    AVERAGE_MONTH_DAYS,
    AVERAGE_YEAR_DAYS,
    SIMPLE_MONTH_DAYS,
    add_days,
    months_between,
    months_remaining,
    resolve_now,
    to_datetime,
    years_between,
)
from .enums import (
    AnalysisFlagEnum,
    AssessmentLevelEnum,
    BuildingClassEnum,
    CenterTypeEnum,
    ComponentTypeEnum,
    IndustrialPropertyTypeEnum,
    MetricEnum,
    PriorityEnum,
    PropertyTypeEnum,
    RetailCategoryEnum,
    RiskLevelEnum,
    UnitStatusEnum,
    UnitTypeEnum,
)
from .model import CamelModel, Model, to_legacy_camel
from .result import Result
from .settings import (
    DEFAULT_SETTINGS,
    AssessmentThresholds,
    EngineSettings,
    ReturnSettings,
    TimeSettings,
)
from .types import PositiveFloat, PositiveInt
from .validation import first_present, is_present, to_number

__all__ = [
    "AVERAGE_MONTH_DAYS",
    "AVERAGE_YEAR_DAYS",
    "DEFAULT_SETTINGS",
    "SIMPLE_MONTH_DAYS",
    "AnalysisFlagEnum",
    "AssessmentLevelEnum",
    "AssessmentThresholds",
    "CamelModel",
    "BuildingClassEnum",
    "CenterTypeEnum",
    "ComponentTypeEnum",
    "EngineSettings",
    "IndustrialPropertyTypeEnum",
    "MetricEnum",
    "Model",
    "PositiveFloat",
    "PositiveInt",
    "PriorityEnum",
    "PropertyTypeEnum",
    "Result",
    "RetailCategoryEnum",
    "ReturnSettings",
    "RiskLevelEnum",
    "TimeSettings",
    "UnitStatusEnum",
    "UnitTypeEnum",
    "add_days",
    "first_present",
    "is_present",
    "months_between",
    "months_remaining",
    "resolve_now",
    "to_datetime",
    "to_legacy_camel",
    "to_number",
    "years_between",
]
