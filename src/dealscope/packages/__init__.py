# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Named analysis packages and the router that runs them.

Importing this package registers every handler.
"""

from . import industrial, mixed_use, multifamily, office, quick, retail  # noqa: F401
from .assumptions import AssumptionLog
from .catalog import (
    CalculationPackage,
    PackageDataCheck,
    PackageRecommendation,
    get_property_packages,
    recommend_packages,
    required_fields_for_metrics,
    validate_data_for_package,
)
from .registry import (
    PACKAGE_REGISTRY,
    PackageId,
    get_package_handler,
    register_package,
    run_package,
)

__all__ = [
    "AssumptionLog",
    "CalculationPackage",
    "PACKAGE_REGISTRY",
    "PackageDataCheck",
    "PackageId",
    "PackageRecommendation",
    "get_package_handler",
    "get_property_packages",
    "recommend_packages",
    "register_package",
    "required_fields_for_metrics",
    "run_package",
    "validate_data_for_package",
]
