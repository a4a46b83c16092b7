# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

from .analysis import (
    analyze_cross_use_interactions,
    analyze_mixed_use_development,
    analyze_mixed_use_performance,
    analyze_operational_integration,
)
from .records import MixedUseComponent

__all__ = [
    "MixedUseComponent",
    "analyze_cross_use_interactions",
    "analyze_mixed_use_development",
    "analyze_mixed_use_performance",
    "analyze_operational_integration",
]
