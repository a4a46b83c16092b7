# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
dealscope core: exceptions, primitives and the property facts record.
"""

from .exceptions import DealScopeError, InvalidArgumentError, PackageNotFoundError
from .facts import (
    GenericFacts,
    IndustrialFacts,
    MixedUseFacts,
    MultifamilyFacts,
    OfficeFacts,
    PropertyFacts,
    RetailFacts,
)

__all__ = [
    "DealScopeError",
    "GenericFacts",
    "IndustrialFacts",
    "InvalidArgumentError",
    "MixedUseFacts",
    "MultifamilyFacts",
    "OfficeFacts",
    "PackageNotFoundError",
    "PropertyFacts",
    "RetailFacts",
]
