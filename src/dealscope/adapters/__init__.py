# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Record adapters: permissive raw dicts in, fully-defaulted canonical records out.

Adapters are total. Every entry of an input list yields one record, missing
or malformed fields take documented defaults, and nothing raises.
"""

from .industrial import adapt_industrial_tenant, adapt_industrial_tenants
from .mixed_use import adapt_mixed_use_component, adapt_mixed_use_components
from .multifamily import adapt_unit, adapt_units, synthesize_units
from .office import adapt_office_tenant, adapt_office_tenants
from .retail import adapt_retail_tenant, adapt_retail_tenants

__all__ = [
    "adapt_industrial_tenant",
    "adapt_industrial_tenants",
    "adapt_mixed_use_component",
    "adapt_mixed_use_components",
    "adapt_office_tenant",
    "adapt_office_tenants",
    "adapt_retail_tenant",
    "adapt_retail_tenants",
    "adapt_unit",
    "adapt_units",
    "synthesize_units",
]
