# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

import importlib
import logging

"""
dealscope - Commercial Real Estate Deal Screening

Fast screening metrics for acquisitions: a gated batch engine for the core
ratios, asset-specific scoring engines for office, retail, industrial,
multifamily and mixed-use properties, named analysis packages, and a
qualitative deal assessment.

Key Entry Points:
- dealscope.compute_metrics() - Gated batch metrics with explanations
- dealscope.assess_deal() - Overall rating from computed metrics
- dealscope.run_package() - Run a named analysis package
- dealscope.metrics.MetricCalculators - Strict calculators that raise

Example Usage:
    ```python
    from dealscope import assess_deal, compute_metrics

    facts = {
        "propertyType": "office",
        "purchasePrice": 5_000_000,
        "currentNOI": 400_000,
        "loanAmount": 3_500_000,
        "interestRate": 5.5,
        "loanTerm": 30,
    }
    metrics = compute_metrics(facts, ["capRate", "dscr", "ltv"])
    assessment = assess_deal(metrics, ["capRate", "dscr"])
    print(assessment.overall, assessment.recommendation)
    ```
"""

logging.getLogger(__name__).addHandler(logging.NullHandler())


# Public API surface (lazy-loaded on first attribute access)
__all__ = [  # noqa: F822 - lazy loading
    "adapters",
    "assessment",
    "asset",
    "core",
    "debt",
    "metrics",
    "packages",
    "PropertyFacts",
    "MetricSelection",
    "assess_deal",
    "compute_metrics",
    "run_package",
]


_LAZY_MODULES = {
    "adapters": "dealscope.adapters",
    "assessment": "dealscope.assessment",
    "asset": "dealscope.asset",
    "core": "dealscope.core",
    "debt": "dealscope.debt",
    "metrics": "dealscope.metrics",
    "packages": "dealscope.packages",
}

_LAZY_ATTRIBUTES = {
    "PropertyFacts": "dealscope.core",
    "MetricSelection": "dealscope.metrics",
    "assess_deal": "dealscope.assessment",
    "compute_metrics": "dealscope.metrics",
    "run_package": "dealscope.packages",
}


def __getattr__(name: str):
    module_path = _LAZY_MODULES.get(name)
    if module_path is not None:
        module = importlib.import_module(module_path)
        globals()[name] = module
        return module
    module_path = _LAZY_ATTRIBUTES.get(name)
    if module_path is None:
        raise AttributeError(f"module 'dealscope' has no attribute '{name}'")
    value = getattr(importlib.import_module(module_path), name)
    globals()[name] = value
    return value
