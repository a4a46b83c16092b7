# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Package bundle result types shared by the router and the batch engine.
"""

from __future__ import annotations

from typing import Any, Dict, List

from pydantic import Field

from .primitives.model import CamelModel


class AssumedInput(CamelModel):
    """A placeholder value substituted because the facts did not supply it."""

    name: str = Field(..., description="Dotted path of the substituted input")
    value: Any
    reason: str = "Not supplied; placeholder market assumption"


class PackageBundleResult(CamelModel):
    """
    Output of one package run.

    ``results`` is keyed by descriptive names and its shape depends on the
    package. ``assumptions`` lists every placeholder input the handler used.
    """

    package_id: str
    results: Dict[str, Any] = Field(default_factory=dict)
    assumptions: List[AssumedInput] = Field(default_factory=list)

    @property
    def has_assumptions(self) -> bool:
        return bool(self.assumptions)

    def assumed(self, name: str) -> bool:
        return any(item.name == name for item in self.assumptions)


__all__ = ["AssumedInput", "PackageBundleResult"]
