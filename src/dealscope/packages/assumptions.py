# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Placeholder bookkeeping for package handlers.

Handlers need market inputs the facts rarely carry. Every placeholder a handler
substitutes goes through an ``AssumptionLog`` so the bundle it returns lists
what was assumed.
"""

from __future__ import annotations

from typing import Any, Dict, List

from ..core.bundle import AssumedInput, PackageBundleResult
from ..core.primitives.validation import is_present

PLACEHOLDER_REASON = "Not supplied; placeholder market assumption"


class AssumptionLog:
    """Collects ``AssumedInput`` entries while a handler assembles its inputs."""

    def __init__(self) -> None:
        self._entries: List[AssumedInput] = []

    def assume(self, name: str, value: Any, reason: str = PLACEHOLDER_REASON) -> Any:
        """Record ``value`` as a placeholder for ``name`` and return it."""
        if not any(entry.name == name for entry in self._entries):
            self._entries.append(AssumedInput(name=name, value=_plain(value), reason=reason))
        return value

    def supplied_or(self, name: str, supplied: Any, default: Any, reason: str = PLACEHOLDER_REASON) -> Any:
        """Return ``supplied`` when present, else record and return ``default``."""
        if is_present(supplied):
            return supplied
        return self.assume(name, default, reason)

    @property
    def entries(self) -> List[AssumedInput]:
        return list(self._entries)

    def bundle(self, package_id: Any, results: Dict[str, Any]) -> PackageBundleResult:
        """Wrap handler output and the collected assumptions in a bundle."""
        return PackageBundleResult(
            package_id=getattr(package_id, "value", str(package_id)),
            results={key: _plain(value) for key, value in results.items()},
            assumptions=self.entries,
        )


def _plain(value: Any) -> Any:
    """JSON-friendly form of models and containers of models."""
    if hasattr(value, "to_dict"):
        return value.to_dict()
    if hasattr(value, "model_dump"):
        return value.model_dump(mode="json")
    if isinstance(value, dict):
        return {key: _plain(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [_plain(item) for item in value]
    return value


__all__ = ["PLACEHOLDER_REASON", "AssumptionLog"]
