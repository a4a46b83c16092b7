# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Exception hierarchy for dealscope.

Strict-mode calculators raise ``InvalidArgumentError``. It subclasses
``ValueError`` so callers that already catch ``ValueError`` keep working.
"""

from __future__ import annotations


class DealScopeError(Exception):
    """Base class for all dealscope errors."""


class InvalidArgumentError(DealScopeError, ValueError):
    """A calculator received an argument outside its valid domain."""


class PackageNotFoundError(DealScopeError, KeyError):
    """No handler is registered for the requested package identifier."""

    def __init__(self, package_id: str):
        self.package_id = package_id
        super().__init__(f"Unknown package ID: {package_id}")

    def __str__(self) -> str:
        return self.args[0]


__all__ = ["DealScopeError", "InvalidArgumentError", "PackageNotFoundError"]
