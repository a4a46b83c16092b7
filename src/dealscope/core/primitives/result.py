# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Success-or-error container shared by the batch and strict calculation paths.

Calculators return a ``Result``. The batch engine reads ``error`` and records it
as a validation message; the strict wrappers call ``unwrap()`` which raises.
"""

from __future__ import annotations

from typing import Generic, Optional, TypeVar

from pydantic import model_validator

from ..exceptions import InvalidArgumentError
from .model import Model

T = TypeVar("T")


class Result(Model, Generic[T]):
    """Either a computed ``value`` or an ``error`` message, never both."""

    value: Optional[T] = None
    error: Optional[str] = None

    @model_validator(mode="after")
    def _exclusive(self) -> "Result[T]":
        if self.error is not None and self.value is not None:
            raise ValueError("Result cannot carry both a value and an error")
        return self

    @classmethod
    def ok(cls, value: T) -> "Result[T]":
        return cls(value=value)

    @classmethod
    def fail(cls, error: str) -> "Result[T]":
        return cls(error=error)

    @property
    def is_ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> T:
        """Return the value or raise ``InvalidArgumentError`` with the error message."""
        if self.error is not None:
            raise InvalidArgumentError(self.error)
        return self.value
