# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

from __future__ import annotations

from pydantic import BaseModel, ConfigDict

_ACRONYMS = {"noi", "psf", "sf", "gla", "far", "ocr", "npv", "ti", "hvac"}


def to_legacy_camel(name: str) -> str:
    """
    Convert a snake_case field name to the camelCase key used at the boundary.

    Known acronyms are upper-cased so ``current_noi`` maps to ``currentNOI``
    and ``average_rent_psf`` to ``averageRentPSF``.
    """
    head, *tail = name.split("_")
    parts = [head]
    for token in tail:
        parts.append(token.upper() if token in _ACRONYMS else token.capitalize())
    return "".join(parts)


class Model(BaseModel):
    """Base Pydantic model with common configuration.

    Every record, result and settings object in dealscope is immutable.
    Operations return new values instead of mutating their inputs.
    """

    model_config = ConfigDict(
        arbitrary_types_allowed=True,
        frozen=True,
        extra="forbid",  # Catches typos in field names immediately
    )


class CamelModel(Model):
    """Model that accepts and serializes the camelCase boundary names."""

    model_config = ConfigDict(
        alias_generator=to_legacy_camel,
        populate_by_name=True,
    )

    def to_dict(self) -> dict:
        """Sparse camelCase mapping with unset optional fields dropped."""
        return self.model_dump(by_alias=True, exclude_none=True, mode="json")
