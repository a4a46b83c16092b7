# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Mixed-use component adapter.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Any, Iterable, List, Optional

from ..asset.mixed_use.records import MixedUseComponent
from ..core.primitives import ComponentTypeEnum, resolve_now, to_number
from .aliases import AliasTable, alias, resolve_table

logger = logging.getLogger(__name__)

COMPONENT_ALIASES: AliasTable = {
    "type": alias("type", "componentType", "use", default="Office", kind="text"),
    "square_footage": alias("squareFootage", "sf", "square_footage", default=10_000.0, kind="number", positive=True),
    "floors": alias("floors", default=[1], kind="list"),
    "separate_entrance": alias("separateEntrance", default=False, kind="bool"),
    "dedicated_elevators": alias("dedicatedElevators", default=False, kind="bool"),
    "percent_of_total": alias("percentOfTotal", default=25.0, kind="number", positive=True),
    "noi": alias("noi", "NOI", default=100_000.0, kind="number", positive=True),
    "cap_rate": alias("capRate", "cap_rate", default=6.0, kind="number", positive=True),
    "rent_psf": alias("rentPSF", "rent_psf", default=30.0, kind="number", positive=True),
    "occupancy": alias("occupancy", default=90.0, kind="number", positive=True),
    "separate_management": alias("separateManagement", default=False, kind="bool"),
    "pro_rata_expenses": alias("proRataExpenses", default=50_000.0, kind="number", positive=True),
    "direct_expenses": alias("directExpenses", default=20_000.0, kind="number", positive=True),
}


def _component_type(text: str) -> ComponentTypeEnum:
    for member in ComponentTypeEnum:
        if member.value.lower() == text.strip().lower():
            return member
    logger.debug(f"Unrecognized component type {text!r}; treating as Other")
    return ComponentTypeEnum.OTHER


def _floors(values: List[Any]) -> List[int]:
    floors = [int(number) for number in (to_number(value) for value in values) if number is not None]
    return floors or [1]


def adapt_mixed_use_component(raw: Any, now: datetime) -> MixedUseComponent:
    """Build one canonical component from an arbitrary raw entry."""
    values = resolve_table(raw, COMPONENT_ALIASES, now)
    values["type"] = _component_type(values["type"])
    values["floors"] = _floors(values["floors"])
    return MixedUseComponent(**values)


def adapt_mixed_use_components(
    entries: Optional[Iterable[Any]], now: Optional[datetime] = None
) -> List[MixedUseComponent]:
    """Convert raw component entries to canonical records. Never raises."""
    if not isinstance(entries, (list, tuple)):
        return []
    moment = resolve_now(now)
    return [adapt_mixed_use_component(raw, moment) for raw in entries]


__all__ = ["COMPONENT_ALIASES", "adapt_mixed_use_component", "adapt_mixed_use_components"]
