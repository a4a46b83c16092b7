# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Alias Tables

Raw tenant, unit and component entries arrive from callers with unknown
provenance. An alias table declares, per canonical field, the ordered source
keys that may carry the value and the default used when none does. Resolving
a table never raises: unreadable values fall through to the next alias and
finally to the default.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Any, Dict, Literal, Mapping, Optional, Tuple

from pydantic import BaseModel

from ..core.primitives import Model, add_days, to_datetime, to_number

logger = logging.getLogger(__name__)

FieldKind = Literal["number", "int", "text", "bool", "date", "list", "dict", "any"]


class AliasField(Model):
    """
    One canonical field: accepted source keys in priority order plus a default.

    Attributes:
        keys: Source keys checked in order; the first present value wins
        default: Value used when no key is present
        kind: Coercion applied to the found value
        positive: For numbers, treat values <= 0 as absent
        default_offset_days: For dates, default to ``now`` plus this many days
    """

    keys: Tuple[str, ...]
    default: Any = None
    kind: FieldKind = "any"
    positive: bool = False
    default_offset_days: Optional[float] = None


def alias(
    *keys: str,
    default: Any = None,
    kind: FieldKind = "any",
    positive: bool = False,
    default_offset_days: Optional[float] = None,
) -> AliasField:
    """Shorthand constructor used by the per-record alias tables."""
    return AliasField(
        keys=tuple(keys),
        default=default,
        kind=kind,
        positive=positive,
        default_offset_days=default_offset_days,
    )


AliasTable = Dict[str, AliasField]


def as_mapping(raw: Any) -> Mapping[str, Any]:
    """View any raw entry as a mapping. Unsupported shapes become empty."""
    if isinstance(raw, Mapping):
        return raw
    if isinstance(raw, BaseModel):
        data = raw.model_dump(by_alias=True)
        data.update(raw.model_dump())
        return data
    if hasattr(raw, "__dict__"):
        return {key: value for key, value in vars(raw).items() if not key.startswith("_")}
    logger.debug(f"Unsupported entry of type {type(raw).__name__}; using defaults")
    return {}


def _coerce(value: Any, field: AliasField) -> Tuple[bool, Any]:
    """Return ``(accepted, coerced)`` for one candidate value."""
    if value is None or (isinstance(value, str) and not value.strip()):
        return False, None
    kind = field.kind
    if kind in ("number", "int"):
        number = to_number(value)
        if number is None:
            return False, None
        if field.positive and number <= 0:
            return False, None
        return True, int(number) if kind == "int" else number
    if kind == "text":
        return True, str(value).strip()
    if kind == "bool":
        if isinstance(value, bool):
            return True, value
        if isinstance(value, str):
            return True, value.strip().lower() in ("true", "yes", "y", "1")
        if isinstance(value, (int, float)):
            return True, value != 0
        return False, None
    if kind == "date":
        parsed = to_datetime(value)
        return (parsed is not None), parsed
    if kind == "list":
        if isinstance(value, (list, tuple)):
            return True, list(value)
        return False, None
    if kind == "dict":
        if isinstance(value, Mapping):
            return True, dict(value)
        return False, None
    return True, value


def resolve_field(raw: Mapping[str, Any], field: AliasField, now: datetime) -> Any:
    """First acceptable value across ``field.keys``, else the field default."""
    for key in field.keys:
        if key not in raw:
            continue
        accepted, value = _coerce(raw[key], field)
        if accepted:
            return value
    if field.kind == "date" and field.default_offset_days is not None:
        return add_days(now, field.default_offset_days)
    if isinstance(field.default, (list, dict)):
        return type(field.default)(field.default)
    return field.default


def resolve_table(raw: Any, table: AliasTable, now: datetime) -> Dict[str, Any]:
    """Resolve every field of ``table`` against one raw entry."""
    mapping = as_mapping(raw)
    return {name: resolve_field(mapping, field, now) for name, field in table.items()}


__all__ = [
    "AliasField",
    "AliasTable",
    "alias",
    "as_mapping",
    "resolve_field",
    "resolve_table",
]
