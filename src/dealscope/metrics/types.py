# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Metric selection and result types.
"""

from __future__ import annotations

from typing import Any, Dict, Iterable, List, Mapping, Optional, Union

from pydantic import Field

from ..core.bundle import PackageBundleResult
from ..core.primitives import CamelModel, MetricEnum, Model, PropertyTypeEnum


class MetricSelection(Model):
    """
    Which metrics and analyses a caller wants computed.

    ``flags`` maps a metric or analysis-flag name to a boolean. Names are
    plain strings so asset analysis flags can ride along with metric names.
    """

    flags: Dict[str, bool] = Field(default_factory=dict)

    @classmethod
    def from_any(
        cls, selection: Union["MetricSelection", Mapping[str, Any], Iterable[str], None]
    ) -> "MetricSelection":
        """Build from a selection, a name-to-bool mapping, or an iterable of names."""
        if selection is None:
            return cls()
        if isinstance(selection, MetricSelection):
            return selection
        if isinstance(selection, Mapping):
            return cls(flags={_name(key): bool(value) for key, value in selection.items()})
        return cls(flags={_name(key): True for key in selection})

    @classmethod
    def all_core(cls) -> "MetricSelection":
        return cls(flags={metric.value: True for metric in MetricEnum.core()})

    def is_selected(self, name: Union[str, MetricEnum]) -> bool:
        return self.flags.get(_name(name), False)

    @property
    def selected(self) -> List[str]:
        return [name for name, enabled in self.flags.items() if enabled]


def _name(key: Union[str, MetricEnum]) -> str:
    return key.value if isinstance(key, MetricEnum) else str(key)


class TenantSales(CamelModel):
    name: str
    sales_per_sf: float


class SalesPerSFResult(CamelModel):
    """Average retail sales per square foot with a per-tenant breakdown."""

    average: float
    by_tenant: List[TenantSales]


class ClearHeightAnalysis(CamelModel):
    """Industrial price per SF with clear-height classification."""

    price_per_sf: float
    clear_height_category: str
    estimated_premium: str


class RevenuePerUnitResult(CamelModel):
    """Multifamily revenue per unit with an optional market comparison."""

    revenue_per_unit: float
    annualized_revenue: float
    market_comparison: Optional[str] = None


class AssetDataRequirements(CamelModel):
    """Whether the facts carry the minimum data for asset-level analysis."""

    is_valid: bool
    missing_fields: List[str] = Field(default_factory=list)
    recommendations: List[str] = Field(default_factory=list)


class AssetAnalysis(CamelModel):
    """Asset-level analysis attached to a batch result."""

    property_type: PropertyTypeEnum
    available_functions: List[str]
    data_validation: AssetDataRequirements
    results: Dict[str, Any] = Field(default_factory=dict)


class ComputedMetrics(CamelModel):
    """
    Sparse batch result.

    A field left unset was not requested. A requested metric that could not
    be computed stays ``None`` and has an entry in ``validation_errors``.
    """

    cap_rate: Optional[float] = None
    cash_on_cash: Optional[float] = None
    dscr: Optional[float] = None
    ltv: Optional[float] = None
    grm: Optional[float] = None
    price_per_sf: Optional[float] = None
    price_per_unit: Optional[float] = None
    egi: Optional[float] = None
    breakeven: Optional[float] = None
    irr: Optional[float] = None
    roi: Optional[float] = None
    effective_rent_psf: Optional[float] = None
    occupancy_cost_ratio: Optional[float] = None

    walt: Optional[float] = None
    simple_walt: Optional[float] = None
    sales_per_sf: Optional[SalesPerSFResult] = None
    clear_height_analysis: Optional[ClearHeightAnalysis] = None
    industrial_metrics: Optional[ClearHeightAnalysis] = None
    revenue_per_unit: Optional[RevenuePerUnitResult] = None
    multifamily_metrics: Optional[RevenuePerUnitResult] = None

    validation_errors: Dict[str, str] = Field(default_factory=dict)
    asset_analysis: Optional[AssetAnalysis] = None
    package: Optional[PackageBundleResult] = None
    package_error: Optional[str] = None

    def value_of(self, metric: Union[str, MetricEnum]) -> Any:
        """Look up a metric by its selection name (``"capRate"``) or enum."""
        name = _name(metric)
        fields = type(self).model_fields
        for field_name, info in fields.items():
            if field_name == name or info.alias == name:
                return getattr(self, field_name)
        return None

    def to_dict(self) -> dict:
        data = super().to_dict()
        if not self.validation_errors:
            data.pop("validationErrors", None)
        return data


__all__ = [
    "AssetAnalysis",
    "AssetDataRequirements",
    "ClearHeightAnalysis",
    "ComputedMetrics",
    "MetricSelection",
    "RevenuePerUnitResult",
    "SalesPerSFResult",
    "TenantSales",
]
