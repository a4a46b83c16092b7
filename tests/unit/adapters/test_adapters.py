# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Unit tests for the raw-entry adapters.

Adapters are total: any list input yields one canonical record per entry,
missing or unreadable fields fall back to their defaults, and nothing raises.
"""

import copy
from datetime import timedelta

import pytest
from pydantic import BaseModel

from dealscope.adapters import (
    adapt_industrial_tenants,
    adapt_mixed_use_components,
    adapt_office_tenants,
    adapt_retail_tenants,
    adapt_units,
    synthesize_units,
)
from dealscope.core.primitives import ComponentTypeEnum, UnitTypeEnum

MALFORMED = [None, 42, "junk", {}, {"name": None, "annualRent": "n/a"}]
ADAPTERS = [
    adapt_office_tenants,
    adapt_retail_tenants,
    adapt_industrial_tenants,
    adapt_units,
    adapt_mixed_use_components,
]

# Clause sub-records whose absence means the lease has no such clause
OPTIONAL_CLAUSES = {"kickout", "co_tenancy", "concession", "other_income"}


def unset_fields(record: BaseModel, prefix: str = "") -> list:
    """Dotted names of every field left as None, outside the optional clauses."""
    missing = []
    for name in type(record).model_fields:
        value = getattr(record, name)
        if value is None:
            if name not in OPTIONAL_CLAUSES:
                missing.append(prefix + name)
        elif isinstance(value, BaseModel):
            missing.extend(unset_fields(value, f"{prefix}{name}."))
        elif isinstance(value, list):
            for item in value:
                if isinstance(item, BaseModel):
                    missing.extend(unset_fields(item, f"{prefix}{name}[]."))
    return missing


class TestTotality:
    """Every adapter returns a same-length list for malformed input."""

    @pytest.mark.parametrize("adapter", ADAPTERS)
    def test_malformed_entries(self, adapter, now):
        records = adapter(MALFORMED, now)
        assert len(records) == len(MALFORMED)

    @pytest.mark.parametrize("adapter", ADAPTERS)
    def test_every_field_is_populated(self, adapter, now):
        for record in adapter(MALFORMED, now):
            assert unset_fields(record) == []

    def test_populated_with_clauses(self, now, retail_tenant_dicts):
        for record in adapt_retail_tenants(retail_tenant_dicts, now):
            assert unset_fields(record) == []

    @pytest.mark.parametrize("adapter", ADAPTERS)
    def test_input_is_not_mutated(self, adapter, now, office_tenant_dicts, retail_tenant_dicts):
        entries = office_tenant_dicts + retail_tenant_dicts + [{"amenities": {"pool": True}}, {"floors": [1, "2"]}]
        snapshot = copy.deepcopy(entries)
        adapter(entries, now)
        assert entries == snapshot

    @pytest.mark.parametrize("entries", [None, "tenants", 7, {"tenants": []}])
    def test_non_list_input_is_empty(self, entries, now):
        assert adapt_office_tenants(entries, now) == []
        assert adapt_units(entries, now) == []


class TestOfficeAdapter:
    def test_maps_common_aliases(self, now, office_tenant_dicts):
        acme, beacon = adapt_office_tenants(office_tenant_dicts, now)
        assert acme.tenant_name == "Acme Legal"
        assert acme.credit_rating == "A"
        assert acme.total_rentable_sf == 20_000
        assert acme.base_rent_schedule[0].annual_rent == 600_000
        assert acme.base_rent_schedule[0].monthly_rent == pytest.approx(50_000)
        assert acme.expiration_date == now + timedelta(days=720)
        assert beacon.lease_id == "lease-2"

    def test_defaults_for_empty_entry(self, now):
        (tenant,) = adapt_office_tenants([{}], now)
        assert tenant.tenant_name == "Unknown Tenant"
        assert tenant.credit_rating == "NR"
        assert tenant.commencement_date == now
        assert tenant.expiration_date == now + timedelta(days=365)
        # Annual rent falls back to rent PSF x rentable area
        assert tenant.base_rent_schedule[0].annual_rent == pytest.approx(30_000)
        assert tenant.base_year == now.year

    def test_numeric_strings_and_lowercase_rating(self, now):
        (tenant,) = adapt_office_tenants(
            [{"tenantName": "Cedar", "annualRent": "250,000", "creditRating": "bb"}], now
        )
        assert tenant.base_rent_schedule[0].annual_rent == 250_000
        assert tenant.credit_rating == "BB"

    def test_unparsable_date_uses_default(self, now):
        (tenant,) = adapt_office_tenants([{"leaseExpiration": "someday"}], now)
        assert tenant.expiration_date == now + timedelta(days=365)


class TestRetailAdapter:
    def test_sales_psf_and_breakpoint(self, now, retail_tenant_dicts):
        outlet, cafe = adapt_retail_tenants(retail_tenant_dicts, now)
        assert outlet.sales_psf == pytest.approx(300.0)
        # Natural breakpoint = base rent / percentage rate
        assert outlet.percentage_rent.natural_breakpoint == pytest.approx(500_000 / 0.06)
        assert outlet.co_tenancy.required == ["Fresh Grocer"]
        assert cafe.co_tenancy is None
        assert cafe.essential_service is True

    def test_zero_area_uses_default(self, now):
        (tenant,) = adapt_retail_tenants([{"squareFootage": 0}], now)
        assert tenant.square_footage == 1000.0
        assert tenant.sales_psf == 0.0

    def test_documented_defaults(self, now):
        (tenant,) = adapt_retail_tenants([{"naturalBreakpoint": 400_000}], now)
        assert tenant.credit_rating == "NR"
        assert tenant.reported_sales == 0.0
        assert tenant.cam_cap == 0.0
        assert tenant.radius == 0.0
        assert tenant.percentage_rent.artificial_breakpoint == 400_000
        assert tenant.kickout is None


class TestIndustrialAdapter:
    def test_defaults(self, now):
        (tenant,) = adapt_industrial_tenants([{"name": "Rapid Freight", "creditRating": "baa"}], now)
        assert tenant.tenant_name == "Rapid Freight"
        assert tenant.credit_rating == "BAA"
        assert tenant.base_rent_psf == 8.0
        assert tenant.square_footage == 10_000.0

    def test_documented_defaults(self, now):
        first, second = adapt_industrial_tenants([{}, {"suiteNumber": "B-200"}], now)
        assert first.credit_rating == "NR"
        assert first.naics_code == "000000"
        assert first.suite_number == "Suite 1"
        assert second.suite_number == "B-200"
        assert first.yard_space == 0.0


class TestUnitAdapter:
    def test_rent_fallbacks(self, now):
        rows = [{"unitType": "2br", "rent": 1_800}, {"marketRent": 1_650}, {}]
        first, second, third = adapt_units(rows, now)
        assert first.unit_type == UnitTypeEnum.TWO_BR
        assert first.market_rent == 1_800
        assert second.current_rent == 1_650
        assert third.current_rent == 1_500
        assert third.unit_number == "Unit 3"

    @pytest.mark.parametrize(
        "raw, expected",
        [("Studio", UnitTypeEnum.STUDIO), ("efficiency", UnitTypeEnum.STUDIO), ("Penthouse", UnitTypeEnum.FOUR_BR)],
    )
    def test_unit_type_normalization(self, now, raw, expected):
        (unit,) = adapt_units([{"unitType": raw}], now)
        assert unit.unit_type == expected

    def test_amenities_and_concessions(self, now):
        (unit,) = adapt_units(
            [{"amenities": {"washerDryer": True}, "concessions": {"amount": 500, "months": 2}}], now
        )
        assert unit.amenities.washer_dryer is True
        assert unit.amenities.balcony is False
        assert unit.concession.amount == 500
        assert unit.concession.months == 2

    def test_tenant_names_and_lease_dates(self, now):
        occupied, vacant, named = adapt_units([{}, {"occupied": False}, {"tenantName": "J. Rivera"}], now)
        assert occupied.tenant_name == "Current Resident"
        assert vacant.tenant_name == "Vacant"
        assert named.tenant_name == "J. Rivera"
        assert occupied.lease_start_date == now
        assert occupied.lease_end_date == now + timedelta(days=365)


class TestSynthesizeUnits:
    """Representative rent roll from summary facts."""

    def test_capped_at_ten_units(self, now):
        units = synthesize_units(200, 1_500, 90, now=now)
        assert len(units) == 10
        assert sum(unit.occupied for unit in units) == 9

    def test_patterns_are_deterministic(self, now):
        units = synthesize_units(4, 1_500, 100, now=now)
        assert [unit.unit_type for unit in units] == [
            UnitTypeEnum.ONE_BR,
            UnitTypeEnum.TWO_BR,
            UnitTypeEnum.TWO_BR,
            UnitTypeEnum.THREE_BR,
        ]
        assert [unit.current_rent for unit in units] == [1_400, 1_450, 1_500, 1_550]
        assert all(unit.market_rent == 1_600 for unit in units)
        assert synthesize_units(4, 1_500, 100, now=now) == units

    def test_amenity_shares_and_renovations(self, now):
        units = synthesize_units(10, 1_500, 95, now=now)
        assert sum(unit.amenities.washer_dryer for unit in units) == 5
        assert sum(unit.amenities.fireplace for unit in units) == 2
        assert sum(unit.renovated for unit in units) == 3

    def test_synthesized_units_are_populated(self, now):
        units = synthesize_units(10, 1_500, 80, now=now)
        assert all(unset_fields(unit) == [] for unit in units)
        assert units[0].tenant_name == "Resident 1"
        assert units[-1].tenant_name == "Vacant"
        assert units[0].lease_end_date == now + timedelta(days=365)

    def test_zero_count(self):
        assert synthesize_units(0, 1_500, 95) == []


class TestMixedUseAdapter:
    def test_component_type_and_floors(self, now):
        first, second = adapt_mixed_use_components(
            [{"type": "retail", "floors": [1, "2", "x"]}, {"type": "Warehouse"}], now
        )
        assert first.type == ComponentTypeEnum.RETAIL
        assert first.floors == [1, 2]
        assert second.type == ComponentTypeEnum.OTHER
        assert second.floors == [1]
