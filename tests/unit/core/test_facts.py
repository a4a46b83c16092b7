# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Unit tests for PropertyFacts.
"""

import pytest
from pydantic import ValidationError

from dealscope.core import PropertyFacts
from dealscope.core.facts import GenericFacts, MultifamilyFacts, OfficeFacts
from dealscope.core.primitives import PropertyTypeEnum


class TestConstruction:
    def test_camel_case_aliases(self, sample_facts):
        facts = PropertyFacts.from_any(sample_facts)
        assert facts.current_noi == 400_000
        assert facts.average_rent_psf == 32
        assert facts.property_type == PropertyTypeEnum.OFFICE

    def test_snake_case_names_accepted(self):
        facts = PropertyFacts(purchase_price=1_000_000, current_noi=80_000)
        assert facts.purchase_price == 1_000_000

    def test_numeric_strings_are_coerced(self):
        facts = PropertyFacts.from_any({"purchasePrice": "$1,250,000", "occupancyRate": "95%"})
        assert facts.purchase_price == 1_250_000
        assert facts.occupancy_rate == 95

    def test_unreadable_number_becomes_none(self, caplog):
        facts = PropertyFacts.from_any({"currentNOI": "lots"})
        assert facts.current_noi is None
        assert "currentNOI" in caplog.text or "current_noi" in caplog.text

    def test_from_any_none_is_empty(self):
        facts = PropertyFacts.from_any(None)
        assert facts.purchase_price is None
        assert facts.property_type is None

    def test_from_any_returns_same_record(self):
        facts = PropertyFacts(purchase_price=1.0)
        assert PropertyFacts.from_any(facts) is facts

    def test_is_immutable(self):
        facts = PropertyFacts(purchase_price=1.0)
        with pytest.raises(ValidationError):
            facts.purchase_price = 2.0


class TestPropertyType:
    @pytest.mark.parametrize(
        "raw, expected",
        [
            ("Office", PropertyTypeEnum.OFFICE),
            ("mixed_use", PropertyTypeEnum.MIXED_USE),
            ("Mixed Use", PropertyTypeEnum.MIXED_USE),
            ("mixeduse", PropertyTypeEnum.MIXED_USE),
            ("castle", None),
            ("", None),
        ],
    )
    def test_normalization(self, raw, expected):
        assert PropertyFacts.from_any({"propertyType": raw}).property_type == expected


class TestAccessors:
    def test_get_declared_and_extra_fields(self):
        facts = PropertyFacts.from_any({"currentNOI": 10, "sellerNotes": "motivated"})
        assert facts.get("current_noi") == 10
        assert facts.get("seller_notes") == "motivated"
        assert facts.get("sellerNotes") == "motivated"
        assert facts.get("purchase_price", 0) == 0

    @pytest.mark.parametrize(
        "data, expected",
        [
            ({"squareFootage": 100}, 100),
            ({"totalSF": 200}, 200),
            ({"grossLeasableArea": 300}, 300),
            ({"squareFootage": 0, "totalSF": 200}, 200),
            ({}, None),
        ],
    )
    def test_area_fallback(self, data, expected):
        assert PropertyFacts.from_any(data).area == expected

    def test_office_tenant_list_shapes(self, office_tenant_dicts):
        as_list = PropertyFacts.from_any({"officeTenants": office_tenant_dicts})
        wrapped = PropertyFacts.from_any({"officeTenants": {"tenants": office_tenant_dicts}})
        plain = PropertyFacts.from_any({"tenants": office_tenant_dicts})
        for facts in (as_list, wrapped, plain):
            assert len(facts.office_tenant_list) == 2
        assert PropertyFacts().office_tenant_list == []

    def test_non_list_tenants_ignored(self):
        assert PropertyFacts.from_any({"retailTenants": "none"}).retail_tenants is None


class TestVariants:
    def test_office_variant(self, sample_facts):
        variant = PropertyFacts.from_any(sample_facts).to_variant()
        assert isinstance(variant, OfficeFacts)
        assert variant.average_rent_psf == 32
        assert variant.purchase_price == 5_000_000

    def test_multifamily_variant_drops_other_fields(self):
        facts = PropertyFacts.from_any(
            {"propertyType": "multifamily", "totalUnits": 120, "clearHeight": 32}
        )
        variant = facts.to_variant()
        assert isinstance(variant, MultifamilyFacts)
        assert variant.total_units == 120
        assert not hasattr(variant, "clear_height")

    def test_untyped_facts_use_generic_variant(self):
        assert isinstance(PropertyFacts(purchase_price=1.0).to_variant(), GenericFacts)
