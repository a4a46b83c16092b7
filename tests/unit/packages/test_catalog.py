# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""Unit tests for the package catalog and placeholder bookkeeping."""

import logging

import pytest

from dealscope.asset.multifamily.records import Submarket
from dealscope.packages import (
    AssumptionLog,
    PackageId,
    get_property_packages,
    recommend_packages,
    required_fields_for_metrics,
    validate_data_for_package,
)
from dealscope.packages.assumptions import PLACEHOLDER_REASON
from dealscope.packages.catalog import available_asset_functions, find_package


class TestCatalogLookup:
    @pytest.mark.parametrize("property_type", ["office", "retail", "industrial", "multifamily", "mixed-use"])
    def test_three_tiers_per_type(self, property_type):
        assert len(get_property_packages(property_type)) == 3

    def test_unknown_type_has_no_packages(self):
        assert get_property_packages("castle") == []
        assert get_property_packages(None) == []

    def test_find_package(self):
        package = find_package("industrial-investment")
        assert package.name == "Investment Analysis"
        assert package.required_field_names[:2] == ["purchasePrice", "currentNOI"]

    def test_find_unknown_package_raises(self):
        with pytest.raises(KeyError, match="office-deluxe"):
            find_package("office-deluxe")

    def test_asset_functions(self):
        assert available_asset_functions("office")[0] == "analyzeTenantFinancialHealth"
        assert available_asset_functions("castle") == []


class TestRecommendations:
    def test_ranked_by_match_score(self, sample_facts):
        recommendations = recommend_packages(sample_facts)
        assert [(r.package_id, r.match_score) for r in recommendations] == [
            ("office-basic", 100),
            ("office-complete", 100),
            ("office-institutional", 79),
        ]

    def test_no_property_type_no_recommendations(self, sample_facts):
        facts = dict(sample_facts)
        del facts["propertyType"]
        assert recommend_packages(facts) == []

    def test_serialized_with_camel_keys(self, sample_facts):
        payload = recommend_packages(sample_facts)[0].to_dict()
        assert payload == {
            "packageId": "office-basic",
            "name": "Office Quick Analysis",
            "description": "Basic metrics for office properties",
            "matchScore": 100,
        }


class TestValidateData:
    def test_missing_fields_reported_in_camel_case(self, sample_facts):
        check = validate_data_for_package("office-institutional", sample_facts)
        assert not check.is_valid
        assert check.missing_fields == ["rentableSquareFeet", "numberOfTenants", "weightedAverageLeaseTerm"]

    def test_zero_counts_as_supplied(self):
        facts = {"purchasePrice": 0, "currentNOI": 0, "totalInvestment": 0, "annualCashFlow": 0}
        assert validate_data_for_package("office-basic", facts).is_valid

    def test_unknown_package_is_invalid(self, caplog):
        with caplog.at_level(logging.WARNING):
            check = validate_data_for_package("office-deluxe", {})
        assert not check.is_valid
        assert check.missing_fields == []
        assert "office-deluxe" in caplog.text


class TestRequiredFields:
    def test_union_in_selection_order(self):
        assert required_fields_for_metrics(["capRate", "dscr"]) == [
            "purchasePrice",
            "currentNOI",
            "loanAmount",
            "interestRate",
            "loanTerm",
        ]

    def test_unknown_metrics_are_ignored(self):
        assert required_fields_for_metrics(["bogus"]) == []


class TestAssumptionLog:
    def test_assume_returns_value_and_records_it(self):
        log = AssumptionLog()
        assert log.assume("market.rentGrowth", 3.0) == 3.0
        [entry] = log.entries
        assert (entry.name, entry.value, entry.reason) == ("market.rentGrowth", 3.0, PLACEHOLDER_REASON)

    def test_first_assumption_wins(self):
        log = AssumptionLog()
        log.assume("capRate", 5.5)
        log.assume("capRate", 6.0, "Second guess")
        assert [entry.value for entry in log.entries] == [5.5]

    def test_supplied_or(self):
        log = AssumptionLog()
        assert log.supplied_or("walkScore", 80, 65) == 80
        assert log.supplied_or("schoolRating", None, 7) == 7
        assert log.supplied_or("crimeIndex", 0, 35) == 35
        assert [entry.name for entry in log.entries] == ["schoolRating", "crimeIndex"]

    def test_models_are_stored_as_plain_data(self):
        log = AssumptionLog()
        submarket = log.assume("submarket", Submarket())
        assert isinstance(submarket, Submarket)
        assert log.entries[0].value["median_income"] == 65_000

    def test_bundle(self):
        log = AssumptionLog()
        log.assume("propertyAge", 20)
        bundle = log.bundle(PackageId.OFFICE_BUILDING_OPERATIONS, {"summary": {"score": 1}})
        assert bundle.package_id == "office-building-operations"
        assert bundle.results == {"summary": {"score": 1}}
        assert bundle.assumed("propertyAge")
        assert not bundle.assumed("market.rentGrowth")

    def test_entries_are_a_copy(self):
        log = AssumptionLog()
        log.entries.append("junk")
        assert log.entries == []
