# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Unit tests for shared primitives: naming, results, presence and dates.
"""

from datetime import date, datetime

import numpy as np
import pytest
from pydantic import ValidationError

from dealscope.core.exceptions import InvalidArgumentError, PackageNotFoundError
from dealscope.core.primitives import (
    Result,
    ReturnSettings,
    first_present,
    is_present,
    months_remaining,
    to_datetime,
    to_number,
    years_between,
)
from dealscope.core.primitives.model import to_legacy_camel


@pytest.mark.parametrize(
    "name, expected",
    [
        ("current_noi", "currentNOI"),
        ("average_rent_psf", "averageRentPSF"),
        ("total_sf", "totalSF"),
        ("gross_leasable_area", "grossLeasableArea"),
        ("allowable_far", "allowableFAR"),
        ("purchase_price", "purchasePrice"),
        ("occupancy", "occupancy"),
    ],
)
def test_to_legacy_camel(name, expected):
    assert to_legacy_camel(name) == expected


class TestResult:
    def test_ok_and_fail(self):
        assert Result.ok(3.0).is_ok
        failed = Result.fail("bad input")
        assert not failed.is_ok
        assert failed.value is None

    def test_unwrap(self):
        assert Result.ok(2.5).unwrap() == 2.5
        with pytest.raises(InvalidArgumentError, match="bad input"):
            Result.fail("bad input").unwrap()

    def test_value_and_error_are_exclusive(self):
        with pytest.raises(ValidationError):
            Result(value=1.0, error="both")


class TestPresence:
    @pytest.mark.parametrize("value", [None, 0, 0.0, float("nan"), "", "  ", [], {}, False])
    def test_missing(self, value):
        assert not is_present(value)

    @pytest.mark.parametrize("value", [1, -5.0, np.float64(2.0), "x", [0], True])
    def test_present(self, value):
        assert is_present(value)

    def test_first_present(self):
        assert first_present(None, 0, 12, 15) == 12
        assert first_present(None, 0) is None


class TestToNumber:
    @pytest.mark.parametrize(
        "value, expected",
        [("42", 42.0), ("1,250,000", 1_250_000.0), ("$500", 500.0), ("7.5%", 7.5), (3, 3.0)],
    )
    def test_readable(self, value, expected):
        assert to_number(value) == expected

    @pytest.mark.parametrize("value", [None, True, "abc", "", float("inf"), [1]])
    def test_unreadable(self, value):
        assert to_number(value) is None


class TestDayCounts:
    def test_months_remaining_floors_at_zero(self):
        now = datetime(2025, 1, 1)
        assert months_remaining(datetime(2024, 1, 1), now) == 0.0
        assert months_remaining(datetime(2025, 1, 31), now, month_days=30.0) == pytest.approx(1.0)

    def test_years_between_uses_year_days(self):
        start = datetime(2025, 1, 1)
        assert years_between(start, datetime(2026, 1, 1), year_days=365.0) == pytest.approx(1.0)
        assert years_between(start, datetime(2026, 1, 1)) == pytest.approx(365 / 365.25)


class TestToDatetime:
    def test_shapes(self):
        assert to_datetime("2025-03-01") == datetime(2025, 3, 1)
        assert to_datetime(date(2025, 3, 1)) == datetime(2025, 3, 1)
        assert to_datetime("2025-03-01T00:00:00+02:00").tzinfo is None

    def test_unparsable_returns_default(self):
        fallback = datetime(2000, 1, 1)
        assert to_datetime("not a date", default=fallback) == fallback
        assert to_datetime(None) is None


class TestSettings:
    def test_defaults(self):
        settings = ReturnSettings()
        assert settings.exit_cap_rate == 8.0
        assert (settings.irr_floor, settings.irr_cap) == (0.0, 50.0)

    def test_floor_above_cap_rejected(self):
        with pytest.raises(ValidationError):
            ReturnSettings(irr_floor=60.0)


def test_package_not_found_message():
    error = PackageNotFoundError("nope")
    assert str(error) == "Unknown package ID: nope"
    assert isinstance(error, KeyError)
