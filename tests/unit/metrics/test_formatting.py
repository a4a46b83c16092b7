# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

import pytest

from dealscope.core.primitives import MetricEnum
from dealscope.metrics import format_metric, format_metric_value


class TestFormatMetricValue:
    @pytest.mark.parametrize(
        "value, kind, expected",
        [
            (8.5, "percentage", "8.50%"),
            (1_000_000, "currency", "$1,000,000"),
            (1_234.56, "currency", "$1,235"),
            (-2_500, "currency", "-$2,500"),
            (1.25, "ratio", "1.25"),
            (None, "ratio", "N/A"),
            (float("nan"), "percentage", "N/A"),
        ],
    )
    def test_kinds(self, value, kind, expected):
        assert format_metric_value(value, kind) == expected

    def test_metric_kind_lookup(self):
        assert format_metric(MetricEnum.CAP_RATE, 7.5) == "7.50%"
        assert format_metric(MetricEnum.PRICE_PER_UNIT, 50_000) == "$50,000"
        assert format_metric(MetricEnum.DSCR, 1.6774) == "1.68"
