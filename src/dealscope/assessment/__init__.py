# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Deal assessment: a single qualitative rating from the computed metrics.
"""

from .aggregator import RECOMMENDATIONS, DealAssessment, assess_deal, overall_level, score_metric

__all__ = ["RECOMMENDATIONS", "DealAssessment", "assess_deal", "overall_level", "score_metric"]
