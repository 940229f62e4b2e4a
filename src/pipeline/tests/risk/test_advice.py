"""Tests for contextual safety advice."""

from datetime import datetime

import pytest

from safeher.geo_utils import Coordinate, LocationFix
from safeher.risk.advice import (
    GENERAL_TIPS,
    UNKNOWN_STATUS_MESSAGE,
    generate_safety_recommendations,
    quick_location_risk,
    safety_status_message,
)
from safeher.risk.scoring import RiskLevel, Weather


class TestSafetyRecommendations:

    def test_daytime_only_general_tips(self):
        tips = generate_safety_recommendations(now=datetime(2024, 6, 17, 12, 0))
        assert tips == GENERAL_TIPS

    def test_everything_applies(self):
        fix = LocationFix(coordinate=Coordinate(40.0, -74.0), accuracy_m=250)
        weather = Weather(visibility=300, precipitation=2.0)

        tips = generate_safety_recommendations(fix, weather, now=datetime(2024, 6, 17, 23, 0))

        assert tips == [
            "It's late at night - stay in well-lit areas",
            "Consider calling a trusted contact to check in",
            "Location accuracy is low - stay alert",
            "Low visibility - be extra cautious",
            "Wet conditions - watch your step",
        ] + GENERAL_TIPS

    def test_accurate_fix_adds_nothing(self):
        fix = LocationFix(coordinate=Coordinate(40.0, -74.0), accuracy_m=100)
        tips = generate_safety_recommendations(fix, now=datetime(2024, 6, 17, 12, 0))
        assert tips == GENERAL_TIPS


class TestQuickLocationRisk:

    @pytest.mark.parametrize(
        "now, expected",
        [
            (datetime(2024, 6, 15, 23, 0), RiskLevel.UNSAFE),
            (datetime(2024, 6, 17, 23, 0), RiskLevel.MODERATE),
            (datetime(2024, 6, 15, 19, 0), RiskLevel.MODERATE),
            (datetime(2024, 6, 17, 19, 0), RiskLevel.SAFE),
            (datetime(2024, 6, 16, 12, 0), RiskLevel.SAFE),
        ],
        ids=["saturday_night", "monday_night", "saturday_evening", "monday_evening", "sunday_noon"],
    )
    def test_levels(self, now, expected):
        assert quick_location_risk(now) == expected


class TestStatusMessage:

    @pytest.mark.parametrize("level", [RiskLevel.UNSAFE, "unsafe", "Unsafe", "UNSAFE"])
    def test_unsafe_variants(self, level):
        assert safety_status_message(level).startswith("High risk area detected")

    def test_safe(self):
        assert safety_status_message(RiskLevel.SAFE).startswith("You are in a safe area")

    @pytest.mark.parametrize("level", [RiskLevel.UNKNOWN, "bogus", ""])
    def test_fallback(self, level):
        assert safety_status_message(level) == UNKNOWN_STATUS_MESSAGE
