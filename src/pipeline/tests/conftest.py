"""Shared test fixtures for SafeHer tests."""

import os

import pytest

from safeher.config import reload_config
from safeher.places import SafePlaceFinder, load_safe_places, parse_safe_places
from safeher.risk import FixedLocationRiskProvider, RiskScorer


@pytest.fixture(autouse=True)
def default_config(monkeypatch):
    """Every test starts from default settings with no SAFEHER_* overrides."""
    for key in list(os.environ):
        if key.startswith("SAFEHER_"):
            monkeypatch.delenv(key)
    return reload_config(None)


@pytest.fixture
def fixed_scorer():
    """Scorer whose location sub-score is always 45."""
    return RiskScorer(location_provider=FixedLocationRiskProvider(45.0))


@pytest.fixture
def bundled_places():
    """The safe place dataset shipped with the package."""
    return load_safe_places()


@pytest.fixture
def bundled_finder(bundled_places):
    return SafePlaceFinder(bundled_places)


@pytest.fixture
def sample_places():
    """A small hand-built dataset around the equator/prime meridian."""
    return parse_safe_places([
        {"id": "a", "name": "Harbour Police", "type": "police", "latitude": 0.0, "longitude": 0.01},
        {"id": "b", "name": "Harbour Hospital", "type": "hospital", "latitude": 0.0, "longitude": 0.002},
        {"id": "c", "name": "Quay Mall", "type": "mall", "latitude": 0.002, "longitude": 0.0},
        {"id": "d", "name": "Dock Police", "type": "police", "latitude": 0.0, "longitude": 0.002},
        {"id": "e", "name": "Inland Hospital", "type": "hospital", "latitude": 1.0, "longitude": 1.0},
    ])
