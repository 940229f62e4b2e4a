"""Location risk providers used by the risk scorer."""

import random
from typing import Protocol

from safeher.geo_utils import Coordinate


class LocationRiskProvider(Protocol):
    """Anything that can rate a coordinate on a 0-100 risk scale."""

    def location_risk(self, coordinate: Coordinate) -> float:
        ...


class RandomLocationRiskProvider:
    """Stand-in for real geodata: a base risk plus uniform noise.

    There is no crime, lighting or population data behind this value. Swap in
    a real provider once one exists; pass a seeded ``random.Random`` to get
    repeatable output.
    """

    def __init__(
        self,
        rng: random.Random | None = None,
        base: float = 30.0,
        spread: float = 30.0,
    ):
        self.rng = rng or random.Random()
        self.base = base
        self.spread = spread

    def location_risk(self, coordinate: Coordinate) -> float:
        return self.base + self.rng.random() * self.spread


class FixedLocationRiskProvider:
    """Returns the same risk for every coordinate."""

    def __init__(self, value: float):
        self.value = value

    def location_risk(self, coordinate: Coordinate) -> float:
        return self.value
