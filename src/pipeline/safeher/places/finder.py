"""Nearest safe place search."""

from dataclasses import dataclass
from typing import Any, Iterable

import structlog

from safeher.geo_utils import Coordinate, distance_meters
from safeher.places.catalog import PlaceType, SafePlace

logger = structlog.get_logger()


@dataclass(frozen=True)
class RankedSafePlace:
    """A safe place with its distance from the query origin."""

    place: SafePlace
    distance_meters: float

    def to_dict(self) -> dict[str, Any]:
        """Convert to a flat dictionary for API responses."""
        data = self.place.to_dict()
        data["distance_meters"] = self.distance_meters
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "RankedSafePlace":
        return cls(
            place=SafePlace.from_dict(data),
            distance_meters=float(data["distance_meters"]),
        )


class SafePlaceFinder:
    """Ranks a fixed set of safe places by distance from a point."""

    def __init__(self, places: Iterable[SafePlace]):
        """Initialize the finder.

        Args:
            places: Reference dataset. Copied into an immutable tuple, so later
                changes to the source collection are not seen.
        """
        self.places = tuple(places)

    def _ranked(
        self,
        origin: Coordinate,
        max_distance_meters: float,
        type_filter: PlaceType | None = None,
    ) -> list[RankedSafePlace]:
        """Places within range, nearest first; ties keep dataset order."""
        results = []

        for place in self.places:
            if type_filter is not None and place.type != type_filter:
                continue
            distance_m = distance_meters(origin, place.coordinate)
            if distance_m <= max_distance_meters:
                results.append(RankedSafePlace(place=place, distance_meters=distance_m))

        # list.sort is stable
        results.sort(key=lambda r: r.distance_meters)
        return results

    def find_nearest(
        self,
        origin: Coordinate,
        max_distance_meters: float = 5000.0,
        limit: int = 10,
        type_filter: PlaceType | str | None = None,
    ) -> list[RankedSafePlace]:
        """Find the closest safe places to a point.

        Args:
            origin: Query coordinate.
            max_distance_meters: Places farther than this are dropped.
            limit: Maximum number of results.
            type_filter: Only return places of this type.

        Returns:
            Ranked places sorted by ascending distance. Empty if none qualify.
        """
        if type_filter is not None:
            type_filter = PlaceType(type_filter)

        results = self._ranked(origin, max_distance_meters, type_filter)[:max(limit, 0)]

        logger.debug(
            "Nearest safe places found",
            num_results=len(results),
            max_distance_m=max_distance_meters,
            type_filter=type_filter.value if type_filter else None,
        )

        return results

    def nearest_of_type(
        self,
        origin: Coordinate,
        place_type: PlaceType | str,
        max_distance_meters: float = 5000.0,
    ) -> RankedSafePlace | None:
        """Closest place of one type, or None if none is in range."""
        results = self._ranked(origin, max_distance_meters, PlaceType(place_type))
        return results[0] if results else None

    def places_in_radius(
        self,
        origin: Coordinate,
        radius_meters: float = 1000.0,
    ) -> list[RankedSafePlace]:
        """Every place within a radius, nearest first, without a result limit."""
        return self._ranked(origin, radius_meters)
