"""Shared geospatial utility functions."""

import math
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any
from urllib.parse import quote

from safeher.errors import InputOutOfRange

EARTH_RADIUS_M = 6_371_000.0


@dataclass(frozen=True)
class Coordinate:
    """A WGS84 latitude/longitude pair in decimal degrees."""

    latitude: float
    longitude: float

    def __post_init__(self) -> None:
        if not -90.0 <= self.latitude <= 90.0:
            raise InputOutOfRange("latitude", self.latitude, -90.0, 90.0)
        if not -180.0 <= self.longitude <= 180.0:
            raise InputOutOfRange("longitude", self.longitude, -180.0, 180.0)

    def to_dict(self) -> dict[str, float]:
        return {"latitude": self.latitude, "longitude": self.longitude}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Coordinate":
        return cls(latitude=float(data["latitude"]), longitude=float(data["longitude"]))


@dataclass(frozen=True)
class LocationFix:
    """A single sample from a device location provider."""

    coordinate: Coordinate
    accuracy_m: float | None = None
    speed_kmh: float | None = None
    heading_deg: float | None = None
    timestamp: datetime | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "LocationFix":
        """Create a LocationFix from a flat JSON-style dictionary."""
        ts = data.get("timestamp")
        return cls(
            coordinate=Coordinate(float(data["latitude"]), float(data["longitude"])),
            accuracy_m=data.get("accuracy"),
            speed_kmh=data.get("speed"),
            heading_deg=data.get("heading"),
            timestamp=datetime.fromisoformat(ts.replace("Z", "+00:00")) if ts else None,
        )


def distance_meters(a: Coordinate, b: Coordinate) -> float:
    """Great-circle distance between two coordinates using the haversine formula.

    Args:
        a: First coordinate.
        b: Second coordinate.

    Returns:
        Distance in meters on a sphere of radius 6,371 km.
    """
    phi1 = math.radians(a.latitude)
    phi2 = math.radians(b.latitude)
    d_phi = math.radians(b.latitude - a.latitude)
    d_lambda = math.radians(b.longitude - a.longitude)

    h = (
        math.sin(d_phi / 2) ** 2
        + math.cos(phi1) * math.cos(phi2) * math.sin(d_lambda / 2) ** 2
    )
    # rounding can push h just past 1 for near-antipodal points
    h = min(1.0, h)
    return EARTH_RADIUS_M * 2 * math.atan2(math.sqrt(h), math.sqrt(1 - h))


@dataclass(frozen=True)
class Geofence:
    """Circular zone around a center point."""

    center: Coordinate
    radius_m: float
    id: str
    created_at: datetime = field(compare=False)

    def contains(self, coordinate: Coordinate) -> bool:
        """Check whether a coordinate falls inside (or on the edge of) the fence."""
        return distance_meters(coordinate, self.center) <= self.radius_m


def create_geofence(
    center: Coordinate,
    radius_m: float = 100.0,
    now: datetime | None = None,
) -> Geofence:
    """Create a geofence around a location.

    Args:
        center: Center of the fence.
        radius_m: Radius in meters.
        now: Creation time; defaults to the current time.

    Returns:
        Geofence whose id is derived from the creation timestamp.
    """
    created = now or datetime.now()
    return Geofence(
        center=center,
        radius_m=radius_m,
        id=f"geofence_{int(created.timestamp() * 1000)}",
        created_at=created,
    )


def format_coordinates(coordinate: Coordinate) -> str:
    """Human-readable fallback when no street address is available."""
    return f"{coordinate.latitude:.4f}, {coordinate.longitude:.4f}"


def google_maps_link(coordinate: Coordinate) -> str:
    return f"https://maps.google.com/?q={coordinate.latitude},{coordinate.longitude}"


def google_maps_link_for_address(address: str) -> str:
    return f"https://maps.google.com/?q={quote(address, safe='')}"


def apple_maps_link(coordinate: Coordinate) -> str:
    lat, lon = coordinate.latitude, coordinate.longitude
    return f"http://maps.apple.com/?q={lat},{lon}&ll={lat},{lon}&z=15"
