"""Safe place reference data."""

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any

import structlog
import yaml

from safeher.errors import DatasetError
from safeher.geo_utils import Coordinate

logger = structlog.get_logger()

BUNDLED_DATASET = Path(__file__).parent.parent / "data" / "safe_places.yaml"


class PlaceType(str, Enum):
    """Kinds of place that can serve as a nearby refuge."""

    POLICE = "police"
    HOSPITAL = "hospital"
    MALL = "mall"


@dataclass(frozen=True)
class SafePlace:
    """A point of interest the user can go to for help."""

    id: str
    name: str
    type: PlaceType
    coordinate: Coordinate
    address: str = ""
    phone: str = ""
    hours: str = ""
    description: str = ""

    def to_dict(self) -> dict[str, Any]:
        """Convert to a flat dictionary (latitude/longitude at top level)."""
        return {
            "id": self.id,
            "name": self.name,
            "type": self.type.value,
            "latitude": self.coordinate.latitude,
            "longitude": self.coordinate.longitude,
            "address": self.address,
            "phone": self.phone,
            "hours": self.hours,
            "description": self.description,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "SafePlace":
        """Create a SafePlace from a flat dictionary.

        Raises:
            KeyError: A required field is missing.
            ValueError: The type is unknown or the coordinate is out of range.
        """
        return cls(
            id=str(data["id"]),
            name=str(data["name"]),
            type=PlaceType(data["type"]),
            coordinate=Coordinate(float(data["latitude"]), float(data["longitude"])),
            address=str(data.get("address", "")),
            phone=str(data.get("phone", "")),
            hours=str(data.get("hours", "")),
            description=str(data.get("description", "")),
        )


def parse_safe_places(entries: list[dict[str, Any]]) -> tuple[SafePlace, ...]:
    """Build safe places from raw entries, skipping invalid or duplicate rows.

    Args:
        entries: Raw place dictionaries, e.g. from a YAML file.

    Returns:
        Tuple of SafePlace objects in input order.
    """
    places = []
    seen_ids = set()

    for index, entry in enumerate(entries):
        try:
            place = SafePlace.from_dict(entry)
        except (KeyError, TypeError, ValueError) as e:
            logger.warning("Skipping invalid safe place entry", index=index, error=str(e))
            continue

        if place.id in seen_ids:
            logger.warning("Skipping duplicate safe place id", index=index, place_id=place.id)
            continue

        seen_ids.add(place.id)
        places.append(place)

    return tuple(places)


def load_safe_places(path: Path | None = None) -> tuple[SafePlace, ...]:
    """Load the safe place dataset from a YAML file.

    Args:
        path: YAML file with a top-level ``places`` list. Defaults to the
            dataset bundled with the package.

    Returns:
        Read-only tuple of SafePlace objects.

    Raises:
        DatasetError: The file is missing, unreadable, or not shaped like a
            place list.
    """
    path = path or BUNDLED_DATASET

    try:
        with open(path) as f:
            data = yaml.safe_load(f)
    except (OSError, yaml.YAMLError) as e:
        raise DatasetError(f"Could not read safe places from {path}: {e}") from e

    if data is None:
        entries = []
    elif isinstance(data, dict) and isinstance(data.get("places", []), list):
        entries = data.get("places", [])
    else:
        raise DatasetError(f"Expected a 'places' list in {path}")

    places = parse_safe_places(entries)

    logger.info("Loaded safe places", path=str(path), num_places=len(places))

    return places
