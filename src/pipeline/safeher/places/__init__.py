"""Safe place reference data and nearest-place search."""

from safeher.geo_utils import distance_meters
from safeher.places.catalog import PlaceType, SafePlace, load_safe_places, parse_safe_places
from safeher.places.finder import RankedSafePlace, SafePlaceFinder

__all__ = [
    "distance_meters",
    "load_safe_places",
    "parse_safe_places",
    "SafePlace",
    "PlaceType",
    "SafePlaceFinder",
    "RankedSafePlace",
]
