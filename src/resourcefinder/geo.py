"""
Geographic helpers

Great-circle distance math, coordinate validation and the region centroid
table used to place resources that only list a general service area.
"""

import json
import math
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Optional, Tuple, Union


EARTH_RADIUS_MILES = 3958.8

VIRTUAL_LOCATION = 'Virtual'

logger = logging.getLogger(__name__)


def _as_float(value) -> Optional[float]:
    if value is None or isinstance(value, bool):
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


def is_valid_coordinates(latitude, longitude) -> bool:
    """Check that a latitude/longitude pair is numeric, finite and in range."""
    for value in (latitude, longitude):
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            return False
        if not math.isfinite(value):
            return False
    return -90 <= latitude <= 90 and -180 <= longitude <= 180


@dataclass(frozen=True)
class Coordinates:
    """A latitude/longitude pair in decimal degrees."""
    latitude: float
    longitude: float

    def is_valid(self) -> bool:
        return is_valid_coordinates(self.latitude, self.longitude)

    @classmethod
    def from_dict(cls, data) -> Optional['Coordinates']:
        """Build coordinates from a mapping, or None when the values are unusable."""
        if not isinstance(data, dict):
            return None
        latitude = _as_float(data.get('latitude', data.get('lat')))
        longitude = _as_float(data.get('longitude', data.get('lng', data.get('lon'))))
        if not is_valid_coordinates(latitude, longitude):
            return None
        return cls(latitude, longitude)

    def to_dict(self) -> Dict[str, float]:
        return {'latitude': self.latitude, 'longitude': self.longitude}


@dataclass(frozen=True)
class RegionCentroid:
    """Representative point and nominal service radius for a named location tag."""
    name: str
    coordinates: Coordinates
    radius_miles: float = 0.0

    @classmethod
    def from_dict(cls, data: Dict) -> Optional['RegionCentroid']:
        name = str(data.get('name') or '').strip()
        coordinates = Coordinates.from_dict(data.get('coordinates', data))
        if not name or coordinates is None:
            return None
        radius = _as_float(data.get('radius', data.get('radius_miles', 0)))
        if radius is None or radius < 0:
            radius = 0.0
        return cls(name, coordinates, radius)


DEFAULT_REGIONS: Tuple[RegionCentroid, ...] = (
    RegionCentroid('Fort Bend', Coordinates(29.5656, -95.6572), 25),
    RegionCentroid('Houston', Coordinates(29.7604, -95.3698), 50),
    RegionCentroid('South TX', Coordinates(27.8006, -97.3963), 100),
    RegionCentroid('TX', Coordinates(31.9686, -99.9018), 300),
    RegionCentroid(VIRTUAL_LOCATION, Coordinates(0.0, 0.0), 0),
)


def to_radians(degrees: float) -> float:
    return degrees * (math.pi / 180)


def distance_miles(a: Coordinates, b: Coordinates) -> float:
    """Haversine great-circle distance between two points, in miles."""
    d_lat = to_radians(b.latitude - a.latitude)
    d_lon = to_radians(b.longitude - a.longitude)
    h = (math.sin(d_lat / 2) ** 2 +
         math.cos(to_radians(a.latitude)) * math.cos(to_radians(b.latitude)) *
         math.sin(d_lon / 2) ** 2)
    c = 2 * math.atan2(math.sqrt(h), math.sqrt(1 - h))
    return EARTH_RADIUS_MILES * c


def build_region_index(regions) -> Dict[str, RegionCentroid]:
    """Index a region table by location tag; the first entry for a name wins."""
    index = {}
    for region in regions:
        index.setdefault(region.name, region)
    return index


def load_regions(path: Union[str, Path]) -> Tuple[RegionCentroid, ...]:
    """
    Load a region centroid table from a JSON file.

    The file holds a list of objects shaped like
    ``{"name": "Houston", "latitude": 29.76, "longitude": -95.37, "radius": 50}``
    (``"coordinates": {"latitude": ..., "longitude": ...}`` is accepted too).
    Entries with a missing name or unusable coordinates are skipped.

    Raises:
        ValueError: if the file is not a JSON list of objects
    """
    with open(path, 'r', encoding='utf-8') as fh:
        data = json.load(fh)

    if not isinstance(data, list):
        raise ValueError(f"Region file {path} must contain a JSON list")

    regions: List[RegionCentroid] = []
    for entry in data:
        if not isinstance(entry, dict):
            raise ValueError(f"Region file {path} contains a non-object entry: {entry!r}")
        region = RegionCentroid.from_dict(entry)
        if region is None:
            logger.warning(f"Skipping unusable region entry in {path}: {entry!r}")
            continue
        regions.append(region)

    logger.debug(f"Loaded {len(regions)} regions from {path}")
    return tuple(regions)


def resolve_regions(regions_file: Optional[str] = None) -> Tuple[RegionCentroid, ...]:
    """Return the configured region table, or the built-in one."""
    if regions_file:
        return load_regions(regions_file)
    return DEFAULT_REGIONS
