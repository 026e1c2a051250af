"""
Distance ranking and location accuracy for resources.

Resources with an exact address are measured directly; everything else is
measured to the centroid of the nearest region it lists.
"""
import math
import logging
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence, Tuple

from ..geo import (
    DEFAULT_REGIONS,
    VIRTUAL_LOCATION,
    Coordinates,
    RegionCentroid,
    build_region_index,
    distance_miles,
)
from ..models import APPROXIMATE, PRECISE, Resource

ACCURACY_TOOLTIPS = {
    PRECISE: 'Exact location: distance to the resource\'s address',
    APPROXIMATE: 'General area center: distance to the center of the area it serves',
}


class AccuracyClassifier:
    """Decides whether a resource's distance comes from a real address."""

    def classify(self, resource: Resource) -> str:
        if resource.precise_coordinates is not None:
            return PRECISE
        return APPROXIMATE


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def format_distance(distance: float, precise: bool = False) -> str:
    """
    Render a distance for display.

    Args:
        distance: Distance in miles
        precise: Whether the distance was measured to an exact address

    Returns:
        "< 1 mile", an exact rounded count under 5 miles, otherwise a count
        prefixed with "~" unless the distance is precise
    """
    if distance < 1:
        return '< 1 mile'
    miles = _round_half_up(distance)
    unit = 'mile' if miles == 1 else 'miles'
    if distance < 5 or precise:
        return f"{miles} {unit}"
    return f"~{miles} {unit}"


@dataclass(frozen=True)
class DistanceLabel:
    """Display text for a distance with the accuracy marker kept separate."""
    text: str
    accuracy: str
    tooltip: str


class DistanceRanker:
    """Computes per-resource distances against an injected region table."""

    def __init__(self, regions: Sequence[RegionCentroid] = DEFAULT_REGIONS,
                 logger: Optional[logging.Logger] = None):
        self.regions: Dict[str, RegionCentroid] = build_region_index(regions)
        self.logger = logger or logging.getLogger(__name__)
        self.classifier = AccuracyClassifier()

    def _region_distances(self, resource: Resource, user: Coordinates) -> List[float]:
        distances = []
        for location in resource.locations:
            if location == VIRTUAL_LOCATION:
                continue
            region = self.regions.get(location)
            if region is None:
                continue
            distances.append(distance_miles(user, region.coordinates))
        return distances

    def distance_to(self, resource: Resource, user: Coordinates) -> Optional[float]:
        """
        Distance in miles from the user to a resource.

        Returns None for virtual-only resources and for resources whose
        locations have no known region and which carry no coordinates.
        """
        coordinates = resource.precise_coordinates
        if coordinates is not None:
            return distance_miles(user, coordinates)

        distances = self._region_distances(resource, user)
        if not distances:
            return None
        return min(distances)

    def sort_key(self, resource: Resource, user: Coordinates) -> Tuple[bool, float, str]:
        """Ordering key: nearest first, unknown distances last, then by name."""
        distance = self.distance_to(resource, user)
        return (distance is None, distance if distance is not None else 0.0, resource.name)

    def describe(self, resource: Resource, user: Coordinates) -> Optional[DistanceLabel]:
        """Display label for a resource's distance, or None if it has none."""
        distance = self.distance_to(resource, user)
        if distance is None:
            return None
        accuracy = self.classifier.classify(resource)
        return DistanceLabel(
            text=format_distance(distance, precise=accuracy == PRECISE),
            accuracy=accuracy,
            tooltip=ACCURACY_TOOLTIPS[accuracy],
        )

    def within(self, resources: Sequence[Resource], user: Coordinates,
               max_distance_miles: float = 50.0) -> List[Resource]:
        """
        Resources within range of the user, nearest first.

        Virtual-only resources are excluded. A resource without coordinates
        qualifies when any region it lists is within range.
        """
        nearby = []
        for resource in resources:
            if resource.locations == (VIRTUAL_LOCATION,):
                continue

            coordinates = resource.precise_coordinates
            if coordinates is not None:
                in_range = distance_miles(user, coordinates) <= max_distance_miles
            else:
                in_range = any(d <= max_distance_miles for d in self._region_distances(resource, user))

            if in_range:
                nearby.append(resource)

        self.logger.debug(f"{len(nearby)} of {len(resources)} resources within {max_distance_miles} miles")
        return sorted(nearby, key=lambda r: self.sort_key(r, user))
