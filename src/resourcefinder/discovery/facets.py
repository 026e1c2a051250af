"""
Facet filtering over the location, type and audience dimensions.
"""
import logging
from typing import Dict, List, Optional, Sequence

from ..models import FacetSelection, Resource

FACET_DIMENSIONS = ('locations', 'types', 'audiences')


class FacetFilter:
    """Keeps resources matching every constrained dimension of a selection."""

    def __init__(self, logger: Optional[logging.Logger] = None):
        self.logger = logger or logging.getLogger(__name__)

    @staticmethod
    def matches(resource: Resource, selection: FacetSelection) -> bool:
        """OR within a dimension, AND across dimensions; empty selections pass."""
        for dimension in FACET_DIMENSIONS:
            selected = getattr(selection, dimension)
            if not selected:
                continue
            if selected.isdisjoint(getattr(resource, dimension)):
                return False
        return True

    def filter(self, resources: Sequence[Resource],
               selection: Optional[FacetSelection] = None) -> List[Resource]:
        """
        Filter resources by facet selection, preserving input order.

        Args:
            resources: Candidate resources
            selection: Selected facet values, None for no constraint

        Returns:
            New list of the resources that pass
        """
        if selection is None or selection.is_empty():
            return list(resources)

        filtered = [r for r in resources if self.matches(r, selection)]
        self.logger.debug(f"Facet filter kept {len(filtered)} of {len(resources)} resources")
        return filtered

    def count_facets(self, resources: Sequence[Resource]) -> Dict[str, Dict[str, int]]:
        """Count resources per tag for each dimension, most common first."""
        counts = {}
        for dimension in FACET_DIMENSIONS:
            tally: Dict[str, int] = {}
            for resource in resources:
                for value in getattr(resource, dimension):
                    tally[value] = tally.get(value, 0) + 1
            counts[dimension] = dict(sorted(tally.items(), key=lambda x: (-x[1], x[0])))
        return counts
