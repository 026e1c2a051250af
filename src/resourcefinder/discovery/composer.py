"""
Result composition: the full discovery pipeline.

filter -> text search (only for a non-blank query) -> alphabetical order
-> optional distance annotation.
"""
import logging
import unicodedata
from typing import Iterable, List, Optional, Sequence, Tuple

from ..geo import Coordinates
from ..models import FacetSelection, OrderedResult, Resource, ResultPage
from .distance import AccuracyClassifier, DistanceRanker
from .facets import FacetFilter
from .fuzzy import FuzzyMatcher, WeightedFuzzyMatcher

DEFAULT_PAGE_SIZE = 12


def name_sort_key(resource: Resource) -> Tuple[str, str]:
    """Case and accent insensitive name key, ties broken by the raw name."""
    folded = unicodedata.normalize('NFKD', resource.name)
    folded = ''.join(c for c in folded if not unicodedata.combining(c)).casefold()
    return folded, resource.name


def valid_resources(resources: Iterable[Resource]) -> List[Resource]:
    """Drop records that are not usable resources."""
    return [r for r in resources if isinstance(r, Resource) and r.is_valid()]


class ResultComposer:
    """Turns a resource set, query, selection and optional location into results."""

    def __init__(self, matcher: Optional[FuzzyMatcher] = None,
                 ranker: Optional[DistanceRanker] = None,
                 facet_filter: Optional[FacetFilter] = None,
                 classifier: Optional[AccuracyClassifier] = None,
                 logger: Optional[logging.Logger] = None):
        self.matcher = matcher or WeightedFuzzyMatcher()
        self.ranker = ranker or DistanceRanker()
        self.facet_filter = facet_filter or FacetFilter()
        self.classifier = classifier or AccuracyClassifier()
        self.logger = logger or logging.getLogger(__name__)

    def filter_only(self, resources: Iterable[Resource],
                    selection: Optional[FacetSelection] = None) -> List[Resource]:
        """Valid resources passing the facet selection, in input order."""
        return self.facet_filter.filter(valid_resources(resources), selection)

    def run(self, resources: Iterable[Resource], query: str = '',
            selection: Optional[FacetSelection] = None,
            user_coordinates: Optional[Coordinates] = None) -> List[OrderedResult]:
        """
        Run the discovery pipeline.

        Args:
            resources: Resource snapshots; invalid records are skipped
            query: Free-text query; blank means no text filtering
            selection: Facet selection, None for no constraint
            user_coordinates: Optional user location for distance annotation

        Returns:
            Results sorted by name. When user coordinates are given each
            result carries a distance (None when unknown) and an accuracy,
            without changing the order.
        """
        filtered = self.filter_only(resources, selection)

        query = (query or '').strip()
        matched = self.matcher.search(filtered, query) if query else filtered

        ordered = sorted(matched, key=name_sort_key)

        if user_coordinates is None:
            return [OrderedResult(resource) for resource in ordered]

        return [self._annotate(resource, user_coordinates) for resource in ordered]

    def _annotate(self, resource: Resource, user: Coordinates) -> OrderedResult:
        return OrderedResult(
            resource=resource,
            distance=self.ranker.distance_to(resource, user),
            accuracy=self.classifier.classify(resource),
        )

    def nearby(self, resources: Iterable[Resource], user_coordinates: Coordinates,
               max_distance_miles: float = 50.0,
               selection: Optional[FacetSelection] = None) -> List[OrderedResult]:
        """Facet-filtered resources within range of the user, nearest first."""
        candidates = self.filter_only(resources, selection)
        in_range = self.ranker.within(candidates, user_coordinates, max_distance_miles)
        return [self._annotate(resource, user_coordinates) for resource in in_range]

    def count_facets(self, resources: Iterable[Resource],
                     selection: Optional[FacetSelection] = None):
        """Per-dimension tag counts over the facet-filtered resources."""
        return self.facet_filter.count_facets(self.filter_only(resources, selection))


def paginate(results: Sequence, page: int = 1, limit: int = DEFAULT_PAGE_SIZE) -> ResultPage:
    """Slice results into a page; invalid page or limit values fall back to defaults."""
    page = page if isinstance(page, int) and page >= 1 else 1
    limit = limit if isinstance(limit, int) and limit >= 1 else DEFAULT_PAGE_SIZE
    start = (page - 1) * limit
    return ResultPage(items=tuple(results[start:start + limit]), page=page,
                      limit=limit, total=len(results))


def filter_only(resources: Iterable[Resource],
                selection: Optional[FacetSelection] = None) -> List[Resource]:
    """Facet filtering without text search, e.g. for result-count badges."""
    return ResultComposer().filter_only(resources, selection)
