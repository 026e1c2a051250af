"""
Discovery package: facet filtering, fuzzy search, distance ranking and result composition.
"""

from .composer import ResultComposer, filter_only, paginate
from .distance import AccuracyClassifier, DistanceLabel, DistanceRanker, format_distance
from .facets import FacetFilter
from .fuzzy import FuzzyMatcher, WeightedFuzzyMatcher

__all__ = [
    'AccuracyClassifier',
    'DistanceLabel',
    'DistanceRanker',
    'FacetFilter',
    'FuzzyMatcher',
    'ResultComposer',
    'WeightedFuzzyMatcher',
    'filter_only',
    'format_distance',
    'paginate'
]
