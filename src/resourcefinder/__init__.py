"""
Resource Finder - search, facet filtering and proximity ranking for community resources.
"""

from .discovery import ResultComposer, filter_only
from .geo import Coordinates, RegionCentroid, distance_miles
from .models import FacetSelection, OrderedResult, Resource

__version__ = '0.1.0'

__all__ = [
    'Coordinates',
    'FacetSelection',
    'OrderedResult',
    'RegionCentroid',
    'Resource',
    'ResultComposer',
    'distance_miles',
    'filter_only'
]
