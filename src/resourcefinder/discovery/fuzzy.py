"""
Typo-tolerant, weighted text ranking for resources.

`FuzzyMatcher` is the capability the composer depends on;
`WeightedFuzzyMatcher` is the rapidfuzz backed implementation.
"""
import logging
from typing import Dict, List, Optional, Sequence, Tuple

from rapidfuzz import fuzz
from rapidfuzz.utils import default_process

from ..models import Resource

DEFAULT_FIELD_WEIGHTS: Tuple[Tuple[str, float], ...] = (
    ('name', 0.45),
    ('description', 0.25),
    ('tags', 0.15),
    ('locations', 0.10),
    ('types', 0.10),
    ('audiences', 0.10),
)

DEFAULT_THRESHOLD = 0.35

# Floor for a perfect field match so it still contributes to the product score
_EPSILON = 1e-9


class FuzzyMatcher:
    """Ranks resources by how well they match a free-text query."""

    def search(self, resources: Sequence[Resource], query: str) -> List[Resource]:
        raise NotImplementedError


class WeightedFuzzyMatcher(FuzzyMatcher):
    """
    Fuzzy search across weighted resource fields.

    Each field value is scored as ``1 - similarity`` (0 is a perfect match),
    where similarity is the best approximate occurrence of the query inside
    the value, so a match anywhere in a long description counts the same as
    one at the start. A field matches when its score is at or below the
    threshold. Matched fields combine into one relevance score, lower being
    better, in which higher-weighted fields pull the score down harder.
    """

    def __init__(self, threshold: float = DEFAULT_THRESHOLD,
                 weights: Sequence[Tuple[str, float]] = DEFAULT_FIELD_WEIGHTS,
                 logger: Optional[logging.Logger] = None):
        self.threshold = min(max(float(threshold), 0.0), 1.0)
        total = sum(weight for _, weight in weights)
        self.weights: Dict[str, float] = {name: weight / total for name, weight in weights}
        self.logger = logger or logging.getLogger(__name__)

    @staticmethod
    def _field_values(resource: Resource, field_name: str) -> List[str]:
        value = getattr(resource, field_name, None)
        if value is None:
            return []
        if isinstance(value, str):
            return [value]
        return [str(v) for v in value]

    @staticmethod
    def similarity(query: str, text: str) -> float:
        """Similarity in [0, 1] of the query to its best match inside text."""
        query = default_process(query)
        text = default_process(text)
        if not query or not text:
            return 0.0
        if len(text) >= len(query):
            return fuzz.partial_ratio(query, text) / 100.0
        return fuzz.ratio(query, text) / 100.0

    def field_score(self, resource: Resource, field_name: str, query: str) -> Optional[float]:
        """Best mismatch score for a field, or None if no value is within threshold."""
        best = None
        for value in self._field_values(resource, field_name):
            score = 1.0 - self.similarity(query, value)
            if best is None or score < best:
                best = score
        if best is None or best > self.threshold:
            return None
        return best

    def score(self, resource: Resource, query: str) -> Optional[float]:
        """Relevance score for a resource (lower is better), None if nothing matched."""
        total = 1.0
        matched = False
        for field_name, weight in self.weights.items():
            field_score = self.field_score(resource, field_name, query)
            if field_score is None:
                continue
            matched = True
            total *= max(field_score, _EPSILON) ** weight
        return total if matched else None

    def search(self, resources: Sequence[Resource], query: str) -> List[Resource]:
        """
        Return matching resources ordered by relevance.

        Ties keep input order. A blank query returns the input unchanged.
        """
        query = (query or '').strip()
        if not query:
            return list(resources)

        scored = []
        for position, resource in enumerate(resources):
            relevance = self.score(resource, query)
            if relevance is not None:
                scored.append((relevance, position, resource))

        scored.sort(key=lambda item: (item[0], item[1]))
        self.logger.debug(f"Fuzzy search for '{query}' matched {len(scored)} of {len(resources)} resources")
        return [resource for _, _, resource in scored]
