"""
Data Models

Read-only snapshots consumed by the discovery engine and the result types it
produces.
"""

import math
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional, Tuple

from .geo import Coordinates

PRECISE = 'precise'
APPROXIMATE = 'approximate'

ACTIVE_STATUS = 'active'


def _unique_strings(values) -> Tuple[str, ...]:
    """Coerce a raw tag list to de-duplicated, non-blank strings in first-seen order."""
    if values is None:
        return ()
    if isinstance(values, str):
        values = [values]
    elif not isinstance(values, (list, tuple)):
        return ()
    seen = []
    for value in values:
        if value is None:
            continue
        text = str(value).strip()
        if text and text not in seen:
            seen.append(text)
    return tuple(seen)


def normalize_list(value) -> List[str]:
    """Split a comma separated query value (or list of them) into trimmed entries."""
    if value is None:
        return []
    if isinstance(value, str):
        value = [value]
    items = []
    for part in value:
        if part is None:
            continue
        for piece in str(part).split(','):
            piece = piece.strip()
            if piece:
                items.append(piece)
    return items


@dataclass(frozen=True)
class Resource:
    """Structured representation of a community resource listing."""
    id: str
    name: str
    description: str
    url: str
    locations: Tuple[str, ...] = ()
    types: Tuple[str, ...] = ()
    audiences: Tuple[str, ...] = ()
    tags: Tuple[str, ...] = ()
    coordinates: Optional[Coordinates] = None
    phone: Optional[str] = None

    @classmethod
    def from_api_response(cls, data: Dict) -> 'Resource':
        """Create a Resource from an API item (handles Mongo `_id` and plain `id`)."""
        raw_id = data.get('_id', data.get('id'))
        tags = data.get('tags') or []
        if isinstance(tags, str):
            tags = [tags]
        elif not isinstance(tags, (list, tuple)):
            tags = []

        return cls(
            id=str(raw_id).strip() if raw_id is not None else '',
            name=cls._clean_text(data.get('name')),
            description=cls._clean_text(data.get('description')),
            url=cls._clean_text(data.get('url')),
            locations=_unique_strings(data.get('locations')),
            types=_unique_strings(data.get('types')),
            audiences=_unique_strings(data.get('audiences')),
            tags=tuple(str(t).strip() for t in tags if t is not None and str(t).strip()),
            coordinates=Coordinates.from_dict(data.get('coordinates')),
            phone=cls._clean_text(data.get('phone')) or None,
        )

    @staticmethod
    def _clean_text(value) -> str:
        if value is None:
            return ''
        return str(value).strip()

    def is_valid(self) -> bool:
        """A record is usable only with a non-empty id, name, description and url."""
        for value in (self.id, self.name, self.description, self.url):
            if not isinstance(value, str) or not value.strip():
                return False
        return True

    @property
    def precise_coordinates(self) -> Optional[Coordinates]:
        """Coordinates when present and within range, otherwise None."""
        if isinstance(self.coordinates, Coordinates) and self.coordinates.is_valid():
            return self.coordinates
        return None

    def to_dict(self) -> Dict[str, Any]:
        data = {
            'id': self.id,
            'name': self.name,
            'description': self.description,
            'url': self.url,
            'locations': list(self.locations),
            'types': list(self.types),
            'audiences': list(self.audiences),
            'tags': list(self.tags),
        }
        if self.precise_coordinates is not None:
            data['coordinates'] = self.precise_coordinates.to_dict()
        if self.phone:
            data['phone'] = self.phone
        return data


@dataclass(frozen=True)
class FacetSelection:
    """Selected values per facet dimension; an empty set means no constraint."""
    locations: frozenset = frozenset()
    types: frozenset = frozenset()
    audiences: frozenset = frozenset()

    def __post_init__(self):
        for key in ('locations', 'types', 'audiences'):
            values = getattr(self, key)
            if isinstance(values, str):
                values = [values]
            object.__setattr__(self, key, frozenset(values or ()))

    @classmethod
    def of(cls, locations: Iterable[str] = (), types: Iterable[str] = (),
           audiences: Iterable[str] = ()) -> 'FacetSelection':
        return cls(frozenset(locations), frozenset(types), frozenset(audiences))

    @classmethod
    def from_query_params(cls, params: Dict[str, Any]) -> 'FacetSelection':
        """Build a selection from query parameters like ``locations=Houston,Virtual``."""
        return cls(
            frozenset(normalize_list(params.get('locations'))),
            frozenset(normalize_list(params.get('types'))),
            frozenset(normalize_list(params.get('audiences'))),
        )

    def is_empty(self) -> bool:
        return not (self.locations or self.types or self.audiences)

    def to_query_params(self) -> Dict[str, str]:
        params = {}
        for key in ('locations', 'types', 'audiences'):
            values = getattr(self, key)
            if values:
                params[key] = ','.join(sorted(values))
        return params


@dataclass(frozen=True)
class OrderedResult:
    """A resource in its final position, optionally annotated with distance."""
    resource: Resource
    distance: Optional[float] = None
    accuracy: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        data = self.resource.to_dict()
        if self.accuracy is not None:
            data['distance'] = self.distance
            data['accuracy'] = self.accuracy
        return data


@dataclass(frozen=True)
class ResultPage:
    """One page of results plus the pagination block the public endpoint returns."""
    items: Tuple[Any, ...]
    page: int
    limit: int
    total: int
    pages: int = field(init=False)

    def __post_init__(self):
        object.__setattr__(self, 'pages', math.ceil(self.total / self.limit) if self.limit else 0)

    def pagination(self) -> Dict[str, int]:
        return {
            'page': self.page,
            'limit': self.limit,
            'total': self.total,
            'pages': self.pages,
        }

