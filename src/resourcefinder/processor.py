"""
Data Processing Module

Turns raw resource JSON (API responses or exported files) into validated
`Resource` snapshots. This is the ingestion boundary: incomplete or archived
records are dropped here and logged as a data-quality signal.
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, Iterable, List, Union

from .models import ACTIVE_STATUS, Resource

LIST_FIELDS = ('locations', 'types', 'audiences', 'tags')


class ResourceFileError(Exception):
    """Raised when a resource file cannot be read or has an unexpected shape."""


class ResourceProcessor:
    """Processes and validates resource records."""

    def __init__(self):
        self.logger = logging.getLogger(__name__)
        self.stats = self._empty_stats()

    @staticmethod
    def _empty_stats() -> Dict[str, int]:
        return {'processed': 0, 'accepted': 0, 'malformed': 0, 'archived': 0}

    def reset_stats(self):
        self.stats = self._empty_stats()

    def process_items(self, items: Iterable[Any]) -> List[Resource]:
        """Build resources from raw items, skipping archived and malformed records."""
        resources = []

        for item in items:
            self.stats['processed'] += 1

            if not isinstance(item, dict):
                self.stats['malformed'] += 1
                self.logger.warning(f"Skipping non-object resource record: {item!r}")
                continue

            status = item.get('status')
            if status is not None and status != ACTIVE_STATUS:
                self.stats['archived'] += 1
                self.logger.debug(f"Skipping {status} resource {item.get('_id', item.get('id'))}")
                continue

            bad_fields = [key for key in LIST_FIELDS
                          if item.get(key) is not None and not isinstance(item[key], (list, str))]
            if bad_fields:
                self.stats['malformed'] += 1
                self.logger.warning(
                    f"Skipping malformed resource {item.get('_id', item.get('id'))}: "
                    f"{', '.join(bad_fields)} must be a list"
                )
                continue

            resource = Resource.from_api_response(item)
            if not resource.is_valid():
                self.stats['malformed'] += 1
                missing = [key for key in ('id', 'name', 'description', 'url')
                           if not getattr(resource, key)]
                self.logger.warning(
                    f"Skipping malformed resource {resource.id or '<no id>'}: "
                    f"missing {', '.join(missing)}"
                )
                continue

            if item.get('coordinates') is not None and resource.coordinates is None:
                self.logger.warning(
                    f"Resource {resource.id} has unusable coordinates "
                    f"{item.get('coordinates')!r}; distance will be approximate"
                )

            self.stats['accepted'] += 1
            resources.append(resource)

        return resources

    def process_response(self, response: Union[Dict, List]) -> List[Resource]:
        """Process an API payload shaped like ``{"items": [...]}`` (a bare list also works)."""
        if isinstance(response, list):
            return self.process_items(response)
        items = response.get('items') if isinstance(response, dict) else None
        if not isinstance(items, list):
            self.logger.warning("Resource payload has no 'items' list; treating as empty")
            return []
        return self.process_items(items)

    def load_resources_file(self, path: Union[str, Path]) -> List[Resource]:
        """Read resources from a JSON file holding a list or an ``items`` payload."""
        try:
            with open(path, 'r', encoding='utf-8') as fh:
                payload = json.load(fh)
        except (OSError, json.JSONDecodeError) as e:
            raise ResourceFileError(f"Could not read resources from {path}: {e}") from e

        if not isinstance(payload, (list, dict)):
            raise ResourceFileError(f"{path} must contain a JSON list or an object with 'items'")

        resources = self.process_response(payload)
        self.logger.info(
            f"Loaded {len(resources)} resources from {path} "
            f"({self.stats['malformed']} malformed, {self.stats['archived']} archived skipped)"
        )
        return resources
