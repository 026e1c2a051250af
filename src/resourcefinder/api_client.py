"""
Public Resources API Client

Fetches resource listings from the directory's public HTTP endpoint
(`GET /api/public/resources`), with retries and paging.
"""

import time
import logging
from typing import Dict, Generator, List, Optional
from urllib.parse import urljoin

import requests

from .models import FacetSelection, Resource
from .processor import ResourceProcessor
from .utils import RetryConfig, call_with_backoff

RESOURCES_ENDPOINT = 'api/public/resources'


class ResourceApiError(Exception):
    """Raised when the resources endpoint returns an unusable response."""

    def __init__(self, message, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class _RetryableStatus(requests.exceptions.RequestException):
    """Server-side failure worth retrying (5xx or 429)."""


class ResourceApiClient:
    """Client for the public resources endpoint."""

    def __init__(self, base_url: str = 'http://localhost:4000/', timeout: float = 30.0,
                 max_retries: int = 3, page_size: int = 12, cache_ttl: float = 1800.0,
                 backoff: float = 1.0):
        self.base_url = base_url.rstrip('/') + '/'
        self.timeout = timeout
        self.max_retries = max(1, max_retries)
        self.page_size = max(1, page_size)
        self.cache_ttl = cache_ttl
        self.session = requests.Session()
        self.session.headers.update({
            'User-Agent': 'ResourceFinder/0.1.0',
            'Accept': 'application/json'
        })
        self.logger = logging.getLogger(__name__)
        self.processor = ResourceProcessor()
        self.retry_config = RetryConfig(
            max_attempts=self.max_retries,
            base_delay=backoff,
            retry_on=(
                requests.exceptions.ConnectionError,
                requests.exceptions.Timeout,
                _RetryableStatus,
            ),
            logger=self.logger
        )
        self._cache: Optional[List[Resource]] = None
        self._cache_time: float = 0.0

    def _get_once(self, url: str, params: Dict) -> requests.Response:
        response = self.session.get(url, params=params, timeout=self.timeout)
        if response.status_code == 429 or response.status_code >= 500:
            raise _RetryableStatus(f"Server returned {response.status_code} for {url}")
        return response

    def _make_request(self, endpoint: str, params: Optional[Dict] = None) -> Dict:
        """GET an endpoint and decode its JSON body."""
        url = urljoin(self.base_url, endpoint)
        try:
            response = call_with_backoff(self.retry_config, self._get_once, url, params or {})
        except _RetryableStatus as e:
            raise ResourceApiError(str(e)) from e

        if response.status_code >= 400:
            raise ResourceApiError(
                f"Failed to load resources ({response.status_code})",
                status_code=response.status_code
            )

        try:
            return response.json()
        except ValueError as e:
            raise ResourceApiError(f"Unexpected non-JSON response from {url}") from e

    def get_resources(self, page: int = 1, limit: Optional[int] = None, query: str = '',
                      selection: Optional[FacetSelection] = None) -> Dict:
        """
        Fetch one page of resources.

        Args:
            page: Page number (1-based)
            limit: Items per page, defaults to the client's page size
            query: Optional server-side text query
            selection: Optional facet selection passed as comma-joined params

        Returns:
            Decoded payload with an ``items`` list and, when the server sends
            one, a ``pagination`` block
        """
        params = {'page': page, 'limit': limit or self.page_size}
        query = (query or '').strip()
        if query:
            params['q'] = query
        if selection is not None:
            params.update(selection.to_query_params())

        data = self._make_request(RESOURCES_ENDPOINT, params)
        if not isinstance(data, dict) or not isinstance(data.get('items'), list):
            raise ResourceApiError('Unexpected response from server')
        return data

    def iter_resources(self, query: str = '',
                       selection: Optional[FacetSelection] = None) -> Generator[Dict, None, None]:
        """Generator over raw resource items across all pages."""
        page = 1
        while True:
            data = self.get_resources(page=page, query=query, selection=selection)
            items = data['items']
            if not items:
                break

            for item in items:
                yield item

            pagination = data.get('pagination') or {}
            total_pages = pagination.get('pages')
            if not isinstance(total_pages, int) or page >= total_pages:
                break
            page += 1

    def fetch_all(self, use_cache: bool = True) -> List[Resource]:
        """
        Fetch and ingest the full, unfiltered resource list.

        The result is cached in memory for ``cache_ttl`` seconds.
        """
        now = time.time()
        if use_cache and self._cache is not None and now - self._cache_time < self.cache_ttl:
            self.logger.debug(f"Using cached resource list ({len(self._cache)} items)")
            return list(self._cache)

        resources = self.processor.process_items(self.iter_resources())
        self.logger.info(f"Fetched {len(resources)} resources from {self.base_url}")

        self._cache = resources
        self._cache_time = now
        return list(resources)

    def clear_cache(self):
        self._cache = None
        self._cache_time = 0.0
