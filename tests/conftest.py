"""
Pytest configuration and shared fixtures.
"""

import json
import pytest
from pathlib import Path

import sys
sys.path.insert(0, str(Path(__file__).parent.parent / 'src'))

from resourcefinder.geo import Coordinates
from resourcefinder.models import FacetSelection, Resource
from resourcefinder.processor import ResourceProcessor


FORT_BEND = Coordinates(29.5656, -95.6572)
HOUSTON = Coordinates(29.7604, -95.3698)


def make_resource(name, **overrides):
    """Build a valid Resource with sensible defaults."""
    data = {
        'id': overrides.pop('id', name.lower().replace(' ', '-')),
        'name': name,
        'description': overrides.pop('description', f"{name} serves the community."),
        'url': overrides.pop('url', 'https://example.org/'),
    }
    for key in ('locations', 'types', 'audiences', 'tags'):
        data[key] = tuple(overrides.pop(key, ()))
    data.update(overrides)
    return Resource(**data)


@pytest.fixture
def fort_bend():
    return FORT_BEND


@pytest.fixture
def houston():
    return HOUSTON


@pytest.fixture
def processor():
    """Create a ResourceProcessor instance."""
    return ResourceProcessor()


@pytest.fixture
def sample_resource_data():
    """Sample resource item as returned by the public API."""
    return {
        '_id': '65a1f0c2e4b0a1b2c3d4e5f6',
        'name': 'Fort Bend Pride Counseling',
        'description': 'Affirming counseling and support groups for LGBTQ+ adults and youth.',
        'url': 'https://fortbendpride.example.org/counseling',
        'phone': '281-555-0134',
        'locations': ['Fort Bend', 'Virtual'],
        'types': ['Mental Health'],
        'audiences': ['Trans', 'Youth'],
        'tags': ['counseling', 'trans', 'support group'],
        'status': 'active'
    }


@pytest.fixture
def sample_resources_response(sample_resource_data):
    """Sample public resources API response."""
    return {
        'items': [
            sample_resource_data,
            {
                '_id': '65a1f0c2e4b0a1b2c3d4e5f7',
                'name': 'Houston Legal Aid Clinic',
                'description': 'Free legal help with name and gender marker changes.',
                'url': 'https://legal.example.org/',
                'locations': ['Houston'],
                'types': ['Legal'],
                'audiences': ['Trans'],
                'tags': ['legal', 'name change']
            }
        ],
        'pagination': {'page': 1, 'limit': 12, 'total': 2, 'pages': 1}
    }


@pytest.fixture
def directory():
    """A small resource directory covering each facet dimension."""
    return [
        make_resource('Zed Clinic', locations=['Houston'], types=['Medical'], audiences=['All'],
                      description='Primary care clinic with sliding scale fees.', tags=['health']),
        make_resource('Alpha Group', locations=['Houston'], types=['Community'], audiences=['Seniors'],
                      description='Weekly social meetups for older adults.', tags=['social']),
        make_resource('Trans Youth Circle', locations=['Fort Bend', 'Virtual'], types=['Youth'],
                      audiences=['Trans', 'Youth'], description='Peer support for teens.',
                      tags=['trans', 'peer support']),
        make_resource('Online Helpline', locations=['Virtual'], types=['Mental Health'],
                      audiences=['All'], description='Phone and chat crisis support.', tags=['crisis']),
        make_resource('Gulf Coast Legal', locations=['South TX'], types=['Legal'], audiences=['Families'],
                      description='Family law consultations.', tags=['legal']),
    ]


@pytest.fixture
def empty_selection():
    return FacetSelection()


@pytest.fixture
def resources_file(tmp_path, sample_resources_response):
    """Write the sample response to a JSON file and return its path."""
    path = tmp_path / 'resources.json'
    path.write_text(json.dumps(sample_resources_response), encoding='utf-8')
    return path
