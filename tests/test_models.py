"""
Tests for the data models.
"""

import pytest
from dataclasses import FrozenInstanceError

from resourcefinder.geo import Coordinates
from resourcefinder.models import (
    FacetSelection,
    OrderedResult,
    Resource,
    ResultPage,
    normalize_list,
)

from conftest import make_resource


class TestResource:
    """Test cases for the Resource dataclass."""

    def test_from_api_response(self, sample_resource_data):
        resource = Resource.from_api_response(sample_resource_data)

        assert resource.id == '65a1f0c2e4b0a1b2c3d4e5f6'
        assert resource.name == 'Fort Bend Pride Counseling'
        assert resource.url == 'https://fortbendpride.example.org/counseling'
        assert resource.phone == '281-555-0134'
        assert resource.locations == ('Fort Bend', 'Virtual')
        assert resource.types == ('Mental Health',)
        assert resource.audiences == ('Trans', 'Youth')
        assert resource.tags == ('counseling', 'trans', 'support group')
        assert resource.coordinates is None
        assert resource.is_valid()

    def test_from_api_response_minimal(self):
        """Missing arrays become empty and missing text becomes blank."""
        resource = Resource.from_api_response({'id': 7, 'name': 'Drop-in Center'})

        assert resource.id == '7'
        assert resource.description == ''
        assert resource.locations == ()
        assert resource.types == ()
        assert resource.audiences == ()
        assert resource.tags == ()
        assert resource.phone is None
        assert not resource.is_valid()

    def test_tag_sets_are_deduplicated(self):
        resource = Resource.from_api_response({
            'id': 'x', 'name': 'N', 'description': 'D', 'url': 'U',
            'locations': ['Houston', ' Houston ', '', None, 'Virtual'],
            'types': 'Legal'
        })
        assert resource.locations == ('Houston', 'Virtual')
        assert resource.types == ('Legal',)

    def test_coordinates_parsed(self):
        resource = Resource.from_api_response({
            'id': 'x', 'name': 'N', 'description': 'D', 'url': 'U',
            'coordinates': {'latitude': 29.6, 'longitude': -95.6}
        })
        assert resource.coordinates == Coordinates(29.6, -95.6)
        assert resource.precise_coordinates == Coordinates(29.6, -95.6)

    def test_non_list_facet_values_become_empty(self):
        resource = Resource.from_api_response({
            'id': 'x', 'name': 'N', 'description': 'D', 'url': 'U',
            'locations': 5, 'types': True, 'audiences': {'a': 1}, 'tags': 7
        })
        assert resource.locations == ()
        assert resource.types == ()
        assert resource.audiences == ()
        assert resource.tags == ()

    def test_out_of_range_coordinates_dropped(self):
        resource = Resource.from_api_response({
            'id': 'x', 'name': 'N', 'description': 'D', 'url': 'U',
            'coordinates': {'latitude': 123.0, 'longitude': -95.6}
        })
        assert resource.coordinates is None

    def test_precise_coordinates_ignores_invalid_values(self):
        resource = make_resource('Bad Pin', coordinates=Coordinates(95.0, 10.0))
        assert resource.coordinates is not None
        assert resource.precise_coordinates is None

    @pytest.mark.parametrize('field_name', ['id', 'name', 'description', 'url'])
    def test_is_valid_requires_field(self, field_name):
        fields = {'id': 'complete', 'name': 'Complete Record',
                  'description': 'Has everything.', 'url': 'https://example.org/'}
        fields[field_name] = '   '
        resource = Resource(**fields)
        assert not resource.is_valid()

    def test_is_frozen(self):
        resource = make_resource('Frozen')
        with pytest.raises(FrozenInstanceError):
            resource.name = 'Changed'

    def test_to_dict(self):
        resource = make_resource('Mapped', locations=['Houston'], coordinates=Coordinates(29.7, -95.3))
        data = resource.to_dict()
        assert data['name'] == 'Mapped'
        assert data['locations'] == ['Houston']
        assert data['coordinates'] == {'latitude': 29.7, 'longitude': -95.3}
        assert 'phone' not in data


class TestFacetSelection:
    """Test cases for FacetSelection."""

    def test_default_is_empty(self):
        assert FacetSelection().is_empty()

    def test_of(self):
        selection = FacetSelection.of(locations=['Houston'], audiences=['Trans', 'Youth'])
        assert selection.locations == frozenset({'Houston'})
        assert selection.types == frozenset()
        assert selection.audiences == frozenset({'Trans', 'Youth'})
        assert not selection.is_empty()

    def test_from_query_params(self):
        selection = FacetSelection.from_query_params({
            'locations': 'Houston, Virtual,,',
            'types': ['Legal', 'Medical,Mental Health'],
        })
        assert selection.locations == frozenset({'Houston', 'Virtual'})
        assert selection.types == frozenset({'Legal', 'Medical', 'Mental Health'})
        assert selection.audiences == frozenset()

    def test_fields_coerced_to_frozensets(self):
        selection = FacetSelection(locations=['Houston', 'Houston'], types='Legal')
        assert selection.locations == frozenset({'Houston'})
        assert selection.types == frozenset({'Legal'})
        assert selection.audiences == frozenset()
        assert FacetSelection(audiences=None).is_empty()

    def test_to_query_params(self):
        selection = FacetSelection.of(locations=['Virtual', 'Houston'])
        assert selection.to_query_params() == {'locations': 'Houston,Virtual'}

    def test_normalize_list(self):
        assert normalize_list(None) == []
        assert normalize_list('') == []
        assert normalize_list(' a , b ') == ['a', 'b']
        assert normalize_list(['a,b', None, 'c']) == ['a', 'b', 'c']


class TestResults:
    """Test cases for result containers."""

    def test_ordered_result_to_dict_without_distance(self):
        result = OrderedResult(make_resource('Plain'))
        assert 'distance' not in result.to_dict()
        assert 'accuracy' not in result.to_dict()

    def test_ordered_result_to_dict_with_unknown_distance(self):
        result = OrderedResult(make_resource('Online'), distance=None, accuracy='approximate')
        data = result.to_dict()
        assert data['distance'] is None
        assert data['accuracy'] == 'approximate'

    def test_result_page_pages(self):
        page = ResultPage(items=(1, 2), page=1, limit=2, total=5)
        assert page.pages == 3
        assert page.pagination() == {'page': 1, 'limit': 2, 'total': 5, 'pages': 3}

    def test_result_page_empty(self):
        assert ResultPage(items=(), page=1, limit=12, total=0).pages == 0
