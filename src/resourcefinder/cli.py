"""
Command Line Interface

Search, filter and rank community resources from a JSON export or the
public resources API.
"""

import json
import sys
from typing import List, Optional

import click
import requests
from tqdm import tqdm

from .api_client import ResourceApiClient, ResourceApiError
from .config import Config
from .discovery import DistanceRanker, ResultComposer, WeightedFuzzyMatcher, paginate
from .discovery.distance import format_distance
from .geo import Coordinates, resolve_regions
from .models import FacetSelection, Resource
from .processor import ResourceFileError, ResourceProcessor


def _build_composer(config: Config) -> ResultComposer:
    search_config = config.get_search_config()
    return ResultComposer(
        matcher=WeightedFuzzyMatcher(threshold=search_config['threshold']),
        ranker=DistanceRanker(resolve_regions(search_config['regions_file']))
    )


def _load_resources(config: Config, file_path: Optional[str]) -> List[Resource]:
    """Load resources from a file, or fetch every page from the API."""
    processor = ResourceProcessor()
    if file_path:
        return processor.load_resources_file(file_path)

    client = ResourceApiClient(**config.get_api_config())
    click.echo(f"Fetching resources from {client.base_url}...", err=True)

    items = []
    with tqdm(desc="Loading resources", unit="item", file=sys.stderr) as pbar:
        for item in client.iter_resources():
            items.append(item)
            pbar.update(1)

    return processor.process_items(items)


def _user_coordinates(lat: Optional[float], lon: Optional[float]) -> Optional[Coordinates]:
    if lat is None and lon is None:
        return None
    if lat is None or lon is None:
        raise click.BadParameter('--lat and --lon must be given together')
    coordinates = Coordinates(lat, lon)
    if not coordinates.is_valid():
        raise click.BadParameter(f"Coordinates out of range: {lat}, {lon}")
    return coordinates


def _selection(locations, types, audiences) -> FacetSelection:
    return FacetSelection.from_query_params({
        'locations': list(locations),
        'types': list(types),
        'audiences': list(audiences)
    })


def _echo_result(index: int, result, ranker: DistanceRanker, user: Optional[Coordinates]):
    resource = result.resource
    click.echo(f"{index}. {resource.name}")
    click.echo(f"   {resource.url}")
    if resource.locations:
        click.echo(f"   Locations: {', '.join(resource.locations)}")
    if resource.types:
        click.echo(f"   Types: {', '.join(resource.types)}")
    if resource.audiences:
        click.echo(f"   Audiences: {', '.join(resource.audiences)}")
    if user is not None:
        label = ranker.describe(resource, user)
        if label is not None:
            click.echo(f"   Distance: {label.text} ({label.tooltip})")
    click.echo()


facet_options = [
    click.option('--file', 'file_path', type=click.Path(exists=True, dir_okay=False),
                 help='Read resources from a JSON file instead of the API'),
    click.option('--location', '-l', 'locations', multiple=True, help='Location facet (repeatable, comma separated)'),
    click.option('--type', '-t', 'types', multiple=True, help='Type facet (repeatable, comma separated)'),
    click.option('--audience', '-a', 'audiences', multiple=True, help='Audience facet (repeatable, comma separated)'),
]


def with_facet_options(func):
    for option in reversed(facet_options):
        func = option(func)
    return func


@click.group()
@click.option('--verbose', '-v', is_flag=True, help='Enable verbose logging')
def cli(verbose):
    """Resource Finder - search and filter community resources"""
    config = Config()
    if verbose:
        config.log_level = 'DEBUG'
    config.setup_logging()


@cli.command()
@click.argument('query', required=False, default='')
@with_facet_options
@click.option('--lat', type=float, help='User latitude for distance display')
@click.option('--lon', type=float, help='User longitude for distance display')
@click.option('--page', default=1, help='Page number')
@click.option('--limit', default=None, type=int, help='Results per page')
@click.option('--json', 'as_json', is_flag=True, help='Print results as JSON')
def search(query, file_path, locations, types, audiences, lat, lon, page, limit, as_json):
    """Search resources by text and facets, sorted by name."""
    config = Config()
    user = _user_coordinates(lat, lon)

    try:
        resources = _load_resources(config, file_path)
    except (ResourceFileError, ResourceApiError, requests.exceptions.RequestException) as e:
        click.echo(f"❌ {e}", err=True)
        sys.exit(1)

    composer = _build_composer(config)
    results = composer.run(resources, query, _selection(locations, types, audiences), user)
    result_page = paginate(results, page, limit or config.page_size)

    if as_json:
        click.echo(json.dumps({
            'items': [r.to_dict() for r in result_page.items],
            'pagination': result_page.pagination()
        }, indent=2))
        return

    if not results:
        click.echo("No resources found matching your search.")
        return

    click.echo(f"Showing {len(result_page.items)} of {len(results)} result{'' if len(results) == 1 else 's'} "
               f"(page {result_page.page} of {result_page.pages})\n")
    start = (result_page.page - 1) * result_page.limit
    for offset, result in enumerate(result_page.items, start=1):
        _echo_result(start + offset, result, composer.ranker, user)


@cli.command()
@with_facet_options
def facets(file_path, locations, types, audiences):
    """Show facet counts, optionally after applying facet selections."""
    config = Config()

    try:
        resources = _load_resources(config, file_path)
    except (ResourceFileError, ResourceApiError, requests.exceptions.RequestException) as e:
        click.echo(f"❌ {e}", err=True)
        sys.exit(1)

    composer = _build_composer(config)
    selection = _selection(locations, types, audiences)
    matching = composer.filter_only(resources, selection)
    counts = composer.count_facets(matching)

    click.echo(f"{len(matching)} resource{'' if len(matching) == 1 else 's'} match")
    for dimension, tally in counts.items():
        click.echo(f"\n{dimension.capitalize()}:")
        for value, count in tally.items():
            click.echo(f"   {value}: {count}")


@cli.command()
@click.option('--lat', type=float, required=True, help='User latitude')
@click.option('--lon', type=float, required=True, help='User longitude')
@click.option('--max-distance', type=float, default=None, help='Maximum distance in miles')
@with_facet_options
def nearby(lat, lon, max_distance, file_path, locations, types, audiences):
    """List resources near a location, nearest first."""
    config = Config()
    user = _user_coordinates(lat, lon)
    max_distance = max_distance if max_distance is not None else config.max_distance_miles

    try:
        resources = _load_resources(config, file_path)
    except (ResourceFileError, ResourceApiError, requests.exceptions.RequestException) as e:
        click.echo(f"❌ {e}", err=True)
        sys.exit(1)

    composer = _build_composer(config)
    results = composer.nearby(resources, user, max_distance, _selection(locations, types, audiences))

    if not results:
        click.echo(f"No resources within {max_distance:g} miles.")
        return

    click.echo(f"{len(results)} resource{'' if len(results) == 1 else 's'} within {max_distance:g} miles:\n")
    for index, result in enumerate(results, start=1):
        _echo_result(index, result, composer.ranker, user)


@cli.command()
def regions():
    """Show the region centroid table used for approximate distances."""
    config = Config()
    table = resolve_regions(config.regions_file)

    click.echo("Regions:")
    for region in table:
        radius = format_distance(region.radius_miles, precise=True) if region.radius_miles else 'n/a'
        click.echo(f"   {region.name}: {region.coordinates.latitude:.4f}, "
                   f"{region.coordinates.longitude:.4f} (radius {radius})")


if __name__ == '__main__':
    cli()
