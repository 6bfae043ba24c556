"""Command line interface for inspecting shape collections.

Usage:
    spatial-collection describe tests/data/sites.geojson
    spatial-collection relate tests/data/sites.geojson "0,0,10,10"
    spatial-collection relate sites.geojson "POLYGON ((0 0, 5 0, 5 5, 0 5, 0 0))" --geo
    spatial-collection relate sites.geojson -- "-10,-10,0,0"
    spatial-collection --help
"""

import json
import logging
import logging.config
from pathlib import Path

import typer

from spatial_collection.config import SpatialContextConfig
from spatial_collection.context import SpatialContext
from spatial_collection.errors import InvalidArgumentError, InvalidShapeError
from spatial_collection.shapes.collection import ShapeCollection
from spatial_collection.spatial.convert import parse_query, read_collection

logger = logging.getLogger(__name__)

app = typer.Typer(help="Treat the geometries of a vector file as a single shape")

WGS84 = "EPSG:4326"


def configure_logging(verbose: bool = False) -> None:
    """Configure logging from logging-dev.json if present, else a simple text format."""
    config_path = Path(__file__).parent.parent / "logging-dev.json"

    if config_path.exists():
        with open(config_path) as f:
            logging.config.dictConfig(json.load(f))
    else:
        logging.basicConfig(
            level=logging.INFO,
            format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        )
    if verbose:
        logging.getLogger("spatial_collection").setLevel(logging.DEBUG)


def _load(geometry_file: Path, geo: bool, crs: str | None) -> ShapeCollection:
    ctx = SpatialContext(SpatialContextConfig(geo=geo))
    target_crs = crs or (WGS84 if geo else None)
    return read_collection(geometry_file, ctx, target_crs=target_crs)


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
):
    configure_logging(verbose)


@app.command()
def describe(
    geometry_file: Path = typer.Argument(
        ...,
        help="Path to shapefile (.shp), GeoJSON (.geojson) or GeoPackage (.gpkg)",
        exists=True,
    ),
    geo: bool = typer.Option(
        False, "--geo/--no-geo", help="Treat coordinates as longitude/latitude"
    ),
    crs: str | None = typer.Option(
        None, "--crs", help="Transform to this CRS first (default: EPSG:4326 with --geo)"
    ),
):
    """Print the bounding box, area upper bound and center of the collection."""
    try:
        collection = _load(geometry_file, geo, crs)
    except (InvalidArgumentError, InvalidShapeError, ValueError) as e:
        logger.error(f"Cannot build collection from {geometry_file}: {e}")
        raise typer.Exit(1)

    bbox = collection.bounding_box
    center = collection.center
    typer.echo(f"Shapes: {len(collection)}")
    typer.echo(
        f"Bounding box: min_x={bbox.min_x} max_x={bbox.max_x} "
        f"min_y={bbox.min_y} max_y={bbox.max_y}"
    )
    typer.echo(f"Area (upper bound): {collection.get_area()}")
    typer.echo(f"Center: ({center.x}, {center.y})")
    typer.echo(f"Has area: {collection.has_area}")


@app.command()
def relate(
    geometry_file: Path = typer.Argument(
        ...,
        help="Path to shapefile (.shp), GeoJSON (.geojson) or GeoPackage (.gpkg)",
        exists=True,
    ),
    query: str = typer.Argument(
        ...,
        help=(
            'Query as "min_x,min_y,max_x,max_y" or WKT. '
            'Put "--" before queries starting with "-", e.g. -- "-10,-10,0,0"'
        ),
    ),
    geo: bool = typer.Option(
        False, "--geo/--no-geo", help="Treat coordinates as longitude/latitude"
    ),
    crs: str | None = typer.Option(
        None, "--crs", help="Transform to this CRS first (default: EPSG:4326 with --geo)"
    ),
):
    """Print how the collection relates to the query shape."""
    try:
        collection = _load(geometry_file, geo, crs)
        query_shape = parse_query(query, collection.ctx)
    except (InvalidArgumentError, InvalidShapeError, ValueError) as e:
        logger.error(f"Cannot relate {geometry_file} to {query!r}: {e}")
        raise typer.Exit(1)

    relation = collection.relate(query_shape)
    logger.info(f"{len(collection)} shape(s) relate to query as {relation.name}")
    typer.echo(relation.name)


if __name__ == "__main__":
    app()
