"""Conversion of shapely geometries and GeoDataFrames into shapes.

Commonly used entry points:
- shape_from_geometry: One shapely geometry to one shape (multi-part geometries
  become a ShapeCollection)
- collection_from_geodataframe: One member per GeoDataFrame row
- read_collection: Load a shapefile/GeoJSON/GeoPackage into a collection
- parse_query: Parse a bbox string or WKT into a query shape
"""

import logging
from pathlib import Path

import geopandas as gpd
from shapely import wkt
from shapely.errors import ShapelyError
from shapely.geometry.base import BaseGeometry

from spatial_collection.context import SpatialContext
from spatial_collection.errors import InvalidShapeError
from spatial_collection.shapes.collection import ShapeCollection
from spatial_collection.shapes.protocols import Shape
from spatial_collection.spatial.utils import ensure_crs, make_valid_geometries

logger = logging.getLogger(__name__)


def shape_from_geometry(geometry: BaseGeometry, ctx: SpatialContext) -> Shape:
    """Convert a shapely geometry into a shape.

    Args:
        geometry: Point, Polygon, MultiPolygon, MultiPoint or GeometryCollection
        ctx: Spatial context to build shapes in

    Returns:
        PointShape, PolygonShape, or ShapeCollection for MultiPoint and
        GeometryCollection (converted recursively)

    Raises:
        InvalidShapeError: If the geometry is empty or of an unsupported type
            (e.g. LineString)
    """
    if geometry is None or geometry.is_empty:
        msg = "Cannot convert an empty geometry to a shape"
        raise InvalidShapeError(msg)

    geom_type = geometry.geom_type
    if geom_type == "Point":
        return ctx.make_point(geometry.x, geometry.y)
    if geom_type in ("Polygon", "MultiPolygon"):
        return ctx.make_polygon(geometry)
    if geom_type in ("MultiPoint", "GeometryCollection"):
        parts = [shape_from_geometry(part, ctx) for part in geometry.geoms if not part.is_empty]
        return ShapeCollection(parts, ctx)

    msg = f"Unsupported geometry type: {geom_type}. Expected Point or (Multi)Polygon"
    raise InvalidShapeError(msg)


def collection_from_geodataframe(
    gdf: gpd.GeoDataFrame,
    ctx: SpatialContext,
    target_crs: str | None = None,
) -> ShapeCollection:
    """Build a collection with one member per GeoDataFrame row, in row order.

    Null and empty geometries are skipped; invalid ones are repaired first.

    Args:
        gdf: Input GeoDataFrame
        ctx: Spatial context to build shapes in
        target_crs: If given, transform the data to this CRS first

    Returns:
        ShapeCollection of the converted geometries

    Raises:
        ValueError: If target_crs is given and the data has no CRS
        InvalidArgumentError: If no usable geometries remain
        InvalidShapeError: If a geometry cannot be converted
    """
    if target_crs is not None:
        gdf = ensure_crs(gdf, target_crs=target_crs)

    gdf = make_valid_geometries(gdf)

    usable = gdf.geometry.notna() & ~gdf.geometry.is_empty
    dropped = int((~usable).sum())
    if dropped:
        logger.warning(f"Skipping {dropped} null or empty geometries")

    shapes = [shape_from_geometry(geom, ctx) for geom in gdf.geometry[usable]]
    logger.debug(f"Converted {len(shapes)} geometries to shapes")

    return ShapeCollection(shapes, ctx)


def read_collection(
    path: Path,
    ctx: SpatialContext,
    target_crs: str | None = None,
) -> ShapeCollection:
    """Read a vector file (shapefile, GeoJSON, GeoPackage) into a collection."""
    logger.info(f"Reading geometries from {path}")
    gdf = gpd.read_file(path)
    return collection_from_geodataframe(gdf, ctx, target_crs=target_crs)


def parse_query(text: str, ctx: SpatialContext) -> Shape:
    """Parse a query shape.

    Args:
        text: Either "min_x,min_y,max_x,max_y" (a bounding box, in shapely
            bounds order) or a WKT string
        ctx: Spatial context to build the shape in

    Returns:
        Rectangle for a bounding box, otherwise the converted WKT geometry

    Raises:
        InvalidShapeError: If the text is neither a bounding box nor valid WKT
    """
    parts = [part.strip() for part in text.split(",")]
    if len(parts) == 4:
        try:
            min_x, min_y, max_x, max_y = (float(part) for part in parts)
        except ValueError:
            pass
        else:
            return ctx.make_rectangle(min_x, max_x, min_y, max_y)

    try:
        geometry = wkt.loads(text)
    except ShapelyError as e:
        msg = f"Query is neither a bounding box nor valid WKT: {text!r}"
        raise InvalidShapeError(msg) from e

    return shape_from_geometry(geometry, ctx)
