"""General GeoDataFrame utilities used before building shapes.

This module provides:
- CRS validation and transformation
- Geometry validation and repair
"""

import logging

import geopandas as gpd
import shapely
from shapely.geometry import MultiPolygon, Polygon
from shapely.geometry.base import BaseGeometry
from shapely.validation import make_valid

logger = logging.getLogger(__name__)

POLYGONAL_TYPES = ("Polygon", "MultiPolygon")


def ensure_crs(gdf: gpd.GeoDataFrame, target_crs: str = "EPSG:4326") -> gpd.GeoDataFrame:
    """Ensure GeoDataFrame is in the target CRS, transforming if necessary.

    Args:
        gdf: Input GeoDataFrame
        target_crs: Target coordinate reference system (default: EPSG:4326 / WGS84)

    Returns:
        GeoDataFrame in target CRS (transformed if necessary, original if
        already correct)

    Raises:
        ValueError: If input GeoDataFrame has no CRS defined
    """
    if gdf.crs is None:
        msg = "Input GeoDataFrame has no CRS defined"
        raise ValueError(msg)

    if gdf.crs != target_crs:
        return gdf.to_crs(target_crs)

    return gdf


def make_valid_geometries(gdf: gpd.GeoDataFrame) -> gpd.GeoDataFrame:
    """Repair invalid geometries using Shapely's make_valid.

    Fixes self-intersections, unclosed rings, etc. Valid geometries are left
    untouched so their type does not change. A repaired polygon keeps only its
    polygonal parts: the lines and points make_valid leaves behind for spikes
    and cut lines are dropped with a warning.

    Args:
        gdf: Input GeoDataFrame (may contain invalid geometries)

    Returns:
        Copy of the GeoDataFrame with repaired geometries
    """
    gdf = gdf.copy()
    gdf["geometry"] = gdf.geometry.apply(
        lambda geom: _repair(geom) if geom is not None and not geom.is_valid else geom
    )
    return gdf


def _repair(geom: BaseGeometry) -> BaseGeometry:
    repaired = make_valid(geom)
    if geom.geom_type not in POLYGONAL_TYPES or repaired.geom_type in POLYGONAL_TYPES:
        return repaired

    polygons = []
    dropped = 0
    for part in shapely.get_parts(repaired):
        if part.geom_type == "Polygon":
            polygons.append(part)
        elif part.geom_type == "MultiPolygon":
            polygons.extend(part.geoms)
        else:
            dropped += 1
    if dropped:
        logger.warning(f"Dropped {dropped} lower-dimension part(s) of a repaired polygon")

    if not polygons:
        return Polygon()
    if len(polygons) == 1:
        return polygons[0]
    return MultiPolygon(polygons)
