"""Adapters between GeoPandas/Shapely data and shapes.

Commonly used exports:
- read_collection: Load a vector file into a ShapeCollection
- collection_from_geodataframe: GeoDataFrame rows to a ShapeCollection
- shape_from_geometry: Shapely geometry to a shape
- parse_query: Bounding box string or WKT to a query shape
- ensure_crs: CRS validation and transformation
- make_valid_geometries: Repair invalid geometries
"""

from spatial_collection.spatial.convert import (
    collection_from_geodataframe,
    parse_query,
    read_collection,
    shape_from_geometry,
)
from spatial_collection.spatial.utils import ensure_crs, make_valid_geometries

__all__ = [
    "read_collection",
    "collection_from_geodataframe",
    "shape_from_geometry",
    "parse_query",
    "ensure_crs",
    "make_valid_geometries",
]
