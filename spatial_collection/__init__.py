"""Shape collections: many shapes treated as one for spatial relation queries.

Usage:

    from spatial_collection import SpatialContext, SpatialRelation

    ctx = SpatialContext.euclidean()
    collection = ctx.make_collection(
        [ctx.make_rectangle(0, 2, 0, 2), ctx.make_rectangle(5, 7, 5, 7)]
    )
    collection.relate(ctx.make_point(1, 1))  # SpatialRelation.CONTAINS
"""

from spatial_collection.config import CollectionConfig, SpatialContextConfig
from spatial_collection.context import SpatialContext
from spatial_collection.errors import InvalidArgumentError, InvalidShapeError
from spatial_collection.models.enums import SpatialRelation
from spatial_collection.shapes import (
    Circle,
    PointShape,
    PolygonShape,
    Rectangle,
    Shape,
    ShapeCollection,
)

__all__ = [
    "SpatialContext",
    "SpatialContextConfig",
    "CollectionConfig",
    "SpatialRelation",
    "Shape",
    "PointShape",
    "Rectangle",
    "Circle",
    "PolygonShape",
    "ShapeCollection",
    "InvalidArgumentError",
    "InvalidShapeError",
]

__version__ = "0.1.0"
