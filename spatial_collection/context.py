"""Spatial context: coordinate domain and shape factory.

A SpatialContext knows whether coordinates are geographic (longitude wraps at
the dateline) or Euclidean, validates coordinates against the world bounds, and
builds every concrete shape.
"""

import logging
from collections.abc import Sequence

from shapely.geometry.base import BaseGeometry

from spatial_collection.config import (
    DEFAULT_COLLECTION_CONFIG,
    DEFAULT_CONTEXT_CONFIG,
    GEO,
    CollectionConfig,
    SpatialContextConfig,
)
from spatial_collection.errors import InvalidShapeError
from spatial_collection.shapes.circle import Circle
from spatial_collection.shapes.collection import ShapeCollection
from spatial_collection.shapes.point import PointShape
from spatial_collection.shapes.polygon import PolygonShape
from spatial_collection.shapes.protocols import Shape
from spatial_collection.shapes.rectangle import Rectangle

logger = logging.getLogger(__name__)


class SpatialContext:
    """Coordinate domain plus factory methods for shapes.

    Args:
        config: Coordinate domain configuration (geo flag and world bounds)
        collection_config: Configuration handed to collections built here
    """

    def __init__(
        self,
        config: SpatialContextConfig = DEFAULT_CONTEXT_CONFIG,
        collection_config: CollectionConfig = DEFAULT_COLLECTION_CONFIG,
    ):
        self.config = config
        self.collection_config = collection_config

    @classmethod
    def geographic(cls) -> "SpatialContext":
        return cls(SpatialContextConfig(geo=True))

    @classmethod
    def euclidean(
        cls,
        min_x: float = float("-inf"),
        max_x: float = float("inf"),
        min_y: float = float("-inf"),
        max_y: float = float("inf"),
    ) -> "SpatialContext":
        return cls(
            SpatialContextConfig(geo=False, min_x=min_x, max_x=max_x, min_y=min_y, max_y=max_y)
        )

    @property
    def geo(self) -> bool:
        return self.config.geo

    @property
    def world_bounds(self) -> tuple[float, float, float, float]:
        """World bounds as (min_x, max_x, min_y, max_y)."""
        c = self.config
        return c.min_x, c.max_x, c.min_y, c.max_y

    def normalize_x(self, x: float) -> float:
        """Wrap a longitude into [-180, 180]; identity in Euclidean contexts."""
        if not self.geo or GEO.MIN_LON <= x <= GEO.MAX_LON:
            return x
        offset = (x + GEO.MAX_LON) % GEO.LON_SPAN
        if offset == 0 and x > 0:
            return GEO.MAX_LON
        return GEO.MIN_LON + offset

    def verify_x(self, x: float) -> None:
        if not self.config.min_x <= x <= self.config.max_x:
            msg = f"Bad X value {x} is not in boundary [{self.config.min_x}, {self.config.max_x}]"
            raise InvalidShapeError(msg)

    def verify_y(self, y: float) -> None:
        if not self.config.min_y <= y <= self.config.max_y:
            msg = f"Bad Y value {y} is not in boundary [{self.config.min_y}, {self.config.max_y}]"
            raise InvalidShapeError(msg)

    def make_point(self, x: float, y: float) -> PointShape:
        self.verify_x(x)
        self.verify_y(y)
        return PointShape(x, y, ctx=self)

    def make_rectangle(self, min_x: float, max_x: float, min_y: float, max_y: float) -> Rectangle:
        """Build a rectangle from its x and y ranges.

        In geographic contexts min_x > max_x denotes a rectangle crossing the
        dateline. An edge lying on the dateline is normalised so that the
        rectangle does not cross it.

        Raises:
            InvalidShapeError: If values fall outside the world bounds or a
                range is inverted where inversion is not allowed
        """
        self.verify_y(min_y)
        self.verify_y(max_y)
        if min_y > max_y:
            msg = f"max_y must be >= min_y: {min_y} to {max_y}"
            raise InvalidShapeError(msg)

        self.verify_x(min_x)
        self.verify_x(max_x)
        if self.geo:
            if min_x == GEO.MAX_LON and min_x != max_x:
                min_x = GEO.MIN_LON
            elif max_x == GEO.MIN_LON and min_x != max_x:
                max_x = GEO.MAX_LON
        elif min_x > max_x:
            msg = f"max_x must be >= min_x: {min_x} to {max_x}"
            raise InvalidShapeError(msg)

        return Rectangle(min_x, max_x, min_y, max_y, ctx=self)

    def make_circle(self, center: PointShape, radius: float) -> Circle:
        if self.geo:
            msg = "Circles are only supported in Euclidean contexts"
            raise InvalidShapeError(msg)
        if radius < 0:
            msg = f"Circle radius must be >= 0, got {radius}"
            raise InvalidShapeError(msg)
        return Circle(center, radius, ctx=self)

    def make_polygon(self, geometry: BaseGeometry) -> PolygonShape:
        """Wrap a shapely Polygon or MultiPolygon.

        Raises:
            InvalidShapeError: If the geometry is not polygonal, is empty or
                invalid, or falls outside the world bounds
        """
        if geometry.geom_type not in ("Polygon", "MultiPolygon"):
            msg = f"Expected Polygon or MultiPolygon, got {geometry.geom_type}"
            raise InvalidShapeError(msg)
        if geometry.is_empty:
            msg = "Polygon geometry is empty"
            raise InvalidShapeError(msg)
        if not geometry.is_valid:
            msg = "Polygon geometry is invalid (self-intersections, etc.)"
            raise InvalidShapeError(msg)

        min_x, min_y, max_x, max_y = geometry.bounds
        for x in (min_x, max_x):
            self.verify_x(x)
        for y in (min_y, max_y):
            self.verify_y(y)
        return PolygonShape(geometry, ctx=self)

    def make_collection(self, shapes: Sequence[Shape]) -> ShapeCollection:
        return ShapeCollection(shapes, self)

    def __repr__(self) -> str:
        kind = "geo" if self.geo else "euclidean"
        return f"SpatialContext({kind}, bounds={self.world_bounds})"
