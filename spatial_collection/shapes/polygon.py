"""Polygon shape backed by a shapely geometry.

Relations are evaluated on the plane. In geographic contexts polygon vertices
are treated as planar longitude/latitude, and dateline-crossing rectangles are
split in two before comparison. Geographic areas are geodesic, on a sphere
measured in degrees, so they are comparable with Rectangle areas.
"""

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

import numpy as np
import shapely
from pyproj import Geod
from shapely.geometry import Point
from shapely.geometry.base import BaseGeometry

from spatial_collection.config import GEO
from spatial_collection.models.enums import SpatialRelation
from spatial_collection.shapes.circle import Circle
from spatial_collection.shapes.point import PointShape
from spatial_collection.shapes.rectangle import Rectangle

if TYPE_CHECKING:
    from spatial_collection.context import SpatialContext
    from spatial_collection.shapes.protocols import Shape

# Sphere whose radius is expressed in degrees, matching Rectangle.get_area units
_DEGREE_SPHERE = Geod(a=GEO.RADIUS_DEG, b=GEO.RADIUS_DEG)


@dataclass(frozen=True)
class PolygonShape:
    """Immutable Polygon/MultiPolygon, built via SpatialContext.make_polygon."""

    geometry: BaseGeometry
    ctx: "SpatialContext" = field(compare=False, repr=False)

    def __post_init__(self):
        # Prepared geometries speed up repeated predicate calls
        shapely.prepare(self.geometry)

    @property
    def bounding_box(self) -> Rectangle:
        min_x, min_y, max_x, max_y = self.geometry.bounds
        return self.ctx.make_rectangle(min_x, max_x, min_y, max_y)

    @property
    def center(self) -> PointShape:
        centroid = self.geometry.centroid
        return PointShape(centroid.x, centroid.y, ctx=self.ctx)

    @property
    def has_area(self) -> bool:
        return self.geometry.area > 0

    def get_area(self, ctx: "SpatialContext | None" = None) -> float:
        """Planar area, or spherical area in square degrees for geographic contexts."""
        ctx = ctx or self.ctx
        if not ctx.geo:
            return self.geometry.area
        area, _ = _DEGREE_SPHERE.geometry_area_perimeter(self.geometry)
        return abs(area)

    def relate(self, other: "Shape") -> SpatialRelation:
        if isinstance(other, PointShape):
            if self.geometry.intersects(Point(other.x, other.y)):
                return SpatialRelation.CONTAINS
            return SpatialRelation.DISJOINT
        if isinstance(other, Rectangle):
            return self._relate_geometry(other.to_shapely())
        if isinstance(other, PolygonShape):
            return self._relate_geometry(other.geometry)
        if isinstance(other, Circle):
            return self._relate_circle(other)
        return other.relate(self).transpose()

    def _relate_geometry(self, other: BaseGeometry) -> SpatialRelation:
        if not self.geometry.intersects(other):
            return SpatialRelation.DISJOINT
        if self.geometry.covers(other):
            return SpatialRelation.CONTAINS
        if other.covers(self.geometry):
            return SpatialRelation.WITHIN
        return SpatialRelation.INTERSECTS

    def _relate_circle(self, circle: Circle) -> SpatialRelation:
        center = Point(circle.point.x, circle.point.y)
        if self.geometry.distance(center) > circle.radius:
            return SpatialRelation.DISJOINT

        if (
            self.geometry.contains(center)
            and self.geometry.boundary.distance(center) >= circle.radius
        ):
            return SpatialRelation.CONTAINS

        coords = shapely.get_coordinates(self.geometry)
        farthest = np.hypot(coords[:, 0] - circle.point.x, coords[:, 1] - circle.point.y).max()
        if farthest <= circle.radius:
            return SpatialRelation.WITHIN

        return SpatialRelation.INTERSECTS
