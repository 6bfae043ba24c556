"""Axis-aligned rectangle shape.

In geographic contexts a rectangle with min_x > max_x crosses the dateline, and
relations along x are computed after unwrapping both ranges onto a continuous
axis.
"""

import math
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from shapely.geometry import LineString, MultiPolygon, Point, box
from shapely.geometry.base import BaseGeometry

from spatial_collection.config import GEO
from spatial_collection.models.enums import SpatialRelation
from spatial_collection.shapes.point import PointShape

if TYPE_CHECKING:
    from spatial_collection.context import SpatialContext
    from spatial_collection.shapes.protocols import Shape


def relate_range(
    int_min: float, int_max: float, ext_min: float, ext_max: float
) -> SpatialRelation:
    """Relation of the interval [int_min, int_max] to [ext_min, ext_max]."""
    if ext_min > int_max or ext_max < int_min:
        return SpatialRelation.DISJOINT
    if ext_min >= int_min and ext_max <= int_max:
        return SpatialRelation.CONTAINS
    if ext_min <= int_min and ext_max >= int_max:
        return SpatialRelation.WITHIN
    return SpatialRelation.INTERSECTS


@dataclass(frozen=True)
class Rectangle:
    """Immutable axis-aligned rectangle, built via SpatialContext.make_rectangle."""

    min_x: float
    max_x: float
    min_y: float
    max_y: float
    ctx: "SpatialContext" = field(compare=False, repr=False)

    @property
    def crosses_dateline(self) -> bool:
        return self.ctx.geo and self.min_x > self.max_x

    @property
    def width(self) -> float:
        width = self.max_x - self.min_x
        if width < 0:
            width += GEO.LON_SPAN
        return width

    @property
    def height(self) -> float:
        return self.max_y - self.min_y

    @property
    def bounding_box(self) -> "Rectangle":
        return self

    @property
    def center(self) -> PointShape:
        x = self.min_x + self.width / 2
        if self.crosses_dateline:
            x = self.ctx.normalize_x(x)
        y = self.min_y + self.height / 2
        return PointShape(x, y, ctx=self.ctx)

    @property
    def has_area(self) -> bool:
        return self.width > 0 and self.height > 0

    def get_area(self, ctx: "SpatialContext | None" = None) -> float:
        """Planar area, or spherical area in square degrees for geographic contexts."""
        ctx = ctx or self.ctx
        if not ctx.geo:
            return self.width * self.height
        lat1 = math.radians(self.min_y)
        lat2 = math.radians(self.max_y)
        return (
            math.pi / 180 * GEO.RADIUS_DEG * GEO.RADIUS_DEG
            * abs(math.sin(lat1) - math.sin(lat2))
            * self.width
        )

    def relate(self, other: "Shape") -> SpatialRelation:
        if isinstance(other, PointShape):
            return self._relate_point(other)
        if isinstance(other, Rectangle):
            return self._relate_rectangle(other)
        return other.relate(self).transpose()

    def relate_x_range(self, ext_min_x: float, ext_max_x: float) -> SpatialRelation:
        """Relation of this rectangle's x range to an external x range."""
        min_x, max_x = self.min_x, self.max_x
        if self.ctx.geo:
            raw_width = max_x - min_x
            if raw_width == GEO.LON_SPAN:
                return SpatialRelation.CONTAINS
            if raw_width < 0:
                max_x = min_x + (raw_width + GEO.LON_SPAN)

            ext_raw_width = ext_max_x - ext_min_x
            if ext_raw_width == GEO.LON_SPAN:
                return SpatialRelation.WITHIN
            if ext_raw_width < 0:
                ext_max_x = ext_min_x + (ext_raw_width + GEO.LON_SPAN)

            # Shift so the two unwrapped ranges can overlap
            if max_x < ext_min_x:
                min_x += GEO.LON_SPAN
                max_x += GEO.LON_SPAN
            elif ext_max_x < min_x:
                ext_min_x += GEO.LON_SPAN
                ext_max_x += GEO.LON_SPAN

        return relate_range(min_x, max_x, ext_min_x, ext_max_x)

    def relate_y_range(self, ext_min_y: float, ext_max_y: float) -> SpatialRelation:
        return relate_range(self.min_y, self.max_y, ext_min_y, ext_max_y)

    def _relate_point(self, point: PointShape) -> SpatialRelation:
        if point.y > self.max_y or point.y < self.min_y:
            return SpatialRelation.DISJOINT

        min_x, max_x, px = self.min_x, self.max_x, point.x
        if self.ctx.geo:
            raw_width = max_x - min_x
            if raw_width < 0:
                max_x = min_x + (raw_width + GEO.LON_SPAN)
            if px < min_x:
                px += GEO.LON_SPAN
            elif px > max_x:
                px -= GEO.LON_SPAN
            else:
                return SpatialRelation.CONTAINS

        if px < min_x or px > max_x:
            return SpatialRelation.DISJOINT
        return SpatialRelation.CONTAINS

    def _relate_rectangle(self, rect: "Rectangle") -> SpatialRelation:
        y_relation = self.relate_y_range(rect.min_y, rect.max_y)
        if y_relation is SpatialRelation.DISJOINT:
            return SpatialRelation.DISJOINT

        x_relation = self.relate_x_range(rect.min_x, rect.max_x)
        if x_relation is SpatialRelation.DISJOINT:
            return SpatialRelation.DISJOINT

        if x_relation is y_relation:
            return x_relation

        # One axis identical: the other axis decides
        if self.min_x == rect.min_x and self.max_x == rect.max_x:
            return y_relation
        if self.min_y == rect.min_y and self.max_y == rect.max_y:
            return x_relation

        return SpatialRelation.INTERSECTS

    def to_shapely(self) -> BaseGeometry:
        """Planar shapely geometry; split in two when crossing the dateline."""
        if self.crosses_dateline:
            return MultiPolygon(
                [
                    box(self.min_x, self.min_y, GEO.MAX_LON, self.max_y),
                    box(GEO.MIN_LON, self.min_y, self.max_x, self.max_y),
                ]
            )
        if self.min_x == self.max_x and self.min_y == self.max_y:
            return Point(self.min_x, self.min_y)
        if self.min_x == self.max_x or self.min_y == self.max_y:
            return LineString([(self.min_x, self.min_y), (self.max_x, self.max_y)])
        return box(self.min_x, self.min_y, self.max_x, self.max_y)
