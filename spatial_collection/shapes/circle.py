"""Circle shape (Euclidean contexts only)."""

import math
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from spatial_collection.models.enums import SpatialRelation
from spatial_collection.shapes.point import PointShape
from spatial_collection.shapes.rectangle import Rectangle

if TYPE_CHECKING:
    from spatial_collection.context import SpatialContext
    from spatial_collection.shapes.protocols import Shape


@dataclass(frozen=True)
class Circle:
    """Immutable circle, built via SpatialContext.make_circle."""

    point: PointShape
    radius: float
    ctx: "SpatialContext" = field(compare=False, repr=False)

    @property
    def center(self) -> PointShape:
        return self.point

    @property
    def bounding_box(self) -> Rectangle:
        # Clamped to the world bounds
        w_min_x, w_max_x, w_min_y, w_max_y = self.ctx.world_bounds
        return self.ctx.make_rectangle(
            max(self.point.x - self.radius, w_min_x),
            min(self.point.x + self.radius, w_max_x),
            max(self.point.y - self.radius, w_min_y),
            min(self.point.y + self.radius, w_max_y),
        )

    @property
    def has_area(self) -> bool:
        return self.radius > 0

    def get_area(self, ctx: "SpatialContext | None" = None) -> float:
        return math.pi * self.radius * self.radius

    def distance_to(self, x: float, y: float) -> float:
        return math.hypot(x - self.point.x, y - self.point.y)

    def relate(self, other: "Shape") -> SpatialRelation:
        if isinstance(other, PointShape):
            if self.distance_to(other.x, other.y) <= self.radius:
                return SpatialRelation.CONTAINS
            return SpatialRelation.DISJOINT
        if isinstance(other, Rectangle):
            return self._relate_rectangle(other)
        if isinstance(other, Circle):
            return self._relate_circle(other)
        return other.relate(self).transpose()

    def _relate_rectangle(self, rect: Rectangle) -> SpatialRelation:
        cx, cy, r = self.point.x, self.point.y, self.radius

        nearest_x = min(max(cx, rect.min_x), rect.max_x)
        nearest_y = min(max(cy, rect.min_y), rect.max_y)
        if self.distance_to(nearest_x, nearest_y) > r:
            return SpatialRelation.DISJOINT

        farthest_x = rect.min_x if abs(cx - rect.min_x) > abs(cx - rect.max_x) else rect.max_x
        farthest_y = rect.min_y if abs(cy - rect.min_y) > abs(cy - rect.max_y) else rect.max_y
        if self.distance_to(farthest_x, farthest_y) <= r:
            return SpatialRelation.CONTAINS

        if (
            cx - r >= rect.min_x
            and cx + r <= rect.max_x
            and cy - r >= rect.min_y
            and cy + r <= rect.max_y
        ):
            return SpatialRelation.WITHIN

        return SpatialRelation.INTERSECTS

    def _relate_circle(self, circle: "Circle") -> SpatialRelation:
        d = self.distance_to(circle.point.x, circle.point.y)
        if d > self.radius + circle.radius:
            return SpatialRelation.DISJOINT
        if d + circle.radius <= self.radius:
            return SpatialRelation.CONTAINS
        if d + self.radius <= circle.radius:
            return SpatialRelation.WITHIN
        return SpatialRelation.INTERSECTS
