"""Point shape."""

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from spatial_collection.models.enums import SpatialRelation

if TYPE_CHECKING:
    from spatial_collection.context import SpatialContext
    from spatial_collection.shapes.protocols import Shape
    from spatial_collection.shapes.rectangle import Rectangle


@dataclass(frozen=True)
class PointShape:
    """Immutable point. Has no area; its bounding box is degenerate.

    Two equal points INTERSECT; neither is said to contain the other.
    """

    x: float
    y: float
    ctx: "SpatialContext" = field(compare=False, repr=False)

    @property
    def bounding_box(self) -> "Rectangle":
        return self.ctx.make_rectangle(self.x, self.x, self.y, self.y)

    @property
    def center(self) -> "PointShape":
        return self

    @property
    def has_area(self) -> bool:
        return False

    def get_area(self, ctx: "SpatialContext | None" = None) -> float:
        return 0.0

    def relate(self, other: "Shape") -> SpatialRelation:
        if isinstance(other, PointShape):
            if self.x == other.x and self.y == other.y:
                return SpatialRelation.INTERSECTS
            return SpatialRelation.DISJOINT
        return other.relate(self).transpose()
