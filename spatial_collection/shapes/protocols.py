"""Shape protocol definition."""

from typing import TYPE_CHECKING, Protocol, runtime_checkable

from spatial_collection.models.enums import SpatialRelation

if TYPE_CHECKING:
    from spatial_collection.context import SpatialContext
    from spatial_collection.shapes.point import PointShape
    from spatial_collection.shapes.rectangle import Rectangle


@runtime_checkable
class Shape(Protocol):
    """Capabilities every shape (including a shape collection) provides.

    Shapes are immutable. A shape that does not know how to relate itself to
    another shape asks the other shape and transposes the answer.
    """

    @property
    def ctx(self) -> "SpatialContext":
        """Spatial context the shape was built in."""
        ...

    @property
    def bounding_box(self) -> "Rectangle":
        """Smallest axis-aligned rectangle enclosing the shape."""
        ...

    @property
    def center(self) -> "PointShape":
        """Representative center point (not necessarily the centroid)."""
        ...

    @property
    def has_area(self) -> bool:
        """True if the shape covers a region with positive area."""
        ...

    def relate(self, other: "Shape") -> SpatialRelation:
        """Relation of this shape to ``other``."""
        ...

    def get_area(self, ctx: "SpatialContext | None" = None) -> float:
        """Area of the shape, in the units of ``ctx`` (defaults to the shape's own)."""
        ...
