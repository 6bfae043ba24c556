"""Shape collection: many shapes behaving as one.

A ShapeCollection is the analogue of an OGC GeometryCollection. It keeps the
member order it was given, but relations are computed as if the members were an
unordered set, so ``relate`` returns the same answer for any member order.
Members may overlap each other arbitrarily.

No union geometry is ever computed:
- The bounding box is folded from member bounding boxes once, at construction
- ``relate`` pre-filters with the bounding box, then folds member relations
- ``get_area`` is an upper bound (overlaps are counted twice), capped at the
  bounding box area
"""

import logging
from collections import deque
from collections.abc import Iterable, Iterator, Sequence
from typing import TYPE_CHECKING

from spatial_collection.errors import InvalidArgumentError
from spatial_collection.models.enums import SpatialRelation
from spatial_collection.shapes.point import PointShape
from spatial_collection.shapes.range import Range
from spatial_collection.shapes.rectangle import Rectangle

if TYPE_CHECKING:
    from spatial_collection.context import SpatialContext
    from spatial_collection.shapes.protocols import Shape

logger = logging.getLogger(__name__)


class ShapeCollection(Sequence):
    """Immutable, ordered, non-empty aggregate of shapes that is itself a shape.

    WARNING: ``shapes`` is held by reference, not copied. The bounding box is
    computed once from the members as they are at construction, so the caller
    must not mutate the sequence afterwards. Use ``ShapeCollection.copy_of`` to
    take a defensive copy instead.

    Args:
        shapes: Non-empty random-access sequence of shapes (list, tuple, ...)
        ctx: Spatial context the collection lives in

    Raises:
        InvalidArgumentError: If ``shapes`` is empty or is not a Sequence
            (generators, iterators, sets, mapping views and deques, whose
            indexing is linear, are rejected)
    """

    def __init__(self, shapes: Sequence["Shape"], ctx: "SpatialContext"):
        if not isinstance(shapes, Sequence) or isinstance(shapes, str | bytes | deque):
            msg = f"Shapes must be a random-access Sequence, got {type(shapes).__name__}"
            raise InvalidArgumentError(msg)
        if len(shapes) == 0:
            msg = "Must be given at least 1 shape"
            raise InvalidArgumentError(msg)

        self._shapes = shapes
        self._ctx = ctx
        self._bbox = self._compute_bounding_box(shapes, ctx)

        logger.debug(f"Built collection of {len(shapes)} shape(s) with bounding box {self._bbox}")

    @classmethod
    def copy_of(cls, shapes: Iterable["Shape"], ctx: "SpatialContext") -> "ShapeCollection":
        """Build a collection from a private tuple copy of ``shapes``.

        Accepts any iterable, so generators and sets may be used here.
        """
        return cls(tuple(shapes), ctx)

    @staticmethod
    def _compute_bounding_box(shapes: Sequence["Shape"], ctx: "SpatialContext") -> Rectangle:
        x_range = None
        min_y = float("inf")
        max_y = float("-inf")
        for shape in shapes:
            rect = shape.bounding_box

            member_x_range = Range.x_range(rect, ctx)
            if x_range is None:
                x_range = member_x_range
            else:
                x_range = x_range.expand_to(member_x_range)
            min_y = min(min_y, rect.min_y)
            max_y = max(max_y, rect.max_y)

        return ctx.make_rectangle(x_range.min, x_range.max, min_y, max_y)

    @property
    def ctx(self) -> "SpatialContext":
        return self._ctx

    @property
    def shapes(self) -> Sequence["Shape"]:
        """The member sequence exactly as supplied (not a copy)."""
        return self._shapes

    @property
    def bounding_box(self) -> Rectangle:
        return self._bbox

    @property
    def center(self) -> PointShape:
        """Center of the bounding box; not the centroid of the members."""
        return self._bbox.center

    @property
    def has_area(self) -> bool:
        return any(shape.has_area for shape in self._shapes)

    def __getitem__(self, index):
        if isinstance(index, slice):
            return list(self._shapes[index])
        return self._shapes[index]

    def __len__(self) -> int:
        return len(self._shapes)

    def __iter__(self) -> Iterator["Shape"]:
        return iter(self._shapes)

    def relate(self, other: "Shape") -> SpatialRelation:
        """Relation of the whole collection to ``other``.

        Any member intersecting ``other`` makes the answer INTERSECTS. Otherwise
        member relations are folded with SpatialRelation.combine, so the result
        does not depend on member order. A CONTAINS never ends the fold early:
        members may overlap, so a later WITHIN can still turn it into
        INTERSECTS.

        Args:
            other: Query shape

        Returns:
            DISJOINT, INTERSECTS, CONTAINS or WITHIN
        """
        bbox_relation = self._bbox.relate(other)
        if bbox_relation in (SpatialRelation.DISJOINT, SpatialRelation.WITHIN):
            return bbox_relation

        accumulated = None  # DISJOINT, CONTAINS or WITHIN
        for shape in self._shapes:
            relation = shape.relate(other)
            if relation is SpatialRelation.INTERSECTS:
                return SpatialRelation.INTERSECTS

            if accumulated is None:
                accumulated = relation
                continue

            accumulated = accumulated.combine(relation)
            if accumulated is SpatialRelation.INTERSECTS:
                return SpatialRelation.INTERSECTS

        return accumulated

    def get_area(self, ctx: "SpatialContext | None" = None) -> float:
        """Upper bound of the covered area.

        Sums member areas, but never returns more than the bounding box area.
        """
        ctx = ctx or self._ctx
        max_area = self._bbox.get_area(ctx)
        total = 0.0
        for shape in self._shapes:
            total += shape.get_area(ctx)
            if total >= max_area:
                return max_area
        return total

    def __eq__(self, other: object) -> bool:
        if self is other:
            return True
        if other is None or type(self) is not type(other):
            return False
        return list(self._shapes) == list(other._shapes)

    def __hash__(self) -> int:
        return hash(tuple(self._shapes))

    def __repr__(self) -> str:
        budget = self._ctx.collection_config.render_max_chars
        buf = f"{type(self).__name__}("
        for i, shape in enumerate(self._shapes):
            if i > 0:
                buf += ", "
            buf += repr(shape)
            if len(buf) > budget:
                buf += " ... "
                break
        return buf + ")"
