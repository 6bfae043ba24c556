"""Spatial relation enum shared by every shape."""

from enum import Enum


class SpatialRelation(Enum):
    """How a subject shape relates to another (the "query") shape.

    Relations are always read from the subject's point of view:
    ``subject.relate(query)``.
    """

    DISJOINT = "disjoint"  # No overlap at all
    INTERSECTS = "intersects"  # Partial overlap, or an ambiguous answer
    CONTAINS = "contains"  # The query lies fully inside the subject
    WITHIN = "within"  # The subject lies fully inside the query

    def transpose(self) -> "SpatialRelation":
        """Relation from the query's point of view (swaps CONTAINS and WITHIN)."""
        if self is SpatialRelation.CONTAINS:
            return SpatialRelation.WITHIN
        if self is SpatialRelation.WITHIN:
            return SpatialRelation.CONTAINS
        return self

    def intersects(self) -> bool:
        """True for every relation that shares at least one point."""
        return self is not SpatialRelation.DISJOINT

    def combine(self, other: "SpatialRelation") -> "SpatialRelation":
        """Combine the relations of two members of an aggregate to one query.

        The result is the relation of the aggregate (both members together)
        to the query. Combination is commutative:

        - X + X == X
        - anything + INTERSECTS == INTERSECTS
        - DISJOINT + CONTAINS == CONTAINS
        - DISJOINT + WITHIN == INTERSECTS
        - WITHIN + CONTAINS == INTERSECTS

        Args:
            other: Relation of the next member to the same query

        Returns:
            Combined relation; INTERSECTS is absorbing
        """
        if self is SpatialRelation.INTERSECTS or other is SpatialRelation.INTERSECTS:
            return SpatialRelation.INTERSECTS

        if self is SpatialRelation.DISJOINT:
            if other is SpatialRelation.DISJOINT:
                return SpatialRelation.DISJOINT
            if other is SpatialRelation.CONTAINS:
                return SpatialRelation.CONTAINS
            return SpatialRelation.INTERSECTS  # WITHIN

        if self is SpatialRelation.WITHIN:
            if other is SpatialRelation.WITHIN:
                return SpatialRelation.WITHIN
            return SpatialRelation.INTERSECTS  # DISJOINT or CONTAINS

        # CONTAINS
        if other is SpatialRelation.WITHIN:
            return SpatialRelation.INTERSECTS
        return SpatialRelation.CONTAINS  # DISJOINT or CONTAINS
