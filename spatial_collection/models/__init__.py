"""Value types shared across shapes."""

from spatial_collection.models.enums import SpatialRelation

__all__ = [
    "SpatialRelation",
]
