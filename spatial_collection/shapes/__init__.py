"""Shapes and the shape collection.

Concrete shapes are immutable and built through a SpatialContext:
- PointShape, Rectangle, Circle, PolygonShape: individual shapes
- ShapeCollection: many shapes behaving as a single shape
- Range, LongitudeRange: x-axis helpers for bounding box aggregation
"""

from spatial_collection.shapes.circle import Circle
from spatial_collection.shapes.collection import ShapeCollection
from spatial_collection.shapes.point import PointShape
from spatial_collection.shapes.polygon import PolygonShape
from spatial_collection.shapes.protocols import Shape
from spatial_collection.shapes.range import LongitudeRange, Range
from spatial_collection.shapes.rectangle import Rectangle

__all__ = [
    "Shape",
    "PointShape",
    "Rectangle",
    "Circle",
    "PolygonShape",
    "ShapeCollection",
    "Range",
    "LongitudeRange",
]
