"""One-dimensional ranges used while aggregating bounding boxes.

A Range is a closed [min, max] interval on one axis. A LongitudeRange lives on
the cyclic longitude axis, where min > max means the range crosses the dateline.
"""

from typing import TYPE_CHECKING

from spatial_collection.config import GEO

if TYPE_CHECKING:
    from spatial_collection.context import SpatialContext
    from spatial_collection.shapes.rectangle import Rectangle


class Range:
    """Closed interval on a non-wrapping axis."""

    def __init__(self, min_value: float, max_value: float):
        self.min = min_value
        self.max = max_value

    @staticmethod
    def x_range(rect: "Rectangle", ctx: "SpatialContext") -> "Range":
        """Range of a rectangle along x, wraparound-aware in geographic contexts."""
        if ctx.geo:
            return LongitudeRange(rect.min_x, rect.max_x)
        return Range(rect.min_x, rect.max_x)

    @staticmethod
    def y_range(rect: "Rectangle") -> "Range":
        return Range(rect.min_y, rect.max_y)

    @property
    def width(self) -> float:
        return self.max - self.min

    @property
    def center(self) -> float:
        return self.min + self.width / 2

    def contains(self, value: float) -> bool:
        return self.min <= value <= self.max

    def expand_to(self, other: "Range") -> "Range":
        """Smallest range covering both ranges."""
        return Range(min(self.min, other.min), max(self.max, other.max))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Range) or type(self) is not type(other):
            return NotImplemented
        return self.min == other.min and self.max == other.max

    def __hash__(self) -> int:
        return hash((type(self).__name__, self.min, self.max))

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.min}, {self.max})"


class LongitudeRange(Range):
    """Longitude interval in degrees; crosses the dateline when min > max."""

    @property
    def crosses_dateline(self) -> bool:
        return self.min > self.max

    @property
    def width(self) -> float:
        width = self.max - self.min
        if width < 0:
            width += GEO.LON_SPAN
        return width

    @property
    def center(self) -> float:
        center = self.min + self.width / 2
        if center > GEO.MAX_LON:
            center -= GEO.LON_SPAN
        return center

    def contains(self, value: float) -> bool:
        if not self.crosses_dateline:
            return super().contains(value)
        return value >= self.min or value <= self.max

    def covers(self, other: "LongitudeRange") -> bool:
        """True if every longitude of ``other`` lies in this range."""
        if self.width >= GEO.LON_SPAN:
            return True
        offset = (other.min - self.min) % GEO.LON_SPAN
        return offset + other.width <= self.width

    def compare_to(self, other: "LongitudeRange") -> float:
        """Signed shortest longitudinal distance between the two centers."""
        return _longitude_diff(self.center, other.center)

    def expand_to(self, other: Range) -> Range:
        """Smallest longitude range covering both ranges.

        If one range covers the other it is returned as is. Otherwise the range
        to the "west" (by center) supplies the new minimum unless the eastern
        range already covers it, and vice versa for the maximum. When each range
        covers the other's far endpoint the union wraps the globe.
        """
        if not isinstance(other, LongitudeRange):
            other = LongitudeRange(other.min, other.max)

        if self.covers(other):
            return self
        if other.covers(self):
            return other

        if self.compare_to(other) <= 0:
            west, east = self, other
        else:
            west, east = other, self

        new_min = east if east.contains(west.min) else west
        new_max = west if west.contains(east.max) else east

        if new_min is new_max:
            return new_min
        if new_min is east and new_max is west:
            return LongitudeRange(GEO.MIN_LON, GEO.MAX_LON)
        return LongitudeRange(new_min.min, new_max.max)


def _longitude_diff(a: float, b: float) -> float:
    diff = a - b
    if diff <= GEO.MAX_LON:
        if diff >= GEO.MIN_LON:
            return diff
        return diff + GEO.LON_SPAN
    return diff - GEO.LON_SPAN
