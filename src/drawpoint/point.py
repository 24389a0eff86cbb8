"""Point and curve records plus the vector arithmetic used throughout drawpoint.

A curve is described by a plain start point and an end drawpoint. The variant
of the end drawpoint alone decides the degree of the curve:

    Point           -> linear (degree 1)
    QuadraticPoint  -> quadratic (degree 2), one control point ``cp1``
    CubicPoint      -> cubic (degree 3), ``cp1`` near the start, ``cp2`` near the end

Control points always describe the segment arriving at the point carrying them.
All records are frozen; functions in this module return new records.
"""

from __future__ import annotations

import dataclasses
import math
from dataclasses import dataclass
from typing import NamedTuple, Optional, Tuple, Union

###############################################################################
# Point records
###############################################################################


@dataclass(frozen=True)
class Point:
    """A plain 2D point, also the end of a linear curve.

    Attributes:
        x (float): The x-coordinate.
        y (float): The y-coordinate.
    """

    x: float
    y: float

    def as_tuple(self) -> Tuple[float, float]:
        """Return the coordinates as tuple (x, y)."""
        return (self.x, self.y)


@dataclass(frozen=True)
class QuadraticPoint(Point):
    """End point of a quadratic curve.

    Attributes:
        cp1 (Point): The single control point of the curve.
    """

    cp1: Point


@dataclass(frozen=True)
class CubicPoint(Point):
    """End point of a cubic curve.

    Attributes:
        cp1 (Point): Control point nearer to the start of the curve.
        cp2 (Point): Control point nearer to this end point.
    """

    cp1: Point
    cp2: Point


@dataclass(frozen=True)
class InterpolatedPoint(Point):
    """Point found on a curve together with the parameter it occurs at.

    Attributes:
        t (float): Curve parameter of this point.
    """

    t: float


@dataclass(frozen=True)
class PointQuery:
    """Query for inverse interpolation: exactly one coordinate should be set."""

    x: Optional[float] = None
    y: Optional[float] = None


class BreakPoint:
    """Marker inside drawpoint sequences: lift the pen and move to the next point."""

    def __repr__(self) -> str:
        return "BREAK_POINT"


BREAK_POINT = BreakPoint()

DrawPoint = Union[Point, QuadraticPoint, CubicPoint]


###############################################################################
# Curve records
###############################################################################


class Curve(NamedTuple):
    """Curve from a plain start point to an end drawpoint."""

    start: Point
    end: DrawPoint


class SplitResult(NamedTuple):
    """Two curves of the same degree which together trace the split curve."""

    left: Curve
    right: Curve


###############################################################################
# Vector arithmetic
###############################################################################


def point(x: float, y: float) -> Point:
    """Create a plain point."""
    return Point(float(x), float(y))


def extract_point(pt: Point) -> Point:
    """Return the plain coordinates of a drawpoint without any control points."""
    return Point(pt.x, pt.y)


def clone(pt: Point) -> Point:
    """Return a copy of the given point record, keeping its variant and control points."""
    return dataclasses.replace(pt)


def add(a: Point, b: Point) -> Point:
    """Return the plain point a + b."""
    return Point(a.x + b.x, a.y + b.y)


def diff(a: Point, b: Point) -> Point:
    """Return the plain vector a - b."""
    return Point(a.x - b.x, a.y - b.y)


def adjust(pt: Point, dx: float, dy: float) -> Point:
    """Return the plain point moved by (dx, dy)."""
    return Point(pt.x + dx, pt.y + dy)


def lerp(a: Point, b: Point, t: float) -> Point:
    """Linear interpolation (1 - t) * a + t * b.

    Written as a weighted sum so that t = 0 gives a and t = 1 gives b exactly.
    """
    omt = 1.0 - t
    return Point(omt * a.x + t * b.x, omt * a.y + t * b.y)


def scale(origin: Point, target: Point, factor: float) -> Point:
    """Scale the vector origin -> target by factor and return where it ends.

    Args:
        origin: Start of the vector and fixed point of the scaling.
        target: End of the vector before scaling.
        factor: Scaling factor; negative values point to the opposite side of origin.

    Returns:
        Point: origin + factor * (target - origin)
    """
    return Point(origin.x + factor * (target.x - origin.x), origin.y + factor * (target.y - origin.y))


def norm(vec: Point) -> float:
    """Euclidean length of a vector."""
    return math.hypot(vec.x, vec.y)


def dist(a: Point, b: Point) -> float:
    """Euclidean distance between two points."""
    return math.hypot(a.x - b.x, a.y - b.y)


def unit_vector(vec: Point) -> Point:
    """Return vec scaled to length 1; the zero vector is returned unchanged."""
    length = norm(vec)
    if length == 0.0:
        return Point(0.0, 0.0)
    return Point(vec.x / length, vec.y / length)


def average_point(*points: Point) -> Point:
    """Return the centroid of the given points."""
    if not points:
        raise ValueError("At least one point is required to average points.")
    count = len(points)
    return Point(sum(p.x for p in points) / count, sum(p.y for p in points) / count)
