"""Curve operations on drawpoints: evaluation, splitting, elevation, interpolation and blending.

Every function takes a curve as a plain start point and an end drawpoint
(see drawpoint.point). None of them modifies its arguments.
"""

from __future__ import annotations

from typing import Callable, List, Optional, Sequence, Tuple, TypeVar, Union

import numpy as np
from numpy.typing import NDArray

from drawpoint.bezier import BezierCurve
from drawpoint.common import PARAMETER_EPS, Degree
from drawpoint.point import (
    CubicPoint,
    Curve,
    DrawPoint,
    InterpolatedPoint,
    Point,
    PointQuery,
    QuadraticPoint,
    SplitResult,
    extract_point,
    lerp,
    norm,
    scale,
)

R = TypeVar("R")

###############################################################################
# Dispatch
###############################################################################


def degree_of(end: DrawPoint) -> Degree:
    """Return the degree of the curve arriving at the given drawpoint."""
    if isinstance(end, CubicPoint):
        return Degree.CUBIC
    if isinstance(end, QuadraticPoint):
        return Degree.QUADRATIC
    return Degree.LINEAR


def apply_to_curve(
    start: Point,
    end: DrawPoint,
    linear: Callable[[Point, Point], R],
    quadratic: Callable[[Point, Point, Point], R],
    cubic: Callable[[Point, Point, Point, Point], R],
) -> R:
    """Call the handler matching the degree of the curve start -> end.

    Exactly one handler is called and its result returned. The end point handed
    to the handler is stripped of its control points.

    Args:
        start: Start point of the curve
        end: End drawpoint of the curve
        linear: Called as linear(start, end)
        quadratic: Called as quadratic(start, cp1, end)
        cubic: Called as cubic(start, cp1, cp2, end)

    Returns:
        The result of the called handler
    """
    if isinstance(end, CubicPoint):
        return cubic(start, end.cp1, end.cp2, extract_point(end))
    if isinstance(end, QuadraticPoint):
        return quadratic(start, end.cp1, extract_point(end))
    return linear(start, extract_point(end))


def control_polygon(start: Point, end: DrawPoint) -> NDArray[np.float64]:
    """Return the defining points of the curve as (degree + 1, 2) array."""
    return np.array(
        apply_to_curve(
            start,
            end,
            linear=lambda p1, p2: [p1.as_tuple(), p2.as_tuple()],
            quadratic=lambda p1, cp, p2: [p1.as_tuple(), cp.as_tuple(), p2.as_tuple()],
            cubic=lambda p1, cp1, cp2, p2: [p1.as_tuple(), cp1.as_tuple(), cp2.as_tuple(), p2.as_tuple()],
        ),
        dtype=np.float64,
    )


def _to_point(row: Sequence[float]) -> Point:
    return Point(float(row[0]), float(row[1]))


def _end_from_array(ctrl: NDArray[np.float64]) -> DrawPoint:
    """Build the end drawpoint of a curve from its control point array."""
    end = ctrl[-1]
    if ctrl.shape[0] == 4:
        return CubicPoint(float(end[0]), float(end[1]), cp1=_to_point(ctrl[1]), cp2=_to_point(ctrl[2]))
    if ctrl.shape[0] == 3:
        return QuadraticPoint(float(end[0]), float(end[1]), cp1=_to_point(ctrl[1]))
    return _to_point(end)


###############################################################################
# Evaluation
###############################################################################


def point_at(t: float, start: Point, end: DrawPoint) -> Point:
    """Return the point at parameter t of the curve start -> end.

    t outside [0, 1] extrapolates the curve. t = 0 gives the start point and
    t = 1 the (plain) end point exactly.
    """
    return _to_point(BezierCurve.evaluate(control_polygon(start, end), t))


def points_at(
    ts: Union[float, Sequence[float], NDArray[np.float64]], start: Point, end: DrawPoint
) -> NDArray[np.float64]:
    """Evaluate the curve for many parameters at once, returns an (n, 2) array.

    A scalar ts is treated as a single parameter and gives a (1, 2) array.
    """
    return BezierCurve.evaluate(control_polygon(start, end), np.atleast_1d(np.asarray(ts, dtype=np.float64)))


###############################################################################
# Split and elevation
###############################################################################


def split(t: float, start: Point, end: DrawPoint) -> SplitResult:
    """Split the curve at parameter t into two curves of the same degree.

    The left curve covers [0, t] and the right curve [t, 1] of the original.
    Both share the split point: left.end (without controls) == right.start.
    t is not restricted to [0, 1].

    Args:
        t: Split parameter
        start: Start point of the curve
        end: End drawpoint of the curve

    Returns:
        SplitResult: (left, right)
    """
    left, right = BezierCurve.split(control_polygon(start, end), t)
    return SplitResult(
        left=Curve(start, _end_from_array(left)),
        right=Curve(_to_point(right[0]), _end_from_array(right)),
    )


def elevate_degree(start: Point, end: DrawPoint) -> DrawPoint:
    """Return an end drawpoint of one degree higher tracing the same points per t.

    Linear curves become quadratic and quadratic curves cubic.

    Raises:
        ValueError: If the curve is already cubic.
    """
    if isinstance(end, CubicPoint):
        raise ValueError("Cubic curves cannot be elevated, degree 4 is not supported.")
    elevated = _end_from_array(BezierCurve.elevate(control_polygon(start, end)))
    # keep the end coordinates untouched by the array round trip
    if isinstance(elevated, CubicPoint):
        return CubicPoint(end.x, end.y, cp1=elevated.cp1, cp2=elevated.cp2)
    return QuadraticPoint(end.x, end.y, cp1=elevated.cp1)


def cubic_control_points(start: Point, end: DrawPoint) -> Tuple[Point, Point]:
    """Return the two control points of the curve expressed as cubic curve."""
    while not isinstance(end, CubicPoint):
        end = elevate_degree(start, end)
    return (end.cp1, end.cp2)


###############################################################################
# Inverse interpolation
###############################################################################


def interpolate(
    start: Point, end: DrawPoint, query: Union[PointQuery, Point], within_segment: bool = True
) -> List[InterpolatedPoint]:
    """Find the points of the curve matching the one known coordinate of query.

    Exactly one of query.x and query.y must be set (not None). The known
    coordinate is solved for t on the curve's polynomial; for every real
    solution the other coordinate is evaluated on the curve.

    Args:
        start: Start point of the curve
        end: End drawpoint of the curve
        query: Point with one coordinate set to None
        within_segment: If True, only keep solutions with t in [0, 1]

    Returns:
        List of InterpolatedPoint ordered by t. Empty if the query does not have
        exactly one free coordinate, if the known coordinate is constant along
        the curve or if no solution exists.
    """
    if (query.x is None) == (query.y is None):
        return []

    ctrl = control_polygon(start, end)
    axis = 0 if query.x is not None else 1
    target = float(query.x if axis == 0 else query.y)

    coefficients = BezierCurve.power_coefficients(ctrl[:, axis])
    if not np.any(coefficients[:-1]):
        return []
    coefficients[-1] -= target

    found: List[InterpolatedPoint] = []
    for t in BezierCurve.real_roots(coefficients):
        if within_segment:
            if t < -PARAMETER_EPS or t > 1.0 + PARAMETER_EPS:
                continue
            t = min(max(t, 0.0), 1.0)
        xy = BezierCurve.evaluate(ctrl, t)
        if axis == 0:
            found.append(InterpolatedPoint(target, float(xy[1]), t=t))
        else:
            found.append(InterpolatedPoint(float(xy[0]), target, t=t))
    return found


###############################################################################
# Control point synthesis and blending
###############################################################################


def deflection_control_point(p0: Point, p1: Point, t: float, deflection: float) -> Point:
    """Return a quadratic control point deflected from the line p0 -> p1.

    The result is the point at t on the line, moved by deflection along the
    line's normal (the direction p0 -> p1 rotated by +90 degrees). A negative
    deflection moves to the other side. A zero-length line yields the line point.

    Args:
        p0: Start of the line
        p1: End of the line
        t: Parameter on the line where the control point sits
        deflection: Signed perpendicular distance from the line

    Returns:
        Point: The control point
    """
    on_line = lerp(p0, p1, t)
    dx = p1.x - p0.x
    dy = p1.y - p0.y
    length = norm(Point(dx, dy))
    if deflection == 0.0 or length == 0.0:
        return on_line
    return Point(on_line.x - deflection * dy / length, on_line.y + deflection * dx / length)


simple_quadratic = deflection_control_point


def blend(t: float, start: Point, end_a: DrawPoint, end_b: DrawPoint) -> DrawPoint:
    """Interpolate between curves start -> end_a and start -> end_b.

    The end point and every control point are interpolated linearly:
    R = (1 - t) * A + t * B. t = 0 reproduces end_a and t = 1 end_b.

    Raises:
        ValueError: If both curves do not have the same degree.
    """
    degree_a = degree_of(end_a)
    degree_b = degree_of(end_b)
    if degree_a != degree_b:
        raise ValueError(f"Cannot blend curves of different degree ({int(degree_a)} and {int(degree_b)}).")
    ctrl = (1.0 - t) * control_polygon(start, end_a) + t * control_polygon(start, end_b)
    return _end_from_array(ctrl)


###############################################################################
# Editing helpers
###############################################################################


def reverse_draw_point(start: Optional[Point], end: Optional[DrawPoint]) -> Optional[DrawPoint]:
    """Return a drawpoint such that end -> result traces start -> end backwards.

    The control points of end are swapped and attached to start.
    If either point is missing, start is returned unchanged.
    """
    if start is None or end is None:
        return start
    if isinstance(end, CubicPoint):
        return CubicPoint(start.x, start.y, cp1=end.cp2, cp2=end.cp1)
    if isinstance(end, QuadraticPoint):
        return QuadraticPoint(start.x, start.y, cp1=end.cp1)
    return extract_point(start)


def smooth_control_point(pt: DrawPoint, scale_value: float) -> Point:
    """Return a control point continuing the curve arriving at pt smoothly.

    The result lies on the line through pt.cp2 and pt, on the other side of pt.

    Args:
        pt: End point of a cubic curve (must have a second control point)
        scale_value: Length of the continuation relative to pt -> pt.cp2;
            1 gives a symmetric curve

    Raises:
        ValueError: If pt has no second control point.
    """
    if not isinstance(pt, CubicPoint):
        raise ValueError("Point has no second control point; cannot get smooth control point.")
    return scale(extract_point(pt), pt.cp2, -scale_value)
