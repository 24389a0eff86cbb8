"""Drawpoint generators for common shapes."""

from __future__ import annotations

from typing import List

from drawpoint.common import CIRCLE_STRETCH
from drawpoint.curve import deflection_control_point
from drawpoint.point import CubicPoint, DrawPoint, Point, QuadraticPoint, extract_point


def draw_circle(center: Point, radius: float) -> List[CubicPoint]:
    """Get the drawpoints approximating a circle with four cubic curves.

    Args:
        center: Center of the circle
        radius: Radius of the circle

    Returns:
        List of drawpoints [top, right, bottom, left, top]; the first entry is
        the start point, the following ones each close a quarter circle
    """
    stretch = CIRCLE_STRETCH * radius
    cx, cy = center.x, center.y

    top = CubicPoint(
        cx, cy + radius, cp1=Point(cx - radius, cy + stretch), cp2=Point(cx - stretch, cy + radius)
    )
    right = CubicPoint(
        cx + radius, cy, cp1=Point(cx + stretch, cy + radius), cp2=Point(cx + radius, cy + stretch)
    )
    bottom = CubicPoint(
        cx, cy - radius, cp1=Point(cx + radius, cy - stretch), cp2=Point(cx + stretch, cy - radius)
    )
    left = CubicPoint(
        cx - radius, cy, cp1=Point(cx - stretch, cy - radius), cp2=Point(cx - radius, cy - stretch)
    )
    # order is irrelevant for the shape, top is repeated to close it
    return [top, right, bottom, left, top]


def draw_specific_curl(
    # pylint: disable=too-many-arguments,too-many-positional-arguments
    left: Point,
    center: Point,
    right: Point,
    left_t: float = 0.5,
    left_deflection: float = 0.5,
    right_t: float = 0.5,
    right_deflection: float = 0.5,
) -> List[DrawPoint]:
    """Get the drawpoints of a curl bending through left -> center -> right.

    Both segments become quadratic curves whose control points are deflected
    from the straight segments. Each control point is derived from its own
    segment: the one arriving at center from left -> center, the one arriving
    at right from center -> right (never from left -> center).

    Args:
        left: Start of the curl
        center: Middle of the curl
        right: End of the curl
        left_t: Parameter of the control point along left -> center
        left_deflection: Deflection of the control point of left -> center
        right_t: Parameter of the control point along center -> right
        right_deflection: Deflection of the control point of center -> right

    Returns:
        List of drawpoints [left, center, right]
    """
    p1 = extract_point(left)
    p2 = extract_point(center)
    p3 = extract_point(right)
    cp_center = deflection_control_point(p1, p2, left_t, left_deflection)
    cp_right = deflection_control_point(p2, p3, right_t, right_deflection)
    return [
        p1,
        QuadraticPoint(p2.x, p2.y, cp1=cp_center),
        QuadraticPoint(p3.x, p3.y, cp1=cp_right),
    ]
