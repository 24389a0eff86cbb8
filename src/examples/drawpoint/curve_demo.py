#!/usr/bin/env python3
"""
Demonstration of the drawpoint curve operations on a small quadratic curve.
"""

from drawpoint.curve import (
    blend,
    cubic_control_points,
    deflection_control_point,
    elevate_degree,
    interpolate,
    point_at,
    split,
)
from drawpoint.path import DrawPath
from drawpoint.point import Point, PointQuery, QuadraticPoint
from drawpoint.shapes import draw_circle


def demo_quadratic_curve():
    """Demonstrate evaluation, splitting and interpolation of a quadratic curve."""

    print("=== Quadratic Curve Demo ===\n")

    start = Point(0.0, 0.0)
    end = QuadraticPoint(10.0, 0.0, cp1=Point(5.0, 10.0))
    print(f"Curve: {start} -> {end}")

    for t in (0.0, 0.25, 0.5, 0.75, 1.0):
        print(f"  t={t:.2f}: {point_at(t, start, end).as_tuple()}")

    left, right = split(0.5, start, end)
    print(f"\nSplit at t=0.5:\n  left:  {left}\n  right: {right}")

    cubic_end = elevate_degree(start, end)
    print(f"\nElevated to cubic: {cubic_end}")
    print(f"Cubic control points: {cubic_control_points(start, end)}")

    print("\nPoints at y=3:")
    for found in interpolate(start, end, PointQuery(y=3.0)):
        print(f"  t={found.t:.4f}: ({found.x:.4f}, {found.y:.4f})")

    flat_end = QuadraticPoint(10.0, 0.0, cp1=deflection_control_point(start, Point(10.0, 0.0), 0.5, 0.0))
    print(f"\nHalfway blend with a flat curve: {blend(0.5, start, end, flat_end)}")


def demo_circle():
    """Demonstrate the circle drawpoints and their polygon."""

    print("\n=== Circle Demo ===\n")

    circle = DrawPath.from_draw_points(*draw_circle(Point(0.0, 0.0), 10.0))
    print(f"Commands: {circle.commands}")
    polygon = circle.polygon(steps=32)
    print(f"Polygon area: {polygon.area:.3f} (exact circle: {3.141592653589793 * 100.0:.3f})")


def main():
    """Run all demos."""
    demo_quadratic_curve()
    demo_circle()


if __name__ == "__main__":
    main()
