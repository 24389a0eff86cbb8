"""Test module for inverse interpolation with drawpoint.curve.interpolate

The tests are run using pytest.
Interpolated points are compared with a coarse tolerance of 0.125 because root
finding of cubic polynomials is numerically sensitive.
"""

import math

import numpy as np
import pytest

from drawpoint.curve import interpolate, point_at
from drawpoint.point import (
    CubicPoint,
    InterpolatedPoint,
    Point,
    PointQuery,
    QuadraticPoint,
    adjust,
)

POINT_TOLERANCE = 0.125
T_TOLERANCE = 0.001


def random_point(rng):
    """Return a point with coordinates in [-100, 100]."""
    return Point(float(rng.uniform(-100.0, 100.0)), float(rng.uniform(-100.0, 100.0)))


def random_curves(seed):
    """Return a common start point and one linear, quadratic and cubic end point."""
    rng = np.random.default_rng(seed)
    start = random_point(rng)
    linear = random_point(rng)
    quad = random_point(rng)
    cub = random_point(rng)
    return start, [
        linear,
        QuadraticPoint(quad.x, quad.y, cp1=random_point(rng)),
        CubicPoint(cub.x, cub.y, cp1=random_point(rng), cp2=random_point(rng)),
    ]


def assert_interpolates(t, start, end, dimension_to_find):
    """Assert that the point at t is found again when one of its coordinates is unknown."""
    known = point_at(t, start, end)
    if dimension_to_find == "x":
        query = PointQuery(x=None, y=known.y)
    else:
        query = PointQuery(x=known.x, y=None)

    found = [p for p in interpolate(start, end, query) if abs(p.t - t) <= T_TOLERANCE]
    assert found, f"point at t={t} not found for {start} -> {end}"
    for p in found:
        assert p.x == pytest.approx(known.x, abs=POINT_TOLERANCE)
        assert p.y == pytest.approx(known.y, abs=POINT_TOLERANCE)


###############################################################################
# Round Trip Tests
###############################################################################


class TestInterpolateRoundTrip:
    """Test that points on the curve are found again."""

    @pytest.mark.parametrize("degree", [0, 1, 2])
    @pytest.mark.parametrize("dimension_to_find", ["x", "y"])
    def test_start_point(self, degree, dimension_to_find):
        """Test that the start point is found at t=0."""
        start, curves = random_curves(200)
        assert_interpolates(0.0, start, curves[degree], dimension_to_find)

    @pytest.mark.parametrize("degree", [0, 1, 2])
    @pytest.mark.parametrize("dimension_to_find", ["x", "y"])
    def test_end_point(self, degree, dimension_to_find):
        """Test that the end point is found at t=1."""
        start, curves = random_curves(201)
        assert_interpolates(1.0, start, curves[degree], dimension_to_find)

    @pytest.mark.parametrize("degree", [0, 1, 2])
    @pytest.mark.parametrize("dimension_to_find", ["x", "y"])
    @pytest.mark.parametrize("seed", [202, 203, 204])
    def test_nominal_cases(self, degree, dimension_to_find, seed):
        """Test points inside the curve."""
        start, curves = random_curves(seed)
        for t in [0.1, 0.5, 0.7, 0.9]:
            assert_interpolates(t, start, curves[degree], dimension_to_find)

    def test_result_records(self):
        """Test that results carry t and the queried coordinate exactly."""
        start = Point(0.0, 0.0)
        end = QuadraticPoint(10.0, 0.0, cp1=Point(5.0, 10.0))
        found = interpolate(start, end, PointQuery(x=5.0))
        assert len(found) == 1
        assert isinstance(found[0], InterpolatedPoint)
        assert found[0].x == 5.0
        assert found[0].t == pytest.approx(0.5)
        assert found[0].y == pytest.approx(5.0)

    def test_two_solutions_ordered_by_t(self):
        """Test that a horizontal query through a parabola hits it twice."""
        start = Point(0.0, 0.0)
        end = QuadraticPoint(10.0, 0.0, cp1=Point(5.0, 10.0))
        found = interpolate(start, end, PointQuery(y=3.75))
        assert [p.t for p in found] == [pytest.approx(0.25), pytest.approx(0.75)]
        assert [p.x for p in found] == [pytest.approx(2.5), pytest.approx(7.5)]

    def test_cubic_extremum_found_once(self):
        """Test that a query touching a cubic at its extremum gives one point."""
        # y(t) = 30 (t - t^3), maximum at t = 1/sqrt(3)
        start = Point(0.0, 0.0)
        end = CubicPoint(30.0, 0.0, cp1=Point(10.0, 10.0), cp2=Point(20.0, 20.0))
        t_max = 1.0 / math.sqrt(3.0)
        found = interpolate(start, end, PointQuery(y=20.0 / math.sqrt(3.0)))
        assert len(found) == 1
        assert found[0].t == pytest.approx(t_max, abs=1e-5)
        assert found[0].x == pytest.approx(30.0 * t_max, abs=1e-3)

    def test_quadratic_extremum_found_once(self):
        """Test that a query touching a parabola at its apex gives one point."""
        start = Point(0.0, 0.0)
        end = QuadraticPoint(10.0, 0.0, cp1=Point(5.0, 10.0))
        found = interpolate(start, end, PointQuery(y=5.0))
        assert len(found) == 1
        assert found[0].t == pytest.approx(0.5)
        assert found[0].x == pytest.approx(5.0)

    def test_cubic_three_solutions(self):
        """Test a cubic crossing its chord three times."""
        start = Point(0.0, 0.0)
        end = CubicPoint(30.0, 0.0, cp1=Point(10.0, 10.0), cp2=Point(20.0, -10.0))
        found = interpolate(start, end, PointQuery(y=0.0))
        assert [p.t for p in found] == [pytest.approx(0.0, abs=1e-9), pytest.approx(0.5), pytest.approx(1.0)]


###############################################################################
# Empty Result Tests
###############################################################################


class TestInterpolateEmpty:
    """Test queries without a solution."""

    def test_both_coordinates_set(self):
        """Test that a query with both coordinates set is not interpolated."""
        start, _ = random_curves(210)
        end = Point(start.x, start.y + 50.0)
        assert not interpolate(start, end, end)
        assert not interpolate(start, end, PointQuery(start.x, start.y + 10.0))

    def test_no_coordinate_set(self):
        """Test that a query without coordinates is not interpolated."""
        start, (linear, _, _) = random_curves(211)
        assert not interpolate(start, linear, PointQuery())

    def test_vertical_line_given_x(self):
        """Test that x cannot be interpolated on a vertical line."""
        start, _ = random_curves(212)
        end = Point(start.x, start.y + 50.0)
        assert not interpolate(start, end, PointQuery(x=start.x))

    def test_horizontal_line_given_y(self):
        """Test that y cannot be interpolated on a horizontal line."""
        start, _ = random_curves(213)
        end = Point(start.x + 50.0, start.y)
        assert not interpolate(start, end, PointQuery(y=start.y))

    def test_outside_linear(self):
        """Test that points beyond the end of a line are not found."""
        start, _ = random_curves(214)
        end = Point(start.x + 50.0, start.y)
        assert not interpolate(start, end, PointQuery(x=start.x + 75.0))

    def test_outside_quadratic(self):
        """Test queries outside the range of a quadratic curve."""
        start, _ = random_curves(215)
        end_point = Point(start.x + 50.0, start.y)
        cp = adjust(point_at(0.5, start, end_point), 0.0, 10.0)
        end = QuadraticPoint(end_point.x, end_point.y, cp1=cp)

        # farther to the right than the end point
        assert not interpolate(start, end, PointQuery(x=start.x + 75.0))
        # below both end points and the control point
        assert not interpolate(start, end, PointQuery(y=start.y - 10.0))
        # above the control point
        assert not interpolate(start, end, PointQuery(y=cp.y + 10.0))

    def test_outside_cubic(self):
        """Test queries outside the range of a cubic curve."""
        start, _ = random_curves(216)
        end_point = Point(start.x + 50.0, start.y)
        cp1 = adjust(point_at(0.3, start, end_point), 0.0, 10.0)
        cp2 = adjust(point_at(0.7, start, end_point), 0.0, -10.0)
        end = CubicPoint(end_point.x, end_point.y, cp1=cp1, cp2=cp2)

        assert not interpolate(start, end, PointQuery(x=start.x + 75.0))
        assert not interpolate(start, end, PointQuery(y=start.y - 11.0))
        assert not interpolate(start, end, PointQuery(y=start.y + 11.0))

    def test_outside_segment_kept_on_request(self):
        """Test that solutions outside [0, 1] are returned when asked for."""
        start = Point(0.0, 0.0)
        end = Point(50.0, 0.0)
        found = interpolate(start, end, PointQuery(x=75.0), within_segment=False)
        assert len(found) == 1
        assert found[0].t == pytest.approx(1.5)
        assert found[0].y == pytest.approx(0.0)
