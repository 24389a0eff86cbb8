"""Bezier curve kernels working on control point arrays of degree 1 to 3."""

from __future__ import annotations

import math
from typing import List, Sequence, Tuple, Union

import numpy as np
from numpy.typing import NDArray

from drawpoint.common import (
    COEFFICIENT_EPS,
    POINT_TYPE_CUBIC,
    POINT_TYPE_ON_CURVE,
    POINT_TYPE_QUADRATIC,
    ROOT_CLUSTER_EPS,
    ROOT_IMAG_EPS,
    ROOT_MERGE_EPS,
    ROOT_TOUCH_EPS,
)

ControlPoints = Union[Sequence[Tuple[float, float]], NDArray[np.float64]]

# Type column value of interior polygonized points, indexed by degree
_CURVE_POINT_TYPES: Tuple[float, ...] = (
    POINT_TYPE_ON_CURVE,
    POINT_TYPE_ON_CURVE,
    POINT_TYPE_QUADRATIC,
    POINT_TYPE_CUBIC,
)


def get_elevation_matrix(degree: int) -> NDArray[np.float64]:
    """Compute the matrix elevating a Bezier curve from degree N to N+1.

    Row i of the result holds the weights of the original control points
    for the i-th elevated control point:
        Q_0 = P_0
        Q_i = i/(N+1) * P_(i-1) + (1 - i/(N+1)) * P_i   for 1 <= i <= N
        Q_(N+1) = P_N

    Args:
        degree: Original degree N

    Returns:
        NDArray[np.float64] of shape (N+2, N+1)
    """
    elevation = np.zeros((degree + 2, degree + 1), dtype=np.float64)
    elevation[0, 0] = 1.0
    elevation[degree + 1, degree] = 1.0
    for i in range(1, degree + 1):
        alpha = i / (degree + 1)
        elevation[i, i - 1] = alpha
        elevation[i, i] = 1.0 - alpha
    return elevation


class BezierCurve:
    """Class to handle linear, quadratic and cubic Bezier curve operations.

    All methods take the control points of one curve as a (degree + 1, 2)
    array-like: start point, control point(s), end point.
    """

    @staticmethod
    def control_array(points: ControlPoints) -> NDArray[np.float64]:
        """Convert control points to a float array and validate its shape.

        Raises:
            ValueError: If the points are not (x, y) pairs or the degree is not 1, 2 or 3.
        """
        if isinstance(points, np.ndarray) and points.dtype == np.float64:
            points_array = points
        else:
            points_array = np.asarray(points, dtype=np.float64)
        if points_array.ndim != 2 or points_array.shape[1] < 2:
            raise ValueError("Bezier control points require (x, y) formatted points.")
        if not 2 <= points_array.shape[0] <= 4:
            raise ValueError(f"Bezier curves of degree 1 to 3 need 2 to 4 points, got {points_array.shape[0]}.")
        return points_array[:, :2]

    ###########################################################################
    # Evaluation
    ###########################################################################

    @classmethod
    def evaluate(cls, points: ControlPoints, t: Union[float, NDArray[np.float64]]) -> NDArray[np.float64]:
        """Evaluate the curve at parameter(s) t using the Bernstein basis.

        t may lie outside [0, 1], the curve is then extrapolated.
        At t = 0 and t = 1 the start and end point are returned exactly.

        Args:
            points: Control points (start, [control1, [control2,]] end)
            t: Scalar parameter or array of parameters

        Returns:
            NDArray[np.float64] of shape (2,) for a scalar t, (n, 2) for an array of n parameters
        """
        ctrl = cls.control_array(points)
        t_values = np.asarray(t, dtype=np.float64)[..., np.newaxis]
        omt = 1.0 - t_values
        degree = ctrl.shape[0] - 1

        if degree == 1:
            return omt * ctrl[0] + t_values * ctrl[1]
        if degree == 2:
            return omt * omt * ctrl[0] + 2.0 * omt * t_values * ctrl[1] + t_values * t_values * ctrl[2]

        omt2 = omt * omt
        t2 = t_values * t_values
        return (
            omt2 * omt * ctrl[0]
            + 3.0 * omt2 * t_values * ctrl[1]
            + 3.0 * omt * t2 * ctrl[2]
            + t2 * t_values * ctrl[3]
        )

    ###########################################################################
    # Subdivision and elevation
    ###########################################################################

    @classmethod
    def split(cls, points: ControlPoints, t: float) -> Tuple[NDArray[np.float64], NDArray[np.float64]]:
        """Split the curve at t using De Casteljau's algorithm.

        Each round interpolates neighbouring points at t; the first point of every
        round belongs to the left curve, the last one to the right curve.

        Args:
            points: Control points of the curve
            t: Split parameter, any real value

        Returns:
            Tuple (left, right) of control point arrays with the degree of the input
        """
        work = cls.control_array(points).copy()
        omt = 1.0 - t
        left = [work[0]]
        right = [work[-1]]
        while work.shape[0] > 1:
            work = omt * work[:-1] + t * work[1:]
            left.append(work[0])
            right.append(work[-1])
        return np.array(left), np.array(right[::-1])

    @classmethod
    def elevate(cls, points: ControlPoints) -> NDArray[np.float64]:
        """Raise the degree of the curve by one without changing its points per t.

        Raises:
            ValueError: If the curve is already cubic.
        """
        ctrl = cls.control_array(points)
        degree = ctrl.shape[0] - 1
        if degree >= 3:
            raise ValueError("Cubic curves cannot be elevated, degree 4 is not supported.")
        return get_elevation_matrix(degree) @ ctrl

    ###########################################################################
    # Polynomial form and roots
    ###########################################################################

    @staticmethod
    def power_coefficients(values: Sequence[float]) -> NDArray[np.float64]:
        """Convert one coordinate of the control points to power basis coefficients.

        Args:
            values: The coordinate (x or y) of the 2 to 4 control points

        Returns:
            Polynomial coefficients in t, highest power first (numpy.roots order)
        """
        v = np.asarray(values, dtype=np.float64)
        if v.shape[0] == 2:
            return np.array([v[1] - v[0], v[0]])
        if v.shape[0] == 3:
            return np.array([v[0] - 2.0 * v[1] + v[2], 2.0 * (v[1] - v[0]), v[0]])
        if v.shape[0] == 4:
            return np.array(
                [
                    -v[0] + 3.0 * v[1] - 3.0 * v[2] + v[3],
                    3.0 * v[0] - 6.0 * v[1] + 3.0 * v[2],
                    3.0 * (v[1] - v[0]),
                    v[0],
                ]
            )
        raise ValueError(f"Expected 2 to 4 coordinate values, got {v.shape[0]}.")

    @classmethod
    def real_roots(cls, coefficients: Sequence[float]) -> List[float]:
        """Find the real roots of a polynomial of degree 0 to 3.

        Leading coefficients that are negligible compared to the largest one are
        dropped, so a nearly degenerate cubic is solved as quadratic or linear.
        Complex and NaN roots are discarded, coinciding roots reported once.

        Args:
            coefficients: Polynomial coefficients, highest power first

        Returns:
            Sorted list of real roots; empty if there is none or the polynomial is constant
        """
        coeffs = [float(c) for c in coefficients]
        magnitude = max((abs(c) for c in coeffs), default=0.0)
        if magnitude == 0.0 or not math.isfinite(magnitude):
            return []
        while len(coeffs) > 1 and abs(coeffs[0]) <= COEFFICIENT_EPS * magnitude:
            coeffs.pop(0)

        degree = len(coeffs) - 1
        if degree == 0:
            roots: List[float] = []
        elif degree == 1:
            roots = [-coeffs[1] / coeffs[0]]
        elif degree == 2:
            roots = cls._quadratic_roots(coeffs[0], coeffs[1], coeffs[2])
        elif degree == 3:
            roots = cls._cubic_roots(coeffs)
        else:
            raise ValueError(f"Only polynomials up to degree 3 are supported, got degree {degree}.")

        result: List[float] = []
        for root in sorted(r for r in roots if math.isfinite(r)):
            if result and cls._same_root(coeffs, result[-1], root, magnitude):
                result[-1] = 0.5 * (result[-1] + root)
            else:
                result.append(root)
        return result

    @staticmethod
    def _same_root(coeffs: Sequence[float], left: float, right: float, magnitude: float) -> bool:
        """Tell whether two neighbouring roots are one root split by rounding.

        A double root (the polynomial touching zero) comes back from the solvers
        as two real values up to about sqrt(machine epsilon) apart. Such a pair
        is recognized by the polynomial staying at zero between them.
        """
        scale = max(1.0, abs(left), abs(right))
        gap = right - left
        if gap <= ROOT_MERGE_EPS * scale:
            return True
        if gap > ROOT_CLUSTER_EPS * scale:
            return False
        return abs(np.polyval(coeffs, 0.5 * (left + right))) <= ROOT_TOUCH_EPS * magnitude

    @staticmethod
    def _quadratic_roots(a: float, b: float, c: float) -> List[float]:
        """Real roots of a*t^2 + b*t + c with a != 0, avoiding cancellation."""
        disc = b * b - 4.0 * a * c
        if disc < 0.0:
            # rounding can push a double root slightly below zero
            if disc < -COEFFICIENT_EPS * (b * b + abs(4.0 * a * c)):
                return []
            disc = 0.0
        q = -0.5 * (b + math.copysign(math.sqrt(disc), b))
        if q == 0.0:
            return [0.0]
        return [q / a, c / q]

    @staticmethod
    def _cubic_roots(coeffs: Sequence[float]) -> List[float]:
        """Real roots of a cubic via numpy's companion matrix eigenvalues, Newton polished.

        A double root may come back as a complex pair with a tiny imaginary part;
        it is kept when the polynomial touches zero at its real part.
        """
        magnitude = max(abs(c) for c in coeffs)
        roots = []
        for root in np.roots(coeffs):
            scale = max(1.0, abs(root))
            if abs(root.imag) > ROOT_IMAG_EPS * scale:
                touching = abs(np.polyval(coeffs, root.real)) <= ROOT_TOUCH_EPS * magnitude
                if abs(root.imag) > ROOT_CLUSTER_EPS * scale or not touching:
                    continue
            t = float(root.real)
            for _ in range(2):
                value = np.polyval(coeffs, t)
                slope = np.polyval(np.polyder(coeffs), t)
                if slope == 0.0:
                    break
                refined = t - value / slope
                if not math.isfinite(refined) or abs(np.polyval(coeffs, refined)) >= abs(value):
                    break
                t = float(refined)
            roots.append(t)
        return roots

    ###########################################################################
    # Polygonization
    ###########################################################################

    @classmethod
    def polygonize_curve_inplace(
        # pylint: disable=too-many-arguments,too-many-positional-arguments
        cls,
        points: ControlPoints,
        steps: int,
        output_buffer: NDArray[np.float64],
        start_index: int = 0,
        skip_first: bool = False,
    ) -> int:
        """
        Polygonize a Bezier curve directly into pre-allocated buffer.

        Args:
            points: Control points (start, [control1, [control2,]] end)
            steps: Number of segments to divide the curve into
            output_buffer: Pre-allocated buffer of shape (n, 3) to write points into
            start_index: Starting index in output_buffer
            skip_first: If True, skip writing the first point (to avoid duplication)

        Returns:
            Number of points written to buffer
        """
        ctrl = cls.control_array(points)
        t = np.linspace(0.0, 1.0, steps + 1, dtype=np.float64)
        if skip_first:
            t = t[1:]

        xy = cls.evaluate(ctrl, t)

        types = np.full(len(t), _CURVE_POINT_TYPES[ctrl.shape[0] - 1], dtype=np.float64)
        if len(types) > 0:
            if not skip_first:
                types[0] = POINT_TYPE_ON_CURVE
            types[-1] = POINT_TYPE_ON_CURVE

        end_idx = start_index + len(t)
        output_buffer[start_index:end_idx, :2] = xy
        output_buffer[start_index:end_idx, 2] = types
        return len(t)

    @classmethod
    def polygonize_curve(cls, points: ControlPoints, steps: int) -> NDArray[np.float64]:
        """
        Polygonize a Bezier curve into line segments.

        Args:
            points: Control points (start, [control1, [control2,]] end)
            steps: Number of segments to divide the curve into, at least 1

        Returns:
            NDArray[np.float64] of shape (steps+1, 3) containing the polygonized points (x, y, type)

        Raises:
            ValueError: If steps is smaller than 1.
        """
        if steps < 1:
            raise ValueError(f"Polygonization needs at least 1 step, got {steps}.")
        result = np.empty((steps + 1, 3), dtype=np.float64)
        cls.polygonize_curve_inplace(points, steps, result, start_index=0, skip_first=False)
        return result
