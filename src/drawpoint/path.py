"""Conversion of drawpoint sequences into point/command paths and polygons."""

from __future__ import annotations

from typing import Dict, List, Optional, Sequence, Union

import numpy as np
import shapely.geometry
from numpy.typing import NDArray

from drawpoint.bezier import BezierCurve
from drawpoint.common import (
    POINT_TYPE_CUBIC,
    POINT_TYPE_ON_CURVE,
    POINT_TYPE_QUADRATIC,
    DrawCmds,
)
from drawpoint.point import BreakPoint, CubicPoint, DrawPoint, QuadraticPoint

# Number of points consumed by each command
POINTS_PER_COMMAND: Dict[str, int] = {"M": 1, "L": 1, "Q": 2, "C": 3}

# Type column of the points consumed by each command, control points first
_COMMAND_POINT_TYPES: Dict[str, Sequence[float]] = {
    "M": (POINT_TYPE_ON_CURVE,),
    "L": (POINT_TYPE_ON_CURVE,),
    "Q": (POINT_TYPE_QUADRATIC, POINT_TYPE_ON_CURVE),
    "C": (POINT_TYPE_CUBIC, POINT_TYPE_CUBIC, POINT_TYPE_ON_CURVE),
}


###############################################################################
# DrawPath
###############################################################################


class DrawPath:
    """Path of M, L, Q and C commands with their points as (x, y, type) rows.

    Type is 0.0 for points on the path, 2.0 for quadratic and 3.0 for cubic
    control points.
    """

    def __init__(
        self,
        points: Optional[Union[Sequence[Sequence[float]], NDArray[np.float64]]] = None,
        commands: Optional[List[DrawCmds]] = None,
    ):
        """Initialize a path and validate that commands and points match.

        Args:
            points: Points of shape (n, 2) or (n, 3); a missing type column is derived from commands
            commands: Commands consuming the points in order

        Raises:
            ValueError: If the commands are unknown or do not consume exactly all points.
        """
        commands = list(commands) if commands is not None else []
        if points is None or len(points) == 0:
            points_array = np.empty((0, 3), dtype=np.float64)
        else:
            points_array = np.asarray(points, dtype=np.float64)
            if points_array.ndim != 2 or points_array.shape[1] not in (2, 3):
                raise ValueError("Path points must have shape (n, 2) or (n, 3).")

        expected = 0
        for cmd in commands:
            if cmd not in POINTS_PER_COMMAND:
                raise ValueError(f"Unknown command '{cmd}'")
            expected += POINTS_PER_COMMAND[cmd]
        if expected != points_array.shape[0]:
            raise ValueError(f"Commands consume {expected} points, got {points_array.shape[0]}")
        if commands and commands[0] != "M":
            raise ValueError(f"Path must start with a MoveTo command, got '{commands[0]}'")

        if points_array.shape[1] == 2:
            types = [value for cmd in commands for value in _COMMAND_POINT_TYPES[cmd]]
            points_array = np.column_stack([points_array, np.asarray(types, dtype=np.float64)])

        self._points = points_array
        self._commands = commands

    @property
    def points(self) -> NDArray[np.float64]:
        """NDArray[np.float64]: Points of the path as (x, y, type) rows."""
        return self._points

    @property
    def commands(self) -> List[DrawCmds]:
        """List[DrawCmds]: Commands of the path."""
        return self._commands

    def __len__(self) -> int:
        return len(self._commands)

    @classmethod
    def from_draw_points(cls, *draw_points: Optional[Union[DrawPoint, BreakPoint]]) -> "DrawPath":
        """Create the path visiting the given drawpoints in order.

        The first point is moved to. Every following point adds a line, a
        quadratic or a cubic curve depending on its control points. None entries
        are skipped; after BREAK_POINT the next point is moved to.

        Args:
            draw_points: Drawpoints, None or BREAK_POINT

        Returns:
            DrawPath: The path
        """
        rows: List[List[float]] = []
        commands: List[DrawCmds] = []
        move_next = True

        for pt in draw_points:
            if pt is None:
                continue
            if isinstance(pt, BreakPoint):
                move_next = True
                continue

            if move_next:
                commands.append("M")
                rows.append([pt.x, pt.y, POINT_TYPE_ON_CURVE])
                move_next = False
            elif isinstance(pt, CubicPoint):
                commands.append("C")
                rows.append([pt.cp1.x, pt.cp1.y, POINT_TYPE_CUBIC])
                rows.append([pt.cp2.x, pt.cp2.y, POINT_TYPE_CUBIC])
                rows.append([pt.x, pt.y, POINT_TYPE_ON_CURVE])
            elif isinstance(pt, QuadraticPoint):
                commands.append("Q")
                rows.append([pt.cp1.x, pt.cp1.y, POINT_TYPE_QUADRATIC])
                rows.append([pt.x, pt.y, POINT_TYPE_ON_CURVE])
            else:
                commands.append("L")
                rows.append([pt.x, pt.y, POINT_TYPE_ON_CURVE])

        return cls(rows, commands)

    def polygonize(self, steps: int) -> "DrawPath":
        """Return a path where every curve is replaced by steps line segments.

        Args:
            steps: Number of segments per curve; 0 returns the path unchanged

        Returns:
            DrawPath: Path consisting of M and L commands only
        """
        if steps == 0:
            return self

        num_curves = self._commands.count("Q") + self._commands.count("C")
        estimated_points = len(self._points) + num_curves * steps
        new_points = np.empty((estimated_points, 3), dtype=np.float64)
        new_commands: List[DrawCmds] = []

        point_index = 0
        array_index = 0
        last_point: Optional[NDArray[np.float64]] = None

        for cmd in self._commands:
            consumed = POINTS_PER_COMMAND[cmd]
            cmd_points = self._points[point_index : point_index + consumed]
            point_index += consumed

            if cmd in ("M", "L"):
                new_points[array_index] = cmd_points[0]
                new_commands.append(cmd)
                array_index += 1
            else:
                control_points = np.vstack([last_point, cmd_points[:, :2]])
                num_curve_points = BezierCurve.polygonize_curve_inplace(
                    control_points, steps, new_points, array_index, skip_first=True
                )
                new_commands.extend(["L"] * num_curve_points)
                array_index += num_curve_points
            last_point = cmd_points[-1, :2]

        return DrawPath(new_points[:array_index], new_commands)

    def polygon(self, steps: int = 20) -> shapely.geometry.Polygon:
        """Return the polygon enclosed by this single sub path.

        Curves are polygonized with the given number of steps. An invalid
        (self-intersecting) outline is cleaned using buffer(0).

        Raises:
            ValueError: If steps is smaller than 1, the path has not exactly one sub path
                or encloses no polygon.
        """
        if steps < 1:
            raise ValueError(f"Polygon needs at least 1 polygonization step, got {steps}")
        if self._commands.count("M") != 1:
            raise ValueError(f"Polygon needs exactly one sub path, got {self._commands.count('M')}")

        xy = self.polygonize(steps).points[:, :2]
        if len(xy) >= 2 and np.allclose(xy[0], xy[-1]):
            xy = xy[:-1]
        if len(xy) < 3:
            raise ValueError(f"Polygon needs at least 3 points, got {len(xy)}")

        polygon = shapely.geometry.Polygon(xy.tolist())
        if not polygon.is_valid:
            print("Warning: Polygon outline is invalid. Cleaning with buffer(0).")
            polygon = polygon.buffer(0)
        if not isinstance(polygon, shapely.geometry.Polygon) or polygon.is_empty:
            raise ValueError("Path does not enclose a single polygon.")
        return polygon
