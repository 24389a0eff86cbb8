"""Central module containing constants and definitions for drawpoint curve handling."""

from __future__ import annotations

from enum import IntEnum
from typing import Literal

###############################################################################
# Types
###############################################################################


DrawCmds = Literal[  # Type-Definition for path commands produced from drawpoints
    # MoveTo (1) - start a new subpath and move the current point to (x,y)
    "M",
    # LineTo (1) - draw a straight line from the current point to (x,y)
    "L",
    # Quadratic Bezier To (2) - one control point and an endpoint (x,y)
    "Q",
    # Cubic Bezier To (3) - two control points and an endpoint (x,y)
    "C",
]


###############################################################################
# Enums and Consts
###############################################################################


class Degree(IntEnum):
    """Degree of the Bezier curve arriving at a drawpoint."""

    LINEAR = 1
    QUADRATIC = 2
    CUBIC = 3


# Relative size below which a polynomial coefficient counts as zero
COEFFICIENT_EPS: float = 1.0e-12

# Largest imaginary part (relative) of a numpy root still accepted as real
ROOT_IMAG_EPS: float = 1.0e-7

# Slack on the [0, 1] parameter range when filtering interpolation roots
PARAMETER_EPS: float = 1.0e-9

# Distance (relative) below which two roots are merged
ROOT_MERGE_EPS: float = 1.0e-9

# Largest distance (relative) of two roots that may still be one double root
ROOT_CLUSTER_EPS: float = 1.0e-4

# Polynomial value (relative to its largest coefficient) counted as touching zero
ROOT_TOUCH_EPS: float = 1.0e-9

# Control point distance factor approximating a quarter circle with a cubic
CIRCLE_STRETCH: float = 0.552284749831

# Type column values used for points in path arrays
POINT_TYPE_ON_CURVE: float = 0.0
POINT_TYPE_QUADRATIC: float = 2.0
POINT_TYPE_CUBIC: float = 3.0
