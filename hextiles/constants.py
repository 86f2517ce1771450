"""Constants shared by the coordinate engine, the traversers and the grid."""

from enum import Enum, IntEnum
from typing import Optional


class Orientation(str, Enum):
    POINTY = "pointy"
    FLAT = "flat"


class CompassDirection(IntEnum):
    N = 0
    NE = 1
    E = 2
    SE = 3
    S = 4
    SW = 5
    W = 6
    NW = 7


class Rotation(str, Enum):
    CLOCKWISE = "clockwise"
    COUNTERCLOCKWISE = "counterclockwise"


# Hex settings defaults
DEFAULT_DIMENSIONS = 1
DEFAULT_ORIENTATION = Orientation.POINTY
DEFAULT_ORIGIN = (0, 0)
DEFAULT_OFFSET = -1

# Axial displacement per compass direction. None marks the two directions
# that point at a corner instead of an edge; those neighbors are found by
# stepping one row (pointy) or column (flat) in offset coordinates.
POINTY_DIRECTIONS: dict[CompassDirection, Optional[tuple[int, int]]] = {
    CompassDirection.N: None,
    CompassDirection.NE: (1, -1),
    CompassDirection.E: (1, 0),
    CompassDirection.SE: (0, 1),
    CompassDirection.S: None,
    CompassDirection.SW: (-1, 1),
    CompassDirection.W: (-1, 0),
    CompassDirection.NW: (0, -1),
}

FLAT_DIRECTIONS: dict[CompassDirection, Optional[tuple[int, int]]] = {
    CompassDirection.N: (0, -1),
    CompassDirection.NE: (1, -1),
    CompassDirection.E: None,
    CompassDirection.SE: (1, 0),
    CompassDirection.S: (0, 1),
    CompassDirection.SW: (-1, 1),
    CompassDirection.W: None,
    CompassDirection.NW: (-1, 0),
}

# Axial vectors walking a ring clockwise, beginning at the hex `radius`
# steps along +q from the center.
RING_DIRECTIONS = [
    (-1, 1), (-1, 0), (0, -1),
    (1, -1), (1, 0), (0, 1),
]

# Sub-epsilon shift applied before lerping a line so points on an edge
# round consistently.
LINE_NUDGE = (1e-6, 1e-6, -2e-6)

# Cardinal directions a rectangle can be traversed in.
RECTANGLE_DIRECTIONS = (
    CompassDirection.N,
    CompassDirection.E,
    CompassDirection.S,
    CompassDirection.W,
)
