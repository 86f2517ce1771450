"""Hex math utilities: coordinate conversion, pixel geometry, rounding, distance.

Cube coordinates (q, r, s) with q + r + s == 0; axial (q, r) drops the derivable s.
Every function is pure. Anything taking ``coordinates`` accepts a hex, a
coordinate dataclass, a (q, r) / (q, r, s) tuple or a {"q", "r"} / {"col", "row"}
mapping.
"""

import math
from collections.abc import Mapping
from pygame.math import Vector2
from hextiles.compass import parse_direction
from hextiles.constants import (
    Orientation, CompassDirection, POINTY_DIRECTIONS, FLAT_DIRECTIONS, LINE_NUDGE,
)
from hextiles.exceptions import InvalidCoordinatesError
from hextiles.models import (
    AxialCoordinates, CubeCoordinates, OffsetCoordinates, HexSettings, to_point,
)


def tuple_to_cube(coordinates) -> CubeCoordinates:
    """Convert a (q, r) or (q, r, s) tuple to cube coords, deriving s when absent."""
    if len(coordinates) == 2:
        q, r = coordinates
        return CubeCoordinates(q, r, -q - r)
    if len(coordinates) == 3:
        return CubeCoordinates(*coordinates)
    raise InvalidCoordinatesError(coordinates, "expected (q, r) or (q, r, s)")


def offset_from_zero(offset: int, distance: int) -> int:
    """Shift applied to every other row/column; `offset` picks which ones."""
    return (distance + offset * (distance & 1)) >> 1


def hex_to_offset(q: int, r: int, orientation: Orientation, offset: int) -> OffsetCoordinates:
    """Convert axial (q, r) to offset (col, row)."""
    if orientation == Orientation.POINTY:
        return OffsetCoordinates(col=q + offset_from_zero(offset, r), row=r)
    return OffsetCoordinates(col=q, row=r + offset_from_zero(offset, q))


def offset_to_cube(col: int, row: int, orientation: Orientation, offset: int) -> CubeCoordinates:
    """Convert offset (col, row) back to cube (q, r, s)."""
    if orientation == Orientation.POINTY:
        q = col - offset_from_zero(offset, row)
        r = row
    else:
        q = col
        r = row - offset_from_zero(offset, col)
    return CubeCoordinates(q, r, -q - r)


def to_cube(settings: HexSettings, coordinates) -> CubeCoordinates:
    """Normalize any supported coordinate form to cube coords."""
    if isinstance(coordinates, CubeCoordinates):
        return coordinates
    if isinstance(coordinates, AxialCoordinates):
        return CubeCoordinates.from_axial(coordinates.q, coordinates.r)
    if isinstance(coordinates, OffsetCoordinates):
        return offset_to_cube(coordinates.col, coordinates.row, settings.orientation, settings.offset)
    if isinstance(coordinates, Mapping):
        if "q" in coordinates and "r" in coordinates:
            q, r = coordinates["q"], coordinates["r"]
            s = coordinates.get("s")
            return CubeCoordinates(q, r, -q - r if s is None else s)
        if "col" in coordinates and "row" in coordinates:
            return offset_to_cube(coordinates["col"], coordinates["row"], settings.orientation, settings.offset)
        raise InvalidCoordinatesError(coordinates, "expected q/r or col/row keys")
    if isinstance(coordinates, (tuple, list)):
        return tuple_to_cube(coordinates)
    if hasattr(coordinates, "q") and hasattr(coordinates, "r"):
        q, r = coordinates.q, coordinates.r
        return CubeCoordinates(q, r, -q - r)
    raise InvalidCoordinatesError(coordinates)


def hex_to_point(q: int, r: int, settings: HexSettings) -> Vector2:
    """Convert axial coords to the pixel center of the hex."""
    x_radius = settings.dimensions.x_radius
    y_radius = settings.dimensions.y_radius
    if settings.is_pointy:
        x = x_radius * math.sqrt(3) * (q + r / 2)
        y = y_radius * 3 / 2 * r
    else:
        x = x_radius * 3 / 2 * q
        y = y_radius * math.sqrt(3) * (r + q / 2)
    return Vector2(x, y) + Vector2(settings.origin)


def hex_corners(center: Vector2, width: float, height: float, orientation: Orientation) -> list[Vector2]:
    """Return the 6 corner vertices of a hex, clockwise."""
    x, y = center.x, center.y
    if orientation == Orientation.POINTY:
        return [
            Vector2(x + width * 0.5, y - height * 0.25),
            Vector2(x + width * 0.5, y + height * 0.25),
            Vector2(x, y + height * 0.5),
            Vector2(x - width * 0.5, y + height * 0.25),
            Vector2(x - width * 0.5, y - height * 0.25),
            Vector2(x, y - height * 0.5),
        ]
    return [
        Vector2(x + width * 0.5, y),
        Vector2(x + width * 0.25, y + height * 0.5),
        Vector2(x - width * 0.25, y + height * 0.5),
        Vector2(x - width * 0.5, y),
        Vector2(x - width * 0.25, y - height * 0.5),
        Vector2(x + width * 0.25, y - height * 0.5),
    ]


def hex_round(q_frac: float, r_frac: float, s_frac: float = None) -> CubeCoordinates:
    """Round fractional cube coords to the nearest hex.

    Each component is rounded on its own (halves up); the one that moved the most is then
    recomputed from the other two so the result keeps q + r + s == 0.
    """
    if s_frac is None:
        s_frac = -q_frac - r_frac
    q = math.floor(q_frac + 0.5)
    r = math.floor(r_frac + 0.5)
    s = math.floor(s_frac + 0.5)
    q_diff = abs(q - q_frac)
    r_diff = abs(r - r_frac)
    s_diff = abs(s - s_frac)
    if q_diff > r_diff and q_diff > s_diff:
        q = -r - s
    elif r_diff > s_diff:
        r = -q - s
    else:
        s = -q - r
    return CubeCoordinates(q, r, s)


def point_to_cube(settings: HexSettings, point) -> CubeCoordinates:
    """Convert a pixel point to the cube coords of the hex containing it."""
    relative = to_point(point) - Vector2(settings.origin)
    x_radius = settings.dimensions.x_radius
    y_radius = settings.dimensions.y_radius
    if settings.is_pointy:
        q_frac = math.sqrt(3) * relative.x / (3 * x_radius) - relative.y / (3 * y_radius)
        r_frac = 2 / 3 * relative.y / y_radius
    else:
        q_frac = 2 / 3 * relative.x / x_radius
        r_frac = math.sqrt(3) * relative.y / (3 * y_radius) - relative.x / (3 * x_radius)
    return hex_round(q_frac, r_frac)


def hex_distance(q1: int, r1: int, q2: int, r2: int) -> int:
    """Number of steps between two hexes in axial coords."""
    s1 = -q1 - r1
    s2 = -q2 - r2
    return max(abs(q1 - q2), abs(r1 - r2), abs(s1 - s2))


def distance(settings: HexSettings, from_coordinates, to_coordinates) -> int:
    a = to_cube(settings, from_coordinates)
    b = to_cube(settings, to_coordinates)
    return hex_distance(a.q, a.r, b.q, b.r)


def hex_line(start: CubeCoordinates, stop: CubeCoordinates) -> list[CubeCoordinates]:
    """Return the hexes on the straight line from start to stop, both included."""
    steps = hex_distance(start.q, start.r, stop.q, stop.r)
    dq, dr, ds = LINE_NUDGE
    a = (start.q + dq, start.r + dr, start.s + ds)
    b = (stop.q + dq, stop.r + dr, stop.s + ds)
    step = 1.0 / max(steps, 1)
    results = []
    for i in range(steps + 1):
        t = step * i
        results.append(hex_round(*(a_n + (b_n - a_n) * t for a_n, b_n in zip(a, b))))
    return results


def neighbor_of(settings: HexSettings, coordinates, direction) -> CubeCoordinates:
    """Return the neighbor in the given compass direction.

    Directions pointing at a corner (N/S for pointy, E/W for flat) step one
    row or column in offset coordinates, zig-zagging between two edge neighbors.
    """
    direction = parse_direction(direction)
    cube = to_cube(settings, coordinates)
    table = POINTY_DIRECTIONS if settings.is_pointy else FLAT_DIRECTIONS
    vector = table[direction]
    if vector is not None:
        dq, dr = vector
        return CubeCoordinates.from_axial(cube.q + dq, cube.r + dr)

    col, row = hex_to_offset(cube.q, cube.r, settings.orientation, settings.offset).to_tuple()
    if settings.is_pointy:
        row += 1 if direction == CompassDirection.S else -1
    else:
        col += 1 if direction == CompassDirection.E else -1
    return offset_to_cube(col, row, settings.orientation, settings.offset)


def hex_neighbors(settings: HexSettings, coordinates) -> list[CubeCoordinates]:
    """Return the 6 hexes sharing an edge with the given hex."""
    table = POINTY_DIRECTIONS if settings.is_pointy else FLAT_DIRECTIONS
    return [
        neighbor_of(settings, coordinates, direction)
        for direction, vector in table.items() if vector is not None
    ]


def hexes_are_adjacent(settings: HexSettings, a, b) -> bool:
    """Check if two hexes are adjacent."""
    return distance(settings, a, b) == 1
