"""Value types for coordinates and hex settings.

Serialized with the same camelCase keys as the JSON grid format.
"""

from __future__ import annotations
import math
import numbers
from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from pygame.math import Vector2
from hextiles.constants import (
    Orientation, DEFAULT_DIMENSIONS, DEFAULT_ORIENTATION, DEFAULT_ORIGIN, DEFAULT_OFFSET,
)
from hextiles.exceptions import InvalidCoordinatesError, InvalidDimensionsError


@dataclass(frozen=True)
class AxialCoordinates:
    """The (q, r) pair the JSON grid format stores per hex."""
    q: int
    r: int

    def to_dict(self) -> dict:
        return {"q": self.q, "r": self.r}

    @staticmethod
    def from_dict(d: dict) -> AxialCoordinates:
        return AxialCoordinates(q=d["q"], r=d["r"])


@dataclass(frozen=True)
class CubeCoordinates:
    q: int
    r: int
    s: int

    def __post_init__(self):
        if self.q + self.r + self.s != 0:
            raise InvalidCoordinatesError(
                (self.q, self.r, self.s), "cube coordinates must satisfy q + r + s == 0"
            )

    @staticmethod
    def from_axial(q: int, r: int) -> CubeCoordinates:
        return CubeCoordinates(q, r, -q - r)

    def to_tuple(self) -> tuple[int, int, int]:
        return (self.q, self.r, self.s)

    def to_dict(self) -> dict:
        return {"q": self.q, "r": self.r, "s": self.s}


@dataclass(frozen=True)
class OffsetCoordinates:
    col: int
    row: int

    def to_tuple(self) -> tuple[int, int]:
        return (self.col, self.row)

    def to_dict(self) -> dict:
        return {"col": self.col, "row": self.row}

    @staticmethod
    def from_dict(d: dict) -> OffsetCoordinates:
        return OffsetCoordinates(col=d["col"], row=d["row"])


@dataclass(frozen=True)
class Ellipse:
    x_radius: float
    y_radius: float

    def to_dict(self) -> dict:
        return {"xRadius": self.x_radius, "yRadius": self.y_radius}


@dataclass(frozen=True)
class HexSettings:
    """Configuration shared by every hex of one grid."""
    dimensions: Ellipse = field(default_factory=lambda: Ellipse(1, 1))
    orientation: Orientation = DEFAULT_ORIENTATION
    origin: tuple[float, float] = DEFAULT_ORIGIN
    offset: int = DEFAULT_OFFSET

    @property
    def is_pointy(self) -> bool:
        return self.orientation == Orientation.POINTY

    @property
    def is_flat(self) -> bool:
        return self.orientation == Orientation.FLAT

    @property
    def width(self) -> float:
        if self.is_pointy:
            return self.dimensions.x_radius * math.sqrt(3)
        return self.dimensions.x_radius * 2

    @property
    def height(self) -> float:
        if self.is_pointy:
            return self.dimensions.y_radius * 2
        return self.dimensions.y_radius * math.sqrt(3)

    def to_dict(self) -> dict:
        x_radius, y_radius = self.dimensions.x_radius, self.dimensions.y_radius
        dimensions = x_radius if x_radius == y_radius else self.dimensions.to_dict()
        return {
            "dimensions": dimensions,
            "orientation": self.orientation.value,
            "origin": {"x": self.origin[0], "y": self.origin[1]},
            "offset": self.offset,
        }

    @staticmethod
    def from_dict(d: dict) -> HexSettings:
        return create_hex_settings(
            dimensions=d.get("dimensions", DEFAULT_DIMENSIONS),
            orientation=d.get("orientation", DEFAULT_ORIENTATION),
            origin=d.get("origin", DEFAULT_ORIGIN),
            offset=d.get("offset", DEFAULT_OFFSET),
        )


def to_point(value) -> Vector2:
    """Convert an (x, y) pair, a {"x", "y"} mapping or a Vector2 to a new Vector2."""
    if isinstance(value, Mapping):
        return Vector2(value["x"], value["y"])
    return Vector2(value)


def _is_positive(value) -> bool:
    return isinstance(value, numbers.Real) and not isinstance(value, bool) and value > 0


def _create_dimensions(dimensions, orientation: Orientation) -> Ellipse:
    if isinstance(dimensions, Ellipse):
        ellipse = dimensions
    elif isinstance(dimensions, numbers.Real) and not isinstance(dimensions, bool):
        ellipse = Ellipse(dimensions, dimensions)
    elif isinstance(dimensions, Mapping) and "xRadius" in dimensions and "yRadius" in dimensions:
        ellipse = Ellipse(dimensions["xRadius"], dimensions["yRadius"])
    elif isinstance(dimensions, Mapping) and "width" in dimensions and "height" in dimensions:
        width, height = dimensions["width"], dimensions["height"]
        if not (_is_positive(width) and _is_positive(height)):
            raise InvalidDimensionsError(dimensions)
        if orientation == Orientation.POINTY:
            ellipse = Ellipse(width / math.sqrt(3), height / 2)
        else:
            ellipse = Ellipse(width / 2, height / math.sqrt(3))
    else:
        raise InvalidDimensionsError(dimensions)

    if not (_is_positive(ellipse.x_radius) and _is_positive(ellipse.y_radius)):
        raise InvalidDimensionsError(dimensions)
    return ellipse


def _create_orientation(orientation) -> Orientation:
    if isinstance(orientation, Orientation):
        return orientation
    return Orientation(str(orientation).lower())


def create_hex_settings(
    dimensions=DEFAULT_DIMENSIONS,
    orientation=DEFAULT_ORIENTATION,
    origin=DEFAULT_ORIGIN,
    offset: int = DEFAULT_OFFSET,
) -> HexSettings:
    """Build validated hex settings.

    ``dimensions`` is a radius, an Ellipse, an ``{"xRadius", "yRadius"}`` mapping
    or a ``{"width", "height"}`` bounding box. ``origin`` is a point, ``"topLeft"``
    (hex (0, 0) touches pixel (0, 0) with its bounding box) or a callable that
    receives the settings without origin and returns a point.
    """
    orientation = _create_orientation(orientation)
    if offset not in (1, -1):
        raise ValueError(f"Invalid offset: {offset!r}. Offset must be 1 or -1.")
    settings = HexSettings(
        dimensions=_create_dimensions(dimensions, orientation),
        orientation=orientation,
        origin=DEFAULT_ORIGIN,
        offset=offset,
    )

    if isinstance(origin, str) and origin == "topLeft":
        point = Vector2(settings.width / 2, settings.height / 2)
    elif callable(origin):
        point = to_point(origin(settings))
    else:
        point = to_point(origin)
    return replace(settings, origin=(point.x, point.y))
