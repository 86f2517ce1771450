"""Hex cells.

A hex class is bound to one HexSettings; every instance stores only q and r
and derives the rest (s, offset col/row, pixel center, corners) on access.
Subclass the class returned by `define_hex` to attach custom data.
"""

from __future__ import annotations
import copy
from functools import lru_cache
from typing import ClassVar, Optional
from pygame.math import Vector2
from hextiles.constants import Orientation
from hextiles.hex_utils import (
    to_cube, hex_to_offset, hex_to_point, hex_corners, neighbor_of,
)
from hextiles.models import (
    AxialCoordinates, CubeCoordinates, OffsetCoordinates, Ellipse, HexSettings, create_hex_settings,
)


class Hex:
    settings: ClassVar[HexSettings] = HexSettings()

    def __init__(self, coordinates=None):
        cube = to_cube(self.settings, (0, 0) if coordinates is None else coordinates)
        self._q = cube.q
        self._r = cube.r

    @property
    def q(self) -> int:
        return self._q

    @property
    def r(self) -> int:
        return self._r

    @property
    def s(self) -> int:
        return -self._q - self._r

    @property
    def key(self) -> tuple[int, int]:
        return (self._q, self._r)

    # Settings shortcuts
    @property
    def dimensions(self) -> Ellipse:
        return self.settings.dimensions

    @property
    def orientation(self) -> Orientation:
        return self.settings.orientation

    @property
    def origin(self) -> tuple[float, float]:
        return self.settings.origin

    @property
    def offset(self) -> int:
        return self.settings.offset

    @property
    def is_pointy(self) -> bool:
        return self.settings.is_pointy

    @property
    def is_flat(self) -> bool:
        return self.settings.is_flat

    @property
    def width(self) -> float:
        return self.settings.width

    @property
    def height(self) -> float:
        return self.settings.height

    # Derived coordinates
    @property
    def col(self) -> int:
        return hex_to_offset(self._q, self._r, self.orientation, self.offset).col

    @property
    def row(self) -> int:
        return hex_to_offset(self._q, self._r, self.orientation, self.offset).row

    @property
    def center(self) -> Vector2:
        return hex_to_point(self._q, self._r, self.settings)

    @property
    def x(self) -> float:
        return self.center.x

    @property
    def y(self) -> float:
        return self.center.y

    @property
    def corners(self) -> list[Vector2]:
        return hex_corners(self.center, self.width, self.height, self.orientation)

    def to_axial(self) -> AxialCoordinates:
        return AxialCoordinates(self._q, self._r)

    def to_cube(self) -> CubeCoordinates:
        return CubeCoordinates(self._q, self._r, self.s)

    def to_offset(self) -> OffsetCoordinates:
        return hex_to_offset(self._q, self._r, self.orientation, self.offset)

    def to_dict(self) -> dict:
        return self.to_axial().to_dict()

    def equals(self, coordinates) -> bool:
        """Compare with coordinates in any supported form."""
        cube = to_cube(self.settings, coordinates)
        return (cube.q, cube.r) == self.key

    def clone(self, coordinates=None) -> Hex:
        """Copy this hex (custom data included), optionally at other coordinates."""
        result = copy.copy(self)
        if coordinates is not None:
            cube = to_cube(self.settings, coordinates)
            result._q, result._r = cube.q, cube.r
        return result

    def translate(self, q: int = 0, r: int = 0) -> Hex:
        return self.clone((self._q + q, self._r + r))

    def neighbor(self, direction) -> Hex:
        return self.clone(neighbor_of(self.settings, self, direction))

    def __eq__(self, other):
        if isinstance(other, Hex):
            return self.key == other.key
        return NotImplemented

    def __hash__(self):
        return hash(self.key)

    def __str__(self):
        return f"{self._q},{self._r}"

    def __repr__(self):
        return f"{type(self).__name__}(q={self._q}, r={self._r}, s={self.s})"


@lru_cache(maxsize=None)
def _hex_class(settings: HexSettings) -> type[Hex]:
    return type("Hex", (Hex,), {"settings": settings})


def define_hex(settings: Optional[HexSettings] = None, **options) -> type[Hex]:
    """Return a Hex class bound to `settings`, or to settings built from `options`.

    Equal settings return the same class.
    """
    if settings is None:
        settings = create_hex_settings(**options)
    elif options:
        raise TypeError("Pass either a HexSettings instance or settings options, not both")
    return _hex_class(settings)


def create_hex(settings: HexSettings, coordinates=None) -> Hex:
    return define_hex(settings)(coordinates)
