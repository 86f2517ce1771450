"""Grid: an ordered collection of hexes indexed by (q, r)."""

from __future__ import annotations
import functools
import logging
from collections.abc import Callable, Iterable, Iterator
from typing import Optional
from hextiles.exceptions import EmptyInputError, InsufficientElementsError
from hextiles.hex import Hex, define_hex
from hextiles.hex_utils import to_cube, point_to_cube, distance, neighbor_of
from hextiles.models import AxialCoordinates, HexSettings
from hextiles.traversers import Traverser, Concat

logger = logging.getLogger(__name__)

_MISSING = object()


class Grid:
    """Stores hexes of one hex class and answers lookups and traversals against them.

    Build it from a hex class plus a traverser, a list of traversers, or an
    iterable of hexes/coordinates; or copy another grid with ``Grid(other)``.
    """

    def __init__(self, hex_class, hexes=None):
        self._hexes: dict[tuple[int, int], Hex] = {}
        if isinstance(hex_class, Grid):
            if hexes is not None:
                raise TypeError("Grid(other_grid) copies a grid and takes no hexes; use set_hexes() on the copy")
            self._hex_class = hex_class._hex_class
            self.set_hexes(hex_class)
            return
        self._hex_class: type[Hex] = hex_class
        if hexes is not None:
            self.set_hexes(self._resolve(hexes))
        logger.debug("Created %s with %s", self, self._hex_class.settings)

    @classmethod
    def from_iterable(cls, hexes: Iterable[Hex]) -> Grid:
        """Build a grid from hexes, using the class of the first one."""
        iterator = iter(hexes)
        first = next(iterator, None)
        if first is None:
            raise EmptyInputError(f"Can't create grid from empty iterable: {hexes!r}")
        grid = cls(type(first), [first])
        grid.set_hexes(iterator)
        return grid

    @classmethod
    def from_json(cls, data: dict, hex_factory: Optional[Callable] = None) -> Grid:
        """Rebuild a grid from ``{"hexSettings": ..., "coordinates": [...]}``.

        `hex_factory` is called as ``hex_factory(coordinates, index, all_coordinates)``;
        without it a hex class is defined from ``hexSettings``.
        """
        coordinates = list(data["coordinates"])
        if hex_factory is not None:
            hexes = [hex_factory(coords, i, coordinates) for i, coords in enumerate(coordinates)]
            if hexes:
                hex_class = type(hexes[0])
            else:
                zero = {"q": 0, "r": 0}
                hex_class = type(hex_factory(zero, 0, [zero]))
            return cls(hex_class, hexes)

        hex_class = define_hex(HexSettings.from_dict(data["hexSettings"]))
        logger.debug("Loading %d hexes from JSON", len(coordinates))
        return cls(hex_class, [hex_class(AxialCoordinates.from_dict(coords)) for coords in coordinates])

    @property
    def hex_class(self) -> type[Hex]:
        return self._hex_class

    @property
    def settings(self) -> HexSettings:
        return self._hex_class.settings

    @property
    def size(self) -> int:
        return len(self._hexes)

    @property
    def pixel_width(self) -> float:
        if self.size == 0:
            return 0
        if self.settings.is_pointy:
            hexes = sorted(self, key=lambda h: (-h.s, h.q))
        else:
            hexes = sorted(self, key=lambda h: h.q)
        most_left, most_right = hexes[0], hexes[-1]
        return most_right.x - most_left.x + self.settings.width

    @property
    def pixel_height(self) -> float:
        if self.size == 0:
            return 0
        if self.settings.is_pointy:
            hexes = sorted(self, key=lambda h: h.r)
        else:
            hexes = sorted(self, key=lambda h: (-h.s, h.r))
        most_top, most_bottom = hexes[0], hexes[-1]
        return most_bottom.y - most_top.y + self.settings.height

    def create_hex(self, coordinates=None) -> Hex:
        return self._hex_class(coordinates)

    def _key(self, coordinates) -> tuple[int, int]:
        if isinstance(coordinates, Hex):
            return coordinates.key
        cube = to_cube(self.settings, coordinates)
        return (cube.q, cube.r)

    def get_hex(self, coordinates) -> Optional[Hex]:
        return self._hexes.get(self._key(coordinates))

    def has_hex(self, hex_: Hex) -> bool:
        return self._key(hex_) in self._hexes

    def set_hexes(self, hexes_or_coordinates: Iterable) -> Grid:
        """Insert or overwrite hexes; raw coordinates become hexes of this grid's class."""
        for item in hexes_or_coordinates:
            self._set_hex(item if isinstance(item, Hex) else self._hex_class(item))
        return self

    def filter(self, predicate: Callable[[Hex], bool]) -> Grid:
        result = Grid(self._hex_class)
        for hex_ in self:
            if predicate(hex_):
                result._set_hex(hex_)
        return result

    def map(self, fn: Callable[[Hex], Hex]) -> Grid:
        result = Grid(self._hex_class)
        for hex_ in self:
            result._set_hex(fn(hex_))
        return result

    def traverse(self, hexes, bail: bool = False) -> Grid:
        """Return a grid of the stored hexes visited by a traverser, traversers, hexes or grid.

        Coordinates that aren't in this grid are skipped, or end the traversal
        when `bail` is set.
        """
        result = Grid(self._hex_class)
        for hex_ in self._resolve(hexes):
            found = self.get_hex(hex_)
            if found is not None:
                result._set_hex(found)
            elif bail:
                logger.debug("Traversal stopped at %s: not in %s", hex_, self)
                return result
        return result

    def for_each(self, fn: Callable[[Hex], None]) -> Grid:
        for hex_ in self:
            fn(hex_)
        return self

    def reduce(self, reducer: Callable, initial=_MISSING):
        """Fold the hexes left to right.

        Without `initial` the first hex seeds the fold, so at least two hexes are required.
        """
        if initial is _MISSING:
            if self.size < 2:
                raise InsufficientElementsError(
                    f"Reducing without an initial value needs at least 2 hexes, {self} has {self.size}"
                )
            return functools.reduce(reducer, self)
        return functools.reduce(reducer, self, initial)

    def to_array(self) -> list[Hex]:
        return list(self)

    def to_json(self) -> dict:
        return {
            "hexSettings": self.settings.to_dict(),
            "coordinates": [hex_.to_dict() for hex_ in self],
        }

    def point_to_hex(self, point, allow_outside: bool = True) -> Optional[Hex]:
        """Return the hex under a pixel point; a new hex if it's not stored and `allow_outside`."""
        coordinates = point_to_cube(self.settings, point)
        found = self.get_hex(coordinates)
        if found is None and allow_outside:
            return self.create_hex(coordinates)
        return found

    def distance(self, from_coordinates, to_coordinates, allow_outside: bool = True) -> Optional[int]:
        if allow_outside:
            return distance(self.settings, from_coordinates, to_coordinates)
        from_hex = self.get_hex(from_coordinates)
        to_hex = self.get_hex(to_coordinates)
        if from_hex is None or to_hex is None:
            return None
        return distance(self.settings, from_hex, to_hex)

    def neighbor_of(self, coordinates, direction, allow_outside: bool = True) -> Optional[Hex]:
        if not allow_outside and self.get_hex(coordinates) is None:
            return None
        neighbor = neighbor_of(self.settings, coordinates, direction)
        found = self.get_hex(neighbor)
        if found is None and allow_outside:
            return self.create_hex(neighbor)
        return found

    def _set_hex(self, hex_: Hex) -> None:
        self._hexes[hex_.key] = hex_

    def _resolve(self, hexes) -> Iterable:
        """Turn a traverser, a list of traversers or an iterable into hexes/coordinates."""
        if isinstance(hexes, Traverser):
            return hexes(self.create_hex)
        if isinstance(hexes, (list, tuple)) and hexes and all(isinstance(t, Traverser) for t in hexes):
            return Concat(hexes)(self.create_hex)
        return hexes

    def __iter__(self) -> Iterator[Hex]:
        return iter(self._hexes.values())

    def __len__(self) -> int:
        return self.size

    def __contains__(self, coordinates) -> bool:
        return self._key(coordinates) in self._hexes

    def __str__(self):
        return f"{type(self).__name__}({self.size})"

    def __repr__(self):
        return f"<{type(self).__name__} size={self.size} settings={self.settings!r}>"
