"""Traversers: reusable descriptions of hex sequences.

A traverser is called as ``traverser(create_hex, cursor=None)`` and returns a
fresh lazy iterator of hexes made with `create_hex`. Traversers hold only
their options, so the same traverser can be run any number of times.

Anchoring rules shared by line, rectangle and spiral:
    start  -- begin at this hex and yield it
    at     -- begin at this hex without yielding it
    neither -- begin at the cursor without yielding it (a previous traverser
               already did); with no cursor either, begin at hex (0, 0) and
               yield it
"""

from abc import ABC, abstractmethod
from collections.abc import Callable, Iterator
from typing import Optional
from hextiles.compass import Compass, parse_direction
from hextiles.hex import Hex
from hextiles.constants import CompassDirection, Rotation, RING_DIRECTIONS, RECTANGLE_DIRECTIONS
from hextiles.hex_utils import to_cube, hex_to_offset, hex_line, hex_distance, neighbor_of
from hextiles.models import OffsetCoordinates

CreateHex = Callable[..., Hex]


class Traverser(ABC):
    def __call__(self, create_hex: CreateHex, cursor=None) -> Iterator:
        return self.generate(create_hex, cursor)

    @abstractmethod
    def generate(self, create_hex: CreateHex, cursor=None) -> Iterator:
        """Yield hexes; each call starts from scratch."""


def _anchor(create_hex: CreateHex, cursor, start=None, at=None):
    """Return (first hex, whether to yield it)."""
    if start is not None:
        return create_hex(start), True
    if at is not None:
        return create_hex(at), False
    if cursor is not None:
        return create_hex(cursor), False
    return create_hex(), True


def _as_traverser(traversers) -> Traverser:
    if isinstance(traversers, Traverser):
        return traversers
    return Concat(traversers)


def _as_predicate(target) -> Optional[Callable]:
    if target is None or callable(target):
        return target
    return lambda hex_: hex_.equals(target)


class Line(Traverser):
    """A straight line, either walked in a direction or drawn to a stop hex."""

    def __init__(self, direction=None, length: Optional[int] = None, start=None, at=None,
                 stop=None, until=None, through=None):
        if start is not None and at is not None:
            raise ValueError("Pass either start or at, not both")
        self.start = start
        self.at = at
        self.direction = None if direction is None else parse_direction(direction)
        self.length = length
        self.stop = None
        self.include_stop = True
        self.until = None
        self.through = None
        self.targets = ()

        if self.direction is None:
            targets = [t for t in (stop, through, until) if t is not None]
            if len(targets) != 1 or length is not None:
                raise ValueError("A line needs a direction, or exactly one of stop/through/until")
            if callable(targets[0]):
                raise ValueError("A predicate for until/through needs a direction")
            self.stop = targets[0]
            self.include_stop = until is None
            return

        if stop is not None:
            raise ValueError("stop cannot be combined with a direction; use until or through")
        if length is None and until is None and through is None:
            raise ValueError("A line in a direction needs a length, until or through")
        if length is not None and length < 0:
            raise ValueError(f"Line length must not be negative, got {length}")
        self.until = _as_predicate(until)
        self.through = _as_predicate(through)
        self.targets = tuple(t for t in (until, through) if t is not None and not callable(t))

    def generate(self, create_hex, cursor=None):
        first, include_first = _anchor(create_hex, cursor, self.start, self.at)
        if self.direction is None:
            yield from self._between(create_hex, first, include_first)
        else:
            yield from self._walk(create_hex, first, include_first)

    def _candidates(self, create_hex, first, include_first):
        current = first
        if include_first:
            yield current
        while True:
            current = create_hex(neighbor_of(current.settings, current, self.direction))
            yield current

    def _walk(self, create_hex, first, include_first):
        # Every step moves one hex further from `first`, so a target off the
        # ray is passed once the walk gets further away than the target is.
        reach = None
        if self.targets:
            reach = max(hex_distance(first.q, first.r, t.q, t.r) for t in map(create_hex, self.targets))
        count = 0
        for hex_ in self._candidates(create_hex, first, include_first):
            if self.length is not None and count >= self.length:
                return
            if reach is not None and hex_distance(first.q, first.r, hex_.q, hex_.r) > reach:
                return
            if self.until is not None and self.until(hex_):
                return
            yield hex_
            count += 1
            if self.through is not None and self.through(hex_):
                return

    def _between(self, create_hex, first, include_first):
        stop = create_hex(self.stop)
        cubes = hex_line(first.to_cube(), stop.to_cube())
        if not include_first:
            cubes = cubes[1:]
        if not self.include_stop and cubes and stop.equals(cubes[-1]):
            cubes = cubes[:-1]
        for cube in cubes:
            yield create_hex(cube)


def line(direction=None, length: Optional[int] = None, start=None, at=None,
         stop=None, until=None, through=None) -> Line:
    return Line(direction=direction, length=length, start=start, at=at,
                stop=stop, until=until, through=through)


# Which corner holds the smallest col/row decides the direction to traverse
# in and whether the corners' col span becomes the height.
RULES_FOR_SMALLEST_COL_ROW = {
    "AA": {"swap_width_height": False, "direction": CompassDirection.E},
    "AB": {"swap_width_height": True, "direction": CompassDirection.N},
    "BA": {"swap_width_height": True, "direction": CompassDirection.S},
    "BB": {"swap_width_height": False, "direction": CompassDirection.W},
}


def _to_offset(settings, coordinates) -> OffsetCoordinates:
    if isinstance(coordinates, OffsetCoordinates):
        return coordinates
    if isinstance(coordinates, dict) and "col" in coordinates and "row" in coordinates:
        return OffsetCoordinates.from_dict(coordinates)
    cube = to_cube(settings, coordinates)
    return hex_to_offset(cube.q, cube.r, settings.orientation, settings.offset)


def options_from_opposing_corners(settings, corner_a, corner_b, include_corner_a: bool = True) -> dict:
    """Translate two opposing corners into rectangle width/height/direction options."""
    a = _to_offset(settings, corner_a)
    b = _to_offset(settings, corner_b)
    smallest_col = "A" if a.col < b.col else "B"
    smallest_row = "A" if a.row < b.row else "B"
    rule = RULES_FOR_SMALLEST_COL_ROW[smallest_col + smallest_row]
    width = abs(a.col - b.col) + 1
    height = abs(a.row - b.row) + 1
    if rule["swap_width_height"]:
        width, height = height, width
    options = {"width": width, "height": height, "direction": rule["direction"]}
    options["start" if include_corner_a else "at"] = corner_a
    return options


class Rectangle(Traverser):
    """Rows of `width` hexes in `direction`, stacked `height` deep a quarter turn clockwise."""

    def __init__(self, width: int = None, height: int = None, direction=CompassDirection.E,
                 start=None, at=None, corners: Optional[tuple] = None, include_corner_a: bool = True):
        self.corners = corners
        self.include_corner_a = include_corner_a
        if corners is None:
            if width is None or height is None:
                raise ValueError("A rectangle needs width and height, or two opposing corners")
            if width < 0 or height < 0:
                raise ValueError(f"Invalid rectangle size {width}x{height}")
            direction = parse_direction(direction)
            if direction not in RECTANGLE_DIRECTIONS:
                raise ValueError(f"Rectangles can only be traversed in a cardinal direction, got {direction.name}")
        if start is not None and at is not None:
            raise ValueError("Pass either start or at, not both")
        self.width = width
        self.height = height
        self.direction = direction
        self.start = start
        self.at = at

    def _options(self, create_hex) -> dict:
        if self.corners is None:
            return {"width": self.width, "height": self.height, "direction": self.direction,
                    "start": self.start, "at": self.at}
        corner_a, corner_b = self.corners
        return options_from_opposing_corners(create_hex().settings, corner_a, corner_b, self.include_corner_a)

    def generate(self, create_hex, cursor=None):
        options = self._options(create_hex)
        first, include_first = _anchor(create_hex, cursor, options.get("start"), options.get("at"))
        direction = options["direction"]
        edge = Line(direction=Compass.rotate(direction, 2), length=options["height"], start=first)
        skip_first = not include_first
        for edge_hex in edge(create_hex):
            for hex_ in Line(direction=direction, length=options["width"], start=edge_hex)(create_hex):
                if skip_first:
                    skip_first = False
                    continue
                yield hex_


def rectangle(corner_a=None, corner_b=None, include_corner_a: bool = True, *, width: int = None,
              height: int = None, direction=CompassDirection.E, start=None, at=None) -> Rectangle:
    """Rectangle from width/height options, or from two opposing corners (cardinal directions only)."""
    if corner_b is not None:
        return Rectangle(corners=(corner_a, corner_b), include_corner_a=include_corner_a)
    if corner_a is not None:
        raise ValueError("Opposing corners need both corner_a and corner_b")
    return Rectangle(width=width, height=height, direction=direction, start=start, at=at)


class Ring(Traverser):
    """The hexes at exactly `radius` steps from `center`."""

    def __init__(self, center=None, radius: Optional[int] = None, start=None,
                 rotation=Rotation.CLOCKWISE):
        if radius is None and start is None:
            raise ValueError("A ring needs a radius or a start hex")
        if radius is not None and radius < 0:
            raise ValueError(f"Ring radius must not be negative, got {radius}")
        self.center = center
        self.radius = radius
        self.start = start
        self.rotation = Rotation(rotation)

    def generate(self, create_hex, cursor=None):
        if self.center is not None:
            center = create_hex(self.center)
        else:
            center = create_hex(cursor) if cursor is not None else create_hex()

        if self.start is not None:
            first = create_hex(self.start)
            radius = hex_distance(center.q, center.r, first.q, first.r)
        else:
            radius = self.radius
            first = create_hex((center.q + radius, center.r))

        if radius == 0:
            yield center
            return

        coordinates = []
        q, r = center.q + radius, center.r
        for dq, dr in RING_DIRECTIONS:
            for _ in range(radius):
                coordinates.append((q, r))
                q, r = q + dq, r + dr

        index = coordinates.index(first.key)
        ordered = coordinates[index:] + coordinates[:index]
        if self.rotation == Rotation.COUNTERCLOCKWISE:
            ordered = ordered[:1] + ordered[:0:-1]
        for coords in ordered:
            yield create_hex(coords)


def ring(center=None, radius: Optional[int] = None, start=None, rotation=Rotation.CLOCKWISE) -> Ring:
    return Ring(center=center, radius=radius, start=start, rotation=rotation)


class Spiral(Traverser):
    """A center hex followed by rings of radius 1 up to `radius`."""

    def __init__(self, radius: int, start=None, at=None, rotation=Rotation.CLOCKWISE):
        if radius < 0:
            raise ValueError(f"Spiral radius must not be negative, got {radius}")
        if start is not None and at is not None:
            raise ValueError("Pass either start or at, not both")
        self.radius = radius
        self.start = start
        self.at = at
        self.rotation = Rotation(rotation)

    def generate(self, create_hex, cursor=None):
        center, include_center = _anchor(create_hex, cursor, self.start, self.at)
        if include_center:
            yield center
        for radius in range(1, self.radius + 1):
            yield from Ring(center=center, radius=radius, rotation=self.rotation)(create_hex)


def spiral(radius: int, start=None, at=None, rotation=Rotation.CLOCKWISE) -> Spiral:
    return Spiral(radius=radius, start=start, at=at, rotation=rotation)


class Concat(Traverser):
    """Run traversers one after another, each continuing from the last hex so far."""

    def __init__(self, traversers):
        self.traversers = tuple(traversers)

    def generate(self, create_hex, cursor=None):
        for traverser in self.traversers:
            for hex_ in traverser(create_hex, cursor):
                cursor = hex_
                yield hex_


def concat(*traversers) -> Concat:
    if len(traversers) == 1 and not isinstance(traversers[0], Traverser):
        traversers = traversers[0]
    return Concat(traversers)


def repeat(times: int, traversers) -> Concat:
    """Concatenate the traverser(s) `times` times."""
    if times < 0:
        raise ValueError(f"Cannot repeat a negative number of times: {times}")
    if isinstance(traversers, Traverser):
        traversers = [traversers]
    return Concat(list(traversers) * times)


class RepeatWith(Traverser):
    """Run `repeated` from every hex produced by `source`."""

    def __init__(self, source, repeated, include_source: bool = True):
        self.source = _as_traverser(source)
        self.repeated = _as_traverser(repeated)
        self.include_source = include_source

    def generate(self, create_hex, cursor=None):
        for source_hex in self.source(create_hex, cursor):
            if self.include_source:
                yield source_hex
            yield from self.repeated(create_hex, source_hex)


def repeat_with(source, repeated, include_source: bool = True) -> RepeatWith:
    return RepeatWith(source, repeated, include_source=include_source)


class Move(Traverser):
    """Step `times` hexes in a direction from the cursor (or hex (0, 0)), never yielding the cursor."""

    def __init__(self, direction, times: int = 1):
        if times < 0:
            raise ValueError(f"Cannot move a negative number of times: {times}")
        self.direction = parse_direction(direction)
        self.times = times

    def generate(self, create_hex, cursor=None):
        current = create_hex(cursor) if cursor is not None else create_hex()
        for _ in range(self.times):
            current = create_hex(neighbor_of(current.settings, current, self.direction))
            yield current


def move(direction, times: int = 1) -> Move:
    return Move(direction, times)


class FromCoordinates(Traverser):
    def __init__(self, coordinates):
        self.coordinates = tuple(coordinates)

    def generate(self, create_hex, cursor=None):
        for coords in self.coordinates:
            yield create_hex(coords)


def from_coordinates(*coordinates) -> FromCoordinates:
    return FromCoordinates(coordinates)
