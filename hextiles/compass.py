"""Compass directions and rotation arithmetic on the eight-point compass."""

from hextiles.constants import CompassDirection

DIRECTION_COUNT = len(CompassDirection)


def parse_direction(value) -> CompassDirection:
    """Accept a CompassDirection, its int value or its name ("ne", "SW")."""
    if isinstance(value, CompassDirection):
        return value
    if isinstance(value, str):
        try:
            return CompassDirection[value.upper()]
        except KeyError:
            raise ValueError(f"Unknown compass direction: {value!r}") from None
    return CompassDirection(value)


class Compass:
    """A compass direction that can be rotated in 45° steps."""

    N = CompassDirection.N
    NE = CompassDirection.NE
    E = CompassDirection.E
    SE = CompassDirection.SE
    S = CompassDirection.S
    SW = CompassDirection.SW
    W = CompassDirection.W
    NW = CompassDirection.NW

    def __init__(self, direction=CompassDirection.N):
        self.direction = parse_direction(direction)

    @staticmethod
    def rotate(direction, steps: int) -> CompassDirection:
        """Rotate clockwise by `steps` eighths of a turn; negative steps turn counterclockwise."""
        return CompassDirection((int(parse_direction(direction)) + steps) % DIRECTION_COUNT)

    @staticmethod
    def opposite(direction) -> CompassDirection:
        return Compass.rotate(direction, DIRECTION_COUNT // 2)

    @staticmethod
    def is_cardinal(direction) -> bool:
        return int(parse_direction(direction)) % 2 == 0

    def rotated(self, steps: int) -> "Compass":
        return Compass(Compass.rotate(self.direction, steps))

    def __eq__(self, other):
        if isinstance(other, Compass):
            return self.direction == other.direction
        return False

    def __hash__(self):
        return hash(self.direction)

    def __repr__(self):
        return f"Compass({self.direction.name})"
