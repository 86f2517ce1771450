"""Hexagonal tile grids: coordinates, cells, grids and traversers."""

from hextiles.constants import CompassDirection, Orientation, Rotation
from hextiles.compass import Compass
from hextiles.exceptions import (
    HexGridError, EmptyInputError, InvalidDimensionsError, InvalidCoordinatesError,
    InsufficientElementsError,
)
from hextiles.models import (
    AxialCoordinates, CubeCoordinates, OffsetCoordinates, Ellipse, HexSettings, create_hex_settings,
)
from hextiles.hex import Hex, define_hex, create_hex
from hextiles.grid import Grid
from hextiles.traversers import (
    Traverser, line, rectangle, ring, spiral, concat, repeat, repeat_with, move, from_coordinates,
)

__version__ = "0.1.0"
