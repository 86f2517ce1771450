"""Exceptions raised by hextiles."""


class HexGridError(Exception):
    """Base hextiles error."""
    pass


class EmptyInputError(HexGridError):
    """Raised when a grid is built from an empty iterable with no hex class to fall back on."""
    pass


class InvalidDimensionsError(HexGridError, ValueError):
    """Raised when hex dimensions are not a positive radius, ellipse or bounding box."""

    def __init__(self, dimensions):
        super().__init__(
            f"Invalid dimensions: {dimensions!r}. Dimensions must be expressed as an "
            "Ellipse (x_radius, y_radius), a bounding box ({'width', 'height'}) or a number."
        )
        self.dimensions = dimensions


class InvalidCoordinatesError(HexGridError, ValueError):
    """Raised for cube coordinates with q + r + s != 0 or an unrecognized coordinate shape."""

    def __init__(self, coordinates, reason: str = "unrecognized coordinates"):
        super().__init__(f"Invalid coordinates {coordinates!r}: {reason}")
        self.coordinates = coordinates


class InsufficientElementsError(HexGridError):
    """Raised when reducing fewer than two hexes without an initial value."""
    pass
