"""JSON encoding of grids."""

import json
from typing import Callable, Optional
from hextiles.grid import Grid


def dump_grid(grid: Grid) -> str:
    """Serialize a grid to a JSON string."""
    return json.dumps(grid.to_json())


def load_grid(data: str, hex_factory: Optional[Callable] = None) -> Grid:
    """Parse a JSON string produced by `dump_grid` back into a grid."""
    return Grid.from_json(json.loads(data), hex_factory)
