"""Exceptions raised by the tile collapse engine.

A contradiction reached while solving is not an exception: solve() reports it
through its return value. The errors below cover contract violations by the
caller instead.
"""

from __future__ import annotations


class TileCollapseError(Exception):
    """Base class for all tile collapse errors."""

    pass


class CellOutOfBoundsError(TileCollapseError, IndexError):
    """Raised when a cell outside the grid extents is addressed."""

    def __init__(self, x: int, y: int, width: int, height: int) -> None:
        super().__init__(f"Cell ({x}, {y}) is outside the {width}x{height} grid")
        self.x = x
        self.y = y


class UnknownPrototypeError(TileCollapseError, KeyError):
    """Raised when a tile id has not been registered with the solver."""

    def __init__(self, tile_id: str) -> None:
        super().__init__(tile_id)
        self.tile_id = tile_id

    def __str__(self) -> str:
        return f"Unknown prototype id: {self.tile_id!r}"


class EmptyDomainError(TileCollapseError):
    """Raised when collapsing a cell that has no possibilities left.

    This occurs when collapse_cell() is called directly on a contradicted
    cell. The solve loop itself never selects such a cell.
    """

    pass


class SelectionError(TileCollapseError):
    """Raised when a selector returns an id outside the cell's domain."""

    pass
