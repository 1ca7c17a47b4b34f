"""Cardinal directions used for sockets, compatibility tables and propagation.

The grid's vertical axis is named the unusual way round: moving +y lands on
the cell's "top" side and -y on its "bottom" side. Tile content is authored
against this convention, so the mapping must not change. DIR_OFFSETS is the
only place it is defined.
"""

from __future__ import annotations

from enum import IntEnum


class Direction(IntEnum):
    """The four sides of a cell.

    Values double as row indices into the compatibility tables.
    """

    RIGHT = 0
    LEFT = 1
    TOP = 2
    BOTTOM = 3

    @property
    def offset(self) -> tuple[int, int]:
        """Grid step (dx, dy) from a cell to its neighbour on this side."""
        return DIR_OFFSETS[self]

    @property
    def opposite(self) -> Direction:
        return OPPOSITE_DIR[self]

    @property
    def side(self) -> str:
        """Lowercase side name, as used in socket mappings."""
        return self.name.lower()

    @classmethod
    def from_side(cls, side: str | Direction) -> Direction:
        """Resolve a side name ("left") or Direction to a Direction."""
        if isinstance(side, Direction):
            return side
        try:
            return cls[side.upper()]
        except KeyError:
            raise ValueError(f"Unknown side name: {side!r}") from None


# Load-bearing: +y is TOP and -y is BOTTOM.
DIR_OFFSETS: dict[Direction, tuple[int, int]] = {
    Direction.RIGHT: (1, 0),
    Direction.LEFT: (-1, 0),
    Direction.TOP: (0, 1),
    Direction.BOTTOM: (0, -1),
}

OPPOSITE_DIR: dict[Direction, Direction] = {
    Direction.RIGHT: Direction.LEFT,
    Direction.LEFT: Direction.RIGHT,
    Direction.TOP: Direction.BOTTOM,
    Direction.BOTTOM: Direction.TOP,
}

_OFFSET_TO_DIR = {offset: direction for direction, offset in DIR_OFFSETS.items()}

# Direction groups
HORIZONTAL: tuple[Direction, ...] = (Direction.RIGHT, Direction.LEFT)
VERTICAL: tuple[Direction, ...] = (Direction.TOP, Direction.BOTTOM)
ALL_DIRECTIONS: tuple[Direction, ...] = HORIZONTAL + VERTICAL


def direction_for_offset(dx: int, dy: int) -> Direction:
    """Return the side a unit grid step lands on.

    Raises:
        ValueError: If (dx, dy) is not one of the four cardinal unit steps.
    """
    try:
        return _OFFSET_TO_DIR[(dx, dy)]
    except KeyError:
        raise ValueError(f"Not a cardinal unit step: ({dx}, {dy})") from None
