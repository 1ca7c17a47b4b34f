"""Tile prototypes and their rotated siblings.

A Prototype describes one tile type: a socket on each side, an optional
antisocket on each side that forbids adjacency outright, and a selection
weight. Rotations are separate prototypes with their own ids; registering a
base prototype does not register its rotations.

Usage:
    corner = Prototype("corner", sockets={"left": "1", "top": "1f"})
    solver.add_prototypes(*corner.rotate_360())
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field

from tilecollapse import config
from tilecollapse.directions import Direction
from tilecollapse.sockets import Socket, parse_sides
from tilecollapse.types import SocketSpec, TileId

# new side <- old side, for each number of clockwise quarter turns
_QUARTER_TURNS: dict[int, dict[Direction, Direction]] = {
    1: {
        Direction.LEFT: Direction.BOTTOM,
        Direction.TOP: Direction.LEFT,
        Direction.RIGHT: Direction.TOP,
        Direction.BOTTOM: Direction.RIGHT,
    },
    2: {
        Direction.LEFT: Direction.RIGHT,
        Direction.BOTTOM: Direction.TOP,
        Direction.RIGHT: Direction.LEFT,
        Direction.TOP: Direction.BOTTOM,
    },
    3: {
        Direction.RIGHT: Direction.BOTTOM,
        Direction.BOTTOM: Direction.LEFT,
        Direction.LEFT: Direction.TOP,
        Direction.TOP: Direction.RIGHT,
    },
}


@dataclass(eq=False)
class Prototype:
    """A tile type that can occupy a grid cell.

    Attributes:
        id: Unique identifier within a solver's registry.
        sockets: Connection type on each side. Accepts side names or
            Directions mapped to label strings or Socket values; missing
            sides are closed.
        antisockets: Labels that forbid adjacency when they fit the facing
            antisocket, even if the sockets fit. Same format as sockets.
        weight: Relative selection weight (higher = more common). Must be > 0.
    """

    id: TileId
    sockets: SocketSpec = field(default_factory=dict)
    weight: float = config.DEFAULT_WEIGHT
    antisockets: SocketSpec = field(default_factory=dict)

    def __post_init__(self) -> None:
        if not (math.isfinite(self.weight) and self.weight > 0):
            raise ValueError(
                f"Prototype {self.id!r} needs a positive finite weight, "
                f"got {self.weight}"
            )
        self.sockets = parse_sides(self.sockets)
        self.antisockets = parse_sides(self.antisockets)

    def __repr__(self) -> str:
        sides = ", ".join(f"{d.side}={self.sockets[d]!s}" for d in Direction)
        return f"Prototype({self.id!r}, {sides}, weight={self.weight})"

    def socket(self, direction: Direction) -> Socket:
        return self.sockets[direction]

    def antisocket(self, direction: Direction) -> Socket:
        return self.antisockets[direction]

    @property
    def base_id(self) -> TileId:
        """Id with any rotation suffix removed."""
        return split_rotation_suffix(self.id)[0]

    @property
    def rotation(self) -> int:
        """Clockwise quarter turns encoded in the id suffix."""
        return split_rotation_suffix(self.id)[1]

    # -------------------------------------------------------------------------
    # Rotation
    # -------------------------------------------------------------------------

    def _rotated(self, quarter_turns: int) -> Prototype:
        mapping = _QUARTER_TURNS[quarter_turns]
        return Prototype(
            self.id + config.ROTATION_SUFFIXES[quarter_turns],
            sockets={new: self.sockets[old] for new, old in mapping.items()},
            weight=self.weight,
            antisockets={new: self.antisockets[old] for new, old in mapping.items()},
        )

    def rotate_right(self) -> Prototype:
        """Return a new prototype turned a quarter clockwise."""
        return self._rotated(1)

    def rotate_180(self) -> Prototype:
        """Return a new prototype turned halfway round."""
        return self._rotated(2)

    def rotate_left(self) -> Prototype:
        """Return a new prototype turned a quarter counter-clockwise."""
        return self._rotated(3)

    def rotate_360(self) -> list[Prototype]:
        """Return this prototype followed by its three rotated siblings.

        The siblings are independent prototypes; all four must be registered.
        """
        return [self, self.rotate_right(), self.rotate_180(), self.rotate_left()]


def split_rotation_suffix(tile_id: TileId) -> tuple[TileId, int]:
    """Split a tile id into its base id and clockwise quarter turns.

    Ids without a rotation suffix are returned as (tile_id, 0).

    Example:
        >>> split_rotation_suffix("corner_3")
        ('corner', 3)
    """
    for turns, suffix in config.ROTATION_SUFFIXES.items():
        if tile_id.endswith(suffix) and len(tile_id) > len(suffix):
            return tile_id[: -len(suffix)], turns
    return tile_id, 0
