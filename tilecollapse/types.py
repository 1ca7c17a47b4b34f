from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import TYPE_CHECKING, TypeAlias

if TYPE_CHECKING:
    from tilecollapse.directions import Direction
    from tilecollapse.sockets import Socket

# =============================================================================
# GRID TYPES
# =============================================================================

CellCoord: TypeAlias = int  # Always integer cell position
CellPos: TypeAlias = tuple[CellCoord, CellCoord]  # Example: (2, 0) = column 2, row 0

# =============================================================================
# TILE TYPES
# =============================================================================

TileId: TypeAlias = str  # Example: "corner_1" = "corner" turned right once

# A cell constraint as given by callers: any iterable of tile ids
TileIds: TypeAlias = Iterable[TileId]

# Socket labels keyed by side name ("left") or Direction
SideKey: TypeAlias = "str | Direction"
SocketSpec: TypeAlias = "Mapping[SideKey, str | Socket]"

# Seed constraint applied before solving: (x, y, allowed ids)
CellConstraint: TypeAlias = tuple[CellCoord, CellCoord, TileIds]

# =============================================================================
# RANDOMNESS
# =============================================================================

# Master seed for RNG streams; None means system entropy
RandomSeed: TypeAlias = int | str | None
