"""Prototype registry and per-direction adjacency tables.

Each registered prototype gets an integer index in registration order. For
every direction d the table holds two square boolean matrices:

    allowed[d][i, j]    prototype j may sit on side d of prototype i
    forbidden[d][i, j]  prototype j must never sit on side d of prototype i

allowed is built from sockets, forbidden from antisockets, both with the
same fit rule. Because a fit is tested from both sides of the shared edge,
allowed[d] is always the transpose of allowed[d.opposite] (and likewise for
forbidden).

A cell's domain is a boolean vector over prototype indices, so asking
"what may sit next to any of these?" is a row gather plus an any().
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

import numpy as np

from tilecollapse.directions import ALL_DIRECTIONS, Direction
from tilecollapse.errors import UnknownPrototypeError
from tilecollapse.prototype import Prototype
from tilecollapse.types import TileId

logger = logging.getLogger(__name__)


class CompatibilityTable:
    """Registry of prototypes owned by a single solver."""

    def __init__(self) -> None:
        self.prototypes: dict[TileId, Prototype] = {}
        self._index: dict[TileId, int] = {}
        self.allowed = np.zeros((len(ALL_DIRECTIONS), 0, 0), dtype=bool)
        self.forbidden = np.zeros((len(ALL_DIRECTIONS), 0, 0), dtype=bool)
        self.weights = np.zeros(0, dtype=np.float64)

    def __len__(self) -> int:
        return len(self.prototypes)

    def __contains__(self, tile_id: object) -> bool:
        return tile_id in self.prototypes

    @property
    def ids(self) -> list[TileId]:
        """All registered ids in registration order."""
        return list(self.prototypes)

    def add(self, *prototypes: Prototype) -> None:
        """Register a batch of prototypes and rebuild the adjacency tables.

        A prototype whose id is already registered replaces the earlier one
        and keeps its index.
        """
        for prototype in prototypes:
            if prototype.id in self.prototypes:
                logger.warning(
                    "Prototype %r registered twice; keeping the newest", prototype.id
                )
            self.prototypes[prototype.id] = prototype

        self._index = {tile_id: i for i, tile_id in enumerate(self.prototypes)}
        self._rebuild()
        logger.debug(
            "Registered %d prototypes (%d total)", len(prototypes), len(self.prototypes)
        )

    def _rebuild(self) -> None:
        registered = list(self.prototypes.values())
        count = len(registered)
        self.allowed = np.zeros((len(ALL_DIRECTIONS), count, count), dtype=bool)
        self.forbidden = np.zeros((len(ALL_DIRECTIONS), count, count), dtype=bool)
        self.weights = np.array([p.weight for p in registered], dtype=np.float64)

        for i, current in enumerate(registered):
            # j >= i covers every unordered pair once, including self-adjacency
            for j in range(i, count):
                added = registered[j]
                for direction in ALL_DIRECTIONS:
                    opposite = direction.opposite
                    if current.socket(direction).fits(added.socket(opposite)):
                        self.allowed[direction, i, j] = True
                        self.allowed[opposite, j, i] = True
                    if current.antisocket(direction).fits(added.antisocket(opposite)):
                        self.forbidden[direction, i, j] = True
                        self.forbidden[opposite, j, i] = True

    # -------------------------------------------------------------------------
    # Lookups
    # -------------------------------------------------------------------------

    def index_of(self, tile_id: TileId) -> int:
        try:
            return self._index[tile_id]
        except KeyError:
            raise UnknownPrototypeError(tile_id) from None

    def prototype(self, tile_id: TileId) -> Prototype:
        if tile_id not in self.prototypes:
            raise UnknownPrototypeError(tile_id)
        return self.prototypes[tile_id]

    def neighbours(self, tile_id: TileId, direction: Direction) -> frozenset[TileId]:
        """Ids allowed on the given side of ``tile_id``."""
        row = self.allowed[direction, self.index_of(tile_id)]
        return frozenset(self.ids_for(row))

    def antineighbours(
        self, tile_id: TileId, direction: Direction
    ) -> frozenset[TileId]:
        """Ids forbidden on the given side of ``tile_id``."""
        row = self.forbidden[direction, self.index_of(tile_id)]
        return frozenset(self.ids_for(row))

    def mask_for(self, tile_ids: Iterable[TileId]) -> np.ndarray:
        """Convert ids to a boolean domain vector.

        Raises:
            UnknownPrototypeError: If any id is not registered.
        """
        mask = np.zeros(len(self.prototypes), dtype=bool)
        for tile_id in tile_ids:
            mask[self.index_of(tile_id)] = True
        return mask

    def ids_for(self, mask: np.ndarray) -> list[TileId]:
        """Convert a boolean domain vector to ids in registration order."""
        ids = self.ids
        return [ids[i] for i in np.flatnonzero(mask)]

    def full_mask(self) -> np.ndarray:
        return np.ones(len(self.prototypes), dtype=bool)

    def allowed_for(self, mask: np.ndarray, direction: Direction) -> np.ndarray:
        """Prototypes that may sit on ``direction`` of a cell with domain ``mask``.

        This is the union of the neighbour rows of every possible prototype,
        minus the union of their antineighbour rows. An explicit forbid
        always beats an allow.
        """
        allowed = self.allowed[direction][mask].any(axis=0)
        forbidden = self.forbidden[direction][mask].any(axis=0)
        return allowed & ~forbidden
