"""Tile collapse solver.

Assigns one prototype to every cell of a width x height grid so that every
pair of neighbouring cells fits according to the prototypes' sockets and
antisockets.

The algorithm:
1. Every cell starts with every registered prototype possible
2. Find the undetermined cell with the fewest possibilities
3. Collapse it to one prototype using the selection policy
4. Propagate: prune neighbours that no longer fit, cascading outwards
5. Repeat until every cell is collapsed or some cell has no options left

Usage:
    solver = TileCollapseSolver(8, 8, rng=random.Random(42))
    solver.add_prototypes(*road.rotate_360(), grass)
    solver.ring_constrain(["grass"])
    if solver.solve():
        tiles = solver.results()

Representation:
    The wave is a numpy bool array shaped (width, height, prototypes). Cell
    (x, y) lives at linear index x * height + y, which is the order results()
    uses. Domains are only handed out as copies.

Contradictions are reported through the return value of solve() (and the
SolverState of step()), never raised. A failed grid stays failed until
reset(); callers wanting another go use tilecollapse.retry.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator, Mapping
from enum import Enum, auto
from types import MappingProxyType

import numpy as np

from tilecollapse import config
from tilecollapse.compatibility import CompatibilityTable
from tilecollapse.directions import ALL_DIRECTIONS
from tilecollapse.errors import (
    CellOutOfBoundsError,
    EmptyDomainError,
    SelectionError,
)
from tilecollapse.prototype import Prototype
from tilecollapse.selection import SelectionPolicy, Selector, resolve_selector
from tilecollapse.types import CellPos, TileId
from tilecollapse.util import rng as rng_streams
from tilecollapse.util.rng import RNG

logger = logging.getLogger(__name__)


class SolverState(Enum):
    """Result of a single solver step."""

    RUNNING = auto()  # More cells left to collapse
    COMPLETE = auto()  # Every cell collapsed
    CONTRADICTION = auto()  # Some cell has no possibilities left


class TileCollapseSolver:
    """Grid of cell domains plus the propagation and collapse machinery.

    Not thread-safe: one solver must only be driven from one thread at a time.
    """

    def __init__(
        self,
        width: int,
        height: int,
        rng: RNG | None = None,
        selection: SelectionPolicy | str | Selector = config.DEFAULT_SELECTION_POLICY,
    ) -> None:
        """Create an empty solver.

        The grid has no possibilities until prototypes are registered with
        add_prototypes().

        Args:
            width: Grid width in cells.
            height: Grid height in cells.
            rng: Random source for selectors. Defaults to the shared
                "collapse.selection" stream.
            selection: Selection policy name or a custom selector callable.
        """
        self.table = CompatibilityTable()
        self.rng: RNG = (
            rng if rng is not None else rng_streams.get(config.SELECTION_RNG_DOMAIN)
        )
        self._selector = resolve_selector(selection)
        self.step_count = 0
        self.collapse_count = 0
        self.resize(width, height)

    # -------------------------------------------------------------------------
    # Setup
    # -------------------------------------------------------------------------

    @property
    def selection_policy(self) -> Selector:
        return self._selector

    @selection_policy.setter
    def selection_policy(self, policy: SelectionPolicy | str | Selector) -> None:
        self._selector = resolve_selector(policy)

    @property
    def cell_count(self) -> int:
        return self.width * self.height

    @property
    def prototypes(self) -> Mapping[TileId, Prototype]:
        """Read-only view of the registry. Register through add_prototypes()."""
        return MappingProxyType(self.table.prototypes)

    def resize(self, width: int, height: int) -> None:
        """Change the grid extents. All cells return to full superposition."""
        if width < 0 or height < 0:
            raise ValueError(f"Grid size must be non-negative, got {width}x{height}")
        self.width = width
        self.height = height
        self.reset()

    def reset(self) -> None:
        """Make every registered prototype possible in every cell again."""
        self.wave = np.ones((self.width, self.height, len(self.table)), dtype=bool)
        self.step_count = 0
        self.collapse_count = 0

    def add_prototypes(self, *prototypes: Prototype) -> None:
        """Register prototypes, rebuild the adjacency tables and reset the grid."""
        self.table.add(*prototypes)
        self.reset()

    # -------------------------------------------------------------------------
    # Cell access
    # -------------------------------------------------------------------------

    def inside(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def _check_bounds(self, x: int, y: int) -> None:
        if not self.inside(x, y):
            raise CellOutOfBoundsError(x, y, self.width, self.height)

    def get(self, x: int, y: int) -> frozenset[TileId]:
        """Ids still possible at (x, y).

        Raises:
            CellOutOfBoundsError: If (x, y) is outside the grid.
        """
        return frozenset(self.possible_ids(x, y))

    def possible_ids(self, x: int, y: int) -> list[TileId]:
        """Ids still possible at (x, y), in registration order."""
        return self.table.ids_for(self.domain_mask(x, y))

    def possible_prototypes(self, x: int, y: int) -> list[Prototype]:
        """Prototypes still possible at (x, y), in registration order."""
        return [self.table.prototypes[tile_id] for tile_id in self.possible_ids(x, y)]

    def domain_mask(self, x: int, y: int) -> np.ndarray:
        """Copy of the boolean domain vector at (x, y)."""
        self._check_bounds(x, y)
        return self.wave[x, y].copy()

    def domain_sizes(self) -> np.ndarray:
        """Number of possibilities per cell, shaped (width, height)."""
        return self.wave.sum(axis=2)

    def cells(self) -> Iterator[CellPos]:
        """All cell positions in linear order."""
        for x in range(self.width):
            for y in range(self.height):
                yield x, y

    # -------------------------------------------------------------------------
    # Constraints
    # -------------------------------------------------------------------------

    def set(self, x: int, y: int, tile_ids: Iterable[TileId]) -> None:
        """Replace the domain at (x, y) with exactly ``tile_ids`` and propagate.

        Raises:
            CellOutOfBoundsError: If (x, y) is outside the grid.
            UnknownPrototypeError: If an id has not been registered.
        """
        self._check_bounds(x, y)
        self.wave[x, y] = self.table.mask_for(tile_ids)
        self.propagate(x, y)

    def ring_constrain(self, tile_ids: Iterable[TileId]) -> None:
        """Restrict every undetermined border cell to ``tile_ids``.

        Each changed border cell propagates before the next is visited.
        Border cells that are already collapsed or contradicted are left as is.
        """
        mask = self.table.mask_for(tile_ids)
        for x, y in self.cells():
            on_border = x in (0, self.width - 1) or y in (0, self.height - 1)
            if on_border and self.wave[x, y].sum() > 1:
                self.wave[x, y] = mask
                self.propagate(x, y)

    # -------------------------------------------------------------------------
    # Propagation
    # -------------------------------------------------------------------------

    def propagate(self, x: int, y: int) -> None:
        """Prune neighbours of (x, y) that no longer fit, until stable.

        A neighbour keeps a prototype only if at least one prototype still
        possible in the current cell allows it on that side and none forbids
        it. Any cell that loses a possibility is queued in turn. Domains only
        shrink, so this terminates.

        An emptied domain does not stop propagation; callers detect the
        contradiction afterwards through failed().
        """
        self._check_bounds(x, y)
        stack = [(x, y)]
        in_stack = {(x, y)}

        while stack:
            cx, cy = stack.pop()
            in_stack.discard((cx, cy))
            current = self.wave[cx, cy]

            for direction in ALL_DIRECTIONS:
                dx, dy = direction.offset
                nx, ny = cx + dx, cy + dy

                # The grid edge imposes no constraint
                if not self.inside(nx, ny):
                    continue

                neighbour = self.wave[nx, ny]
                if not neighbour.any():
                    continue

                pruned = neighbour & self.table.allowed_for(current, direction)
                if np.array_equal(pruned, neighbour):
                    continue

                self.wave[nx, ny] = pruned
                if (nx, ny) not in in_stack:
                    stack.append((nx, ny))
                    in_stack.add((nx, ny))

    # -------------------------------------------------------------------------
    # Solving
    # -------------------------------------------------------------------------

    def complete(self) -> bool:
        """True when no cell has more than one possibility."""
        return bool((self.domain_sizes() <= 1).all())

    def failed(self) -> bool:
        """True when some cell has no possibilities left."""
        return bool((self.domain_sizes() == 0).any())

    def min_entropy_cell(self) -> CellPos | None:
        """Undetermined cell with the fewest possibilities.

        Ties go to the first cell in linear order. Collapsed and contradicted
        cells are never returned; None means there is nothing left to pick.
        """
        sizes = self.domain_sizes()
        undetermined = sizes > 1
        if not undetermined.any():
            return None
        candidates = np.where(undetermined, sizes, np.iinfo(sizes.dtype).max)
        x, y = np.unravel_index(np.argmin(candidates), sizes.shape)
        return int(x), int(y)

    def collapse_cell(self, x: int, y: int) -> TileId:
        """Force (x, y) to a single id chosen by the selection policy.

        Does not propagate; solve() and step() do that afterwards.

        Raises:
            EmptyDomainError: If the cell has no possibilities.
            SelectionError: If the selector picks an id not in the domain.
        """
        mask = self.domain_mask(x, y)
        if not mask.any():
            raise EmptyDomainError(f"Cannot collapse ({x}, {y}): no possibilities left")

        chosen = self._selector(self, x, y)
        index = self.table.index_of(chosen)
        if not mask[index]:
            raise SelectionError(
                f"Selector chose {chosen!r}, which is not possible at ({x}, {y})"
            )

        self.wave[x, y] = False
        self.wave[x, y, index] = True
        self.collapse_count += 1
        logger.debug("Collapsed (%d, %d) to %r", x, y, chosen)
        return chosen

    def step(self) -> SolverState:
        """Collapse the most constrained cell and propagate from it."""
        if self.failed():
            return SolverState.CONTRADICTION

        cell = self.min_entropy_cell()
        if cell is None:
            return SolverState.COMPLETE

        x, y = cell
        self.collapse_cell(x, y)
        self.propagate(x, y)
        self.step_count += 1
        return SolverState.RUNNING

    def solve(self) -> bool:
        """Run until every cell is collapsed or a contradiction appears.

        Returns True on success, False on contradiction.
        """
        while True:
            state = self.step()
            if state is SolverState.COMPLETE:
                return True
            if state is SolverState.CONTRADICTION:
                logger.debug("Contradiction after %d steps", self.step_count)
                return False

    def results(self) -> list[TileId | None]:
        """One id per cell in linear order (x * height + y).

        Cells that are not collapsed come back as None.
        """
        ids = self.table.ids
        sizes = self.domain_sizes()
        results: list[TileId | None] = []
        for x, y in self.cells():
            if sizes[x, y] == 1:
                results.append(ids[int(np.argmax(self.wave[x, y]))])
            else:
                results.append(None)
        return results
