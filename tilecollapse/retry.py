"""Bounded retry on top of the solver.

solve() gives up at the first contradiction. In practice most contradictions
clear up with a different random draw, so callers usually wrap the solver:
reset the grid, re-apply their hard constraints, solve again, and stop at the
first success or when the attempt budget runs out.

Usage:
    constraints = CollapseConstraints(seeds=[(0, 0, ["gate"])], ring=["wall"])
    outcome = solve_with_retries(solver, constraints, max_attempts=5)
    if outcome:
        tiles = solver.results()
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from tilecollapse import config
from tilecollapse.solver import TileCollapseSolver
from tilecollapse.types import CellConstraint, TileIds

logger = logging.getLogger(__name__)


@dataclass
class CollapseConstraints:
    """Hard constraints re-applied at the start of every attempt.

    Ids are copied into tuples on construction, so seeds given as generators
    still apply on every attempt.

    Attributes:
        seeds: (x, y, allowed ids) applied in order with solver.set().
        ring: If given, border cells are restricted to these ids after the
            seeds, via solver.ring_constrain().
    """

    seeds: list[CellConstraint] = field(default_factory=list)
    ring: TileIds | None = None

    def __post_init__(self) -> None:
        self.seeds = [(x, y, tuple(tile_ids)) for x, y, tile_ids in self.seeds]
        if self.ring is not None:
            self.ring = tuple(self.ring)

    def apply(self, solver: TileCollapseSolver) -> None:
        for x, y, tile_ids in self.seeds:
            solver.set(x, y, tile_ids)
        if self.ring is not None:
            solver.ring_constrain(self.ring)


@dataclass(frozen=True)
class RetryOutcome:
    success: bool
    attempts: int

    def __bool__(self) -> bool:
        return self.success


def solve_with_retries(
    solver: TileCollapseSolver,
    constraints: CollapseConstraints | None = None,
    max_attempts: int = config.DEFAULT_MAX_ATTEMPTS,
) -> RetryOutcome:
    """Solve, starting over from a clean grid after each contradiction.

    Args:
        solver: Solver with its prototypes already registered.
        constraints: Hard constraints to apply before each attempt.
        max_attempts: Upper bound on full solve attempts.

    Returns:
        RetryOutcome whose ``success`` is False if every attempt contradicted.
        On success the solver holds the solved grid.
    """
    if max_attempts < 1:
        raise ValueError(f"max_attempts must be at least 1, got {max_attempts}")

    for attempt in range(1, max_attempts + 1):
        solver.reset()
        if constraints is not None:
            constraints.apply(solver)

        if solver.solve():
            logger.debug(
                "Solved %dx%d grid on attempt %d", solver.width, solver.height, attempt
            )
            return RetryOutcome(success=True, attempts=attempt)

        logger.debug("Attempt %d/%d hit a contradiction", attempt, max_attempts)

    logger.warning(
        "No solution for %dx%d grid after %d attempts",
        solver.width,
        solver.height,
        max_attempts,
    )
    return RetryOutcome(success=False, attempts=max_attempts)
