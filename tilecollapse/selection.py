"""Selection policies used to collapse a cell.

A selector is any callable ``(solver, x, y) -> tile id`` that returns one of
the ids still possible at (x, y). Random selectors draw from ``solver.rng``
so a seeded solver is reproducible.
"""

from __future__ import annotations

from collections.abc import Callable
from enum import StrEnum
from typing import TYPE_CHECKING, TypeAlias

from tilecollapse.types import TileId

if TYPE_CHECKING:
    from tilecollapse.solver import TileCollapseSolver

Selector: TypeAlias = "Callable[[TileCollapseSolver, int, int], TileId]"


def first_come_first_served(solver: TileCollapseSolver, x: int, y: int) -> TileId:
    """Pick the earliest-registered possible id. Deterministic."""
    return solver.possible_ids(x, y)[0]


def serve_random(solver: TileCollapseSolver, x: int, y: int) -> TileId:
    """Pick uniformly among the possible ids."""
    return solver.rng.choice(solver.possible_ids(x, y))


def serve_weighted_random(solver: TileCollapseSolver, x: int, y: int) -> TileId:
    """Pick with probability proportional to each prototype's weight."""
    mask = solver.domain_mask(x, y)
    ids = solver.table.ids_for(mask)
    weights = solver.table.weights[mask]
    return solver.rng.choices(ids, weights=weights.tolist(), k=1)[0]


class SelectionPolicy(StrEnum):
    """Built-in selectors by name."""

    FIRST = "first"
    UNIFORM = "uniform-random"
    WEIGHTED = "weight-biased-random"


_SELECTORS: dict[SelectionPolicy, Selector] = {
    SelectionPolicy.FIRST: first_come_first_served,
    SelectionPolicy.UNIFORM: serve_random,
    SelectionPolicy.WEIGHTED: serve_weighted_random,
}


def resolve_selector(policy: SelectionPolicy | str | Selector) -> Selector:
    """Turn a policy name, SelectionPolicy or custom callable into a selector.

    Raises:
        ValueError: If ``policy`` is a string that names no built-in policy.
    """
    if callable(policy):
        return policy
    return _SELECTORS[SelectionPolicy(policy)]
