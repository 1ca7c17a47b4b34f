"""Tests for the bounded retry policy."""

from __future__ import annotations

import logging
import random

import pytest

from tilecollapse.prototype import Prototype
from tilecollapse.retry import CollapseConstraints, RetryOutcome, solve_with_retries
from tilecollapse.solver import TileCollapseSolver

_ZERO = {"left": "0s", "right": "0s", "top": "0s", "bottom": "0s"}
_ONE = {"left": "1s", "right": "1s", "top": "1s", "bottom": "1s"}


def _two_islands() -> TileCollapseSolver:
    """Two tile types that can never touch each other."""
    solver = TileCollapseSolver(3, 1, rng=random.Random(5))
    solver.add_prototypes(Prototype("A", _ZERO), Prototype("B", _ONE))
    return solver


def _square_cycle() -> tuple[TileCollapseSolver, CollapseConstraints]:
    """A 2x2 puzzle where every local check passes but only value 2 works.

    Cells a=(0,0), b=(1,0), c=(0,1), d=(1,1) each pick a value 0-2. a, b, d
    and c must share their value around three edges, while the a-c edge pairs
    0 with 1, 1 with 0 and 2 with 2. Propagation cannot rule out 0 or 1, so
    picking either at a contradicts only after the fact.
    """
    pair_label = {0: "r01s", 1: "r10s", 2: "r22s"}
    c_label = {1: "r01s", 0: "r10s", 2: "r22s"}
    families: dict[str, list[Prototype]] = {"a": [], "b": [], "c": [], "d": []}
    for v in range(3):
        same = f"e{v}s"
        families["a"].append(Prototype(f"a{v}", {"right": same, "top": pair_label[v]}))
        families["b"].append(Prototype(f"b{v}", {"left": same, "top": same}))
        families["c"].append(Prototype(f"c{v}", {"bottom": c_label[v], "right": same}))
        families["d"].append(Prototype(f"d{v}", {"bottom": same, "left": same}))

    solver = TileCollapseSolver(2, 2, rng=random.Random(0))
    solver.add_prototypes(*(p for family in families.values() for p in family))
    positions = {"a": (0, 0), "b": (1, 0), "c": (0, 1), "d": (1, 1)}
    seeds = [
        (x, y, [p.id for p in families[name]]) for name, (x, y) in positions.items()
    ]
    return solver, CollapseConstraints(seeds=seeds)


class TestCollapseConstraints:
    def test_apply_sets_seeds_then_ring(self, pipe_prototypes: list[Prototype]) -> None:
        solver = TileCollapseSolver(4, 4, rng=random.Random(1))
        solver.add_prototypes(*pipe_prototypes)
        constraints = CollapseConstraints(
            seeds=[(1, 1, ["blank"])], ring=["blank", "end"]
        )

        constraints.apply(solver)

        assert solver.get(1, 1) == {"blank"}
        assert solver.get(3, 3) <= {"blank", "end"}

    def test_empty_constraints_do_nothing(self) -> None:
        solver = _two_islands()
        CollapseConstraints().apply(solver)
        assert solver.get(1, 0) == {"A", "B"}


class TestSolveWithRetries:
    def test_success_on_first_attempt(self, pipe_prototypes: list[Prototype]) -> None:
        solver = TileCollapseSolver(6, 6, rng=random.Random(9))
        solver.add_prototypes(*pipe_prototypes)
        constraints = CollapseConstraints(seeds=[(2, 3, ["cross"])])

        outcome = solve_with_retries(solver, constraints, max_attempts=3)

        assert outcome == RetryOutcome(success=True, attempts=1)
        assert outcome
        assert solver.results()[2 * 6 + 3] == "cross"

    def test_resets_stale_state_before_solving(self) -> None:
        solver = _two_islands()
        solver.set(0, 0, [])
        assert solver.failed()

        outcome = solve_with_retries(solver, max_attempts=1)

        assert outcome.success
        assert solver.results() in (["A", "A", "A"], ["B", "B", "B"])

    def test_gives_up_after_max_attempts(
        self, caplog: pytest.LogCaptureFixture
    ) -> None:
        solver = _two_islands()
        constraints = CollapseConstraints(seeds=[(0, 0, ["A"]), (2, 0, ["B"])])

        with caplog.at_level(logging.DEBUG, logger="tilecollapse.retry"):
            outcome = solve_with_retries(solver, constraints, max_attempts=4)

        assert not outcome
        assert outcome.attempts == 4
        assert "Attempt 4/4 hit a contradiction" in caplog.text
        assert "No solution for 3x1 grid after 4 attempts" in caplog.text

    def test_retries_until_a_draw_succeeds(self) -> None:
        """A contradicting draw is discarded and the next attempt starts clean."""
        solver, constraints = _square_cycle()
        draws = iter(["a0", "a2"])
        solver.selection_policy = lambda s, x, y: next(draws)

        outcome = solve_with_retries(solver, constraints, max_attempts=3)

        assert outcome == RetryOutcome(success=True, attempts=2)
        assert solver.results() == ["a2", "c2", "b2", "d2"]

    def test_generator_seeds_survive_a_retry(self) -> None:
        solver, constraints = _square_cycle()
        one_shot = CollapseConstraints(
            seeds=[
                (x, y, (tile_id for tile_id in ids))
                for x, y, ids in constraints.seeds
            ]
        )
        draws = iter(["a1", "a2"])
        solver.selection_policy = lambda s, x, y: next(draws)

        outcome = solve_with_retries(solver, one_shot, max_attempts=3)

        assert outcome == RetryOutcome(success=True, attempts=2)
        assert solver.results() == ["a2", "c2", "b2", "d2"]

    def test_ring_is_copied(self) -> None:
        constraints = CollapseConstraints(ring=iter(["A"]))
        solver = _two_islands()

        constraints.apply(solver)
        solver.reset()
        constraints.apply(solver)

        assert solver.get(1, 0) == {"A"}

    def test_invalid_max_attempts(self) -> None:
        with pytest.raises(ValueError):
            solve_with_retries(_two_islands(), max_attempts=0)
