"""Grid tile collapse engine.

Assigns a tile type to every cell of a rectangular grid so that all
neighbouring tiles fit, using constraint propagation, a fewest-options-first
heuristic and pluggable (usually weighted random) tie-breaking:

- Prototype: tile type with sockets, antisockets and a weight
- TileCollapseSolver: the grid, propagation and solve loop
- solve_with_retries: bounded restart policy for contradicting grids
"""

from .directions import ALL_DIRECTIONS, HORIZONTAL, VERTICAL, Direction
from .errors import (
    CellOutOfBoundsError,
    EmptyDomainError,
    SelectionError,
    TileCollapseError,
    UnknownPrototypeError,
)
from .prototype import Prototype, split_rotation_suffix
from .retry import CollapseConstraints, RetryOutcome, solve_with_retries
from .selection import (
    SelectionPolicy,
    first_come_first_served,
    serve_random,
    serve_weighted_random,
)
from .sockets import Socket, SocketKind
from .solver import SolverState, TileCollapseSolver

__all__ = [
    "ALL_DIRECTIONS",
    "HORIZONTAL",
    "VERTICAL",
    "CellOutOfBoundsError",
    "CollapseConstraints",
    "Direction",
    "EmptyDomainError",
    "Prototype",
    "RetryOutcome",
    "SelectionError",
    "SelectionPolicy",
    "Socket",
    "SocketKind",
    "SolverState",
    "TileCollapseError",
    "TileCollapseSolver",
    "UnknownPrototypeError",
    "first_come_first_served",
    "serve_random",
    "serve_weighted_random",
    "solve_with_retries",
    "split_rotation_suffix",
]
