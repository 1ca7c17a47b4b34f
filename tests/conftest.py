from __future__ import annotations

from collections.abc import Iterator

import pytest

from tilecollapse import Prototype
from tilecollapse.util import rng


@pytest.fixture(autouse=True)
def reseed_shared_rng() -> Iterator[None]:
    """Give every test the same shared RNG streams."""
    rng.init(0)
    yield
    rng.init(None)


def _sides(left: str, top: str, right: str, bottom: str) -> dict[str, str]:
    return {"left": left, "top": top, "right": right, "bottom": bottom}


@pytest.fixture
def pipe_prototypes() -> list[Prototype]:
    """Pipe tiles covering every open/closed combination of the four sides.

    "1s" is an open pipe end and "0s" a closed one. Because every combination
    exists, propagation can never empty a cell, so solving always succeeds.
    """
    prototypes = [
        Prototype("blank", _sides("0s", "0s", "0s", "0s")),
        Prototype("cross", _sides("1s", "1s", "1s", "1s"), weight=0.5),
    ]
    for base in (
        Prototype("end", _sides("1s", "0s", "0s", "0s")),
        Prototype("line", _sides("1s", "0s", "1s", "0s"), weight=2.0),
        Prototype("corner", _sides("1s", "1s", "0s", "0s"), weight=2.0),
        Prototype("tee", _sides("1s", "1s", "1s", "0s")),
    ):
        prototypes.extend(base.rotate_360())
    return prototypes
