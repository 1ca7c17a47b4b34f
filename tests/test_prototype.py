"""Tests for prototypes and rotation."""

from __future__ import annotations

import pytest

from tilecollapse.directions import Direction
from tilecollapse.prototype import Prototype, split_rotation_suffix
from tilecollapse.sockets import Socket

# Clockwise walk around a tile
_RING = (Direction.LEFT, Direction.TOP, Direction.RIGHT, Direction.BOTTOM)


def _ring_labels(prototype: Prototype) -> list[str]:
    return [str(prototype.socket(direction)) for direction in _RING]


def _asymmetric() -> Prototype:
    return Prototype(
        "gate",
        sockets={"left": "a", "top": "b", "right": "cf", "bottom": "ds"},
        weight=3.0,
        antisockets={"left": "xs", "right": "y"},
    )


class TestPrototype:
    def test_defaults(self) -> None:
        prototype = Prototype("lonely")

        assert prototype.weight == 1.0
        assert all(socket.is_closed for socket in prototype.sockets.values())
        assert all(socket.is_closed for socket in prototype.antisockets.values())

    def test_labels_are_parsed_once(self) -> None:
        prototype = _asymmetric()

        assert prototype.socket(Direction.LEFT) == Socket.directional("a")
        flipped_c = Socket.directional("c", flipped=True)
        assert prototype.socket(Direction.RIGHT) == flipped_c
        assert prototype.socket(Direction.BOTTOM) == Socket.symmetric("d")
        assert prototype.antisocket(Direction.LEFT) == Socket.symmetric("x")
        assert prototype.antisocket(Direction.TOP).is_closed

    @pytest.mark.parametrize("weight", [0, -1.5, float("nan"), float("inf")])
    def test_invalid_weight_raises(self, weight: float) -> None:
        with pytest.raises(ValueError, match="positive finite weight"):
            Prototype("bad", weight=weight)


class TestRotation:
    def test_rotate_right(self) -> None:
        rotated = _asymmetric().rotate_right()

        assert rotated.id == "gate_1"
        assert str(rotated.socket(Direction.LEFT)) == "ds"
        assert str(rotated.socket(Direction.TOP)) == "a"
        assert str(rotated.socket(Direction.RIGHT)) == "b"
        assert str(rotated.socket(Direction.BOTTOM)) == "cf"

    def test_rotate_left(self) -> None:
        rotated = _asymmetric().rotate_left()

        assert rotated.id == "gate_3"
        assert str(rotated.socket(Direction.RIGHT)) == "ds"
        assert str(rotated.socket(Direction.BOTTOM)) == "a"
        assert str(rotated.socket(Direction.LEFT)) == "b"
        assert str(rotated.socket(Direction.TOP)) == "cf"

    def test_rotate_180(self) -> None:
        rotated = _asymmetric().rotate_180()

        assert rotated.id == "gate_2"
        assert str(rotated.socket(Direction.LEFT)) == "cf"
        assert str(rotated.socket(Direction.RIGHT)) == "a"
        assert str(rotated.socket(Direction.TOP)) == "ds"
        assert str(rotated.socket(Direction.BOTTOM)) == "b"

    def test_rotations_copy_weight_and_permute_antisockets(self) -> None:
        base = _asymmetric()
        rotated = base.rotate_right()

        assert rotated.weight == base.weight
        assert rotated.antisocket(Direction.TOP) == base.antisocket(Direction.LEFT)
        assert rotated.antisocket(Direction.BOTTOM) == base.antisocket(Direction.RIGHT)
        assert rotated.antisocket(Direction.LEFT).is_closed

    def test_rotate_360_is_closed_under_cyclic_rotation(self) -> None:
        """The four variants carry exactly the four cyclic shifts of the sides."""
        base = _asymmetric()
        variants = base.rotate_360()
        labels = _ring_labels(base)
        shifts = [labels[-k:] + labels[:-k] for k in range(4)]

        assert [v.id for v in variants] == ["gate", "gate_1", "gate_2", "gate_3"]
        assert variants[0] is base
        assert [_ring_labels(v) for v in variants] == shifts

    def test_rotations_are_independent(self) -> None:
        """Rotating a rotation chains ids; it does not reuse the sibling."""
        base = _asymmetric()
        twice = base.rotate_right().rotate_right()

        assert twice.id == "gate_1_1"
        assert _ring_labels(twice) == _ring_labels(base.rotate_180())


class TestRotationSuffix:
    @pytest.mark.parametrize(
        ("tile_id", "expected"),
        [
            ("corner", ("corner", 0)),
            ("corner_1", ("corner", 1)),
            ("corner_2", ("corner", 2)),
            ("corner_3", ("corner", 3)),
            ("corner_4", ("corner_4", 0)),
            ("_1", ("_1", 0)),
        ],
    )
    def test_split(self, tile_id: str, expected: tuple[str, int]) -> None:
        assert split_rotation_suffix(tile_id) == expected

    def test_prototype_exposes_base_id_and_rotation(self) -> None:
        left = Prototype("corner", {"left": "1s", "top": "1s"}).rotate_left()

        assert left.base_id == "corner"
        assert left.rotation == 3
