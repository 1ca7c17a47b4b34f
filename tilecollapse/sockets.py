"""Socket labels and the rule deciding whether two sides may touch.

Labels are written as short strings on each side of a prototype:

    ""      closed, never fits anything
    "0s"    symmetric, fits another "0s"
    "1"     directional, fits its flipped partner "1f" (and not another "1")
    "1f"    directional (flipped), fits "1"
    "1sf"   directional (flipped), fits "1s"

Any label fits the same label with the directional marker appended, even
when the label itself already ends in a marker ("1s" fits "1sf", "1f" fits
"1ff"). Labels are parsed into Socket values once, when a prototype is built;
str() gives the label back exactly.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum, auto

from tilecollapse import config
from tilecollapse.directions import ALL_DIRECTIONS, Direction
from tilecollapse.types import SideKey


class SocketKind(Enum):
    SYMMETRIC = auto()
    DIRECTIONAL = auto()
    CLOSED = auto()


@dataclass(frozen=True)
class Socket:
    """One side's connection type.

    Attributes:
        kind: Which marker, if any, ends the label.
        label: Label with its trailing marker stripped.
        flipped: For directional sockets, whether this is the marked half of
            the pair. Always False for other kinds.
    """

    kind: SocketKind
    label: str = ""
    flipped: bool = False

    @classmethod
    def symmetric(cls, label: str) -> Socket:
        return cls(SocketKind.SYMMETRIC, label)

    @classmethod
    def directional(cls, label: str, flipped: bool = False) -> Socket:
        return cls(SocketKind.DIRECTIONAL, label, flipped)

    @classmethod
    def closed(cls) -> Socket:
        return cls(SocketKind.CLOSED)

    @classmethod
    def parse(cls, text: str | Socket) -> Socket:
        """Parse a label string. Socket values are returned unchanged."""
        if isinstance(text, Socket):
            return text
        if not text:
            return cls.closed()
        if text.endswith(config.SYMMETRIC_MARKER):
            return cls.symmetric(text[: -len(config.SYMMETRIC_MARKER)])
        if text.endswith(config.DIRECTIONAL_MARKER):
            return cls.directional(text[: -len(config.DIRECTIONAL_MARKER)], True)
        return cls.directional(text)

    @property
    def is_closed(self) -> bool:
        return self.kind is SocketKind.CLOSED

    @property
    def text(self) -> str:
        """The label as written, including its marker."""
        return str(self)

    def fits(self, other: Socket) -> bool:
        """Whether this socket may face ``other`` across a shared edge."""
        if self.is_closed or other.is_closed:
            return False
        mine, theirs = self.text, other.text
        if not mine or not theirs:
            return False
        if mine == theirs:
            return mine.endswith(config.SYMMETRIC_MARKER)
        return (
            mine == theirs + config.DIRECTIONAL_MARKER
            or theirs == mine + config.DIRECTIONAL_MARKER
        )

    def __str__(self) -> str:
        if self.kind is SocketKind.SYMMETRIC:
            return self.label + config.SYMMETRIC_MARKER
        if self.kind is SocketKind.DIRECTIONAL and self.flipped:
            return self.label + config.DIRECTIONAL_MARKER
        return self.label


def parse_sides(
    sides: Mapping[SideKey, str | Socket] | None,
) -> dict[Direction, Socket]:
    """Build a complete side -> Socket mapping.

    Sides missing from ``sides`` are closed.

    Raises:
        ValueError: If a key is not a known side name.
    """
    parsed = {direction: Socket.closed() for direction in ALL_DIRECTIONS}
    if sides:
        for side, label in sides.items():
            parsed[Direction.from_side(side)] = Socket.parse(label)
    return parsed
