"""Shared type definitions for glyphflow.

Enums used across the graph model, layout, and renderers.
"""

from __future__ import annotations

from enum import Enum, auto

_DIRECTION_NAMES: dict[str, str] = {
    "TD": "TopDown",
    "TB": "TopDown",
    "BT": "BottomUp",
    "LR": "LeftRight",
    "RL": "RightLeft",
}


class Direction(Enum):
    TopDown = "TD"
    BottomUp = "BT"
    LeftRight = "LR"
    RightLeft = "RL"

    @classmethod
    def default(cls) -> Direction:
        return cls.TopDown

    @classmethod
    def parse(cls, value: str) -> Direction:
        """Parse a direction keyword (TD, TB, BT, LR, RL), case-insensitive."""
        key = value.strip().upper()
        if key not in _DIRECTION_NAMES:
            raise ValueError(f"Unknown direction '{value}'; use TD, TB, BT, LR, or RL")
        return cls[_DIRECTION_NAMES[key]]

    def is_vertical(self) -> bool:
        return self in (Direction.TopDown, Direction.BottomUp)

    def is_horizontal(self) -> bool:
        return self in (Direction.LeftRight, Direction.RightLeft)

    def is_reversed(self) -> bool:
        return self in (Direction.BottomUp, Direction.RightLeft)


class NodeShape(Enum):
    Rectangle = "rectangle"  # id[Label]
    RoundedRect = "rounded"  # id(Label)
    Diamond = "diamond"  # id{Label}
    Circle = "circle"  # id((Label)), also [*] terminals
    Hexagon = "hexagon"  # id{{Label}}
    Subroutine = "subroutine"  # id[[Label]]
    Cylinder = "cylinder"  # id[(Label)]
    Asymmetric = "asymmetric"  # id>Label]
    Parallelogram = "parallelogram"  # id[/Label/]
    Trapezoid = "trapezoid"  # id[/Label\]

    @classmethod
    def default(cls) -> NodeShape:
        return cls.Rectangle


class EdgeType(Enum):
    Arrow = "-->"
    Line = "---"
    DottedArrow = "-.->"
    DottedLine = "-.-"
    ThickArrow = "==>"
    ThickLine = "==="
    Invisible = "~~~"
    OpenArrow = "--o"
    CrossArrow = "--x"

    @classmethod
    def default(cls) -> EdgeType:
        return cls.Arrow

    def has_arrow(self) -> bool:
        return self in (
            EdgeType.Arrow,
            EdgeType.DottedArrow,
            EdgeType.ThickArrow,
            EdgeType.OpenArrow,
            EdgeType.CrossArrow,
        )

    def is_dotted(self) -> bool:
        return self in (EdgeType.DottedArrow, EdgeType.DottedLine)

    def is_thick(self) -> bool:
        return self in (EdgeType.ThickArrow, EdgeType.ThickLine)


class CharacterSet(Enum):
    Ascii = "ascii"
    Unicode = "unicode"
    UnicodeMath = "unicode-math"
    Compact = "compact"

    @classmethod
    def default(cls) -> CharacterSet:
        return cls.Unicode

    def is_ascii(self) -> bool:
        """True for the sets restricted to 7-bit glyphs."""
        return self in (CharacterSet.Ascii, CharacterSet.Compact)


class DiamondStyle(Enum):
    Box = "box"
    Inline = "inline"
    Tall = "tall"

    @classmethod
    def default(cls) -> DiamondStyle:
        return cls.Tall


class TerminalKind(Enum):
    """Pre-classified state-diagram terminal ([*]) hints."""

    Start = auto()
    End = auto()


class SweepDirection(Enum):
    Downward = auto()  # barycenter over predecessors
    Upward = auto()  # barycenter over successors
