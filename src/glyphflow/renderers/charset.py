"""Glyph tables per character set and junction merging for box-drawing."""

from __future__ import annotations

from dataclasses import dataclass

from glyphflow.types import CharacterSet, EdgeType, TerminalKind


# ─── Node borders ─────────────────────────────────────────────────────────────


@dataclass
class BoxChars:
    top_left: str
    top_right: str
    bottom_left: str
    bottom_right: str
    horizontal: str
    vertical: str
    tee_down: str
    tee_up: str

    @classmethod
    def unicode(cls) -> BoxChars:
        return cls(
            top_left="┌",
            top_right="┐",
            bottom_left="└",
            bottom_right="┘",
            horizontal="─",
            vertical="│",
            tee_down="┬",
            tee_up="┴",
        )

    @classmethod
    def ascii(cls) -> BoxChars:
        return cls(
            top_left="+",
            top_right="+",
            bottom_left="+",
            bottom_right="+",
            horizontal="-",
            vertical="|",
            tee_down="+",
            tee_up="+",
        )

    @classmethod
    def compact(cls) -> BoxChars:
        return cls(
            top_left=".",
            top_right=".",
            bottom_left="'",
            bottom_right="'",
            horizontal="-",
            vertical="|",
            tee_down="-",
            tee_up="-",
        )

    @classmethod
    def rectangle(cls, cs: CharacterSet) -> BoxChars:
        match cs:
            case CharacterSet.Ascii:
                return cls.ascii()
            case CharacterSet.Compact:
                return cls.compact()
            case CharacterSet.Unicode | CharacterSet.UnicodeMath:
                return cls.unicode()

    @classmethod
    def rounded(cls, cs: CharacterSet) -> BoxChars:
        if cs.is_ascii():
            return cls.rectangle(cs)
        bc = cls.unicode()
        bc.top_left, bc.top_right, bc.bottom_left, bc.bottom_right = "╭", "╮", "╰", "╯"
        return bc

    @classmethod
    def double(cls, cs: CharacterSet) -> BoxChars:
        """Container borders, visually distinct from node borders."""
        if cs.is_ascii():
            return cls("#", "#", "#", "#", "=", "#", "#", "#")
        return cls("╔", "╗", "╚", "╝", "═", "║", "╦", "╩")

    @classmethod
    def diamond_box(cls, cs: CharacterSet) -> BoxChars:
        """Rectangle with diamond corner glyphs (Box diamond style)."""
        bc = cls.rectangle(cs)
        match cs:
            case CharacterSet.Ascii | CharacterSet.Compact:
                bc.top_left, bc.top_right, bc.bottom_left, bc.bottom_right = "/", "\\", "\\", "/"
            case CharacterSet.Unicode:
                bc.top_left = bc.top_right = bc.bottom_left = bc.bottom_right = "◇"
            case CharacterSet.UnicodeMath:
                bc.top_left = bc.top_right = bc.bottom_left = bc.bottom_right = "⋄"
        return bc


@dataclass
class DiagonalChars:
    """Slanted outline glyphs (tall diamonds, hexagons, slanted boxes)."""

    upper_left: str
    upper_right: str
    lower_left: str
    lower_right: str
    left_tip: str
    right_tip: str
    top: str
    bottom: str

    @classmethod
    def for_charset(cls, cs: CharacterSet) -> DiagonalChars:
        match cs:
            case CharacterSet.Ascii:
                return cls("/", "\\", "\\", "/", "<", ">", "/\\", "\\/")
            case CharacterSet.Unicode:
                return cls("╱", "╲", "╲", "╱", "<", ">", "╱╲", "╲╱")
            case CharacterSet.UnicodeMath:
                return cls("⟋", "⟍", "⟍", "⟋", "⟨", "⟩", "⟋⟍", "⟍⟋")
            case CharacterSet.Compact:
                return cls(".", ".", "'", "'", "<", ">", "..", "''")


def terminal_glyph(cs: CharacterSet, kind: TerminalKind) -> str:
    """Label drawn inside a ``[*]`` start/end state."""
    if cs.is_ascii():
        return "*" if kind == TerminalKind.Start else "o"
    return "●" if kind == TerminalKind.Start else "◉"


# ─── Edge lines ───────────────────────────────────────────────────────────────


@dataclass
class LineChars:
    horizontal: str
    vertical: str
    top_left: str
    top_right: str
    bottom_left: str
    bottom_right: str
    tee_right: str
    tee_left: str
    tee_down: str
    tee_up: str
    cross: str
    arrow_right: str
    arrow_left: str
    arrow_down: str
    arrow_up: str

    @classmethod
    def unicode(cls) -> LineChars:
        return cls(
            horizontal="─",
            vertical="│",
            top_left="┌",
            top_right="┐",
            bottom_left="└",
            bottom_right="┘",
            tee_right="├",
            tee_left="┤",
            tee_down="┬",
            tee_up="┴",
            cross="┼",
            arrow_right="▶",
            arrow_left="◀",
            arrow_down="▼",
            arrow_up="▲",
        )

    @classmethod
    def ascii(cls) -> LineChars:
        return cls(
            horizontal="-",
            vertical="|",
            top_left="+",
            top_right="+",
            bottom_left="+",
            bottom_right="+",
            tee_right="+",
            tee_left="+",
            tee_down="+",
            tee_up="+",
            cross="+",
            arrow_right=">",
            arrow_left="<",
            arrow_down="v",
            arrow_up="^",
        )

    @classmethod
    def for_charset(cls, cs: CharacterSet) -> LineChars:
        if cs.is_ascii():
            return cls.ascii()
        lc = cls.unicode()
        if cs == CharacterSet.UnicodeMath:
            lc.arrow_right, lc.arrow_left, lc.arrow_down, lc.arrow_up = "→", "←", "↓", "↑"
        return lc

    @classmethod
    def for_edge(cls, cs: CharacterSet, kind: EdgeType) -> LineChars:
        """Line glyphs styled for ``kind`` (dotted and thick runs)."""
        lc = cls.for_charset(cs)
        if kind.is_thick():
            lc.horizontal, lc.vertical = ("=", "|") if cs.is_ascii() else ("━", "┃")
        elif kind.is_dotted():
            match cs:
                case CharacterSet.Ascii | CharacterSet.Compact:
                    lc.horizontal, lc.vertical = ".", ":"
                case CharacterSet.Unicode:
                    lc.horizontal, lc.vertical = "┄", "┆"
                case CharacterSet.UnicodeMath:
                    lc.horizontal, lc.vertical = "┈", "┊"
        match kind:
            case EdgeType.OpenArrow:
                marker = "o" if cs.is_ascii() else "○"
                lc.arrow_right = lc.arrow_left = lc.arrow_down = lc.arrow_up = marker
            case EdgeType.CrossArrow:
                marker = "x" if cs.is_ascii() else "×"
                lc.arrow_right = lc.arrow_left = lc.arrow_down = lc.arrow_up = marker
            case _:
                pass
        return lc


ARROW_GLYPHS = frozenset("▶◀▼▲►◄→←↓↑><v^○×ox")


def is_arrow(c: str) -> bool:
    return c in ARROW_GLYPHS


# ─── Junction algebra ─────────────────────────────────────────────────────────

_ARMS_TABLE: dict[str, tuple[bool, bool, bool, bool]] = {
    # (up, down, left, right)
    "─": (False, False, True, True),
    "━": (False, False, True, True),
    "┄": (False, False, True, True),
    "┈": (False, False, True, True),
    "│": (True, True, False, False),
    "┃": (True, True, False, False),
    "┆": (True, True, False, False),
    "┊": (True, True, False, False),
    "┌": (False, True, False, True),
    "┐": (False, True, True, False),
    "└": (True, False, False, True),
    "┘": (True, False, True, False),
    "├": (True, True, False, True),
    "┤": (True, True, True, False),
    "┬": (False, True, True, True),
    "┴": (True, False, True, True),
    "┼": (True, True, True, True),
    "-": (False, False, True, True),
    "=": (False, False, True, True),
    "|": (True, True, False, False),
    ":": (True, True, False, False),
    "+": (True, True, True, True),
}


@dataclass
class Arms:
    """Which arms of a junction cell are active."""

    up: bool = False
    down: bool = False
    left: bool = False
    right: bool = False

    @classmethod
    def from_char(cls, c: str) -> Arms | None:
        entry = _ARMS_TABLE.get(c)
        if entry is None:
            return None
        u, d, lft, r = entry
        return cls(up=u, down=d, left=lft, right=r)

    @classmethod
    def toward(cls, dx: int, dy: int) -> Arms:
        """Single arm pointing along the unit step (dx, dy)."""
        return cls(up=dy < 0, down=dy > 0, left=dx < 0, right=dx > 0)

    def merge(self, other: Arms) -> Arms:
        return Arms(
            up=self.up or other.up,
            down=self.down or other.down,
            left=self.left or other.left,
            right=self.right or other.right,
        )

    def is_vertical(self) -> bool:
        return (self.up or self.down) and not (self.left or self.right)

    def is_horizontal(self) -> bool:
        return (self.left or self.right) and not (self.up or self.down)

    def is_straight(self) -> bool:
        return self.is_vertical() or self.is_horizontal()

    def to_char(self, cs: CharacterSet) -> str:
        lc = LineChars.for_charset(cs)
        key = (self.up, self.down, self.left, self.right)
        match key:
            case (False, False, False, False):
                return " "
            case (False, False, True, True):
                return lc.horizontal
            case (True, True, False, False):
                return lc.vertical
            case (False, True, False, True):
                return lc.top_left
            case (False, True, True, False):
                return lc.top_right
            case (True, False, False, True):
                return lc.bottom_left
            case (True, False, True, False):
                return lc.bottom_right
            case (True, True, False, True):
                return lc.tee_right
            case (True, True, True, False):
                return lc.tee_left
            case (False, True, True, True):
                return lc.tee_down
            case (True, False, True, True):
                return lc.tee_up
            case (True, True, True, True):
                return lc.cross
            case (True, False, False, False) | (False, True, False, False):
                return lc.vertical
            case (False, False, True, False) | (False, False, False, True):
                return lc.horizontal
            case _:
                return " "
