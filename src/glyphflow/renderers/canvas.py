"""Canvas: growable 2D character grid for rendering."""

from __future__ import annotations

from dataclasses import dataclass

from glyphflow.renderers.charset import BoxChars
from glyphflow.text import char_width, printable
from glyphflow.types import CharacterSet

# Placeholder stored in the cell right of a double-width glyph.
WIDE_TAIL = ""


@dataclass
class Rect:
    x: int
    y: int
    width: int
    height: int

    def right(self) -> int:
        return self.x + self.width

    def bottom(self) -> int:
        return self.y + self.height

    def center_y(self) -> int:
        return self.y + self.height // 2


class Canvas:
    """A 2D character grid onto which graph elements are painted.

    Writes past the current bounds grow the grid; writes at negative
    coordinates are dropped. Nothing here raises.
    """

    def __init__(self, width: int = 0, height: int = 0, charset: CharacterSet = CharacterSet.Unicode) -> None:
        self.charset = charset
        self.cells: list[list[str]] = [[" "] * width for _ in range(height)]
        self._width = width

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return len(self.cells)

    def _grow(self, col: int, row: int) -> None:
        if col >= self._width:
            self._width = col + 1
            for line in self.cells:
                line.extend([" "] * (self._width - len(line)))
        while row >= len(self.cells):
            self.cells.append([" "] * self._width)

    def get(self, col: int, row: int) -> str:
        if 0 <= row < self.height and 0 <= col < self._width:
            return self.cells[row][col]
        return " "

    def set(self, col: int, row: int, c: str) -> None:
        if col < 0 or row < 0:
            return
        wide = char_width(c) == 2
        self._grow(col + 1 if wide else col, row)
        line = self.cells[row]

        # Writing over either half of a wide glyph blanks the other half.
        if line[col] == WIDE_TAIL and col > 0:
            line[col - 1] = " "
        elif col + 1 < self._width and line[col + 1] == WIDE_TAIL:
            line[col + 1] = " "

        line[col] = c
        if wide:
            if col + 2 < self._width and line[col + 2] == WIDE_TAIL:
                line[col + 2] = " "
            line[col + 1] = WIDE_TAIL

    def hline(self, y: int, x1: int, x2: int, c: str) -> None:
        lo, hi = (x1, x2) if x1 <= x2 else (x2, x1)
        for col in range(lo, hi + 1):
            self.set(col, y, c)

    def vline(self, x: int, y1: int, y2: int, c: str) -> None:
        lo, hi = (y1, y2) if y1 <= y2 else (y2, y1)
        for row in range(lo, hi + 1):
            self.set(x, row, c)

    def fill(self, rect: Rect, c: str = " ") -> None:
        for row in range(rect.y, rect.bottom()):
            for col in range(rect.x, rect.right()):
                self.set(col, row, c)

    def draw_box(self, rect: Rect, bc: BoxChars) -> None:
        if rect.width < 2 or rect.height < 2:
            return
        x0 = rect.x
        y0 = rect.y
        x1 = rect.right() - 1
        y1 = rect.bottom() - 1
        self.hline(y0, x0 + 1, x1 - 1, bc.horizontal)
        self.hline(y1, x0 + 1, x1 - 1, bc.horizontal)
        self.vline(x0, y0 + 1, y1 - 1, bc.vertical)
        self.vline(x1, y0 + 1, y1 - 1, bc.vertical)
        self.set(x0, y0, bc.top_left)
        self.set(x1, y0, bc.top_right)
        self.set(x0, y1, bc.bottom_left)
        self.set(x1, y1, bc.bottom_right)

    def write_str(self, col: int, row: int, s: str) -> None:
        """Write text left to right; wide glyphs advance two cells.

        Control characters are written as spaces.
        """
        for ch in printable(s):
            w = char_width(ch)
            if w == 0:
                # Combining marks ride on the previous cell.
                if col > 0 and row >= 0 and self.get(col - 1, row) != " ":
                    self.cells[row][col - 1] += ch
                continue
            self.set(col, row, ch)
            col += w

    def to_string(self) -> str:
        """Serialise the grid.

        Blank leading and trailing rows are dropped, trailing spaces are
        stripped, and the indent common to all non-blank rows is removed.
        There is no final newline.
        """
        lines = ["".join(row).rstrip() for row in self.cells]
        while lines and not lines[0]:
            lines.pop(0)
        while lines and not lines[-1]:
            lines.pop()
        if not lines:
            return ""

        indent = min(len(line) - len(line.lstrip(" ")) for line in lines if line)
        return "\n".join(line[indent:] for line in lines)
