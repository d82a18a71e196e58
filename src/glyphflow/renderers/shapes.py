"""Node shape painters.

Each painter takes the canvas, the node's rectangle, its label lines and the
character set, clears the rectangle and paints the outline and label.
"""

from __future__ import annotations

from glyphflow.layout.types import PositionedNode
from glyphflow.renderers.canvas import Canvas, Rect
from glyphflow.renderers.charset import BoxChars, DiagonalChars, terminal_glyph
from glyphflow.text import display_width
from glyphflow.types import CharacterSet, DiamondStyle, NodeShape


def draw_node(canvas: Canvas, node: PositionedNode, diamond_style: DiamondStyle = DiamondStyle.Tall) -> None:
    """Paint ``node`` with the painter for its shape."""
    cs = canvas.charset
    rect = Rect(node.x, node.y, node.width, node.height)
    lines = node.label_lines or [""]
    if node.terminal is not None:
        draw_circle(canvas, rect, [terminal_glyph(cs, node.terminal)], cs)
        return

    match node.shape:
        case NodeShape.Rectangle:
            draw_rectangle(canvas, rect, lines, cs)
        case NodeShape.RoundedRect:
            draw_rounded(canvas, rect, lines, cs)
        case NodeShape.Diamond:
            draw_diamond(canvas, rect, lines, cs, diamond_style)
        case NodeShape.Circle:
            draw_circle(canvas, rect, lines, cs)
        case NodeShape.Hexagon:
            draw_hexagon(canvas, rect, lines, cs)
        case NodeShape.Subroutine:
            draw_subroutine(canvas, rect, lines, cs)
        case NodeShape.Cylinder:
            draw_cylinder(canvas, rect, lines, cs)
        case NodeShape.Asymmetric:
            draw_asymmetric(canvas, rect, lines, cs)
        case NodeShape.Parallelogram:
            draw_parallelogram(canvas, rect, lines, cs)
        case NodeShape.Trapezoid:
            draw_trapezoid(canvas, rect, lines, cs)


def draw_label(canvas: Canvas, rect: Rect, lines: list[str], top: int | None = None, rows: int | None = None) -> None:
    """Centre ``lines`` in ``rect`` (or in ``rows`` rows starting at ``top``)."""
    if top is None:
        top, rows = rect.y, rect.height
    elif rows is None:
        rows = rect.bottom() - top
    start = top + max(0, rows - len(lines)) // 2
    for i, line in enumerate(lines):
        col = rect.x + max(0, rect.width - display_width(line)) // 2
        canvas.write_str(col, start + i, line)


# ─── Boxes ───────────────────────────────────────────────────────────────────


def draw_rectangle(canvas: Canvas, rect: Rect, lines: list[str], cs: CharacterSet) -> None:
    canvas.fill(rect)
    canvas.draw_box(rect, BoxChars.rectangle(cs))
    draw_label(canvas, rect, lines)


def draw_rounded(canvas: Canvas, rect: Rect, lines: list[str], cs: CharacterSet) -> None:
    canvas.fill(rect)
    canvas.draw_box(rect, BoxChars.rounded(cs))
    draw_label(canvas, rect, lines)


def draw_subroutine(canvas: Canvas, rect: Rect, lines: list[str], cs: CharacterSet) -> None:
    """Rectangle with an inner bar just inside each side."""
    bc = BoxChars.rectangle(cs)
    canvas.fill(rect)
    canvas.draw_box(rect, bc)
    top, bottom = rect.y, rect.bottom() - 1
    for col in (rect.x + 1, rect.right() - 2):
        canvas.set(col, top, bc.tee_down)
        canvas.set(col, bottom, bc.tee_up)
        canvas.vline(col, top + 1, bottom - 1, bc.vertical)
    draw_label(canvas, rect, lines)


def draw_cylinder(canvas: Canvas, rect: Rect, lines: list[str], cs: CharacterSet) -> None:
    """Rounded box with a rim row under the top border."""
    canvas.fill(rect)
    if cs.is_ascii():
        bc = BoxChars.ascii()
        bc.top_left, bc.top_right, bc.bottom_left, bc.bottom_right = ".", ".", "'", "'"
        rim_left, rim_right = "+", "+"
    else:
        bc = BoxChars.rounded(cs)
        rim_left, rim_right = "├", "┤"
    canvas.draw_box(rect, bc)
    if rect.height >= 4:
        rim = rect.y + 1
        canvas.set(rect.x, rim, rim_left)
        canvas.hline(rim, rect.x + 1, rect.right() - 2, bc.horizontal)
        canvas.set(rect.right() - 1, rim, rim_right)
        draw_label(canvas, rect, lines, top=rect.y + 2, rows=rect.height - 3)
    else:
        draw_label(canvas, rect, lines)


# ─── Diamonds ────────────────────────────────────────────────────────────────


def _inline_diamond_marks(cs: CharacterSet) -> tuple[str, str]:
    match cs:
        case CharacterSet.Ascii | CharacterSet.Compact:
            return ("<", ">")
        case CharacterSet.Unicode:
            return ("◇", "◇")
        case CharacterSet.UnicodeMath:
            return ("⋄", "⋄")


def draw_diamond(
    canvas: Canvas,
    rect: Rect,
    lines: list[str],
    cs: CharacterSet,
    style: DiamondStyle = DiamondStyle.Tall,
) -> None:
    match style:
        case DiamondStyle.Box:
            canvas.fill(rect)
            canvas.draw_box(rect, BoxChars.diamond_box(cs))
            draw_label(canvas, rect, lines)
        case DiamondStyle.Inline:
            left, right = _inline_diamond_marks(cs)
            canvas.fill(rect)
            canvas.set(rect.x, rect.y, left)
            canvas.set(rect.right() - 1, rect.y, right)
            draw_label(canvas, rect, [" ".join(lines)], top=rect.y, rows=1)
        case DiamondStyle.Tall:
            draw_tall_diamond(canvas, rect, lines, cs)


def draw_tall_diamond(canvas: Canvas, rect: Rect, lines: list[str], cs: CharacterSet) -> None:
    """Diagonal outline that narrows to a two-glyph apex at top and bottom."""
    d = DiagonalChars.for_charset(cs)
    x, y, w, h = rect.x, rect.y, rect.width, rect.height
    half = w // 2
    apex = x + half - 1
    widest = max((h - 1) // 2, 1)
    label_top = y + max(0, h - len(lines)) // 2
    label_rows = range(label_top, label_top + len(lines))

    canvas.fill(rect)
    for r in range(h):
        row = y + r
        edge_dist = min(r, h - 1 - r)
        upper = r < h - 1 - r
        if edge_dist == 0:
            pair = d.top if upper else d.bottom
            canvas.set(apex, row, pair[0])
            canvas.set(apex + 1, row, pair[1])
            continue
        if edge_dist == widest and h % 2 == 1:
            canvas.set(x, row, d.left_tip)
            canvas.set(x + w - 1, row, d.right_tip)
            continue
        inset = (widest - edge_dist) * (half - 1) // widest
        if row in label_rows:
            inset = min(inset, 1)
        left, right = (d.upper_left, d.upper_right) if upper else (d.lower_left, d.lower_right)
        canvas.set(x + inset, row, left)
        canvas.set(x + w - 1 - inset, row, right)

    draw_label(canvas, rect, lines)


# ─── Round and slanted outlines ──────────────────────────────────────────────


def draw_circle(canvas: Canvas, rect: Rect, lines: list[str], cs: CharacterSet) -> None:
    """Parenthesis sides; a single-row circle is just ``(label)``."""
    horizontal = BoxChars.rectangle(cs).horizontal
    canvas.fill(rect)
    left, right = rect.x, rect.right() - 1
    for row in range(rect.y, rect.bottom()):
        canvas.set(left, row, "(")
        canvas.set(right, row, ")")
    if rect.height >= 3:
        canvas.hline(rect.y, left + 1, right - 1, horizontal)
        canvas.hline(rect.bottom() - 1, left + 1, right - 1, horizontal)
    draw_label(canvas, rect, lines)


def draw_hexagon(canvas: Canvas, rect: Rect, lines: list[str], cs: CharacterSet) -> None:
    d = DiagonalChars.for_charset(cs)
    bc = BoxChars.rectangle(cs)
    left, right = rect.x, rect.right() - 1
    top, bottom = rect.y, rect.bottom() - 1
    mid = rect.center_y()

    canvas.fill(rect)
    canvas.hline(top, left + 1, right - 1, bc.horizontal)
    canvas.hline(bottom, left + 1, right - 1, bc.horizontal)
    canvas.set(left, top, d.upper_left)
    canvas.set(right, top, d.upper_right)
    canvas.set(left, bottom, d.lower_left)
    canvas.set(right, bottom, d.lower_right)
    for row in range(top + 1, bottom):
        if row == mid:
            canvas.set(left, row, d.left_tip)
            canvas.set(right, row, d.right_tip)
        else:
            canvas.set(left, row, bc.vertical)
            canvas.set(right, row, bc.vertical)
    draw_label(canvas, rect, lines)


def _slant_offset(r: int, h: int) -> int:
    """Horizontal shift (0..2) of row ``r`` in a slanted shape, 2 at the top."""
    if h <= 1:
        return 0
    return ((h - 1 - r) * 2 + (h - 1) // 2) // (h - 1)


def draw_parallelogram(canvas: Canvas, rect: Rect, lines: list[str], cs: CharacterSet) -> None:
    d = DiagonalChars.for_charset(cs)
    bc = BoxChars.rectangle(cs)
    canvas.fill(rect)
    h = rect.height
    for r in range(h):
        row = rect.y + r
        off = _slant_offset(r, h)
        left = rect.x + off
        right = rect.right() - 3 + off
        canvas.set(left, row, d.upper_left)
        canvas.set(right, row, d.lower_right)
        if r in (0, h - 1):
            canvas.hline(row, left + 1, right - 1, bc.horizontal)
    draw_label(canvas, rect, lines)


def draw_trapezoid(canvas: Canvas, rect: Rect, lines: list[str], cs: CharacterSet) -> None:
    d = DiagonalChars.for_charset(cs)
    bc = BoxChars.rectangle(cs)
    canvas.fill(rect)
    h = rect.height
    for r in range(h):
        row = rect.y + r
        off = _slant_offset(r, h)
        left = rect.x + off
        right = rect.right() - 1 - off
        canvas.set(left, row, d.upper_left)
        canvas.set(right, row, d.upper_right)
        if r in (0, h - 1):
            canvas.hline(row, left + 1, right - 1, bc.horizontal)
    draw_label(canvas, rect, lines)


def draw_asymmetric(canvas: Canvas, rect: Rect, lines: list[str], cs: CharacterSet) -> None:
    """Flag shape: notched left side, square right side."""
    d = DiagonalChars.for_charset(cs)
    bc = BoxChars.rectangle(cs)
    left, right = rect.x, rect.right() - 1
    top, bottom = rect.y, rect.bottom() - 1
    mid = rect.center_y()

    canvas.fill(rect)
    canvas.hline(top, left + 1, right - 1, bc.horizontal)
    canvas.hline(bottom, left + 1, right - 1, bc.horizontal)
    canvas.set(right, top, bc.top_right)
    canvas.set(right, bottom, bc.bottom_right)
    canvas.vline(right, top + 1, bottom - 1, bc.vertical)
    canvas.set(left, top, d.upper_right)
    canvas.set(left, bottom, d.lower_right)
    for row in range(top + 1, bottom):
        if row == mid:
            canvas.set(left + 1, row, d.right_tip)
        else:
            canvas.set(left + 1, row, d.upper_right if row < mid else d.lower_right)
    draw_label(canvas, rect, lines)
