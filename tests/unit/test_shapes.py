"""Unit tests for node shape painters."""

import pytest

from glyphflow.layout.types import PositionedNode
from glyphflow.renderers.canvas import Canvas, Rect
from glyphflow.renderers.shapes import (
    draw_asymmetric,
    draw_circle,
    draw_cylinder,
    draw_diamond,
    draw_hexagon,
    draw_node,
    draw_parallelogram,
    draw_rectangle,
    draw_rounded,
    draw_subroutine,
    draw_trapezoid,
)
from glyphflow.types import CharacterSet, DiamondStyle, NodeShape, TerminalKind


def _paint(painter, rect: Rect, lines: list[str], cs: CharacterSet = CharacterSet.Unicode, *args) -> str:
    canvas = Canvas(charset=cs)
    painter(canvas, rect, lines, cs, *args)
    return canvas.to_string()


class TestBoxes:
    def test_rectangle_unicode(self):
        assert _paint(draw_rectangle, Rect(0, 0, 6, 3), ["Hi"]) == "┌────┐\n│ Hi │\n└────┘"

    def test_rectangle_ascii(self):
        assert _paint(draw_rectangle, Rect(0, 0, 6, 3), ["Hi"], CharacterSet.Ascii) == "+----+\n| Hi |\n+----+"

    def test_rectangle_compact(self):
        assert _paint(draw_rectangle, Rect(0, 0, 6, 3), ["Hi"], CharacterSet.Compact) == ".----.\n| Hi |\n'----'"

    def test_rounded(self):
        assert _paint(draw_rounded, Rect(0, 0, 6, 3), ["Hi"]) == "╭────╮\n│ Hi │\n╰────╯"

    def test_rounded_ascii_falls_back_to_rectangle(self):
        assert _paint(draw_rounded, Rect(0, 0, 6, 3), ["Hi"], CharacterSet.Ascii) == "+----+\n| Hi |\n+----+"

    def test_subroutine(self):
        expected = "┌┬────┬┐\n││ ab ││\n└┴────┴┘"
        assert _paint(draw_subroutine, Rect(0, 0, 8, 3), ["ab"]) == expected

    def test_cylinder(self):
        expected = "╭──────╮\n├──────┤\n│  db  │\n│      │\n╰──────╯"
        assert _paint(draw_cylinder, Rect(0, 0, 8, 5), ["db"]) == expected

    def test_multiline_label_centred(self):
        out = _paint(draw_rectangle, Rect(0, 0, 9, 4), ["one", "three"])
        assert out.splitlines()[1:3] == ["│  one  │", "│ three │"]

    def test_fill_clears_underlying_cells(self):
        canvas = Canvas(charset=CharacterSet.Unicode)
        canvas.hline(1, 0, 9, "─")
        draw_rectangle(canvas, Rect(2, 0, 6, 3), ["Hi"], CharacterSet.Unicode)
        assert canvas.to_string().splitlines()[1] == "──│ Hi │──"


class TestDiamonds:
    @pytest.mark.parametrize(
        "cs, corners, edge",
        [
            (CharacterSet.Unicode, "◇◇◇◇", "─"),
            (CharacterSet.UnicodeMath, "⋄⋄⋄⋄", "─"),
            (CharacterSet.Ascii, "/\\\\/", "-"),
            (CharacterSet.Compact, "/\\\\/", "-"),
        ],
    )
    def test_box_style_corners(self, cs, corners, edge):
        out = _paint(draw_diamond, Rect(0, 0, 8, 3), ["Yes?"], cs, DiamondStyle.Box).splitlines()
        assert out[0] == corners[0] + edge * 6 + corners[1]
        assert out[2] == corners[2] + edge * 6 + corners[3]
        assert "Yes?" in out[1]

    def test_inline_style(self):
        out = _paint(draw_diamond, Rect(0, 0, 6, 1), ["Hi"], CharacterSet.Unicode, DiamondStyle.Inline)
        assert out == "◇ Hi ◇"

    def test_inline_style_ascii(self):
        out = _paint(draw_diamond, Rect(0, 0, 6, 1), ["Hi"], CharacterSet.Ascii, DiamondStyle.Inline)
        assert out == "< Hi >"

    def test_tall_style_ascii(self):
        out = _paint(draw_diamond, Rect(0, 0, 8, 5), ["ok"], CharacterSet.Ascii, DiamondStyle.Tall)
        assert out.splitlines() == [
            "   /\\",
            " /    \\",
            "<  ok  >",
            " \\    /",
            "   \\/",
        ]

    def test_tall_style_unicode_math(self):
        out = _paint(draw_diamond, Rect(0, 0, 8, 5), ["ok"], CharacterSet.UnicodeMath, DiamondStyle.Tall)
        assert out.splitlines()[0] == "   ⟋⟍"
        assert out.splitlines()[2] == "⟨  ok  ⟩"


class TestOutlines:
    def test_circle(self):
        assert _paint(draw_circle, Rect(0, 0, 7, 3), ["x"], CharacterSet.Ascii) == "(-----)\n(  x  )\n(-----)"

    def test_hexagon(self):
        expected = "/------\\\n<  ab  >\n\\------/"
        assert _paint(draw_hexagon, Rect(0, 0, 8, 3), ["ab"], CharacterSet.Ascii) == expected

    def test_parallelogram(self):
        expected = "  /----/\n / ab /\n/----/"
        assert _paint(draw_parallelogram, Rect(0, 0, 8, 3), ["ab"], CharacterSet.Ascii) == expected

    def test_trapezoid(self):
        expected = "  /--\\\n / ab \\\n/------\\"
        assert _paint(draw_trapezoid, Rect(0, 0, 8, 3), ["ab"], CharacterSet.Ascii) == expected

    def test_asymmetric(self):
        expected = "\\------+\n > ab  |\n/------+"
        assert _paint(draw_asymmetric, Rect(0, 0, 8, 3), ["ab"], CharacterSet.Ascii) == expected


class TestDrawNode:
    def test_dispatches_on_shape(self):
        canvas = Canvas(charset=CharacterSet.Unicode)
        node = PositionedNode(id="A", x=0, y=0, width=6, height=3, label_lines=["Hi"], shape=NodeShape.RoundedRect)
        draw_node(canvas, node)
        assert canvas.get(0, 0) == "╭"

    @pytest.mark.parametrize(
        "cs, kind, expected",
        [
            (CharacterSet.Unicode, TerminalKind.Start, "(●)"),
            (CharacterSet.Unicode, TerminalKind.End, "(◉)"),
            (CharacterSet.Ascii, TerminalKind.Start, "(*)"),
            (CharacterSet.Ascii, TerminalKind.End, "(o)"),
        ],
    )
    def test_terminal(self, cs, kind, expected):
        canvas = Canvas(charset=cs)
        node = PositionedNode(id="s", x=0, y=0, width=3, height=1, shape=NodeShape.Circle, terminal=kind)
        draw_node(canvas, node)
        assert canvas.to_string() == expected

    def test_diamond_style_forwarded(self):
        canvas = Canvas(charset=CharacterSet.Unicode)
        node = PositionedNode(id="D", x=0, y=0, width=8, height=3, label_lines=["Yes?"], shape=NodeShape.Diamond)
        draw_node(canvas, node, DiamondStyle.Box)
        assert canvas.get(0, 0) == canvas.get(7, 2) == "◇"
