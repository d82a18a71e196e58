"""Tests for the character canvas and glyph tables."""

import pytest

from glyphflow.renderers.canvas import WIDE_TAIL, Canvas, Rect
from glyphflow.renderers.charset import Arms, BoxChars, LineChars, terminal_glyph
from glyphflow.types import CharacterSet, EdgeType, TerminalKind


class TestCanvas:
    def test_starts_blank(self):
        canvas = Canvas(4, 2)
        assert canvas.get(3, 1) == " "
        assert canvas.to_string() == ""

    def test_grows_on_write(self):
        canvas = Canvas()
        canvas.set(5, 3, "x")
        assert (canvas.width, canvas.height) == (6, 4)
        assert canvas.get(5, 3) == "x"

    def test_negative_coordinates_ignored(self):
        canvas = Canvas(2, 2)
        canvas.set(-1, 0, "x")
        canvas.set(0, -1, "x")
        assert canvas.to_string() == ""
        assert (canvas.width, canvas.height) == (2, 2)

    def test_out_of_bounds_get_is_blank(self):
        assert Canvas(1, 1).get(10, 10) == " "

    def test_to_string_trims_and_dedents(self):
        canvas = Canvas(8, 5)
        canvas.set(2, 1, "x")
        canvas.set(4, 2, "y")
        assert canvas.to_string() == "x\n  y"

    def test_to_string_keeps_inner_blank_rows(self):
        canvas = Canvas()
        canvas.set(0, 0, "a")
        canvas.set(0, 2, "b")
        assert canvas.to_string() == "a\n\nb"

    def test_draw_box(self):
        canvas = Canvas()
        canvas.draw_box(Rect(0, 0, 4, 3), BoxChars.unicode())
        assert canvas.to_string() == "┌──┐\n│  │\n└──┘"

    def test_draw_box_too_small(self):
        canvas = Canvas()
        canvas.draw_box(Rect(0, 0, 1, 1), BoxChars.unicode())
        assert canvas.to_string() == ""


class TestWideCharacters:
    def test_wide_glyph_takes_two_cells(self):
        canvas = Canvas()
        canvas.write_str(0, 0, "日本")
        assert canvas.get(0, 0) == "日"
        assert canvas.get(1, 0) == WIDE_TAIL
        assert canvas.get(2, 0) == "本"
        assert canvas.to_string() == "日本"

    def test_overwriting_tail_blanks_head(self):
        canvas = Canvas()
        canvas.write_str(0, 0, "日")
        canvas.set(1, 0, "x")
        assert canvas.get(0, 0) == " "
        assert canvas.get(1, 0) == "x"

    def test_overwriting_head_blanks_tail(self):
        canvas = Canvas()
        canvas.write_str(0, 0, "日")
        canvas.set(0, 0, "x")
        assert canvas.to_string() == "x"

    def test_control_characters_written_as_spaces(self):
        canvas = Canvas()
        canvas.write_str(0, 0, "a\nb\tc")
        assert canvas.to_string() == "a b c"
        assert canvas.height == 1

    def test_combining_mark_joins_previous_cell(self):
        canvas = Canvas()
        canvas.write_str(0, 0, "e\u0301x")
        assert canvas.get(0, 0) == "e\u0301"
        assert canvas.get(1, 0) == "x"


class TestArms:
    @pytest.mark.parametrize("glyph", ["┌", "┐", "└", "┘", "├", "┤", "┬", "┴", "┼", "─", "│"])
    def test_round_trips_unicode(self, glyph):
        assert Arms.from_char(glyph).to_char(CharacterSet.Unicode) == glyph

    def test_unknown_glyph(self):
        assert Arms.from_char("A") is None

    def test_merge(self):
        merged = Arms.from_char("─").merge(Arms.from_char("│"))
        assert (merged.up, merged.down, merged.left, merged.right) == (True, True, True, True)
        assert merged.to_char(CharacterSet.Unicode) == "┼"

    def test_toward(self):
        assert Arms.toward(0, -1) == Arms(up=True)
        assert Arms.toward(1, 0) == Arms(right=True)

    def test_ascii_junctions_are_plus(self):
        assert Arms(up=True, right=True).to_char(CharacterSet.Ascii) == "+"
        assert Arms(left=True, right=True).to_char(CharacterSet.Ascii) == "-"

    def test_styled_lines_have_arms(self):
        assert Arms.from_char("┆").is_vertical()
        assert Arms.from_char("━").is_horizontal()
        assert Arms.from_char("=").is_horizontal()
        assert Arms.from_char(":").is_vertical()


class TestGlyphTables:
    def test_rounded_corners(self):
        bc = BoxChars.rounded(CharacterSet.Unicode)
        assert (bc.top_left, bc.top_right, bc.bottom_left, bc.bottom_right) == ("╭", "╮", "╰", "╯")

    def test_double_border(self):
        assert BoxChars.double(CharacterSet.Unicode).top_left == "╔"
        assert BoxChars.double(CharacterSet.Ascii).horizontal == "="

    def test_unicode_math_arrows(self):
        lc = LineChars.for_charset(CharacterSet.UnicodeMath)
        assert (lc.arrow_right, lc.arrow_left, lc.arrow_down, lc.arrow_up) == ("→", "←", "↓", "↑")

    @pytest.mark.parametrize(
        "cs, kind, horizontal, vertical",
        [
            (CharacterSet.Unicode, EdgeType.Arrow, "─", "│"),
            (CharacterSet.Unicode, EdgeType.ThickArrow, "━", "┃"),
            (CharacterSet.Unicode, EdgeType.DottedLine, "┄", "┆"),
            (CharacterSet.UnicodeMath, EdgeType.DottedArrow, "┈", "┊"),
            (CharacterSet.Ascii, EdgeType.ThickLine, "=", "|"),
            (CharacterSet.Ascii, EdgeType.DottedArrow, ".", ":"),
        ],
    )
    def test_edge_styles(self, cs, kind, horizontal, vertical):
        lc = LineChars.for_edge(cs, kind)
        assert (lc.horizontal, lc.vertical) == (horizontal, vertical)

    def test_terminal_glyphs(self):
        assert terminal_glyph(CharacterSet.Unicode, TerminalKind.Start) == "●"
        assert terminal_glyph(CharacterSet.Compact, TerminalKind.End) == "o"
