"""Edge painting: line runs, bends, shared junctions, arrowheads and labels."""

from __future__ import annotations

import logging

from glyphflow.layout.types import Point, PositionedEdge
from glyphflow.renderers.canvas import Canvas
from glyphflow.renderers.charset import Arms, LineChars, is_arrow

logger = logging.getLogger(__name__)


def _step(a: Point, b: Point) -> tuple[int, int]:
    """Unit step from ``a`` toward ``b`` along a straight segment."""
    return ((b.x > a.x) - (b.x < a.x), (b.y > a.y) - (b.y < a.y))


def _segment_cells(a: Point, b: Point) -> list[Point]:
    dx, dy = _step(a, b)
    cells = [a]
    p = a
    while p != b:
        p = Point(p.x + dx, p.y + dy)
        cells.append(p)
    return cells


def arrow_cell(edge: PositionedEdge) -> tuple[Point, tuple[int, int]] | None:
    """Cell just outside the target border and the travel step into it."""
    wp = edge.waypoints
    if len(wp) < 2:
        return None
    end = wp[-1]
    dx, dy = _step(wp[-2], end)
    return Point(end.x - dx, end.y - dy), (dx, dy)


def arrow_glyph(lc: LineChars, dx: int, dy: int) -> str:
    if dy > 0:
        return lc.arrow_down
    if dy < 0:
        return lc.arrow_up
    if dx < 0:
        return lc.arrow_left
    return lc.arrow_right


class EdgeRenderer:
    """Paints routed edges onto a canvas.

    Runs follow the overwrite rule: arrowheads, corners and junctions
    already on the canvas are kept, blanks and non-line glyphs are replaced,
    a perpendicular line becomes a T at a run endpoint and a cross inside
    the run, and a parallel line is replaced.
    """

    def __init__(self, canvas: Canvas) -> None:
        self.canvas = canvas
        self.charset = canvas.charset

    # ── Runs ──

    def _overwrite(self, col: int, row: int, glyph: str, run: Arms, crossing: str) -> None:
        existing = self.canvas.get(col, row)
        if is_arrow(existing):
            return
        arms = Arms.from_char(existing)
        if arms is None:
            self.canvas.set(col, row, glyph)
            return
        if crossing == "vertical" and arms.is_vertical() or crossing == "horizontal" and arms.is_horizontal():
            self.canvas.set(col, row, arms.merge(run).to_char(self.charset))
        elif arms.is_straight():
            self.canvas.set(col, row, glyph)

    def draw_horizontal(self, y: int, x1: int, x2: int, glyph: str) -> None:
        lo, hi = (x1, x2) if x1 <= x2 else (x2, x1)
        for col in range(lo, hi + 1):
            run = Arms(left=col > lo or lo == hi, right=col < hi or lo == hi)
            self._overwrite(col, y, glyph, run, "vertical")

    def draw_vertical(self, x: int, y1: int, y2: int, glyph: str) -> None:
        lo, hi = (y1, y2) if y1 <= y2 else (y2, y1)
        for row in range(lo, hi + 1):
            run = Arms(up=row > lo or lo == hi, down=row < hi or lo == hi)
            self._overwrite(x, row, glyph, run, "horizontal")

    # ── Single edges ──

    def draw_edge(self, edge: PositionedEdge) -> None:
        """Paint a one-to-one route with its arrowhead."""
        wp = edge.waypoints
        if len(wp) < 2:
            return
        lc = LineChars.for_edge(self.charset, edge.kind)

        bends = wp[1:-1]
        under = {p: self.canvas.get(p.x, p.y) for p in bends}

        for a, b in zip(wp, wp[1:]):
            if a.y == b.y:
                self.draw_horizontal(a.y, a.x, b.x, lc.horizontal)
            else:
                self.draw_vertical(a.x, a.y, b.y, lc.vertical)

        for prev, bend, nxt in zip(wp, bends, wp[2:]):
            arms = Arms.toward(*_step(bend, prev)).merge(Arms.toward(*_step(bend, nxt)))
            below = Arms.from_char(under[bend])
            if below is not None:
                arms = arms.merge(below)
            self.canvas.set(bend.x, bend.y, arms.to_char(self.charset))

        if edge.kind.has_arrow():
            self._draw_arrow(edge, lc)

    def _draw_arrow(self, edge: PositionedEdge, lc: LineChars) -> None:
        found = arrow_cell(edge)
        if found is None:
            return
        cell, (dx, dy) = found
        self.canvas.set(cell.x, cell.y, arrow_glyph(lc, dx, dy))

    # ── Junction groups ──

    def draw_group(self, edges: list[PositionedEdge]) -> None:
        """Paint a split or merge group so shared cells are drawn once.

        The arms of every route in the group are collected per cell first,
        so bars and junctions come out as one connected figure.
        """
        cells: dict[Point, Arms] = {}
        styles: dict[Point, LineChars] = {}
        for edge in edges:
            lc = LineChars.for_edge(self.charset, edge.kind)
            for a, b in zip(edge.waypoints, edge.waypoints[1:]):
                seg = _segment_cells(a, b)
                for i, p in enumerate(seg):
                    arms = Arms()
                    if i > 0:
                        arms = arms.merge(Arms.toward(*_step(p, seg[i - 1])))
                    if i + 1 < len(seg):
                        arms = arms.merge(Arms.toward(*_step(p, seg[i + 1])))
                    cells[p] = cells[p].merge(arms) if p in cells else arms
                    styles.setdefault(p, lc)

        for p in sorted(cells, key=lambda c: (c.y, c.x)):
            existing = self.canvas.get(p.x, p.y)
            if is_arrow(existing):
                continue
            arms = cells[p]
            below = Arms.from_char(existing)
            merged = arms.merge(below) if below is not None else arms
            if merged.is_horizontal():
                glyph = styles[p].horizontal
            elif merged.is_vertical():
                glyph = styles[p].vertical
            else:
                glyph = merged.to_char(self.charset)
            self.canvas.set(p.x, p.y, glyph)

        drawn: set[Point] = set()
        for edge in edges:
            if not edge.kind.has_arrow():
                continue
            found = arrow_cell(edge)
            if found is None or found[0] in drawn:
                continue
            cell, (dx, dy) = found
            drawn.add(cell)
            lc = LineChars.for_edge(self.charset, edge.kind)
            self.canvas.set(cell.x, cell.y, arrow_glyph(lc, dx, dy))

    # ── Everything ──

    def draw_lines(self, edges: list[PositionedEdge]) -> None:
        """Paint every edge; each split or merge group is painted once."""
        done: set[tuple[str, str, Point]] = set()
        for edge in edges:
            if len(edge.waypoints) < 2:
                continue
            if edge.is_split():
                key = ("split", edge.from_id, edge.junction)
                if key not in done:
                    done.add(key)
                    self.draw_group([e for e in edges if e.junction == edge.junction and e.from_id == edge.from_id])
            elif edge.is_merge():
                key = ("merge", edge.to_id, edge.merge_junction)
                if key not in done:
                    done.add(key)
                    self.draw_group(
                        [e for e in edges if e.merge_junction == edge.merge_junction and e.to_id == edge.to_id]
                    )
            else:
                self.draw_edge(edge)
        logger.debug("painted %d edges, %d junction groups", len(edges), len(done))

    def draw_labels(self, edges: list[PositionedEdge]) -> None:
        for edge in edges:
            if edge.label and edge.label_at is not None:
                self.canvas.write_str(edge.label_at.x, edge.label_at.y, edge.label)
