"""Orthogonal edge routing on the positioned grid.

Every route is computed in a top-down frame and mapped back to the real
direction afterwards: BottomUp flips rows, LeftRight transposes, RightLeft
transposes and flips. Within the frame a rank occupies a band of rows and
the four rows between two ranks are used as follows::

    rank bottom + 0   L-route turn row
    rank bottom + 1   split junction row
    rank bottom + 2   merge junction row
    rank bottom + 3   arrowhead row (one above the target border)
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from glyphflow.ir.model import Edge
from glyphflow.layout.types import Point, PositionedEdge, PositionedNode
from glyphflow.text import display_width
from glyphflow.types import Direction, EdgeType

logger = logging.getLogger(__name__)

# A flow border this wide has room for a second port right of centre.
WIDE_PORTS = 5


# ─── Top-down frame ──────────────────────────────────────────────────────────


@dataclass
class _Box:
    x: int
    y: int
    w: int
    h: int
    rank: int

    @property
    def cx(self) -> int:
        return self.x + self.w // 2

    @property
    def cy(self) -> int:
        return self.y + self.h // 2

    @property
    def last_row(self) -> int:
        return self.y + self.h - 1

    @property
    def last_col(self) -> int:
        return self.x + self.w - 1


class _Frame:
    """Maps node boxes into the top-down frame and frame points back."""

    def __init__(self, direction: Direction, nodes: list[PositionedNode]) -> None:
        self.direction = direction
        match direction:
            case Direction.BottomUp:
                self.extent = max((n.bottom() - 1 for n in nodes), default=0)
            case Direction.RightLeft:
                self.extent = max((n.right() - 1 for n in nodes), default=0)
            case _:
                self.extent = 0

    def box(self, n: PositionedNode) -> _Box:
        match self.direction:
            case Direction.TopDown:
                return _Box(n.x, n.y, n.width, n.height, n.rank)
            case Direction.BottomUp:
                return _Box(n.x, self.extent - (n.y + n.height - 1), n.width, n.height, n.rank)
            case Direction.LeftRight:
                return _Box(n.y, n.x, n.height, n.width, n.rank)
            case Direction.RightLeft:
                return _Box(n.y, self.extent - (n.x + n.width - 1), n.height, n.width, n.rank)

    def point(self, x: int, y: int) -> Point:
        match self.direction:
            case Direction.TopDown:
                return Point(x, y)
            case Direction.BottomUp:
                return Point(x, self.extent - y)
            case Direction.LeftRight:
                return Point(y, x)
            case Direction.RightLeft:
                return Point(self.extent - y, x)


def _dedupe(points: list[tuple[int, int]]) -> list[tuple[int, int]]:
    out: list[tuple[int, int]] = []
    for p in points:
        if not out or out[-1] != p:
            out.append(p)
    return out


# ─── Router ──────────────────────────────────────────────────────────────────


class EdgeRouter:
    """Computes waypoints, junctions and label anchors for every edge.

    ``lanes`` maps an edge's index to the virtual cells reserved for it in
    the ranks it skips, listed from the source end. Routes pass through the
    centre of each cell instead of cutting across the nodes in between.
    """

    def __init__(
        self,
        nodes: list[PositionedNode],
        direction: Direction,
        lanes: dict[int, list[PositionedNode]] | None = None,
    ) -> None:
        self.direction = direction
        self.frame = _Frame(direction, nodes)
        self.boxes = {n.id: self.frame.box(n) for n in nodes}
        self.lanes = {i: [self.frame.box(n) for n in cells] for i, cells in (lanes or {}).items()}

        self.rank_bottom: dict[int, int] = {}
        self.rank_top: dict[int, int] = {}
        for box in self.boxes.values():
            self.rank_bottom[box.rank] = max(self.rank_bottom.get(box.rank, box.y + box.h), box.y + box.h)
            self.rank_top[box.rank] = min(self.rank_top.get(box.rank, box.y), box.y)

    def route(self, edges: list[Edge]) -> list[PositionedEdge]:
        """Route ``edges``; the result is in the same order as the input."""
        splits = self._split_groups(edges)
        in_split = {i for group in splits.values() for i in group}
        merges = self._merge_groups(edges, in_split)

        routed: dict[int, PositionedEdge] = {}
        for group in splits.values():
            for pos, i in enumerate(group):
                routed[i] = self._route_split(i, edges[i], pos, len(group))
        for group in merges.values():
            my = max(self.rank_bottom[self._last_hop(i, edges[i]).rank] for i in group) + 2
            for pos, i in enumerate(group):
                routed[i] = self._route_merge(i, edges[i], my, pos, len(group))

        result: list[PositionedEdge] = []
        for i, edge in enumerate(edges):
            pe = routed.get(i)
            if pe is None:
                pe = self._route_single(i, edge)
            pe.label_at = self._label_anchor(pe)
            result.append(pe)

        logger.debug(
            "routed %d edges (%d split groups, %d merge groups, %d lanes)",
            len(result),
            len(splits),
            len(merges),
            len(self.lanes),
        )
        return result

    # ── Grouping ──

    def _is_downstream(self, edge: Edge) -> bool:
        return self.boxes[edge.to_id].rank > self.boxes[edge.from_id].rank

    def _routable(self, edge: Edge) -> bool:
        return edge.kind != EdgeType.Invisible and not edge.is_self_loop()

    def _first_hop(self, i: int, edge: Edge) -> _Box:
        lane = self.lanes.get(i)
        return lane[0] if lane else self.boxes[edge.to_id]

    def _last_hop(self, i: int, edge: Edge) -> _Box:
        lane = self.lanes.get(i)
        return lane[-1] if lane else self.boxes[edge.from_id]

    def _split_groups(self, edges: list[Edge]) -> dict[str, list[int]]:
        by_source: dict[str, list[int]] = {}
        for i, edge in enumerate(edges):
            if self._routable(edge) and self._is_downstream(edge):
                by_source.setdefault(edge.from_id, []).append(i)

        groups: dict[str, list[int]] = {}
        for source, members in by_source.items():
            if len(members) >= 2:
                members.sort(key=lambda i: (self._first_hop(i, edges[i]).cx, i))
                groups[source] = members
        return groups

    def _merge_groups(self, edges: list[Edge], in_split: set[int]) -> dict[str, list[int]]:
        by_target: dict[str, list[int]] = {}
        for i, edge in enumerate(edges):
            if i not in in_split and self._routable(edge) and self._is_downstream(edge):
                by_target.setdefault(edge.to_id, []).append(i)

        groups: dict[str, list[int]] = {}
        for target, members in by_target.items():
            if len(members) >= 2:
                members.sort(key=lambda i: (self._last_hop(i, edges[i]).cx, i))
                groups[target] = members
        return groups

    # ── Routes ──

    def _make(self, edge: Edge, points: list[tuple[int, int]]) -> PositionedEdge:
        return PositionedEdge(
            from_id=edge.from_id,
            to_id=edge.to_id,
            kind=edge.kind,
            label=edge.label or None,
            waypoints=[self.frame.point(x, y) for x, y in _dedupe(points)],
        )

    def _descend(self, points: list[tuple[int, int]], start: _Box, hops: list[_Box]) -> int:
        """Run down from ``start`` through ``hops``, turning on each exit line.

        Returns the column the run ends in.
        """
        col, rank = start.cx, start.rank
        for hop in hops:
            if hop.cx != col:
                turn = self.rank_bottom[rank]
                points += [(col, turn), (hop.cx, turn)]
                col = hop.cx
            rank = hop.rank
        return col

    def _route_split(self, i: int, edge: Edge, index: int, size: int) -> PositionedEdge:
        src = self.boxes[edge.from_id]
        tgt = self.boxes[edge.to_id]
        first = self._first_hop(i, edge)
        jy = self.rank_bottom[src.rank] + 1
        points = [(src.cx, src.last_row), (src.cx, jy), (first.cx, jy)]
        self._descend(points, first, self.lanes.get(i, [])[1:] + [tgt])
        points.append((tgt.cx, tgt.y))
        pe = self._make(edge, points)
        pe.junction = self.frame.point(src.cx, jy)
        pe.group_index = index
        pe.group_size = size
        return pe

    def _route_merge(self, i: int, edge: Edge, my: int, index: int, size: int) -> PositionedEdge:
        src = self.boxes[edge.from_id]
        tgt = self.boxes[edge.to_id]
        points = [(src.cx, src.last_row)]
        col = self._descend(points, src, self.lanes.get(i, []))
        points += [(col, my), (tgt.cx, my), (tgt.cx, tgt.y)]
        pe = self._make(edge, points)
        pe.merge_junction = self.frame.point(tgt.cx, my)
        pe.group_index = index
        pe.group_size = size
        return pe

    def _route_single(self, i: int, edge: Edge) -> PositionedEdge:
        if edge.kind == EdgeType.Invisible:
            return self._make(edge, [])

        src = self.boxes[edge.from_id]
        tgt = self.boxes[edge.to_id]

        if edge.is_self_loop():
            return self._make(edge, self._self_loop(src))

        if tgt.rank == src.rank:
            # Side borders; the shorter node's centre row lies within both.
            row = src.cy if src.h <= tgt.h else tgt.cy
            if tgt.x > src.x:
                points = [(src.last_col, row), (tgt.x, row)]
            else:
                points = [(src.x, row), (tgt.last_col, row)]
            return self._make(edge, points)

        if tgt.rank > src.rank:
            points = [(src.cx, src.last_row)]
            self._descend(points, src, self.lanes.get(i, []) + [tgt])
            points.append((tgt.cx, tgt.y))
            return self._make(edge, points)

        return self._make(edge, self._back_route(src, tgt, self.lanes.get(i, [])))

    def _back_route(self, src: _Box, tgt: _Box, lane: list[_Box]) -> list[tuple[int, int]]:
        """Route against the flow, clear of the forward lane.

        A box wide enough for a second port on its flow border uses the cell
        right of centre. A narrower box is left and entered through its side
        border, with the run kept in the gap beside it.
        """
        if src.w >= WIDE_PORTS:
            col = src.cx + 1
            points = [(col, src.y)]
        else:
            col = src.last_col + 1
            points = [(src.last_col, src.cy), (col, src.cy)]

        rank = src.rank
        for hop in lane:
            if hop.cx != col:
                turn = self.rank_top[rank] - 1
                points += [(col, turn), (hop.cx, turn)]
                col = hop.cx
            rank = hop.rank

        tc = tgt.cx + 1 if tgt.w >= WIDE_PORTS else tgt.last_col + 1
        if tc != col:
            turn = self.rank_top[rank] - 1
            points += [(col, turn), (tc, turn)]
        if tgt.w >= WIDE_PORTS:
            points.append((tc, tgt.last_row))
        else:
            points += [(tc, tgt.cy), (tgt.last_col, tgt.cy)]
        return points

    def _self_loop(self, box: _Box) -> list[tuple[int, int]]:
        """A small loop out of and back into the node."""
        if box.w >= WIDE_PORTS:
            out_col = box.last_col - 1
            in_col = out_col - 2
            below = box.last_row + 2
            return [(out_col, box.last_row), (out_col, below), (in_col, below), (in_col, box.last_row)]
        if box.h >= WIDE_PORTS:
            out_row = box.last_row - 1
            in_row = out_row - 2
            lane = box.last_col + 1
            return [(box.last_col, out_row), (lane, out_row), (lane, in_row), (box.last_col, in_row)]
        lane = box.last_col + 1
        below = box.last_row + 1
        return [(box.cx, box.last_row), (box.cx, below), (lane, below), (lane, box.cy), (box.last_col, box.cy)]

    # ── Labels ──

    def _label_anchor(self, pe: PositionedEdge) -> Point | None:
        if not pe.label or len(pe.waypoints) < 2:
            return None
        return label_position(pe, display_width(pe.label))


def label_position(edge: PositionedEdge, width: int) -> Point:
    """Top-left cell for an edge label of ``width`` columns.

    The label sits beside the segment it names: to the right of a vertical
    run (left for branches left of their junction) or above a horizontal
    run (below for branches under their junction). Split arms are labelled
    on their final run, merge arms on their first run.
    """
    wp = edge.waypoints
    if edge.junction is not None:
        p, q = wp[-2], wp[-1]
        anchor: Point | None = edge.junction
    elif edge.merge_junction is not None:
        p, q = wp[0], wp[1]
        anchor = edge.merge_junction
    elif edge.from_id == edge.to_id and len(wp) >= 3:
        p, q = wp[1], wp[2]
        anchor = None
    else:
        p, q = wp[-2], wp[-1]
        anchor = None

    if p.x == q.x:
        row = (p.y + q.y) // 2
        if anchor is not None and p.x < anchor.x:
            return Point(max(0, p.x - 1 - width), row)
        return Point(p.x + 2, row)

    col = max(0, (p.x + q.x) // 2 - width // 2)
    if anchor is not None and p.y > anchor.y:
        return Point(col, p.y + 1)
    return Point(col, max(0, p.y - 1))
