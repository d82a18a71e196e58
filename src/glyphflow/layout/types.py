"""Layout types shared by the layout engine and renderers."""

from __future__ import annotations

from dataclasses import dataclass, field

from glyphflow.types import Direction, EdgeType, NodeShape, TerminalKind


@dataclass(frozen=True)
class Point:
    """A 2D point in character coordinates (column, row)."""

    x: int
    y: int


@dataclass
class PositionedNode:
    """A node with its box on the grid (top-left origin, inclusive of border)."""

    id: str
    x: int
    y: int
    width: int
    height: int
    label_lines: list[str] = field(default_factory=list)
    shape: NodeShape = NodeShape.Rectangle
    rank: int = 0
    order: int = 0
    terminal: TerminalKind | None = None

    def right(self) -> int:
        """Column just past the right border."""
        return self.x + self.width

    def bottom(self) -> int:
        """Row just past the bottom border."""
        return self.y + self.height


@dataclass
class PositionedEdge:
    """A routed edge.

    ``waypoints`` run from a cell on the source border to a cell on the
    target border; both end cells are covered when the nodes are painted.
    Edges in a split group share ``junction``; edges in a merge group share
    ``merge_junction``. ``group_index``/``group_size`` place the edge within
    its group, ordered by target (split) or source (merge) position.
    """

    from_id: str
    to_id: str
    kind: EdgeType
    label: str | None
    waypoints: list[Point] = field(default_factory=list)
    junction: Point | None = None
    merge_junction: Point | None = None
    group_index: int = 0
    group_size: int = 1
    label_at: Point | None = None

    def is_split(self) -> bool:
        return self.junction is not None

    def is_merge(self) -> bool:
        return self.merge_junction is not None


@dataclass
class ContainerBox:
    """A titled container enclosing the boxes of its member nodes."""

    title: str
    members: list[str]
    x: int
    y: int
    width: int
    height: int


@dataclass
class LayoutResult:
    """Self-contained layout output, everything renderers need."""

    nodes: list[PositionedNode]
    edges: list[PositionedEdge]
    direction: Direction
    containers: list[ContainerBox] = field(default_factory=list)
    width: int = 0
    height: int = 0

    def is_empty(self) -> bool:
        return not self.nodes
