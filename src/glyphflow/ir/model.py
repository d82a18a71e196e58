"""Graph model: the input contract produced by diagram parsers.

These types describe *what* to draw: nodes with shapes and labels, typed
edges, a flow direction, and optional titled containers. They carry no
geometry; the layout engine derives everything else from them.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any

from glyphflow.types import Direction, EdgeType, NodeShape, TerminalKind


@dataclass(frozen=True)
class Node:
    id: str
    label: str
    shape: NodeShape = field(default_factory=NodeShape.default)
    terminal: TerminalKind | None = None

    @classmethod
    def bare(cls, id: str) -> Node:
        """Create a bare node (id = label, default Rectangle shape)."""
        return cls(id=id, label=id, shape=NodeShape.Rectangle)

    @classmethod
    def terminal_state(cls, id: str, kind: TerminalKind) -> Node:
        """Create a ``[*]`` start/end state drawn with the circle renderer."""
        return cls(id=id, label="", shape=NodeShape.Circle, terminal=kind)


@dataclass(frozen=True)
class Edge:
    from_id: str
    to_id: str
    kind: EdgeType = field(default_factory=EdgeType.default)
    label: str | None = None

    def is_self_loop(self) -> bool:
        return self.from_id == self.to_id


@dataclass(frozen=True)
class Container:
    title: str
    members: tuple[str, ...] = ()


@dataclass(frozen=True)
class GraphModel:
    nodes: tuple[Node, ...] = ()
    edges: tuple[Edge, ...] = ()
    direction: Direction = field(default_factory=Direction.default)
    containers: tuple[Container, ...] = ()

    @classmethod
    def build(
        cls,
        nodes: list[Node] | None = None,
        edges: list[Edge] | None = None,
        direction: Direction = Direction.TopDown,
        containers: list[Container] | None = None,
    ) -> GraphModel:
        return cls(
            nodes=tuple(nodes or ()),
            edges=tuple(edges or ()),
            direction=direction,
            containers=tuple(containers or ()),
        )

    def with_direction(self, direction: Direction) -> GraphModel:
        return GraphModel(nodes=self.nodes, edges=self.edges, direction=direction, containers=self.containers)

    def is_empty(self) -> bool:
        return not self.nodes and not self.edges

    @classmethod
    def from_json(cls, text: str) -> GraphModel:
        """Load a model from its JSON form (see :meth:`from_dict`)."""
        try:
            doc = json.loads(text)
        except json.JSONDecodeError as e:
            raise ValueError(f"invalid JSON at line {e.lineno}, column {e.colno}: {e.msg}") from e
        return cls.from_dict(doc)

    @classmethod
    def from_dict(cls, doc: Any) -> GraphModel:
        """Build a model from a plain mapping.

        Expected shape::

            {"direction": "TD",
             "nodes": [{"id": "A", "label": "Start", "shape": "rounded"}],
             "edges": [{"from": "A", "to": "B", "kind": "-->", "label": "yes"}],
             "containers": [{"title": "Group", "members": ["A", "B"]}]}

        Raises:
            ValueError: If the document is malformed.
        """
        if not isinstance(doc, dict):
            raise ValueError("graph document must be a JSON object")

        direction = Direction.parse(str(doc.get("direction", "TD")))

        nodes: list[Node] = []
        seen: set[str] = set()
        for i, raw in enumerate(_list_field(doc, "nodes")):
            node = _parse_node(raw, i)
            if node.id in seen:
                raise ValueError(f"duplicate node id '{node.id}'")
            seen.add(node.id)
            nodes.append(node)

        edges = [_parse_edge(raw, i) for i, raw in enumerate(_list_field(doc, "edges"))]

        containers: list[Container] = []
        for i, raw in enumerate(_list_field(doc, "containers")):
            if not isinstance(raw, dict) or "title" not in raw:
                raise ValueError(f"containers[{i}] must be an object with a 'title'")
            members = raw.get("members", [])
            if not isinstance(members, list):
                raise ValueError(f"containers[{i}].members must be a list")
            containers.append(Container(title=str(raw["title"]), members=tuple(str(m) for m in members)))

        return cls.build(nodes, edges, direction, containers)


def _list_field(doc: dict[str, Any], key: str) -> list[Any]:
    value = doc.get(key, [])
    if not isinstance(value, list):
        raise ValueError(f"'{key}' must be a list")
    return value


def _parse_node(raw: Any, index: int) -> Node:
    if isinstance(raw, str):
        return Node.bare(raw)
    if not isinstance(raw, dict) or "id" not in raw:
        raise ValueError(f"nodes[{index}] must be a string or an object with an 'id'")
    node_id = str(raw["id"])

    terminal = raw.get("terminal")
    if terminal is not None:
        try:
            kind = TerminalKind[str(terminal).capitalize()]
        except KeyError:
            raise ValueError(f"nodes[{index}]: unknown terminal '{terminal}'; use start or end") from None
        return Node.terminal_state(node_id, kind)

    shape_name = str(raw.get("shape", NodeShape.Rectangle.value))
    try:
        shape = NodeShape(shape_name.lower())
    except ValueError:
        raise ValueError(f"nodes[{index}]: unknown shape '{shape_name}'") from None
    return Node(id=node_id, label=str(raw.get("label", node_id)), shape=shape)


def _parse_edge(raw: Any, index: int) -> Edge:
    if not isinstance(raw, dict) or "from" not in raw or "to" not in raw:
        raise ValueError(f"edges[{index}] must be an object with 'from' and 'to'")
    kind_name = str(raw.get("kind", EdgeType.Arrow.value))
    kind = _edge_type_from_name(kind_name)
    if kind is None:
        raise ValueError(f"edges[{index}]: unknown edge kind '{kind_name}'")
    label = raw.get("label")
    return Edge(from_id=str(raw["from"]), to_id=str(raw["to"]), kind=kind, label=None if label is None else str(label))


def _edge_type_from_name(name: str) -> EdgeType | None:
    for et in EdgeType:
        if name == et.value or name.lower() == et.name.lower():
            return et
    return None
