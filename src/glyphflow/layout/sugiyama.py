"""Sugiyama-style layered graph layout engine.

Phases:
  1. Rank assignment (Kahn topological order)
  2. Virtual node insertion (one lane cell per skipped rank)
  3. Crossing minimisation (barycenter sweeps, containers kept contiguous)
  4. Node sizing (wrapped labels + shape padding)
  5. Coordinate assignment (per flow direction)
  6. Container boxes, spread apart until they clear every outsider
  7. Edge routing (orthogonal, split/merge junctions)
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

import networkx as nx

from glyphflow.config import LayoutConfig
from glyphflow.ir.graph import EdgeRecord, FlowGraph
from glyphflow.ir.model import Container, Node
from glyphflow.layout.ordering import cross_count, order_layers_barycenter
from glyphflow.layout.ranking import assign_ranks, group_layers
from glyphflow.layout.routing import EdgeRouter
from glyphflow.layout.types import ContainerBox, LayoutResult, PositionedNode
from glyphflow.text import display_width, wrap_label
from glyphflow.types import DiamondStyle, Direction, EdgeType, NodeShape

logger = logging.getLogger(__name__)

# ─── Geometry constants ──────────────────────────────────────────────────────

CONTAINER_MARGIN_X: int = 2
CONTAINER_MARGIN_Y: int = 1
CONTAINER_PASSES: int = 16
TERMINAL_WIDTH: int = 3
TERMINAL_HEIGHT: int = 1
VIRTUAL_PREFIX = "__virtual_"


# ─── Node sizing ─────────────────────────────────────────────────────────────


@dataclass
class NodeSize:
    lines: list[str]
    width: int
    height: int


VIRTUAL_SIZE = NodeSize(lines=[], width=1, height=1)


def shape_padding(shape: NodeShape, diamond_style: DiamondStyle) -> tuple[int, int]:
    """Extra (columns, rows) a shape needs around its label."""
    match shape:
        case NodeShape.Rectangle | NodeShape.RoundedRect | NodeShape.Subroutine | NodeShape.Circle:
            return (4, 0)
        case NodeShape.Hexagon | NodeShape.Asymmetric | NodeShape.Parallelogram | NodeShape.Trapezoid:
            return (6, 0)
        case NodeShape.Cylinder:
            return (6, 2)
        case NodeShape.Diamond:
            return (6, 2) if diamond_style == DiamondStyle.Tall else (4, 0)


def measure_node(node: Node, config: LayoutConfig) -> NodeSize:
    """Label lines and box size for ``node``."""
    if node.terminal is not None:
        return NodeSize(lines=[""], width=TERMINAL_WIDTH, height=TERMINAL_HEIGHT)

    pad_w, pad_h = shape_padding(node.shape, config.diamond_style)

    if node.shape == NodeShape.Diamond and config.diamond_style == DiamondStyle.Inline:
        label = " ".join(node.label.split())
        return NodeSize(lines=[label], width=max(display_width(label) + pad_w, config.min_node_width), height=1)

    lines = wrap_label(node.label, config.max_label_width)
    label_w = max(display_width(line) for line in lines)
    width = max(label_w + pad_w, config.min_node_width)
    height = max(3 + pad_h + len(lines) - 1, config.min_node_height)
    return NodeSize(lines=lines, width=width, height=height)


# ─── Virtual Node Insertion ──────────────────────────────────────────────────


@dataclass
class VirtualChain:
    """The lane cells reserved for one edge, listed from its source end."""

    edge_index: int
    node_ids: list[str]


def insert_virtual_nodes(
    graph: FlowGraph,
    layers: list[list[str]],
    layer_of: dict[str, int],
) -> tuple[FlowGraph, list[VirtualChain]]:
    """Split every edge spanning more than one layer into unit hops.

    Each skipped layer gets a virtual node appended to it (``layers`` and
    ``layer_of`` are updated in place), so the ordering pass gives the edge
    a lane of its own. Chains always run from the lower layer to the higher
    one; back edges list their lane cells in reverse.

    Returns the graph the ordering pass should see and the chains found.
    """
    digraph: nx.MultiDiGraph = nx.MultiDiGraph()
    digraph.add_nodes_from(graph.digraph.nodes(data=True))
    chains: list[VirtualChain] = []

    for index, edge in enumerate(graph.edges()):
        record = EdgeRecord(index=index, edge=edge)
        upper, lower = edge.from_id, edge.to_id
        if layer_of[upper] > layer_of[lower]:
            upper, lower = lower, upper
        if edge.kind == EdgeType.Invisible or layer_of[lower] - layer_of[upper] <= 1:
            digraph.add_edge(edge.from_id, edge.to_id, data=record)
            continue

        ids: list[str] = []
        prev = upper
        for layer in range(layer_of[upper] + 1, layer_of[lower]):
            virtual_id = f"{VIRTUAL_PREFIX}{index}_{layer}"
            digraph.add_node(virtual_id, data=Node.bare(virtual_id))
            layers[layer].append(virtual_id)
            layer_of[virtual_id] = layer
            digraph.add_edge(prev, virtual_id, data=record)
            prev = virtual_id
            ids.append(virtual_id)
        digraph.add_edge(prev, lower, data=record)

        if upper != edge.from_id:
            ids.reverse()
        chains.append(VirtualChain(edge_index=index, node_ids=ids))

    if chains:
        logger.debug("inserted %d virtual nodes for %d long edges", sum(len(c.node_ids) for c in chains), len(chains))
    return FlowGraph(digraph=digraph, direction=graph.direction, containers=graph.containers), chains


# ─── Coordinate assignment ───────────────────────────────────────────────────


def assign_coordinates(
    layers: list[list[str]],
    sizes: dict[str, NodeSize],
    direction: Direction,
    config: LayoutConfig,
    gaps: list[int] | None = None,
    extra: dict[str, int] | None = None,
) -> dict[str, PositionedNode]:
    """Place every node of ``layers`` on the grid.

    ``gaps[i]`` overrides the separation between rank ``i`` and ``i + 1``
    and defaults to ``config.rank_sep``. ``extra[node_id]`` adds space
    before that node within its rank, on top of ``config.node_sep``.
    """
    if gaps is None:
        gaps = [config.rank_sep] * max(len(layers) - 1, 0)
    extra = extra or {}
    if direction.is_vertical():
        return _assign_vertical(layers, sizes, direction, config, gaps, extra)
    return _assign_horizontal(layers, sizes, direction, config, gaps, extra)


def _rank_sequence(count: int, direction: Direction) -> list[int]:
    seq = list(range(count))
    if direction.is_reversed():
        seq.reverse()
    return seq


def _gap_between(gaps: list[int], a: int, b: int, default: int) -> int:
    lo = min(a, b)
    return gaps[lo] if lo < len(gaps) else default


def _layer_length(layer: list[str], lengths: list[int], config: LayoutConfig, extra: dict[str, int]) -> int:
    return sum(lengths) + config.node_sep * max(len(layer) - 1, 0) + sum(extra.get(n, 0) for n in layer)


def _assign_vertical(
    layers: list[list[str]],
    sizes: dict[str, NodeSize],
    direction: Direction,
    config: LayoutConfig,
    gaps: list[int],
    extra: dict[str, int],
) -> dict[str, PositionedNode]:
    layer_widths = [_layer_length(layer, [sizes[n].width for n in layer], config, extra) for layer in layers]
    center_x = config.padding + max(layer_widths, default=0) // 2

    placed: dict[str, PositionedNode] = {}
    y = config.padding
    seq = _rank_sequence(len(layers), direction)
    for pos, rank in enumerate(seq):
        layer = layers[rank]
        x = center_x - layer_widths[rank] // 2
        row_height = 0
        for order, node_id in enumerate(layer):
            size = sizes[node_id]
            x += extra.get(node_id, 0)
            placed[node_id] = PositionedNode(
                id=node_id,
                x=x,
                y=y,
                width=size.width,
                height=size.height,
                label_lines=list(size.lines),
                rank=rank,
                order=order,
            )
            x += size.width + config.node_sep
            row_height = max(row_height, size.height)
        if pos + 1 < len(seq):
            y += row_height + _gap_between(gaps, rank, seq[pos + 1], config.rank_sep)
    return placed


def _assign_horizontal(
    layers: list[list[str]],
    sizes: dict[str, NodeSize],
    direction: Direction,
    config: LayoutConfig,
    gaps: list[int],
    extra: dict[str, int],
) -> dict[str, PositionedNode]:
    # A rank forms a column of equal-width boxes.
    layer_widths = [max((sizes[n].width for n in layer), default=0) for layer in layers]
    layer_heights = [_layer_length(layer, [sizes[n].height for n in layer], config, extra) for layer in layers]
    total_max_h = max(layer_heights, default=0)

    placed: dict[str, PositionedNode] = {}
    x = config.padding
    seq = _rank_sequence(len(layers), direction)
    for pos, rank in enumerate(seq):
        layer = layers[rank]
        y = config.padding + (total_max_h - layer_heights[rank]) // 2
        for order, node_id in enumerate(layer):
            size = sizes[node_id]
            y += extra.get(node_id, 0)
            placed[node_id] = PositionedNode(
                id=node_id,
                x=x,
                y=y,
                width=layer_widths[rank],
                height=size.height,
                label_lines=list(size.lines),
                rank=rank,
                order=order,
            )
            y += size.height + config.node_sep
        if pos + 1 < len(seq):
            x += layer_widths[rank] + _gap_between(gaps, rank, seq[pos + 1], config.rank_sep)
    return placed


def label_gaps(graph: FlowGraph, ranks: dict[str, int], layer_count: int, config: LayoutConfig) -> list[int]:
    """Rank separations wide enough for labels on horizontal edge runs.

    A label sits on the last run of its edge, which crosses the gap next
    to the target's rank on the side the edge arrives from.
    """
    gaps = [config.rank_sep] * max(layer_count - 1, 0)
    if graph.direction.is_vertical():
        return gaps
    for edge in graph.edges():
        if not edge.label:
            continue
        src, tgt = ranks[edge.from_id], ranks[edge.to_id]
        if src == tgt:
            continue
        idx = tgt - 1 if tgt > src else tgt
        gaps[idx] = max(gaps[idx], display_width(edge.label) + 4)
    return gaps


# ─── Containers ──────────────────────────────────────────────────────────────


def cluster_members(layers: list[list[str]], containers: list[Container]) -> None:
    """Make each container's members contiguous within every layer, in place.

    A node belongs to the first container that lists it. Its container's
    members are gathered at the position of the first of them in the layer.
    """
    owner: dict[str, int] = {}
    for index, container in enumerate(containers):
        for member in container.members:
            owner.setdefault(member, index)

    for i, layer in enumerate(layers):
        ordered: list[str] = []
        seen: set[int] = set()
        for node_id in layer:
            group = owner.get(node_id)
            if group is None:
                ordered.append(node_id)
            elif group not in seen:
                seen.add(group)
                ordered.extend(n for n in layer if owner.get(n) == group)
        layers[i] = ordered


def place_containers(containers: list[Container], nodes: dict[str, PositionedNode]) -> list[ContainerBox]:
    """Bounding boxes around each container's members, widened for the title."""
    boxes: list[ContainerBox] = []
    for container in containers:
        members = [nodes[m] for m in container.members if m in nodes]
        if not members:
            logger.debug("container '%s' has no placed members, skipped", container.title)
            continue
        x0 = min(n.x for n in members) - CONTAINER_MARGIN_X
        y0 = min(n.y for n in members) - CONTAINER_MARGIN_Y
        x1 = max(n.right() for n in members) + CONTAINER_MARGIN_X
        y1 = max(n.bottom() for n in members) + CONTAINER_MARGIN_Y
        width = max(x1 - x0, display_width(container.title) + 4)
        boxes.append(
            ContainerBox(
                title=container.title,
                members=[n.id for n in members],
                x=x0,
                y=y0,
                width=width,
                height=y1 - y0,
            )
        )
    return boxes


@dataclass
class _Extent:
    """Half-open (cross, flow) intervals of a box and the layers it spans."""

    ids: list[str]
    cross: tuple[int, int]
    flow: tuple[int, int]
    first_layer: int
    last_layer: int


def _extent(
    ids: list[str], x: int, y: int, width: int, height: int, direction: Direction, layer_of: dict[str, int]
) -> _Extent:
    layers = [layer_of[i] for i in ids]
    if direction.is_vertical():
        cross, flow = (x, x + width), (y, y + height)
    else:
        cross, flow = (y, y + height), (x, x + width)
    return _Extent(ids=ids, cross=cross, flow=flow, first_layer=min(layers), last_layer=max(layers))


def _touches(a: tuple[int, int], b: tuple[int, int]) -> bool:
    """Intervals overlap or leave no blank cell between them."""
    return a[0] <= b[1] and b[0] <= a[1]


def _lead(ids: list[str], layer: int, nodes: dict[str, PositionedNode], layer_of: dict[str, int]) -> str | None:
    """The node of ``ids`` that comes first along the cross axis in ``layer``."""
    in_layer = [nodes[i] for i in ids if layer_of[i] == layer]
    if not in_layer:
        return None
    return min(in_layer, key=lambda n: n.order).id


def _raise(table: dict, key, need: int) -> None:
    if need > table.get(key, 0):
        table[key] = need


def container_clearance(
    boxes: list[ContainerBox],
    nodes: dict[str, PositionedNode],
    layer_of: dict[str, int],
    direction: Direction,
) -> tuple[dict[str, int], dict[int, int]]:
    """Space needed so no container box touches a node or box outside it.

    Returns extra cross-axis space to insert before given nodes, and extra
    separation to add to given rank gaps. Both are empty once every box is
    clear. Nested containers (one member set inside the other) never
    conflict with each other.
    """
    push: dict[str, int] = {}
    widen: dict[int, int] = {}

    outsiders = [_extent([n.id], n.x, n.y, n.width, n.height, direction, layer_of) for n in nodes.values()]
    extents = [_extent(b.members, b.x, b.y, b.width, b.height, direction, layer_of) for b in boxes]

    for box, ext in zip(boxes, extents):
        members = set(box.members)
        others = [o for o in outsiders if o.ids[0] not in members]
        for other_box, other in zip(boxes, extents):
            other_members = set(other_box.members)
            if other_box is not box and not (members <= other_members or other_members <= members):
                others.append(other)

        for other in others:
            if not (_touches(ext.cross, other.cross) and _touches(ext.flow, other.flow)):
                continue
            shared = range(max(ext.first_layer, other.first_layer), min(ext.last_layer, other.last_layer) + 1)
            if shared:
                # Side by side within a rank: push whichever comes second along the cross axis.
                after = sum(other.cross) >= sum(ext.cross)
                for layer in shared:
                    pushed, past = (other, ext) if after else (ext, other)
                    lead = _lead(pushed.ids, layer, nodes, layer_of)
                    if lead is None:
                        pushed, past = past, pushed
                        lead = _lead(pushed.ids, layer, nodes, layer_of)
                    if lead is not None:
                        _raise(push, lead, past.cross[1] + 1 - pushed.cross[0])
            else:
                # Different ranks: open the gap between them.
                if other.flow[0] >= ext.flow[0]:
                    need = ext.flow[1] + 1 - other.flow[0]
                else:
                    need = other.flow[1] + 1 - ext.flow[0]
                gap = ext.last_layer if other.first_layer > ext.last_layer else ext.first_layer - 1
                _raise(widen, gap, need)

    return push, widen


def _shift(nodes: dict[str, PositionedNode], dx: int, dy: int) -> None:
    for n in nodes.values():
        n.x += dx
        n.y += dy


# ─── SugiyamaLayout Engine ───────────────────────────────────────────────────


class SugiyamaLayout:
    """Sugiyama layered layout engine."""

    def __init__(self, config: LayoutConfig | None = None) -> None:
        self.config = config or LayoutConfig()

    def layout(self, graph: FlowGraph) -> LayoutResult:
        config = self.config
        if graph.node_count() == 0:
            logger.debug("empty graph, returning empty layout")
            return LayoutResult(nodes=[], edges=[], direction=graph.direction)

        ranks = assign_ranks(graph)
        layers = group_layers(ranks)
        layer_of = {node_id: i for i, layer in enumerate(layers) for node_id in layer}
        gaps = label_gaps(graph, layer_of, len(layers), config)

        ordering_graph, chains = insert_virtual_nodes(graph, layers, layer_of)
        crossings = order_layers_barycenter(ordering_graph, layers, config.ordering_iterations)
        if graph.containers:
            cluster_members(layers, graph.containers)
            crossings = cross_count(layers, ordering_graph)

        sizes = {node_id: measure_node(graph.node(node_id), config) for node_id in graph.node_ids()}
        logger.debug("node sizes: %s", {k: (v.width, v.height) for k, v in sizes.items()})
        for chain in chains:
            for virtual_id in chain.node_ids:
                sizes[virtual_id] = VIRTUAL_SIZE

        placed, containers = self._place(graph, layers, layer_of, sizes, gaps)
        for node_id in graph.node_ids():
            node = graph.node(node_id)
            placed[node_id].shape = node.shape
            placed[node_id].terminal = node.terminal

        nodes = [placed[node_id] for node_id in graph.node_ids()]
        lanes = {chain.edge_index: [placed[v] for v in chain.node_ids] for chain in chains}
        edges = EdgeRouter(nodes, graph.direction, lanes).route(graph.edges())

        width = max([n.right() for n in nodes] + [c.x + c.width for c in containers]) + config.padding
        height = max([n.bottom() for n in nodes] + [c.y + c.height for c in containers]) + config.padding

        logger.info(
            "layout completed: %d nodes, %d edges, %d ranks, %d crossings, %dx%d",
            len(nodes),
            len(edges),
            len(layers),
            crossings,
            width,
            height,
        )
        return LayoutResult(
            nodes=nodes,
            edges=edges,
            direction=graph.direction,
            containers=containers,
            width=width,
            height=height,
        )

    def _place(
        self,
        graph: FlowGraph,
        layers: list[list[str]],
        layer_of: dict[str, int],
        sizes: dict[str, NodeSize],
        gaps: list[int],
    ) -> tuple[dict[str, PositionedNode], list[ContainerBox]]:
        """Assign coordinates, spreading nodes until container boxes are clear."""
        config = self.config
        extra: dict[str, int] = {}
        placed = assign_coordinates(layers, sizes, graph.direction, config, gaps, extra)
        if not graph.containers:
            return placed, []

        for attempt in range(CONTAINER_PASSES):
            real = {node_id: placed[node_id] for node_id in graph.node_ids()}
            containers = place_containers(graph.containers, real)
            push, widen = container_clearance(containers, real, layer_of, graph.direction)
            if not push and not widen:
                logger.debug("containers clear after %d passes", attempt)
                break
            for node_id, need in push.items():
                extra[node_id] = extra.get(node_id, 0) + need
            for gap, need in widen.items():
                gaps[gap] += need
            placed = assign_coordinates(layers, sizes, graph.direction, config, gaps, extra)
        else:
            logger.warning("container boxes still overlap after %d passes", CONTAINER_PASSES)

        real = {node_id: placed[node_id] for node_id in graph.node_ids()}
        containers = place_containers(graph.containers, real)
        if not containers:
            return placed, []
        dx = max(0, -min(c.x for c in containers))
        dy = max(0, -min(c.y for c in containers))
        if dx or dy:
            _shift(placed, dx, dy)
            containers = place_containers(graph.containers, real)
        return placed, containers
