"""Flow graph: wraps the GraphModel in a networkx MultiDiGraph for layout.

This module owns the canonical graph structure used by all downstream
phases (ranking, ordering, coordinates, routing). Node and edge insertion
follows model order, and networkx keeps insertion order for every view we
query, so all iteration here is deterministic.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

import networkx as nx

from glyphflow.ir.model import Container, Edge, GraphModel, Node
from glyphflow.types import Direction

logger = logging.getLogger(__name__)


@dataclass
class EdgeRecord:
    """One model edge plus its position in the model's edge list."""

    index: int
    edge: Edge


class FlowGraph:
    """The graph built from a GraphModel.

    Wraps a networkx MultiDiGraph (parallel edges are kept) and exposes
    helpers for topology queries.
    """

    def __init__(
        self,
        digraph: nx.MultiDiGraph,
        direction: Direction,
        containers: list[Container],
    ) -> None:
        self.digraph = digraph
        self.direction = direction
        self.containers = containers

    @classmethod
    def from_model(cls, model: GraphModel) -> FlowGraph:
        """Build a FlowGraph, creating bare nodes for undeclared edge endpoints."""
        digraph: nx.MultiDiGraph = nx.MultiDiGraph()

        for node in model.nodes:
            if node.id not in digraph:
                digraph.add_node(node.id, data=node)

        for index, edge in enumerate(model.edges):
            _ensure_node(digraph, edge.from_id)
            _ensure_node(digraph, edge.to_id)
            digraph.add_edge(edge.from_id, edge.to_id, key=index, data=EdgeRecord(index=index, edge=edge))

        return cls(digraph=digraph, direction=model.direction, containers=list(model.containers))

    def node_ids(self) -> list[str]:
        return list(self.digraph.nodes)

    def node(self, node_id: str) -> Node:
        return self.digraph.nodes[node_id]["data"]

    def edges(self) -> list[Edge]:
        """All edges in model order."""
        records = [data["data"] for _, _, data in self.digraph.edges(data=True)]
        records.sort(key=lambda r: r.index)
        return [r.edge for r in records]

    def node_count(self) -> int:
        return self.digraph.number_of_nodes()

    def successors(self, node_id: str) -> list[str]:
        """Targets of every out-edge, one entry per parallel edge."""
        if node_id not in self.digraph:
            return []
        return [tgt for _, tgt in self.digraph.out_edges(node_id)]

    def predecessors(self, node_id: str) -> list[str]:
        """Sources of every in-edge, one entry per parallel edge."""
        if node_id not in self.digraph:
            return []
        return [src for src, _ in self.digraph.in_edges(node_id)]

    def is_dag(self) -> bool:
        return nx.is_directed_acyclic_graph(self.digraph)

    def topological_sort(self) -> list[str]:
        """Kahn's algorithm with a sorted stack; never fails.

        Zero in-degree nodes sit on a stack kept in ascending id order, so the
        lexicographically greatest ready node is always popped next. Nodes
        left over because of cycles are appended in model order.
        """
        in_degree: dict[str, int] = {n: self.digraph.in_degree(n) for n in self.digraph.nodes}
        stack = sorted(n for n, deg in in_degree.items() if deg == 0)

        result: list[str] = []
        while stack:
            node = stack.pop()
            result.append(node)
            for neighbor in self.successors(node):
                in_degree[neighbor] -= 1
                if in_degree[neighbor] == 0:
                    stack.append(neighbor)
                    stack.sort()

        if len(result) < self.node_count():
            logger.debug("cycle detected: sorted %d of %d nodes", len(result), self.node_count())
            placed = set(result)
            result.extend(n for n in self.digraph.nodes if n not in placed)

        return result


def _ensure_node(digraph: nx.MultiDiGraph, node_id: str) -> None:
    if node_id not in digraph:
        digraph.add_node(node_id, data=Node.bare(node_id))
