"""Rank assignment: place every node on an integer layer."""

from __future__ import annotations

import logging

import networkx as nx

from glyphflow.ir.graph import FlowGraph

logger = logging.getLogger(__name__)


def assign_ranks(graph: FlowGraph) -> dict[str, int]:
    """Assign each node a rank by walking the topological order.

    A node without predecessors gets rank 0; otherwise it sits one rank
    below its deepest already-ranked predecessor. Nodes whose predecessors
    are all still unranked (cycle leftovers) go one past the deepest rank
    seen so far. Self-loops never affect rank.
    """
    ranks: dict[str, int] = {}
    for node in graph.topological_sort():
        preds = [p for p in graph.predecessors(node) if p != node]
        if not preds:
            ranks[node] = 0
            continue
        assigned = [ranks[p] for p in preds if p in ranks]
        if assigned:
            ranks[node] = max(assigned) + 1
        else:
            ranks[node] = max(ranks.values(), default=-1) + 1

    if not graph.is_dag():
        _push_past_cycles(graph, ranks)

    logger.debug("ranks: %s", ranks)
    return ranks


def _push_past_cycles(graph: FlowGraph, ranks: dict[str, int]) -> None:
    """Restore rank(to) > rank(from) for edges that do not close a cycle.

    Cycle leftovers are ranked in model order, so a node downstream of a
    cycle can land above it. Edges between different strongly connected
    components form a DAG, so relaxing them converges.
    """
    component: dict[str, int] = {}
    for i, scc in enumerate(nx.strongly_connected_components(graph.digraph)):
        for node in scc:
            component[node] = i

    edges = [(e.from_id, e.to_id) for e in graph.edges() if component[e.from_id] != component[e.to_id]]
    for _ in range(graph.node_count()):
        changed = False
        for src, tgt in edges:
            if ranks[tgt] <= ranks[src]:
                ranks[tgt] = ranks[src] + 1
                changed = True
        if not changed:
            break


def group_layers(ranks: dict[str, int]) -> list[list[str]]:
    """One list of ids per occupied rank, ids sorted lexicographically."""
    by_rank: dict[int, list[str]] = {}
    for node, rank in ranks.items():
        by_rank.setdefault(rank, []).append(node)
    return [sorted(by_rank[r]) for r in sorted(by_rank)]
