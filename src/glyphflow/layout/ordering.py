"""Crossing minimisation within ranks (barycenter heuristic)."""

from __future__ import annotations

import logging

from glyphflow.ir.graph import FlowGraph
from glyphflow.types import SweepDirection

logger = logging.getLogger(__name__)

DEFAULT_ITERATIONS = 24


def cross_count(layers: list[list[str]], graph: FlowGraph) -> int:
    """Total edge crossings between every pair of adjacent layers."""
    total = 0
    for upper, lower in zip(layers, layers[1:]):
        total += _two_layer_cross_count(upper, lower, graph)
    return total


def _two_layer_cross_count(upper: list[str], lower: list[str], graph: FlowGraph) -> int:
    lower_pos = {n: i for i, n in enumerate(lower)}

    # One (upper position, lower position) pair per edge, parallel edges included.
    edges: list[tuple[int, int]] = []
    for up_pos, node in enumerate(upper):
        for succ in graph.successors(node):
            if succ in lower_pos:
                edges.append((up_pos, lower_pos[succ]))

    crossings = 0
    for i, (u1, l1) in enumerate(edges):
        for u2, l2 in edges[i + 1 :]:
            if (u1 < u2 and l1 > l2) or (u1 > u2 and l1 < l2):
                crossings += 1
    return crossings


def compute_barycenters(
    layer: list[str],
    ref_layer: list[str],
    graph: FlowGraph,
    direction: SweepDirection,
) -> list[float | None]:
    """Mean position in ``ref_layer`` of each node's neighbours.

    Downward sweeps look at predecessors, upward sweeps at successors. A
    node with no neighbour in ``ref_layer`` gets None.
    """
    ref_pos = {n: i for i, n in enumerate(ref_layer)}
    result: list[float | None] = []
    for node in layer:
        neighbours = graph.predecessors(node) if direction == SweepDirection.Downward else graph.successors(node)
        positions = [ref_pos[n] for n in neighbours if n in ref_pos]
        result.append(sum(positions) / len(positions) if positions else None)
    return result


def order_layer_by_barycenter(layer: list[str], barycenters: list[float | None]) -> list[str]:
    """Stable sort by barycenter; nodes without one go last in original order."""
    entries = list(enumerate(layer))

    def key(entry: tuple[int, str]) -> tuple[int, float, int]:
        index, _ = entry
        bc = barycenters[index] if index < len(barycenters) else None
        if bc is None:
            return (1, 0.0, index)
        return (0, bc, index)

    return [node for _, node in sorted(entries, key=key)]


def order_layers_barycenter(graph: FlowGraph, layers: list[list[str]], iterations: int = DEFAULT_ITERATIONS) -> int:
    """Reorder ``layers`` in place to reduce crossings.

    Even iterations sweep downward, odd ones upward. The best layering seen
    (fewest crossings, earliest on ties) is written back, so the result is
    never worse than the input. Returns its crossing count.
    """
    if len(layers) < 2:
        return 0

    best_layers = [list(layer) for layer in layers]
    best_cc = cross_count(layers, graph)
    logger.debug("initial crossings: %d", best_cc)

    for i in range(iterations):
        if i % 2 == 0:
            for idx in range(1, len(layers)):
                bcs = compute_barycenters(layers[idx], layers[idx - 1], graph, SweepDirection.Downward)
                layers[idx] = order_layer_by_barycenter(layers[idx], bcs)
        else:
            for idx in range(len(layers) - 2, -1, -1):
                bcs = compute_barycenters(layers[idx], layers[idx + 1], graph, SweepDirection.Upward)
                layers[idx] = order_layer_by_barycenter(layers[idx], bcs)

        cc = cross_count(layers, graph)
        if cc < best_cc:
            best_cc = cc
            best_layers = [list(layer) for layer in layers]

    layers[:] = best_layers
    logger.debug("best crossings after %d sweeps: %d", iterations, best_cc)
    return best_cc
