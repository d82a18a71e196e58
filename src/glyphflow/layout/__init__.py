"""Layout engine public API."""

from __future__ import annotations

from glyphflow.config import LayoutConfig
from glyphflow.ir.graph import FlowGraph
from glyphflow.layout.ordering import (
    compute_barycenters,
    cross_count,
    order_layer_by_barycenter,
    order_layers_barycenter,
)
from glyphflow.layout.ranking import assign_ranks, group_layers
from glyphflow.layout.routing import EdgeRouter, label_position
from glyphflow.layout.sugiyama import SugiyamaLayout, assign_coordinates, measure_node
from glyphflow.layout.types import ContainerBox, LayoutResult, Point, PositionedEdge, PositionedNode

__all__ = [
    "ContainerBox",
    "EdgeRouter",
    "LayoutResult",
    "Point",
    "PositionedEdge",
    "PositionedNode",
    "SugiyamaLayout",
    "assign_coordinates",
    "assign_ranks",
    "compute_barycenters",
    "cross_count",
    "full_layout",
    "group_layers",
    "label_position",
    "measure_node",
    "order_layer_by_barycenter",
    "order_layers_barycenter",
]


def full_layout(graph: FlowGraph, config: LayoutConfig | None = None) -> LayoutResult:
    """Run the full layout pipeline."""
    return SugiyamaLayout(config).layout(graph)
