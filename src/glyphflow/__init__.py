"""glyphflow: lay out directed graphs and draw them as monospace text."""

from __future__ import annotations

from glyphflow.config import LayoutConfig, RenderConfig
from glyphflow.ir.graph import FlowGraph
from glyphflow.ir.model import Container, Edge, GraphModel, Node
from glyphflow.layout import full_layout
from glyphflow.layout.types import LayoutResult
from glyphflow.renderers.ascii import AsciiRenderer
from glyphflow.renderers.base import Renderer
from glyphflow.types import CharacterSet, DiamondStyle, Direction, EdgeType, NodeShape, TerminalKind

__all__ = [
    "CharacterSet",
    "Container",
    "DiamondStyle",
    "Direction",
    "Edge",
    "EdgeType",
    "GraphModel",
    "LayoutConfig",
    "LayoutResult",
    "Node",
    "NodeShape",
    "RenderConfig",
    "TerminalKind",
    "layout",
    "render",
]


def layout(model: GraphModel, config: RenderConfig | None = None) -> LayoutResult:
    """Position the nodes of ``model`` and route its edges.

    Args:
        model: The graph to lay out.
        config: Style configuration; node sizes depend on its diamond style
            and label width.

    Returns:
        The positioned nodes, routed edges and container boxes.
    """
    config = config or RenderConfig()
    graph = FlowGraph.from_model(model)
    return full_layout(graph, config.layout_config())


def render(model: GraphModel, config: RenderConfig | None = None) -> str:
    """Render ``model`` to a monospace drawing.

    Args:
        model: The graph to draw.
        config: Character set, diamond style and label width.

    Returns:
        The drawing with no trailing newline, or an empty string for an
        empty graph. Identical inputs always give identical output.
    """
    config = config or RenderConfig()
    renderer: Renderer = AsciiRenderer(config)
    return renderer.render(layout(model, config))
