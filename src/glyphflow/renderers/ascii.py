"""Text renderer: composites a LayoutResult onto a character canvas."""

from __future__ import annotations

import logging

from glyphflow.config import RenderConfig
from glyphflow.layout.types import ContainerBox, LayoutResult
from glyphflow.renderers.canvas import Canvas, Rect
from glyphflow.renderers.charset import BoxChars
from glyphflow.renderers.edges import EdgeRenderer
from glyphflow.renderers.shapes import draw_node
from glyphflow.text import display_width

logger = logging.getLogger(__name__)


# ─── Containers ──────────────────────────────────────────────────────────────


def _paint_container(canvas: Canvas, box: ContainerBox) -> None:
    canvas.draw_box(Rect(box.x, box.y, box.width, box.height), BoxChars.double(canvas.charset))
    _paint_container_title(canvas, box)


def _paint_container_title(canvas: Canvas, box: ContainerBox) -> None:
    if not box.title:
        return
    title = f" {box.title} "
    col = box.x + max(1, (box.width - display_width(title)) // 2)
    canvas.write_str(col, box.y, title)


# ─── AsciiRenderer ───────────────────────────────────────────────────────────


class AsciiRenderer:
    """Renders a LayoutResult to a string in the configured character set.

    Draw order: container borders, edge lines, edge labels, nodes, and
    container titles again so nothing obscures them.
    """

    def __init__(self, config: RenderConfig | None = None) -> None:
        self.config = config or RenderConfig()

    def render(self, result: LayoutResult) -> str:
        if result.is_empty():
            return ""

        canvas = Canvas(result.width, result.height, self.config.character_set)

        for box in result.containers:
            _paint_container(canvas, box)

        edges = EdgeRenderer(canvas)
        edges.draw_lines(result.edges)
        edges.draw_labels(result.edges)

        for node in result.nodes:
            draw_node(canvas, node, self.config.diamond_style)

        for box in result.containers:
            _paint_container_title(canvas, box)

        logger.debug("rendered %dx%d canvas", canvas.width, canvas.height)
        return canvas.to_string()
