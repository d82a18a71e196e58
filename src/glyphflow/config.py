"""Centralized configuration for glyphflow."""

from __future__ import annotations

from dataclasses import dataclass, field

from glyphflow.types import CharacterSet, DiamondStyle


@dataclass
class LayoutConfig:
    """Spacing policy for coordinate assignment (all values in cells)."""

    node_sep: int = 1
    rank_sep: int = 4
    min_node_width: int = 5
    min_node_height: int = 3
    padding: int = 1
    max_label_width: int = 30
    ordering_iterations: int = 24
    diamond_style: DiamondStyle = field(default_factory=DiamondStyle.default)


@dataclass
class RenderConfig:
    """Style configuration for the rendering pipeline."""

    character_set: CharacterSet = field(default_factory=CharacterSet.default)
    diamond_style: DiamondStyle = field(default_factory=DiamondStyle.default)
    max_label_width: int = 30

    def layout_config(self) -> LayoutConfig:
        return LayoutConfig(max_label_width=self.max_label_width, diamond_style=self.diamond_style)
