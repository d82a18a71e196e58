"""Intermediate representation: input model and FlowGraph."""

from glyphflow.ir.graph import EdgeRecord, FlowGraph
from glyphflow.ir.model import Container, Edge, GraphModel, Node

__all__ = [
    "Container",
    "Edge",
    "EdgeRecord",
    "FlowGraph",
    "GraphModel",
    "Node",
]
