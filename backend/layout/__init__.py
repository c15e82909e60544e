"""Layout module - computes level/column layouts for task dependency graphs."""

from .constants import LayoutSettings
from .level_layout import GraphEdge, GraphLayout, GraphNode, compute_layout

__all__ = ["GraphEdge", "GraphLayout", "GraphNode", "LayoutSettings", "compute_layout"]
