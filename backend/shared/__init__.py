"""Shared graph structures for leveling, layout and relationship queries."""

from .graph import DependencyGraph, build_dependency_graph

__all__ = ["DependencyGraph", "build_dependency_graph"]
