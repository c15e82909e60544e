"""
Monitor Module
Runs the graph pipeline for one task snapshot: validate -> build -> level -> layout.
Relationship queries for highlighting live in monitor.relations.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Union

import orjson

from layout import GraphLayout, LayoutSettings, compute_layout
from shared.graph import DependencyGraph, build_dependency_graph
from tasks.models import Task, TaskId, TaskType, parse_tasks
from tasks.task_stages import KAHN, LevelResult, compute_levels

from .relations import EdgeState, Relation, classify, classify_edges

__all__ = [
    "EdgeState",
    "GraphView",
    "Relation",
    "build_graph_view",
    "classify",
    "classify_edges",
    "load_tasks",
    "summarize",
]


@dataclass
class GraphView:
    """Everything derived from one task snapshot. Rebuilt, never mutated."""
    tasks: List[Task] = field(default_factory=list)
    graph: DependencyGraph = field(default_factory=DependencyGraph)
    levels: LevelResult = field(default_factory=LevelResult)
    layout: GraphLayout = field(default_factory=GraphLayout)

    def relations(self, focus_id: Optional[TaskId], transitive: bool = False) -> Optional[Dict[TaskId, Relation]]:
        return classify(focus_id, self.graph, transitive=transitive)

    def edge_states(self, focus_id: Optional[TaskId]) -> List[EdgeState]:
        return classify_edges(focus_id, self.layout)


def load_tasks(data: Any) -> List[Task]:
    """
    Accept a task list, {"tasks": [...]}, or a JSON string/bytes of either.
    Raises ValueError for unparseable payloads, pydantic ValidationError for bad records.
    """
    if isinstance(data, (str, bytes)):
        try:
            data = orjson.loads(data)
        except orjson.JSONDecodeError as e:
            raise ValueError("Invalid task payload") from e
    if isinstance(data, dict):
        data = data.get("tasks") if isinstance(data.get("tasks"), list) else []
    if data is None:
        return []
    if not isinstance(data, list):
        raise ValueError("Invalid task payload")
    return parse_tasks(data)


def build_graph_view(
    data: Any,
    task_type: Optional[Union[TaskType, str]] = None,
    strategy: str = KAHN,
    settings: Optional[LayoutSettings] = None,
) -> GraphView:
    """
    Full pipeline for one snapshot.
    task_type: only lay out tasks of this type; references to other tasks become dangling.
    """
    tasks = load_tasks(data)
    if task_type is not None:
        wanted = TaskType(task_type)
        tasks = [t for t in tasks if t.task_type == wanted]

    graph = build_dependency_graph(tasks)
    levels = compute_levels(graph, tasks, strategy=strategy)
    layout = compute_layout(tasks, levels, settings)
    return GraphView(tasks=tasks, graph=graph, levels=levels, layout=layout)


def summarize(view: GraphView) -> Dict[str, int]:
    """Header stats: task, dependency and level counts plus fallback/cycle sizes."""
    return {
        "tasks": len(view.graph),
        "dependencies": len(view.layout.edges),
        "levels": view.layout.level_count,
        "fallback": len(view.levels.fallback),
        "cycles": len(view.levels.cycle_members),
    }
