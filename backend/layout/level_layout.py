"""
Level/column layout for the task dependency graph.

Each level is one row; inside a row tasks keep their input order (column 0 = first seen).
Rows are centred on the canvas midpoint (offset = (container - content) / 2).
x, y are node centres; edges run bottom-centre -> top-centre.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Sequence, Union

from tasks.models import Task, TaskId
from tasks.task_stages import FALLBACK_LEVEL, LevelResult, group_by_level

from .constants import LayoutSettings


@dataclass
class GraphNode:
    id: TaskId
    task: Task
    level: int
    column: int
    x: float
    y: float
    w: float
    h: float
    fallback: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "title": self.task.title,
            "status": self.task.status.value,
            "taskType": self.task.task_type.value,
            "typeLabel": self.task.task_type.label,
            "dependencyCount": len(self.task.dependencies),
            "level": self.level,
            "column": self.column,
            "x": self.x,
            "y": self.y,
            "w": self.w,
            "h": self.h,
            "fallback": self.fallback,
        }


@dataclass
class GraphEdge:
    from_id: TaskId
    to_id: TaskId
    source: GraphNode
    target: GraphNode

    @property
    def points(self) -> List[List[float]]:
        sp, tp = self.source, self.target
        return [[round(sp.x, 1), round(sp.y + sp.h / 2, 1)],
                [round(tp.x, 1), round(tp.y - tp.h / 2, 1)]]

    def to_dict(self) -> Dict[str, Any]:
        return {"from": self.from_id, "to": self.to_id, "points": self.points}


@dataclass
class GraphLayout:
    nodes: Dict[TaskId, GraphNode] = field(default_factory=dict)
    edges: List[GraphEdge] = field(default_factory=list)
    level_count: int = 0
    width: float = 0
    height: float = 0
    fallback: List[TaskId] = field(default_factory=list)
    cycle_members: List[TaskId] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        """JSON payload. nodes is a list in input order: 1 and "1" would collide as object keys."""
        return {
            "nodes": [node.to_dict() for node in self.nodes.values()],
            "edges": [e.to_dict() for e in self.edges],
            "levels": self.level_count,
            "width": self.width,
            "height": self.height,
            "fallbackIds": list(self.fallback),
            "cycleIds": list(self.cycle_members),
        }


def _row_start_x(count: int, settings: LayoutSettings) -> float:
    row_w = count * settings.column_gap
    return (settings.canvas_w - row_w) / 2 + settings.column_gap / 2


def compute_layout(
    tasks: Sequence[Task],
    levels: Union[LevelResult, Mapping[TaskId, int]],
    settings: Optional[LayoutSettings] = None,
) -> GraphLayout:
    """
    Place every task exactly once. Tasks missing from levels go to level 0.
    One edge per dependency whose both ends are placed; dangling and self
    references produce none.
    """
    settings = settings or LayoutSettings()
    if isinstance(levels, LevelResult):
        result = levels
    else:
        result = LevelResult(levels=dict(levels))

    by_id: Dict[TaskId, Task] = {}
    for t in tasks or []:
        by_id[t.id] = t

    rows = group_by_level({tid: result.levels.get(tid, FALLBACK_LEVEL) for tid in by_id})

    placed: Dict[TaskId, GraphNode] = {}
    for level, row in enumerate(rows):
        if not row:
            continue
        start_x = _row_start_x(len(row), settings)
        y = settings.base_offset + level * settings.level_gap
        for column, tid in enumerate(row):
            placed[tid] = GraphNode(
                id=tid,
                task=by_id[tid],
                level=level,
                column=column,
                x=round(start_x + column * settings.column_gap, 1),
                y=round(y, 1),
                w=settings.node_w,
                h=settings.node_h,
                fallback=result.is_fallback(tid),
            )
    nodes = {tid: placed[tid] for tid in by_id}

    edges: List[GraphEdge] = []
    for tid, t in by_id.items():
        for dep in t.dependencies:
            if dep == tid or dep not in nodes:
                continue
            edges.append(GraphEdge(from_id=dep, to_id=tid, source=nodes[dep], target=nodes[tid]))

    level_count = len(rows)
    height = max(settings.min_canvas_h, level_count * settings.level_gap + settings.base_offset * 2)

    return GraphLayout(
        nodes=nodes,
        edges=edges,
        level_count=level_count,
        width=settings.canvas_w,
        height=height,
        fallback=list(result.fallback),
        cycle_members=list(result.cycle_members),
    )
