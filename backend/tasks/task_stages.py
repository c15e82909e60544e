"""
Topological leveling of a dependency graph.
Kahn's algorithm; tasks never released (cycle, or downstream of one) fall back to level 0.
Uses networkx only to name the tasks that actually sit on a cycle.
"""

from collections import deque
from dataclasses import dataclass, field
from typing import Deque, Dict, List, Mapping, Optional, Sequence, Set, Tuple

import networkx as nx
from loguru import logger

from shared.graph import DependencyGraph
from tasks.models import Task, TaskId

KAHN = "kahn"
LONGEST_PATH = "longest_path"
LEVELING_STRATEGIES = (KAHN, LONGEST_PATH)

FALLBACK_LEVEL = 0


@dataclass
class LevelResult:
    """Level per task plus the ids that only got a level through the fallback."""
    levels: Dict[TaskId, int] = field(default_factory=dict)
    fallback: List[TaskId] = field(default_factory=list)
    cycle_members: List[TaskId] = field(default_factory=list)
    _fallback_ids: Set[TaskId] = field(init=False, repr=False, compare=False, default_factory=set)

    def __post_init__(self) -> None:
        self._fallback_ids = set(self.fallback)

    @property
    def level_count(self) -> int:
        return max(self.levels.values()) + 1 if self.levels else 0

    def is_fallback(self, task_id: TaskId) -> bool:
        return task_id in self._fallback_ids


def find_cycle_members(graph: DependencyGraph) -> List[TaskId]:
    """Ids on a directed cycle, in graph order."""
    G = graph.to_networkx()
    on_cycle: Set[TaskId] = set()
    for component in nx.strongly_connected_components(G):
        if len(component) > 1:
            on_cycle.update(component)
    return [tid for tid in graph.order if tid in on_cycle]


def _release_order(graph: DependencyGraph, strategy: str) -> Dict[TaskId, int]:
    remaining = dict(graph.in_degree)
    deepest: Dict[TaskId, int] = {}
    queue: Deque[Tuple[TaskId, int]] = deque(
        (tid, 0) for tid in graph.order if remaining[tid] == 0
    )
    assigned: Dict[TaskId, int] = {}

    while queue:
        tid, level = queue.popleft()
        assigned[tid] = level
        for succ in graph.adjacency[tid]:
            remaining[succ] -= 1
            deepest[succ] = max(deepest.get(succ, 0), level + 1)
            if remaining[succ] == 0:
                # kahn: level from the predecessor that released it
                queue.append((succ, deepest[succ] if strategy == LONGEST_PATH else level + 1))

    return assigned


def compute_levels(
    graph: DependencyGraph,
    tasks: Optional[Sequence[Task]] = None,
    strategy: str = KAHN,
) -> LevelResult:
    """
    Assign each task a level. Level 0 = no unresolved dependencies.

    strategy="kahn":         level set on the first in-degree-zero crossing.
    strategy="longest_path": 1 + max(level of all predecessors).

    tasks: if provided, report ids in this order (ids absent from graph are skipped).
    Never raises for cycles.
    """
    if strategy not in LEVELING_STRATEGIES:
        raise ValueError(f"Unknown leveling strategy: {strategy!r}")

    assigned = _release_order(graph, strategy)

    if tasks is None:
        order = graph.order
    else:
        order = list(dict.fromkeys(t.id for t in tasks if t.id in graph))

    levels = {tid: assigned.get(tid, FALLBACK_LEVEL) for tid in order}
    fallback = [tid for tid in order if tid not in assigned]
    cycle_members: List[TaskId] = []
    if fallback:
        listed = set(order)
        cycle_members = [tid for tid in find_cycle_members(graph) if tid in listed]
        logger.warning(
            "Dependency cycle: {} task(s) left unleveled, placed at level {}: {}",
            len(fallback),
            FALLBACK_LEVEL,
            fallback,
        )

    return LevelResult(levels=levels, fallback=fallback, cycle_members=cycle_members)


def group_by_level(levels: Mapping[TaskId, int]) -> List[List[TaskId]]:
    """[[level 0 ids], [level 1 ids], ...], input order kept inside each level."""
    level_map: Dict[int, List[TaskId]] = {}
    for tid, level in levels.items():
        level_map.setdefault(level, []).append(tid)
    if not level_map:
        return []
    return [level_map.get(idx, []) for idx in range(max(level_map) + 1)]
