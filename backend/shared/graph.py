"""
Dependency graph construction for a task snapshot.
Shared by leveling (tasks), layout and relationship queries (monitor).
"""

from dataclasses import dataclass, field
from typing import Dict, Iterable, List

import networkx as nx
from loguru import logger

from tasks.models import Task, TaskId


@dataclass
class DependencyGraph:
    """Normalized dependency relation over one task snapshot.

    adjacency: dependency -> dependents (forward edges).
    reverse:   dependent -> dependencies that are known tasks.
    in_degree: resolved direct dependency count per task.
    dangling:  dependency ids dropped because no such task exists.
    """
    order: List[TaskId] = field(default_factory=list)
    tasks: Dict[TaskId, Task] = field(default_factory=dict)
    adjacency: Dict[TaskId, List[TaskId]] = field(default_factory=dict)
    reverse: Dict[TaskId, List[TaskId]] = field(default_factory=dict)
    in_degree: Dict[TaskId, int] = field(default_factory=dict)
    dangling: Dict[TaskId, List[TaskId]] = field(default_factory=dict)

    def __contains__(self, task_id: object) -> bool:
        return task_id in self.tasks

    def __len__(self) -> int:
        return len(self.order)

    @property
    def edge_count(self) -> int:
        return sum(len(deps) for deps in self.adjacency.values())

    def edges(self) -> List[tuple]:
        """(dependency, dependent) pairs in dependent input order."""
        return [(dep, tid) for tid in self.order for dep in self.reverse[tid]]

    def to_networkx(self) -> nx.DiGraph:
        G = nx.DiGraph()
        G.add_nodes_from(self.order)
        G.add_edges_from(self.edges())
        return G


def build_dependency_graph(tasks: Iterable[Task]) -> DependencyGraph:
    """
    Build the dependency graph. Never raises on bad references:
    - duplicate ids: last record wins, position of the first is kept
    - self-dependency: treated as satisfied
    - unknown dependency id: treated as external / satisfied, recorded in dangling
    """
    by_id: Dict[TaskId, Task] = {}
    for t in tasks or []:
        by_id[t.id] = t

    graph = DependencyGraph(order=list(by_id), tasks=by_id)
    for tid in graph.order:
        graph.adjacency[tid] = []
        graph.reverse[tid] = []
        graph.in_degree[tid] = 0

    for tid, t in by_id.items():
        for dep in t.dependencies:
            if dep == tid:
                continue
            if dep not in by_id:
                graph.dangling.setdefault(tid, []).append(dep)
                continue
            graph.adjacency[dep].append(tid)
            graph.reverse[tid].append(dep)
            graph.in_degree[tid] += 1

    if graph.dangling:
        logger.debug(
            "Dropped {} dangling dependency reference(s) from {} task(s)",
            sum(len(d) for d in graph.dangling.values()),
            len(graph.dangling),
        )
    logger.debug("Built dependency graph: {} tasks, {} edges", len(graph), graph.edge_count)
    return graph
