"""
Relationship queries for hover/selection highlighting.
Pure reads over an already-built DependencyGraph; safe to call on every pointer move.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Optional, Set

import networkx as nx

from layout.level_layout import GraphLayout
from shared.graph import DependencyGraph
from tasks.models import TaskId, TaskStatus


class Relation(str, Enum):
    SELF = "self"
    ANCESTOR = "ancestor"
    DESCENDANT = "descendant"
    UNRELATED = "unrelated"


def classify(
    focus_id: Optional[TaskId],
    graph: DependencyGraph,
    transitive: bool = False,
) -> Optional[Dict[TaskId, Relation]]:
    """
    Classify every task relative to focus_id.

    Returns None when there is no focus: no highlighting at all, which is not
    the same as everything being unrelated.
    Single-hop by default (direct dependencies / dependents only);
    transitive=True follows the full upstream / downstream closure.
    A focus id missing from the graph yields all-unrelated.
    """
    if focus_id is None:
        return None
    if focus_id not in graph:
        return {tid: Relation.UNRELATED for tid in graph.order}

    if transitive:
        G = graph.to_networkx()
        upstream: Set[TaskId] = nx.ancestors(G, focus_id)
        downstream: Set[TaskId] = nx.descendants(G, focus_id)
    else:
        upstream = set(graph.reverse[focus_id])
        downstream = set(graph.adjacency[focus_id])

    result: Dict[TaskId, Relation] = {}
    for tid in graph.order:
        if tid == focus_id:
            result[tid] = Relation.SELF
        elif tid in upstream:
            result[tid] = Relation.ANCESTOR
        elif tid in downstream:
            result[tid] = Relation.DESCENDANT
        else:
            result[tid] = Relation.UNRELATED
    return result


@dataclass
class EdgeState:
    from_id: TaskId
    to_id: TaskId
    highlighted: bool
    satisfied: bool

    def to_dict(self) -> Dict[str, Any]:
        return {
            "from": self.from_id,
            "to": self.to_id,
            "highlighted": self.highlighted,
            "satisfied": self.satisfied,
        }


def classify_edges(focus_id: Optional[TaskId], layout: GraphLayout) -> List[EdgeState]:
    """Edge styling: highlighted when touching the focus, satisfied once the source is complete."""
    return [
        EdgeState(
            from_id=e.from_id,
            to_id=e.to_id,
            highlighted=focus_id is not None and focus_id in (e.from_id, e.to_id),
            satisfied=e.source.task.status == TaskStatus.COMPLETE,
        )
        for e in layout.edges
    ]
