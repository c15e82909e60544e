"""Graph API - layout and highlight relations for a task snapshot."""

from typing import Optional

from fastapi import APIRouter

from config import get_layout_settings
from monitor import GraphView, build_graph_view, summarize
from tasks import task_cache
from tasks.task_stages import KAHN

from ..schemas import GraphLayoutRequest, GraphRelationsRequest

router = APIRouter()


async def _graph_view(tasks, mission_id: Optional[str], task_type=None, strategy: str = KAHN) -> GraphView:
    """Missions go through the snapshot cache; anonymous snapshots are built fresh."""
    settings = await get_layout_settings()
    if mission_id:
        return task_cache.get_graph_view(
            mission_id, tasks, task_type=task_type, strategy=strategy, settings=settings
        )
    return build_graph_view(tasks, task_type=task_type, strategy=strategy, settings=settings)


@router.post("/layout")
async def graph_layout(body: GraphLayoutRequest):
    view = await _graph_view(body.tasks, body.mission_id, body.task_type, body.leveling)
    return {"layout": view.layout.to_dict(), "summary": summarize(view)}


@router.post("/relations")
async def graph_relations(body: GraphRelationsRequest):
    view = await _graph_view(body.tasks, body.mission_id, body.task_type)
    relations = view.relations(body.focus_id, transitive=body.transitive)
    return {
        "focusId": body.focus_id,
        "relations": None if relations is None else [
            {"id": tid, "relation": rel.value} for tid, rel in relations.items()
        ],
        "edges": [e.to_dict() for e in view.edge_states(body.focus_id)],
    }
