"""
Task cache module
Per-mission cache of the last GraphView. Rebuilt only when the task snapshot
(or layout options) changes by value; fingerprint is the orjson dump of validated tasks.
"""

from typing import Any, Dict, List, Optional, Tuple, Union

import orjson
from loguru import logger

from layout import LayoutSettings
from monitor import GraphView, build_graph_view, load_tasks
from tasks.models import TaskType
from tasks.task_stages import KAHN

# Least recently used mission is evicted first (dict insertion order = recency)
MAX_CACHED_MISSIONS = 64

_view_cache: Dict[str, Tuple[bytes, GraphView]] = {}


def snapshot_fingerprint(tasks, **options: Any) -> bytes:
    payload = {
        "tasks": [t.model_dump(mode="json", by_alias=True) for t in tasks],
        "options": options,
    }
    return orjson.dumps(payload, option=orjson.OPT_SORT_KEYS)


def get_graph_view(
    mission_id: str,
    data: Any,
    task_type: Optional[Union[TaskType, str]] = None,
    strategy: str = KAHN,
    settings: Optional[LayoutSettings] = None,
) -> GraphView:
    tasks = load_tasks(data)
    settings = settings or LayoutSettings()
    fingerprint = snapshot_fingerprint(
        tasks,
        task_type=TaskType(task_type).value if task_type is not None else None,
        strategy=strategy,
        settings=settings.model_dump(),
    )

    cached = _view_cache.pop(mission_id, None)
    if cached and cached[0] == fingerprint:
        _view_cache[mission_id] = cached
        logger.debug("Graph view cache hit for mission {}", mission_id)
        return cached[1]

    view = build_graph_view(tasks, task_type=task_type, strategy=strategy, settings=settings)
    _view_cache[mission_id] = (fingerprint, view)
    while len(_view_cache) > MAX_CACHED_MISSIONS:
        evicted = next(iter(_view_cache))
        del _view_cache[evicted]
        logger.debug("Evicted graph view for mission {}", evicted)
    logger.debug("Graph view rebuilt for mission {} ({} tasks)", mission_id, len(view.graph))
    return view


def cached_mission_ids() -> List[str]:
    """Cached missions, least recently used first."""
    return list(_view_cache)


def clear_view_cache(mission_id: Optional[str] = None) -> None:
    if mission_id is None:
        _view_cache.clear()
    elif mission_id in _view_cache:
        del _view_cache[mission_id]
