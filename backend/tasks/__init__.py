"""
Tasks module
Task records plus leveling (task_stages) and the per-mission snapshot cache (task_cache).
Submodules are imported explicitly to keep shared.graph free of import cycles.
"""

from .models import Task, TaskId, TaskStatus, TaskType, parse_tasks

__all__ = ["Task", "TaskId", "TaskStatus", "TaskType", "parse_tasks"]
