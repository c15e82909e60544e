"""Pydantic request schemas for API."""

from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

from tasks.models import Task, TaskId, TaskType


class GraphLayoutRequest(BaseModel):
    """Request for the dependency graph layout of one task snapshot."""
    model_config = ConfigDict(populate_by_name=True)
    tasks: List[Task] = Field(default_factory=list)
    task_type: Optional[TaskType] = Field(default=None, alias="taskType")
    leveling: Literal["kahn", "longest_path"] = "kahn"
    mission_id: Optional[str] = Field(default=None, alias="missionId")


class GraphRelationsRequest(BaseModel):
    """Request for highlight relations around a focused task. focusId null = no highlighting."""
    model_config = ConfigDict(populate_by_name=True)
    tasks: List[Task] = Field(default_factory=list)
    focus_id: Optional[TaskId] = Field(default=None, alias="focusId")
    transitive: bool = False
    task_type: Optional[TaskType] = Field(default=None, alias="taskType")
    mission_id: Optional[str] = Field(default=None, alias="missionId")
