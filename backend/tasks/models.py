"""
Task records as received from the mission store.
Validated once at the boundary; the graph engine only ever sees Task instances.
"""

from enum import Enum
from typing import Any, List, Optional, Union

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, TypeAdapter, field_validator

# Opaque id: 1 and "1" are different tasks.
TaskId = Union[int, str]


class TaskStatus(str, Enum):
    PENDING = "pending"
    READY = "ready"
    RUNNING = "running"
    COMPLETE = "complete"
    FAILED = "failed"
    BLOCKED = "blocked"


class TaskType(str, Enum):
    """Display grouping only; never used for scheduling."""
    WORK = "work"
    VERIFICATION = "verification"
    FINALIZATION = "finalization"

    @property
    def label(self) -> str:
        return _TYPE_LABELS[self]


_TYPE_LABELS = {
    TaskType.WORK: "WORK",
    TaskType.VERIFICATION: "VERIFY",
    TaskType.FINALIZATION: "FINAL",
}


class Task(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    id: TaskId
    title: str = ""
    status: TaskStatus = TaskStatus.PENDING
    task_type: TaskType = Field(default=TaskType.WORK, alias="taskType")
    dependencies: List[TaskId] = Field(
        default_factory=list,
        validation_alias=AliasChoices("dependencies", "deps"),
    )
    mission_id: Optional[str] = Field(default=None, alias="missionId")

    @field_validator("dependencies", mode="before")
    @classmethod
    def _null_dependencies(cls, value: Any) -> Any:
        return [] if value is None else value

    @field_validator("dependencies")
    @classmethod
    def _collapse_repeats(cls, value: List[TaskId]) -> List[TaskId]:
        """Keep the first occurrence of each dependency id, in order."""
        seen = set()
        result = []
        for dep in value:
            if dep in seen:
                continue
            seen.add(dep)
            result.append(dep)
        return result


_task_list = TypeAdapter(List[Task])


def parse_tasks(records: Any) -> List[Task]:
    """Validate raw records (dicts or Task instances). Raises pydantic ValidationError."""
    if not records:
        return []
    return _task_list.validate_python(records)
