from datetime import datetime, timezone
from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator
from app.models.task import TaskBase, TaskStatus


def _parse_status(value):
    if value is None:
        return value
    try:
        return TaskStatus.parse(value)
    except ValueError:
        raise ValueError(f"status must be one of: {', '.join(s.value for s in TaskStatus)}")


class TaskIn(BaseModel):
    """Fields every full task write must carry."""
    model_config = ConfigDict(use_enum_values=True)

    description: str = Field(min_length=1)
    deadline: datetime
    status: TaskStatus
    project_id: int

    @field_validator("status", mode="before")
    @classmethod
    def normalize_status(cls, v):
        return _parse_status(v)

    @field_validator("deadline")
    @classmethod
    def deadline_in_utc(cls, v: datetime) -> datetime:
        # Deadlines without an offset are taken as UTC
        if v.tzinfo is None:
            return v.replace(tzinfo=timezone.utc)
        return v.astimezone(timezone.utc)


class TaskCreate(TaskIn):
    # Empty list creates an unassigned task
    employee_ids: List[int] = []


class TaskUpdate(TaskIn):
    # None keeps the current assignees, a list (even empty) replaces them
    employee_ids: Optional[List[int]] = None


class TaskStatusUpdate(BaseModel):
    model_config = ConfigDict(use_enum_values=True)

    status: TaskStatus

    @field_validator("status", mode="before")
    @classmethod
    def normalize_status(cls, v):
        return _parse_status(v)


class TaskReassign(BaseModel):
    # Presence and non-emptiness are checked by the endpoint
    employee_ids: Optional[List[int]] = None


class TaskRead(TaskBase):
    task_id: int
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    employee_ids: List[int] = []
    employee_names: List[str] = []


class EmployeeTaskRead(TaskBase):
    """A task as listed on one employee's board, with its project title."""
    task_id: int
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    project_title: Optional[str] = None


class TaskResponse(BaseModel):
    success: bool = True
    task: TaskRead


class TaskListResponse(BaseModel):
    success: bool = True
    tasks: List[TaskRead]


class EmployeeTaskListResponse(BaseModel):
    success: bool = True
    tasks: List[EmployeeTaskRead]


class ReassignResponse(BaseModel):
    success: bool = True
    message: str
    employee_ids: List[int]
    employee_names: List[str]
