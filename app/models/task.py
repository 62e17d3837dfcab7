"""
Task Model Module

This module defines the Task model and the TaskAssignment junction table for
many-to-many task assignment. A task never stores its assignees itself: the rows
of task_assignments are the only record of who is assigned to which task.
"""
from enum import Enum
from typing import Optional
from datetime import datetime
from sqlmodel import SQLModel, Field, AutoString

from app.models.base import UTCDateTime, utcnow


class TaskStatus(str, Enum):
    PENDING = "pending"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"

    @classmethod
    def parse(cls, value) -> "TaskStatus":
        """
        Accept the vocabularies the dashboards send ("In Progress", "in-progress",
        "COMPLETED", ...) and map them onto the canonical values.
        """
        if isinstance(value, cls):
            return value
        normalized = str(value).strip().lower().replace("-", "_").replace(" ", "_")
        return cls(normalized)


class TaskAssignment(SQLModel, table=True):
    """
    Junction table between Tasks and Employees.

    The composite primary key guarantees at most one row per (task_id, employee_id).

    Attributes:
        task_id: Foreign key to the task being assigned
        employee_id: Foreign key to the employee the task is assigned to
    """
    __tablename__ = "task_assignments"

    task_id: int = Field(foreign_key="tasks.task_id", primary_key=True)
    employee_id: int = Field(foreign_key="employee.id", primary_key=True)


class TaskBase(SQLModel):
    """
    Base Task model containing common fields.
    """
    description: str = Field(nullable=False)
    deadline: datetime = Field(sa_type=UTCDateTime, nullable=False)
    status: TaskStatus = Field(default=TaskStatus.PENDING, sa_type=AutoString)

    # Every task belongs to exactly one project
    project_id: int = Field(foreign_key="projects.project_id", nullable=False)


class Task(TaskBase, table=True):
    """
    Task table model.
    """
    __tablename__ = "tasks"

    # Primary key
    task_id: Optional[int] = Field(default=None, primary_key=True)

    # Audit timestamps
    created_at: Optional[datetime] = Field(default_factory=utcnow, sa_type=UTCDateTime)
    updated_at: Optional[datetime] = Field(default_factory=utcnow, sa_type=UTCDateTime)
