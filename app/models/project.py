"""
Project Model Module

This module defines the Project model for managing project entities with status,
priority and timeline tracking, and their relationship to clients and employees.
"""
from enum import Enum
from typing import Optional
from datetime import date, datetime
from sqlmodel import SQLModel, Field, AutoString

from app.models.base import UTCDateTime, utcnow


class ProjectStatus(str, Enum):
    NOT_STARTED = "Not Started"
    IN_PROGRESS = "In Progress"
    ON_HOLD = "On Hold"
    COMPLETED = "Completed"
    CANCELED = "Canceled"


class ProjectPriority(str, Enum):
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"
    URGENT = "Urgent"


class ProjectBase(SQLModel):
    # Basic project information
    title: str = Field(nullable=False)
    description: Optional[str] = None

    # Status and priority are stored as their display strings
    status: ProjectStatus = Field(default=ProjectStatus.NOT_STARTED, sa_type=AutoString)
    priority: Optional[ProjectPriority] = Field(default=ProjectPriority.MEDIUM, sa_type=AutoString)

    # Timeline
    start_date: Optional[date] = None
    completion_date: Optional[date] = None

    # Owning customer; projects may exist without one
    client_id: Optional[int] = Field(default=None, foreign_key="clients.client_id")


class Project(ProjectBase, table=True):
    """
    Project model representing a body of work made up of tasks.

    A project owns zero or more tasks. Deleting a project removes its tasks and
    their assignments (see ``app.api.v1.endpoints.projects.delete_project``).

    Attributes:
        project_id: Auto-incrementing primary key
        title: Project title (required)
        description: Detailed project description
        status: One of "Not Started", "In Progress", "On Hold", "Completed", "Canceled"
        priority: One of "Low", "Medium", "High", "Urgent"
        start_date: Planned start date
        completion_date: Planned or actual completion date
        client_id: Foreign key to the Client this project is for
        created_by: Foreign key to the Employee who created the project
        created_at: Timestamp when the project was created
        updated_at: Timestamp when the project was last modified
    """
    __tablename__ = "projects"

    # Primary key
    project_id: Optional[int] = Field(default=None, primary_key=True)

    # Creator
    created_by: Optional[int] = Field(default=None, foreign_key="employee.id")

    # Audit timestamps - automatically managed
    created_at: Optional[datetime] = Field(default_factory=utcnow, sa_type=UTCDateTime)
    updated_at: Optional[datetime] = Field(default_factory=utcnow, sa_type=UTCDateTime)
