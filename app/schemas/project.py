from datetime import date, datetime
from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field
from app.models.project import ProjectBase, ProjectPriority, ProjectStatus


# Body of POST /projects and PUT /projects/{id}; PUT replaces every field
class ProjectIn(BaseModel):
    model_config = ConfigDict(use_enum_values=True)

    title: str = Field(min_length=1)
    status: ProjectStatus
    description: Optional[str] = None
    priority: Optional[ProjectPriority] = ProjectPriority.MEDIUM
    start_date: Optional[date] = None
    completion_date: Optional[date] = None
    client_id: Optional[int] = None


class ProjectRead(ProjectBase):
    project_id: int
    created_by: Optional[int] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class ProjectResponse(BaseModel):
    success: bool = True
    project: ProjectRead


class ProjectListResponse(BaseModel):
    success: bool = True
    projects: List[ProjectRead]
