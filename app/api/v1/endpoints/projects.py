"""
Project Endpoints Module

This module provides CRUD endpoints for managing projects. Every authenticated
employee can read projects; managers and admins create, update and delete them.
Project writes also append a notice to the notifications log.
"""
from datetime import timedelta
from typing import Optional
from fastapi import APIRouter, BackgroundTasks, Depends, status
from sqlmodel import Session, select
from app.api import deps
from app.core.config import settings
from app.core.errors import NotFound
from app.db.session import get_db
from app.models.base import utcnow
from app.models.client import Client
from app.models.employee import Employee
from app.models.project import Project
from app.models.task import Task
from app.schemas.common import MessageResponse
from app.schemas.project import ProjectIn, ProjectListResponse, ProjectRead, ProjectResponse
from app.services.assignments import AssignmentEngine
from app.services.notifier import TaskNotifier, log_notice

router = APIRouter()


def get_project_or_404(db: Session, project_id: int) -> Project:
    project = db.get(Project, project_id)
    if not project:
        raise NotFound("Project not found")
    return project


def ensure_client(db: Session, client_id: Optional[int]) -> None:
    if client_id is not None and db.get(Client, client_id) is None:
        raise NotFound("Client not found")


@router.get("/ongoing", response_model=ProjectListResponse)
def list_ongoing_projects(
    db: Session = Depends(get_db),
    current_user: Employee = Depends(deps.get_current_active_user),
):
    """
    Projects created within the last ``ONGOING_PROJECT_DAYS`` days, by start date.
    """
    since = utcnow() - timedelta(days=settings.ONGOING_PROJECT_DAYS)
    statement = (
        select(Project)
        .where(Project.created_at >= since)
        .order_by(Project.start_date, Project.project_id)
    )
    projects = db.exec(statement).all()
    return ProjectListResponse(projects=[ProjectRead.model_validate(p) for p in projects])


@router.get("", response_model=ProjectListResponse)
def list_projects(
    db: Session = Depends(get_db),
    current_user: Employee = Depends(deps.get_current_active_user),
):
    projects = db.exec(select(Project).order_by(Project.project_id)).all()
    return ProjectListResponse(projects=[ProjectRead.model_validate(p) for p in projects])


@router.get("/{project_id}", response_model=ProjectResponse)
def read_project(
    project_id: int,
    db: Session = Depends(get_db),
    current_user: Employee = Depends(deps.get_current_active_user),
):
    project = get_project_or_404(db, project_id)
    return ProjectResponse(project=ProjectRead.model_validate(project))


@router.post("", response_model=ProjectResponse, status_code=status.HTTP_201_CREATED)
def create_project(
    project_in: ProjectIn,
    db: Session = Depends(get_db),
    current_user: Employee = Depends(deps.require_manager),
):
    """
    Create a new project owned by the current employee.

    Raises:
        NotFound: If ``client_id`` does not reference an existing client
    """
    ensure_client(db, project_in.client_id)

    project = Project(**project_in.model_dump(), created_by=current_user.id)
    db.add(project)
    db.flush()
    log_notice(db, f"Project '{project.title}' created", commit=False)
    db.commit()
    db.refresh(project)
    return ProjectResponse(project=ProjectRead.model_validate(project))


@router.put("/{project_id}", response_model=ProjectResponse)
def update_project(
    project_id: int,
    project_in: ProjectIn,
    db: Session = Depends(get_db),
    current_user: Employee = Depends(deps.require_manager),
):
    """
    Replace every editable field of a project.
    """
    project = get_project_or_404(db, project_id)
    ensure_client(db, project_in.client_id)

    for key, value in project_in.model_dump().items():
        setattr(project, key, value)
    project.updated_at = utcnow()
    db.add(project)
    log_notice(db, f"Project '{project.title}' updated", commit=False)
    db.commit()
    db.refresh(project)
    return ProjectResponse(project=ProjectRead.model_validate(project))


@router.delete("/{project_id}", response_model=MessageResponse)
def delete_project(
    project_id: int,
    background_tasks: BackgroundTasks,
    db: Session = Depends(get_db),
    engine: AssignmentEngine = Depends(deps.get_assignment_engine),
    notifier: TaskNotifier = Depends(deps.get_notifier),
    current_user: Employee = Depends(deps.require_manager),
):
    """
    Delete a project together with its tasks and their assignments.

    Everything goes in one transaction. Former assignees of each removed task
    receive one ``taskDeleted`` event per task.
    """
    project = get_project_or_404(db, project_id)
    task_ids = db.exec(select(Task.task_id).where(Task.project_id == project_id)).all()
    former_assignees = engine.get_assignees_for_tasks(task_ids)

    engine.clear_assignees(task_ids)
    for task in db.exec(select(Task).where(Task.project_id == project_id)).all():
        db.delete(task)
    db.flush()
    db.delete(project)
    log_notice(db, f"Project '{project.title}' deleted", commit=False)
    db.commit()

    for task_id in task_ids:
        background_tasks.add_task(notifier.task_deleted, task_id, former_assignees[task_id].employee_ids)
    return MessageResponse(message="Project deleted successfully")
