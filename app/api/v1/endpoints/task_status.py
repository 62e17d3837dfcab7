"""
Task Status Endpoint Module

The one endpoint for status-only task updates (the task board drag-and-drop).
Full task edits go through ``PUT /tasks/{task_id}``.
"""
from fastapi import APIRouter, BackgroundTasks, Depends
from sqlmodel import Session
from app.api import deps
from app.api.v1.endpoints.tasks import get_task_or_404, to_task_read
from app.core.errors import PermissionDenied
from app.db.session import get_db
from app.models.base import utcnow
from app.models.employee import Employee
from app.schemas.task import TaskResponse, TaskStatusUpdate
from app.services.assignments import AssignmentEngine
from app.services.notifier import TaskNotifier

router = APIRouter()


@router.put("/{task_id}", response_model=TaskResponse)
def update_task_status(
    task_id: int,
    body: TaskStatusUpdate,
    background_tasks: BackgroundTasks,
    db: Session = Depends(get_db),
    engine: AssignmentEngine = Depends(deps.get_assignment_engine),
    notifier: TaskNotifier = Depends(deps.get_notifier),
    current_user: Employee = Depends(deps.get_current_active_user),
):
    """
    Set a task's status.

    Managers and admins may update any task; other employees only tasks they are
    assigned to. Every assigned employee receives one ``taskUpdated`` event.
    """
    task = get_task_or_404(db, task_id)
    assignees = engine.get_assignees(task_id)

    if not current_user.is_privileged and current_user.id not in assignees.employee_ids:
        raise PermissionDenied("Not authorized to update this task")

    task.status = body.status
    task.updated_at = utcnow()
    db.add(task)
    db.commit()
    db.refresh(task)

    background_tasks.add_task(notifier.task_updated, task_id, task.status, assignees.employee_ids)
    return TaskResponse(task=to_task_read(task, assignees))
