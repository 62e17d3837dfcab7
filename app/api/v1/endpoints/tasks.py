"""
Task Endpoints Module

This module provides CRUD endpoints for tasks with multi-employee assignment.
Assignments live in the task_assignments junction table and are always written
through the AssignmentEngine. Every mutation that touches a task schedules a
live notification to the affected employees once the response is committed.
"""
from typing import Iterable, List, Optional
from fastapi import APIRouter, BackgroundTasks, Depends, status
from sqlmodel import Session, select
from app.api import deps
from app.core.errors import InvalidRequest, NotFound
from app.db.session import get_db
from app.models.base import utcnow
from app.models.employee import Category, Employee
from app.models.project import Project
from app.models.task import Task, TaskAssignment, TaskStatus
from app.schemas.common import MessageResponse
from app.schemas.employee import AssignableEmployee, AssignableEmployeeListResponse
from app.schemas.task import (
    EmployeeTaskListResponse, EmployeeTaskRead, ReassignResponse, TaskCreate,
    TaskListResponse, TaskRead, TaskReassign, TaskResponse, TaskUpdate,
)
from app.services.assignments import Assignees, AssignmentEngine
from app.services.notifier import TaskNotifier

router = APIRouter()


def to_task_read(task: Task, assignees: Assignees) -> TaskRead:
    # Validating from the row turns the stored status string back into a TaskStatus
    return TaskRead.model_validate(task, update={
        "employee_ids": assignees.employee_ids,
        "employee_names": assignees.employee_names,
    })


def get_task_or_404(db: Session, task_id: int) -> Task:
    task = db.get(Task, task_id)
    if not task:
        raise NotFound("Task not found")
    return task


def ensure_project(db: Session, project_id: int) -> None:
    if db.get(Project, project_id) is None:
        raise NotFound("Project not found")


def ensure_employees(db: Session, employee_ids: Iterable[int]) -> None:
    wanted = set(employee_ids)
    if not wanted:
        return
    found = set(db.exec(select(Employee.id).where(Employee.id.in_(wanted))).all())
    missing = sorted(wanted - found)
    if missing:
        raise NotFound(f"Employee not found: {', '.join(str(i) for i in missing)}")


def list_with_assignees(tasks: List[Task], engine: AssignmentEngine) -> List[TaskRead]:
    assignees = engine.get_assignees_for_tasks(task.task_id for task in tasks)
    return [to_task_read(task, assignees[task.task_id]) for task in tasks]


@router.get("", response_model=TaskListResponse)
def list_tasks(
    project_id: Optional[int] = None,
    db: Session = Depends(get_db),
    engine: AssignmentEngine = Depends(deps.get_assignment_engine),
    current_user: Employee = Depends(deps.get_current_active_user),
):
    """
    Retrieve tasks with their assigned employees, optionally for one project.

    Assignees for all returned tasks are fetched with a single join.
    """
    statement = select(Task)
    if project_id is not None:
        statement = statement.where(Task.project_id == project_id)
    tasks = db.exec(statement.order_by(Task.task_id)).all()
    return TaskListResponse(tasks=list_with_assignees(tasks, engine))


@router.get("/ongoing", response_model=TaskListResponse)
def list_ongoing_tasks(
    db: Session = Depends(get_db),
    engine: AssignmentEngine = Depends(deps.get_assignment_engine),
    current_user: Employee = Depends(deps.get_current_active_user),
):
    """Tasks that are not completed, nearest deadline first."""
    statement = (
        select(Task)
        .where(Task.status != TaskStatus.COMPLETED.value)
        .order_by(Task.deadline, Task.task_id)
    )
    tasks = db.exec(statement).all()
    return TaskListResponse(tasks=list_with_assignees(tasks, engine))


@router.get("/list", response_model=AssignableEmployeeListResponse)
def list_assignable_employees(
    db: Session = Depends(get_db),
    current_user: Employee = Depends(deps.get_current_active_user),
):
    """Employees available for assignment, with their category name as role."""
    statement = (
        select(Employee.id, Employee.name, Category.name)
        .outerjoin(Category, Employee.category_id == Category.id)
        .order_by(Employee.id)
    )
    employees = [
        AssignableEmployee(id=employee_id, name=name, role=role)
        for employee_id, name, role in db.exec(statement)
    ]
    return AssignableEmployeeListResponse(employees=employees)


@router.get("/employee/{employee_id}", response_model=EmployeeTaskListResponse)
def list_employee_tasks(
    employee_id: int,
    db: Session = Depends(get_db),
    current_user: Employee = Depends(deps.get_current_active_user),
):
    """Tasks assigned to one employee, nearest deadline first, with project titles."""
    statement = (
        select(Task, Project.title)
        .join(TaskAssignment, TaskAssignment.task_id == Task.task_id)
        .join(Project, Project.project_id == Task.project_id)
        .where(TaskAssignment.employee_id == employee_id)
        .order_by(Task.deadline, Task.task_id)
    )
    tasks = [
        EmployeeTaskRead.model_validate(task, update={"project_title": title})
        for task, title in db.exec(statement)
    ]
    return EmployeeTaskListResponse(tasks=tasks)


@router.get("/{task_id}", response_model=TaskResponse)
def read_task(
    task_id: int,
    db: Session = Depends(get_db),
    engine: AssignmentEngine = Depends(deps.get_assignment_engine),
    current_user: Employee = Depends(deps.get_current_active_user),
):
    task = get_task_or_404(db, task_id)
    return TaskResponse(task=to_task_read(task, engine.get_assignees(task_id)))


@router.post("", response_model=TaskResponse, status_code=status.HTTP_201_CREATED)
def create_task(
    task_in: TaskCreate,
    background_tasks: BackgroundTasks,
    db: Session = Depends(get_db),
    engine: AssignmentEngine = Depends(deps.get_assignment_engine),
    notifier: TaskNotifier = Depends(deps.get_notifier),
    current_user: Employee = Depends(deps.require_manager),
):
    """
    Create a task and assign it to ``employee_ids``.

    The task row and its assignment rows are committed together. Each assigned
    employee then receives one ``taskAssigned`` event.
    """
    ensure_project(db, task_in.project_id)
    ensure_employees(db, task_in.employee_ids)

    task = Task(**task_in.model_dump(exclude={"employee_ids"}))
    db.add(task)
    db.flush()
    assignees = engine.set_assignees(task.task_id, task_in.employee_ids, commit=False)
    db.commit()
    db.refresh(task)

    background_tasks.add_task(notifier.task_assigned, task.task_id, task.status, assignees.employee_ids)
    return TaskResponse(task=to_task_read(task, assignees))


@router.put("/{task_id}", response_model=TaskResponse)
def update_task(
    task_id: int,
    task_in: TaskUpdate,
    background_tasks: BackgroundTasks,
    db: Session = Depends(get_db),
    engine: AssignmentEngine = Depends(deps.get_assignment_engine),
    notifier: TaskNotifier = Depends(deps.get_notifier),
    current_user: Employee = Depends(deps.require_manager),
):
    """
    Replace a task's fields and, when ``employee_ids`` is given, its assignees.

    ``employee_ids`` omitted (or null) keeps the current assignees; a list, even an
    empty one, replaces them. Field update and replacement commit together. Every
    employee assigned afterwards receives one ``taskUpdated`` event.
    """
    task = get_task_or_404(db, task_id)
    ensure_project(db, task_in.project_id)
    if task_in.employee_ids is not None:
        ensure_employees(db, task_in.employee_ids)

    for key, value in task_in.model_dump(exclude={"employee_ids"}).items():
        setattr(task, key, value)
    task.updated_at = utcnow()
    db.add(task)

    if task_in.employee_ids is not None:
        engine.set_assignees(task_id, task_in.employee_ids, commit=False)
    db.commit()
    db.refresh(task)

    assignees = engine.get_assignees(task_id)
    background_tasks.add_task(notifier.task_updated, task_id, task.status, assignees.employee_ids)
    return TaskResponse(task=to_task_read(task, assignees))


@router.delete("/{task_id}", response_model=MessageResponse)
def delete_task(
    task_id: int,
    background_tasks: BackgroundTasks,
    db: Session = Depends(get_db),
    engine: AssignmentEngine = Depends(deps.get_assignment_engine),
    notifier: TaskNotifier = Depends(deps.get_notifier),
    current_user: Employee = Depends(deps.require_manager),
):
    """
    Delete a task and its assignments.

    The former assignees are read before the rows go away; each of them receives
    one ``taskDeleted`` event.
    """
    task = get_task_or_404(db, task_id)
    former_assignees = engine.get_assignees(task_id).employee_ids

    # Assignment rows first (foreign key constraint), same transaction as the task
    engine.clear_assignees([task_id])
    db.delete(task)
    db.commit()

    background_tasks.add_task(notifier.task_deleted, task_id, former_assignees)
    return MessageResponse(message="Task deleted successfully")


@router.patch("/{task_id}/reassign", response_model=ReassignResponse)
def reassign_task(
    task_id: int,
    body: TaskReassign,
    background_tasks: BackgroundTasks,
    db: Session = Depends(get_db),
    engine: AssignmentEngine = Depends(deps.get_assignment_engine),
    notifier: TaskNotifier = Depends(deps.get_notifier),
    current_user: Employee = Depends(deps.require_manager),
):
    """
    Replace the assignee set of a task.

    Unlike create and update, an empty set is rejected here: unassigning everyone
    goes through ``PUT /tasks/{task_id}`` with ``employee_ids: []``. Each employee
    assigned afterwards receives one ``taskReassigned`` event.
    """
    if not body.employee_ids:
        raise InvalidRequest("Employee IDs are required for reassignment")
    ensure_employees(db, body.employee_ids)

    assignees = engine.set_assignees(task_id, body.employee_ids)

    background_tasks.add_task(notifier.task_reassigned, task_id, assignees.employee_ids)
    return ReassignResponse(
        message="Task reassigned successfully",
        employee_ids=assignees.employee_ids,
        employee_names=assignees.employee_names,
    )
