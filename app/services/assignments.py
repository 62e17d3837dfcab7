"""
Task Assignment Service Module

Keeps the task_assignments table consistent with the set of employees a caller
wants on a task, and derives the (employee_ids, employee_names) view that every
task response carries.

Assignment is replace-all: the new set supersedes the old one, it is never merged
with it. The delete and insert halves of a replacement run in one transaction
with the task row locked, so two concurrent replacements on the same task
serialize and the stored set is always one of the requested sets.
"""
import logging
from dataclasses import dataclass, field
from typing import Dict, Iterable, List

from sqlalchemy import delete, insert
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, select

from app.core.errors import NotFound
from app.models.employee import Employee
from app.models.task import Task, TaskAssignment

logger = logging.getLogger(__name__)


@dataclass
class Assignees:
    """Denormalized view of a task's assignees, ids and names in matching order."""
    employee_ids: List[int] = field(default_factory=list)
    employee_names: List[str] = field(default_factory=list)


def _distinct(employee_ids: Iterable[int]) -> List[int]:
    # Order is not significant; sorting keeps inserts deterministic
    return sorted({int(employee_id) for employee_id in employee_ids})


class AssignmentEngine:
    """
    Assignment operations bound to one database session.

    The session is passed in explicitly so the engine can run against any
    store (request-scoped session in the API, a test session in tests).
    """

    def __init__(self, session: Session):
        self.session = session

    def _lock_task(self, task_id: int) -> None:
        # FOR UPDATE serializes writers on backends that support it;
        # SQLite serializes writers at the database level instead
        statement = select(Task.task_id).where(Task.task_id == task_id).with_for_update()
        if self.session.exec(statement).first() is None:
            raise NotFound("Task not found")

    def set_assignees(self, task_id: int, employee_ids: Iterable[int], commit: bool = True) -> Assignees:
        """
        Replace the assignee set of ``task_id`` with ``employee_ids``.

        Duplicates collapse to one row and an empty collection unassigns everyone.
        Raises NotFound (writing nothing) if the task does not exist. Any failure
        rolls back both halves of the replacement.

        With ``commit=False`` the caller owns the transaction; this lets a handler
        fold a task field update and the replacement into one commit.
        """
        wanted = _distinct(employee_ids)
        try:
            self._lock_task(task_id)
            self.session.exec(delete(TaskAssignment).where(TaskAssignment.task_id == task_id))
            # pysqlite opens the write transaction at the DELETE, not the SELECT;
            # check again so a task removed in between is still NotFound
            self._lock_task(task_id)
            if wanted:
                self.session.exec(
                    insert(TaskAssignment),
                    params=[{"task_id": task_id, "employee_id": employee_id} for employee_id in wanted],
                )
            if commit:
                self.session.commit()
            else:
                self.session.flush()
        except (NotFound, SQLAlchemyError):
            self.session.rollback()
            raise

        logger.info("Task %s assignees replaced with %s", task_id, wanted)
        return self.get_assignees(task_id)

    def get_assignees(self, task_id: int) -> Assignees:
        """Assignees of one task; empty lists when nobody is assigned."""
        return self.get_assignees_for_tasks([task_id]).get(task_id, Assignees())

    def get_assignees_for_tasks(self, task_ids: Iterable[int]) -> Dict[int, Assignees]:
        """
        Batched lookup used when listing tasks: a single join for all ``task_ids``.

        Every requested id is present in the result; ids without assignments
        (or without a task) map to empty lists.
        """
        ids = list({int(task_id) for task_id in task_ids})
        result = {task_id: Assignees() for task_id in ids}
        if not ids:
            return result

        statement = (
            select(TaskAssignment.task_id, TaskAssignment.employee_id, Employee.name)
            .join(Employee, Employee.id == TaskAssignment.employee_id)
            .where(TaskAssignment.task_id.in_(ids))
            .order_by(TaskAssignment.task_id, TaskAssignment.employee_id)
        )
        for task_id, employee_id, employee_name in self.session.exec(statement):
            result[task_id].employee_ids.append(employee_id)
            result[task_id].employee_names.append(employee_name)
        return result

    def clear_assignees(self, task_ids: Iterable[int]) -> None:
        """
        Delete every assignment row of ``task_ids`` ahead of deleting the tasks.

        Does not commit: the caller deletes the tasks in the same transaction.
        """
        ids = list(task_ids)
        if ids:
            self.session.exec(delete(TaskAssignment).where(TaskAssignment.task_id.in_(ids)))
