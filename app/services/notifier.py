"""
Task Notification Service Module

Two separate notification mechanisms live here:

1. Live fan-out: after a task mutation commits, one addressed event is published
   per affected employee to that employee's room (``user_<id>``). Nothing is
   persisted; an employee who is offline misses the event.
2. Durable notices: ``log_notice`` appends an undirected row to the
   notifications table. It is never filtered by employee.
"""
import logging
from enum import Enum
from typing import Any, Dict, Iterable, Protocol

from sqlmodel import Session

from app.models.notification import Notification
from app.realtime.channels import room_for

logger = logging.getLogger(__name__)


class TaskEvent(str, Enum):
    ASSIGNED = "taskAssigned"
    UPDATED = "taskUpdated"
    DELETED = "taskDeleted"
    REASSIGNED = "taskReassigned"


class NotificationPublisher(Protocol):
    async def publish(self, room: str, event: str, payload: Dict[str, Any]) -> int:
        ...


class TaskNotifier:
    """
    Fans task lifecycle events out to per-employee rooms through ``publisher``.

    The publisher is injected (the app's ChannelRegistry in production, a
    recording fake in tests).
    """

    def __init__(self, publisher: NotificationPublisher):
        self.publisher = publisher

    async def fan_out(self, event: TaskEvent, employee_ids: Iterable[int], payload: Dict[str, Any]) -> int:
        """
        Publish ``payload`` once to each employee's room.

        Each publish is independent: a failure is logged and the loop moves on.
        Returns how many sockets received the event.
        """
        delivered = 0
        recipients = 0
        for employee_id in employee_ids:
            recipients += 1
            try:
                delivered += await self.publisher.publish(room_for(employee_id), event.value, payload)
            except Exception:
                logger.exception("Failed to publish %s to employee %s", event.value, employee_id)
        logger.info("%s for task %s: %d recipient(s), %d socket(s)", event.value, payload.get("taskId"), recipients, delivered)
        return delivered

    async def task_assigned(self, task_id: int, status: str, employee_ids: Iterable[int]) -> int:
        return await self.fan_out(TaskEvent.ASSIGNED, employee_ids, {
            "taskId": task_id,
            "status": status,
            "message": f"Task #{task_id} has been assigned to you",
        })

    async def task_updated(self, task_id: int, status: str, employee_ids: Iterable[int]) -> int:
        return await self.fan_out(TaskEvent.UPDATED, employee_ids, {
            "taskId": task_id,
            "status": status,
            "message": f"Task #{task_id} has been updated",
        })

    async def task_deleted(self, task_id: int, employee_ids: Iterable[int]) -> int:
        # employee_ids must be read before the assignment rows are removed
        return await self.fan_out(TaskEvent.DELETED, employee_ids, {
            "taskId": task_id,
            "message": f"Task #{task_id} has been deleted",
        })

    async def task_reassigned(self, task_id: int, employee_ids: Iterable[int]) -> int:
        return await self.fan_out(TaskEvent.REASSIGNED, employee_ids, {
            "taskId": task_id,
            "message": f"Task #{task_id} has been reassigned",
        })


def log_notice(session: Session, message: str, commit: bool = True) -> Notification:
    """Append one row to the notifications log."""
    notification = Notification(message=message)
    session.add(notification)
    if commit:
        session.commit()
        session.refresh(notification)
    return notification
