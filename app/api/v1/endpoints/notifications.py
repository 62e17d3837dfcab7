"""
Notification Endpoints Module

Read and append the undirected notifications log shown on the dashboard.
"""
from fastapi import APIRouter, Depends, status
from sqlmodel import Session, select
from app.api import deps
from app.db.session import get_db
from app.models.employee import Employee
from app.models.notification import Notification
from app.schemas.notification import (
    NotificationCreate, NotificationListResponse, NotificationRead, NotificationResponse,
)
from app.services.notifier import log_notice

router = APIRouter()


@router.get("", response_model=NotificationListResponse)
def list_notifications(
    db: Session = Depends(get_db),
    current_user: Employee = Depends(deps.get_current_active_user),
):
    """All notices, newest first."""
    statement = select(Notification).order_by(Notification.created_at.desc(), Notification.id.desc())
    notifications = db.exec(statement).all()
    return NotificationListResponse(notifications=[NotificationRead.model_validate(n) for n in notifications])


@router.post("", response_model=NotificationResponse, status_code=status.HTTP_201_CREATED)
def create_notification(
    notification_in: NotificationCreate,
    db: Session = Depends(get_db),
    current_user: Employee = Depends(deps.get_current_active_user),
):
    notification = log_notice(db, notification_in.message)
    return NotificationResponse(notification=NotificationRead.model_validate(notification))
