"""
Notification Model Module

Notifications are an undirected, durable log of system notices (project created,
project deleted, ...). They are never addressed to an employee: per-employee
delivery happens only over the live channel and is not persisted.
"""
from typing import Optional
from datetime import datetime
from sqlmodel import SQLModel, Field

from app.models.base import UTCDateTime, utcnow


class Notification(SQLModel, table=True):
    __tablename__ = "notifications"

    id: Optional[int] = Field(default=None, primary_key=True)
    message: str = Field(nullable=False)
    created_at: Optional[datetime] = Field(default_factory=utcnow, sa_type=UTCDateTime, index=True)
