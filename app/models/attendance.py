"""
Attendance Model Module

Clock records store one clock-in (and optional clock-out) per employee shift.
They are only ever read in aggregate for the daily present/absent summary.
"""
from typing import Optional
from datetime import datetime
from sqlmodel import SQLModel, Field

from app.models.base import UTCDateTime, utcnow


class ClockRecord(SQLModel, table=True):
    __tablename__ = "clock_records"

    id: Optional[int] = Field(default=None, primary_key=True)
    employee_id: int = Field(foreign_key="employee.id", nullable=False, index=True)
    clock_in: datetime = Field(default_factory=utcnow, sa_type=UTCDateTime, nullable=False, index=True)
    clock_out: Optional[datetime] = Field(default=None, sa_type=UTCDateTime)
