"""
Attendance Endpoints Module

Daily present/absent summary for the dashboard, and clock-in/clock-out for the
current employee.
"""
import logging
from datetime import datetime, time, timedelta
from fastapi import APIRouter, Depends, status
from sqlalchemy import func
from sqlmodel import Session, select
from app.api import deps
from app.core.errors import InvalidRequest
from app.db.session import get_db
from app.models.attendance import ClockRecord
from app.models.base import utcnow
from app.models.employee import Employee
from app.schemas.attendance import (
    AttendanceResponse, AttendanceSummary, ClockRecordRead, ClockRecordResponse,
)

router = APIRouter()
logger = logging.getLogger(__name__)


def today_bounds(now: datetime):
    start = datetime.combine(now.date(), time.min, tzinfo=now.tzinfo)
    return start, start + timedelta(days=1)


@router.get("", response_model=AttendanceResponse)
def read_attendance(
    db: Session = Depends(get_db),
    current_user: Employee = Depends(deps.get_current_active_user),
):
    """
    Today's attendance (UTC): employees who clocked in at least once are present,
    everyone else is absent.
    """
    start, end = today_bounds(utcnow())
    present = db.exec(
        select(func.count(func.distinct(ClockRecord.employee_id)))
        .where(ClockRecord.clock_in >= start, ClockRecord.clock_in < end)
    ).one()
    total = db.exec(select(func.count(Employee.id))).one()
    return AttendanceResponse(attendance=AttendanceSummary(present=present, absent=max(total - present, 0)))


def open_record(db: Session, employee_id: int):
    statement = (
        select(ClockRecord)
        .where(ClockRecord.employee_id == employee_id, ClockRecord.clock_out.is_(None))
        .order_by(ClockRecord.clock_in.desc())
    )
    return db.exec(statement).first()


@router.post("/clock-in", response_model=ClockRecordResponse, status_code=status.HTTP_201_CREATED)
def clock_in(
    db: Session = Depends(get_db),
    current_user: Employee = Depends(deps.get_current_active_user),
):
    if open_record(db, current_user.id) is not None:
        raise InvalidRequest("Already clocked in")

    record = ClockRecord(employee_id=current_user.id)
    db.add(record)
    db.commit()
    db.refresh(record)
    logger.info("Employee %s clocked in", current_user.id)
    return ClockRecordResponse(record=ClockRecordRead.model_validate(record))


@router.post("/clock-out", response_model=ClockRecordResponse)
def clock_out(
    db: Session = Depends(get_db),
    current_user: Employee = Depends(deps.get_current_active_user),
):
    record = open_record(db, current_user.id)
    if record is None:
        raise InvalidRequest("Not clocked in")

    record.clock_out = utcnow()
    db.add(record)
    db.commit()
    db.refresh(record)
    logger.info("Employee %s clocked out", current_user.id)
    return ClockRecordResponse(record=ClockRecordRead.model_validate(record))
