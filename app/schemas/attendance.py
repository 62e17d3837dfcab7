from datetime import datetime
from typing import Optional
from pydantic import BaseModel, ConfigDict


class AttendanceSummary(BaseModel):
    present: int
    absent: int


class AttendanceResponse(BaseModel):
    success: bool = True
    attendance: AttendanceSummary


class ClockRecordRead(BaseModel):
    id: int
    employee_id: int
    clock_in: datetime
    clock_out: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class ClockRecordResponse(BaseModel):
    success: bool = True
    record: ClockRecordRead
