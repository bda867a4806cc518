from pydantic import BaseModel, ConfigDict
from datetime import date, datetime
from typing import Optional
from hrms.core.enums import AttendanceStatus


class AttendanceResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    employee_id: int
    date: date
    check_in_time: Optional[datetime] = None
    check_out_time: Optional[datetime] = None
    work_hours: float
    extra_hours: float
    status: AttendanceStatus


class AttendanceActionResponse(BaseModel):
    message: str
    attendance: AttendanceResponse


class AttendanceSummaryResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    total_days: int
    present_days: int
    absent_days: int
    leave_days: int
    total_work_hours: float
    total_extra_hours: float
