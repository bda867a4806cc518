from pydantic import BaseModel, ConfigDict, Field, field_validator
from datetime import date, datetime
from typing import Optional
from hrms.core.enums import LeaveStatus, LeaveType


class LeaveRequestCreate(BaseModel):
    leave_type: LeaveType
    start_date: date
    end_date: date
    reason: str = Field(..., min_length=1)
    attachment: Optional[str] = None


class LeaveRequestResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    employee_id: int
    leave_type: LeaveType
    start_date: date
    end_date: date
    number_of_days: int
    reason: str
    attachment: Optional[str] = None
    status: LeaveStatus
    reviewed_by: Optional[int] = None
    reviewed_at: Optional[datetime] = None
    review_comments: Optional[str] = None
    created_at: Optional[datetime] = None


class LeaveReviewRequest(BaseModel):
    status: LeaveStatus
    review_comments: Optional[str] = None

    @field_validator("status")
    @classmethod
    def status_must_be_terminal(cls, v: LeaveStatus) -> LeaveStatus:
        if v == LeaveStatus.PENDING:
            raise ValueError("Invalid status")
        return v


class LeaveActionResponse(BaseModel):
    message: str
    leave: LeaveRequestResponse
