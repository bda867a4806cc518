from datetime import date
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from typing import List, Optional
from hrms.database import get_db
from hrms.models.user import User
from hrms.routers.auth_deps import ensure_self_or_hr, get_current_employee_id, get_current_user, require_hr
from hrms.schemas.attendance import AttendanceActionResponse, AttendanceResponse, AttendanceSummaryResponse
from hrms.services.attendance_service import AttendanceRecordStore, month_bounds

router = APIRouter(prefix="/attendance", tags=["attendance"])


@router.post("/check-in", response_model=AttendanceActionResponse)
def check_in(db: Session = Depends(get_db), employee_id: int = Depends(get_current_employee_id)):
    record = AttendanceRecordStore(db).check_in(employee_id)
    return {"message": "Checked in successfully", "attendance": record}


@router.post("/check-out", response_model=AttendanceActionResponse)
def check_out(db: Session = Depends(get_db), employee_id: int = Depends(get_current_employee_id)):
    record = AttendanceRecordStore(db).check_out(employee_id)
    return {"message": "Checked out successfully", "attendance": record}


@router.get("/my-attendance", response_model=List[AttendanceResponse])
def get_my_attendance(
    month: Optional[int] = Query(None, ge=1, le=12),
    year: Optional[int] = Query(None, ge=1970),
    db: Session = Depends(get_db),
    employee_id: int = Depends(get_current_employee_id),
):
    date_range = month_bounds(year, month) if month and year else None
    return AttendanceRecordStore(db).query(employee_id=employee_id, date_range=date_range)


@router.get("/all", response_model=List[AttendanceResponse])
def get_all_attendance(
    day: Optional[date] = Query(None, alias="date"),
    employee_id: Optional[int] = Query(None, alias="employeeId"),
    start: Optional[date] = None,
    end: Optional[date] = None,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_hr()),
):
    # A missing bound leaves that side of the range open
    date_range = (start or date.min, end or date.max) if start or end else None
    return AttendanceRecordStore(db).query(employee_id=employee_id, day=day, date_range=date_range)


@router.get("/summary", response_model=AttendanceSummaryResponse)
def get_my_summary(
    month: int = Query(..., ge=1, le=12),
    year: int = Query(..., ge=1970),
    db: Session = Depends(get_db),
    employee_id: int = Depends(get_current_employee_id),
):
    return AttendanceRecordStore(db).summary(employee_id, month, year)


@router.get("/summary/{employee_id}", response_model=AttendanceSummaryResponse)
def get_employee_summary(
    employee_id: int,
    month: int = Query(..., ge=1, le=12),
    year: int = Query(..., ge=1970),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    ensure_self_or_hr(current_user, employee_id)
    return AttendanceRecordStore(db).summary(employee_id, month, year)
