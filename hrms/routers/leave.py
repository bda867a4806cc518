from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session
from typing import List, Optional
from hrms.core.enums import LeaveStatus
from hrms.database import get_db
from hrms.models.user import User
from hrms.routers.auth_deps import get_current_employee_id, require_hr
from hrms.schemas.employee import LeaveBalances
from hrms.schemas.leave import (
    LeaveActionResponse,
    LeaveRequestCreate,
    LeaveRequestResponse,
    LeaveReviewRequest,
)
from hrms.services.leave_ledger import LeaveBalanceLedger
from hrms.services.leave_service import LeaveService

router = APIRouter(
    prefix="/leave",
    tags=["leave"]
)


@router.post("/apply", response_model=LeaveActionResponse, status_code=status.HTTP_201_CREATED)
def apply_for_leave(
    payload: LeaveRequestCreate,
    db: Session = Depends(get_db),
    employee_id: int = Depends(get_current_employee_id),
):
    """
    Submit a leave request for the caller.

    The balance is checked here but only debited when HR approves.
    """
    leave = LeaveService(db).apply(
        employee_id,
        payload.leave_type,
        payload.start_date,
        payload.end_date,
        payload.reason,
        attachment=payload.attachment,
    )
    return {"message": "Leave request submitted successfully", "leave": leave}


@router.get("/my-leaves", response_model=List[LeaveRequestResponse])
def get_my_leaves(db: Session = Depends(get_db), employee_id: int = Depends(get_current_employee_id)):
    return LeaveService(db).list_for_employee(employee_id)


@router.get("/balance", response_model=LeaveBalances)
def get_leave_balance(db: Session = Depends(get_db), employee_id: int = Depends(get_current_employee_id)):
    return LeaveBalanceLedger(db).balances(employee_id)


@router.get("/all", response_model=List[LeaveRequestResponse])
def get_all_leaves(
    status_filter: Optional[LeaveStatus] = Query(None, alias="status"),
    employee_id: Optional[int] = None,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_hr()),
):
    return LeaveService(db).list_all(status=status_filter, employee_id=employee_id)


@router.get("/{leave_id}", response_model=LeaveRequestResponse)
def get_leave(leave_id: int, db: Session = Depends(get_db), current_user: User = Depends(require_hr())):
    return LeaveService(db).get(leave_id)


@router.put("/{leave_id}/review", response_model=LeaveActionResponse)
def review_leave(
    leave_id: int,
    payload: LeaveReviewRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_hr()),
):
    leave = LeaveService(db).review(leave_id, current_user, payload.status, payload.review_comments)
    return {"message": f"Leave request {payload.status.value.lower()}", "leave": leave}
