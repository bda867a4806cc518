from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from typing import List
from hrms.core.enums import UserRole
from hrms.core.exceptions import AccessDeniedError
from hrms.database import get_db
from hrms.models.user import User
from hrms.routers.auth_deps import ensure_self_or_hr, get_current_user, require_admin, require_hr
from hrms.schemas.employee import (
    Credentials,
    EmployeeCreate,
    EmployeeCreatedResponse,
    EmployeeResponse,
    EmployeeStatusResponse,
    EmployeeUpdate,
)
from hrms.services import employee_service
from hrms.services.attendance_service import AttendanceRecordStore

router = APIRouter(prefix="/employees", tags=["employees"])


@router.post("", response_model=EmployeeCreatedResponse, status_code=status.HTTP_201_CREATED)
def create_employee(
    payload: EmployeeCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_hr()),
):
    """Create the employee record and its login; the temporary password is only returned here."""
    provisioned = employee_service.create_employee(db, payload.model_dump())
    return EmployeeCreatedResponse(
        message="Employee created successfully",
        employee=EmployeeResponse.model_validate(provisioned.employee),
        credentials=Credentials(login_id=provisioned.login_id, temp_password=provisioned.temp_password),
    )


@router.get("", response_model=List[EmployeeResponse])
def list_employees(db: Session = Depends(get_db), current_user: User = Depends(require_hr())):
    return employee_service.list_active_employees(db)


@router.get("/status", response_model=List[EmployeeStatusResponse])
def list_employees_with_status(db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    """Today's attendance board for every active employee."""
    board = AttendanceRecordStore(db).today_status()
    return [
        EmployeeStatusResponse(
            **EmployeeResponse.model_validate(employee).model_dump(),
            attendance_status=daily_status,
        )
        for employee, daily_status in board
    ]


@router.get("/{employee_id}", response_model=EmployeeResponse)
def get_employee(employee_id: int, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    return employee_service.get_employee(db, employee_id)


@router.put("/{employee_id}", response_model=EmployeeResponse)
def update_employee(
    employee_id: int,
    payload: EmployeeUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    ensure_self_or_hr(current_user, employee_id)
    patch = payload.model_dump(exclude_unset=True)
    if current_user.role == UserRole.EMPLOYEE:
        restricted = set(patch) - employee_service.SELF_SERVICE_FIELDS
        if restricted:
            raise AccessDeniedError(f"Employees cannot change: {', '.join(sorted(restricted))}")
    return employee_service.update_employee(db, employee_id, patch)


@router.delete("/{employee_id}")
def deactivate_employee(employee_id: int, db: Session = Depends(get_db), current_user: User = Depends(require_admin())):
    employee_service.deactivate_employee(db, employee_id)
    return {"message": "Employee deactivated successfully"}
