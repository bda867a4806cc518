"""
Employee Service Layer

Employee records and their login accounts. Creating an employee also
provisions a User with a generated login id and temporary password.
"""
import logging
from dataclasses import dataclass
from typing import Any, Dict, List

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from hrms.core.config import settings
from hrms.core.enums import UserRole
from hrms.core.exceptions import AppException, EmployeeNotFound
from hrms.models.employee import Employee
from hrms.models.user import User
from hrms.repositories.base import RecordStore
from hrms.services import auth as auth_service

logger = logging.getLogger(__name__)

# Fields an employee may change on their own profile
SELF_SERVICE_FIELDS = {
    "phone", "date_of_birth", "gender", "nationality",
    "address", "bank_details", "profile_picture", "resume",
}


@dataclass(frozen=True)
class ProvisionedEmployee:
    employee: Employee
    login_id: str
    temp_password: str


def _next_serial_number(db: Session) -> int:
    current = db.scalar(select(func.max(Employee.serial_number)))
    return (current or 0) + 1


def create_employee(db: Session, data: Dict[str, Any]) -> ProvisionedEmployee:
    employees = RecordStore(db, Employee)
    if employees.find_one(email=data["email"]) is not None:
        raise AppException(
            message="An employee with this email already exists",
            status_code=409,
            error_code="DUPLICATE_EMPLOYEE",
        )

    initials = (data["first_name"][:1] + data["last_name"][:1]).upper()
    serial_number = _next_serial_number(db)
    login_id = auth_service.generate_login_id(
        settings.company_code, initials, data["date_of_joining"].year, serial_number
    )
    temp_password = auth_service.generate_temp_password(settings.temp_password_length)

    try:
        employee = employees.create(
            initials=initials,
            serial_number=serial_number,
            company=settings.company_code,
            **data,
        )
        RecordStore(db, User).create(
            login_id=login_id,
            hashed_password=auth_service.get_password_hash(temp_password),
            role=UserRole.EMPLOYEE,
            is_first_login=True,
            employee_id=employee.id,
        )
        db.commit()
    except Exception:
        db.rollback()
        raise

    db.refresh(employee)
    logger.info(f"Employee {employee.id} created with login {login_id}")
    return ProvisionedEmployee(employee=employee, login_id=login_id, temp_password=temp_password)


def get_employee(db: Session, employee_id: int) -> Employee:
    employee = RecordStore(db, Employee).get(employee_id)
    if employee is None:
        raise EmployeeNotFound(employee_id)
    return employee


def list_active_employees(db: Session) -> List[Employee]:
    return RecordStore(db, Employee).find(order_by=(Employee.serial_number,), is_active=True)


def update_employee(db: Session, employee_id: int, patch: Dict[str, Any]) -> Employee:
    employee = get_employee(db, employee_id)
    try:
        RecordStore(db, Employee).update(employee, **patch)
        db.commit()
    except Exception:
        db.rollback()
        raise
    db.refresh(employee)
    logger.info(f"Employee {employee_id} updated: {sorted(patch)}")
    return employee


def deactivate_employee(db: Session, employee_id: int) -> Employee:
    """Employees are never deleted; they are flagged inactive along with their login."""
    employee = get_employee(db, employee_id)
    try:
        employee.is_active = False
        if employee.user is not None:
            employee.user.is_active = False
        db.commit()
    except Exception:
        db.rollback()
        raise
    db.refresh(employee)
    logger.info(f"Employee {employee_id} deactivated")
    return employee
