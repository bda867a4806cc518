"""
Salary & Payroll Router

Handles HTTP endpoints for salary structures and payroll calculation.
All business logic is delegated to the payroll service layer.
"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from typing import List

from hrms.database import get_db
from hrms.models.user import User
from hrms.routers.auth_deps import ensure_self_or_hr, get_current_user, require_admin
from hrms.schemas.salary import (
    PayrollRequest,
    PayrollResponse,
    SalaryActionResponse,
    SalaryStructureResponse,
    SalaryStructureUpsert,
)
from hrms.services import payroll_service


router = APIRouter(
    prefix="/salary",
    tags=["salary"],
)


@router.get("", response_model=List[SalaryStructureResponse])
def list_salary_structures(db: Session = Depends(get_db), current_user: User = Depends(require_admin())):
    return payroll_service.list_salary_structures(db)


@router.post("", response_model=SalaryActionResponse)
def save_salary_structure(
    payload: SalaryStructureUpsert,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin()),
):
    """
    Create or update an employee's salary structure.

    Components and deductions not named in the payload keep their stored
    (or default) configuration.
    """
    salary = payroll_service.save_salary_structure(
        db,
        payload.employee_id,
        payload.base_wage,
        components=payload.component_overrides(),
        deductions=payload.deduction_overrides(),
    )
    return {"message": "Salary structure saved successfully", "salary": salary}


@router.post("/payroll", response_model=PayrollResponse)
def calculate_payroll(
    payload: PayrollRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin()),
):
    """Payable salary for one month, prorated by attendance. Nothing is stored."""
    return payroll_service.PayrollCalculator(db).calculate(payload.employee_id, payload.month, payload.year)


@router.get("/{employee_id}", response_model=SalaryStructureResponse)
def get_salary_structure(employee_id: int, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    ensure_self_or_hr(current_user, employee_id)
    return payroll_service.get_salary_structure(db, employee_id)


@router.delete("/{employee_id}")
def delete_salary_structure(employee_id: int, db: Session = Depends(get_db), current_user: User = Depends(require_admin())):
    payroll_service.delete_salary_structure(db, employee_id)
    return {"message": "Salary structure deleted successfully"}
