"""
Payroll Service Layer

Salary structure management and on-demand payroll calculation.

Architecture:
- Router -> Service (this module) -> Models
- Structure totals are recomputed by SalaryComposer on every save (model hook)
- Payroll results are computed per request and never persisted
"""
import logging
from dataclasses import dataclass, field
from decimal import Decimal, ROUND_HALF_UP
from typing import Any, Dict, List, Mapping, Optional

from sqlalchemy.orm import Session

from hrms.core.exceptions import EmployeeNotFound, SalaryNotConfigured
from hrms.models.employee import Employee
from hrms.models.salary import SalaryStructure
from hrms.repositories.base import RecordStore
from hrms.services import salary_composer
from hrms.services.attendance_service import AttendanceRecordStore, month_bounds
from hrms.services.base import BaseService

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Salary structures
# ---------------------------------------------------------------------------

def save_salary_structure(
    db: Session,
    employee_id: int,
    base_wage: float,
    components: Optional[Mapping[str, Mapping[str, Any]]] = None,
    deductions: Optional[Mapping[str, Mapping[str, Any]]] = None,
) -> SalaryStructure:
    """
    Create or update the (single) salary structure of an employee.

    On update, only the named components/deductions are replaced; the rest
    keep their stored settings. All values are then recomputed.
    """
    if RecordStore(db, Employee).get(employee_id) is None:
        raise EmployeeNotFound(employee_id)

    store = RecordStore(db, SalaryStructure)
    salary = store.find_one(employee_id=employee_id)

    merged_components = salary_composer.merge_items(
        salary.components if salary else None, components, salary_composer.DEFAULT_COMPONENTS
    )
    merged_deductions = salary_composer.merge_items(
        salary.deductions if salary else None, deductions, salary_composer.DEFAULT_DEDUCTIONS
    )

    try:
        if salary is None:
            salary = store.create(
                employee_id=employee_id,
                base_wage=base_wage,
                components=merged_components,
                deductions=merged_deductions,
            )
        else:
            store.update(
                salary,
                base_wage=base_wage,
                components=merged_components,
                deductions=merged_deductions,
            )
        db.commit()
    except Exception:
        db.rollback()
        raise

    db.refresh(salary)
    logger.info(
        f"Salary structure saved for employee {employee_id}: "
        f"total={salary.total_salary:.2f} monthly={salary.monthly_salary:.2f}"
    )
    return salary


def get_salary_structure(db: Session, employee_id: int) -> SalaryStructure:
    salary = RecordStore(db, SalaryStructure).find_one(employee_id=employee_id)
    if salary is None:
        raise SalaryNotConfigured(employee_id)
    return salary


def list_salary_structures(db: Session) -> List[SalaryStructure]:
    return RecordStore(db, SalaryStructure).find(order_by=(SalaryStructure.employee_id,))


def delete_salary_structure(db: Session, employee_id: int) -> None:
    salary = get_salary_structure(db, employee_id)
    try:
        db.delete(salary)
        db.commit()
    except Exception:
        db.rollback()
        raise
    logger.info(f"Salary structure deleted for employee {employee_id}")


# ---------------------------------------------------------------------------
# Payroll
# ---------------------------------------------------------------------------

CENT = Decimal("0.01")


def round_money(value: float) -> float:
    """Two decimals, ties away from zero (2.675 -> 2.68, not banker's rounding)."""
    return float(Decimal(str(value)).quantize(CENT, rounding=ROUND_HALF_UP))


@dataclass(frozen=True)
class PayrollResult:
    employee_id: int
    month: int
    year: int
    total_days: int
    present_days: int
    payable_ratio: float
    base_salary: float
    payable_salary: float
    components: Dict[str, Any] = field(default_factory=dict)
    deductions: Dict[str, Any] = field(default_factory=dict)


class PayrollCalculator(BaseService):
    """
    Combines a month's attendance with the salary structure.

    Working days are calendar days (no weekend or holiday exclusion); days
    marked Present or OnLeave are payable.
    """

    def __init__(self, db: Session):
        super().__init__(db)
        self.attendance = AttendanceRecordStore(db)

    def calculate(self, employee_id: int, month: int, year: int) -> PayrollResult:
        salary = get_salary_structure(self.db, employee_id)

        _, last_day = month_bounds(year, month)
        working_days = last_day.day
        present_days = self.attendance.count_payable_days(employee_id, month, year)
        payable_ratio = present_days / working_days

        result = PayrollResult(
            employee_id=employee_id,
            month=month,
            year=year,
            total_days=working_days,
            present_days=present_days,
            payable_ratio=payable_ratio,
            base_salary=salary.monthly_salary,
            payable_salary=round_money(salary.monthly_salary * payable_ratio),
            components=dict(salary.components),
            deductions=dict(salary.deductions),
        )
        self._logger.info(
            f"Payroll computed for employee {employee_id} {month:02d}/{year}: "
            f"{present_days}/{working_days} days, payable {result.payable_salary:.2f}"
        )
        return result
