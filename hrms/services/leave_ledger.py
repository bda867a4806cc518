"""
Leave Balance Ledger

Per-employee balances for each leave type:
- check_and_reserve validates at application time and never mutates
- debit runs only on approval and floors the balance at zero
UnpaidLeave is unlimited: it is never checked and never debited.
There is no credit/restore path (no cancellation flow exists).
"""
from typing import Dict

from hrms.core.enums import LeaveType
from hrms.core.exceptions import EmployeeNotFound, InsufficientBalance
from hrms.models.employee import Employee
from hrms.repositories.base import RecordStore
from hrms.services.base import BaseService


class LeaveBalanceLedger(BaseService):
    def __init__(self, db):
        super().__init__(db)
        self.employees = RecordStore(db, Employee)

    def _employee(self, employee_id: int) -> Employee:
        employee = self.employees.get(employee_id)
        if employee is None:
            raise EmployeeNotFound(employee_id)
        return employee

    def balances(self, employee_id: int) -> Dict[str, int]:
        return self._employee(employee_id).leave_balances

    def check_and_reserve(self, employee_id: int, leave_type: LeaveType, number_of_days: int) -> None:
        employee = self._employee(employee_id)
        if leave_type == LeaveType.UNPAID:
            return

        available = employee.get_balance(leave_type)
        if available < number_of_days:
            self._logger.warning(
                f"Leave rejected for employee {employee_id}: {leave_type.value} "
                f"requested {number_of_days}, available {available}"
            )
            raise InsufficientBalance(leave_type.value, available, number_of_days)

    def debit(self, employee_id: int, leave_type: LeaveType, number_of_days: int) -> int:
        """Subtract approved days; returns the new balance. Does not commit."""
        employee = self._employee(employee_id)
        if leave_type == LeaveType.UNPAID:
            return employee.get_balance(leave_type)

        remaining = max(0, employee.get_balance(leave_type) - number_of_days)
        employee.set_balance(leave_type, remaining)
        self.db.flush()
        self._logger.info(f"Debited {number_of_days} {leave_type.value} day(s) from employee {employee_id}, {remaining} left")
        return remaining
