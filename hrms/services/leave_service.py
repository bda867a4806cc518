"""
Leave Service Layer

Application and review of leave requests.

Flow:
- apply: validate range -> check balance (no debit) -> persist as Pending
- review: Pending -> Approved | Rejected, exactly once. Approval debits the
  ledger and marks every day of the range OnLeave in the same transaction.
"""
import math
from datetime import date, datetime, timedelta, timezone
from typing import Iterator, List, Optional

from sqlalchemy.orm import Session

from hrms.core.enums import LeaveStatus, LeaveType
from hrms.core.exceptions import AlreadyReviewed, InvalidDateRange, LeaveRequestNotFound
from hrms.models.leave_request import LeaveRequest
from hrms.models.user import User
from hrms.repositories.base import RecordStore
from hrms.services.attendance_service import AttendanceRecordStore
from hrms.services.base import BaseService
from hrms.services.leave_ledger import LeaveBalanceLedger


def count_leave_days(start_date: date, end_date: date) -> int:
    """Inclusive day count: ceil((end - start) / 1 day) + 1."""
    return math.ceil((end_date - start_date) / timedelta(days=1)) + 1


def iter_days(start_date: date, end_date: date) -> Iterator[date]:
    day = start_date
    while day <= end_date:
        yield day
        day += timedelta(days=1)


class LeaveService(BaseService):
    def __init__(self, db: Session):
        super().__init__(db)
        self.requests = RecordStore(db, LeaveRequest)
        self.ledger = LeaveBalanceLedger(db)
        self.attendance = AttendanceRecordStore(db)

    def apply(
        self,
        employee_id: int,
        leave_type: LeaveType,
        start_date: date,
        end_date: date,
        reason: str,
        attachment: Optional[str] = None,
    ) -> LeaveRequest:
        if end_date < start_date:
            raise InvalidDateRange()

        number_of_days = count_leave_days(start_date, end_date)
        self.ledger.check_and_reserve(employee_id, leave_type, number_of_days)

        leave = self.requests.create(
            employee_id=employee_id,
            leave_type=leave_type,
            start_date=start_date,
            end_date=end_date,
            number_of_days=number_of_days,
            reason=reason,
            attachment=attachment,
            status=LeaveStatus.PENDING,
        )
        self.commit()
        self.db.refresh(leave)
        self._logger.info(
            f"Leave {leave.id} applied by employee {employee_id}: "
            f"{leave_type.value} {start_date}..{end_date} ({number_of_days} day(s))"
        )
        return leave

    def review(
        self,
        request_id: int,
        reviewer: User,
        status: LeaveStatus,
        review_comments: Optional[str] = None,
    ) -> LeaveRequest:
        if status not in (LeaveStatus.APPROVED, LeaveStatus.REJECTED):
            raise ValueError(f"Invalid review status: {status}")

        leave = self.requests.get(request_id)
        if leave is None:
            raise LeaveRequestNotFound(request_id)
        if leave.status != LeaveStatus.PENDING:
            raise AlreadyReviewed()

        try:
            self.requests.update(
                leave,
                status=status,
                reviewed_by=reviewer.id,
                reviewed_at=datetime.now(timezone.utc),
                review_comments=review_comments,
            )
            if status == LeaveStatus.APPROVED:
                self.ledger.debit(leave.employee_id, leave.leave_type, leave.number_of_days)
                for day in iter_days(leave.start_date, leave.end_date):
                    self.attendance.mark_on_leave(leave.employee_id, day)
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise

        self.db.refresh(leave)
        self._logger.info(f"Leave {leave.id} {status.value.lower()} by user {reviewer.id}")
        return leave

    def get(self, request_id: int) -> LeaveRequest:
        leave = self.requests.get(request_id)
        if leave is None:
            raise LeaveRequestNotFound(request_id)
        return leave

    def list_for_employee(self, employee_id: int) -> List[LeaveRequest]:
        return self.requests.find(
            order_by=(LeaveRequest.created_at.desc(), LeaveRequest.id.desc()),
            employee_id=employee_id,
        )

    def list_all(self, status: Optional[LeaveStatus] = None, employee_id: Optional[int] = None) -> List[LeaveRequest]:
        filters = {}
        if status is not None:
            filters["status"] = status
        if employee_id is not None:
            filters["employee_id"] = employee_id
        return self.requests.find(
            order_by=(LeaveRequest.created_at.desc(), LeaveRequest.id.desc()),
            **filters,
        )
