"""
Attendance Record Store

One record per employee per calendar day. Records are written by:
- check-in / check-out (timestamps, hours derived by the model hooks)
- leave approval (status forced to OnLeave through an atomic upsert)

Records are never deleted.
"""
import calendar
from dataclasses import dataclass
from datetime import date, datetime
from typing import Dict, List, Optional, Tuple

from sqlalchemy.exc import IntegrityError

from hrms.core.enums import AttendanceStatus, DailyStatus, LeaveStatus
from hrms.core.exceptions import AlreadyCheckedIn, AlreadyCheckedOut, EmployeeNotFound, NotCheckedIn
from hrms.models.attendance import AttendanceRecord
from hrms.models.employee import Employee
from hrms.models.leave_request import LeaveRequest
from hrms.repositories.base import RecordStore
from hrms.services.base import BaseService

PAYABLE_STATUSES = (AttendanceStatus.PRESENT, AttendanceStatus.ON_LEAVE)


def month_bounds(year: int, month: int) -> Tuple[date, date]:
    """First and last calendar day of a month."""
    days = calendar.monthrange(year, month)[1]
    return date(year, month, 1), date(year, month, days)


@dataclass(frozen=True)
class AttendanceSummary:
    total_days: int
    present_days: int
    absent_days: int
    leave_days: int
    total_work_hours: float
    total_extra_hours: float


class AttendanceRecordStore(BaseService):
    def __init__(self, db):
        super().__init__(db)
        self.records = RecordStore(db, AttendanceRecord)
        self.employees = RecordStore(db, Employee)

    def _require_employee(self, employee_id: Optional[int]) -> Employee:
        employee = self.employees.get(employee_id) if employee_id is not None else None
        if employee is None:
            raise EmployeeNotFound(employee_id)
        return employee

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    def check_in(self, employee_id: int, now: Optional[datetime] = None) -> AttendanceRecord:
        now = now or datetime.now()
        today = now.date()
        self._require_employee(employee_id)

        record = self.records.find_one(employee_id=employee_id, date=today)
        if record is not None and record.check_in_time is not None:
            raise AlreadyCheckedIn()

        try:
            if record is None:
                record = self.records.create(employee_id=employee_id, date=today, check_in_time=now)
            else:
                # Existing row (e.g. marked OnLeave): only claim it while check-in is still empty
                claimed = self.records.update_if(
                    record, AttendanceRecord.check_in_time.is_(None), check_in_time=now
                )
                if not claimed:
                    raise AlreadyCheckedIn()
                record.apply_time_derivation()
            self.db.commit()
        except (IntegrityError, AlreadyCheckedIn):
            # Lost the race on (employee_id, date) to a concurrent check-in
            self.db.rollback()
            self._logger.warning(f"Concurrent check-in collided for employee {employee_id} on {today}")
            raise AlreadyCheckedIn()

        self.db.refresh(record)
        self._logger.info(f"Employee {employee_id} checked in at {now.isoformat()}")
        return record

    def check_out(self, employee_id: int, now: Optional[datetime] = None) -> AttendanceRecord:
        now = now or datetime.now()
        today = now.date()

        record = self.records.find_one(employee_id=employee_id, date=today)
        if record is None or record.check_in_time is None:
            raise NotCheckedIn()
        if record.check_out_time is not None:
            raise AlreadyCheckedOut()

        claimed = self.records.update_if(
            record,
            AttendanceRecord.check_in_time.is_not(None),
            AttendanceRecord.check_out_time.is_(None),
            check_out_time=now,
        )
        if not claimed:
            self.db.rollback()
            self._logger.warning(f"Concurrent check-out collided for employee {employee_id} on {today}")
            raise AlreadyCheckedOut()
        record.apply_time_derivation()
        self.commit()
        self.db.refresh(record)
        self._logger.info(
            f"Employee {employee_id} checked out at {now.isoformat()} "
            f"({record.work_hours:.2f}h regular, {record.extra_hours:.2f}h extra)"
        )
        return record

    def mark_on_leave(self, employee_id: int, day: date) -> AttendanceRecord:
        """
        Upsert the day's record with status OnLeave. Does not commit.

        Existing check-in/check-out timestamps are left untouched.
        """
        return self.records.upsert(
            keys={"employee_id": employee_id, "date": day},
            patch={"status": AttendanceStatus.ON_LEAVE},
            index_elements=("employee_id", "date"),
        )

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def query(
        self,
        employee_id: Optional[int] = None,
        day: Optional[date] = None,
        date_range: Optional[Tuple[date, date]] = None,
        statuses: Optional[Tuple[AttendanceStatus, ...]] = None,
    ) -> List[AttendanceRecord]:
        """Records matching all given filters, newest day first."""
        filters = {}
        if employee_id is not None:
            filters["employee_id"] = employee_id
        if day is not None:
            filters["date"] = day

        criteria = []
        if date_range is not None:
            start, end = date_range
            criteria.append(AttendanceRecord.date.between(start, end))
        if statuses:
            criteria.append(AttendanceRecord.status.in_(statuses))

        return self.records.find(
            *criteria,
            order_by=(AttendanceRecord.date.desc(), AttendanceRecord.employee_id),
            **filters,
        )

    def month_records(self, employee_id: int, month: int, year: int) -> List[AttendanceRecord]:
        return self.query(employee_id=employee_id, date_range=month_bounds(year, month))

    def count_payable_days(self, employee_id: int, month: int, year: int) -> int:
        return len(self.query(
            employee_id=employee_id,
            date_range=month_bounds(year, month),
            statuses=PAYABLE_STATUSES,
        ))

    def summary(self, employee_id: int, month: int, year: int) -> AttendanceSummary:
        records = self.month_records(employee_id, month, year)
        _, last_day = month_bounds(year, month)
        return AttendanceSummary(
            total_days=last_day.day,
            present_days=sum(1 for r in records if r.status == AttendanceStatus.PRESENT),
            absent_days=sum(1 for r in records if r.status == AttendanceStatus.ABSENT),
            leave_days=sum(1 for r in records if r.status == AttendanceStatus.ON_LEAVE),
            total_work_hours=sum(r.work_hours for r in records),
            total_extra_hours=sum(r.extra_hours for r in records),
        )

    def today_status(self, today: Optional[date] = None) -> List[Tuple[Employee, DailyStatus]]:
        """Status board for all active employees; an approved leave covering today wins."""
        today = today or date.today()
        employees = self.employees.find(is_active=True, order_by=(Employee.id,))

        on_leave = {
            leave.employee_id
            for leave in RecordStore(self.db, LeaveRequest).find(
                LeaveRequest.start_date <= today,
                LeaveRequest.end_date >= today,
                status=LeaveStatus.APPROVED,
            )
        }
        records: Dict[int, AttendanceRecord] = {r.employee_id: r for r in self.query(day=today)}

        board = []
        for employee in employees:
            if employee.id in on_leave:
                status = DailyStatus.ON_LEAVE
            elif employee.id not in records:
                status = DailyStatus.NOT_CHECKED_IN
            elif records[employee.id].check_in_time is not None:
                status = DailyStatus.PRESENT
            else:
                status = DailyStatus(records[employee.id].status.value)
            board.append((employee, status))
        return board
