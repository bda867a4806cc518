import pytest
from datetime import date

from hrms.core.enums import AttendanceStatus, LeaveStatus, LeaveType
from hrms.core.exceptions import (
    AlreadyReviewed,
    EmployeeNotFound,
    InsufficientBalance,
    InvalidDateRange,
    LeaveRequestNotFound,
)
from hrms.models.attendance import AttendanceRecord
from hrms.services.leave_ledger import LeaveBalanceLedger
from hrms.services.leave_service import LeaveService, count_leave_days, iter_days


def _apply(db_session, employee, leave_type=LeaveType.PAID, start=date(2024, 1, 10), end=date(2024, 1, 12)):
    return LeaveService(db_session).apply(employee.id, leave_type, start, end, "Family trip")


def test_count_leave_days_is_inclusive():
    assert count_leave_days(date(2024, 1, 10), date(2024, 1, 10)) == 1
    assert count_leave_days(date(2024, 1, 10), date(2024, 1, 12)) == 3
    assert count_leave_days(date(2024, 2, 28), date(2024, 3, 1)) == 3
    assert list(iter_days(date(2024, 1, 30), date(2024, 2, 1))) == [
        date(2024, 1, 30), date(2024, 1, 31), date(2024, 2, 1)
    ]


def test_apply_creates_pending_request_without_debit(db_session, employee):
    leave = _apply(db_session, employee)

    assert leave.status == LeaveStatus.PENDING
    assert leave.number_of_days == 3
    assert LeaveBalanceLedger(db_session).balances(employee.id)["paidLeave"] == 20


def test_apply_rejects_inverted_range(db_session, employee):
    with pytest.raises(InvalidDateRange):
        _apply(db_session, employee, start=date(2024, 1, 12), end=date(2024, 1, 10))


def test_apply_rejects_insufficient_balance(db_session, employee):
    with pytest.raises(InsufficientBalance) as exc_info:
        _apply(db_session, employee, leave_type=LeaveType.SICK, start=date(2024, 1, 1), end=date(2024, 1, 11))

    assert exc_info.value.details == {"leave_type": "SickLeave", "available": 10, "requested": 11}


def test_unpaid_leave_is_never_limited(db_session, employee):
    leave = _apply(db_session, employee, leave_type=LeaveType.UNPAID, start=date(2024, 1, 1), end=date(2024, 3, 31))
    assert leave.number_of_days == 91


def test_apply_for_unknown_employee(db_session):
    with pytest.raises(EmployeeNotFound):
        LeaveService(db_session).apply(4242, LeaveType.PAID, date(2024, 1, 1), date(2024, 1, 1), "x")


def test_approval_debits_and_marks_attendance(db_session, employee, hr_user):
    leave = _apply(db_session, employee)

    reviewed = LeaveService(db_session).review(leave.id, hr_user, LeaveStatus.APPROVED, "Enjoy")

    assert reviewed.status == LeaveStatus.APPROVED
    assert reviewed.reviewed_by == hr_user.id
    assert reviewed.reviewed_at is not None
    assert reviewed.review_comments == "Enjoy"
    assert LeaveBalanceLedger(db_session).balances(employee.id)["paidLeave"] == 17

    records = (
        db_session.query(AttendanceRecord)
        .filter(AttendanceRecord.employee_id == employee.id)
        .order_by(AttendanceRecord.date)
        .all()
    )
    assert [r.date for r in records] == [date(2024, 1, 10), date(2024, 1, 11), date(2024, 1, 12)]
    assert all(r.status == AttendanceStatus.ON_LEAVE for r in records)


def test_rejection_leaves_balance_and_attendance_untouched(db_session, employee, hr_user):
    leave = _apply(db_session, employee)

    reviewed = LeaveService(db_session).review(leave.id, hr_user, LeaveStatus.REJECTED)

    assert reviewed.status == LeaveStatus.REJECTED
    assert LeaveBalanceLedger(db_session).balances(employee.id)["paidLeave"] == 20
    assert db_session.query(AttendanceRecord).count() == 0


def test_second_review_is_rejected(db_session, employee, hr_user):
    leave = _apply(db_session, employee)
    service = LeaveService(db_session)
    service.review(leave.id, hr_user, LeaveStatus.APPROVED)

    with pytest.raises(AlreadyReviewed):
        service.review(leave.id, hr_user, LeaveStatus.REJECTED)

    assert LeaveBalanceLedger(db_session).balances(employee.id)["paidLeave"] == 17


def test_review_requires_terminal_status(db_session, employee, hr_user):
    leave = _apply(db_session, employee)
    with pytest.raises(ValueError):
        LeaveService(db_session).review(leave.id, hr_user, LeaveStatus.PENDING)


def test_review_unknown_request(db_session, hr_user):
    with pytest.raises(LeaveRequestNotFound):
        LeaveService(db_session).review(999, hr_user, LeaveStatus.APPROVED)


def test_balance_floors_at_zero_when_pending_requests_overlap(db_session, employee, hr_user):
    """Both requests pass the application check; the second approval cannot go negative."""
    service = LeaveService(db_session)
    first = _apply(db_session, employee, leave_type=LeaveType.SICK, start=date(2024, 2, 1), end=date(2024, 2, 7))
    second = _apply(db_session, employee, leave_type=LeaveType.SICK, start=date(2024, 3, 1), end=date(2024, 3, 7))

    service.review(first.id, hr_user, LeaveStatus.APPROVED)
    service.review(second.id, hr_user, LeaveStatus.APPROVED)

    assert LeaveBalanceLedger(db_session).balances(employee.id)["sickLeave"] == 0


def test_unpaid_approval_does_not_touch_balance(db_session, employee, hr_user):
    leave = _apply(db_session, employee, leave_type=LeaveType.UNPAID)
    LeaveService(db_session).review(leave.id, hr_user, LeaveStatus.APPROVED)

    assert LeaveBalanceLedger(db_session).balances(employee.id)["unpaidLeave"] == 0
    assert db_session.query(AttendanceRecord).count() == 3


def test_listing_newest_first_and_filters(db_session, make_employee, hr_user):
    alice = make_employee("Alice", "Ng").employee
    bob = make_employee("Bob", "Ortiz").employee
    service = LeaveService(db_session)
    a1 = _apply(db_session, alice, start=date(2024, 1, 1), end=date(2024, 1, 1))
    a2 = _apply(db_session, alice, start=date(2024, 2, 1), end=date(2024, 2, 1))
    b1 = _apply(db_session, bob, start=date(2024, 1, 5), end=date(2024, 1, 5))
    service.review(a1.id, hr_user, LeaveStatus.APPROVED)

    assert [l.id for l in service.list_for_employee(alice.id)] == [a2.id, a1.id]
    assert [l.id for l in service.list_all(status=LeaveStatus.PENDING)] == [b1.id, a2.id]
    assert [l.id for l in service.list_all(employee_id=bob.id)] == [b1.id]
