"""Shared enumerations.

Kept outside the model modules so the pure calculators can use them
without importing the ORM layer.
"""
import enum


class UserRole(str, enum.Enum):
    """
    Account roles.

    - ADMIN: full access, including salary structures and payroll
    - HR: employee records, attendance overview, leave review
    - EMPLOYEE: self-service (own attendance, leave, salary)
    """
    ADMIN = "Admin"
    HR = "HR"
    EMPLOYEE = "Employee"


class Gender(str, enum.Enum):
    MALE = "Male"
    FEMALE = "Female"
    OTHER = "Other"


class AttendanceStatus(str, enum.Enum):
    PRESENT = "Present"
    ABSENT = "Absent"
    ON_LEAVE = "OnLeave"


class DailyStatus(str, enum.Enum):
    """Today's status as shown on the employee board (superset of AttendanceStatus)."""
    PRESENT = "Present"
    ABSENT = "Absent"
    ON_LEAVE = "OnLeave"
    NOT_CHECKED_IN = "NotCheckedIn"


class LeaveType(str, enum.Enum):
    PAID = "PaidLeave"
    SICK = "SickLeave"
    UNPAID = "UnpaidLeave"


class LeaveStatus(str, enum.Enum):
    PENDING = "Pending"
    APPROVED = "Approved"
    REJECTED = "Rejected"
