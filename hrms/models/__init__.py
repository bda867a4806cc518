# Models package
# Importing modules here ensures they are registered with SQLAlchemy Base
from . import user, employee, attendance, leave_request, salary

# Explicit class exports for cleaner imports
from .user import User
from .employee import Employee
from .attendance import AttendanceRecord
from .leave_request import LeaveRequest
from .salary import SalaryStructure

__all__ = [
    "User",
    "Employee",
    "AttendanceRecord",
    "LeaveRequest",
    "SalaryStructure",
]
