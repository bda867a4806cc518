"""
Employee Model.
Employees are never physically deleted; deactivation flips is_active.
"""
from sqlalchemy import Column, Integer, String, Date, DateTime, Boolean, ForeignKey, JSON, Enum
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
from hrms.database import Base
from hrms.core.config import settings
from hrms.core.enums import Gender, LeaveType


class Employee(Base):
    __tablename__ = "employees"

    id = Column(Integer, primary_key=True, index=True)

    # Basic info
    first_name = Column(String, nullable=False)
    last_name = Column(String, nullable=False)
    initials = Column(String, nullable=False)
    email = Column(String, unique=True, index=True, nullable=False)
    phone = Column(String, nullable=True)
    date_of_birth = Column(Date, nullable=True)
    gender = Column(Enum(Gender), nullable=True)
    nationality = Column(String, nullable=True)

    # Company info
    company = Column(String, default=lambda: settings.company_code)
    department = Column(String, nullable=True, index=True)
    position = Column(String, nullable=True)
    manager_id = Column(Integer, ForeignKey("employees.id"), nullable=True)
    date_of_joining = Column(Date, nullable=False)
    serial_number = Column(Integer, nullable=False, unique=True)

    # Free-form sub-documents
    address = Column(JSON, nullable=True)
    bank_details = Column(JSON, nullable=True)

    # Opaque file references
    profile_picture = Column(String, default="")
    resume = Column(String, nullable=True)

    # Leave balances (days)
    paid_leave = Column(Integer, default=lambda: settings.leave_defaults.paid_leave, nullable=False)
    sick_leave = Column(Integer, default=lambda: settings.leave_defaults.sick_leave, nullable=False)
    unpaid_leave = Column(Integer, default=lambda: settings.leave_defaults.unpaid_leave, nullable=False)

    is_active = Column(Boolean, default=True, nullable=False)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    # Relationships
    manager = relationship("Employee", remote_side=[id])
    user = relationship("User", back_populates="employee", uselist=False)
    attendance = relationship("AttendanceRecord", back_populates="employee")
    leave_requests = relationship("LeaveRequest", back_populates="employee")
    salary = relationship("SalaryStructure", back_populates="employee", uselist=False)

    # LeaveType -> balance column
    BALANCE_COLUMNS = {
        LeaveType.PAID: "paid_leave",
        LeaveType.SICK: "sick_leave",
        LeaveType.UNPAID: "unpaid_leave",
    }

    def __repr__(self):
        return f"<Employee {self.id}: {self.full_name}>"

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"

    @property
    def leave_balances(self) -> dict:
        return {
            "paidLeave": self.paid_leave,
            "sickLeave": self.sick_leave,
            "unpaidLeave": self.unpaid_leave,
        }

    def get_balance(self, leave_type: LeaveType) -> int:
        return getattr(self, self.BALANCE_COLUMNS[leave_type]) or 0

    def set_balance(self, leave_type: LeaveType, value: int) -> None:
        setattr(self, self.BALANCE_COLUMNS[leave_type], value)
