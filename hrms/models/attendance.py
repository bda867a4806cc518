from sqlalchemy import Column, Integer, Float, Date, DateTime, Enum, ForeignKey, UniqueConstraint, event
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
from hrms.database import Base
from hrms.core.config import settings
from hrms.core.enums import AttendanceStatus
from hrms.services import time_calculator


class AttendanceRecord(Base):
    __tablename__ = "attendance_records"
    # One record per employee per calendar day
    __table_args__ = (
        UniqueConstraint("employee_id", "date", name="uq_attendance_employee_date"),
    )

    id = Column(Integer, primary_key=True, index=True)
    employee_id = Column(Integer, ForeignKey("employees.id"), nullable=False, index=True)
    date = Column(Date, nullable=False, index=True)
    check_in_time = Column(DateTime, nullable=True)
    check_out_time = Column(DateTime, nullable=True)
    work_hours = Column(Float, default=0.0, nullable=False)
    extra_hours = Column(Float, default=0.0, nullable=False)
    status = Column(Enum(AttendanceStatus), default=AttendanceStatus.ABSENT, nullable=False)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    employee = relationship("Employee", back_populates="attendance")

    def __repr__(self):
        return f"<AttendanceRecord employee={self.employee_id} date={self.date} {self.status}>"

    def apply_time_derivation(self) -> None:
        derived = time_calculator.derive(
            self.check_in_time, self.check_out_time, settings.standard_work_hours
        )
        if derived is None:
            return
        self.status = derived.status
        if self.check_out_time is not None:
            self.work_hours = derived.work_hours
            self.extra_hours = derived.extra_hours


@event.listens_for(AttendanceRecord, "before_insert")
@event.listens_for(AttendanceRecord, "before_update")
def _derive_hours(mapper, connection, target: AttendanceRecord):
    target.apply_time_derivation()
