from sqlalchemy import Column, Integer, Float, DateTime, ForeignKey, JSON, CheckConstraint, event
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
from hrms.database import Base
from hrms.services import salary_composer


class SalaryStructure(Base):
    __tablename__ = "salary_structures"
    __table_args__ = (
        CheckConstraint("base_wage >= 0", name="ck_salary_base_wage_non_negative"),
    )

    id = Column(Integer, primary_key=True, index=True)
    employee_id = Column(Integer, ForeignKey("employees.id"), nullable=False, unique=True, index=True)
    base_wage = Column(Float, nullable=False)  # annual

    # name -> {"is_percentage", "percentage", "value"}
    components = Column(JSON, nullable=False, default=lambda: dict(salary_composer.DEFAULT_COMPONENTS))
    deductions = Column(JSON, nullable=False, default=lambda: dict(salary_composer.DEFAULT_DEDUCTIONS))

    total_salary = Column(Float, default=0.0, nullable=False)
    monthly_salary = Column(Float, default=0.0, nullable=False)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    employee = relationship("Employee", back_populates="salary")

    def __repr__(self):
        return f"<SalaryStructure employee={self.employee_id} base={self.base_wage}>"

    def recompute(self) -> None:
        breakdown = salary_composer.compose(
            self.base_wage or 0.0,
            self.components or salary_composer.DEFAULT_COMPONENTS,
            self.deductions or salary_composer.DEFAULT_DEDUCTIONS,
        )
        # Reassign (not mutate) so the JSON columns are flagged dirty
        self.components = breakdown.components
        self.deductions = breakdown.deductions
        self.total_salary = breakdown.total_salary
        self.monthly_salary = breakdown.monthly_salary


@event.listens_for(SalaryStructure, "before_insert")
@event.listens_for(SalaryStructure, "before_update")
def _recompute_totals(mapper, connection, target: SalaryStructure):
    target.recompute()
