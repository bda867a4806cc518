from pydantic import BaseModel, ConfigDict, Field
from typing import Dict, Optional


class SalaryItem(BaseModel):
    is_percentage: bool = False
    percentage: float = Field(0.0, ge=0)
    value: float = Field(0.0, ge=0)


class SalaryItemInput(BaseModel):
    """Partial item: missing fields are filled from the default template of that key."""
    is_percentage: Optional[bool] = None
    percentage: Optional[float] = Field(None, ge=0)
    value: Optional[float] = Field(None, ge=0)


class SalaryStructureUpsert(BaseModel):
    employee_id: int
    base_wage: float = Field(..., ge=0)
    components: Optional[Dict[str, SalaryItemInput]] = None
    deductions: Optional[Dict[str, SalaryItemInput]] = None

    def component_overrides(self) -> Optional[Dict[str, dict]]:
        return _overrides(self.components)

    def deduction_overrides(self) -> Optional[Dict[str, dict]]:
        return _overrides(self.deductions)


def _overrides(items: Optional[Dict[str, SalaryItemInput]]) -> Optional[Dict[str, dict]]:
    if items is None:
        return None
    return {name: item.model_dump(exclude_none=True) for name, item in items.items()}


class SalaryStructureResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    employee_id: int
    base_wage: float
    components: Dict[str, SalaryItem]
    deductions: Dict[str, SalaryItem]
    total_salary: float
    monthly_salary: float


class SalaryActionResponse(BaseModel):
    message: str
    salary: SalaryStructureResponse


class PayrollRequest(BaseModel):
    employee_id: int
    month: int = Field(..., ge=1, le=12)
    year: int = Field(..., ge=1970, le=9999)


class PayrollResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    employee_id: int
    month: int
    year: int
    total_days: int
    present_days: int
    payable_ratio: float
    base_salary: float
    payable_salary: float
    components: Dict[str, SalaryItem]
    deductions: Dict[str, SalaryItem]
