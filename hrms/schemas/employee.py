from pydantic import BaseModel, ConfigDict, EmailStr, Field
from datetime import date
from typing import Any, Dict, Optional
from hrms.core.enums import DailyStatus, Gender


class Address(BaseModel):
    street: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    zip_code: Optional[str] = None
    country: Optional[str] = None


class BankDetails(BaseModel):
    account_number: Optional[str] = None
    bank_name: Optional[str] = None
    ifsc_code: Optional[str] = None
    pan: Optional[str] = None
    uan: Optional[str] = None


class LeaveBalances(BaseModel):
    paidLeave: int
    sickLeave: int
    unpaidLeave: int


class EmployeeCreate(BaseModel):
    first_name: str = Field(..., min_length=1)
    last_name: str = Field(..., min_length=1)
    email: EmailStr
    phone: Optional[str] = None
    date_of_birth: Optional[date] = None
    gender: Optional[Gender] = None
    nationality: Optional[str] = None
    department: Optional[str] = None
    position: Optional[str] = None
    manager_id: Optional[int] = None
    date_of_joining: date
    address: Optional[Address] = None
    bank_details: Optional[BankDetails] = None


class EmployeeUpdate(BaseModel):
    """All fields optional; only those sent are applied."""
    first_name: Optional[str] = Field(None, min_length=1)
    last_name: Optional[str] = Field(None, min_length=1)
    phone: Optional[str] = None
    date_of_birth: Optional[date] = None
    gender: Optional[Gender] = None
    nationality: Optional[str] = None
    department: Optional[str] = None
    position: Optional[str] = None
    manager_id: Optional[int] = None
    date_of_joining: Optional[date] = None
    address: Optional[Address] = None
    bank_details: Optional[BankDetails] = None
    profile_picture: Optional[str] = None
    resume: Optional[str] = None
    paid_leave: Optional[int] = Field(None, ge=0)
    sick_leave: Optional[int] = Field(None, ge=0)
    unpaid_leave: Optional[int] = Field(None, ge=0)


class EmployeeResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    first_name: str
    last_name: str
    full_name: str
    initials: str
    email: str
    phone: Optional[str] = None
    date_of_birth: Optional[date] = None
    gender: Optional[Gender] = None
    nationality: Optional[str] = None
    company: Optional[str] = None
    department: Optional[str] = None
    position: Optional[str] = None
    manager_id: Optional[int] = None
    date_of_joining: date
    serial_number: int
    address: Optional[Dict[str, Any]] = None
    bank_details: Optional[Dict[str, Any]] = None
    profile_picture: Optional[str] = None
    resume: Optional[str] = None
    leave_balances: LeaveBalances
    is_active: bool


class Credentials(BaseModel):
    login_id: str
    temp_password: str


class EmployeeCreatedResponse(BaseModel):
    message: str
    employee: EmployeeResponse
    credentials: Credentials


class EmployeeStatusResponse(EmployeeResponse):
    attendance_status: DailyStatus
