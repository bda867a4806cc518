from pydantic import BaseModel, ConfigDict, Field
from typing import Optional
from hrms.core.enums import UserRole
from hrms.schemas.employee import EmployeeResponse


class LoginRequest(BaseModel):
    login_id: str
    password: str


class UserResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    login_id: str
    role: UserRole
    is_first_login: bool
    employee_id: Optional[int] = None


class Token(BaseModel):
    access_token: str
    token_type: str
    user: UserResponse


class ProfileResponse(UserResponse):
    employee: Optional[EmployeeResponse] = None


class PasswordChange(BaseModel):
    current_password: str
    new_password: str = Field(..., min_length=8)
