from typing import Any, Dict, Optional


class AppException(Exception):
    def __init__(
        self,
        message: str,
        status_code: int = 400,
        error_code: str = "BUSINESS_ERROR",
        details: Optional[Dict[str, Any]] = None
    ):
        self.message = message
        self.status_code = status_code
        self.error_code = error_code
        self.details = details
        super().__init__(self.message)


# --- Attendance state machine ---

class AlreadyCheckedIn(AppException):
    def __init__(self, message: str = "Already checked in today"):
        super().__init__(message=message, status_code=400, error_code="ALREADY_CHECKED_IN")


class AlreadyCheckedOut(AppException):
    def __init__(self, message: str = "Already checked out today"):
        super().__init__(message=message, status_code=400, error_code="ALREADY_CHECKED_OUT")


class NotCheckedIn(AppException):
    def __init__(self, message: str = "Must check in first"):
        super().__init__(message=message, status_code=400, error_code="NOT_CHECKED_IN")


# --- Leave workflow ---

class InsufficientBalance(AppException):
    def __init__(self, leave_type: str, available: int, requested: int):
        super().__init__(
            message="Insufficient leave balance",
            status_code=400,
            error_code="INSUFFICIENT_BALANCE",
            details={"leave_type": leave_type, "available": available, "requested": requested}
        )


class InvalidDateRange(AppException):
    def __init__(self, message: str = "End date cannot be before start date"):
        super().__init__(message=message, status_code=400, error_code="INVALID_DATE_RANGE")


class AlreadyReviewed(AppException):
    def __init__(self, message: str = "Leave request already reviewed"):
        super().__init__(message=message, status_code=400, error_code="ALREADY_REVIEWED")


# --- Missing referents ---

class EmployeeNotFound(AppException):
    def __init__(self, employee_id: Optional[int] = None):
        super().__init__(
            message="Employee not found",
            status_code=404,
            error_code="EMPLOYEE_NOT_FOUND",
            details={"employee_id": employee_id} if employee_id is not None else None
        )


class SalaryNotConfigured(AppException):
    def __init__(self, employee_id: Optional[int] = None):
        super().__init__(
            message="Salary structure not found",
            status_code=404,
            error_code="SALARY_NOT_CONFIGURED",
            details={"employee_id": employee_id} if employee_id is not None else None
        )


class LeaveRequestNotFound(AppException):
    def __init__(self, request_id: Optional[int] = None):
        super().__init__(
            message="Leave request not found",
            status_code=404,
            error_code="LEAVE_REQUEST_NOT_FOUND",
            details={"request_id": request_id} if request_id is not None else None
        )


# --- Auth ---

class AuthenticationError(AppException):
    def __init__(self, message: str = "Could not validate credentials"):
        super().__init__(
            message=message,
            status_code=401,
            error_code="AUTH_FAILED"
        )


class AccessDeniedError(AppException):
    """Custom permission error. Named AccessDeniedError to avoid shadowing Python's built-in PermissionError."""
    def __init__(self, message: str = "Insufficient permissions"):
        super().__init__(
            message=message,
            status_code=403,
            error_code="PERMISSION_DENIED"
        )
