"""
Auth dependencies.
Resolve the bearer token to a User and gate endpoints by role.
"""
import logging
from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.orm import Session
from typing import Callable, List
from hrms.core.enums import UserRole
from hrms.core.exceptions import AccessDeniedError, EmployeeNotFound
from hrms.database import get_db
from hrms.models.user import User
from hrms.services import auth as auth_service

logger = logging.getLogger(__name__)

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/auth/login")


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def get_current_user(token: str = Depends(oauth2_scheme), db: Session = Depends(get_db)) -> User:
    """
    Extracts and validates the current user from the JWT token.
    """
    payload = auth_service.decode_access_token(token)

    if payload is None:
        logger.warning("Authentication failed: Invalid token")
        raise _unauthorized("Invalid token")

    if payload.get("error") == "TOKEN_EXPIRED":
        logger.info("Authentication failed: Token expired")
        raise _unauthorized("TOKEN_EXPIRED")

    if payload.get("type") != "access" or payload.get("sub") is None:
        logger.warning("Authentication failed: Malformed token")
        raise _unauthorized("Invalid token")

    user = db.get(User, int(payload["sub"]))
    if user is None:
        logger.warning(f"Authentication failed: User {payload['sub']} not found in database")
        raise _unauthorized("User not found")
    if not user.is_active:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="User is inactive")
    return user


def require_role(allowed_roles: List[UserRole]) -> Callable:
    """
    Dependency factory that checks if the user has one of the allowed roles.

    Usage:
        @router.get("/admin-only")
        def admin_endpoint(user: User = Depends(require_role([UserRole.ADMIN]))):
            ...
    """
    def role_checker(current_user: User = Depends(get_current_user)):
        if current_user.role not in allowed_roles:
            raise AccessDeniedError(
                f"Access denied. Required roles: {[r.value for r in allowed_roles]}"
            )
        return current_user
    return role_checker


def require_hr():
    """Admin or HR."""
    return require_role([UserRole.ADMIN, UserRole.HR])


def require_admin():
    return require_role([UserRole.ADMIN])


def get_current_employee_id(current_user: User = Depends(get_current_user)) -> int:
    """Employee profile linked to the caller; self-service endpoints need one."""
    if current_user.employee_id is None:
        raise EmployeeNotFound()
    return current_user.employee_id


def ensure_self_or_hr(current_user: User, employee_id: int) -> None:
    if current_user.role == UserRole.EMPLOYEE and current_user.employee_id != employee_id:
        raise AccessDeniedError("Access denied")
