"""
Authentication helpers: password hashing, JWT access tokens and
generated login credentials for new employees.
"""
import logging
import secrets
import string
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

import jwt
from passlib.context import CryptContext
from sqlalchemy.orm import Session

from hrms.core.config import settings
from hrms.core.enums import UserRole
from hrms.core.exceptions import AuthenticationError
from hrms.models.user import User
from hrms.repositories.base import RecordStore

logger = logging.getLogger(__name__)

pwd_context = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")

TEMP_PASSWORD_ALPHABET = string.ascii_letters + string.digits + "!@#$"


def get_password_hash(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    return pwd_context.verify(plain_password, hashed_password)


def create_access_token(data: Dict[str, Any], expires_delta: Optional[timedelta] = None) -> str:
    to_encode = data.copy()
    expire = datetime.now(timezone.utc) + (
        expires_delta or timedelta(minutes=settings.access_token_expire_minutes)
    )
    to_encode.update({"exp": expire, "type": "access"})
    return jwt.encode(to_encode, settings.secret_key, algorithm=settings.jwt_algorithm)


def decode_access_token(token: str) -> Optional[Dict[str, Any]]:
    """
    Returns the payload, {"error": "TOKEN_EXPIRED"} for an expired token,
    or None when the token cannot be trusted at all.
    """
    try:
        return jwt.decode(token, settings.secret_key, algorithms=[settings.jwt_algorithm])
    except jwt.ExpiredSignatureError:
        return {"error": "TOKEN_EXPIRED"}
    except jwt.PyJWTError:
        return None


def generate_login_id(company_code: str, initials: str, year_of_joining: int, serial_number: int) -> str:
    """e.g. OIJDOD + JD + 2024 + 0007 -> OIJDODJD20240007"""
    return f"{company_code}{initials}{year_of_joining}{serial_number:04d}"


def generate_temp_password(length: int = 8) -> str:
    return "".join(secrets.choice(TEMP_PASSWORD_ALPHABET) for _ in range(length))


def create_account(
    db: Session,
    login_id: str,
    password: str,
    role: UserRole,
    employee_id: Optional[int] = None,
    is_first_login: bool = False,
) -> User:
    """Create a login directly (bootstrap admins, HR accounts)."""
    user = RecordStore(db, User).create(
        login_id=login_id,
        hashed_password=get_password_hash(password),
        role=role,
        employee_id=employee_id,
        is_first_login=is_first_login,
    )
    try:
        db.commit()
    except Exception:
        db.rollback()
        raise
    db.refresh(user)
    logger.info(f"Account {login_id} created with role {role.value}")
    return user


def authenticate(db: Session, login_id: str, password: str) -> User:
    user = RecordStore(db, User).find_one(login_id=login_id)
    if user is None or not verify_password(password, user.hashed_password):
        logger.warning(f"Failed login attempt for {login_id}")
        raise AuthenticationError("Invalid credentials")
    if not user.is_active:
        logger.warning(f"Login refused for inactive user {login_id}")
        raise AuthenticationError("User is inactive")
    return user


def login(db: Session, login_id: str, password: str) -> Dict[str, Any]:
    user = authenticate(db, login_id, password)
    token = create_access_token(data={"sub": str(user.id), "role": user.role.value})
    logger.info(f"Login successful for {login_id}")
    return {"access_token": token, "token_type": "bearer", "user": user}


def change_password(db: Session, user: User, current_password: str, new_password: str) -> None:
    if not verify_password(current_password, user.hashed_password):
        raise AuthenticationError("Current password is incorrect")
    user.hashed_password = get_password_hash(new_password)
    user.is_first_login = False
    try:
        db.commit()
    except Exception:
        db.rollback()
        raise
    logger.info(f"Password changed for {user.login_id}")
