from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session
import logging
from hrms.core.config import settings
from hrms.core.limiter import limiter
from hrms.database import get_db
from hrms.models.user import User
from hrms.routers.auth_deps import get_current_user
from hrms.schemas.auth import LoginRequest, PasswordChange, ProfileResponse, Token, UserResponse
from hrms.services import auth as auth_service

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/auth",
    tags=["auth"]
)


@router.post("/login", response_model=Token)
@limiter.limit(settings.login_rate_limit)
def login(request: Request, login_data: LoginRequest, db: Session = Depends(get_db)):
    result = auth_service.login(db, login_data.login_id, login_data.password)
    return Token(
        access_token=result["access_token"],
        token_type=result["token_type"],
        user=UserResponse.model_validate(result["user"]),
    )


@router.post("/change-password")
def change_password(
    payload: PasswordChange,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    auth_service.change_password(db, current_user, payload.current_password, payload.new_password)
    return {"message": "Password changed successfully"}


@router.get("/profile", response_model=ProfileResponse)
def get_profile(current_user: User = Depends(get_current_user)):
    return current_user
