"""
Authentication API Routes
"""
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
import logging

from solarflow.core.database import get_db
from solarflow.core.security import create_access_token, get_current_user
from solarflow.schemas import LoginRequest, LoginResponse, UserResponse
from solarflow.services.user_service import UserService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["Authentication"])


@router.post("/login", response_model=LoginResponse)
async def login(
    login_data: LoginRequest,
    db: Session = Depends(get_db)
):
    """Login and get access token"""
    user = UserService(db).authenticate(login_data.email, login_data.password)

    if not user:
        logger.info(f"Failed login attempt for '{login_data.email}'")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid credentials"
        )

    access_token = create_access_token(data={"sub": user.id, "role": user.role})
    logger.info(f"User {user.id} logged in")

    return LoginResponse(
        user=UserResponse.model_validate(user),
        access_token=access_token
    )


@router.get("/me", response_model=UserResponse)
async def get_me(current_user=Depends(get_current_user)):
    """Get the authenticated user"""
    return current_user
