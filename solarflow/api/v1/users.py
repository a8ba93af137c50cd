"""
User Management API Routes (admin only)
"""
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from typing import List
import logging

from solarflow.core.database import get_db
from solarflow.core.security import require_admin
from solarflow.schemas import AgentResponse, UserCreate, UserResponse
from solarflow.services.user_service import UserService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/users", tags=["Users"])


@router.get("", response_model=List[AgentResponse])
async def list_agents(
    db: Session = Depends(get_db),
    current_user=Depends(require_admin)
):
    """List agents an admin can assign clients and tasks to"""
    return UserService(db).get_agents()


@router.post("", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
async def create_user(
    user_data: UserCreate,
    db: Session = Depends(get_db),
    current_user=Depends(require_admin)
):
    """Create a new admin or agent account"""
    try:
        user = UserService(db).create(user_data)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    db.commit()
    db.refresh(user)
    logger.info(f"User {user.id} ({user.role}) created by {current_user.id}")
    return user
