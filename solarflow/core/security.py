"""
Security Module - Authentication & Access Gate
"""
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Optional, List
import logging

from jose import JWTError, jwt
from passlib.context import CryptContext
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.orm import Session

from solarflow.core.config import settings
from solarflow.core.database import get_db
from solarflow.models import UserRole

logger = logging.getLogger(__name__)

# Password hashing
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

# Bearer token scheme
bearer_scheme = HTTPBearer(auto_error=False)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a password against a hash"""
    return pwd_context.verify(plain_password, hashed_password)


def get_password_hash(password: str) -> str:
    """Hash a password"""
    return pwd_context.hash(password)


def create_access_token(data: dict, expires_delta: Optional[timedelta] = None) -> str:
    """Create a signed JWT access token"""
    to_encode = data.copy()
    if expires_delta:
        expire = datetime.now(timezone.utc) + expires_delta
    else:
        expire = datetime.now(timezone.utc) + timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    to_encode.update({"exp": expire})
    return jwt.encode(to_encode, settings.SECRET_KEY, algorithm=settings.ALGORITHM)


def decode_access_token(token: str) -> Optional[dict]:
    """Decode and validate a JWT token"""
    try:
        return jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
    except JWTError:
        return None


def _unauthorized(detail: str = "Authentication required") -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


@dataclass(frozen=True)
class Scope:
    """Visibility scope of the calling user.

    Admins see every client, task and stock request; agents only the rows
    assigned to them.
    """
    user_id: str
    role: str

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN.value

    @property
    def agent_id(self) -> Optional[str]:
        """Id to filter assigned rows by, or None for an unrestricted scope"""
        return None if self.is_admin else self.user_id


async def get_current_user(
    credentials: HTTPAuthorizationCredentials = Depends(bearer_scheme),
    db: Session = Depends(get_db)
):
    """
    Dependency to get the current authenticated user from the bearer token.
    The role always comes from the stored user, never from the token.
    """
    from solarflow.services.user_service import UserService

    if not credentials or not credentials.credentials:
        raise _unauthorized()

    payload = decode_access_token(credentials.credentials)
    if payload is None:
        raise _unauthorized("Invalid or expired token")

    user_id = payload.get("sub")
    if user_id is None:
        raise _unauthorized("Invalid token payload")

    user = UserService(db).get_by_id(user_id)
    if user is None:
        raise _unauthorized("User not found")

    if user.role not in (UserRole.ADMIN.value, UserRole.AGENT.value):
        logger.warning(f"Rejected user {user.id} with unknown role '{user.role}'")
        raise _unauthorized("Invalid user role")

    return user


async def get_scope(current_user=Depends(get_current_user)) -> Scope:
    """Dependency that turns the authenticated user into a visibility scope"""
    return Scope(user_id=current_user.id, role=current_user.role)


class RoleChecker:
    """Dependency for checking the caller's role"""

    def __init__(self, allowed_roles: List[str]):
        self.allowed_roles = set(allowed_roles)

    def __call__(self, user=Depends(get_current_user)):
        if user.role not in self.allowed_roles:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="Access denied"
            )
        return user


require_admin = RoleChecker([UserRole.ADMIN.value])
