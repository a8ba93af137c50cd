"""
User Service - Business Logic for User Operations
"""
from typing import Optional, List
from sqlalchemy.orm import Session
from solarflow.models import User, UserRole
from solarflow.schemas import UserCreate
from solarflow.core.security import get_password_hash, verify_password


class UserService:
    def __init__(self, db: Session):
        self.db = db

    def get_by_id(self, user_id: str) -> Optional[User]:
        return self.db.query(User).filter(User.id == user_id).first()

    def get_by_email(self, email: str) -> Optional[User]:
        return self.db.query(User).filter(User.email == email).first()

    def get_agents(self) -> List[User]:
        return self.db.query(User)\
            .filter(User.role == UserRole.AGENT.value)\
            .order_by(User.created_at)\
            .all()

    def create(self, user_data: UserCreate) -> User:
        if self.get_by_email(user_data.email):
            raise ValueError(f"User with email '{user_data.email}' already exists")

        user = User(
            name=user_data.name,
            email=user_data.email,
            hashed_password=get_password_hash(user_data.password),
            role=user_data.role.value
        )
        self.db.add(user)
        self.db.flush()
        return user

    def authenticate(self, email: str, password: str) -> Optional[User]:
        """Return the user when the credentials match, otherwise None"""
        user = self.get_by_email(email)
        if not user or not verify_password(password, user.hashed_password):
            return None
        return user
