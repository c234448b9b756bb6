"""
SQLAlchemy Implementation of User Repository.
"""

from typing import List, Optional

from sqlalchemy import func
from sqlalchemy.orm import Session

from alphasafe.domain.models.user import User
from alphasafe.domain.repositories.user_repository import UserRepository
from alphasafe.infrastructure.repositories.base_repository import SQLAlchemyRepository


class SQLAlchemyUserRepository(SQLAlchemyRepository[User], UserRepository):
    """User repository implementation using SQLAlchemy."""

    def __init__(self, db: Session, model=User):
        super().__init__(db, model)

    def get_by_email(self, email: str) -> Optional[User]:
        return self.db.query(User).filter(User.email == email.strip().lower()).first()

    def list_all(self) -> List[User]:
        return self.db.query(User).order_by(User.created_at.desc(), User.id.desc()).all()

    def count(self) -> int:
        return self.db.query(func.count(User.id)).scalar() or 0
