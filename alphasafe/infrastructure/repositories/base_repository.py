"""
SQLAlchemy implementation of the Base Repository.
"""

from enum import Enum
from typing import Any, Dict, Generic, Optional, Type, TypeVar

import structlog
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from alphasafe.core.exceptions import InternalException
from alphasafe.domain.repositories.base import BaseRepository
from alphasafe.infrastructure.database import Base

ModelType = TypeVar("ModelType", bound=Base)

logger = structlog.get_logger(__name__)


def to_column_values(obj_in: Any) -> Dict[str, Any]:
    """Turn a pydantic payload (or dict) into plain column values.

    Only fields that were explicitly set are kept, so partial updates never
    touch unset columns. Enum members are stored by value.
    """
    if hasattr(obj_in, "model_dump"):
        data = obj_in.model_dump(exclude_unset=True)
    else:
        data = dict(obj_in)

    def plain(value):
        if isinstance(value, Enum):
            return value.value
        if isinstance(value, list):
            return [plain(item) for item in value]
        return value

    return {key: plain(value) for key, value in data.items()}


class SQLAlchemyRepository(BaseRepository[ModelType], Generic[ModelType]):
    """Generic repository implementation for SQLAlchemy models."""

    def __init__(self, db: Session, model: Type[ModelType]):
        self.db = db
        self.model = model

    def commit(self) -> None:
        """Commit the unit of work; roll back and hide internals on failure."""
        try:
            self.db.commit()
        except SQLAlchemyError:
            self.db.rollback()
            logger.exception("Database commit failed", model=self.model.__name__)
            raise InternalException()

    def get_by_id(self, id: int) -> Optional[ModelType]:
        return self.db.get(self.model, id)

    def create(self, obj_in: Any) -> ModelType:
        db_obj = self.model(**to_column_values(obj_in))
        self.db.add(db_obj)
        self.commit()
        self.db.refresh(db_obj)
        return db_obj

    def update(self, db_obj: ModelType, obj_in: Any) -> ModelType:
        for field, value in to_column_values(obj_in).items():
            if hasattr(db_obj, field):
                setattr(db_obj, field, value)

        self.db.add(db_obj)
        self.commit()
        self.db.refresh(db_obj)
        return db_obj

    def delete(self, id: int) -> Optional[ModelType]:
        obj = self.db.get(self.model, id)
        if obj:
            self.db.delete(obj)
            self.commit()
        return obj
