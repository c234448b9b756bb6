"""
SQLAlchemy Implementation of Client Repository.
"""

from typing import List, Optional

from sqlalchemy import or_
from sqlalchemy.orm import Session

from alphasafe.domain.models.client import Client
from alphasafe.domain.models.intervention import Intervention
from alphasafe.domain.repositories.client_repository import ClientRepository
from alphasafe.infrastructure.repositories.base_repository import SQLAlchemyRepository


def like_pattern(term: str) -> str:
    """Substring LIKE pattern with the wildcard characters escaped."""
    escaped = term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"


class SQLAlchemyClientRepository(SQLAlchemyRepository[Client], ClientRepository):
    """Client repository implementation using SQLAlchemy."""

    def __init__(self, db: Session, model=Client):
        super().__init__(db, model)

    def search(self, term: Optional[str] = None) -> List[Client]:
        query = self.db.query(Client)

        if term and term.strip():
            pattern = like_pattern(term.strip())
            query = query.filter(
                or_(
                    Client.name.ilike(pattern, escape="\\"),
                    Client.nif.ilike(pattern, escape="\\"),
                )
            )

        return query.order_by(Client.created_at.desc(), Client.id.desc()).all()

    def has_interventions(self, client_id: int) -> bool:
        return (
            self.db.query(Intervention.id)
            .filter(Intervention.client_id == client_id)
            .first()
            is not None
        )
