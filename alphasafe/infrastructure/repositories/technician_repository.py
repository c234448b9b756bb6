"""
SQLAlchemy Implementation of Technician Repository.
"""

from typing import List

from sqlalchemy.orm import Session

from alphasafe.domain.models.technician import Technician
from alphasafe.domain.repositories.technician_repository import TechnicianRepository
from alphasafe.infrastructure.repositories.base_repository import SQLAlchemyRepository


class SQLAlchemyTechnicianRepository(SQLAlchemyRepository[Technician], TechnicianRepository):
    """Technician repository implementation using SQLAlchemy."""

    def __init__(self, db: Session, model=Technician):
        super().__init__(db, model)

    def list_newest_first(self) -> List[Technician]:
        return (
            self.db.query(Technician)
            .order_by(Technician.created_at.desc(), Technician.id.desc())
            .all()
        )

    def get_by_name(self, name: str) -> List[Technician]:
        return self.db.query(Technician).filter(Technician.name == name).all()
