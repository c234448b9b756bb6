"""
SQLAlchemy Implementation of Intervention Repository.
"""

from typing import Dict, List, Optional

import structlog
from sqlalchemy import delete, func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, joinedload, selectinload

from alphasafe.core.exceptions import InternalException
from alphasafe.domain.models.intervention import Intervention
from alphasafe.domain.models.photo import Photo
from alphasafe.domain.repositories.intervention_repository import InterventionRepository
from alphasafe.domain.schemas.intervention import InterventionFilter
from alphasafe.infrastructure.repositories.base_repository import SQLAlchemyRepository
from alphasafe.infrastructure.repositories.client_repository import like_pattern

logger = structlog.get_logger(__name__)


class SQLAlchemyInterventionRepository(SQLAlchemyRepository[Intervention], InterventionRepository):
    """Intervention repository implementation using SQLAlchemy."""

    def __init__(self, db: Session, model=Intervention):
        super().__init__(db, model)

    def _with_relations(self):
        return self.db.query(Intervention).options(
            joinedload(Intervention.client),
            selectinload(Intervention.photos),
        )

    def get_with_relations(self, id: int) -> Optional[Intervention]:
        return self._with_relations().filter(Intervention.id == id).first()

    def list_filtered(self, filters: InterventionFilter) -> List[Intervention]:
        query = self._with_relations()

        if filters.status:
            query = query.filter(Intervention.status == filters.status.value)
        if filters.technician:
            query = query.filter(Intervention.technician.ilike(like_pattern(filters.technician), escape="\\"))
        if filters.client_id:
            query = query.filter(Intervention.client_id == filters.client_id)

        return query.order_by(Intervention.created_at.desc(), Intervention.id.desc()).all()

    def _delete_photos(self, intervention_id: int) -> int:
        result = self.db.execute(delete(Photo).where(Photo.intervention_id == intervention_id))
        return result.rowcount

    def _delete_intervention(self, intervention_id: int) -> int:
        result = self.db.execute(delete(Intervention).where(Intervention.id == intervention_id))
        return result.rowcount

    def delete_cascade(self, id: int) -> bool:
        if self.db.get(Intervention, id) is None:
            return False

        try:
            photos_deleted = self._delete_photos(id)
            self._delete_intervention(id)
            self.db.commit()
        except SQLAlchemyError:
            self.db.rollback()
            logger.exception("Intervention delete rolled back", intervention_id=id)
            raise InternalException()
        except Exception:
            self.db.rollback()
            raise

        # Drop the stale identity-map entry for the deleted row
        self.db.expire_all()
        logger.info("Intervention deleted", intervention_id=id, photos_deleted=photos_deleted)
        return True

    def count_by_status(self) -> Dict[str, int]:
        rows = (
            self.db.query(Intervention.status, func.count(Intervention.id))
            .group_by(Intervention.status)
            .all()
        )
        return {status: count for status, count in rows}

    def add_photo(self, intervention_id: int, url: str) -> Photo:
        photo = Photo(intervention_id=intervention_id, url=url)
        self.db.add(photo)
        self.commit()
        self.db.refresh(photo)
        return photo

    def get_photo(self, photo_id: int) -> Optional[Photo]:
        return self.db.get(Photo, photo_id)

    def list_photos(self, intervention_id: int) -> List[Photo]:
        return (
            self.db.query(Photo)
            .filter(Photo.intervention_id == intervention_id)
            .order_by(Photo.id)
            .all()
        )

    def delete_photo(self, photo_id: int) -> bool:
        photo = self.get_photo(photo_id)
        if photo is None:
            return False
        self.db.delete(photo)
        self.commit()
        return True
