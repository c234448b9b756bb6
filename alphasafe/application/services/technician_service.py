"""Technician service — staff records and their availability."""

from typing import Any, List, Optional

import structlog

from alphasafe.application.availability import unavailability_reason
from alphasafe.application.validators import validate_technician
from alphasafe.config import Settings
from alphasafe.core.exceptions import EntityNotFoundException
from alphasafe.domain.repositories.technician_repository import TechnicianRepository
from alphasafe.domain.schemas.technician import TechnicianAvailability, TechnicianRead

logger = structlog.get_logger(__name__)


class TechnicianService:
    def __init__(self, repo: TechnicianRepository, settings: Settings):
        self.repo = repo
        self.settings = settings

    def _get_or_404(self, technician_id: int):
        technician = self.repo.get_by_id(technician_id)
        if technician is None:
            raise EntityNotFoundException("Técnico não encontrado", details={"id": technician_id})
        return technician

    def list(self) -> List[TechnicianRead]:
        return [TechnicianRead.model_validate(t) for t in self.repo.list_newest_first()]

    def list_with_availability(self, target_date: Any = None) -> List[TechnicianAvailability]:
        """Every technician with the availability flag for ``target_date`` (default today)."""
        result = []
        for technician in self.repo.list_newest_first():
            reason = unavailability_reason(technician, target_date, self.settings.TIMEZONE)
            result.append(
                TechnicianAvailability.model_validate(
                    {
                        **TechnicianRead.model_validate(technician).model_dump(),
                        "available": reason is None,
                        "unavailable_reason": reason,
                    }
                )
            )
        return result

    def get(self, technician_id: int) -> TechnicianRead:
        return TechnicianRead.model_validate(self._get_or_404(technician_id))

    def get_by_name(self, name: str) -> List[TechnicianRead]:
        """Exact-name lookup; zero, one or several rows."""
        if not name:
            return []
        return [TechnicianRead.model_validate(t) for t in self.repo.get_by_name(name)]

    def create(self, payload: Any) -> TechnicianRead:
        data = validate_technician(payload)
        values = data.model_dump(exclude_unset=True)
        if values.get("created_at") is None:
            values.pop("created_at", None)
        technician = self.repo.create(values)
        logger.info("Technician created", technician_id=technician.id)
        return TechnicianRead.model_validate(technician)

    def update(self, technician_id: int, payload: Any) -> TechnicianRead:
        technician = self._get_or_404(technician_id)
        data = validate_technician(payload, partial=True)
        technician = self.repo.update(technician, data)
        logger.info("Technician updated", technician_id=technician_id)
        return TechnicianRead.model_validate(technician)

    def delete(self, technician_id: int) -> None:
        self._get_or_404(technician_id)
        self.repo.delete(technician_id)
        logger.info("Technician deleted", technician_id=technician_id)
