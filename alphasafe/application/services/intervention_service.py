"""Intervention service — job lifecycle, photos and the notifications they trigger."""

from datetime import datetime, timezone
from typing import Any, List, Optional

import structlog

from alphasafe.application.notification_policy import plan_intervention_notifications
from alphasafe.application.services.notification_service import Notifier
from alphasafe.application.validators import validate_intervention, validate_payload, validate_photo
from alphasafe.config import Settings
from alphasafe.core.exceptions import EntityNotFoundException
from alphasafe.domain.enums import InterventionStatus
from alphasafe.domain.repositories.client_repository import ClientRepository
from alphasafe.domain.repositories.intervention_repository import InterventionRepository
from alphasafe.domain.repositories.technician_repository import TechnicianRepository
from alphasafe.domain.schemas.intervention import (
    InterventionFilter,
    InterventionRead,
    InterventionStats,
    PhotoRead,
)

logger = structlog.get_logger(__name__)


class InterventionService:
    def __init__(
        self,
        repo: InterventionRepository,
        client_repo: ClientRepository,
        technician_repo: TechnicianRepository,
        settings: Settings,
        notifier: Optional[Notifier] = None,
    ):
        self.repo = repo
        self.client_repo = client_repo
        self.technician_repo = technician_repo
        self.settings = settings
        self.notifier = notifier

    def _get_or_404(self, intervention_id: int):
        intervention = self.repo.get_with_relations(intervention_id)
        if intervention is None:
            raise EntityNotFoundException("Intervenção não encontrada", details={"id": intervention_id})
        return intervention

    def _ensure_client(self, client_id: int) -> None:
        if self.client_repo.get_by_id(client_id) is None:
            raise EntityNotFoundException("Cliente não encontrado", details={"id": client_id})

    def _dispatch(self, previous: Optional[InterventionRead], current: InterventionRead) -> None:
        """Plan and hand off notifications. Runs after commit; failures never reach the caller."""
        if self.notifier is None:
            return
        try:
            requests = plan_intervention_notifications(
                previous,
                current,
                self.technician_repo.list_newest_first(),
                self.settings.ADMIN_BILLING_EMAIL,
            )
            self.notifier.notify(requests)
        except Exception:
            logger.exception("Notification dispatch failed", intervention_id=current.id)

    def create(self, payload: Any) -> InterventionRead:
        data = validate_intervention(payload)
        self._ensure_client(data.client_id)

        intervention = self.repo.create(data)
        current = InterventionRead.model_validate(self._get_or_404(intervention.id))
        logger.info("Intervention created", intervention_id=current.id, status=current.status)

        self._dispatch(None, current)
        return current

    def get(self, intervention_id: int) -> InterventionRead:
        return InterventionRead.model_validate(self._get_or_404(intervention_id))

    def update(self, intervention_id: int, payload: Any) -> InterventionRead:
        intervention = self._get_or_404(intervention_id)
        previous = InterventionRead.model_validate(intervention)

        data = validate_intervention(payload, partial=True)
        if data.client_id is not None:
            self._ensure_client(data.client_id)

        values = data.model_dump(exclude_unset=True)
        values["updated_at"] = datetime.now(timezone.utc)
        self.repo.update(intervention, values)

        current = InterventionRead.model_validate(self._get_or_404(intervention_id))
        logger.info(
            "Intervention updated",
            intervention_id=intervention_id,
            status_from=previous.status,
            status_to=current.status,
        )

        self._dispatch(previous, current)
        return current

    def list(self, filters: Any = None) -> List[InterventionRead]:
        filters = validate_payload(InterventionFilter, filters or {})
        return [InterventionRead.model_validate(i) for i in self.repo.list_filtered(filters)]

    def delete(self, intervention_id: int) -> None:
        """Delete the intervention and its photos in one transaction."""
        if not self.repo.delete_cascade(intervention_id):
            raise EntityNotFoundException("Intervenção não encontrada", details={"id": intervention_id})

    def stats(self) -> InterventionStats:
        counts = self.repo.count_by_status()
        by_status = {status.value: counts.get(status.value, 0) for status in InterventionStatus}
        return InterventionStats(total=sum(counts.values()), by_status=by_status)

    def add_photo(self, intervention_id: int, payload: Any) -> PhotoRead:
        if self.repo.get_by_id(intervention_id) is None:
            raise EntityNotFoundException("Intervenção não encontrada", details={"id": intervention_id})
        data = validate_photo(payload)
        photo = self.repo.add_photo(intervention_id, data.url)
        logger.info("Photo attached", intervention_id=intervention_id, photo_id=photo.id)
        return PhotoRead.model_validate(photo)

    def list_photos(self, intervention_id: int) -> List[PhotoRead]:
        if self.repo.get_by_id(intervention_id) is None:
            raise EntityNotFoundException("Intervenção não encontrada", details={"id": intervention_id})
        return [PhotoRead.model_validate(p) for p in self.repo.list_photos(intervention_id)]

    def delete_photo(self, photo_id: int) -> None:
        if not self.repo.delete_photo(photo_id):
            raise EntityNotFoundException("Foto não encontrada", details={"id": photo_id})
        logger.info("Photo deleted", photo_id=photo_id)
