"""Client service — business logic for the client registry."""

from typing import Any, List, Optional

import structlog

from alphasafe.application.validators import validate_client
from alphasafe.core.exceptions import ConflictException, EntityNotFoundException
from alphasafe.domain.repositories.client_repository import ClientRepository
from alphasafe.domain.schemas.client import ClientRead

logger = structlog.get_logger(__name__)


class ClientService:
    def __init__(self, repo: ClientRepository):
        self.repo = repo

    def _get_or_404(self, client_id: int):
        client = self.repo.get_by_id(client_id)
        if client is None:
            raise EntityNotFoundException("Cliente não encontrado", details={"id": client_id})
        return client

    def create(self, payload: Any) -> ClientRead:
        data = validate_client(payload)
        client = self.repo.create(data)
        logger.info("Client created", client_id=client.id)
        return ClientRead.model_validate(client)

    def get(self, client_id: int) -> ClientRead:
        return ClientRead.model_validate(self._get_or_404(client_id))

    def update(self, client_id: int, payload: Any) -> ClientRead:
        client = self._get_or_404(client_id)
        data = validate_client(payload, partial=True)
        client = self.repo.update(client, data)
        logger.info("Client updated", client_id=client_id, fields=sorted(data.model_fields_set))
        return ClientRead.model_validate(client)

    def list(self, search: Optional[str] = None) -> List[ClientRead]:
        return [ClientRead.model_validate(client) for client in self.repo.search(search)]

    def delete(self, client_id: int) -> None:
        self._get_or_404(client_id)
        if self.repo.has_interventions(client_id):
            raise ConflictException(
                "Cliente tem intervenções associadas",
                details={"id": client_id},
            )
        self.repo.delete(client_id)
        logger.info("Client deleted", client_id=client_id)
