"""
Client Repository Interface.
Defines specific data access operations for Clients.
"""

from typing import List, Optional

from alphasafe.domain.repositories.base import BaseRepository
from alphasafe.domain.models.client import Client


class ClientRepository(BaseRepository[Client]):
    """Interface for Client-specific operations."""

    def search(self, term: Optional[str] = None) -> List[Client]:
        """Case-insensitive substring match on name or NIF, newest first.

        Without a term, every client is returned.
        """
        ...

    def has_interventions(self, client_id: int) -> bool:
        """Whether any intervention references the client."""
        ...
