"""
Technician Repository Interface.
"""

from typing import List

from alphasafe.domain.repositories.base import BaseRepository
from alphasafe.domain.models.technician import Technician


class TechnicianRepository(BaseRepository[Technician]):
    """Interface for Technician-specific operations."""

    def list_newest_first(self) -> List[Technician]:
        ...

    def get_by_name(self, name: str) -> List[Technician]:
        """Exact-name lookup; may return zero, one or several rows."""
        ...
