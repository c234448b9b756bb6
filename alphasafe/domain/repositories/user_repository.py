"""
User Repository Interface.
"""

from typing import List, Optional

from alphasafe.domain.repositories.base import BaseRepository
from alphasafe.domain.models.user import User


class UserRepository(BaseRepository[User]):
    """Interface for User-specific operations."""

    def get_by_email(self, email: str) -> Optional[User]:
        """Lookup by lower-cased email."""
        ...

    def list_all(self) -> List[User]:
        ...

    def count(self) -> int:
        ...
