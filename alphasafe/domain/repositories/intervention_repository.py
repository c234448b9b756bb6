"""
Intervention Repository Interface.
Interventions are the aggregate root for their photos.
"""

from typing import Dict, List, Optional

from alphasafe.domain.repositories.base import BaseRepository
from alphasafe.domain.models.intervention import Intervention
from alphasafe.domain.models.photo import Photo
from alphasafe.domain.schemas.intervention import InterventionFilter


class InterventionRepository(BaseRepository[Intervention]):
    """Interface for Intervention-specific operations."""

    def get_with_relations(self, id: int) -> Optional[Intervention]:
        """Get an intervention with its client and ordered photos loaded."""
        ...

    def list_filtered(self, filters: InterventionFilter) -> List[Intervention]:
        """AND-combined optional filters, newest first, relations loaded."""
        ...

    def delete_cascade(self, id: int) -> bool:
        """Delete the intervention's photos, then the intervention, in one transaction.

        Returns False when the intervention does not exist.
        """
        ...

    def count_by_status(self) -> Dict[str, int]:
        """Number of interventions per status."""
        ...

    def add_photo(self, intervention_id: int, url: str) -> Photo:
        ...

    def get_photo(self, photo_id: int) -> Optional[Photo]:
        ...

    def list_photos(self, intervention_id: int) -> List[Photo]:
        ...

    def delete_photo(self, photo_id: int) -> bool:
        ...
