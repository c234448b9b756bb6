"""Intervention API routes — CRUD, dashboard counts and photos."""

from typing import Optional

from fastapi import APIRouter, Depends, Query, status

from alphasafe.application.services.intervention_service import InterventionService
from alphasafe.domain.schemas.auth import UserRead
from alphasafe.domain.schemas.intervention import (
    InterventionCreate,
    InterventionRead,
    InterventionStats,
    InterventionUpdate,
    PhotoCreate,
    PhotoRead,
)
from alphasafe.interfaces.api.deps import get_current_user
from alphasafe.interfaces.deps import get_intervention_service

router = APIRouter(prefix="/api/interventions", tags=["Interventions"])
photos_router = APIRouter(prefix="/api/photos", tags=["Interventions"])


@router.get("", response_model=list[InterventionRead])
def list_interventions(
    status_filter: Optional[str] = Query(None, alias="status"),
    technician: Optional[str] = None,
    client_id: Optional[int] = Query(None, alias="clientId"),
    service: InterventionService = Depends(get_intervention_service),
    user: UserRead = Depends(get_current_user),
):
    """List interventions, newest first. Filters are AND-ed."""
    return service.list({"status": status_filter, "technician": technician, "client_id": client_id})


@router.get("/stats", response_model=InterventionStats)
def intervention_stats(
    service: InterventionService = Depends(get_intervention_service),
    user: UserRead = Depends(get_current_user),
):
    return service.stats()


@router.post("", response_model=InterventionRead, status_code=status.HTTP_201_CREATED)
def create_intervention(
    body: InterventionCreate,
    service: InterventionService = Depends(get_intervention_service),
    user: UserRead = Depends(get_current_user),
):
    return service.create(body)


@router.get("/{intervention_id}", response_model=InterventionRead)
def get_intervention(
    intervention_id: int,
    service: InterventionService = Depends(get_intervention_service),
    user: UserRead = Depends(get_current_user),
):
    return service.get(intervention_id)


@router.put("/{intervention_id}", response_model=InterventionRead)
@router.patch("/{intervention_id}", response_model=InterventionRead)
def update_intervention(
    intervention_id: int,
    body: InterventionUpdate,
    service: InterventionService = Depends(get_intervention_service),
    user: UserRead = Depends(get_current_user),
):
    return service.update(intervention_id, body)


@router.delete("/{intervention_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_intervention(
    intervention_id: int,
    service: InterventionService = Depends(get_intervention_service),
    user: UserRead = Depends(get_current_user),
):
    service.delete(intervention_id)


@router.get("/{intervention_id}/photos", response_model=list[PhotoRead])
def list_photos(
    intervention_id: int,
    service: InterventionService = Depends(get_intervention_service),
    user: UserRead = Depends(get_current_user),
):
    return service.list_photos(intervention_id)


@router.post("/{intervention_id}/photos", response_model=PhotoRead, status_code=status.HTTP_201_CREATED)
def add_photo(
    intervention_id: int,
    body: PhotoCreate,
    service: InterventionService = Depends(get_intervention_service),
    user: UserRead = Depends(get_current_user),
):
    return service.add_photo(intervention_id, body)


@photos_router.delete("/{photo_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_photo(
    photo_id: int,
    service: InterventionService = Depends(get_intervention_service),
    user: UserRead = Depends(get_current_user),
):
    service.delete_photo(photo_id)
