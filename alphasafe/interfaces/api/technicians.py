"""Technician API routes — reads for everyone, writes for admins."""

from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, Query, status

from alphasafe.application.services.technician_service import TechnicianService
from alphasafe.domain.schemas.auth import UserRead
from alphasafe.domain.schemas.technician import (
    TechnicianAvailability,
    TechnicianCreate,
    TechnicianRead,
    TechnicianUpdate,
)
from alphasafe.interfaces.api.deps import get_current_user, require_admin
from alphasafe.interfaces.deps import get_technician_service

router = APIRouter(prefix="/api/technicians", tags=["Technicians"])


@router.get("", response_model=list[TechnicianRead])
def list_technicians(
    service: TechnicianService = Depends(get_technician_service),
    user: UserRead = Depends(get_current_user),
):
    return service.list()


@router.get("/availability", response_model=list[TechnicianAvailability])
def technician_availability(
    target_date: Optional[date] = Query(None, alias="date"),
    service: TechnicianService = Depends(get_technician_service),
    user: UserRead = Depends(get_current_user),
):
    """Every technician flagged available or not on ``date`` (default today)."""
    return service.list_with_availability(target_date)


@router.post("", response_model=TechnicianRead, status_code=status.HTTP_201_CREATED)
def create_technician(
    body: TechnicianCreate,
    service: TechnicianService = Depends(get_technician_service),
    user: UserRead = Depends(require_admin),
):
    return service.create(body)


@router.put("/{technician_id}", response_model=TechnicianRead)
@router.patch("/{technician_id}", response_model=TechnicianRead)
def update_technician(
    technician_id: int,
    body: TechnicianUpdate,
    service: TechnicianService = Depends(get_technician_service),
    user: UserRead = Depends(require_admin),
):
    return service.update(technician_id, body)


@router.delete("/{technician_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_technician(
    technician_id: int,
    service: TechnicianService = Depends(get_technician_service),
    user: UserRead = Depends(require_admin),
):
    service.delete(technician_id)
