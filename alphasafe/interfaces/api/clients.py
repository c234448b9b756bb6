"""Client API routes — CRUD with search."""

from typing import Optional

from fastapi import APIRouter, Depends, status

from alphasafe.application.services.client_service import ClientService
from alphasafe.domain.schemas.auth import UserRead
from alphasafe.domain.schemas.client import ClientCreate, ClientRead, ClientUpdate
from alphasafe.interfaces.api.deps import get_current_user
from alphasafe.interfaces.deps import get_client_service

router = APIRouter(prefix="/api/clients", tags=["Clients"])


@router.get("", response_model=list[ClientRead])
def list_clients(
    search: Optional[str] = None,
    service: ClientService = Depends(get_client_service),
    user: UserRead = Depends(get_current_user),
):
    """List clients, newest first; ``search`` matches name or NIF."""
    return service.list(search)


@router.post("", response_model=ClientRead, status_code=status.HTTP_201_CREATED)
def create_client(
    body: ClientCreate,
    service: ClientService = Depends(get_client_service),
    user: UserRead = Depends(get_current_user),
):
    return service.create(body)


@router.get("/{client_id}", response_model=ClientRead)
def get_client(
    client_id: int,
    service: ClientService = Depends(get_client_service),
    user: UserRead = Depends(get_current_user),
):
    return service.get(client_id)


@router.put("/{client_id}", response_model=ClientRead)
@router.patch("/{client_id}", response_model=ClientRead)
def update_client(
    client_id: int,
    body: ClientUpdate,
    service: ClientService = Depends(get_client_service),
    user: UserRead = Depends(get_current_user),
):
    return service.update(client_id, body)


@router.delete("/{client_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_client(
    client_id: int,
    service: ClientService = Depends(get_client_service),
    user: UserRead = Depends(get_current_user),
):
    service.delete(client_id)
