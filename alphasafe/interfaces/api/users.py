"""User API routes — account administration."""

from fastapi import APIRouter, Depends, status

from alphasafe.application.services.user_service import UserService
from alphasafe.domain.schemas.auth import UserCreate, UserRead, UserUpdate
from alphasafe.interfaces.api.deps import require_admin
from alphasafe.interfaces.deps import get_user_service

router = APIRouter(prefix="/api/users", tags=["Users"])


@router.get("", response_model=list[UserRead])
def list_users(
    service: UserService = Depends(get_user_service),
    user: UserRead = Depends(require_admin),
):
    return service.list()


@router.post("", response_model=UserRead, status_code=status.HTTP_201_CREATED)
def create_user(
    body: UserCreate,
    service: UserService = Depends(get_user_service),
    user: UserRead = Depends(require_admin),
):
    return service.create(body)


@router.patch("/{user_id}", response_model=UserRead)
def update_user(
    user_id: int,
    body: UserUpdate,
    service: UserService = Depends(get_user_service),
    user: UserRead = Depends(require_admin),
):
    return service.update(user_id, body)


@router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_user(
    user_id: int,
    service: UserService = Depends(get_user_service),
    user: UserRead = Depends(require_admin),
):
    service.delete(user_id)
