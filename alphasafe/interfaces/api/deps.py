"""FastAPI dependencies — current user resolution and role gates."""

from typing import Optional

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from alphasafe.application.access_policy import require_authenticated, require_role
from alphasafe.application.services.auth_service import decode_access_token
from alphasafe.config import get_settings
from alphasafe.domain.enums import UserRole
from alphasafe.domain.repositories.user_repository import UserRepository
from alphasafe.domain.schemas.auth import UserRead
from alphasafe.interfaces.deps import get_user_repository

settings = get_settings()
security = HTTPBearer(auto_error=False)


def get_optional_user(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    repo: UserRepository = Depends(get_user_repository),
) -> Optional[UserRead]:
    """Resolve the caller from the session cookie or a Bearer token.

    The user row is re-read on every request so role changes apply at once.
    """
    tokens = [request.cookies.get(settings.AUTH_COOKIE_NAME)]
    if credentials is not None:
        tokens.append(credentials.credentials)

    # A stale cookie falls through to the Bearer token
    for token in tokens:
        if not token:
            continue
        user_id = decode_access_token(token)
        if user_id is None:
            continue
        user = repo.get_by_id(user_id)
        if user is not None:
            return UserRead.model_validate(user)
    return None


def get_current_user(user: Optional[UserRead] = Depends(get_optional_user)) -> UserRead:
    return require_authenticated(user)


def require_admin(user: Optional[UserRead] = Depends(get_optional_user)) -> UserRead:
    """Require admin role."""
    return require_role(user, UserRole.ADMIN)
