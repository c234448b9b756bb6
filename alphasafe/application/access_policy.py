"""Access policy — who may call what.

Routers never compare roles themselves; they go through these two gates
(wrapped as FastAPI dependencies in ``interfaces.api.deps``).
"""

from typing import Optional

from alphasafe.core.exceptions import ForbiddenException, UnauthorizedException
from alphasafe.domain.enums import UserRole
from alphasafe.domain.schemas.auth import UserRead


def require_authenticated(user: Optional[UserRead]) -> UserRead:
    if user is None:
        raise UnauthorizedException("Não autenticado")
    return user


def require_role(user: Optional[UserRead], role: UserRole) -> UserRead:
    user = require_authenticated(user)
    if user.role != UserRole(role).value:
        raise ForbiddenException("Acesso negado: permissões insuficientes")
    return user
