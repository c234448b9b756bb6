"""User service — accounts, registration and credential checks.

Passwords are hashed here and nowhere else; every user handed back to a
caller is a ``UserRead``, which has no password field.
"""

from typing import Any, List, Optional

import structlog

from alphasafe.application.services.auth_service import hash_password, verify_password
from alphasafe.application.validators import validate_registration, validate_user
from alphasafe.config import Settings
from alphasafe.core.exceptions import (
    DuplicateEmailException,
    EmailNotWhitelistedException,
    EntityNotFoundException,
)
from alphasafe.domain.enums import UserRole
from alphasafe.domain.repositories.user_repository import UserRepository
from alphasafe.domain.schemas.auth import UserRead

logger = structlog.get_logger(__name__)


class UserService:
    def __init__(self, repo: UserRepository, settings: Settings):
        self.repo = repo
        self.settings = settings

    def _get_or_404(self, user_id: int):
        user = self.repo.get_by_id(user_id)
        if user is None:
            raise EntityNotFoundException("Utilizador não encontrado", details={"id": user_id})
        return user

    def _ensure_unique(self, email: str, current_id: Optional[int] = None) -> None:
        existing = self.repo.get_by_email(email)
        if existing is not None and existing.id != current_id:
            raise DuplicateEmailException()

    def _store(self, data, role: UserRole) -> UserRead:
        values = data.model_dump(exclude={"password"})
        values["role"] = role
        values["password_hash"] = hash_password(data.password)
        user = self.repo.create(values)
        logger.info("User created", user_id=user.id, role=user.role)
        return UserRead.model_validate(user)

    def register(self, payload: Any) -> UserRead:
        """Self-registration: whitelist first, then uniqueness; always a technician."""
        data = validate_registration(payload)

        whitelist = self.settings.registration_whitelist
        if whitelist and data.email not in whitelist:
            logger.warning("Registration refused by whitelist", email=data.email)
            raise EmailNotWhitelistedException()

        self._ensure_unique(data.email)
        return self._store(data, UserRole.TECHNICIAN)

    def create(self, payload: Any) -> UserRead:
        """Admin-created account; role is taken from the payload."""
        data = validate_user(payload)
        self._ensure_unique(data.email)
        return self._store(data, data.role)

    def list(self) -> List[UserRead]:
        return [UserRead.model_validate(user) for user in self.repo.list_all()]

    def get(self, user_id: int) -> UserRead:
        return UserRead.model_validate(self._get_or_404(user_id))

    def update(self, user_id: int, payload: Any) -> UserRead:
        user = self._get_or_404(user_id)
        data = validate_user(payload, partial=True)

        values = data.model_dump(exclude_unset=True, exclude={"password"})
        if "email" in values:
            self._ensure_unique(values["email"], current_id=user_id)
        if data.password:
            values["password_hash"] = hash_password(data.password)

        user = self.repo.update(user, values)
        logger.info("User updated", user_id=user_id, fields=sorted(values))
        return UserRead.model_validate(user)

    def delete(self, user_id: int) -> None:
        self._get_or_404(user_id)
        self.repo.delete(user_id)
        logger.info("User deleted", user_id=user_id)

    def authenticate(self, email: str, password: str) -> Optional[UserRead]:
        """Return the user for a correct email/password pair, None otherwise."""
        user = self.repo.get_by_email(email or "")
        if user is None or not verify_password(password, user.password_hash):
            return None
        return UserRead.model_validate(user)

    def ensure_default_admin(self) -> Optional[UserRead]:
        """Seed an administrator from settings when the user table is empty."""
        email = self.settings.DEFAULT_ADMIN_EMAIL.strip().lower()
        password = self.settings.DEFAULT_ADMIN_PASSWORD
        if not email or not password or self.repo.count() > 0:
            return None

        user = self.repo.create(
            {
                "email": email,
                "password_hash": hash_password(password),
                "first_name": "Admin",
                "last_name": "AlphaSafe",
                "role": UserRole.ADMIN,
            }
        )
        logger.info("Default admin user created", email=email)
        return UserRead.model_validate(user)
