"""Pydantic schemas for User and Auth.

``UserRead`` is the only shape a user ever leaves the service layer in; it
has no password field at all.
"""

from datetime import datetime
from typing import Optional

from pydantic import EmailStr, Field, field_validator

from alphasafe.domain.enums import UserRole
from alphasafe.domain.schemas.base import CamelModel, optional_text, require_text

REGISTRATION_MIN_PASSWORD = 8


class UserRules(CamelModel):
    @field_validator("email", check_fields=False)
    @classmethod
    def _lower_email(cls, value):
        if value is None:
            raise ValueError("E-mail é obrigatório")
        return value.strip().lower()

    @field_validator("first_name", check_fields=False)
    @classmethod
    def _first_name(cls, value):
        return require_text(value, "Nome é obrigatório")

    @field_validator("last_name", check_fields=False)
    @classmethod
    def _last_name(cls, value):
        return require_text(value, "Apelido é obrigatório")

    @field_validator("role", mode="before", check_fields=False)
    @classmethod
    def _role(cls, value):
        try:
            return UserRole(value)
        except ValueError:
            raise ValueError(f"Função inválida: {value}")

    @field_validator("profile_image_url", check_fields=False)
    @classmethod
    def _image(cls, value):
        return optional_text(value)


class RegisterRequest(UserRules):
    """Self-registration. Password length is enforced here, not by the client."""

    email: EmailStr
    password: str
    first_name: str
    last_name: str

    @field_validator("password")
    @classmethod
    def _password_length(cls, value):
        if len(value) < REGISTRATION_MIN_PASSWORD:
            raise ValueError(f"Palavra-passe deve ter pelo menos {REGISTRATION_MIN_PASSWORD} caracteres")
        return value


class UserCreate(UserRules):
    """Account created by an administrator; any non-empty password is accepted."""

    email: EmailStr
    password: str
    first_name: str
    last_name: str
    role: UserRole = UserRole.TECHNICIAN
    profile_image_url: Optional[str] = None

    @field_validator("password")
    @classmethod
    def _password_present(cls, value):
        if not value:
            raise ValueError("Palavra-passe é obrigatória")
        return value


class UserUpdate(UserRules):
    email: Optional[EmailStr] = None
    password: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    role: Optional[UserRole] = None
    profile_image_url: Optional[str] = None

    @field_validator("password")
    @classmethod
    def _password_present(cls, value):
        if not value:
            raise ValueError("Palavra-passe é obrigatória")
        return value


class UserRead(CamelModel):
    id: int
    email: str
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    role: str
    profile_image_url: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class LoginRequest(CamelModel):
    email: EmailStr
    password: str = Field(min_length=1)

    @field_validator("email")
    @classmethod
    def _lower_email(cls, value):
        return value.strip().lower()


class TokenResponse(CamelModel):
    access_token: str
    token_type: str = "bearer"
    user: UserRead
