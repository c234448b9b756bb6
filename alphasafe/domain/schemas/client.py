"""Pydantic schemas for Client domain."""

from datetime import datetime
from typing import Optional

from pydantic import field_validator, validate_email

from alphasafe.domain.schemas.base import CamelModel, blank_to_none, optional_text, require_text

NIF_LENGTH = 9


class ClientRules(CamelModel):
    """Field rules shared by the create and partial-update payloads."""

    @field_validator("name", check_fields=False)
    @classmethod
    def _name_required(cls, value):
        return require_text(value, "Nome é obrigatório")

    @field_validator("nif", check_fields=False)
    @classmethod
    def _nif_format(cls, value):
        value = require_text(value, "NIF é obrigatório")
        if len(value) != NIF_LENGTH:
            raise ValueError(f"NIF deve ter {NIF_LENGTH} caracteres")
        return value

    @field_validator("email", mode="before", check_fields=False)
    @classmethod
    def _blank_email(cls, value):
        return blank_to_none(value)

    @field_validator("email", check_fields=False)
    @classmethod
    def _valid_email(cls, value):
        # Stored as typed; only checked for shape
        if value is None:
            return None
        value = value.strip()
        try:
            validate_email(value)
        except ValueError:
            raise ValueError("E-mail inválido")
        return value

    @field_validator("address", "phone", check_fields=False)
    @classmethod
    def _strip_optional(cls, value):
        return optional_text(value)


class ClientCreate(ClientRules):
    name: str
    nif: str
    address: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[str] = None


class ClientUpdate(ClientRules):
    name: Optional[str] = None
    nif: Optional[str] = None
    address: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[str] = None


class ClientRead(CamelModel):
    id: int
    name: str
    nif: str
    address: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[str] = None
    created_at: Optional[datetime] = None
