"""Entity validators — raw payloads in, typed records or ValidationException out."""

from typing import Any, Mapping, Type, TypeVar

from pydantic import BaseModel, ValidationError

from alphasafe.core.exceptions import ValidationException
from alphasafe.domain.schemas.auth import RegisterRequest, UserCreate, UserUpdate
from alphasafe.domain.schemas.client import ClientCreate, ClientUpdate
from alphasafe.domain.schemas.intervention import InterventionCreate, InterventionUpdate, PhotoCreate
from alphasafe.domain.schemas.technician import TechnicianCreate, TechnicianUpdate

SchemaType = TypeVar("SchemaType", bound=BaseModel)


def first_error(exc: ValidationError) -> ValidationException:
    """Collapse a pydantic error list into the first failing field."""
    errors = exc.errors()
    first = errors[0] if errors else {}
    field = ".".join(str(part) for part in first.get("loc", ())) or None
    message = first.get("msg", "Dados inválidos")
    if message.startswith("Value error, "):
        message = message[len("Value error, "):]
    return ValidationException(field, message)


def validate_payload(schema: Type[SchemaType], payload: Any) -> SchemaType:
    if isinstance(payload, schema):
        return payload
    if not isinstance(payload, Mapping):
        raise ValidationException(None, "Dados inválidos")
    try:
        return schema.model_validate(dict(payload))
    except ValidationError as exc:
        raise first_error(exc)


def validate_client(payload: Any, partial: bool = False):
    return validate_payload(ClientUpdate if partial else ClientCreate, payload)


def validate_intervention(payload: Any, partial: bool = False):
    return validate_payload(InterventionUpdate if partial else InterventionCreate, payload)


def validate_photo(payload: Any) -> PhotoCreate:
    return validate_payload(PhotoCreate, payload)


def validate_technician(payload: Any, partial: bool = False):
    return validate_payload(TechnicianUpdate if partial else TechnicianCreate, payload)


def validate_registration(payload: Any) -> RegisterRequest:
    return validate_payload(RegisterRequest, payload)


def validate_user(payload: Any, partial: bool = False):
    return validate_payload(UserUpdate if partial else UserCreate, payload)
