"""Pydantic schemas for interventions and their photos."""

from datetime import datetime
from typing import Optional
from urllib.parse import urlparse

from pydantic import field_validator

from alphasafe.domain.enums import InterventionStatus, ServiceType, coerce_enum
from alphasafe.domain.schemas.base import CamelModel, blank_to_none, optional_text, require_text
from alphasafe.domain.schemas.client import ClientRead


class InterventionRules(CamelModel):
    """Field rules shared by the create and partial-update payloads."""

    @field_validator("client_id", check_fields=False)
    @classmethod
    def _positive_client(cls, value):
        if value is None or value < 1:
            raise ValueError("Selecione um cliente")
        return value

    @field_validator("service_type", mode="before", check_fields=False)
    @classmethod
    def _service_types(cls, value):
        if value is None or isinstance(value, str) or not value:
            raise ValueError("Selecione pelo menos um serviço")
        services = []
        for item in value:
            try:
                service = coerce_enum(ServiceType, item)
            except ValueError:
                raise ValueError(f"Tipo de serviço inválido: {item}")
            if service not in services:
                services.append(service)
        return services

    @field_validator("status", mode="before", check_fields=False)
    @classmethod
    def _status(cls, value):
        try:
            return coerce_enum(InterventionStatus, value)
        except ValueError:
            raise ValueError(f"Estado inválido: {value}")

    @field_validator("equipment_model", check_fields=False)
    @classmethod
    def _equipment_required(cls, value):
        return require_text(value, "Modelo do equipamento é obrigatório")

    @field_validator("serial_number", check_fields=False)
    @classmethod
    def _serial_required(cls, value):
        return require_text(value, "Número de série é obrigatório")

    @field_validator("technician", check_fields=False)
    @classmethod
    def _technician_required(cls, value):
        return require_text(value, "Técnico é obrigatório")

    @field_validator("assistance_date", mode="before", check_fields=False)
    @classmethod
    def _blank_date(cls, value):
        return blank_to_none(value)

    @field_validator("notes", check_fields=False)
    @classmethod
    def _strip_notes(cls, value):
        return optional_text(value)


class InterventionCreate(InterventionRules):
    client_id: int
    service_type: list[ServiceType]
    equipment_model: str
    serial_number: str
    status: InterventionStatus = InterventionStatus.IN_PROGRESS
    assistance_date: Optional[datetime] = None
    technician: str
    notes: Optional[str] = None


class InterventionUpdate(InterventionRules):
    client_id: Optional[int] = None
    service_type: Optional[list[ServiceType]] = None
    equipment_model: Optional[str] = None
    serial_number: Optional[str] = None
    status: Optional[InterventionStatus] = None
    assistance_date: Optional[datetime] = None
    technician: Optional[str] = None
    notes: Optional[str] = None


class InterventionFilter(CamelModel):
    status: Optional[InterventionStatus] = None
    technician: Optional[str] = None
    client_id: Optional[int] = None

    @field_validator("status", mode="before")
    @classmethod
    def _status(cls, value):
        value = blank_to_none(value)
        if value is None:
            return None
        try:
            return coerce_enum(InterventionStatus, value)
        except ValueError:
            raise ValueError(f"Estado inválido: {value}")

    @field_validator("technician")
    @classmethod
    def _technician(cls, value):
        return optional_text(value)


class PhotoCreate(CamelModel):
    url: str

    @field_validator("url")
    @classmethod
    def _url(cls, value):
        value = require_text(value, "URL da foto é obrigatório")
        if value.startswith("data:image/"):
            return value
        parsed = urlparse(value)
        if parsed.scheme not in ("http", "https") or not parsed.netloc:
            raise ValueError("URL da foto inválido")
        return value


class PhotoRead(CamelModel):
    id: int
    intervention_id: int
    url: str
    created_at: Optional[datetime] = None


class InterventionRead(CamelModel):
    id: int
    client_id: int
    service_type: list[str]
    equipment_model: str
    serial_number: str
    status: str
    assistance_date: Optional[datetime] = None
    technician: str
    notes: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    client: ClientRead
    photos: list[PhotoRead] = []


class InterventionStats(CamelModel):
    total: int
    by_status: dict[str, int]
