"""Pydantic schemas for Technician domain."""

from datetime import datetime
from typing import Optional

from pydantic import EmailStr, field_validator

from alphasafe.domain.enums import TechnicianRole, TechnicianStatus, coerce_enum
from alphasafe.domain.schemas.base import CamelModel, blank_to_none, require_text

DATE_FIELDS = ("vacation_start", "vacation_end", "sick_leave_start", "sick_leave_end", "termination_date")


class TechnicianRules(CamelModel):
    """Field rules shared by the create and partial-update payloads.

    Vacation, sick-leave and termination dates are accepted whatever the
    status; only the availability evaluator decides which ones matter.
    """

    @field_validator("name", check_fields=False)
    @classmethod
    def _name_required(cls, value):
        return require_text(value, "Nome é obrigatório")

    @field_validator("role", mode="before", check_fields=False)
    @classmethod
    def _role(cls, value):
        try:
            return TechnicianRole(value)
        except ValueError:
            raise ValueError(f"Função inválida: {value}")

    @field_validator("active", mode="before", check_fields=False)
    @classmethod
    def _active(cls, value):
        try:
            return coerce_enum(TechnicianStatus, value)
        except ValueError:
            raise ValueError(f"Estado inválido: {value}")

    @field_validator("email", *DATE_FIELDS, mode="before", check_fields=False)
    @classmethod
    def _blank_to_none(cls, value):
        return blank_to_none(value)

    @field_validator("email", check_fields=False)
    @classmethod
    def _lower_email(cls, value):
        return value.lower() if value else value

    @field_validator(
        "receive_assignment_notifications",
        "receive_billing_notifications",
        "receive_assistance_notifications",
        check_fields=False,
    )
    @classmethod
    def _flag_not_null(cls, value):
        if value is None:
            raise ValueError("Valor obrigatório")
        return value


class TechnicianCreate(TechnicianRules):
    name: str
    email: Optional[EmailStr] = None
    role: TechnicianRole = TechnicianRole.TECHNICIAN
    receive_assignment_notifications: bool = True
    receive_billing_notifications: bool = False
    receive_assistance_notifications: bool = True
    active: TechnicianStatus = TechnicianStatus.ACTIVE
    vacation_start: Optional[datetime] = None
    vacation_end: Optional[datetime] = None
    sick_leave_start: Optional[datetime] = None
    sick_leave_end: Optional[datetime] = None
    termination_date: Optional[datetime] = None
    # Settable on create (back-dated hires); defaults to now
    created_at: Optional[datetime] = None

    @field_validator("created_at", mode="before")
    @classmethod
    def _blank_created_at(cls, value):
        return blank_to_none(value)


class TechnicianUpdate(TechnicianRules):
    name: Optional[str] = None
    email: Optional[EmailStr] = None
    role: Optional[TechnicianRole] = None
    receive_assignment_notifications: Optional[bool] = None
    receive_billing_notifications: Optional[bool] = None
    receive_assistance_notifications: Optional[bool] = None
    active: Optional[TechnicianStatus] = None
    vacation_start: Optional[datetime] = None
    vacation_end: Optional[datetime] = None
    sick_leave_start: Optional[datetime] = None
    sick_leave_end: Optional[datetime] = None
    termination_date: Optional[datetime] = None


class TechnicianRead(CamelModel):
    id: int
    name: str
    email: Optional[str] = None
    role: str
    receive_assignment_notifications: bool
    receive_billing_notifications: bool
    receive_assistance_notifications: bool
    active: str
    vacation_start: Optional[datetime] = None
    vacation_end: Optional[datetime] = None
    sick_leave_start: Optional[datetime] = None
    sick_leave_end: Optional[datetime] = None
    termination_date: Optional[datetime] = None
    created_at: Optional[datetime] = None


class TechnicianAvailability(TechnicianRead):
    available: bool
    unavailable_reason: Optional[str] = None
