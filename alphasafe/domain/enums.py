"""Fixed vocabularies of the domain.

The original frontend stored Portuguese labels; ``LEGACY_ALIASES`` maps them
to the canonical values so old payloads still validate.
"""

from enum import Enum


class InterventionStatus(str, Enum):
    IN_PROGRESS = "In Progress"
    TO_INVOICE = "To Invoice"
    COMPLETED = "Completed"
    ASSISTANCE = "Assistance"


class ServiceType(str, Enum):
    VIDEO_INTERCOM = "Video Intercom"
    VIDEO_SURVEILLANCE = "Video Surveillance"
    ALARM = "Alarm"
    HOME_AUTOMATION = "Home Automation"
    ACCESS_CONTROL = "Access Control"
    FIRE_SAFETY_SYSTEMS = "Fire Safety Systems"


class TechnicianRole(str, Enum):
    TECHNICIAN = "technician"
    OFFICE = "office"


class TechnicianStatus(str, Enum):
    ACTIVE = "Active"
    VACATION = "Vacation"
    SICK_LEAVE = "Sick Leave"
    INACTIVE = "Inactive"


class UserRole(str, Enum):
    ADMIN = "admin"
    TECHNICIAN = "technician"


class NotificationChannel(str, Enum):
    EMAIL = "email"
    PUSH = "push"


class NotificationKind(str, Enum):
    ASSIGNMENT = "assignment"
    ASSISTANCE = "assistance"
    BILLING = "billing"


LEGACY_ALIASES = {
    InterventionStatus: {
        "Em curso": InterventionStatus.IN_PROGRESS,
        "A faturar": InterventionStatus.TO_INVOICE,
        "Concluído": InterventionStatus.COMPLETED,
        "Assistência": InterventionStatus.ASSISTANCE,
    },
    TechnicianStatus: {
        "Ativo": TechnicianStatus.ACTIVE,
        "Férias": TechnicianStatus.VACATION,
        "Baixa": TechnicianStatus.SICK_LEAVE,
        "Inativo": TechnicianStatus.INACTIVE,
    },
    ServiceType: {
        "Videoporteiro": ServiceType.VIDEO_INTERCOM,
        "Videovigilância": ServiceType.VIDEO_SURVEILLANCE,
        "Alarme": ServiceType.ALARM,
        "Domótica": ServiceType.HOME_AUTOMATION,
        "Controlo de acessos": ServiceType.ACCESS_CONTROL,
        "Sistemas de Segurança Contra Incêndios": ServiceType.FIRE_SAFETY_SYSTEMS,
    },
}


def coerce_enum(enum_cls, value):
    """Return the enum member for a canonical value or a legacy alias.

    Raises ValueError for anything else.
    """
    if isinstance(value, enum_cls):
        return value
    if isinstance(value, str):
        text = value.strip()
        alias = LEGACY_ALIASES.get(enum_cls, {}).get(text)
        if alias is not None:
            return alias
        return enum_cls(text)
    raise ValueError(f"{value!r} is not a valid {enum_cls.__name__}")
