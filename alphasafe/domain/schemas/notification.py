"""Pydantic schemas for notification requests and the delivery log."""

from datetime import datetime
from typing import Optional

from alphasafe.domain.enums import NotificationChannel, NotificationKind
from alphasafe.domain.schemas.base import CamelModel
from alphasafe.domain.schemas.intervention import InterventionRead


class NotificationRequest(CamelModel):
    """A decided-upon notification, ready for an external delivery collaborator."""

    channel: NotificationChannel
    recipient: str  # email address for email, technician name for push
    kind: NotificationKind
    intervention: InterventionRead

    @property
    def urgent(self) -> bool:
        return self.kind == NotificationKind.ASSISTANCE


class NotificationLogRead(CamelModel):
    id: int
    channel: str
    recipient: str
    kind: str
    subject: Optional[str] = None
    intervention_id: Optional[int] = None
    status: str
    error: Optional[str] = None
    sent_at: Optional[datetime] = None
