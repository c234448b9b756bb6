"""Notification policy — who gets told what when an intervention changes.

Pure decision logic: it looks at the intervention before and after a write
plus the technician roster and returns ``NotificationRequest`` values. It
sends nothing; delivery belongs to the notifier.
"""

from typing import Iterable, List, Optional

from alphasafe.domain.enums import (
    InterventionStatus,
    NotificationChannel,
    NotificationKind,
    TechnicianRole,
)
from alphasafe.domain.schemas.intervention import InterventionRead
from alphasafe.domain.schemas.notification import NotificationRequest


def _status_is(intervention: Optional[InterventionRead], status: InterventionStatus) -> bool:
    return intervention is not None and intervention.status == status.value


def _named(technicians, name: Optional[str]) -> list:
    if not name:
        return []
    return [t for t in technicians if t.name == name]


def _wants(technician, kind: NotificationKind) -> bool:
    if kind == NotificationKind.ASSISTANCE:
        return bool(technician.receive_assistance_notifications)
    if kind == NotificationKind.BILLING:
        return bool(technician.receive_billing_notifications)
    return bool(technician.receive_assignment_notifications)


def _emails_to_named(
    technicians, name: Optional[str], kind: NotificationKind, intervention: InterventionRead
) -> List[NotificationRequest]:
    requests = []
    for technician in _named(technicians, name):
        if not technician.email or not _wants(technician, kind):
            continue
        requests.append(
            NotificationRequest(
                channel=NotificationChannel.EMAIL,
                recipient=technician.email,
                kind=kind,
                intervention=intervention,
            )
        )
    return requests


def _push_to_named(technicians, name: Optional[str], intervention: InterventionRead) -> List[NotificationRequest]:
    # Push is addressed by technician name; the gateway resolves devices
    if not any(t.receive_assistance_notifications for t in _named(technicians, name)):
        return []
    return [
        NotificationRequest(
            channel=NotificationChannel.PUSH,
            recipient=name,
            kind=NotificationKind.ASSISTANCE,
            intervention=intervention,
        )
    ]


def billing_recipients(technicians, fallback_email: Optional[str] = None) -> List[str]:
    """Office technicians opted into billing, plus the fallback address.

    Deduplicated case-insensitively; first spelling wins.
    """
    recipients: List[str] = []
    seen = set()

    candidates = [
        t.email
        for t in technicians
        if t.role == TechnicianRole.OFFICE.value and t.receive_billing_notifications and t.email
    ]
    if fallback_email and fallback_email.strip():
        candidates.append(fallback_email.strip())

    for email in candidates:
        key = email.lower()
        if key not in seen:
            seen.add(key)
            recipients.append(email)
    return recipients


def plan_intervention_notifications(
    previous: Optional[InterventionRead],
    current: InterventionRead,
    technicians: Iterable,
    billing_fallback_email: Optional[str] = None,
) -> List[NotificationRequest]:
    """Decide the notifications for a create (``previous`` is None) or an update."""
    technicians = list(technicians)
    requests: List[NotificationRequest] = []

    now_assistance = _status_is(current, InterventionStatus.ASSISTANCE)

    if previous is None:
        if current.technician:
            kind = NotificationKind.ASSISTANCE if now_assistance else NotificationKind.ASSIGNMENT
            requests.extend(_emails_to_named(technicians, current.technician, kind, current))
        return requests

    was_assistance = _status_is(previous, InterventionStatus.ASSISTANCE)

    if current.technician and current.technician != previous.technician:
        kind = NotificationKind.ASSISTANCE if (now_assistance or was_assistance) else NotificationKind.ASSIGNMENT
        requests.extend(_emails_to_named(technicians, current.technician, kind, current))

    if now_assistance and not was_assistance:
        requests.extend(
            _emails_to_named(technicians, current.technician, NotificationKind.ASSISTANCE, current)
        )
        requests.extend(_push_to_named(technicians, current.technician, current))

    if _status_is(current, InterventionStatus.TO_INVOICE) and not _status_is(
        previous, InterventionStatus.TO_INVOICE
    ):
        for email in billing_recipients(technicians, billing_fallback_email):
            requests.append(
                NotificationRequest(
                    channel=NotificationChannel.EMAIL,
                    recipient=email,
                    kind=NotificationKind.BILLING,
                    intervention=current,
                )
            )

    return requests
