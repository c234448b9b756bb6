"""Notification service — delivers what the notification policy decided.

Features:
- Email rendering for assignment, assistance and billing notices
- Delivery through Resend (simulated when no API key is configured)
- Push through the push gateway
- Every attempt recorded in ``notifications_log``, in its own session
"""

from datetime import datetime
from html import escape
from typing import Callable, Iterable, List, Optional, Protocol

import pytz
import structlog
from fastapi import BackgroundTasks
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from alphasafe.config import get_settings
from alphasafe.domain.enums import NotificationChannel, NotificationKind
from alphasafe.domain.models.notification_log import NotificationLog
from alphasafe.domain.schemas.notification import NotificationLogRead, NotificationRequest
from alphasafe.infrastructure.database import SessionLocal
from alphasafe.infrastructure.push_gateway import LoggingPushGateway
from alphasafe.infrastructure.resend_api import ResendClient

settings = get_settings()
tz = pytz.timezone(settings.TIMEZONE)
logger = structlog.get_logger(__name__)

ACCENT = "#c4a57b"
URGENT = "#e11d48"


class Notifier(Protocol):
    """Receives the notifications decided for a committed write."""

    def notify(self, requests: List[NotificationRequest]) -> None:
        ...


class BackgroundTaskNotifier:
    """Schedules delivery as a FastAPI background task, after the response."""

    def __init__(self, background_tasks: BackgroundTasks):
        self.background_tasks = background_tasks

    def notify(self, requests: List[NotificationRequest]) -> None:
        if requests:
            self.background_tasks.add_task(deliver_notifications, list(requests))


def _services(request: NotificationRequest) -> str:
    return ", ".join(request.intervention.service_type)


def render_subject(request: NotificationRequest) -> str:
    intervention = request.intervention
    if request.kind == NotificationKind.BILLING:
        return f"FATURAÇÃO: {intervention.client.name} - Pronta para Processar"
    label = "URGENTE: Pedido de Assistência" if request.urgent else "Nova Instalação / Intervenção"
    return f"{label}: {_services(request)} - {intervention.client.name}"


def _row(label: str, value: Optional[str]) -> str:
    return (
        f'<tr><td style="padding: 8px; border: 1px solid #eee;"><strong>{escape(label)}</strong></td>'
        f'<td style="padding: 8px; border: 1px solid #eee;">{escape(value or "—")}</td></tr>'
    )


def render_email(request: NotificationRequest) -> str:
    """HTML body for an email notification."""
    intervention = request.intervention
    client = intervention.client
    year = datetime.now(tz).year

    if request.kind == NotificationKind.BILLING:
        heading = "Pronto para Faturar"
        intro = "A seguinte intervenção foi concluída tecnicamente e está pronta para o processamento administrativo:"
        rows = [
            ("Cliente", client.name),
            ("NIF", client.nif),
            ("Serviço", _services(request)),
            ("Técnico", intervention.technician),
            ("Equipamento", intervention.equipment_model),
        ]
        color = ACCENT
    else:
        heading = "Pedido de Assistência" if request.urgent else "Nova Instalação / Intervenção"
        intro = (
            "Há um novo pedido de assistência que requer a sua atenção:"
            if request.urgent
            else "Foi-lhe atribuída uma nova instalação/intervenção no sistema:"
        )
        rows = [
            ("Cliente", client.name),
            ("Morada", client.address or "Não especificada"),
            ("Serviço", _services(request)),
            ("Equipamento", intervention.equipment_model),
            ("N/S", intervention.serial_number),
        ]
        color = URGENT if request.urgent else ACCENT

    table = "".join(_row(label, value) for label, value in rows)
    notes = escape(intervention.notes or "Sem notas adicionais.")
    link = escape(settings.PUBLIC_APP_URL)

    return (
        f'<div style="font-family: sans-serif; max-width: 600px; margin: 0 auto; '
        f'border: 2px solid {color}; border-radius: 8px; overflow: hidden;">'
        f'<div style="background-color: #1a1612; color: {ACCENT}; padding: 20px; text-align: center;">'
        f'<h1 style="margin: 0;">AlphaSafe</h1><p style="margin: 5px 0 0;">{escape(heading)}</p></div>'
        f'<div style="padding: 20px; color: #1a1612;"><p>{escape(intro)}</p>'
        f'<table style="width: 100%; border-collapse: collapse;">{table}</table>'
        f'<p><strong>Notas:</strong> {notes}</p>'
        f'<p style="text-align: center;"><a href="{link}">VER INTERVENÇÃO</a></p></div>'
        f'<div style="padding: 10px; text-align: center; font-size: 11px; color: #666;">'
        f"&copy; {year} AlphaSafe - Sistemas de Segurança Eletrónica</div></div>"
    )


async def deliver_notifications(
    requests: Iterable[NotificationRequest],
    session_factory: Callable[[], Session] = SessionLocal,
    email_client: Optional[ResendClient] = None,
    push_gateway: Optional[LoggingPushGateway] = None,
) -> List[str]:
    """Deliver each request and log the outcome. Never raises.

    Returns the final status of every request, in order.
    """
    email_client = email_client or ResendClient()
    push_gateway = push_gateway or LoggingPushGateway()
    statuses: List[str] = []

    db = session_factory()
    try:
        for request in requests:
            subject = render_subject(request)
            log = NotificationLog(
                channel=request.channel.value,
                recipient=request.recipient,
                kind=request.kind.value,
                subject=subject,
                intervention_id=request.intervention.id,
                status="pending",
            )
            db.add(log)

            try:
                if request.channel == NotificationChannel.PUSH:
                    await push_gateway.send(request.recipient, subject, request.intervention.client.name)
                    log.status = "simulated"
                else:
                    result = await email_client.send_email(request.recipient, subject, render_email(request))
                    log.status = "simulated" if result.get("simulated") else "sent"
            except Exception as e:
                log.status = "failed"
                log.error = str(e)[:500]
                logger.warning(
                    "Notification delivery failed",
                    channel=request.channel.value,
                    recipient=request.recipient,
                    error=str(e),
                )

            statuses.append(log.status)

            # A lost log row must not stop the rest of the batch
            try:
                db.commit()
            except SQLAlchemyError:
                db.rollback()
                logger.exception(
                    "Notification log write failed",
                    channel=request.channel.value,
                    recipient=request.recipient,
                )
    finally:
        db.close()

    return statuses


def list_notification_logs(db: Session, page: int = 1, page_size: int = 50) -> dict:
    """One page of the delivery log, newest first."""
    total = db.query(NotificationLog).count()
    logs = (
        db.query(NotificationLog)
        .order_by(NotificationLog.sent_at.desc(), NotificationLog.id.desc())
        .offset((page - 1) * page_size)
        .limit(page_size)
        .all()
    )
    return {
        "items": [NotificationLogRead.model_validate(log) for log in logs],
        "total": total,
        "page": page,
        "page_size": page_size,
        "total_pages": (total + page_size - 1) // page_size,
    }
