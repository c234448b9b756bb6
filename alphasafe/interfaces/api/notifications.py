"""Notifications API routes — delivery log."""

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from alphasafe.application.services.notification_service import list_notification_logs
from alphasafe.domain.schemas.auth import UserRead
from alphasafe.infrastructure.database import get_db
from alphasafe.interfaces.api.deps import require_admin

router = APIRouter(prefix="/api/notifications", tags=["Notifications"])


@router.get("")
def list_notifications(
    page: int = Query(1, ge=1),
    page_size: int = Query(50, ge=1, le=200),
    db: Session = Depends(get_db),
    user: UserRead = Depends(require_admin),
):
    return list_notification_logs(db, page, page_size)
