"""Notification log — tracks every email/push delivery attempt."""

from sqlalchemy import Column, Integer, String, Text, DateTime
from sqlalchemy.sql import func

from alphasafe.infrastructure.database import Base


class NotificationLog(Base):
    __tablename__ = "notifications_log"

    id = Column(Integer, primary_key=True, autoincrement=True)
    channel = Column(String(10), nullable=False)  # email, push
    recipient = Column(String(255), nullable=False, index=True)
    kind = Column(String(20), nullable=False)  # assignment, assistance, billing
    subject = Column(Text, nullable=True)
    # Plain column: the intervention may be deleted while its log survives
    intervention_id = Column(Integer, nullable=True, index=True)
    status = Column(String(20), nullable=False, default="pending")  # pending, sent, simulated, failed
    error = Column(Text, nullable=True)
    sent_at = Column(DateTime(timezone=True), server_default=func.now())

    def __repr__(self):
        return f"<NotificationLog {self.channel}:{self.recipient} - {self.status}>"
