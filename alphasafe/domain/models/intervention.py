"""Intervention domain model — maps to the 'interventions' table."""

from sqlalchemy import Column, Integer, String, Text, DateTime, ForeignKey, JSON
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from alphasafe.domain.enums import InterventionStatus
from alphasafe.infrastructure.database import Base


class Intervention(Base):
    __tablename__ = "interventions"

    id = Column(Integer, primary_key=True, autoincrement=True)
    client_id = Column(Integer, ForeignKey("clients.id"), nullable=False, index=True)
    service_type = Column(JSON, nullable=False, default=list)
    equipment_model = Column(Text, nullable=False)
    serial_number = Column(Text, nullable=False)
    status = Column(String(50), nullable=False, default=InterventionStatus.IN_PROGRESS.value, index=True)
    assistance_date = Column(DateTime(timezone=True), nullable=True)
    # Matched against Technician.name, not a foreign key
    technician = Column(String(200), nullable=False, index=True)
    notes = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    client = relationship("Client", back_populates="interventions")
    photos = relationship(
        "Photo",
        back_populates="intervention",
        order_by="Photo.id",
        passive_deletes=True,
    )

    def __repr__(self):
        return f"<Intervention {self.id} - {self.status}>"
