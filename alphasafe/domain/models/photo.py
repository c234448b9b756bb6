"""Photo attached to an intervention — maps to the 'photos' table."""

from sqlalchemy import Column, Integer, Text, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from alphasafe.infrastructure.database import Base


class Photo(Base):
    __tablename__ = "photos"

    id = Column(Integer, primary_key=True, autoincrement=True)
    intervention_id = Column(Integer, ForeignKey("interventions.id"), nullable=False, index=True)
    url = Column(Text, nullable=False)  # data URL or remote URL
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    intervention = relationship("Intervention", back_populates="photos")

    def __repr__(self):
        return f"<Photo {self.id} - intervention {self.intervention_id}>"
