"""Client domain model — maps to the 'clients' table."""

from sqlalchemy import Column, Integer, String, Text, DateTime
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from alphasafe.infrastructure.database import Base


class Client(Base):
    __tablename__ = "clients"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(Text, nullable=False, index=True)
    nif = Column(String(32), nullable=False, index=True)  # free-form in storage, 9 chars enforced by validators
    address = Column(Text, nullable=True)
    phone = Column(String(50), nullable=True)
    email = Column(String(255), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    interventions = relationship("Intervention", back_populates="client")

    def __repr__(self):
        return f"<Client {self.id} - {self.name}>"
