"""Technician domain model — schedulable staff, independent of login users."""

from sqlalchemy import Column, Integer, String, Boolean, DateTime
from sqlalchemy.sql import func

from alphasafe.domain.enums import TechnicianRole, TechnicianStatus
from alphasafe.infrastructure.database import Base


class Technician(Base):
    __tablename__ = "technicians"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(200), nullable=False, index=True)
    email = Column(String(255), nullable=True)
    role = Column(String(50), nullable=False, default=TechnicianRole.TECHNICIAN.value)  # technician, office

    receive_assignment_notifications = Column(Boolean, nullable=False, default=True)
    receive_billing_notifications = Column(Boolean, nullable=False, default=False)
    receive_assistance_notifications = Column(Boolean, nullable=False, default=True)

    active = Column(String(50), nullable=False, default=TechnicianStatus.ACTIVE.value)
    vacation_start = Column(DateTime(timezone=True), nullable=True)
    vacation_end = Column(DateTime(timezone=True), nullable=True)
    sick_leave_start = Column(DateTime(timezone=True), nullable=True)
    sick_leave_end = Column(DateTime(timezone=True), nullable=True)
    termination_date = Column(DateTime(timezone=True), nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())

    def __repr__(self):
        return f"<Technician {self.name} - {self.active}>"
