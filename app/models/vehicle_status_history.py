# app/models/vehicle_status_history.py
"""
Append-only audit trail of vehicle status transitions.
Rows are written once by vehicle_service and never updated.
previous_status is NULL for the entry written when the vehicle is created.
"""

from datetime import datetime

from sqlalchemy import Column, Integer, String, DateTime, Text, ForeignKey
from sqlalchemy.orm import relationship
from app.database import Base


class VehicleStatusHistory(Base):
    __tablename__ = "vehicle_status_history"

    id = Column(Integer, primary_key=True, autoincrement=True)
    vehicle_id = Column(Integer, ForeignKey("vehicles.id"), nullable=False, index=True)
    previous_status = Column(String(20))
    new_status = Column(String(20), nullable=False)
    changed_by = Column(String(64), ForeignKey("profiles.id"), nullable=False)
    notes = Column(Text)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False, index=True)

    vehicle = relationship("Vehicle", back_populates="history")
    changer = relationship("Profile", foreign_keys=[changed_by])

    def __repr__(self):
        return f"<VehicleStatusHistory {self.id} {self.previous_status} -> {self.new_status}>"
