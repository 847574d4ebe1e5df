# app/models/vehicle.py
"""
Fleet vehicles.
unit_number is the business key. assigned_to / current_location / notes are
status-conditional; vehicle_service enforces which are set for each status.
"""

from datetime import datetime

from sqlalchemy import Column, Integer, String, DateTime, Text, ForeignKey
from sqlalchemy.orm import relationship
from app.database import Base

VEHICLE_STATUSES = ("available", "assigned", "out_of_service")


class Vehicle(Base):
    __tablename__ = "vehicles"

    id = Column(Integer, primary_key=True, autoincrement=True)
    unit_number = Column(String(50), unique=True, nullable=False, index=True)
    make = Column(String(100), nullable=False)
    model = Column(String(100), nullable=False)
    year = Column(Integer, nullable=False)
    status = Column(String(20), default="available", nullable=False, index=True)
    assigned_to = Column(String(64), ForeignKey("profiles.id"))   # set iff status == assigned
    current_location = Column(Text)                                # set iff status == out_of_service
    notes = Column(Text)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime)

    assignee = relationship("Profile", foreign_keys=[assigned_to])
    history = relationship(
        "VehicleStatusHistory",
        back_populates="vehicle",
        cascade="all, delete-orphan",
        order_by="[VehicleStatusHistory.created_at.desc(), VehicleStatusHistory.id.desc()]",
    )

    def __repr__(self):
        return f"<Vehicle {self.unit_number} status={self.status}>"
