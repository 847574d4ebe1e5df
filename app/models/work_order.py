# app/models/work_order.py
"""
Maintenance work orders raised against a vehicle.
work_order_number is unique; work_order_service allocates it with a
conditional-insert-retry loop. Resolution fields are set only while completed.
"""

from datetime import datetime

from sqlalchemy import Column, Integer, String, DateTime, Text, ForeignKey
from sqlalchemy.orm import relationship
from app.database import Base

WORK_ORDER_STATUSES = ("pending", "in_progress", "completed", "cancelled")
WORK_ORDER_PRIORITIES = ("low", "normal", "high", "urgent")


class WorkOrder(Base):
    __tablename__ = "work_orders"

    id = Column(Integer, primary_key=True, autoincrement=True)
    work_order_number = Column(Integer, unique=True, index=True)   # NULL when auto-numbering is off
    vehicle_id = Column(Integer, ForeignKey("vehicles.id"), nullable=False, index=True)
    created_by = Column(String(64), ForeignKey("profiles.id"), nullable=False)
    status = Column(String(20), default="pending", nullable=False, index=True)
    priority = Column(String(20), default="normal", nullable=False)
    description = Column(Text, nullable=False)
    location = Column(Text)
    mileage = Column(Integer)
    resolved_at = Column(DateTime)
    resolved_by = Column(String(64), ForeignKey("profiles.id"))
    resolution_notes = Column(Text)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False, index=True)
    updated_at = Column(DateTime)

    vehicle = relationship("Vehicle")
    creator = relationship("Profile", foreign_keys=[created_by])
    resolver = relationship("Profile", foreign_keys=[resolved_by])

    def __repr__(self):
        return f"<WorkOrder #{self.work_order_number} status={self.status} priority={self.priority}>"
