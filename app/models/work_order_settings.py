# app/models/work_order_settings.py
"""
Work order settings — a singleton row.
The row always lives at SINGLETON_ID so two first-saves cannot create two rows.
"""

from datetime import datetime

from sqlalchemy import Column, Integer, String, DateTime, Boolean, ForeignKey
from app.database import Base

SINGLETON_ID = 1


class WorkOrderSettings(Base):
    __tablename__ = "work_order_settings"

    id = Column(Integer, primary_key=True, default=SINGLETON_ID)
    default_priority = Column(String(20), default="normal", nullable=False)
    require_mileage = Column(Boolean, default=True, nullable=False)
    require_location = Column(Boolean, default=True, nullable=False)
    auto_assign_numbers = Column(Boolean, default=True, nullable=False)
    notification_enabled = Column(Boolean, default=True, nullable=False)
    updated_by = Column(String(64), ForeignKey("profiles.id"))
    updated_at = Column(DateTime)

    def __repr__(self):
        return f"<WorkOrderSettings default_priority={self.default_priority}>"
