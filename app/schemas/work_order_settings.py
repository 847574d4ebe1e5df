# app/schemas/work_order_settings.py
from pydantic import BaseModel
from datetime import datetime
from typing import Optional
from app.schemas.work_order import Priority


class WorkOrderSettingsIn(BaseModel):
    default_priority: Priority = "normal"
    require_mileage: bool = True
    require_location: bool = True
    auto_assign_numbers: bool = True
    notification_enabled: bool = True


class WorkOrderSettingsOut(WorkOrderSettingsIn):
    id: Optional[int] = None         # None until the first save
    updated_by: Optional[str] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True
