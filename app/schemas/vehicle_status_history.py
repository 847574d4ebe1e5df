# app/schemas/vehicle_status_history.py
from pydantic import BaseModel
from datetime import datetime
from typing import Optional
from app.schemas.profile import ProfileSummary


class VehicleStatusHistoryOut(BaseModel):
    id: int
    vehicle_id: int
    previous_status: Optional[str]    # None for the creation entry
    new_status: str
    changed_by: str
    changer: Optional[ProfileSummary] = None
    notes: Optional[str]
    created_at: datetime

    class Config:
        from_attributes = True
