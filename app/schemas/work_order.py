# app/schemas/work_order.py
from pydantic import BaseModel, Field
from datetime import datetime
from typing import Literal, Optional
from app.schemas.profile import ProfileSummary
from app.schemas.vehicle import VehicleSummary

WorkOrderStatus = Literal["pending", "in_progress", "completed", "cancelled"]
Priority = Literal["low", "normal", "high", "urgent"]


class WorkOrderCreate(BaseModel):
    vehicle_id: int
    description: str = Field(min_length=1)
    priority: Optional[Priority] = None      # falls back to the configured default
    location: Optional[str] = None
    mileage: Optional[int] = Field(default=None, ge=0)


class WorkOrderStatusUpdate(BaseModel):
    status: WorkOrderStatus
    resolution_notes: Optional[str] = None


class WorkOrderComplete(BaseModel):
    resolution_notes: Optional[str] = None


class WorkOrderOut(BaseModel):
    id: int
    work_order_number: Optional[int]
    vehicle_id: int
    vehicle: Optional[VehicleSummary] = None
    created_by: str
    creator: Optional[ProfileSummary] = None
    status: str
    priority: str
    description: str
    location: Optional[str]
    mileage: Optional[int]
    resolved_at: Optional[datetime]
    resolved_by: Optional[str]
    resolver: Optional[ProfileSummary] = None
    resolution_notes: Optional[str]
    created_at: datetime
    updated_at: Optional[datetime]

    class Config:
        from_attributes = True
