# app/schemas/vehicle.py
from pydantic import BaseModel, Field
from datetime import datetime
from typing import Literal, Optional
from app.schemas.profile import ProfileSummary

VehicleStatus = Literal["available", "assigned", "out_of_service"]


class VehicleCreate(BaseModel):
    unit_number: str = Field(min_length=1)
    make: str
    model: str
    year: int
    status: VehicleStatus = "available"
    assigned_to: Optional[str] = None
    current_location: Optional[str] = None
    notes: Optional[str] = None


class VehicleStatusChange(BaseModel):
    status: VehicleStatus
    assigned_to: Optional[str] = None
    current_location: Optional[str] = None
    notes: Optional[str] = None


class VehicleOut(BaseModel):
    id: int
    unit_number: str
    make: str
    model: str
    year: int
    status: str
    assigned_to: Optional[str]
    current_location: Optional[str]
    notes: Optional[str]
    assignee: Optional[ProfileSummary] = None
    created_at: Optional[datetime]
    updated_at: Optional[datetime]

    class Config:
        from_attributes = True


class VehicleStatusChangeOut(BaseModel):
    vehicle: VehicleOut
    suggest_work_order: bool   # True right after a move to out_of_service


class VehicleSummary(BaseModel):
    id: int
    unit_number: str
    make: str
    model: str

    class Config:
        from_attributes = True
