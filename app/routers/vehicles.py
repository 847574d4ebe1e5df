# app/routers/vehicles.py
"""Vehicle inventory — list/filter, create, status changes, history, delete."""

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from typing import Optional
from app.auth import get_current_principal
from app.database import get_db
from app.models.profile import Profile
from app.schemas.vehicle import (
    VehicleCreate, VehicleOut, VehicleStatus, VehicleStatusChange, VehicleStatusChangeOut,
)
from app.schemas.vehicle_status_history import VehicleStatusHistoryOut
from app.services import vehicle_service

router = APIRouter()


@router.get("/vehicles", response_model=list[VehicleOut], summary="List vehicles")
def list_vehicles(status: Optional[VehicleStatus] = None, q: Optional[str] = None,
                  db: Session = Depends(get_db), principal: Profile = Depends(get_current_principal)):
    """Filter by status; `q` searches unit number, make/model, location and assignee name."""
    return vehicle_service.list_vehicles(db, principal, status=status, q=q)


@router.post("/vehicles", response_model=VehicleOut, status_code=status.HTTP_201_CREATED,
             summary="Add a vehicle (admin)")
def create_vehicle(body: VehicleCreate, db: Session = Depends(get_db),
                   principal: Profile = Depends(get_current_principal)):
    return vehicle_service.create_vehicle(db, principal, **body.model_dump())


@router.get("/vehicles/{vehicle_id}", response_model=VehicleOut, summary="Read a vehicle")
def read_vehicle(vehicle_id: int, db: Session = Depends(get_db),
                 principal: Profile = Depends(get_current_principal)):
    return vehicle_service.read_vehicle(db, principal, vehicle_id)


@router.put("/vehicles/{vehicle_id}/status", response_model=VehicleStatusChangeOut,
            summary="Change vehicle status (admin)")
def change_vehicle_status(vehicle_id: int, body: VehicleStatusChange, db: Session = Depends(get_db),
                          principal: Profile = Depends(get_current_principal)):
    """
    Updates the vehicle and records the transition in its history.
    `suggest_work_order` is true when the vehicle just went out of service.
    """
    vehicle, suggest = vehicle_service.change_vehicle_status(
        db, principal, vehicle_id, body.status,
        assigned_to=body.assigned_to, current_location=body.current_location, notes=body.notes,
    )
    return {"vehicle": vehicle, "suggest_work_order": suggest}


@router.get("/vehicles/{vehicle_id}/history", response_model=list[VehicleStatusHistoryOut],
            summary="Status history, newest first")
def read_vehicle_history(vehicle_id: int, db: Session = Depends(get_db),
                         principal: Profile = Depends(get_current_principal)):
    return vehicle_service.get_status_history(db, principal, vehicle_id)


@router.delete("/vehicles/{vehicle_id}", summary="Remove a vehicle (admin)")
def delete_vehicle(vehicle_id: int, db: Session = Depends(get_db),
                   principal: Profile = Depends(get_current_principal)):
    vehicle_service.delete_vehicle(db, principal, vehicle_id)
    return {"status": "removed", "id": vehicle_id}
