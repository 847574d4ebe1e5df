# app/services/vehicle_service.py
"""
Vehicle lifecycle: creation, status changes, deletion, lookups.

Status is fully connected (any status → any other). Each status dictates its side fields:
  available       → assigned_to, current_location and notes all NULL
  assigned        → assigned_to required, current_location NULL
  out_of_service  → current_location required, assigned_to NULL
A status change and its history entry are written in one transaction.
"""

from datetime import datetime
from typing import Optional

from sqlalchemy import or_, func
from sqlalchemy.orm import Session

from app.database import atomic
from app.exceptions import NotFound, ValidationFailed, Conflict
from app.models.profile import Profile
from app.models.vehicle import Vehicle, VEHICLE_STATUSES
from app.models.vehicle_status_history import VehicleStatusHistory
from app.models.work_order import WorkOrder
from app.services.policy_service import authorize
from app.utils.logger import get_logger

logger = get_logger(__name__)

NOTES_ALLOWED = {"assigned", "out_of_service"}


def normalize_status_fields(status: str, assigned_to: Optional[str], current_location: Optional[str],
                            notes: Optional[str], action: str = "save vehicle") -> dict:
    """Return the side fields legal for `status`, or raise ValidationFailed if one is missing."""
    if status not in VEHICLE_STATUSES:
        raise ValidationFailed(action, f"unknown vehicle status '{status}'")

    location = current_location.strip() if current_location else None
    fields = {"assigned_to": None, "current_location": None, "notes": None}

    if status == "assigned":
        if not assigned_to:
            raise ValidationFailed(action, "an assigned vehicle needs an assignee")
        fields["assigned_to"] = assigned_to
    elif status == "out_of_service":
        if not location:
            raise ValidationFailed(action, "an out-of-service vehicle needs a current location")
        fields["current_location"] = location

    if status in NOTES_ALLOWED:
        fields["notes"] = notes or None
    return fields


def _ensure_assignee_exists(db: Session, assigned_to: Optional[str], action: str):
    if assigned_to and db.get(Profile, assigned_to) is None:
        raise ValidationFailed(action, f"assignee {assigned_to} does not exist")


def _record_status_change(db: Session, vehicle: Vehicle, previous_status: Optional[str],
                          changed_by: str, notes: Optional[str]) -> VehicleStatusHistory:
    entry = VehicleStatusHistory(
        vehicle_id=vehicle.id,
        previous_status=previous_status,
        new_status=vehicle.status,
        changed_by=changed_by,
        notes=notes,
        created_at=datetime.utcnow(),
    )
    db.add(entry)
    return entry


def get_vehicle(db: Session, vehicle_id: int, action: str = "load vehicle") -> Vehicle:
    vehicle = db.get(Vehicle, vehicle_id)
    if vehicle is None:
        raise NotFound(action, f"vehicle {vehicle_id} not found")
    return vehicle


def like_pattern(q: str) -> str:
    """Lower-cased substring pattern for LIKE; % and _ typed by the user match literally."""
    escaped = q.lower().replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"


def read_vehicle(db: Session, principal: Profile, vehicle_id: int) -> Vehicle:
    authorize(db, principal, "vehicle", "read", description="load vehicle")
    return get_vehicle(db, vehicle_id)


def list_vehicles(db: Session, principal: Profile, status: str = None, q: str = None):
    """Vehicles ordered by unit number, optionally filtered by status and a free-text search."""
    authorize(db, principal, "vehicle", "read", description="load vehicles")
    query = db.query(Vehicle).outerjoin(Profile, Vehicle.assigned_to == Profile.id)
    if status:
        query = query.filter(Vehicle.status == status)
    if q:
        pattern = like_pattern(q)
        query = query.filter(or_(
            func.lower(Vehicle.unit_number).like(pattern, escape="\\"),
            func.lower(Vehicle.make + " " + Vehicle.model).like(pattern, escape="\\"),
            func.lower(Vehicle.current_location).like(pattern, escape="\\"),
            func.lower(Profile.full_name).like(pattern, escape="\\"),
        ))
    return query.order_by(Vehicle.unit_number).all()


def get_status_history(db: Session, principal: Profile, vehicle_id: int):
    """History entries for a vehicle, newest first."""
    action = "load vehicle history"
    authorize(db, principal, "vehicle_status_history", "read", description=action)
    get_vehicle(db, vehicle_id, action)
    return (
        db.query(VehicleStatusHistory)
        .filter(VehicleStatusHistory.vehicle_id == vehicle_id)
        .order_by(VehicleStatusHistory.created_at.desc(), VehicleStatusHistory.id.desc())
        .all()
    )


def create_vehicle(db: Session, principal: Profile, unit_number: str, make: str, model: str, year: int,
                   status: str = "available", assigned_to: str = None, current_location: str = None,
                   notes: str = None) -> Vehicle:
    """Create a vehicle together with its first history entry (previous_status = NULL)."""
    action = "create vehicle"
    authorize(db, principal, "vehicle", "create", description=action)
    authorize(db, principal, "vehicle_status_history", "create", description=action)
    fields = normalize_status_fields(status, assigned_to, current_location, notes, action)
    _ensure_assignee_exists(db, fields["assigned_to"], action)

    unit_number = unit_number.strip()
    if db.query(Vehicle.id).filter(Vehicle.unit_number == unit_number).first():
        raise Conflict(action, f"unit number {unit_number} already exists")

    vehicle = Vehicle(unit_number=unit_number, make=make, model=model, year=year,
                      status=status, created_at=datetime.utcnow(), **fields)
    with atomic(db, action):
        db.add(vehicle)
        db.flush()   # need vehicle.id for the history row
        _record_status_change(db, vehicle, None, principal.id, fields["notes"])

    logger.info(f"[VEHICLE] Unit {vehicle.unit_number} created as {vehicle.status} by {principal.id}")
    return vehicle


def change_vehicle_status(db: Session, principal: Profile, vehicle_id: int, new_status: str,
                          assigned_to: str = None, current_location: str = None, notes: str = None):
    """
    Move a vehicle to `new_status` and append one history entry.
    Returns (vehicle, suggest_work_order); the flag is True when the vehicle
    has just gone out of service, so the caller can offer to open a work order.
    Re-saving the current status only updates the side fields and writes no history.
    """
    action = "update vehicle status"
    authorize(db, principal, "vehicle", "update", description=action)
    authorize(db, principal, "vehicle_status_history", "create", description=action)
    vehicle = get_vehicle(db, vehicle_id, action)
    fields = normalize_status_fields(new_status, assigned_to, current_location, notes, action)
    _ensure_assignee_exists(db, fields["assigned_to"], action)

    previous_status = vehicle.status
    changed = previous_status != new_status

    with atomic(db, action):
        vehicle.status = new_status
        vehicle.assigned_to = fields["assigned_to"]
        vehicle.current_location = fields["current_location"]
        vehicle.notes = fields["notes"]
        vehicle.updated_at = datetime.utcnow()
        if changed:
            _record_status_change(db, vehicle, previous_status, principal.id, notes)

    if changed:
        logger.info(f"[VEHICLE] Unit {vehicle.unit_number}: {previous_status} → {new_status} by {principal.id}")
    else:
        logger.info(f"[VEHICLE] Unit {vehicle.unit_number}: {new_status} details updated by {principal.id}")
    return vehicle, changed and new_status == "out_of_service"


def release_vehicle(db: Session, vehicle: Vehicle, changed_by: str, notes: str = None) -> bool:
    """
    Set a vehicle back to available inside the caller's transaction.
    Returns False when it already was available (no history entry written).
    """
    previous_status = vehicle.status
    vehicle.status = "available"
    vehicle.assigned_to = None
    vehicle.current_location = None
    vehicle.notes = None
    vehicle.updated_at = datetime.utcnow()
    if previous_status == "available":
        return False
    _record_status_change(db, vehicle, previous_status, changed_by, notes)
    return True


def delete_vehicle(db: Session, principal: Profile, vehicle_id: int):
    """Delete a vehicle and its history. Refused while work orders still reference it."""
    action = "delete vehicle"
    authorize(db, principal, "vehicle", "delete", description=action)
    vehicle = get_vehicle(db, vehicle_id, action)

    order_count = db.query(func.count(WorkOrder.id)).filter(WorkOrder.vehicle_id == vehicle_id).scalar()
    if order_count:
        raise Conflict(action, f"unit {vehicle.unit_number} has {order_count} work order(s)")

    with atomic(db, action):
        db.delete(vehicle)
    logger.info(f"[VEHICLE] Unit {vehicle.unit_number} deleted by {principal.id}")
