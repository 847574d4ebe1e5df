# app/services/work_order_service.py
"""
Work order lifecycle: creation with sequential numbering, status transitions,
and completion that releases the vehicle.

Transitions:
  pending      → in_progress | completed | cancelled
  in_progress  → completed | cancelled
  completed, cancelled are terminal.

Numbering: read the current maximum and insert max + 1 against the unique
work_order_number column. When a concurrent creator took that number first the
insert fails, the transaction is rolled back and the next number is tried.
"""

from datetime import datetime
from typing import Optional

from sqlalchemy import or_, func, cast, String
from sqlalchemy.orm import Session

from app.config import settings
from app.database import atomic
from app.exceptions import NotFound, ValidationFailed, Conflict
from app.models.profile import Profile
from app.models.vehicle import Vehicle
from app.models.work_order import WorkOrder, WORK_ORDER_PRIORITIES
from app.services.notification_service import notify_work_order_created
from app.services.policy_service import authorize
from app.services.settings_service import get_settings
from app.services.vehicle_service import get_vehicle, like_pattern, release_vehicle
from app.utils.logger import get_logger

logger = get_logger(__name__)

ALLOWED_TRANSITIONS = {
    "pending": {"in_progress", "completed", "cancelled"},
    "in_progress": {"completed", "cancelled"},
    "completed": set(),
    "cancelled": set(),
}


def _current_max_number(db: Session) -> int:
    return db.query(func.max(WorkOrder.work_order_number)).scalar() or 0


def get_work_order(db: Session, work_order_id: int, action: str = "load work order") -> WorkOrder:
    work_order = db.get(WorkOrder, work_order_id)
    if work_order is None:
        raise NotFound(action, f"work order {work_order_id} not found")
    return work_order


def read_work_order(db: Session, principal: Profile, work_order_id: int) -> WorkOrder:
    authorize(db, principal, "work_order", "read", description="load work order")
    return get_work_order(db, work_order_id)


def list_work_orders(db: Session, principal: Profile, status: str = None, priority: str = None, q: str = None):
    """Work orders newest first, filtered by status / priority and a free-text search."""
    authorize(db, principal, "work_order", "read", description="load work orders")
    query = (
        db.query(WorkOrder)
        .join(Vehicle, WorkOrder.vehicle_id == Vehicle.id)
        .join(Profile, WorkOrder.created_by == Profile.id)
    )
    if status:
        query = query.filter(WorkOrder.status == status)
    if priority:
        query = query.filter(WorkOrder.priority == priority)
    if q:
        pattern = like_pattern(q)
        query = query.filter(or_(
            func.lower(Vehicle.unit_number).like(pattern, escape="\\"),
            func.lower(WorkOrder.description).like(pattern, escape="\\"),
            func.lower(WorkOrder.location).like(pattern, escape="\\"),
            func.lower(Profile.full_name).like(pattern, escape="\\"),
            cast(WorkOrder.work_order_number, String).like(pattern, escape="\\"),
        ))
    return query.order_by(WorkOrder.created_at.desc(), WorkOrder.id.desc()).all()


def create_work_order(db: Session, principal: Profile, vehicle_id: int, description: str,
                      priority: Optional[str] = None, location: Optional[str] = None,
                      mileage: Optional[int] = None) -> WorkOrder:
    action = "create work order"
    authorize(db, principal, "work_order", "create", description=action)
    vehicle = get_vehicle(db, vehicle_id, action)
    config = get_settings(db)

    priority = priority or config.default_priority
    if priority not in WORK_ORDER_PRIORITIES:
        raise ValidationFailed(action, f"unknown priority '{priority}'")
    if not description or not description.strip():
        raise ValidationFailed(action, "a description is required")
    location = location.strip() if location else None
    if config.require_location and not location:
        raise ValidationFailed(action, "a location is required")
    if config.require_mileage and mileage is None:
        raise ValidationFailed(action, "the current mileage is required")

    unit_number = vehicle.unit_number

    def build(number):
        return WorkOrder(
            work_order_number=number,
            vehicle_id=vehicle_id,
            created_by=principal.id,
            status="pending",
            priority=priority,
            description=description.strip(),
            location=location,
            mileage=mileage,
            created_at=datetime.utcnow(),
        )

    if config.auto_assign_numbers:
        work_order = _insert_with_next_number(db, build, action)
    else:
        work_order = build(None)
        with atomic(db, action):
            db.add(work_order)

    logger.info(f"[WORK_ORDER] #{work_order.work_order_number} created for unit {unit_number} by {principal.id}")
    if config.notification_enabled:
        notify_work_order_created(work_order, unit_number)
    return work_order


def _number_taken(db: Session, number: int) -> bool:
    return db.query(WorkOrder.id).filter(WorkOrder.work_order_number == number).first() is not None


def _insert_with_next_number(db: Session, build, action: str) -> WorkOrder:
    attempts = settings.WORK_ORDER_NUMBER_MAX_ATTEMPTS
    for attempt in range(1, attempts + 1):
        number = _current_max_number(db) + 1
        work_order = build(number)
        try:
            with atomic(db, action):
                db.add(work_order)
        except Conflict:
            if not _number_taken(db, number):
                # The insert failed on some other constraint
                raise
            logger.warning(f"[WORK_ORDER] Number {number} taken concurrently (attempt {attempt}/{attempts})")
            continue
        return work_order
    raise Conflict(action, "could not allocate a work order number, please try again")


def _apply_status(work_order: WorkOrder, new_status: str, resolved_by: str, resolution_notes: Optional[str]):
    now = datetime.utcnow()
    work_order.status = new_status
    work_order.updated_at = now
    if new_status == "completed":
        work_order.resolved_at = now
        work_order.resolved_by = resolved_by
        work_order.resolution_notes = resolution_notes
    else:
        work_order.resolved_at = None
        work_order.resolved_by = None
        work_order.resolution_notes = None


def _check_transition(work_order: WorkOrder, new_status: str, action: str):
    if new_status not in ALLOWED_TRANSITIONS:
        raise ValidationFailed(action, f"unknown work order status '{new_status}'")
    if new_status not in ALLOWED_TRANSITIONS[work_order.status]:
        raise ValidationFailed(action, f"cannot move a {work_order.status} work order to {new_status}")


def update_work_order_status(db: Session, principal: Profile, work_order_id: int, new_status: str,
                             resolution_notes: Optional[str] = None) -> WorkOrder:
    action = "update work order"
    authorize(db, principal, "work_order", "update", description=action)
    work_order = get_work_order(db, work_order_id, action)
    _check_transition(work_order, new_status, action)

    previous_status = work_order.status
    with atomic(db, action):
        _apply_status(work_order, new_status, principal.id, resolution_notes)

    logger.info(f"[WORK_ORDER] #{work_order.work_order_number}: {previous_status} → {new_status} by {principal.id}")
    return work_order


def complete_and_free_vehicle(db: Session, principal: Profile, work_order_id: int,
                              resolution_notes: Optional[str] = None) -> WorkOrder:
    """Complete the work order and make its vehicle available again, in one transaction."""
    action = "complete work order"
    authorize(db, principal, "work_order", "update", description=action)
    authorize(db, principal, "vehicle", "update", description=action)
    authorize(db, principal, "vehicle_status_history", "create", description=action)
    work_order = get_work_order(db, work_order_id, action)
    _check_transition(work_order, "completed", action)
    vehicle = get_vehicle(db, work_order.vehicle_id, action)

    label = f"#{work_order.work_order_number}" if work_order.work_order_number else f"(id {work_order.id})"
    with atomic(db, action):
        _apply_status(work_order, "completed", principal.id, resolution_notes)
        released = release_vehicle(db, vehicle, principal.id, f"Work order {label} completed")

    logger.info(
        f"[WORK_ORDER] {label} completed by {principal.id}; unit {vehicle.unit_number} "
        f"{'released to available' if released else 'already available'}"
    )
    return work_order
