# app/services/dashboard_service.py
"""Fleet and work order counters for the dashboard."""

from sqlalchemy import func
from sqlalchemy.orm import Session
from app.config import settings
from app.models.profile import Profile
from app.models.vehicle import Vehicle
from app.models.work_order import WorkOrder
from app.services.policy_service import authorize


def _counts_by(db: Session, column) -> dict:
    return {key: count for key, count in db.query(column, func.count()).group_by(column).all()}


def get_dashboard_stats(db: Session, principal: Profile) -> dict:
    authorize(db, principal, "vehicle", "read", description="load dashboard")
    authorize(db, principal, "work_order", "read", description="load dashboard")
    vehicle_status = _counts_by(db, Vehicle.status)
    order_status = _counts_by(db, WorkOrder.status)
    order_priority = _counts_by(db, WorkOrder.priority)

    recent = (
        db.query(WorkOrder)
        .order_by(WorkOrder.created_at.desc(), WorkOrder.id.desc())
        .limit(settings.RECENT_WORK_ORDERS_LIMIT)
        .all()
    )
    return {
        "total_vehicles": sum(vehicle_status.values()),
        "available_vehicles": vehicle_status.get("available", 0),
        "assigned_vehicles": vehicle_status.get("assigned", 0),
        "out_of_service_vehicles": vehicle_status.get("out_of_service", 0),
        "total_work_orders": sum(order_status.values()),
        "pending_work_orders": order_status.get("pending", 0),
        "completed_work_orders": order_status.get("completed", 0),
        "urgent_work_orders": order_priority.get("urgent", 0),
        "status_breakdown": order_status,
        "priority_breakdown": order_priority,
        "recent_work_orders": recent,
    }
