# app/schemas/dashboard.py
from pydantic import BaseModel
from app.schemas.work_order import WorkOrderOut


class DashboardStatsOut(BaseModel):
    total_vehicles: int
    available_vehicles: int
    assigned_vehicles: int
    out_of_service_vehicles: int
    total_work_orders: int
    pending_work_orders: int
    completed_work_orders: int
    urgent_work_orders: int
    status_breakdown: dict[str, int]
    priority_breakdown: dict[str, int]
    recent_work_orders: list[WorkOrderOut]
