# app/routers/work_orders.py
"""Maintenance work orders — list/filter, create, status transitions, completion."""

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from typing import Optional
from app.auth import get_current_principal
from app.database import get_db
from app.models.profile import Profile
from app.schemas.work_order import (
    Priority, WorkOrderComplete, WorkOrderCreate, WorkOrderOut, WorkOrderStatus, WorkOrderStatusUpdate,
)
from app.services import work_order_service

router = APIRouter()


@router.get("/work-orders", response_model=list[WorkOrderOut], summary="List work orders")
def list_work_orders(status: Optional[WorkOrderStatus] = None, priority: Optional[Priority] = None,
                     q: Optional[str] = None, db: Session = Depends(get_db),
                     principal: Profile = Depends(get_current_principal)):
    """Newest first. `q` searches unit number, description, location, creator and number."""
    return work_order_service.list_work_orders(db, principal, status=status, priority=priority, q=q)


@router.post("/work-orders", response_model=WorkOrderOut, status_code=status.HTTP_201_CREATED,
             summary="Open a work order")
def create_work_order(body: WorkOrderCreate, db: Session = Depends(get_db),
                      principal: Profile = Depends(get_current_principal)):
    return work_order_service.create_work_order(db, principal, **body.model_dump())


@router.get("/work-orders/{work_order_id}", response_model=WorkOrderOut, summary="Read a work order")
def read_work_order(work_order_id: int, db: Session = Depends(get_db),
                    principal: Profile = Depends(get_current_principal)):
    return work_order_service.read_work_order(db, principal, work_order_id)


@router.put("/work-orders/{work_order_id}/status", response_model=WorkOrderOut,
            summary="Move a work order to another status (admin)")
def update_work_order_status(work_order_id: int, body: WorkOrderStatusUpdate, db: Session = Depends(get_db),
                             principal: Profile = Depends(get_current_principal)):
    return work_order_service.update_work_order_status(
        db, principal, work_order_id, body.status, resolution_notes=body.resolution_notes,
    )


@router.post("/work-orders/{work_order_id}/complete", response_model=WorkOrderOut,
             summary="Complete a work order and release its vehicle (admin)")
def complete_work_order(work_order_id: int, body: Optional[WorkOrderComplete] = None,
                        db: Session = Depends(get_db), principal: Profile = Depends(get_current_principal)):
    notes = body.resolution_notes if body else None
    return work_order_service.complete_and_free_vehicle(db, principal, work_order_id, resolution_notes=notes)
