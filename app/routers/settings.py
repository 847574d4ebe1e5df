# app/routers/settings.py
"""Work order settings (singleton)."""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from app.auth import get_current_principal
from app.database import get_db
from app.models.profile import Profile
from app.schemas.work_order_settings import WorkOrderSettingsIn, WorkOrderSettingsOut
from app.services import settings_service

router = APIRouter()


@router.get("/settings/work-orders", response_model=WorkOrderSettingsOut, summary="Current work order settings")
def read_work_order_settings(db: Session = Depends(get_db), principal: Profile = Depends(get_current_principal)):
    """Returns the defaults (id = null) until an admin saves settings for the first time."""
    return settings_service.read_settings(db, principal)


@router.put("/settings/work-orders", response_model=WorkOrderSettingsOut, summary="Save work order settings (admin)")
def save_work_order_settings(body: WorkOrderSettingsIn, db: Session = Depends(get_db),
                             principal: Profile = Depends(get_current_principal)):
    return settings_service.save_settings(db, principal, body.model_dump())
