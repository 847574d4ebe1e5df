# app/services/settings_service.py
"""
Work order settings singleton.
get_settings() never writes; save_settings() upserts the row at SINGLETON_ID.
"""

from datetime import datetime

from sqlalchemy.orm import Session
from app.database import atomic
from app.exceptions import Conflict
from app.models.profile import Profile
from app.models.work_order_settings import WorkOrderSettings, SINGLETON_ID
from app.services.policy_service import authorize
from app.utils.logger import get_logger

logger = get_logger(__name__)

DEFAULT_SETTINGS = {
    "default_priority": "normal",
    "require_mileage": True,
    "require_location": True,
    "auto_assign_numbers": True,
    "notification_enabled": True,
}

SETTINGS_FIELDS = tuple(DEFAULT_SETTINGS)


def get_settings(db: Session) -> WorkOrderSettings:
    """The stored settings row, or an unsaved instance carrying the defaults (id is None)."""
    row = db.get(WorkOrderSettings, SINGLETON_ID)
    if row is not None:
        return row
    return WorkOrderSettings(id=None, **DEFAULT_SETTINGS)


def read_settings(db: Session, principal: Profile) -> WorkOrderSettings:
    authorize(db, principal, "work_order_settings", "read", description="load work order settings")
    return get_settings(db)


def save_settings(db: Session, principal: Profile, values: dict) -> WorkOrderSettings:
    action = "save work order settings"
    authorize(db, principal, "work_order_settings", "update", description=action)
    values = {k: v for k, v in values.items() if k in SETTINGS_FIELDS}

    try:
        return _upsert(db, principal, values, action)
    except Conflict:
        # Another first-save inserted the row between our read and insert
        logger.warning("[SETTINGS] Concurrent first save detected, retrying as update")
        return _upsert(db, principal, values, action)


def _upsert(db: Session, principal: Profile, values: dict, action: str) -> WorkOrderSettings:
    with atomic(db, action):
        row = db.get(WorkOrderSettings, SINGLETON_ID)
        if row is None:
            row = WorkOrderSettings(id=SINGLETON_ID, **{**DEFAULT_SETTINGS, **values})
            db.add(row)
        else:
            for field, value in values.items():
                setattr(row, field, value)
        row.updated_by = principal.id
        row.updated_at = datetime.utcnow()
    logger.info(f"[SETTINGS] Work order settings saved by {principal.id}")
    return row
