# app/services/profile_service.py
"""
Profile administration.
Identities are created by the external auth provider; this service only
registers and edits the matching profile rows.
"""

from datetime import datetime

from sqlalchemy.orm import Session
from app.database import atomic
from app.exceptions import NotFound, Conflict, ValidationFailed
from app.models.profile import Profile, ROLES
from app.services.policy_service import authorize
from app.utils.logger import get_logger

logger = get_logger(__name__)

EDITABLE_FIELDS = ("full_name", "role", "badge_number")


def lookup_profile(db: Session, profile_id: str):
    """Find a profile by id. Returns None if not found."""
    if not profile_id:
        return None
    return db.get(Profile, profile_id)


def get_profile(db: Session, principal: Profile, profile_id: str) -> Profile:
    profile = lookup_profile(db, profile_id)
    if profile is None:
        raise NotFound("load profile", f"profile {profile_id} not found")
    authorize(db, principal, "profile", "read", target=profile, description="load profile")
    return profile


def list_profiles(db: Session, principal: Profile):
    authorize(db, principal, "profile", "list", description="load profiles")
    return db.query(Profile).order_by(Profile.full_name).all()


def create_profile(db: Session, principal: Profile, profile_id: str, full_name: str, role: str = "user",
                   badge_number: str = None, email: str = None) -> Profile:
    action = "create user"
    authorize(db, principal, "profile", "create", description=action)
    if role not in ROLES:
        raise ValidationFailed(action, f"unknown role '{role}'")
    if lookup_profile(db, profile_id) is not None:
        raise Conflict(action, f"profile {profile_id} already exists")

    profile = Profile(id=profile_id, full_name=full_name, role=role,
                      badge_number=badge_number or None, email=email,
                      created_at=datetime.utcnow())
    with atomic(db, action):
        db.add(profile)
    logger.info(f"[PROFILE] {profile_id} ({role}) created by {principal.id}")
    return profile


def update_profile(db: Session, principal: Profile, profile_id: str, changes: dict) -> Profile:
    """Apply name / badge / role changes. Only admins may change a role."""
    action = "update profile"
    profile = lookup_profile(db, profile_id)
    if profile is None:
        raise NotFound(action, f"profile {profile_id} not found")
    changes = {k: v for k, v in changes.items() if k in EDITABLE_FIELDS and v is not None}
    authorize(db, principal, "profile", "update", target=profile, changes=changes, description=action)

    if "role" in changes and changes["role"] not in ROLES:
        raise ValidationFailed(action, f"unknown role '{changes['role']}'")

    with atomic(db, action):
        for field, value in changes.items():
            setattr(profile, field, value if field != "badge_number" else (value or None))
        profile.updated_at = datetime.utcnow()
    logger.info(f"[PROFILE] {profile_id} updated by {principal.id}: {sorted(changes)}")
    return profile
