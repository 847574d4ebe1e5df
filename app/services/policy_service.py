# app/services/policy_service.py
"""
Authorization policy — the single place that decides which principal may do what.

Every service operation, reads included, calls authorize() before touching the database.
Rules are keyed by (resource, action):

  profile               read → self or admin | create → admin | update → admin, or self without a role change
  vehicle               read → anyone         | create / update / delete → admin
  vehicle_status_history read / create → anyone
  work_order            read / create → anyone | update → admin
  work_order_settings   read → anyone         | update → admin
"""

from sqlalchemy.orm import Session
from app.exceptions import AuthorizationDenied
from app.models.profile import Profile
from app.utils.logger import get_logger

logger = get_logger(__name__)


def is_admin(db: Session, principal_id: str) -> bool:
    """
    Privileged role lookup. Reads the stored role directly, outside the rule table,
    so checking a role never itself needs read access to someone's profile.
    Only answers the admin question; it grants nothing by itself.
    """
    if not principal_id:
        return False
    role = db.query(Profile.role).filter(Profile.id == principal_id).scalar()
    return role == "admin"


def _anyone(db, principal, target, changes):
    return True


def _admin_only(db, principal, target, changes):
    return is_admin(db, principal.id)


def _self_or_admin(db, principal, target, changes):
    return (target is not None and target.id == principal.id) or is_admin(db, principal.id)


def _profile_update(db, principal, target, changes):
    if is_admin(db, principal.id):
        return True
    if target is None or target.id != principal.id:
        return False
    # Non-admins may edit their own name / badge but never their role
    new_role = (changes or {}).get("role")
    return new_role is None or new_role == target.role


RULES = {
    ("profile", "read"): _self_or_admin,
    ("profile", "list"): _admin_only,
    ("profile", "create"): _admin_only,
    ("profile", "update"): _profile_update,
    ("vehicle", "read"): _anyone,
    ("vehicle", "create"): _admin_only,
    ("vehicle", "update"): _admin_only,
    ("vehicle", "delete"): _admin_only,
    ("vehicle_status_history", "read"): _anyone,
    ("vehicle_status_history", "create"): _anyone,
    ("work_order", "read"): _anyone,
    ("work_order", "create"): _anyone,
    ("work_order", "update"): _admin_only,
    ("work_order_settings", "read"): _anyone,
    ("work_order_settings", "update"): _admin_only,
}


def can(db: Session, principal: Profile, resource: str, action: str, target=None, changes: dict = None) -> bool:
    """Evaluate the rule for (resource, action). Unknown pairs are denied."""
    if principal is None:
        return False
    rule = RULES.get((resource, action))
    if rule is None:
        return False
    return bool(rule(db, principal, target, changes))


def authorize(db: Session, principal: Profile, resource: str, action: str, target=None,
              changes: dict = None, description: str = None):
    """Raise AuthorizationDenied unless the principal may perform the action."""
    if can(db, principal, resource, action, target=target, changes=changes):
        return
    who = principal.id if principal is not None else "anonymous"
    logger.warning(f"[POLICY] Denied {action} on {resource} for {who}")
    raise AuthorizationDenied(description or f"{action} {resource.replace('_', ' ')}",
                              "not permitted for this user")
