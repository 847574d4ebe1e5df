# app/auth.py
"""
Principal resolution.
Sign-in happens at the auth provider; the gateway in front of this API forwards
the authenticated user id in settings.PRINCIPAL_HEADER.
"""

from fastapi import Depends, HTTPException, Request, status
from sqlalchemy.orm import Session
from app.config import settings
from app.database import get_db
from app.models.profile import Profile


def get_current_principal(request: Request, db: Session = Depends(get_db)) -> Profile:
    """FastAPI dependency — the profile of the calling user, or 401."""
    principal_id = request.headers.get(settings.PRINCIPAL_HEADER)
    if not principal_id:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Not authenticated")
    profile = db.get(Profile, principal_id)
    if profile is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Unknown user")
    return profile
