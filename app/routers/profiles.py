# app/routers/profiles.py
"""User administration — profiles of authenticated users and their roles."""

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from app.auth import get_current_principal
from app.database import get_db
from app.models.profile import Profile
from app.schemas.profile import ProfileCreate, ProfileUpdate, ProfileOut
from app.services import profile_service

router = APIRouter()


@router.get("/profiles/me", response_model=ProfileOut, summary="Current user's profile")
def read_own_profile(principal: Profile = Depends(get_current_principal)):
    return principal


@router.get("/profiles", response_model=list[ProfileOut], summary="List all profiles (admin)")
def list_profiles(db: Session = Depends(get_db), principal: Profile = Depends(get_current_principal)):
    return profile_service.list_profiles(db, principal)


@router.post("/profiles", response_model=ProfileOut, status_code=status.HTTP_201_CREATED,
             summary="Register a profile for a new user (admin)")
def create_profile(body: ProfileCreate, db: Session = Depends(get_db),
                   principal: Profile = Depends(get_current_principal)):
    return profile_service.create_profile(
        db, principal, profile_id=body.id, full_name=body.full_name, role=body.role,
        badge_number=body.badge_number, email=body.email,
    )


@router.get("/profiles/{profile_id}", response_model=ProfileOut, summary="Read a profile")
def read_profile(profile_id: str, db: Session = Depends(get_db),
                 principal: Profile = Depends(get_current_principal)):
    return profile_service.get_profile(db, principal, profile_id)


@router.patch("/profiles/{profile_id}", response_model=ProfileOut, summary="Update name, badge or role")
def update_profile(profile_id: str, body: ProfileUpdate, db: Session = Depends(get_db),
                   principal: Profile = Depends(get_current_principal)):
    return profile_service.update_profile(db, principal, profile_id, body.model_dump(exclude_unset=True))
