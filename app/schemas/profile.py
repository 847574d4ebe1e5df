# app/schemas/profile.py
from pydantic import BaseModel
from datetime import datetime
from typing import Literal, Optional

Role = Literal["admin", "user"]


class ProfileCreate(BaseModel):
    id: str                  # identity issued by the auth provider
    full_name: str
    role: Role = "user"
    badge_number: Optional[str] = None
    email: Optional[str] = None


class ProfileUpdate(BaseModel):
    full_name: Optional[str] = None
    role: Optional[Role] = None
    badge_number: Optional[str] = None


class ProfileSummary(BaseModel):
    id: str
    full_name: str
    badge_number: Optional[str]

    class Config:
        from_attributes = True


class ProfileOut(BaseModel):
    id: str
    role: str
    full_name: str
    badge_number: Optional[str]
    email: Optional[str]
    created_at: Optional[datetime]

    class Config:
        from_attributes = True
