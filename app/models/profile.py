# app/models/profile.py
"""
User profiles (principals).
The id is the identity issued by the external auth provider; role drives authorization.
"""

from datetime import datetime

from sqlalchemy import Column, String, DateTime
from app.database import Base

ROLES = ("admin", "user")


class Profile(Base):
    __tablename__ = "profiles"

    id = Column(String(64), primary_key=True)
    role = Column(String(20), default="user", nullable=False)   # admin | user
    full_name = Column(String(200), nullable=False)
    badge_number = Column(String(50))
    email = Column(String(255))
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime)

    def __repr__(self):
        return f"<Profile {self.id} name={self.full_name} role={self.role}>"
