from pydantic import BaseModel
from typing import Optional
from datetime import datetime
import uuid
from app.models.user import UserRole


class UserPublic(BaseModel):
    """Profile fields safe to show to the other side of a match"""
    id: uuid.UUID
    role: UserRole
    name: Optional[str] = None
    bio: Optional[str] = None
    location: Optional[str] = None
    avatar_url: Optional[str] = None
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class UserProfile(UserPublic):
    """Full profile, including contact details, for the owner and matched parties"""
    email: str
    phone: Optional[str] = None
