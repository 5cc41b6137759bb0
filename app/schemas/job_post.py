from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime
import uuid
from app.schemas.user import UserPublic


class JobPostBase(BaseModel):
    title: str = Field(..., min_length=1, max_length=255)
    description: Optional[str] = None
    location: Optional[str] = None
    hours_per_week: float = Field(..., gt=0)
    rate_per_hour: float = Field(..., gt=0)


class JobPostCreate(JobPostBase):
    pass


class JobPost(JobPostBase):
    id: uuid.UUID
    family_id: uuid.UUID
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class JobPostWithFamily(JobPost):
    """Job post with the posting family's public profile embedded"""
    family: Optional[UserPublic] = None
