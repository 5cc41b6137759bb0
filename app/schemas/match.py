from pydantic import BaseModel
from typing import Optional, List
from datetime import datetime
import uuid
from app.schemas.user import UserProfile
from app.schemas.job_post import JobPost


class Match(BaseModel):
    id: uuid.UUID
    family_id: uuid.UUID
    caregiver_id: uuid.UUID
    job_id: uuid.UUID
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class MatchDetail(Match):
    """Match with both parties and the job post; contact details unlock on match"""
    family: Optional[UserProfile] = None
    caregiver: Optional[UserProfile] = None
    job: Optional[JobPost] = None


class MatchListResponse(BaseModel):
    items: List[MatchDetail]
    total: int
