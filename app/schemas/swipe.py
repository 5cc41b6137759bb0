from pydantic import BaseModel, model_validator
from typing import Optional
from datetime import datetime
import uuid
from app.schemas.match import Match


class SwipeCreate(BaseModel):
    """
    A swipe submitted by the current user.

    Families send ``caregiver_id`` (and optionally ``job_id``; their newest
    job post is used otherwise). Caregivers send ``job_id``.
    ``direction`` is validated by the service so an unknown value maps to
    the invalid_direction error rather than a generic 422.
    """
    direction: str  # like or pass
    caregiver_id: Optional[uuid.UUID] = None
    job_id: Optional[uuid.UUID] = None

    @model_validator(mode="after")
    def require_target(self):
        if self.caregiver_id is None and self.job_id is None:
            raise ValueError("caregiver_id or job_id is required")
        return self


class Swipe(BaseModel):
    id: uuid.UUID
    family_id: uuid.UUID
    caregiver_id: uuid.UUID
    job_id: uuid.UUID
    actor_role: str
    direction: str
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class SwipeResult(BaseModel):
    """Outcome of a swipe: the ledger entry plus any match it completed"""
    swipe: Swipe
    was_new: bool
    is_match: bool
    match: Optional[Match] = None
