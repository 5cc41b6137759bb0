from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime
import uuid


class ReviewCreate(BaseModel):
    reviewee_id: uuid.UUID
    rating: int = Field(..., ge=1, le=5)
    comment: Optional[str] = Field(None, max_length=2000)


class Review(BaseModel):
    id: uuid.UUID
    reviewer_id: uuid.UUID
    reviewee_id: uuid.UUID
    rating: int
    comment: Optional[str] = None
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class RatingSummary(BaseModel):
    """Mean rating on a 0-5 scale and the number of reviews behind it"""
    average: float = 0.0
    count: int = 0


class CompatibilityResponse(BaseModel):
    user_id: uuid.UUID
    other_user_id: uuid.UUID
    score: float
