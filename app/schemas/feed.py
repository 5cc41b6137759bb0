from pydantic import BaseModel, ConfigDict, Field, model_validator
from typing import Optional, List
import uuid
from app.schemas.user import UserPublic
from app.schemas.job_post import JobPostWithFamily
from app.schemas.review import RatingSummary


class FeedFilters(BaseModel):
    """Recognized feed facets; anything else in the request is ignored"""
    model_config = ConfigDict(extra="ignore")

    location: Optional[str] = Field(None, description="Substring of the candidate location")
    min_rate: Optional[float] = Field(None, ge=0, description="Minimum hourly rate")
    max_rate: Optional[float] = Field(None, ge=0, description="Maximum hourly rate")
    min_hours: Optional[float] = Field(None, ge=0, description="Minimum hours per week")
    max_hours: Optional[float] = Field(None, ge=0, description="Maximum hours per week")

    @model_validator(mode="after")
    def normalize(self):
        if self.location is not None:
            self.location = self.location.strip() or None
        return self


class CaregiverCandidate(BaseModel):
    """A caregiver shown to a family, with the job context a swipe would use"""
    kind: str = "caregiver"
    caregiver: UserPublic
    job_id: uuid.UUID
    rating: RatingSummary
    compatibility_score: float


class JobPostCandidate(BaseModel):
    """A job post shown to a caregiver, with the posting family embedded"""
    kind: str = "job_post"
    job_post: JobPostWithFamily
    compatibility_score: float


class FeedResponse(BaseModel):
    caregivers: List[CaregiverCandidate] = []
    job_posts: List[JobPostCandidate] = []
    has_more: bool
