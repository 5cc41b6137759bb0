from .user import UserPublic, UserProfile
from .job_post import JobPost, JobPostCreate, JobPostWithFamily
from .review import Review, ReviewCreate, RatingSummary, CompatibilityResponse
from .match import Match, MatchDetail, MatchListResponse
from .swipe import Swipe, SwipeCreate, SwipeResult
from .feed import FeedFilters, CaregiverCandidate, JobPostCandidate, FeedResponse

__all__ = [
    "UserPublic", "UserProfile",
    "JobPost", "JobPostCreate", "JobPostWithFamily",
    "Review", "ReviewCreate", "RatingSummary", "CompatibilityResponse",
    "Match", "MatchDetail", "MatchListResponse",
    "Swipe", "SwipeCreate", "SwipeResult",
    "FeedFilters", "CaregiverCandidate", "JobPostCandidate", "FeedResponse",
]
