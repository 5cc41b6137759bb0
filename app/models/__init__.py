from .user import User, UserRole
from .job_post import JobPost
from .swipe import Swipe, SwipeDirection
from .match import Match
from .review import Review

__all__ = [
    "User", "UserRole", "JobPost", "Swipe", "SwipeDirection", "Match", "Review"
]
