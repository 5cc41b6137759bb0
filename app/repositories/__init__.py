# Repositories package
from .base import BaseRepository
from .user_repository import UserRepository
from .job_post_repository import JobPostRepository
from .swipe_repository import SwipeRepository
from .match_repository import MatchRepository
from .review_repository import ReviewRepository

__all__ = [
    "BaseRepository",
    "UserRepository",
    "JobPostRepository",
    "SwipeRepository",
    "MatchRepository",
    "ReviewRepository",
]
