from .scoring_service import ScoringService
from .match_service import MatchService
from .swipe_service import SwipeService
from .feed_service import FeedService
from .review_service import ReviewService

__all__ = [
    "ScoringService",
    "MatchService",
    "SwipeService",
    "FeedService",
    "ReviewService",
]
