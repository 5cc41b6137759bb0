"""
Review service: reviews between users and the aggregate rating the
compatibility score consumes.
"""

from __future__ import annotations
from typing import Optional
from uuid import UUID
from sqlalchemy.ext.asyncio import AsyncSession
import logging

from app.core.exceptions import DuplicateReviewError, NotAuthorizedError, UserNotFoundError
from app.models.review import Review
from app.models.user import User
from app.repositories.review_repository import ReviewRepository
from app.repositories.user_repository import UserRepository
from app.schemas.review import RatingSummary, ReviewCreate

logger = logging.getLogger(__name__)


class ReviewService:
    """Service for creating reviews and reading rating summaries."""

    def __init__(
        self,
        review_repo: Optional[ReviewRepository] = None,
        user_repo: Optional[UserRepository] = None
    ):
        self.review_repo = review_repo or ReviewRepository()
        self.user_repo = user_repo or UserRepository()

    async def create_review(
        self,
        db: AsyncSession,
        reviewer: User,
        review_in: ReviewCreate
    ) -> Review:
        """
        Create a review of another user.

        Raises:
            NotAuthorizedError: If the reviewer reviews themselves
            UserNotFoundError: If the reviewee does not exist
            DuplicateReviewError: If the reviewer already reviewed this person
        """
        if review_in.reviewee_id == reviewer.id:
            raise NotAuthorizedError("You cannot review yourself")

        reviewee = await self.user_repo.get(db, review_in.reviewee_id)
        if reviewee is None:
            raise UserNotFoundError()

        inserted = await self.review_repo.insert_if_absent(
            db,
            reviewer_id=reviewer.id,
            reviewee_id=review_in.reviewee_id,
            rating=review_in.rating,
            comment=review_in.comment,
        )
        if not inserted:
            raise DuplicateReviewError()

        logger.info(f"User {reviewer.id} reviewed {review_in.reviewee_id} ({review_in.rating} stars)")
        return await self.review_repo.get_by_pair(db, reviewer.id, review_in.reviewee_id)

    async def get_rating_summary(
        self,
        db: AsyncSession,
        user_id: UUID
    ) -> RatingSummary:
        """Mean rating and review count for a user"""
        average, count = await self.review_repo.get_rating_summary(db, user_id)
        return RatingSummary(average=round(average, 2), count=count)
