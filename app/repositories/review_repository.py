"""
Review repository: stores reviews and aggregates a user's rating.
"""

from __future__ import annotations
from uuid import UUID
from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.exc import SQLAlchemyError
import logging

from app.models.review import Review
from .base import BaseRepository

logger = logging.getLogger(__name__)

REVIEW_UNIQUE_COLUMNS = ("reviewer_id", "reviewee_id")


class ReviewRepository(BaseRepository[Review]):
    """Repository for Review model."""

    def __init__(self):
        """Initialize with Review model."""
        super().__init__(Review)

    async def get_rating_summary(
        self,
        db: AsyncSession,
        user_id: UUID
    ) -> tuple[float, int]:
        """
        Get the mean rating and review count for a user.

        Args:
            db: Active database session
            user_id: UUID of the reviewed user

        Returns:
            Tuple of (average rating, review count); (0.0, 0) when unreviewed

        Example:
            average, count = await repo.get_rating_summary(db, caregiver_id)
        """
        try:
            stmt = select(func.avg(Review.rating), func.count(Review.id)).where(
                Review.reviewee_id == user_id
            )
            result = await db.execute(stmt)
            average, count = result.one()
            return float(average or 0.0), int(count or 0)

        except SQLAlchemyError as e:
            logger.error(f"Error fetching rating summary for user {user_id}: {e}")
            raise

    async def insert_if_absent(
        self,
        db: AsyncSession,
        reviewer_id: UUID,
        reviewee_id: UUID,
        rating: int,
        comment: str | None = None
    ) -> bool:
        """Insert a review unless the reviewer already reviewed this person."""
        return await self.insert_ignore_conflict(
            db,
            {
                "reviewer_id": reviewer_id,
                "reviewee_id": reviewee_id,
                "rating": rating,
                "comment": comment,
            },
            REVIEW_UNIQUE_COLUMNS,
        )

    async def get_by_pair(
        self,
        db: AsyncSession,
        reviewer_id: UUID,
        reviewee_id: UUID
    ) -> Review | None:
        """Get the review one user left for another."""
        try:
            stmt = select(Review).where(
                Review.reviewer_id == reviewer_id,
                Review.reviewee_id == reviewee_id,
            )
            result = await db.execute(stmt)
            return result.scalar_one_or_none()

        except SQLAlchemyError as e:
            logger.error(f"Error fetching review by {reviewer_id} for {reviewee_id}: {e}")
            raise
