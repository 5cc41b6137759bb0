"""
Job post repository.

Provides the job-context lookups used when recording swipes and the
filtered, exclusion-aware listing behind the caregiver feed.
"""

from __future__ import annotations
from typing import Optional, Iterable
from uuid import UUID
from sqlalchemy import select, desc, asc
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload
from sqlalchemy.exc import SQLAlchemyError
import logging

from app.models.job_post import JobPost
from app.schemas.feed import FeedFilters
from .base import BaseRepository

logger = logging.getLogger(__name__)


class JobPostRepository(BaseRepository[JobPost]):
    """
    Repository for JobPost model.

    Provides methods for:
    - Resolving a family's default job context
    - Job post discovery with exclusions and facet filters
    """

    def __init__(self):
        """Initialize with JobPost model."""
        super().__init__(JobPost)

    async def get_latest_for_family(
        self,
        db: AsyncSession,
        family_id: UUID
    ) -> Optional[JobPost]:
        """
        Get the family's most recently created job post.

        Args:
            db: Active database session
            family_id: UUID of the family

        Returns:
            Newest JobPost, or None if the family has none
        """
        try:
            stmt = (
                select(JobPost)
                .where(JobPost.family_id == family_id)
                .order_by(desc(JobPost.created_at), desc(JobPost.id))
                .limit(1)
            )
            result = await db.execute(stmt)
            return result.scalar_one_or_none()

        except SQLAlchemyError as e:
            logger.error(f"Error fetching latest job post for family {family_id}: {e}")
            raise

    async def get_posts_for_feed(
        self,
        db: AsyncSession,
        limit: int,
        filters: Optional[FeedFilters] = None,
        exclude_job_ids: Optional[Iterable[UUID]] = None
    ) -> list[JobPost]:
        """
        Get job posts for a caregiver's feed.

        Filters for:
        - Job posts not in the exclusion set
        - Location substring (case-insensitive)
        - Rate and weekly hours bounds
        Ordered oldest first so the feed follows creation order.

        Args:
            db: Active database session
            limit: Maximum number of job posts to return
            filters: Optional facet filters
            exclude_job_ids: Job post IDs to leave out (already swiped or on deck)

        Returns:
            List of JobPost instances with the posting family loaded

        Example:
            posts = await repo.get_posts_for_feed(
                db, limit=20, filters=FeedFilters(location="Oakland"), exclude_job_ids=swiped
            )
        """
        try:
            query = (
                select(JobPost)
                .options(selectinload(JobPost.family))
                .order_by(asc(JobPost.created_at), asc(JobPost.id))
                .limit(limit)
            )

            exclude = list(exclude_job_ids or [])
            if exclude:
                query = query.where(~JobPost.id.in_(exclude))

            if filters is not None:
                if filters.location:
                    query = query.where(JobPost.location.icontains(filters.location, autoescape=True))
                if filters.min_rate is not None:
                    query = query.where(JobPost.rate_per_hour >= filters.min_rate)
                if filters.max_rate is not None:
                    query = query.where(JobPost.rate_per_hour <= filters.max_rate)
                if filters.min_hours is not None:
                    query = query.where(JobPost.hours_per_week >= filters.min_hours)
                if filters.max_hours is not None:
                    query = query.where(JobPost.hours_per_week <= filters.max_hours)

            result = await db.execute(query)
            return list(result.scalars().all())

        except SQLAlchemyError as e:
            logger.error(f"Error fetching feed job posts: {e}")
            raise
