"""
Candidate feed service.

Builds the next page of swipeable candidates: caregivers for a family,
job posts for a caregiver. What the actor has already decided on is read
from the swipe ledger on every request; the service keeps no feed
position between calls.
"""

from __future__ import annotations
from typing import Iterable, Optional
from uuid import UUID
from sqlalchemy.ext.asyncio import AsyncSession
import logging

from app.core.config import settings
from app.core.exceptions import MissingJobContextError
from app.models.user import User, UserRole
from app.repositories.job_post_repository import JobPostRepository
from app.repositories.swipe_repository import SwipeRepository
from app.repositories.user_repository import UserRepository
from app.schemas.feed import CaregiverCandidate, FeedFilters, JobPostCandidate
from app.schemas.job_post import JobPostWithFamily
from app.schemas.review import RatingSummary
from app.schemas.user import UserPublic
from app.services.scoring_service import ScoringService

logger = logging.getLogger(__name__)


class FeedService:
    """
    Service producing ranked, de-duplicated candidate pages.

    Eligibility comes from the ledger and the filters only; the
    compatibility score just orders the page that was selected.
    """

    def __init__(
        self,
        swipe_repo: Optional[SwipeRepository] = None,
        user_repo: Optional[UserRepository] = None,
        job_post_repo: Optional[JobPostRepository] = None,
        scoring_service: Optional[ScoringService] = None
    ):
        self.swipe_repo = swipe_repo or SwipeRepository()
        self.user_repo = user_repo or UserRepository()
        self.job_post_repo = job_post_repo or JobPostRepository()
        self.scoring_service = scoring_service or ScoringService()

    @staticmethod
    def clamp_limit(limit: Optional[int]) -> int:
        """Bound the page size to [1, feed_max_limit], defaulting when unset"""
        if limit is None:
            return settings.feed_default_limit
        return max(1, min(int(limit), settings.feed_max_limit))

    async def get_caregiver_candidates(
        self,
        db: AsyncSession,
        family: User,
        filters: Optional[FeedFilters] = None,
        limit: Optional[int] = None,
        exclude_ids: Optional[Iterable[UUID]] = None
    ) -> list[CaregiverCandidate]:
        """
        Get caregivers the family has not swiped on yet.

        Args:
            db: Active database session
            family: Family user browsing
            filters: Optional facet filters (location applies to caregivers)
            limit: Page size
            exclude_ids: Caregivers already on the caller's deck

        Returns:
            Candidates ordered by compatibility score, highest first

        Raises:
            MissingJobContextError: If the family has no job post to swipe under
        """
        job = await self.job_post_repo.get_latest_for_family(db, family.id)
        if job is None:
            raise MissingJobContextError()

        swiped = await self.swipe_repo.get_swiped_caregiver_ids(db, family.id)
        excluded = swiped | set(exclude_ids or [])

        caregivers = await self.user_repo.get_caregivers_for_feed(
            db,
            limit=self.clamp_limit(limit),
            location=filters.location if filters else None,
            exclude_ids=excluded,
        )

        candidates = []
        for caregiver in caregivers:
            rating = await self.scoring_service.get_rating(db, caregiver)
            score = self.scoring_service.calculate_compatibility_score(family, caregiver, rating)
            candidates.append(
                CaregiverCandidate(
                    caregiver=UserPublic.model_validate(caregiver),
                    job_id=job.id,
                    rating=rating or RatingSummary(),
                    compatibility_score=round(score, 2),
                )
            )

        # sorted() is stable: equal scores keep creation order
        candidates = sorted(candidates, key=lambda c: c.compatibility_score, reverse=True)

        logger.info(f"Feed for family {family.id}: {len(candidates)} caregivers ({len(swiped)} already swiped)")
        return candidates

    async def get_job_post_candidates(
        self,
        db: AsyncSession,
        caregiver: User,
        filters: Optional[FeedFilters] = None,
        limit: Optional[int] = None,
        exclude_ids: Optional[Iterable[UUID]] = None
    ) -> list[JobPostCandidate]:
        """
        Get job posts the caregiver has not swiped on yet.

        Args:
            db: Active database session
            caregiver: Caregiver user browsing
            filters: Optional facet filters (location, rate and hours)
            limit: Page size
            exclude_ids: Job posts already on the caller's deck

        Returns:
            Candidates with the posting family embedded, highest score first
        """
        swiped = await self.swipe_repo.get_swiped_job_ids(db, caregiver.id)
        excluded = swiped | set(exclude_ids or [])

        posts = await self.job_post_repo.get_posts_for_feed(
            db,
            limit=self.clamp_limit(limit),
            filters=filters,
            exclude_job_ids=excluded,
        )

        rating = await self.scoring_service.get_rating(db, caregiver) if posts else None

        candidates = []
        for post in posts:
            score = self.scoring_service.calculate_compatibility_score(post.family, caregiver, rating)
            candidates.append(
                JobPostCandidate(
                    job_post=JobPostWithFamily.model_validate(post),
                    compatibility_score=round(score, 2),
                )
            )

        candidates = sorted(candidates, key=lambda c: c.compatibility_score, reverse=True)

        logger.info(f"Feed for caregiver {caregiver.id}: {len(candidates)} job posts ({len(swiped)} already swiped)")
        return candidates

    async def get_candidates(
        self,
        db: AsyncSession,
        actor: User,
        filters: Optional[FeedFilters] = None,
        limit: Optional[int] = None,
        exclude_ids: Optional[Iterable[UUID]] = None
    ) -> list[CaregiverCandidate] | list[JobPostCandidate]:
        """
        Get the next page of candidates for the actor's role.

        An empty list means everything has been swiped; it is not an error.

        Example:
            candidates = await service.get_candidates(db, current_user, FeedFilters(location="CA"), limit=10)
        """
        if actor.role == UserRole.FAMILY:
            return await self.get_caregiver_candidates(db, actor, filters, limit, exclude_ids)
        return await self.get_job_post_candidates(db, actor, filters, limit, exclude_ids)
