"""
Swipe service for the swipe ledger and the swipe-then-match flow.

This module records directional decisions under the canonical
(family_id, caregiver_id, job_id) triple, enforces that each side only
swipes on its own behalf, and chains a like into the match resolver.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Optional, Tuple
from uuid import UUID
from sqlalchemy.ext.asyncio import AsyncSession
import logging

from app.core.exceptions import (
    InvalidDirectionError,
    InvalidSwipeTargetError,
    JobNotFoundError,
    MissingJobContextError,
    NotAuthorizedError,
    UserNotFoundError,
)
from app.models.job_post import JobPost
from app.models.match import Match
from app.models.swipe import Swipe, SwipeDirection
from app.models.user import User, UserRole
from app.repositories.job_post_repository import JobPostRepository
from app.repositories.swipe_repository import SwipeRepository
from app.repositories.user_repository import UserRepository
from app.schemas.swipe import SwipeCreate
from app.services.match_service import MatchService

logger = logging.getLogger(__name__)


@dataclass
class SwipeOutcome:
    swipe: Swipe
    was_new: bool
    is_match: bool
    match: Optional[Match] = None


class SwipeService:
    """
    Service for recording swipes.

    Recording is idempotent per side: submitting the same decision twice,
    or after a lost response, returns the original row with was_new=False.
    Recording never creates matches; ``swipe`` chains that explicitly.
    """

    def __init__(
        self,
        swipe_repo: Optional[SwipeRepository] = None,
        job_post_repo: Optional[JobPostRepository] = None,
        user_repo: Optional[UserRepository] = None,
        match_service: Optional[MatchService] = None
    ):
        """
        Initialize service with repositories.

        Args:
            swipe_repo: SwipeRepository instance (creates new if None)
            job_post_repo: JobPostRepository instance (creates new if None)
            user_repo: UserRepository instance (creates new if None)
            match_service: MatchService instance (creates new if None)
        """
        self.swipe_repo = swipe_repo or SwipeRepository()
        self.job_post_repo = job_post_repo or JobPostRepository()
        self.user_repo = user_repo or UserRepository()
        self.match_service = match_service or MatchService(swipe_repo=self.swipe_repo)

    @staticmethod
    def _validate_direction(direction: str) -> SwipeDirection:
        try:
            return SwipeDirection(direction)
        except ValueError:
            raise InvalidDirectionError(f"Invalid direction '{direction}'; must be 'like' or 'pass'")

    @staticmethod
    def _verify_actor(actor: User, family_id: UUID, caregiver_id: UUID) -> UserRole:
        """
        Verify the actor swipes on its own side of the triple.

        Returns:
            The side the swipe is recorded under

        Raises:
            NotAuthorizedError: If the actor is not the family or caregiver of the triple
        """
        if actor.role == UserRole.FAMILY and actor.id == family_id:
            return UserRole.FAMILY
        if actor.role == UserRole.CAREGIVER and actor.id == caregiver_id:
            return UserRole.CAREGIVER
        raise NotAuthorizedError()

    async def record_swipe(
        self,
        db: AsyncSession,
        actor: User,
        family_id: UUID,
        caregiver_id: UUID,
        job_id: UUID,
        direction: str
    ) -> Tuple[Swipe, bool]:
        """
        Record one side's decision on a triple.

        Args:
            db: Active database session
            actor: Authenticated user making the decision
            family_id: UUID of the family
            caregiver_id: UUID of the caregiver
            job_id: UUID of the job post (must belong to the family)
            direction: "like" or "pass"

        Returns:
            Tuple of (swipe, was_new)

        Raises:
            InvalidDirectionError: If direction is not like/pass
            NotAuthorizedError: If the actor is not its side of the triple
            JobNotFoundError: If the job post is missing or not the family's
            UserNotFoundError: If the caregiver does not exist

        Example:
            swipe, was_new = await service.record_swipe(db, family, family.id, caregiver_id, job_id, "like")
            await db.commit()
        """
        swipe_direction = self._validate_direction(direction)
        actor_role = self._verify_actor(actor, family_id, caregiver_id)

        existing = await self.swipe_repo.get_for_side(db, family_id, caregiver_id, job_id, actor_role)
        if existing is not None:
            logger.info(f"Duplicate {actor_role.value} swipe on job {job_id} ignored (swipe {existing.id})")
            return existing, False

        job = await self.job_post_repo.get(db, job_id)
        if job is None or job.family_id != family_id:
            raise JobNotFoundError()

        caregiver = await self.user_repo.get(db, caregiver_id)
        if caregiver is None or caregiver.role != UserRole.CAREGIVER:
            raise UserNotFoundError("Caregiver not found")

        inserted = await self.swipe_repo.insert_if_absent(
            db, family_id, caregiver_id, job_id, actor_role, swipe_direction
        )
        swipe = await self.swipe_repo.get_for_side(db, family_id, caregiver_id, job_id, actor_role)

        logger.info(
            f"User {actor.id} swiped {swipe_direction.value} as {actor_role.value} "
            f"(family {family_id}, caregiver {caregiver_id}, job {job_id}, new: {inserted})"
        )
        return swipe, inserted

    async def resolve_job_context(
        self,
        db: AsyncSession,
        family_id: UUID,
        job_id: Optional[UUID] = None
    ) -> JobPost:
        """
        Resolve the job post a family swipe is scoped to.

        Uses the given job post, or the family's most recently created one.

        Raises:
            MissingJobContextError: If the family has no job posts
            JobNotFoundError: If the given job post is not the family's
        """
        if job_id is None:
            job = await self.job_post_repo.get_latest_for_family(db, family_id)
            if job is None:
                raise MissingJobContextError()
            return job

        job = await self.job_post_repo.get(db, job_id)
        if job is None or job.family_id != family_id:
            raise JobNotFoundError()
        return job

    async def swipe(
        self,
        db: AsyncSession,
        actor: User,
        swipe_in: SwipeCreate
    ) -> SwipeOutcome:
        """
        Record a swipe and, for a like, check for a mutual match.

        Families swipe on caregivers, caregivers swipe on job posts; both
        end up under the same triple key.

        Commits twice: the swipe is committed before likes are counted, so of
        two concurrent reciprocal likes the one counting last always sees
        both; a created match is committed afterwards.

        Args:
            db: Active database session
            actor: Authenticated user
            swipe_in: Swipe request

        Returns:
            SwipeOutcome with the ledger entry and the match result

        Example:
            outcome = await service.swipe(db, current_user, SwipeCreate(caregiver_id=c, direction="like"))
            if outcome.is_match:
                # celebrate
        """
        self._validate_direction(swipe_in.direction)

        if actor.role == UserRole.FAMILY:
            if swipe_in.caregiver_id is None:
                raise InvalidSwipeTargetError()
            job = await self.resolve_job_context(db, actor.id, swipe_in.job_id)
            family_id, caregiver_id = actor.id, swipe_in.caregiver_id
        else:
            if swipe_in.job_id is None:
                raise InvalidSwipeTargetError()
            job = await self.job_post_repo.get(db, swipe_in.job_id)
            if job is None:
                raise JobNotFoundError()
            family_id, caregiver_id = job.family_id, swipe_in.caregiver_id or actor.id

        swipe, was_new = await self.record_swipe(
            db, actor, family_id, caregiver_id, job.id, swipe_in.direction
        )
        # Counting must not run inside the transaction that wrote the like
        await db.commit()

        outcome = await self.match_service.evaluate_and_match(
            db, family_id, caregiver_id, job.id, swipe.direction
        )
        if outcome.created:
            await db.commit()

        return SwipeOutcome(
            swipe=swipe,
            was_new=was_new,
            is_match=outcome.is_match,
            match=outcome.match,
        )
