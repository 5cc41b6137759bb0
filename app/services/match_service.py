"""
Match service: reciprocity test and exactly-once match creation.

Both parties' likes are stored under the same canonical
(family_id, caregiver_id, job_id) triple, one row per side. A triple is
mutual once it has accumulated two ``like`` rows.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Optional
from uuid import UUID
from sqlalchemy.ext.asyncio import AsyncSession
import logging

from app.core.exceptions import DuplicateMatchError, MatchNotFoundError, SwipeNotFoundError
from app.models.match import Match
from app.models.swipe import SwipeDirection
from app.models.user import User
from app.repositories.match_repository import MatchRepository
from app.repositories.swipe_repository import SwipeRepository

logger = logging.getLogger(__name__)


@dataclass
class MatchOutcome:
    is_match: bool
    match: Optional[Match] = None
    created: bool = False


class MatchService:
    """
    Service deciding reciprocity and creating Match records.

    Creation is race-safe: the unique constraint on the triple decides
    which concurrent evaluator writes the row, and the loser re-reads it.
    """

    REQUIRED_LIKES = 2

    def __init__(
        self,
        match_repo: Optional[MatchRepository] = None,
        swipe_repo: Optional[SwipeRepository] = None
    ):
        """
        Initialize service with repositories.

        Args:
            match_repo: MatchRepository instance (creates new if None)
            swipe_repo: SwipeRepository instance (creates new if None)
        """
        self.match_repo = match_repo or MatchRepository()
        self.swipe_repo = swipe_repo or SwipeRepository()

    async def evaluate_and_match(
        self,
        db: AsyncSession,
        family_id: UUID,
        caregiver_id: UUID,
        job_id: UUID,
        direction: str
    ) -> MatchOutcome:
        """
        Decide whether a triple is mutual and create its Match once.

        Called right after a like is recorded. Passes never match.

        Args:
            db: Active database session
            family_id: UUID of the family
            caregiver_id: UUID of the caregiver
            job_id: UUID of the job post
            direction: Direction of the swipe just recorded

        Returns:
            MatchOutcome with is_match, the match (if any) and whether this
            call created it

        Raises:
            SwipeNotFoundError: If no like has been recorded on the triple

        Example:
            outcome = await service.evaluate_and_match(db, f, c, j, "like")
            if outcome.is_match:
                await db.commit()
        """
        if direction != SwipeDirection.LIKE.value:
            return MatchOutcome(is_match=False)

        like_count = await self.swipe_repo.count_likes(db, family_id, caregiver_id, job_id)
        if like_count == 0:
            raise SwipeNotFoundError()

        if like_count < self.REQUIRED_LIKES:
            return MatchOutcome(is_match=False)

        existing = await self.match_repo.get_by_triple(db, family_id, caregiver_id, job_id)
        if existing is not None:
            return MatchOutcome(is_match=True, match=existing, created=False)

        try:
            match = await self.match_repo.create_for_triple(db, family_id, caregiver_id, job_id)
        except DuplicateMatchError:
            # Another evaluator won the race; its row is the match
            match = await self.match_repo.get_by_triple(db, family_id, caregiver_id, job_id)
            if match is None:
                raise
            logger.info(f"Match for family {family_id}, caregiver {caregiver_id}, job {job_id} created concurrently")
            return MatchOutcome(is_match=True, match=match, created=False)

        logger.info(f"Match {match.id} created for family {family_id}, caregiver {caregiver_id}, job {job_id}")
        return MatchOutcome(is_match=True, match=match, created=True)

    async def is_matched(
        self,
        db: AsyncSession,
        family_id: UUID,
        caregiver_id: UUID,
        job_id: UUID
    ) -> bool:
        """True when a Match exists for the triple (messaging authorization)"""
        return await self.match_repo.get_by_triple(db, family_id, caregiver_id, job_id) is not None

    async def get_user_matches(
        self,
        db: AsyncSession,
        user: User
    ) -> list[Match]:
        """Get every match the user is a party to, newest first"""
        return await self.match_repo.get_user_matches(db, user.id)

    async def get_match_for_participant(
        self,
        db: AsyncSession,
        match_id: UUID,
        user: User
    ) -> Match:
        """
        Get a match readable only by its two parties.

        Raises:
            MatchNotFoundError: If the match does not exist or the user is not a party
        """
        match = await self.match_repo.get_with_parties(db, match_id)
        if match is None or user.id not in (match.family_id, match.caregiver_id):
            raise MatchNotFoundError()
        return match
