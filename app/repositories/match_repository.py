"""
Match repository for mutual-interest records.

Matches are created exactly once per (family_id, caregiver_id, job_id)
triple. The unique constraint on the triple arbitrates concurrent
creators; this repository reports a lost race as DuplicateMatchError.
"""

from __future__ import annotations
from typing import Optional
from uuid import UUID
from sqlalchemy import select, and_, or_, desc
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
import logging

from app.core.exceptions import DuplicateMatchError
from app.models.match import Match
from .base import BaseRepository

logger = logging.getLogger(__name__)

MATCH_UNIQUE_COLUMNS = ("family_id", "caregiver_id", "job_id")


class MatchRepository(BaseRepository[Match]):
    """
    Repository for Match model.

    Provides methods for:
    - Point lookup by triple
    - Race-safe creation
    - Listing a user's matches with both parties and the job post loaded
    """

    def __init__(self):
        """Initialize with Match model."""
        super().__init__(Match)

    async def get_by_triple(
        self,
        db: AsyncSession,
        family_id: UUID,
        caregiver_id: UUID,
        job_id: UUID
    ) -> Optional[Match]:
        """
        Get the match for a triple, if any.

        Args:
            db: Active database session
            family_id: UUID of the family
            caregiver_id: UUID of the caregiver
            job_id: UUID of the job post

        Returns:
            Match instance or None
        """
        try:
            stmt = select(Match).where(
                and_(
                    Match.family_id == family_id,
                    Match.caregiver_id == caregiver_id,
                    Match.job_id == job_id
                )
            )
            result = await db.execute(stmt)
            return result.scalar_one_or_none()

        except SQLAlchemyError as e:
            logger.error(f"Error fetching match for family {family_id}, caregiver {caregiver_id}, job {job_id}: {e}")
            raise

    async def create_for_triple(
        self,
        db: AsyncSession,
        family_id: UUID,
        caregiver_id: UUID,
        job_id: UUID
    ) -> Match:
        """
        Create the match for a triple.

        Raises:
            DuplicateMatchError: If another writer created it first

        Example:
            try:
                match = await repo.create_for_triple(db, f, c, j)
            except DuplicateMatchError:
                match = await repo.get_by_triple(db, f, c, j)
        """
        try:
            inserted = await self.insert_ignore_conflict(
                db,
                {"family_id": family_id, "caregiver_id": caregiver_id, "job_id": job_id},
                MATCH_UNIQUE_COLUMNS,
            )
        except IntegrityError as e:
            logger.warning(f"Unique constraint rejected match for family {family_id}, caregiver {caregiver_id}, job {job_id}: {e}")
            raise DuplicateMatchError() from e

        if not inserted:
            raise DuplicateMatchError()

        match = await self.get_by_triple(db, family_id, caregiver_id, job_id)
        if match is None:
            # Row vanished between insert and read; treat as a lost race
            raise DuplicateMatchError()
        return match

    async def get_user_matches(
        self,
        db: AsyncSession,
        user_id: UUID
    ) -> list[Match]:
        """
        Get every match the user is a party to, newest first.

        Example:
            matches = await repo.get_user_matches(db, user.id)
            for match in matches:
                print(match.family.name, match.caregiver.name, match.job.title)
        """
        try:
            stmt = (
                select(Match)
                .where(or_(Match.family_id == user_id, Match.caregiver_id == user_id))
                .options(
                    selectinload(Match.family),
                    selectinload(Match.caregiver),
                    selectinload(Match.job),
                )
                .order_by(desc(Match.created_at))
            )
            result = await db.execute(stmt)
            return list(result.scalars().all())

        except SQLAlchemyError as e:
            logger.error(f"Error fetching matches for user {user_id}: {e}")
            raise

    async def get_with_parties(
        self,
        db: AsyncSession,
        match_id: UUID
    ) -> Optional[Match]:
        """Get a match by ID with both parties and the job post loaded."""
        try:
            stmt = (
                select(Match)
                .where(Match.id == match_id)
                .options(
                    selectinload(Match.family),
                    selectinload(Match.caregiver),
                    selectinload(Match.job),
                )
            )
            result = await db.execute(stmt)
            return result.scalar_one_or_none()

        except SQLAlchemyError as e:
            logger.error(f"Error fetching match {match_id}: {e}")
            raise
