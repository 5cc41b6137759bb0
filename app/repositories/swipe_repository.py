"""
Swipe repository for the append-only swipe ledger.

This module provides the lookups the ledger, the match resolver and the
candidate feed need: per-side lookup by triple, like counting for the
reciprocity test and the exclusion sets of already decided candidates.
"""

from __future__ import annotations
from typing import Optional
from uuid import UUID
from sqlalchemy import select, and_, func
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.exc import SQLAlchemyError
import logging

from app.models.swipe import Swipe, SwipeDirection
from app.models.user import UserRole
from .base import BaseRepository

logger = logging.getLogger(__name__)

SWIPE_UNIQUE_COLUMNS = ("family_id", "caregiver_id", "job_id", "actor_role")


class SwipeRepository(BaseRepository[Swipe]):
    """
    Repository for Swipe model with ledger queries.

    Provides methods for:
    - Getting one side's swipe on a triple
    - Inserting a swipe idempotently
    - Counting likes on a triple
    - Building feed exclusion sets per family or caregiver
    """

    def __init__(self):
        """Initialize with Swipe model."""
        super().__init__(Swipe)

    async def get_for_side(
        self,
        db: AsyncSession,
        family_id: UUID,
        caregiver_id: UUID,
        job_id: UUID,
        actor_role: UserRole
    ) -> Optional[Swipe]:
        """
        Get the swipe one side recorded on a triple.

        Args:
            db: Active database session
            family_id: UUID of the family
            caregiver_id: UUID of the caregiver
            job_id: UUID of the job post
            actor_role: Side that made the decision

        Returns:
            Swipe if the side already decided, None otherwise
        """
        try:
            stmt = select(Swipe).where(
                and_(
                    Swipe.family_id == family_id,
                    Swipe.caregiver_id == caregiver_id,
                    Swipe.job_id == job_id,
                    Swipe.actor_role == UserRole(actor_role).value
                )
            )
            result = await db.execute(stmt)
            return result.scalar_one_or_none()

        except SQLAlchemyError as e:
            logger.error(
                f"Error fetching {actor_role} swipe for family {family_id}, "
                f"caregiver {caregiver_id}, job {job_id}: {e}"
            )
            raise

    async def insert_if_absent(
        self,
        db: AsyncSession,
        family_id: UUID,
        caregiver_id: UUID,
        job_id: UUID,
        actor_role: UserRole,
        direction: SwipeDirection
    ) -> bool:
        """
        Insert a swipe unless the same side already decided on the triple.

        Returns:
            True if a new row was written
        """
        return await self.insert_ignore_conflict(
            db,
            {
                "family_id": family_id,
                "caregiver_id": caregiver_id,
                "job_id": job_id,
                "actor_role": UserRole(actor_role).value,
                "direction": SwipeDirection(direction).value,
            },
            SWIPE_UNIQUE_COLUMNS,
        )

    async def count_likes(
        self,
        db: AsyncSession,
        family_id: UUID,
        caregiver_id: UUID,
        job_id: UUID
    ) -> int:
        """
        Count ``like`` swipes recorded on a triple by either side.

        Example:
            count = await repo.count_likes(db, family_id, caregiver_id, job_id)
            if count >= 2:
                # both sides liked
        """
        try:
            stmt = select(func.count(Swipe.id)).where(
                and_(
                    Swipe.family_id == family_id,
                    Swipe.caregiver_id == caregiver_id,
                    Swipe.job_id == job_id,
                    Swipe.direction == SwipeDirection.LIKE.value
                )
            )
            result = await db.execute(stmt)
            return result.scalar() or 0

        except SQLAlchemyError as e:
            logger.error(f"Error counting likes for family {family_id}, caregiver {caregiver_id}, job {job_id}: {e}")
            raise

    async def get_swiped_caregiver_ids(
        self,
        db: AsyncSession,
        family_id: UUID
    ) -> set[UUID]:
        """
        Caregivers this family has already decided on, across all its job posts.
        """
        try:
            stmt = select(Swipe.caregiver_id).where(
                and_(
                    Swipe.family_id == family_id,
                    Swipe.actor_role == UserRole.FAMILY.value
                )
            ).distinct()
            result = await db.execute(stmt)
            return set(result.scalars().all())

        except SQLAlchemyError as e:
            logger.error(f"Error fetching swiped caregivers for family {family_id}: {e}")
            raise

    async def get_swiped_job_ids(
        self,
        db: AsyncSession,
        caregiver_id: UUID
    ) -> set[UUID]:
        """
        Job posts this caregiver has already decided on.
        """
        try:
            stmt = select(Swipe.job_id).where(
                and_(
                    Swipe.caregiver_id == caregiver_id,
                    Swipe.actor_role == UserRole.CAREGIVER.value
                )
            ).distinct()
            result = await db.execute(stmt)
            return set(result.scalars().all())

        except SQLAlchemyError as e:
            logger.error(f"Error fetching swiped job posts for caregiver {caregiver_id}: {e}")
            raise
