"""
User repository for family and caregiver profiles.
"""

from __future__ import annotations
from typing import Optional, Iterable
from uuid import UUID
from sqlalchemy import select, asc
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.exc import SQLAlchemyError
import logging

from app.models.user import User, UserRole
from .base import BaseRepository

logger = logging.getLogger(__name__)


class UserRepository(BaseRepository[User]):
    """Repository for User model with caregiver discovery."""

    def __init__(self):
        """Initialize with User model."""
        super().__init__(User)

    async def get_caregivers_for_feed(
        self,
        db: AsyncSession,
        limit: int,
        location: Optional[str] = None,
        exclude_ids: Optional[Iterable[UUID]] = None
    ) -> list[User]:
        """
        Get caregiver profiles for a family's feed, oldest profiles first.

        Args:
            db: Active database session
            limit: Maximum number of caregivers to return
            location: Optional case-insensitive substring of the profile location
            exclude_ids: Caregiver IDs to leave out

        Returns:
            List of caregiver User instances
        """
        try:
            query = (
                select(User)
                .where(User.role == UserRole.CAREGIVER)
                .order_by(asc(User.created_at), asc(User.id))
                .limit(limit)
            )

            exclude = list(exclude_ids or [])
            if exclude:
                query = query.where(~User.id.in_(exclude))

            if location:
                query = query.where(User.location.icontains(location, autoescape=True))

            result = await db.execute(query)
            return list(result.scalars().all())

        except SQLAlchemyError as e:
            logger.error(f"Error fetching feed caregivers: {e}")
            raise
