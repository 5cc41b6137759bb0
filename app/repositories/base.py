"""
Base repository implementing common CRUD operations using SQLAlchemy 2.0.

This module provides a generic repository pattern that can be extended
by specific model repositories. It handles basic database operations
with async/await patterns, logs failures and re-raises them, and offers
an insert-or-ignore primitive used wherever a unique constraint is the
source of truth for idempotency.
"""

from __future__ import annotations
from typing import Generic, TypeVar, Type, Optional, Sequence
from uuid import UUID, uuid4
from sqlalchemy import select
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.exc import SQLAlchemyError
import logging

logger = logging.getLogger(__name__)

# Generic type variable for the model
T = TypeVar("T")


class BaseRepository(Generic[T]):
    """
    Generic base repository for CRUD operations.

    This class provides standard database operations that can be inherited
    by model-specific repositories.

    Type Parameters:
        T: The SQLAlchemy model type this repository manages

    Example:
        class MatchRepository(BaseRepository[Match]):
            def __init__(self):
                super().__init__(Match)
    """

    def __init__(self, model: Type[T]):
        """
        Initialize the repository with a model class.

        Args:
            model: The SQLAlchemy model class to manage
        """
        self.model = model

    async def get(
        self,
        db: AsyncSession,
        id: UUID
    ) -> Optional[T]:
        """
        Retrieve a single record by ID.

        Args:
            db: Active database session
            id: UUID of the record to retrieve

        Returns:
            Model instance if found, None otherwise
        """
        try:
            stmt = select(self.model).where(self.model.id == id)
            result = await db.execute(stmt)
            return result.scalar_one_or_none()
        except SQLAlchemyError as e:
            logger.error(f"Error fetching {self.model.__name__} by id {id}: {e}")
            raise

    def _dialect_insert(self, db: AsyncSession):
        """Build a dialect-specific INSERT that supports ON CONFLICT."""
        if db.get_bind().dialect.name == "sqlite":
            return sqlite_insert(self.model)
        return pg_insert(self.model)

    async def insert_ignore_conflict(
        self,
        db: AsyncSession,
        values: dict,
        conflict_columns: Sequence[str]
    ) -> bool:
        """
        Insert a row unless it collides with a unique constraint.

        Emits ``INSERT ... ON CONFLICT (cols) DO NOTHING`` so that two
        concurrent writers racing on the same key produce one row and
        neither sees an IntegrityError.

        Args:
            db: Active database session
            values: Column values for the new row
            conflict_columns: Columns of the unique constraint to arbitrate on

        Returns:
            True if this call inserted the row, False if it already existed

        Example:
            inserted = await repo.insert_ignore_conflict(
                db, {"family_id": f, "caregiver_id": c, "job_id": j},
                ("family_id", "caregiver_id", "job_id"),
            )
        """
        try:
            row = {"id": uuid4(), **values}
            stmt = (
                self._dialect_insert(db)
                .values(**row)
                .on_conflict_do_nothing(index_elements=list(conflict_columns))
            )
            result = await db.execute(stmt)
            return result.rowcount == 1
        except SQLAlchemyError as e:
            logger.error(f"Error inserting {self.model.__name__}: {e}")
            raise
