"""
End-to-end matching flow against a real database session.

Runs the swipe ledger, the match resolver and the candidate feed together
on SQLite so the unique constraints arbitrate duplicates exactly as they do
in production.
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import MissingJobContextError
from app.models.job_post import JobPost
from app.models.match import Match
from app.models.swipe import Swipe
from app.models.user import User, UserRole
from app.repositories.swipe_repository import SwipeRepository
from app.services.feed_service import FeedService
from app.services.match_service import MatchService
from app.services.swipe_service import SwipeService
from tests.factories import JobPostFactory, UserFactory


async def _count(db: AsyncSession, model) -> int:
    return (await db.execute(select(func.count(model.id)))).scalar()


class TestSwipeLedger:
    async def test_recording_twice_persists_one_row(
        self, db_session: AsyncSession, family: User, caregiver: User, job_post: JobPost
    ):
        service = SwipeService()

        first, first_new = await service.record_swipe(
            db_session, family, family.id, caregiver.id, job_post.id, "like"
        )
        second, second_new = await service.record_swipe(
            db_session, family, family.id, caregiver.id, job_post.id, "like"
        )

        assert first_new is True
        assert second_new is False
        assert second.id == first.id
        assert await _count(db_session, Swipe) == 1

    async def test_insert_if_absent_reports_conflict(
        self, db_session: AsyncSession, family: User, caregiver: User, job_post: JobPost
    ):
        repo = SwipeRepository()
        args = (db_session, family.id, caregiver.id, job_post.id, UserRole.FAMILY, "like")

        assert await repo.insert_if_absent(*args) is True
        assert await repo.insert_if_absent(*args) is False
        assert await _count(db_session, Swipe) == 1


class TestMatchResolver:
    async def test_mutual_like_scenario(
        self, db_session: AsyncSession, family: User, caregiver: User, job_post: JobPost
    ):
        swipes = SwipeService()
        matches = MatchService()
        triple = (family.id, caregiver.id, job_post.id)

        _, was_new = await swipes.record_swipe(db_session, family, *triple, "like")
        assert was_new is True

        outcome = await matches.evaluate_and_match(db_session, *triple, "like")
        assert outcome.is_match is False

        await swipes.record_swipe(db_session, caregiver, *triple, "like")

        outcomes = [
            await matches.evaluate_and_match(db_session, *triple, "like")
            for _ in range(3)
        ]
        assert all(o.is_match for o in outcomes)
        assert [o.created for o in outcomes] == [True, False, False]
        assert len({o.match.id for o in outcomes}) == 1
        assert await _count(db_session, Match) == 1

    async def test_single_side_like_never_matches(
        self, db_session: AsyncSession, family: User, caregiver: User, job_post: JobPost
    ):
        triple = (family.id, caregiver.id, job_post.id)
        await SwipeService().record_swipe(db_session, caregiver, *triple, "like")

        outcome = await MatchService().evaluate_and_match(db_session, *triple, "like")

        assert outcome.is_match is False
        assert await _count(db_session, Match) == 0

    async def test_pass_never_matches(
        self, db_session: AsyncSession, family: User, caregiver: User, job_post: JobPost
    ):
        swipes = SwipeService()
        triple = (family.id, caregiver.id, job_post.id)
        await swipes.record_swipe(db_session, caregiver, *triple, "like")
        await swipes.record_swipe(db_session, family, *triple, "pass")

        outcome = await MatchService().evaluate_and_match(db_session, *triple, "pass")

        assert outcome.is_match is False
        assert await _count(db_session, Match) == 0

    async def test_match_is_scoped_to_job(
        self, db_session: AsyncSession, family: User, caregiver: User, job_post: JobPost
    ):
        other_job = await JobPostFactory.create_async(db_session, family_id=family.id)
        swipes = SwipeService()
        await swipes.record_swipe(db_session, family, family.id, caregiver.id, job_post.id, "like")
        await swipes.record_swipe(db_session, caregiver, family.id, caregiver.id, other_job.id, "like")

        for job in (job_post, other_job):
            outcome = await MatchService().evaluate_and_match(
                db_session, family.id, caregiver.id, job.id, "like"
            )
            assert outcome.is_match is False


class TestCandidateFeed:
    async def test_swiped_caregiver_is_excluded(
        self, db_session: AsyncSession, family: User, caregiver: User, job_post: JobPost
    ):
        others = [
            await UserFactory.create_async(
                db_session,
                role=UserRole.CAREGIVER,
                created_at=datetime.now(timezone.utc) + timedelta(seconds=i),
            )
            for i in range(3)
        ]
        await SwipeService().record_swipe(
            db_session, family, family.id, caregiver.id, job_post.id, "pass"
        )

        feed = FeedService()
        for limit in (1, 2, 10):
            candidates = await feed.get_candidates(db_session, family, limit=limit)
            ids = {c.caregiver.id for c in candidates}
            assert caregiver.id not in ids
            assert len(candidates) == min(limit, len(others))

    async def test_exhausted_feed_is_empty(
        self, db_session: AsyncSession, family: User, caregiver: User, job_post: JobPost
    ):
        await SwipeService().record_swipe(
            db_session, family, family.id, caregiver.id, job_post.id, "like"
        )

        assert await FeedService().get_candidates(db_session, family) == []

    async def test_caregiver_feed_excludes_swiped_posts(
        self, db_session: AsyncSession, family: User, caregiver: User, job_post: JobPost
    ):
        fresh = await JobPostFactory.create_async(db_session, family_id=family.id)
        await SwipeService().record_swipe(
            db_session, caregiver, family.id, caregiver.id, job_post.id, "pass"
        )

        candidates = await FeedService().get_candidates(db_session, caregiver)

        assert [c.job_post.id for c in candidates] == [fresh.id]

    async def test_family_swipe_does_not_hide_post_from_caregiver(
        self, db_session: AsyncSession, family: User, caregiver: User, job_post: JobPost
    ):
        await SwipeService().record_swipe(
            db_session, family, family.id, caregiver.id, job_post.id, "like"
        )

        candidates = await FeedService().get_candidates(db_session, caregiver)

        assert [c.job_post.id for c in candidates] == [job_post.id]

    async def test_family_without_job_post(self, db_session: AsyncSession):
        family = await UserFactory.create_async(db_session, role=UserRole.FAMILY)

        with pytest.raises(MissingJobContextError):
            await FeedService().get_candidates(db_session, family)
