"""
Integration tests for the swipe API endpoint.

Covers:
  POST /api/v1/swipes
"""

from __future__ import annotations

import uuid

from httpx import AsyncClient
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.job_post import JobPost
from app.models.match import Match
from app.models.swipe import Swipe
from app.models.user import User


# ---------------------------------------------------------------------------
# POST /api/v1/swipes
# ---------------------------------------------------------------------------
class TestCreateSwipe:
    async def test_family_like_is_recorded(
        self,
        async_client: AsyncClient,
        family_headers: dict,
        family: User,
        caregiver: User,
        job_post: JobPost,
    ):
        payload = {"caregiver_id": str(caregiver.id), "direction": "like"}
        response = await async_client.post("/api/v1/swipes", json=payload, headers=family_headers)

        assert response.status_code == 200
        data = response.json()
        assert data["was_new"] is True
        assert data["is_match"] is False
        assert data["match"] is None
        assert data["swipe"]["family_id"] == str(family.id)
        assert data["swipe"]["caregiver_id"] == str(caregiver.id)
        assert data["swipe"]["job_id"] == str(job_post.id)
        assert data["swipe"]["actor_role"] == "family"
        assert data["swipe"]["direction"] == "like"

    async def test_caregiver_pass_is_recorded(
        self,
        async_client: AsyncClient,
        caregiver_headers: dict,
        job_post: JobPost,
    ):
        payload = {"job_id": str(job_post.id), "direction": "pass"}
        response = await async_client.post("/api/v1/swipes", json=payload, headers=caregiver_headers)

        assert response.status_code == 200
        data = response.json()
        assert data["swipe"]["actor_role"] == "caregiver"
        assert data["swipe"]["direction"] == "pass"

    async def test_repeat_swipe_is_idempotent(
        self,
        async_client: AsyncClient,
        db_session: AsyncSession,
        family_headers: dict,
        caregiver: User,
        job_post: JobPost,
    ):
        payload = {"caregiver_id": str(caregiver.id), "direction": "like"}
        first = await async_client.post("/api/v1/swipes", json=payload, headers=family_headers)
        second = await async_client.post("/api/v1/swipes", json=payload, headers=family_headers)

        assert first.status_code == 200
        assert second.status_code == 200
        assert second.json()["was_new"] is False
        assert second.json()["swipe"]["id"] == first.json()["swipe"]["id"]

        count = (await db_session.execute(select(func.count(Swipe.id)))).scalar()
        assert count == 1

    async def test_changed_decision_keeps_original(
        self,
        async_client: AsyncClient,
        family_headers: dict,
        caregiver: User,
        job_post: JobPost,
    ):
        await async_client.post(
            "/api/v1/swipes",
            json={"caregiver_id": str(caregiver.id), "direction": "pass"},
            headers=family_headers,
        )
        response = await async_client.post(
            "/api/v1/swipes",
            json={"caregiver_id": str(caregiver.id), "direction": "like"},
            headers=family_headers,
        )

        assert response.json()["was_new"] is False
        assert response.json()["swipe"]["direction"] == "pass"

    async def test_mutual_like_creates_match(
        self,
        async_client: AsyncClient,
        db_session: AsyncSession,
        family_headers: dict,
        caregiver_headers: dict,
        caregiver: User,
        job_post: JobPost,
    ):
        first = await async_client.post(
            "/api/v1/swipes",
            json={"caregiver_id": str(caregiver.id), "direction": "like"},
            headers=family_headers,
        )
        second = await async_client.post(
            "/api/v1/swipes",
            json={"job_id": str(job_post.id), "direction": "like"},
            headers=caregiver_headers,
        )

        assert first.json()["is_match"] is False
        data = second.json()
        assert data["is_match"] is True
        assert data["match"]["job_id"] == str(job_post.id)
        assert data["match"]["caregiver_id"] == str(caregiver.id)

        count = (await db_session.execute(select(func.count(Match.id)))).scalar()
        assert count == 1

    async def test_invalid_direction_returns_400(
        self,
        async_client: AsyncClient,
        family_headers: dict,
        caregiver: User,
        job_post: JobPost,
    ):
        payload = {"caregiver_id": str(caregiver.id), "direction": "RIGHT"}
        response = await async_client.post("/api/v1/swipes", json=payload, headers=family_headers)

        assert response.status_code == 400
        body = response.json()
        assert body["code"] == "invalid_direction"
        assert body["retryable"] is False

    async def test_family_without_job_post_returns_400(
        self,
        async_client: AsyncClient,
        family_headers: dict,
        caregiver: User,
    ):
        payload = {"caregiver_id": str(caregiver.id), "direction": "like"}
        response = await async_client.post("/api/v1/swipes", json=payload, headers=family_headers)

        assert response.status_code == 400
        assert response.json()["code"] == "missing_job_context"

    async def test_unknown_job_returns_404(
        self,
        async_client: AsyncClient,
        caregiver_headers: dict,
    ):
        payload = {"job_id": str(uuid.uuid4()), "direction": "like"}
        response = await async_client.post("/api/v1/swipes", json=payload, headers=caregiver_headers)

        assert response.status_code == 404
        assert response.json()["code"] == "job_not_found"

    async def test_unknown_caregiver_returns_404(
        self,
        async_client: AsyncClient,
        family_headers: dict,
        job_post: JobPost,
    ):
        payload = {"caregiver_id": str(uuid.uuid4()), "direction": "like"}
        response = await async_client.post("/api/v1/swipes", json=payload, headers=family_headers)

        assert response.status_code == 404
        assert response.json()["code"] == "user_not_found"

    async def test_caregiver_cannot_swipe_for_someone_else(
        self,
        async_client: AsyncClient,
        caregiver_headers: dict,
        job_post: JobPost,
    ):
        payload = {
            "job_id": str(job_post.id),
            "caregiver_id": str(uuid.uuid4()),
            "direction": "like",
        }
        response = await async_client.post("/api/v1/swipes", json=payload, headers=caregiver_headers)

        assert response.status_code == 403
        assert response.json()["code"] == "not_authorized"

    async def test_missing_target_returns_422(
        self,
        async_client: AsyncClient,
        family_headers: dict,
    ):
        response = await async_client.post(
            "/api/v1/swipes", json={"direction": "like"}, headers=family_headers
        )
        assert response.status_code == 422

    async def test_swipe_without_token_is_rejected(
        self,
        async_client: AsyncClient,
        caregiver: User,
    ):
        payload = {"caregiver_id": str(caregiver.id), "direction": "like"}
        response = await async_client.post("/api/v1/swipes", json=payload)
        assert response.status_code in (401, 403)
