"""
Integration tests for the error envelope returned by the API.

Covers database failures reaching the edge:
  IntegrityError          -> 409 constraint_violation, not retryable
  OperationalError        -> 503 store_unavailable, retryable
"""

from __future__ import annotations

from unittest.mock import AsyncMock

from httpx import AsyncClient
from sqlalchemy.exc import IntegrityError, OperationalError

from app.models.user import User
from app.services.review_service import ReviewService


class TestDatabaseErrors:
    async def test_integrity_error_is_not_retryable(
        self,
        async_client: AsyncClient,
        family_headers: dict,
        caregiver: User,
        monkeypatch,
    ):
        monkeypatch.setattr(
            ReviewService,
            "create_review",
            AsyncMock(side_effect=IntegrityError(
                "INSERT INTO reviews", {}, Exception("FOREIGN KEY constraint failed")
            )),
        )

        response = await async_client.post(
            "/api/v1/reviews",
            json={"reviewee_id": str(caregiver.id), "rating": 5},
            headers=family_headers,
        )

        assert response.status_code == 409
        assert response.json() == {
            "detail": "The request conflicts with existing data",
            "code": "constraint_violation",
            "retryable": False,
        }

    async def test_operational_error_is_retryable(
        self,
        async_client: AsyncClient,
        family_headers: dict,
        caregiver: User,
        monkeypatch,
    ):
        monkeypatch.setattr(
            ReviewService,
            "create_review",
            AsyncMock(side_effect=OperationalError(
                "INSERT INTO reviews", {}, Exception("connection refused")
            )),
        )

        response = await async_client.post(
            "/api/v1/reviews",
            json={"reviewee_id": str(caregiver.id), "rating": 5},
            headers=family_headers,
        )

        assert response.status_code == 503
        assert response.json()["code"] == "store_unavailable"
        assert response.json()["retryable"] is True
