"""
Unit tests for Pydantic schema validators.

Verifies that schemas correctly accept valid data and reject invalid data
with appropriate error messages.
"""

from __future__ import annotations

import uuid

import pytest
from pydantic import ValidationError

from app.schemas.feed import FeedFilters
from app.schemas.job_post import JobPostCreate
from app.schemas.review import ReviewCreate
from app.schemas.swipe import SwipeCreate


# ---------------------------------------------------------------------------
# SwipeCreate
# ---------------------------------------------------------------------------
class TestSwipeCreate:
    def test_family_swipe_on_caregiver(self):
        caregiver_id = uuid.uuid4()
        data = SwipeCreate(caregiver_id=caregiver_id, direction="like")
        assert data.caregiver_id == caregiver_id
        assert data.job_id is None

    def test_caregiver_swipe_on_job(self):
        job_id = uuid.uuid4()
        data = SwipeCreate(job_id=job_id, direction="pass")
        assert data.job_id == job_id

    def test_missing_target_raises(self):
        with pytest.raises(ValidationError):
            SwipeCreate(direction="like")

    def test_direction_is_not_validated_here(self):
        # Unknown directions are rejected by the service with a typed error
        data = SwipeCreate(job_id=uuid.uuid4(), direction="superlike")
        assert data.direction == "superlike"

    def test_invalid_uuid_raises(self):
        with pytest.raises(ValidationError) as exc_info:
            SwipeCreate(job_id="not-a-uuid", direction="like")
        errors = exc_info.value.errors()
        assert any(e["loc"] == ("job_id",) for e in errors)


# ---------------------------------------------------------------------------
# FeedFilters
# ---------------------------------------------------------------------------
class TestFeedFilters:
    def test_unknown_keys_are_ignored(self):
        filters = FeedFilters.model_validate({"location": "Austin", "favourite_color": "blue"})
        assert filters.location == "Austin"
        assert not hasattr(filters, "favourite_color")

    def test_blank_location_becomes_none(self):
        assert FeedFilters(location="   ").location is None

    def test_location_is_stripped(self):
        assert FeedFilters(location="  Austin ").location == "Austin"

    def test_negative_rate_raises(self):
        with pytest.raises(ValidationError):
            FeedFilters(min_rate=-1)

    def test_all_optional(self):
        filters = FeedFilters()
        assert filters.min_rate is None
        assert filters.max_hours is None


# ---------------------------------------------------------------------------
# JobPostCreate
# ---------------------------------------------------------------------------
class TestJobPostCreate:
    def test_valid_job_post(self):
        data = JobPostCreate(title="Nanny", hours_per_week=40, rate_per_hour=25.5)
        assert data.rate_per_hour == 25.5

    @pytest.mark.parametrize("field", ["hours_per_week", "rate_per_hour"])
    def test_non_positive_values_raise(self, field):
        payload = {"title": "Nanny", "hours_per_week": 40, "rate_per_hour": 25}
        payload[field] = 0
        with pytest.raises(ValidationError) as exc_info:
            JobPostCreate(**payload)
        errors = exc_info.value.errors()
        assert any(e["loc"] == (field,) for e in errors)

    def test_empty_title_raises(self):
        with pytest.raises(ValidationError):
            JobPostCreate(title="", hours_per_week=10, rate_per_hour=20)


# ---------------------------------------------------------------------------
# ReviewCreate
# ---------------------------------------------------------------------------
class TestReviewCreate:
    @pytest.mark.parametrize("rating", [0, 6])
    def test_rating_out_of_range_raises(self, rating):
        with pytest.raises(ValidationError):
            ReviewCreate(reviewee_id=uuid.uuid4(), rating=rating)

    def test_valid_review(self):
        data = ReviewCreate(reviewee_id=uuid.uuid4(), rating=4, comment="Great")
        assert data.rating == 4
