"""
Typed errors raised by the matching core.

Every error carries a stable ``code`` the client can branch on, the HTTP
status used by the API layer and whether retrying the same request may
succeed. Handlers in ``app.main`` turn them into JSON responses.
"""

from __future__ import annotations
from typing import Optional


class MatchingError(Exception):
    """Base class for all domain errors."""

    code: str = "matching_error"
    status_code: int = 400
    retryable: bool = False
    default_detail: str = "Request could not be processed"

    def __init__(self, detail: Optional[str] = None):
        self.detail = detail or self.default_detail
        super().__init__(self.detail)


# Validation
class InvalidDirectionError(MatchingError):
    code = "invalid_direction"
    default_detail = "Direction must be 'like' or 'pass'"


class MissingJobContextError(MatchingError):
    code = "missing_job_context"
    default_detail = "Create a job post before browsing caregivers"


class InvalidSwipeTargetError(MatchingError):
    code = "invalid_swipe_target"
    default_detail = "Families swipe on a caregiver_id, caregivers swipe on a job_id"


# Authorization
class NotAuthorizedError(MatchingError):
    code = "not_authorized"
    status_code = 403
    default_detail = "You are not allowed to act on behalf of this party"


# Not found
class JobNotFoundError(MatchingError):
    code = "job_not_found"
    status_code = 404
    default_detail = "Job post not found"


class UserNotFoundError(MatchingError):
    code = "user_not_found"
    status_code = 404
    default_detail = "User not found"


class MatchNotFoundError(MatchingError):
    code = "match_not_found"
    status_code = 404
    default_detail = "Match not found"


class SwipeNotFoundError(MatchingError):
    code = "swipe_not_found"
    status_code = 409
    default_detail = "No recorded like exists for this job context"


# Conflicts
class DuplicateMatchError(MatchingError):
    """Raised when the unique triple rejected a match insert.

    The match service recovers from this by re-reading the existing row;
    it is never returned to a client.
    """

    code = "duplicate_match"
    status_code = 409
    default_detail = "Match already exists"


class DuplicateReviewError(MatchingError):
    code = "duplicate_review"
    status_code = 409
    default_detail = "You have already reviewed this person"


class ConstraintViolationError(MatchingError):
    code = "constraint_violation"
    status_code = 409
    default_detail = "The request conflicts with existing data"


# Transient
class StoreUnavailableError(MatchingError):
    code = "store_unavailable"
    status_code = 503
    retryable = True
    default_detail = "The data store is temporarily unavailable, please retry"
