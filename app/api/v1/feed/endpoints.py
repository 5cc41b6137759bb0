from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List, Optional
import uuid
from app.core.config import settings
from app.core.database import get_db
from app.api.deps import get_any_user
from app.models.user import User, UserRole
from app.schemas.feed import FeedFilters, FeedResponse
from app.services.feed_service import FeedService

router = APIRouter()


@router.get("", response_model=FeedResponse)
async def get_feed(
    limit: int = Query(settings.feed_default_limit, ge=1, le=settings.feed_max_limit),
    location: Optional[str] = None,
    min_rate: Optional[float] = Query(None, ge=0),
    max_rate: Optional[float] = Query(None, ge=0),
    min_hours: Optional[float] = Query(None, ge=0),
    max_hours: Optional[float] = Query(None, ge=0),
    exclude: List[uuid.UUID] = Query(default=[]),
    current_user: User = Depends(get_any_user),
    db: AsyncSession = Depends(get_db)
):
    """Get the next page of swipeable candidates

    Families get caregivers, caregivers get job posts. Anything the user has
    already swiped on is left out, as are the ids passed in ``exclude``
    (cards still on the client's deck). An empty page is a normal result.
    """
    filters = FeedFilters(
        location=location,
        min_rate=min_rate,
        max_rate=max_rate,
        min_hours=min_hours,
        max_hours=max_hours,
    )

    service = FeedService()
    candidates = await service.get_candidates(
        db, current_user, filters=filters, limit=limit, exclude_ids=exclude
    )

    if current_user.role == UserRole.FAMILY:
        return FeedResponse(caregivers=candidates, has_more=len(candidates) == limit)
    return FeedResponse(job_posts=candidates, has_more=len(candidates) == limit)
