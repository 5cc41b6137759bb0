from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession
import uuid
from app.core.database import get_db
from app.api.deps import get_any_user
from app.models.user import User
from app.schemas.review import Review as ReviewSchema, ReviewCreate, RatingSummary
from app.services.review_service import ReviewService

router = APIRouter()


@router.post("/reviews", response_model=ReviewSchema, status_code=status.HTTP_201_CREATED)
async def create_review(
    review_in: ReviewCreate,
    current_user: User = Depends(get_any_user),
    db: AsyncSession = Depends(get_db)
):
    """Review another user (one review per person)"""
    service = ReviewService()
    review = await service.create_review(db, current_user, review_in)
    await db.commit()
    return review


@router.get("/users/{user_id}/rating", response_model=RatingSummary)
async def get_user_rating(
    user_id: uuid.UUID,
    current_user: User = Depends(get_any_user),
    db: AsyncSession = Depends(get_db)
):
    """Get a user's mean rating and review count"""
    service = ReviewService()
    return await service.get_rating_summary(db, user_id)
