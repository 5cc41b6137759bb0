from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession
from app.core.database import get_db
from app.api.deps import get_any_user
from app.models.user import User
from app.schemas.match import Match as MatchSchema
from app.schemas.swipe import SwipeCreate, SwipeResult, Swipe as SwipeSchema
from app.services.swipe_service import SwipeService

router = APIRouter()


@router.post("", response_model=SwipeResult)
async def create_swipe(
    swipe_in: SwipeCreate,
    current_user: User = Depends(get_any_user),
    db: AsyncSession = Depends(get_db)
):
    """Record a swipe and report whether it completed a mutual match

    Resubmitting the same swipe is safe: the original decision is returned
    with was_new=false and no second match is created.
    """
    service = SwipeService()
    outcome = await service.swipe(db, current_user, swipe_in)

    return SwipeResult(
        swipe=SwipeSchema.model_validate(outcome.swipe),
        was_new=outcome.was_new,
        is_match=outcome.is_match,
        match=MatchSchema.model_validate(outcome.match) if outcome.match else None,
    )
