from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession
import uuid
from app.core.database import get_db
from app.api.deps import get_any_user
from app.models.user import User
from app.schemas.match import MatchDetail, MatchListResponse
from app.services.match_service import MatchService

router = APIRouter()


@router.get("", response_model=MatchListResponse)
async def list_matches(
    current_user: User = Depends(get_any_user),
    db: AsyncSession = Depends(get_db)
):
    """Get the current user's matches, newest first"""
    service = MatchService()
    matches = await service.get_user_matches(db, current_user)
    items = [MatchDetail.model_validate(match) for match in matches]
    return MatchListResponse(items=items, total=len(items))


@router.get("/{match_id}", response_model=MatchDetail)
async def get_match(
    match_id: uuid.UUID,
    current_user: User = Depends(get_any_user),
    db: AsyncSession = Depends(get_db)
):
    """Get one match; only its two parties can read it"""
    service = MatchService()
    return await service.get_match_for_participant(db, match_id, current_user)
