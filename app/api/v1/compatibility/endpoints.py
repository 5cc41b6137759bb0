from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession
import uuid
from app.core.database import get_db
from app.core.exceptions import UserNotFoundError
from app.api.deps import get_any_user
from app.models.user import User, UserRole
from app.repositories.user_repository import UserRepository
from app.schemas.review import CompatibilityResponse
from app.services.scoring_service import ScoringService

router = APIRouter()


@router.get("/{other_user_id}", response_model=CompatibilityResponse)
async def get_compatibility(
    other_user_id: uuid.UUID,
    current_user: User = Depends(get_any_user),
    db: AsyncSession = Depends(get_db)
):
    """Compatibility score (0-100) between the current user and someone on the other side"""
    other = await UserRepository().get(db, other_user_id)
    if other is None or other.role == current_user.role:
        raise UserNotFoundError("No family or caregiver counterpart with this id")

    if current_user.role == UserRole.FAMILY:
        family, caregiver = current_user, other
    else:
        family, caregiver = other, current_user

    score = await ScoringService().score(db, family, caregiver)
    return CompatibilityResponse(
        user_id=current_user.id,
        other_user_id=other.id,
        score=round(score, 2),
    )
