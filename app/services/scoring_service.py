import logging
from typing import Optional, Any
from sqlalchemy.ext.asyncio import AsyncSession
from app.repositories.review_repository import ReviewRepository
from app.schemas.review import RatingSummary

logger = logging.getLogger(__name__)


class ScoringService:
    """Compatibility score (0-100) between a family and a caregiver, used only to order feeds

    Score = location affinity (max 30) + 0.2 * mean profile completeness (max 20)
            + rating contribution (max 40), clamped to [0, 100]
    """

    LOCATION_EXACT_POINTS = 30.0
    LOCATION_REGION_POINTS = 15.0
    COMPLETENESS_WEIGHT = 0.2
    COMPLETENESS_FIELDS = ("name", "bio", "phone", "location")
    RATING_MAX_POINTS = 40.0
    RATING_SCALE = 5.0

    def __init__(self, review_repo: Optional[ReviewRepository] = None):
        self.review_repo = review_repo or ReviewRepository()

    @staticmethod
    def _normalize(value: Optional[str]) -> str:
        return " ".join((value or "").split()).lower()

    @staticmethod
    def _region(location: str) -> Optional[str]:
        """Token after the last comma ("San Francisco, CA" -> "ca")"""
        if "," not in location:
            return None
        region = location.rsplit(",", 1)[1].strip()
        return region or None

    @staticmethod
    def calculate_location_affinity(family_location: Optional[str], caregiver_location: Optional[str]) -> float:
        """Location affinity points: exact match 30, same region 15, else 0"""
        family_loc = ScoringService._normalize(family_location)
        caregiver_loc = ScoringService._normalize(caregiver_location)
        if not family_loc or not caregiver_loc:
            return 0.0

        if family_loc == caregiver_loc:
            return ScoringService.LOCATION_EXACT_POINTS

        family_region = ScoringService._region(family_loc)
        if family_region is not None and family_region == ScoringService._region(caregiver_loc):
            return ScoringService.LOCATION_REGION_POINTS

        return 0.0

    @staticmethod
    def calculate_profile_completeness(profile: Any) -> float:
        """Percentage (0-100) of name, bio, phone and location that are filled in"""
        fields = ScoringService.COMPLETENESS_FIELDS
        present = sum(
            1 for field in fields
            if str(getattr(profile, field, None) or "").strip()
        )
        return 100.0 * present / len(fields)

    @staticmethod
    def calculate_rating_contribution(rating: Optional[RatingSummary]) -> float:
        """Rating points (0-40); unreviewed caregivers get 0"""
        if rating is None or rating.count <= 0:
            return 0.0
        points = (rating.average / ScoringService.RATING_SCALE) * ScoringService.RATING_MAX_POINTS
        return min(ScoringService.RATING_MAX_POINTS, max(0.0, points))

    @staticmethod
    def calculate_compatibility_score(
        family: Any,
        caregiver: Any,
        rating: Optional[RatingSummary] = None
    ) -> float:
        """Calculate the compatibility score for a family/caregiver pair

        Pure function of the two profiles and the caregiver's rating summary.
        """
        # 1. Location affinity (max 30)
        location_score = ScoringService.calculate_location_affinity(
            getattr(family, "location", None),
            getattr(caregiver, "location", None),
        )

        # 2. Profile completeness (max 20)
        completeness = (
            ScoringService.calculate_profile_completeness(family)
            + ScoringService.calculate_profile_completeness(caregiver)
        ) / 2
        completeness_score = completeness * ScoringService.COMPLETENESS_WEIGHT

        # 3. Aggregate rating (max 40)
        rating_score = ScoringService.calculate_rating_contribution(rating)

        final_score = location_score + completeness_score + rating_score
        return min(100.0, max(0.0, final_score))

    async def get_rating(self, db: AsyncSession, caregiver: Any) -> Optional[RatingSummary]:
        """Fetch the caregiver's rating summary; None when the lookup fails"""
        try:
            average, count = await self.review_repo.get_rating_summary(db, caregiver.id)
            return RatingSummary(average=average, count=count)
        except Exception as e:
            logger.warning(f"Rating lookup failed for caregiver {getattr(caregiver, 'id', None)}, scoring without it: {e}")
            return None

    async def score(self, db: AsyncSession, family: Any, caregiver: Any) -> float:
        """Score a pair, fetching the caregiver's rating from the review store"""
        rating = await self.get_rating(db, caregiver)
        return self.calculate_compatibility_score(family, caregiver, rating)


# Global instance
scoring_service = ScoringService()
