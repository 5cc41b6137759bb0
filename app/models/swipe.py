from sqlalchemy import Column, DateTime, ForeignKey, String, UniqueConstraint, Index
from sqlalchemy.sql import func
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import relationship
import uuid
import enum
from app.core.database import Base


class SwipeDirection(str, enum.Enum):
    LIKE = "like"
    PASS = "pass"


class Swipe(Base):
    """
    One side's decision about the other, keyed by the canonical
    (family_id, caregiver_id, job_id) triple whichever side acted.
    """

    __tablename__ = "swipes"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4, index=True)
    family_id = Column(UUID(as_uuid=True), ForeignKey("users.id"), nullable=False, index=True)
    caregiver_id = Column(UUID(as_uuid=True), ForeignKey("users.id"), nullable=False, index=True)
    job_id = Column(UUID(as_uuid=True), ForeignKey("job_posts.id"), nullable=False, index=True)
    actor_role = Column(String(10), nullable=False)  # family or caregiver
    direction = Column(String(10), nullable=False)  # like or pass

    # Timestamps
    created_at = Column(DateTime(timezone=True), server_default=func.now(), index=True)

    # Relationships
    job = relationship("JobPost")

    # One decision per side per triple
    __table_args__ = (
        UniqueConstraint(
            "family_id", "caregiver_id", "job_id", "actor_role",
            name="unique_swipe_triple_side",
        ),
        Index("idx_swipes_triple_direction", "family_id", "caregiver_id", "job_id", "direction"),
    )

    def __repr__(self):
        return (
            f"<Swipe(family_id={self.family_id}, caregiver_id={self.caregiver_id}, "
            f"job_id={self.job_id}, actor_role={self.actor_role}, direction={self.direction})>"
        )
