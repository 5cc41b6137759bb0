from sqlalchemy import Column, DateTime, ForeignKey, UniqueConstraint
from sqlalchemy.sql import func
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import relationship
import uuid
from app.core.database import Base


class Match(Base):
    __tablename__ = "matches"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4, index=True)
    family_id = Column(UUID(as_uuid=True), ForeignKey("users.id"), nullable=False, index=True)
    caregiver_id = Column(UUID(as_uuid=True), ForeignKey("users.id"), nullable=False, index=True)
    job_id = Column(UUID(as_uuid=True), ForeignKey("job_posts.id"), nullable=False, index=True)

    # Timestamps
    created_at = Column(DateTime(timezone=True), server_default=func.now(), index=True)

    # Relationships
    family = relationship("User", foreign_keys=[family_id])
    caregiver = relationship("User", foreign_keys=[caregiver_id])
    job = relationship("JobPost")

    # Exactly one match per triple
    __table_args__ = (
        UniqueConstraint("family_id", "caregiver_id", "job_id", name="unique_match_triple"),
    )

    def __repr__(self):
        return f"<Match(family_id={self.family_id}, caregiver_id={self.caregiver_id}, job_id={self.job_id})>"
