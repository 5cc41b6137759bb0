from sqlalchemy import Column, String, DateTime, Text, Float, ForeignKey, CheckConstraint
from sqlalchemy.sql import func
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import relationship
import uuid
from app.core.database import Base


class JobPost(Base):
    """A family's caregiving need; the context every swipe and match is scoped to."""

    __tablename__ = "job_posts"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4, index=True)
    family_id = Column(UUID(as_uuid=True), ForeignKey("users.id"), nullable=False, index=True)
    title = Column(String(255), nullable=False)
    description = Column(Text)
    location = Column(String(255), index=True)
    hours_per_week = Column(Float, nullable=False)
    rate_per_hour = Column(Float, nullable=False)

    # Timestamps
    created_at = Column(DateTime(timezone=True), server_default=func.now(), index=True)
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    # Relationships
    family = relationship("User")

    __table_args__ = (
        CheckConstraint("hours_per_week > 0", name="ck_job_posts_hours_positive"),
        CheckConstraint("rate_per_hour > 0", name="ck_job_posts_rate_positive"),
    )

    def __repr__(self):
        return f"<JobPost(id={self.id}, title={self.title}, family_id={self.family_id})>"
