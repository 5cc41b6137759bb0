from sqlalchemy import Column, String, DateTime, Text, Enum
from sqlalchemy.sql import func
from sqlalchemy.dialects.postgresql import UUID
import uuid
import enum
from app.core.database import Base


class UserRole(str, enum.Enum):
    FAMILY = "family"
    CAREGIVER = "caregiver"


class User(Base):
    """Family or caregiver profile, owned by the identity provider flow."""

    __tablename__ = "users"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4, index=True)
    email = Column(String(255), unique=True, index=True, nullable=False)
    role = Column(Enum(UserRole), nullable=False, index=True)

    # Profile information (name, bio, phone, location drive profile completeness)
    name = Column(String(255))
    bio = Column(Text)
    phone = Column(String(30))
    location = Column(String(255), index=True)  # "City, ST"
    avatar_url = Column(String(500))

    # Timestamps
    created_at = Column(DateTime(timezone=True), server_default=func.now(), index=True)
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    def __repr__(self):
        return f"<User(id={self.id}, email={self.email}, role={self.role})>"
