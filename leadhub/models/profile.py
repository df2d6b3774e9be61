"""Manager/owner profile. Only the away flag is used by this service."""

from sqlalchemy import Column, String, DateTime, Boolean, Uuid
import uuid
from datetime import datetime
from leadhub.core.database import Base


class Profile(Base):
    __tablename__ = "profiles"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    email = Column(String, unique=True, index=True, nullable=False)
    full_name = Column(String, nullable=True)
    role = Column(String, nullable=False, default="manager", index=True)  # owner or manager
    is_away = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)
