"""Lead model."""
import enum
import uuid
from datetime import datetime
from sqlalchemy import Column, String, Text, DateTime, Integer, Uuid
from leadhub.core.database import Base


class LeadSource(str, enum.Enum):
    """Where the lead was captured."""
    FORM = "form"
    CHAT = "chat"


class LeadStatus(str, enum.Enum):
    """Lead status. Any value may follow any other."""
    NEW = "new"
    CONTACTED = "contacted"
    QUALIFIED = "qualified"
    CLOSED = "closed"


class Urgency(str, enum.Enum):
    NORMAL = "normal"
    URGENT = "urgent"
    EMERGENCY = "emergency"


class Lead(Base):
    """Lead model."""
    __tablename__ = "leads"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    full_name = Column(String(255), nullable=False)
    phone = Column(String(50), nullable=False)
    email = Column(String(255), nullable=False)
    service_needed = Column(String(255), nullable=False, index=True)
    project_description = Column(Text, nullable=False, default="")
    urgency_level = Column(String(20), nullable=False, default=Urgency.NORMAL.value)
    budget = Column(String(50), nullable=True)
    property_address = Column(String(500), nullable=True)
    timeline = Column(String(50), nullable=False)
    lead_value = Column(Integer, nullable=False, default=0)
    status = Column(String(20), nullable=False, default=LeadStatus.NEW.value, index=True)
    notes = Column(Text, nullable=False, default="")
    source = Column(String(20), nullable=False, default=LeadSource.FORM.value)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False, index=True)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)
