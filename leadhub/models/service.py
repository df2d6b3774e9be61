from sqlalchemy import Column, String, Integer, Boolean
from leadhub.core.database import Base


class Service(Base):
    """Service catalog entry shown in the intake form's service picker."""
    __tablename__ = "services"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(255), unique=True, nullable=False)
    active = Column(Boolean, nullable=False, default=True)
    sort_order = Column(Integer, nullable=False, default=0)
