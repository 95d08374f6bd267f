from sqlalchemy import Column, Integer, String, DateTime

from studypilot.database import Base
from studypilot.models._ids import utcnow


class Profile(Base):
    __tablename__ = "profiles"

    id = Column(String(64), primary_key=True)  # same as the owner id
    display_name = Column(String(100), nullable=True)
    tokens = Column(Integer, nullable=False, default=0)
    streak = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
