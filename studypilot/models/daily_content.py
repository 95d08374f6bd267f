from sqlalchemy import Column, Integer, String, Text, DateTime, Boolean, ForeignKey

from studypilot.database import Base
from studypilot.models._ids import new_id, utcnow


class DailyStudyContent(Base):
    __tablename__ = "daily_study_content"

    id = Column(String(36), primary_key=True, default=new_id)
    plan_id = Column(String(36), ForeignKey("study_plans.id"), nullable=False, index=True)
    user_id = Column(String(64), nullable=True)
    day_number = Column(Integer, nullable=False)
    content = Column(Text, nullable=False)
    completed = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
