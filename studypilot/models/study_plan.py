from sqlalchemy import Column, String, Text, DateTime, ForeignKey

from studypilot.database import Base
from studypilot.models._ids import new_id, utcnow


class StudyPlan(Base):
    __tablename__ = "study_plans"

    id = Column(String(36), primary_key=True, default=new_id)
    goal_id = Column(String(36), ForeignKey("study_goals.id"), nullable=False, index=True)
    user_id = Column(String(64), nullable=True)
    plan_content = Column(Text, nullable=False)  # markdown as returned by the model
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
