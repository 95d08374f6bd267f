from sqlalchemy import Column, String, Text, DateTime, Boolean, ForeignKey

from studypilot.database import Base
from studypilot.models._ids import new_id, utcnow


class StudyGoal(Base):
    __tablename__ = "study_goals"

    id = Column(String(36), primary_key=True, default=new_id)
    user_id = Column(String(64), nullable=False, index=True)
    title = Column(String(500), nullable=False)
    description = Column(Text, nullable=True)
    target_date = Column(String(32), nullable=True)  # ISO date, free-form from the client
    priority = Column(String(10), nullable=False, default="medium")  # low/medium/high
    category = Column(String(50), nullable=True)
    file_id = Column(String(36), ForeignKey("study_files.id"), nullable=True)
    completed = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
