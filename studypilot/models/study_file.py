from sqlalchemy import Column, String, DateTime

from studypilot.database import Base
from studypilot.models._ids import new_id, utcnow


class StudyFile(Base):
    __tablename__ = "study_files"

    id = Column(String(36), primary_key=True, default=new_id)
    user_id = Column(String(64), nullable=False, index=True)
    file_name = Column(String(300), nullable=False)
    file_path = Column(String(600), nullable=False, unique=True)  # storage object key
    file_type = Column(String(100), nullable=True)  # MIME type
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
