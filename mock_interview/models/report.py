from sqlalchemy import Column, String, Integer, DateTime, Boolean, JSON
from datetime import datetime
from mock_interview.core.database import Base


class InterviewReport(Base):
    __tablename__ = "interview_reports"

    id = Column(String, primary_key=True, index=True)
    session_id = Column(String, unique=True, index=True)

    difficulty = Column(String)
    interviewer_gender = Column(String)
    completion_reason = Column(String)  # expired | ended

    elapsed_seconds = Column(Integer)
    total_duration_seconds = Column(Integer)
    questions_asked = Column(JSON, default=list)
    device_available = Column(Boolean, default=False)

    completed_at = Column(DateTime)
    created_at = Column(DateTime, default=datetime.utcnow)
