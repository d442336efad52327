from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel

from mock_interview.schemas.question import InterviewQuestion
from mock_interview.utils.enums import (
    CompletionReason,
    Difficulty,
    InterviewerGender,
    SessionPhase,
)


class SessionSnapshot(BaseModel):
    session_id: str
    phase: SessionPhase
    difficulty: Difficulty
    interviewer_gender: InterviewerGender
    total_duration_seconds: int
    remaining_seconds: int
    elapsed_seconds: int
    is_active: bool
    active_question: Optional[InterviewQuestion] = None
    mic_enabled: bool
    camera_enabled: bool
    device_available: bool
    notice: Optional[str] = None
    completion_reason: Optional[CompletionReason] = None


class SessionResult(BaseModel):
    session_id: str
    difficulty: Difficulty
    interviewer_gender: InterviewerGender
    completion_reason: CompletionReason
    elapsed_seconds: int
    total_duration_seconds: int
    questions_asked: List[InterviewQuestion]
    device_available: bool
    completed_at: datetime


class ReportResponse(BaseModel):
    session_id: str
    difficulty: Difficulty
    interviewer_gender: InterviewerGender
    completion_reason: CompletionReason
    elapsed_seconds: int
    total_duration_seconds: int
    questions_asked: List[InterviewQuestion]
    device_available: bool
    completed_at: datetime

    class Config:
        from_attributes = True
