from sqlalchemy.orm import Session
from uuid import uuid4
from mock_interview.models.report import InterviewReport
from mock_interview.schemas.session import SessionResult


def save_report(db: Session, result: SessionResult) -> InterviewReport:
    report = InterviewReport(
        id=str(uuid4()),
        session_id=result.session_id,
        difficulty=result.difficulty.value,
        interviewer_gender=result.interviewer_gender.value,
        completion_reason=result.completion_reason.value,
        elapsed_seconds=result.elapsed_seconds,
        total_duration_seconds=result.total_duration_seconds,
        questions_asked=[q.model_dump() for q in result.questions_asked],
        device_available=result.device_available,
        completed_at=result.completed_at,
    )

    db.add(report)
    db.commit()
    db.refresh(report)
    return report


def get_report(db: Session, session_id: str):
    return (
        db.query(InterviewReport)
        .filter(InterviewReport.session_id == session_id)
        .first()
    )
