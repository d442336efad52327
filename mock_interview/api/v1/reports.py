from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from mock_interview.core.database import get_db
from mock_interview.schemas.session import ReportResponse
from mock_interview.services.final_report_builder import build_final_report
from mock_interview.services.report_persistence import get_report

router = APIRouter()


def _load_report(db: Session, session_id: str) -> ReportResponse:
    report = get_report(db, session_id)
    if not report:
        raise HTTPException(status_code=404, detail="Report not found")
    return ReportResponse.model_validate(report)


@router.get("/reports/{session_id}", response_model=ReportResponse)
async def get_full_report(
    session_id: str,
    db: Session = Depends(get_db)
):
    return _load_report(db, session_id)


@router.get("/reports/{session_id}/final")
async def get_final_report(
    session_id: str,
    db: Session = Depends(get_db)
):
    raw_report = _load_report(db, session_id).model_dump(mode="json")
    return build_final_report(raw_report)
