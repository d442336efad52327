import asyncio
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Request, Response

from mock_interview.schemas.session import SessionSnapshot
from mock_interview.services.session_service import SessionService
from mock_interview.utils.enums import TrackKind
from mock_interview.utils.exceptions import SessionNotFoundError

router = APIRouter()


def get_session_service(request: Request) -> SessionService:
    return request.app.state.session_service


def _raise_http(e: ValueError):
    if isinstance(e, SessionNotFoundError):
        raise HTTPException(status_code=404, detail=str(e))
    raise HTTPException(status_code=400, detail=str(e))


# Session APIs
@router.post("/sessions", response_model=SessionSnapshot)
async def start_interview_session(
    gender: Optional[str] = None,
    difficulty: Optional[str] = None,
    service: SessionService = Depends(get_session_service),
):
    # Unknown query values fall back to defaults inside the controller
    controller = await service.start_session(difficulty=difficulty, gender=gender)
    return controller.snapshot()


@router.get("/sessions/{session_id}", response_model=SessionSnapshot)
async def get_interview_session(
    session_id: str,
    service: SessionService = Depends(get_session_service),
):
    try:
        return service.get_session(session_id).snapshot()
    except ValueError as e:
        _raise_http(e)


@router.post("/sessions/{session_id}/mic", response_model=SessionSnapshot)
async def toggle_mic(
    session_id: str,
    service: SessionService = Depends(get_session_service),
):
    try:
        return service.toggle_track(session_id, TrackKind.AUDIO).snapshot()
    except ValueError as e:
        _raise_http(e)


@router.post("/sessions/{session_id}/camera", response_model=SessionSnapshot)
async def toggle_camera(
    session_id: str,
    service: SessionService = Depends(get_session_service),
):
    try:
        return service.toggle_track(session_id, TrackKind.VIDEO).snapshot()
    except ValueError as e:
        _raise_http(e)


@router.post("/sessions/{session_id}/end", response_model=SessionSnapshot)
async def end_interview_session(
    session_id: str,
    service: SessionService = Depends(get_session_service),
):
    try:
        return service.end_session(session_id).snapshot()
    except ValueError as e:
        _raise_http(e)


@router.delete("/sessions/{session_id}", status_code=204)
async def unmount_interview_session(
    session_id: str,
    service: SessionService = Depends(get_session_service),
):
    try:
        service.unmount_session(session_id)
    except ValueError as e:
        _raise_http(e)
    return Response(status_code=204)


# Live preview (single JPEG frame)
@router.get("/sessions/{session_id}/preview")
async def get_preview_frame(
    session_id: str,
    service: SessionService = Depends(get_session_service),
):
    try:
        controller = service.get_session(session_id)
    except ValueError as e:
        _raise_http(e)

    frame = await asyncio.to_thread(controller.read_preview)
    if frame is None:
        raise HTTPException(status_code=404, detail="No live preview available")

    return Response(content=frame, media_type="image/jpeg")
