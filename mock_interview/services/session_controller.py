"""
Timed interview session controller.

Drives a fixed-length countdown on the asyncio event loop, derives the question
on display from elapsed time, borrows the media capture device for the session
lifetime and hands the finished session to the report side exactly once.

Phases: initializing -> active -> completed. Natural expiry, an explicit end
and an unmount all leave ``active`` through ``_terminate``; device release and
timer cancellation share the single ``_cleanup`` path.
"""

import asyncio
import logging
from datetime import datetime
from typing import Optional

from mock_interview.core.logging_config import get_logger, log_session_event
from mock_interview.media.capture_device import (
    DeviceUnavailableError,
    MediaCaptureDevice,
    MediaHandle,
)
from mock_interview.schemas.question import InterviewQuestion
from mock_interview.schemas.session import SessionResult, SessionSnapshot
from mock_interview.services.question_bank import (
    get_questions,
    questions_revealed,
    resolve_difficulty,
    resolve_gender,
    select_active_question,
)
from mock_interview.services.report_navigator import ReportNavigator
from mock_interview.utils.enums import CompletionReason, SessionPhase, TrackKind
from mock_interview.utils.exceptions import SessionStateError

logger = get_logger(__name__)

DEVICE_UNAVAILABLE_NOTICE = (
    "Camera or microphone is unavailable. "
    "The interview will continue without a live preview."
)
COMPLETED_NOTICE = "Interview completed. Preparing your report..."


class InterviewSessionController:
    def __init__(
        self,
        session_id: str,
        device: MediaCaptureDevice,
        navigator: ReportNavigator,
        difficulty: Optional[str] = None,
        interviewer_gender: Optional[str] = None,
        total_duration_seconds: int = 60,
        tick_interval_seconds: float = 1.0,
        completion_delay_seconds: float = 2.0,
    ):
        if total_duration_seconds <= 0:
            raise ValueError("total_duration_seconds must be positive")

        self.session_id = session_id
        self.difficulty = resolve_difficulty(difficulty)
        self.interviewer_gender = resolve_gender(interviewer_gender)
        self.questions = get_questions(self.difficulty)

        self.total_duration_seconds = total_duration_seconds
        self.tick_interval_seconds = tick_interval_seconds
        self.completion_delay_seconds = completion_delay_seconds

        self.remaining_seconds = total_duration_seconds
        self.is_active = False
        self.phase = SessionPhase.INITIALIZING
        self.completion_reason: Optional[CompletionReason] = None
        self.completed_at: Optional[datetime] = None
        self.notice: Optional[str] = None

        self.mic_enabled = True
        self.camera_enabled = True

        self._device = device
        self._navigator = navigator
        self._handle: Optional[MediaHandle] = None
        self._timer_task: Optional[asyncio.Task] = None
        self._pending_handoff: Optional[asyncio.TimerHandle] = None
        self._handed_off = False
        self._device_acquired = False
        self._shown_question_id: Optional[int] = None

    @property
    def elapsed_seconds(self) -> int:
        return self.total_duration_seconds - self.remaining_seconds

    @property
    def active_question(self) -> Optional[InterviewQuestion]:
        return select_active_question(self.questions, self.elapsed_seconds)

    @property
    def device_available(self) -> bool:
        return self._handle is not None

    @property
    def handed_off(self) -> bool:
        return self._handed_off

    async def start(self, run_timer: bool = True):
        """
        Acquire the media device and begin the countdown.

        A device failure is recovered here: the session still becomes active,
        only without a live preview.
        """
        if self.phase is not SessionPhase.INITIALIZING:
            raise SessionStateError("Session has already been started")

        handle = None
        try:
            handle = await asyncio.to_thread(
                self._device.acquire, self.camera_enabled, self.mic_enabled
            )
        except DeviceUnavailableError as e:
            self.notice = DEVICE_UNAVAILABLE_NOTICE
            log_session_event(
                logger, self.session_id, "device_unavailable",
                level=logging.WARNING, error=str(e),
            )

        # Unmounted while the device request was in flight
        if self.phase is not SessionPhase.INITIALIZING:
            if handle is not None:
                self._device.release(handle)
            return

        self._handle = handle
        self._device_acquired = handle is not None
        self.remaining_seconds = self.total_duration_seconds
        self.is_active = True
        self.phase = SessionPhase.ACTIVE
        log_session_event(
            logger, self.session_id, "started",
            difficulty=self.difficulty.value,
            interviewer_gender=self.interviewer_gender.value,
            device_available=self.device_available,
        )

        if run_timer:
            self._timer_task = asyncio.create_task(self._run_timer())

    async def _run_timer(self):
        while self.is_active:
            await asyncio.sleep(self.tick_interval_seconds)
            self.tick()

    def tick(self):
        if not self.is_active:
            return

        self.remaining_seconds = max(self.remaining_seconds - 1, 0)

        if self.remaining_seconds == 0:
            self._terminate(CompletionReason.EXPIRED)
            self.notice = COMPLETED_NOTICE
            self._schedule_handoff()
            return

        question = self.active_question
        question_id = question.id if question else None
        if question_id != self._shown_question_id:
            self._shown_question_id = question_id
            log_session_event(
                logger, self.session_id, "question_changed",
                level=logging.DEBUG,
                question_id=question_id,
                elapsed_seconds=self.elapsed_seconds,
            )

    def end_session(self):
        if not self.is_active:
            raise SessionStateError("Session cannot be ended")

        self._terminate(CompletionReason.ENDED)
        self._hand_off()

    def unmount(self):
        """Tear the controller down. Safe to call any number of times."""
        if self.is_active:
            self._terminate(CompletionReason.ABANDONED)
        elif self.phase is SessionPhase.INITIALIZING:
            self.phase = SessionPhase.COMPLETED
            self.completion_reason = CompletionReason.ABANDONED
            self.completed_at = datetime.utcnow()

        if self._pending_handoff is not None:
            self._pending_handoff.cancel()
            self._pending_handoff = None
            self._hand_off()

        self._cleanup()
        log_session_event(logger, self.session_id, "unmounted", level=logging.DEBUG)

    def toggle_mic(self) -> bool:
        self.mic_enabled = not self.mic_enabled
        self._apply_track(TrackKind.AUDIO, self.mic_enabled)
        return self.mic_enabled

    def toggle_camera(self) -> bool:
        self.camera_enabled = not self.camera_enabled
        self._apply_track(TrackKind.VIDEO, self.camera_enabled)
        return self.camera_enabled

    def _apply_track(self, kind: TrackKind, enabled: bool):
        if self._handle is not None:
            self._device.set_track_enabled(self._handle, kind, enabled)

    def read_preview(self) -> Optional[bytes]:
        handle = self._handle
        if handle is None:
            return None
        return self._device.read_frame(handle)

    def _terminate(self, reason: CompletionReason):
        self.is_active = False
        self.phase = SessionPhase.COMPLETED
        self.completion_reason = reason
        self.completed_at = datetime.utcnow()
        self._cleanup()
        log_session_event(
            logger, self.session_id, reason.value,
            elapsed_seconds=self.elapsed_seconds,
        )

    def _cleanup(self):
        task, self._timer_task = self._timer_task, None
        if task is not None and not task.done() and task is not _current_task():
            task.cancel()

        handle, self._handle = self._handle, None
        if handle is not None:
            self._device.release(handle)

    def _schedule_handoff(self):
        if self.completion_delay_seconds <= 0:
            self._hand_off()
            return
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            self._hand_off()
            return
        self._pending_handoff = loop.call_later(
            self.completion_delay_seconds, self._fire_pending_handoff
        )

    def _fire_pending_handoff(self):
        self._pending_handoff = None
        self._hand_off()

    def _hand_off(self):
        if self._handed_off:
            return
        self._handed_off = True
        try:
            self._navigator.complete_session(self.result())
        except Exception:
            logger.exception("Report hand-off failed for session %s", self.session_id)
            return
        log_session_event(
            logger, self.session_id, "handed_off",
            completion_reason=self.completion_reason.value,
        )

    def result(self) -> SessionResult:
        return SessionResult(
            session_id=self.session_id,
            difficulty=self.difficulty,
            interviewer_gender=self.interviewer_gender,
            completion_reason=self.completion_reason,
            elapsed_seconds=self.elapsed_seconds,
            total_duration_seconds=self.total_duration_seconds,
            questions_asked=list(questions_revealed(self.questions, self.elapsed_seconds)),
            device_available=self._device_acquired,
            completed_at=self.completed_at,
        )

    def snapshot(self) -> SessionSnapshot:
        return SessionSnapshot(
            session_id=self.session_id,
            phase=self.phase,
            difficulty=self.difficulty,
            interviewer_gender=self.interviewer_gender,
            total_duration_seconds=self.total_duration_seconds,
            remaining_seconds=self.remaining_seconds,
            elapsed_seconds=self.elapsed_seconds,
            is_active=self.is_active,
            active_question=self.active_question,
            mic_enabled=self.mic_enabled,
            camera_enabled=self.camera_enabled,
            device_available=self.device_available,
            notice=self.notice,
            completion_reason=self.completion_reason,
        )


def _current_task() -> Optional[asyncio.Task]:
    try:
        return asyncio.current_task()
    except RuntimeError:
        return None
