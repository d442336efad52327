from typing import Callable, Optional
from uuid import uuid4

from mock_interview.core.config import Settings
from mock_interview.media.capture_device import MediaCaptureDevice
from mock_interview.services.report_navigator import ReportNavigator
from mock_interview.services.session_controller import InterviewSessionController
from mock_interview.services.session_registry import SessionRegistry
from mock_interview.utils.enums import TrackKind


class SessionService:
    """Builds controllers from settings and routes API calls to them."""

    def __init__(
        self,
        settings: Settings,
        device_factory: Callable[[], MediaCaptureDevice],
        navigator: ReportNavigator,
        registry: Optional[SessionRegistry] = None,
    ):
        self.settings = settings
        self.device_factory = device_factory
        self.navigator = navigator
        self.registry = registry or SessionRegistry()

    def create_session(
        self,
        difficulty: Optional[str] = None,
        gender: Optional[str] = None,
    ) -> InterviewSessionController:
        controller = InterviewSessionController(
            session_id=str(uuid4()),
            device=self.device_factory(),
            navigator=self.navigator,
            difficulty=difficulty,
            interviewer_gender=gender,
            total_duration_seconds=self.settings.SESSION_DURATION_SECONDS,
            tick_interval_seconds=self.settings.TICK_INTERVAL_SECONDS,
            completion_delay_seconds=self.settings.COMPLETION_DELAY_SECONDS,
        )
        self.registry.mount(controller)
        return controller

    async def start_session(
        self,
        difficulty: Optional[str] = None,
        gender: Optional[str] = None,
    ) -> InterviewSessionController:
        controller = self.create_session(difficulty=difficulty, gender=gender)
        await controller.start()
        return controller

    def get_session(self, session_id: str) -> InterviewSessionController:
        return self.registry.get(session_id)

    def end_session(self, session_id: str) -> InterviewSessionController:
        controller = self.registry.get(session_id)
        controller.end_session()
        return controller

    def toggle_track(self, session_id: str, kind: TrackKind) -> InterviewSessionController:
        controller = self.registry.get(session_id)
        if kind is TrackKind.AUDIO:
            controller.toggle_mic()
        else:
            controller.toggle_camera()
        return controller

    def unmount_session(self, session_id: str) -> InterviewSessionController:
        return self.registry.remove(session_id)

    def shutdown(self):
        self.registry.shutdown()
