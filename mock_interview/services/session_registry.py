from typing import Dict, Optional

from mock_interview.core.logging_config import get_logger
from mock_interview.services.session_controller import InterviewSessionController
from mock_interview.utils.exceptions import SessionNotFoundError

logger = get_logger(__name__)


class SessionRegistry:
    """
    Controllers known to this process, keyed by session id.

    At most one controller is mounted (running or starting) at a time, since
    it holds the local camera and microphone. Mounting a new one unmounts the
    previous controller and drops it; its report, if any, lives in the database.
    """

    def __init__(self):
        self._controllers: Dict[str, InterviewSessionController] = {}
        self._mounted_id: Optional[str] = None

    def mount(self, controller: InterviewSessionController):
        if self._mounted_id is not None and self._mounted_id != controller.session_id:
            previous = self._controllers.pop(self._mounted_id, None)
            if previous is not None:
                logger.info(
                    "Unmounting session %s for new session %s",
                    previous.session_id, controller.session_id,
                )
                previous.unmount()

        self._controllers[controller.session_id] = controller
        self._mounted_id = controller.session_id

    def get(self, session_id: str) -> InterviewSessionController:
        controller = self._controllers.get(session_id)
        if controller is None:
            raise SessionNotFoundError("Session not found")
        return controller

    def remove(self, session_id: str) -> InterviewSessionController:
        controller = self._controllers.pop(session_id, None)
        if controller is None:
            raise SessionNotFoundError("Session not found")
        if self._mounted_id == session_id:
            self._mounted_id = None
        controller.unmount()
        return controller

    @property
    def mounted(self) -> Optional[InterviewSessionController]:
        if self._mounted_id is None:
            return None
        return self._controllers.get(self._mounted_id)

    def __len__(self):
        return len(self._controllers)

    def shutdown(self):
        for controller in list(self._controllers.values()):
            controller.unmount()
        self._controllers.clear()
        self._mounted_id = None
