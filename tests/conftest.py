import os
import tempfile
from pathlib import Path

# Point the engine at a throwaway database before the package is imported
_db_dir = tempfile.mkdtemp(prefix="mock_interview_tests_")
os.environ["DATABASE_URL"] = f"sqlite:///{Path(_db_dir) / 'test.db'}"
os.environ["MEDIA_DEVICE"] = "none"

import pytest

from mock_interview.media.capture_device import (
    DeviceUnavailableError,
    MediaCaptureDevice,
    MediaHandle,
    MediaTrack,
)
from mock_interview.services.report_navigator import ReportNavigator
from mock_interview.services.session_controller import InterviewSessionController
from mock_interview.utils.enums import TrackKind


class FakeDevice(MediaCaptureDevice):
    """In-memory device recording every acquire/release call."""

    def __init__(self, available=True, frame=b"\xff\xd8fake-jpeg"):
        self.available = available
        self.frame = frame
        self.acquire_calls = 0
        self.release_calls = 0
        self.handles = []

    def acquire(self, video_enabled=True, audio_enabled=True):
        self.acquire_calls += 1
        if not self.available:
            raise DeviceUnavailableError("Permission denied")
        handle = MediaHandle(
            tracks={
                TrackKind.VIDEO: MediaTrack(TrackKind.VIDEO, enabled=video_enabled),
                TrackKind.AUDIO: MediaTrack(TrackKind.AUDIO, enabled=audio_enabled),
            }
        )
        self.handles.append(handle)
        return handle

    def release(self, handle):
        self.release_calls += 1
        super().release(handle)

    def read_frame(self, handle):
        video = handle.track(TrackKind.VIDEO)
        if handle.released or not video.enabled:
            return None
        return self.frame


class RecordingNavigator(ReportNavigator):
    def __init__(self):
        self.results = []

    def complete_session(self, result):
        self.results.append(result)


@pytest.fixture
def device():
    return FakeDevice()


@pytest.fixture
def navigator():
    return RecordingNavigator()


@pytest.fixture
def make_controller(device, navigator):
    def _make(**kwargs):
        kwargs.setdefault("session_id", "session-1")
        kwargs.setdefault("device", device)
        kwargs.setdefault("navigator", navigator)
        kwargs.setdefault("completion_delay_seconds", 0)
        return InterviewSessionController(**kwargs)
    return _make
