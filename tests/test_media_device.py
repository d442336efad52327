"""Tests for the OpenCV-backed capture device with a patched ``VideoCapture``."""

import numpy as np
import pytest

from mock_interview.media import capture_device
from mock_interview.media.capture_device import (
    DeviceUnavailableError,
    OpenCVCaptureDevice,
    UnavailableDevice,
    create_media_device,
)
from mock_interview.utils.enums import TrackKind


class FakeCapture:
    def __init__(self, index, opened=True):
        self.index = index
        self.opened = opened
        self.release_calls = 0

    def isOpened(self):
        return self.opened

    def read(self):
        return True, np.zeros((8, 8, 3), dtype=np.uint8)

    def release(self):
        self.release_calls += 1


@pytest.fixture
def captures(monkeypatch):
    created = []

    def factory(index):
        cap = FakeCapture(index)
        created.append(cap)
        return cap

    monkeypatch.setattr(capture_device.cv2, "VideoCapture", factory)
    return created


def test_acquire_opens_camera_with_both_tracks(captures):
    device = OpenCVCaptureDevice(camera_index=2)
    handle = device.acquire(video_enabled=True, audio_enabled=False)

    assert captures[0].index == 2
    assert handle.track(TrackKind.VIDEO).enabled is True
    assert handle.track(TrackKind.AUDIO).enabled is False


def test_acquire_failure_raises_device_unavailable(monkeypatch):
    closed = FakeCapture(0, opened=False)
    monkeypatch.setattr(capture_device.cv2, "VideoCapture", lambda index: closed)

    with pytest.raises(DeviceUnavailableError):
        OpenCVCaptureDevice().acquire()
    assert closed.release_calls == 1


def test_read_frame_returns_jpeg_only_while_video_enabled(captures):
    device = OpenCVCaptureDevice()
    handle = device.acquire()

    frame = device.read_frame(handle)
    assert frame.startswith(b"\xff\xd8")

    device.set_track_enabled(handle, TrackKind.VIDEO, False)
    assert device.read_frame(handle) is None


def test_release_stops_tracks_and_capture_once(captures):
    device = OpenCVCaptureDevice()
    handle = device.acquire()

    device.release(handle)
    device.release(handle)

    assert captures[0].release_calls == 1
    assert handle.released
    assert not handle.track(TrackKind.AUDIO).live
    assert device.read_frame(handle) is None


def test_toggling_a_stopped_track_is_a_no_op(captures):
    device = OpenCVCaptureDevice()
    handle = device.acquire()
    device.release(handle)

    device.set_track_enabled(handle, TrackKind.AUDIO, False)
    assert handle.track(TrackKind.AUDIO).enabled is True


def test_create_media_device():
    assert isinstance(create_media_device("opencv"), OpenCVCaptureDevice)
    assert isinstance(create_media_device("none"), UnavailableDevice)
    with pytest.raises(ValueError):
        create_media_device("webcam9000")


def test_unavailable_device_always_fails():
    with pytest.raises(DeviceUnavailableError):
        UnavailableDevice().acquire()
