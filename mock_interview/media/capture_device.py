import cv2
import threading
from dataclasses import dataclass, field
from typing import Dict, Optional

from mock_interview.core.logging_config import get_logger
from mock_interview.utils.enums import TrackKind

logger = get_logger(__name__)


class DeviceUnavailableError(RuntimeError):
    """Camera or microphone could not be acquired."""


@dataclass
class MediaTrack:
    kind: TrackKind
    enabled: bool = True
    live: bool = True

    def stop(self):
        self.live = False


@dataclass
class MediaHandle:
    tracks: Dict[TrackKind, MediaTrack] = field(default_factory=dict)
    capture: Optional[object] = None
    released: bool = False

    def track(self, kind: TrackKind) -> Optional[MediaTrack]:
        return self.tracks.get(kind)

    def stop_all(self):
        for track in self.tracks.values():
            track.stop()


class MediaCaptureDevice:
    """Local camera/microphone the session controller borrows for its lifetime."""

    def acquire(self, video_enabled: bool = True, audio_enabled: bool = True) -> MediaHandle:
        raise NotImplementedError

    def set_track_enabled(self, handle: MediaHandle, kind: TrackKind, enabled: bool):
        track = handle.track(kind)
        # Dead or missing tracks are ignored
        if track is None or not track.live:
            return
        track.enabled = enabled

    def release(self, handle: MediaHandle):
        handle.stop_all()
        handle.released = True

    def read_frame(self, handle: MediaHandle) -> Optional[bytes]:
        return None


class UnavailableDevice(MediaCaptureDevice):
    """Stands in when no capture hardware is configured."""

    def acquire(self, video_enabled: bool = True, audio_enabled: bool = True) -> MediaHandle:
        raise DeviceUnavailableError("No media capture device configured")


class OpenCVCaptureDevice(MediaCaptureDevice):
    """
    Camera capture through OpenCV.

    OpenCV has no audio support, so the audio track is logical: it carries the
    enable flag the client toggles and stops with the device.
    """

    def __init__(self, camera_index: int = 0, jpeg_quality: int = 80):
        self.camera_index = camera_index
        self.jpeg_quality = jpeg_quality
        self._lock = threading.Lock()

    def acquire(self, video_enabled: bool = True, audio_enabled: bool = True) -> MediaHandle:
        cap = cv2.VideoCapture(self.camera_index)
        if not cap.isOpened():
            cap.release()
            raise DeviceUnavailableError(f"Could not open camera {self.camera_index}")

        logger.info("Camera %s opened", self.camera_index)
        return MediaHandle(
            tracks={
                TrackKind.VIDEO: MediaTrack(TrackKind.VIDEO, enabled=video_enabled),
                TrackKind.AUDIO: MediaTrack(TrackKind.AUDIO, enabled=audio_enabled),
            },
            capture=cap,
        )

    def release(self, handle: MediaHandle):
        super().release(handle)
        with self._lock:
            cap = handle.capture
            handle.capture = None
            if cap is not None:
                cap.release()
        if cap is not None:
            logger.info("Camera %s released", self.camera_index)

    def read_frame(self, handle: MediaHandle) -> Optional[bytes]:
        video = handle.track(TrackKind.VIDEO)
        if video is None or not (video.live and video.enabled):
            return None

        with self._lock:
            cap = handle.capture
            if cap is None:
                return None
            ret, frame = cap.read()
        if not ret:
            return None

        ok, buffer = cv2.imencode(
            ".jpg", frame, [int(cv2.IMWRITE_JPEG_QUALITY), self.jpeg_quality]
        )
        if not ok:
            return None
        return buffer.tobytes()


def create_media_device(kind: str, camera_index: int = 0) -> MediaCaptureDevice:
    if kind == "opencv":
        return OpenCVCaptureDevice(camera_index=camera_index)
    if kind == "none":
        return UnavailableDevice()
    raise ValueError(f"Unknown media device: {kind}")
