"""
Camera capture session.

    IDLE -> REQUESTING -> ACTIVE -> (CAPTURING -> ACTIVE | CLOSED)
    REQUESTING -> FAILED -> IDLE (on close)

The session exclusively owns the device stream. Whatever path ends the
session (capture, explicit close, acquisition error, teardown) the stream is
released exactly once. close() may run while open() is still in flight on a
worker thread; open() then releases what it acquired instead of going ACTIVE.
"""
import threading

import cv2

from dishlens.orchestrator.contracts import (
    FACING_MODE,
    IDEAL_HEIGHT,
    IDEAL_WIDTH,
    JPEG_QUALITY,
    CameraState,
)
from dishlens.orchestrator.errors import CameraUnavailable, CaptureFailed

WARMUP_FRAMES = 30   # reads allowed before the stream counts as dead


class CaptureSession:
    def __init__(self, camera, status_store):
        self.camera = camera
        self.status = status_store
        self.state = CameraState.IDLE
        self.loading = False
        self.error: str | None = None
        self._acquired = False
        self._lock = threading.Lock()

    @property
    def active(self) -> bool:
        return self.state in (CameraState.REQUESTING, CameraState.ACTIVE, CameraState.CAPTURING)

    def open(self):
        with self._lock:
            if self.state is not CameraState.IDLE:
                raise RuntimeError(f"cannot open camera session in state {self.state.value}")
            self.state = CameraState.REQUESTING
            self.loading = True
            self.error = None

        try:
            self.camera.open(FACING_MODE, IDEAL_WIDTH, IDEAL_HEIGHT)
        except Exception as e:
            self.status.log(f"capture_session: open failed {type(e).__name__}: {e}")
            self._fail()
            raise CameraUnavailable(str(e)) from e

        with self._lock:
            if self.state is not CameraState.REQUESTING:
                # closed while the device was being acquired
                self.camera.release()
                return
            self._acquired = True

        # equivalent of waiting for the video element's loadedmetadata
        for _ in range(WARMUP_FRAMES):
            if self.state is not CameraState.REQUESTING:
                return
            if self.camera.read_frame() is not None:
                with self._lock:
                    if self.state is CameraState.REQUESTING:
                        self.state = CameraState.ACTIVE
                        self.loading = False
                self.status.log("capture_session: active")
                return

        self.status.log("capture_session: no frames from device")
        self._release()
        self._fail()
        raise CameraUnavailable("camera produced no frames")

    def preview(self):
        if self.state is not CameraState.ACTIVE:
            return None
        return self.camera.read_frame()

    def capture(self) -> bytes:
        """Grab the current frame as JPEG (quality 95). Camera stays open on failure."""
        if self.state is not CameraState.ACTIVE or self.loading:
            raise CaptureFailed("camera not ready")

        self.state = CameraState.CAPTURING
        data = None
        try:
            frame = self.camera.read_frame()
            if frame is not None and frame.size:
                ok, buf = cv2.imencode(".jpg", frame, [cv2.IMWRITE_JPEG_QUALITY, JPEG_QUALITY])
                if ok and len(buf):
                    data = buf.tobytes()
        except cv2.error as e:
            self.status.log(f"capture_session: encode error {e}")
        finally:
            if self.state is CameraState.CAPTURING:
                self.state = CameraState.ACTIVE

        if not data:
            self.error = CaptureFailed.message
            raise CaptureFailed("encoder produced no data")

        self.error = None
        self.status.log(f"capture_session: captured {len(data)} bytes")
        return data

    def close(self):
        self._release()
        with self._lock:
            self.loading = False
            self.state = CameraState.IDLE if self.state is CameraState.FAILED else CameraState.CLOSED

    def _release(self):
        with self._lock:
            acquired, self._acquired = self._acquired, False
        if acquired:
            self.camera.release()

    def _fail(self):
        with self._lock:
            if self.state is CameraState.REQUESTING:
                self.state = CameraState.FAILED
            self.loading = False
            self.error = CameraUnavailable.message

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.close()
        return False
