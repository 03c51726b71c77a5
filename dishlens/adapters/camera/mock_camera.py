"""Mock camera: synthetic frames, with switches for the failure paths."""
import numpy as np
from dishlens.adapters.camera.base import CameraAdapter

class MockCamera(CameraAdapter):
    def __init__(self, status_store, fail_open: bool = False, drop_frames: bool = False,
                 width: int = 640, height: int = 480):
        self.status = status_store
        self.fail_open = fail_open        # simulate permission denied / no device
        self.drop_frames = drop_frames    # simulate a stream that yields no data
        self.width = width
        self.height = height
        self.open_calls = 0
        self.release_calls = 0
        self._tracks = 0
        self._tick = 0

    def open(self, facing_mode: str, width: int, height: int) -> None:
        self.open_calls += 1
        if self.fail_open:
            self.status.log("mock_camera: permission denied")
            raise PermissionError("camera permission denied")
        self._tracks = 1
        self.status.log(f"mock_camera: open ({facing_mode}) {self.width}x{self.height}")

    def read_frame(self):
        if not self._tracks or self.drop_frames:
            return None
        self._tick = (self._tick + 1) % 256
        frame = np.zeros((self.height, self.width, 3), dtype=np.uint8)
        frame[:, :, 1] = self._tick
        return frame

    def release(self) -> None:
        if self._tracks:
            self.release_calls += 1
            self._tracks = 0
            self.status.log("mock_camera: released")

    @property
    def active_tracks(self) -> int:
        return self._tracks
