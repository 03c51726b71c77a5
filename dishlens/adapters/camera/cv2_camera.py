"""
OpenCV webcam capture adapter.
CAMERA_INDEX env var (default 0) selects the webcam device. OpenCV has no
notion of facing mode, so the index decides which camera is "environment".
"""
import os
import cv2
from dishlens.adapters.camera.base import CameraAdapter

class CV2Camera(CameraAdapter):
    def __init__(self, status_store, index: int | None = None):
        self.status = status_store
        self._index = index if index is not None else int(os.getenv("CAMERA_INDEX", "0"))
        self._cap = None

    def open(self, facing_mode: str, width: int, height: int) -> None:
        if self._cap is not None and self._cap.isOpened():
            return
        cap = cv2.VideoCapture(self._index)
        if not cap.isOpened():
            cap.release()
            self.status.log(f"cv2_camera: failed to open device {self._index}")
            raise RuntimeError(f"camera device {self._index} unavailable")
        # "ideal" constraints: the driver picks the closest supported mode
        cap.set(cv2.CAP_PROP_FRAME_WIDTH, width)
        cap.set(cv2.CAP_PROP_FRAME_HEIGHT, height)
        self._cap = cap
        got_w = int(cap.get(cv2.CAP_PROP_FRAME_WIDTH))
        got_h = int(cap.get(cv2.CAP_PROP_FRAME_HEIGHT))
        self.status.log(f"cv2_camera: device {self._index} open ({facing_mode}) {got_w}x{got_h}")

    def read_frame(self):
        if self._cap is None or not self._cap.isOpened():
            return None
        ret, frame = self._cap.read()
        if not ret or frame is None:
            self.status.log("cv2_camera: frame capture failed")
            return None
        return frame

    def release(self) -> None:
        if self._cap is not None:
            self._cap.release()
            self._cap = None
            self.status.log(f"cv2_camera: device {self._index} released")

    @property
    def active_tracks(self) -> int:
        return 1 if self._cap is not None and self._cap.isOpened() else 0
