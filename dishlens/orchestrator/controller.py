"""
Capture/upload controller: the client-side half of dish identification.

Holds everything a UI renders (image, preview, loading, result, error,
camera session) and enforces the request rules:

  - at most one identification request in flight; a new submit cancels the
    previous one and a superseded request never touches state
  - a failure sets `error` but never clears an earlier `result`
  - cancellation is silent
  - the controller is the sole owner of the camera session
"""
import asyncio
import base64
import mimetypes
from pathlib import Path

from dishlens.orchestrator.cancellation import CancellationToken
from dishlens.orchestrator.capture_session import CaptureSession
from dishlens.orchestrator.contracts import CameraState, DishResult
from dishlens.orchestrator.errors import (
    CameraUnavailable,
    CaptureFailed,
    ClientError,
    RequestCancelled,
    RequestFailed,
)

DEFAULT_MIME = "image/jpeg"


def data_uri(image_bytes: bytes, mime_type: str) -> str:
    return f"data:{mime_type};base64,{base64.b64encode(image_bytes).decode('ascii')}"


class IdentifyController:
    def __init__(self, client, status_store, camera_factory=None):
        self.client = client
        self.status = status_store
        self.camera_factory = camera_factory

        self.image: bytes | None = None
        self.image_mime: str | None = None
        self.preview: str | None = None
        self.loading = False
        self.result: DishResult | None = None
        self.error: str | None = None
        self.camera: CaptureSession | None = None

        self._token: CancellationToken | None = None

    # ── image acquisition ──────────────────────────────────────────────────

    async def select_file(self, file, mime_type: str | None = None):
        if isinstance(file, (bytes, bytearray)):
            image_bytes = bytes(file)
        else:
            path = Path(file)
            image_bytes = path.read_bytes()
            mime_type = mime_type or mimetypes.guess_type(path.name)[0]
        mime_type = mime_type or DEFAULT_MIME

        self._set_image(image_bytes, mime_type)
        await self.submit(image_bytes, mime_type)

    async def start_camera(self) -> CaptureSession | None:
        if self.camera is not None and self.camera.active:
            return self.camera
        if self.camera_factory is None:
            raise RuntimeError("no camera configured")
        self.close_camera()

        session = CaptureSession(self.camera_factory(), self.status)
        self.camera = session
        try:
            await asyncio.to_thread(session.open)
        except CameraUnavailable:
            # message lives on the session (capture surface); result/error untouched
            self.status.log(f"controller: camera unavailable ({session.error})")
            return session
        return session

    async def capture_frame(self) -> bool:
        session = self.camera
        if session is None or session.state is not CameraState.ACTIVE or session.loading:
            return False
        try:
            image_bytes = session.capture()
        except CaptureFailed:
            return False

        self._set_image(image_bytes, DEFAULT_MIME)
        self.close_camera()
        await self.submit(image_bytes, DEFAULT_MIME)
        return True

    def close_camera(self):
        if self.camera is not None:
            self.camera.close()
            self.camera = None

    # ── identification ─────────────────────────────────────────────────────

    async def submit(self, image_bytes: bytes, mime_type: str = DEFAULT_MIME):
        self._cancel_pending()
        token = CancellationToken()
        self._token = token

        self.loading = True
        self.error = None
        try:
            result = await self.client.identify(image_bytes, mime_type, token)
            if token is self._token:
                self.result = result
                self.error = None
        except RequestCancelled:
            pass
        except ClientError as e:
            if token is self._token:
                self.error = RequestFailed.message
                self.status.log(f"controller: identify failed {type(e).__name__}: {e}")
        finally:
            if token is self._token:
                self.loading = False
                self._token = None

    def remove_image(self):
        self._cancel_pending()
        self._token = None
        self.image = None
        self.image_mime = None
        self.preview = None
        self.result = None
        self.error = None
        self.loading = False

    async def aclose(self):
        self.close_camera()
        self._cancel_pending()
        await self.client.aclose()

    def _cancel_pending(self):
        if self._token is not None:
            self._token.cancel()

    def _set_image(self, image_bytes: bytes, mime_type: str):
        self.image = image_bytes
        self.image_mime = mime_type
        self.preview = data_uri(image_bytes, mime_type)
