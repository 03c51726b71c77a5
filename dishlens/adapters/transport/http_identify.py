"""
HTTP client for the identify endpoint.

  Request:  POST /api/identify  multipart field "image"
  Response: DishResult JSON     (or {"error": "..."} with 4xx/5xx)

Cancellation is cooperative: the request runs as its own task and is raced
against the token; a cancelled token cancels the task, so the pending
connection is torn down and nothing from it reaches the caller.
"""
import asyncio
import contextlib

import httpx

from dishlens.orchestrator.contracts import DishResult
from dishlens.orchestrator.errors import RequestCancelled, RequestFailed

IDENTIFY_PATH = "/api/identify"


class HttpIdentifyClient:
    def __init__(self, base_url: str = "http://127.0.0.1:8000", status_store=None,
                 timeout: float | None = None, transport: httpx.AsyncBaseTransport | None = None):
        self.status = status_store
        self._client = httpx.AsyncClient(base_url=base_url.rstrip("/"), timeout=timeout, transport=transport)

    def _log(self, msg: str):
        if self.status is not None:
            self.status.log(msg)

    async def _post(self, image_bytes: bytes, mime_type: str) -> httpx.Response:
        files = {"image": ("capture.jpg" if mime_type == "image/jpeg" else "upload", image_bytes, mime_type)}
        return await self._client.post(IDENTIFY_PATH, files=files)

    async def identify(self, image_bytes: bytes, mime_type: str, token) -> DishResult:
        token.raise_if_cancelled()
        self._log(f"http_identify: POST {IDENTIFY_PATH} ({len(image_bytes)} bytes)")

        request = asyncio.ensure_future(self._post(image_bytes, mime_type))
        cancelled = asyncio.ensure_future(token.wait())
        try:
            await asyncio.wait({request, cancelled}, return_when=asyncio.FIRST_COMPLETED)
        except asyncio.CancelledError:
            request.cancel()
            raise
        finally:
            cancelled.cancel()

        if token.cancelled:
            request.cancel()
            with contextlib.suppress(asyncio.CancelledError, httpx.HTTPError):
                await request
            self._log("http_identify: cancelled")
            raise RequestCancelled()

        try:
            resp = request.result()
        except httpx.HTTPError as e:
            self._log(f"http_identify: transport error {type(e).__name__}: {e}")
            raise RequestFailed(f"transport error: {e}") from e

        if not resp.is_success:
            self._log(f"http_identify: HTTP {resp.status_code}: {resp.text[:200]}")
            raise RequestFailed(f"HTTP error! status: {resp.status_code}", status_code=resp.status_code)

        try:
            data = resp.json()
        except ValueError as e:
            raise RequestFailed("response was not JSON") from e
        if not isinstance(data, dict):
            raise RequestFailed("response was not a JSON object")
        return DishResult.from_dict(data)

    async def aclose(self):
        await self._client.aclose()
