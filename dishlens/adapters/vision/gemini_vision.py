"""
Gemini vision adapter (google-genai SDK).

Requires GEMINI_API_KEY in environment (dishlens/.env or system env).
The key is read on every call so a missing key surfaces as a 503 at request
time rather than a startup failure.
"""
import os

from google import genai
from google.genai import types

from dishlens.adapters.vision.base import VisionAdapter, model_timeout
from dishlens.orchestrator.errors import ServiceUnavailable, UnprocessableResponse

GEMINI_MODEL = os.getenv("GEMINI_MODEL", "gemini-2.5-flash")


class GeminiVision(VisionAdapter):
    name = "gemini"

    def __init__(self, status_store, model: str | None = None):
        self.status = status_store
        self.model = model or GEMINI_MODEL

    def configured(self) -> bool:
        return bool(os.getenv("GEMINI_API_KEY"))

    def generate(self, image_bytes: bytes, mime_type: str, prompt: str) -> str:
        api_key = os.getenv("GEMINI_API_KEY")
        if not api_key:
            self.status.log("gemini_vision: GEMINI_API_KEY not set")
            raise ServiceUnavailable("Gemini API key not configured")

        timeout_ms = int(model_timeout() * 1000)
        try:
            client = genai.Client(
                api_key=api_key,
                http_options=types.HttpOptions(timeout=timeout_ms),
            )
            # Part.from_bytes ships the image as base64 inline_data
            response = client.models.generate_content(
                model=self.model,
                contents=[
                    prompt,
                    types.Part.from_bytes(data=image_bytes, mime_type=mime_type),
                ],
            )
            text = response.text
        except Exception as e:
            self.status.log(f"gemini_vision: API error {type(e).__name__}: {e}")
            raise UnprocessableResponse(f"Gemini call failed: {e}") from e

        if not text or not text.strip():
            self.status.log("gemini_vision: empty reply")
            raise UnprocessableResponse("Gemini returned an empty reply")

        self.status.log(f"gemini_vision: {self.model} replied ({len(text)} chars)")
        return text
