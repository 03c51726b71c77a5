"""
KIMI (Moonshot AI) vision adapter.
Uses KIMI's OpenAI-compatible chat completions API with an image_url part.
Requires KIMI_API_KEY in dishlens/.env. KIMI_API_URL can point at any other
OpenAI-compatible endpoint (e.g. scripts/fake_model_server.py).

No extra dependencies: plain httpx.
"""
import base64
import os

import httpx

from dishlens.adapters.vision.base import VisionAdapter, model_timeout
from dishlens.orchestrator.errors import ServiceUnavailable, UnprocessableResponse

KIMI_API_URL = os.getenv("KIMI_API_URL", "https://api.moonshot.cn/v1/chat/completions")
KIMI_MODEL   = os.getenv("KIMI_MODEL", "moonshot-v1-8k-vision-preview")
MAX_TOKENS   = 2048


class KimiVision(VisionAdapter):
    name = "kimi"

    def __init__(self, status_store, api_url: str | None = None, model: str | None = None):
        self.status = status_store
        self.api_url = api_url or KIMI_API_URL
        self.model = model or KIMI_MODEL

    def configured(self) -> bool:
        return bool(os.getenv("KIMI_API_KEY"))

    def generate(self, image_bytes: bytes, mime_type: str, prompt: str) -> str:
        api_key = os.getenv("KIMI_API_KEY")
        if not api_key:
            self.status.log("kimi_vision: KIMI_API_KEY not set")
            raise ServiceUnavailable("KIMI API key not configured")

        b64 = base64.standard_b64encode(image_bytes).decode("utf-8")
        payload = {
            "model": self.model,
            "messages": [
                {
                    "role": "user",
                    "content": [
                        {
                            "type": "image_url",
                            "image_url": {"url": f"data:{mime_type};base64,{b64}"},
                        },
                        {"type": "text", "text": prompt},
                    ],
                }
            ],
            "max_tokens": MAX_TOKENS,
        }
        headers = {
            "Authorization": f"Bearer {api_key}",
            "Content-Type": "application/json",
        }

        try:
            resp = httpx.post(self.api_url, json=payload, headers=headers, timeout=model_timeout())
            resp.raise_for_status()
            text = resp.json()["choices"][0]["message"]["content"]
        except httpx.HTTPStatusError as e:
            self.status.log(f"kimi_vision: HTTP {e.response.status_code}: {e.response.text[:300]}")
            raise UnprocessableResponse(f"KIMI returned HTTP {e.response.status_code}") from e
        except (httpx.HTTPError, KeyError, IndexError, TypeError, ValueError) as e:
            self.status.log(f"kimi_vision: API error {type(e).__name__}: {e}")
            raise UnprocessableResponse(f"KIMI call failed: {e}") from e

        if not isinstance(text, str) or not text.strip():
            self.status.log("kimi_vision: empty reply")
            raise UnprocessableResponse("KIMI returned an empty reply")

        self.status.log(f"kimi_vision: {self.model} replied ({len(text)} chars)")
        return text
