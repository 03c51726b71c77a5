"""
Claude vision adapter.

Sends the dish photo to Claude via the Anthropic API as a base64 image block.
Requires ANTHROPIC_API_KEY in environment (dishlens/.env or system env).
"""
import base64
import os

import anthropic

from dishlens.adapters.vision.base import VisionAdapter, model_timeout
from dishlens.orchestrator.errors import ServiceUnavailable, UnprocessableResponse

CLAUDE_MODEL = os.getenv("CLAUDE_MODEL", "claude-haiku-4-5-20251001")
MAX_TOKENS = 2048


class ClaudeVision(VisionAdapter):
    name = "claude"

    def __init__(self, status_store, model: str | None = None):
        self.status = status_store
        self.model = model or CLAUDE_MODEL

    def configured(self) -> bool:
        return bool(os.getenv("ANTHROPIC_API_KEY"))

    def generate(self, image_bytes: bytes, mime_type: str, prompt: str) -> str:
        api_key = os.getenv("ANTHROPIC_API_KEY")
        if not api_key:
            self.status.log("claude_vision: ANTHROPIC_API_KEY not set")
            raise ServiceUnavailable("Anthropic API key not configured")

        b64 = base64.standard_b64encode(image_bytes).decode("utf-8")
        try:
            client = anthropic.Anthropic(api_key=api_key, timeout=model_timeout(), max_retries=0)
            message = client.messages.create(
                model=self.model,
                max_tokens=MAX_TOKENS,
                messages=[
                    {
                        "role": "user",
                        "content": [
                            {
                                "type": "image",
                                "source": {
                                    "type": "base64",
                                    "media_type": mime_type,
                                    "data": b64,
                                },
                            },
                            {"type": "text", "text": prompt},
                        ],
                    }
                ],
            )
        except Exception as e:
            self.status.log(f"claude_vision: API error {type(e).__name__}: {e}")
            raise UnprocessableResponse(f"Claude call failed: {e}") from e

        text = "".join(block.text for block in message.content if getattr(block, "type", None) == "text")
        if not text.strip():
            self.status.log("claude_vision: empty reply")
            raise UnprocessableResponse("Claude returned an empty reply")

        self.status.log(f"claude_vision: {self.model} replied ({len(text)} chars)")
        return text
