import os

DEFAULT_TIMEOUT_S = 30.0


def model_timeout() -> float:
    return float(os.getenv("MODEL_TIMEOUT_S", str(DEFAULT_TIMEOUT_S)))


class VisionAdapter:
    name = "base"

    def configured(self) -> bool:
        """True when the credential this adapter needs is present right now."""
        return True

    def generate(self, image_bytes: bytes, mime_type: str, prompt: str) -> str:
        """Send image + prompt to the model and return its raw text reply.

        Raises ServiceUnavailable when the credential is missing (before any
        call) and UnprocessableResponse when the call fails or times out.
        """
        raise NotImplementedError
