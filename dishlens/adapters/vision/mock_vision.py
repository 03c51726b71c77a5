import json

from dishlens.adapters.vision.base import VisionAdapter

_CANNED = {
    "name": "Margherita Pizza",
    "region": "Naples, Italy",
    "ingredients": ["Pizza dough", "San Marzano tomatoes", "Fresh mozzarella", "Basil", "Olive oil"],
    "instructions": [
        "Stretch the dough into a thin round",
        "Spread crushed tomatoes over the base",
        "Top with torn mozzarella",
        "Bake in a very hot oven for 90 seconds",
        "Finish with basil and a drizzle of olive oil",
    ],
    "funFacts": [
        "Named after Queen Margherita of Savoy in 1889",
        "Its colours echo the Italian flag",
        "Neapolitan pizza is on UNESCO's intangible heritage list",
    ],
}


class MockVision(VisionAdapter):
    """Offline stand-in: ignores the image and replies like a chatty model."""
    name = "mock"

    def __init__(self, status_store, reply: str | None = None):
        self.status = status_store
        self.reply = reply if reply is not None else (
            "Here is what I found:\n```json\n" + json.dumps(_CANNED, indent=2) + "\n```"
        )

    def generate(self, image_bytes: bytes, mime_type: str, prompt: str) -> str:
        self.status.log(f"mock_vision: {len(image_bytes)} bytes ({mime_type})")
        return self.reply
