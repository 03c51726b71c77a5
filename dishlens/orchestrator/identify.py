import time

from dishlens.orchestrator.contracts import DishResult
from dishlens.orchestrator.errors import BadRequest
from dishlens.orchestrator.parsing import normalize_with_path

IDENTIFY_PROMPT = """
Analyze this dish image and provide detailed information in JSON format about:
1. The name of the dish
2. Its regional origin/cuisine
3. Required ingredients
4. Step-by-step cooking instructions
5. 3-4 unique and interesting facts about its history or cultural significance

Please provide the response in this exact JSON format:
{
  "name": "Full Dish Name",
  "region": "Specific Region/Cuisine Origin",
  "ingredients": ["Complete ingredient 1", "Complete ingredient 2", ...],
  "instructions": ["Detailed step 1", "Detailed step 2", ...],
  "funFacts": ["Detailed fact 1", "Detailed fact 2", "Detailed fact 3"]
}
""".strip()

DEFAULT_MIME = "image/jpeg"


class DishIdentifier:
    """Stateless call-translate-normalize pipeline; safe to share across requests."""

    def __init__(self, vision, status_store):
        self.vision = vision
        self.status = status_store

    def identify(self, image_bytes: bytes, mime_type: str | None = None) -> DishResult:
        if not image_bytes:
            raise BadRequest("empty image upload")
        if not mime_type or not mime_type.startswith("image/"):
            mime_type = DEFAULT_MIME

        t0 = time.time()
        raw = self.vision.generate(image_bytes, mime_type, IDENTIFY_PROMPT)
        result, path = normalize_with_path(raw)

        dt = int((time.time() - t0) * 1000)
        self.status.log(f"identify: path={path} name={result.name!r} dt={dt}ms")
        return result
