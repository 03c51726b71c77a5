import os
from fastapi import Depends, FastAPI, Request
from fastapi.responses import JSONResponse
from dotenv import load_dotenv
from starlette.concurrency import run_in_threadpool
from starlette.datastructures import UploadFile
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.formparsers import MultiPartException

from dishlens.services.models import DishResultOut, ErrorOut, HealthResponse, StatusResponse
from dishlens.services.status_store import StatusStore
from dishlens.orchestrator.errors import BadRequest, IdentifyError, InternalError
from dishlens.orchestrator.identify import DishIdentifier

load_dotenv(dotenv_path="dishlens/.env", override=False)

app = FastAPI(title="dishlens api")

status = StatusStore(echo=True)

# Vision adapter: controlled by VISION_ADAPTER env var
# Values: gemini | claude | kimi | mock  (default: gemini)
# No fallback to mock: a missing key must surface as 503 at request time.
_vision_adapter = os.getenv("VISION_ADAPTER", "gemini").lower()

if _vision_adapter == "claude":
    from dishlens.adapters.vision.claude_vision import ClaudeVision
    vision = ClaudeVision(status)

elif _vision_adapter == "kimi":
    from dishlens.adapters.vision.kimi_vision import KimiVision
    vision = KimiVision(status)

elif _vision_adapter == "mock":
    from dishlens.adapters.vision.mock_vision import MockVision
    vision = MockVision(status)

else:
    from dishlens.adapters.vision.gemini_vision import GeminiVision
    vision = GeminiVision(status)

status.log(f"vision adapter: {type(vision).__name__}")

identifier = DishIdentifier(vision=vision, status_store=status)


def get_identifier() -> DishIdentifier:
    return identifier


@app.exception_handler(IdentifyError)
async def identify_error_handler(request: Request, exc: IdentifyError):
    status.last_error = exc.code
    status.log(f"IDENTIFY {exc.status_code} {exc.code}: {exc.detail}")
    # public message only; detail stays in the log
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


_ERROR_RESPONSES = {
    400: {"model": ErrorOut},
    422: {"model": ErrorOut},
    500: {"model": ErrorOut},
    503: {"model": ErrorOut},
}


@app.post("/api/identify", response_model=DishResultOut, responses=_ERROR_RESPONSES)
async def identify(request: Request, dish_identifier: DishIdentifier = Depends(get_identifier)):
    """Multipart upload with one `image` field -> normalized DishResult."""
    status.log("IDENTIFY received")
    try:
        form = await request.form()
    except (MultiPartException, StarletteHTTPException) as e:
        raise BadRequest(f"unreadable form body: {e}") from e

    image = form.get("image")
    if not isinstance(image, UploadFile):
        raise BadRequest("image field missing or not a file")
    image_bytes = await image.read()
    if not image_bytes:
        raise BadRequest("image field is empty")

    try:
        result = await run_in_threadpool(dish_identifier.identify, image_bytes, image.content_type)
    except IdentifyError:
        raise
    except Exception as e:
        status.log(f"IDENTIFY unexpected {type(e).__name__}: {e}")
        raise InternalError(f"{type(e).__name__}: {e}") from e

    status.requests_served += 1
    return DishResultOut.from_result(result)


@app.get("/health", response_model=HealthResponse)
def health():
    """Adapter wiring and whether its credential is currently set."""
    return HealthResponse(
        api=True,
        vision_adapter=type(vision).__name__,
        vision_configured=vision.configured(),
    )


@app.get("/status", response_model=StatusResponse)
def get_status():
    return StatusResponse(
        requests_served=status.requests_served,
        last_error=status.last_error,
        logs=status.recent(),
    )
