"""
Browser front end: the single-page dish identifier plus its static assets,
with the API app mounted underneath so /api/identify is same-origin.

    uvicorn dishlens.web.app:app --reload
"""
import os
from pathlib import Path

import uvicorn
from fastapi import FastAPI
from fastapi.responses import FileResponse
from fastapi.staticfiles import StaticFiles

from dishlens.services.api import app as api_app

WEB_DIR = Path(__file__).resolve().parent
INDEX_HTML = WEB_DIR / "templates" / "index.html"


def create_app() -> FastAPI:
    web = FastAPI(title="dishlens web")

    @web.get("/", include_in_schema=False)
    def index():
        return FileResponse(INDEX_HTML, media_type="text/html")

    web.mount("/static", StaticFiles(directory=str(WEB_DIR / "static")), name="static")
    # API goes last: the "" prefix matches everything
    web.mount("", api_app)
    return web


app = create_app()


if __name__ == "__main__":
    uvicorn.run(app, host=os.getenv("HOST", "127.0.0.1"), port=int(os.getenv("PORT", "8000")))
