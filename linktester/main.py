from __future__ import annotations

import logging
from pathlib import Path

from fastapi import FastAPI
from fastapi.staticfiles import StaticFiles
from starlette.middleware.sessions import SessionMiddleware

from .config import get_settings
from .logging_setup import setup_logging
from .routers import api_links, ui
from .version import APP_VERSION


settings = get_settings()

log_file = setup_logging(level=settings.logging.level, log_dir=settings.logging.dir or None)
logger = logging.getLogger("linktester")


app = FastAPI(title=settings.app.name, version=APP_VERSION)

# The session cookie is the only state container; it holds the current link selection.
app.add_middleware(SessionMiddleware, secret_key=settings.security.session_secret)

static_path = Path(__file__).resolve().parent / "static"
app.mount("/static", StaticFiles(directory=str(static_path)), name="static")

app.include_router(api_links.router, prefix="/api/links", tags=["links"])
app.include_router(ui.router)


@app.on_event("startup")
def on_startup() -> None:
    logger.info("%s %s started", settings.app.name, APP_VERSION)
    if log_file is not None:
        logger.info("Writing logs to %s", log_file)


@app.get("/healthz", include_in_schema=False)
def healthz():
    return {"status": "ok", "version": APP_VERSION}
