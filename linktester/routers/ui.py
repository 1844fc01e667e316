from __future__ import annotations

import logging
from pathlib import Path

from fastapi import APIRouter, Request
from fastapi.responses import HTMLResponse, RedirectResponse
from fastapi.templating import Jinja2Templates

from ..config import get_settings
from ..links import (
    BASE_PREFIXES,
    BROWSER_LABELS,
    PATH_LITERALS,
    ROOM_ID_MAX_LENGTH,
    BrowserTarget,
    InvalidUrl,
)
from ..state import LINK_STATE_SESSION_KEY, LinkState, merge_state_params
from ..version import APP_VERSION


router = APIRouter(include_in_schema=False)


templates_dir = Path(__file__).resolve().parent.parent / "templates"
templates = Jinja2Templates(directory=str(templates_dir))

templates.env.globals["app_version"] = APP_VERSION

# Cache-busting for static assets.
static_dir = Path(__file__).resolve().parent.parent / "static"
try:
    css_mtime = (static_dir / "css" / "styles.css").stat().st_mtime
    js_mtime = (static_dir / "js" / "main.js").stat().st_mtime
    templates.env.globals["static_version"] = str(int(max(css_mtime, js_mtime)))
except OSError:
    templates.env.globals["static_version"] = "1"


settings = get_settings()
logger = logging.getLogger("linktester.ui")


def _redirect(url: str) -> RedirectResponse:
    return RedirectResponse(url=url, status_code=303)


def _current_state(request: Request) -> LinkState:
    return LinkState.from_session(request.session.get(LINK_STATE_SESSION_KEY))


def _store_state(request: Request, state: LinkState) -> None:
    request.session[LINK_STATE_SESSION_KEY] = state.as_session()


def _open_button_label(browser: BrowserTarget) -> str:
    return f"Open in {BROWSER_LABELS[browser]}"


def _template_context(state: LinkState, **extra) -> dict:
    url = None
    error = extra.pop("error", None)
    try:
        url = state.url
    except InvalidUrl as e:
        error = error or str(e)

    return {
        "app_name": settings.app.name,
        "state": state,
        "url": url,
        "error": error,
        "base_modes": BASE_PREFIXES,
        "paths": PATH_LITERALS,
        "browsers": BROWSER_LABELS,
        "room_id_max_length": ROOM_ID_MAX_LENGTH,
        "open_label": _open_button_label(state.browser),
        **extra,
    }


def _debug_status(url: str, browser: BrowserTarget) -> None:
    logger.debug("url: %s has been passed to %s", url, BROWSER_LABELS[browser])


@router.get("/", response_class=HTMLResponse)
def index(request: Request):
    state = _current_state(request)
    return templates.TemplateResponse(request, "index.html", _template_context(state))


@router.post("/state")
async def update_state(request: Request):
    form = await request.form()
    _, new_session = merge_state_params(form, request.session.get(LINK_STATE_SESSION_KEY))
    request.session[LINK_STATE_SESSION_KEY] = new_session
    logger.debug("Link state updated: %s", new_session)
    return _redirect("/")


@router.get("/state/reset")
def reset_state(request: Request):
    _store_state(request, LinkState())
    return _redirect("/")


@router.get("/open")
def open_link(request: Request):
    state = _current_state(request)
    try:
        url = state.url
    except InvalidUrl as e:
        logger.warning("Refusing to open link: %s", e)
        return templates.TemplateResponse(
            request,
            "index.html",
            _template_context(state, error=str(e)),
            status_code=422,
        )

    _debug_status(url, state.browser)
    if state.browser is BrowserTarget.in_app:
        return _redirect("/browser")
    return _redirect(url)


@router.get("/browser", response_class=HTMLResponse)
def in_app_browser(request: Request):
    state = _current_state(request)
    return templates.TemplateResponse(request, "browser.html", _template_context(state))


@router.get("/share", response_class=HTMLResponse)
def share(request: Request):
    state = _current_state(request)
    return templates.TemplateResponse(request, "share.html", _template_context(state))


@router.get("/app-store")
def app_store():
    return _redirect(settings.links.app_store_url)
