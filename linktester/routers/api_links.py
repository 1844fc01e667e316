from __future__ import annotations

import logging

from fastapi import APIRouter, HTTPException

from ..links import (
    BASE_PREFIXES,
    BROWSER_LABELS,
    PATH_LITERALS,
    ROOM_ID_MAX_LENGTH,
    InvalidUrl,
    build_url,
    is_edit_rejected,
    sanitize_room_id,
)
from ..schemas import LinkBuildRequest, LinkOptionsOut, LinkOut, OptionOut, SanitizeOut, SanitizeRequest


router = APIRouter()
logger = logging.getLogger("linktester.api")


@router.get("/options", response_model=LinkOptionsOut)
def api_link_options():
    return LinkOptionsOut(
        base_modes=[OptionOut(value=m.value, literal=v) for m, v in BASE_PREFIXES.items()],
        paths=[OptionOut(value=p.value, literal=v) for p, v in PATH_LITERALS.items()],
        browsers=[OptionOut(value=b.value, literal=v) for b, v in BROWSER_LABELS.items()],
        room_id_max_length=ROOM_ID_MAX_LENGTH,
    )


@router.post("/build", response_model=LinkOut)
def api_build_link(payload: LinkBuildRequest):
    if is_edit_rejected(payload.room_id):
        raise HTTPException(
            status_code=400,
            detail=f"room_id must be at most {ROOM_ID_MAX_LENGTH} characters",
        )
    room_id = sanitize_room_id(payload.room_id)

    try:
        url = build_url(payload.base_mode, payload.path, room_id)
    except InvalidUrl as e:
        logger.warning("Failed to build link: %s", e)
        raise HTTPException(status_code=422, detail=str(e))

    return LinkOut(url=url, base_mode=payload.base_mode, path=payload.path, room_id=room_id)


@router.post("/sanitize", response_model=SanitizeOut)
def api_sanitize_room_id(payload: SanitizeRequest):
    return SanitizeOut(
        value=sanitize_room_id(payload.raw, payload.previous),
        rejected=is_edit_rejected(payload.raw),
    )
