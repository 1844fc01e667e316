from __future__ import annotations

from pydantic import BaseModel, Field

from .links import ROOM_ID_PATTERN, BaseMode, PathSegment


class LinkBuildRequest(BaseModel):
    base_mode: BaseMode = BaseMode.https_universal_link
    path: PathSegment = PathSegment.root
    room_id: str = Field(default="", max_length=255)


class LinkOut(BaseModel):
    url: str
    base_mode: BaseMode
    path: PathSegment
    room_id: str


class SanitizeRequest(BaseModel):
    raw: str = Field(default="", max_length=255)
    # Must already be a sanitized id; it is echoed back on a rejected edit.
    previous: str = Field(default="", pattern=ROOM_ID_PATTERN)


class SanitizeOut(BaseModel):
    value: str
    rejected: bool = False


class OptionOut(BaseModel):
    value: str
    literal: str


class LinkOptionsOut(BaseModel):
    base_modes: list[OptionOut]
    paths: list[OptionOut]
    browsers: list[OptionOut]
    room_id_max_length: int
