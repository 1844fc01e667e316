from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any

from .links import (
    BaseMode,
    BrowserTarget,
    PathSegment,
    ROOM_ID_MAX_LENGTH,
    build_url,
    sanitize_room_id,
)


# Session key for the tester's selection.
LINK_STATE_SESSION_KEY = "link_state"


def _coerce(enum_cls, value, default):
    if isinstance(value, enum_cls):
        return value
    try:
        return enum_cls(str(value or "").strip())
    except ValueError:
        return default


@dataclass(frozen=True)
class LinkState:
    """One snapshot of the tester's selection.

    Snapshots are never mutated; each event produces a new one which the
    caller stores in place of the old.
    """

    base_mode: BaseMode = BaseMode.https_universal_link
    path: PathSegment = PathSegment.root
    room_id: str = ""
    browser: BrowserTarget = BrowserTarget.system_default

    @property
    def url(self) -> str:
        return build_url(self.base_mode, self.path, self.room_id)

    def with_base_mode(self, base_mode: BaseMode | str) -> "LinkState":
        return replace(self, base_mode=BaseMode(base_mode))

    def with_path(self, path: PathSegment | str) -> "LinkState":
        return replace(self, path=PathSegment(path))

    def with_browser(self, browser: BrowserTarget | str) -> "LinkState":
        return replace(self, browser=BrowserTarget(browser))

    def with_room_id_edit(self, raw: str) -> "LinkState":
        return replace(self, room_id=sanitize_room_id(raw, self.room_id))

    def as_session(self) -> dict[str, str]:
        return {
            "base_mode": self.base_mode.value,
            "path": self.path.value,
            "room_id": self.room_id,
            "browser": self.browser.value,
        }

    @classmethod
    def from_session(cls, data: Any) -> "LinkState":
        """Restore a snapshot from session data, ignoring bad values."""
        if not isinstance(data, dict):
            return cls()

        room_id = str(data.get("room_id") or "")
        if len(room_id) > ROOM_ID_MAX_LENGTH:
            room_id = ""
        room_id = sanitize_room_id(room_id)

        return cls(
            base_mode=_coerce(BaseMode, data.get("base_mode"), BaseMode.https_universal_link),
            path=_coerce(PathSegment, data.get("path"), PathSegment.root),
            room_id=room_id,
            browser=_coerce(BrowserTarget, data.get("browser"), BrowserTarget.system_default),
        )


def merge_state_params(params, existing: Any) -> tuple[LinkState, dict[str, str]]:
    """Apply request parameters to the stored state.

    Rules:
      - A parameter that is present replaces the stored value.
      - Missing parameters keep the stored value.
      - Unknown enum values are ignored.
      - room_id is treated as an edit of the stored id, so an over-long
        value is discarded.
    """

    state = LinkState.from_session(existing)

    def _has(name: str) -> bool:
        try:
            return name in params
        except Exception:
            return False

    def _get(name: str) -> str:
        try:
            return str(params.get(name) or "")
        except Exception:
            return ""

    if _has("base_mode"):
        state = replace(state, base_mode=_coerce(BaseMode, _get("base_mode"), state.base_mode))

    if _has("path"):
        state = replace(state, path=_coerce(PathSegment, _get("path"), state.path))

    if _has("browser"):
        state = replace(state, browser=_coerce(BrowserTarget, _get("browser"), state.browser))

    if _has("room_id"):
        state = state.with_room_id_edit(_get("room_id"))

    return state, state.as_session()
