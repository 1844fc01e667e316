from __future__ import annotations

import enum
import re
from urllib.parse import SplitResult, quote, urlsplit


class BaseMode(str, enum.Enum):
    https_universal_link = "https_universal_link"
    custom_uri_scheme = "custom_uri_scheme"


class PathSegment(str, enum.Enum):
    root = "root"
    entrance = "entrance"
    room = "room"


class BrowserTarget(str, enum.Enum):
    system_default = "system_default"
    in_app = "in_app"


BASE_PREFIXES: dict[BaseMode, str] = {
    BaseMode.https_universal_link: "https://cocopen.net",
    BaseMode.custom_uri_scheme: "cocopen:/",
}

PATH_LITERALS: dict[PathSegment, str] = {
    PathSegment.root: "/",
    PathSegment.entrance: "/entrance",
    PathSegment.room: "/room",
}

BROWSER_LABELS: dict[BrowserTarget, str] = {
    BrowserTarget.system_default: "System Default",
    BrowserTarget.in_app: "In-App Browser",
}

ROOM_ID_MAX_LENGTH = 8

# Characters allowed unescaped in a URL query component (RFC 3986 pchar plus
# "/" and "?"). Letters, digits and "_.-~" are always kept by quote().
URL_QUERY_SAFE = "!$&'()*+,-./:;=?@_~"

_ROOM_ID_DISALLOWED_RE = re.compile(r"[^A-Za-z0-9]")
_ROOM_ID_RE = re.compile(rf"[a-z0-9]{{0,{ROOM_ID_MAX_LENGTH}}}")

# Anchored form for pydantic field patterns.
ROOM_ID_PATTERN = rf"^{_ROOM_ID_RE.pattern}$"


class InvalidUrl(ValueError):
    """The assembled link could not be parsed as a URL."""

    def __init__(self, url: str, reason: str = "") -> None:
        self.url = url
        self.reason = reason
        msg = f"Invalid URL: {url!r}"
        if reason:
            msg = f"{msg} ({reason})"
        super().__init__(msg)


def quote_url(text: str) -> str:
    """Percent-encode everything outside the URL query allowed set."""
    return quote(text, safe=URL_QUERY_SAFE)


def parse_url(url: str) -> SplitResult:
    """Parse url, raising InvalidUrl when it is unusable."""
    try:
        parts = urlsplit(url)
    except ValueError as e:
        raise InvalidUrl(url, str(e)) from e
    if not parts.scheme:
        raise InvalidUrl(url, "missing scheme")
    return parts


def build_url(base_mode: BaseMode | str, path_segment: PathSegment | str, room_id: str = "") -> str:
    """Assemble the link for the given selection.

    The room id is only used for the room path and is expected to be
    sanitized already (see sanitize_room_id). An empty id ends the URL at
    "/room".
    """
    mode = BaseMode(base_mode)
    path = PathSegment(path_segment)

    raw = BASE_PREFIXES[mode] + PATH_LITERALS[path]
    if path is PathSegment.room and room_id:
        raw += f"/{room_id}"

    url = quote_url(raw)
    parse_url(url)
    return url


def sanitize_room_id(raw: str, previous: str = "") -> str:
    """Normalize an edit of the room id field.

    Edits longer than ROOM_ID_MAX_LENGTH are discarded and the previous value
    is returned unchanged. Otherwise every character outside [A-Za-z0-9] is
    removed (not just at the edges) and the rest is lowercased.
    """
    text = str(raw or "")
    # len() counts code points, not grapheme clusters.
    if len(text) > ROOM_ID_MAX_LENGTH:
        return previous
    return _ROOM_ID_DISALLOWED_RE.sub("", text).lower()


def is_edit_rejected(raw: str) -> bool:
    return len(str(raw or "")) > ROOM_ID_MAX_LENGTH


def is_valid_room_id(value: str) -> bool:
    """True when value is already a sanitized room id."""
    return isinstance(value, str) and _ROOM_ID_RE.fullmatch(value) is not None
