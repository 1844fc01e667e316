import pytest

from linktester.links import (
    BASE_PREFIXES,
    PATH_LITERALS,
    BaseMode,
    InvalidUrl,
    PathSegment,
    ROOM_ID_PATTERN,
    build_url,
    is_valid_room_id,
    parse_url,
    quote_url,
    sanitize_room_id,
)


def test_build_url_https_root():
    assert build_url(BaseMode.https_universal_link, PathSegment.root, "") == "https://cocopen.net/"


def test_build_url_custom_scheme_entrance():
    url = build_url(BaseMode.custom_uri_scheme, PathSegment.entrance, "")
    assert url == quote_url("cocopen:/entrance")
    assert url == "cocopen:/entrance"


@pytest.mark.parametrize("mode", list(BaseMode))
@pytest.mark.parametrize("path", [PathSegment.root, PathSegment.entrance])
def test_build_url_ignores_room_id_outside_room_path(mode, path):
    expected = BASE_PREFIXES[mode] + PATH_LITERALS[path]
    assert build_url(mode, path, "") == expected
    assert build_url(mode, path, "abc12") == expected


def test_build_url_room_without_id_ends_at_room():
    assert build_url(BaseMode.https_universal_link, PathSegment.room, "") == "https://cocopen.net/room"
    assert build_url(BaseMode.custom_uri_scheme, PathSegment.room, "") == "cocopen:/room"


def test_build_url_room_with_sanitized_id():
    room_id = sanitize_room_id("AbC12")
    assert room_id == "abc12"
    assert build_url(BaseMode.https_universal_link, PathSegment.room, room_id) == "https://cocopen.net/room/abc12"
    assert build_url(BaseMode.custom_uri_scheme, PathSegment.room, room_id) == "cocopen:/room/abc12"


def test_build_url_accepts_string_values():
    assert build_url("custom_uri_scheme", "room", "r1") == "cocopen:/room/r1"


def test_build_url_rejects_unknown_selection():
    with pytest.raises(ValueError):
        build_url("ftp", PathSegment.root)
    with pytest.raises(ValueError):
        build_url(BaseMode.https_universal_link, "lobby")


def test_build_url_percent_encodes_unsafe_room_id():
    # Unsanitized input still produces a parseable URL.
    url = build_url(BaseMode.https_universal_link, PathSegment.room, "a b#")
    assert url == "https://cocopen.net/room/a%20b%23"
    assert parse_url(url).path == "/room/a%20b%23"


def test_quote_url_keeps_query_safe_characters():
    assert quote_url("https://cocopen.net/a-b_c.d~e?x=1&y=2") == "https://cocopen.net/a-b_c.d~e?x=1&y=2"
    assert quote_url("100%") == "100%25"
    assert quote_url("방") == "%EB%B0%A9"


def test_parse_url_rejects_missing_scheme():
    with pytest.raises(InvalidUrl) as exc:
        parse_url("cocopen.net/room")
    assert "missing scheme" in str(exc.value)


def test_parse_url_rejects_unparseable():
    with pytest.raises(InvalidUrl):
        parse_url("http://[::1")


def test_parse_url_accepts_custom_scheme():
    parts = parse_url("cocopen:/room/abc12")
    assert parts.scheme == "cocopen"
    assert parts.path == "/room/abc12"


def test_sanitize_room_id_lowercases_and_strips_interior():
    assert sanitize_room_id("AbC12") == "abc12"
    assert sanitize_room_id("ab cd!#1") == "abcd1"
    assert sanitize_room_id(" a-b ") == "ab"
    assert sanitize_room_id("한글ab") == "ab"
    assert sanitize_room_id("ABCDEFGH") == "abcdefgh"


def test_sanitize_room_id_rejects_overlong_edit():
    assert sanitize_room_id("ab cd!#12345678extra", "abcd") == "abcd"
    assert sanitize_room_id("123456789", "") == ""
    # The previous value is returned untouched.
    assert sanitize_room_id("123456789", "prev") == "prev"


def test_sanitize_room_id_length_is_checked_before_filtering():
    # Nine raw characters are rejected even though only two survive filtering.
    assert sanitize_room_id("a-------b", "x") == "x"


def test_sanitize_room_id_handles_empty_input():
    assert sanitize_room_id("", "abc") == ""
    assert sanitize_room_id(None, "abc") == ""


@pytest.mark.parametrize("raw", ["AbC12", "ab cd!#1", "", "한글ab", "ABCDEFGH", "ab cd!#12345678extra"])
def test_sanitize_room_id_is_idempotent(raw):
    once = sanitize_room_id(raw, "prev")
    assert sanitize_room_id(once, once) == once
    assert len(once) <= 8


def test_is_valid_room_id():
    assert is_valid_room_id("")
    assert is_valid_room_id("abc12")
    assert is_valid_room_id("abcdefgh")
    assert not is_valid_room_id("abcdefghi")
    assert not is_valid_room_id("A B")
    assert not is_valid_room_id("abc\n")
    assert not is_valid_room_id(None)
    assert ROOM_ID_PATTERN == "^[a-z0-9]{0,8}$"


@pytest.mark.parametrize("raw", ["AbC12", "123456789", "a b", ""])
def test_sanitize_room_id_output_is_valid_for_valid_previous(raw):
    assert is_valid_room_id(sanitize_room_id(raw, "abc12"))
