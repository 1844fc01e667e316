from __future__ import annotations

import argparse
import sys

from .links import (
    ROOM_ID_MAX_LENGTH,
    BaseMode,
    InvalidUrl,
    PathSegment,
    build_url,
    is_edit_rejected,
    is_valid_room_id,
    sanitize_room_id,
)


SCHEME_CHOICES = {
    "https": BaseMode.https_universal_link,
    "uri": BaseMode.custom_uri_scheme,
}


def _build(args: argparse.Namespace) -> int:
    if is_edit_rejected(args.room_id):
        print(f"error: room id must be at most {ROOM_ID_MAX_LENGTH} characters", file=sys.stderr)
        return 2

    room_id = sanitize_room_id(args.room_id)
    try:
        print(build_url(SCHEME_CHOICES[args.scheme], args.path, room_id))
    except InvalidUrl as e:
        print(f"error: {e}", file=sys.stderr)
        return 1
    return 0


def _sanitize(args: argparse.Namespace) -> int:
    if not is_valid_room_id(args.previous):
        print(
            f"error: --previous must be a sanitized room id ([a-z0-9], at most {ROOM_ID_MAX_LENGTH} characters)",
            file=sys.stderr,
        )
        return 2
    print(sanitize_room_id(args.raw, args.previous))
    return 0


def _serve(args: argparse.Namespace) -> int:
    from .run import main as run_main

    run_main()
    return 0


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(prog="linktester")
    sub = parser.add_subparsers(dest="command", required=True)

    p_build = sub.add_parser("build", help="Print the link for a selection.")
    p_build.add_argument(
        "--scheme",
        choices=sorted(SCHEME_CHOICES),
        default="https",
        help="https universal link or custom URI scheme (default: https)",
    )
    p_build.add_argument(
        "--path",
        choices=[p.value for p in PathSegment],
        default=PathSegment.root.value,
        help="Path segment (default: root)",
    )
    p_build.add_argument(
        "--room-id",
        default="",
        help="Room id, only used with --path room.",
    )
    p_build.set_defaults(func=_build)

    p_sanitize = sub.add_parser("sanitize", help="Normalize a room id edit.")
    p_sanitize.add_argument("raw")
    p_sanitize.add_argument(
        "--previous",
        default="",
        help="Value to keep when the edit is too long.",
    )
    p_sanitize.set_defaults(func=_sanitize)

    p_serve = sub.add_parser("serve", help="Run the web tester.")
    p_serve.set_defaults(func=_serve)

    args = parser.parse_args(argv)
    code = args.func(args)
    if code:
        sys.exit(code)


if __name__ == "__main__":
    main()
