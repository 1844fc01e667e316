from __future__ import annotations

import logging
from pathlib import Path


LOG_FILE_NAME = "linktester.log"
APP_LOGGERS = ("linktester", "linktester.ui", "linktester.api")

_FORMATTER = logging.Formatter(
    fmt="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)

_FILE_HANDLER: logging.FileHandler | None = None


def _safe_level(level: str | None, default: str = "INFO") -> int:
    raw = (level or default).strip().upper()
    if raw == "WARN":
        raw = "WARNING"
    value = logging.getLevelName(raw)
    return value if isinstance(value, int) else logging.INFO


def setup_logging(*, level: str = "INFO", log_dir: str | Path | None = None) -> Path | None:
    """Send logs to stdout and, when log_dir is set, to <log_dir>/linktester.log.

    Safe to call multiple times. Returns the log file path, if any.
    """

    global _FILE_HANDLER

    root = logging.getLogger()
    if not any(isinstance(h, logging.StreamHandler) for h in root.handlers):
        sh = logging.StreamHandler()
        sh.setFormatter(_FORMATTER)
        root.addHandler(sh)

    if log_dir and _FILE_HANDLER is None:
        path = Path(log_dir) / LOG_FILE_NAME
        path.parent.mkdir(parents=True, exist_ok=True)
        fh = logging.FileHandler(path, encoding="utf-8")
        fh.setFormatter(_FORMATTER)
        root.addHandler(fh)
        _FILE_HANDLER = fh

    # Let uvicorn's loggers reach the same handlers.
    for name in ("uvicorn", "uvicorn.error", "uvicorn.access"):
        logging.getLogger(name).propagate = True

    apply_log_level(level)
    return Path(_FILE_HANDLER.baseFilename) if _FILE_HANDLER is not None else None


def apply_log_level(level: str) -> None:
    """Update log levels at runtime."""
    lvl = _safe_level(level)
    logging.getLogger().setLevel(lvl)
    for name in APP_LOGGERS:
        logging.getLogger(name).setLevel(lvl)
