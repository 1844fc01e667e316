from __future__ import annotations

import os
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict

import yaml
from pydantic import BaseModel, Field


DEFAULT_SETTINGS_PATH = "settings.yml"

DEFAULT_APP_STORE_URL = "https://apps.apple.com/kr/app/cocopen/id1544024422"

# (env var, section, field). Later entries win.
ENV_OVERRIDES = (
    ("LINKTESTER_SESSION_SECRET", "security", "session_secret"),
    ("LINKTESTER_APP_STORE_URL", "links", "app_store_url"),
    ("LINKTESTER_LOG_LEVEL", "logging", "level"),
    ("LINKTESTER_PORT", "app", "port"),
    ("PORT", "app", "port"),
)


class AppSettings(BaseModel):
    name: str = "Universal Link Test"
    host: str = "0.0.0.0"  # nosec B104
    port: int = 8888


class SecuritySettings(BaseModel):
    session_secret: str = "CHANGE_ME_SESSION_SECRET"


class LinksSettings(BaseModel):
    # Fixed outbound link; independent of the link builder.
    app_store_url: str = DEFAULT_APP_STORE_URL


class LoggingSettings(BaseModel):
    level: str = "INFO"

    # Directory for linktester.log. Empty logs to stdout only.
    dir: str = ""


class Settings(BaseModel):
    app: AppSettings = Field(default_factory=AppSettings)
    security: SecuritySettings = Field(default_factory=SecuritySettings)
    links: LinksSettings = Field(default_factory=LinksSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)


def read_settings_file(path: str | Path) -> Dict[str, Any]:
    """Return the raw mapping in path, or {} when the file does not exist."""
    p = Path(path)
    if not p.is_file():
        return {}
    data = yaml.safe_load(p.read_text(encoding="utf-8")) or {}
    if not isinstance(data, dict):
        raise ValueError(f"{p} must contain a YAML mapping at the root")
    return data


def apply_env_overrides(data: Dict[str, Any], environ=os.environ) -> Dict[str, Any]:
    for env_name, section_name, field in ENV_OVERRIDES:
        value = str(environ.get(env_name) or "").strip()
        if not value:
            continue
        if field == "port" and not value.isdigit():
            # Ignore junk like PORT=auto rather than failing startup.
            continue
        section = data.setdefault(section_name, {})
        if isinstance(section, dict):
            section[field] = value
    return data


def load_settings(path: str | Path, environ=os.environ) -> Settings:
    return Settings.model_validate(apply_env_overrides(read_settings_file(path), environ))


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return load_settings(os.environ.get("LINKTESTER_SETTINGS", DEFAULT_SETTINGS_PATH))
