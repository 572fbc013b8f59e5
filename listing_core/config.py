"""Configuration helpers for the listing viewer."""
from __future__ import annotations

from dataclasses import dataclass
import logging
import os
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

LOGGER = logging.getLogger(__name__)

PROJECT_ROOT = Path(__file__).resolve().parent.parent
DEFAULT_DATA_PATH = PROJECT_ROOT / "data" / "airbnb_with_photos.json"

_TRUTHY = {"1", "true", "yes", "on"}
_LOG_LEVELS = {"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"}


@dataclass(frozen=True)
class AppSettings:
    """Runtime settings for the web application."""

    data_path: Path = DEFAULT_DATA_PATH
    host: str = "127.0.0.1"
    port: int = 3000
    preview_limit: int = 20
    log_level: str = "INFO"
    debug: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {
            "data_path": str(self.data_path),
            "host": self.host,
            "port": self.port,
            "preview_limit": self.preview_limit,
            "log_level": self.log_level,
            "debug": self.debug,
        }


def _parse_int(value: Optional[str], default: int, name: str) -> int:
    if value is None or not value.strip():
        return default
    try:
        return int(value.strip())
    except ValueError:
        LOGGER.warning("Ignoring invalid %s=%r, using %s", name, value, default)
        return default


def _parse_log_level(value: Optional[str]) -> str:
    if value is None or not value.strip():
        return "INFO"
    level = value.strip().upper()
    if level not in _LOG_LEVELS:
        LOGGER.warning("Ignoring invalid LOG_LEVEL=%r, using INFO", value)
        return "INFO"
    return level


def _resolve_path(value: Optional[str]) -> Path:
    if not value:
        return DEFAULT_DATA_PATH
    path = Path(value).expanduser()
    if not path.is_absolute():
        path = PROJECT_ROOT / path
    return path


def load_settings(environ: Mapping[str, str] | None = None) -> AppSettings:
    """Build :class:`AppSettings` from environment variables."""

    env = os.environ if environ is None else environ
    return AppSettings(
        data_path=_resolve_path(env.get("LISTINGS_DATA_PATH")),
        host=env.get("HOST") or "127.0.0.1",
        port=_parse_int(env.get("PORT"), 3000, "PORT"),
        preview_limit=_parse_int(env.get("PREVIEW_LIMIT"), 20, "PREVIEW_LIMIT"),
        log_level=_parse_log_level(env.get("LOG_LEVEL")),
        debug=(env.get("FLASK_DEBUG") or "").strip().lower() in _TRUTHY,
    )
