"""YAML settings loader for the reqbuilder HTTP client."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml

from .exceptions import ReqBuilderConfigError
from .logging_config import get_logger, parse_level

logger = get_logger("settings")

DEFAULT_TIMEOUT_SEC = 30.0
DEFAULT_EXPORT_FILENAME = "api-config.json"


@dataclass(slots=True)
class AppSettings:
    """Transport and export settings. Defaults mirror a plain browser fetch."""

    timeout_seconds: float = DEFAULT_TIMEOUT_SEC
    http2: bool = True
    follow_redirects: bool = True
    verify_ssl: bool = True
    export_filename: str = DEFAULT_EXPORT_FILENAME
    log_level: str | None = None  # None keeps REQBUILDER_LOG_LEVEL / default


def validate_settings(s: AppSettings) -> None:
    """Validate AppSettings bounds. Raises ReqBuilderConfigError if invalid."""
    if s.timeout_seconds <= 0:
        raise ReqBuilderConfigError("timeout_seconds must be > 0")
    if not s.export_filename.strip():
        raise ReqBuilderConfigError("export_filename must not be empty")
    if s.log_level is not None:
        try:
            parse_level(s.log_level)
        except ValueError as e:
            raise ReqBuilderConfigError(f"log_level: {e}", original_error=e) from e


def load_settings(path: str | Path) -> AppSettings:
    """Load settings from a YAML file.

    Missing keys fall back to AppSettings defaults; an empty file yields defaults.

    Raises:
        ReqBuilderConfigError: If file not found, invalid YAML, or validation fails
    """
    p = Path(path)
    if not p.exists():
        raise ReqBuilderConfigError(
            f"Settings file not found: {path}",
            context={"path": str(path)},
        )

    try:
        raw = yaml.safe_load(p.read_text(encoding="utf-8"))
    except yaml.YAMLError as e:
        logger.exception("Failed to parse YAML settings file")
        raise ReqBuilderConfigError(
            f"Invalid YAML syntax in settings file: {e}",
            context={"path": str(path)},
            original_error=e,
        ) from e
    except OSError as e:
        logger.exception("Failed to read settings file")
        raise ReqBuilderConfigError(
            f"Cannot read settings file: {e}",
            context={"path": str(path)},
            original_error=e,
        ) from e

    if raw is None:
        raw = {}
    if not isinstance(raw, dict):
        raise ReqBuilderConfigError(
            "Settings must be a YAML object/dictionary",
            context={"path": str(path), "actual_type": type(raw).__name__},
        )

    defaults = AppSettings()
    try:
        settings = AppSettings(
            timeout_seconds=float(raw.get("timeout_seconds", defaults.timeout_seconds)),
            http2=_as_bool(raw, "http2", defaults.http2),
            follow_redirects=_as_bool(raw, "follow_redirects", defaults.follow_redirects),
            verify_ssl=_as_bool(raw, "verify_ssl", defaults.verify_ssl),
            export_filename=str(raw.get("export_filename") or defaults.export_filename),
            log_level=_as_str(raw, "log_level"),
        )
    except (TypeError, ValueError) as e:
        raise ReqBuilderConfigError(
            f"Invalid settings value: {e}",
            context={"path": str(path)},
            original_error=e,
        ) from e

    validate_settings(settings)
    logger.debug(
        "Loaded settings: timeout=%s, http2=%s, follow_redirects=%s",
        settings.timeout_seconds, settings.http2, settings.follow_redirects,
    )
    return settings


def _as_bool(data: dict[str, Any], key: str, default: bool) -> bool:
    v = data.get(key)
    if v is None:
        return default
    if isinstance(v, bool):
        return v
    raise ValueError(f"{key} must be true or false, got {v!r}")


def _as_str(data: dict[str, Any], key: str) -> str | None:
    v = data.get(key)
    if v is None:
        return None
    if isinstance(v, str):
        return v
    raise ValueError(f"{key} must be a string, got {v!r}")
