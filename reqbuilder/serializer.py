"""Export the builder state as a reusable JSON configuration, and load it back.

Document shape::

    {
      "apiUrl": str,
      "apiMethod": "GET" | "POST" | ...,
      "queryParams": [{"key": str, "value": str}, ...],
      "headers": [{"key": str, "value": str}, ...],
      "requestBody": str            # only for POST, PUT, PATCH
    }
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import orjson

from .entries import IdFactory, KeyValueList
from .exceptions import ReqBuilderConfigError
from .logging_config import get_logger
from .models import BuilderState, HttpMethod
from .settings import DEFAULT_EXPORT_FILENAME

logger = get_logger("serializer")


def _entries_document(entries: KeyValueList) -> list[dict[str, str]]:
    return [{"key": e.key, "value": e.value} for e in entries.non_empty()]


def serialize_state(state: BuilderState) -> dict[str, Any]:
    """Configuration document for state. Pure and deterministic; ids are not exported."""
    doc: dict[str, Any] = {
        "apiUrl": state.base_url,
        "apiMethod": state.method.value,
        "queryParams": _entries_document(state.query_params),
        "headers": _entries_document(state.headers),
    }
    if state.method.has_body:
        doc["requestBody"] = state.body_text
    return doc


def dumps_config(state: BuilderState) -> bytes:
    """Pretty-printed UTF-8 JSON (2-space indent, trailing newline)."""
    return orjson.dumps(serialize_state(state), option=orjson.OPT_INDENT_2 | orjson.OPT_APPEND_NEWLINE)


def export_config(state: BuilderState, path: str | Path | None = None) -> Path:
    """Write the configuration document to path (a directory gets api-config.json inside).

    Returns the file that was written.
    """
    p = Path(path) if path is not None else Path(DEFAULT_EXPORT_FILENAME)
    if p.is_dir():
        p = p / DEFAULT_EXPORT_FILENAME
    try:
        p.write_bytes(dumps_config(state))
    except OSError as e:
        logger.exception("Failed to write config file")
        raise ReqBuilderConfigError(
            f"Cannot write config file: {e}",
            context={"path": str(p)},
            original_error=e,
        ) from e
    logger.debug("Exported request configuration to %s", p)
    return p


def _parse_entries(raw: Any, name: str, id_factory: IdFactory | None) -> KeyValueList:
    if raw is None:
        return KeyValueList(id_factory=id_factory)
    if not isinstance(raw, list):
        raise ReqBuilderConfigError(f"{name} must be a list of {{key, value}} objects")
    pairs: list[tuple[str, str]] = []
    for item in raw:
        if not isinstance(item, dict) or "key" not in item:
            raise ReqBuilderConfigError(
                f"{name} entries must be objects with a key",
                context={"entry": item},
            )
        value = item.get("value")
        pairs.append((str(item["key"]), "" if value is None else str(value)))
    return KeyValueList(pairs, id_factory=id_factory)


def parse_config(document: Any, id_factory: IdFactory | None = None) -> BuilderState:
    """Rebuild a BuilderState from a configuration document. Entries get fresh ids."""
    if not isinstance(document, dict):
        raise ReqBuilderConfigError("Config must be a JSON object")
    url = document.get("apiUrl")
    if not isinstance(url, str):
        raise ReqBuilderConfigError("apiUrl must be a string")
    try:
        method = HttpMethod.parse(str(document.get("apiMethod") or "GET"))
    except ValueError as e:
        raise ReqBuilderConfigError(
            f"Unknown apiMethod: {document.get('apiMethod')!r}",
            original_error=e,
        ) from e
    body = document.get("requestBody")
    return BuilderState(
        method=method,
        base_url=url,
        query_params=_parse_entries(document.get("queryParams"), "queryParams", id_factory),
        headers=_parse_entries(document.get("headers"), "headers", id_factory),
        body_text="" if body is None else str(body),
    )


def load_config_document(path: str | Path, id_factory: IdFactory | None = None) -> BuilderState:
    """Load an exported configuration file.

    Raises:
        ReqBuilderConfigError: If the file is missing, unreadable, not JSON, or malformed
    """
    p = Path(path)
    if not p.exists():
        raise ReqBuilderConfigError(f"Config file not found: {path}", context={"path": str(path)})
    try:
        raw = orjson.loads(p.read_bytes())
    except orjson.JSONDecodeError as e:
        logger.exception("Invalid JSON in config file")
        raise ReqBuilderConfigError(
            f"Invalid JSON in config file: {e}",
            context={"path": str(path)},
            original_error=e,
        ) from e
    except OSError as e:
        logger.exception("Failed to read config file")
        raise ReqBuilderConfigError(
            f"Cannot read config file: {e}",
            context={"path": str(path)},
            original_error=e,
        ) from e
    try:
        return parse_config(raw, id_factory=id_factory)
    except ReqBuilderConfigError as e:
        raise e.with_context(path=str(path))
