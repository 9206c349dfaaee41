"""Turn a BuilderState into an OutboundRequest.

Pure: no I/O, no validation of the URL or the body. A malformed URL is only
discovered when the transport tries to send it.
"""

from __future__ import annotations

from urllib.parse import urlencode

from .entries import KeyValueList
from .models import BuilderState, OutboundRequest


def build_query_string(params: KeyValueList) -> str:
    """application/x-www-form-urlencoded query for the non-blank keys.

    Repeated keys keep the last value at the position of the first occurrence.
    """
    merged: dict[str, str] = {}
    for entry in params.non_empty():
        merged[entry.key] = entry.value
    return urlencode(merged)


def build_url(base_url: str, params: KeyValueList) -> str:
    qs = build_query_string(params)
    return f"{base_url}?{qs}" if qs else base_url


def build_headers(headers: KeyValueList) -> dict[str, str]:
    """Ordered header mapping from the non-blank rows.

    Names are compared case-insensitively; a later row overwrites the value
    and spelling of an earlier one but keeps its position.
    """
    result: dict[str, str] = {}
    spelled: dict[str, str] = {}
    for entry in headers.non_empty():
        name = entry.key.strip()
        lower = name.lower()
        previous = spelled.get(lower)
        if previous is not None and previous != name:
            result = {(name if k == previous else k): v for k, v in result.items()}
        spelled[lower] = name
        result[name] = entry.value
    return result


def build_body(state: BuilderState) -> str | None:
    """Raw body text for body-bearing methods, None otherwise or when blank."""
    if state.method.has_body and state.body_text.strip():
        return state.body_text
    return None


def assemble(state: BuilderState) -> OutboundRequest:
    return OutboundRequest(
        url=build_url(state.base_url, state.query_params),
        method=state.method,
        headers=build_headers(state.headers),
        body=build_body(state),
    )
