"""Data models for reqbuilder.

- Entry: one editable key/value row with a stable id
- BuilderState: the in-progress request being edited
- OutboundRequest: immutable snapshot handed to the transport
- Idle / Pending / Success / Failure: the mutually exclusive result states
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Any, Union

if TYPE_CHECKING:
    from .entries import KeyValueList


class HttpMethod(str, Enum):
    """HTTP verbs offered by the builder."""

    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    PATCH = "PATCH"
    DELETE = "DELETE"
    OPTIONS = "OPTIONS"
    HEAD = "HEAD"

    @classmethod
    def parse(cls, value: str) -> "HttpMethod":
        """Case-insensitive lookup. Raises ValueError for unknown verbs."""
        return cls((value or "").strip().upper())

    @property
    def has_body(self) -> bool:
        return self in BODY_METHODS


# Methods for which the request body is sent
BODY_METHODS = frozenset({HttpMethod.POST, HttpMethod.PUT, HttpMethod.PATCH})

ENTRY_FIELDS = ("key", "value")


@dataclass(frozen=True, slots=True)
class Entry:
    """A single key/value row. Immutable: updates produce a new Entry with the same id."""

    id: Any
    key: str = ""
    value: str = ""


@dataclass(slots=True)
class BuilderState:
    """Complete in-progress description of the request being constructed.

    body_text is kept for every method but only sent for POST, PUT and PATCH.
    """

    method: HttpMethod
    base_url: str
    query_params: KeyValueList
    headers: KeyValueList
    body_text: str = ""


@dataclass(frozen=True, slots=True)
class OutboundRequest:
    """Finalized request descriptor ready for dispatch.

    url already contains the encoded query string; body is None when no body
    is sent.
    """

    url: str
    method: HttpMethod
    headers: dict[str, str] = field(default_factory=dict)
    body: str | None = None


class FailureKind(str, Enum):
    """Why a dispatch failed."""

    TRANSPORT = "transport"  # network, DNS, bad URL, timeout
    PARSE = "parse"  # response received but body is not JSON


@dataclass(frozen=True, slots=True)
class Idle:
    """Nothing sent yet (or state was reset)."""


@dataclass(frozen=True, slots=True)
class Pending:
    """A request is in flight."""


@dataclass(frozen=True, slots=True)
class Success:
    """Response received and parsed as JSON. Any status code counts, 4xx/5xx included."""

    status: int
    status_text: str
    data: Any
    elapsed_ms: float = 0.0

    def to_document(self) -> dict[str, Any]:
        """Displayed response document: {status, statusText, data}."""
        return {"status": self.status, "statusText": self.status_text, "data": self.data}


@dataclass(frozen=True, slots=True)
class Failure:
    """Dispatch failed. status/status_text are set only when a response arrived but could not be parsed."""

    message: str
    kind: FailureKind = FailureKind.TRANSPORT
    status: int | None = None
    status_text: str | None = None


ResultState = Union[Idle, Pending, Success, Failure]
