"""Dispatch an OutboundRequest over httpx and normalize the outcome.

- execute_request: single request, never raises, returns Success or Failure
- create_client: async HTTP client factory built from AppSettings
- RequestExecutor: owns one client for the lifetime of a session

Any HTTP response counts as delivered, 4xx/5xx included. A response whose body
is not JSON becomes a PARSE failure that still carries the status line.
"""

from __future__ import annotations

import time

import httpx
import orjson

from .logging_config import get_logger
from .models import Failure, FailureKind, OutboundRequest, Success
from .settings import AppSettings

logger = get_logger("executor")

NS_TO_MS = 1_000_000


def _transport_message(exc: BaseException) -> str:
    # Some httpx errors carry no text (e.g. bare timeouts)
    text = str(exc).strip()
    return text or type(exc).__name__


def _status_text(response: httpx.Response) -> str:
    return response.reason_phrase or httpx.codes.get_reason_phrase(response.status_code)


async def execute_request(
    client: httpx.AsyncClient,
    req: OutboundRequest,
) -> Success | Failure:
    """Send req and map the outcome to a result state.

    Args:
        client: Async HTTP client (transport)
        req: Assembled request

    Returns:
        Success with the parsed JSON body, or Failure with a readable message

    Note:
        This never raises; cancellation still propagates.
    """
    content = req.body.encode("utf-8") if req.body is not None else None
    start_ns = time.perf_counter_ns()
    try:
        response = await client.request(
            req.method.value,
            req.url,
            headers=req.headers,
            content=content,
        )
    except Exception as e:  # noqa: BLE001
        logger.warning("%s %s failed: %s", req.method.value, req.url, e)
        return Failure(message=_transport_message(e), kind=FailureKind.TRANSPORT)
    elapsed_ms = (time.perf_counter_ns() - start_ns) / NS_TO_MS

    status_text = _status_text(response)
    logger.debug(
        "%s %s -> %d %s (%.1f ms)",
        req.method.value, req.url, response.status_code, status_text, elapsed_ms,
    )
    try:
        data = orjson.loads(response.content)
    except orjson.JSONDecodeError as e:
        logger.warning("Response from %s is not valid JSON: %s", req.url, e)
        return Failure(
            message=f"Response body is not valid JSON: {e}",
            kind=FailureKind.PARSE,
            status=response.status_code,
            status_text=status_text,
        )
    return Success(
        status=response.status_code,
        status_text=status_text,
        data=data,
        elapsed_ms=elapsed_ms,
    )


def create_client(
    settings: AppSettings | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> httpx.AsyncClient:
    """Create the async HTTP client used for dispatch.

    Args:
        settings: Timeout, HTTP/2, redirect and TLS options (defaults if None)
        transport: Optional custom transport (e.g. httpx.MockTransport in tests)
    """
    settings = settings or AppSettings()
    return httpx.AsyncClient(
        http2=settings.http2,
        timeout=settings.timeout_seconds,
        follow_redirects=settings.follow_redirects,
        verify=settings.verify_ssl,
        transport=transport,
    )


class RequestExecutor:
    """Holds one AsyncClient and executes requests through it.

    Use as an async context manager, or call aclose() when done.
    """

    def __init__(
        self,
        client: httpx.AsyncClient | None = None,
        settings: AppSettings | None = None,
    ) -> None:
        self._client = client
        self._settings = settings or AppSettings()

    @property
    def client(self) -> httpx.AsyncClient:
        # Created lazily so the executor can be built outside a running loop
        if self._client is None:
            self._client = create_client(self._settings)
        return self._client

    async def execute(self, req: OutboundRequest) -> Success | Failure:
        return await execute_request(self.client, req)

    async def aclose(self) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> "RequestExecutor":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()
