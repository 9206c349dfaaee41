"""Pytest fixtures for reqbuilder tests."""

from __future__ import annotations

import io
from pathlib import Path
from typing import Callable

import httpx
import pytest
from rich.console import Console

from reqbuilder.entries import CounterIds
from reqbuilder.executor import RequestExecutor, create_client
from reqbuilder.settings import AppSettings

Handler = Callable[[httpx.Request], httpx.Response]


def make_executor(handler: Handler) -> RequestExecutor:
    """Executor whose client answers through handler instead of the network."""
    client = create_client(AppSettings(http2=False), transport=httpx.MockTransport(handler))
    return RequestExecutor(client=client)


def echo_handler(request: httpx.Request) -> httpx.Response:
    """Returns method, url, headers and body of the request as JSON."""
    return httpx.Response(
        200,
        json={
            "method": request.method,
            "url": str(request.url),
            "headers": dict(request.headers),
            "body": request.content.decode("utf-8"),
        },
    )


@pytest.fixture
def executor_for() -> Callable[[Handler], RequestExecutor]:
    """Factory fixture: executor_for(handler) -> RequestExecutor on a mock transport."""
    return make_executor


@pytest.fixture
def echo_executor() -> RequestExecutor:
    return make_executor(echo_handler)


@pytest.fixture
def ids() -> CounterIds:
    return CounterIds()


@pytest.fixture
def console() -> Console:
    """Console writing to memory; read it back with console.file.getvalue()."""
    return Console(file=io.StringIO(), width=120, color_system=None)


@pytest.fixture
def settings_path(tmp_path: Path) -> Path:
    """Minimal valid settings YAML."""
    p = tmp_path / "settings.yaml"
    p.write_text(
        """
timeout_seconds: 5
http2: false
follow_redirects: false
export_filename: request.json
""",
        encoding="utf-8",
    )
    return p
