"""Rich rendering of the request being built and of the latest result."""

from __future__ import annotations

from rich.console import Group, RenderableType
from rich.panel import Panel
from rich.syntax import Syntax
from rich.table import Table
from rich.text import Text

from .assembler import assemble
from .models import BuilderState, Failure, FailureKind, Pending, ResultState, Success
from .session import format_response

# Header values hidden in the request summary (case-insensitive)
SENSITIVE_HEADER_NAMES = frozenset(
    k.lower()
    for k in (
        "Authorization",
        "Cookie",
        "X-Api-Key",
        "X-Auth-Token",
        "Api-Key",
        "Proxy-Authorization",
    )
)
REDACTED_PLACEHOLDER = "[REDACTED]"
IDLE_HINT = "Send a request to see the response here."


def mask_header_value(name: str, value: str) -> str:
    return REDACTED_PLACEHOLDER if name.strip().lower() in SENSITIVE_HEADER_NAMES else value


def _entries_table(title: str, rows: list[tuple[str, str, str]]) -> Table:
    table = Table(title=title, title_justify="left", expand=True)
    table.add_column("id", style="dim", no_wrap=True)
    table.add_column("Key", style="cyan")
    table.add_column("Value", style="green")
    for row in rows:
        table.add_row(*row)
    return table


def render_state(state: BuilderState, reveal_secrets: bool = False) -> RenderableType:
    """Editable view: method, URL, both entry lists, body and the final URL."""
    header = Text()
    header.append(f"{state.method.value} ", style="bold magenta")
    header.append(state.base_url or "<no url>", style="bold")

    params = _entries_table(
        "Query Parameters",
        [(str(e.id), e.key, e.value) for e in state.query_params],
    )
    headers = _entries_table(
        "Headers",
        [
            (str(e.id), e.key, e.value if reveal_secrets else mask_header_value(e.key, e.value))
            for e in state.headers
        ],
    )
    parts: list[RenderableType] = [header, params, headers]
    if state.method.has_body:
        if state.body_text.strip():
            parts.append(Panel(Syntax(state.body_text, "json", word_wrap=True), title="Request Body (JSON)"))
        else:
            parts.append(Text("Request Body (JSON): <empty>", style="dim"))
    parts.append(Text(f"-> {assemble(state).url}", style="dim"))
    return Panel(Group(*parts), title="Request Configuration", border_style="blue")


def render_result(result: ResultState) -> RenderableType:
    """Response panel for whichever result state is active."""
    if isinstance(result, Pending):
        return Panel(Text("Loading response...", style="yellow"), title="Response", border_style="yellow")
    if isinstance(result, Success):
        subtitle = f"{result.elapsed_ms:.1f} ms" if result.elapsed_ms else None
        style = "green" if 200 <= result.status < 400 else "yellow"
        return Panel(
            Syntax(format_response(result), "json", word_wrap=True),
            title=f"Response Data: {result.status} {result.status_text}",
            subtitle=subtitle,
            border_style=style,
        )
    if isinstance(result, Failure):
        body = Text()
        body.append("Error: ", style="bold red")
        body.append(result.message)
        if result.kind == FailureKind.PARSE and result.status is not None:
            body.append(f"\nHTTP {result.status} {result.status_text or ''}".rstrip(), style="dim")
        return Panel(body, title="Response", border_style="red")
    return Panel(Text(IDLE_HINT, style="italic dim"), title="Response", border_style="dim")
