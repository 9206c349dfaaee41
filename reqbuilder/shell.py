"""Interactive command shell over a BuilderSession.

One command per line, e.g.::

    method POST
    url https://api.example.com/items
    param add limit 10
    header set 3 value Bearer abc
    body {"a": 1}
    send
"""

from __future__ import annotations

import shlex
from pathlib import Path
from typing import Any, Callable

from rich.console import Console
from rich.markup import escape

from .console import render_result, render_state
from .exceptions import ReqBuilderError, ShellCommandError
from .entries import KeyValueList
from .logging_config import get_logger
from .models import ENTRY_FIELDS, HttpMethod
from .session import BuilderSession

logger = get_logger("shell")

PROMPT = "reqbuilder> "
QUIT_COMMANDS = frozenset({"quit", "exit", "q"})

HELP_TEXT = """\
method VERB                      set the HTTP method ({methods})
url URL                          set the base URL
param add [KEY [VALUE]]          append a query parameter
param set ID key|value TEXT      edit one field of a query parameter
param rm ID                      remove a query parameter
param clear                      remove all query parameters
header add|set|rm|clear ...      same as param, for headers
body TEXT | body @FILE           set the raw request body (empty to clear)
show                             show the request being built
send                             send the request and show the response
export [PATH]                    write the request as api-config.json
load PATH                        load an exported request configuration
example                          load the demonstration request
reset                            back to the startup request
help                             this text
quit                             leave the shell""".format(
    methods=", ".join(m.value for m in HttpMethod)
)


def _parse_id(text: str) -> Any:
    """Ids are ints from the default generator; anything else is matched as text."""
    return int(text) if text.isdigit() else text


def _edit_entries(entries: KeyValueList, args: list[str], name: str) -> str:
    if not args:
        raise ShellCommandError(f"usage: {name} add|set|rm|clear ...")
    action, rest = args[0], args[1:]
    if action == "add":
        if len(rest) > 2:
            raise ShellCommandError(f"usage: {name} add [KEY [VALUE]]")
        entry = entries.add(*rest)
        return f"added {name} {entry.id}"
    if action == "set":
        if len(rest) < 2 or rest[1] not in ENTRY_FIELDS:
            raise ShellCommandError(f"usage: {name} set ID key|value TEXT")
        entries.update(_parse_id(rest[0]), rest[1], " ".join(rest[2:]))
        return f"updated {name} {rest[0]}"
    if action in ("rm", "remove"):
        if len(rest) != 1:
            raise ShellCommandError(f"usage: {name} rm ID")
        entries.remove(_parse_id(rest[0]))
        return f"removed {name} {rest[0]}"
    if action == "clear":
        entries.clear()
        return f"cleared {name}s"
    raise ShellCommandError(f"unknown {name} action: {action}")


def _read_body(raw: str) -> str:
    if raw.startswith("@"):
        path = Path(raw[1:])
        try:
            return path.read_text(encoding="utf-8")
        except OSError as e:
            raise ShellCommandError(f"Cannot read body file: {e}", original_error=e) from e
    return raw


async def handle_command(session: BuilderSession, line: str, console: Console) -> bool:
    """Run one shell line against session. Returns False when the shell should exit.

    Raises:
        ShellCommandError: For unknown commands or bad arguments
    """
    line = line.strip()
    if not line or line.startswith("#"):
        return True
    command, _, remainder = line.partition(" ")
    command = command.lower()

    # The body keeps its quotes and spacing, so it bypasses shlex
    if command == "body":
        session.set_body(_read_body(remainder.strip()))
        if not session.state.method.has_body:
            console.print(f"[dim]note: {session.state.method.value} requests are sent without a body[/dim]")
        return True

    try:
        args = shlex.split(remainder)
    except ValueError as e:
        raise ShellCommandError(f"Cannot parse command: {e}", original_error=e) from e

    if command in QUIT_COMMANDS:
        return False
    if command == "help":
        console.print(HELP_TEXT, markup=False, highlight=False)
    elif command == "method":
        if len(args) != 1:
            raise ShellCommandError("usage: method VERB")
        try:
            session.set_method(args[0])
        except ValueError as e:
            raise ShellCommandError(f"Unknown method: {args[0]}", original_error=e) from e
    elif command == "url":
        if len(args) != 1:
            raise ShellCommandError("usage: url URL")
        session.set_url(args[0])
    elif command in ("param", "params", "query"):
        console.print(_edit_entries(session.query_params, args, "param"))
    elif command in ("header", "headers"):
        console.print(_edit_entries(session.headers, args, "header"))
    elif command == "show":
        console.print(render_state(session.state))
    elif command == "send":
        with console.status("Testing..."):
            result = await session.send()
        console.print(render_result(result))
    elif command == "export":
        written = session.export(args[0] if args else None)
        console.print(f"exported to {written}")
    elif command == "load":
        if len(args) != 1:
            raise ShellCommandError("usage: load PATH")
        session.load_config(args[0])
        console.print(render_state(session.state))
    elif command == "example":
        session.load_example()
        console.print(render_state(session.state))
    elif command == "reset":
        session.reset()
    else:
        raise ShellCommandError(f"Unknown command: {command} (try 'help')")
    return True


async def run_shell(
    session: BuilderSession,
    console: Console | None = None,
    read_line: Callable[[str], str] | None = None,
) -> None:
    """Read-eval loop until quit or end of input."""
    console = console or Console()
    read_line = read_line or console.input
    console.print(render_state(session.state))
    while True:
        try:
            line = read_line(PROMPT)
        except EOFError:
            break
        try:
            if not await handle_command(session, line, console):
                break
        except ReqBuilderError as e:
            console.print(f"[red]Error:[/red] {escape(e.message)}")
        except ValueError as e:
            # Bad field names or ids from the entry lists
            console.print(f"[red]Error:[/red] {escape(str(e))}")
    logger.debug("Shell closed")
