"""CLI entry point for reqbuilder.

Builds one request from the command line (or an exported config / the
example), optionally exports it, sends it and prints the result. With -i the
built request is opened in the interactive shell instead.
"""

from __future__ import annotations

import argparse
import asyncio
import sys
from pathlib import Path

from rich.console import Console

from . import __version__
from .console import render_result, render_state
from .exceptions import ReqBuilderConfigError, ReqBuilderError
from .executor import RequestExecutor
from .logging_config import LOG_LEVELS, get_logger, set_log_level
from .models import Failure, HttpMethod, Success
from .session import BuilderSession, format_response
from .settings import AppSettings, load_settings
from .shell import run_shell

logger = get_logger("cli")


def _parse_pairs(pair_list: list[str] | None, separators: str = "=") -> list[tuple[str, str]]:
    """KEY=VALUE strings to pairs, in order.

    Each item is split at the first of ``separators`` it contains; headers also
    accept the curl form ``Name: value``.

    Raises:
        ReqBuilderConfigError: If an item contains none of the separators
    """
    if not pair_list:
        return []
    out: list[tuple[str, str]] = []
    for s in pair_list:
        positions = [i for i in (s.find(sep) for sep in separators) if i >= 0]
        if not positions:
            expected = " or ".join(f"KEY{sep}VALUE" for sep in separators)
            raise ReqBuilderConfigError(f"Expected {expected}, got {s!r}")
        i = min(positions)
        out.append((s[:i].strip(), s[i + 1 :].strip()))
    return out


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="reqbuilder",
        description="Build an HTTP request, send it and inspect the JSON response. "
        "Export the request as a reusable api-config.json.",
    )
    parser.add_argument("url", nargs="?", default=None, help="Request URL (overrides --load / --example URL)")
    parser.add_argument(
        "-X",
        "--method",
        type=str.upper,
        choices=[m.value for m in HttpMethod],
        default=None,
        help="HTTP method (default GET, or the method of --load / --example)",
    )
    parser.add_argument(
        "-q",
        "--query",
        action="append",
        metavar="KEY=VALUE",
        help="Query parameter (can be repeated)",
    )
    parser.add_argument(
        "-H",
        "--header",
        action="append",
        metavar="NAME=VALUE",
        help="Request header, as NAME=VALUE or 'Name: value' (can be repeated)",
    )
    body = parser.add_mutually_exclusive_group()
    body.add_argument("-d", "--data", default=None, help="Raw request body (sent for POST, PUT, PATCH only)")
    body.add_argument("--data-file", metavar="PATH", default=None, help="Read the raw request body from PATH")
    source = parser.add_mutually_exclusive_group()
    source.add_argument("--load", metavar="CONFIG", default=None, help="Start from an exported api-config.json")
    source.add_argument("--example", action="store_true", help="Start from the demonstration POST request")
    parser.add_argument(
        "--export",
        metavar="PATH",
        nargs="?",
        const="",
        default=None,
        help="Write the request configuration (default file name from settings)",
    )
    parser.add_argument("--no-send", action="store_true", help="Do not send the request")
    parser.add_argument("--raw", action="store_true", help="Print the plain response document instead of a panel")
    parser.add_argument("-i", "--interactive", action="store_true", help="Open the interactive shell")
    parser.add_argument("--settings", metavar="YAML", default=None, help="Path to YAML settings file")
    parser.add_argument(
        "--log-level",
        type=str.upper,
        choices=LOG_LEVELS,
        default=None,
        help="Log level for reqbuilder messages on stderr (overrides settings and REQBUILDER_LOG_LEVEL)",
    )
    parser.add_argument(
        "-v",
        "--version",
        action="version",
        version=f"reqbuilder {__version__}",
    )
    return parser


def _prepare_session(args: argparse.Namespace, settings: AppSettings) -> BuilderSession:
    """Session with the request described by args applied on top of its starting state."""
    session = BuilderSession(executor=RequestExecutor(settings=settings))
    if args.load:
        session.load_config(args.load)
    elif args.example:
        session.load_example()
    if args.url is not None:
        session.set_url(args.url)
    if args.method is not None:
        session.set_method(args.method)
    for key, value in _parse_pairs(args.query):
        session.query_params.add(key, value)
    for key, value in _parse_pairs(args.header, separators="=:"):
        session.headers.add(key, value)
    if args.data is not None:
        session.set_body(args.data)
    elif args.data_file is not None:
        try:
            session.set_body(Path(args.data_file).read_text(encoding="utf-8"))
        except OSError as e:
            raise ReqBuilderConfigError(
                f"Cannot read body file: {e}",
                context={"path": args.data_file},
                original_error=e,
            ) from e
    return session


async def _run(args: argparse.Namespace, settings: AppSettings, console: Console) -> int:
    session = _prepare_session(args, settings)
    try:
        if args.export is not None:
            written = session.export(args.export or settings.export_filename)
            console.print(f"Exported request configuration to {written}", highlight=False)
        if args.interactive:
            await run_shell(session, console)
            return 0
        if args.no_send:
            if args.export is None:
                console.print(render_state(session.state))
            return 0
        result = await session.send()
    finally:
        await session.aclose()

    if args.raw:
        if isinstance(result, Success):
            print(format_response(result))
        else:
            print(session.display().error, file=sys.stderr)
    else:
        console.print(render_result(result))
    return 1 if isinstance(result, Failure) else 0


def main() -> int:
    args = _build_parser().parse_args()
    console = Console()

    def handle_error(e: BaseException) -> int:
        if isinstance(e, ReqBuilderError):
            print(f"Error: {e.message}", file=sys.stderr)
            return 1
        logger.exception("Unexpected error")
        print("Error: An unexpected error occurred. Check logs for details.", file=sys.stderr)
        return 1

    try:
        settings = load_settings(args.settings) if args.settings else AppSettings()
    except ReqBuilderConfigError as e:
        return handle_error(e)
    set_log_level(args.log_level or settings.log_level)

    try:
        return asyncio.run(_run(args, settings, console))
    except KeyboardInterrupt:
        print("\nInterrupted.", file=sys.stderr)
        return 130
    except Exception as e:
        return handle_error(e)


if __name__ == "__main__":
    sys.exit(main())
