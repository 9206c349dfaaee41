"""Builder session: owns the BuilderState / ResultState pair for one user.

All edits go through this object; the presentation layers (shell, CLI) never
hold state of their own. Only send() suspends, and only while the transport
call is in flight.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any

import orjson

from .assembler import assemble
from .entries import CounterIds, IdFactory, KeyValueList
from .example import default_state, load_example
from .exceptions import ReqBuilderDispatchError
from .executor import RequestExecutor
from .logging_config import get_logger
from .models import (
    BuilderState,
    Failure,
    HttpMethod,
    Idle,
    OutboundRequest,
    Pending,
    ResultState,
    Success,
)
from .serializer import export_config, load_config_document, serialize_state

logger = get_logger("session")


def format_response(result: Success) -> str:
    """Displayed response document, pretty-printed with a 2-space indent."""
    return orjson.dumps(result.to_document(), option=orjson.OPT_INDENT_2).decode("utf-8")


@dataclass(frozen=True, slots=True)
class DisplayFields:
    """What a view shows. At most one of the three is set."""

    pending: bool
    response: str | None
    error: str | None


class BuilderSession:
    """Controller for one interactive request-building session."""

    def __init__(
        self,
        executor: RequestExecutor | None = None,
        state: BuilderState | None = None,
        id_factory: IdFactory | None = None,
    ) -> None:
        self._id_factory = id_factory or CounterIds()
        self.executor = executor or RequestExecutor()
        self.state = state or default_state(self._id_factory)
        self._result: ResultState = Idle()
        # Bumped whenever the whole state is replaced; an in-flight send whose
        # generation no longer matches must not write its result.
        self._generation = 0

    # --- state access ---

    @property
    def result(self) -> ResultState:
        return self._result

    @property
    def query_params(self) -> KeyValueList:
        return self.state.query_params

    @property
    def headers(self) -> KeyValueList:
        return self.state.headers

    @property
    def is_pending(self) -> bool:
        return isinstance(self._result, Pending)

    def display(self) -> DisplayFields:
        result = self._result
        if isinstance(result, Success):
            return DisplayFields(pending=False, response=format_response(result), error=None)
        if isinstance(result, Failure):
            return DisplayFields(pending=False, response=None, error=f"Error: {result.message}")
        return DisplayFields(pending=isinstance(result, Pending), response=None, error=None)

    # --- edits ---

    def set_method(self, method: HttpMethod | str) -> None:
        self.state.method = method if isinstance(method, HttpMethod) else HttpMethod.parse(method)

    def set_url(self, url: str) -> None:
        self.state.base_url = url

    def set_body(self, text: str) -> None:
        self.state.body_text = text

    # --- whole-state replacement ---

    def _replace_state(self, state: BuilderState) -> None:
        if self.is_pending:
            logger.debug("State replaced while a request was in flight; its result will be discarded")
        self.state = state
        self._generation += 1
        self._result = Idle()

    def load_example(self) -> None:
        """Replace the state with the demonstration request and clear the result."""
        self._replace_state(load_example(self._id_factory))

    def reset(self) -> None:
        self._replace_state(default_state(self._id_factory))

    def load_config(self, path: str | Path) -> None:
        """Replace the state with an exported configuration file and clear the result.

        The file is read before anything changes, so a bad file leaves the
        session untouched.
        """
        self._replace_state(load_config_document(path, id_factory=self._id_factory))

    # --- actions ---

    def build_request(self) -> OutboundRequest:
        return assemble(self.state)

    def export_document(self) -> dict[str, Any]:
        return serialize_state(self.state)

    def export(self, path: str | Path | None = None) -> Path:
        return export_config(self.state, path)

    async def send(self) -> ResultState:
        """Assemble and dispatch the current state.

        If the state is replaced (load_example, reset, load_config) while the
        request is in flight, the outcome is returned but not recorded: the
        session keeps the Idle result of the new state.

        Raises:
            ReqBuilderDispatchError: If a previous request is still pending
        """
        if self.is_pending:
            raise ReqBuilderDispatchError("A request is already in flight")
        req = self.build_request()
        generation = self._generation
        self._result = Pending()
        try:
            result = await self.executor.execute(req)
        except BaseException:
            # Cancelled mid-flight: leave no stale Pending behind
            if generation == self._generation:
                self._result = Idle()
            raise
        if generation == self._generation:
            self._result = result
        else:
            logger.debug("Discarding result of %s %s: state was replaced", req.method.value, req.url)
        return result

    async def aclose(self) -> None:
        await self.executor.aclose()
