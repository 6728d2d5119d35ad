"""In-flight operation handle.

An ``InFlightOperation`` represents one dispatched, not-yet-settled request.
The transport creates and drives it; callers subscribe to its two channels:

    op = requestor.get(request, params)
    op.on_finished(lambda response: ...)
    op.on_error(lambda error: ...)

or simply ``await op.wait()``.

The handle settles exactly once. Whichever terminal event arrives first
(finished or error) wins and every later event is dropped, so a timeout
reported by the guard is the last thing a caller ever sees on that handle.
"""

import asyncio
from enum import Enum
from typing import Callable, Optional

import httpx

from oauth1_requestor.core.exceptions import RequestError
from oauth1_requestor.core.logging import logger
from oauth1_requestor.domains.oauth1.types import (
    HttpOperation,
    NetworkErrorKind,
    OperationError,
    PreparedRequest,
)

ErrorHandler = Callable[[OperationError], None]
FinishedHandler = Callable[[httpx.Response], None]
DoneCallback = Callable[[], None]


class OperationState(str, Enum):
    """Lifecycle of an in-flight operation."""

    RUNNING = "running"
    FINISHED = "finished"
    FAILED = "failed"


class InFlightOperation:
    """Handle to a dispatched request.

    Attributes:
        request: The finalized request that was dispatched.
        operation: The HTTP operation it was dispatched as.
        timeout_guard: The guard attached by the requestor, if any.
    """

    def __init__(self, request: PreparedRequest, operation: HttpOperation) -> None:
        """Create a running operation for ``request``."""
        self.request = request
        self.operation = operation
        self.timeout_guard = None
        self._state = OperationState.RUNNING
        self._response: Optional[httpx.Response] = None
        self._error: Optional[OperationError] = None
        self._error_handlers: list[ErrorHandler] = []
        self._finished_handlers: list[FinishedHandler] = []
        self._done_callbacks: list[DoneCallback] = []
        self._task: Optional[asyncio.Task] = None
        self._settled = asyncio.Event()
        self._log = logger.with_context(operation=operation.value, url=str(request.url))

    # -- subscription --

    def on_error(self, handler: ErrorHandler) -> None:
        """Subscribe to the error channel (transport errors and timeouts)."""
        self._error_handlers.append(handler)

    def on_finished(self, handler: FinishedHandler) -> None:
        """Subscribe to successful completion."""
        self._finished_handlers.append(handler)

    def add_done_callback(self, callback: DoneCallback) -> None:
        """Run ``callback`` once the operation settles (immediately if it already has)."""
        if self.is_settled:
            callback()
            return
        self._done_callbacks.append(callback)

    # -- state --

    @property
    def state(self) -> OperationState:
        return self._state

    @property
    def is_settled(self) -> bool:
        return self._state is not OperationState.RUNNING

    @property
    def response(self) -> Optional[httpx.Response]:
        return self._response

    @property
    def error(self) -> Optional[OperationError]:
        return self._error

    # -- driven by the transport and the timeout guard --

    def attach_task(self, task: asyncio.Task) -> None:
        """Bind the transport task performing the I/O, so ``abort`` can cancel it."""
        self._task = task

    def emit_finished(self, response: httpx.Response) -> None:
        """Settle successfully and notify finished handlers."""
        if self.is_settled:
            self._log.debug(f"Dropping completion after {self._state.value}")
            return
        self._state = OperationState.FINISHED
        self._response = response
        for handler in list(self._finished_handlers):
            self._call_handler(handler, response)
        self._settle()

    def emit_error(self, error: OperationError) -> None:
        """Settle with ``error`` and notify error handlers."""
        if self.is_settled:
            self._log.debug(f"Dropping {error.kind.value} error after {self._state.value}")
            return
        self._state = OperationState.FAILED
        self._error = error
        for handler in list(self._error_handlers):
            self._call_handler(handler, error)
        self._settle()

    def abort(self) -> None:
        """Cancel the underlying transport task and report ``canceled``."""
        if self._task is not None and not self._task.done():
            self._task.cancel()
        self.emit_error(OperationError(kind=NetworkErrorKind.CANCELED, message="Operation aborted"))

    async def wait(self) -> httpx.Response:
        """Wait until the operation settles.

        Returns:
            The response on success.

        Raises:
            RequestError: If the operation settled with an error.
        """
        await self._settled.wait()
        if self._error is not None:
            raise RequestError(self._error)
        return self._response

    def _settle(self) -> None:
        self._settled.set()
        callbacks, self._done_callbacks = self._done_callbacks, []
        for callback in callbacks:
            callback()

    def _call_handler(self, handler: Callable, payload: object) -> None:
        # A failing subscriber must not keep the others from being notified
        try:
            handler(payload)
        except Exception as exc:
            self._log.error(f"Operation handler failed: {exc}", exc_info=exc)

    def __repr__(self) -> str:
        return f"<InFlightOperation {self.operation.value} {self.request.url} {self._state.value}>"
