"""One-shot timeout guard for in-flight operations.

The guard schedules a single timer on the running event loop. If the
operation has not settled when the timer fires, a ``timeout`` error is
emitted on the operation's error channel, the same channel transport errors
use. The guard never cancels the request itself; callers that want the
I/O stopped call ``operation.abort()`` when they see the error.

When the operation settles first, its done-callback disarms the guard and
cancels the timer, so the guard cannot fire after completion.
"""

import asyncio
from enum import Enum
from typing import Optional

from oauth1_requestor.core.logging import logger
from oauth1_requestor.domains.oauth1.operation import InFlightOperation
from oauth1_requestor.domains.oauth1.types import NetworkErrorKind, OperationError


class GuardState(str, Enum):
    """Timeout guard lifecycle."""

    ARMED = "armed"
    FIRED = "fired"
    DISARMED = "disarmed"


class TimeoutGuard:
    """Timer bound to one in-flight operation.

    Attributes:
        timeout_seconds: Seconds before a timeout error is emitted.
    """

    DEFAULT_TIMEOUT_SECONDS = 60.0

    def __init__(
        self,
        operation: InFlightOperation,
        timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS,
        loop: Optional[asyncio.AbstractEventLoop] = None,
    ) -> None:
        """Arm the guard on ``operation``.

        Args:
            operation: The operation to watch. The guard does not own it.
            timeout_seconds: Interval before the timeout error.
            loop: Event loop to schedule on. Defaults to the running loop.
        """
        if timeout_seconds <= 0:
            raise ValueError(f"timeout_seconds must be positive, got {timeout_seconds}")
        self.timeout_seconds = timeout_seconds
        self._operation = operation
        self._state = GuardState.ARMED
        loop = loop or asyncio.get_running_loop()
        self._handle = loop.call_later(timeout_seconds, self._on_timeout)
        operation.add_done_callback(self.disarm)

    @classmethod
    def attach(
        cls,
        operation: InFlightOperation,
        timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS,
    ) -> "TimeoutGuard":
        """Arm a guard on ``operation`` and record it on the handle."""
        guard = cls(operation, timeout_seconds)
        operation.timeout_guard = guard
        return guard

    @property
    def state(self) -> GuardState:
        return self._state

    def disarm(self) -> None:
        """Stop the timer. No-op unless the guard is still armed."""
        if self._state is not GuardState.ARMED:
            return
        self._state = GuardState.DISARMED
        self._handle.cancel()

    def _on_timeout(self) -> None:
        if self._state is not GuardState.ARMED:
            return
        self._state = GuardState.FIRED
        logger.warning(
            f"[TimeoutGuard] {self._operation.operation.value} {self._operation.request.url} "
            f"did not complete within {self.timeout_seconds:.0f}s"
        )
        self._operation.emit_error(
            OperationError(
                kind=NetworkErrorKind.TIMEOUT,
                message=f"Operation timed out after {self.timeout_seconds}s",
            )
        )
