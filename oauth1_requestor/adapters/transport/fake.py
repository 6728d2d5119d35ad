"""Fake transport for testing.

Records dispatched requests and leaves every operation running until the
test settles it by hand.
"""

from dataclasses import dataclass
from typing import Optional, Union

import httpx

from oauth1_requestor.domains.oauth1.operation import InFlightOperation
from oauth1_requestor.domains.oauth1.types import (
    HttpOperation,
    MultipartPayload,
    NetworkErrorKind,
    OperationError,
    PreparedRequest,
)


@dataclass
class DispatchedCall:
    """One call recorded by ``FakeTransport``."""

    operation: HttpOperation
    request: PreparedRequest
    body: Union[bytes, MultipartPayload, None]
    handle: InFlightOperation


class FakeTransport:
    """Test implementation of Transport.

    Usage:
        fake = FakeTransport()
        op = requestor.get(request, [("foo", "bar")])

        assert fake.last_call.request.url.params["foo"] == "bar"
        fake.complete(op, status_code=200, content=b"ok")
    """

    def __init__(self) -> None:
        """Initialize with no recorded calls."""
        self.calls: list[DispatchedCall] = []

    def get(self, request: PreparedRequest) -> InFlightOperation:
        return self._record(HttpOperation.GET, request, None)

    def post(
        self, request: PreparedRequest, body: Union[bytes, MultipartPayload]
    ) -> InFlightOperation:
        return self._record(HttpOperation.POST, request, body)

    def put(self, request: PreparedRequest, body: bytes) -> InFlightOperation:
        return self._record(HttpOperation.PUT, request, body)

    def _record(
        self,
        operation: HttpOperation,
        request: PreparedRequest,
        body: Union[bytes, MultipartPayload, None],
    ) -> InFlightOperation:
        handle = InFlightOperation(request, operation)
        self.calls.append(DispatchedCall(operation, request, body, handle))
        return handle

    # Test helpers

    @property
    def last_call(self) -> Optional[DispatchedCall]:
        """The most recent call, or None if nothing was dispatched."""
        return self.calls[-1] if self.calls else None

    @property
    def call_count(self) -> int:
        return len(self.calls)

    def complete(
        self, handle: InFlightOperation, status_code: int = 200, content: bytes = b""
    ) -> httpx.Response:
        """Finish ``handle`` with a canned response."""
        response = httpx.Response(status_code, content=content)
        handle.emit_finished(response)
        return response

    def fail(
        self,
        handle: InFlightOperation,
        kind: NetworkErrorKind = NetworkErrorKind.NETWORK,
        message: str = "simulated transport failure",
    ) -> OperationError:
        """Fail ``handle`` as the transport would."""
        error = OperationError(kind=kind, message=message)
        handle.emit_error(error)
        return error

    def clear(self) -> None:
        """Reset all state."""
        self.calls.clear()
