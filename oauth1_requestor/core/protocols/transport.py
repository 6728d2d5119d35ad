"""Transport protocol for dispatching signed requests.

A transport starts the I/O for a request and hands back an
``InFlightOperation`` right away. Completion and failure are reported on
that handle; the transport never blocks the caller.

Usage:
    op = transport.post(request, b'{"a": 1}')
    op.on_error(handle_error)
"""

from typing import Protocol, Union, runtime_checkable

from oauth1_requestor.domains.oauth1.operation import InFlightOperation
from oauth1_requestor.domains.oauth1.types import MultipartPayload, PreparedRequest


@runtime_checkable
class Transport(Protocol):
    """Non-blocking HTTP client."""

    def get(self, request: PreparedRequest) -> InFlightOperation:
        """Dispatch a GET request."""
        ...

    def post(
        self, request: PreparedRequest, body: Union[bytes, MultipartPayload]
    ) -> InFlightOperation:
        """Dispatch a POST request with a raw or multipart body."""
        ...

    def put(self, request: PreparedRequest, body: bytes) -> InFlightOperation:
        """Dispatch a PUT request with a raw body."""
        ...
