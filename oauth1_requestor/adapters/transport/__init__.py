"""Transport adapters."""

from oauth1_requestor.adapters.transport.fake import FakeTransport
from oauth1_requestor.adapters.transport.httpx_transport import HttpxTransport

__all__ = ["HttpxTransport", "FakeTransport"]
