"""Value types for the OAuth1 domain.

These live in a separate module to avoid circular imports between
service implementations and protocol definitions.
"""

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Iterable, Optional, Sequence, Tuple, Union

import httpx

from oauth1_requestor.core.config.enums import SignatureMethod

# ---------------------------------------------------------------------------
# Protocol parameter names (RFC 5849 section 3.1)
# ---------------------------------------------------------------------------

OAUTH_CONSUMER_KEY = "oauth_consumer_key"
OAUTH_VERSION = "oauth_version"
OAUTH_TOKEN = "oauth_token"
OAUTH_SIGNATURE_METHOD = "oauth_signature_method"
OAUTH_NONCE = "oauth_nonce"
OAUTH_TIMESTAMP = "oauth_timestamp"
OAUTH_SIGNATURE = "oauth_signature"

OAUTH_VERSION_1_0 = "1.0"
AUTHORIZATION_HEADER = "Authorization"

__all__ = [
    "AUTHORIZATION_HEADER",
    "HttpOperation",
    "MultipartFile",
    "MultipartPayload",
    "NetworkErrorKind",
    "OperationError",
    "PreparedRequest",
    "RequestParameter",
    "SignatureMethod",
    "as_parameters",
]


class HttpOperation(str, Enum):
    """HTTP operation a request is signed and dispatched as."""

    GET = "GET"
    POST = "POST"
    PUT = "PUT"


class NetworkErrorKind(str, Enum):
    """Kinds of failure reported on an in-flight operation's error channel."""

    NETWORK = "network"
    """Connection, protocol or read failure raised by the transport."""

    TIMEOUT = "timeout"
    """The operation did not settle within the guard interval."""

    HTTP_STATUS = "http_status"
    """The server answered with a 4xx or 5xx status."""

    CANCELED = "canceled"
    """The operation was aborted before it settled."""


@dataclass(frozen=True, slots=True)
class RequestParameter:
    """A name/value pair used for signing and query construction."""

    name: str
    value: str


ParameterLike = Union[RequestParameter, Tuple[str, str]]


def as_parameters(params: Optional[Iterable[ParameterLike]]) -> list[RequestParameter]:
    """Coerce ``(name, value)`` tuples to ``RequestParameter``, keeping order."""
    if not params:
        return []
    return [p if isinstance(p, RequestParameter) else RequestParameter(*p) for p in params]


@dataclass(frozen=True)
class PreparedRequest:
    """An HTTP request descriptor (URL and headers), method-agnostic.

    Instances are immutable; ``with_header`` and ``with_query`` return copies.
    """

    url: httpx.URL
    headers: httpx.Headers = field(default_factory=httpx.Headers)

    def __post_init__(self) -> None:
        # Accept str / dict inputs and never share a mutable Headers instance
        object.__setattr__(self, "url", httpx.URL(self.url))
        object.__setattr__(self, "headers", httpx.Headers(self.headers))

    def with_header(self, name: str, value: str) -> "PreparedRequest":
        """Return a copy with ``name`` set to ``value``, replacing any existing values."""
        headers = httpx.Headers(self.headers)
        headers[name] = value
        return replace(self, headers=headers)

    def with_query(self, params: Sequence[RequestParameter]) -> "PreparedRequest":
        """Return a copy whose URL query is exactly ``params``, in order."""
        return replace(self, url=self.url.copy_with(params=[(p.name, p.value) for p in params]))


@dataclass(frozen=True, slots=True)
class MultipartFile:
    """A file part of a multipart body."""

    name: str
    filename: str
    content: bytes
    content_type: str = "application/octet-stream"


@dataclass(frozen=True)
class MultipartPayload:
    """A multipart/form-data body: plain form fields plus file parts."""

    fields: Sequence[RequestParameter] = ()
    files: Sequence[MultipartFile] = ()


@dataclass(frozen=True, slots=True)
class OperationError:
    """An error delivered on an in-flight operation's error channel."""

    kind: NetworkErrorKind
    message: str
    cause: Optional[BaseException] = None
    response: Optional[httpx.Response] = None
