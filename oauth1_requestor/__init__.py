"""OAuth 1.0a request signing and timeout-guarded dispatch.

Usage:
    from oauth1_requestor import (
        HttpxTransport,
        OAuth1Authenticator,
        OAuth1Requestor,
        PreparedRequest,
    )

    authenticator = OAuth1Authenticator(
        client_id="key", client_secret="secret", token="tok", token_secret="toksecret"
    )
    async with HttpxTransport() as transport:
        requestor = OAuth1Requestor(transport, authenticator)
        op = requestor.get(PreparedRequest("https://api.example.com/resource"), [("foo", "bar")])
        response = await op.wait()
"""

from oauth1_requestor.adapters.transport import FakeTransport, HttpxTransport
from oauth1_requestor.core.exceptions import (
    MissingCredentialsError,
    OAuth1RequestorException,
    RequestError,
    UnsupportedSignatureMethodError,
)
from oauth1_requestor.domains.oauth1.authenticator import OAuth1Authenticator
from oauth1_requestor.domains.oauth1.operation import InFlightOperation
from oauth1_requestor.domains.oauth1.requestor import OAuth1Requestor
from oauth1_requestor.domains.oauth1.timeout_guard import TimeoutGuard
from oauth1_requestor.domains.oauth1.types import (
    HttpOperation,
    MultipartFile,
    MultipartPayload,
    NetworkErrorKind,
    OperationError,
    PreparedRequest,
    RequestParameter,
    SignatureMethod,
)

__all__ = [
    "FakeTransport",
    "HttpOperation",
    "HttpxTransport",
    "InFlightOperation",
    "MissingCredentialsError",
    "MultipartFile",
    "MultipartPayload",
    "NetworkErrorKind",
    "OAuth1Authenticator",
    "OAuth1Requestor",
    "OAuth1RequestorException",
    "OperationError",
    "PreparedRequest",
    "RequestError",
    "RequestParameter",
    "SignatureMethod",
    "TimeoutGuard",
    "UnsupportedSignatureMethodError",
]
