"""OAuth1 request signer and dispatcher.

Collects the oauth_* parameters for a call, has the authenticator sign
them, sets the resulting ``Authorization`` header on a copy of the request,
dispatches it through the transport and arms a timeout guard on the
returned handle.

GET requests carry the signing parameters in the URL query. POST and PUT
requests send the body exactly as given: the signing parameters are not
added to the body or the URL, so callers must make sure what they sign
matches what they send.
"""

import time
from typing import Iterable, Optional, Union

from oauth1_requestor.core.config import settings
from oauth1_requestor.core.logging import ContextualLogger
from oauth1_requestor.core.logging import logger as default_logger
from oauth1_requestor.core.protocols import Authenticator, Transport
from oauth1_requestor.domains.oauth1.operation import InFlightOperation
from oauth1_requestor.domains.oauth1.timeout_guard import TimeoutGuard
from oauth1_requestor.domains.oauth1.types import (
    AUTHORIZATION_HEADER,
    OAUTH_CONSUMER_KEY,
    OAUTH_NONCE,
    OAUTH_SIGNATURE,
    OAUTH_SIGNATURE_METHOD,
    OAUTH_TIMESTAMP,
    OAUTH_TOKEN,
    OAUTH_VERSION,
    OAUTH_VERSION_1_0,
    HttpOperation,
    MultipartPayload,
    ParameterLike,
    PreparedRequest,
    RequestParameter,
    as_parameters,
)


class OAuth1Requestor:
    """Signs requests with OAuth1 and dispatches them with a timeout guard."""

    def __init__(
        self,
        transport: Transport,
        authenticator: Authenticator,
        *,
        timeout_seconds: Optional[float] = None,
        logger: Optional[ContextualLogger] = None,
    ) -> None:
        """Initialize the requestor.

        Args:
            transport: Client that executes the signed requests.
            authenticator: Credential holder that computes signatures.
            timeout_seconds: Guard interval per request. Defaults to
                ``settings.REQUEST_TIMEOUT_SECONDS``.
            logger: Logger to use; defaults to the package logger.
        """
        self._transport = transport
        self._authenticator = authenticator
        self._timeout_seconds = (
            timeout_seconds if timeout_seconds is not None else settings.REQUEST_TIMEOUT_SECONDS
        )
        self._logger = (logger or default_logger).with_context(component="oauth1_requestor")

    @property
    def timeout_seconds(self) -> float:
        return self._timeout_seconds

    def get(
        self,
        request: PreparedRequest,
        signing_parameters: Iterable[ParameterLike] = (),
    ) -> InFlightOperation:
        """Sign and dispatch a GET; the signing parameters become the URL query."""
        params = as_parameters(signing_parameters)
        signed = self._setup(request, params, HttpOperation.GET).with_query(params)
        return self._add_timer(self._transport.get(signed))

    def post(
        self,
        request: PreparedRequest,
        signing_parameters: Iterable[ParameterLike] = (),
        body: Union[bytes, MultipartPayload] = b"",
    ) -> InFlightOperation:
        """Sign and dispatch a POST with a raw or multipart body, forwarded unchanged."""
        params = as_parameters(signing_parameters)
        signed = self._setup(request, params, HttpOperation.POST)
        return self._add_timer(self._transport.post(signed, body))

    def put(
        self,
        request: PreparedRequest,
        signing_parameters: Iterable[ParameterLike] = (),
        body: bytes = b"",
    ) -> InFlightOperation:
        """Sign and dispatch a PUT with a raw body, forwarded unchanged."""
        params = as_parameters(signing_parameters)
        signed = self._setup(request, params, HttpOperation.PUT)
        return self._add_timer(self._transport.put(signed, body))

    def _setup(
        self,
        request: PreparedRequest,
        signing_parameters: list[RequestParameter],
        operation: HttpOperation,
    ) -> PreparedRequest:
        """Return a copy of ``request`` with a fresh Authorization header."""
        auth = self._authenticator
        oauth_params = [
            RequestParameter(OAUTH_CONSUMER_KEY, auth.client_id),
            RequestParameter(OAUTH_VERSION, OAUTH_VERSION_1_0),
            RequestParameter(OAUTH_TOKEN, auth.token),
            RequestParameter(OAUTH_SIGNATURE_METHOD, auth.signature_method),
            RequestParameter(OAUTH_NONCE, auth.nonce()),
            RequestParameter(OAUTH_TIMESTAMP, str(int(time.time()))),
        ]

        signature = auth.generate_signature(oauth_params, request, signing_parameters, operation)
        oauth_params.append(RequestParameter(OAUTH_SIGNATURE, signature))

        self._logger.debug(
            f"Signed {operation.value} {request.url} with {len(signing_parameters)} "
            f"signing parameter(s)"
        )
        return request.with_header(
            AUTHORIZATION_HEADER, auth.build_authorization_header(oauth_params)
        )

    def _add_timer(self, operation: InFlightOperation) -> InFlightOperation:
        TimeoutGuard.attach(operation, self._timeout_seconds)
        return operation