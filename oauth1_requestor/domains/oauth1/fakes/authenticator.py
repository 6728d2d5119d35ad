"""Fake authenticator for testing."""

import itertools
from dataclasses import dataclass
from typing import Any, Optional, Sequence

from oauth1_requestor.domains.oauth1.authenticator import OAuth1Authenticator
from oauth1_requestor.domains.oauth1.types import HttpOperation, PreparedRequest, RequestParameter


@dataclass
class SignatureCall:
    """Arguments of one ``generate_signature`` call, copied at call time."""

    oauth_params: list[RequestParameter]
    request: PreparedRequest
    signing_params: list[RequestParameter]
    operation: HttpOperation


class FakeAuthenticator:
    """In-memory fake for the Authenticator protocol.

    Returns a seeded signature and sequential nonces, and records every
    signing call for assertions. Header encoding is the real one so that
    produced headers are protocol-correct.
    """

    def __init__(
        self,
        client_id: str = "consumer-key",
        token: str = "access-token",
        signature_method: str = "HMAC-SHA1",
        signature: str = "fake-signature",
    ) -> None:
        self._client_id = client_id
        self._token = token
        self._signature_method = signature_method
        self._signature = signature
        self._nonces = itertools.count(1)
        self.signature_calls: list[SignatureCall] = []
        self._should_raise: Optional[Exception] = None

    @property
    def client_id(self) -> str:
        return self._client_id

    @property
    def token(self) -> str:
        return self._token

    @property
    def signature_method(self) -> str:
        return self._signature_method

    def nonce(self) -> str:
        return f"nonce-{next(self._nonces)}"

    def generate_signature(
        self,
        oauth_params: Sequence[RequestParameter],
        request: PreparedRequest,
        signing_params: Sequence[RequestParameter],
        operation: HttpOperation,
    ) -> str:
        if self._should_raise:
            raise self._should_raise
        self.signature_calls.append(
            SignatureCall(list(oauth_params), request, list(signing_params), operation)
        )
        return self._signature

    def build_authorization_header(self, oauth_params: Sequence[RequestParameter]) -> str:
        return OAuth1Authenticator.build_authorization_header(oauth_params)

    # -- test helpers --

    def set_error(self, error: Exception) -> None:
        self._should_raise = error

    def clear_error(self) -> None:
        self._should_raise = None

    @property
    def last_call(self) -> Optional[SignatureCall]:
        return self.signature_calls[-1] if self.signature_calls else None

    def last_oauth_values(self) -> dict[str, Any]:
        """Oauth parameters of the most recent call, as a name -> value dict."""
        return {p.name: p.value for p in self.last_call.oauth_params} if self.last_call else {}
