"""Authenticator protocol for OAuth1 request signing.

The authenticator owns the credentials and the signature algorithm. The
requestor only reads from it, so one instance can sign any number of
concurrent requests.
"""

from typing import Protocol, Sequence, runtime_checkable

from oauth1_requestor.domains.oauth1.types import HttpOperation, PreparedRequest, RequestParameter


@runtime_checkable
class Authenticator(Protocol):
    """OAuth1 credential holder and signer."""

    @property
    def client_id(self) -> str:
        """Consumer key sent as ``oauth_consumer_key``."""
        ...

    @property
    def token(self) -> str:
        """Token sent as ``oauth_token``."""
        ...

    @property
    def signature_method(self) -> str:
        """Name sent as ``oauth_signature_method``."""
        ...

    def nonce(self) -> str:
        """Return a value never handed out before in this process."""
        ...

    def generate_signature(
        self,
        oauth_params: Sequence[RequestParameter],
        request: PreparedRequest,
        signing_params: Sequence[RequestParameter],
        operation: HttpOperation,
    ) -> str:
        """Compute ``oauth_signature`` for the given inputs."""
        ...

    def build_authorization_header(self, oauth_params: Sequence[RequestParameter]) -> str:
        """Serialize oauth parameters into an ``Authorization`` header value."""
        ...
