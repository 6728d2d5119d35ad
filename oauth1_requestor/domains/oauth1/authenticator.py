"""OAuth1 authenticator: credentials, nonces, signatures and header encoding.

Implements the signing half of RFC 5849 for a client that already holds
token credentials. The 3-legged flow that obtains those credentials is out
of scope; callers construct the authenticator with the token they have.

Reference: RFC 5849 - The OAuth 1.0 Protocol
"""

import base64
import hashlib
import hmac
import secrets
from typing import Optional, Sequence
from urllib.parse import quote

import httpx

from oauth1_requestor.core.config import settings
from oauth1_requestor.core.config.enums import SignatureMethod
from oauth1_requestor.core.exceptions import (
    MissingCredentialsError,
    UnsupportedSignatureMethodError,
)
from oauth1_requestor.domains.oauth1.types import (
    OAUTH_SIGNATURE,
    HttpOperation,
    PreparedRequest,
    RequestParameter,
)

_DEFAULT_PORTS = {"http": 80, "https": 443}
_HMAC_DIGESTS = {
    SignatureMethod.HMAC_SHA1: hashlib.sha1,
    SignatureMethod.HMAC_SHA256: hashlib.sha256,
}


def percent_encode(value: str) -> str:
    """Percent-encode a value according to RFC 3986.

    Encodes all characters except unreserved: A-Z, a-z, 0-9, -, ., _, ~
    """
    return quote(str(value), safe="~")


class OAuth1Authenticator:
    """Signs requests with a consumer key pair and token credentials."""

    def __init__(
        self,
        *,
        client_id: str,
        client_secret: str,
        token: str = "",
        token_secret: str = "",
        signature_method: SignatureMethod = SignatureMethod.HMAC_SHA1,
    ) -> None:
        """Initialize with client and token credentials.

        Args:
            client_id: Consumer key.
            client_secret: Consumer secret.
            token: Access (or temporary) token, empty for two-legged requests.
            token_secret: Secret for ``token``.
            signature_method: How ``generate_signature`` signs the base string.
        """
        self._client_id = client_id
        self._client_secret = client_secret
        self._token = token
        self._token_secret = token_secret
        self._signature_method = SignatureMethod(signature_method)

    @classmethod
    def from_settings(
        cls,
        *,
        client_id: str,
        client_secret: str,
        token: str = "",
        token_secret: str = "",
        signature_method: Optional[SignatureMethod] = None,
    ) -> "OAuth1Authenticator":
        """Build an authenticator, defaulting the signature method from settings."""
        return cls(
            client_id=client_id,
            client_secret=client_secret,
            token=token,
            token_secret=token_secret,
            signature_method=signature_method or settings.DEFAULT_SIGNATURE_METHOD,
        )

    @property
    def client_id(self) -> str:
        return self._client_id

    @property
    def token(self) -> str:
        return self._token

    @property
    def signature_method(self) -> str:
        return self._signature_method.value

    @staticmethod
    def nonce() -> str:
        """Generate a cryptographically secure random nonce."""
        return secrets.token_urlsafe(32)

    @staticmethod
    def base_string_uri(url: httpx.URL) -> str:
        """Build the base string URI per RFC 5849 section 3.4.1.2.

        Scheme and host are lowercased, default ports dropped, and the query
        and fragment removed. IPv6 literals keep their brackets.
        """
        scheme = url.scheme.lower()
        host = url.host.lower()
        if ":" in host:
            host = f"[{host}]"
        port = url.port
        if port is not None and _DEFAULT_PORTS.get(scheme) != port:
            host = f"{host}:{port}"
        path = url.raw_path.split(b"?", 1)[0].decode("ascii") or "/"
        return f"{scheme}://{host}{path}"

    @staticmethod
    def normalize_parameters(params: Sequence[RequestParameter]) -> str:
        """Encode, sort and join parameters per RFC 5849 section 3.4.1.3.2."""
        encoded = sorted((percent_encode(p.name), percent_encode(p.value)) for p in params)
        return "&".join(f"{name}={value}" for name, value in encoded)

    def signature_base_string(
        self,
        oauth_params: Sequence[RequestParameter],
        request: PreparedRequest,
        signing_params: Sequence[RequestParameter],
        operation: HttpOperation,
    ) -> str:
        """Build the signature base string.

        Format: HTTP_METHOD&URL&NORMALIZED_PARAMS
        """
        params = [p for p in oauth_params if p.name != OAUTH_SIGNATURE]
        params.extend(signing_params)
        parts = [
            HttpOperation(operation).value,
            percent_encode(self.base_string_uri(request.url)),
            percent_encode(self.normalize_parameters(params)),
        ]
        return "&".join(parts)

    def generate_signature(
        self,
        oauth_params: Sequence[RequestParameter],
        request: PreparedRequest,
        signing_params: Sequence[RequestParameter],
        operation: HttpOperation,
    ) -> str:
        """Sign a request.

        Args:
            oauth_params: The oauth_* parameters collected so far.
            request: The request being signed; only its URL is used.
            signing_params: Additional parameters covered by the signature.
            operation: The HTTP operation the request is dispatched as.

        Returns:
            The value for ``oauth_signature``.

        Raises:
            MissingCredentialsError: If no client id is configured.
            UnsupportedSignatureMethodError: If the method cannot be computed.
        """
        if not self._client_id:
            raise MissingCredentialsError()

        key = f"{percent_encode(self._client_secret)}&{percent_encode(self._token_secret)}"
        if self._signature_method is SignatureMethod.PLAINTEXT:
            return key

        digest = _HMAC_DIGESTS.get(self._signature_method)
        if digest is None:
            raise UnsupportedSignatureMethodError(self._signature_method.value)

        base_string = self.signature_base_string(oauth_params, request, signing_params, operation)
        signature_bytes = hmac.new(
            key.encode("utf-8"), base_string.encode("utf-8"), digest
        ).digest()
        return base64.b64encode(signature_bytes).decode("utf-8")

    @staticmethod
    def build_authorization_header(oauth_params: Sequence[RequestParameter]) -> str:
        """Build OAuth1 Authorization header.

        Format: OAuth oauth_consumer_key="...", oauth_version="1.0", ...
        Parameters keep the order they were given in.
        """
        param_strings = [
            f'{percent_encode(p.name)}="{percent_encode(p.value)}"' for p in oauth_params
        ]
        return "OAuth " + ", ".join(param_strings)
