"""Shared exceptions module."""

from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from oauth1_requestor.domains.oauth1.types import OperationError


class OAuth1RequestorException(Exception):
    """Base exception for the OAuth1 requestor."""

    pass


class MissingCredentialsError(OAuth1RequestorException):
    """Exception raised when a signature is requested without client credentials."""

    def __init__(self, message: Optional[str] = "OAuth1 client credentials are missing"):
        """Create a new MissingCredentialsError instance.

        Args:
        ----
            message (str, optional): The error message. Has default message.

        """
        self.message = message
        super().__init__(self.message)


class UnsupportedSignatureMethodError(OAuth1RequestorException):
    """Exception raised for an ``oauth_signature_method`` the authenticator cannot compute."""

    def __init__(self, method: str, message: str = "Unsupported OAuth1 signature method"):
        """Create a new UnsupportedSignatureMethodError instance.

        Args:
        ----
            method (str): The rejected signature method.
            message (str, optional): The error message. Has default message.

        """
        self.method = method
        self.message = message
        super().__init__(f"{message}: {method}")


class RequestError(OAuth1RequestorException):
    """Raised when awaiting an in-flight operation that settled with an error."""

    def __init__(self, error: "OperationError"):
        """Create a new RequestError instance.

        Args:
        ----
            error (OperationError): The error reported on the operation's channel.

        """
        self.error = error
        self.kind = error.kind
        super().__init__(f"{error.kind.value}: {error.message}")
