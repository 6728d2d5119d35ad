"""Core protocols consumed by the requestor."""

from oauth1_requestor.core.protocols.authenticator import Authenticator
from oauth1_requestor.core.protocols.transport import Transport

__all__ = ["Authenticator", "Transport"]
