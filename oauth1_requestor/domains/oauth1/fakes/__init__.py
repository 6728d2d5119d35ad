"""Fakes for the OAuth1 domain."""

from oauth1_requestor.domains.oauth1.fakes.authenticator import FakeAuthenticator

__all__ = ["FakeAuthenticator"]
