"""Root conftest for pytest configuration and shared fixtures.

Loaded before the colocated test packages under oauth1_requestor/, making
its fixtures available to every domain and adapter test.
"""

import os

import pytest

# Register pytest-asyncio plugin at the root level
pytest_plugins = ("pytest_asyncio",)

# ---------------------------------------------------------------------------
# Environment variables — must be set before any oauth1_requestor import
# Uses setdefault so real env vars are never overridden.
# ---------------------------------------------------------------------------
os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("LOG_LEVEL", "DEBUG")


# ---------------------------------------------------------------------------
# Shared fake fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def fake_transport():
    """Fake Transport that records dispatched requests."""
    from oauth1_requestor.adapters.transport.fake import FakeTransport

    return FakeTransport()


@pytest.fixture
def fake_authenticator():
    """Fake Authenticator with a fixed signature and sequential nonces."""
    from oauth1_requestor.domains.oauth1.fakes import FakeAuthenticator

    return FakeAuthenticator()


@pytest.fixture
def authenticator():
    """Real HMAC-SHA1 authenticator with token credentials."""
    from oauth1_requestor.domains.oauth1.authenticator import OAuth1Authenticator

    return OAuth1Authenticator(
        client_id="consumer-key",
        client_secret="consumer-secret",
        token="access-token",
        token_secret="token-secret",
    )
