"""Configuration module for the OAuth1 requestor.

Provides centralized configuration management with type-safe enums.

Usage:
    from oauth1_requestor.core.config import settings, SignatureMethod

    # Access settings
    timeout = settings.REQUEST_TIMEOUT_SECONDS

    # Use enums for type safety
    if settings.DEFAULT_SIGNATURE_METHOD == SignatureMethod.PLAINTEXT:
        ...
"""

from oauth1_requestor.core.config.enums import Environment, SignatureMethod
from oauth1_requestor.core.config.settings import Settings

__all__ = [
    "Settings",
    "SignatureMethod",
    "Environment",
    "settings",
]

# Singleton settings instance
settings = Settings()
