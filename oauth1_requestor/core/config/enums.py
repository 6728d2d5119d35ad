"""Configuration enums for type-safe settings.

These enums provide type safety and IDE autocomplete for configuration values.
They inherit from str to maintain JSON serialization compatibility.
"""

from enum import Enum


class Environment(str, Enum):
    """Deployment environments.

    Controls environment-specific behavior like log verbosity.
    """

    LOCAL = "local"
    TEST = "test"
    DEV = "dev"
    PRD = "prd"


class SignatureMethod(str, Enum):
    """OAuth1 signature methods (RFC 5849 section 3.4).

    The value is sent verbatim as ``oauth_signature_method``.
    """

    HMAC_SHA1 = "HMAC-SHA1"
    HMAC_SHA256 = "HMAC-SHA256"
    PLAINTEXT = "PLAINTEXT"
