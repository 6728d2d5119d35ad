"""Settings for the OAuth1 requestor.

Uses Pydantic Settings for automatic env var and ``.env`` loading.
"""

import logging

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from oauth1_requestor.core.config.enums import Environment, SignatureMethod


class Settings(BaseSettings):
    """Process-wide settings.

    Attributes:
        ENVIRONMENT: Deployment environment.
        LOG_LEVEL: Level name for the package logger.
        REQUEST_TIMEOUT_SECONDS: Interval after which an in-flight operation
            that has not settled receives a timeout error.
        DEFAULT_SIGNATURE_METHOD: Signature method used by
            ``OAuth1Authenticator.from_settings`` when none is given.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    ENVIRONMENT: Environment = Field(Environment.LOCAL, description="Deployment environment")
    LOG_LEVEL: str = Field("INFO", description="Logging level name")
    REQUEST_TIMEOUT_SECONDS: float = Field(
        60.0, gt=0, description="Timeout guard interval for dispatched requests"
    )
    DEFAULT_SIGNATURE_METHOD: SignatureMethod = Field(
        SignatureMethod.HMAC_SHA1, description="Default oauth_signature_method"
    )

    @field_validator("LOG_LEVEL")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Normalize the level name and reject unknown levels."""
        level = v.strip().upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"Unknown log level: {v}")
        return level
