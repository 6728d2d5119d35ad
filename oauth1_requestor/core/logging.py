"""Logging for the OAuth1 requestor.

Wraps the standard library logger in a ``LoggerAdapter`` that carries
structured context. Derived loggers are cheap, so callers attach context
per request instead of formatting it into every message:

    log = logger.with_context(operation="GET", url=str(request.url))
    log.debug("Dispatching request")
"""

import logging
import sys
from typing import Any, MutableMapping

from oauth1_requestor.core.config import settings
from oauth1_requestor.core.config.enums import Environment

LOGGER_NAME = "oauth1_requestor"


class ContextualLogger(logging.LoggerAdapter):
    """Logger adapter with chainable context and message prefix."""

    def __init__(
        self,
        logger: logging.Logger,
        extra: MutableMapping[str, Any] | None = None,
        prefix: str = "",
    ) -> None:
        """Wrap ``logger`` with the given context dimensions and prefix."""
        super().__init__(logger, dict(extra or {}))
        self.prefix = prefix

    def with_context(self, **kwargs: Any) -> "ContextualLogger":
        """Return a new logger with ``kwargs`` merged into the context."""
        return ContextualLogger(self.logger, {**self.extra, **kwargs}, self.prefix)

    def with_prefix(self, prefix: str) -> "ContextualLogger":
        """Return a new logger that prepends ``prefix`` to every message."""
        return ContextualLogger(self.logger, dict(self.extra), prefix)

    def process(
        self, msg: Any, kwargs: MutableMapping[str, Any]
    ) -> tuple[Any, MutableMapping[str, Any]]:
        """Attach the context to the record and render it after the message."""
        extra = kwargs.get("extra") or {}
        kwargs["extra"] = {**self.extra, **extra}
        if self.extra:
            rendered = " ".join(f"{k}={v}" for k, v in self.extra.items())
            msg = f"{self.prefix}{msg} [{rendered}]"
        elif self.prefix:
            msg = f"{self.prefix}{msg}"
        return msg, kwargs


def _configure_base_logger() -> logging.Logger:
    base = logging.getLogger(LOGGER_NAME)
    base.setLevel(settings.LOG_LEVEL)
    # Handler only for local runs; elsewhere the host application configures output
    if settings.ENVIRONMENT == Environment.LOCAL and not base.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(
            logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s")
        )
        base.addHandler(handler)
    return base


logger = ContextualLogger(_configure_base_logger())
