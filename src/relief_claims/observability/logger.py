"""Structured logging with claim ID context for observability.

This module provides:
- ClaimLogger: A structured logger that attaches claim_id to all log messages
- claim_context: A context manager for setting claim context
- log_claim_event: Helper for logging claim-specific events
"""

import json
import logging
import sys
import threading
from contextlib import contextmanager
from datetime import datetime, timezone
from typing import Any

from relief_claims.config.settings import get_log_format, get_log_level

# Thread-local storage for claim context
_context = threading.local()

ROOT_LOGGER_NAME = "relief_claims"


def _get_claim_context() -> dict[str, Any]:
    """Get the current claim context from thread-local storage."""
    return getattr(_context, "claim_data", {})


def _set_claim_context(data: dict[str, Any]) -> None:
    """Set the claim context in thread-local storage."""
    _context.claim_data = data


class StructuredFormatter(logging.Formatter):
    """JSON formatter for structured logging."""

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as JSON with claim context."""
        log_data: dict[str, Any] = {
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }

        claim_ctx = _get_claim_context()
        if claim_ctx:
            log_data["claim_id"] = claim_ctx.get("claim_id")
            log_data["disaster_id"] = claim_ctx.get("disaster_id")

        # Record extras win over the ambient context
        if getattr(record, "claim_id", None):
            log_data["claim_id"] = record.claim_id
        if getattr(record, "disaster_id", None):
            log_data["disaster_id"] = record.disaster_id
        if getattr(record, "extra_data", None):
            log_data["data"] = record.extra_data

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        log_data["source"] = {
            "file": record.filename,
            "line": record.lineno,
            "function": record.funcName,
        }

        return json.dumps(log_data, default=str)


class HumanReadableFormatter(logging.Formatter):
    """Human-readable formatter with claim context prefix."""

    def format(self, record: logging.LogRecord) -> str:
        """Format log record with claim context prefix."""
        timestamp = datetime.now(timezone.utc).strftime("%Y-%m-%d %H:%M:%S")

        ctx_parts = []
        claim_ctx = _get_claim_context()

        claim_id = getattr(record, "claim_id", None) or claim_ctx.get("claim_id")
        if claim_id:
            ctx_parts.append(f"claim={claim_id}")

        disaster_id = getattr(record, "disaster_id", None) or claim_ctx.get("disaster_id")
        if disaster_id:
            ctx_parts.append(f"disaster={disaster_id}")

        ctx_str = f" [{', '.join(ctx_parts)}]" if ctx_parts else ""

        message = record.getMessage()
        if record.exc_info:
            message += "\n" + self.formatException(record.exc_info)

        return f"{timestamp} {record.levelname:8}{ctx_str} {record.name}: {message}"


class ClaimLogger(logging.LoggerAdapter):
    """Logger adapter that adds claim context to all log messages."""

    def __init__(
        self,
        logger: logging.Logger,
        claim_id: str | None = None,
        disaster_id: str | None = None,
    ):
        super().__init__(logger, {})
        self._claim_id = claim_id
        self._disaster_id = disaster_id

    def process(self, msg: str, kwargs: dict[str, Any]) -> tuple[str, dict[str, Any]]:
        """Add claim context to log kwargs."""
        extra = kwargs.get("extra", {})
        if self._claim_id:
            extra.setdefault("claim_id", self._claim_id)
        if self._disaster_id:
            extra.setdefault("disaster_id", self._disaster_id)
        kwargs["extra"] = extra
        return msg, kwargs


def get_logger(
    name: str,
    claim_id: str | None = None,
    disaster_id: str | None = None,
    structured: bool | None = None,
) -> ClaimLogger:
    """Get a ClaimLogger instance.

    Args:
        name: Logger name (typically __name__)
        claim_id: Optional claim ID to attach to all logs
        disaster_id: Optional disaster ID to attach to all logs
        structured: If True, use JSON format. If False, use human-readable.
                   If None, use RELIEF_CLAIMS_LOG_FORMAT env var (default: human)

    Returns:
        ClaimLogger instance
    """
    logger = logging.getLogger(name)
    # Module loggers propagate to the package logger, which owns the handler
    root = logging.getLogger(ROOT_LOGGER_NAME) if name.startswith(ROOT_LOGGER_NAME) else logger

    # Only configure if not already configured
    if not root.handlers:
        configure_logging(structured=structured, logger=root)

    return ClaimLogger(logger, claim_id, disaster_id)


def configure_logging(
    structured: bool | None = None,
    level: int | None = None,
    logger: logging.Logger | None = None,
) -> logging.Logger:
    """(Re)install the stderr handler on logger (default: the relief_claims logger).

    Settings not passed are read from RELIEF_CLAIMS_LOG_FORMAT and
    RELIEF_CLAIMS_LOG_LEVEL at call time.
    """
    target = logger if logger is not None else logging.getLogger(ROOT_LOGGER_NAME)
    if structured is None:
        structured = get_log_format() == "json"

    for existing in list(target.handlers):
        target.removeHandler(existing)

    handler = logging.StreamHandler(sys.stderr)
    if structured:
        handler.setFormatter(StructuredFormatter())
    else:
        handler.setFormatter(HumanReadableFormatter())

    target.addHandler(handler)
    target.setLevel(level if level is not None else get_log_level())

    # Prevent duplicate logs from propagating to parent handlers
    target.propagate = False
    return target


@contextmanager
def claim_context(
    claim_id: str,
    disaster_id: str | None = None,
    **extra: Any,
):
    """Context manager for setting claim context on all logs within the block.

    Usage:
        with claim_context(claim_id="HURRICANE-2024-1a2b3c4d", disaster_id="HURRICANE-2024"):
            logger.info("Reviewing claim")  # Will include claim_id in output
    """
    old_context = _get_claim_context()
    _set_claim_context({"claim_id": claim_id, "disaster_id": disaster_id, **extra})
    try:
        yield
    finally:
        _set_claim_context(old_context)


def log_claim_event(
    logger: logging.Logger | ClaimLogger,
    event: str,
    claim_id: str | None = None,
    level: int = logging.INFO,
    **data: Any,
) -> None:
    """Log a claim event with structured data.

    Args:
        logger: Logger instance
        event: Event name (e.g., "claim_created", "status_changed")
        claim_id: Claim ID (optional if using claim_context or a ClaimLogger)
        level: Log level
        **data: Additional event data
    """
    message = f"[{event}]"
    if data:
        details = ", ".join(f"{k}={v}" for k, v in data.items())
        message = f"{message} {details}"

    extra: dict[str, Any] = {"extra_data": {"event": event, **data}}
    if claim_id:
        extra["claim_id"] = claim_id
    logger.log(level, message, extra=extra)
