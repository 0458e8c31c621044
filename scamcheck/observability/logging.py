"""
Structured logging for ScamCheck with JSON output and request correlation.
"""

import logging
import sys
import uuid
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, Optional

import structlog
from loguru import logger as loguru_logger

LOGURU_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> | "
    "<level>{message}</level>"
)


@dataclass
class LogContext:
    """Context for structured logging."""

    request_id: str = field(default_factory=lambda: str(uuid.uuid4()))
    variant: Optional[str] = None
    environment: str = "dev"

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {k: v for k, v in self.__dict__.items() if v is not None}


_log_context: ContextVar[Optional[LogContext]] = ContextVar("log_context", default=None)


def get_log_context() -> Optional[LogContext]:
    """Get current log context."""
    return _log_context.get()


def set_log_context(context: LogContext) -> None:
    """Set log context."""
    _log_context.set(context)


@contextmanager
def log_context(**kwargs):
    """
    Context manager for enriching logs.

    Example:
        with log_context(request_id="abc123", variant="audio"):
            logger.info("analysis_started")
    """
    current = get_log_context() or LogContext()

    new_context = LogContext(**{**current.to_dict(), **kwargs})

    token = _log_context.set(new_context)
    try:
        yield new_context
    finally:
        _log_context.reset(token)


def add_context_to_event(logger, method_name, event_dict):
    """Add context to log event."""
    context = get_log_context()
    if context:
        event_dict.update(context.to_dict())
    return event_dict


def add_context_to_record(record):
    """Copy the current log context into a loguru record."""
    context = get_log_context()
    if context:
        record["extra"].update(context.to_dict())


def add_timestamp(logger, method_name, event_dict):
    """Add ISO timestamp to event."""
    event_dict["timestamp"] = datetime.now(timezone.utc).isoformat()
    return event_dict


def setup_logging(
    level: str = "INFO",
    json_output: bool = True,
    environment: str = "dev"
) -> structlog.BoundLogger:
    """
    Setup logging.

    Operational messages go through loguru; request context and the audit
    trail go through structlog.

    Args:
        level: Log level
        json_output: Whether to output JSON
        environment: Environment name

    Returns:
        Configured logger
    """
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=getattr(logging, level.upper())
    )

    loguru_logger.remove()
    loguru_logger.add(
        sys.stderr,
        format=LOGURU_FORMAT,
        level=level.upper(),
        colorize=not json_output,
        serialize=json_output,
    )
    loguru_logger.configure(patcher=add_context_to_record)

    processors = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        add_context_to_event,
        add_timestamp,
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]

    if json_output:
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer())

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    set_log_context(LogContext(environment=environment))

    return structlog.get_logger()


def get_logger(name: str = __name__) -> structlog.BoundLogger:
    """Get a logger instance."""
    return structlog.get_logger(name)


class AnalysisAuditLogger:
    """
    Audit trail for analysis outcomes and upstream calls.

    Raw model output is never logged here; it can carry user content.
    """

    def __init__(self, logger: Optional[structlog.BoundLogger] = None):
        """Initialize audit logger."""
        self.logger = logger or get_logger("scamcheck.audit")

    def log_analysis(
        self,
        variant: str,
        status: str,
        fallback: bool,
        duration_ms: float
    ) -> None:
        """Log the outcome of one analysis request."""
        self.logger.info(
            "analysis_completed",
            variant=variant,
            status=status,
            fallback=fallback,
            duration_ms=round(duration_ms, 2)
        )

    def log_llm_request(
        self,
        provider: str,
        model: str,
        duration_ms: float,
        success: bool,
        status_code: Optional[int] = None,
        attachments: int = 0
    ) -> None:
        """Log a generative backend request."""
        self.logger.info(
            "llm_request",
            provider=provider,
            model=model,
            duration_ms=round(duration_ms, 2),
            success=success,
            status_code=status_code,
            attachments=attachments
        )

    def log_error(
        self,
        error_type: str,
        error_message: str,
        component: str,
        **extra
    ) -> None:
        """Log error event."""
        self.logger.error(
            "error_occurred",
            error_type=error_type,
            error_message=error_message,
            component=component,
            **extra
        )


_audit_logger: Optional[AnalysisAuditLogger] = None


def get_audit_logger() -> AnalysisAuditLogger:
    """Get global audit logger."""
    global _audit_logger

    if _audit_logger is None:
        _audit_logger = AnalysisAuditLogger()

    return _audit_logger
