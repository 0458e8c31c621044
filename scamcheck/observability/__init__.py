"""
Observability for ScamCheck: structured logging and audit trail.
"""

from scamcheck.observability.logging import (
    AnalysisAuditLogger,
    LogContext,
    get_audit_logger,
    get_log_context,
    get_logger,
    log_context,
    set_log_context,
    setup_logging,
)

__all__ = [
    "setup_logging",
    "get_logger",
    "log_context",
    "get_log_context",
    "set_log_context",
    "LogContext",
    "AnalysisAuditLogger",
    "get_audit_logger",
]
