# ============================================================================
# STRUCTURED LOGGING
# ============================================================================
# EPOCH: 1 - ACTION DISPATCH
# STATUS: Core - Structured logging with context
# PURPOSE: Consistent, queryable logging and the audit sink
# CREATED: 12 OCT 2026
# ============================================================================
"""
Structured Logging

Provides structured, JSON-formatted logging for the action dispatcher,
plus the audit sink used for administrator-facing events (action added,
orphan removed, recursion guard tripped).

Features:
- Contextual fields (hook, action_id, depth)
- JSON output for log aggregation
- Human-readable output for development
- Audit entries with named substitutions

Usage:
    from core.logging import get_logger, log_context, log_audit

    logger = get_logger("services.dispatcher")

    with log_context(hook="subject_update", action_id=42):
        logger.info("Invoking action")

    log_audit("info", "Action '{action}' added.", {"action": "publish_subject"})
"""

import json
import logging
import os
import sys
import threading
from contextlib import contextmanager
from dataclasses import dataclass, field, asdict
from datetime import datetime, timezone
from typing import Any, Callable, Dict, Optional, Union


@dataclass
class LogContext:
    """
    Context for structured logging.

    Thread-local storage for contextual fields.
    """
    hook: Optional[str] = None
    action_id: Optional[Union[int, str]] = None
    depth: Optional[int] = None
    correlation_id: Optional[str] = None
    operation: Optional[str] = None
    extra: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dict, excluding None values."""
        result = {}
        for key, value in asdict(self).items():
            if value is not None and key != "extra":
                result[key] = value
        if self.extra:
            result.update(self.extra)
        return result


# Thread-local context storage
_context_stack = threading.local()


def _get_context_stack() -> list:
    """Get thread-local context stack."""
    if not hasattr(_context_stack, "stack"):
        _context_stack.stack = []
    return _context_stack.stack


def get_current_context() -> LogContext:
    """Get current logging context."""
    stack = _get_context_stack()
    if stack:
        return stack[-1]
    return LogContext()


@contextmanager
def log_context(**kwargs):
    """
    Context manager for adding logging context.

    Args:
        **kwargs: Context fields to add

    Example:
        with log_context(hook="subject_insert", depth=1):
            logger.info("Dispatching")
    """
    parent = get_current_context()
    new_context = LogContext(
        hook=kwargs.get("hook", parent.hook),
        action_id=kwargs.get("action_id", parent.action_id),
        depth=kwargs.get("depth", parent.depth),
        correlation_id=kwargs.get("correlation_id", parent.correlation_id),
        operation=kwargs.get("operation", parent.operation),
        extra={**parent.extra, **kwargs.get("extra", {})},
    )

    stack = _get_context_stack()
    stack.append(new_context)
    try:
        yield new_context
    finally:
        stack.pop()


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class StructuredFormatter(logging.Formatter):
    """
    JSON formatter for structured logging.

    Outputs log records as JSON for easy parsing by log aggregators.
    """

    def __init__(
        self,
        include_timestamp: bool = True,
        include_level: bool = True,
        include_logger: bool = True,
        include_context: bool = True,
    ):
        super().__init__()
        self.include_timestamp = include_timestamp
        self.include_level = include_level
        self.include_logger = include_logger
        self.include_context = include_context

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as JSON."""
        log_data: Dict[str, Any] = {}

        if self.include_timestamp:
            log_data["timestamp"] = _utcnow().isoformat()

        if self.include_level:
            log_data["level"] = record.levelname

        if self.include_logger:
            log_data["logger"] = record.name

        log_data["message"] = record.getMessage()

        if self.include_context:
            context_dict = get_current_context().to_dict()
            if context_dict:
                log_data["context"] = context_dict

        # Audit substitutions and other extra fields
        if hasattr(record, "extra") and record.extra:
            log_data["data"] = record.extra

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        log_data["source"] = {
            "file": record.filename,
            "line": record.lineno,
            "function": record.funcName,
        }

        return json.dumps(log_data, default=str)


class HumanFormatter(logging.Formatter):
    """
    Human-readable formatter for development.

    Includes context fields inline for easy reading.
    """

    def format(self, record: logging.LogRecord) -> str:
        """Format log record for human reading."""
        timestamp = _utcnow().strftime("%Y-%m-%d %H:%M:%S")
        level = record.levelname.ljust(8)

        context = get_current_context()
        context_parts = []
        if context.hook:
            context_parts.append(f"hook={context.hook}")
        if context.action_id is not None:
            context_parts.append(f"action={context.action_id}")
        if context.depth is not None:
            context_parts.append(f"depth={context.depth}")

        context_str = f" [{', '.join(context_parts)}]" if context_parts else ""

        message = record.getMessage()

        extra_str = ""
        if hasattr(record, "extra") and record.extra:
            extra_str = f" {record.extra}"

        result = f"{timestamp} {level} {record.name}{context_str}: {message}{extra_str}"

        if record.exc_info:
            result += f"\n{self.formatException(record.exc_info)}"

        return result


class ContextLogger(logging.LoggerAdapter):
    """
    Logger adapter that includes context in log records.

    Automatically includes thread-local context in all log messages.
    """

    def process(self, msg, kwargs):
        """Process log record to include context."""
        context = get_current_context()

        extra = kwargs.get("extra", {})
        extra.update(context.to_dict())

        # Stored as a single attribute for formatter access
        kwargs["extra"] = {"extra": extra}

        return msg, kwargs


def get_logger(name: str) -> ContextLogger:
    """
    Get a context-aware logger.

    Args:
        name: Logger name (e.g., "services.dispatcher")

    Returns:
        ContextLogger instance
    """
    return ContextLogger(logging.getLogger(name), {})


def configure_logging(
    level: Union[str, int] = "INFO",
    json_output: bool = False,
) -> None:
    """
    Configure logging for the application.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR)
        json_output: Use JSON format (for production)
    """
    if isinstance(level, str):
        level = getattr(logging, level.upper(), logging.INFO)

    if json_output or os.getenv("LOG_FORMAT", "").lower() == "json":
        formatter = StructuredFormatter(include_context=True)
    else:
        formatter = HumanFormatter()

    root = logging.getLogger()
    root.setLevel(level)

    for handler in root.handlers[:]:
        root.removeHandler(handler)

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(formatter)
    root.addHandler(handler)


# ============================================================================
# AUDIT LOGGING
# ============================================================================

# Signature of an audit sink: (severity, message, substitutions)
AuditSink = Callable[[str, str, Dict[str, Any]], None]

_SEVERITY_LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "notice": logging.INFO,
    "warning": logging.WARNING,
    "error": logging.ERROR,
    "critical": logging.CRITICAL,
}


def log_audit(
    severity: str,
    message: str,
    substitutions: Optional[Dict[str, Any]] = None,
    logger: Optional[logging.Logger] = None,
) -> None:
    """
    Record an administrator-facing audit entry.

    The message is a str.format template filled from substitutions; the
    raw substitutions travel along as structured data.

    Args:
        severity: debug, info, notice, warning, error or critical
        message: Template, e.g. "Action '{action}' added."
        substitutions: Values for the template
        logger: Optional specific logger to use
    """
    if logger is None:
        logger = logging.getLogger("audit")

    substitutions = substitutions or {}
    try:
        text = message.format(**substitutions)
    except (KeyError, IndexError, ValueError, AttributeError):
        text = message

    level = _SEVERITY_LEVELS.get(severity.lower(), logging.INFO)
    audit_data = {"audit": True, "severity": severity.lower(), **substitutions}
    logger.log(level, text, extra={"extra": audit_data})


# ============================================================================
# EXPORTS
# ============================================================================

__all__ = [
    "LogContext",
    "StructuredFormatter",
    "HumanFormatter",
    "ContextLogger",
    "get_logger",
    "configure_logging",
    "log_context",
    "get_current_context",
    "AuditSink",
    "log_audit",
]
