"""
Versify - Structured Logging with Trace Context

Integrates structlog with OpenTelemetry trace context propagation,
ensuring log messages emitted inside a span carry its trace_id and span_id.

Features:
- Structured JSON logging for log aggregation
- Automatic trace context injection (trace_id, span_id)
- Configurable log levels and output formats
- Request context enrichment

Usage:
    from observability.logging import setup_logging, get_logger

    # Setup at startup
    setup_logging(LoggingConfig(level="INFO", json_format=True))

    # Get logger
    logger = get_logger(__name__)
    logger.info("Mapping data loaded", mapping="KJVSynodalMapping", loaded=1234)
"""
from __future__ import annotations

import json
import logging
import os
import sys
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, Optional

import structlog
from structlog.types import EventDict, WrappedLogger

# Global state
_configured: bool = False


@dataclass
class LoggingConfig:
    """Configuration for structured logging."""

    service_name: str = "versify"
    level: str = field(
        default_factory=lambda: os.getenv("LOG_LEVEL", "INFO").upper()
    )
    json_format: bool = field(
        default_factory=lambda: os.getenv("LOG_FORMAT", "console").lower() == "json"
    )
    enable_trace_context: bool = True
    include_timestamp: bool = True
    environment: str = field(
        default_factory=lambda: os.getenv("ENVIRONMENT", "development")
    )
    # Cached loggers ignore later reconfiguration (e.g. structlog.testing.capture_logs)
    cache_loggers: bool = True


def add_trace_context(
    logger: WrappedLogger,
    method_name: str,
    event_dict: EventDict,
) -> EventDict:
    """
    Structlog processor that adds OpenTelemetry trace context to log events.
    """
    from opentelemetry import trace

    span = trace.get_current_span()
    if span and span.is_recording():
        ctx = span.get_span_context()
        if ctx.is_valid:
            event_dict["trace_id"] = format(ctx.trace_id, "032x")
            event_dict["span_id"] = format(ctx.span_id, "016x")

    return event_dict


def add_service_context(
    service_name: str,
    environment: str,
) -> structlog.types.Processor:
    """
    Create a processor that adds service context to all log events.

    Args:
        service_name: Name of the service
        environment: Deployment environment
    """

    def processor(
        logger: WrappedLogger,
        method_name: str,
        event_dict: EventDict,
    ) -> EventDict:
        event_dict["service"] = service_name
        event_dict["environment"] = environment
        return event_dict

    return processor


def add_timestamp(
    logger: WrappedLogger,
    method_name: str,
    event_dict: EventDict,
) -> EventDict:
    """Add ISO8601 timestamp."""
    event_dict["timestamp"] = datetime.now(timezone.utc).isoformat()
    return event_dict


def setup_logging(config: Optional[LoggingConfig] = None, force: bool = False) -> None:
    """
    Configure structlog with OpenTelemetry trace context integration.

    Args:
        config: Logging configuration. Uses defaults if not provided.
        force: Reconfigure even if logging was already set up

    Example:
        >>> setup_logging(LoggingConfig(level="DEBUG", json_format=True))
    """
    global _configured

    if _configured and not force:
        return

    config = config or LoggingConfig()

    processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        add_service_context(config.service_name, config.environment),
    ]

    if config.include_timestamp:
        processors.append(add_timestamp)

    if config.enable_trace_context:
        processors.append(add_trace_context)

    processors.append(structlog.stdlib.PositionalArgumentsFormatter())
    processors.append(structlog.processors.StackInfoRenderer())
    processors.append(structlog.processors.format_exc_info)
    processors.append(structlog.processors.UnicodeDecoder())

    if config.json_format:
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty()))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=config.cache_loggers,
    )

    _configure_stdlib_logging(config)

    _configured = True


def _configure_stdlib_logging(config: LoggingConfig) -> None:
    """Configure Python standard library logging."""
    level = getattr(logging, config.level, logging.INFO)

    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(level)
    if config.json_format:
        handler.setFormatter(_JsonFormatter())
    else:
        handler.setFormatter(logging.Formatter("%(message)s"))

    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    for existing in root_logger.handlers[:]:
        if isinstance(existing, logging.StreamHandler) and getattr(existing, "_versify", False):
            root_logger.removeHandler(existing)

    handler._versify = True  # type: ignore[attr-defined]
    root_logger.addHandler(handler)

    logging.getLogger("opentelemetry").setLevel(logging.WARNING)


class _JsonFormatter(logging.Formatter):
    """JSON formatter for records that did not come through structlog."""

    def format(self, record: logging.LogRecord) -> str:
        message = record.getMessage()
        if message.startswith("{"):
            return message

        log_record: Dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": message,
        }
        if record.exc_info:
            log_record["exception"] = {
                "type": record.exc_info[0].__name__ if record.exc_info[0] else None,
                "message": str(record.exc_info[1]) if record.exc_info[1] else None,
                "traceback": self.formatException(record.exc_info),
            }

        return json.dumps(log_record, default=str)


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """
    Get a structlog logger instance.

    Args:
        name: Logger name, typically __name__

    Example:
        >>> logger = get_logger(__name__)
        >>> logger.warning("Malformed mapping line", key="KJVToSynodal.properties", line=12)
    """
    if not _configured:
        setup_logging()

    return structlog.get_logger(name)


def shutdown_logging() -> None:
    """Flush logging handlers and allow reconfiguration."""
    global _configured

    for handler in logging.getLogger().handlers:
        handler.flush()

    structlog.reset_defaults()
    _configured = False


class LogContext:
    """
    Context manager for adding contextual information to all logs.

    Example:
        >>> with LogContext(mapping="KJVSynodalMapping"):
        ...     logger.info("Translating")
    """

    def __init__(self, **kwargs: Any):
        self.context = kwargs

    def __enter__(self) -> "LogContext":
        structlog.contextvars.bind_contextvars(**self.context)
        return self

    def __exit__(self, *args: Any) -> None:
        structlog.contextvars.unbind_contextvars(*self.context.keys())
