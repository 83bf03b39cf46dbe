"""
Versify - Observability Package

Structured logging and OpenTelemetry tracing for the versification packages.

Components:
- tracing: OpenTelemetry spans with optional console export
- logging: Structlog integration with trace context propagation

Usage:
    from observability import setup_observability, get_logger

    # Initialize at application startup
    setup_observability(log_level="DEBUG")

    logger = get_logger(__name__)
"""
from .tracing import (
    setup_tracing,
    get_tracer,
    create_span,
    TracingConfig,
    shutdown_tracing,
)
from .logging import (
    setup_logging,
    get_logger,
    LoggingConfig,
    LogContext,
    shutdown_logging,
)

__all__ = [
    # Tracing
    "setup_tracing",
    "get_tracer",
    "create_span",
    "TracingConfig",
    "shutdown_tracing",
    # Logging
    "setup_logging",
    "get_logger",
    "LoggingConfig",
    "LogContext",
    "shutdown_logging",
    # Combined setup
    "setup_observability",
    "shutdown_observability",
]


def setup_observability(
    service_name: str = "versify",
    log_level: str = "INFO",
    json_logs: bool = False,
    tracing_enabled: bool = False,
    console_spans: bool = False,
    environment: str = "development",
) -> None:
    """
    Initialize logging and tracing.

    Args:
        service_name: Name of the service for telemetry
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR)
        json_logs: Render logs as JSON instead of console lines
        tracing_enabled: Install an OpenTelemetry SDK tracer provider
        console_spans: Print finished spans to stdout
        environment: Deployment environment
    """
    setup_tracing(TracingConfig(
        service_name=service_name,
        enabled=tracing_enabled,
        console_export=console_spans,
        environment=environment,
    ))
    setup_logging(LoggingConfig(
        service_name=service_name,
        level=log_level,
        json_format=json_logs,
        environment=environment,
    ), force=True)


def shutdown_observability() -> None:
    """Flush and release logging and tracing."""
    shutdown_tracing()
    shutdown_logging()
