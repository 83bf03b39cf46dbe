"""
Versify - Tracing with OpenTelemetry

Spans around mapping builds and conversions. Until setup_tracing is called
the OpenTelemetry API hands out no-op tracers, so library use stays silent.

Usage:
    from observability.tracing import setup_tracing, create_span

    # Setup at startup
    setup_tracing(TracingConfig(console_export=True))

    with create_span("versification.mapping.build", attributes={"mapping.key": key}) as span:
        span.set_attribute("mapping.loaded", loaded)
"""
from __future__ import annotations

import os
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, Optional

from opentelemetry import trace
from opentelemetry.sdk.resources import Resource, SERVICE_NAME, SERVICE_VERSION
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import ConsoleSpanExporter, SimpleSpanProcessor
from opentelemetry.trace import SpanKind, Status, StatusCode

# Global state
_tracer_provider: Optional[TracerProvider] = None


@dataclass
class TracingConfig:
    """Configuration for OpenTelemetry tracing."""

    service_name: str = "versify"
    service_version: str = "1.0.0"
    enabled: bool = field(
        default_factory=lambda: os.getenv("OTEL_TRACING_ENABLED", "false").lower() == "true"
    )
    environment: str = field(
        default_factory=lambda: os.getenv("ENVIRONMENT", "development")
    )
    console_export: bool = field(
        default_factory=lambda: os.getenv("OTEL_CONSOLE_EXPORT", "false").lower() == "true"
    )


def setup_tracing(config: Optional[TracingConfig] = None) -> Optional[TracerProvider]:
    """
    Install an SDK tracer provider.

    Returns:
        The installed provider, or None when tracing is disabled
    """
    global _tracer_provider

    if _tracer_provider is not None:
        return _tracer_provider

    config = config or TracingConfig()
    if not config.enabled:
        return None

    resource = Resource.create({
        SERVICE_NAME: config.service_name,
        SERVICE_VERSION: config.service_version,
        "deployment.environment": config.environment,
    })
    provider = TracerProvider(resource=resource)
    if config.console_export:
        provider.add_span_processor(SimpleSpanProcessor(ConsoleSpanExporter()))

    trace.set_tracer_provider(provider)
    _tracer_provider = provider
    return provider


def get_tracer(name: str, version: str = "1.0.0") -> trace.Tracer:
    """Get a tracer from the global provider (no-op until setup_tracing)."""
    return trace.get_tracer(name, version)


def shutdown_tracing() -> None:
    """Flush pending spans and release the provider."""
    global _tracer_provider
    if _tracer_provider is not None:
        _tracer_provider.shutdown()
    _tracer_provider = None


@contextmanager
def create_span(
    name: str,
    kind: SpanKind = SpanKind.INTERNAL,
    attributes: Optional[Dict[str, Any]] = None,
    tracer_name: str = "versify",
) -> Iterator[trace.Span]:
    """
    Context manager for creating spans with automatic error handling.

    Args:
        name: Span name
        kind: Span kind
        attributes: Initial span attributes
        tracer_name: Name of the tracer to use
    """
    tracer = get_tracer(tracer_name)
    with tracer.start_as_current_span(name, kind=kind) as span:
        if attributes:
            for key, value in attributes.items():
                span.set_attribute(key, value)
        try:
            yield span
        except Exception as e:
            span.set_status(Status(StatusCode.ERROR, str(e)))
            span.record_exception(e)
            raise
