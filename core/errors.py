"""
Versify - Unified Error Handling

Provides the error hierarchy shared by the versification packages.

Features:
- Hierarchical exception classes with context preservation
- Error severity levels for prioritized handling
- Structured error context for debugging
- OpenTelemetry integration for error tracing
"""

from __future__ import annotations

import traceback
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, List, Optional

from opentelemetry import trace
from opentelemetry.trace import Status, StatusCode


class ErrorSeverity(Enum):
    """Error severity levels for prioritized handling."""

    DEBUG = "debug"      # Non-critical, informational
    INFO = "info"        # Minor issue, operation continues
    WARNING = "warning"  # Potential problem, degraded operation
    ERROR = "error"      # Significant failure, operation failed
    CRITICAL = "critical"  # System-level failure


@dataclass
class ErrorContext:
    """Structured context for error debugging and tracing."""

    operation: str
    component: str
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    trace_id: Optional[str] = None
    span_id: Optional[str] = None
    verse_ref: Optional[str] = None
    versification: Optional[str] = None
    metadata: Dict[str, Any] = field(default_factory=dict)
    stack_trace: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert context to dictionary for serialization."""
        return {
            "operation": self.operation,
            "component": self.component,
            "timestamp": self.timestamp.isoformat(),
            "trace_id": self.trace_id,
            "span_id": self.span_id,
            "verse_ref": self.verse_ref,
            "versification": self.versification,
            "metadata": self.metadata,
            "stack_trace": self.stack_trace,
        }

    @classmethod
    def from_current_span(
        cls,
        operation: str,
        component: str,
        **kwargs: Any
    ) -> "ErrorContext":
        """Create context from current OpenTelemetry span."""
        span = trace.get_current_span()
        trace_id = None
        span_id = None

        if span and span.is_recording():
            ctx = span.get_span_context()
            if ctx.is_valid:
                trace_id = format(ctx.trace_id, "032x")
                span_id = format(ctx.span_id, "016x")

        return cls(
            operation=operation,
            component=component,
            trace_id=trace_id,
            span_id=span_id,
            stack_trace=traceback.format_exc(),
            **kwargs
        )


class VersificationError(Exception):
    """
    Base exception for all versification errors.

    Provides:
    - Structured error context
    - Severity level
    - Chained exception support
    - OpenTelemetry span recording
    """

    default_severity: ErrorSeverity = ErrorSeverity.ERROR
    error_code: str = "VERSIFICATION_ERROR"

    def __init__(
        self,
        message: str,
        context: Optional[ErrorContext] = None,
        severity: Optional[ErrorSeverity] = None,
        cause: Optional[Exception] = None,
        recoverable: bool = False,
        suggestions: Optional[List[str]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.context = context
        self.severity = severity or self.default_severity
        self.cause = cause
        self.recoverable = recoverable
        self.suggestions = suggestions or []
        self.timestamp = datetime.now(timezone.utc)

        self._record_to_span()

    def _record_to_span(self) -> None:
        """Record exception to current OpenTelemetry span."""
        span = trace.get_current_span()
        if not (span and span.is_recording()):
            return
        if self.recoverable:
            # Handled where it is raised; the enclosing operation has not failed
            span.add_event("versification.error.recovered", attributes={
                "error.code": self.error_code,
                "error.message": self.message,
            })
            return
        span.set_status(Status(StatusCode.ERROR, self.message))
        span.record_exception(self)
        span.set_attribute("error.code", self.error_code)
        span.set_attribute("error.severity", self.severity.value)
        if self.context:
            span.set_attribute("error.component", self.context.component)
            span.set_attribute("error.operation", self.context.operation)

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for structured output."""
        return {
            "error_code": self.error_code,
            "message": self.message,
            "severity": self.severity.value,
            "recoverable": self.recoverable,
            "suggestions": self.suggestions,
            "timestamp": self.timestamp.isoformat(),
            "context": self.context.to_dict() if self.context else None,
            "cause": str(self.cause) if self.cause else None,
        }

    def __str__(self) -> str:
        parts = [f"[{self.error_code}] {self.message}"]
        if self.context:
            parts.append(f" (component: {self.context.component})")
        if self.cause:
            parts.append(f" [caused by: {self.cause}]")
        return "".join(parts)

    def with_context(self, **kwargs: Any) -> "VersificationError":
        """Add additional context to the error."""
        if self.context:
            self.context.metadata.update(kwargs)
        else:
            self.context = ErrorContext(
                operation="unknown",
                component="unknown",
                metadata=kwargs
            )
        return self


class ConfigError(VersificationError):
    """Configuration-related errors."""

    error_code = "CONFIG_ERROR"
    default_severity = ErrorSeverity.CRITICAL

    def __init__(
        self,
        message: str,
        config_key: Optional[str] = None,
        actual_value: Any = None,
        **kwargs: Any,
    ):
        super().__init__(message, **kwargs)
        self.config_key = config_key
        self.actual_value = actual_value


class NoSuchVerseError(VersificationError):
    """A reference does not name a verse that exists in its versification."""

    error_code = "NO_SUCH_VERSE"
    default_severity = ErrorSeverity.WARNING

    def __init__(
        self,
        message: str,
        text: Optional[str] = None,
        versification: Optional[str] = None,
        **kwargs: Any,
    ):
        kwargs.setdefault("recoverable", True)
        super().__init__(message, **kwargs)
        self.text = text
        self.versification = versification


class UnknownVersificationError(VersificationError):
    """A versification name is not known to the registry."""

    error_code = "UNKNOWN_VERSIFICATION"

    def __init__(
        self,
        name: str,
        known: Optional[List[str]] = None,
        **kwargs: Any,
    ):
        known = sorted(known or [])
        suggestions = [f"Known versifications: {', '.join(known)}"] if known else []
        super().__init__(
            f"Unknown versification '{name}'",
            suggestions=suggestions,
            **kwargs,
        )
        self.name = name


class MappingSourceError(VersificationError):
    """Mapping data could not be read."""

    error_code = "MAPPING_SOURCE_ERROR"

    def __init__(
        self,
        message: str,
        key: Optional[str] = None,
        **kwargs: Any,
    ):
        super().__init__(message, **kwargs)
        self.key = key


class SchemeLoadError(VersificationError):
    """A versification scheme file could not be read or is malformed."""

    error_code = "SCHEME_LOAD_ERROR"

    def __init__(
        self,
        message: str,
        path: Optional[str] = None,
        **kwargs: Any,
    ):
        super().__init__(message, **kwargs)
        self.path = path


class UnsupportedConversionError(VersificationError):
    """No mapping is registered between two versifications."""

    error_code = "UNSUPPORTED_CONVERSION"

    def __init__(
        self,
        from_name: str,
        to_name: str,
        **kwargs: Any,
    ):
        super().__init__(
            f"No mapping between '{from_name}' and '{to_name}'",
            **kwargs,
        )
        self.from_name = from_name
        self.to_name = to_name
