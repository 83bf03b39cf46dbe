"""
Versify - Core Module

Provides foundational components shared by every other package:
- Unified error handling
- Type definitions and the Result type

Each component here is dependency-free from other Versify modules, making
it the stable foundation everything else builds upon.

Usage:
    from core import VersificationError, NoSuchVerseError, Result
"""

from core.errors import (
    VersificationError,
    ConfigError,
    NoSuchVerseError,
    UnknownVersificationError,
    MappingSourceError,
    SchemeLoadError,
    UnsupportedConversionError,
    ErrorContext,
    ErrorSeverity,
)
from core.types import (
    OsisRef,
    BookId,
    VersificationName,
    Result,
)


__all__ = [
    # ========================================================================
    # ERRORS
    # ========================================================================
    "VersificationError",
    "ConfigError",
    "NoSuchVerseError",
    "UnknownVersificationError",
    "MappingSourceError",
    "SchemeLoadError",
    "UnsupportedConversionError",
    "ErrorContext",
    "ErrorSeverity",

    # ========================================================================
    # TYPES
    # ========================================================================
    "OsisRef",
    "BookId",
    "VersificationName",
    "Result",
]
