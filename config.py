"""
Versify - Configuration

Centralized configuration management.
Uses environment variables with sensible defaults.
"""
import os
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from dotenv import load_dotenv

from core.errors import ConfigError

# Load environment variables from .env file
load_dotenv()


class Environment(Enum):
    """Deployment environments."""
    DEVELOPMENT = "development"
    TESTING = "testing"
    PRODUCTION = "production"


class LogLevel(Enum):
    """Logging levels."""
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


def _parse_pairs(value: str) -> List[Tuple[str, str]]:
    """Parse "KJV:Synodal,KJV:Vulg" into [("KJV", "Synodal"), ("KJV", "Vulg")]."""
    pairs = []
    for item in value.split(","):
        item = item.strip()
        if not item:
            continue
        left, sep, right = item.partition(":")
        if not sep or not left.strip() or not right.strip():
            raise ConfigError(
                f"Invalid mapping pair '{item}', expected LEFT:RIGHT",
                config_key="VERSIFY_MAPPINGS",
                actual_value=value,
                suggestions=["Use comma-separated LEFT:RIGHT pairs, e.g. KJV:Synodal"],
            )
        pairs.append((left.strip(), right.strip()))
    return pairs


@dataclass
class VersificationConfig:
    """Where versification data lives and which mappings to load."""
    mappings_dir: Path = field(default_factory=lambda: Path(os.getenv("VERSIFY_MAPPINGS_DIR", "./versificationmaps")))
    schemes_dir: Path = field(default_factory=lambda: Path(os.getenv("VERSIFY_SCHEMES_DIR", "./versifications")))
    encoding: str = field(default_factory=lambda: os.getenv("VERSIFY_MAPPINGS_ENCODING", "utf-8"))
    mapping_pairs: List[Tuple[str, str]] = field(
        default_factory=lambda: _parse_pairs(os.getenv("VERSIFY_MAPPINGS", ""))
    )


@dataclass
class LoggingConfig:
    """Logging configuration."""
    level: str = field(default_factory=lambda: os.getenv("LOG_LEVEL", "INFO").upper())
    json_format: bool = field(default_factory=lambda: os.getenv("LOG_FORMAT", "console").lower() == "json")


@dataclass
class ObservabilityConfig:
    """OpenTelemetry tracing configuration."""
    tracing_enabled: bool = field(
        default_factory=lambda: os.getenv("OTEL_TRACING_ENABLED", "false").lower() == "true"
    )
    console_export: bool = field(
        default_factory=lambda: os.getenv("OTEL_CONSOLE_EXPORT", "false").lower() == "true"
    )
    service_name: str = field(
        default_factory=lambda: os.getenv("OTEL_SERVICE_NAME", "versify")
    )


@dataclass
class Config:
    """Main configuration class combining all sub-configs."""
    env: Environment = field(default_factory=lambda: Environment(os.getenv("ENVIRONMENT", "development")))

    versification: VersificationConfig = field(default_factory=VersificationConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    observability: ObservabilityConfig = field(default_factory=ObservabilityConfig)

    def validate(self) -> List[str]:
        """Return a list of configuration problems (empty when valid)."""
        problems = []
        if self.logging.level not in LogLevel.__members__:
            problems.append(f"LOG_LEVEL '{self.logging.level}' is not one of {', '.join(LogLevel.__members__)}")
        if not self.versification.mappings_dir.is_dir():
            problems.append(f"Mappings directory not found: {self.versification.mappings_dir}")
        if not self.versification.schemes_dir.is_dir():
            problems.append(f"Versifications directory not found: {self.versification.schemes_dir}")
        return problems

    def to_dict(self) -> Dict[str, Any]:
        """Convert config to dictionary."""
        return {
            "env": self.env.value,
            "versification": {
                "mappings_dir": str(self.versification.mappings_dir),
                "schemes_dir": str(self.versification.schemes_dir),
                "encoding": self.versification.encoding,
                "mapping_pairs": [f"{left}:{right}" for left, right in self.versification.mapping_pairs],
            },
            "logging": {
                "level": self.logging.level,
                "json_format": self.logging.json_format,
            },
            "observability": {
                "tracing_enabled": self.observability.tracing_enabled,
                "console_export": self.observability.console_export,
            },
        }


# Singleton configuration instance
_config: Optional[Config] = None


def get_config() -> Config:
    """Get or create configuration singleton."""
    global _config
    if _config is None:
        _config = Config()
    return _config


def reload_config() -> Config:
    """Reload configuration from environment."""
    global _config
    load_dotenv(override=True)
    _config = Config()
    return _config
