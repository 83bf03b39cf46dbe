"""
Versify - Test Configuration

Pytest fixtures and configuration for all tests.
"""
import threading
from pathlib import Path
from typing import Dict, List, Tuple

import pytest
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import SimpleSpanProcessor
from opentelemetry.sdk.trace.export.in_memory_span_exporter import InMemorySpanExporter

import observability.tracing
from observability.logging import LoggingConfig, setup_logging

# Uncached loggers so structlog.testing.capture_logs sees every event
setup_logging(LoggingConfig(level="DEBUG", json_format=False, cache_loggers=False), force=True)

from versification import (  # noqa: E402
    InMemoryMappingSource,
    MappingEntry,
    Versification,
    VersificationMapping,
    VersificationRegistry,
)


# Last verse of each chapter, a small excerpt of two real schemes
KJV_BOOKS: Dict[str, List[int]] = {
    "Gen": [31, 25, 24, 26, 32],
    "Exod": [22, 25, 22, 31, 23],
    "Ps": [6, 12, 8, 8, 12],
    "Mal": [14, 17, 18, 6],
}

SYNODAL_BOOKS: Dict[str, List[int]] = {
    "Gen": [31, 25, 24, 26, 32],
    "Exod": [22, 25, 22, 31, 23],
    "Ps": [6, 13, 9, 8, 12],
    "Mal": [14, 17, 24],
}

VULGATE_BOOKS: Dict[str, List[int]] = {
    "Gen": [31, 25, 24, 26, 32],
}


@pytest.fixture
def kjv() -> Versification:
    return Versification.from_dict("KJV", KJV_BOOKS)


@pytest.fixture
def synodal() -> Versification:
    return Versification.from_dict("Synodal", SYNODAL_BOOKS)


@pytest.fixture
def vulgate() -> Versification:
    return Versification.from_dict("Vulg", VULGATE_BOOKS)


@pytest.fixture
def registry(kjv, synodal, vulgate) -> VersificationRegistry:
    return VersificationRegistry([kjv, synodal, vulgate])


@pytest.fixture
def kjv_synodal_entries() -> List[Tuple[str, str]]:
    """Mapping lines as they appear in KJVToSynodal.properties."""
    return [
        ("Gen.3.1", "Exod.4.2"),
        ("Gen.3.16a", "Exod.4.17"),
        ("Gen.3.16b", "Exod.4.16"),
        ("Ps.2.0", "Ps.2.1"),
        ("Ps.3.1", "Ps.3.2"),
        ("Mal.4.1", "Mal.3.19"),
        ("Mal.4.6", "Mal.3.24"),
    ]


class CountingMappingSource(InMemoryMappingSource):
    """In-memory source that records how often each table is read."""

    def __init__(self, tables=None, delay: float = 0.0):
        super().__init__(tables)
        self.calls: Dict[str, int] = {}
        self.delay = delay
        self._calls_lock = threading.Lock()

    def entries(self, key: str) -> List[MappingEntry]:
        with self._calls_lock:
            self.calls[key] = self.calls.get(key, 0) + 1
        if self.delay:
            threading.Event().wait(self.delay)
        return super().entries(key)


@pytest.fixture
def counting_source_cls():
    return CountingMappingSource


@pytest.fixture
def counting_source(kjv_synodal_entries) -> CountingMappingSource:
    return CountingMappingSource({"KJVToSynodal.properties": kjv_synodal_entries})


@pytest.fixture
def kjv_synodal(kjv, synodal, counting_source) -> VersificationMapping:
    return VersificationMapping(kjv, synodal, counting_source)


@pytest.fixture
def tmp_data_dir(tmp_path) -> Path:
    """Temporary data directory for tests."""
    data_dir = tmp_path / "data"
    data_dir.mkdir()
    return data_dir


@pytest.fixture
def span_exporter(monkeypatch) -> InMemorySpanExporter:
    """Collect finished spans from create_span without touching the global provider."""
    exporter = InMemorySpanExporter()
    provider = TracerProvider()
    provider.add_span_processor(SimpleSpanProcessor(exporter))
    monkeypatch.setattr(
        observability.tracing,
        "get_tracer",
        lambda name, version="1.0.0": provider.get_tracer(name, version),
    )
    yield exporter
    provider.shutdown()


# Markers
def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line("markers", "property: marks property-based tests using Hypothesis")
    config.addinivalue_line("markers", "concurrency: marks tests that start threads")
