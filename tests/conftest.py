"""Shared fixtures for reference-resolver tests."""

from collections.abc import Callable
from pathlib import Path

import pytest
from reference_resolver.testing import CountingFileSystem
from reference_resolver.testing import LogRecorder


@pytest.fixture
def recorder() -> LogRecorder:
    """Captures the resolution sinks."""
    return LogRecorder()


@pytest.fixture
def file_system() -> CountingFileSystem:
    """Real-disk file system that records every probe."""
    return CountingFileSystem()


@pytest.fixture
def make_file() -> Callable[[Path], Path]:
    """Create a file (and its parent directories) and return its path."""

    def _make(path: Path) -> Path:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(b"MZ")
        return path

    return _make
