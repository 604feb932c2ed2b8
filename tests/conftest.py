"""Shared test fixtures for bytering."""

import logging
from pathlib import Path

import pytest
import structlog


@pytest.fixture
def sample_file(tmp_path: Path) -> Path:
    """Create a small binary file with two occurrences of b'needle'."""
    path = tmp_path / "haystack.bin"
    path.write_bytes(b"hay\x00\xffneedle hay hay needle\n")
    return path


@pytest.fixture
def reset_logging():
    """Restore structlog and stdlib root logging after a test configures them."""
    root = logging.getLogger()
    saved_handlers = root.handlers[:]
    saved_level = root.level
    yield
    for handler in root.handlers[:]:
        if handler not in saved_handlers:
            root.removeHandler(handler)
            handler.close()
    root.setLevel(saved_level)
    structlog.reset_defaults()

