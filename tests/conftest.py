"""Pytest configuration and fixtures for stagefs tests."""

from collections.abc import Iterator
from pathlib import Path
from unittest.mock import Mock

import pytest
import structlog


@pytest.fixture(autouse=True)
def _reset_structlog() -> Iterator[None]:
    """Undo any structlog configuration a test (or the CLI) applied."""
    yield
    structlog.reset_defaults()


@pytest.fixture
def sample_tree(tmp_path: Path) -> Path:
    """Create a small directory tree for testing.

    Structure:
        root/
            x
            d/
                y
                e/
                    z
    """
    root = tmp_path / "root"
    (root / "d" / "e").mkdir(parents=True)
    (root / "x").write_text("x content")
    (root / "d" / "y").write_text("y content")
    (root / "d" / "e" / "z").write_text("z content")
    return root


@pytest.fixture
def mock_logger() -> Mock:
    """A structlog-shaped logger whose bound children are the same Mock."""
    logger = Mock()
    logger.bind.return_value = logger
    return logger
