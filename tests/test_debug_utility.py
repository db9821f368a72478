"""Tests for the debug utility module.

The debug utility provides a single entrypoint for low-level traces that can
be toggled via the STAGEFS_DEBUG environment variable.
"""

import importlib
from collections.abc import Callable, Iterator
from io import StringIO
from unittest.mock import patch

import pytest

from stagefs.utils import debug as debug_module


def _reloaded_debug(
    monkeypatch: pytest.MonkeyPatch, value: str | None
) -> Callable[[object], None]:
    if value is None:
        monkeypatch.delenv("STAGEFS_DEBUG", raising=False)
    else:
        monkeypatch.setenv("STAGEFS_DEBUG", value)
    importlib.reload(debug_module)
    return debug_module.debug


@pytest.fixture(autouse=True)
def _restore_debug_module(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    yield
    monkeypatch.undo()
    importlib.reload(debug_module)


def test_debug_disabled_by_default(monkeypatch: pytest.MonkeyPatch) -> None:
    """Test that debug output is disabled when STAGEFS_DEBUG is not set."""
    debug = _reloaded_debug(monkeypatch, None)

    with patch("sys.stderr", new=StringIO()) as fake_stderr:
        debug("This should not print")

    assert fake_stderr.getvalue() == ""


@pytest.mark.parametrize("value", ["1", "true", "True", "YES"])
def test_debug_enabled_for_truthy_values(
    monkeypatch: pytest.MonkeyPatch, value: str
) -> None:
    """Test that debug prints to stderr with a [DEBUG] prefix."""
    debug = _reloaded_debug(monkeypatch, value)

    with patch("sys.stderr", new=StringIO()) as fake_stderr:
        debug(f"Testing {value}")

    output = fake_stderr.getvalue()
    assert f"Testing {value}" in output
    assert output.startswith("[DEBUG]")


@pytest.mark.parametrize("value", ["0", "false", "no", ""])
def test_debug_disabled_for_falsy_values(
    monkeypatch: pytest.MonkeyPatch, value: str
) -> None:
    """Test that debug stays silent for falsy values."""
    debug = _reloaded_debug(monkeypatch, value)

    with patch("sys.stderr", new=StringIO()) as fake_stderr:
        debug("silent")

    assert fake_stderr.getvalue() == ""
