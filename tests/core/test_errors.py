"""Tests for core custom exceptions."""

from pathlib import Path

import pytest

from stagefs.core.errors import (
    CommitFailure,
    DepthLimitExceeded,
    IOFailure,
    NotFoundOrUnreadable,
    StageFsError,
    StagingCollision,
    UnsupportedAlgorithm,
)


@pytest.mark.parametrize(
    "exc",
    [
        NotFoundOrUnreadable(Path("/data"), "does not exist"),
        StagingCollision(Path("/data/.ignore-x"), "busy"),
        CommitFailure(Path("/data/.ignore-x"), Path("/data/x"), "denied"),
        IOFailure(Path("/data/x"), "disk full"),
        UnsupportedAlgorithm("whirlpool"),
        DepthLimitExceeded(Path("/data/deep"), 4),
    ],
)
def test_all_errors_share_base(exc: StageFsError) -> None:
    """Test that every error can be caught through the base class."""
    assert isinstance(exc, StageFsError)
    assert exc.to_dict()["error"]
    assert type(exc).__name__ in repr(exc)


def test_not_found_or_unreadable() -> None:
    """Test NotFoundOrUnreadable attributes and message."""
    exc = NotFoundOrUnreadable(Path("/data"), "not a directory")

    assert exc.path == Path("/data")
    assert "not a directory" in str(exc)
    assert exc.to_dict() == {
        "error": "not_found_or_unreadable",
        "path": str(Path("/data")),
        "reason": "not a directory",
    }


def test_commit_failure_to_dict() -> None:
    """Test that CommitFailure reports both ends of the failed rename."""
    exc = CommitFailure(Path("/d/.ignore-rename-to-x"), Path("/d/x"), "denied")

    data = exc.to_dict()
    assert data["error"] == "commit_failure"
    assert data["staging_path"] == str(Path("/d/.ignore-rename-to-x"))
    assert data["target"] == str(Path("/d/x"))
    assert data["reason"] == "denied"


def test_unsupported_algorithm_message() -> None:
    """Test that the requested algorithm name appears in the message."""
    exc = UnsupportedAlgorithm("whirlpool")

    assert exc.algorithm == "whirlpool"
    assert "'whirlpool'" in str(exc)


def test_base_error_to_dict() -> None:
    """Test the generic to_dict of the base class."""
    assert StageFsError("boom").to_dict() == {
        "error": "stagefs_error",
        "message": "boom",
    }
