"""Custom exceptions for stagefs.

This module defines the typed exceptions raised by the enumeration and
hashing primitives, and used internally by the staged mutation protocol
before being reduced to a boolean result.
"""

from pathlib import Path
from typing import Any


class StageFsError(Exception):
    """Base exception for all stagefs errors.

    All custom exceptions inherit from this base class to allow for broad
    exception handling when needed.
    """

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to a dictionary for structured output."""
        return {"error": "stagefs_error", "message": str(self)}


class NotFoundOrUnreadable(StageFsError):
    """Raised when a root or source path is missing or cannot be read.

    Attributes:
        path: The offending path
        reason: Human-readable reason (e.g. 'does not exist', 'not a directory')
    """

    def __init__(self, path: Path, reason: str) -> None:
        self.path = Path(path)
        self.reason = reason
        super().__init__(f"Invalid directory {self.path}: {reason}")

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": "not_found_or_unreadable",
            "path": str(self.path),
            "reason": self.reason,
        }

    def __repr__(self) -> str:
        return f"NotFoundOrUnreadable(path={str(self.path)!r}, reason={self.reason!r})"


class StagingCollision(StageFsError):
    """Raised when a leftover staging path could not be cleared before use.

    A leftover staging artifact is normally removed by force; this error only
    surfaces when that removal itself fails.

    Attributes:
        staging_path: The staging path that could not be cleared
        reason: Human-readable reason
    """

    def __init__(self, staging_path: Path, reason: str) -> None:
        self.staging_path = Path(staging_path)
        self.reason = reason
        super().__init__(
            f"Staging path {self.staging_path} could not be cleared: {reason}"
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": "staging_collision",
            "staging_path": str(self.staging_path),
            "reason": self.reason,
        }

    def __repr__(self) -> str:
        return (
            f"StagingCollision(staging_path={str(self.staging_path)!r}, "
            f"reason={self.reason!r})"
        )


class CommitFailure(StageFsError):
    """Raised when the final rename into place fails after a successful staging step.

    Attributes:
        staging_path: Path holding the staged artifact
        target: Path the artifact should have been committed to
        reason: Human-readable reason
    """

    def __init__(self, staging_path: Path, target: Path, reason: str) -> None:
        self.staging_path = Path(staging_path)
        self.target = Path(target)
        self.reason = reason
        super().__init__(
            f"Commit {self.staging_path} -> {self.target} failed: {reason}"
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": "commit_failure",
            "staging_path": str(self.staging_path),
            "target": str(self.target),
            "reason": self.reason,
        }

    def __repr__(self) -> str:
        return (
            f"CommitFailure(staging_path={str(self.staging_path)!r}, "
            f"target={str(self.target)!r}, reason={self.reason!r})"
        )


class IOFailure(StageFsError):
    """Raised for generic read, write, create or delete errors.

    Attributes:
        path: Path the failing operation was acting on
        reason: Human-readable reason
    """

    def __init__(self, path: Path, reason: str) -> None:
        self.path = Path(path)
        self.reason = reason
        super().__init__(f"I/O failure on {self.path}: {reason}")

    def to_dict(self) -> dict[str, Any]:
        return {"error": "io_failure", "path": str(self.path), "reason": self.reason}

    def __repr__(self) -> str:
        return f"IOFailure(path={str(self.path)!r}, reason={self.reason!r})"


class UnsupportedAlgorithm(StageFsError):
    """Raised when a digest algorithm is not available.

    Attributes:
        algorithm: The algorithm name as requested by the caller
    """

    def __init__(self, algorithm: str) -> None:
        self.algorithm = algorithm
        super().__init__(f"Unsupported digest algorithm: {algorithm!r}")

    def to_dict(self) -> dict[str, Any]:
        return {"error": "unsupported_algorithm", "algorithm": self.algorithm}

    def __repr__(self) -> str:
        return f"UnsupportedAlgorithm(algorithm={self.algorithm!r})"


class DepthLimitExceeded(StageFsError):
    """Raised when a recursive walk goes deeper than the configured limit.

    Attributes:
        path: The directory at which the limit was hit
        max_depth: The configured maximum depth
    """

    def __init__(self, path: Path, max_depth: int) -> None:
        self.path = Path(path)
        self.max_depth = max_depth
        super().__init__(f"Maximum depth {max_depth} exceeded at {self.path}")

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": "depth_limit_exceeded",
            "path": str(self.path),
            "max_depth": self.max_depth,
        }

    def __repr__(self) -> str:
        return (
            f"DepthLimitExceeded(path={str(self.path)!r}, max_depth={self.max_depth})"
        )
