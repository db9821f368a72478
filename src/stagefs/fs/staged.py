"""Staged (via-temp) filesystem mutations.

Every operation routes its change through a sibling staging path, named by
prefixing the target's final segment with a marker, and makes the result
visible with a single same-directory rename. If the process dies midway,
the target holds either its old state or its new state; the only possible
leftover is the staging artifact, which the next run on the same target
clears or resumes.

All operations return a boolean. Causes of failure are logged through the
injected structlog logger; best-effort rollback steps that fail are logged
and swallowed.
"""

import os
from collections.abc import Callable
from pathlib import Path
from typing import Any

import structlog

from stagefs.core.constants import (
    DELETE_MARKER,
    MAX_DEPTH,
    MKDIR_MARKER,
    MKDIRS_MARKER,
    RENAME_MARKER,
)
from stagefs.core.errors import (
    CommitFailure,
    IOFailure,
    NotFoundOrUnreadable,
    StageFsError,
    StagingCollision,
)
from stagefs.fs.paths import StrPath, canonical_path, staging_path
from stagefs.fs.walker import recursive_delete
from stagefs.utils.debug import debug


def rename_via(
    src: StrPath,
    dst: StrPath,
    marker: str | None = None,
    *,
    logger: Any = None,
) -> bool:
    """Rename ``src`` to ``dst`` through a staging sibling of ``dst``.

    Steps:
        1. ``src`` -> staging path (in ``dst``'s directory)
        2. staging path -> ``dst``; on failure the staged file is moved back
           to ``src``

    If ``src`` is missing but the staging path exists, the rename resumes at
    step 2. The staging path is assumed to come from an interrupted run
    with the same ``dst``; whatever it holds is committed, replacing an
    existing ``dst``. A ``src`` that is the staging path itself is committed
    directly, and a ``src`` inside the staging path is refused.

    Args:
        src: Path to move
        dst: Final location
        marker: Staging prefix (defaults to RENAME_MARKER)
        logger: Optional structlog logger instance

    Returns:
        True if ``dst`` now holds the former ``src``
    """
    marker = marker or RENAME_MARKER
    log = _get_logger(logger).bind(
        op="rename_via", src=str(src), dst=str(dst), marker=marker
    )

    try:
        source = canonical_path(src)
        target = canonical_path(dst)
        staging = staging_path(target, marker)
    except (OSError, ValueError) as e:
        log.warning("staged.rename.invalid_path", error=str(e))
        return False

    try:
        if staging in source.parents:
            raise StagingCollision(
                staging, f"source {source} lies inside the staging path"
            )

        if source == staging:
            log.info("staged.rename.source_is_staging", staging=str(staging))
        elif not os.path.lexists(source) and os.path.lexists(staging):
            log.info("staged.rename.resuming", staging=str(staging))
        else:
            _clear_staging(staging, log)
            _stage(source, staging)

        try:
            _rename(staging, target)
        except OSError as e:
            if source != staging:
                _compensate(
                    log, "staged.rename.rollback_failed", _rename, staging, source
                )
            raise CommitFailure(staging, target, _reason(e)) from e
    except StageFsError as e:
        log.warning("staged.rename.failed", **e.to_dict())
        return False

    log.info("staged.rename.committed")
    return True


def delete_via(
    path: StrPath,
    marker: str | None = None,
    *,
    logger: Any = None,
) -> bool:
    """Delete ``path`` by detaching it to a staging sibling first.

    The target vanishes in one rename; the slow recursive delete then runs
    on the detached staging path. A crash during the bulk delete cannot
    bring a half-deleted tree back at the original path.

    If ``path`` is missing but its staging path exists, a previous run was
    interrupted after detaching; the bulk delete is finished.

    Args:
        path: File or directory to delete
        marker: Staging prefix (defaults to DELETE_MARKER)
        logger: Optional structlog logger instance

    Returns:
        True if ``path`` is gone and its staged content was deleted
    """
    marker = marker or DELETE_MARKER
    log = _get_logger(logger).bind(op="delete_via", path=str(path), marker=marker)

    try:
        target = canonical_path(path)
        staging = staging_path(target, marker)
    except (OSError, ValueError) as e:
        log.warning("staged.delete.invalid_path", error=str(e))
        return False

    try:
        if os.path.lexists(target):
            _clear_staging(staging, log)
            _stage(target, staging)
        elif os.path.lexists(staging):
            log.info("staged.delete.resuming", staging=str(staging))
        else:
            raise NotFoundOrUnreadable(target, "does not exist")

        if not recursive_delete(staging, logger=log):
            if os.path.lexists(staging):
                _compensate(
                    log, "staged.delete.rollback_failed", _rename, staging, target
                )
            raise IOFailure(staging, "staged content could not be deleted")
    except StageFsError as e:
        log.warning("staged.delete.failed", **e.to_dict())
        return False

    log.info("staged.delete.committed")
    return True


def mkdir_via(
    folder: StrPath,
    marker: str | None = None,
    *,
    logger: Any = None,
) -> bool:
    """Create a directory off to the side and rename it into place.

    Succeeds immediately if ``folder`` already exists. The parent directory
    must exist; use mkdirs_via() to create missing ancestors.

    Args:
        folder: Directory to create
        marker: Staging prefix (defaults to MKDIR_MARKER)
        logger: Optional structlog logger instance

    Returns:
        True if ``folder`` exists afterwards
    """
    marker = marker or MKDIR_MARKER
    log = _get_logger(logger).bind(op="mkdir_via", folder=str(folder), marker=marker)

    if Path(folder).exists():
        return True

    try:
        target = canonical_path(folder)
        staging = staging_path(target, marker)
    except (OSError, ValueError) as e:
        log.warning("staged.mkdir.invalid_path", error=str(e))
        return False

    try:
        if not target.parent.is_dir():
            raise NotFoundOrUnreadable(target.parent, "parent directory does not exist")

        _clear_staging(staging, log)
        try:
            os.mkdir(staging)
        except OSError as e:
            raise IOFailure(staging, _reason(e)) from e

        try:
            _rename(staging, target)
        except OSError as e:
            _compensate(log, "staged.mkdir.rollback_failed", os.rmdir, staging)
            raise CommitFailure(staging, target, _reason(e)) from e
    except StageFsError as e:
        log.warning("staged.mkdir.failed", **e.to_dict())
        return False

    log.info("staged.mkdir.committed")
    return True


def mkdirs_via(
    folder: StrPath,
    marker: str | None = None,
    *,
    max_depth: int = MAX_DEPTH,
    logger: Any = None,
) -> bool:
    """Create a directory and any missing ancestors, one staged level at a time.

    Missing ancestors are created top-down with mkdir_via(), so every level
    appears atomically. The first level that fails aborts the operation;
    levels created before it are kept.

    Args:
        folder: Directory to create
        marker: Staging prefix for every level (defaults to MKDIRS_MARKER)
        max_depth: Most levels that may be missing
        logger: Optional structlog logger instance

    Returns:
        True if ``folder`` exists afterwards
    """
    marker = marker or MKDIRS_MARKER
    log = _get_logger(logger).bind(op="mkdirs_via", folder=str(folder), marker=marker)

    if Path(folder).exists():
        return True

    try:
        current = canonical_path(folder)
    except OSError as e:
        log.warning("staged.mkdirs.invalid_path", error=str(e))
        return False

    missing: list[Path] = []
    while not current.exists():
        if len(missing) >= max_depth:
            log.warning("staged.mkdirs.depth_exceeded", max_depth=max_depth)
            return False
        missing.append(current)
        if current.parent == current:
            break
        current = current.parent

    for level in reversed(missing):
        debug(f"mkdirs_via creating level {level}")
        if not mkdir_via(level, marker, logger=log):
            log.warning("staged.mkdirs.failed", level=str(level))
            return False

    return True


def _get_logger(logger: Any) -> Any:
    return logger if logger is not None else structlog.get_logger(__name__)


def _reason(error: OSError) -> str:
    return error.strerror or str(error)


def _rename(src: Path, dst: Path) -> None:
    os.rename(src, dst)
    debug(f"Renamed {src} -> {dst}")


def _stage(source: Path, staging: Path) -> None:
    """Move the operation's subject onto its staging path."""
    try:
        _rename(source, staging)
    except OSError as e:
        raise IOFailure(source, f"could not stage to {staging}: {_reason(e)}") from e


def _clear_staging(staging: Path, log: Any) -> None:
    """Force-remove whatever a crashed earlier run left at the staging path."""
    if not os.path.lexists(staging):
        return

    log.info("staged.leftover_found", staging=str(staging))
    if not recursive_delete(staging, logger=log):
        raise StagingCollision(staging, "leftover artifact could not be removed")


def _compensate(
    log: Any, event: str, step: Callable[..., None], *args: Path
) -> None:
    """Run one rollback step. Its failure is logged, never raised."""
    try:
        step(*args)
    except OSError as e:
        log.warning(event, error=str(e))
        return

    log.info("staged.rolled_back", step=step.__name__)
