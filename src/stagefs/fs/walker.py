"""Recursive directory enumeration and deletion.

The walker produces a deterministic, sorted listing of everything below a
root directory. Its recursive delete is the cleanup primitive used by the
staged mutation protocol.
"""

import os
from collections.abc import Iterator
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Literal

import structlog

from stagefs.core.constants import MAX_DEPTH
from stagefs.core.errors import DepthLimitExceeded, NotFoundOrUnreadable
from stagefs.utils.debug import debug

OnUnreadable = Literal["skip", "fail"]


@dataclass(frozen=True)
class DirectoryEntry:
    """A single path produced by the walker."""

    path: Path
    is_directory: bool


def iter_entries(
    root: str | os.PathLike[str],
    *,
    on_unreadable: OnUnreadable = "skip",
    max_depth: int = MAX_DEPTH,
    logger: Any = None,
) -> Iterator[DirectoryEntry]:
    """Walk a directory tree depth-first, yielding entries in pre-order.

    A directory is yielded before its children, and its children are
    exhausted before the walk moves on to its next sibling. Symlinks are
    yielded as leaves and never followed. Entries come in the order the
    filesystem lists them; use recursive_list() for a sorted result.

    Args:
        root: Directory to walk
        on_unreadable: 'skip' treats an unlistable subdirectory as empty,
            'fail' raises NotFoundOrUnreadable
        max_depth: Deepest level below root that may be listed
        logger: Optional structlog logger instance

    Returns:
        Iterator of DirectoryEntry for every file, symlink and directory
        below root. The root is validated before this returns; the other
        errors below surface while iterating.

    Raises:
        NotFoundOrUnreadable: If root is missing, not a directory or not
            readable, or a subdirectory is unreadable in 'fail' mode
        DepthLimitExceeded: If the tree is deeper than max_depth
    """
    log = logger if logger is not None else structlog.get_logger(__name__)
    root_path = _check_root(root)
    return _walk(root_path, on_unreadable, max_depth, log)


def _walk(
    root_path: Path, on_unreadable: OnUnreadable, max_depth: int, log: Any
) -> Iterator[DirectoryEntry]:
    stack: list[tuple[Iterator[os.DirEntry[str]], int]] = [
        (iter(_list_children(root_path, on_unreadable, log)), 1)
    ]
    while stack:
        children, depth = stack[-1]
        entry = next(children, None)
        if entry is None:
            stack.pop()
            continue

        try:
            is_directory = entry.is_dir(follow_symlinks=False)
        except OSError:
            is_directory = False

        path = Path(entry.path)
        yield DirectoryEntry(path=path, is_directory=is_directory)

        if is_directory:
            if depth + 1 > max_depth:
                raise DepthLimitExceeded(path, max_depth)
            stack.append((iter(_list_children(path, on_unreadable, log)), depth + 1))


def recursive_list(
    root: str | os.PathLike[str],
    include_directories: bool = False,
    *,
    on_unreadable: OnUnreadable = "skip",
    max_depth: int = MAX_DEPTH,
    logger: Any = None,
) -> list[Path]:
    """List every file below root, sorted by path string.

    Args:
        root: Directory to list
        include_directories: Whether directories are part of the result
        on_unreadable: 'skip' (default) or 'fail', see iter_entries()
        max_depth: Deepest level below root that may be listed
        logger: Optional structlog logger instance

    Returns:
        Paths under the resolved root, sorted lexicographically by their
        string form so the order does not depend on the platform

    Raises:
        NotFoundOrUnreadable: If root is missing, not a directory or not readable
        DepthLimitExceeded: If the tree is deeper than max_depth
    """
    result = [
        entry.path
        for entry in iter_entries(
            root, on_unreadable=on_unreadable, max_depth=max_depth, logger=logger
        )
        if include_directories or not entry.is_directory
    ]
    result.sort(key=str)

    debug(f"Listed {len(result)} entries below {root}")
    return result


def recursive_delete(
    path: str | os.PathLike[str],
    *,
    max_depth: int = MAX_DEPTH,
    logger: Any = None,
) -> bool:
    """Delete a file, or a directory and everything below it.

    Deletion is best-effort: a child that cannot be removed does not stop
    the attempts on its siblings, but makes the overall result False.

    Args:
        path: File, symlink or directory to delete
        max_depth: Deepest level below path that may be descended into
        logger: Optional structlog logger instance

    Returns:
        True if everything was deleted, False if anything remains or the
        path did not exist
    """
    log = logger if logger is not None else structlog.get_logger(__name__)
    target = Path(path)

    if not os.path.lexists(target):
        debug(f"Nothing to delete at {target}")
        return False

    return _delete_tree(target, 0, max_depth, log)


def _check_root(root: str | os.PathLike[str]) -> Path:
    """Validate a walk root and return its resolved form."""
    root_path = Path(root)

    if not root_path.exists():
        raise NotFoundOrUnreadable(root_path, "does not exist")
    if not root_path.is_dir():
        raise NotFoundOrUnreadable(root_path, "not a directory")
    if not os.access(root_path, os.R_OK | os.X_OK):
        raise NotFoundOrUnreadable(root_path, "not readable")

    return root_path.resolve()


def _list_children(
    directory: Path, on_unreadable: OnUnreadable, log: Any
) -> list[os.DirEntry[str]]:
    """List a directory, applying the unreadable-directory policy."""
    try:
        with os.scandir(directory) as it:
            return list(it)
    except OSError as e:
        if on_unreadable == "fail":
            raise NotFoundOrUnreadable(
                directory, f"cannot list: {e.strerror or e}"
            ) from e

        log.warning("walker.unreadable_skipped", path=str(directory), error=str(e))
        return []


def _delete_tree(path: Path, depth: int, max_depth: int, log: Any) -> bool:
    if path.is_dir() and not path.is_symlink():
        if depth >= max_depth:
            log.warning("walker.delete_depth_exceeded", path=str(path), max_depth=max_depth)
            return False

        success = True
        try:
            with os.scandir(path) as it:
                children = [Path(child.path) for child in it]
        except OSError as e:
            log.warning("walker.delete_list_failed", path=str(path), error=str(e))
            children = []
            success = False

        for child in children:
            success = _delete_tree(child, depth + 1, max_depth, log) and success

        try:
            os.rmdir(path)
        except OSError as e:
            log.warning("walker.delete_failed", path=str(path), error=str(e))
            return False

        debug(f"Removed directory {path}")
        return success

    try:
        os.unlink(path)
    except OSError as e:
        log.warning("walker.delete_failed", path=str(path), error=str(e))
        return False

    debug(f"Removed file {path}")
    return True
