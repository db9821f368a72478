"""Path utilities for staged filesystem operations.

This module provides canonicalization, staging-path derivation and the
small path-string helpers used by the synchronization layer.
"""

import errno
import os
from pathlib import Path, PurePath

StrPath = str | os.PathLike[str]


def canonical_path(path: StrPath, root: Path | None = None) -> Path:
    """Normalize a path into the canonical form used for staging.

    The path is made absolute (relative paths are anchored at ``root`` when
    given, else at the working directory), ``..`` segments are collapsed and
    the parent directory's symlinks are resolved. The final segment is kept
    verbatim so that a symlink at the target is acted on itself rather than
    through its target.

    Args:
        path: Path to normalize
        root: Optional root directory for relative paths

    Returns:
        Canonical absolute path

    Raises:
        OSError: If the parent cannot be resolved (e.g. a symlink loop)
    """
    path = Path(path)
    if not path.is_absolute() and root is not None:
        path = root / path

    absolute = Path(os.path.abspath(path))
    if not absolute.name:
        return absolute

    try:
        parent = absolute.parent.resolve()
    except RuntimeError as e:
        # Python 3.12 reports symlink loops as RuntimeError
        raise OSError(errno.ELOOP, str(e), str(absolute.parent)) from e

    return parent / absolute.name


def staging_path(target: StrPath, marker: str) -> Path:
    """Get the staging sibling of a target path.

    Args:
        target: Path the staged operation will eventually act on
        marker: Prefix for the target's final segment

    Returns:
        ``<canonical parent>/<marker><name>``

    Raises:
        ValueError: If the marker is empty or holds a separator, or the
            target has no final segment
    """
    if not marker or os.sep in marker or (os.altsep and os.altsep in marker):
        raise ValueError(f"Invalid staging marker: {marker!r}")

    canonical = canonical_path(target)
    if not canonical.name:
        raise ValueError(f"Path has no final segment to stage: {target}")

    return canonical.parent / f"{marker}{canonical.name}"


def relative_path(base: StrPath, file: StrPath) -> str:
    """Get the path of ``file`` relative to ``base``.

    Returns an empty string when ``file`` is ``base`` itself or does not
    live below it.
    """
    base_abs = PurePath(os.path.abspath(base))
    file_abs = PurePath(os.path.abspath(file))

    try:
        relative = file_abs.relative_to(base_abs)
    except ValueError:
        return ""

    return "" if str(relative) == "." else str(relative)


def relative_parent_directory(base: StrPath, file: StrPath) -> str:
    """Get the directory containing ``file``, relative to ``base``."""
    return relative_path(base, absolute_parent_directory(file))


def absolute_parent_directory(path: StrPath) -> str:
    """Get the absolute path of the directory containing ``path``."""
    return str(Path(os.path.abspath(path)).parent)


def extension(name: StrPath, include_dot: bool = False) -> str:
    """Get the text after the last dot of a file name.

    Unlike ``Path.suffix``, a leading dot counts: ``".bashrc"`` has the
    extension ``"bashrc"``.

    Examples:
        >>> extension("/htdocs/index.html")
        'html'
        >>> extension("archive.tar.gz", include_dot=True)
        '.gz'
    """
    filename = PurePath(name).name
    dot = filename.rfind(".")
    if dot == -1:
        return ""

    return ("." if include_dot else "") + filename[dot + 1 :]


def basename(name: StrPath) -> str:
    """Get a file name without its last extension.

    Examples:
        >>> basename("/htdocs/index.html")
        'index'
        >>> basename("README")
        'README'
    """
    filename = PurePath(name).name
    dot = filename.rfind(".")
    if dot == -1:
        return filename

    return filename[:dot]
