"""Crash-safe filesystem primitives.

This package provides staged (via-temp) rename, delete and directory
creation, deterministic recursive listing, and whole-file hashing.
"""

from stagefs.fs.hasher import digest, hex_digest
from stagefs.fs.paths import canonical_path, staging_path
from stagefs.fs.staged import delete_via, mkdir_via, mkdirs_via, rename_via
from stagefs.fs.walker import (
    DirectoryEntry,
    iter_entries,
    recursive_delete,
    recursive_list,
)

__all__ = [
    "DirectoryEntry",
    "canonical_path",
    "delete_via",
    "digest",
    "hex_digest",
    "iter_entries",
    "mkdir_via",
    "mkdirs_via",
    "recursive_delete",
    "recursive_list",
    "rename_via",
    "staging_path",
]
