"""Core constants for stagefs.

This module defines constants used throughout the package:
- Default staging markers, one per staged operation kind
- Chunk sizes for hashing and stream copies
- Limits for recursion depth and in-memory reads
"""

# ============================================================================
# Staging Markers
# ============================================================================

#: Prefix for the staging name of a rename target
RENAME_MARKER = ".ignore-rename-to-"

#: Prefix for the staging name of a path being deleted
DELETE_MARKER = ".ignore-delete-from-"

#: Prefix for the staging name of a directory being created
MKDIR_MARKER = ".ignore-mkdir-"

#: Prefix used for every level created by mkdirs_via
MKDIRS_MARKER = ".ignore-mkdirs-"

#: All default markers; staging artifacts start with one of these
DEFAULT_MARKERS: tuple[str, ...] = (
    RENAME_MARKER,
    DELETE_MARKER,
    MKDIR_MARKER,
    MKDIRS_MARKER,
)

# ============================================================================
# Hashing & Streams
# ============================================================================

#: Default digest algorithm (160-bit SHA-1)
DEFAULT_DIGEST_ALGORITHM = "SHA1"

#: Bytes read per update of the incremental hash
DIGEST_CHUNK_SIZE = 4096

#: Bytes per read/write when copying streams
COPY_CHUNK_SIZE = 4096

#: Largest file read_file() will load into memory (20 MiB)
MAX_READ_SIZE = 20 * 1024 * 1024

# ============================================================================
# Recursion
# ============================================================================

#: Maximum directory depth for walks, recursive deletes and mkdirs_via
MAX_DEPTH = 256
