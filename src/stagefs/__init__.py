"""stagefs: crash-safe filesystem primitives for synchronization clients."""

from stagefs.core.errors import (
    CommitFailure,
    DepthLimitExceeded,
    IOFailure,
    NotFoundOrUnreadable,
    StageFsError,
    StagingCollision,
    UnsupportedAlgorithm,
)
from stagefs.fs import (
    delete_via,
    digest,
    mkdir_via,
    mkdirs_via,
    recursive_delete,
    recursive_list,
    rename_via,
)

__version__ = "0.1.0"

__all__ = [
    "CommitFailure",
    "DepthLimitExceeded",
    "IOFailure",
    "NotFoundOrUnreadable",
    "StageFsError",
    "StagingCollision",
    "UnsupportedAlgorithm",
    "delete_via",
    "digest",
    "mkdir_via",
    "mkdirs_via",
    "recursive_delete",
    "recursive_list",
    "rename_via",
]
