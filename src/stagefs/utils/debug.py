"""Low-level filesystem traces, enabled by STAGEFS_DEBUG.

Operation-level events go through structlog; this only echoes individual
renames, unlinks and listings while chasing a bug.
"""

import os
import sys
from typing import Any

_DEBUG_ENABLED = os.environ.get("STAGEFS_DEBUG", "").lower() in ("1", "true", "yes")


def debug(msg: Any) -> None:
    """Write ``[DEBUG] msg`` to stderr when tracing is on (read at import)."""
    if _DEBUG_ENABLED:
        print(f"[DEBUG] {msg}", file=sys.stderr)
