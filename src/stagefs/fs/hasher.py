"""Whole-file content hashing.

Files are streamed through an incremental hashlib object in fixed-size
chunks, so arbitrarily large files are fingerprinted in constant memory.
"""

import hashlib
from pathlib import Path
from typing import Any

from stagefs.core.config import normalize_algorithm
from stagefs.core.constants import DEFAULT_DIGEST_ALGORITHM, DIGEST_CHUNK_SIZE
from stagefs.core.errors import IOFailure, UnsupportedAlgorithm
from stagefs.fs.paths import StrPath


def digest(
    file: StrPath,
    algorithm: str = DEFAULT_DIGEST_ALGORITHM,
    *,
    chunk_size: int = DIGEST_CHUNK_SIZE,
) -> bytes:
    """Compute the digest of a file's full content.

    Args:
        file: File to hash
        algorithm: Digest name, case-insensitive, hyphens optional
            (``"SHA1"``, ``"sha-256"``, ``"md5"``)
        chunk_size: Bytes read per hash update

    Returns:
        Raw digest bytes (20 bytes for SHA-1)

    Raises:
        UnsupportedAlgorithm: If hashlib does not offer a fixed-length
            digest under that name
        IOFailure: If the file cannot be opened or read
    """
    if chunk_size <= 0:
        raise ValueError(f"chunk_size must be positive, got {chunk_size}")

    hasher = _new_hash(algorithm)
    path = Path(file)

    try:
        with open(path, "rb") as f:
            # Read file in chunks to handle large files
            for byte_block in iter(lambda: f.read(chunk_size), b""):
                hasher.update(byte_block)
    except OSError as e:
        raise IOFailure(path, e.strerror or str(e)) from e

    return hasher.digest()


def hex_digest(file: StrPath, algorithm: str = DEFAULT_DIGEST_ALGORITHM) -> str:
    """Compute a file digest as a lowercase hexadecimal string."""
    return digest(file, algorithm).hex()


def _new_hash(algorithm: str) -> Any:
    name = normalize_algorithm(algorithm)

    # shake_* digests take a caller-chosen length
    if name.startswith("shake_"):
        raise UnsupportedAlgorithm(algorithm)

    try:
        return hashlib.new(name)
    except (ValueError, TypeError) as e:
        raise UnsupportedAlgorithm(algorithm) from e
