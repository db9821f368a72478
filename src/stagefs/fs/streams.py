"""Byte-stream helpers: chunked copies, bounded reads and writes."""

from pathlib import Path
from typing import BinaryIO

from stagefs.core.constants import COPY_CHUNK_SIZE, MAX_READ_SIZE
from stagefs.core.errors import IOFailure
from stagefs.fs.paths import StrPath


def copy_stream(
    src: BinaryIO, dst: BinaryIO, chunk_size: int = COPY_CHUNK_SIZE
) -> int:
    """Copy everything from ``src`` to ``dst``.

    Neither stream is closed.

    Returns:
        Number of bytes copied
    """
    copied = 0
    for block in iter(lambda: src.read(chunk_size), b""):
        dst.write(block)
        copied += len(block)
    return copied


def copy_file(src: StrPath, dst: StrPath) -> int:
    """Copy the content of one file to another, replacing ``dst``.

    Raises:
        IOFailure: If either file cannot be opened, read or written
    """
    try:
        with open(src, "rb") as fin, open(dst, "wb") as fout:
            return copy_stream(fin, fout)
    except OSError as e:
        raise IOFailure(Path(e.filename or src), e.strerror or str(e)) from e


def read_file(path: StrPath, max_size: int = MAX_READ_SIZE) -> bytes:
    """Read a whole file into memory.

    Raises:
        IOFailure: If the file is larger than ``max_size`` bytes or cannot
            be read
    """
    path = Path(path)
    try:
        size = path.stat().st_size
        if size > max_size:
            raise IOFailure(
                path, f"file is larger than {max_size} bytes, not loading into memory"
            )
        with open(path, "rb") as f:
            return f.read(max_size + 1)
    except OSError as e:
        raise IOFailure(path, e.strerror or str(e)) from e


def read_file_to_string(path: StrPath, encoding: str = "utf-8") -> str:
    """Read a whole text file.

    Raises:
        IOFailure: If the file cannot be read or decoded
    """
    path = Path(path)
    try:
        return path.read_text(encoding=encoding)
    except (OSError, UnicodeDecodeError) as e:
        raise IOFailure(path, str(e)) from e


def write_to_file(data: bytes | BinaryIO, path: StrPath) -> int:
    """Write bytes, or everything readable from a binary stream, to a file.

    A given stream is consumed but not closed.

    Returns:
        Number of bytes written

    Raises:
        IOFailure: If the file cannot be written
    """
    path = Path(path)
    try:
        with open(path, "wb") as fout:
            if isinstance(data, bytes | bytearray | memoryview):
                return fout.write(data)
            return copy_stream(data, fout)
    except OSError as e:
        raise IOFailure(path, e.strerror or str(e)) from e


def append_to_stream(path: StrPath, out: BinaryIO) -> int:
    """Append a file's content to an open output stream.

    Returns:
        Number of bytes appended

    Raises:
        IOFailure: If the file cannot be read
    """
    path = Path(path)
    try:
        with open(path, "rb") as fin:
            return copy_stream(fin, out)
    except OSError as e:
        raise IOFailure(path, e.strerror or str(e)) from e
