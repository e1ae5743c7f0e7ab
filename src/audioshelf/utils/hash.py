"""Content digests for duplicate detection.

The ``content`` duplicate method asks a hash provider for a digest of each
file's bytes. :func:`async_sha256sum` is the default provider: it accepts the
content handle stored on a FileRecord (a path, or an open binary stream) and
hashes it in a worker thread so the event loop is never blocked by disk I/O.
"""

import asyncio
import hashlib
from pathlib import Path
from typing import BinaryIO, Union

CHUNK_SIZE = 8 * 1024 * 1024

ContentHandle = Union[str, Path, BinaryIO]


def _digest_stream(stream: BinaryIO, chunk_size: int) -> str:
    hasher = hashlib.sha256()
    while chunk := stream.read(chunk_size):
        hasher.update(chunk)
    return hasher.hexdigest()


def sha256sum(handle: ContentHandle, chunk_size: int = CHUNK_SIZE) -> str:
    """Return the hex SHA-256 digest of an audio file's bytes.

    Args:
        handle: Path to the file, or a binary stream positioned at the start of
            the content. Streams are read to the end but not closed.
        chunk_size: Bytes read per iteration.

    Raises:
        FileNotFoundError: If a path handle does not exist.
        ValueError: If a path handle is not a regular file.
    """
    if not isinstance(handle, (str, Path)):
        return _digest_stream(handle, chunk_size)

    path = Path(handle)
    if not path.exists():
        raise FileNotFoundError(f"File not found: {path}")
    if not path.is_file():
        raise ValueError(f"Path is not a file: {path}")
    with path.open("rb") as stream:
        return _digest_stream(stream, chunk_size)


async def async_sha256sum(handle: ContentHandle) -> str:
    """Hash provider for DuplicateKeyer, run off the event loop."""
    return await asyncio.to_thread(sha256sum, handle)
