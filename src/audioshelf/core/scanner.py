"""Directory scanner for audiobook files.

This is the default file provider: it walks a directory and returns one
FileRecord per audio file, in sorted path order so plan order is stable.
"""

import logging
import uuid
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import List, Optional, Set

from audioshelf.models.core import FileRecord

# Logger for this module
logger = logging.getLogger(__name__)

# Reason: Covers the container formats audiobooks are commonly distributed in.
AUDIOBOOK_EXTENSIONS = {
    ".mp3",
    ".m4a",
    ".m4b",
    ".aac",
    ".aax",
    ".flac",
    ".ogg",
    ".opus",
    ".wav",
    ".wma",
}


@dataclass
class ScanOptions:
    """Options for the scan process."""

    recursive: bool = True
    include_hidden: bool = False
    target_extensions: Set[str] = field(
        default_factory=lambda: set(AUDIOBOOK_EXTENSIONS)
    )


@dataclass
class ScanResult:
    """Files found by a scan plus any access errors."""

    root_dir: Path
    files: List[FileRecord] = field(default_factory=list)
    errors: List[str] = field(default_factory=list)


def is_hidden(path: Path, root_dir: Path) -> bool:
    """Check if *path* is hidden below *root_dir* (any part starts with a dot)."""
    try:
        parts = path.relative_to(root_dir).parts
    except ValueError:
        parts = path.parts
    return any(part.startswith(".") for part in parts)


def file_id(path: Path) -> str:
    """Stable identifier for a file path."""
    return uuid.uuid5(uuid.NAMESPACE_URL, path.as_posix()).hex


def make_file_record(path: Path) -> FileRecord:
    """Build a FileRecord for *path*; the content handle is the path itself."""
    stat = path.stat()
    return FileRecord(
        id=file_id(path),
        name=path.name,
        extension=path.suffix.lstrip("."),
        path=str(path),
        size=stat.st_size,
        last_modified=datetime.fromtimestamp(stat.st_mtime),
        handle=path,
    )


def scan_directory(
    root_dir: Path,
    *,
    options: Optional[ScanOptions] = None,
) -> ScanResult:
    """Scan a directory for audiobook files.

    Args:
        root_dir: The directory to scan
        options: Scan options. If None, default options will be used.

    Returns:
        ScanResult with the files found, sorted by path, and access errors.

    Raises:
        FileNotFoundError: If the directory doesn't exist
        ValueError: If the path is not a directory
    """
    if not root_dir.exists():
        raise FileNotFoundError(f"Directory does not exist: {root_dir}")
    if not root_dir.is_dir():
        raise ValueError(f"Path is not a directory: {root_dir}")

    root_dir = root_dir.absolute()
    options = options or ScanOptions()
    extensions = {ext.lower() for ext in options.target_extensions}
    result = ScanResult(root_dir=root_dir)

    candidates = root_dir.rglob("*") if options.recursive else root_dir.iterdir()
    for path in sorted(candidates):
        if not options.include_hidden and is_hidden(path, root_dir):
            continue
        if path.suffix.lower() not in extensions:
            continue
        try:
            if path.is_file():
                result.files.append(make_file_record(path))
        except OSError as e:
            # Log access errors but continue processing
            result.errors.append(f"Error accessing {path}: {e}")
            logger.warning("Error accessing %s: %s", path, e)

    logger.debug("Scanned %s: %d audio file(s)", root_dir, len(result.files))
    return result
