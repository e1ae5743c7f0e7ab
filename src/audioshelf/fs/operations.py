"""Filesystem rename operations for AudioShelf.

Provides a cross-platform, atomic file-move helper and the default rename
provider used by the batch executor. Handles cross-device moves, Windows long
paths, dry-run, missing parent directories and overwrite protection.
"""

import asyncio
import errno
import logging
import shutil
import sys
from pathlib import Path
from typing import Self

from audioshelf.models.plan import RenamePlan

logger = logging.getLogger(__name__)

WIN_MAX_PATH = 259  # Windows MAX_PATH limit for NTFS long paths


def get_win_long_path_prefix() -> str:
    """Return the Windows NTFS long path prefix."""
    bslash = chr(92)
    return bslash + bslash + "?" + bslash


def _win_long_path(path: Path) -> str:
    s = str(path)
    prefix = get_win_long_path_prefix()
    if sys.platform == "win32" and len(s) > WIN_MAX_PATH and not s.startswith(prefix):
        return prefix + s
    return s


def _same_file(src: Path, dst: Path) -> bool:
    try:
        return src.samefile(dst)
    except OSError:
        return False


def atomic_move(
    src: Path,
    dst: Path,
    *,
    dry_run: bool = False,
    overwrite: bool = False,
    create_parents: bool = True,
) -> None:
    """Atomically move *src* to *dst*.

    Args:
        src: Source file path.
        dst: Destination file path.
        dry_run: If True, log intended move and do not perform any operation.
        overwrite: If True, replace destination if it exists.
        create_parents: If True, create missing destination directories.

    Raises:
        FileExistsError: If dst exists and *overwrite* is False.
        FileNotFoundError: If src is missing.
        OSError: For non-recoverable FS errors.
    """
    if dry_run:
        logger.info("[dry run] Would move %s -> %s", src, dst)
        return
    if not src.exists():
        raise FileNotFoundError(f"Source {src} does not exist.")
    if src == dst:
        return
    # A case-only rename on a case-insensitive FS reports dst as existing.
    if not overwrite and dst.exists() and not _same_file(src, dst):
        raise FileExistsError(f"Destination {dst} exists and overwrite is False.")
    if create_parents:
        dst.parent.mkdir(parents=True, exist_ok=True)
    src_path = _win_long_path(src)
    dst_path = _win_long_path(dst)
    try:
        if overwrite:
            Path(src_path).replace(dst_path)
        else:
            Path(src_path).rename(dst_path)
    except OSError as e:
        if e.errno == errno.EXDEV:
            shutil.copy2(src_path, dst_path)
            Path(src_path).unlink()
        else:
            raise


class FilesystemRenamer:
    """Rename provider that moves files on the local file system.

    Each call runs the blocking move in a worker thread so the executor's event
    loop stays responsive for progress reporting.
    """

    def __init__(self: Self, *, dry_run: bool = False, overwrite: bool = False) -> None:
        self.dry_run = dry_run
        self.overwrite = overwrite

    async def __call__(self: Self, plan: RenamePlan) -> bool:
        await asyncio.to_thread(
            atomic_move,
            Path(plan.original_path),
            Path(plan.new_path),
            dry_run=self.dry_run,
            overwrite=self.overwrite,
        )
        return True
