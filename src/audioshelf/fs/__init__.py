"""Filesystem operations for audioshelf."""

from audioshelf.fs.operations import FilesystemRenamer, atomic_move

__all__ = ["FilesystemRenamer", "atomic_move"]
