"""Utility modules for audioshelf."""

from audioshelf.utils.config import load_naming_options, resolve_setting
from audioshelf.utils.hash import async_sha256sum, sha256sum

__all__ = [
    "async_sha256sum",
    "load_naming_options",
    "resolve_setting",
    "sha256sum",
]
