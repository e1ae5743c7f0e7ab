"""Metadata providers for audioshelf."""

from audioshelf.metadata.filename import (
    extract_search_query,
    metadata_for_files,
    metadata_from_filename,
)
from audioshelf.metadata.sidecar import load_metadata_file, parse_metadata

__all__ = [
    "extract_search_query",
    "load_metadata_file",
    "metadata_for_files",
    "metadata_from_filename",
    "parse_metadata",
]
