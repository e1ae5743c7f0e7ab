"""Metadata derived from audiobook file names.

This is the fallback metadata provider when no catalog or sidecar data is
available: the file name is cleaned into a title (and search query) and any
embedded series information is parsed out.
"""

import re
from typing import Iterable

from audioshelf.core.series import extract_series, strip_extension
from audioshelf.models.core import FileRecord, MetadataRecord

_NOISE_PATTERNS = (
    re.compile(r"\(unabridged\)", re.IGNORECASE),
    re.compile(r"\(audiobook\)", re.IGNORECASE),
    re.compile(r"\[audiobook\]", re.IGNORECASE),
    re.compile(r"audiobook", re.IGNORECASE),
    re.compile(r"unabridged", re.IGNORECASE),
)
_TRACK_NUMBER = re.compile(r"^\s*[\[(]?\d+[\])]?\s*-?\s*")
_PUNCTUATION_RUN = re.compile(r"[_\-.]+")
_WHITESPACE = re.compile(r"\s+")


def extract_search_query(filename: str) -> str:
    """Turn a file name into a catalog search query.

    Example:
        >>> extract_search_query("01 - Dune_(Unabridged).mp3")
        'Dune'
    """
    query = strip_extension(filename)
    for pattern in _NOISE_PATTERNS:
        query = pattern.sub("", query, count=1)
    query = _TRACK_NUMBER.sub("", query, count=1)
    query = _PUNCTUATION_RUN.sub(" ", query)
    return _WHITESPACE.sub(" ", query).strip()


def metadata_from_filename(filename: str) -> MetadataRecord:
    """Build a MetadataRecord from the file name alone.

    Series information is taken from the name when one of the series rules
    matches; otherwise the cleaned name becomes the title.
    """
    info = extract_series(strip_extension(filename))
    if info is not None:
        return MetadataRecord(
            title=info.title,
            series=info.series,
            series_number=info.series_number,
        )
    return MetadataRecord(title=extract_search_query(filename) or None)


def metadata_for_files(files: Iterable[FileRecord]) -> dict[str, MetadataRecord]:
    """Metadata for each file keyed by FileRecord id."""
    return {file.id: metadata_from_filename(file.name) for file in files}
