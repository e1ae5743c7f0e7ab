"""JSON sidecar metadata provider.

A sidecar file maps original file names to metadata objects, using either the
Python field names or the camelCase names used by book catalogs::

    {
      "track01.mp3": {"title": "The Final Empire", "author": "Brandon Sanderson",
                      "series": "Mistborn", "seriesNumber": 1}
    }
"""

import json
import logging
from pathlib import Path
from typing import Any, Iterable

from pydantic import TypeAdapter

from audioshelf.core.series import extract_series_from_catalog_title
from audioshelf.models.core import FileRecord, MetadataRecord

logger = logging.getLogger(__name__)

_SIDECAR_ADAPTER = TypeAdapter(dict[str, MetadataRecord])


def parse_metadata(data: Any) -> dict[str, MetadataRecord]:
    """Validate decoded sidecar JSON.

    Titles in catalog form (``Dune (Dune #1)``) are split into title and series
    when the record carries no series of its own.

    Raises:
        pydantic.ValidationError: If the data is not a mapping of records.
    """
    records = _SIDECAR_ADAPTER.validate_python(data)
    for name, record in records.items():
        if record.series:
            continue
        info = extract_series_from_catalog_title(record.title, record.subtitle)
        if info is not None:
            records[name] = record.model_copy(
                update={
                    "title": info.title,
                    "series": info.series,
                    "series_number": info.series_number,
                }
            )
    return records


def load_metadata_file(
    path: Path, files: Iterable[FileRecord]
) -> dict[str, MetadataRecord]:
    """Load sidecar metadata and associate it with *files* by file name.

    Returns:
        Metadata keyed by FileRecord id. Files absent from the sidecar get no
        entry.

    Raises:
        FileNotFoundError: If the sidecar does not exist.
        json.JSONDecodeError: If the sidecar is not valid JSON.
        pydantic.ValidationError: If an entry is not a valid metadata record.
    """
    with open(path, encoding="utf-8") as f:
        records = parse_metadata(json.load(f))

    metadata: dict[str, MetadataRecord] = {}
    for file in files:
        record = records.get(file.name)
        if record is not None:
            metadata[file.id] = record
    unmatched = len(records) - len(metadata)
    if unmatched > 0:
        logger.info("%d sidecar entr(ies) matched no scanned file", unmatched)
    return metadata
