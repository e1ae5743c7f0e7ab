"""Template-driven naming rules for audiobook files.

A naming pattern is a string holding zero or more tokens from the closed set
``{title} {author} {narrator} {year} {series} {number}``. Expansion turns a
pattern plus a MetadataRecord into a file name and, optionally, a directory
path.

Design:
- Expansion never fails: missing title/author fall back to fixed text, other
  missing fields expand to nothing.
- ``/`` in a pattern separates directories. Each segment is sanitized on its
  own, so :func:`expand` returns only the final segment and
  :func:`generate_path` turns the leading segments into subdirectories.
- Nothing here touches the file system.
"""

import logging
import math
import re
from pathlib import Path
from typing import Optional, Self, Union

from audioshelf.core.sanitizer import MAX_NAME_LENGTH, sanitize
from audioshelf.models.core import MetadataRecord, NamingOptions
from audioshelf.rules.base import RuleSet

logger = logging.getLogger(__name__)

TOKENS = ("title", "author", "narrator", "year", "series", "number")

UNKNOWN_TITLE = "Unknown Title"
UNKNOWN_AUTHOR = "Unknown Author"

PATTERN_PRESETS: dict[str, str] = {
    "standard": "{title} - {author}",
    "series": "{series}/{series} {number} - {title}",
    "author-first": "{author} - {title}",
    "year-included": "{title} ({year}) - {author}",
}
DEFAULT_PATTERN = PATTERN_PRESETS["standard"]

_LEFTOVER_TOKEN = re.compile(r"\{[^}]+\}")
_REPEATED_SEPARATOR = re.compile(r"/{2,}")
_WHITESPACE = re.compile(r"\s+")


def resolve_pattern(name_or_pattern: Optional[str]) -> str:
    """Map a preset name to its pattern; any other string is a custom pattern."""
    if not name_or_pattern:
        return DEFAULT_PATTERN
    return PATTERN_PRESETS.get(name_or_pattern, name_or_pattern)


def format_series_number(value: Union[float, int, str, None]) -> str:
    """Format a series position for ``{number}``.

    Integers are zero-padded to two digits (``2`` -> ``02``); fractional
    positions keep their fraction (``1.5`` -> ``01.5``). Values that are not
    numbers are sanitized and used verbatim.
    """
    if value is None or value == "":
        return ""
    try:
        number = float(value)
    except (TypeError, ValueError):
        return sanitize(value)
    if not math.isfinite(number):
        return sanitize(value)
    sign = "-" if number < 0 else ""
    number = abs(number)
    if number.is_integer():
        return f"{sign}{int(number):02d}"
    text = repr(number)
    if "e" in text:
        text = format(number, "f").rstrip("0")
    whole, _, fraction = text.partition(".")
    return f"{sign}{int(whole):02d}.{fraction}"


def _series_name(metadata: MetadataRecord, options: NamingOptions) -> str:
    if not options.include_series:
        return ""
    return sanitize(metadata.series)


def _substitute(pattern: str, metadata: MetadataRecord, options: NamingOptions) -> str:
    text = pattern
    text = text.replace("{title}", sanitize(metadata.title) or UNKNOWN_TITLE)
    text = text.replace("{author}", sanitize(metadata.author) or UNKNOWN_AUTHOR)
    text = text.replace("{narrator}", sanitize(metadata.narrator))
    text = text.replace("{year}", sanitize(metadata.year))

    series = _series_name(metadata, options)
    if series:
        text = text.replace("{series}", series)
        text = text.replace("{number}", format_series_number(metadata.series_number))
    else:
        text = text.replace("{series}/", "")
        text = text.replace("{series}", "")
        text = text.replace("{number}", "")

    text = _LEFTOVER_TOKEN.sub("", text)
    text = _REPEATED_SEPARATOR.sub("/", text)
    return _WHITESPACE.sub(" ", text).strip()


def _finalize_filename(name: str, extension: str) -> str:
    ext = sanitize(extension.lstrip("."))
    suffix = f".{ext}" if ext else ""
    stem = name
    if suffix and stem.lower().endswith(suffix.lower()):
        stem = stem[: -len(suffix)]
    # Shorten the stem, not the extension, when the name is too long.
    stem = sanitize(stem, max_length=max(MAX_NAME_LENGTH - len(suffix), 1))
    return (stem or UNKNOWN_TITLE) + suffix


def expand_segments(
    pattern: str,
    metadata: MetadataRecord,
    extension: str,
    options: NamingOptions,
) -> tuple[list[str], str]:
    """Expand *pattern* into (directory segments, file name).

    Empty directory segments are dropped.
    """
    expanded = _substitute(pattern, metadata, options)
    *directories, last = expanded.split("/")
    segments = [segment for segment in map(sanitize, directories) if segment]
    filename = _finalize_filename(last, extension)
    logger.debug("Expanded %r -> %r / %r", pattern, segments, filename)
    return segments, filename


def expand(
    pattern: str,
    metadata: MetadataRecord,
    extension: str,
    options: NamingOptions,
) -> str:
    """Expand a naming pattern into a file name.

    Args:
        pattern: Naming pattern, e.g. ``"{title} - {author}"``.
        metadata: Metadata for the file.
        extension: Extension to append (with or without the leading dot).
        options: Naming options; ``include_series`` gates series tokens.

    Returns:
        A sanitized file name ending with ``.extension``.

    Example:
        >>> meta = MetadataRecord(title="The Great Adventure", author="John Smith")
        >>> expand("{title} - {author}", meta, "mp3", NamingOptions())
        'The Great Adventure - John Smith.mp3'
    """
    _, filename = expand_segments(pattern, metadata, extension, options)
    return filename


def generate_path(
    pattern: str,
    metadata: MetadataRecord,
    base_path: str,
    extension: str,
    options: NamingOptions,
) -> str:
    """Compute the full destination path for a file.

    Directories written in the pattern are placed under *base_path*. A pattern
    without ``/`` gets the series name as its single subdirectory when
    ``include_series`` is set and the metadata has a series.

    Returns:
        The destination path as a string; the file system is not touched.
    """
    directories, filename = expand_segments(pattern, metadata, extension, options)
    if "/" not in pattern:
        series = _series_name(metadata, options)
        directories = [series] if series else []
    return str(Path(base_path or "", *directories, filename))


class TemplateRuleSet(RuleSet):
    """Rule set that names files from a token pattern."""

    def __init__(self: Self, pattern: Optional[str] = None) -> None:
        """Initialize the rule set with a pattern or preset name."""
        super().__init__("template")
        self.pattern = resolve_pattern(pattern)

    def target_name(
        self: Self,
        metadata: MetadataRecord,
        extension: str,
        options: NamingOptions,
    ) -> str:
        return expand(self.pattern, metadata, extension, options)

    def target_path(
        self: Self,
        metadata: MetadataRecord,
        base_path: str,
        extension: str,
        options: NamingOptions,
    ) -> str:
        return generate_path(self.pattern, metadata, base_path, extension, options)
