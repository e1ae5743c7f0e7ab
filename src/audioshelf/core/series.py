"""Series extraction from raw titles and file names.

Audiobook titles often embed the series name and position, e.g.
``Mistborn - Book 1 - The Final Empire``. This module recovers
``(title, series, series_number)`` from such strings.

Design:
- Rules are an explicit, ordered list of (pattern, extractor) pairs evaluated
  first-match-wins. The patterns overlap, so order decides correctness.
- An extractor may reject a match by returning None; evaluation then moves on to
  the next rule.
- Ambiguous or unmatched input yields None ("no series metadata"), never a
  best guess and never an exception.
"""

import re
from dataclasses import dataclass
from typing import Callable, Optional, Sequence

from audioshelf.models.core import SeriesInfo

# Words that mark an ordinary subtitled title rather than a series name.
SERIES_STOPWORDS = frozenset(
    {"the", "and", "or", "if", "but", "because", "as", "than", "then"}
)
MAX_FALLBACK_SERIES_WORDS = 4

_STOPWORD_PATTERN = re.compile(
    r"\b(" + "|".join(sorted(SERIES_STOPWORDS)) + r")\b", re.IGNORECASE
)

Extractor = Callable[[re.Match[str]], Optional[SeriesInfo]]


@dataclass(frozen=True)
class SeriesRule:
    """One ordered series-parsing rule."""

    name: str
    pattern: re.Pattern[str]
    extract: Extractor


def _series_book_title(match: re.Match[str]) -> SeriesInfo:
    return SeriesInfo(
        series=match["series"].strip(),
        series_number=float(match["number"]),
        title=match["title"].strip(),
    )


def _plausible_series(match: re.Match[str]) -> Optional[SeriesInfo]:
    candidate = match["series"].strip()
    if not any(ch.isalpha() for ch in candidate):
        return None
    if len(candidate.split(" ")) > MAX_FALLBACK_SERIES_WORDS:
        return None
    if _STOPWORD_PATTERN.search(candidate):
        return None
    return _series_book_title(match)


_NUMBER = r"(?P<number>\d+(?:\.\d+)?)"

SERIES_RULES: Sequence[SeriesRule] = (
    SeriesRule(
        "series-book-title",
        re.compile(
            rf"^(?P<series>.+?)\s*-\s*Book\s*{_NUMBER}\s*-\s*(?P<title>.+)$",
            re.IGNORECASE,
        ),
        _series_book_title,
    ),
    SeriesRule(
        "title-series-book",
        re.compile(
            rf"^(?P<title>.+?)\s*-\s*(?P<series>.+?)\s+Book\s*{_NUMBER}$",
            re.IGNORECASE,
        ),
        _series_book_title,
    ),
    SeriesRule(
        "series-book-dash-title",
        re.compile(
            rf"^(?P<series>.+?)\s+Book\s*{_NUMBER}\s*-\s*(?P<title>.+)$",
            re.IGNORECASE,
        ),
        _series_book_title,
    ),
    SeriesRule(
        "title-paren-series-book",
        re.compile(
            rf"^(?P<title>.+?)\s*\(\s*(?P<series>.+?),\s*Book\s*{_NUMBER}\s*\)$",
            re.IGNORECASE,
        ),
        _series_book_title,
    ),
    # Generic fallback, guarded against subtitled titles.
    SeriesRule(
        "series-number-title",
        re.compile(rf"^(?P<series>.+?)\s*{_NUMBER}\s*-\s*(?P<title>.+)$"),
        _plausible_series,
    ),
)

# Title formats used by book catalogs.
CATALOG_SERIES_RULES: Sequence[SeriesRule] = (
    # "Title (Series, #N)" and "Title (Series #N)"
    SeriesRule(
        "title-paren-series-hash",
        re.compile(
            rf"^(?P<title>.+?)\s*\(\s*(?P<series>.+?),?\s+#{_NUMBER}\s*\)$"
        ),
        _series_book_title,
    ),
    SeriesRule(
        "title-colon-series-book",
        re.compile(rf"^(?P<title>.+?):\s+(?P<series>.+?),\s+Book\s+{_NUMBER}$"),
        _series_book_title,
    ),
    SeriesRule(
        "series-hash-title",
        re.compile(rf"^(?P<series>.+?)\s+#{_NUMBER}:\s+(?P<title>.+)$"),
        _series_book_title,
    ),
    SeriesRule(
        "series-comma-book-title",
        re.compile(rf"^(?P<series>.+?),\s+Book\s+{_NUMBER}:\s+(?P<title>.+)$"),
        _series_book_title,
    ),
)


def _series_only(match: re.Match[str]) -> SeriesInfo:
    # The subtitle names the series; the caller supplies the title.
    return SeriesInfo(
        series=match["series"].strip(),
        series_number=float(match["number"]),
        title="",
    )


_SERIES_WORD = r"(?:Series|Saga|Chronicles)"

# Catalog subtitles such as "The Amazing Series Book 2".
SUBTITLE_SERIES_RULES: Sequence[SeriesRule] = (
    SeriesRule(
        "series-word-number",
        re.compile(
            rf"^(?:(?:A|The)\s+)?(?P<series>.+?)\s+{_SERIES_WORD}(?:\s+Book)?\s+{_NUMBER}$",
            re.IGNORECASE,
        ),
        _series_only,
    ),
    SeriesRule(
        "book-number-of-series",
        re.compile(
            rf"^Book\s+{_NUMBER}\s+(?:of|in)\s+(?:the\s+)?(?P<series>.+?)(?:\s+{_SERIES_WORD})?$",
            re.IGNORECASE,
        ),
        _series_only,
    ),
)


def match_rules(text: str, rules: Sequence[SeriesRule]) -> Optional[SeriesInfo]:
    """Return the result of the first rule in *rules* that accepts *text*."""
    for rule in rules:
        match = rule.pattern.match(text)
        if match is None:
            continue
        info = rule.extract(match)
        if info is not None:
            return info
    return None


def extract_series(raw_title: Optional[str]) -> Optional[SeriesInfo]:
    """Parse series information out of a raw title.

    Args:
        raw_title: Title text without a file extension.

    Returns:
        SeriesInfo for the first matching rule, or None when nothing matches.

    Example:
        >>> extract_series("Mistborn - Book 1 - The Final Empire").series
        'Mistborn'
    """
    if not raw_title:
        return None
    return match_rules(raw_title.strip(), SERIES_RULES)


def strip_extension(filename: str) -> str:
    """Drop the final ``.ext`` from *filename*, if any."""
    stem, dot, _ = filename.rpartition(".")
    return stem if dot and stem else filename


def extract_series_from_filename(filename: str) -> Optional[SeriesInfo]:
    """Like extract_series, but strips the file extension first."""
    return extract_series(strip_extension(filename))


def extract_series_from_catalog_title(
    title: Optional[str], subtitle: Optional[str] = None
) -> Optional[SeriesInfo]:
    """Parse series information out of a catalog title like ``Dune (Dune #1)``.

    When the title carries no series, the subtitle is tried
    (``Book 2 of The Amazing Series``); the title is then kept as is.
    """
    if not title:
        return None
    title = title.strip()
    info = match_rules(title, CATALOG_SERIES_RULES)
    if info is not None or not subtitle:
        return info
    info = match_rules(subtitle.strip(), SUBTITLE_SERIES_RULES)
    if info is None:
        return None
    return info.model_copy(update={"title": title})
