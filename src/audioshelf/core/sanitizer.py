"""Filename sanitizing and path validation.

- sanitize: turns arbitrary text into a filesystem-safe fragment. Pure and
  total; every planning component runs user and catalog text through it.
- validate_path: reports cross-platform problems with a full path without
  raising, for display next to a rename plan.
"""

import re
from dataclasses import dataclass, field
from typing import List

MAX_NAME_LENGTH = 240  # headroom under the common 255/260 character limits
MAX_PATH_LENGTH = 260

_FORBIDDEN_CHARS = re.compile(r'[<>:"/\\|?*\x00-\x1f]')
_WHITESPACE = re.compile(r"\s+")
_CONTROL_CHARS = re.compile(r"[\x00-\x1f]")
_INVALID_PATH_CHARS = re.compile(r'[<>:"|?*]')
_DRIVE_PREFIX = re.compile(r"^[A-Za-z]:(?=[\\/]|$)")
_SEGMENT_SPLIT = re.compile(r"[/\\]")

RESERVED_NAMES = frozenset(
    ["CON", "PRN", "AUX", "NUL"]
    + [f"COM{i}" for i in range(1, 10)]
    + [f"LPT{i}" for i in range(1, 10)]
)


def sanitize(text: object, max_length: int = MAX_NAME_LENGTH) -> str:
    """Normalize *text* into a filesystem-safe name fragment.

    Forbidden characters (``< > : " / \\ | ? *``) and ASCII control characters
    become ``_``, whitespace runs collapse to one space, the ends are trimmed
    and the result is cut to *max_length* characters.

    Args:
        text: Any value; ``None`` and empty values yield ``""``.
        max_length: Maximum length of the result.

    Returns:
        The sanitized string. ``sanitize(sanitize(x)) == sanitize(x)``.
    """
    if text is None:
        return ""
    value = _FORBIDDEN_CHARS.sub("_", str(text))
    value = _WHITESPACE.sub(" ", value).strip()
    if len(value) > max_length:
        # Trim again so a cut landing on a space stays idempotent.
        value = value[:max_length].rstrip()
    return value


@dataclass
class PathValidation:
    """Result of validate_path."""

    is_valid: bool = True
    errors: List[str] = field(default_factory=list)

    def add(self, message: str) -> None:
        self.is_valid = False
        self.errors.append(message)


def validate_path(path: str) -> PathValidation:
    """Check *path* for cross-platform compatibility problems.

    Args:
        path: Full or relative path, using ``/`` or ``\\`` separators.

    Returns:
        PathValidation listing every problem found. Never raises.
    """
    result = PathValidation()
    if not path:
        result.add("Path cannot be empty")
        return result

    if _CONTROL_CHARS.search(path):
        result.add("Path contains control characters")

    # A drive letter colon is legal, any other colon is not.
    body = _DRIVE_PREFIX.sub("", path, count=1)
    invalid = sorted(set(_INVALID_PATH_CHARS.findall(body)))
    if invalid:
        result.add(f"Invalid characters found: {' '.join(invalid)}")

    for segment in _SEGMENT_SPLIT.split(body):
        if not segment:
            continue
        if segment.endswith((" ", ".")) and segment not in {".", ".."}:
            result.add(f'Segment "{segment}" should not end with a space or period')
        base_name = segment.split(".")[0]
        if base_name.upper() in RESERVED_NAMES:
            result.add(f'"{base_name}" is a reserved filename')

    if len(path) > MAX_PATH_LENGTH:
        result.add(f"Path exceeds maximum length ({MAX_PATH_LENGTH} characters)")

    return result
