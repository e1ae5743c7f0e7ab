"""Configuration resolution for AudioShelf settings.

Settings are looked up by dotted key with precedence CLI > environment >
``~/.config/audioshelf/config.toml`` > default. The TOML file is parsed with
tomli. Example file::

    [naming]
    pattern = "series"
    include_series = true
    create_directories = true
    duplicate_method = "name+size"
    resolution = "keep-all"

The rename engine never reads configuration itself; the CLI resolves values
here and passes them down explicitly.
"""

import contextlib
import os
from pathlib import Path
from typing import Any, Optional, TypeVar, cast

import tomli

from audioshelf.models.core import DuplicateMethod, NamingOptions, ResolutionStrategy

# XDG_CONFIG_HOME wins over ~/.config when set.
_config_home = Path(os.environ.get("XDG_CONFIG_HOME") or Path.home() / ".config")
CONFIG_DIR = _config_home / "audioshelf"
CONFIG_FILE = CONFIG_DIR / "config.toml"

ENV_PREFIX = "AUDIOSHELF_"
_TRUTHY = {"1", "true", "yes", "on"}

T = TypeVar("T")


def _load_file() -> dict[str, Any]:
    try:
        with CONFIG_FILE.open("rb") as fh:
            return tomli.load(fh)
    except FileNotFoundError:
        return {}


def _dig(table: dict[str, Any], key: str) -> Any:
    """Follow a dotted *key* through nested TOML tables; None when absent."""
    node: Any = table
    for name in key.split("."):
        if not isinstance(node, dict) or name not in node:
            return None
        node = node[name]
    return node


def env_var_for(key: str) -> str:
    """Environment variable overriding *key* (``naming.pattern`` ->
    ``AUDIOSHELF_NAMING_PATTERN``)."""
    return f"{ENV_PREFIX}{key.upper().replace('.', '_')}"


def _convert(raw: Any, default: T) -> T:
    """Bring an env string or TOML value to the type of *default*."""
    if isinstance(default, bool):
        if isinstance(raw, str):
            return cast(T, raw.strip().lower() in _TRUTHY)
        return cast(T, raw) if isinstance(raw, bool) else default
    if isinstance(default, int):
        with contextlib.suppress(TypeError, ValueError):
            return cast(T, int(raw))
        return default
    return cast(T, raw)


def resolve_setting(
    key: str,
    *,
    default: T,
    cli_value: Optional[T] = None,
) -> T:
    """Look up a setting: CLI value, then environment, then config file.

    Args:
        key: Dotted key such as ``"naming.duplicate_method"``.
        default: Returned when no source sets the key; also fixes the type
            that env and file values are converted to.
        cli_value: Value from a CLI option; ``None`` means "not given".
    """
    if cli_value is not None:
        return cli_value
    raw = os.environ.get(env_var_for(key))
    if raw is None:
        raw = _dig(_load_file(), key)
    return default if raw is None else _convert(raw, default)


def load_naming_options(
    *,
    include_series: Optional[bool] = None,
    create_directories: Optional[bool] = None,
    duplicate_method: Optional[str] = None,
) -> NamingOptions:
    """Build NamingOptions from CLI values, environment and config file.

    Raises:
        ValueError: If the resolved duplicate method is not recognized.
    """
    defaults = NamingOptions()
    method = resolve_setting(
        "naming.duplicate_method",
        default=defaults.duplicate_method.value,
        cli_value=duplicate_method,
    )
    return NamingOptions(
        include_series=resolve_setting(
            "naming.include_series",
            default=defaults.include_series,
            cli_value=include_series,
        ),
        create_directories=resolve_setting(
            "naming.create_directories",
            default=defaults.create_directories,
            cli_value=create_directories,
        ),
        duplicate_method=DuplicateMethod(method),
    )


def resolve_pattern_setting(cli_value: Optional[str] = None) -> str:
    """Return the configured naming pattern or preset name."""
    return resolve_setting("naming.pattern", default="standard", cli_value=cli_value)


def resolve_resolution(cli_value: Optional[str] = None) -> ResolutionStrategy:
    """Return the configured duplicate resolution strategy."""
    value = resolve_setting(
        "naming.resolution",
        default=ResolutionStrategy.MANUAL.value,
        cli_value=cli_value,
    )
    return ResolutionStrategy(value)
