"""Config file loading and validation.

A config file is TOML with a tag list and an alias table::

    tags = ["coffee", "food", "restaurant"]

    [aliases]
    lunch = ["food", "restaurant"]

Tags are sorted and deduplicated; alias members are resolved to indices into
the sorted tag list. The report database lives next to the config file, with
a ``.db`` suffix.
"""

from __future__ import annotations

import re
import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from diurne.errors import ConfigError, UnknownTagError

# Tag indices are stored as unsigned bytes
MAX_TAGS = 256

_DECODE_POSITION = re.compile(r"at line (\d+), column (\d+)")


@dataclass(frozen=True, slots=True)
class ParsedConfig:
    """Config file content as written, before validation."""

    tags: list[str]
    aliases: dict[str, list[str]] = field(default_factory=dict)
    source: str = ""


@dataclass(frozen=True, slots=True)
class Config:
    """Validated config."""

    tags: list[str]
    aliases: dict[str, list[int]]
    database_path: Path


def parse_config(path: Path) -> ParsedConfig:
    """Read and decode a config file without validating tag references."""
    try:
        source = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigError("failed to read config file.", str(path)) from exc
    return parse_config_source(source, str(path))


def parse_config_source(source: str, filename: str) -> ParsedConfig:
    try:
        data = tomllib.loads(source)
    except tomllib.TOMLDecodeError as exc:
        line, column = _decode_error_position(exc)
        raise ConfigError(
            "failed to deserialize config file.", filename, source, line, column
        ) from exc

    tags = _string_list(data.get("tags"), "tags", filename, source)

    aliases: dict[str, list[str]] = {}
    raw_aliases = data.get("aliases", {})
    if not isinstance(raw_aliases, dict):
        raise ConfigError("'aliases' must be a table.", filename, source)
    for alias, members in raw_aliases.items():
        aliases[str(alias)] = _string_list(members, f"aliases.{alias}", filename, source)

    return ParsedConfig(tags=tags, aliases=aliases, source=source)


def _decode_error_position(exc: tomllib.TOMLDecodeError) -> tuple[int | None, int | None]:
    """Return the 0-based position tomllib reports in its message, if any."""
    match = _DECODE_POSITION.search(str(exc))
    if match is None:
        return None, None
    return int(match.group(1)) - 1, int(match.group(2)) - 1


def _string_list(value: Any, key: str, filename: str, source: str) -> list[str]:
    if value is None:
        raise ConfigError(f"missing '{key}' list.", filename, source)
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        raise ConfigError(f"'{key}' must be a list of strings.", filename, source)
    return list(value)


def validate_config(path: Path, parsed: ParsedConfig) -> Config:
    """Deduplicate tags, resolve alias members and derive the database path."""
    tags = sorted(set(parsed.tags))
    if len(tags) > MAX_TAGS:
        raise ConfigError(
            f"too many tags: {len(tags)} (at most {MAX_TAGS} are supported).",
            str(path),
        )
    positions = {name: i for i, name in enumerate(tags)}

    aliases: dict[str, list[int]] = {}
    for alias, members in parsed.aliases.items():
        indices = []
        for name in members:
            if name not in positions:
                raise UnknownTagError(name, alias, str(path), parsed.source or None)
            indices.append(positions[name])
        aliases[alias] = indices

    return Config(tags=tags, aliases=aliases, database_path=path.with_suffix(".db"))


def load_config(path: Path) -> Config:
    """Parse and validate the config file at *path*."""
    return validate_config(path, parse_config(path))
