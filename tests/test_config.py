"""Tests for TOML config file loading and validation."""

from __future__ import annotations

from pathlib import Path

import pytest

from diurne.config import (
    MAX_TAGS,
    ParsedConfig,
    load_config,
    parse_config,
    validate_config,
)
from diurne.errors import ConfigError, UnknownTagError

BASIC = """\
tags = ["restaurant", "food", "coffee", "food"]

[aliases]
lunch = ["food", "restaurant"]
"""


class TestParseConfig:
    def test_reads_tags_and_aliases(self, write_config) -> None:
        parsed = parse_config(write_config(BASIC))
        assert parsed.tags == ["restaurant", "food", "coffee", "food"]
        assert parsed.aliases == {"lunch": ["food", "restaurant"]}

    def test_aliases_optional(self, write_config) -> None:
        parsed = parse_config(write_config('tags = ["a"]\n'))
        assert parsed.aliases == {}

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigError, match="failed to read config file"):
            parse_config(tmp_path / "absent.toml")

    def test_invalid_toml(self, write_config) -> None:
        with pytest.raises(ConfigError) as exc_info:
            parse_config(write_config('tags = ["a"\n'))
        err = exc_info.value
        assert err.message == "failed to deserialize config file."
        assert err.__cause__ is not None

    def test_invalid_toml_position(self, write_config) -> None:
        with pytest.raises(ConfigError) as exc_info:
            parse_config(write_config('tags = ["a"]\nbroken\n'))
        assert exc_info.value.line == 1

    def test_missing_tags(self, write_config) -> None:
        with pytest.raises(ConfigError, match="missing 'tags'"):
            parse_config(write_config("[aliases]\n"))

    def test_tags_must_be_strings(self, write_config) -> None:
        with pytest.raises(ConfigError, match="list of strings"):
            parse_config(write_config("tags = [1, 2]\n"))

    def test_alias_members_must_be_strings(self, write_config) -> None:
        with pytest.raises(ConfigError, match="aliases.lunch"):
            parse_config(write_config('tags = ["a"]\n[aliases]\nlunch = "a"\n'))


class TestValidateConfig:
    def test_tags_sorted_and_deduplicated(self, write_config) -> None:
        config = load_config(write_config(BASIC))
        assert config.tags == ["coffee", "food", "restaurant"]

    def test_aliases_resolved_to_indices(self, write_config) -> None:
        config = load_config(write_config(BASIC))
        assert config.aliases == {"lunch": [1, 2]}

    def test_database_path_next_to_config(self, write_config) -> None:
        path = write_config(BASIC, name="ledger.toml")
        config = load_config(path)
        assert config.database_path == path.with_name("ledger.db")

    def test_unknown_tag(self, write_config) -> None:
        path = write_config('tags = ["food"]\n[aliases]\nlunch = ["food", "pizza"]\n')
        with pytest.raises(UnknownTagError) as exc_info:
            load_config(path)
        err = exc_info.value
        assert err.name == "pizza"
        assert err.alias == "lunch"
        assert err.message == "An unknown tag have been found: pizza."
        assert (err.line, err.column) == (2, 17)

    def test_unknown_tag_position_ignores_comment(self, write_config) -> None:
        path = write_config(
            '# "pizza" was dropped\ntags = ["food"]\n\n[aliases]\nlunch = ["pizza"]\n'
        )
        with pytest.raises(UnknownTagError) as exc_info:
            load_config(path)
        assert (exc_info.value.line, exc_info.value.column) == (4, 9)

    def test_unknown_tag_without_source(self) -> None:
        parsed = ParsedConfig(tags=["a"], aliases={"x": ["b"]})
        with pytest.raises(UnknownTagError) as exc_info:
            validate_config(Path("c.toml"), parsed)
        assert exc_info.value.line is None

    def test_too_many_tags(self) -> None:
        parsed = ParsedConfig(tags=[f"t{i}" for i in range(MAX_TAGS + 1)])
        with pytest.raises(ConfigError, match="too many tags"):
            validate_config(Path("c.toml"), parsed)

    def test_max_tags_accepted(self) -> None:
        parsed = ParsedConfig(tags=[f"t{i:03}" for i in range(MAX_TAGS)])
        config = validate_config(Path("c.toml"), parsed)
        assert len(config.tags) == MAX_TAGS
