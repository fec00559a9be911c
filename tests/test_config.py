"""Tests for HintConfig."""

from __future__ import annotations

import dataclasses
import logging

import pytest

from i18nhint.config import HintConfig
from i18nhint.constants import (
    DEFAULT_ATTRIBUTE_PREFIXES,
    DEFAULT_KEY_PREFIXES,
    DEFAULT_LOCALE_PATH,
    MAX_BUFFER_SIZE,
)


class TestDefaults:
    """Test the fresh-installation configuration."""

    def test_defaults(self) -> None:
        """HintConfig() carries the documented defaults."""
        config = HintConfig()
        assert config.enabled
        assert config.locale_path == DEFAULT_LOCALE_PATH
        assert config.language == "zh"
        assert config.auto_detect
        assert config.key_prefixes == DEFAULT_KEY_PREFIXES
        assert config.attribute_prefixes == DEFAULT_ATTRIBUTE_PREFIXES
        assert config.binding_names == ("R",)
        assert config.table_field == "R"
        assert config.debounce_delay == 0.3
        assert config.max_buffer_size == MAX_BUFFER_SIZE
        assert config.sandbox_enabled
        assert config.fallback_to_defaults

    def test_frozen(self) -> None:
        """Configuration cannot be mutated."""
        with pytest.raises(dataclasses.FrozenInstanceError):
            HintConfig().enabled = False  # type: ignore[misc]


class TestValidation:
    """Test construction-time validation."""

    def test_sequences_become_tuples(self) -> None:
        """Lists are normalized to tuples of str."""
        config = HintConfig(key_prefixes=["R", "LANG"])  # type: ignore[arg-type]
        assert config.key_prefixes == ("R", "LANG")

    @pytest.mark.parametrize("field", ["key_prefixes", "attribute_prefixes", "binding_names"])
    def test_bare_string_rejected(self, field: str) -> None:
        """A single string is not silently split into characters."""
        with pytest.raises(TypeError, match=field):
            HintConfig(**{field: "R"})  # type: ignore[arg-type]

    @pytest.mark.parametrize(
        ("kwargs", "message"),
        [
            ({"language": " "}, "language"),
            ({"table_field": "my-table"}, "table_field"),
            ({"binding_names": ("R", "1x")}, "binding name"),
            ({"debounce_delay": -0.1}, "debounce_delay"),
            ({"sandbox_timeout": 0}, "sandbox_timeout"),
            ({"max_buffer_size": 0}, "max_buffer_size"),
            ({"max_occurrences": -5}, "max_occurrences"),
            ({"max_edit_changes": 0}, "max_edit_changes"),
        ],
    )
    def test_invalid_values(self, kwargs: dict[str, object], message: str) -> None:
        """Out-of-range values raise ValueError naming the field."""
        with pytest.raises(ValueError, match=message):
            HintConfig(**kwargs)  # type: ignore[arg-type]

    def test_dollar_binding_allowed(self) -> None:
        """JavaScript identifiers may contain $."""
        assert HintConfig(binding_names=("$R",)).binding_names == ("$R",)

    def test_zero_debounce_allowed(self) -> None:
        """A zero delay scans on the next timer tick."""
        assert HintConfig(debounce_delay=0).debounce_delay == 0


class TestFromMapping:
    """Test reading editor settings."""

    def test_camel_case_names(self) -> None:
        """Editor setting names map onto fields."""
        config = HintConfig.from_mapping(
            {
                "localePath": "src/locale/zh.js",
                "autoDetect": False,
                "keyPrefixes": ["LanData.R"],
                "debounceDelay": 0.5,
                "sandboxEnabled": False,
                "fallbackToDefaults": False,
            }
        )
        assert config.locale_path == "src/locale/zh.js"
        assert not config.auto_detect
        assert config.key_prefixes == ("LanData.R",)
        assert config.debounce_delay == 0.5
        assert not config.sandbox_enabled
        assert not config.fallback_to_defaults

    def test_field_names(self) -> None:
        """Field names are accepted too."""
        assert HintConfig.from_mapping({"max_occurrences": 7}).max_occurrences == 7

    def test_unknown_names_ignored(self, caplog: pytest.LogCaptureFixture) -> None:
        """Unknown settings are skipped and logged at debug level."""
        with caplog.at_level(logging.DEBUG, logger="i18nhint.config"):
            config = HintConfig.from_mapping({"colour": "red", "enabled": False})
        assert not config.enabled
        assert "colour" in caplog.text

    def test_invalid_values_still_validated(self) -> None:
        """Settings go through the same validation."""
        with pytest.raises(ValueError, match="max_buffer_size"):
            HintConfig.from_mapping({"maxBufferSize": 0})
