"""Property-based tests for the enums module.

Tests all enum classes for completeness, serialization, and invariants.
"""

from enum import StrEnum

import pytest
from hypothesis import event, given
from hypothesis import strategies as st

from i18nhint import enums
from i18nhint.enums import (
    DataSource,
    ExtractionStatus,
    LoadStatus,
    MatchRule,
    ResourceOrigin,
    StrategyName,
)

ALL_ENUMS: tuple[type[StrEnum], ...] = (
    DataSource,
    ExtractionStatus,
    LoadStatus,
    MatchRule,
    ResourceOrigin,
    StrategyName,
)


class TestEnumProperties:
    """Properties shared by every enum."""

    @pytest.mark.parametrize("enum_cls", ALL_ENUMS)
    def test_values_are_unique_lowercase_strings(self, enum_cls: type[StrEnum]) -> None:
        """Property: values are unique, non-empty, lower-case strings."""
        values = [member.value for member in enum_cls]
        assert len(values) == len(set(values))
        assert all(value and value == value.lower() for value in values)

    @given(st.sampled_from([member for cls in ALL_ENUMS for member in cls]))
    def test_str_returns_value(self, member: StrEnum) -> None:
        """Property: str() returns the value, so members log cleanly."""
        event(f"enum_type={type(member).__name__}")
        assert str(member) == member.value

    def test_all_exported(self) -> None:
        """Every enum is listed in __all__."""
        assert {cls.__name__ for cls in ALL_ENUMS} <= set(enums.__all__)


class TestMembers:
    """Pin the members other modules depend on."""

    def test_strategy_order_names(self) -> None:
        """Six extraction strategies exist."""
        assert [member.value for member in StrategyName] == [
            "named_binding",
            "default_export",
            "module_exports",
            "sandbox",
            "flat_scan",
            "nested_table",
        ]

    def test_load_statuses(self) -> None:
        """LoadStatus covers success, empty and both failure kinds."""
        assert set(LoadStatus) == {
            LoadStatus.SUCCESS,
            LoadStatus.EMPTY,
            LoadStatus.READ_ERROR,
            LoadStatus.PARSE_ERROR,
        }

    def test_data_sources(self) -> None:
        """Data source distinguishes real, default and empty data."""
        assert {member.value for member in DataSource} == {"resource", "default", "empty"}

    def test_match_rules(self) -> None:
        """Every scanner rule family has a tag."""
        assert len(MatchRule) == 7
