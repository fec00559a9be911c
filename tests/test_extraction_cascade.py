"""Tests for the extraction cascade.

Property tests run with the sandbox disabled so they never start a runtime.
"""

from __future__ import annotations

import logging

import pytest
from hypothesis import event, given
from hypothesis import strategies as st

from i18nhint.diagnostics import ExtractionError
from i18nhint.enums import DataSource, ExtractionStatus, LoadStatus, StrategyName
from i18nhint.extraction import ResourceExtractor, extract
from tests.strategies import flat_resource_texts, literal_resource_modules

EXTRACTOR = ResourceExtractor(sandbox=None)


def _raising(text: str, options: object) -> None:  # noqa: ARG001
    msg = "boom"
    raise RuntimeError(msg)


def _returning(value: dict[object, object] | None):  # type: ignore[no-untyped-def]
    def strategy(text: str, options: object) -> dict[object, object] | None:  # noqa: ARG001
        return value

    return strategy


class TestScenarios:
    """Test the documented extraction scenarios."""

    def test_plain_binding(self) -> None:
        """A plain const binding yields its entries."""
        m = EXTRACTOR.extract("const R = {l0001: 'Search', l0002: 'Cancel'}")
        assert dict(m) == {"l0001": "Search", "l0002": "Cancel"}
        assert m.source == DataSource.RESOURCE

    def test_syntax_error_falls_back_to_flat_scan(self) -> None:
        """A broken literal still yields its textual pairs."""
        text = "const R = {\n  oops(\n  'l0099': 'Fallback',\n};\n"
        outcome = EXTRACTOR.run(text)
        assert dict(outcome.locale_map) == {"l0099": "Fallback"}
        assert outcome.strategy == StrategyName.FLAT_SCAN
        assert outcome.attempts[0].status == ExtractionStatus.FAILED

    def test_no_data_gives_empty_map(self) -> None:
        """A module without any key yields an empty map."""
        m = EXTRACTOR.extract("export function helper() { return 1; }")
        assert len(m) == 0
        assert m.source == DataSource.EMPTY

    def test_non_conforming_members_dropped(self) -> None:
        """Members whose key or value do not conform are removed."""
        text = "export default {name: 'zhCn', l0001: 'ok', l0002: 5, l12: 'short'};"
        assert dict(EXTRACTOR.extract(text)) == {"l0001": "ok"}

    def test_default_export_without_space(self) -> None:
        """export default{...} is read structurally, template strings included."""
        outcome = EXTRACTOR.run("export default{l0001: `Search`}")
        assert dict(outcome.locale_map) == {"l0001": "Search"}
        assert outcome.strategy == StrategyName.DEFAULT_EXPORT

    def test_closure_module_flat_pairs_first(self) -> None:
        """Literal pairs inside a closure are found by the flat scan."""
        text = (
            "(function (g) {\n"
            "  var zhCn = {name: 'zhCn', R: {l0001: '搜索', l0002: g.fmt('x')}};\n"
            "  g.lang = zhCn;\n"
            "})(this);\n"
        )
        outcome = EXTRACTOR.run(text)
        assert dict(outcome.locale_map) == {"l0001": "搜索"}
        assert outcome.strategy == StrategyName.FLAT_SCAN

    def test_closure_module_nested_table(self) -> None:
        """Computed members only are read through the nested table."""
        text = (
            "(function (g) {\n"
            "  var zhCn = {name: 'zhCn', R: {l0001: g.fmt('a'), l0002: isMac ? 'Cmd' : 'Ctrl'}};\n"
            "  g.lang = zhCn;\n"
            "})(this);\n"
        )
        outcome = EXTRACTOR.run(text)
        assert dict(outcome.locale_map) == {"l0001": "", "l0002": "Cmd"}
        assert outcome.strategy == StrategyName.NESTED_TABLE

    def test_module_level_extract(self) -> None:
        """The module-level function uses the default cascade."""
        assert extract("module.exports = {l0001: 'x'}")["l0001"] == "x"


class TestAttemptLog:
    """Test the per-strategy attempt log."""

    def test_log_stops_at_first_success(self) -> None:
        """Attempts end with the winning strategy."""
        outcome = EXTRACTOR.run("export default {l0001: 'x'};")
        assert [a.strategy for a in outcome.attempts] == [
            StrategyName.NAMED_BINDING,
            StrategyName.DEFAULT_EXPORT,
        ]
        assert [a.status for a in outcome.attempts] == [
            ExtractionStatus.NOT_APPLICABLE,
            ExtractionStatus.SUCCESS,
        ]
        assert outcome.load_status == LoadStatus.SUCCESS

    def test_all_strategies_attempted_when_nothing_found(self) -> None:
        """Without a winner every strategy appears in the log."""
        outcome = EXTRACTOR.run("nothing to see")
        assert len(outcome.attempts) == 6
        assert outcome.strategy is None
        assert outcome.load_status == LoadStatus.PARSE_ERROR

    def test_empty_status(self) -> None:
        """Parsed structure without conforming members is EMPTY."""
        outcome = EXTRACTOR.run("const R = {name: 'zh'};")
        assert outcome.attempts[0].status == ExtractionStatus.EMPTY
        assert outcome.load_status == LoadStatus.EMPTY

    def test_errors_collected(self) -> None:
        """Failed attempts keep their exception."""
        outcome = EXTRACTOR.run("const R = {l0001: helper()};")
        assert outcome.attempts[0].status == ExtractionStatus.FAILED
        assert isinstance(outcome.errors[0], ExtractionError)

    def test_sandbox_skipped_when_disabled(self) -> None:
        """With no sandbox the sandbox strategy is not applicable."""
        outcome = EXTRACTOR.run("nothing")
        sandbox_attempt = next(a for a in outcome.attempts if a.strategy == StrategyName.SANDBOX)
        assert sandbox_attempt.status == ExtractionStatus.NOT_APPLICABLE


class TestCombinator:
    """Test the cascade with custom strategy lists."""

    def test_exception_never_escapes(self, caplog: pytest.LogCaptureFixture) -> None:
        """Any exception from a strategy is recorded and the next one runs."""
        extractor = ResourceExtractor(
            sandbox=None,
            strategies=[
                (StrategyName.NAMED_BINDING, _raising),
                (StrategyName.FLAT_SCAN, _returning({"l0001": "x"})),
            ],
        )
        with caplog.at_level(logging.DEBUG, logger="i18nhint.extraction.cascade"):
            outcome = extractor.run("text")
        assert dict(outcome.locale_map) == {"l0001": "x"}
        assert isinstance(outcome.errors[0], RuntimeError)
        assert "failed: boom" in caplog.text

    def test_first_success_wins(self) -> None:
        """Later strategies do not run once one succeeds."""
        extractor = ResourceExtractor(
            sandbox=None,
            strategies=[
                (StrategyName.NAMED_BINDING, _returning({"l0001": "first"})),
                (StrategyName.FLAT_SCAN, _raising),
            ],
        )
        outcome = extractor.run("text")
        assert dict(outcome.locale_map) == {"l0001": "first"}
        assert len(outcome.attempts) == 1

    def test_empty_result_moves_on(self) -> None:
        """A strategy with nothing conforming does not stop the cascade."""
        extractor = ResourceExtractor(
            sandbox=None,
            strategies=[
                (StrategyName.NAMED_BINDING, _returning({"title": "x"})),
                (StrategyName.FLAT_SCAN, _returning({"l0002": "y"})),
            ],
        )
        assert dict(extractor.extract("text")) == {"l0002": "y"}

    def test_no_strategies(self) -> None:
        """An empty cascade yields an empty outcome."""
        outcome = ResourceExtractor(sandbox=None, strategies=[]).run("text")
        assert outcome.attempts == ()
        assert len(outcome.locale_map) == 0

    def test_options_carry_configuration(self) -> None:
        """Constructor settings reach the strategies."""
        extractor = ResourceExtractor(binding_names=["LANG"], table_field="messages", sandbox=None)
        assert extractor.options.binding_names == ("LANG",)
        assert extractor.options.table_field == "messages"
        assert dict(extractor.extract("const LANG = {l0001: 'a'};")) == {"l0001": "a"}


class TestCascadeProperties:
    """Property tests for the cascade."""

    @given(literal_resource_modules())
    def test_literal_modules_recovered_exactly(self, module: tuple[str, dict[str, str]]) -> None:
        """Property: a literal module yields exactly its conforming entries."""
        text, entries = module
        outcome = EXTRACTOR.run(text)
        assert dict(outcome.locale_map) == entries
        assert outcome.strategy in (
            StrategyName.NAMED_BINDING,
            StrategyName.DEFAULT_EXPORT,
            StrategyName.MODULE_EXPORTS,
        )
        event(f"winner={outcome.strategy}")

    @given(flat_resource_texts())
    def test_flat_pairs_recovered(self, sample: tuple[str, dict[str, str]]) -> None:
        """Property: broken text yields every textual pair through the flat scan."""
        text, entries = sample
        outcome = EXTRACTOR.run(text)
        assert dict(outcome.locale_map) == entries
        assert outcome.strategy == StrategyName.FLAT_SCAN

    @given(st.text(max_size=200))
    def test_never_raises(self, text: str) -> None:
        """Property: arbitrary text never makes extraction raise."""
        outcome = EXTRACTOR.run(text)
        assert outcome.load_status in LoadStatus
        event(f"status={outcome.load_status}")

    @given(literal_resource_modules())
    def test_idempotent(self, module: tuple[str, dict[str, str]]) -> None:
        """Property: extracting the same text twice gives equal maps."""
        text, _ = module
        assert EXTRACTOR.extract(text) == EXTRACTOR.extract(text)
