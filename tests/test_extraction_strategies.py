"""Tests for the individual extraction strategies."""

from __future__ import annotations

import pytest

from i18nhint.diagnostics import ExtractionError, SandboxUnavailableError
from i18nhint.extraction.strategies import (
    ExtractionOptions,
    default_export,
    flat_pairs,
    flat_scan,
    module_exports,
    named_binding,
    nested_table,
    sandboxed,
)

OPTIONS = ExtractionOptions()


class TestNamedBinding:
    """Test const/let/var R = {...}."""

    @pytest.mark.parametrize("keyword", ["const", "let", "var"])
    def test_declaration_keywords(self, keyword: str) -> None:
        """All three declaration keywords are recognized."""
        text = f"{keyword} R = {{l0001: 'Search'}};\nexport default R;"
        assert named_binding(text, OPTIONS) == {"l0001": "Search"}

    def test_only_the_literal_is_evaluated(self) -> None:
        """Code around the literal may be arbitrary."""
        text = (
            "import helper from './helper';\n"
            "const R = {l0001: 'a', l0002: 'b'};\n"
            "export const extra = helper(R, () => { return 1; });\n"
        )
        assert named_binding(text, OPTIONS) == {"l0001": "a", "l0002": "b"}

    def test_commented_out_declaration_ignored(self) -> None:
        """A declaration inside a comment does not count."""
        text = "// const R = {l0009: 'old'};\nconst R = {l0001: 'new'};"
        assert named_binding(text, OPTIONS) == {"l0001": "new"}

    def test_braces_inside_strings(self) -> None:
        """Braces in string values do not end the literal."""
        text = "const R = {l0001: '{x}', l0002: 'a}b'};"
        assert named_binding(text, OPTIONS) == {"l0001": "{x}", "l0002": "a}b"}

    def test_nested_declaration_not_top_level(self) -> None:
        """Declarations inside functions are not the key table."""
        text = "function f() { const R = {l0001: 'inner'}; }"
        assert named_binding(text, OPTIONS) is None

    def test_custom_binding_names(self) -> None:
        """Configured binding names replace the default."""
        text = "const LANG = {l0001: 'x'};"
        assert named_binding(text, OPTIONS) is None
        options = ExtractionOptions(binding_names=("LANG", "R"))
        assert named_binding(text, options) == {"l0001": "x"}

    def test_similar_names_do_not_match(self) -> None:
        """A binding named RR or R2 is not R."""
        assert named_binding("const RR = {l0001: 'x'};", OPTIONS) is None

    def test_non_literal_value_raises(self) -> None:
        """A helper call inside the literal makes the strategy fail."""
        with pytest.raises(ExtractionError):
            named_binding("const R = {l0001: t('x')};", OPTIONS)

    def test_unclosed_literal_raises(self) -> None:
        """An unbalanced literal makes the strategy fail."""
        with pytest.raises(ExtractionError):
            named_binding("const R = {l0001: 'x',", OPTIONS)


class TestExports:
    """Test export default {...} and module.exports = {...}."""

    def test_default_export(self) -> None:
        """Default-exported object literal is read."""
        text = "/* header */\nexport default {\n  l0001: 'Search', // note\n};\n"
        assert default_export(text, OPTIONS) == {"l0001": "Search"}

    def test_default_export_of_identifier_not_applicable(self) -> None:
        """export default R has no literal to read."""
        assert default_export("export default R;", OPTIONS) is None

    def test_module_exports(self) -> None:
        """CommonJS module.exports literal is read."""
        text = "'use strict';\nmodule.exports = {'l0001': \"Search\"};\n"
        assert module_exports(text, OPTIONS) == {"l0001": "Search"}

    def test_module_exports_spacing(self) -> None:
        """Whitespace around the dot and equals sign is allowed."""
        assert module_exports("module . exports={l0001: 'x'}", OPTIONS) == {"l0001": "x"}

    def test_not_applicable_without_marker(self) -> None:
        """Neither strategy applies to unrelated text."""
        text = "const x = {l0001: 'a'};"
        assert default_export(text, OPTIONS) is None
        assert module_exports(text, OPTIONS) is None


class TestSandboxStrategy:
    """Test the sandbox strategy wrapper (runtime stubbed)."""

    class _Sandbox:
        def __init__(self, value: object = None, error: Exception | None = None) -> None:
            self.value = value
            self.error = error
            self.sources: list[str] = []

        def evaluate(self, source: str) -> object:
            self.sources.append(source)
            if self.error is not None:
                raise self.error
            return self.value

    def test_disabled_without_sandbox(self) -> None:
        """No sandbox configured means not applicable."""
        assert sandboxed("anything", OPTIONS) is None

    def test_returns_object_exports(self) -> None:
        """An object export is returned as is."""
        sandbox = self._Sandbox({"l0001": "x"})
        options = ExtractionOptions(sandbox=sandbox)  # type: ignore[arg-type]
        assert sandboxed("module.exports = ...", options) == {"l0001": "x"}
        assert sandbox.sources == ["module.exports = ..."]

    def test_non_object_exports_fail(self) -> None:
        """A non-object export is a strategy failure."""
        options = ExtractionOptions(sandbox=self._Sandbox(["l0001"]))  # type: ignore[arg-type]
        with pytest.raises(ExtractionError, match="not an object"):
            sandboxed("x", options)

    def test_sandbox_errors_propagate(self) -> None:
        """Sandbox errors surface as strategy failures."""
        error = SandboxUnavailableError("no node")
        options = ExtractionOptions(sandbox=self._Sandbox(error=error))  # type: ignore[arg-type]
        with pytest.raises(SandboxUnavailableError):
            sandboxed("x", options)


class TestFlatScan:
    """Test the textual pair scan."""

    def test_collects_all_quote_styles(self) -> None:
        """Bare, single- and double-quoted keys and both value quotes."""
        text = "l0001: 'a', 'l0002': \"b\", \"l0003\" : 'c'"
        assert flat_pairs(text) == {"l0001": "a", "l0002": "b", "l0003": "c"}

    def test_later_duplicates_win(self) -> None:
        """A key seen twice keeps its last text."""
        assert flat_pairs("l0001: 'a', l0001: 'b'") == {"l0001": "b"}

    def test_ignores_embedded_keys(self) -> None:
        """Keys glued to identifiers are not keys."""
        assert flat_pairs("xl0001: 'a', l0001x: 'b'") == {}

    def test_ignores_non_string_values(self) -> None:
        """Only quoted values count."""
        assert flat_pairs("l0001: helper('a'), l0002: 5") == {}

    def test_not_applicable_when_nothing_found(self) -> None:
        """No pairs means not applicable rather than empty."""
        assert flat_scan("nothing here", OPTIONS) is None

    def test_works_on_broken_syntax(self) -> None:
        """Structure is irrelevant to the flat scan."""
        text = "const R = {l0001: 'Search', l0002: oops(, 'l0099': 'Fallback',"
        assert flat_scan(text, OPTIONS) == {"l0001": "Search", "l0099": "Fallback"}


class TestNestedTable:
    """Test the closure-built locale object strategy."""

    CLOSURE = """
    (function (global) {
      var commonHM = global.commonHM;
      var zhCn = {
        name: 'zhCn',
        el: { colorpicker: { confirm: '确定' } },
        R: {
          l0001: '搜索',
          l0002: commonHM.label('取消'),
          l0003: isMac ? '命令' : '控制',
          l0004: "It's",
        },
      };
      global.ELEMENT.lang.zhCn = zhCn;
    })(window);
    """

    def test_reads_nested_table(self) -> None:
        """Non-literal members are neutralized, literal ones kept."""
        assert nested_table(self.CLOSURE, OPTIONS) == {
            "l0001": "搜索",
            "l0002": "",
            "l0003": "命令",
            "l0004": "It's",
        }

    def test_custom_table_field(self) -> None:
        """The table field name is configurable."""
        text = "var x = {name: 'en', messages: {l0001: 'a'}};"
        assert nested_table(text, OPTIONS) is None
        assert nested_table(text, ExtractionOptions(table_field="messages")) == {"l0001": "a"}

    def test_table_must_be_sibling_of_name(self) -> None:
        """An R field nested deeper than the name field is not the table."""
        text = "var x = {name: 'en', other: {R: {l0001: 'a'}}};"
        assert nested_table(text, OPTIONS) is None

    def test_not_applicable_without_name_field(self) -> None:
        """Objects without a name field are skipped."""
        assert nested_table("var x = {R: {l0001: 'a'}};", OPTIONS) is None

    def test_falls_back_to_flat_scan_of_table(self) -> None:
        """When the table cannot be evaluated, pairs inside it are still read."""
        text = "var zh = {name: 'zh', R: {l0001: 'a', some.path: 'x', 'l0002': 'b'}, l0003: 'outside'};"
        assert nested_table(text, OPTIONS) == {"l0001": "a", "l0002": "b"}

    def test_unreadable_table_raises(self) -> None:
        """A table with nothing recoverable is a failure."""
        text = "var zh = {name: 'zh', R: {a.b: 1}};"
        with pytest.raises(ExtractionError):
            nested_table(text, OPTIONS)
