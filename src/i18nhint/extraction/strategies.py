"""Extraction strategies for resource modules.

Each strategy takes the raw module text and returns the raw mapping it
recovered, None when the text does not have the shape the strategy looks for,
or raises ExtractionError when the shape is there but cannot be read. The
cascade in ``i18nhint.extraction.cascade`` runs them in priority order and
filters the recovered entries.

Strategies:
    named_binding   const R = {...}
    default_export  export default {...}
    module_exports  module.exports = {...}
    sandbox         whole module run by an isolated JavaScript runtime
    flat_scan       'l0001': 'text' pairs anywhere in the text
    nested_table    {name: 'zhCn', R: {...}} inside a closure

Python 3.13+. Depends on: babel (via literal evaluation).
"""

from __future__ import annotations

import re
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import TypeAlias

from i18nhint.constants import DEFAULT_BINDING_NAMES, DEFAULT_TABLE_FIELD, KEY_PATTERN
from i18nhint.diagnostics import ExtractionError
from i18nhint.enums import StrategyName

from .literal import evaluate_literal
from .sandbox import ModuleSandbox
from .source import (
    brace_depth_at,
    enclosing_open,
    find_closing,
    mask_comments,
    neutralize_object,
)

__all__ = [
    "DEFAULT_STRATEGIES",
    "FLAT_PAIR_RE",
    "ExtractionOptions",
    "Strategy",
    "default_export",
    "flat_pairs",
    "flat_scan",
    "module_exports",
    "named_binding",
    "nested_table",
    "sandboxed",
]

# <quote?>KEY<quote?> : <quote>TEXT<quote>
FLAT_PAIR_RE = re.compile(
    rf"""(?<![\w$])(['"]?)({KEY_PATTERN})(['"]?)\s*:\s*(['"])([^'"]*)\4"""
)

_DEFAULT_EXPORT_RE = re.compile(r"(?<![\w$.])export\s+default\b\s*(?=\{)")
_MODULE_EXPORTS_RE = re.compile(r"(?<![\w$.])module\s*\.\s*exports\s*=\s*(?=\{)")
_NAME_FIELD_RE = re.compile(r"""(?<![\w$.])(['"]?)name\1\s*:\s*(['"])[\w$-]+\2""")


@dataclass(frozen=True, slots=True)
class ExtractionOptions:
    """Knobs shared by all strategies.

    Attributes:
        binding_names: Identifiers a top-level declaration binds the key table to
        table_field: Field holding the nested key table in a locale object
        sandbox: Runtime for whole-module evaluation (None disables it)
    """

    binding_names: tuple[str, ...] = DEFAULT_BINDING_NAMES
    table_field: str = DEFAULT_TABLE_FIELD
    sandbox: ModuleSandbox | None = None


Strategy: TypeAlias = Callable[[str, ExtractionOptions], Mapping[object, object] | None]


def _evaluate_object(text: str, open_index: int) -> dict[object, object]:
    """Evaluate the object literal whose brace sits at open_index."""
    close_index = find_closing(text, open_index)
    value = evaluate_literal(text[open_index:close_index + 1])
    if not isinstance(value, dict):
        msg = f"Expected an object literal, got {type(value).__name__}"
        raise ExtractionError(msg)
    return value


def named_binding(text: str, options: ExtractionOptions) -> Mapping[object, object] | None:
    """Read ``const|let|var <binding> = {...}`` declared at the top level."""
    if not options.binding_names:
        return None
    names = "|".join(re.escape(name) for name in options.binding_names)
    pattern = re.compile(rf"(?<![\w$.])(?:const|let|var)\s+(?:{names})\s*=\s*(?=\{{)")
    masked = mask_comments(text)
    for match in pattern.finditer(masked):
        if brace_depth_at(masked, match.start()) == 0:
            return _evaluate_object(masked, match.end())
    return None


def default_export(text: str, options: ExtractionOptions) -> Mapping[object, object] | None:  # noqa: ARG001
    """Read ``export default {...}``."""
    masked = mask_comments(text)
    match = _DEFAULT_EXPORT_RE.search(masked)
    if match is None:
        return None
    return _evaluate_object(masked, match.end())


def module_exports(text: str, options: ExtractionOptions) -> Mapping[object, object] | None:  # noqa: ARG001
    """Read ``module.exports = {...}``."""
    masked = mask_comments(text)
    match = _MODULE_EXPORTS_RE.search(masked)
    if match is None:
        return None
    return _evaluate_object(masked, match.end())


def sandboxed(text: str, options: ExtractionOptions) -> Mapping[object, object] | None:
    """Run the whole module in the configured sandbox and read its exports."""
    if options.sandbox is None:
        return None
    value = options.sandbox.evaluate(text)
    if not isinstance(value, dict):
        msg = f"Module exports are not an object ({type(value).__name__})"
        raise ExtractionError(msg)
    return value


def flat_pairs(text: str) -> dict[str, str]:
    """Collect every textual key/text pair; later duplicates win.

    Example:
        >>> flat_pairs("x = {'l0001': 'Search', l0002: \\"Cancel\\"}")
        {'l0001': 'Search', 'l0002': 'Cancel'}
    """
    return {match.group(2): match.group(5) for match in FLAT_PAIR_RE.finditer(text)}


def flat_scan(text: str, options: ExtractionOptions) -> Mapping[object, object] | None:  # noqa: ARG001
    """Regex fallback over the whole text."""
    return flat_pairs(text) or None


def _find_nested_table(masked: str, table_field: str) -> tuple[int, int] | None:
    """Locate the key table of a ``{name: '<id>', <field>: {...}}`` object.

    Returns:
        (open, close) offsets of the nested table's braces, or None
    """
    field = re.escape(table_field)
    table_re = re.compile(rf"""(?<![\w$.])(['"]?){field}\1\s*:\s*(?=\{{)""")
    for name_match in _NAME_FIELD_RE.finditer(masked):
        owner_open = enclosing_open(masked, name_match.start())
        if owner_open is None or masked[owner_open] != "{":
            continue
        owner_close = find_closing(masked, owner_open)
        owner_depth = brace_depth_at(masked, name_match.start())
        for table_match in table_re.finditer(masked, owner_open + 1, owner_close):
            if brace_depth_at(masked, table_match.start()) == owner_depth:
                table_open = table_match.end()
                return table_open, find_closing(masked, table_open)
    return None


def nested_table(text: str, options: ExtractionOptions) -> Mapping[object, object] | None:
    """Read the key table nested in a named locale object.

    Non-literal member values are neutralized before evaluation. If the table
    still cannot be evaluated, the flat regex runs over the table text alone.
    """
    masked = mask_comments(text)
    span = _find_nested_table(masked, options.table_field)
    if span is None:
        return None
    literal = masked[span[0]:span[1] + 1]
    try:
        value = evaluate_literal(neutralize_object(literal))
    except ExtractionError:
        recovered = flat_pairs(literal)
        if not recovered:
            raise
        return recovered
    if not isinstance(value, dict):
        msg = "Nested key table is not an object"
        raise ExtractionError(msg)
    return value


DEFAULT_STRATEGIES: tuple[tuple[StrategyName, Strategy], ...] = (
    (StrategyName.NAMED_BINDING, named_binding),
    (StrategyName.DEFAULT_EXPORT, default_export),
    (StrategyName.MODULE_EXPORTS, module_exports),
    (StrategyName.SANDBOX, sandboxed),
    (StrategyName.FLAT_SCAN, flat_scan),
    (StrategyName.NESTED_TABLE, nested_table),
)
