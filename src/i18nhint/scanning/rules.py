"""Matching rules for locale key occurrences in source text.

A rule is a compiled pattern with a named ``key`` group, optionally paired
with an inner pattern: when present, the outer pattern selects a region
(``{{ ... }}``, an attribute assignment) and every key-shaped token inside
it is a candidate.

Rules only propose candidates. The scanner accepts a candidate only if the
active LocaleMap resolves it.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Iterator
from dataclasses import dataclass

from i18nhint.constants import KEY_PATTERN
from i18nhint.enums import MatchRule

__all__ = [
    "DEFAULT_CALL_NAMES",
    "MatcherRule",
    "build_general_rules",
    "build_precise_rule",
]

# Translation functions whose first argument is a key: $t('l0001').
DEFAULT_CALL_NAMES: tuple[str, ...] = (
    "$t",
    "t",
    "i18n.t",
    "$i18n.t",
    "_t",
    "tr",
    "translate",
    "getText",
)

_KEY = rf"(?P<key>{KEY_PATTERN})"
_BOUNDED_KEY = re.compile(rf"(?<![\w$]){_KEY}(?![\w$])")


@dataclass(frozen=True, slots=True)
class MatcherRule:
    """One matching rule.

    Attributes:
        rule: Rule identity reported on occurrences
        pattern: Pattern with a ``key`` group, or the region pattern if inner is set
        inner: Pattern with a ``key`` group applied inside each region
    """

    rule: MatchRule
    pattern: re.Pattern[str]
    inner: re.Pattern[str] | None = None

    def candidates(self, line_text: str) -> Iterator[tuple[str, int, int]]:
        """Yield (key, start, end) for every candidate on the line."""
        for match in self.pattern.finditer(line_text):
            if self.inner is None:
                yield match.group("key"), match.start("key"), match.end("key")
                continue
            for inner in self.inner.finditer(line_text, match.start(), match.end()):
                yield inner.group("key"), inner.start("key"), inner.end("key")


def _alternation(names: Iterable[str]) -> str:
    """Regex alternation of literal names, longest first."""
    unique = sorted({name for name in names if name}, key=lambda name: (-len(name), name))
    return "|".join(re.escape(name) for name in unique)


def build_precise_rule() -> MatcherRule:
    """Rule for the resource declaration shape ``'l0001': 'text'``."""
    return MatcherRule(
        MatchRule.KEY_VALUE,
        re.compile(rf"""(?<![\w$.])(['"]?){_KEY}\1\s*:\s*['"`]"""),
    )


def build_general_rules(
    key_prefixes: Iterable[str],
    attribute_prefixes: Iterable[str],
    call_names: Iterable[str] = DEFAULT_CALL_NAMES,
) -> tuple[MatcherRule, ...]:
    """Build the general rules in priority order.

    Args:
        key_prefixes: Accessor names of the key table (R, _t.R, LanData.R)
        attribute_prefixes: Markup attribute prefixes (``:``, ``v-bind:``, ``data-i18n``)
        call_names: Translation function names

    Returns:
        Rules for property access, call lookup, interpolation, attribute
        binding, quoted strings and bare identifiers, in that order
    """
    key_prefixes = tuple(key_prefixes)
    rules: list[MatcherRule] = []

    accessors = _alternation(key_prefixes)
    if accessors:
        rules.append(
            MatcherRule(
                MatchRule.PROPERTY_ACCESS,
                re.compile(rf"(?<![\w$])(?:{accessors})\s*\??\.\s*{_KEY}(?![\w$])"),
            )
        )
        rules.append(
            MatcherRule(
                MatchRule.PROPERTY_ACCESS,
                re.compile(
                    rf"""(?<![\w$])(?:{accessors})\s*(?:\?\.)?\[\s*(?P<q>['"`]){_KEY}(?P=q)\s*\]"""
                ),
            )
        )

    callables = _alternation((*call_names, *key_prefixes))
    if callables:
        rules.append(
            MatcherRule(
                MatchRule.CALL_LOOKUP,
                re.compile(rf"""(?<![\w$])(?:{callables})\s*\(\s*(?P<q>['"`]){_KEY}(?P=q)"""),
            )
        )

    rules.append(MatcherRule(MatchRule.INTERPOLATION, re.compile(r"\{\{.*?\}\}"), _BOUNDED_KEY))
    rules.append(
        MatcherRule(MatchRule.INTERPOLATION, re.compile(rf"(?<!\{{)\{{\s*{_KEY}\s*\}}(?!\}})"))
    )

    attributes = _alternation(attribute_prefixes)
    if attributes:
        rules.append(
            MatcherRule(
                MatchRule.ATTRIBUTE_BINDING,
                re.compile(rf"""(?<![\w:-])(?:{attributes})[\w.:-]*\s*=\s*(?:"[^"]*"|'[^']*')"""),
                _BOUNDED_KEY,
            )
        )

    rules.append(
        MatcherRule(MatchRule.QUOTED_STRING, re.compile(rf"""(?P<q>['"`]){_KEY}(?P=q)"""))
    )
    rules.append(
        MatcherRule(
            MatchRule.BARE_IDENTIFIER,
            re.compile(rf"""(?<![\w$]){_KEY}(?![\w$])(?!\s*(?::|=(?!=))|['"`])"""),
        )
    )
    return tuple(rules)
