"""Locale key occurrence scanner.

KeyScanner finds every place in a buffer where a locale key is used and
resolves it against a LocaleMap snapshot. Scanning is line by line:

1. The precise rule (``'l0001': 'text'``) runs first. If it matches anything,
   the line is a declaration and the general rules are skipped for it.
2. Otherwise the general rules run in priority order.

A candidate is reported only if the map resolves it, and only once per span;
the first rule that produced a span is the one recorded.

Python 3.13+.
"""

from __future__ import annotations

import functools
import logging
import os
from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path, PurePath
from typing import TYPE_CHECKING

from i18nhint.constants import (
    DEFAULT_ATTRIBUTE_PREFIXES,
    DEFAULT_KEY_PREFIXES,
    DEFAULT_LANGUAGE,
    MAX_OCCURRENCES,
    RESOURCE_GENERIC_STEMS,
    RESOURCE_SUFFIXES,
)
from i18nhint.enums import MatchRule
from i18nhint.locale_utils import resource_stems
from i18nhint.localization.locale_map import LocaleMap
from i18nhint.localization.types import LocaleKey, LocaleText

from .rules import DEFAULT_CALL_NAMES, MatcherRule, build_general_rules, build_precise_rule

if TYPE_CHECKING:
    from i18nhint.config import HintConfig

__all__ = ["KeyOccurrence", "KeyScanner", "scan_buffer", "scan_line"]

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True, order=True)
class KeyOccurrence:
    """One resolved use of a locale key.

    Ordering is by position, so sorted occurrences read top to bottom.

    Attributes:
        line: Line number (0-based)
        start: Column of the first key character (0-based)
        end: Column just past the key (exclusive)
        key: Key as written in the buffer
        text: Display text the key resolves to
        rule: Rule that matched
    """

    line: int
    start: int
    end: int
    key: LocaleKey
    text: LocaleText
    rule: MatchRule

    @property
    def span(self) -> tuple[int, int, int]:
        """(line, start, end) identity used for deduplication."""
        return self.line, self.start, self.end


class KeyScanner:
    """Scans buffers for locale key occurrences.

    Example:
        >>> scanner = KeyScanner()
        >>> m = LocaleMap({"l0001": "Search"})
        >>> [(o.start, o.end, o.text) for o in scanner.scan_line("R.l0001", m)]
        [(2, 7, 'Search')]
    """

    __slots__ = (
        "_general_rules",
        "_language",
        "_max_occurrences",
        "_precise_rule",
        "_resource_paths",
        "_suffixes",
    )

    def __init__(
        self,
        *,
        key_prefixes: Iterable[str] = DEFAULT_KEY_PREFIXES,
        attribute_prefixes: Iterable[str] = DEFAULT_ATTRIBUTE_PREFIXES,
        call_names: Iterable[str] = DEFAULT_CALL_NAMES,
        language: str = DEFAULT_LANGUAGE,
        max_occurrences: int = MAX_OCCURRENCES,
    ) -> None:
        """Initialize KeyScanner.

        Args:
            key_prefixes: Accessor names of the key table
            attribute_prefixes: Markup attribute prefixes that may bind keys
            call_names: Translation function names
            language: Language whose resource modules are never scanned
            max_occurrences: Occurrences reported per buffer at most

        Raises:
            ValueError: If max_occurrences is not positive
        """
        if max_occurrences <= 0:
            msg = f"max_occurrences must be positive, got {max_occurrences}"
            raise ValueError(msg)
        self._precise_rule: MatcherRule = build_precise_rule()
        self._general_rules = build_general_rules(key_prefixes, attribute_prefixes, call_names)
        self._language = language
        self._max_occurrences = max_occurrences
        self._suffixes = frozenset(RESOURCE_SUFFIXES)
        self._resource_paths: frozenset[PurePath] = frozenset()

    @classmethod
    def from_config(cls, config: HintConfig) -> KeyScanner:
        """Build a scanner from host configuration."""
        return cls(
            key_prefixes=config.key_prefixes,
            attribute_prefixes=config.attribute_prefixes,
            language=config.language,
            max_occurrences=config.max_occurrences,
        )

    @property
    def max_occurrences(self) -> int:
        """Occurrences reported per buffer at most."""
        return self._max_occurrences

    def update_resource_paths(self, paths: Iterable[str | os.PathLike[str]]) -> None:
        """Replace the set of loaded resource files that scan as empty."""
        self._resource_paths = frozenset(Path(path).absolute() for path in paths)

    def is_resource_module(self, path: str | os.PathLike[str] | None) -> bool:
        """Check whether path names a resource module.

        True for loaded resource files, and for script files whose stem is a
        resource stem of the configured language (``zh.js``, ``zh_CN.ts``) or
        a generic one (``locale.js``).
        """
        if path is None:
            return False
        candidate = Path(path)
        if candidate.absolute() in self._resource_paths:
            return True
        if candidate.suffix.lower() not in self._suffixes:
            return False
        stem = candidate.stem.lower()
        return stem in RESOURCE_GENERIC_STEMS or stem in resource_stems(self._language)

    def scan_line(self, line_text: str, locale_map: LocaleMap, *, line: int = 0) -> list[KeyOccurrence]:
        """Find resolved key occurrences on one line.

        Args:
            line_text: Text of the line without its line break
            locale_map: Snapshot to resolve keys against
            line: Line number recorded on the occurrences

        Returns:
            Occurrences sorted by start column
        """
        occurrences = self._apply(self._precise_rule, line_text, locale_map, line, set())
        if occurrences:
            return occurrences
        seen: set[tuple[int, int]] = set()
        for rule in self._general_rules:
            occurrences.extend(self._apply(rule, line_text, locale_map, line, seen))
        occurrences.sort()
        return occurrences

    def scan_buffer(
        self,
        text: str,
        locale_map: LocaleMap,
        *,
        path: str | os.PathLike[str] | None = None,
    ) -> list[KeyOccurrence]:
        """Find resolved key occurrences in a whole buffer.

        Args:
            text: Buffer contents
            locale_map: Snapshot to resolve keys against
            path: Buffer file path, used to recognize resource modules

        Returns:
            At most max_occurrences occurrences sorted by (line, start);
            empty for resource modules or when the map is empty
        """
        if not locale_map or self.is_resource_module(path):
            return []
        occurrences: list[KeyOccurrence] = []
        for number, line_text in enumerate(text.split("\n")):
            occurrences.extend(self.scan_line(line_text.removesuffix("\r"), locale_map, line=number))
            if len(occurrences) >= self._max_occurrences:
                logger.debug("Occurrence limit %d reached at line %d", self._max_occurrences, number)
                return occurrences[: self._max_occurrences]
        return occurrences

    @staticmethod
    def _apply(
        rule: MatcherRule,
        line_text: str,
        locale_map: LocaleMap,
        line: int,
        seen: set[tuple[int, int]],
    ) -> list[KeyOccurrence]:
        found: list[KeyOccurrence] = []
        for key, start, end in rule.candidates(line_text):
            if (start, end) in seen:
                continue
            text = locale_map.lookup(key)
            if text is None:
                continue
            seen.add((start, end))
            found.append(KeyOccurrence(line, start, end, key, text, rule.rule))
        return found


@functools.cache
def _default_scanner() -> KeyScanner:
    return KeyScanner()


def scan_line(line_text: str, locale_map: LocaleMap) -> list[KeyOccurrence]:
    """Scan one line with the default accessor names."""
    return _default_scanner().scan_line(line_text, locale_map)


def scan_buffer(
    text: str, locale_map: LocaleMap, *, path: str | os.PathLike[str] | None = None
) -> list[KeyOccurrence]:
    """Scan a buffer with the default accessor names."""
    return _default_scanner().scan_buffer(text, locale_map, path=path)
