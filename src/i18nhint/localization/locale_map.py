"""Immutable key-to-text mapping shared by extraction, caching and scanning.

A LocaleMap is never mutated after construction. Components that need a
different mapping build a new instance and swap the reference, so a scan that
captured a map keeps seeing exactly that map.

Python 3.13+.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
from types import MappingProxyType

from i18nhint.constants import DEFAULT_LOCALE_DATA, KEY_RE
from i18nhint.enums import DataSource
from i18nhint.localization.types import LocaleKey, LocaleText

__all__ = ["LocaleMap", "conforming_entries", "is_locale_key"]


def is_locale_key(candidate: object) -> bool:
    """Check whether candidate is a string shaped like a locale key."""
    return isinstance(candidate, str) and KEY_RE.fullmatch(candidate) is not None


def conforming_entries(raw: Mapping[object, object]) -> dict[LocaleKey, LocaleText]:
    """Keep only entries with a key-shaped key and a string value.

    Non-conforming entries are dropped silently; resource modules routinely mix
    key tables with metadata fields, helper objects and numbers.

    Args:
        raw: Arbitrary mapping recovered from a resource module

    Returns:
        New dict with conforming entries in their original order
    """
    return {
        key: value
        for key, value in raw.items()
        if is_locale_key(key) and isinstance(value, str)
    }


class LocaleMap(Mapping[LocaleKey, LocaleText]):
    """Immutable mapping from locale key to display text.

    Keys keep their case. ``lookup`` tries the exact key first and falls back
    to a case-insensitive match, so ``L0001`` in code resolves against an
    ``l0001`` entry.

    Attributes:
        source: Where the entries came from (resource files, built-in
            defaults, or nothing)

    Example:
        >>> m = LocaleMap({"l0001": "Search"})
        >>> m.lookup("L0001")
        'Search'
        >>> m.lookup("l9999") is None
        True
    """

    __slots__ = ("_entries", "_folded", "_source")

    def __init__(
        self,
        entries: Mapping[LocaleKey, LocaleText] | Iterable[tuple[LocaleKey, LocaleText]] = (),
        *,
        source: DataSource = DataSource.RESOURCE,
    ) -> None:
        """Initialize LocaleMap.

        Args:
            entries: Mapping or (key, text) pairs; later pairs win
            source: Origin of the data

        Raises:
            ValueError: If a key is not shaped like a locale key
            TypeError: If a value is not a string
        """
        data = dict(entries)
        for key, value in data.items():
            if not is_locale_key(key):
                msg = f"Not a locale key: {key!r}"
                raise ValueError(msg)
            if not isinstance(value, str):
                msg = f"Locale text for {key!r} must be str, got {type(value).__name__}"
                raise TypeError(msg)

        folded: dict[str, LocaleText] = {}
        for key, value in data.items():
            # First spelling wins among keys differing only by case.
            folded.setdefault(key.lower(), value)

        self._entries: Mapping[LocaleKey, LocaleText] = MappingProxyType(data)
        self._folded: Mapping[str, LocaleText] = MappingProxyType(folded)
        self._source = source if data or source is not DataSource.RESOURCE else DataSource.EMPTY

    @classmethod
    def empty(cls) -> LocaleMap:
        """Return a map with no entries (source EMPTY)."""
        return cls(source=DataSource.EMPTY)

    @classmethod
    def defaults(cls) -> LocaleMap:
        """Return the built-in default map (source DEFAULT)."""
        return cls(DEFAULT_LOCALE_DATA, source=DataSource.DEFAULT)

    @property
    def source(self) -> DataSource:
        """Origin of the data."""
        return self._source

    @property
    def is_default(self) -> bool:
        """True if this is built-in default data rather than resource data."""
        return self._source is DataSource.DEFAULT

    @property
    def has_resource_data(self) -> bool:
        """True if entries were extracted from resource files."""
        return self._source is DataSource.RESOURCE and bool(self._entries)

    def __getitem__(self, key: LocaleKey) -> LocaleText:
        return self._entries[key]

    def __iter__(self) -> Iterator[LocaleKey]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def __repr__(self) -> str:
        return f"LocaleMap(entries={len(self._entries)}, source={self._source.value!r})"

    def lookup(self, key: LocaleKey) -> LocaleText | None:
        """Resolve key to its text, exact match first, then case-insensitive.

        Args:
            key: Key as written in source text

        Returns:
            Display text, or None if the key is unknown
        """
        text = self._entries.get(key)
        if text is not None:
            return text
        return self._folded.get(key.lower())

    def merged(self, other: Mapping[LocaleKey, LocaleText]) -> LocaleMap:
        """Return a new map with other's entries layered over this one.

        Args:
            other: Entries that take precedence on conflicting keys

        Returns:
            New LocaleMap with source RESOURCE (or EMPTY if both are empty)
        """
        combined = dict(self._entries)
        combined.update(other)
        return LocaleMap(combined)
