"""Merged, cached LocaleMap built from resource modules.

ResourceCache reads each candidate, extracts its entries, and merges them in
candidate order so later candidates win on conflicting keys. Per-file
extractions are cached by path and merged maps by the ordered tuple of
candidate paths; change notifications invalidate both.

Thread Safety:
    Loads are serialized by a lock and the merged snapshot is published by a
    single reference assignment. Readers of ``current`` never lock and never
    see a partially merged map.

Python 3.13+.
"""

from __future__ import annotations

import asyncio
import dataclasses
import logging
import os
import threading
from collections.abc import Iterable
from pathlib import Path
from typing import TypeAlias

from i18nhint.diagnostics import ResourceReadError
from i18nhint.enums import LoadStatus
from i18nhint.extraction.cascade import ResourceExtractor
from i18nhint.localization.loading import (
    FileResourceReader,
    LoadSummary,
    ResourceFile,
    ResourceLoadResult,
    ResourceReader,
)
from i18nhint.localization.locale_map import LocaleMap

__all__ = ["ResourceCache"]

logger = logging.getLogger(__name__)

Candidate: TypeAlias = ResourceFile | str | os.PathLike[str]


class ResourceCache:
    """Loads, merges and caches resource modules.

    Example:
        >>> cache = ResourceCache(ResourceExtractor(sandbox=None))
        >>> locale_map = cache.load(["/work/app/iframe/locale/zh.js"])
        >>> cache.current is locale_map
        True
    """

    __slots__ = (
        "_current",
        "_extractor",
        "_fallback_to_defaults",
        "_files",
        "_lock",
        "_merged",
        "_reader",
        "_summary",
    )

    def __init__(
        self,
        extractor: ResourceExtractor | None = None,
        reader: ResourceReader | None = None,
        *,
        fallback_to_defaults: bool = True,
    ) -> None:
        """Initialize ResourceCache.

        Args:
            extractor: Extraction cascade (default: ResourceExtractor())
            reader: Resource reader (default: FileResourceReader())
            fallback_to_defaults: Serve the built-in map when no resource
                yields entries (False: serve an empty map)
        """
        self._extractor = extractor if extractor is not None else ResourceExtractor()
        self._reader: ResourceReader = reader if reader is not None else FileResourceReader()
        self._fallback_to_defaults = fallback_to_defaults
        self._lock = threading.Lock()
        self._files: dict[Path, tuple[ResourceLoadResult, LocaleMap]] = {}
        self._merged: dict[tuple[Path, ...], tuple[LocaleMap, LoadSummary]] = {}
        self._current = self._fallback_map()
        self._summary = LoadSummary()

    @property
    def current(self) -> LocaleMap:
        """Most recently published merged map (lock-free read)."""
        return self._current

    @property
    def using_defaults(self) -> bool:
        """True if the current map is the built-in default data."""
        return self._current.is_default

    @property
    def loaded_paths(self) -> frozenset[Path]:
        """Paths of every resource behind the current map."""
        return frozenset(result.path for result in self._summary.results)

    def get_load_summary(self) -> LoadSummary:
        """Return the summary of the load behind the current map."""
        return self._summary

    def load(self, candidates: Iterable[Candidate], *, force_reload: bool = False) -> LocaleMap:
        """Merge candidates into a new current map.

        Duplicate candidates keep their last position. Unreadable candidates
        contribute nothing. If no candidate yields an entry, the built-in
        defaults (or an empty map) are published instead.

        Args:
            candidates: Resource files in merge order, least authoritative first
            force_reload: Re-read and re-extract every file, ignoring caches

        Returns:
            The published map (also available as ``current``)
        """
        files = self._dedupe(candidates)
        key = tuple(candidate.path for candidate in files)

        with self._lock:
            cached = None if force_reload else self._merged.get(key)
            if cached is not None:
                self._current, self._summary = cached
                logger.debug("Reusing merged map for %d resources", len(key))
                return cached[0]

            self._prune(set(key))
            results: list[ResourceLoadResult] = []
            merged: dict[str, str] = {}
            for candidate in files:
                result, locale_map = self._load_file(candidate, force_reload=force_reload)
                results.append(result)
                merged.update(locale_map)

            if merged:
                locale_map = LocaleMap(merged)
            else:
                locale_map = self._fallback_map()
                logger.warning(
                    "No locale entries in %d resources, using %s data",
                    len(files),
                    locale_map.source,
                )

            summary = LoadSummary(tuple(results))
            if not summary.read_errors:
                self._merged[key] = (locale_map, summary)
            self._current = locale_map
            self._summary = summary

        logger.info("Loaded %d locale entries from %d resources", len(locale_map), len(files))
        return locale_map

    async def aload(
        self, candidates: Iterable[Candidate], *, force_reload: bool = False
    ) -> LocaleMap:
        """Run ``load`` on a worker thread for asyncio hosts."""
        return await asyncio.to_thread(self.load, list(candidates), force_reload=force_reload)

    def invalidate(self, path: str | os.PathLike[str]) -> bool:
        """Forget everything derived from the file at path.

        Args:
            path: Changed, created or deleted resource file

        Returns:
            True if any cached data depended on the file
        """
        target = Path(path).expanduser().absolute()
        with self._lock:
            dropped = self._files.pop(target, None) is not None
            for key in [key for key in self._merged if target in key]:
                del self._merged[key]
                dropped = True
        if dropped:
            logger.debug("Invalidated cached data for %s", target)
        return dropped

    def clear(self) -> None:
        """Drop all cached data; the current map stays published."""
        with self._lock:
            self._files.clear()
            self._merged.clear()

    def _fallback_map(self) -> LocaleMap:
        return LocaleMap.defaults() if self._fallback_to_defaults else LocaleMap.empty()

    @staticmethod
    def _dedupe(candidates: Iterable[Candidate]) -> list[ResourceFile]:
        positions: dict[Path, ResourceFile] = {}
        for candidate in map(ResourceFile.coerce, candidates):
            positions.pop(candidate.path, None)
            positions[candidate.path] = candidate
        return list(positions.values())

    def _prune(self, listed: set[Path]) -> None:
        for path in [path for path in self._files if path not in listed]:
            del self._files[path]
        for key in [key for key in self._merged if not listed.issuperset(key)]:
            del self._merged[key]

    def _load_file(
        self, candidate: ResourceFile, *, force_reload: bool
    ) -> tuple[ResourceLoadResult, LocaleMap]:
        cached = None if force_reload else self._files.get(candidate.path)
        if cached is not None:
            result, locale_map = cached
            if result.origin != candidate.origin:
                result = dataclasses.replace(result, origin=candidate.origin)
            return result, locale_map

        try:
            text = self._reader.read(candidate.path)
        except (OSError, ResourceReadError) as exc:
            logger.warning("Cannot read resource %s: %s", candidate.path, exc)
            result = ResourceLoadResult(
                candidate.path, candidate.origin, LoadStatus.READ_ERROR, error=exc
            )
            return result, LocaleMap.empty()

        outcome = self._extractor.run(text)
        status = outcome.load_status
        errors = outcome.errors
        result = ResourceLoadResult(
            candidate.path,
            candidate.origin,
            status,
            entry_count=len(outcome.locale_map),
            strategy=outcome.strategy,
            error=errors[-1] if status == LoadStatus.PARSE_ERROR and errors else None,
        )
        if status == LoadStatus.SUCCESS:
            logger.debug(
                "Extracted %d entries from %s via %s",
                result.entry_count,
                candidate.path,
                result.strategy,
            )
        else:
            logger.debug("No entries in %s (%s)", candidate.path, status)
        self._files[candidate.path] = (result, outcome.locale_map)
        return result, outcome.locale_map
