"""Locale data model, resource discovery and loading.

ResourceCache lives in ``i18nhint.localization.cache`` and is re-exported
from the top-level package; it is not imported here because it depends on the
extraction engine, which in turn depends on LocaleMap.

Python 3.13+.
"""

from .discovery import PathResourceDiscovery, ResourceDiscovery
from .loading import (
    FileResourceReader,
    LoadSummary,
    ResourceFile,
    ResourceLoadResult,
    ResourceReader,
)
from .locale_map import LocaleMap, conforming_entries, is_locale_key
from .types import BufferId, LocaleKey, LocaleText, ResourceSource

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # Data model
    "LocaleMap",
    "conforming_entries",
    "is_locale_key",
    # Type aliases
    "BufferId",
    "LocaleKey",
    "LocaleText",
    "ResourceSource",
    # Loading
    "FileResourceReader",
    "LoadSummary",
    "ResourceFile",
    "ResourceLoadResult",
    "ResourceReader",
    # Discovery
    "PathResourceDiscovery",
    "ResourceDiscovery",
]
