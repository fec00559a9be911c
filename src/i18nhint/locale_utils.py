"""Locale utilities for resource file naming.

Resource modules are named after the language they hold (``zh.js``,
``zh_CN.js``, ``zh-cn.js``). This module turns a configured language code
into the set of file stems that name its resource modules, using Babel's CLDR
data to fill in the territory a bare language implies.

Python 3.13+. Depends on: babel.
"""

from __future__ import annotations

import functools
import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from babel import Locale

__all__ = [
    "get_babel_locale",
    "normalize_locale",
    "resource_stems",
]

logger = logging.getLogger(__name__)


def normalize_locale(locale_code: str) -> str:
    """Convert a BCP-47 locale code to POSIX format for Babel.

    Example:
        >>> normalize_locale("zh-CN")
        'zh_CN'
        >>> normalize_locale("zh")
        'zh'
    """
    return locale_code.strip().replace("-", "_")


@functools.lru_cache(maxsize=128)
def get_babel_locale(locale_code: str) -> Locale:
    """Get a Babel Locale object with caching.

    Args:
        locale_code: Locale code (BCP-47 or POSIX format accepted)

    Returns:
        Babel Locale object

    Raises:
        babel.core.UnknownLocaleError: If locale is not recognized
        ValueError: If locale format is invalid
    """
    # Lazy import: Babel loads CLDR data at import time; defer until needed
    from babel import Locale  # noqa: PLC0415

    return Locale.parse(normalize_locale(locale_code))


def _likely_territory(language: str) -> str | None:
    """Territory CLDR considers most likely for a bare language (zh -> CN)."""
    from babel import Locale  # noqa: PLC0415
    from babel.core import UnknownLocaleError, get_global  # noqa: PLC0415

    likely = get_global("likely_subtags").get(language)
    if not likely:
        return None
    try:
        return Locale.parse(likely).territory
    except (UnknownLocaleError, ValueError):
        return None


@functools.lru_cache(maxsize=32)
def resource_stems(language: str) -> frozenset[str]:
    """File stems (lower-case) that name resource modules for a language.

    Always contains the normalized code itself. When Babel recognizes the
    locale, the bare language and ``language_territory`` are added, with the
    territory taken from CLDR likely-subtags if the code names none. Each
    underscore form also appears with a hyphen.

    Args:
        language: Configured language code (e.g., "zh", "zh-CN")

    Returns:
        Frozen set of lower-case stems

    Example:
        >>> sorted(resource_stems("zh_CN"))
        ['zh', 'zh-cn', 'zh_cn']
    """
    # Lazy import: Babel loads CLDR data at import time; defer until needed
    from babel.core import UnknownLocaleError  # noqa: PLC0415

    normalized = normalize_locale(language)
    stems = {normalized.lower()}
    try:
        locale = get_babel_locale(normalized)
    except (UnknownLocaleError, ValueError, TypeError) as exc:
        logger.debug("Unrecognized language %r, using it verbatim: %s", language, exc)
    else:
        stems.add(locale.language.lower())
        territory = locale.territory or _likely_territory(locale.language)
        if territory:
            stems.add(f"{locale.language}_{territory}".lower())
    stems.update({stem.replace("_", "-") for stem in stems})
    return frozenset(stem for stem in stems if stem)
