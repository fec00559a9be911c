"""Type aliases for the localization domain.

Provides semantic type aliases used throughout the package and by host code
annotating its collaborators.

Python 3.13+. Zero external dependencies.
"""

from typing import TypeAlias

__all__ = [
    "BufferId",
    "LocaleKey",
    "LocaleText",
    "ResourceSource",
]

LocaleKey: TypeAlias = str
"""Locale key of shape [lL]\\d{4,} (e.g., 'l0001', 'L1024')."""

LocaleText: TypeAlias = str
"""Display text a key resolves to (may be empty)."""

BufferId: TypeAlias = str
"""Host identifier of an open editor buffer (e.g., a document URI)."""

ResourceSource: TypeAlias = str
"""Raw text of one resource module."""
