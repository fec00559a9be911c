"""Hypothesis strategies for i18nhint property-based testing.

Strategies are organized by domain:

- resources: locale keys, texts, entry tables and rendered resource modules
- source: source lines built from key-usage fragments

Usage:
    from tests.strategies import locale_entries, literal_resource_modules
    from tests.strategies.source import source_lines

Event-Emitting Strategies (HypoFuzz-Optimized):
    These strategies emit hypothesis.event() calls for coverage-guided fuzzing:
    - locale_keys, literal_resource_modules, flat_resource_texts, source_lines
"""

from .resources import (
    flat_resource_texts,
    literal_resource_modules,
    locale_entries,
    locale_keys,
    locale_texts,
)
from .source import source_lines

__all__ = [
    "flat_resource_texts",
    "literal_resource_modules",
    "locale_entries",
    "locale_keys",
    "locale_texts",
    "source_lines",
]
