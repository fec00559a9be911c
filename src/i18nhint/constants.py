"""Shared constants for i18nhint.

Centralizes the key grammar, default configuration values and resource limits
used across the extraction, scanning and scheduling packages. Placing them
here avoids circular imports between those packages.

Constants are grouped by domain:
- Key grammar: what a locale key looks like
- Defaults: configuration values mirrored by HintConfig
- Limits: bounds on input size and scheduling work
- Built-in data: the minimal locale map used when no resource can be read

Python 3.13+.
"""

import re
from types import MappingProxyType

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # Key grammar
    "KEY_PATTERN",
    "KEY_RE",
    # Defaults
    "DEFAULT_LOCALE_PATH",
    "DEFAULT_LANGUAGE",
    "DEFAULT_KEY_PREFIXES",
    "DEFAULT_ATTRIBUTE_PREFIXES",
    "DEFAULT_BINDING_NAMES",
    "DEFAULT_TABLE_FIELD",
    "DEFAULT_DEBOUNCE_DELAY",
    "DEFAULT_SANDBOX_TIMEOUT",
    "DEFAULT_NODE_EXECUTABLE",
    # Limits
    "MAX_BUFFER_SIZE",
    "MAX_OCCURRENCES",
    "MAX_EDIT_CHANGES",
    "MAX_RESOURCE_SIZE",
    "MAX_DISCOVERED_FILES",
    "MAX_LITERAL_DEPTH",
    # Resource module conventions
    "RESOURCE_SUFFIXES",
    "RESOURCE_GENERIC_STEMS",
    "DISCOVERY_EXCLUDED_DIRS",
    # Built-in data
    "DEFAULT_LOCALE_DATA",
]

# ============================================================================
# KEY GRAMMAR
# ============================================================================

# A locale key is a lower- or upper-case "l" followed by at least four digits.
KEY_PATTERN: str = r"[lL]\d{4,}"
KEY_RE: re.Pattern[str] = re.compile(KEY_PATTERN)

# ============================================================================
# DEFAULTS
# ============================================================================

DEFAULT_LOCALE_PATH: str = "app/iframe/locale/zh.js"
DEFAULT_LANGUAGE: str = "zh"

# Accessor names through which code reaches the key table (R.l0001, _t.R['l0001']).
DEFAULT_KEY_PREFIXES: tuple[str, ...] = ("_t.R", "R", "LanData.R")

# Attribute name prefixes whose value may hold a key (Vue, Angular, data attributes).
DEFAULT_ATTRIBUTE_PREFIXES: tuple[str, ...] = ("v-bind:", ":", "data-i18n", "i18n", "v-t")

# Identifiers bound to the key table at the top level of a resource module.
DEFAULT_BINDING_NAMES: tuple[str, ...] = ("R",)

# Field holding the nested key table inside a closure-built locale object.
DEFAULT_TABLE_FIELD: str = "R"

# Seconds of quiet before a burst of edits is scanned.
DEFAULT_DEBOUNCE_DELAY: float = 0.3

# Seconds a sandboxed module evaluation may run.
DEFAULT_SANDBOX_TIMEOUT: float = 2.0

DEFAULT_NODE_EXECUTABLE: str = "node"

# ============================================================================
# LIMITS
# ============================================================================

# Buffers longer than this (in characters) are never scanned.
MAX_BUFFER_SIZE: int = 100_000

# Occurrences reported per buffer before the scan stops.
MAX_OCCURRENCES: int = 500

# Edits touching this many ranges at once (bulk replace, format) are ignored.
MAX_EDIT_CHANGES: int = 10

# Resource files larger than this (in bytes) are not read (10 MB).
MAX_RESOURCE_SIZE: int = 10 * 1024 * 1024

# Upper bound on auto-discovered candidates per activation.
MAX_DISCOVERED_FILES: int = 50

# Nesting depth at which literal evaluation gives up.
MAX_LITERAL_DEPTH: int = 100

# ============================================================================
# RESOURCE MODULE CONVENTIONS
# ============================================================================

RESOURCE_SUFFIXES: tuple[str, ...] = (".js", ".mjs", ".cjs", ".ts")

# File stems that mark a resource module regardless of the configured language.
RESOURCE_GENERIC_STEMS: frozenset[str] = frozenset({"locale"})

DISCOVERY_EXCLUDED_DIRS: frozenset[str] = frozenset(
    {".git", ".hg", ".svn", "node_modules", "__pycache__", ".venv"}
)

# ============================================================================
# BUILT-IN DATA
# ============================================================================

# Minimal map used when no resource file yields data.
DEFAULT_LOCALE_DATA: MappingProxyType[str, str] = MappingProxyType(
    {
        "l0359": "检验检查",
        "l0360": "化验单",
        "l1001": "患者信息",
        "l1002": "诊断报告",
        "l1003": "医嘱",
        "l1004": "处方",
        "l1005": "手术记录",
        "l1006": "随访计划",
    }
)
