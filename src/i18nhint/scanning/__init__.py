"""Key occurrence scanning.

Python 3.13+. Zero external dependencies.
"""

from .rules import DEFAULT_CALL_NAMES, MatcherRule, build_general_rules, build_precise_rule
from .scanner import KeyOccurrence, KeyScanner, scan_buffer, scan_line

__all__ = [
    "DEFAULT_CALL_NAMES",
    "KeyOccurrence",
    "KeyScanner",
    "MatcherRule",
    "build_general_rules",
    "build_precise_rule",
    "scan_buffer",
    "scan_line",
]
