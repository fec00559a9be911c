"""Diagnostic codes and data structures.

Defines error codes and diagnostic messages reported by loading, extraction
and the diagnose operation.

Python 3.13+. Zero external dependencies.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Literal

__all__ = [
    "Diagnostic",
    "DiagnosticCode",
]


class DiagnosticCode(Enum):
    """Error codes with unique identifiers.

    Organized by category:
        1000-1999: Resource access (missing, unreadable, oversized files)
        2000-2999: Extraction (strategy failures, sandbox problems)
        3000-3999: Data state (defaults in use, nothing configured)
    """

    # Resource access (1000-1999)
    RESOURCE_NOT_FOUND = 1001
    RESOURCE_READ_FAILED = 1002
    RESOURCE_TOO_LARGE = 1003
    RESOURCE_DECODE_FAILED = 1004

    # Extraction (2000-2999)
    EXTRACTION_FAILED = 2001
    EXTRACTION_EMPTY = 2002
    LITERAL_SYNTAX = 2003
    SANDBOX_UNAVAILABLE = 2004
    SANDBOX_TIMEOUT = 2005
    SANDBOX_FAILED = 2006

    # Data state (3000-3999)
    USING_DEFAULT_DATA = 3001
    NO_DATA = 3002
    NO_CANDIDATES = 3003
    RESOURCE_LOADED = 3004


@dataclass(frozen=True, slots=True)
class Diagnostic:
    """Structured diagnostic message.

    Attributes:
        code: Unique diagnostic code
        message: Human-readable description
        path: Resource file the diagnostic refers to (if any)
        hint: Suggestion for fixing the problem
        severity: "error", "warning" or "info"
    """

    code: DiagnosticCode
    message: str
    path: str | None = None
    hint: str | None = None
    severity: Literal["error", "warning", "info"] = "error"

    def __str__(self) -> str:
        """Return human-readable description."""
        return self.message

    def format(self) -> str:
        """Format diagnostic in a compiler-like layout.

        Example output:
            warning[RESOURCE_NOT_FOUND]: Configured resource file not found
              --> /work/app/iframe/locale/zh.js
              = help: Set localePath to an existing file

        Returns:
            Multi-line formatted diagnostic
        """
        lines = [f"{self.severity}[{self.code.name}]: {self.message}"]
        if self.path is not None:
            lines.append(f"  --> {self.path}")
        if self.hint is not None:
            lines.append(f"  = help: {self.hint}")
        return "\n".join(lines)
