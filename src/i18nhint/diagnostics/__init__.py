"""Diagnostic system for i18nhint.

Provides structured diagnostics with codes and hints, and the exception
hierarchy raised inside extraction strategies.

Python 3.13+. Zero external dependencies.
"""

from .codes import Diagnostic, DiagnosticCode
from .errors import (
    ExtractionError,
    HintError,
    LiteralSyntaxError,
    ResourceReadError,
    SandboxError,
    SandboxTimeoutError,
    SandboxUnavailableError,
)

__all__ = [
    "Diagnostic",
    "DiagnosticCode",
    "ExtractionError",
    "HintError",
    "LiteralSyntaxError",
    "ResourceReadError",
    "SandboxError",
    "SandboxTimeoutError",
    "SandboxUnavailableError",
]
