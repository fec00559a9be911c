"""i18nhint - inline display text for locale keys in source code.

Reads the key table out of JavaScript-like resource modules (``l0001`` ->
display text), finds key occurrences in open buffers, and hands them to the
host editor for inline display.

Public API:
    HintService - Host-facing service wiring discovery, loading and scanning
    HintConfig - Immutable host configuration
    LocaleMap - Immutable key -> text mapping
    ResourceCache - Merged, cached map built from resource modules
    ResourceExtractor / extract - Resource module extraction cascade
    KeyScanner / scan_line / scan_buffer - Key occurrence scanning
    AnnotationScheduler - Debounced scan scheduling

Exceptions:
    HintError - Base exception class
    ExtractionError - A strategy could not read its input

Submodules:
    i18nhint.extraction - Strategies, literal evaluation, sandbox
    i18nhint.localization - Data model, discovery, reading, caching
    i18nhint.scanning - Matching rules and scanner
    i18nhint.scheduling - Scheduler and timer factories
    i18nhint.diagnostics - Diagnostic codes and exception hierarchy
"""

# Essential Public API - Minimal exports for clean namespace
from .config import HintConfig
from .diagnostics import Diagnostic, DiagnosticCode, ExtractionError, HintError
from .enums import DataSource, LoadStatus, MatchRule, ResourceOrigin, StrategyName
from .extraction import ResourceExtractor, extract
from .localization import LocaleMap, LoadSummary, ResourceFile
from .localization.cache import ResourceCache
from .scanning import KeyOccurrence, KeyScanner, scan_buffer, scan_line
from .scheduling import AnnotationScheduler
from .service import DiagnosticReport, HintService, HintStatus

# Version information - Auto-populated from package metadata
# SINGLE SOURCE OF TRUTH: pyproject.toml [project] version
from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as _get_version

try:
    __version__ = _get_version("i18nhint")
except PackageNotFoundError:
    # Development mode: package not installed yet
    __version__ = "0.0.0+dev"

__all__ = [
    "AnnotationScheduler",
    "DataSource",
    "Diagnostic",
    "DiagnosticCode",
    "DiagnosticReport",
    "ExtractionError",
    "HintConfig",
    "HintError",
    "HintService",
    "HintStatus",
    "KeyOccurrence",
    "KeyScanner",
    "LoadStatus",
    "LoadSummary",
    "LocaleMap",
    "MatchRule",
    "ResourceCache",
    "ResourceExtractor",
    "ResourceFile",
    "ResourceOrigin",
    "StrategyName",
    "__version__",
    "extract",
    "scan_buffer",
    "scan_line",
]
