"""Enumerations for i18nhint type-safe constants.

Uses StrEnum (Python 3.11+) for automatic string conversion.
StrEnum members are strings themselves, so they log and serialize as plain text.

Python 3.13+.
"""

from enum import StrEnum


class ResourceOrigin(StrEnum):
    """How a resource file became a load candidate."""

    CONFIGURED = "configured"
    """Named by the configured locale path (merge-authoritative)."""

    DISCOVERED = "discovered"
    """Found by workspace auto-discovery."""

    BUILTIN = "builtin"
    """The built-in default data, not a file on disk."""


class LoadStatus(StrEnum):
    """Outcome of loading one resource file.

    StrEnum provides automatic string conversion: str(LoadStatus.SUCCESS) == "success"
    """

    SUCCESS = "success"
    """Read and extracted at least one entry."""

    EMPTY = "empty"
    """Read and structurally parsed, but no conforming entries."""

    READ_ERROR = "read_error"
    """File missing, unreadable, undecodable or too large."""

    PARSE_ERROR = "parse_error"
    """Read, but no extraction strategy could make sense of it."""


class ExtractionStatus(StrEnum):
    """Outcome of one extraction strategy attempt."""

    SUCCESS = "success"
    EMPTY = "empty"
    FAILED = "failed"
    NOT_APPLICABLE = "not_applicable"


class StrategyName(StrEnum):
    """Extraction strategies in cascade priority order."""

    NAMED_BINDING = "named_binding"
    """const R = {...}"""

    DEFAULT_EXPORT = "default_export"
    """export default {...}"""

    MODULE_EXPORTS = "module_exports"
    """module.exports = {...}"""

    SANDBOX = "sandbox"
    """Whole module evaluated in an isolated JavaScript runtime."""

    FLAT_SCAN = "flat_scan"
    """'l0001': 'text' pairs anywhere in the text."""

    NESTED_TABLE = "nested_table"
    """var zhCn = {name: 'zhCn', R: {...}} inside a closure."""


class MatchRule(StrEnum):
    """Scanner rule that produced a key occurrence."""

    KEY_VALUE = "key_value"
    """Precise rule: 'l0001': 'text' declaration."""

    PROPERTY_ACCESS = "property_access"
    """R.l0001 or R['l0001']"""

    CALL_LOOKUP = "call_lookup"
    """$t('l0001')"""

    INTERPOLATION = "interpolation"
    """{{ l0001 }} or {l0001}"""

    ATTRIBUTE_BINDING = "attribute_binding"
    """:title="R.l0001" or data-i18n='l0001'"""

    QUOTED_STRING = "quoted_string"
    """'l0001'"""

    BARE_IDENTIFIER = "bare_identifier"
    """l0001"""


class DataSource(StrEnum):
    """Where the entries of a LocaleMap came from."""

    RESOURCE = "resource"
    """Extracted from at least one resource file."""

    DEFAULT = "default"
    """Built-in default data (no resource yielded entries)."""

    EMPTY = "empty"
    """No data at all."""


__all__ = [
    "DataSource",
    "ExtractionStatus",
    "LoadStatus",
    "MatchRule",
    "ResourceOrigin",
    "StrategyName",
]
