"""Host configuration for the hint service.

Provides a single frozen dataclass holding every user-facing setting, with
validation at construction time and a reader for editor settings objects
that use camelCase names.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

import dataclasses
import logging
from collections.abc import Mapping
from dataclasses import dataclass

from i18nhint.constants import (
    DEFAULT_ATTRIBUTE_PREFIXES,
    DEFAULT_BINDING_NAMES,
    DEFAULT_DEBOUNCE_DELAY,
    DEFAULT_KEY_PREFIXES,
    DEFAULT_LANGUAGE,
    DEFAULT_LOCALE_PATH,
    DEFAULT_NODE_EXECUTABLE,
    DEFAULT_SANDBOX_TIMEOUT,
    DEFAULT_TABLE_FIELD,
    MAX_BUFFER_SIZE,
    MAX_EDIT_CHANGES,
    MAX_OCCURRENCES,
)

__all__ = ["HintConfig"]

logger = logging.getLogger(__name__)

_TUPLE_FIELDS = ("key_prefixes", "attribute_prefixes", "binding_names")

# Editor setting name -> field name.
_SETTING_NAMES: dict[str, str] = {
    "enabled": "enabled",
    "localePath": "locale_path",
    "language": "language",
    "autoDetect": "auto_detect",
    "keyPrefixes": "key_prefixes",
    "attributePrefixes": "attribute_prefixes",
    "bindingNames": "binding_names",
    "tableField": "table_field",
    "debounceDelay": "debounce_delay",
    "maxBufferSize": "max_buffer_size",
    "maxOccurrences": "max_occurrences",
    "maxEditChanges": "max_edit_changes",
    "sandboxEnabled": "sandbox_enabled",
    "sandboxTimeout": "sandbox_timeout",
    "nodeExecutable": "node_executable",
    "fallbackToDefaults": "fallback_to_defaults",
}


@dataclass(frozen=True, slots=True)
class HintConfig:
    """Immutable configuration for HintService.

    All fields have defaults; ``HintConfig()`` matches the behavior of a
    fresh installation.

    Attributes:
        enabled: Show hints at all
        locale_path: Resource module path, absolute or relative to each
            workspace root
        language: Language whose resource modules are discovered
        auto_detect: Search workspace roots for resource modules
        key_prefixes: Accessor names of the key table in code
        attribute_prefixes: Markup attribute prefixes that may bind keys
        binding_names: Identifiers bound to the key table in resource modules
        table_field: Field of the nested key table in closure-built modules
        debounce_delay: Seconds of quiet before an edited buffer is scanned
        max_buffer_size: Buffers longer than this are not scanned
        max_occurrences: Occurrences reported per buffer at most
        max_edit_changes: Edits with this many changes or more are ignored
        sandbox_enabled: Evaluate computed modules in a JavaScript runtime
        sandbox_timeout: Seconds a sandboxed evaluation may run
        node_executable: JavaScript runtime command
        fallback_to_defaults: Use built-in data when no resource yields entries

    Example:
        >>> config = HintConfig.from_mapping({"localePath": "src/locale/zh.js"})
        >>> config.locale_path
        'src/locale/zh.js'
    """

    enabled: bool = True
    locale_path: str = DEFAULT_LOCALE_PATH
    language: str = DEFAULT_LANGUAGE
    auto_detect: bool = True
    key_prefixes: tuple[str, ...] = DEFAULT_KEY_PREFIXES
    attribute_prefixes: tuple[str, ...] = DEFAULT_ATTRIBUTE_PREFIXES
    binding_names: tuple[str, ...] = DEFAULT_BINDING_NAMES
    table_field: str = DEFAULT_TABLE_FIELD
    debounce_delay: float = DEFAULT_DEBOUNCE_DELAY
    max_buffer_size: int = MAX_BUFFER_SIZE
    max_occurrences: int = MAX_OCCURRENCES
    max_edit_changes: int = MAX_EDIT_CHANGES
    sandbox_enabled: bool = True
    sandbox_timeout: float = DEFAULT_SANDBOX_TIMEOUT
    node_executable: str = DEFAULT_NODE_EXECUTABLE
    fallback_to_defaults: bool = True

    def __post_init__(self) -> None:
        """Normalize sequences and validate values at construction time.

        Raises:
            TypeError: If a prefix or name list is a bare string
            ValueError: If a limit or delay is out of range, or an
                identifier setting is empty or malformed
        """
        for name in _TUPLE_FIELDS:
            value = getattr(self, name)
            if isinstance(value, str):
                msg = f"{name} must be a sequence of strings, not a string"
                raise TypeError(msg)
            object.__setattr__(self, name, tuple(str(item) for item in value))

        if not self.language.strip():
            msg = "language must not be empty"
            raise ValueError(msg)
        if not self.table_field.isidentifier():
            msg = f"table_field must be an identifier, got {self.table_field!r}"
            raise ValueError(msg)
        for binding in self.binding_names:
            if not binding.replace("$", "_").isidentifier():
                msg = f"binding name must be an identifier, got {binding!r}"
                raise ValueError(msg)
        if self.debounce_delay < 0:
            msg = "debounce_delay must be non-negative"
            raise ValueError(msg)
        if self.sandbox_timeout <= 0:
            msg = "sandbox_timeout must be positive"
            raise ValueError(msg)
        if self.max_buffer_size <= 0:
            msg = "max_buffer_size must be positive"
            raise ValueError(msg)
        if self.max_occurrences <= 0:
            msg = "max_occurrences must be positive"
            raise ValueError(msg)
        if self.max_edit_changes <= 0:
            msg = "max_edit_changes must be positive"
            raise ValueError(msg)

    @classmethod
    def from_mapping(cls, settings: Mapping[str, object]) -> HintConfig:
        """Build a configuration from editor settings.

        Accepts camelCase setting names (``localePath``) as well as field
        names (``locale_path``). Unknown names are ignored.

        Args:
            settings: Editor settings object

        Returns:
            Validated HintConfig
        """
        field_names = {field.name for field in dataclasses.fields(cls)}
        values: dict[str, object] = {}
        for name, value in settings.items():
            field_name = _SETTING_NAMES.get(name, name)
            if field_name not in field_names:
                logger.debug("Ignoring unknown setting %r", name)
                continue
            values[field_name] = value
        return cls(**values)  # type: ignore[arg-type]
