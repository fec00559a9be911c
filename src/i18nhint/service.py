"""Hint service: the host-facing entry point.

HintService wires discovery, the resource cache, the scanner and the
scheduler together and exposes the editor lifecycle as plain method calls:
activation, file-change notifications, edits, focus changes, enable/disable
and on-demand diagnostics.

The service owns no threads of its own; timers come from the configured
TimerFactory and resource loads run on the calling thread.

Python 3.13+.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path

from i18nhint.config import HintConfig
from i18nhint.diagnostics import Diagnostic, DiagnosticCode
from i18nhint.enums import DataSource
from i18nhint.extraction import ModuleSandbox, ResourceExtractor
from i18nhint.localization.cache import ResourceCache
from i18nhint.localization.discovery import PathResourceDiscovery, ResourceDiscovery
from i18nhint.localization.loading import LoadSummary, ResourceFile, ResourceReader
from i18nhint.localization.locale_map import LocaleMap
from i18nhint.localization.types import BufferId
from i18nhint.scanning import KeyOccurrence, KeyScanner
from i18nhint.scheduling import (
    AnnotationScheduler,
    BufferSource,
    PresentationSink,
    TimerFactory,
    threading_timer,
)

__all__ = ["DiagnosticReport", "HintService", "HintStatus"]

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class HintStatus:
    """Snapshot of the service state for status displays.

    Attributes:
        enabled: Whether hints are shown
        data_source: Where the current entries came from
        entry_count: Entries in the current map
        resource_paths: Resource files behind the current map, merge order
    """

    enabled: bool
    data_source: DataSource
    entry_count: int
    resource_paths: tuple[Path, ...]

    @property
    def using_defaults(self) -> bool:
        """True if the built-in default data is in use."""
        return self.data_source == DataSource.DEFAULT


@dataclass(frozen=True, slots=True)
class DiagnosticReport:
    """Result of HintService.diagnose().

    Attributes:
        configured_path: locale_path as configured
        checked_paths: Absolute paths the configured path was resolved to
        candidates: Resource modules discovery currently finds
        summary: Load summary behind the current map
        data_source: Where the current entries came from
        diagnostics: Findings, most severe first
    """

    configured_path: str
    checked_paths: tuple[Path, ...]
    candidates: tuple[ResourceFile, ...]
    summary: LoadSummary
    data_source: DataSource
    diagnostics: tuple[Diagnostic, ...]

    @property
    def has_problems(self) -> bool:
        """True if any diagnostic is an error or warning."""
        return any(d.severity != "info" for d in self.diagnostics)

    def format(self) -> str:
        """Format all diagnostics, one block each."""
        return "\n".join(d.format() for d in self.diagnostics)


_SEVERITY_ORDER = {"error": 0, "warning": 1, "info": 2}


class HintService:
    """Resolves locale keys in open buffers and publishes inline hints.

    Example:
        >>> service = HintService(HintConfig(), ["/work"], buffers=editor, presenter=editor)
        >>> service.activate().entry_count
        1024
        >>> service.on_focus("file:///work/app/main.js")
    """

    __slots__ = (
        "_cache",
        "_candidates",
        "_config",
        "_discovery",
        "_enabled",
        "_presenter",
        "_roots",
        "_scanner",
        "_scheduler",
    )

    def __init__(
        self,
        config: HintConfig | None = None,
        roots: Iterable[str | os.PathLike[str]] = (),
        *,
        buffers: BufferSource,
        presenter: PresentationSink,
        discovery: ResourceDiscovery | None = None,
        reader: ResourceReader | None = None,
        timer_factory: TimerFactory = threading_timer,
    ) -> None:
        """Initialize HintService.

        Args:
            config: Host configuration (default: HintConfig())
            roots: Workspace root directories
            buffers: Access to open buffers
            presenter: Receives scan results
            discovery: Resource discovery (default: PathResourceDiscovery)
            reader: Resource reader (default: FileResourceReader)
            timer_factory: Timers for debouncing (default: daemon threads)
        """
        self._config = config if config is not None else HintConfig()
        self._roots = tuple(Path(root) for root in roots)
        self._discovery: ResourceDiscovery = (
            discovery
            if discovery is not None
            else PathResourceDiscovery(
                language=self._config.language, auto_detect=self._config.auto_detect
            )
        )
        sandbox = (
            ModuleSandbox(self._config.node_executable, self._config.sandbox_timeout)
            if self._config.sandbox_enabled
            else None
        )
        extractor = ResourceExtractor(
            binding_names=self._config.binding_names,
            table_field=self._config.table_field,
            sandbox=sandbox,
        )
        self._cache = ResourceCache(
            extractor, reader, fallback_to_defaults=self._config.fallback_to_defaults
        )
        self._scanner = KeyScanner.from_config(self._config)
        self._presenter = presenter
        self._enabled = self._config.enabled
        self._scheduler = AnnotationScheduler(
            self._scanner,
            buffers,
            presenter,
            lambda: self._cache.current,
            delay=self._config.debounce_delay,
            max_buffer_size=self._config.max_buffer_size,
            max_edit_changes=self._config.max_edit_changes,
            timer_factory=timer_factory,
            enabled=self._enabled,
        )
        self._candidates: tuple[ResourceFile, ...] = ()

    @property
    def config(self) -> HintConfig:
        """Configuration the service was built with."""
        return self._config

    @property
    def locale_map(self) -> LocaleMap:
        """Current merged map."""
        return self._cache.current

    @property
    def enabled(self) -> bool:
        """Whether hints are shown."""
        return self._enabled

    @property
    def scheduler(self) -> AnnotationScheduler:
        """Scheduler driving buffer scans."""
        return self._scheduler

    @property
    def watched_paths(self) -> tuple[Path, ...]:
        """Resource files a file watcher should report changes for."""
        return tuple(candidate.path for candidate in self._candidates)

    @property
    def status(self) -> HintStatus:
        """Current service state."""
        locale_map = self._cache.current
        return HintStatus(
            enabled=self._enabled,
            data_source=locale_map.source,
            entry_count=len(locale_map),
            resource_paths=tuple(r.path for r in self._cache.get_load_summary().get_successful()),
        )

    def activate(self) -> HintStatus:
        """Discover and load resources, then scan the active buffer."""
        self._load(force_reload=False)
        logger.info(
            "i18nhint active: %d entries from %d resources",
            len(self._cache.current),
            len(self._candidates),
        )
        return self.status

    def reload(self) -> HintStatus:
        """Rediscover resources and re-read every one of them."""
        self._load(force_reload=True)
        return self.status

    def on_file_changed(self, path: str | os.PathLike[str]) -> bool:
        """Handle a created, changed or deleted resource file.

        Args:
            path: File reported by the watcher

        Returns:
            True if the path was a watched resource and data was reloaded
        """
        changed = Path(path).expanduser().absolute()
        if changed not in self.watched_paths:
            logger.debug("Ignoring change to unwatched file %s", changed)
            return False
        self._cache.invalidate(changed)
        self._cache.load(self._candidates)
        self._scanner.update_resource_paths(self._cache.loaded_paths)
        logger.info("Reloaded locale data after change to %s", changed)
        self._scheduler.on_resource_reload()
        return True

    def on_edit(self, buffer_id: BufferId, change_count: int = 1) -> bool:
        """Forward an edit event; returns True if a scan was scheduled."""
        return self._scheduler.on_edit(buffer_id, change_count)

    def on_focus(self, buffer_id: BufferId) -> bool:
        """Forward a focus change; returns True if a scan was scheduled."""
        return self._scheduler.on_focus(buffer_id)

    def refresh(self, buffer_id: BufferId) -> list[KeyOccurrence] | None:
        """Scan a buffer right away and publish the result."""
        if not self._enabled:
            return None
        return self._scheduler.scan_now(buffer_id)

    def set_enabled(self, enabled: bool) -> None:
        """Enable or disable hints.

        Disabling cancels pending scans and clears the active buffer's hints;
        enabling schedules a scan of it.
        """
        if enabled == self._enabled:
            return
        self._enabled = enabled
        self._scheduler.enabled = enabled
        active = self._scheduler.active_buffer
        if enabled:
            self._scheduler.on_resource_reload()
        elif active is not None:
            try:
                self._presenter.publish(active, [], self._cache.current)
            except Exception as exc:  # pylint: disable=broad-exception-caught
                logger.warning("Clearing hints for %s failed: %s", active, exc)
        logger.info("i18nhint %s", "enabled" if enabled else "disabled")

    def toggle(self) -> bool:
        """Flip the enabled state; returns the new state."""
        self.set_enabled(not self._enabled)
        return self._enabled

    def diagnose(self) -> DiagnosticReport:
        """Explain where locale data comes from and what went wrong.

        Checks the configured path against every root, lists the modules
        discovery currently finds, and reports the last load.
        """
        configured = self._config.locale_path
        preferred = Path(configured).expanduser()
        checked = (
            (preferred,) if preferred.is_absolute() else tuple(root / preferred for root in self._roots)
        )
        diagnostics: list[Diagnostic] = []

        if not checked:
            diagnostics.append(
                Diagnostic(
                    code=DiagnosticCode.NO_CANDIDATES,
                    message="No workspace roots to resolve localePath against",
                    hint="Open a folder or set an absolute localePath",
                    severity="warning",
                )
            )
        for path in checked:
            if path.is_file():
                diagnostics.append(
                    Diagnostic(
                        code=DiagnosticCode.RESOURCE_LOADED,
                        message=f"Configured resource found ({path.stat().st_size} bytes)",
                        path=str(path),
                        severity="info",
                    )
                )
            else:
                diagnostics.append(
                    Diagnostic(
                        code=DiagnosticCode.RESOURCE_NOT_FOUND,
                        message="Configured resource file not found",
                        path=str(path),
                        hint="Set localePath to an existing file or enable autoDetect",
                        severity="warning",
                    )
                )

        candidates = tuple(self._discovery.discover(self._roots, configured))
        summary = self._cache.get_load_summary()
        diagnostics.extend(result.to_diagnostic() for result in summary.results)

        locale_map = self._cache.current
        if locale_map.is_default:
            diagnostics.append(
                Diagnostic(
                    code=DiagnosticCode.USING_DEFAULT_DATA,
                    message=f"No resource yielded entries; using {len(locale_map)} built-in entries",
                    severity="warning",
                )
            )
        elif not locale_map:
            diagnostics.append(
                Diagnostic(
                    code=DiagnosticCode.NO_DATA,
                    message="No locale data available",
                    hint="Check localePath and the resource module format",
                    severity="warning",
                )
            )

        diagnostics.sort(key=lambda d: _SEVERITY_ORDER[d.severity])
        return DiagnosticReport(
            configured_path=configured,
            checked_paths=tuple(path.absolute() for path in checked),
            candidates=candidates,
            summary=summary,
            data_source=locale_map.source,
            diagnostics=tuple(diagnostics),
        )

    def close(self) -> None:
        """Cancel pending scans and stop reacting to events."""
        self._scheduler.close()
        logger.debug("i18nhint closed")

    def _load(self, *, force_reload: bool) -> None:
        self._candidates = tuple(self._discovery.discover(self._roots, self._config.locale_path))
        if not self._candidates:
            logger.warning("No resource modules found in %d workspace roots", len(self._roots))
        self._cache.load(self._candidates, force_reload=force_reload)
        self._scanner.update_resource_paths(self._cache.loaded_paths)
        self._scheduler.on_resource_reload()
