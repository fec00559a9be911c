"""Resource module discovery in workspace roots.

Components:
    ResourceDiscovery - Protocol for producing the ordered candidate list
    PathResourceDiscovery - Walks workspace roots for language-named modules

Candidates are returned in merge order: later entries take precedence. The
configured path always comes last.

Python 3.13+. Depends on: babel (resource stems).
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol

from i18nhint.constants import (
    DEFAULT_LANGUAGE,
    DISCOVERY_EXCLUDED_DIRS,
    MAX_DISCOVERED_FILES,
    RESOURCE_SUFFIXES,
)
from i18nhint.enums import ResourceOrigin
from i18nhint.locale_utils import resource_stems
from i18nhint.localization.loading import ResourceFile

__all__ = ["PathResourceDiscovery", "ResourceDiscovery"]

logger = logging.getLogger(__name__)


class ResourceDiscovery(Protocol):
    """Protocol for finding resource modules.

    Example:
        >>> class FixedDiscovery:
        ...     def discover(self, roots, preferred_path):
        ...         return [ResourceFile(Path("/work/locale/zh.js"))]
    """

    def discover(
        self,
        roots: Sequence[str | Path],
        preferred_path: str | None,
    ) -> list[ResourceFile]:
        """Return candidate resource modules in merge order.

        Args:
            roots: Workspace root directories
            preferred_path: Configured resource path, absolute or relative to
                each root (None if unset)

        Returns:
            Candidates, least authoritative first
        """


@dataclass(frozen=True, slots=True)
class PathResourceDiscovery:
    """Finds resource modules named after the configured language.

    A file is a candidate when its suffix is a script suffix and its stem,
    compared case-insensitively, is one of the language's resource stems
    (``zh``, ``zh_cn``, ``zh-cn`` for ``zh``). VCS and vendor directories are
    skipped.

    Attributes:
        language: Language whose resource modules are wanted
        auto_detect: Walk the roots (False: configured path only)
        suffixes: Accepted file suffixes
        max_results: Cap on auto-discovered candidates
    """

    language: str = DEFAULT_LANGUAGE
    auto_detect: bool = True
    suffixes: tuple[str, ...] = RESOURCE_SUFFIXES
    max_results: int = MAX_DISCOVERED_FILES

    def discover(
        self,
        roots: Sequence[str | Path],
        preferred_path: str | None,
    ) -> list[ResourceFile]:
        """Return discovered modules followed by the configured one."""
        configured = self._resolve_preferred(roots, preferred_path)
        configured_paths = {candidate.path for candidate in configured}
        discovered = [
            candidate
            for candidate in (self._walk(roots) if self.auto_detect else [])
            if candidate.path not in configured_paths
        ]
        logger.debug(
            "Discovered %d resource candidates (%d configured)",
            len(discovered) + len(configured),
            len(configured),
        )
        return discovered + configured

    def _walk(self, roots: Sequence[str | Path]) -> list[ResourceFile]:
        stems = resource_stems(self.language)
        suffixes = {suffix.lower() for suffix in self.suffixes}
        found: list[Path] = []
        for root in roots:
            root_path = Path(root)
            if not root_path.is_dir():
                logger.debug("Skipping missing workspace root %s", root_path)
                continue
            matches: list[Path] = []
            for directory, dirnames, filenames in root_path.walk():
                dirnames[:] = sorted(d for d in dirnames if d not in DISCOVERY_EXCLUDED_DIRS)
                for filename in filenames:
                    candidate = Path(filename)
                    if candidate.suffix.lower() in suffixes and candidate.stem.lower() in stems:
                        matches.append(directory / filename)
            found.extend(sorted(matches))

        unique = list(dict.fromkeys(found))
        if len(unique) > self.max_results:
            logger.debug(
                "Discovery found %d candidates, keeping the first %d",
                len(unique),
                self.max_results,
            )
            unique = unique[: self.max_results]
        return [ResourceFile(path, ResourceOrigin.DISCOVERED) for path in unique]

    @staticmethod
    def _resolve_preferred(
        roots: Sequence[str | Path],
        preferred_path: str | None,
    ) -> list[ResourceFile]:
        if not preferred_path:
            return []
        preferred = Path(preferred_path).expanduser()
        if preferred.is_absolute():
            paths = [preferred]
        else:
            paths = [Path(root) / preferred for root in roots]
        resolved = [path for path in paths if path.is_file()]
        if not resolved:
            logger.debug("Configured resource %s not found in %d roots", preferred, len(roots))
        return [ResourceFile(path, ResourceOrigin.CONFIGURED) for path in dict.fromkeys(resolved)]
