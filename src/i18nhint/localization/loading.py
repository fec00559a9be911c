"""Resource file reading and load bookkeeping.

Provides the protocol for resource readers, a filesystem implementation with
a size ceiling, and result/summary data structures for tracking load attempts.

Components:
    ResourceFile - A candidate resource module and how it was found
    ResourceReader - Protocol for turning a resource path into text
    FileResourceReader - Disk-based reader (UTF-8 with BOM handling)
    ResourceLoadResult - Immutable result of a single resource load attempt
    LoadSummary - Immutable aggregate of the load results of one merge

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol

from i18nhint.constants import MAX_RESOURCE_SIZE
from i18nhint.diagnostics import Diagnostic, DiagnosticCode, HintError, ResourceReadError
from i18nhint.enums import LoadStatus, ResourceOrigin, StrategyName
from i18nhint.localization.types import ResourceSource

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # Candidate
    "ResourceFile",
    # Protocol
    "ResourceReader",
    # Concrete reader
    "FileResourceReader",
    # Load result types
    "ResourceLoadResult",
    "LoadSummary",
]


@dataclass(frozen=True, slots=True)
class ResourceFile:
    """A resource module that is a load candidate.

    Attributes:
        path: Absolute path of the module
        origin: How the file became a candidate
    """

    path: Path
    origin: ResourceOrigin = ResourceOrigin.DISCOVERED

    def __post_init__(self) -> None:
        """Normalize path to an absolute Path."""
        object.__setattr__(self, "path", Path(self.path).expanduser().absolute())

    @classmethod
    def coerce(cls, candidate: ResourceFile | str | os.PathLike[str]) -> ResourceFile:
        """Accept a ResourceFile or a bare path (treated as DISCOVERED)."""
        if isinstance(candidate, ResourceFile):
            return candidate
        return cls(Path(candidate))


class ResourceReader(Protocol):
    """Protocol for reading resource modules.

    This is a Protocol (structural typing) rather than ABC so hosts can read
    from unsaved editor buffers or virtual filesystems.

    Example:
        >>> class MemoryReader:
        ...     def __init__(self, files: dict[Path, str]) -> None:
        ...         self.files = files
        ...     def read(self, path: Path) -> str:
        ...         return self.files[path]
    """

    def read(self, path: Path) -> ResourceSource:
        """Return the text of the resource at path.

        Raises:
            OSError: If the file cannot be read
            ResourceReadError: If the file is readable but unusable
        """


@dataclass(frozen=True, slots=True)
class FileResourceReader:
    """Reads resource modules from disk.

    Files are decoded as UTF-8; a leading byte-order mark is dropped.

    Attributes:
        max_size: Largest file size accepted, in bytes
    """

    max_size: int = MAX_RESOURCE_SIZE

    def __post_init__(self) -> None:
        """Validate configuration."""
        if self.max_size <= 0:
            msg = f"max_size must be positive, got {self.max_size}"
            raise ValueError(msg)

    def read(self, path: Path) -> ResourceSource:
        """Read and decode one resource module.

        Raises:
            OSError: If the file is missing or unreadable
            ResourceReadError: If the file is too large or not valid UTF-8
        """
        size = path.stat().st_size
        if size > self.max_size:
            raise ResourceReadError(
                Diagnostic(
                    code=DiagnosticCode.RESOURCE_TOO_LARGE,
                    message=f"Resource is {size} bytes, limit is {self.max_size}",
                    path=str(path),
                )
            )
        try:
            return path.read_bytes().decode("utf-8-sig")
        except UnicodeDecodeError as exc:
            raise ResourceReadError(
                Diagnostic(
                    code=DiagnosticCode.RESOURCE_DECODE_FAILED,
                    message=f"Resource is not valid UTF-8 (byte {exc.start})",
                    path=str(path),
                    hint="Save the file as UTF-8",
                )
            ) from exc


@dataclass(frozen=True, slots=True)
class ResourceLoadResult:
    """Result of loading a single resource module.

    Attributes:
        path: Path of the resource
        origin: How the resource became a candidate
        status: Load status (success, empty, read_error, parse_error)
        entry_count: Conforming entries extracted (SUCCESS only)
        strategy: Extraction strategy that produced the entries
        error: Exception behind a READ_ERROR or PARSE_ERROR, if any
    """

    path: Path
    origin: ResourceOrigin
    status: LoadStatus
    entry_count: int = 0
    strategy: StrategyName | None = None
    error: Exception | None = None

    @property
    def is_success(self) -> bool:
        """Check if the resource yielded entries."""
        return self.status == LoadStatus.SUCCESS

    @property
    def is_empty(self) -> bool:
        """Check if the resource parsed but held no conforming entries."""
        return self.status == LoadStatus.EMPTY

    @property
    def is_read_error(self) -> bool:
        """Check if the resource could not be read."""
        return self.status == LoadStatus.READ_ERROR

    @property
    def is_parse_error(self) -> bool:
        """Check if no extraction strategy could read the resource."""
        return self.status == LoadStatus.PARSE_ERROR

    def to_diagnostic(self) -> Diagnostic:
        """Describe this result as a Diagnostic."""
        path = str(self.path)
        if isinstance(self.error, HintError) and self.error.diagnostic is not None:
            return self.error.diagnostic
        match self.status:
            case LoadStatus.SUCCESS:
                return Diagnostic(
                    code=DiagnosticCode.RESOURCE_LOADED,
                    message=f"Loaded {self.entry_count} entries via {self.strategy}",
                    path=path,
                    severity="info",
                )
            case LoadStatus.EMPTY:
                return Diagnostic(
                    code=DiagnosticCode.EXTRACTION_EMPTY,
                    message="Resource parsed but contains no locale keys",
                    path=path,
                    severity="warning",
                )
            case LoadStatus.READ_ERROR if isinstance(self.error, FileNotFoundError):
                return Diagnostic(
                    code=DiagnosticCode.RESOURCE_NOT_FOUND,
                    message="Resource file not found",
                    path=path,
                    hint="Check localePath or enable autoDetect",
                )
            case LoadStatus.READ_ERROR:
                return Diagnostic(
                    code=DiagnosticCode.RESOURCE_READ_FAILED,
                    message=f"Resource could not be read: {self.error}",
                    path=path,
                )
        return Diagnostic(
            code=DiagnosticCode.EXTRACTION_FAILED,
            message="No extraction strategy could read the resource",
            path=path,
            hint="Declare the key table as an object literal (const R = {...})",
        )


@dataclass(frozen=True, slots=True)
class LoadSummary:
    """Immutable aggregate of the load results behind one merged map.

    All statistics are computed properties derived from the ``results`` tuple.

    Attributes:
        results: All individual load results, in merge order

    Example:
        >>> summary = cache.get_load_summary()
        >>> for result in summary.get_errors():
        ...     print(f"Failed: {result.path}: {result.error}")
    """

    results: tuple[ResourceLoadResult, ...] = ()

    def __repr__(self) -> str:
        """Return string representation for debugging."""
        return (
            f"LoadSummary(total={self.total_attempted}, "
            f"ok={self.successful}, "
            f"empty={self.empty}, "
            f"read_errors={self.read_errors}, "
            f"parse_errors={self.parse_errors})"
        )

    @property
    def total_attempted(self) -> int:
        """Total number of load attempts."""
        return len(self.results)

    @property
    def successful(self) -> int:
        """Number of resources that yielded entries."""
        return sum(1 for r in self.results if r.is_success)

    @property
    def empty(self) -> int:
        """Number of resources without conforming entries."""
        return sum(1 for r in self.results if r.is_empty)

    @property
    def read_errors(self) -> int:
        """Number of resources that could not be read."""
        return sum(1 for r in self.results if r.is_read_error)

    @property
    def parse_errors(self) -> int:
        """Number of resources no strategy could read."""
        return sum(1 for r in self.results if r.is_parse_error)

    @property
    def total_entries(self) -> int:
        """Entries extracted across all resources (before merging)."""
        return sum(r.entry_count for r in self.results)

    @property
    def has_errors(self) -> bool:
        """Check if any resource failed to read or parse."""
        return self.read_errors > 0 or self.parse_errors > 0

    @property
    def all_successful(self) -> bool:
        """Check if every resource yielded entries."""
        return all(r.is_success for r in self.results)

    def get_errors(self) -> tuple[ResourceLoadResult, ...]:
        """Get all results with read or parse errors."""
        return tuple(r for r in self.results if r.is_read_error or r.is_parse_error)

    def get_successful(self) -> tuple[ResourceLoadResult, ...]:
        """Get all results that yielded entries."""
        return tuple(r for r in self.results if r.is_success)

    def get_by_origin(self, origin: ResourceOrigin) -> tuple[ResourceLoadResult, ...]:
        """Get all results for candidates of one origin."""
        return tuple(r for r in self.results if r.origin == origin)
