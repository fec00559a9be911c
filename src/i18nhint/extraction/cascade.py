"""Ordered extraction cascade.

ResourceExtractor runs the strategies in priority order and stops at the
first one that yields at least one conforming entry. A strategy that raises
is recorded as FAILED and the cascade moves on; no input makes extraction
raise. Exhausting every strategy gives an empty LocaleMap, meaning "no data
in this file".

Python 3.13+.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from types import MappingProxyType

from i18nhint.constants import DEFAULT_BINDING_NAMES, DEFAULT_TABLE_FIELD
from i18nhint.enums import ExtractionStatus, LoadStatus, StrategyName
from i18nhint.localization.locale_map import LocaleMap, conforming_entries
from i18nhint.localization.types import LocaleKey, LocaleText, ResourceSource

from .sandbox import ModuleSandbox
from .strategies import DEFAULT_STRATEGIES, ExtractionOptions, Strategy

__all__ = [
    "ExtractionOutcome",
    "ExtractionResult",
    "ResourceExtractor",
    "extract",
]

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class ExtractionResult:
    """Outcome of one strategy attempt.

    Attributes:
        strategy: Strategy that ran
        status: SUCCESS, EMPTY, FAILED or NOT_APPLICABLE
        entries: Conforming entries recovered (empty unless SUCCESS)
        error: Exception raised by the strategy (FAILED only)
    """

    strategy: StrategyName
    status: ExtractionStatus
    entries: Mapping[LocaleKey, LocaleText] = field(default_factory=lambda: MappingProxyType({}))
    error: Exception | None = None

    @property
    def is_success(self) -> bool:
        """Check if the strategy produced entries."""
        return self.status == ExtractionStatus.SUCCESS


@dataclass(frozen=True, slots=True)
class ExtractionOutcome:
    """Final map of one extraction plus the attempt log."""

    locale_map: LocaleMap
    attempts: tuple[ExtractionResult, ...]

    @property
    def strategy(self) -> StrategyName | None:
        """Strategy that produced the map, or None if none did."""
        for attempt in self.attempts:
            if attempt.is_success:
                return attempt.strategy
        return None

    @property
    def load_status(self) -> LoadStatus:
        """Classify the outcome for a resource load result.

        SUCCESS when some strategy produced entries, EMPTY when at least one
        parsed structure but found nothing conforming, PARSE_ERROR otherwise.
        """
        statuses = {attempt.status for attempt in self.attempts}
        if ExtractionStatus.SUCCESS in statuses:
            return LoadStatus.SUCCESS
        if ExtractionStatus.EMPTY in statuses:
            return LoadStatus.EMPTY
        return LoadStatus.PARSE_ERROR

    @property
    def errors(self) -> tuple[Exception, ...]:
        """Exceptions raised by failed strategies, in cascade order."""
        return tuple(attempt.error for attempt in self.attempts if attempt.error is not None)


class ResourceExtractor:
    """Runs extraction strategies in priority order.

    Example:
        >>> extractor = ResourceExtractor(sandbox=None)
        >>> extractor.extract("const R = {l0001: 'Search', l0002: 'Cancel'}")["l0002"]
        'Cancel'
    """

    __slots__ = ("_options", "_strategies")

    def __init__(
        self,
        *,
        binding_names: Sequence[str] = DEFAULT_BINDING_NAMES,
        table_field: str = DEFAULT_TABLE_FIELD,
        sandbox: ModuleSandbox | None = ModuleSandbox(),  # noqa: B008 - immutable
        strategies: Sequence[tuple[StrategyName, Strategy]] = DEFAULT_STRATEGIES,
    ) -> None:
        """Initialize ResourceExtractor.

        Args:
            binding_names: Identifiers recognized by the named-binding strategy
            table_field: Field name of the nested key table
            sandbox: Runtime for whole-module evaluation (None skips that strategy)
            strategies: Ordered (name, strategy) pairs to run
        """
        self._options = ExtractionOptions(
            binding_names=tuple(binding_names),
            table_field=table_field,
            sandbox=sandbox,
        )
        self._strategies = tuple(strategies)

    @property
    def options(self) -> ExtractionOptions:
        """Options passed to every strategy."""
        return self._options

    def run(self, raw_text: ResourceSource) -> ExtractionOutcome:
        """Run the cascade and keep the log of every attempt.

        Args:
            raw_text: Full text of one resource module

        Returns:
            ExtractionOutcome whose map is empty if no strategy succeeded
        """
        attempts: list[ExtractionResult] = []
        for name, strategy in self._strategies:
            try:
                raw = strategy(raw_text, self._options)
            except Exception as exc:  # pylint: disable=broad-exception-caught
                logger.debug("Strategy %s failed: %s", name, exc)
                attempts.append(ExtractionResult(name, ExtractionStatus.FAILED, error=exc))
                continue

            if raw is None:
                attempts.append(ExtractionResult(name, ExtractionStatus.NOT_APPLICABLE))
                continue

            entries = conforming_entries(raw)
            if not entries:
                logger.debug("Strategy %s found no conforming entries", name)
                attempts.append(ExtractionResult(name, ExtractionStatus.EMPTY))
                continue

            logger.debug("Strategy %s extracted %d entries", name, len(entries))
            attempts.append(
                ExtractionResult(name, ExtractionStatus.SUCCESS, MappingProxyType(entries))
            )
            return ExtractionOutcome(LocaleMap(entries), tuple(attempts))

        return ExtractionOutcome(LocaleMap.empty(), tuple(attempts))

    def extract(self, raw_text: ResourceSource) -> LocaleMap:
        """Return the entries of the first successful strategy (possibly none)."""
        return self.run(raw_text).locale_map


_DEFAULT_EXTRACTOR = ResourceExtractor()


def extract(raw_text: ResourceSource) -> LocaleMap:
    """Extract the key table of a resource module with default settings.

    Never raises.

    Args:
        raw_text: Full text of one resource module

    Returns:
        LocaleMap of conforming entries, empty if nothing was recovered
    """
    return _DEFAULT_EXTRACTOR.extract(raw_text)
