"""Apply partition pruning to listed partition paths.

Provide ``prune_partition_paths`` for scan planning, a mutable
``PartitionPruningTracker`` with a frozen ``PruningSummary`` for reporting,
and strict path validation for diagnostic tooling.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field

from core.errors import PruningError
from table.partition import PartitionPruner

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PruningSummary:
    """Aggregate partition pruning outcome.

    Parameters
    ----------
    total_paths
        Number of partition paths considered.
    included_paths
        Number of partition paths kept for scanning.
    pruned_paths
        Number of partition paths skipped.
    """

    total_paths: int = 0
    included_paths: int = 0
    pruned_paths: int = 0

    @property
    def pruning_ratio(self) -> float:
        """Return the share of pruned paths (0.0--1.0)."""
        if self.total_paths == 0:
            return 0.0
        return self.pruned_paths / self.total_paths


@dataclass
class PartitionPruningTracker:
    """Accumulate pruning decisions across one or more listings.

    Parameters
    ----------
    _entries
        Internal list of (partition_path, included) tuples.
    """

    _entries: list[tuple[str, bool]] = field(default_factory=list)

    def record(self, partition_path: str, *, included: bool) -> None:
        """Record the decision taken for a partition path.

        Parameters
        ----------
        partition_path
            Partition path that was evaluated.
        included
            Whether the partition was kept.
        """
        self._entries.append((partition_path, included))

    def pruned(self) -> list[str]:
        """Return the pruned partition paths in evaluation order.

        Returns
        -------
        list[str]
            Paths that were skipped.
        """
        return [path for path, included in self._entries if not included]

    def summary(self) -> PruningSummary:
        """Compute an aggregate pruning summary.

        Returns
        -------
        PruningSummary
            Aggregate counts across all recorded entries.
        """
        included = sum(1 for _path, kept in self._entries if kept)
        return PruningSummary(
            total_paths=len(self._entries),
            included_paths=included,
            pruned_paths=len(self._entries) - included,
        )


def prune_partition_paths(
    pruner: PartitionPruner,
    partition_paths: Iterable[str],
    *,
    tracker: PartitionPruningTracker | None = None,
) -> list[str]:
    """Return the partition paths that must be scanned.

    Parameters
    ----------
    pruner
        Pruner holding the query's partition filters.
    partition_paths
        Candidate partition paths from the file listing.
    tracker
        Optional tracker receiving every decision.

    Returns
    -------
    list[str]
        Included paths in input order.
    """
    paths = list(partition_paths)
    if pruner.is_empty():
        if tracker is not None:
            for path in paths:
                tracker.record(path, included=True)
        return paths
    kept: list[str] = []
    for path in paths:
        included = pruner.should_include(path)
        if tracker is not None:
            tracker.record(path, included=included)
        if included:
            kept.append(path)
    logger.info(
        "Partition pruning kept %d of %d partition path(s)",
        len(kept),
        len(paths),
    )
    return kept


def validate_partition_path(pruner: PartitionPruner, partition_path: str) -> None:
    """Raise when a partition path does not match the pruner's layout.

    Raises
    ------
    InvalidPartitionPathError
        Raised when the path layout does not match the partition schema.
    UnsupportedCastError
        Raised when a segment value cannot be cast to its field type.
    """
    pruner.parse_segments(partition_path)


def invalid_partition_paths(
    pruner: PartitionPruner,
    partition_paths: Iterable[str],
) -> dict[str, str]:
    """Return the parse error for every path that does not match the layout.

    Returns
    -------
    dict[str, str]
        Mapping of invalid path to error message.
    """
    invalid: dict[str, str] = {}
    for path in partition_paths:
        try:
            validate_partition_path(pruner, path)
        except PruningError as exc:
            invalid[path] = str(exc)
    return invalid


__all__ = [
    "PartitionPruningTracker",
    "PruningSummary",
    "invalid_partition_paths",
    "prune_partition_paths",
    "validate_partition_path",
]
