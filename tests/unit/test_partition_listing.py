"""Tests for applying partition pruning to listed partition paths."""

from __future__ import annotations

import logging

import pytest

from core.errors import InvalidPartitionPathError, UnsupportedCastError
from table.listing import (
    PartitionPruningTracker,
    PruningSummary,
    invalid_partition_paths,
    prune_partition_paths,
    validate_partition_path,
)
from table.partition import PartitionPruner

_PATHS = [
    "date=2023-02-01/category=A/count=10",
    "date=2022-12-31/category=A/count=10",
    "date=2023-02-01/category=B/count=10",
    "date=2023-02-01/category=A/count=100",
    "date=2023-02-01/category=A",
]


def test_prune_partition_paths_keeps_order(hive_pruner: PartitionPruner) -> None:
    """Keep included paths in listing order, including unparseable ones."""
    assert prune_partition_paths(hive_pruner, _PATHS) == [
        "date=2023-02-01/category=A/count=10",
        "date=2023-02-01/category=A/count=100",
        "date=2023-02-01/category=A",
    ]


def test_prune_partition_paths_records_decisions(hive_pruner: PartitionPruner) -> None:
    """Record every decision and summarize pruning."""
    tracker = PartitionPruningTracker()
    prune_partition_paths(hive_pruner, iter(_PATHS), tracker=tracker)
    summary = tracker.summary()
    assert summary == PruningSummary(total_paths=5, included_paths=3, pruned_paths=2)
    assert summary.pruning_ratio == pytest.approx(0.4)
    assert tracker.pruned() == [
        "date=2022-12-31/category=A/count=10",
        "date=2023-02-01/category=B/count=10",
    ]


def test_prune_partition_paths_logs_summary(
    hive_pruner: PartitionPruner,
    caplog: pytest.LogCaptureFixture,
) -> None:
    """Log how many partition paths were kept."""
    with caplog.at_level(logging.INFO, logger="table.listing"):
        prune_partition_paths(hive_pruner, _PATHS)
    assert "kept 3 of 5 partition path(s)" in caplog.text


def test_empty_pruner_keeps_every_path() -> None:
    """Short-circuit pruning when there are no filters."""
    tracker = PartitionPruningTracker()
    paths = ["a", "b/c", "not a partition"]
    assert prune_partition_paths(PartitionPruner.empty(), paths, tracker=tracker) == paths
    assert tracker.summary() == PruningSummary(total_paths=3, included_paths=3, pruned_paths=0)


def test_empty_summary() -> None:
    """Report a zero pruning ratio without recorded paths."""
    summary = PartitionPruningTracker().summary()
    assert summary.total_paths == 0
    assert summary.pruning_ratio == 0.0


def test_validate_partition_path_raises(hive_pruner: PartitionPruner) -> None:
    """Surface layout errors for diagnostic validation."""
    validate_partition_path(hive_pruner, "date=2023-02-01/category=A/count=10")
    with pytest.raises(InvalidPartitionPathError, match="should have 3 part"):
        validate_partition_path(hive_pruner, "date=2023-02-01/category=A")
    with pytest.raises(UnsupportedCastError):
        validate_partition_path(hive_pruner, "date=2023-02-01/category=A/count=ten")


def test_invalid_partition_paths(hive_pruner: PartitionPruner) -> None:
    """Collect parse errors for every invalid path."""
    invalid = invalid_partition_paths(
        hive_pruner,
        [*_PATHS, "count=10/category=A/date=2023-02-01"],
    )
    assert invalid == {
        "date=2023-02-01/category=A": "Partition path should have 3 part(s) but got 2",
        "count=10/category=A/date=2023-02-01": (
            "Partition path should contain date but got count"
        ),
    }
