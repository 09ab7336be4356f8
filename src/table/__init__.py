"""Table-level partition pruning."""

from table.config import PartitionPathOptions, TableConfigKey, TableConfigs
from table.listing import (
    PartitionPruningTracker,
    PruningSummary,
    invalid_partition_paths,
    prune_partition_paths,
    validate_partition_path,
)
from table.partition import PartitionFilter, PartitionPruner, include_on_error
from table.scalars import cast_value, compare

__all__ = [
    "PartitionFilter",
    "PartitionPathOptions",
    "PartitionPruner",
    "PartitionPruningTracker",
    "PruningSummary",
    "TableConfigKey",
    "TableConfigs",
    "cast_value",
    "compare",
    "include_on_error",
    "invalid_partition_paths",
    "prune_partition_paths",
    "validate_partition_path",
]
