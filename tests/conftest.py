"""Shared fixtures for partition pruning tests."""

from __future__ import annotations

from collections.abc import Callable

import pyarrow as pa
import pytest

from exprs.filter import Filter
from table.config import TableConfigKey, TableConfigs
from table.partition import PartitionPruner


@pytest.fixture(autouse=True)
def _clear_table_option_overrides(monkeypatch: pytest.MonkeyPatch) -> None:
    for key in TableConfigKey:
        monkeypatch.delenv(key.env_name, raising=False)


@pytest.fixture
def partition_schema() -> pa.Schema:
    """Return the date/category/count partition schema.

    Returns
    -------
    pa.Schema
        Partition schema used across pruning tests.
    """
    return pa.schema(
        [
            pa.field("date", pa.date32(), nullable=False),
            pa.field("category", pa.string(), nullable=False),
            pa.field("count", pa.int32(), nullable=False),
        ]
    )


@pytest.fixture
def query_filters() -> list[Filter]:
    """Return ``date > 2023-01-01 AND category = A AND count <= 100``.

    Returns
    -------
    list[Filter]
        Generic filters as supplied by a query layer.
    """
    return [
        Filter.from_parts("date", ">", "2023-01-01"),
        Filter.from_parts("category", "=", "A"),
        Filter.from_parts("count", "<=", "100"),
    ]


def _table_configs(*, hive_style: bool, url_encoded: bool) -> TableConfigs:
    return TableConfigs(
        {
            TableConfigKey.IS_HIVE_STYLE_PARTITIONING: str(hive_style).lower(),
            TableConfigKey.IS_PARTITION_PATH_URLENCODED: str(url_encoded).lower(),
        }
    )


@pytest.fixture
def hive_configs() -> TableConfigs:
    """Return options for hive-style, unencoded partition paths.

    Returns
    -------
    TableConfigs
        Hive-style layout options.
    """
    return _table_configs(hive_style=True, url_encoded=False)


@pytest.fixture
def make_configs() -> Callable[..., TableConfigs]:
    """Return a factory for table options with explicit layout flags.

    Returns
    -------
    Callable[..., TableConfigs]
        Factory accepting ``hive_style`` and ``url_encoded`` keywords.
    """
    return _table_configs


@pytest.fixture
def hive_pruner(
    partition_schema: pa.Schema,
    query_filters: list[Filter],
    hive_configs: TableConfigs,
) -> PartitionPruner:
    """Return a hive-style pruner for the standard query filters.

    Returns
    -------
    PartitionPruner
        Pruner over ``date > 2023-01-01 AND category = A AND count <= 100``.
    """
    return PartitionPruner.new(query_filters, partition_schema, hive_configs)
