"""Partition pruning against partition paths.

A ``PartitionPruner`` binds generic filters to a partition schema once, then
decides per partition path whether the partition can be skipped. Decisions are
fail-open: whenever a path cannot be parsed or a filter cannot be evaluated the
partition is included, leaving the final filtering to the data scan.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass
from functools import reduce
from typing import Any
from urllib.parse import unquote

import msgspec
import pyarrow as pa
import pyarrow.compute as pc

from core.errors import (
    ConfigError,
    FieldNotFoundError,
    InvalidPartitionPathError,
    PruningError,
)
from exprs.filter import Filter
from exprs.operators import ExprOperator, coerce_operator
from serde_msgspec import convert, to_builtins, validation_error_payload
from table.config import PartitionPathOptions, TableConfigs
from table.scalars import cast_value, compare, comparison_expression

logger = logging.getLogger(__name__)

_EMPTY_SCHEMA = pa.schema([])


def include_on_error(check: Callable[[], bool], *, context: str) -> bool:
    """Run a pruning check, including the partition when the check fails.

    Every fallible step of ``PartitionPruner.should_include`` goes through this
    function.

    Parameters
    ----------
    check
        Callable returning whether the partition should be included.
    context
        Description of the check used in debug logs.

    Returns
    -------
    bool
        Result of ``check``, or True when it raised a pruning error.
    """
    try:
        return check()
    except PruningError as exc:
        logger.debug("Including partition after %s failed: %s", context, exc)
        return True


@dataclass(frozen=True)
class PartitionFilter:
    """Filter bound to a partition column with a literal of the column type.

    Parameters
    ----------
    field
        Partition schema field the filter applies to.
    operator
        Comparison operator.
    value
        Literal cast to ``field.type``.
    """

    field: pa.Field
    operator: ExprOperator
    value: pa.Scalar

    @classmethod
    def compile(cls, filter_: Filter, partition_schema: pa.Schema) -> PartitionFilter:
        """Bind a generic filter to a partition schema field.

        Parameters
        ----------
        filter_
            Untyped filter from the query layer.
        partition_schema
            Partition schema the filter must target.

        Returns
        -------
        PartitionFilter
            Typed filter.

        Raises
        ------
        UnsupportedOperatorError
            Raised when the filter carries an unsupported operator token.
        FieldNotFoundError
            Raised when the field is not a unique partition column.
        UnsupportedCastError
            Raised when the literal cannot be cast to the column type.
        """
        operator = coerce_operator(filter_.operator)
        index = partition_schema.get_field_index(filter_.field_name)
        if index < 0:
            raise FieldNotFoundError(filter_.field_name)
        field = partition_schema.field(index)
        value = cast_value(filter_.value, field.type)
        return cls(field=field, operator=operator, value=value)

    @property
    def field_name(self) -> str:
        """Return the partition column name."""
        return self.field.name

    def matches(self, segment_value: pa.Scalar) -> bool:
        """Compare a parsed partition value with the filter literal.

        Returns
        -------
        bool
            Whether the partition value satisfies the filter.
        """
        return compare(self.operator, segment_value, self.value)

    def to_expression(self) -> pc.Expression:
        """Return the filter as a ``pyarrow.dataset`` expression.

        Returns
        -------
        pc.Expression
            Expression comparing the column with the typed literal.
        """
        return comparison_expression(self.operator, self.field.name, self.value)

    def __str__(self) -> str:
        return f"{self.field.name} {self.operator.format()} {self.value.as_py()!r}"


@dataclass(frozen=True)
class PartitionPruner:
    """Prune partitions whose paths cannot satisfy a conjunction of filters.

    Instances are immutable and can be shared across threads; the partition
    schema is held by reference.

    Parameters
    ----------
    schema
        Partition schema; field order is the order of path segments.
    is_hive_style
        Whether path segments are written as ``name=value``.
    is_url_encoded
        Whether paths are percent-encoded.
    and_filters
        Compiled filters combined with AND.
    """

    schema: pa.Schema
    is_hive_style: bool
    is_url_encoded: bool
    and_filters: tuple[PartitionFilter, ...]

    @classmethod
    def new(
        cls,
        and_filters: Iterable[Filter],
        partition_schema: pa.Schema,
        configs: TableConfigs | Mapping[str, object],
    ) -> PartitionPruner:
        """Compile filters against the partition schema.

        Parameters
        ----------
        and_filters
            Filters combined with AND.
        partition_schema
            Partition schema of the table.
        configs
            Table options providing the path layout.

        Returns
        -------
        PartitionPruner
            Pruner holding the compiled filters.
        """
        if not isinstance(configs, TableConfigs):
            configs = TableConfigs(configs)
        return cls.from_options(
            and_filters,
            partition_schema,
            configs.partition_path_options(),
        )

    @classmethod
    def from_options(
        cls,
        and_filters: Iterable[Filter],
        partition_schema: pa.Schema,
        options: PartitionPathOptions | Mapping[str, Any],
    ) -> PartitionPruner:
        """Compile filters against the partition schema with explicit layout.

        Returns
        -------
        PartitionPruner
            Pruner holding the compiled filters.

        Raises
        ------
        ConfigError
            Raised when ``options`` is a mapping that does not describe a layout.
        """
        if not isinstance(options, PartitionPathOptions):
            try:
                options = convert(options, target_type=PartitionPathOptions)
            except msgspec.ValidationError as exc:
                payload = validation_error_payload(exc)
                msg = f"Invalid partition path options: {payload['summary']}"
                raise ConfigError(msg) from exc
        compiled = tuple(
            PartitionFilter.compile(filter_, partition_schema) for filter_ in and_filters
        )
        logger.debug(
            "Compiled %d partition filter(s) for %d partition field(s) "
            "(hive_style=%s, url_encoded=%s)",
            len(compiled),
            len(partition_schema),
            options.hive_style,
            options.url_encoded,
        )
        return cls(
            schema=partition_schema,
            is_hive_style=options.hive_style,
            is_url_encoded=options.url_encoded,
            and_filters=compiled,
        )

    @classmethod
    def empty(cls) -> PartitionPruner:
        """Return a pruner that includes every partition.

        Returns
        -------
        PartitionPruner
            Pruner without schema fields or filters.
        """
        return cls(
            schema=_EMPTY_SCHEMA,
            is_hive_style=False,
            is_url_encoded=False,
            and_filters=(),
        )

    def is_empty(self) -> bool:
        """Return whether the pruner has no filters.

        Returns
        -------
        bool
            True when every partition is included.
        """
        return not self.and_filters

    def should_include(self, partition_path: str) -> bool:
        """Return whether the partition at ``partition_path`` must be scanned.

        Parameters
        ----------
        partition_path
            Relative partition path, e.g. ``date=2023-02-01/category=A``.

        Returns
        -------
        bool
            False only when the parsed partition values fail a filter.
        """
        if self.is_empty():
            return True

        def check() -> bool:
            segments = self.parse_segments(partition_path)
            return all(
                self._filter_includes(filter_, segments, partition_path)
                for filter_ in self.and_filters
            )

        return include_on_error(check, context=f"parsing partition path {partition_path!r}")

    def _filter_includes(
        self,
        filter_: PartitionFilter,
        segments: Mapping[str, pa.Scalar],
        partition_path: str,
    ) -> bool:
        segment_value = segments.get(filter_.field_name)
        if segment_value is None:
            return True

        def check() -> bool:
            return filter_.matches(segment_value)

        return include_on_error(check, context=f"evaluating {filter_} on {partition_path!r}")

    def parse_segments(self, partition_path: str) -> dict[str, pa.Scalar]:
        """Parse a partition path into typed values keyed by field name.

        Parameters
        ----------
        partition_path
            Relative partition path.

        Returns
        -------
        dict[str, pa.Scalar]
            Partition values cast to their schema types.

        Raises
        ------
        InvalidPartitionPathError
            Raised when the path does not match the partition layout.
        UnsupportedCastError
            Raised when a segment value cannot be cast to its field type.
        """
        path = self._decode(partition_path)
        parts = path.split("/")
        if len(parts) != len(self.schema):
            msg = f"Partition path should have {len(self.schema)} part(s) but got {len(parts)}"
            raise InvalidPartitionPathError(msg)
        segments: dict[str, pa.Scalar] = {}
        for field, part in zip(self.schema, parts, strict=True):
            raw_value = self._segment_value(field, part)
            segments[field.name] = cast_value(raw_value, field.type)
        return segments

    def _decode(self, partition_path: str) -> str:
        if not self.is_url_encoded:
            return partition_path
        try:
            return unquote(partition_path, errors="strict")
        except UnicodeDecodeError as exc:
            msg = f"Partition path is not valid percent-encoded UTF-8: {partition_path}"
            raise InvalidPartitionPathError(msg) from exc

    def _segment_value(self, field: pa.Field, part: str) -> str:
        if not self.is_hive_style:
            return part
        name, sep, value = part.partition("=")
        if not sep:
            msg = f"Partition path should be hive-style but got {part}"
            raise InvalidPartitionPathError(msg)
        if name != field.name:
            msg = f"Partition path should contain {field.name} but got {name}"
            raise InvalidPartitionPathError(msg)
        return value

    def to_expression(self) -> pc.Expression | None:
        """Return the conjunction of filters as a dataset expression.

        Returns
        -------
        pc.Expression | None
            AND of all filter expressions, or None when there are no filters.
        """
        if self.is_empty():
            return None
        expressions = [filter_.to_expression() for filter_ in self.and_filters]
        return reduce(lambda left, right: left & right, expressions)

    def describe(self) -> dict[str, Any]:
        """Return a JSON-friendly description of the pruner.

        Returns
        -------
        dict[str, Any]
            Layout flags, partition fields and filters.
        """
        return {
            "partition_fields": to_builtins(self.schema),
            "is_hive_style": self.is_hive_style,
            "is_url_encoded": self.is_url_encoded,
            "filters": [
                {
                    "field": filter_.field_name,
                    "operator": filter_.operator.format(),
                    "value": to_builtins(filter_.value),
                }
                for filter_ in self.and_filters
            ],
        }


__all__ = [
    "PartitionFilter",
    "PartitionPruner",
    "include_on_error",
]
