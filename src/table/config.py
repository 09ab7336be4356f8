"""Table options that describe how partition paths are laid out."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from enum import StrEnum
from types import MappingProxyType

from core.errors import ConfigError
from serde_msgspec import StructBaseStrict
from utils.env_utils import env_bool, env_name, env_value, parse_bool_text

logger = logging.getLogger(__name__)


class TableConfigKey(StrEnum):
    """Table option keys consumed by partition pruning."""

    IS_HIVE_STYLE_PARTITIONING = "hoodie.datasource.write.hive_style_partitioning"
    IS_PARTITION_PATH_URLENCODED = "hoodie.datasource.write.partitionpath.urlencode"

    @property
    def default_value(self) -> str:
        """Return the textual default used when the option is unset."""
        return _DEFAULTS[self]

    @property
    def env_name(self) -> str:
        """Return the environment variable overriding this option."""
        return env_name(self.value)


_DEFAULTS: dict[TableConfigKey, str] = {
    TableConfigKey.IS_HIVE_STYLE_PARTITIONING: "false",
    TableConfigKey.IS_PARTITION_PATH_URLENCODED: "false",
}


class PartitionPathOptions(StructBaseStrict, frozen=True):
    """Layout of partition path segments.

    Parameters
    ----------
    hive_style
        Whether each segment is written as ``name=value``.
    url_encoded
        Whether partition paths are percent-encoded.
    """

    hive_style: bool = False
    url_encoded: bool = False


class TableConfigs:
    """Read-only view over table options with defaults.

    Explicit options take precedence over environment overrides, which take
    precedence over the per-key defaults.
    """

    __slots__ = ("_options",)

    def __init__(self, options: Mapping[str, object] | None = None) -> None:
        normalized = {str(key): str(value) for key, value in (options or {}).items()}
        self._options: Mapping[str, str] = MappingProxyType(normalized)

    @property
    def options(self) -> Mapping[str, str]:
        """Return the explicit options."""
        return self._options

    def get(self, key: TableConfigKey) -> str | None:
        """Return the explicit or environment value for ``key``.

        Returns
        -------
        str | None
            Option text, or None when unset.
        """
        explicit = self._options.get(key.value)
        if explicit is not None:
            return explicit
        return env_value(key.env_name)

    def get_or_default(self, key: TableConfigKey) -> str:
        """Return the value for ``key`` falling back to its default.

        Returns
        -------
        str
            Option text.
        """
        value = self.get(key)
        return key.default_value if value is None else value

    def get_bool(self, key: TableConfigKey) -> bool:
        """Return a boolean option.

        Returns
        -------
        bool
            Parsed option value.

        Raises
        ------
        ConfigError
            Raised when an explicit option is not a boolean literal.
        """
        explicit = self._options.get(key.value)
        if explicit is not None:
            parsed = parse_bool_text(explicit)
            if parsed is None:
                msg = f"Invalid boolean for {key.value}: {explicit!r}"
                raise ConfigError(msg)
            return parsed
        override = env_bool(key.env_name, default=None, on_invalid="none", log_invalid=True)
        if override is not None:
            logger.debug("Using environment override %s=%s", key.env_name, override)
            return override
        return parse_bool_text(key.default_value) is True

    def partition_path_options(self) -> PartitionPathOptions:
        """Return the partition path layout described by these options.

        Returns
        -------
        PartitionPathOptions
            Resolved layout options.
        """
        return PartitionPathOptions(
            hive_style=self.get_bool(TableConfigKey.IS_HIVE_STYLE_PARTITIONING),
            url_encoded=self.get_bool(TableConfigKey.IS_PARTITION_PATH_URLENCODED),
        )


__all__ = ["PartitionPathOptions", "TableConfigKey", "TableConfigs"]
