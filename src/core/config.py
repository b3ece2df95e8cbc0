"""Runtime configuration model for the warehouse.

This module owns all environment variable parsing and validation.
Other modules consume a typed config object instead of raw env reads.
"""

from __future__ import annotations

from dataclasses import dataclass
import os
from pathlib import Path

from core.constants import DEFAULT_STORAGE_FOLDER
from core.errors import WarehouseConfigError

_TRUE_FLAG_VALUES = ("1", "true", "yes", "on")
_FALSE_FLAG_VALUES = ("0", "false", "no", "off", "")


@dataclass(frozen=True)
class WarehouseConfig:
    """Validated runtime configuration.

    Attributes:
        storage_folder: Directory holding one ``.crawl`` file per record.
        strict_identity: Raise instead of dropping records without natural id.
    """

    storage_folder: Path
    strict_identity: bool = False

    @classmethod
    def from_env(cls) -> "WarehouseConfig":
        """Build config from process environment variables.

        Returns:
            A validated config object.

        Raises:
            WarehouseConfigError: If environment values are invalid.
        """
        storage_folder_value = os.getenv(
            "WAREHOUSE_STORAGE_FOLDER", str(DEFAULT_STORAGE_FOLDER)
        )
        strict_identity_value = os.getenv("WAREHOUSE_STRICT_IDENTITY", "false")
        return cls(
            storage_folder=Path(storage_folder_value).expanduser().resolve(),
            strict_identity=_parse_flag("WAREHOUSE_STRICT_IDENTITY", strict_identity_value),
        )


def _parse_flag(name: str, raw_value: str) -> bool:
    """Parse a boolean environment flag.

    Args:
        name: Environment variable name for error context.
        raw_value: Raw string from environment.

    Returns:
        Parsed flag value.

    Raises:
        WarehouseConfigError: If value is not a recognized flag literal.
    """
    normalized = raw_value.strip().lower()
    if normalized in _TRUE_FLAG_VALUES:
        return True
    if normalized in _FALSE_FLAG_VALUES:
        return False
    raise WarehouseConfigError(
        f"Invalid {name} value: expected one of "
        f"{_TRUE_FLAG_VALUES + _FALSE_FLAG_VALUES[:-1]}, got '{raw_value}'. "
        f"Set {name} to true or false."
    )
