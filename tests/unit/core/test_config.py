"""Unit tests for core config parsing."""

from __future__ import annotations

import os

import pytest

from core.config import WarehouseConfig
from core.errors import WarehouseConfigError


def test_from_env_reads_storage_folder(monkeypatch: pytest.MonkeyPatch) -> None:
    """Config should resolve the storage folder from environment."""
    monkeypatch.setenv("WAREHOUSE_STORAGE_FOLDER", "./.tmp-crawl")

    config = WarehouseConfig.from_env()

    assert config.storage_folder.name == ".tmp-crawl" and config.storage_folder.is_absolute()


def test_from_env_defaults_to_lenient_identity(monkeypatch: pytest.MonkeyPatch) -> None:
    """Strict identity should be off unless requested."""
    monkeypatch.delenv("WAREHOUSE_STRICT_IDENTITY", raising=False)

    config = WarehouseConfig.from_env()

    assert config.strict_identity is False


@pytest.mark.parametrize("raw_value", ["1", "true", "YES", "on"])
def test_from_env_reads_strict_identity(monkeypatch: pytest.MonkeyPatch, raw_value: str) -> None:
    """Truthy flag literals should enable strict identity."""
    monkeypatch.setenv("WAREHOUSE_STRICT_IDENTITY", raw_value)

    config = WarehouseConfig.from_env()

    assert config.strict_identity is True


def test_from_env_raises_for_invalid_flag(monkeypatch: pytest.MonkeyPatch) -> None:
    """Config should fail for unrecognized flag values."""
    monkeypatch.setenv("WAREHOUSE_STRICT_IDENTITY", "sometimes")

    with pytest.raises(WarehouseConfigError):
        WarehouseConfig.from_env()

    assert os.getenv("WAREHOUSE_STRICT_IDENTITY") == "sometimes"
