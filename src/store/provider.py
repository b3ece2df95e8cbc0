"""Provider interface consumed by ingestion and query callers."""

from __future__ import annotations

from typing import Mapping, Protocol, Sequence

from core.types import RawRecord, StoredRecord, StoreResult


class WarehouseProvider(Protocol):
    """Storage backend that persists records and answers approximate queries."""

    def store_information(self, record: RawRecord) -> StoreResult:
        """Normalize, identify and persist one raw record."""

    def dig_information(self, query: Mapping[str, Sequence[str]]) -> list[StoredRecord]:
        """Return stored records matching any query pattern."""
