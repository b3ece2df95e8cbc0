"""Public SDK surface for the crawl warehouse.

This module provides a stable import path for ingestion and query callers.
It re-exports the provider, typed models and transform entry points.
"""

from __future__ import annotations

from core.config import WarehouseConfig
from core.errors import (
    WarehouseError,
    WarehouseNoIdentifierError,
    WarehouseQueryPatternError,
    WarehouseStoreError,
)
from core.types import (
    NormalizedRecord,
    RawRecord,
    RecordIdentity,
    StoredRecord,
    StoreResult,
    TypedValue,
    ValueKind,
)
from ingest.input_reader import read_raw_records
from store.filesystem_provider import FilesystemWarehouseProvider
from store.flat_file_codec import decode_record, encode_record
from store.provider import WarehouseProvider
from store.query_matching import compile_query, match_information, matches_query
from transforms.markup import strip_markup
from transforms.record_identity import build_fingerprint, build_identity, build_natural_id
from transforms.record_normalization import normalize_record
from transforms.value_coercion import coerce_value

__all__ = [
    "FilesystemWarehouseProvider",
    "NormalizedRecord",
    "RawRecord",
    "RecordIdentity",
    "StoreResult",
    "StoredRecord",
    "TypedValue",
    "ValueKind",
    "WarehouseConfig",
    "WarehouseError",
    "WarehouseNoIdentifierError",
    "WarehouseProvider",
    "WarehouseQueryPatternError",
    "WarehouseStoreError",
    "build_fingerprint",
    "build_identity",
    "build_natural_id",
    "coerce_value",
    "compile_query",
    "decode_record",
    "encode_record",
    "match_information",
    "matches_query",
    "normalize_record",
    "read_raw_records",
    "strip_markup",
]
