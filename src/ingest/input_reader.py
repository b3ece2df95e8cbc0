"""Raw record readers for ingestion.

This module loads scraped field collections from JSON, JSONL and YAML
files. It normalizes every payload into raw records whose values are
lists of strings.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from core.constants import SUPPORTED_RECORD_EXTENSIONS
from core.errors import WarehouseDependencyError, WarehouseIngestError
from core.types import RawRecord


def read_raw_records(source: str | Path) -> list[RawRecord]:
    """Load raw records from a file or directory.

    Args:
        source: Record file, or directory scanned recursively.

    Returns:
        Ordered list of raw records.

    Raises:
        WarehouseIngestError: If source is missing or unreadable.
    """
    source_path = Path(source).expanduser()
    if not source_path.exists():
        raise WarehouseIngestError(
            f"Failed to read records at {source_path}: path does not exist. "
            "Provide an existing file or directory."
        )
    if source_path.is_file():
        return _read_file_records(source_path)
    records: list[RawRecord] = []
    for file_path in sorted(source_path.rglob("*")):
        if file_path.is_file() and _is_supported_file(file_path):
            records.extend(_read_file_records(file_path))
    return records


def _read_file_records(file_path: Path) -> list[RawRecord]:
    """Read raw records from a single file by extension.

    Raises:
        WarehouseIngestError: If the extension is unsupported or content invalid.
    """
    suffix = file_path.suffix.lower()
    if suffix == ".jsonl":
        return _read_jsonl_records(file_path)
    if suffix == ".json":
        payload = _parse_json(file_path, _read_text(file_path), None)
        return _records_from_payload(file_path, payload)
    if suffix in (".yaml", ".yml"):
        return _records_from_payload(file_path, _load_yaml_payload(file_path))
    raise WarehouseIngestError(
        f"Unsupported record file {file_path}. "
        f"Supported extensions: {SUPPORTED_RECORD_EXTENSIONS}."
    )


def _read_jsonl_records(file_path: Path) -> list[RawRecord]:
    records: list[RawRecord] = []
    for line_number, line in enumerate(_read_text(file_path).splitlines(), 1):
        if not line.strip():
            continue
        payload = _parse_json(file_path, line, line_number)
        records.append(_raw_record_from_mapping(file_path, payload, line_number))
    return records


def _parse_json(file_path: Path, text: str, line_number: int | None) -> Any:
    """Parse JSON text with file context in errors.

    Raises:
        WarehouseIngestError: If the JSON is invalid.
    """
    try:
        return json.loads(text)
    except json.JSONDecodeError as error:
        location = f"{file_path}:{line_number}" if line_number else str(file_path)
        raise WarehouseIngestError(
            f"Failed to parse JSON record at {location}: {error.msg}. "
            "Fix the JSON syntax and retry."
        ) from error


def _load_yaml_payload(file_path: Path) -> Any:
    """Parse a YAML record file.

    Raises:
        WarehouseDependencyError: If PyYAML is missing.
        WarehouseIngestError: If the YAML is invalid.
    """
    try:
        import yaml  # type: ignore[import-untyped]
    except ImportError as error:  # pragma: no cover - dependency failure
        raise WarehouseDependencyError(
            "YAML record support requires PyYAML. Install with 'pip install pyyaml'."
        ) from error
    try:
        return yaml.safe_load(_read_text(file_path))
    except yaml.YAMLError as error:
        raise WarehouseIngestError(
            f"Failed to parse YAML record at {file_path}: {error}. "
            "Fix the YAML syntax and retry."
        ) from error


def _records_from_payload(file_path: Path, payload: Any) -> list[RawRecord]:
    """Convert a parsed document into raw records.

    Args:
        file_path: Source file for error context.
        payload: A mapping or a list of mappings.

    Returns:
        Raw records.
    """
    if payload is None:
        return []
    if isinstance(payload, list):
        return [
            _raw_record_from_mapping(file_path, item, index)
            for index, item in enumerate(payload, 1)
        ]
    return [_raw_record_from_mapping(file_path, payload, None)]


def _raw_record_from_mapping(file_path: Path, payload: Any, position: int | None) -> RawRecord:
    """Validate one record mapping and stringify its values.

    Scalar values become one-element lists; ``None`` becomes an empty list.

    Raises:
        WarehouseIngestError: If the payload is not a mapping.
    """
    if not isinstance(payload, dict):
        location = f"{file_path}:{position}" if position else str(file_path)
        raise WarehouseIngestError(
            f"Invalid record at {location}: expected an object mapping field "
            "names to values. Wrap fields in an object and retry."
        )
    record: dict[str, list[str]] = {}
    for key, value in payload.items():
        if value is None:
            record[str(key)] = []
        elif isinstance(value, (list, tuple)):
            record[str(key)] = ["" if item is None else str(item) for item in value]
        else:
            record[str(key)] = [str(value)]
    return record


def _read_text(file_path: Path) -> str:
    """Read UTF-8 file text.

    Raises:
        WarehouseIngestError: If the file cannot be read.
    """
    try:
        return file_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as error:
        raise WarehouseIngestError(
            f"Failed to read record file at {file_path}: {error}. "
            "Check the file encoding and permissions."
        ) from error


def _is_supported_file(file_path: Path) -> bool:
    """Return whether a local file extension is supported."""
    return file_path.suffix.lower() in SUPPORTED_RECORD_EXTENSIONS
