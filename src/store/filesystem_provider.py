"""Filesystem-backed warehouse provider.

This module persists one ``{natural_id}.crawl`` file per record inside a
configured storage folder and answers approximate queries by scanning
those files. Writes are last-write-wins without locking; concurrent
writers on the same natural id race.
"""

from __future__ import annotations

from pathlib import Path
from typing import Mapping, Sequence

from core.config import WarehouseConfig
from core.constants import STORAGE_FILE_ENCODING, STORAGE_FILE_SUFFIX
from core.errors import WarehouseNoIdentifierError, WarehouseStoreError
from core.logging_config import get_logger
from core.types import RawRecord, StoredRecord, StoreResult
from store.flat_file_codec import decode_record, encode_record
from store.query_matching import compile_query, matches_query
from transforms.markup import strip_markup as default_strip_markup
from transforms.record_identity import build_identity
from transforms.record_normalization import MarkupStripper, normalize_record

_LOGGER = get_logger(__name__)
_UNSAFE_ID_NAMES = ("", ".", "..")


class FilesystemWarehouseProvider:
    """Flat-file warehouse provider.

    This class owns the storage folder and orchestrates normalization,
    identity derivation, encoding and query matching.
    """

    def __init__(
        self,
        config: WarehouseConfig,
        strip_markup: MarkupStripper = default_strip_markup,
    ) -> None:
        """Initialize provider from config.

        Args:
            config: Runtime configuration.
            strip_markup: Markup removal function applied to raw values.
        """
        self._config = config
        self._storage_folder = config.storage_folder
        self._strip_markup = strip_markup

    def store_information(self, record: RawRecord) -> StoreResult:
        """Normalize and persist one raw record under its natural id.

        Args:
            record: Raw field collection.

        Returns:
            Store outcome with identity, file path and change flag.

        Raises:
            WarehouseNoIdentifierError: If strict identity is enabled and
                the record has no natural id.
            WarehouseStoreError: If the natural id is not a safe file name
                or the file cannot be written.
        """
        normalized = normalize_record(record, self._strip_markup)
        identity = build_identity(normalized)
        if not identity.natural_id:
            return self._drop_record(identity.fingerprint, len(normalized))
        record_path = self._record_path(identity.natural_id)
        content = encode_record(normalized)
        changed = _read_existing_content(record_path) != content
        if changed:
            _write_record_file(record_path, content)
            _LOGGER.info(
                "record_stored",
                natural_id=identity.natural_id,
                fingerprint=identity.fingerprint,
                field_count=len(normalized),
                path=str(record_path),
            )
        else:
            _LOGGER.debug(
                "record_unchanged",
                natural_id=identity.natural_id,
                fingerprint=identity.fingerprint,
            )
        return StoreResult(
            natural_id=identity.natural_id,
            fingerprint=identity.fingerprint,
            path=record_path,
            changed=changed,
        )

    def dig_information(self, query: Mapping[str, Sequence[str]]) -> list[StoredRecord]:
        """Find stored records matching a regex query.

        Args:
            query: Field key to case-insensitive regex values.

        Returns:
            Matching decoded records in file name order; empty when the
            storage folder does not exist.

        Raises:
            WarehouseQueryPatternError: If a query value is not a valid pattern.
        """
        compiled_query = compile_query(query)
        if not self._storage_folder.is_dir():
            _LOGGER.debug("storage_folder_missing", storage_folder=str(self._storage_folder))
            return []
        results: list[StoredRecord] = []
        scanned = 0
        for record_path in self._record_files():
            content = _read_record_file(record_path)
            if content is None:
                continue
            scanned += 1
            record = decode_record(content)
            if matches_query(compiled_query, record):
                results.append(record)
        _LOGGER.info(
            "storage_dig_completed",
            query_fields=sorted(query),
            scanned=scanned,
            matched=len(results),
        )
        return results

    def load_information(self, natural_id: str) -> StoredRecord | None:
        """Load one stored record by natural id.

        Args:
            natural_id: Natural id used as file name.

        Returns:
            Decoded record, or None when the file is absent or empty.

        Raises:
            WarehouseStoreError: If the natural id is not a safe file name.
        """
        content = _read_existing_content(self._record_path(natural_id))
        if not content:
            return None
        return decode_record(content)

    def _drop_record(self, fingerprint: str, field_count: int) -> StoreResult:
        """Drop or reject a record without natural id.

        Raises:
            WarehouseNoIdentifierError: If strict identity is enabled.
        """
        if self._config.strict_identity:
            raise WarehouseNoIdentifierError(
                f"Record {fingerprint[:12]} has no natural id: no field key ends "
                "with 'id' or its first value is empty. Add an id field and retry."
            )
        _LOGGER.warning("record_dropped", fingerprint=fingerprint, field_count=field_count)
        return StoreResult(natural_id="", fingerprint=fingerprint, path=None, changed=False)

    def _record_path(self, natural_id: str) -> Path:
        """Return the storage file path for a natural id.

        Raises:
            WarehouseStoreError: If the id would escape the storage folder.
        """
        if (
            natural_id in _UNSAFE_ID_NAMES
            or "/" in natural_id
            or "\\" in natural_id
            or "\x00" in natural_id
        ):
            raise WarehouseStoreError(
                f"Natural id '{natural_id}' is not a valid storage file name. "
                "Use ids without path separators."
            )
        return self._storage_folder / f"{natural_id}{STORAGE_FILE_SUFFIX}"

    def _record_files(self) -> list[Path]:
        return sorted(
            path
            for path in self._storage_folder.glob(f"*{STORAGE_FILE_SUFFIX}")
            if path.is_file()
        )


def _read_existing_content(record_path: Path) -> str | None:
    """Read a record file if it exists.

    Args:
        record_path: Storage file path.

    Returns:
        File content, or None when the file is absent or not valid text.

    Raises:
        WarehouseStoreError: If an existing file cannot be read.
    """
    if not record_path.is_file():
        return None
    try:
        return record_path.read_bytes().decode(STORAGE_FILE_ENCODING)
    except UnicodeDecodeError:
        return None
    except OSError as error:
        raise WarehouseStoreError(
            f"Failed to read record file at {record_path}: {error}. "
            "Check storage folder permissions and retry."
        ) from error


def _read_record_file(record_path: Path) -> str | None:
    """Read a record file during a scan, skipping unreadable files.

    Args:
        record_path: Storage file path.

    Returns:
        File content, or None when the file cannot be read as text.
    """
    try:
        return record_path.read_bytes().decode(STORAGE_FILE_ENCODING)
    except (OSError, UnicodeDecodeError) as error:
        _LOGGER.warning("storage_file_skipped", path=str(record_path), reason=str(error))
        return None


def _write_record_file(record_path: Path, content: str) -> None:
    """Write record content, creating the storage folder on demand.

    Args:
        record_path: Storage file path.
        content: Encoded record text.

    Raises:
        WarehouseStoreError: If the file cannot be written.
    """
    try:
        record_path.parent.mkdir(parents=True, exist_ok=True)
        record_path.write_bytes(content.encode(STORAGE_FILE_ENCODING))
    except OSError as error:
        raise WarehouseStoreError(
            f"Failed to write record file at {record_path}: {error}. "
            "Check storage folder permissions and retry."
        ) from error
