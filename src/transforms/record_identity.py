"""Record fingerprint and natural id derivation.

The fingerprint is a hash of per-key hashes and changes whenever any key
or value changes. The natural id is the externally meaningful identifier
found under the first key ending in ``id`` and names the storage file.
"""

from __future__ import annotations

import hashlib

from core.constants import HASH_ALGORITHM, NATURAL_ID_SUFFIX
from core.types import NormalizedRecord, RecordIdentity, TypedValue


def build_identity(record: NormalizedRecord) -> RecordIdentity:
    """Derive fingerprint and natural id for a normalized record.

    Args:
        record: Normalized record.

    Returns:
        Record identity pair.
    """
    return RecordIdentity(
        fingerprint=build_fingerprint(record),
        natural_id=build_natural_id(record),
    )


def build_fingerprint(record: NormalizedRecord) -> str:
    """Build a deterministic content fingerprint.

    Args:
        record: Normalized record, hashed in its iteration order.

    Returns:
        Hex digest over all keys and value sequences.
    """
    entry_hashes = (
        f"{_hash_text(key)}.{_hash_values(values)}" for key, values in record.items()
    )
    return _hash_text("".join(entry_hashes))


def build_natural_id(record: NormalizedRecord) -> str:
    """Find the natural id of a record.

    Args:
        record: Normalized record.

    Returns:
        First value of the first key ending in ``id`` (case-insensitive),
        rendered as text; empty when no such key or value exists.
    """
    for key, values in record.items():
        if not key.lower().endswith(NATURAL_ID_SUFFIX):
            continue
        if not values:
            return ""
        return values[0].render()
    return ""


def _hash_values(values: tuple[TypedValue, ...]) -> str:
    return _hash_text("".join(_hash_value(value) for value in values))


def _hash_value(value: TypedValue) -> str:
    # Kind is part of the digest so Text("1") and Number(1) differ.
    return _hash_text(f"{value.kind.value}:{value.render()}")


def _hash_text(text: str) -> str:
    """Hash a string using configured digest algorithm.

    Args:
        text: Input text.

    Returns:
        Hex digest string.
    """
    hasher = hashlib.new(HASH_ALGORITHM)
    hasher.update(text.encode("utf-8"))
    return hasher.hexdigest()
