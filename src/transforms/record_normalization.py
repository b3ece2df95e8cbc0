"""Record normalization before identity derivation and storage.

This module strips namespace prefixes from field keys and cleans and
coerces every raw value, preserving value order within a key.
"""

from __future__ import annotations

import unicodedata
from typing import Callable

from core.constants import NAMESPACE_SEPARATOR
from core.types import NormalizedRecord, RawRecord
from transforms.markup import strip_markup as default_strip_markup
from transforms.value_coercion import coerce_value

MarkupStripper = Callable[[str], str]


def normalize_record(
    record: RawRecord,
    strip_markup: MarkupStripper = default_strip_markup,
) -> NormalizedRecord:
    """Normalize keys and coerce values of a raw record.

    Args:
        record: Raw field collection.
        strip_markup: Markup removal function applied to every value.

    Returns:
        Normalized record. Keys that collapse to the same name after
        namespace stripping keep the values of the later key.
    """
    return {
        normalize_key(key): tuple(
            coerce_value(clean_text(value, strip_markup)) for value in values
        )
        for key, values in record.items()
    }


def normalize_key(key: str) -> str:
    """Drop the first dot-separated segment of a namespaced key.

    Args:
        key: Raw field key such as ``page.title``.

    Returns:
        ``title`` for ``page.title``; keys without a dot are unchanged.
    """
    _, separator, remainder = key.partition(NAMESPACE_SEPARATOR)
    if not separator:
        return key
    return remainder


def clean_text(text: str, strip_markup: MarkupStripper = default_strip_markup) -> str:
    """Remove markup and control characters, then trim whitespace.

    Args:
        text: Raw value text.
        strip_markup: Markup removal function.

    Returns:
        Cleaned value text.
    """
    stripped = strip_markup(text)
    printable = "".join(char for char in stripped if unicodedata.category(char) != "Cc")
    return printable.strip()
