"""Flat text encoding of normalized records.

Each field is one ``key = v1|v2|...|vn`` line. Decoding returns text
values only; types are not re-inferred from stored files.
"""

from __future__ import annotations

from core.constants import KEY_VALUE_SEPARATOR, LINE_TERMINATOR, VALUE_SEPARATOR
from core.logging_config import get_logger
from core.types import NormalizedRecord, StoredRecord

_LOGGER = get_logger(__name__)
_DECODE_SEPARATOR = KEY_VALUE_SEPARATOR.strip()


def encode_record(record: NormalizedRecord) -> str:
    """Encode a normalized record into flat-file text.

    Keys must not contain ``=`` and text values must not contain ``|``;
    such records do not decode back to the same keys and values.

    Args:
        record: Normalized record.

    Returns:
        One terminated line per key, in record iteration order.
    """
    lines = [
        f"{key}{KEY_VALUE_SEPARATOR}{VALUE_SEPARATOR.join(value.render() for value in values)}"
        for key, values in record.items()
    ]
    return "".join(line + LINE_TERMINATOR for line in lines)


def decode_record(text: str) -> StoredRecord:
    """Decode flat-file text into a text-valued record.

    Lines without a key/value separator are skipped so that one damaged
    line does not hide the rest of the record.

    Args:
        text: Flat-file content.

    Returns:
        Mapping of key to value texts. An empty value part decodes to a
        single empty string.
    """
    record: StoredRecord = {}
    for line_number, line in enumerate(text.split(LINE_TERMINATOR), 1):
        if not line.strip():
            continue
        key, separator, value_part = line.partition(_DECODE_SEPARATOR)
        if not separator:
            _LOGGER.debug("flat_file_line_skipped", line_number=line_number)
            continue
        record[key.strip()] = tuple(value_part.strip().split(VALUE_SEPARATOR))
    return record
