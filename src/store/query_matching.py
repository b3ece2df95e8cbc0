"""Approximate record matching with regex query values.

Query values are case-insensitive regular expressions searched inside
stored values. A query matches a record when any value of any query key
is found in the corresponding stored field.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Mapping, Sequence

from core.constants import NAMESPACE_SEPARATOR, STRIPPED_TARGET_CHARACTERS
from core.errors import WarehouseQueryPatternError
from core.types import StoredRecord

_TARGET_CLEANUP = str.maketrans("", "", STRIPPED_TARGET_CHARACTERS)


@dataclass(frozen=True)
class CompiledQuery:
    """Query with every value compiled to a pattern.

    Attributes:
        clauses: Pairs of field key and compiled value patterns.
    """

    clauses: tuple[tuple[str, tuple[re.Pattern[str], ...]], ...]


def compile_query(query: Mapping[str, Sequence[str]]) -> CompiledQuery:
    """Compile query values into case-insensitive patterns.

    Args:
        query: Field key to regex values.

    Returns:
        Compiled query.

    Raises:
        WarehouseQueryPatternError: If a value is not a valid pattern.
    """
    clauses = tuple(
        (key, tuple(_compile_pattern(key, str(value)) for value in values))
        for key, values in query.items()
    )
    return CompiledQuery(clauses=clauses)


def matches_query(query: CompiledQuery, target: StoredRecord) -> bool:
    """Return whether any query pattern is found in the target record.

    Args:
        query: Compiled query.
        target: Decoded stored record.

    Returns:
        True when at least one query value matches one target value.
    """
    for key, patterns in query.clauses:
        target_values = _find_target_values(key, target)
        cleaned_values = [_clean_target_value(value) for value in target_values]
        for pattern in patterns:
            if any(pattern.search(value) for value in cleaned_values):
                return True
    return False


def match_information(query: Mapping[str, Sequence[str]], target: StoredRecord) -> bool:
    """Compile and match a query against one record.

    Args:
        query: Field key to regex values.
        target: Decoded stored record.

    Returns:
        Match result.

    Raises:
        WarehouseQueryPatternError: If a value is not a valid pattern.
    """
    return matches_query(compile_query(query), target)


def _find_target_values(key: str, target: StoredRecord) -> tuple[str, ...]:
    """Find the stored field for a query key.

    Stored keys are usually namespace-stripped already, so an exact key
    match is accepted alongside a ``.key`` suffix match.
    """
    suffix = f"{NAMESPACE_SEPARATOR}{key}"
    for target_key, values in target.items():
        if target_key == key or target_key.endswith(suffix):
            return values
    return ()


def _clean_target_value(value: str) -> str:
    return value.lower().translate(_TARGET_CLEANUP)


def _compile_pattern(key: str, value: str) -> re.Pattern[str]:
    """Compile one lower-cased query value.

    Raises:
        WarehouseQueryPatternError: If the value is not a valid pattern.
    """
    try:
        return re.compile(value.lower(), re.IGNORECASE)
    except re.error as error:
        raise WarehouseQueryPatternError(
            f"Invalid query pattern for field '{key}': '{value}' ({error}). "
            "Escape regex metacharacters or fix the pattern and retry."
        ) from error
