"""Primitive type inference for free-text tokens.

This module turns one scraped token into a ``TypedValue``. Numbers are
tried first with a separator heuristic that resolves European and US
notation, then day-first and month-first dates, then boolean literals.
Anything else stays text, so coercion never fails.
"""

from __future__ import annotations

import re
from datetime import datetime, timezone

from dateutil import parser as date_parser

from core.constants import FALSE_LITERALS, TRUE_LITERALS
from core.types import TypedValue

_SEPARATOR_PATTERN = re.compile(r"[.,]")
_COMMA_DECIMAL_PATTERN = re.compile(r"^\s*([+-]?)(\d*)(?:,(\d*))?\s*$")
_DIGIT_PATTERN = re.compile(r"\d")
_DAY_FIRST_OPTIONS = (True, False)
_CLOCK_SEPARATOR = ":"
_REFERENCE_DEFAULTS = (datetime(2000, 1, 1), datetime(2001, 2, 2))


def coerce_value(raw: str) -> TypedValue:
    """Infer the most specific typed value for a token.

    Args:
        raw: Cleaned token text.

    Returns:
        Number, DateTime, Boolean or Text value, first match wins.
    """
    number = parse_number(raw)
    if number is not None:
        return TypedValue.number(number)
    timestamp = parse_datetime(raw)
    if timestamp is not None:
        return TypedValue.timestamp(timestamp)
    flag = parse_boolean(raw)
    if flag is not None:
        return TypedValue.boolean(flag)
    return TypedValue.text(raw)


def parse_number(raw: str) -> float | None:
    """Parse a decimal number written with either locale convention.

    ``1.234,56`` and ``1,234.56`` both give 1234.56. A single separator
    followed by exactly three digits after a short leading group is read
    as a thousands separator, so ``1,234`` gives 1234 while ``12,34``
    gives 12.34.

    Args:
        raw: Token text.

    Returns:
        Parsed float, or None when the token is not a number.
    """
    if not raw:
        return None
    normalized = _normalize_separators(raw)
    match = _COMMA_DECIMAL_PATTERN.match(normalized)
    if match is None:
        return None
    sign, integral, fraction = match.group(1), match.group(2), match.group(3) or ""
    if not integral and not fraction:
        return None
    return float(f"{sign}{integral or '0'}.{fraction or '0'}")


def _normalize_separators(raw: str) -> str:
    """Rewrite a token so that at most one comma marks the decimal part.

    Args:
        raw: Token text.

    Returns:
        Token with thousands groups joined and ``,`` as decimal mark.
    """
    number = raw
    segments = _SEPARATOR_PATTERN.split(number)
    if len(segments) > 2:
        number = "".join(segments[:-1]) + "," + segments[-1]
    number = number.replace(".", ",")
    groups = number.split(",")
    if len(groups[0]) < 4 and len(groups[-1]) == 3:
        number = number.replace(",", "")
    return number


def parse_datetime(raw: str) -> datetime | None:
    """Parse a timestamp, ISO-8601 first, then day-first and month-first.

    ISO input is tried on its own because a day-first parse would read
    ``2024-03-12`` as the 3rd of December.

    Args:
        raw: Token text.

    Returns:
        Naive timestamp (UTC when the token carried an offset), or None.
    """
    if not _DIGIT_PATTERN.search(raw):
        return None
    try:
        return _naive_utc(date_parser.isoparse(raw))
    except (ValueError, OverflowError):
        pass
    for day_first in _DAY_FIRST_OPTIONS:
        try:
            parsed = _parse_flexible(raw, day_first)
        except (ValueError, OverflowError):
            continue
        if parsed is not None:
            return _naive_utc(parsed)
    return None


def _parse_flexible(raw: str, day_first: bool) -> datetime | None:
    """Parse a free-form date that spells out its own calendar date.

    Clock-style tokens keep today's date. Other tokens are parsed against
    two different default dates and rejected when year, month or day
    came from the default, so ``3rd`` or ``2 of 3`` stay text.

    Raises:
        ValueError: If dateutil cannot parse the token.
        OverflowError: If a parsed field is out of range.
    """
    if _CLOCK_SEPARATOR in raw:
        return date_parser.parse(raw, dayfirst=day_first)
    first, second = (
        date_parser.parse(raw, dayfirst=day_first, default=default)
        for default in _REFERENCE_DEFAULTS
    )
    if first.date() != second.date():
        return None
    return first


def _naive_utc(parsed: datetime) -> datetime:
    if parsed.tzinfo is None:
        return parsed
    return parsed.astimezone(timezone.utc).replace(tzinfo=None)


def parse_boolean(raw: str) -> bool | None:
    """Map German and English yes/no literals onto booleans.

    Args:
        raw: Token text.

    Returns:
        True or False for a known literal, None otherwise.
    """
    lowered = raw.lower()
    if lowered in TRUE_LITERALS:
        return True
    if lowered in FALSE_LITERALS:
        return False
    return None
