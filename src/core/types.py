"""Shared typed models.

This module defines the typed value union and record models used by
transforms, the flat-file store, and the SDK surface.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import Mapping, Sequence, Union

RawRecord = Mapping[str, Sequence[str]]
"""Field name to raw text values, as produced by scrapers."""

StoredRecord = dict[str, tuple[str, ...]]
"""Decoded flat-file record with text-only values."""

PrimitiveValue = Union[float, datetime, bool, str]


class ValueKind(Enum):
    """Active tag of a ``TypedValue``."""

    NUMBER = "number"
    DATETIME = "datetime"
    BOOLEAN = "boolean"
    TEXT = "text"


@dataclass(frozen=True)
class TypedValue:
    """Tagged union of the primitive types inferred from free text.

    Attributes:
        kind: Active tag.
        value: Python value matching the tag.
    """

    kind: ValueKind
    value: PrimitiveValue

    @classmethod
    def number(cls, value: float) -> "TypedValue":
        return cls(kind=ValueKind.NUMBER, value=float(value))

    @classmethod
    def timestamp(cls, value: datetime) -> "TypedValue":
        return cls(kind=ValueKind.DATETIME, value=value)

    @classmethod
    def boolean(cls, value: bool) -> "TypedValue":
        return cls(kind=ValueKind.BOOLEAN, value=bool(value))

    @classmethod
    def text(cls, value: str) -> "TypedValue":
        return cls(kind=ValueKind.TEXT, value=value)

    def render(self) -> str:
        """Render the value in its canonical storage text form.

        Returns:
            Decimal text for numbers, ISO-8601 for timestamps,
            ``true``/``false`` for booleans and the raw text otherwise.
        """
        if self.kind is ValueKind.NUMBER:
            return _render_number(float(self.value))
        if self.kind is ValueKind.DATETIME:
            return self.value.isoformat()  # type: ignore[union-attr]
        if self.kind is ValueKind.BOOLEAN:
            return "true" if self.value else "false"
        return str(self.value)


NormalizedRecord = dict[str, tuple[TypedValue, ...]]
"""Namespace-stripped keys mapped to coerced values."""


@dataclass(frozen=True)
class RecordIdentity:
    """Identity derived from a normalized record.

    Attributes:
        fingerprint: Content hash that changes whenever record content changes.
        natural_id: First value under a key ending in ``id``, or empty.
    """

    fingerprint: str
    natural_id: str


@dataclass(frozen=True)
class StoreResult:
    """Outcome of storing one record.

    Attributes:
        natural_id: Natural id used as file name, empty when dropped.
        fingerprint: Content fingerprint of the normalized record.
        path: Written file path, or None when the record was dropped.
        changed: Whether the stored file content differs from before.
    """

    natural_id: str
    fingerprint: str
    path: Path | None
    changed: bool

    @property
    def dropped(self) -> bool:
        """Return whether the record was dropped for lack of a natural id."""
        return self.path is None


def _render_number(value: float) -> str:
    """Render a float without a trailing ``.0`` for integral values."""
    if value.is_integer():
        return str(int(value))
    return repr(value)
