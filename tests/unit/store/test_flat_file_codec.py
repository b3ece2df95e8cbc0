"""Unit tests for the flat-file record codec."""

from __future__ import annotations

from datetime import datetime

from core.types import TypedValue
from store.flat_file_codec import decode_record, encode_record


def test_encode_record_renders_typed_values() -> None:
    """Each key should become one line with pipe-separated values."""
    record = {
        "title": (TypedValue.text("Hi"),),
        "price": (TypedValue.number(1234.56), TypedValue.number(7)),
        "available": (TypedValue.boolean(True),),
        "seen": (TypedValue.timestamp(datetime(2024, 3, 12, 8, 30)),),
    }

    encoded = encode_record(record)

    assert encoded == (
        "title = Hi\n"
        "price = 1234.56|7\n"
        "available = true\n"
        "seen = 2024-03-12T08:30:00\n"
    )


def test_decode_record_reproduces_encoded_text_values() -> None:
    """Decoding should return the rendered text of every value in order."""
    record = {
        "title": (TypedValue.text("Hi"), TypedValue.text("there")),
        "price": (TypedValue.number(12.5),),
        "available": (TypedValue.boolean(False),),
    }

    decoded = decode_record(encode_record(record))

    assert decoded == {
        "title": ("Hi", "there"),
        "price": ("12.5",),
        "available": ("false",),
    }


def test_decode_record_yields_single_empty_value_for_empty_right_part() -> None:
    """An empty value part should decode to one empty string."""
    assert decode_record("note = \n") == {"note": ("",)}


def test_decode_record_skips_malformed_lines() -> None:
    """Lines without a separator should not stop decoding."""
    decoded = decode_record("title = Hi\nthis line is damaged\nprice = 3\n")

    assert decoded == {"title": ("Hi",), "price": ("3",)}


def test_decode_record_splits_only_on_first_separator() -> None:
    """Values containing '=' should be kept whole."""
    decoded = decode_record("formula = a=b|c\n")

    assert decoded == {"formula": ("a=b", "c")}


def test_decode_record_tolerates_windows_line_endings() -> None:
    """Carriage returns should be trimmed from keys and values."""
    assert decode_record("title = Hi\r\nid = 7\r\n") == {"title": ("Hi",), "id": ("7",)}


def test_decode_record_splits_key_containing_separator() -> None:
    """Keys containing '=' are split at their first '=' when decoded."""
    decoded = decode_record(encode_record({"a=b": (TypedValue.text("v"),)}))

    assert decoded == {"a": ("b = v",)}
