"""Unit tests for record normalization."""

from __future__ import annotations

from core.types import TypedValue
from transforms.record_normalization import clean_text, normalize_key, normalize_record


def _identity(text: str) -> str:
    return text


def test_normalize_key_strips_first_namespace_segment() -> None:
    """Only the first dot segment should be removed."""
    assert normalize_key("page.meta.title") == "meta.title"


def test_normalize_key_keeps_plain_keys() -> None:
    """Keys without dots should stay unchanged."""
    assert normalize_key("title") == "title"


def test_clean_text_removes_control_characters_and_trims() -> None:
    """Control characters and surrounding whitespace should be removed."""
    assert clean_text(" \tHel\x00lo\x07 \n", _identity) == "Hello"


def test_normalize_record_strips_markup_and_coerces_values() -> None:
    """Values should be cleaned, then coerced in order."""
    record = {"page.title": ["<b>Hi</b>  "], "page.price": ["1.234,56", "ja"]}

    normalized = normalize_record(record)

    assert normalized == {
        "title": (TypedValue.text("Hi"),),
        "price": (TypedValue.number(1234.56), TypedValue.boolean(True)),
    }


def test_normalize_record_uses_injected_markup_stripper() -> None:
    """A caller-supplied stripper should replace the default."""
    record = {"title": ["<b>kept</b>"]}

    normalized = normalize_record(record, _identity)

    assert normalized["title"] == (TypedValue.text("<b>kept</b>"),)


def test_normalize_record_returns_empty_mapping_for_empty_record() -> None:
    """A record without keys should normalize to an empty mapping."""
    assert normalize_record({}) == {}


def test_normalize_record_later_key_wins_on_collision() -> None:
    """Keys collapsing to the same name keep the later values."""
    record = {"a.title": ["first"], "b.title": ["second"]}

    normalized = normalize_record(record)

    assert normalized == {"title": (TypedValue.text("second"),)}
