"""Unit tests for approximate query matching."""

from __future__ import annotations

import pytest

from core.errors import WarehouseQueryPatternError
from store.query_matching import compile_query, match_information, matches_query


def test_match_information_finds_value_case_insensitively() -> None:
    """A lower-case query should match a capitalized stored value."""
    assert match_information({"title": ["hi"]}, {"title": ("Hi",)}) is True


def test_match_information_accepts_namespaced_target_keys() -> None:
    """Query keys should match stored keys ending in '.key'."""
    assert match_information({"title": ["widget"]}, {"page.title": ("Big Widget",)}) is True


def test_match_information_finds_substrings() -> None:
    """Patterns should match anywhere inside the stored value."""
    assert match_information({"name": ["idg"]}, {"name": ("Widget",)}) is True


def test_match_information_supports_regex_patterns() -> None:
    """Query values should be interpreted as regular expressions."""
    assert match_information({"price": [r"^12\d$"]}, {"price": ("125",)}) is True


def test_match_information_ignores_parentheses_in_target() -> None:
    """Parentheses should be removed from stored values before matching."""
    assert match_information({"name": ["widget large"]}, {"name": ("Widget (large)",)}) is True


def test_match_information_is_any_across_keys() -> None:
    """One matching key should be enough for a match."""
    query = {"title": ["absent"], "color": ["blue"]}
    target = {"title": ("Hi",), "color": ("red", "blue")}

    assert match_information(query, target) is True


def test_match_information_rejects_missing_target_key() -> None:
    """Query keys absent from the target should not match."""
    assert match_information({"color": ["red"]}, {"title": ("red",)}) is False


def test_match_information_returns_false_for_empty_query() -> None:
    """An empty query has no clause that could match."""
    assert match_information({}, {"title": ("Hi",)}) is False


def test_compile_query_raises_for_invalid_pattern() -> None:
    """Malformed regex values should raise a recoverable query error."""
    with pytest.raises(WarehouseQueryPatternError, match="title"):
        compile_query({"title": ["(unclosed"]})


def test_matches_query_reuses_compiled_query() -> None:
    """A compiled query should be reusable across targets."""
    compiled = compile_query({"title": ["hi"]})

    results = [matches_query(compiled, {"title": (value,)}) for value in ("Hi", "Bye")]

    assert results == [True, False]
