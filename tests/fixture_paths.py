"""Shared fixture helpers for tests."""

from __future__ import annotations

from pathlib import Path

FIXTURES_ROOT = Path(__file__).resolve().parent / "fixtures"


def fixture_path(relative_path: str) -> Path:
    """Resolve a path under tests/fixtures."""
    return FIXTURES_ROOT / relative_path


def records_fixture(name: str = "") -> Path:
    """Resolve a raw record fixture, or the record fixture directory."""
    return FIXTURES_ROOT / "records" / name if name else FIXTURES_ROOT / "records"
