"""Core constants used across warehouse modules.

This module centralizes storage format and coercion literals.
Keeping values here avoids magic literals in business logic.
"""

from __future__ import annotations

from pathlib import Path

DEFAULT_STORAGE_FOLDER = Path("CrawlingStorage")
STORAGE_FILE_SUFFIX = ".crawl"
STORAGE_FILE_ENCODING = "utf-8"
KEY_VALUE_SEPARATOR = " = "
VALUE_SEPARATOR = "|"
LINE_TERMINATOR = "\n"
NAMESPACE_SEPARATOR = "."
NATURAL_ID_SUFFIX = "id"
HASH_ALGORITHM = "sha256"
TRUE_LITERALS = frozenset({"true", "ja", "yes"})
FALSE_LITERALS = frozenset({"false", "nein", "no"})
STRIPPED_TARGET_CHARACTERS = "()"
SUPPORTED_RECORD_EXTENSIONS = (".json", ".jsonl", ".yaml", ".yml")
