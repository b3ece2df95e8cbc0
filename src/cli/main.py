"""Warehouse CLI entry points.
This module exposes store, dig, show and coerce commands.
It maps argparse commands onto provider and transform calls.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from dataclasses import replace
from pathlib import Path
from typing import Any, Sequence

from core.config import WarehouseConfig
from core.errors import WarehouseError, WarehouseQueryPatternError
from core.logging_config import configure_logging
from ingest.input_reader import read_raw_records
from store.filesystem_provider import FilesystemWarehouseProvider
from transforms.value_coercion import coerce_value


def build_parser() -> argparse.ArgumentParser:
    """Build the top-level CLI parser.

    Returns:
        Configured argument parser.
    """
    parser = argparse.ArgumentParser(prog="warehouse", description="Crawl record warehouse")
    parser.add_argument(
        "--storage-folder",
        help="Override WAREHOUSE_STORAGE_FOLDER for this command",
    )
    parser.add_argument("--verbose", action="store_true", help="Emit debug log events")
    subparsers = parser.add_subparsers(dest="command", required=True)
    _add_store_command(subparsers)
    _add_dig_command(subparsers)
    _add_show_command(subparsers)
    _add_coerce_command(subparsers)
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Run the warehouse CLI.

    Args:
        argv: Optional argument vector.

    Returns:
        Process exit code.
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(logging.DEBUG if args.verbose else logging.INFO)
    if args.command == "coerce":
        return _run_coerce_command(args)
    try:
        config = _build_config(args.storage_folder, getattr(args, "strict", False))
        provider = FilesystemWarehouseProvider(config)
        if args.command == "store":
            return _run_store_command(provider, args)
        if args.command == "dig":
            return _run_dig_command(provider, args)
        if args.command == "show":
            return _run_show_command(provider, args)
    except WarehouseQueryPatternError as error:
        print(f"error: {error}", file=sys.stderr)
        return 2
    except WarehouseError as error:
        print(f"error: {error}", file=sys.stderr)
        return 1
    parser.error(f"Unsupported command: {args.command}")
    return 2


def _build_config(storage_folder: str | None, strict: bool) -> WarehouseConfig:
    """Build config with optional command-line overrides.

    Args:
        storage_folder: Optional storage folder override.
        strict: Force strict identity handling.

    Returns:
        Runtime configuration.
    """
    config = WarehouseConfig.from_env()
    if storage_folder:
        config = replace(config, storage_folder=Path(storage_folder).expanduser().resolve())
    if strict:
        config = replace(config, strict_identity=True)
    return config


def _run_store_command(provider: FilesystemWarehouseProvider, args: argparse.Namespace) -> int:
    """Handle store command.

    Args:
        provider: Storage provider.
        args: Parsed CLI args.

    Returns:
        Exit code.
    """
    for record in read_raw_records(args.source):
        result = provider.store_information(record)
        if result.dropped:
            status = "dropped"
        else:
            status = "changed" if result.changed else "unchanged"
        print(f"{result.natural_id or '-'}\t{result.fingerprint}\t{status}")
    return 0


def _run_dig_command(provider: FilesystemWarehouseProvider, args: argparse.Namespace) -> int:
    """Handle dig command.

    Args:
        provider: Storage provider.
        args: Parsed CLI args.

    Returns:
        Exit code.
    """
    query = _parse_query_fields(args.field)
    for record in provider.dig_information(query):
        print(json.dumps(_record_payload(record), ensure_ascii=False, sort_keys=True))
    return 0


def _run_show_command(provider: FilesystemWarehouseProvider, args: argparse.Namespace) -> int:
    """Handle show command.

    Args:
        provider: Storage provider.
        args: Parsed CLI args.

    Returns:
        Exit code, 1 when no record is stored under the id.
    """
    record = provider.load_information(args.natural_id)
    if record is None:
        print(f"error: no record stored under '{args.natural_id}'", file=sys.stderr)
        return 1
    print(json.dumps(_record_payload(record), ensure_ascii=False, indent=2, sort_keys=True))
    return 0


def _run_coerce_command(args: argparse.Namespace) -> int:
    """Handle coerce command.

    Args:
        args: Parsed CLI args.

    Returns:
        Exit code.
    """
    for token in args.tokens:
        value = coerce_value(token)
        print(f"{value.kind.value}\t{value.render()}")
    return 0


def _parse_query_fields(fields: Sequence[str]) -> dict[str, list[str]]:
    """Group ``KEY=PATTERN`` arguments by key."""
    query: dict[str, list[str]] = {}
    for item in fields:
        key, _, pattern = item.partition("=")
        query.setdefault(key.strip(), []).append(pattern)
    return query


def _query_field(value: str) -> str:
    if "=" not in value or not value.partition("=")[0].strip():
        raise argparse.ArgumentTypeError(f"expected KEY=PATTERN, got '{value}'")
    return value


def _record_payload(record: dict[str, tuple[str, ...]]) -> dict[str, list[str]]:
    return {key: list(values) for key, values in record.items()}


def _add_store_command(subparsers: Any) -> None:
    """Register store subcommand."""
    parser = subparsers.add_parser("store", help="Store raw records from JSON/JSONL/YAML")
    parser.add_argument("source", help="Record file or directory")
    parser.add_argument(
        "--strict",
        action="store_true",
        help="Fail on records without natural id instead of dropping them",
    )


def _add_dig_command(subparsers: Any) -> None:
    """Register dig subcommand."""
    parser = subparsers.add_parser("dig", help="Find stored records by regex field patterns")
    parser.add_argument(
        "--field",
        action="append",
        required=True,
        type=_query_field,
        metavar="KEY=PATTERN",
        help="Field pattern; repeat for alternatives",
    )


def _add_show_command(subparsers: Any) -> None:
    """Register show subcommand."""
    parser = subparsers.add_parser("show", help="Print one stored record")
    parser.add_argument("natural_id", help="Natural id of the record")


def _add_coerce_command(subparsers: Any) -> None:
    """Register coerce subcommand."""
    parser = subparsers.add_parser("coerce", help="Show the inferred type of tokens")
    parser.add_argument("tokens", nargs="+", help="Raw tokens to coerce")
