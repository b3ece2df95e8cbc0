"""Unit tests for CLI command handling."""

from __future__ import annotations

import json

from cli.main import main
from tests.fixture_paths import fixture_path, records_fixture


def test_cli_store_prints_status_per_record(tmp_path, capsys) -> None:
    """CLI store should print one status line per input record."""
    args = ["--storage-folder", str(tmp_path), "store", str(records_fixture("pages.jsonl"))]

    exit_code = main(args)
    lines = capsys.readouterr().out.strip().splitlines()

    assert exit_code == 0
    assert [line.split("\t")[2] for line in lines] == ["changed", "changed", "dropped"]
    assert (tmp_path / "7.crawl").exists()


def test_cli_store_strict_fails_on_missing_identifier(tmp_path, capsys) -> None:
    """Strict store should fail when a record has no natural id."""
    args = [
        "--storage-folder",
        str(tmp_path),
        "store",
        str(records_fixture("pages.jsonl")),
        "--strict",
    ]

    exit_code = main(args)

    assert exit_code == 1
    assert "no natural id" in capsys.readouterr().err


def test_cli_dig_prints_matching_records_as_json(tmp_path, capsys) -> None:
    """CLI dig should print matches as JSON lines."""
    main(["--storage-folder", str(tmp_path), "store", str(records_fixture("listing.json"))])
    capsys.readouterr()

    exit_code = main(["--storage-folder", str(tmp_path), "dig", "--field", "available=^true$"])
    lines = capsys.readouterr().out.strip().splitlines()

    assert exit_code == 0
    assert [json.loads(line)["id"] for line in lines] == [["L-100"]]


def test_cli_dig_reports_invalid_pattern(tmp_path, capsys) -> None:
    """CLI dig should exit with code 2 for malformed patterns."""
    exit_code = main(["--storage-folder", str(tmp_path), "dig", "--field", "title=(oops"])

    assert exit_code == 2
    assert "Invalid query pattern" in capsys.readouterr().err


def test_cli_show_prints_stored_record(tmp_path, capsys) -> None:
    """CLI show should print one stored record as JSON."""
    main(["--storage-folder", str(tmp_path), "store", str(records_fixture("nested/product.yaml"))])
    capsys.readouterr()

    exit_code = main(["--storage-folder", str(tmp_path), "show", "P-1"])
    payload = json.loads(capsys.readouterr().out)

    assert exit_code == 0
    assert payload["released"] == ["2024-03-12T00:00:00"]


def test_cli_show_returns_one_for_unknown_record(tmp_path, capsys) -> None:
    """CLI show should fail for ids without a stored record."""
    exit_code = main(["--storage-folder", str(tmp_path), "show", "missing"])

    assert exit_code == 1
    assert "missing" in capsys.readouterr().err


def test_cli_store_reports_ingest_errors(tmp_path, capsys) -> None:
    """CLI store should report unreadable input files."""
    args = ["--storage-folder", str(tmp_path), "store", str(fixture_path("invalid/broken.yaml"))]

    exit_code = main(args)

    assert exit_code == 1
    assert "YAML" in capsys.readouterr().err


def test_cli_coerce_prints_kind_and_rendering(capsys) -> None:
    """CLI coerce should show how each token is typed."""
    exit_code = main(["coerce", "1.234,56", "ja", "hello"])
    lines = capsys.readouterr().out.strip().splitlines()

    assert exit_code == 0
    assert lines == ["number\t1234.56", "boolean\ttrue", "text\thello"]
