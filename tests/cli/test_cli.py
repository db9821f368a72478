"""CLI tests for the stagefs commands."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from typer.testing import CliRunner

from stagefs.cli import app

runner = CliRunner()


def test_ls_prints_sorted_files(sample_tree: Path) -> None:
    result = runner.invoke(app, ["ls", str(sample_tree)])

    base = sample_tree.resolve()
    assert result.exit_code == 0
    assert result.stdout.splitlines() == [
        str(base / "d" / "e" / "z"),
        str(base / "d" / "y"),
        str(base / "x"),
    ]


def test_ls_json_with_directories(sample_tree: Path) -> None:
    result = runner.invoke(app, ["ls", str(sample_tree), "--dirs", "--json"])

    assert result.exit_code == 0
    listed = json.loads(result.stdout)
    assert str(sample_tree.resolve() / "d") in listed
    assert len(listed) == 5


def test_ls_missing_root(tmp_path: Path) -> None:
    result = runner.invoke(app, ["ls", str(tmp_path / "missing")])

    assert result.exit_code == 1


def test_hash_prints_hex_digest(tmp_path: Path) -> None:
    empty = tmp_path / "empty"
    empty.write_bytes(b"")

    result = runner.invoke(app, ["hash", str(empty)])

    assert result.exit_code == 0
    assert result.stdout.startswith("da39a3ee5e6b4b0d3255bfef95601890afd80709")


def test_hash_uses_configured_algorithm(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    empty = tmp_path / "empty"
    empty.write_bytes(b"")
    monkeypatch.setenv("STAGEFS_HASH_ALGORITHM", "md5")

    result = runner.invoke(app, ["hash", str(empty)])

    assert result.exit_code == 0
    assert result.stdout.startswith("d41d8cd98f00b204e9800998ecf8427e")


def test_hash_unsupported_algorithm(tmp_path: Path) -> None:
    empty = tmp_path / "empty"
    empty.write_bytes(b"")

    result = runner.invoke(app, ["hash", str(empty), "--algorithm", "nope"])

    assert result.exit_code == 1


def test_invalid_configuration_exits_with_2(
    sample_tree: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.setenv("STAGEFS_MAX_DEPTH", "zero")

    result = runner.invoke(app, ["ls", str(sample_tree)])

    assert result.exit_code == 2


def test_mv_renames(tmp_path: Path) -> None:
    src = tmp_path / "a.txt"
    dst = tmp_path / "b.txt"
    src.write_text("payload")

    result = runner.invoke(app, ["mv", str(src), str(dst)])

    assert result.exit_code == 0
    assert "RENAMED" in result.stdout
    assert dst.read_text() == "payload"


def test_mv_failure_exit_code(tmp_path: Path) -> None:
    result = runner.invoke(
        app, ["mv", str(tmp_path / "missing"), str(tmp_path / "b.txt")]
    )

    assert result.exit_code == 1
    assert "FAILED" in result.stdout


def test_rm_deletes_tree(sample_tree: Path) -> None:
    result = runner.invoke(app, ["rm", str(sample_tree)])

    assert result.exit_code == 0
    assert "DELETED" in result.stdout
    assert not sample_tree.exists()


def test_mkdir_with_parents(tmp_path: Path) -> None:
    folder = tmp_path / "a" / "b"

    result = runner.invoke(app, ["mkdir", str(folder), "--parents"])

    assert result.exit_code == 0
    assert folder.is_dir()


def test_mkdir_without_parents_fails(tmp_path: Path) -> None:
    result = runner.invoke(app, ["mkdir", str(tmp_path / "a" / "b")])

    assert result.exit_code == 1
    assert not (tmp_path / "a").exists()
