"""Tests for path allocation and manifest file I/O."""

from __future__ import annotations

from pathlib import Path

import pytest

from tests.conftest import write_manifest
from wingetctl.domain.packages import ManifestError
from wingetctl.infrastructure.filesystem import (
    read_manifest,
    resolve_unique_path,
    write_text_file,
)


class TestResolveUniquePath:
    def test_free_base_path(self, tmp_path: Path) -> None:
        assert resolve_unique_path(tmp_path, "backup", ".json") == tmp_path / "backup.json"

    def test_existing_base_gets_suffix_one(self, tmp_path: Path) -> None:
        (tmp_path / "backup.json").touch()
        assert resolve_unique_path(tmp_path, "backup", ".json") == tmp_path / "backup_1.json"

    def test_sequence_when_each_result_is_created(self, tmp_path: Path) -> None:
        seen: list[str] = []
        for _ in range(4):
            path = resolve_unique_path(tmp_path, "backup", ".json")
            assert not path.exists()
            path.touch()
            seen.append(path.name)
        assert seen == ["backup.json", "backup_1.json", "backup_2.json", "backup_3.json"]

    def test_fills_first_gap(self, tmp_path: Path) -> None:
        (tmp_path / "backup.json").touch()
        (tmp_path / "backup_2.json").touch()
        assert resolve_unique_path(tmp_path, "backup", ".json").name == "backup_1.json"

    def test_descriptive_suffix_extension(self, tmp_path: Path) -> None:
        (tmp_path / "pc_non_winget_apps.txt").touch()
        path = resolve_unique_path(tmp_path, "pc", "_non_winget_apps.txt")
        assert path.name == "pc_1_non_winget_apps.txt"

    def test_directory_counts_as_existing(self, tmp_path: Path) -> None:
        (tmp_path / "backup.json").mkdir()
        assert resolve_unique_path(tmp_path, "backup", ".json").name == "backup_1.json"

    def test_does_not_create_file(self, tmp_path: Path) -> None:
        path = resolve_unique_path(tmp_path, "backup", ".json")
        assert not path.exists()

    def test_missing_directory_is_not_an_error(self, tmp_path: Path) -> None:
        path = resolve_unique_path(tmp_path / "nope", "backup", ".json")
        assert path == tmp_path / "nope" / "backup.json"

    def test_relative_directory(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.chdir(tmp_path)
        Path("backup.json").touch()
        assert resolve_unique_path(".", "backup", ".json") == Path("backup_1.json")

    def test_empty_base_name_rejected(self, tmp_path: Path) -> None:
        with pytest.raises(ValueError):
            resolve_unique_path(tmp_path, "", ".json")

    def test_deterministic(self, tmp_path: Path) -> None:
        (tmp_path / "backup.json").touch()
        first = resolve_unique_path(tmp_path, "backup", ".json")
        assert resolve_unique_path(tmp_path, "backup", ".json") == first


class TestReadManifest:
    def test_reads_records(self, tmp_path: Path) -> None:
        path = write_manifest(tmp_path / "m.json", {"winget": ["A", "B"]})
        assert [r.identifier for r in read_manifest(path)] == ["A", "B"]

    def test_utf8_bom_accepted(self, tmp_path: Path) -> None:
        path = write_manifest(tmp_path / "m.json", {"winget": ["A"]})
        path.write_bytes(b"\xef\xbb\xbf" + path.read_bytes())
        assert [r.identifier for r in read_manifest(path)] == ["A"]

    def test_malformed(self, tmp_path: Path) -> None:
        path = tmp_path / "m.json"
        path.write_text("{}", encoding="utf-8")
        with pytest.raises(ManifestError):
            read_manifest(path)

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(OSError):
            read_manifest(tmp_path / "missing.json")


class TestWriteTextFile:
    def test_creates_parents(self, tmp_path: Path) -> None:
        path = tmp_path / "a" / "b" / "out.txt"
        write_text_file(path, "hello")
        assert path.read_text(encoding="utf-8") == "hello"
