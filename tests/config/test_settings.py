"""Tests for WingetctlSettings — unified settings with TOML source."""

from pathlib import Path

import click
import pytest

from wingetctl.config.settings import WingetctlSettings


class TestDefaults:
    def test_all_defaults(self, tmp_path: Path) -> None:
        settings = WingetctlSettings.from_cli(start=tmp_path)
        assert settings.config_path is None
        assert settings.json_output is False
        assert settings.verbose is False
        assert settings.winget.executable == "winget"
        assert settings.export.base_name == "winget_packages"
        assert settings.restore.log_name == "winget_import"

    def test_frozen(self, tmp_path: Path) -> None:
        settings = WingetctlSettings.from_cli(start=tmp_path)
        with pytest.raises(Exception):
            settings.quiet = True  # type: ignore[misc]


class TestTomlSource:
    def test_loads_sections(self, tmp_path: Path) -> None:
        (tmp_path / "wingetctl.toml").write_text(
            '[winget]\nexecutable = "winget.exe"\npin_source = false\n'
            '[export]\nbase_name = "desktop"\n'
            '[restore]\nlog_name = "restore"\n'
        )
        settings = WingetctlSettings.from_cli(start=tmp_path)
        assert settings.winget.executable == "winget.exe"
        assert settings.winget.pin_source is False
        assert settings.winget.accept_source_agreements is True  # default kept
        assert settings.export.base_name == "desktop"
        assert settings.restore.log_name == "restore"
        assert settings.config_path == tmp_path / "wingetctl.toml"

    def test_discovered_from_subdirectory(self, tmp_path: Path) -> None:
        (tmp_path / "wingetctl.toml").write_text('[export]\ndirectory = "D:/backups"\n')
        nested = tmp_path / "a" / "b"
        nested.mkdir(parents=True)
        assert WingetctlSettings.from_cli(start=nested).export.directory == "D:/backups"

    def test_explicit_config_path(self, tmp_path: Path) -> None:
        custom = tmp_path / "custom" / "my.toml"
        custom.parent.mkdir()
        custom.write_text('[export]\nbase_name = "custom"\n')
        settings = WingetctlSettings.from_cli(config_path=str(custom), start=tmp_path)
        assert settings.export.base_name == "custom"
        assert settings.config_path == custom

    def test_missing_explicit_path_ignored(self, tmp_path: Path) -> None:
        settings = WingetctlSettings.from_cli(config_path=str(tmp_path / "nope.toml"))
        assert settings.config_path is None

    def test_invalid_toml(self, tmp_path: Path) -> None:
        (tmp_path / "wingetctl.toml").write_text("[export\n")
        with pytest.raises(click.ClickException, match="Invalid TOML"):
            WingetctlSettings.from_cli(start=tmp_path)


class TestPriority:
    def test_env_overrides_toml(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        (tmp_path / "wingetctl.toml").write_text('[export]\nbase_name = "toml"\n')
        monkeypatch.setenv("WINGETCTL_EXPORT__BASE_NAME", "env")
        assert WingetctlSettings.from_cli(start=tmp_path).export.base_name == "env"

    def test_cli_flags_override_toml(self, tmp_path: Path) -> None:
        (tmp_path / "wingetctl.toml").write_text("quiet = true\n")
        assert WingetctlSettings.from_cli(start=tmp_path, quiet=False).quiet is False

    def test_cli_flags(self, tmp_path: Path) -> None:
        settings = WingetctlSettings.from_cli(start=tmp_path, json_output=True, verbose=True)
        assert settings.json_output is True
        assert settings.verbose is True
