"""
Tests for settings loading — ewproj.yml parsing and validation.
"""

import textwrap
from pathlib import Path

import pytest

from ewproj.core.config.loader import (
    Settings,
    SettingsError,
    find_settings_file,
    load_settings,
)


@pytest.fixture
def settings_yml(tmp_path: Path) -> Path:
    content = textwrap.dedent("""\
        scan:
          extension: .xml
          recursive: false
          exclude:
            - settings
            - Debug
        watch:
          interval: 0.5
    """)
    path = tmp_path / "ewproj.yml"
    path.write_text(content)
    return path


class TestLoadSettings:
    def test_defaults(self):
        settings = Settings()
        assert settings.scan.extension == ".ewp"
        assert settings.scan.recursive is True
        assert settings.scan.exclude == [".git"]
        assert settings.watch.interval == 2.0

    def test_load_file(self, settings_yml: Path):
        settings = load_settings(settings_yml)
        assert settings.scan.extension == ".xml"
        assert settings.scan.recursive is False
        assert settings.scan.exclude == ["settings", "Debug"]
        assert settings.watch.interval == 0.5

    def test_partial_file_keeps_defaults(self, tmp_path: Path):
        path = tmp_path / "ewproj.yml"
        path.write_text("scan:\n  recursive: false\n")
        settings = load_settings(path)
        assert settings.scan.recursive is False
        assert settings.scan.extension == ".ewp"

    def test_empty_file(self, tmp_path: Path):
        path = tmp_path / "ewproj.yml"
        path.write_text("")
        assert load_settings(path) == Settings()

    def test_no_file_found_uses_defaults(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
        isolated = tmp_path / "isolated"
        isolated.mkdir()
        monkeypatch.chdir(isolated)
        assert load_settings() == Settings()

    def test_explicit_missing_raises(self, tmp_path: Path):
        with pytest.raises(SettingsError, match="not found"):
            load_settings(tmp_path / "nope.yml")

    def test_invalid_yaml_raises(self, tmp_path: Path):
        path = tmp_path / "ewproj.yml"
        path.write_text(":: invalid: yaml: [")
        with pytest.raises(SettingsError, match="Invalid YAML"):
            load_settings(path)

    def test_non_mapping_raises(self, tmp_path: Path):
        path = tmp_path / "ewproj.yml"
        path.write_text("- just\n- a\n- list\n")
        with pytest.raises(SettingsError, match="Expected a YAML mapping"):
            load_settings(path)

    def test_bad_extension_raises(self, tmp_path: Path):
        path = tmp_path / "ewproj.yml"
        path.write_text("scan:\n  extension: ewp\n")
        with pytest.raises(SettingsError, match="Invalid settings"):
            load_settings(path)

    def test_non_positive_interval_raises(self, tmp_path: Path):
        path = tmp_path / "ewproj.yml"
        path.write_text("watch:\n  interval: 0\n")
        with pytest.raises(SettingsError, match="Invalid settings"):
            load_settings(path)


class TestFindSettingsFile:
    def test_find_in_current_dir(self, settings_yml: Path, tmp_path: Path):
        assert find_settings_file(tmp_path) == settings_yml.resolve()

    def test_find_in_parent_dir(self, settings_yml: Path, tmp_path: Path):
        subdir = tmp_path / "boards" / "nucleo"
        subdir.mkdir(parents=True)
        result = find_settings_file(subdir)
        assert result is not None
        assert result.parent == tmp_path.resolve()

    def test_nearest_file_wins(self, settings_yml: Path, tmp_path: Path):
        board = tmp_path / "boards" / "nucleo"
        board.mkdir(parents=True)
        (board / "ewproj.yml").write_text("scan:\n  recursive: false\n")
        assert find_settings_file(board / ".." / "nucleo") == (board / "ewproj.yml").resolve()
        assert find_settings_file(board.parent) == settings_yml.resolve()
