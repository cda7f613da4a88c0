"""
Tests for use cases — scan and inspect results.
"""

from pathlib import Path

from ewproj.core.config.loader import ScanSettings, Settings
from ewproj.core.use_cases.inspect import inspect_project
from ewproj.core.use_cases.scan import run_scan


class TestRunScan:
    def test_records_skipped_files(self, write_ewp, tmp_path: Path):
        write_ewp("a.ewp", "Debug", "Release")
        write_ewp("b.ewp", content="<project><configuration>")

        result = run_scan(tmp_path)

        assert [p.name for p in result.projects] == ["a"]
        assert [s.path for s in result.skipped] == [tmp_path / "b.ewp"]
        assert result.skipped[0].reason.startswith("Cannot parse")

    def test_settings_drive_discovery(self, write_ewp, tmp_path: Path):
        write_ewp("a.ewp", "Debug")
        write_ewp("vendor/b.ewp", "Debug")
        write_ewp("src/c.ewp", "Debug")
        settings = Settings(scan=ScanSettings(exclude=["vendor"]))

        result = run_scan(tmp_path, settings=settings)
        assert [p.name for p in result.projects] == ["a", "c"]

        flat = run_scan(tmp_path, recursive=False, settings=settings)
        assert [p.name for p in flat.projects] == ["a"]
        assert flat.to_dict()["recursive"] is False

    def test_not_a_directory(self, tmp_path: Path):
        result = run_scan(tmp_path / "missing")
        assert result.error is not None
        assert result.to_dict() == {"error": result.error}


class TestInspectProject:
    def test_loaded(self, write_ewp):
        result = inspect_project(write_ewp("app.ewp", "Debug"))
        assert result.error is None
        assert result.project is not None
        assert result.to_dict()["configurations"][0]["name"] == "Debug"

    def test_not_found_vs_invalid(self, write_ewp, tmp_path: Path):
        missing = inspect_project(tmp_path / "missing.ewp")
        invalid = inspect_project(write_ewp("bad.ewp", content="<x/>"))

        assert missing.not_found is True
        assert invalid.not_found is False
        assert invalid.error.startswith("Invalid project")

    def test_configuration_lookup(self, write_ewp):
        path = write_ewp("app.ewp", "Debug", "Release")

        found = inspect_project(path, configuration="Release")
        assert found.configuration is not None
        assert found.to_dict()["configuration"]["name"] == "Release"

        absent = inspect_project(path, configuration="Profile")
        assert absent.configuration is None
        assert "available: Debug, Release" in absent.error
