"""
Scan use case — discover every project under a directory.

Ties together settings, the locator and the project factory, and
keeps a record of files that were skipped and why.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path

from ewproj.core.config.loader import Settings
from ewproj.core.services.project_factory import create_projects_from
from ewproj.core.services.project_file import Project

logger = logging.getLogger(__name__)


@dataclass
class SkippedFile:
    """A candidate project file that failed to load."""

    path: Path
    reason: str

    def to_dict(self) -> dict:
        return {"path": str(self.path), "reason": self.reason}


def project_to_dict(project: Project) -> dict:
    return {
        "name": project.name,
        "path": str(project.path),
        "configurations": [c.model_dump(mode="json") for c in project.configurations],
    }


@dataclass
class ScanResult:
    """Result of scanning a directory for projects."""

    directory: Path | None = None
    recursive: bool = True
    projects: list[Project] = field(default_factory=list)
    skipped: list[SkippedFile] = field(default_factory=list)
    error: str | None = None

    def to_dict(self) -> dict:
        if self.error:
            return {"error": self.error}

        return {
            "directory": str(self.directory),
            "recursive": self.recursive,
            "total": len(self.projects),
            "projects": [project_to_dict(p) for p in self.projects],
            "skipped": [s.to_dict() for s in self.skipped],
        }


def run_scan(
    directory: Path,
    recursive: bool | None = None,
    settings: Settings | None = None,
) -> ScanResult:
    """Scan ``directory`` for project files.

    Args:
        directory: Root of the scan.
        recursive: Overrides ``settings.scan.recursive`` when given.
        settings: Loaded settings (defaults if None).

    Returns:
        ScanResult with the loaded projects and the skipped files.
    """
    settings = settings or Settings()
    if recursive is None:
        recursive = settings.scan.recursive

    result = ScanResult(directory=directory, recursive=recursive)

    if not directory.is_dir():
        result.error = f"Not a directory: {directory}"
        return result

    def _skip(path: Path, exc: Exception) -> None:
        result.skipped.append(SkippedFile(path=path, reason=str(exc)))

    result.projects = create_projects_from(
        directory,
        recursive=recursive,
        extension=settings.scan.extension,
        exclude=settings.scan.exclude,
        on_error=_skip,
    )
    return result
