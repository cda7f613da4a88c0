"""
Project factory — turn paths and directories into Project objects.

``load_project`` is strict and raises. ``create_project_from`` and
``create_projects_from`` are best-effort: a broken file is logged,
reported through the optional ``on_error`` callback and skipped, so a
scan over many files never aborts because of one bad file.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from pathlib import Path

from ewproj.core.services.locator import PROJECT_FILE_EXTENSION, find_project_files
from ewproj.core.services.project_file import EwpFile, Project

logger = logging.getLogger(__name__)

ErrorCallback = Callable[[Path, Exception], None]


def load_project(path: Path | str) -> Project:
    """Load a single project, raising on failure.

    Raises:
        NotAFileError: If the path is missing or not a regular file.
        ProjectError: If the file exists but is not a valid project.
    """
    return EwpFile(path)


def create_project_from(path: Path | str, on_error: ErrorCallback | None = None) -> Project | None:
    """Load a single project, or return None if it cannot be loaded.

    Args:
        path: Candidate project file.
        on_error: Called with (path, exception) when the file exists
            but fails to load. Not called for missing paths.

    Returns:
        The project, or None.
    """
    path = Path(path)
    if not path.is_file():
        logger.debug("Not a project file candidate: %s", path)
        return None

    try:
        return EwpFile(path)
    except Exception as e:
        logger.warning("Failed to load project from %s: %s", path, e)
        if on_error is not None:
            on_error(path, e)
        return None


def collect_projects(
    paths: Iterable[Path],
    on_error: ErrorCallback | None = None,
) -> list[Project]:
    """Load every path that loads, in the given order, dropping the rest."""
    projects: list[Project] = []
    for path in paths:
        project = create_project_from(path, on_error=on_error)
        if project is not None:
            projects.append(project)
    return projects


def create_projects_from(
    directory: Path | str,
    recursive: bool = True,
    extension: str = PROJECT_FILE_EXTENSION,
    exclude: Iterable[str] = (),
    on_error: ErrorCallback | None = None,
) -> list[Project]:
    """Discover and load all projects under a directory.

    Never raises for bad files or a missing directory; those simply
    contribute nothing to the result. Order follows the locator's
    enumeration order.
    """
    paths = find_project_files(Path(directory), recursive, extension, exclude)
    projects = collect_projects(paths, on_error=on_error)
    logger.info(
        "Loaded %d of %d project files under %s", len(projects), len(paths), directory
    )
    return projects
