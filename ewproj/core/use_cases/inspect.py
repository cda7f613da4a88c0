"""
Inspect use case — load one explicitly named project file.

Unlike a scan, the caller asked for this file, so the reason it could
not be loaded is reported: missing versus present-but-invalid.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from ewproj.core.errors import NotAFileError, ProjectError
from ewproj.core.models.config import Config
from ewproj.core.services.project_factory import load_project
from ewproj.core.services.project_file import Project
from ewproj.core.use_cases.scan import project_to_dict


@dataclass
class InspectResult:
    """Result of loading a single project."""

    path: Path
    project: Project | None = None
    configuration: Config | None = None
    not_found: bool = False
    error: str | None = None

    def to_dict(self) -> dict:
        if self.error:
            return {"error": self.error, "not_found": self.not_found}

        assert self.project is not None
        result = project_to_dict(self.project)
        if self.configuration is not None:
            result["configuration"] = self.configuration.model_dump(mode="json")
        return result


def inspect_project(path: Path, configuration: str | None = None) -> InspectResult:
    """Load ``path`` and optionally pick one configuration by name.

    Args:
        path: Project file to load.
        configuration: Name of a configuration to select.

    Returns:
        InspectResult; ``error`` is set when the project or the
        requested configuration is unavailable.
    """
    result = InspectResult(path=path)

    try:
        result.project = load_project(path)
    except NotAFileError as e:
        result.not_found = True
        result.error = str(e)
        return result
    except ProjectError as e:
        result.error = f"Invalid project: {e}"
        return result

    if configuration is not None:
        result.configuration = result.project.find_configuration(configuration)
        if result.configuration is None:
            available = ", ".join(c.name for c in result.project.configurations) or "none"
            result.error = (
                f"No configuration '{configuration}' in {result.project.name} "
                f"(available: {available})"
            )

    return result
