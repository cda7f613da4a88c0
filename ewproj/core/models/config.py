"""
Config model — one build configuration of a project (Debug, Release, ...).

Built from the ``<configuration>`` elements of an ``.ewp`` file by
``ewproj.core.services.config_parser``.
"""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, Field


class Config(BaseModel):
    """A named build configuration.

    Only the fields an editor integration needs are extracted: the
    toolchain, preprocessor defines and the include search paths.
    Everything else in the configuration is left in the XML.
    """

    name: str
    project_path: Path
    toolchain: str = ""
    debug: bool = False
    defines: list[str] = Field(default_factory=list)
    include_paths: list[Path] = Field(default_factory=list)
    pre_includes: list[Path] = Field(default_factory=list)
