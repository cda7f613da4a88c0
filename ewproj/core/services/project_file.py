"""
Project documents — one ``.ewp`` file's parsed state.

``Project`` is the contract consumers depend on. ``EwpFile`` is the
implementation: it parses eagerly on construction and can reload itself
when the file changes on disk.

Construction and reload deliberately use different error channels:

    - construction raises — a project that cannot be loaded is useless;
    - reload returns a ReloadResult — a live project keeps its last
      good state when the file is temporarily broken (mid-save, bad merge).

The parsed tree and the configurations derived from it are kept in one
immutable snapshot. Reload builds a complete new snapshot first and then
swaps a single reference, so readers see either the old pair or the new
pair, never a mix.
"""

from __future__ import annotations

import logging
import threading
import xml.etree.ElementTree as ET
from abc import ABC, abstractmethod
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from ewproj.core.errors import (
    NotAFileError,
    ProjectError,
    ProjectReadError,
    UnexpectedRootTagError,
)
from ewproj.core.models.config import Config
from ewproj.core.services.config_parser import configs_from_xml
from ewproj.core.xml_tree import parse_xml

logger = logging.getLogger(__name__)

ROOT_TAG = "project"


class Project(ABC):
    """What a consumer (editor integration, CLI) can do with a project."""

    @property
    @abstractmethod
    def path(self) -> Path:
        """Location of the project file. Never changes."""

    @property
    @abstractmethod
    def configurations(self) -> Sequence[Config]:
        """Build configurations in document order (read-only)."""

    @property
    def name(self) -> str:
        """File name without directory and extension."""
        return self.path.stem

    @abstractmethod
    def reload(self) -> ReloadResult:
        """Re-read the file. MUST NOT raise for load failures."""

    def find_configuration(self, name: str) -> Config | None:
        """First configuration named exactly ``name``, or None."""
        for config in self.configurations:
            if config.name == name:
                return config
        return None

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} name={self.name!r} path={str(self.path)!r}>"


@dataclass
class ReloadResult:
    """Outcome of ``Project.reload()``. Truthy on success."""

    ok: bool
    path: Path
    error: str | None = None
    exception: ProjectError | None = None

    def __bool__(self) -> bool:
        return self.ok

    def to_dict(self) -> dict[str, Any]:
        return {
            "ok": self.ok,
            "path": str(self.path),
            "error": self.error,
        }


@dataclass(frozen=True)
class _Snapshot:
    """A parsed tree with the configurations derived from it."""

    tree: ET.Element
    configurations: tuple[Config, ...]


class EwpFile(Project):
    """An IAR Embedded Workbench project file.

    Raises on construction if the file cannot be loaded:

        NotAFileError            path missing or not a regular file
        ProjectReadError         file cannot be read
        MalformedDocumentError   content is not well-formed
        UnexpectedRootTagError   root element is not <project>
    """

    def __init__(self, path: Path | str):
        self._path = Path(path)
        self._lock = threading.Lock()
        self._revision = 0
        self._snapshot = self._load()

    @property
    def path(self) -> Path:
        return self._path

    @property
    def configurations(self) -> tuple[Config, ...]:
        return self._snapshot.configurations

    @property
    def revision(self) -> int:
        """Number of successful reloads since construction."""
        return self._revision

    def reload(self) -> ReloadResult:
        """Reload the project file.

        The current state is replaced only if the whole load succeeds.
        On failure nothing changes and the reason is returned.
        """
        try:
            snapshot = self._load()
        except ProjectError as e:
            logger.warning("Reload of %s failed, keeping previous state: %s", self._path, e)
            return ReloadResult(ok=False, path=self._path, error=str(e), exception=e)

        with self._lock:
            self._snapshot = snapshot
            self._revision += 1

        logger.info(
            "Reloaded %s (%d configurations)", self._path, len(snapshot.configurations)
        )
        return ReloadResult(ok=True, path=self._path)

    def _load(self) -> _Snapshot:
        """Stat, read, parse and derive — without touching current state."""
        if not self._path.is_file():
            raise NotAFileError(self._path)

        try:
            content = self._path.read_bytes()
        except OSError as e:
            raise ProjectReadError(f"Cannot read '{self._path}': {e}", self._path) from e

        tree = parse_xml(content, self._path)
        if tree.tag != ROOT_TAG:
            raise UnexpectedRootTagError(ROOT_TAG, tree.tag, self._path)

        configurations = tuple(configs_from_xml(tree, self._path))
        logger.debug("Loaded %s with %d configurations", self._path, len(configurations))
        return _Snapshot(tree=tree, configurations=configurations)
