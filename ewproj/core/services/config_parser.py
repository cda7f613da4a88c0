"""
Configuration parser — derive ``Config`` objects from a project tree.

Layout of the relevant part of an ``.ewp`` file::

    <project>
      <configuration>
        <name>Debug</name>
        <toolchain><name>ARM</name></toolchain>
        <debug>1</debug>
        <settings>
          <name>ICCARM</name>
          <data>
            <option>
              <name>CCDefines</name>
              <state>DEBUG</state>
            </option>
            <option>
              <name>CCIncludePath2</name>
              <state>$PROJ_DIR$\\inc</state>
            </option>
          </data>
        </settings>
      </configuration>
    </project>

Pure logic — the tree is already parsed, nothing touches the disk.
"""

from __future__ import annotations

import logging
import xml.etree.ElementTree as ET
from pathlib import Path

from ewproj.core.errors import MalformedDocumentError
from ewproj.core.models.config import Config
from ewproj.core.xml_tree import child_text, children_text

logger = logging.getLogger(__name__)

PROJ_DIR_MACRO = "$PROJ_DIR$"

# Option names per extracted field. Older toolchains use CCIncludePath.
DEFINE_OPTIONS = ("CCDefines",)
INCLUDE_OPTIONS = ("CCIncludePath2", "CCIncludePath")
PRE_INCLUDE_OPTIONS = ("PreInclude",)


def configs_from_xml(tree: ET.Element, project_path: Path) -> list[Config]:
    """Build the ordered configuration list of a project.

    Args:
        tree: Root ``<project>`` element.
        project_path: Path of the ``.ewp`` file the tree came from.

    Returns:
        One Config per ``<configuration>`` element, in document order.

    Raises:
        MalformedDocumentError: If a configuration has no name.
    """
    configs: list[Config] = []
    for index, element in enumerate(tree.findall("configuration")):
        configs.append(_config_from_element(element, project_path, index))

    logger.debug(
        "Parsed %d configurations from %s: %s",
        len(configs), project_path, [c.name for c in configs],
    )
    return configs


def _config_from_element(element: ET.Element, project_path: Path, index: int) -> Config:
    name = child_text(element, "name")
    if not name:
        raise MalformedDocumentError(
            f"Configuration #{index + 1} in '{project_path}' has no name", project_path
        )

    toolchain = element.find("toolchain")
    options = _collect_options(element)

    return Config(
        name=name,
        project_path=project_path,
        toolchain=child_text(toolchain, "name") if toolchain is not None else "",
        debug=child_text(element, "debug") == "1",
        defines=_states(options, DEFINE_OPTIONS),
        include_paths=[_expand_path(s, project_path) for s in _states(options, INCLUDE_OPTIONS)],
        pre_includes=[_expand_path(s, project_path) for s in _states(options, PRE_INCLUDE_OPTIONS)],
    )


def _collect_options(element: ET.Element) -> dict[str, list[str]]:
    """Map option name → states across every settings block of a configuration."""
    options: dict[str, list[str]] = {}
    for option in element.iterfind("settings/data/option"):
        name = child_text(option, "name")
        if name:
            options.setdefault(name, []).extend(children_text(option, "state"))
    return options


def _states(options: dict[str, list[str]], names: tuple[str, ...]) -> list[str]:
    # First option name present wins; CCIncludePath2 supersedes CCIncludePath.
    for name in names:
        if name in options:
            return list(options[name])
    return []


def _expand_path(value: str, project_path: Path) -> Path:
    """Replace ``$PROJ_DIR$`` and normalise Windows separators."""
    value = value.replace(PROJ_DIR_MACRO, project_path.parent.as_posix())
    return Path(value.replace("\\", "/"))
