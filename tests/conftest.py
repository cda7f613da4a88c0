"""
Shared test fixtures and configuration.
"""

import textwrap
from collections.abc import Callable
from pathlib import Path

import pytest


def ewp_xml(*names: str, root: str = "project") -> str:
    """Render a small but realistic .ewp document with one configuration per name."""
    configurations = "".join(
        textwrap.dedent(f"""\
            <configuration>
              <name>{name}</name>
              <toolchain>
                <name>ARM</name>
              </toolchain>
              <debug>{1 if name == 'Debug' else 0}</debug>
              <settings>
                <name>ICCARM</name>
                <archiveVersion>2</archiveVersion>
                <data>
                  <option>
                    <name>CCDefines</name>
                    <state>{name.upper()}</state>
                    <state>USE_HAL=1</state>
                  </option>
                  <option>
                    <name>CCIncludePath2</name>
                    <state>$PROJ_DIR$\\inc</state>
                    <state>$PROJ_DIR$\\..\\common</state>
                  </option>
                  <option>
                    <name>PreInclude</name>
                    <state></state>
                  </option>
                </data>
              </settings>
            </configuration>
        """)
        for name in names
    )
    return (
        '<?xml version="1.0" encoding="iso-8859-1"?>\n'
        f"<{root}>\n<fileVersion>3</fileVersion>\n{configurations}</{root}>\n"
    )


@pytest.fixture
def write_ewp(tmp_path: Path) -> Callable[..., Path]:
    """Write a project file below tmp_path and return its path.

    ``write_ewp("sub/app.ewp", "Debug", "Release")`` renders configurations;
    ``write_ewp("bad.ewp", content="<oops")`` writes raw content.
    """

    def _write(relpath: str, *names: str, content: str | None = None) -> Path:
        path = tmp_path / relpath
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content if content is not None else ewp_xml(*names))
        return path

    return _write
