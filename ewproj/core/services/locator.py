"""
Project file locator — find candidate ``.ewp`` files under a directory.

Pure filesystem reads, no caching. Results are deterministic for a
given filesystem state: each directory's entries are visited in sorted
name order, depth-first.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Iterator
from pathlib import Path

logger = logging.getLogger(__name__)

PROJECT_FILE_EXTENSION = ".ewp"


def walk_and_find(
    root: Path,
    recursive: bool,
    predicate: Callable[[Path], bool],
    exclude: Iterable[str] = (),
) -> Iterator[Path]:
    """Yield every entry under ``root`` that satisfies ``predicate``.

    Args:
        root: Directory to start from. A missing root yields nothing.
        recursive: Descend into subdirectories.
        predicate: Decides whether an entry qualifies.
        exclude: Directory names never descended into.

    Symlinked directories are not followed, so link cycles cannot loop.
    """
    root = Path(root)
    if not root.is_dir():
        logger.debug("Not a directory, nothing to walk: %s", root)
        return

    excluded = set(exclude)
    pending = [root]

    while pending:
        directory = pending.pop()
        try:
            entries = sorted(directory.iterdir())
        except OSError as e:
            logger.warning("Cannot list %s: %s", directory, e)
            continue

        subdirs: list[Path] = []
        for entry in entries:
            if predicate(entry):
                yield entry
            if (
                recursive
                and entry.name not in excluded
                and entry.is_dir()
                and not entry.is_symlink()
            ):
                subdirs.append(entry)

        # Reversed so the alphabetically first subdirectory is popped next
        pending.extend(reversed(subdirs))


def is_project_file(path: Path, extension: str = PROJECT_FILE_EXTENSION) -> bool:
    """A regular file whose extension is exactly ``extension`` (case-sensitive)."""
    return path.suffix == extension and path.is_file()


def find_project_files(
    directory: Path,
    recursive: bool = True,
    extension: str = PROJECT_FILE_EXTENSION,
    exclude: Iterable[str] = (),
) -> list[Path]:
    """List project files under ``directory``."""
    found = list(walk_and_find(
        directory,
        recursive,
        lambda p: is_project_file(p, extension),
        exclude=exclude,
    ))
    logger.debug("Found %d %s files under %s", len(found), extension, directory)
    return found
