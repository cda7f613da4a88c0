"""
Error taxonomy for project file handling.

Every failure to turn a path into a project is a ``ProjectError``.
Callers that only care about "did it load" catch the base class;
callers that want to tell "not found" apart from "found but invalid"
catch ``NotAFileError`` first.
"""

from __future__ import annotations

from pathlib import Path


class ProjectError(Exception):
    """Base class for failures while loading a project file."""

    def __init__(self, message: str, path: Path | None = None):
        super().__init__(message)
        self.path = path


class NotAFileError(ProjectError):
    """The path does not exist or is not a regular file."""

    def __init__(self, path: Path):
        super().__init__(f"'{path}' is not a file", path)


class ProjectReadError(ProjectError):
    """The file exists but could not be read (permissions, I/O fault)."""


class MalformedDocumentError(ProjectError):
    """The content is not a well-formed project document."""


class UnexpectedRootTagError(ProjectError):
    """The XML parsed, but its root element is not the expected one."""

    def __init__(self, expected: str, actual: str, path: Path | None = None):
        where = f" in '{path}'" if path else ""
        super().__init__(
            f"Expected '{expected}' as root tag, found '{actual}'{where}", path
        )
        self.expected = expected
        self.actual = actual
