"""
XML tree helpers — thin layer over ``xml.etree.ElementTree``.

Project files are small, so the whole document is parsed into memory.
Parse failures surface as ``MalformedDocumentError`` so callers never
need to know about ``ET.ParseError``.
"""

from __future__ import annotations

import xml.etree.ElementTree as ET
from pathlib import Path

from ewproj.core.errors import MalformedDocumentError


def parse_xml(content: bytes | str, path: Path | None = None) -> ET.Element:
    """Parse document content and return its root element.

    Bytes are preferred: the parser then honours the encoding named in
    the XML declaration.

    Raises:
        MalformedDocumentError: If the content is not well-formed XML,
            or declares an encoding the parser cannot read (unknown
            names, multi-byte encodings such as Shift-JIS).
    """
    try:
        return ET.fromstring(content)
    except (ET.ParseError, LookupError, ValueError) as e:
        where = f"'{path}'" if path else "document"
        raise MalformedDocumentError(f"Cannot parse {where}: {e}", path) from e


def child_text(element: ET.Element, tag: str, default: str = "") -> str:
    """Stripped text of the first direct child named ``tag``."""
    child = element.find(tag)
    if child is None or child.text is None:
        return default
    return child.text.strip()


def children_text(element: ET.Element, tag: str) -> list[str]:
    """Stripped, non-empty texts of every direct child named ``tag``."""
    texts = []
    for child in element.findall(tag):
        if child.text and child.text.strip():
            texts.append(child.text.strip())
    return texts
