"""Extraction of plain reference strings from AnyStyle training data.

The parser training file (``core.xml``) stores every reference as a
``<sequence>`` of tagged segments::

    <sequence>
      <author>Perec, Georges</author>
      <title>A Void</title>
      <location>London:</location>
      <publisher>The Harvill Press,</publisher>
      <date>1995.</date>
    </sequence>

Joining the segments back together gives a realistic reference list for the
format fixtures.
"""

from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Iterable, List, Tuple

from lxml import etree

_LOGGER = logging.getLogger(__name__)

# Segments that read as sentences in a rendered reference.
TERMINATED_TAGS = {
    "author",
    "title",
    "location",
    "publisher",
    "container-title",
    "collection-title",
    "editor",
    "translator",
    "note",
    "date",
    "pages",
}

PUNCTUATION = ".,;:)"


def extract_core_references(path: str | Path, limit: int = 200) -> List[str]:
    """Read up to ``limit`` references from an AnyStyle training XML file.

    Args:
        path: Path to the training file
        limit: Maximum number of references to return

    Returns:
        The rendered references, in file order.

    Raises:
        ValueError: If the file contains no usable references
    """
    parser = etree.XMLParser(recover=True, resolve_entities=False)
    tree = etree.parse(str(path), parser=parser)

    refs = []
    for sequence in tree.iter("sequence"):
        parts = [
            (etree.QName(child).localname, child.text or "")
            for child in sequence
            if isinstance(child.tag, str)
        ]
        reference = normalize_reference(render_reference(parts))
        if reference:
            refs.append(reference)
        if len(refs) >= limit:
            break

    if not refs:
        raise ValueError(f"no references extracted from {path}")
    _LOGGER.info(f"Extracted {len(refs)} references from {path}")
    return refs


def render_reference(parts: Iterable[Tuple[str, str]]) -> str:
    """Join tagged segments with spaces, terminating sentence-like segments with a period."""
    output = ""
    for tag, text in parts:
        text = _terminate(tag, text).strip()
        if not text:
            continue
        if output and not text.startswith(tuple(PUNCTUATION)):
            output += " "
        output += text
    return output


def _terminate(tag: str, text: str) -> str:
    text = text.strip()
    if text and tag in TERMINATED_TAGS and not text.endswith(tuple(PUNCTUATION)):
        return f"{text}."
    return text


def normalize_reference(raw: str) -> str:
    """Collapse whitespace and remove spaces before closing and after opening punctuation."""
    reference = " ".join(raw.replace("\u00a0", " ").split())
    reference = re.sub(r" ([,.;:)])", r"\1", reference)
    reference = reference.replace("( ", "(")
    return reference.strip()


def write_core_references(path: str | Path, refs: List[str]) -> Path:
    """Write ``refs`` one per line, creating parent directories."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text("\n".join(refs), encoding="utf-8")
    return path
