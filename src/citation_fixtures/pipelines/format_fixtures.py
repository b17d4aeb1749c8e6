"""Generation of CSL and BibTeX format fixtures from plain-text reference lists."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, List, Sequence

from pydantic import BaseModel

from citation_fixtures.config import FixtureConfig
from citation_fixtures.core.formats import ParseFormat
from citation_fixtures.core.parsers import ReferenceParser

_LOGGER = logging.getLogger(__name__)


def read_references(path: str | Path) -> List[str]:
    """Read a file with one reference per line, dropping blank lines.

    Raises:
        FileNotFoundError: If the file does not exist
    """
    lines = [ln.strip() for ln in Path(path).read_text(encoding="utf-8").splitlines()]
    refs = [ln for ln in lines if ln]
    _LOGGER.debug(f"Read {len(refs)} references from {path} ({len(lines) - len(refs)} blank lines skipped)")
    return refs


def _entry_to_json(entry: Any) -> str:
    if isinstance(entry, BaseModel):
        entry = entry.model_dump(mode="json", exclude_none=True)
    return json.dumps(entry, ensure_ascii=False, separators=(",", ":"))


def write_csl(path: str | Path, refs: Sequence[str], parser: ReferenceParser) -> Path:
    """Parse ``refs`` as CSL and write one JSON object per line to ``path``."""
    entries = list(parser.parse(refs, format=ParseFormat.CSL))
    output = "\n".join(_entry_to_json(entry) for entry in entries)
    path = Path(path)
    path.write_text(output, encoding="utf-8")
    _LOGGER.info(f"Wrote {len(entries)} CSL entries to {path}")
    return path


def write_bibtex(path: str | Path, refs: Sequence[str], parser: ReferenceParser) -> Path:
    """Parse ``refs`` as BibTeX and write the bibliography text to ``path``."""
    bibliography = parser.parse(refs, format=ParseFormat.BIBTEX)
    path = Path(path)
    path.write_text(str(bibliography), encoding="utf-8")
    _LOGGER.info(f"Wrote BibTeX bibliography for {len(refs)} references to {path}")
    return path


def generate_format_fixtures(config: FixtureConfig, parser: ReferenceParser) -> List[Path]:
    """Write the CSL and BibTeX outputs of every configured job.

    Jobs run in order and nothing is rolled back: if a later job fails, the
    files of earlier jobs stay in place.

    Returns:
        The written files, in the order they were written.
    """
    report_dir = config.report_path
    report_dir.mkdir(parents=True, exist_ok=True)

    written = []
    for job in config.jobs:
        refs = read_references(config.fixtures_path / job.input)
        written.append(write_csl(report_dir / job.csl_output, refs, parser))
        written.append(write_bibtex(report_dir / job.bibtex_output, refs, parser))
    return written
