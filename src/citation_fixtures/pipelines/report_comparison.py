"""Comparison of two fixture report directories."""

from __future__ import annotations

import difflib
import logging
from pathlib import Path
from typing import Optional

_LOGGER = logging.getLogger(__name__)


def compare_reports(
    expected_dir: str | Path,
    actual_dir: str | Path,
    output_path: Optional[str | Path] = None,
) -> str:
    """Diff every file of ``expected_dir`` against its namesake in ``actual_dir``.

    A missing counterpart diffs against an empty file. The report is empty
    when all files match.

    Args:
        expected_dir: Directory with the reference outputs
        actual_dir: Directory with the outputs to check
        output_path: Optional file to save the report to

    Returns:
        The unified diff of all differing files.
    """
    expected_dir = Path(expected_dir)
    actual_dir = Path(actual_dir)
    if not expected_dir.is_dir():
        raise FileNotFoundError(f"Directory does not exist: {expected_dir}")

    chunks = []
    for expected in sorted(p for p in expected_dir.iterdir() if p.is_file()):
        actual = actual_dir / expected.name
        expected_lines = expected.read_text(encoding="utf-8").splitlines(keepends=True)
        actual_lines = actual.read_text(encoding="utf-8").splitlines(keepends=True) if actual.exists() else []
        diff = list(
            difflib.unified_diff(expected_lines, actual_lines, fromfile=str(expected), tofile=str(actual))
        )
        if diff:
            _LOGGER.warning(f"{expected.name} differs from {actual}")
            chunks.append("".join(line if line.endswith("\n") else line + "\n" for line in diff))

    report = "".join(chunks)
    if output_path is not None:
        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(report, encoding="utf-8")
    return report
