#!/usr/bin/env python3
"""
Write the AnyStyle format fixtures used by the parity tests.

Reads tests/fixtures/format/{core-refs,refs}.txt, parses them with the
AnyStyle library checked out under tmp/anystyle/lib and writes CSL and
BibTeX renderings to target/reports/ruby-format/.
"""

import logging
import sys
from pathlib import Path

from citation_fixtures.cli.main import run

ROOT = Path(__file__).resolve().parent.parent


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")
    sys.exit(run(ROOT))
