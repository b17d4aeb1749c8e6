"""Citation Fixtures - CSL and BibTeX format fixtures for reference parsing tests."""

from .config import FixtureConfig, FixtureJob
from .core.models import Reference, Person, Organization
from .core.formats import ParseFormat, Bibliography, to_csl, to_bibtex
from .core.parsers import (
    ReferenceParser,
    ModuleParser,
    HeuristicParser,
    ParserFactory,
    ParserLoadError,
    load_parser_module,
)
from .pipelines.format_fixtures import (
    read_references,
    write_csl,
    write_bibtex,
    generate_format_fixtures,
)
from .pipelines.core_references import extract_core_references
from .pipelines.report_comparison import compare_reports

__version__ = "0.1.0"

__all__ = [
    "FixtureConfig",
    "FixtureJob",
    "Reference",
    "Person",
    "Organization",
    "ParseFormat",
    "Bibliography",
    "to_csl",
    "to_bibtex",
    "ReferenceParser",
    "ModuleParser",
    "HeuristicParser",
    "ParserFactory",
    "ParserLoadError",
    "load_parser_module",
    "read_references",
    "write_csl",
    "write_bibtex",
    "generate_format_fixtures",
    "extract_core_references",
    "compare_reports",
]
