"""Paths and settings for fixture generation."""

import os
from pathlib import Path
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator

PARSER_LIB_ENV = "CITATION_FIXTURES_PARSER_LIB"
CORE_LIMIT_ENV = "CITATION_FIXTURES_CORE_LIMIT"

DEFAULT_PARSER_LIB = Path("tmp", "anystyle", "lib")
DEFAULT_REPORT_DIR = Path("target", "reports", "ruby-format")
DEFAULT_FIXTURES_DIR = Path("tests", "fixtures", "format")
DEFAULT_CORE_XML = Path("tmp", "anystyle", "res", "parser", "core.xml")
DEFAULT_CORE_LIMIT = 200


class FixtureJob(BaseModel):
    """One input reference list and the two files generated from it."""

    input: str = Field(description="Input file name inside the fixtures directory.")
    csl_output: str = Field(description="CSL output file name inside the report directory.")
    bibtex_output: str = Field(description="BibTeX output file name inside the report directory.")


DEFAULT_JOBS = [
    FixtureJob(input="core-refs.txt", csl_output="core-csl.txt", bibtex_output="core-bibtex.txt"),
    FixtureJob(input="refs.txt", csl_output="csl.txt", bibtex_output="bibtex.txt"),
]


class FixtureConfig(BaseModel):
    """Where fixture generation reads from and writes to.

    Relative paths are resolved against ``root``.
    """

    root: Path
    parser_lib_dir: Path = DEFAULT_PARSER_LIB
    parser_module: str = "anystyle"
    report_dir: Path = DEFAULT_REPORT_DIR
    fixtures_dir: Path = DEFAULT_FIXTURES_DIR
    core_xml: Path = DEFAULT_CORE_XML
    core_limit: int = Field(DEFAULT_CORE_LIMIT, gt=0)
    jobs: List[FixtureJob] = Field(default_factory=lambda: [job.model_copy() for job in DEFAULT_JOBS])

    @field_validator("root")
    @classmethod
    def _absolute_root(cls, value: Path) -> Path:
        return Path(value).resolve()

    def resolve(self, path: Path) -> Path:
        path = Path(path)
        return path if path.is_absolute() else self.root / path

    @property
    def parser_lib_path(self) -> Path:
        return self.resolve(self.parser_lib_dir)

    @property
    def report_path(self) -> Path:
        return self.resolve(self.report_dir)

    @property
    def fixtures_path(self) -> Path:
        return self.resolve(self.fixtures_dir)

    @property
    def core_xml_path(self) -> Path:
        return self.resolve(self.core_xml)

    @classmethod
    def from_env(cls, root: Path, **overrides) -> "FixtureConfig":
        """Build a config for ``root``, taking overrides from the environment.

        Explicit keyword overrides win over environment variables.
        """
        values = {}
        parser_lib: Optional[str] = os.environ.get(PARSER_LIB_ENV)
        if parser_lib:
            values["parser_lib_dir"] = Path(parser_lib)
        core_limit = os.environ.get(CORE_LIMIT_ENV)
        if core_limit:
            try:
                values["core_limit"] = int(core_limit)
            except ValueError:
                raise ValueError(f"{CORE_LIMIT_ENV} must be an integer, got {core_limit!r}")
        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls(root=root, **values)
