"""Tests for the command line interface."""

import json
import runpy
import shutil
from pathlib import Path

import pytest

from citation_fixtures.cli.main import main


@pytest.fixture
def refs_file(tmp_path):
    path = tmp_path / "refs.txt"
    path.write_text("Smith, J. (2020). A Study.\n\nDoe, A. (2019). Another Work.\n", encoding="utf-8")
    return path


class TestParseCommand:
    """Test the parse command."""

    def test_csl_to_stdout(self, refs_file, capsys):
        main(["parse", str(refs_file)])

        lines = capsys.readouterr().out.splitlines()
        assert [json.loads(line)["title"] for line in lines] == ["A Study", "Another Work"]

    def test_bibtex_to_file(self, refs_file, tmp_path, capsys):
        output = tmp_path / "out" / "refs.bib"

        main(["parse", str(refs_file), "--format", "bibtex", "--output", str(output)])

        assert output.read_text(encoding="utf-8").count("@misc{") == 2
        assert f"Parsed references saved to: {output}" in capsys.readouterr().out

    def test_json_to_file(self, refs_file, tmp_path):
        output = tmp_path / "refs.json"

        main(["parse", str(refs_file), "--format", "json", "--output", str(output)])

        data = json.loads(output.read_text(encoding="utf-8"))
        assert data[1]["author"] == [{"family": "Doe", "given": "A."}]

    def test_missing_input(self, tmp_path, capsys):
        with pytest.raises(SystemExit) as excinfo:
            main(["parse", str(tmp_path / "missing.txt")])

        assert excinfo.value.code == 1
        assert "Error parsing" in capsys.readouterr().err


class TestGenerateCommand:
    """Test the generate command."""

    def test_heuristic(self, project_root, capsys):
        with pytest.raises(SystemExit) as excinfo:
            main(["generate", "--root", str(project_root), "--parser", "heuristic"])

        assert excinfo.value.code == 0
        assert "ruby format fixtures written to" in capsys.readouterr().out

    def test_missing_library(self, project_root, capsys):
        with pytest.raises(SystemExit) as excinfo:
            main(["generate", "--root", str(project_root)])

        assert excinfo.value.code == 1
        assert "failed to load anystyle from" in capsys.readouterr().err

    def test_library_option(self, project_root, tmp_path, write_library, capsys):
        lib_dir = write_library(tmp_path / "vendor")

        with pytest.raises(SystemExit) as excinfo:
            main(["generate", "--root", str(project_root), "--parser-lib", str(lib_dir)])

        assert excinfo.value.code == 0


class TestExtractCoreCommand:
    """Test the extract-core command."""

    def test_extract(self, tmp_path, capsys):
        core_xml = tmp_path / "core.xml"
        core_xml.write_text(
            "<dataset><sequence><author>Perec, Georges</author><title>A Void</title>"
            "<date>1995</date></sequence></dataset>",
            encoding="utf-8",
        )

        main(["extract-core", "--root", str(tmp_path), "--core-xml", str(core_xml)])

        out_dir = tmp_path / "tests" / "fixtures" / "format"
        assert (out_dir / "core-refs.txt").read_text(encoding="utf-8") == "Perec, Georges. A Void. 1995."
        assert json.loads((out_dir / "core-csl.txt").read_text(encoding="utf-8"))["title"] == "A Void"
        assert (out_dir / "core-bibtex.txt").read_text(encoding="utf-8").startswith("@misc{perec1995a,")
        assert "Wrote 1 core references" in capsys.readouterr().out

    def test_missing_xml(self, tmp_path, capsys):
        with pytest.raises(SystemExit) as excinfo:
            main(["extract-core", "--root", str(tmp_path)])

        assert excinfo.value.code == 1
        assert "Error extracting references" in capsys.readouterr().err

    def test_invalid_limit_option(self, tmp_path, capsys):
        with pytest.raises(SystemExit) as excinfo:
            main(["extract-core", "--root", str(tmp_path), "--limit", "0"])

        assert excinfo.value.code == 1
        assert "Error extracting references" in capsys.readouterr().err

    def test_invalid_limit_environment(self, tmp_path, monkeypatch, capsys):
        monkeypatch.setenv("CITATION_FIXTURES_CORE_LIMIT", "many")

        with pytest.raises(SystemExit) as excinfo:
            main(["extract-core", "--root", str(tmp_path)])

        assert excinfo.value.code == 1
        assert "CITATION_FIXTURES_CORE_LIMIT must be an integer" in capsys.readouterr().err


class TestCompareCommand:
    """Test the compare command."""

    def test_match(self, tmp_path, capsys):
        for name in ("expected", "actual"):
            (tmp_path / name).mkdir()
            (tmp_path / name / "csl.txt").write_text('{"title":"A"}', encoding="utf-8")

        main(["compare", str(tmp_path / "expected"), str(tmp_path / "actual")])

        assert capsys.readouterr().out == "Reports match\n"

    def test_difference(self, tmp_path, capsys):
        (tmp_path / "expected").mkdir()
        (tmp_path / "actual").mkdir()
        (tmp_path / "expected" / "csl.txt").write_text('{"title":"A"}', encoding="utf-8")
        (tmp_path / "actual" / "csl.txt").write_text('{"title":"B"}', encoding="utf-8")
        report = tmp_path / "diff.txt"

        with pytest.raises(SystemExit) as excinfo:
            main(["compare", str(tmp_path / "expected"), str(tmp_path / "actual"), "--output", str(report)])

        assert excinfo.value.code == 1
        text = report.read_text(encoding="utf-8")
        assert '-{"title":"A"}' in text
        assert '+{"title":"B"}' in text


def test_no_command(capsys):
    with pytest.raises(SystemExit) as excinfo:
        main([])

    assert excinfo.value.code == 1


class TestGenerateScript:
    """Test the argument-less generator script."""

    SCRIPT = Path(__file__).parent.parent / "scripts" / "generate_format_fixtures.py"

    def run_script(self, project_root):
        script = project_root / "scripts" / self.SCRIPT.name
        script.parent.mkdir()
        shutil.copy(self.SCRIPT, script)
        with pytest.raises(SystemExit) as excinfo:
            runpy.run_path(str(script), run_name="__main__")
        return excinfo.value.code

    def test_writes_below_project_root(self, project_root, anystyle_lib, capsys):
        """The project root is the parent of the script's directory."""
        assert self.run_script(project_root) == 0

        report_dir = project_root / "target" / "reports" / "ruby-format"
        assert sorted(p.name for p in report_dir.iterdir()) == [
            "bibtex.txt",
            "core-bibtex.txt",
            "core-csl.txt",
            "csl.txt",
        ]
        assert "ruby format fixtures written to" in capsys.readouterr().out

    def test_missing_library(self, project_root, capsys):
        assert self.run_script(project_root) == 1

        assert not (project_root / "target").exists()
        assert "failed to load anystyle from" in capsys.readouterr().err
