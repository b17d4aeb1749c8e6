"""Main CLI entry point for citation fixtures."""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Optional

from .. import __version__
from ..config import FixtureConfig
from ..core.formats import ParseFormat
from ..core.parsers import ParserFactory, ParserLoadError
from ..pipelines.core_references import extract_core_references, write_core_references
from ..pipelines.format_fixtures import (
    generate_format_fixtures,
    read_references,
    write_bibtex,
    write_csl,
)
from ..pipelines.report_comparison import compare_reports


def run(root: Path, parser_type: str = "anystyle", parser_lib: Optional[Path] = None) -> int:
    """Generate the format fixtures below ``root``.

    Loading the parser is the only failure handled here: it is reported on
    stderr and turned into exit status 1 before anything is written. All
    other errors propagate.
    """
    config = FixtureConfig.from_env(root, parser_lib_dir=parser_lib)
    try:
        parser = ParserFactory.create(
            parser_type, lib_dir=config.parser_lib_path, module_name=config.parser_module
        )
    except ParserLoadError as e:
        print(str(e), file=sys.stderr)
        return 1

    generate_format_fixtures(config, parser)
    print(f"ruby format fixtures written to {config.report_path}")
    return 0


def generate_command(args):
    """Generate CSL and BibTeX fixtures from the reference lists."""
    sys.exit(run(args.root, parser_type=args.parser, parser_lib=args.parser_lib))


def parse_command(args):
    """Parse a reference file and print or save the result."""
    try:
        parser = ParserFactory.create(args.parser, lib_dir=args.parser_lib)
        refs = read_references(args.input)
        if args.output:
            output_path = Path(args.output)
            output_path.parent.mkdir(parents=True, exist_ok=True)
            if args.format == 'csl':
                write_csl(output_path, refs, parser)
            elif args.format == 'bibtex':
                write_bibtex(output_path, refs, parser)
            else:
                output_path.write_text(
                    json.dumps(parser.parse(refs, format=ParseFormat.JSON), indent=2, ensure_ascii=False),
                    encoding='utf-8',
                )
            print(f"Parsed references saved to: {output_path}")
        else:
            result = parser.parse(refs, format=args.format)
            if args.format == 'bibtex':
                print(result, end="")
            else:
                for entry in result:
                    print(json.dumps(entry, ensure_ascii=False))
    except Exception as e:
        print(f"Error parsing {args.input}: {e}", file=sys.stderr)
        sys.exit(1)


def extract_core_command(args):
    """Rebuild core-refs.txt (and its CSL/BibTeX renderings) from AnyStyle training data."""
    try:
        config = FixtureConfig.from_env(args.root, core_xml=args.core_xml, core_limit=args.limit)
        refs = extract_core_references(config.core_xml_path, limit=config.core_limit)
        parser = ParserFactory.create(args.parser, lib_dir=config.parser_lib_path)
    except (OSError, ValueError, ParserLoadError) as e:
        print(f"Error extracting references: {e}", file=sys.stderr)
        sys.exit(1)

    out_dir = config.fixtures_path
    write_core_references(out_dir / "core-refs.txt", refs)
    write_csl(out_dir / "core-csl.txt", refs, parser)
    write_bibtex(out_dir / "core-bibtex.txt", refs, parser)
    print(f"Wrote {len(refs)} core references to {out_dir}")


def compare_command(args):
    """Diff two report directories."""
    report = compare_reports(args.expected, args.actual, output_path=args.output)
    if report:
        if not args.output:
            print(report, end="")
        print(f"Reports differ: {args.expected} vs {args.actual}", file=sys.stderr)
        sys.exit(1)
    print("Reports match")


def main(argv: Optional[list] = None):
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        prog="citation-fixtures",
        description="Generate CSL and BibTeX format fixtures from reference lists"
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"citation-fixtures {__version__}"
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Generate command
    generate_parser = subparsers.add_parser("generate", help="Write CSL and BibTeX fixtures")
    generate_parser.add_argument("--root", type=Path, default=Path.cwd(), help="Project root directory")
    generate_parser.add_argument(
        "--parser",
        choices=ParserFactory.get_available_parsers(),
        default="anystyle",
        help="Reference parser to use"
    )
    generate_parser.add_argument(
        "--parser-lib",
        type=Path,
        default=None,
        help="Directory holding the parsing library (default: <root>/tmp/anystyle/lib)"
    )
    generate_parser.set_defaults(func=generate_command)

    # Parse command
    parse_parser = subparsers.add_parser("parse", help="Parse a file with one reference per line")
    parse_parser.add_argument("input", type=Path, help="Input text file")
    parse_parser.add_argument("--output", type=Path, help="Output file")
    parse_parser.add_argument(
        "--format",
        choices=[f.value for f in ParseFormat],
        default="csl",
        help="Output format",
    )
    parse_parser.add_argument(
        "--parser",
        choices=ParserFactory.get_available_parsers(),
        default="heuristic",
        help="Reference parser to use"
    )
    parse_parser.add_argument("--parser-lib", type=Path, default=None, help="Directory holding the parsing library")
    parse_parser.set_defaults(func=parse_command)

    # Extract core references
    extract_parser = subparsers.add_parser("extract-core", help="Rebuild core-refs.txt from AnyStyle training data")
    extract_parser.add_argument("--root", type=Path, default=Path.cwd(), help="Project root directory")
    extract_parser.add_argument("--core-xml", type=Path, default=None, help="Training XML file")
    extract_parser.add_argument("--limit", type=int, default=None, help="Maximum number of references")
    extract_parser.add_argument(
        "--parser",
        choices=ParserFactory.get_available_parsers(),
        default="heuristic",
        help="Reference parser to use"
    )
    extract_parser.set_defaults(func=extract_core_command)

    # Compare command
    compare_parser = subparsers.add_parser("compare", help="Diff two fixture report directories")
    compare_parser.add_argument("expected", type=Path, help="Directory with the reference outputs")
    compare_parser.add_argument("actual", type=Path, help="Directory with the outputs to check")
    compare_parser.add_argument("--output", type=Path, help="Save the diff report to this file")
    compare_parser.set_defaults(func=compare_command)

    # Parse arguments
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if not hasattr(args, 'func'):
        parser.print_help()
        sys.exit(1)

    # Execute command
    args.func(args)


if __name__ == "__main__":
    main()
