"""Command line driver: ``poolhash --create|--validate [--recursive] [directory]``."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from poolhash import __version__
from poolhash.checksum.processor import ChecksumProcessor
from poolhash.checksum.report import BatchReport, DirectoryResult, Outcome
from poolhash.config import load_settings
from poolhash.errors import PoolHashError, format_error

EXIT_OK = 0
EXIT_INTEGRITY = 1
EXIT_USAGE = 2

_FAILED_OUTCOMES = {Outcome.TAMPERED, Outcome.NO_SIDECAR, Outcome.ERROR}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="poolhash",
        description=(
            "Create or validate SHA-256 checksum files for the .pol files "
            "in a directory."
        ),
        allow_abbrev=False,
    )
    parser.add_argument("--version", action="version", version=f"poolhash {__version__}")

    ops = parser.add_mutually_exclusive_group(required=True)
    ops.add_argument(
        "--create",
        dest="operation",
        action="store_const",
        const="create",
        help="write a Pool_<parent>_<dir>.sha1 file for each processed directory",
    )
    ops.add_argument(
        "--validate",
        dest="operation",
        action="store_const",
        const="validate",
        help="check each processed directory against its .sha1 file",
    )

    parser.add_argument(
        "--recursive",
        action="store_true",
        help="also process every subdirectory",
    )
    parser.add_argument(
        "--format",
        choices=("text", "markdown", "json"),
        default="text",
        help="output format (default: text)",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="log debug details to stderr",
    )
    parser.add_argument(
        "directory",
        nargs="?",
        default=None,
        help="directory to process (default: current directory)",
    )
    return parser


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def _print_result(result: DirectoryResult) -> None:
    # Both lines go out together so each directory's output stays contiguous.
    sys.stdout.write(f"Processing directory: {result.directory}\n{result.message}\n")
    sys.stdout.flush()


def exit_code_for(report: BatchReport) -> int:
    """Return 1 when any directory failed validation or errored, else 0."""
    if any(r.outcome in _FAILED_OUTCOMES for r in report.results):
        return EXIT_INTEGRITY
    return EXIT_OK


def main(argv: list[str] | None = None) -> int:
    if argv is None:
        argv = sys.argv[1:]
    parser = build_parser()

    if not argv:
        parser.print_help()
        return EXIT_USAGE

    args = parser.parse_args(argv)

    try:
        settings = load_settings()
    except PoolHashError as exc:
        print(f"Error: {format_error(exc)}", file=sys.stderr)
        return EXIT_USAGE

    _configure_logging("DEBUG" if args.verbose else settings.log_level)

    processor = ChecksumProcessor(settings)
    on_result = _print_result if args.format == "text" else None

    try:
        directory = Path(args.directory) if args.directory else Path.cwd()
        report = processor.run(
            directory,
            args.operation,
            recursive=args.recursive,
            on_result=on_result,
        )
    except PoolHashError as exc:
        print(f"Error: {format_error(exc)}", file=sys.stderr)
        return EXIT_USAGE
    except OSError as exc:
        print(f"Error: {format_error(exc)}", file=sys.stderr)
        return EXIT_INTEGRITY
    except KeyboardInterrupt:
        print("Interrupted.", file=sys.stderr)
        return 130

    if args.format == "markdown":
        print(report.to_markdown())
    elif args.format == "json":
        print(report.to_json())

    return exit_code_for(report)
