"""Command-line driver: format Turtle files in place or check them.

Usage:
    turtlefmt data.ttl vocab/            # rewrite non-canonical files
    turtlefmt --check data.ttl vocab/    # report patches, change nothing
    python -m turtlefmt --check .

Directories are walked recursively for *.ttl files. Every file is
handled independently: a file that fails to read or parse is reported
and the others are still processed.

Exit Codes:
    0   Every file is (now) canonical
    1   A path does not exist, or a file could not be read/parsed/written
    65  Check mode found at least one file that is not canonical
"""

from __future__ import annotations

import argparse
import logging
import sys
from collections.abc import Iterable, Sequence
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from pathlib import Path

from turtlefmt.config import FormatOptions
from turtlefmt.constants import DEFAULT_INDENTATION, EXIT_CHECK_FAILED, EXIT_ERROR, TURTLE_SUFFIX
from turtlefmt.diagnostics import (
    Diagnostic,
    DiagnosticFormatter,
    ErrorTemplate,
    OutputFormat,
    TurtleError,
    TurtleSyntaxError,
)
from turtlefmt.diff import Identical, Patch, Rewrite, reconcile
from turtlefmt.enums import FileStatus, Mode
from turtlefmt.syntax.parser import TurtleParser
from turtlefmt.syntax.position import get_error_context
from turtlefmt.syntax.printer import TurtlePrinter

__all__ = ["FileOutcome", "build_parser", "collect_files", "format_file", "main"]

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class FileOutcome:
    """What happened to one file.

    Attributes:
        path: The file
        status: Outcome category
        patch: Unified diff (check mode, NEEDS_FORMAT only)
        diagnostic: Error details (FAILED only)
        context: Source excerpt around a syntax error
    """

    path: Path
    status: FileStatus
    patch: str | None = None
    diagnostic: Diagnostic | None = None
    context: str | None = None


def build_parser() -> argparse.ArgumentParser:
    """Argument parser for the turtlefmt command."""
    parser = argparse.ArgumentParser(
        prog="turtlefmt",
        description="Apply a consistent formatting to Turtle files.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Rewrite every .ttl file below the current directory:
  turtlefmt .

  # Check only; print a patch for each file that would change:
  turtlefmt --check ontology.ttl
""",
    )
    parser.add_argument(
        "src",
        nargs="+",
        type=Path,
        help="File(s) or directory to format",
    )
    parser.add_argument(
        "--check",
        action="store_true",
        help="Do not edit files, only check that they are already formatted",
    )
    parser.add_argument(
        "--indentation",
        type=int,
        default=DEFAULT_INDENTATION,
        help="Number of spaces per level of indentation (default: %(default)s)",
    )
    parser.add_argument(
        "--jobs",
        "-j",
        type=int,
        default=None,
        help="Number of files processed in parallel (default: CPU based)",
    )
    parser.add_argument(
        "--error-format",
        choices=[str(f) for f in OutputFormat],
        default=str(OutputFormat.RUST),
        help="How errors are reported (default: %(default)s)",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Log per-file progress",
    )
    return parser


def _walk(directory: Path) -> Iterable[Path]:
    for path in sorted(directory.rglob(f"*{TURTLE_SUFFIX}")):
        if path.is_file():
            yield path


def collect_files(sources: Sequence[Path]) -> tuple[list[Path], list[Diagnostic]]:
    """Expand command-line sources into a de-duplicated list of files.

    Returns:
        (files in first-seen order, diagnostics for missing paths)
    """
    files: list[Path] = []
    missing: list[Diagnostic] = []
    seen: set[Path] = set()

    for source in sources:
        if source.is_file():
            candidates: Iterable[Path] = (source,)
        elif source.is_dir():
            candidates = _walk(source)
        else:
            missing.append(ErrorTemplate.path_not_found(str(source)))
            continue
        for path in candidates:
            key = path.resolve()
            if key not in seen:
                seen.add(key)
                files.append(path)
    return files, missing


def format_file(path: Path, options: FormatOptions, mode: Mode) -> FileOutcome:
    """Read, format and reconcile one file; write it back in write mode.

    Never raises for per-file problems: they come back as FAILED.
    """
    name = str(path)
    try:
        original = path.read_bytes().decode("utf-8")
    except (OSError, UnicodeDecodeError) as e:
        return FileOutcome(path, FileStatus.FAILED, diagnostic=ErrorTemplate.read_failed(name, str(e)))

    parser = TurtleParser(
        max_source_size=options.max_source_size,
        max_nesting_depth=options.max_nesting_depth,
    )
    try:
        canonical = TurtlePrinter(options).print(parser.parse(original))
    except TurtleSyntaxError as e:
        return FileOutcome(
            path,
            FileStatus.FAILED,
            diagnostic=e.diagnostic.with_path(name) if e.diagnostic else None,
            context=get_error_context(original, e.position),
        )
    except TurtleError as e:
        diagnostic = e.diagnostic.with_path(name) if e.diagnostic else ErrorTemplate.read_failed(name, str(e))
        return FileOutcome(path, FileStatus.FAILED, diagnostic=diagnostic)
    except ValueError as e:
        return FileOutcome(path, FileStatus.FAILED, diagnostic=ErrorTemplate.read_failed(name, str(e)))

    match reconcile(original, canonical, mode, path=name):
        case Identical():
            logger.debug("%s is already formatted", name)
            return FileOutcome(path, FileStatus.UNCHANGED)
        case Patch(diff=diff):
            return FileOutcome(path, FileStatus.NEEDS_FORMAT, patch=diff)
        case Rewrite(canonical=text):
            try:
                path.write_bytes(text.encode("utf-8"))
            except OSError as e:
                return FileOutcome(path, FileStatus.FAILED, diagnostic=ErrorTemplate.read_failed(name, str(e)))
            logger.debug("Reformatted %s", name)
            return FileOutcome(path, FileStatus.REFORMATTED)


def _report(outcome: FileOutcome, formatter: DiagnosticFormatter) -> None:
    match outcome.status:
        case FileStatus.FAILED if outcome.diagnostic is not None:
            message = formatter.format(outcome.diagnostic)
            if outcome.context and formatter.output_format is not OutputFormat.JSON:
                message = f"{message}\n{outcome.context}"
            logger.error("%s", message)
        case FileStatus.NEEDS_FORMAT:
            logger.warning("%s", ErrorTemplate.not_canonical(str(outcome.path)).message)
            sys.stdout.write(outcome.patch or "")
        case _:
            pass


def main(argv: Sequence[str] | None = None) -> int:
    """Main entry point.

    Args:
        argv: Arguments without the program name (default: sys.argv[1:])

    Returns:
        Process exit code
    """
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(message)s",
        stream=sys.stderr,
    )

    try:
        options = FormatOptions(indentation=args.indentation)
    except ValueError as e:
        logger.error("Invalid option: %s", e)
        return EXIT_ERROR
    if args.jobs is not None and args.jobs <= 0:
        logger.error("Invalid option: jobs must be positive")
        return EXIT_ERROR

    mode = Mode.CHECK if args.check else Mode.WRITE
    formatter = DiagnosticFormatter(output_format=OutputFormat(args.error_format))

    files, missing = collect_files(args.src)
    for diagnostic in missing:
        logger.error("%s", formatter.format(diagnostic))
    logger.debug("Formatting %d files in %s mode", len(files), mode)

    with ThreadPoolExecutor(max_workers=args.jobs) as executor:
        outcomes = list(executor.map(lambda path: format_file(path, options, mode), files))

    for outcome in outcomes:
        _report(outcome, formatter)

    statuses = {outcome.status for outcome in outcomes}
    if missing or FileStatus.FAILED in statuses:
        return EXIT_ERROR
    if FileStatus.NEEDS_FORMAT in statuses:
        return EXIT_CHECK_FAILED
    return 0


if __name__ == "__main__":
    sys.exit(main())
